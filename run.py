#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
run.py — Look up injectable drug compatibility from the command line.

Console behavior:
  • One result card per diluent, or a single "No data" card.
  • Load status lines are printed with a [load] prefix; library warnings go through logging.

Exit status: 0 on success (including "no data"), 2 for invalid input, 1 when the
compatibility dataset cannot be loaded.
"""
from __future__ import annotations

import argparse
import logging
import sys
import time
from pathlib import Path
from typing import Sequence

from ivcompat import DatasetLoadError, InvalidQueryError, initialize_from_dir, query
from ivcompat.constants import DATA_DIR_ENV, FALLBACK_DATA_DIR, FLAGGED_DRUG_CLASSES
from ivcompat.presentation import assemble, format_card, format_legend

EXIT_OK = 0
EXIT_LOAD_FAILED = 1
EXIT_INVALID_QUERY = 2


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Look up published compatibility for 2-3 injectable drugs and a diluent.",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    parser.add_argument("drugs", nargs="*", help="Two or three drug names (quote names containing spaces)")
    parser.add_argument("--diluent", default=None, help="Only show the summary for this exact diluent")
    parser.add_argument(
        "--data-dir",
        default=None,
        help=f"Directory holding the CSV tables (default: ${DATA_DIR_ENV}, else {FALLBACK_DATA_DIR})",
    )
    parser.add_argument(
        "--flagged-class",
        action="append",
        dest="flagged_classes",
        default=None,
        help=f"Drug class that triggers the shared-class override; repeat to add more (default: {', '.join(FLAGGED_DRUG_CLASSES)})",
    )
    parser.add_argument("--legend", action="store_true", help="Print the classification and qualifier legends")
    parser.add_argument("-v", "--verbose", action="store_true", help="Show info-level log messages")
    return parser


def main_entry(argv: Sequence[str] | None = None) -> int:
    """CLI front-end: load the tables once, answer one lookup, print the cards."""
    parser = _build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    flagged = tuple(args.flagged_classes) if args.flagged_classes else FLAGGED_DRUG_CLASSES
    started = time.perf_counter()
    try:
        index = initialize_from_dir(Path(args.data_dir) if args.data_dir else None, flagged_classes=flagged)
    except DatasetLoadError as exc:
        print(f"[load] {exc}", file=sys.stderr)
        return EXIT_LOAD_FAILED
    elapsed = time.perf_counter() - started
    if args.verbose:
        print(f"[load] {len(index.records)} records in {elapsed:.2f}s")

    if args.legend:
        print(format_legend(index))
        if not args.drugs:
            return EXIT_OK

    try:
        result = query(index, args.drugs, diluent=args.diluent)
    except InvalidQueryError as exc:
        print(f"! {exc}", file=sys.stderr)
        return EXIT_INVALID_QUERY

    print("\n\n".join(format_card(card) for card in assemble(index, result)))
    return EXIT_OK


if __name__ == "__main__":
    try:
        sys.exit(main_entry())
    except KeyboardInterrupt:
        print("\nInterrupted by user.", file=sys.stderr)
        sys.exit(130)
