#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""Shape raw DataFrames into the records and lookup maps held by a CompatibilityIndex."""

from __future__ import annotations

import logging
from collections import defaultdict
from typing import Dict, Iterable, List, Optional, Sequence, Set, Tuple

import pandas as pd

from .base import CompatibilityRecord, LegendEntry
from .constants import (
    CLASSIFICATION_CODES,
    CLASSIFICATION_LEGEND_COLUMNS,
    DRUG_CLASSES_COLUMNS,
    MAIN_DATASET_REQUIRED_COLUMNS,
    MIN_DRUGS,
    NO_DATA_CODE,
    OVERRIDE_CODE,
    QUALIFIER_LEGEND_COLUMNS,
    REFERENCES_COLUMNS,
)
from .errors import DatasetLoadError
from .text_utils import normalize, split_codes

logger = logging.getLogger(__name__)

DRUG_COLUMNS = ("drug_1", "drug_2", "drug_3")


def _missing_columns(frame: pd.DataFrame, required: Sequence[str]) -> List[str]:
    return [col for col in required if col not in frame.columns]


def _usable(frame: Optional[pd.DataFrame], required: Sequence[str], name: str) -> bool:
    """True when an optional table is present and carries its required columns."""
    if frame is None:
        return False
    missing = _missing_columns(frame, required)
    if missing:
        logger.warning("Ignoring %s table: missing column(s) %s", name, ", ".join(missing))
        return False
    return True


def _rows(frame: pd.DataFrame) -> Iterable[Dict[str, str]]:
    for row in frame.to_dict("records"):
        yield {str(k): ("" if v is None else str(v).strip()) for k, v in row.items()}


def build_records(frame: Optional[pd.DataFrame]) -> Tuple[CompatibilityRecord, ...]:
    """Turn main-dataset rows into CompatibilityRecords.

    Rows naming fewer than two drugs, rows with a blank classification and
    rows carrying the no-data sentinel are skipped. Unknown classification
    codes are kept and reported once.
    """
    if frame is None:
        raise DatasetLoadError("Compatibility dataset is missing.")
    missing = _missing_columns(frame, MAIN_DATASET_REQUIRED_COLUMNS)
    if missing:
        raise DatasetLoadError(f"Compatibility dataset is missing column(s): {', '.join(missing)}")
    if frame.empty:
        raise DatasetLoadError("Compatibility dataset has no data rows.")

    records: List[CompatibilityRecord] = []
    unknown_codes: Set[str] = set()
    skipped = 0
    for line_no, row in enumerate(_rows(frame), start=2):
        drugs = tuple(row.get(col, "") for col in DRUG_COLUMNS if row.get(col, ""))
        if len(drugs) < MIN_DRUGS:
            logger.warning("Skipping dataset line %d: fewer than %d drugs named", line_no, MIN_DRUGS)
            skipped += 1
            continue
        code = row["classification"]
        if not code:
            logger.warning("Skipping dataset line %d: classification is blank", line_no)
            skipped += 1
            continue
        if code == NO_DATA_CODE:
            logger.warning("Skipping dataset line %d: classification %s is reserved for 'no data'", line_no, code)
            skipped += 1
            continue
        if code not in CLASSIFICATION_CODES:
            unknown_codes.add(code)
        records.append(
            CompatibilityRecord(
                drugs=drugs,
                diluent=row["diluent"],
                classification=code,
                qualifiers=split_codes(row["qualifiers"]),
                reference_ids=split_codes(row["reference_ids"]),
            )
        )

    if unknown_codes:
        logger.warning(
            "Dataset uses classification code(s) outside the known set: %s",
            ", ".join(repr(c) for c in sorted(unknown_codes)),
        )
    if not records:
        raise DatasetLoadError(f"Compatibility dataset has no usable rows ({skipped} skipped).")
    logger.info("Indexed %d compatibility records (%d skipped)", len(records), skipped)
    return tuple(records)


def group_by_key(records: Iterable[CompatibilityRecord]) -> Dict[str, Tuple[CompatibilityRecord, ...]]:
    """Group records by canonical combination key, keeping dataset order."""
    grouped: Dict[str, List[CompatibilityRecord]] = defaultdict(list)
    for record in records:
        grouped[record.canonical_key].append(record)
    return {key: tuple(group) for key, group in grouped.items()}


def build_classification_legend(frame: Optional[pd.DataFrame]) -> Dict[str, LegendEntry]:
    if not _usable(frame, CLASSIFICATION_LEGEND_COLUMNS, "classification legend"):
        return {}
    legend: Dict[str, LegendEntry] = {}
    for row in _rows(frame):
        if row["id"]:
            legend[row["id"]] = LegendEntry(label=row["label"], description=row["description"])
    return legend


def build_qualifier_legend(frame: Optional[pd.DataFrame]) -> Dict[str, str]:
    if not _usable(frame, QUALIFIER_LEGEND_COLUMNS, "qualifier legend"):
        return {}
    return {row["code"]: row["description"] for row in _rows(frame) if row["code"]}


def build_references(frame: Optional[pd.DataFrame]) -> Dict[str, str]:
    if not _usable(frame, REFERENCES_COLUMNS, "reference"):
        return {}
    return {row["id"]: row["full_reference"] for row in _rows(frame) if row["id"]}


def build_drug_classes(frame: Optional[pd.DataFrame]) -> Dict[str, str]:
    """Map normalized drug names to their class; the override rule looks names up the same way."""
    if not _usable(frame, DRUG_CLASSES_COLUMNS, "drug class"):
        return {}
    classes: Dict[str, str] = {}
    for row in _rows(frame):
        name = normalize(row["drug_name"])
        if name and row["class"]:
            classes[name] = row["class"]
    return classes


def report_legend_gaps(records: Iterable[CompatibilityRecord], legend: Dict[str, LegendEntry]) -> None:
    """Warn about codes used in data that the classification legend does not describe."""
    if not legend:
        return
    used = {r.classification for r in records} | {OVERRIDE_CODE}
    gaps = sorted(used - set(legend))
    if gaps:
        logger.warning("Classification legend has no entry for code(s): %s", ", ".join(gaps))


__all__ = [
    "build_records",
    "group_by_key",
    "build_classification_legend",
    "build_qualifier_legend",
    "build_references",
    "build_drug_classes",
    "report_legend_gaps",
]
