#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""Public entry points: build an index once, then answer queries against it."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, List, Optional, Sequence, Tuple

from .base import CompatibilityIndex, DataPaths, QueryResult
from .constants import FLAGGED_DRUG_CLASSES, MAX_DRUGS, MIN_DRUGS
from .errors import InvalidQueryError
from .index import (
    build_classification_legend,
    build_drug_classes,
    build_qualifier_legend,
    build_records,
    build_references,
    group_by_key,
    report_legend_gaps,
)
from .loaders import RawTables, load_raw_tables
from .matcher import find_matches
from .override import evaluate_override, override_summary
from .summarize import summarize
from .text_utils import normalize

logger = logging.getLogger(__name__)


def initialize(tables: RawTables, flagged_classes: Sequence[str] = FLAGGED_DRUG_CLASSES) -> CompatibilityIndex:
    """Shape raw tables into an immutable index.

    Raises DatasetLoadError when the main dataset is missing or unusable.
    Optional tables that are absent or malformed leave their mapping empty.
    """
    records = build_records(tables.main)
    legend = build_classification_legend(tables.classification_legend)
    report_legend_gaps(records, legend)
    drug_classes = build_drug_classes(tables.drug_classes)
    if not drug_classes:
        logger.warning("No drug class table available; the shared-class override rule is disabled.")
    return CompatibilityIndex(
        records=records,
        by_key=group_by_key(records),
        classification_legend=legend,
        qualifier_legend=build_qualifier_legend(tables.qualifier_legend),
        references=build_references(tables.references),
        drug_classes=drug_classes,
        flagged_classes=tuple(flagged_classes),
    )


def initialize_from_dir(
    data_dir: Optional[Path] = None,
    *,
    flagged_classes: Sequence[str] = FLAGGED_DRUG_CLASSES,
    max_workers: Optional[int] = None,
) -> CompatibilityIndex:
    """Load the standard CSV files from data_dir (default: IVCOMPAT_DATA_DIR or ./data) and build the index."""
    tables = load_raw_tables(DataPaths.from_dir(data_dir), max_workers=max_workers)
    return initialize(tables, flagged_classes=flagged_classes)


def validate_drugs(drugs: Iterable[object]) -> Tuple[str, ...]:
    """Strip and de-duplicate requested names, enforcing 2 to 3 distinct drugs."""
    seen = set()
    cleaned: List[str] = []
    for drug in drugs:
        key = normalize(drug)
        if not key or key in seen:
            continue
        seen.add(key)
        cleaned.append(str(drug).strip())
    if len(cleaned) < MIN_DRUGS:
        raise InvalidQueryError(f"Please enter at least {MIN_DRUGS} different medicines.")
    if len(cleaned) > MAX_DRUGS:
        raise InvalidQueryError(f"At most {MAX_DRUGS} medicines can be combined, got {len(cleaned)}.")
    return tuple(cleaned)


def query(index: CompatibilityIndex, drugs: Iterable[object], diluent: Optional[str] = None) -> QueryResult:
    """Look up a 2 to 3 drug combination.

    The override rule runs first and short-circuits. Otherwise matching
    records are summarized per diluent; `diluent`, when given, keeps only the
    summary for that exact diluent. An empty result means no published data.
    """
    requested = validate_drugs(drugs)

    fired = evaluate_override(requested, index.drug_classes, index.flagged_classes)
    if fired:
        return QueryResult(
            drugs=requested,
            overridden=True,
            summaries=(override_summary(),),
            override_class=fired,
            diluent=diluent,
        )

    summaries = summarize(find_matches(index, requested))
    if diluent:
        summaries = [s for s in summaries if s.diluent == diluent]
    logger.debug("Query %s matched %d diluent group(s)", requested, len(summaries))
    return QueryResult(drugs=requested, overridden=False, summaries=tuple(summaries), diluent=diluent)


__all__ = ["initialize", "initialize_from_dir", "validate_drugs", "query"]
