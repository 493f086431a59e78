#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""Shared constants for the compatibility lookup engine."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Dict, FrozenSet, Tuple

PROJECT_ROOT: Path = Path(__file__).resolve().parents[1]
DATA_DIR_ENV: str = "IVCOMPAT_DATA_DIR"
FALLBACK_DATA_DIR: Path = PROJECT_ROOT / "data"

MAIN_DATASET_FILENAME: str = "Website_DataSet.csv"
CLASSIFICATION_LEGEND_FILENAME: str = "classification_legend.csv"
QUALIFIER_LEGEND_FILENAME: str = "qualifier_legend.csv"
REFERENCES_FILENAME: str = "references.csv"
DRUG_CLASSES_FILENAME: str = "drug_classes.csv"

MAIN_DATASET_COLUMNS: Tuple[str, ...] = (
    "drug_1",
    "drug_2",
    "drug_3",
    "diluent",
    "classification",
    "qualifiers",
    "reference_ids",
)
# drug_3 may be absent from two-drug datasets.
MAIN_DATASET_REQUIRED_COLUMNS: Tuple[str, ...] = tuple(c for c in MAIN_DATASET_COLUMNS if c != "drug_3")
CLASSIFICATION_LEGEND_COLUMNS: Tuple[str, ...] = ("id", "label", "description")
QUALIFIER_LEGEND_COLUMNS: Tuple[str, ...] = ("code", "description")
REFERENCES_COLUMNS: Tuple[str, ...] = ("id", "full_reference")
DRUG_CLASSES_COLUMNS: Tuple[str, ...] = ("drug_name", "class")

KEY_SEPARATOR: str = " | "
CODE_DELIMITERS_PATTERN: str = r"[ \t,|]+"
MIN_DRUGS: int = 2
MAX_DRUGS: int = 3

NO_DATA_CODE: str = "4"
OVERRIDE_CODE: str = "5"
OVERRIDE_DILUENT: str = "not applicable"

# Checked in this order when more than one class could fire; most conservative first.
FLAGGED_DRUG_CLASSES: Tuple[str, ...] = ("Opioid", "Dopamine antagonist")
FLAGGED_CLASS_THRESHOLD: int = 2

# Higher wins. Codes missing here rank at UNRANKED_PRECEDENCE.
CLASSIFICATION_PRECEDENCE: Dict[str, int] = {
    "3": 6,
    "5": 5,
    "2": 4,
    "7": 3,
    "6": 2,
    "1": 1,
}
UNRANKED_PRECEDENCE: int = 0
# Codes a stored record may carry; NO_DATA_CODE is not one of them.
CLASSIFICATION_CODES: FrozenSet[str] = frozenset(CLASSIFICATION_PRECEDENCE)

# Lower scores are listed first; unlisted diluents share DEFAULT_DILUENT_SCORE.
DILUENT_ORDER: Dict[str, int] = {
    "water for injection": 0,
    "sodium chloride 0.9%": 1,
}
DEFAULT_DILUENT_SCORE: int = 2

NO_DATA_LABEL: str = "No data"
ANY_DILUENT_LABEL: str = "Any diluent"
TITLE_SEPARATOR: str = " + "


def default_data_dir() -> Path:
    """Data directory from IVCOMPAT_DATA_DIR, read on each call, else ./data under the project."""
    raw = os.getenv(DATA_DIR_ENV)
    if raw is None or raw.strip() == "":
        return FALLBACK_DATA_DIR
    return Path(raw)


def classification_precedence(code: str) -> int:
    """Rank of a code for worst-case selection; codes outside the table rank UNRANKED_PRECEDENCE."""
    return CLASSIFICATION_PRECEDENCE.get(code, UNRANKED_PRECEDENCE)


__all__ = [
    "PROJECT_ROOT",
    "DATA_DIR_ENV",
    "FALLBACK_DATA_DIR",
    "default_data_dir",
    "MAIN_DATASET_FILENAME",
    "CLASSIFICATION_LEGEND_FILENAME",
    "QUALIFIER_LEGEND_FILENAME",
    "REFERENCES_FILENAME",
    "DRUG_CLASSES_FILENAME",
    "MAIN_DATASET_COLUMNS",
    "MAIN_DATASET_REQUIRED_COLUMNS",
    "CLASSIFICATION_LEGEND_COLUMNS",
    "QUALIFIER_LEGEND_COLUMNS",
    "REFERENCES_COLUMNS",
    "DRUG_CLASSES_COLUMNS",
    "KEY_SEPARATOR",
    "CODE_DELIMITERS_PATTERN",
    "MIN_DRUGS",
    "MAX_DRUGS",
    "NO_DATA_CODE",
    "OVERRIDE_CODE",
    "OVERRIDE_DILUENT",
    "FLAGGED_DRUG_CLASSES",
    "FLAGGED_CLASS_THRESHOLD",
    "CLASSIFICATION_PRECEDENCE",
    "UNRANKED_PRECEDENCE",
    "CLASSIFICATION_CODES",
    "classification_precedence",
    "DILUENT_ORDER",
    "DEFAULT_DILUENT_SCORE",
    "NO_DATA_LABEL",
    "ANY_DILUENT_LABEL",
    "TITLE_SEPARATOR",
]
