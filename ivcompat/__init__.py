#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""Injectable drug compatibility lookup over a curated reference table."""

from .base import (
    CompatibilityIndex,
    CompatibilityRecord,
    DataPaths,
    DiluentSummary,
    LegendEntry,
    QueryResult,
)
from .engine import initialize, initialize_from_dir, query, validate_drugs
from .errors import CompatibilityError, DatasetLoadError, InvalidQueryError
from .loaders import RawTables, load_raw_tables
from .matcher import find_matches
from .text_utils import combination_key, normalize, split_codes

__all__ = [
    "CompatibilityIndex",
    "CompatibilityRecord",
    "DataPaths",
    "DiluentSummary",
    "LegendEntry",
    "QueryResult",
    "initialize",
    "initialize_from_dir",
    "query",
    "validate_drugs",
    "CompatibilityError",
    "DatasetLoadError",
    "InvalidQueryError",
    "RawTables",
    "load_raw_tables",
    "find_matches",
    "combination_key",
    "normalize",
    "split_codes",
]
