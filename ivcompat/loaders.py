#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
CSV loading for the compatibility tables.

The main dataset is required: any failure to read it raises DatasetLoadError.
The legends, the reference table and the drug class table are optional; a
missing or unreadable file is logged and handed on as None so the session can
still start with narrowed features.
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Optional

import pandas as pd

from .base import DataPaths
from .errors import DatasetLoadError

logger = logging.getLogger(__name__)

OPTIONAL_SOURCES = ("classification_legend", "qualifier_legend", "references", "drug_classes")


@dataclass(frozen=True)
class RawTables:
    """DataFrames as read from disk, before any shaping."""

    main: pd.DataFrame
    classification_legend: Optional[pd.DataFrame] = None
    qualifier_legend: Optional[pd.DataFrame] = None
    references: Optional[pd.DataFrame] = None
    drug_classes: Optional[pd.DataFrame] = None


def read_table(path: Path) -> pd.DataFrame:
    """Read a CSV as all-string columns with stripped headers and cells."""
    frame = pd.read_csv(path, dtype=str, keep_default_na=False).fillna("")
    frame.columns = [str(col).strip() for col in frame.columns]
    for col in frame.columns:
        frame[col] = frame[col].astype(str).str.strip()
    return frame


def _read_optional(name: str, path: Optional[Path]) -> Optional[pd.DataFrame]:
    if path is None:
        logger.info("No %s source configured; continuing without it.", name)
        return None
    try:
        frame = read_table(path)
    except (OSError, ValueError) as exc:
        logger.warning("Optional %s table %s could not be loaded (%s); continuing without it.", name, path, exc)
        return None
    logger.info("Loaded %d %s rows from %s", len(frame), name, path)
    return frame


def _read_main(path: Path) -> pd.DataFrame:
    try:
        frame = read_table(path)
    except FileNotFoundError as exc:
        raise DatasetLoadError(f"Compatibility dataset not found: {path}") from exc
    except (OSError, ValueError) as exc:
        raise DatasetLoadError(f"Compatibility dataset {path} could not be parsed: {exc}") from exc
    logger.info("Loaded %d compatibility rows from %s", len(frame), path)
    return frame


def load_raw_tables(paths: DataPaths, *, max_workers: Optional[int] = None) -> RawTables:
    """Read every configured source concurrently and bundle the DataFrames."""
    workers = max(1, max_workers or len(OPTIONAL_SOURCES) + 1)
    with ThreadPoolExecutor(max_workers=workers) as executor:
        main_future = executor.submit(_read_main, Path(paths.main))
        optional_futures = {
            name: executor.submit(_read_optional, name, getattr(paths, name))
            for name in OPTIONAL_SOURCES
        }
        optional: Dict[str, Optional[pd.DataFrame]] = {
            name: future.result() for name, future in optional_futures.items()
        }
        main = main_future.result()
    return RawTables(main=main, **optional)


__all__ = ["RawTables", "OPTIONAL_SOURCES", "read_table", "load_raw_tables"]
