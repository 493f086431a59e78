#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""Shared CSV fixtures for the compatibility engine tests."""

from __future__ import annotations

from pathlib import Path
from typing import Callable, Dict, Iterable, Optional

import pandas as pd
import pytest

from ivcompat import RawTables, initialize, initialize_from_dir
from ivcompat.base import CompatibilityIndex
from ivcompat.constants import (
    CLASSIFICATION_LEGEND_FILENAME,
    DRUG_CLASSES_FILENAME,
    MAIN_DATASET_COLUMNS,
    MAIN_DATASET_FILENAME,
    QUALIFIER_LEGEND_FILENAME,
    REFERENCES_FILENAME,
)

DATASET_CSV = """\
drug_1,drug_2,drug_3,diluent,classification,qualifiers,reference_ids
Drug X,Drug Y,,Water for injection,1,,
Morphine,Midazolam,,Sodium chloride 0.9%,2,C,1
Midazolam,Morphine,,Sodium chloride 0.9%,3,"C,H",1|2
MORPHINE , midazolam,,Water for injection,6,H,3
Morphine,Midazolam,,Glucose 5%,7,,4 12
Haloperidol,Morphine,Midazolam,Water for injection,1,,2
Morphine,Oxycodone,,Water for injection,1,,1
"""

CLASSIFICATION_LEGEND_CSV = """\
id,label,description
1,Anecdotal,Compatibility reported in practice only
2,Compatible,Physically compatible in published studies
3,Incompatible,Do not combine
5,Not recommended,Shared hazardous drug class
6,Compatible with caution,Limited published data
"""

QUALIFIER_LEGEND_CSV = """\
code,description
C,Concentration dependent
H,Time limited
"""

REFERENCES_CSV = """\
id,full_reference
1,Smith J. Stability of opioid admixtures. 2019.
2,Jones K. Syringe driver compatibility. 2020.
3,Lee P. Water for injection admixtures. 2018.
"""

DRUG_CLASSES_CSV = """\
drug_name,class
Morphine,Opioid
Oxycodone,Opioid
Haloperidol,Dopamine antagonist
Metoclopramide,Dopamine antagonist
Midazolam,Benzodiazepine
"""

SOURCES: Dict[str, str] = {
    MAIN_DATASET_FILENAME: DATASET_CSV,
    CLASSIFICATION_LEGEND_FILENAME: CLASSIFICATION_LEGEND_CSV,
    QUALIFIER_LEGEND_FILENAME: QUALIFIER_LEGEND_CSV,
    REFERENCES_FILENAME: REFERENCES_CSV,
    DRUG_CLASSES_FILENAME: DRUG_CLASSES_CSV,
}


def write_sources(
    target: Path,
    skip: Iterable[str] = (),
    overrides: Optional[Dict[str, str]] = None,
) -> Path:
    """Write the sample CSVs into target, leaving out `skip` and replacing files named in overrides."""
    target.mkdir(parents=True, exist_ok=True)
    contents = dict(SOURCES)
    contents.update(overrides or {})
    for filename, text in contents.items():
        if filename in skip:
            continue
        (target / filename).write_text(text, encoding="utf-8")
    return target


@pytest.fixture
def data_dir(tmp_path: Path) -> Path:
    return write_sources(tmp_path / "data")


@pytest.fixture
def write_data(tmp_path: Path) -> Callable[..., Path]:
    """Write a data directory with some sources left out or replaced."""

    def _write(skip: Iterable[str] = (), overrides: Optional[Dict[str, str]] = None) -> Path:
        return write_sources(tmp_path / "data", skip=skip, overrides=overrides)

    return _write


@pytest.fixture
def index(data_dir: Path) -> CompatibilityIndex:
    return initialize_from_dir(data_dir)


def _main_frame(rows: Iterable[Dict[str, str]]) -> pd.DataFrame:
    return pd.DataFrame([{col: row.get(col, "") for col in MAIN_DATASET_COLUMNS} for row in rows])


@pytest.fixture
def make_index() -> Callable[..., CompatibilityIndex]:
    """Build an index straight from row dicts, skipping the filesystem."""

    def _make(rows: Iterable[Dict[str, str]], drug_classes: Optional[Dict[str, str]] = None) -> CompatibilityIndex:
        classes = None
        if drug_classes is not None:
            classes = pd.DataFrame(
                [{"drug_name": name, "class": cls} for name, cls in drug_classes.items()],
                columns=["drug_name", "class"],
            )
        return initialize(RawTables(main=_main_frame(rows), drug_classes=classes))

    return _make
