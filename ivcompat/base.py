#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""Common dataclasses shared by the loader, the index and the query engine."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import FrozenSet, Mapping, Optional, Tuple

from .constants import (
    CLASSIFICATION_LEGEND_FILENAME,
    DRUG_CLASSES_FILENAME,
    MAIN_DATASET_FILENAME,
    QUALIFIER_LEGEND_FILENAME,
    REFERENCES_FILENAME,
    default_data_dir,
)
from .text_utils import combination_key


@dataclass(frozen=True)
class DataPaths:
    """CSV sources read at startup. Only the main dataset is required."""

    main: Path
    classification_legend: Optional[Path] = None
    qualifier_legend: Optional[Path] = None
    references: Optional[Path] = None
    drug_classes: Optional[Path] = None

    @classmethod
    def from_dir(cls, data_dir: Optional[Path] = None) -> "DataPaths":
        """Standard file names under data_dir, or under default_data_dir() when omitted."""
        data_dir = Path(data_dir) if data_dir is not None else default_data_dir()
        return cls(
            main=data_dir / MAIN_DATASET_FILENAME,
            classification_legend=data_dir / CLASSIFICATION_LEGEND_FILENAME,
            qualifier_legend=data_dir / QUALIFIER_LEGEND_FILENAME,
            references=data_dir / REFERENCES_FILENAME,
            drug_classes=data_dir / DRUG_CLASSES_FILENAME,
        )


@dataclass(frozen=True)
class CompatibilityRecord:
    """One row of the reference dataset."""

    drugs: Tuple[str, ...]
    diluent: str
    classification: str
    qualifiers: FrozenSet[str] = frozenset()
    reference_ids: FrozenSet[str] = frozenset()

    @property
    def canonical_key(self) -> str:
        return combination_key(self.drugs)


@dataclass(frozen=True)
class DiluentSummary:
    """Conservative roll-up of every matched record for one diluent.

    `drugs` holds the names as authored in the first contributing row; the
    synthetic override summary leaves it empty.
    """

    diluent: str
    classification: str
    qualifiers: FrozenSet[str] = frozenset()
    references: FrozenSet[str] = frozenset()
    drugs: Tuple[str, ...] = ()


@dataclass(frozen=True)
class QueryResult:
    """Outcome of a lookup: an override hit, a list of diluent summaries, or nothing."""

    drugs: Tuple[str, ...]
    overridden: bool
    summaries: Tuple[DiluentSummary, ...] = ()
    override_class: Optional[str] = None
    diluent: Optional[str] = None

    @property
    def summary(self) -> Optional[DiluentSummary]:
        """The synthetic override summary, when the override rule fired."""
        if self.overridden and self.summaries:
            return self.summaries[0]
        return None

    @property
    def is_empty(self) -> bool:
        return not self.summaries


@dataclass(frozen=True)
class LegendEntry:
    label: str = ""
    description: str = ""


def _frozen(mapping: Optional[Mapping]) -> Mapping:
    return MappingProxyType(dict(mapping or {}))


@dataclass(frozen=True)
class CompatibilityIndex:
    """Immutable bundle of every table a query needs.

    Built once by :func:`ivcompat.engine.initialize` and passed to each query.
    A reload builds a new index rather than mutating this one.
    """

    records: Tuple[CompatibilityRecord, ...]
    by_key: Mapping[str, Tuple[CompatibilityRecord, ...]]
    classification_legend: Mapping[str, LegendEntry] = field(default_factory=dict)
    qualifier_legend: Mapping[str, str] = field(default_factory=dict)
    references: Mapping[str, str] = field(default_factory=dict)
    drug_classes: Mapping[str, str] = field(default_factory=dict)
    flagged_classes: Tuple[str, ...] = ()

    def __post_init__(self) -> None:
        for name in ("by_key", "classification_legend", "qualifier_legend", "references", "drug_classes"):
            object.__setattr__(self, name, _frozen(getattr(self, name)))
        object.__setattr__(self, "records", tuple(self.records))
        object.__setattr__(self, "flagged_classes", tuple(self.flagged_classes))


__all__ = [
    "DataPaths",
    "CompatibilityRecord",
    "DiluentSummary",
    "QueryResult",
    "LegendEntry",
    "CompatibilityIndex",
]
