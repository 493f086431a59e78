#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Collapse matched records into one conservative summary per diluent.

Within a diluent group the most restrictive classification wins
(3 > 5 > 2 > 7 > 6 > 1), so a summary is never more permissive than any of
the records behind it. Qualifiers and reference ids are unioned.
"""

from __future__ import annotations

from typing import Dict, Iterable, List, Sequence

from .base import CompatibilityRecord, DiluentSummary
from .constants import DEFAULT_DILUENT_SCORE, DILUENT_ORDER, classification_precedence
from .text_utils import normalize


def worst_case_classification(codes: Iterable[str]) -> str:
    """Most restrictive code by precedence. Unranked codes only win when nothing ranked is present."""
    best = ""
    best_rank = -1
    for code in codes:
        rank = classification_precedence(code)
        if rank > best_rank:
            best, best_rank = code, rank
    return best


def group_by_diluent(records: Iterable[CompatibilityRecord]) -> Dict[str, List[CompatibilityRecord]]:
    """Partition on the exact diluent string, in discovery order."""
    groups: Dict[str, List[CompatibilityRecord]] = {}
    for record in records:
        groups.setdefault(record.diluent, []).append(record)
    return groups


def summarize_group(diluent: str, records: Sequence[CompatibilityRecord]) -> DiluentSummary:
    qualifiers = set()
    references = set()
    for record in records:
        qualifiers.update(record.qualifiers)
        references.update(record.reference_ids)
    return DiluentSummary(
        diluent=diluent,
        classification=worst_case_classification(r.classification for r in records),
        qualifiers=frozenset(qualifiers),
        references=frozenset(references),
        drugs=records[0].drugs,
    )


def diluent_score(diluent: str) -> int:
    return DILUENT_ORDER.get(normalize(diluent), DEFAULT_DILUENT_SCORE)


def order_diluents(summaries: Iterable[DiluentSummary]) -> List[DiluentSummary]:
    """Water for injection first, then sodium chloride 0.9%, then the rest in discovery order."""
    return sorted(summaries, key=lambda s: diluent_score(s.diluent))


def summarize(records: Iterable[CompatibilityRecord]) -> List[DiluentSummary]:
    """One ordered DiluentSummary per diluent seen among the records."""
    groups = group_by_diluent(records)
    return order_diluents(summarize_group(diluent, group) for diluent, group in groups.items())


__all__ = [
    "worst_case_classification",
    "group_by_diluent",
    "summarize_group",
    "diluent_score",
    "order_diluents",
    "summarize",
]
