#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""Turn query results into display cards and plain-text output."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Tuple

from .base import CompatibilityIndex, DiluentSummary, LegendEntry, QueryResult
from .constants import ANY_DILUENT_LABEL, NO_DATA_CODE, NO_DATA_LABEL, TITLE_SEPARATOR
from .text_utils import numeric_sort_key

NO_DATA_MESSAGE = (
    "No published compatibility found for this combination/diluent. "
    "Record any clinical observation so the dataset can be updated."
)
OVERRIDE_MESSAGE = "Two or more drugs share the {drug_class} class; combining them is not recommended."


@dataclass(frozen=True)
class ResultCard:
    title: str
    diluent: str
    classification: str
    label: str
    description: str
    qualifiers: Tuple[Tuple[str, str], ...] = ()
    references: Tuple[Tuple[str, str], ...] = ()
    note: str = ""


def classification_entry(index: CompatibilityIndex, code: str) -> LegendEntry:
    return index.classification_legend.get(code) or LegendEntry()


def _card(index: CompatibilityIndex, title: str, summary: DiluentSummary, note: str = "") -> ResultCard:
    """Card for one summary; matched summaries are titled with the drug names as authored in the dataset."""
    entry = classification_entry(index, summary.classification)
    qualifiers = tuple((q, index.qualifier_legend.get(q, "")) for q in sorted(summary.qualifiers))
    references = tuple(
        (ref, index.references.get(ref) or f"Reference {ref}")
        for ref in sorted(summary.references, key=numeric_sort_key)
    )
    return ResultCard(
        title=TITLE_SEPARATOR.join(summary.drugs) if summary.drugs else title,
        diluent=summary.diluent,
        classification=summary.classification,
        label=entry.label,
        description=entry.description,
        qualifiers=qualifiers,
        references=references,
        note=note,
    )


def assemble(index: CompatibilityIndex, result: QueryResult) -> List[ResultCard]:
    """One card per summary, or a single no-data card when nothing matched."""
    title = TITLE_SEPARATOR.join(result.drugs)
    if result.overridden and result.summary is not None:
        note = OVERRIDE_MESSAGE.format(drug_class=result.override_class)
        return [_card(index, title, result.summary, note=note)]
    if result.is_empty:
        return [
            ResultCard(
                title=title,
                diluent=result.diluent or ANY_DILUENT_LABEL,
                classification=NO_DATA_CODE,
                label=NO_DATA_LABEL,
                description="",
                note=NO_DATA_MESSAGE,
            )
        ]
    return [_card(index, title, summary) for summary in result.summaries]


def legend_entries(index: CompatibilityIndex) -> Tuple[List[Tuple[str, LegendEntry]], List[Tuple[str, str]]]:
    """Classification legend in numeric code order, qualifier legend in code order."""
    classifications = sorted(index.classification_legend.items(), key=lambda kv: numeric_sort_key(kv[0]))
    qualifiers = sorted(index.qualifier_legend.items())
    return classifications, qualifiers


def format_card(card: ResultCard) -> str:
    lines = [
        card.title,
        f"  Diluent: {card.diluent}",
        f"  Classification: {card.classification} - {card.label}".rstrip(" -"),
    ]
    if card.description:
        lines.append(f"  {card.description}")
    if card.note:
        lines.append(f"  {card.note}")
    if card.qualifiers:
        lines.append("  Qualifiers:")
        lines.extend(f"    {code}: {desc}".rstrip(": ") for code, desc in card.qualifiers)
    if card.references:
        lines.append("  References:")
        lines.extend(f"    {ref}. {text}" for ref, text in card.references)
    return "\n".join(lines)


def format_legend(index: CompatibilityIndex) -> str:
    classifications, qualifiers = legend_entries(index)
    lines = ["Classifications:"]
    for code, entry in classifications:
        lines.append(f"  Code {code} {entry.label}".rstrip())
        if entry.description:
            lines.append(f"    {entry.description}")
    lines.append("Qualifiers:")
    lines.extend(f"  Qualifier {code}: {desc}".rstrip(": ") for code, desc in qualifiers)
    return "\n".join(lines)


__all__ = [
    "ResultCard",
    "NO_DATA_MESSAGE",
    "OVERRIDE_MESSAGE",
    "classification_entry",
    "assemble",
    "legend_entries",
    "format_card",
    "format_legend",
]
