#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""Name normalization and cell tokenizing shared by loading, matching and the override rule."""

from __future__ import annotations

import re
from typing import FrozenSet, Iterable, List

from .constants import CODE_DELIMITERS_PATTERN, KEY_SEPARATOR

_WHITESPACE_RX = re.compile(r"\s+")
_CODE_DELIMITERS_RX = re.compile(CODE_DELIMITERS_PATTERN)


def normalize(name: object) -> str:
    """Trim, lowercase and collapse whitespace runs. Non-strings normalize to ''."""
    if not isinstance(name, str):
        return ""
    return _WHITESPACE_RX.sub(" ", name.strip().lower())


def canonical_drugs(drugs: Iterable[object]) -> List[str]:
    """Normalized, non-empty drug names sorted lexicographically."""
    return sorted(n for n in (normalize(d) for d in drugs) if n)


def combination_key(drugs: Iterable[object]) -> str:
    """Order-, case- and whitespace-independent identity for a drug set.

    >>> combination_key([" Drug B", "drug  a", ""])
    'drug a | drug b'
    """
    return KEY_SEPARATOR.join(canonical_drugs(drugs))


def split_codes(value: object) -> FrozenSet[str]:
    """Split a multi-valued cell on space, tab, comma or pipe, discarding empty tokens."""
    if not isinstance(value, str):
        return frozenset()
    return frozenset(tok for tok in _CODE_DELIMITERS_RX.split(value.strip()) if tok)


def numeric_sort_key(code: str) -> tuple:
    """Sort purely numeric codes by value ahead of everything else."""
    text = code.strip()
    if text.isdigit():
        return (0, int(text), text)
    return (1, 0, text)


__all__ = [
    "normalize",
    "canonical_drugs",
    "combination_key",
    "split_codes",
    "numeric_sort_key",
]
