#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""Resolve a requested drug combination against the compatibility index."""

from __future__ import annotations

from typing import Iterable, List

from .base import CompatibilityIndex, CompatibilityRecord
from .text_utils import combination_key


def find_matches(index: CompatibilityIndex, drugs: Iterable[str]) -> List[CompatibilityRecord]:
    """All records for the same drug set, any order and any diluent, in dataset order.

    An empty list is the ordinary "no data" outcome.
    """
    return list(index.by_key.get(combination_key(drugs), ()))


__all__ = ["find_matches"]
