#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""Shared-hazardous-class override rule.

Two or more drugs from the same flagged pharmacological class (e.g. two
opioids) are classified with the override code regardless of the literature
table and regardless of diluent.
"""

from __future__ import annotations

import logging
from collections import Counter
from typing import Iterable, Mapping, Optional, Sequence

from .base import DiluentSummary
from .constants import FLAGGED_CLASS_THRESHOLD, FLAGGED_DRUG_CLASSES, OVERRIDE_CODE, OVERRIDE_DILUENT
from .text_utils import normalize

logger = logging.getLogger(__name__)


def class_counts(drugs: Iterable[str], drug_classes: Mapping[str, str]) -> Counter:
    """Tally normalized class names for the drugs that have a class entry."""
    counts: Counter = Counter()
    for drug in drugs:
        drug_class = drug_classes.get(normalize(drug))
        if drug_class:
            counts[normalize(drug_class)] += 1
    return counts


def evaluate_override(
    drugs: Iterable[str],
    drug_classes: Mapping[str, str],
    flagged_classes: Sequence[str] = FLAGGED_DRUG_CLASSES,
) -> Optional[str]:
    """Return the flagged class that fires the rule, or None.

    Flagged classes are checked in the order given, so callers list the most
    conservative class first; the first to reach the threshold is reported.
    """
    if not drug_classes or not flagged_classes:
        return None
    counts = class_counts(drugs, drug_classes)
    for flagged in flagged_classes:
        if counts.get(normalize(flagged), 0) >= FLAGGED_CLASS_THRESHOLD:
            logger.debug("Override fired: %d drugs in class %r", counts[normalize(flagged)], flagged)
            return flagged
    return None


def override_summary() -> DiluentSummary:
    return DiluentSummary(diluent=OVERRIDE_DILUENT, classification=OVERRIDE_CODE)


__all__ = ["class_counts", "evaluate_override", "override_summary"]
