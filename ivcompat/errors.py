#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""Exception types raised by the compatibility engine."""

from __future__ import annotations


class CompatibilityError(Exception):
    """Base class for errors surfaced by the engine."""


class DatasetLoadError(CompatibilityError, RuntimeError):
    """The required compatibility dataset is missing or unusable; the session cannot start."""


class InvalidQueryError(CompatibilityError, ValueError):
    """The caller supplied a drug list that cannot be looked up."""


__all__ = ["CompatibilityError", "DatasetLoadError", "InvalidQueryError"]
