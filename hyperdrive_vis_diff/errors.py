"""Exceptions raised while comparing band files against a baseline.

Each class also derives from the builtin exception that callers would expect
for the same situation, so ``except ValueError`` keeps working.
"""

from __future__ import annotations


class ComparisonError(Exception):
    """Base class for every fatal comparison problem."""


class MissingBaselineError(ComparisonError, FileNotFoundError):
    """The baseline directory does not exist."""


class DiscoveryError(ComparisonError, LookupError):
    """No band files were found, or a band file has no baseline counterpart."""


class BandFormatError(ComparisonError, ValueError):
    """A band file does not hold a whole number of float32 values."""


class ContentError(ComparisonError, ValueError):
    """A band file is empty, or a present/baseline pair differs in length."""
