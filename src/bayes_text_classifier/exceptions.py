"""Exception hierarchy for the Naive Bayes text classifier."""

from __future__ import annotations


class ClassifierError(Exception):
    """Base class for all classifier errors."""


class InvalidArgumentError(ClassifierError, ValueError):
    """An argument was rejected before any state was changed."""


class InvalidStateError(ClassifierError, RuntimeError):
    """The classifier is not in a state that allows the operation."""


class DecodeError(ClassifierError, ValueError):
    """Serialized classifier data is malformed or inconsistent."""
