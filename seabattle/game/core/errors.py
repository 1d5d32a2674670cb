"""Hard errors raised by the rules core.

Ordinary illegal player intent never raises; transitions hand back the unchanged
state instead. These exceptions are reserved for callers that break the contract.
"""

from __future__ import annotations


class InvalidArgumentError(ValueError):
    """Intent references a unit, coordinate or event that cannot exist."""


class InvariantViolationError(AssertionError):
    """Game state reached a shape the rules never produce."""
