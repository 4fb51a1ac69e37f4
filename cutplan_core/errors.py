"""Typed errors raised by layout calculation and render configuration."""

from __future__ import annotations


class LayoutError(ValueError):
    """Base class for every failure raised by the cutting-layout core."""


class InvalidDimensionError(LayoutError):
    """Source, target or margin dimensions are missing, non-numeric or out of range."""


class TargetTooLargeError(InvalidDimensionError):
    """Target plus margin does not fit on the source."""


class DivisionByZeroError(LayoutError, ZeroDivisionError):
    """A cell dimension (target + 2 * margin) resolved to zero."""


class EmptyGridError(LayoutError):
    """The primary grid has no rows or no columns."""


class NegativeRemainderError(LayoutError):
    """Leftover strip arithmetic produced a negative dimension."""


class InvalidConfigError(LayoutError):
    """Render configuration has an invalid value."""
