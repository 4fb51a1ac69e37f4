"""Input validation for layout calculations.

All dimension checks run through one ordered pipeline before any grid is
computed; the first violated precondition is raised as a typed error.
"""

from __future__ import annotations

import math
from collections.abc import Mapping
from numbers import Real

from .errors import InvalidDimensionError, TargetTooLargeError
from .geometry import Size


def _is_number(value: object) -> bool:
    return isinstance(value, Real) and not isinstance(value, bool) and math.isfinite(value)


def coerce_size(value: object, name: str) -> Size:
    """
    Convert a size-like value into a Size.

    Args:
        value: A Size, a (width, height) pair, or a mapping with 'width' and 'height'.
        name: Field name used in error messages (for example 'source').

    Returns:
        Size: The converted size.

    Raises:
        InvalidDimensionError: If the value cannot be read as a size.
    """
    if isinstance(value, Size):
        return value
    if isinstance(value, Mapping):
        if 'width' not in value or 'height' not in value:
            raise InvalidDimensionError(f"Please provide {name} width and height.")
        return Size(value['width'], value['height'])
    if isinstance(value, (tuple, list)) and len(value) == 2:
        return Size(value[0], value[1])
    raise InvalidDimensionError(f"Please provide {name} width and height.")


def _require_numeric(size: Size, name: str) -> None:
    if not _is_number(size.width) or not _is_number(size.height):
        raise InvalidDimensionError(
            f"Incorrect {name} value! Width and height must be finite numbers."
        )


def validate_dimensions(source: Size, target: Size, margin: Size) -> None:
    """
    Validate source, target and margin in a fixed order.

    Raises:
        InvalidDimensionError: On non-numeric values, non-positive source or
            target dimensions, or negative margins.
        TargetTooLargeError: If target plus twice the margin exceeds the source
            on either axis.
    """
    for size, name in ((source, 'source'), (target, 'target'), (margin, 'margin')):
        _require_numeric(size, name)

    if source.width <= 0 or source.height <= 0:
        raise InvalidDimensionError("Source width and height must be positive values.")
    if target.width <= 0 or target.height <= 0:
        raise InvalidDimensionError("Target width and height must be positive values.")
    if margin.width < 0 or margin.height < 0:
        raise InvalidDimensionError("Margin width and height must be non-negative values.")

    if (
        target.width + 2 * margin.width > source.width
        or target.height + 2 * margin.height > source.height
    ):
        raise TargetTooLargeError("Target size is too large for the source with margin.")
