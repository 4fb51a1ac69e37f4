"""Grid fitting: how many target cells fit along each source axis."""

from __future__ import annotations

import math

from .constants import VALID_ORIENTATIONS
from .errors import DivisionByZeroError
from .geometry import Grid, Size


def _cell_size(target: Size, margin: Size) -> Size:
    cell = Size(target.width + 2 * margin.width, target.height + 2 * margin.height)
    if cell.width == 0 or cell.height == 0:
        raise DivisionByZeroError("Division by zero: cell dimension (target + 2 * margin) is zero.")
    return cell


def inline_cut(source: Size, target: Size, margin: Size) -> Grid:
    """
    Fit cells with the target width along the source width.

    Args:
        source: Area to fill.
        target: Target size.
        margin: Margin around each target.

    Returns:
        Grid: Rows and columns that fit. Either may be zero.

    Raises:
        DivisionByZeroError: If a cell dimension is zero.
    """
    cell = _cell_size(target, margin)
    column = math.floor(source.width / cell.width)
    row = math.floor(source.height / cell.height)
    return Grid(row=row, column=column)


def cross_cut(source: Size, target: Size, margin: Size) -> Grid:
    """
    Fit cells rotated by 90 degrees.

    The cell width runs along the source height and the cell height along
    the source width.

    Args:
        source: Area to fill.
        target: Target size.
        margin: Margin around each target.

    Returns:
        Grid: Rows and columns that fit. Either may be zero.

    Raises:
        DivisionByZeroError: If a cell dimension is zero.
    """
    cell = _cell_size(target, margin)
    column = math.floor(source.width / cell.height)
    row = math.floor(source.height / cell.width)
    return Grid(row=row, column=column)


def fit_grid(source: Size, target: Size, margin: Size, orientation: str = "inline") -> Grid:
    """Fit a grid using the 'inline' or 'cross' orientation."""
    if orientation == "inline":
        return inline_cut(source, target, margin)
    if orientation == "cross":
        return cross_cut(source, target, margin)
    allowed = ', '.join(VALID_ORIENTATIONS)
    raise ValueError(f"Invalid orientation '{orientation}'. Use one of: {allowed}.")
