"""
Layout packing.

Expands fitted grids into absolutely positioned placements, then packs a
second, rotated grid into the strip of source left over by the main grid.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from .errors import EmptyGridError, NegativeRemainderError
from .geometry import (
    CellSizing,
    Grid,
    GridPosition,
    LayoutResult,
    Placement,
    Point,
    Rect,
    Size,
)
from .grid import cross_cut, fit_grid
from .validation import coerce_size, validate_dimensions

ORIGIN = Point(0, 0)


@dataclass(frozen=True)
class Remainder:
    """Grid fitted into the leftover strip and the point where it starts."""

    grid: Grid
    start: Point


@dataclass(frozen=True)
class CalculationRequest:
    source: Size
    target: Size
    margin: Size = Size(0, 0)
    use_inline: bool = True

    @property
    def orientation(self) -> str:
        return "inline" if self.use_inline else "cross"


def expand_grid(
    grid: Grid,
    sizing: CellSizing,
    origin: Point = ORIGIN,
    swap_axes: bool = False,
) -> tuple[Placement, ...]:
    """
    Expand a grid into placements, scanning row by row.

    Args:
        grid: Rows and columns to expand.
        sizing: Outer, inner and margin sizes of one cell.
        origin: Top-left corner of the first cell.
        swap_axes: Rotate every cell by 90 degrees (used for the leftover grid).

    Returns:
        tuple[Placement, ...]: Placements in row-major order.
    """
    if grid.is_empty:
        return ()
    if swap_axes:
        sizing = sizing.swapped()

    outer, inner, margin = sizing.outer, sizing.inner, sizing.margin
    placements = []
    for r in range(grid.row):
        for c in range(grid.column):
            outer_rect = Rect(
                x=origin.x + c * outer.width,
                y=origin.y + r * outer.height,
                width=outer.width,
                height=outer.height,
            )
            inner_rect = Rect(
                x=outer_rect.x + margin.width,
                y=outer_rect.y + margin.height,
                width=inner.width,
                height=inner.height,
            )
            placements.append(Placement(inner=inner_rect, outer=outer_rect, grid=GridPosition(r, c)))
    return tuple(placements)


def _remaining(total: float, used: float, axis: str) -> float:
    """Return ``total - used``, treating float noise around zero as an exact fit."""
    remain = total - used
    if remain < 0:
        if math.isclose(total, used):
            return 0
        raise NegativeRemainderError(f"there is a negative remain{axis} ({remain})")
    return remain


def compute_remainder(source: Size, main_container: Size, target: Size, margin: Size) -> Remainder | None:
    """
    Fit a rotated grid into the source area left over by the main grid.

    The strip tests compare each remainder against the target's other axis,
    since the leftover grid is rotated by 90 degrees. The vertical strip is
    tried first; the first matching strip wins even if its grid is empty.

    Args:
        source: Full source size.
        main_container: Bounding box of the main grid, anchored at the origin.
        target: Target size as placed in the main grid.
        margin: Margin as applied in the main grid.

    Returns:
        Remainder | None: The leftover grid and its start point, or None.

    Raises:
        NegativeRemainderError: If the main grid extends past the source by
            more than floating-point rounding.
    """
    remain_x = _remaining(source.width, main_container.width, "X")
    remain_y = _remaining(source.height, main_container.height, "Y")

    if remain_x >= target.height:
        strip = Size(remain_x, source.height)
        return Remainder(grid=cross_cut(strip, target, margin), start=Point(main_container.width, 0))
    if remain_y >= target.width:
        strip = Size(source.width, remain_y)
        return Remainder(grid=cross_cut(strip, target, margin), start=Point(0, main_container.height))
    return None


def calculate(source, target, margin=None, use_inline: bool = True) -> LayoutResult:
    """
    Calculate the cutting layout of target pieces on a source sheet.

    Args:
        source: Source (paper) size as a Size, (width, height) pair or mapping.
        target: Target (piece) size in the same forms.
        margin: Margin around each target; None means no margin.
        use_inline: True for inline orientation, False for cross.

    Returns:
        LayoutResult: Main and remainder placements plus the derived total.

    Raises:
        InvalidDimensionError: If any dimension is invalid.
        TargetTooLargeError: If the target plus margin does not fit the source.
        DivisionByZeroError: If a cell dimension is zero.
        EmptyGridError: If no main grid fits.
        NegativeRemainderError: If the leftover strip arithmetic goes negative.
    """
    source = coerce_size(source, 'source')
    target = coerce_size(target, 'target')
    margin = Size(0, 0) if margin is None else coerce_size(margin, 'margin')
    validate_dimensions(source, target, margin)

    orientation = "inline" if use_inline else "cross"
    grid = fit_grid(source, target, margin, orientation)
    if grid.row <= 0:
        raise EmptyGridError("the number of rows in grid cannot be zero or negative number")
    if grid.column <= 0:
        raise EmptyGridError("the number of columns in grid cannot be zero or negative number")

    sizing = CellSizing.for_target(target, margin, use_inline)
    main = expand_grid(grid, sizing)
    main_container = Size(sizing.outer.width * grid.column, sizing.outer.height * grid.row)

    remain: tuple[Placement, ...] = ()
    remain_grid = None
    remainder = compute_remainder(source, main_container, sizing.inner, sizing.margin)
    if remainder is not None and not remainder.grid.is_empty:
        remain_grid = remainder.grid
        remain = expand_grid(remainder.grid, sizing, origin=remainder.start, swap_axes=True)

    return LayoutResult(
        source=source,
        margin=margin,
        main=main,
        remain=remain,
        main_grid=grid,
        remain_grid=remain_grid,
    )


def calculate_request(request: CalculationRequest) -> LayoutResult:
    """Run calculate() for a bound request."""
    return calculate(request.source, request.target, request.margin, request.use_inline)
