"""Value types for sizes, rectangles, grids and layout results."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator

from .constants import MAIN_SECTION, REMAIN_SECTION


@dataclass(frozen=True)
class Size:
    """A width/height pair (source, target, margin, or any intermediate)."""

    width: float
    height: float

    def swapped(self) -> Size:
        """Return the size rotated by 90 degrees."""
        return Size(self.height, self.width)

    def to_dict(self) -> dict[str, float]:
        return {'width': self.width, 'height': self.height}


@dataclass(frozen=True)
class Point:
    x: float
    y: float


@dataclass(frozen=True)
class Rect:
    """An axis-aligned rectangle anchored at its top-left corner."""

    x: float
    y: float
    width: float
    height: float

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height

    @property
    def center(self) -> Point:
        return Point(self.x + self.width / 2, self.y + self.height / 2)

    def contains(self, other: Rect) -> bool:
        """Return True if ``other`` lies entirely inside this rectangle."""
        return (
            other.x >= self.x
            and other.y >= self.y
            and other.right <= self.right
            and other.bottom <= self.bottom
        )

    def overlaps(self, other: Rect) -> bool:
        """Return True if the interiors intersect. Shared edges do not count."""
        return (
            self.x < other.right
            and other.x < self.right
            and self.y < other.bottom
            and other.y < self.bottom
        )

    def to_dict(self) -> dict[str, float]:
        return {'x': self.x, 'y': self.y, 'width': self.width, 'height': self.height}


@dataclass(frozen=True)
class Grid:
    """Row/column counts for one packing phase. Zero on either axis means no fit."""

    row: int
    column: int

    @property
    def is_empty(self) -> bool:
        return self.row <= 0 or self.column <= 0

    @property
    def count(self) -> int:
        return 0 if self.is_empty else self.row * self.column


@dataclass(frozen=True)
class GridPosition:
    row: int
    column: int


@dataclass(frozen=True)
class Placement:
    """
    One placed target instance.

    Attributes:
        inner: Target footprint.
        outer: Target footprint plus margin on every side.
        grid: Row/column of the cell within its packing phase.
    """

    inner: Rect
    outer: Rect
    grid: GridPosition

    def to_dict(self) -> dict:
        return {
            'inner': self.inner.to_dict(),
            'outer': self.outer.to_dict(),
            'grid': {'row': self.grid.row, 'column': self.grid.column},
        }


@dataclass(frozen=True)
class CellSizing:
    """Outer, inner and margin sizes of one grid cell."""

    outer: Size
    inner: Size
    margin: Size

    @classmethod
    def for_target(cls, target: Size, margin: Size, use_inline: bool = True) -> CellSizing:
        """
        Build the cell sizing for the primary grid.

        Cross orientation rotates the target, so every axis is swapped.
        """
        outer = Size(target.width + 2 * margin.width, target.height + 2 * margin.height)
        sizing = cls(outer=outer, inner=target, margin=margin)
        return sizing if use_inline else sizing.swapped()

    def swapped(self) -> CellSizing:
        return CellSizing(
            outer=self.outer.swapped(),
            inner=self.inner.swapped(),
            margin=self.margin.swapped(),
        )


@dataclass(frozen=True)
class LayoutResult:
    """
    Full output of one layout calculation.

    ``main`` and ``remain`` keep row-major insertion order; that order is the
    1-based numbering shown in rendered output. ``total`` is always derived
    from the two sequences.
    """

    source: Size
    margin: Size
    main: tuple[Placement, ...]
    remain: tuple[Placement, ...] = ()
    main_grid: Grid = Grid(0, 0)
    remain_grid: Grid | None = None

    @property
    def total(self) -> int:
        return len(self.main) + len(self.remain)

    def numbered(self) -> Iterator[tuple[int, str, Placement]]:
        """Yield ``(number, section, placement)`` with numbering running through main then remain."""
        number = 0
        for section, placements in ((MAIN_SECTION, self.main), (REMAIN_SECTION, self.remain)):
            for placement in placements:
                number += 1
                yield number, section, placement

    def to_dict(self) -> dict:
        return {
            'source': self.source.to_dict(),
            'margin': self.margin.to_dict(),
            'main_grid': {'row': self.main_grid.row, 'column': self.main_grid.column},
            'remain_grid': (
                {'row': self.remain_grid.row, 'column': self.remain_grid.column}
                if self.remain_grid is not None else None
            ),
            'main': [placement.to_dict() for placement in self.main],
            'remain': [placement.to_dict() for placement in self.remain],
            'total': self.total,
        }
