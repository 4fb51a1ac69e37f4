"""Formatting helpers shared across CLI and package layers."""

from __future__ import annotations

from .geometry import Grid, LayoutResult, Size


def format_dimension(value: float) -> str:
    """
    Format a dimension without a trailing '.0' for whole numbers.

    Examples:
        >>> format_dimension(79.0)
        '79'
        >>> format_dimension(79.5)
        '79.5'
    """
    if float(value).is_integer():
        return str(int(value))
    return str(value)


def format_size(size: Size) -> str:
    return f"{format_dimension(size.width)}x{format_dimension(size.height)}"


def _format_grid(grid: Grid | None) -> str:
    if grid is None or grid.is_empty:
        return "none"
    return f"{grid.row} row(s) x {grid.column} column(s)"


def layout_title(result: LayoutResult, target: Size) -> str:
    """Build the base file name for a rendered layout."""
    return (
        f"Layout_Source_{format_size(result.source)}"
        f"_Target_{format_size(target)}"
        f"_Result_{result.total}"
    )


def build_layout_report(result: LayoutResult) -> str:
    """Build a formatted summary of a layout calculation."""
    lines = [
        "\n=== Cutting Layout ===",
        f"Source: {format_size(result.source)}",
        f"Margin: {format_size(result.margin)}",
        f"Main grid:   {_format_grid(result.main_grid)}",
        f"Remain grid: {_format_grid(result.remain_grid)}",
        "",
        f"Main   : {len(result.main)}",
        f"Remain : {len(result.remain)}",
        f"Total  : {result.total}",
        "",
    ]
    return "\n".join(lines)
