"""Core cutting-layout calculation shared by the CLI and plotting layers."""

from .config import (
    CoreConfigService,
    RenderConfig,
    load_layout_defaults,
    load_runtime_paths,
    normalize_format,
)
from .errors import (
    DivisionByZeroError,
    EmptyGridError,
    InvalidConfigError,
    InvalidDimensionError,
    LayoutError,
    NegativeRemainderError,
    TargetTooLargeError,
)
from .formatting import build_layout_report, format_dimension, format_size, layout_title
from .geometry import CellSizing, Grid, GridPosition, LayoutResult, Placement, Point, Rect, Size
from .grid import cross_cut, fit_grid, inline_cut
from .packer import CalculationRequest, Remainder, calculate, calculate_request, compute_remainder, expand_grid
from .validation import coerce_size, validate_dimensions

__all__ = [
    "build_layout_report",
    "calculate",
    "calculate_request",
    "CalculationRequest",
    "CellSizing",
    "coerce_size",
    "compute_remainder",
    "CoreConfigService",
    "cross_cut",
    "DivisionByZeroError",
    "EmptyGridError",
    "expand_grid",
    "fit_grid",
    "format_dimension",
    "format_size",
    "Grid",
    "GridPosition",
    "inline_cut",
    "InvalidConfigError",
    "InvalidDimensionError",
    "layout_title",
    "LayoutError",
    "LayoutResult",
    "load_layout_defaults",
    "load_runtime_paths",
    "NegativeRemainderError",
    "normalize_format",
    "Placement",
    "Point",
    "Rect",
    "Remainder",
    "RenderConfig",
    "Size",
    "TargetTooLargeError",
    "validate_dimensions",
]
