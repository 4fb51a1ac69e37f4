"""Rendering and export of calculated cutting layouts."""

from .export import export_csv, export_yaml, placements_to_frame
from .orchestrator import LayoutOrchestrator, render_layout
from .visualizer import LayoutVisualizer, calculate_font_size

__all__ = [
    "calculate_font_size",
    "export_csv",
    "export_yaml",
    "LayoutOrchestrator",
    "LayoutVisualizer",
    "placements_to_frame",
    "render_layout",
]
