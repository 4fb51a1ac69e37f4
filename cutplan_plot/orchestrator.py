"""
Render orchestration for cutplan.

Coordinates writing one calculated layout to every requested output
format, naming files after the layout.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from cutplan_core.config import CoreConfigService, RenderConfig, normalize_format
from cutplan_core.constants import IMAGE_FORMATS
from cutplan_core.formatting import layout_title
from cutplan_core.geometry import LayoutResult, Size
from .export import export_csv, export_yaml
from .visualizer import LayoutVisualizer

logger = logging.getLogger("cutplan")


@dataclass(frozen=True)
class RenderRunContext:
    """Execution context for output naming."""
    out_dir: Path
    title: str


class LayoutOrchestrator:
    """Bind render settings from config and write layouts to files."""

    def __init__(self, config: Path | None = None, render_config: RenderConfig | None = None) -> None:
        self.config = config
        if render_config is not None:
            self.render_config = render_config
        elif config is not None:
            self.render_config = CoreConfigService(config).load_render_config()
        else:
            self.render_config = RenderConfig()

    def build_visualizer(self, result: LayoutResult) -> LayoutVisualizer:
        return LayoutVisualizer(result, self.render_config)

    def _write_format(self, result: LayoutResult, visualizer: LayoutVisualizer, fmt: str, run_ctx: RenderRunContext) -> Path:
        path = run_ctx.out_dir / f"{run_ctx.title}.{fmt}"
        if fmt in IMAGE_FORMATS:
            return visualizer.save(path, fmt)
        if fmt == 'csv':
            return export_csv(result, path)
        return export_yaml(result, path)

    def render_all(self, result: LayoutResult, target: Size, out_dir: Path, formats: list[str] | tuple[str, ...]) -> list[Path]:
        """
        Write the layout in each requested format.

        Args:
            result: Calculated layout.
            target: Target size as entered (used for file naming).
            out_dir: Output directory.
            formats: Output formats ('svg', 'jpeg', 'png', 'csv', 'yaml').

        Returns:
            list[Path]: Written files in the order requested.
        """
        canonical_formats: list[str] = []
        for fmt in formats:
            canonical = normalize_format(fmt)
            if canonical not in canonical_formats:
                canonical_formats.append(canonical)
        if not canonical_formats:
            raise ValueError("At least one output format must be selected.")

        run_ctx = RenderRunContext(out_dir=Path(out_dir), title=layout_title(result, target))
        run_ctx.out_dir.mkdir(parents=True, exist_ok=True)
        logger.info(f"Rendering {run_ctx.title} as {', '.join(canonical_formats)}")

        visualizer = self.build_visualizer(result)
        written = []
        try:
            for fmt in canonical_formats:
                written.append(self._write_format(result, visualizer, fmt, run_ctx))
        finally:
            visualizer.reset()
        return written


def render_layout(
    result: LayoutResult,
    target: Size,
    out_dir: Path,
    formats: list[str] | tuple[str, ...] = ('svg',),
    config: Path | None = None,
    render_config: RenderConfig | None = None,
) -> list[Path]:
    """
    Render a calculated layout to files.

    Args:
        result: Calculated layout.
        target: Target size as entered.
        out_dir: Output directory.
        formats: Output formats to write.
        config: Optional config YAML providing the ``render`` section.
        render_config: Explicit render settings (takes precedence over config).

    Returns:
        list[Path]: Written files.
    """
    orchestrator = LayoutOrchestrator(config=config, render_config=render_config)
    return orchestrator.render_all(result, target, out_dir, formats)
