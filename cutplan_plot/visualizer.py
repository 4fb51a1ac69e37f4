"""
Layout visualization with matplotlib.

Draws a calculated cutting layout (paper, outer and inner rectangles,
numbered labels) and renders it to SVG, JPEG, PNG or a base64 data URL.
"""

from __future__ import annotations

import base64
import io
import logging
from pathlib import Path

import matplotlib.pyplot as plt
from matplotlib.patches import Rectangle

from cutplan_core.config import RenderConfig, normalize_format
from cutplan_core.constants import IMAGE_FORMATS, MAIN_SECTION, RENDER_DPI
from cutplan_core.geometry import LayoutResult

logger = logging.getLogger("cutplan")

MIME_TYPES = {
    'svg': 'image/svg+xml',
    'jpeg': 'image/jpeg',
    'png': 'image/png',
}
POINTS_PER_INCH = 72


def calculate_font_size(width: float, height: float, base_size: float) -> float:
    """
    Calculate a label font size that fits a rectangle.

    Takes the smaller side, removes 10% padding on each side, halves the
    usable space and clamps the result to ``[base_size, 1.5 * base_size]``.

    Args:
        width: Rectangle width.
        height: Rectangle height.
        base_size: Minimum font size.

    Returns:
        float: Font size in the same units as width and height.
    """
    available_space = min(width, height)
    padding = available_space * 0.1
    usable_space = available_space - (padding * 2)
    dynamic_size = usable_space / 2
    return max(base_size, min(base_size * 1.5, dynamic_size))


class LayoutVisualizer:
    """
    Renderer for calculated cutting layouts.

    Produces structured shapes, a matplotlib figure, SVG text, raster bytes
    and base64 data URLs from one LayoutResult. Coordinates are in source
    units with the origin at the top-left corner of the paper.
    """

    def __init__(self, result: LayoutResult, config: RenderConfig | None = None) -> None:
        """
        Initialize the visualizer.

        Args:
            result: Calculated layout to draw.
            config: Render settings (defaults to RenderConfig()).
        """
        if result is None:
            raise ValueError("A calculated layout is required for rendering.")
        self.result = result
        self.config = config if config is not None else RenderConfig()
        self.figure = None

    @property
    def has_margin(self) -> bool:
        margin = self.result.margin
        return margin.width > 0 or margin.height > 0

    def _to_points(self, value: float) -> float:
        """Convert a length in source units to typographic points."""
        return value * self.config.ratio * POINTS_PER_INCH / RENDER_DPI

    def _section_colours(self, section: str) -> tuple[str, str]:
        if section == MAIN_SECTION:
            return self.config.main_outer_color, self.config.main_inner_color
        return self.config.remain_outer_color, self.config.remain_inner_color

    def build_shapes(self) -> list[dict]:
        """
        Build renderer-neutral drawable shapes.

        Returns:
            list[dict]: Paper first, then per placement an optional outer
            rectangle, the inner rectangle and a numbered label.
        """
        config = self.config
        source = self.result.source
        shapes = [{
            'kind': 'paper',
            'x': 0,
            'y': 0,
            'width': source.width,
            'height': source.height,
            'fill': config.paper_color,
            'stroke': config.stroke_color,
            'line_width': config.line_width,
        }]

        for number, section, placement in self.result.numbered():
            outer_colour, inner_colour = self._section_colours(section)
            if self.has_margin:
                shapes.append({
                    'kind': 'outer',
                    'number': number,
                    'section': section,
                    **placement.outer.to_dict(),
                    'fill': outer_colour,
                    'stroke': config.stroke_color,
                    'line_width': config.line_width,
                })
            # Inner outline only when there is no margin to frame it
            shapes.append({
                'kind': 'inner',
                'number': number,
                'section': section,
                **placement.inner.to_dict(),
                'fill': inner_colour,
                'stroke': None if self.has_margin else config.stroke_color,
                'line_width': config.line_width,
            })
            center = placement.inner.center
            shapes.append({
                'kind': 'label',
                'number': number,
                'section': section,
                'text': str(number),
                'x': center.x,
                'y': center.y,
                'font_size': calculate_font_size(
                    placement.inner.width, placement.inner.height, config.font_size
                ),
                'font_family': config.font_family,
                'color': config.text_color,
            })
        return shapes

    def draw(self):
        """
        Draw the layout on a new matplotlib figure.

        Any previously drawn figure is discarded first.

        Returns:
            matplotlib.figure.Figure: The drawn figure.
        """
        self.reset()
        source = self.result.source
        width_in = source.width * self.config.ratio / RENDER_DPI
        height_in = source.height * self.config.ratio / RENDER_DPI

        fig = plt.figure(figsize=(width_in, height_in), dpi=RENDER_DPI)
        ax = fig.add_axes([0, 0, 1, 1])
        ax.set_xlim(0, source.width)
        ax.set_ylim(source.height, 0)
        ax.set_axis_off()

        for shape in self.build_shapes():
            if shape['kind'] == 'label':
                ax.text(
                    shape['x'],
                    shape['y'],
                    shape['text'],
                    ha='center',
                    va='center',
                    fontsize=self._to_points(shape['font_size']),
                    family=shape['font_family'],
                    color=shape['color'],
                )
                continue
            ax.add_patch(
                Rectangle(
                    (shape['x'], shape['y']),
                    shape['width'],
                    shape['height'],
                    facecolor=shape['fill'],
                    edgecolor=shape['stroke'] if shape['stroke'] else 'none',
                    linewidth=self._to_points(shape['line_width']),
                    gid=f"cutting-block-{shape['number']}-{shape['kind']}" if 'number' in shape else shape['kind'],
                )
            )

        logger.debug(
            f"Drew layout with {len(self.result.main)} main and {len(self.result.remain)} remain placements"
        )
        self.figure = fig
        return fig

    def _current_figure(self):
        return self.figure if self.figure is not None else self.draw()

    def render_svg(self) -> str:
        """Render the layout as SVG text."""
        buffer = io.BytesIO()
        self._current_figure().savefig(buffer, format='svg')
        return buffer.getvalue().decode('utf-8')

    def render_raster(self, fmt: str = 'jpeg') -> bytes:
        """
        Render the layout as raster image bytes.

        Args:
            fmt: 'jpeg' (or 'jpg') or 'png'.

        Returns:
            bytes: Encoded image.
        """
        fmt = normalize_format(fmt)
        if fmt not in ('jpeg', 'png'):
            raise ValueError(f"Raster format must be 'jpeg' or 'png', got '{fmt}'")
        if self.config.exceeds_actual_size:
            logger.warning(
                f"Raster layout exceeds the actual size (ratio {self.config.ratio}); "
                "rendering will be slower and files larger."
            )

        buffer = io.BytesIO()
        savefig_kwargs = {'format': fmt, 'dpi': RENDER_DPI}
        if fmt == 'jpeg':
            savefig_kwargs['pil_kwargs'] = {'quality': 95}
        self._current_figure().savefig(buffer, **savefig_kwargs)
        return buffer.getvalue()

    def render(self, fmt: str) -> bytes:
        """Render an image format ('svg', 'jpeg', 'png') as bytes."""
        fmt = normalize_format(fmt)
        if fmt == 'svg':
            return self.render_svg().encode('utf-8')
        return self.render_raster(fmt)

    def to_data_url(self, fmt: str = 'svg') -> str:
        """Render the layout as a base64 encoded data URL."""
        fmt = normalize_format(fmt)
        if fmt not in IMAGE_FORMATS:
            raise ValueError(f"Data URLs are only available for image formats: {', '.join(IMAGE_FORMATS)}")
        encoded = base64.b64encode(self.render(fmt)).decode('ascii')
        return f"data:{MIME_TYPES[fmt]};base64,{encoded}"

    def save(self, path: Path, fmt: str | None = None) -> Path:
        """
        Save the rendered layout to a file.

        Args:
            path: Output file path.
            fmt: Image format; inferred from the file suffix if omitted.

        Returns:
            Path: The written path.
        """
        path = Path(path)
        fmt = normalize_format(fmt if fmt else path.suffix.lstrip('.'))
        if fmt not in IMAGE_FORMATS:
            raise ValueError(f"Cannot save layout image as '{fmt}'")
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(self.render(fmt))
        logger.info(f"Saved layout image: {path}")
        return path

    def reset(self) -> None:
        """Discard any drawn figure."""
        if self.figure is not None:
            plt.close(self.figure)
            self.figure = None
