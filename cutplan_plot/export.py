"""Plain data export of calculated layouts (CSV via pandas, YAML via PyYAML)."""

from __future__ import annotations

import logging
from pathlib import Path

import pandas as pd
import yaml

from cutplan_core.geometry import LayoutResult

logger = logging.getLogger("cutplan")

PLACEMENT_COLUMNS = [
    'number',
    'section',
    'row',
    'column',
    'inner_x',
    'inner_y',
    'inner_width',
    'inner_height',
    'outer_x',
    'outer_y',
    'outer_width',
    'outer_height',
]


def placements_to_frame(result: LayoutResult) -> pd.DataFrame:
    """
    Flatten layout placements into a DataFrame, one row per placement.

    Rows follow the rendered numbering (main placements first).
    """
    records = []
    for number, section, placement in result.numbered():
        records.append({
            'number': number,
            'section': section,
            'row': placement.grid.row,
            'column': placement.grid.column,
            'inner_x': placement.inner.x,
            'inner_y': placement.inner.y,
            'inner_width': placement.inner.width,
            'inner_height': placement.inner.height,
            'outer_x': placement.outer.x,
            'outer_y': placement.outer.y,
            'outer_width': placement.outer.width,
            'outer_height': placement.outer.height,
        })
    return pd.DataFrame.from_records(records, columns=PLACEMENT_COLUMNS)


def export_csv(result: LayoutResult, path: Path) -> Path:
    """Write placements to a CSV file."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    placements_to_frame(result).to_csv(path, index=False)
    logger.info(f"Saved layout CSV: {path}")
    return path


def export_yaml(result: LayoutResult, path: Path) -> Path:
    """Write the full layout result to a YAML file."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, 'w', encoding='utf-8') as f:
        yaml.safe_dump(result.to_dict(), f, sort_keys=False)
    logger.info(f"Saved layout YAML: {path}")
    return path
