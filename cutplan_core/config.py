"""Configuration helpers shared across CLI and plotting layers."""

from __future__ import annotations

import logging
import re
from dataclasses import asdict, dataclass, fields, replace
from numbers import Real
from pathlib import Path

import yaml
from matplotlib.colors import is_color_like

from .constants import (
    ACTUAL_SIZE_RATIO,
    COLOR_SETTING_KEYS,
    DEFAULT_LAYOUT_SETTINGS,
    DEFAULT_RENDER_SETTINGS,
    DEFAULT_RUNTIME_PATHS,
    FORMAT_ALIASES,
    VALID_ORIENTATIONS,
    VALID_OUTPUT_FORMATS,
)
from .errors import InvalidConfigError

logger = logging.getLogger("cutplan")

_CSS_RGB_PATTERN = re.compile(
    r"^rgb\(\s*(\d{1,3})\s*,\s*(\d{1,3})\s*,\s*(\d{1,3})\s*\)$", re.IGNORECASE
)


def normalize_color(value: object) -> object:
    """Convert CSS ``rgb(r, g, b)`` strings to hex; return anything else unchanged."""
    if not isinstance(value, str):
        return value
    match = _CSS_RGB_PATTERN.match(value.strip())
    if not match:
        return value.strip()
    channels = [int(channel) for channel in match.groups()]
    if any(channel > 255 for channel in channels):
        return value
    return '#' + ''.join(f"{channel:02x}" for channel in channels)


def _is_positive_number(value: object) -> bool:
    return isinstance(value, Real) and not isinstance(value, bool) and value > 0


@dataclass(frozen=True)
class RenderConfig:
    """
    Colours, stroke, font and unit-scale settings used by renderers.

    Sizes are in source units; ``ratio`` converts one source unit into pixels.
    """

    paper_color: str = DEFAULT_RENDER_SETTINGS['paper_color']
    stroke_color: str = DEFAULT_RENDER_SETTINGS['stroke_color']
    text_color: str = DEFAULT_RENDER_SETTINGS['text_color']
    main_outer_color: str = DEFAULT_RENDER_SETTINGS['main_outer_color']
    main_inner_color: str = DEFAULT_RENDER_SETTINGS['main_inner_color']
    remain_outer_color: str = DEFAULT_RENDER_SETTINGS['remain_outer_color']
    remain_inner_color: str = DEFAULT_RENDER_SETTINGS['remain_inner_color']
    line_width: float = DEFAULT_RENDER_SETTINGS['line_width']
    font_size: float = DEFAULT_RENDER_SETTINGS['font_size']
    font_family: str = DEFAULT_RENDER_SETTINGS['font_family']
    ratio: float = DEFAULT_RENDER_SETTINGS['ratio']

    def __post_init__(self) -> None:
        for key in COLOR_SETTING_KEYS:
            object.__setattr__(self, key, normalize_color(getattr(self, key)))
        self.validate()

    def validate(self) -> None:
        """
        Check every setting.

        Raises:
            InvalidConfigError: On the first invalid setting.
        """
        if not _is_positive_number(self.line_width):
            raise InvalidConfigError("lineWidth must be positive number")
        for key in COLOR_SETTING_KEYS:
            value = getattr(self, key)
            if not isinstance(value, str) or not is_color_like(value):
                raise InvalidConfigError(f"{key} has invalid value '{value}'")
        if not isinstance(self.ratio, Real) or isinstance(self.ratio, bool):
            raise InvalidConfigError("invalid value! ratio must be a number")
        if self.ratio <= 0:
            raise InvalidConfigError("ratio must be positive number")
        if not _is_positive_number(self.font_size):
            raise InvalidConfigError("font_size must be positive number")
        if not isinstance(self.font_family, str) or not self.font_family.strip():
            raise InvalidConfigError("font_family must be a non-empty string")

    @property
    def exceeds_actual_size(self) -> bool:
        return self.ratio > ACTUAL_SIZE_RATIO

    def with_overrides(self, overrides: dict | None) -> RenderConfig:
        """
        Return a new config with known keys replaced.

        Unknown keys are ignored with a warning.

        Raises:
            InvalidConfigError: If overrides is not a mapping or a value is invalid.
        """
        if not overrides:
            return self
        if not isinstance(overrides, dict):
            raise InvalidConfigError("render settings must be a mapping")

        known = {field.name for field in fields(self)}
        updates = {}
        for key, value in overrides.items():
            if key in known:
                updates[key] = value
            else:
                logger.warning(f"Ignoring unknown render setting '{key}'")

        config = replace(self, **updates)
        if config.exceeds_actual_size:
            logger.warning(
                "Generated layout exceeds the actual size (px to cm); "
                f"rendering performance will be impacted due to high ratio (> {ACTUAL_SIZE_RATIO})."
            )
        return config

    def to_dict(self) -> dict:
        return asdict(self)


def normalize_format(fmt: str) -> str:
    """Resolve format aliases ('jpg', 'yml') and validate the result."""
    if not isinstance(fmt, str) or not fmt.strip():
        raise ValueError("Output format must be a non-empty string")
    canonical = FORMAT_ALIASES.get(fmt.strip().lower(), fmt.strip().lower())
    if canonical not in VALID_OUTPUT_FORMATS:
        allowed = ', '.join(VALID_OUTPUT_FORMATS)
        raise ValueError(f"Unknown output format '{fmt}'. Use one of: {allowed}.")
    return canonical


def _load_yaml(config_file: Path) -> dict:
    with open(config_file, 'r') as f:
        config = yaml.safe_load(f) or {}
    if not isinstance(config, dict):
        raise ValueError(f"Invalid configuration in {config_file}; expected mapping.")
    return config


def _parse_pair(value: object, label: str) -> tuple[float, float]:
    if isinstance(value, dict):
        value = (value.get('width'), value.get('height'))
    if not isinstance(value, (list, tuple)) or len(value) != 2:
        raise ValueError(f"{label} must be a [width, height] pair or a width/height mapping")
    width, height = value
    if not all(isinstance(v, Real) and not isinstance(v, bool) for v in (width, height)):
        raise ValueError(f"{label} values must be numbers")
    return (float(width), float(height))


class CoreConfigService:
    """Stateful access wrapper for core config helpers."""

    def __init__(self, config_file: Path = Path("config.yaml")) -> None:
        self.config_file = config_file

    def load_render_config(self) -> RenderConfig:
        config = _load_yaml(self.config_file)
        render = config.get('render', {})
        if render is None:
            render = {}
        if not isinstance(render, dict):
            raise InvalidConfigError(f"Invalid render section in {self.config_file}; expected mapping.")
        return RenderConfig().with_overrides(render)

    def load_runtime_paths(self) -> dict[str, str]:
        return load_runtime_paths(self.config_file)

    def load_layout_defaults(self) -> dict[str, object]:
        return load_layout_defaults(self.config_file)


def load_runtime_paths(config_file: Path = Path("config.yaml")) -> dict[str, str]:
    """Load runtime path defaults from config YAML.

    Paths are read from top-level ``runtime_paths`` and merged with minimal
    defaults when keys are missing.
    """
    paths = DEFAULT_RUNTIME_PATHS.copy()
    config = _load_yaml(config_file)

    runtime_paths = config.get('runtime_paths', {})
    if not isinstance(runtime_paths, dict):
        raise ValueError(f"Invalid runtime_paths section in {config_file}; expected mapping.")

    for key in DEFAULT_RUNTIME_PATHS:
        if key in runtime_paths:
            value = runtime_paths[key]
            if not isinstance(value, str) or not value.strip():
                raise ValueError(f"runtime_paths.{key} must be a non-empty string")
            paths[key] = value.strip()

    return paths


def load_layout_defaults(config_file: Path = Path("config.yaml")) -> dict[str, object]:
    """Load default margin, orientation and output formats from the ``defaults`` section."""
    settings = dict(DEFAULT_LAYOUT_SETTINGS)
    config = _load_yaml(config_file)

    defaults = config.get('defaults', {})
    if not isinstance(defaults, dict):
        raise ValueError(f"Invalid defaults section in {config_file}; expected mapping.")

    if 'margin' in defaults:
        settings['margin'] = _parse_pair(defaults['margin'], 'defaults.margin')

    if 'orientation' in defaults:
        orientation = defaults['orientation']
        if orientation not in VALID_ORIENTATIONS:
            allowed = ', '.join(VALID_ORIENTATIONS)
            raise ValueError(
                f"Invalid defaults.orientation '{orientation}' in {config_file}. Use one of: {allowed}."
            )
        settings['orientation'] = orientation

    if 'formats' in defaults:
        formats = defaults['formats']
        if isinstance(formats, str):
            formats = [formats]
        if not isinstance(formats, (list, tuple)) or not formats:
            raise ValueError("defaults.formats must be a non-empty list of output formats")
        settings['formats'] = tuple(normalize_format(fmt) for fmt in formats)

    return settings
