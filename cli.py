"""
CLI and configuration utilities for cutplan.

Handles command-line argument parsing and conversion of CLI values into
layout inputs.
"""

from __future__ import annotations

import argparse
import difflib
import logging
import math
import sys
from pathlib import Path

import yaml

from cutplan_core.config import (
    CoreConfigService,
    RenderConfig,
    load_layout_defaults as core_load_layout_defaults,
    load_runtime_paths as core_load_runtime_paths,
    normalize_format,
)
from cutplan_core.constants import (
    DEFAULT_LAYOUT_SETTINGS,
    DEFAULT_RUNTIME_PATHS,
    FORMAT_ALIASES,
    IMAGE_FORMATS,
    VALID_ORIENTATIONS,
    VALID_OUTPUT_FORMATS,
)
from cutplan_core.errors import InvalidConfigError
from cutplan_core.geometry import Size

logger = logging.getLogger("cutplan")

__version__ = "1.0.0"
DEFAULT_CONFIG_PATH = Path("config.yaml")
FORMAT_CHOICES = tuple(VALID_OUTPUT_FORMATS) + tuple(FORMAT_ALIASES.keys())


class CLIError(ValueError):
    """User-facing CLI validation error with optional hint text."""

    def __init__(self, message: str, hint: str | None = None):
        self.message = message
        self.hint = hint
        super().__init__(self.__str__())

    def __str__(self) -> str:
        if self.hint:
            return f"{self.message}\nHint: {self.hint}"
        return self.message


class FriendlyArgumentParser(argparse.ArgumentParser):
    """ArgumentParser that raises CLIError instead of exiting immediately."""

    def error(self, message: str) -> None:
        hint = None
        if "--source" in message or "--target" in message:
            hint = "Give both sizes as WIDTHxHEIGHT (for example: --source 79x109 --target 22x32)."
        elif "unrecognized arguments" in message and "--orientation" in message:
            hint = "Use --cross (or --inline) to choose the orientation."
        usage = self.format_usage().strip()
        raise CLIError(f"Argument error: {message}\n{usage}", hint=hint)


def _suggest_values(value: str, options: list[str], max_suggestions: int = 5) -> str | None:
    """Return a short suggestion string from close matches."""
    matches = difflib.get_close_matches(value, options, n=max_suggestions, cutoff=0.5)
    if not matches:
        return None
    return ", ".join(matches)


def _resolve_config_path(argv: list[str] | None = None) -> Path | None:
    """
    Resolve the config file from a CLI pre-parse.

    A missing default config.yaml means built-in defaults are used; a missing
    file passed explicitly with --config is an error.
    """
    config_probe = argparse.ArgumentParser(add_help=False)
    config_probe.add_argument("--config", type=Path, default=None)
    probe_args, _ = config_probe.parse_known_args(argv)

    if probe_args.config is None:
        return DEFAULT_CONFIG_PATH if DEFAULT_CONFIG_PATH.exists() else None
    if not probe_args.config.exists():
        raise CLIError(
            f"Config file not found: {probe_args.config}",
            "Provide a valid --config path, or omit it to use built-in defaults.",
        )
    return probe_args.config


def _resolve_runtime_path_defaults(argv: list[str] | None = None) -> tuple[Path | None, dict[str, str]]:
    """Resolve config path and runtime path defaults from CLI pre-parse."""
    args_to_check = sys.argv[1:] if argv is None else argv
    if "--help" in args_to_check or "-h" in args_to_check:
        return None, DEFAULT_RUNTIME_PATHS.copy()

    config_path = _resolve_config_path(argv)
    if config_path is None:
        return None, DEFAULT_RUNTIME_PATHS.copy()

    try:
        runtime_paths = core_load_runtime_paths(config_path)
    except (ValueError, OSError, yaml.YAMLError) as exc:
        raise CLIError(
            f"Failed to load runtime_paths from {config_path}: {exc}",
            "Fix config.yaml runtime_paths values or provide a valid --config path.",
        )

    return config_path, runtime_paths


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """
    Parse command-line arguments for cutplan.

    Args:
        argv: Argument list (defaults to sys.argv[1:]).

    Returns:
        argparse.Namespace: Parsed command-line arguments.
    """
    config_path_default, runtime_paths = _resolve_runtime_path_defaults(argv)

    parser = FriendlyArgumentParser(
        prog="cutplan",
        description="Calculate how many target rectangles can be cut from a source sheet.",
        epilog="""
Examples:
  %(prog)s --source 79x109 --target 22x32                  # Inline layout, SVG output
  %(prog)s --source 79x109 --target 22x32 --margin 2x3     # With margin around each piece
  %(prog)s --source 65x100 --target 43x12 --cross          # Rotated main grid
  %(prog)s --source 79x109 --target 22x32 --format svg,png,csv
  %(prog)s --source 79x109 --target 22x32 --data-url svg   # Print a data URL
        """,
        formatter_class=argparse.RawDescriptionHelpFormatter
    )

    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    # Layout dimensions
    size_group = parser.add_argument_group("layout dimensions")
    size_group.add_argument(
        "-s", "--source",
        type=str,
        required=True,
        help="Source sheet size as WIDTHxHEIGHT (e.g., 79x109)"
    )
    size_group.add_argument(
        "-t", "--target",
        type=str,
        required=True,
        help="Target piece size as WIDTHxHEIGHT (e.g., 22x32)"
    )
    size_group.add_argument(
        "-m", "--margin",
        type=str,
        default=None,
        help="Margin around each piece as WIDTHxHEIGHT (default: from config, else 0x0)"
    )

    orientation_group = size_group.add_mutually_exclusive_group()
    orientation_group.add_argument(
        "--cross",
        dest="orientation",
        action="store_const",
        const="cross",
        default=None,
        help="Rotate the target for the main grid"
    )
    orientation_group.add_argument(
        "--inline",
        dest="orientation",
        action="store_const",
        const="inline",
        help="Keep the target unrotated for the main grid (default)"
    )

    # Output options
    output_group = parser.add_argument_group("output options")
    output_group.add_argument(
        "-f", "--format",
        type=str,
        default=None,
        help=(
            "Comma-separated output formats: "
            f"{', '.join(VALID_OUTPUT_FORMATS)} (default: from config, else svg)"
        )
    )
    output_group.add_argument(
        "--out-dir",
        type=Path,
        default=Path(runtime_paths["out_dir"]),
        help=f"Output directory for layout files (default: {runtime_paths['out_dir']})"
    )
    output_group.add_argument(
        "--config",
        type=Path,
        default=config_path_default,
        help=f"Path to config YAML file (default: {DEFAULT_CONFIG_PATH} if present)"
    )
    output_group.add_argument(
        "--data-url",
        type=str,
        default=None,
        metavar="FMT",
        help=f"Also print the layout as a base64 data URL ({', '.join(IMAGE_FORMATS)})"
    )

    # Advanced options
    advanced_group = parser.add_argument_group("advanced options")
    advanced_group.add_argument(
        "--dry-run",
        action="store_true",
        help="Preview the resolved inputs without calculating or writing files"
    )
    advanced_group.add_argument(
        "-q", "--quiet",
        action="store_true",
        help="Suppress console output except errors (log file unaffected)"
    )
    advanced_group.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable verbose console output (DEBUG level, log file always at DEBUG)"
    )

    return parser.parse_args(argv)


def _parse_number(text: str) -> float:
    try:
        return int(text)
    except ValueError:
        value = float(text)
    if not math.isfinite(value):
        raise ValueError()
    return value


def parse_size(size_str: str | None, option: str = "--source") -> Size:
    """
    Parse a size string into a Size.

    Args:
        size_str: Size in format "WIDTHxHEIGHT" (e.g., "79x109" or "2.5x3").
        option: Option name used in error messages.

    Returns:
        Size: Parsed width and height.

    Raises:
        CLIError: If the size format is invalid.
    """
    if not size_str:
        raise CLIError(
            f"{option} value cannot be empty.",
            f"Use WIDTHxHEIGHT (e.g., {option} 79x109)."
        )

    parts = size_str.strip().lower().split('x')
    try:
        if len(parts) != 2:
            raise ValueError()
        width = _parse_number(parts[0].strip())  # X = horizontal = width
        height = _parse_number(parts[1].strip())  # Y = vertical = height
    except ValueError:
        raise CLIError(
            f"Invalid {option} format '{size_str}'.",
            f"Use WIDTHxHEIGHT with numbers (e.g., {option} 79x109 or {option} 2.5x3)."
        )
    return Size(width, height)


def parse_formats(formats_str: str | None, default: tuple[str, ...] | list[str] = ('svg',)) -> list[str]:
    """
    Parse comma-separated output formats into canonical format names.

    Aliases ('jpg', 'yml') are resolved and duplicates dropped, keeping the
    order of first appearance.

    Raises:
        CLIError: On an empty selection or an unknown format.
    """
    if formats_str is None:
        return list(default)

    raw_items = [item.strip().lower() for item in formats_str.split(",") if item.strip()]
    if not raw_items:
        raise CLIError(
            "Format value cannot be empty.",
            "Use --format svg, --format png, or a comma-separated list such as --format svg,csv.",
        )

    resolved: list[str] = []
    for item in raw_items:
        try:
            canonical = normalize_format(item)
        except ValueError:
            suggestions = _suggest_values(item, list(FORMAT_CHOICES))
            hint = f"Allowed values: {', '.join(VALID_OUTPUT_FORMATS)}."
            if suggestions:
                hint = f"Did you mean one of: {suggestions}?"
            raise CLIError(f"Unknown output format '{item}'.", hint)
        if canonical not in resolved:
            resolved.append(canonical)

    return resolved


def parse_data_url_format(fmt: str | None) -> str | None:
    """Validate the --data-url format; only image formats can be embedded."""
    if fmt is None:
        return None
    try:
        canonical = normalize_format(fmt)
    except ValueError:
        canonical = None
    if canonical not in IMAGE_FORMATS:
        raise CLIError(
            f"Invalid --data-url format '{fmt}'.",
            f"Allowed values: {', '.join(IMAGE_FORMATS)}."
        )
    return canonical


def resolve_orientation(cli_orientation: str | None, defaults: dict) -> str:
    """
    Resolve the orientation from CLI override or config defaults.

    Priority:
    1. --cross / --inline (if provided)
    2. config.yaml defaults.orientation
    3. "inline"
    """
    orientation = cli_orientation or defaults.get('orientation', DEFAULT_LAYOUT_SETTINGS['orientation'])
    if orientation not in VALID_ORIENTATIONS:
        raise CLIError(
            f"Invalid orientation '{orientation}'.",
            f"Allowed values: {', '.join(VALID_ORIENTATIONS)}."
        )
    return orientation


def load_layout_defaults(config_file: Path | None) -> dict[str, object]:
    """
    Load default margin, orientation and formats from config YAML.

    Args:
        config_file: Path to config YAML file, or None for built-in defaults.

    Returns:
        dict: Layout defaults.
    """
    if config_file is None:
        return dict(DEFAULT_LAYOUT_SETTINGS)
    try:
        return core_load_layout_defaults(config_file)
    except (ValueError, OSError, yaml.YAMLError) as exc:
        raise CLIError(str(exc)) from exc


def load_render_config(config_file: Path | None) -> RenderConfig:
    """
    Load render settings from the config ``render`` section.

    Args:
        config_file: Path to config YAML file, or None for built-in defaults.

    Returns:
        RenderConfig: Validated render settings.

    Raises:
        CLIError: If the render section is invalid.
    """
    if config_file is None:
        return RenderConfig()
    try:
        return CoreConfigService(config_file).load_render_config()
    except InvalidConfigError as exc:
        raise CLIError(
            f"Invalid render settings in {config_file}: {exc}",
            "Fix the render section of config.yaml."
        ) from exc
    except (ValueError, OSError, yaml.YAMLError) as exc:
        raise CLIError(str(exc)) from exc
