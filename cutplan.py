"""
cutplan: cutting layout calculation and rendering.

Main entry point for the cutplan application. Validates sheet and piece
sizes, calculates the cutting layout, and writes it in the requested
output formats.
"""

import logging
import sys

import yaml

from cli import (
    CLIError,
    load_layout_defaults,
    load_render_config,
    parse_args,
    parse_data_url_format,
    parse_formats,
    parse_size,
    resolve_orientation,
)
from cutplan_core.errors import LayoutError
from cutplan_core.formatting import build_layout_report, format_size
from cutplan_core.geometry import Size
from cutplan_core.packer import calculate
from cutplan_plot.orchestrator import render_layout
from cutplan_plot.visualizer import LayoutVisualizer
from logging_config import setup_logging, get_logger


def _configure_console_logging(args, logger) -> None:
    """Apply console verbosity rules based on CLI flags."""
    cutplan_logger = logging.getLogger("cutplan")
    if args.verbose:
        for handler in cutplan_logger.handlers:
            if isinstance(handler, logging.StreamHandler) and not isinstance(handler, logging.FileHandler):
                handler.setLevel(logging.DEBUG)
        logger.debug("Verbose mode enabled (console output at DEBUG level)")
    elif args.quiet:
        for handler in cutplan_logger.handlers:
            if isinstance(handler, logging.StreamHandler) and not isinstance(handler, logging.FileHandler):
                handler.setLevel(logging.ERROR)
    elif args.dry_run:
        for handler in cutplan_logger.handlers:
            if isinstance(handler, logging.StreamHandler) and not isinstance(handler, logging.FileHandler):
                if handler.level > logging.INFO:
                    handler.setLevel(logging.INFO)


def _resolve_run_context(args):
    """Resolve parsed CLI options into validated run-time context values."""
    defaults = load_layout_defaults(args.config)
    source = parse_size(args.source, "--source")
    target = parse_size(args.target, "--target")
    if args.margin is not None:
        margin = parse_size(args.margin, "--margin")
    else:
        margin = Size(*defaults['margin'])
    return {
        'source': source,
        'target': target,
        'margin': margin,
        'orientation': resolve_orientation(args.orientation, defaults),
        'formats': parse_formats(args.format, defaults['formats']),
        'data_url': parse_data_url_format(args.data_url),
        'render_config': load_render_config(args.config),
    }


def _handle_dry_run(args, ctx, logger) -> int:
    """Render dry-run summary and exit early."""
    logger.info("DRY RUN MODE - No layout will be calculated or files written")
    logger.info(f"Source: {format_size(ctx['source'])}")
    logger.info(f"Target: {format_size(ctx['target'])}")
    logger.info(f"Margin: {format_size(ctx['margin'])}")
    logger.info(f"Orientation: {ctx['orientation']}")
    logger.info(f"Formats: {', '.join(ctx['formats'])}")
    logger.info(f"Data URL: {ctx['data_url'] if ctx['data_url'] else 'none'}")
    logger.info(f"Render ratio: {ctx['render_config'].ratio}")
    logger.info(f"Output directory: {args.out_dir}")
    logger.info(f"Config file: {args.config if args.config else 'built-in defaults'}")
    return 0


def _run_layout_pipeline(args, ctx, logger) -> int:
    """Calculate the layout, write output files and optionally print a data URL."""
    result = calculate(
        ctx['source'],
        ctx['target'],
        ctx['margin'],
        use_inline=(ctx['orientation'] == 'inline'),
    )
    report = build_layout_report(result)
    logger.debug(report)
    if not args.quiet:
        print(report)

    written = render_layout(
        result,
        ctx['target'],
        args.out_dir,
        ctx['formats'],
        render_config=ctx['render_config'],
    )
    for path in written:
        logger.debug(f"Wrote {path}")

    if ctx['data_url']:
        visualizer = LayoutVisualizer(result, ctx['render_config'])
        try:
            print(visualizer.to_data_url(ctx['data_url']))
        finally:
            visualizer.reset()
    return 0


def main(argv: list[str] | None = None) -> int:
    """
    Main entry point for cutplan.

    Parses command-line arguments, calculates the cutting layout and writes
    the requested outputs.

    Returns:
        int: 0 on success, 1 on a layout error, 2 on a CLI or config error.
    """
    try:
        args = parse_args(argv)
    except CLIError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 2

    # Initialize logging
    try:
        setup_logging(args.config)
    except (ValueError, OSError, yaml.YAMLError) as e:
        print(f"ERROR: Failed to configure logging: {e}", file=sys.stderr)
        return 2
    logger = get_logger("cutplan")  # Use explicit name, not __name__

    # Handle verbose/quiet flags for console output
    _configure_console_logging(args, logger)

    try:
        context = _resolve_run_context(args)
    except CLIError as e:
        logger.error(str(e))
        return 2

    # Dry-run mode: show what would be done without executing
    if args.dry_run:
        return _handle_dry_run(args, context, logger)

    try:
        return _run_layout_pipeline(args, context, logger)
    except LayoutError as e:
        logger.error(f"Layout error: {e}")
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
