"""CLI argument parsing and main entry point."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

import grid_collage.config as gc_config
import grid_collage.main as gc_main
from grid_collage.config_defaults import (
    DEFAULT_GRID_SIZE,
    DEFAULT_MAX_COLLAGE_SIZE,
    DEFAULT_OUTPUT_PATH,
)
from grid_collage.constants import GRID_SIZE_MAX, GRID_SIZE_MIN
from grid_collage.errors import FailureKind
from grid_collage.image_grid.core import RESAMPLE_FILTERS
from grid_collage.logging_utils import logger, set_verbosity
from grid_collage.runtime.assembly import AssemblySucceeded
from grid_collage.runtime.version import resolve_project_version
from grid_collage.type_defs import GridCoordinate

EXIT_OK = 0
EXIT_FAILED = 1
EXIT_CANCELLED = 130


def build_arg_parser() -> argparse.ArgumentParser:
    """Construct the argument parser for the command-line interface."""
    p = argparse.ArgumentParser(
        prog="grid-collage",
        description="Assemble images into a square N x N collage",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "grid-collage --grid-size 2 --images a.jpg b.png c.jpg "
            "--output out.png\n"
            "grid-collage --grid-size 3 --cell 0,0=a.jpg --cell 2,2=b.jpg "
            "--output out.jpg --quality 90\n\n"
            "Note:\n"
            "  Cells are addressed as ROW,COL starting at 0. Cells without "
            "an image are left white."
        ),
    )
    p.add_argument(
        "--version", action="version",
        version=f"%(prog)s {resolve_project_version()}")

    inputs = p.add_argument_group("inputs")
    inputs.add_argument(
        "--images", nargs="+", type=Path, default=[], metavar="PATH",
        help="Images placed on the grid row by row, starting at 0,0")
    inputs.add_argument(
        "--cell", action="append", default=[], metavar="ROW,COL=PATH",
        help="Place one image on an explicit cell (repeatable)")
    inputs.add_argument(
        "--no-auto-orient", action="store_true",
        help="Ignore EXIF orientation tags when decoding")

    grid = p.add_argument_group("grid")
    grid.add_argument(
        "--grid-size", type=int,
        help=(f"Rows and columns of the grid, {GRID_SIZE_MIN}-"
              f"{GRID_SIZE_MAX} (default: {DEFAULT_GRID_SIZE})"))
    grid.add_argument(
        "--max-size", type=int,
        help=("Largest allowed collage side in pixels (default: "
              f"{DEFAULT_MAX_COLLAGE_SIZE})"))
    grid.add_argument(
        "--resample", choices=list(RESAMPLE_FILTERS),
        help="Filter used to resize cells (default: bilinear)")

    output = p.add_argument_group("output")
    output.add_argument(
        "--output", type=str,
        help=f"Output image path (default: {DEFAULT_OUTPUT_PATH})")
    output.add_argument(
        "--format", type=str,
        help="Output format; inferred from the extension when omitted")
    output.add_argument(
        "--quality", type=int, help="JPEG/WebP quality 1-100")
    output.add_argument(
        "--lang", choices=["en", "ru"], help="Language of user messages")
    output.add_argument(
        "--no-progress", action="store_true",
        help="Do not draw a progress bar")

    cfg = p.add_argument_group("config")
    cfg.add_argument(
        "--config", type=str,
        help="Path to config.toml file")
    cfg.add_argument(
        "--validate-config-only", action="store_true",
        help="Validate config file and exit without building a collage")

    log = p.add_argument_group("logging")
    verbosity = log.add_mutually_exclusive_group()
    verbosity.add_argument(
        "-v", "--verbose", action="store_true", help="Log debug details")
    verbosity.add_argument(
        "-q", "--quiet", action="store_true", help="Only log warnings")

    return p


def parse_cell_argument(text: str) -> tuple[GridCoordinate, Path]:
    """Split ``ROW,COL=PATH`` into a coordinate and a path."""
    coord_text, sep, path_text = text.partition("=")
    if not sep or not path_text:
        msg = f"--cell expects ROW,COL=PATH, got {text!r}"
        raise ValueError(msg)
    return GridCoordinate.parse(coord_text), Path(path_text)


def collect_placements(
    args: argparse.Namespace,
    grid_size: int,
) -> dict[GridCoordinate, Path]:
    """
    Merge ``--images`` and ``--cell`` into one cell -> path mapping.

    ``--images`` fills cells row-major; an explicit ``--cell`` wins
    over a row-major entry on the same cell.
    """
    placements: dict[GridCoordinate, Path] = {}
    capacity = grid_size * grid_size
    if len(args.images) > capacity:
        logger.warning(
            "%d images given for %d cells; extra images ignored",
            len(args.images), capacity,
        )
    for index, path in enumerate(args.images[:capacity]):
        placements[GridCoordinate(*divmod(index, grid_size))] = path
    for text in args.cell:
        coord, path = parse_cell_argument(text)
        placements[coord] = path
    return placements


def log_parameters(
    cfg: gc_config.CollageConfig,
    placements: dict[GridCoordinate, Path],
    args: argparse.Namespace,
) -> None:
    """Log all user-provided parameters."""
    if getattr(args, "config", None):
        logger.info("Loaded config from: %s", args.config)
    logger.info("Grid: %dx%d", cfg.grid.size, cfg.grid.size)
    logger.info("Max Collage Size: %dpx", cfg.grid.max_collage_size)
    logger.info("Resample Filter: %s", cfg.grid.resample)
    logger.info("Output: %s", cfg.output.output)
    logger.info("Format: %s", cfg.output.format or "(from extension)")
    logger.info("Quality: %d", cfg.output.quality)
    logger.info("Images: %d", len(placements))


def run_from_args(args: argparse.Namespace) -> int:
    """Build a collage from parsed arguments and return the exit status."""
    set_verbosity(verbose=args.verbose, quiet=args.quiet)

    base_cfg: gc_config.CollageConfig | None = None
    if args.config:
        base_cfg = gc_config.ConfigLoader.load(args.config)
        if args.validate_config_only:
            logger.info("Config %s validated successfully.", args.config)
            return EXIT_OK

    cfg = gc_config.build_config_from_cli(vars(args), base_config=base_cfg)
    placements = collect_placements(args, cfg.grid.size)
    log_parameters(cfg, placements, args)

    outcome = gc_main.create_collage(
        placements,
        cfg,
        progress_bar=_SilentProgress() if args.no_progress else None,
    )

    if isinstance(outcome, AssemblySucceeded):
        logger.info("%s", outcome.message)
        return EXIT_OK
    if outcome.kind is FailureKind.CANCELLED:
        logger.warning("%s", outcome.reason)
        return EXIT_CANCELLED
    if outcome.detail:
        logger.error("%s (%s)", outcome.reason, outcome.detail)
    else:
        logger.error("%s", outcome.reason)
    return EXIT_FAILED


class _SilentProgress:
    """Progress sink used with --no-progress."""

    def update(self, n: float | None = 1) -> bool | None:  # noqa: ARG002
        return None

    def close(self) -> None:
        return None


def main(argv: list[str] | None = None) -> None:
    """Run the command-line interface for collage assembly."""
    arg_parser = build_arg_parser()
    args = arg_parser.parse_args(argv)
    if args.validate_config_only and not args.config:
        arg_parser.error("--validate-config-only requires --config")
    if not args.validate_config_only and not (args.images or args.cell):
        arg_parser.error("at least one of --images or --cell is required")
    for text in args.cell:
        try:
            parse_cell_argument(text)
        except ValueError as exc:
            arg_parser.error(str(exc))

    sys.exit(run_from_args(args))


if __name__ == "__main__":  # pragma: no cover
    main()
