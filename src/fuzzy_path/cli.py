"""Command line for normalizing and comparing paths."""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

from .config import ConfigLoader, FuzzyPathConfig
from .errors import ConfigError
from .fuzzy_path import FuzzyPath
from .logging import LogContext, setup_logging

# Application name derived from package name
_package = __package__ or "fuzzy_path"
APP_NAME = _package.replace('_', '-').replace('.', '-')

EXIT_EQUAL = 0
EXIT_DIFFERENT = 1
EXIT_CONFIG_ERROR = 2


def normalize_command(config: FuzzyPathConfig, paths: List[str]) -> int:
    """Print the normalized form of each path.

    Returns:
        Exit code (always 0)
    """
    logger = logging.getLogger(__package__ or __name__)

    results = [FuzzyPath(path) for path in paths]
    for raw, result in zip(paths, results):
        logger.debug(f"Normalized {raw!r} -> {result.as_str()!r}")

    if config.output.format == "json":
        print(json.dumps([str(result) for result in results], ensure_ascii=False))
    else:
        for result in results:
            print(result)

    return 0


def compare_command(config: FuzzyPathConfig, left: str, right: str) -> int:
    """Compare two paths after normalization.

    Returns:
        EXIT_EQUAL if both normalize to the same text, EXIT_DIFFERENT otherwise
    """
    logger = logging.getLogger(__package__ or __name__)

    left_path = FuzzyPath(left)
    right_path = FuzzyPath(right)
    equal = left_path == right_path
    logger.info(f"Compared {left_path.as_str()!r} with {right_path.as_str()!r}: equal={equal}")

    if config.output.format == "json":
        print(json.dumps(
            {"left": str(left_path), "right": str(right_path), "equal": equal},
            ensure_ascii=False,
        ))
    else:
        print("equal" if equal else "different")

    return EXIT_EQUAL if equal else EXIT_DIFFERENT


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog=APP_NAME,
        description="Normalize and compare paths ignoring case, slash direction and duplicate slashes"
    )
    parser.add_argument(
        "--config",
        type=Path,
        help="Path to config file (defaults.toml)"
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print results as JSON (overrides config)"
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        type=str.upper,
        help="Log level (overrides config)"
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    normalize_parser = subparsers.add_parser("normalize", help="Print normalized paths")
    normalize_parser.add_argument("paths", nargs="+", help="Paths to normalize")

    compare_parser = subparsers.add_parser(
        "compare", help="Exit 0 if two paths are fuzzy-equal, 1 otherwise"
    )
    compare_parser.add_argument("left", help="First path")
    compare_parser.add_argument("right", help="Second path")

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the fuzzy-path command."""
    args = build_parser().parse_args(argv)

    loader = ConfigLoader(app_name=APP_NAME, config_class=FuzzyPathConfig)
    try:
        config = loader.load(defaults_path=args.config)
    except ConfigError as e:
        setup_logging(level=args.log_level or "WARNING")
        logging.getLogger(__package__ or __name__).error(e.message)
        return EXIT_CONFIG_ERROR

    if args.json:
        config.output.format = "json"
    if args.log_level:
        config.logging.level = args.log_level

    setup_logging(
        level=config.logging.level,
        format=config.logging.format,
        log_file=Path(config.logging.file) if config.logging.file else None,
    )

    logger = logging.getLogger(__package__ or __name__)
    with LogContext(command=args.command):
        logger.debug(f"Output format: {config.output.format}")
        if args.command == "normalize":
            return normalize_command(config, args.paths)
        return compare_command(config, args.left, args.right)


if __name__ == "__main__":
    sys.exit(main())
