"""Command-line entry point for clean-scaffold."""

import argparse
import sys
from typing import List, Optional

from . import __version__
from .cli import create_feature_subparser
from .codegen.cli_integration import create_model_subparser
from .logging_config import get_logger, setup_logging

logger = get_logger(__name__)


def create_parser() -> argparse.ArgumentParser:
    """Build the top-level argument parser."""
    parser = argparse.ArgumentParser(
        prog="clean-scaffold",
        description="Scaffold Flutter clean-architecture features from sample JSON payloads",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        type=str.upper,
        help="Console log level (default: WARNING)",
    )
    parser.add_argument("--log-file", help="Also write a DEBUG log to this file")

    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")
    create_feature_subparser(subparsers)
    create_model_subparser(subparsers)
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Run the CLI and return an exit code."""
    parser = create_parser()
    args = parser.parse_args(argv)

    setup_logging(args.log_level, args.log_file)
    logger.debug("Parsed arguments: %s", args)

    if not getattr(args, "func", None):
        parser.print_help()
        return 1

    try:
        return args.func(args)
    except KeyboardInterrupt:
        logger.warning("Interrupted")
        return 1


if __name__ == "__main__":
    sys.exit(main())
