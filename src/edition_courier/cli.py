"""Command-line interface for edition-courier."""

import argparse
import logging
import sys
from datetime import date
from pathlib import Path

from edition_courier.config import CourierConfig, load_env_file
from edition_courier.exceptions import ConfigError, MergeError
from edition_courier.pipeline.orchestrator import Orchestrator

BANNER_WIDTH = 50


def setup_logging(verbose: bool = False) -> None:
    """Configure logging for the CLI."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s: %(message)s",
    )


def run_edition(args: argparse.Namespace) -> int:
    """Acquire, merge and distribute one edition.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 for success, non-zero for errors)
    """
    setup_logging(args.verbose)
    logger = logging.getLogger(__name__)

    load_env_file(args.env_file)
    try:
        config = CourierConfig.from_env(
            output_dir=args.output,
            headless=False if args.headed else None,
        )
    except ConfigError as e:
        logger.error(str(e))
        return 1

    edition_date = args.date or date.today()

    logger.info("=" * BANNER_WIDTH)
    logger.info("Newspaper PDF Downloader and Merger")
    logger.info("=" * BANNER_WIDTH)

    try:
        orchestrator = Orchestrator(config)
        outcome = orchestrator.run(edition_date)
    except MergeError as e:
        if e.page_index is None:
            logger.error(
                f"Process failed: no usable pages were exported for {edition_date}; "
                "nothing was merged or sent"
            )
        else:
            logger.error(f"Process failed: export of page {e.page_index} is corrupt: {e}")
        return 1
    except Exception as e:
        logger.error(f"Process failed: {e}")
        return 1

    if not outcome.is_success:
        return 1

    logger.info("All tasks completed successfully!")
    logger.info("=" * BANNER_WIDTH)
    return 0


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the CLI.

    Args:
        argv: Command-line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code
    """
    parser = argparse.ArgumentParser(
        prog="edition-courier",
        description=(
            "Download every page of the day's newspaper edition from its "
            "page-flip viewer, merge them into one PDF and share it to Slack."
        ),
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable verbose output",
    )
    parser.add_argument(
        "--date",
        type=date.fromisoformat,
        default=None,
        help="Edition date (ISO format: YYYY-MM-DD, default: today)",
    )
    parser.add_argument(
        "--output",
        type=Path,
        default=None,
        help="Directory for downloaded and merged PDFs (default: ./downloads)",
    )
    parser.add_argument(
        "--env-file",
        type=Path,
        default=None,
        help="Path to a .env file (default: search from the working directory)",
    )
    parser.add_argument(
        "--headed",
        action="store_true",
        help="Show the browser window instead of running headless",
    )
    parser.set_defaults(func=run_edition)

    args = parser.parse_args(argv)
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
