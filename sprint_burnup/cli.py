"""
Command line entry point for Sprint Burn-Up Board.

Run with: python -m sprint_burnup [--config PATH] [--dry-run]
"""

import argparse
import asyncio
import logging
import sys
from typing import Optional

from .config import DEFAULT_CONFIG_PATH, Config
from .exceptions import APIError, BurnupError
from .pipeline import BurnupPipeline

logger = logging.getLogger("sprint_burnup")


def setup_logging(verbose: bool = False) -> None:
    """Configure application logging."""
    # Format: timestamp - level - logger name - message
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s | %(levelname)-7s | %(name)s | %(message)s",
        datefmt="%H:%M:%S",
        stream=sys.stdout,
        force=True,
    )

    # Reduce noise from third-party libraries
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sprint-burnup",
        description="Draw a Jira sprint burn-up table and chart on a Miro board."
    )
    parser.add_argument(
        "--config",
        default=DEFAULT_CONFIG_PATH,
        help=f"yaml config file (default: {DEFAULT_CONFIG_PATH})"
    )
    parser.add_argument(
        "--closed-sprints",
        type=int,
        help="number of closed sprints to show before the active one (default: 4)"
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="print the table and chart URL without writing to Miro"
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    return parser


async def run(config: Config, dry_run: bool = False) -> int:
    """Run the pipeline once. Every failure is logged here, exactly once."""
    try:
        config.require()
        pipeline = BurnupPipeline.from_config(config)
        result = await pipeline.run(dry_run=dry_run)
    except APIError as e:
        logger.error("Error: %s", e.detail)
        return 1
    except BurnupError as e:
        logger.error("Error: %s", e)
        return 1

    print(result.table.to_text())
    if dry_run:
        print(f"\nChart: {result.chart_url}")
    else:
        logger.info(
            "Burn-up board updated: %d shapes, chart image %s",
            len(result.shapes), result.image.get("id")
        )
    return 0


def main(argv: Optional[list[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(args.verbose)

    try:
        config = Config(args.config)
    except BurnupError as e:
        logger.error("Error: %s", e)
        return 1

    if args.closed_sprints is not None:
        config.set("report", "closed_sprints", args.closed_sprints)

    return asyncio.run(run(config, dry_run=args.dry_run))
