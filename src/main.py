"""EcoScore CLI - batch eco scoring for a list of domains."""

import argparse
import asyncio
import logging
import sys
from pathlib import Path

from config import settings
from errors import InputError
from runner.batch import process_domain_list

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ecoscore",
        description="Compute the Little Forest eco score for every domain in a file.",
    )
    parser.add_argument("--urls", required=True, help="File with one domain per line")
    parser.add_argument("--scoresfile", required=True, help="File the scores are appended to")
    return parser


def configure_logging() -> None:
    level = logging.DEBUG if settings.debug else getattr(logging, settings.log_level.upper(), logging.INFO)
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def main(argv: list[str] | None = None) -> int:
    """Entry point. Returns the process exit status."""
    args = build_parser().parse_args(argv)
    configure_logging()

    urls_path = Path(args.urls).resolve()
    scores_path = Path(args.scoresfile).resolve()

    logger.info(f"Starting {settings.app_name}...")
    try:
        asyncio.run(process_domain_list(urls_path, scores_path))
    except InputError as e:
        logger.error(str(e))
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
