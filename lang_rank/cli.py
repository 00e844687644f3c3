"""Command line entry point: rank an owner's languages and write the SVG chart."""

import argparse
import logging
import sys
from typing import List, Optional

from lang_rank.application.language_service import LanguageRankService
from lang_rank.domain.errors import LangRankError
from lang_rank.infrastructure.config import DEFAULT_CONFIG_PATH, build_settings, load_config_file
from lang_rank.infrastructure.console_table import format_table
from lang_rank.infrastructure.github_client import GitHubRestClient
from lang_rank.infrastructure.svg_renderer import write_svg

logger = logging.getLogger(__name__)

_TRUE = {"1", "t", "true", "yes", "y", "on"}
_FALSE = {"0", "f", "false", "no", "n", "off"}


def parse_bool(value: str) -> bool:
    lowered = value.strip().lower()
    if lowered in _TRUE:
        return True
    if lowered in _FALSE:
        return False
    raise argparse.ArgumentTypeError(f"invalid bool: {value}")


def build_parser() -> argparse.ArgumentParser:
    """Flags that are not given stay out of the namespace entirely."""
    parser = argparse.ArgumentParser(
        prog="lang-rank",
        description="Rank the languages used across a GitHub owner's repositories and chart them as SVG",
        argument_default=argparse.SUPPRESS,
    )
    parser.add_argument("--config", default=DEFAULT_CONFIG_PATH, help="Path to config JSON")
    parser.add_argument("--username", help="GitHub username or org")
    parser.add_argument("--token", help="GitHub token (optional)")
    parser.add_argument("--output", help="Output path for SVG chart")
    for flag, help_text in (
        ("--include-forks", "Include forked repositories"),
        ("--include-archived", "Include archived repositories"),
        ("--org", "Treat username as an org"),
        ("--show-other", "Show aggregated Other bucket when top is used"),
    ):
        parser.add_argument(flag, nargs="?", const=True, type=parse_bool, metavar="BOOL", help=help_text)
    parser.add_argument("--exclude", help="Comma-separated languages to exclude")
    parser.add_argument("--top", type=int, help="Limit to top N languages (0 = all)")
    parser.add_argument("-v", "--verbose", action="store_true", default=False, help="Enable debug logging")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Run the pipeline once and return the process exit code."""
    args = vars(build_parser().parse_args(argv))
    config_path = args.pop("config")
    verbose = args.pop("verbose")

    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    try:
        settings = build_settings(load_config_file(config_path), args)
        if not settings.token:
            logger.warning("GITHUB_TOKEN not found. Using unauthenticated requests (limited rate).")

        with GitHubRestClient(token=settings.token) as github_client:
            service = LanguageRankService(github_client)
            ranking = service.rank(
                settings.username,
                org=settings.org,
                include_forks=settings.include_forks,
                include_archived=settings.include_archived,
                exclude=settings.exclude,
                top=settings.top,
                show_other=settings.show_other,
            )

        print(format_table(ranking.ranked))
        write_svg(settings.output, ranking.ranked, ranking.owner, ranking.excluded)
        return 0

    except (LangRankError, OSError) as e:
        logger.error(f"error: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
