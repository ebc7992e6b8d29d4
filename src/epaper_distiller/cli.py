"""Command-line interface for epaper-distiller."""

import argparse
import logging
import os
import re
import sys
from pathlib import Path

from epaper_distiller import __version__
from epaper_distiller.aggregators import IssueAggregator
from epaper_distiller.clients import DEFAULT_BASE_URL, EPaperClient

DEFAULT_OUTPUT_DIR = Path(".")

EDITION_VARIABLE = "AZAN_AUSGABE"
USER_VARIABLE = "AZAN_USER"
PASSWORD_VARIABLE = "AZAN_PASS"

DATE_PATTERN = re.compile(r"^(?:latest|\d{8})$")


def setup_logging(verbose: bool = False) -> None:
    """Configure logging for the CLI."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(levelname)s: %(message)s",
    )


def issue_date(value: str) -> str:
    """Argument type for issue dates: "latest" or YYYYMMDD."""
    if not DATE_PATTERN.match(value):
        raise argparse.ArgumentTypeError(
            f"invalid date {value!r}, expected 'latest' or YYYYMMDD"
        )
    return value


def client_config(base_url: str) -> dict:
    return {
        "base_url": base_url,
        "headers": {
            "User-Agent": f"epaper-distiller/{__version__}",
            "Accept": "application/json",
        },
    }


def build_epub(args: argparse.Namespace) -> int:
    """Execute the build command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 for success, non-zero for errors)
    """
    setup_logging(args.verbose)
    logger = logging.getLogger(__name__)

    edition = args.edition or os.environ.get(EDITION_VARIABLE)
    if not edition:
        logger.error(f"No edition given; use --edition or set {EDITION_VARIABLE}")
        return 1

    username = os.environ.get(USER_VARIABLE, "")
    password = os.environ.get(PASSWORD_VARIABLE, "")
    if not username or not password:
        logger.error(f"Credentials missing; set {USER_VARIABLE} and {PASSWORD_VARIABLE}")
        return 1

    output_dir = args.output
    output_dir.mkdir(parents=True, exist_ok=True)

    try:
        with EPaperClient(client_config(args.base_url)) as client:
            client.login(edition, username, password)
            aggregator = IssueAggregator(output_dir, client)
            for wanted_date in args.dates or ["latest"]:
                build = aggregator.create_epub(wanted_date)

                logger.info(f"Created EPUB: {build.path}")
                logger.info(f"  Title: {build.package.title}")
                logger.info(f"  Spine entries: {len(build.package.spine)}")
                if build.missing_pictures:
                    logger.warning(f"  Missing pictures: {len(build.missing_pictures)}")
                if build.unlinked_articles:
                    logger.info(f"  Unlinked articles: {len(build.unlinked_articles)}")

        return 0

    except Exception as e:
        logger.error(f"Failed to create EPUB: {e}")
        return 1


def list_editions(args: argparse.Namespace) -> int:
    """Execute the editions command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 for success, non-zero for errors)
    """
    setup_logging(args.verbose)
    logger = logging.getLogger(__name__)

    try:
        with EPaperClient(client_config(args.base_url)) as client:
            editions = client.site_info.editions
    except Exception as e:
        logger.error(f"Failed to load editions: {e}")
        return 1

    for code, title in sorted(editions.items(), key=lambda item: item[1]):
        print(f"{code:<6}: {title}")
    return 0


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the CLI.

    Args:
        argv: Command-line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code
    """
    parser = argparse.ArgumentParser(
        prog="epaper-distiller",
        description="Convert ePaper newspaper issues into EPUB files",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable verbose output",
    )

    subparsers = parser.add_subparsers(
        title="commands",
        description="Available commands",
        dest="command",
    )

    build_parser = subparsers.add_parser(
        "build",
        help="Download issues and write them as EPUB files",
        description=(
            "Log in, download the issues for the given dates and write one "
            f"EPUB per issue. Credentials are read from ${USER_VARIABLE} and "
            f"${PASSWORD_VARIABLE}."
        ),
    )
    build_parser.add_argument(
        "dates",
        nargs="*",
        type=issue_date,
        metavar="DATE",
        help="'latest' or YYYYMMDD (default: latest)",
    )
    build_parser.add_argument(
        "--edition",
        type=str,
        default=None,
        help=f"Edition code or title (default: ${EDITION_VARIABLE})",
    )
    build_parser.add_argument(
        "--output",
        type=Path,
        default=DEFAULT_OUTPUT_DIR,
        help=f"Output directory for EPUB files (default: {DEFAULT_OUTPUT_DIR})",
    )
    build_parser.add_argument(
        "--base-url",
        type=str,
        default=DEFAULT_BASE_URL,
        help=f"ePaper base URL (default: {DEFAULT_BASE_URL})",
    )
    build_parser.set_defaults(func=build_epub)

    editions_parser = subparsers.add_parser(
        "editions",
        help="List the available editions",
        description="List edition codes and titles known to the ePaper site.",
    )
    editions_parser.add_argument(
        "--base-url",
        type=str,
        default=DEFAULT_BASE_URL,
        help=f"ePaper base URL (default: {DEFAULT_BASE_URL})",
    )
    editions_parser.set_defaults(func=list_editions)

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 0

    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
