"""Argument parser helpers for the CLI."""

from __future__ import annotations

import argparse
import logging
import time

from .. import __version__
from ..dns_records import RecordKind
from ..output import OUTPUT_CHOICES


def _setup_logging(verbosity: int) -> None:
    """Configure logging based on verbosity level.

    Args:
        verbosity (int): Verbosity count from CLI flags.
    """
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity >= 2:
        level = logging.DEBUG

    logging.Formatter.converter = time.gmtime  # UTC timestamps
    logging.basicConfig(
        level=level,
        format="%(asctime)sZ [%(levelname)s] %(name)s: %(message)s",
    )


def build_parser() -> argparse.ArgumentParser:
    """Build the CLI argument parser.

    Returns:
        argparse.ArgumentParser: Configured parser instance.
    """
    parser = argparse.ArgumentParser(
        description="Resolve a business name or domain and report on its infrastructure",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    target_group = parser.add_argument_group("Target")
    resolution_group = parser.add_argument_group("Resolution")
    report_group = parser.add_argument_group("Report")
    output_group = parser.add_argument_group("Output")
    logging_group = parser.add_argument_group("Logging")
    misc_group = parser.add_argument_group("Misc")

    target_group.add_argument(
        "target", nargs="?", help="Business name, partial domain, domain or URL"
    )
    resolution_group.add_argument(
        "--resolve-only",
        dest="resolve_only",
        action="store_true",
        help="Stop after resolving the domain",
    )
    resolution_group.add_argument(
        "--no-ai",
        dest="no_ai",
        action="store_true",
        help="Skip AI-assisted inference (no GROQ_API_KEY needed)",
    )
    resolution_group.add_argument(
        "--config",
        dest="config",
        metavar="PATH",
        default=None,
        help="Resolver settings YAML file (defaults to settings.yaml in config dirs)",
    )
    report_group.add_argument(
        "--skip-whois",
        dest="skip_whois",
        action="store_true",
        help="Skip the WHOIS lookup",
    )
    report_group.add_argument(
        "--record-type",
        dest="record_types",
        action="append",
        default=[],
        metavar="TYPE",
        help=(
            "DNS record type to gather (repeatable; "
            f"one of {', '.join(kind.value for kind in RecordKind)}; default MX, TXT, NS)"
        ),
    )
    report_group.add_argument(
        "--whois-file",
        dest="whois_file",
        metavar="PATH",
        default=None,
        help="Parse a saved WHOIS response and exit",
    )
    report_group.add_argument(
        "--providers-list",
        dest="providers_list",
        action="store_true",
        help="List fingerprint tables and their providers and exit",
    )
    output_group.add_argument(
        "--output",
        choices=list(OUTPUT_CHOICES),
        default="text",
        help="Output format",
    )
    logging_group.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Increase logging verbosity (-v info, -vv debug)",
    )
    misc_group.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
        help="Show version and exit",
    )
    return parser
