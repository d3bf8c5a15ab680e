"""Command-line interface for the domain intelligence pipeline."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import List

from ..dns_records import DEFAULT_RECORD_KINDS, coerce_record_kind
from ..errors import ConfigurationError
from ..fingerprints import TABLE_NAMES, default_tables, list_providers
from ..output import serialize_provider_list, whois_to_json, whois_to_text
from ..registration import LineWhoisParser
from ..resolution import load_settings
from ..runner import PipelineRequest, run_pipeline
from ..status import ExitCodes
from .parser import _setup_logging, build_parser

LOGGER = logging.getLogger(__name__)

__all__ = ["_setup_logging", "build_parser", "main"]


def _list_fingerprints(output: str) -> str:
    """Render every fingerprint table as a listing.

    Args:
        output (str): Output format.

    Returns:
        str: Rendered listing.
    """
    tables = default_tables()
    rows = [
        (name, key, provider_name)
        for name in TABLE_NAMES
        for key, provider_name in list_providers(tables.table(name))
    ]
    if output == "json":
        return json.dumps(serialize_provider_list(rows), indent=2)
    table_width = max(len(name) for name in TABLE_NAMES)
    key_width = max([16, *(len(key) for _, key, _ in rows)])
    return "\n".join(
        f"{table.ljust(table_width)}  {key.ljust(key_width)}  {name}" for table, key, name in rows
    )


def main(argv: List[str] | None = None) -> int:
    """Run the CLI entrypoint.

    Args:
        argv (List[str] | None): Optional argument list for parsing.

    Returns:
        int: Exit code (0=resolved, 2=usage or configuration error, 3=no result).
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    _setup_logging(args.verbose)
    LOGGER.debug("Parsed arguments: %s", args)

    if args.providers_list:
        LOGGER.info("Listing fingerprint tables")
        try:
            print(_list_fingerprints(args.output))
        except ConfigurationError as exc:
            parser.error(str(exc))
        return ExitCodes.FOUND

    if args.whois_file:
        LOGGER.info("Parsing WHOIS file %s", args.whois_file)
        try:
            text = Path(args.whois_file).read_text(encoding="utf-8", errors="replace")
            record = LineWhoisParser(default_tables().hosting).parse(text)
        except OSError as exc:
            parser.error(f"Cannot read WHOIS file: {exc}")
        except ConfigurationError as exc:
            parser.error(str(exc))
        print(whois_to_json(record) if args.output == "json" else whois_to_text(record))
        return ExitCodes.FOUND

    if not args.target:
        parser.error("target is required unless --providers-list or --whois-file is used")

    try:
        record_kinds = [coerce_record_kind(value) for value in args.record_types]
    except ValueError as exc:
        parser.error(str(exc))

    try:
        settings = load_settings(args.config)
        result = run_pipeline(
            PipelineRequest(
                target=args.target,
                output=args.output,
                resolve_only=args.resolve_only,
                use_ai=not args.no_ai,
                skip_whois=args.skip_whois,
                record_kinds=record_kinds or list(DEFAULT_RECORD_KINDS),
                settings=settings,
            )
        )
    except ConfigurationError as exc:
        parser.error(str(exc))

    print(result.output)
    return result.exit_code
