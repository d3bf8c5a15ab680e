"""Stable API for building intelligence reports and running the full pipeline."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Iterable, Optional, Union

from .classifier import ProviderReport, classify
from .dns_records import (
    DEFAULT_RECORD_KINDS,
    DnsRecordSet,
    DomainCheck,
    RecordKind,
    check_domain_exists,
    gather_records,
    normalize_lookup_domain,
)
from .dns_resolver import DnsResolver
from .fingerprints import FingerprintTables, default_tables
from .output import OUTPUT_CHOICES, to_json, to_text
from .registration import (
    LineWhoisParser,
    RegistrarName,
    WhoisLookup,
    query_whois,
    split_registrar,
)
from .resolution import DomainResolver, ResolutionResult, ResolverSettings
from .status import exit_code_for_method

LOGGER = logging.getLogger(__name__)


def _default_report_time() -> str:
    """Build a default UTC report timestamp string.

    Returns:
        str: Timestamp in YYYY-MM-DD HH:MM format (UTC).
    """
    return datetime.now(timezone.utc).strftime("%Y-%m-%d %H:%M")


def _validate_output_format(output: str) -> None:
    """Validate the output format selection.

    Args:
        output (str): Requested output format.

    Raises:
        ValueError: If the output format is not supported.
    """
    if output not in OUTPUT_CHOICES:
        raise ValueError(f"Unsupported output format '{output}'. Choose from {OUTPUT_CHOICES}.")


@dataclass(frozen=True)
class IntelligenceReport:
    """Combined infrastructure and registration report for a domain.

    Attributes:
        domain (str): Domain the report covers.
        report_time (str): UTC report timestamp.
        domain_check (DomainCheck): Existence check outcome.
        dns_records (Optional[DnsRecordSet]): Gathered records, when the domain exists.
        providers (Optional[ProviderReport]): Infrastructure classification.
        whois (Optional[WhoisLookup]): WHOIS lookup, unless skipped.
        registrar (Optional[RegistrarName]): Registrar legal and trading names.
    """

    domain: str
    report_time: str
    domain_check: DomainCheck
    dns_records: Optional[DnsRecordSet] = None
    providers: Optional[ProviderReport] = None
    whois: Optional[WhoisLookup] = None
    registrar: Optional[RegistrarName] = None


def build_report(
    domain: str,
    *,
    record_kinds: Iterable[Union[RecordKind, str]] = DEFAULT_RECORD_KINDS,
    resolver: Optional[object] = None,
    whois_client: Optional[object] = None,
    skip_whois: bool = False,
    tables: Optional[FingerprintTables] = None,
    report_time: Optional[str] = None,
) -> IntelligenceReport:
    """Build an intelligence report for a domain.

    Args:
        domain (str): Domain or URL-like string.
        record_kinds (Iterable[RecordKind | str]): Record kinds to gather.
        resolver (Optional[object]): DNS resolver; defaults to DnsResolver.
        whois_client (Optional[object]): Object with lookup(domain) -> str.
        skip_whois (bool): Skip the WHOIS lookup.
        tables (Optional[FingerprintTables]): Fingerprint tables.
        report_time (Optional[str]): Report timestamp (UTC).

    Returns:
        IntelligenceReport: Report; only the existence check when the domain does not exist.

    Raises:
        ValueError: If a record kind is not supported.
    """
    kinds = list(record_kinds)
    report_time = report_time or _default_report_time()
    resolver = resolver or DnsResolver()
    tables = tables or default_tables()
    clean_domain = normalize_lookup_domain(domain)

    check = check_domain_exists(clean_domain, resolver=resolver)
    if not check.exists:
        LOGGER.info("Skipping lookups for %s: %s", clean_domain, check.error)
        return IntelligenceReport(domain=clean_domain, report_time=report_time, domain_check=check)

    records = gather_records(clean_domain, kinds, resolver=resolver)
    for kind, error in records.errors.items():
        LOGGER.info("%s lookup for %s failed: %s", kind, clean_domain, error)
    providers = classify(records.mx, records.ns, records.txt, tables=tables)

    whois_lookup: Optional[WhoisLookup] = None
    registrar: Optional[RegistrarName] = None
    if not skip_whois:
        whois_lookup = query_whois(
            clean_domain, client=whois_client, parser=LineWhoisParser(tables.hosting)
        )
        if whois_lookup.record is not None:
            registrar = split_registrar(whois_lookup.record.registrar_name)

    return IntelligenceReport(
        domain=clean_domain,
        report_time=report_time,
        domain_check=check,
        dns_records=records,
        providers=providers,
        whois=whois_lookup,
        registrar=registrar,
    )


@dataclass(frozen=True)
class PipelineRequest:
    """Input parameters for resolving an input and reporting on the result.

    Attributes:
        target (str): Business name, domain or URL.
        output (str): Output format (text or json).
        resolve_only (bool): Stop after resolution.
        use_ai (bool): Enable AI inference when no resolver is supplied.
        skip_whois (bool): Skip the WHOIS lookup.
        record_kinds (Iterable[RecordKind | str]): Record kinds to gather.
        settings (Optional[ResolverSettings]): Resolution constants.
        tables (Optional[FingerprintTables]): Fingerprint tables.
        domain_resolver (Optional[DomainResolver]): Resolution engine override.
        dns_resolver (Optional[object]): DNS resolver override.
        whois_client (Optional[object]): WHOIS client override.
        report_time (Optional[str]): Report timestamp (UTC).
    """

    target: str
    output: str = "text"
    resolve_only: bool = False
    use_ai: bool = True
    skip_whois: bool = False
    record_kinds: Iterable[Union[RecordKind, str]] = field(
        default_factory=lambda: list(DEFAULT_RECORD_KINDS)
    )
    settings: Optional[ResolverSettings] = None
    tables: Optional[FingerprintTables] = None
    domain_resolver: Optional[DomainResolver] = None
    dns_resolver: Optional[object] = None
    whois_client: Optional[object] = None
    report_time: Optional[str] = None


@dataclass(frozen=True)
class PipelineResult:
    """Output from a pipeline run.

    Attributes:
        output (str): Rendered output string.
        exit_code (int): Exit code derived from the search method.
        resolution (ResolutionResult): Resolution outcome.
        report (Optional[IntelligenceReport]): Report when the input resolved.
        report_time (str): Report timestamp (UTC).
    """

    output: str
    exit_code: int
    resolution: ResolutionResult
    report: Optional[IntelligenceReport]
    report_time: str


def run_pipeline(request: PipelineRequest) -> PipelineResult:
    """Resolve an input and, when found, build and render its report.

    Args:
        request (PipelineRequest): Request parameters.

    Returns:
        PipelineResult: Rendered output, exit code and raw results.

    Raises:
        ValueError: If the output format or a record kind is invalid.
        ConfigurationError: If AI is enabled without credentials.
    """
    _validate_output_format(request.output)
    report_time = request.report_time or _default_report_time()
    engine = request.domain_resolver or DomainResolver.from_env(
        request.settings, use_ai=request.use_ai
    )

    resolution = engine.resolve(request.target)
    report: Optional[IntelligenceReport] = None
    if resolution.found and not request.resolve_only:
        report = build_report(
            resolution.domain,
            record_kinds=request.record_kinds,
            resolver=request.dns_resolver,
            whois_client=request.whois_client,
            skip_whois=request.skip_whois,
            tables=request.tables,
            report_time=report_time,
        )

    if request.output == "json":
        rendered = to_json(resolution, report)
    else:
        rendered = to_text(resolution, report)

    return PipelineResult(
        output=rendered,
        exit_code=exit_code_for_method(resolution.search_method),
        resolution=resolution,
        report=report,
        report_time=report_time,
    )
