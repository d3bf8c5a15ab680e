"""Stable public API for programmatic usage."""

from __future__ import annotations

from .classifier import ProviderReport, classify
from .dns_records import DnsRecordSet, DomainCheck, RecordKind, check_domain_exists, gather_records
from .dns_resolver import CachingResolver, DnsLookupError, DnsResolver
from .errors import (
    ConfigurationError,
    DomainIntelError,
    FingerprintConfigError,
    MissingCredentialsError,
)
from .fingerprints import (
    FingerprintTable,
    FingerprintTables,
    default_tables,
    list_providers,
    load_fingerprint_tables,
    with_provider,
)
from .registration import (
    RegistrarName,
    WhoisLookup,
    WhoisRecord,
    parse_whois,
    query_whois,
    split_registrar,
)
from .resolution import DomainResolver, ResolutionResult, ResolverSettings, SearchCandidate
from .runner import (
    IntelligenceReport,
    PipelineRequest,
    PipelineResult,
    build_report,
    run_pipeline,
)
from .status import Confidence, ExitCodes, SearchMethod, exit_code_for_method

__all__ = [
    "CachingResolver",
    "Confidence",
    "ConfigurationError",
    "DnsLookupError",
    "DnsRecordSet",
    "DnsResolver",
    "DomainCheck",
    "DomainIntelError",
    "DomainResolver",
    "ExitCodes",
    "FingerprintConfigError",
    "FingerprintTable",
    "FingerprintTables",
    "IntelligenceReport",
    "MissingCredentialsError",
    "PipelineRequest",
    "PipelineResult",
    "ProviderReport",
    "RecordKind",
    "RegistrarName",
    "ResolutionResult",
    "ResolverSettings",
    "SearchCandidate",
    "SearchMethod",
    "WhoisLookup",
    "WhoisRecord",
    "build_report",
    "check_domain_exists",
    "classify",
    "default_tables",
    "exit_code_for_method",
    "gather_records",
    "list_providers",
    "load_fingerprint_tables",
    "parse_whois",
    "query_whois",
    "run_pipeline",
    "split_registrar",
    "with_provider",
]
