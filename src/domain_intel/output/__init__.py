"""Output helpers for presenting resolution results and reports."""

from __future__ import annotations

from .formatters import (
    OUTPUT_CHOICES,
    build_json_payload,
    to_json,
    to_text,
    whois_to_json,
    whois_to_text,
)
from .serialize import (
    serialize_candidate,
    serialize_dns_records,
    serialize_domain_check,
    serialize_provider_list,
    serialize_provider_report,
    serialize_registrar,
    serialize_report,
    serialize_resolution,
    serialize_whois_lookup,
    serialize_whois_record,
)

__all__ = [
    "OUTPUT_CHOICES",
    "build_json_payload",
    "serialize_candidate",
    "serialize_dns_records",
    "serialize_domain_check",
    "serialize_provider_list",
    "serialize_provider_report",
    "serialize_registrar",
    "serialize_report",
    "serialize_resolution",
    "serialize_whois_lookup",
    "serialize_whois_record",
    "to_json",
    "to_text",
    "whois_to_json",
    "whois_to_text",
]
