"""Identify providers from coerced MX, NS and TXT data."""

from __future__ import annotations

import logging
from typing import Iterable, List, Optional, Set

from ..fingerprints import FingerprintTable
from .matching import extract_spf_includes, first_provider_match, match_pattern, spf_strings
from .report import (
    CUSTOM_DNS,
    MX_SOURCE,
    SELF_HOSTED,
    SPF_SOURCE,
    UNKNOWN_DNS,
    UNKNOWN_MAIL_HOST,
    AuthorizedSenders,
    DetectedService,
    DnsProvider,
    EmailHost,
    ServiceReport,
)

LOGGER = logging.getLogger(__name__)


def identify_mail_host(mx_servers: List[str], table: FingerprintTable) -> EmailHost:
    """Identify the primary mail host from MX exchanges.

    Args:
        mx_servers (List[str]): MX exchange hostnames.
        table (FingerprintTable): Mail host fingerprints.

    Returns:
        EmailHost: Matched provider, or a self-hosted label.
    """
    if not mx_servers:
        return EmailHost(provider=UNKNOWN_MAIL_HOST, mx_servers=())
    match = first_provider_match(table, mx_servers, "mx_patterns")
    if match is None:
        return EmailHost(provider=SELF_HOSTED, mx_servers=tuple(mx_servers))
    fingerprint, pattern = match
    LOGGER.debug("MX matched %s via %s", fingerprint.name, pattern)
    return EmailHost(
        provider=fingerprint.name, mx_servers=tuple(mx_servers), matched_pattern=pattern
    )


def identify_dns_provider(nameservers: List[str], table: FingerprintTable) -> DnsProvider:
    """Identify the DNS provider from nameserver hostnames.

    Args:
        nameservers (List[str]): NS hostnames.
        table (FingerprintTable): DNS provider fingerprints.

    Returns:
        DnsProvider: Matched provider, or a custom DNS label.
    """
    if not nameservers:
        return DnsProvider(provider=UNKNOWN_DNS, nameservers=())
    match = first_provider_match(table, nameservers, "ns_patterns")
    if match is None:
        return DnsProvider(provider=CUSTOM_DNS, nameservers=tuple(nameservers))
    fingerprint, pattern = match
    LOGGER.debug("NS matched %s via %s", fingerprint.name, pattern)
    return DnsProvider(
        provider=fingerprint.name, nameservers=tuple(nameservers), matched_pattern=pattern
    )


def _collect_services(
    values: Iterable[str],
    table: FingerprintTable,
    field: str,
    source: Optional[str],
    services: List[DetectedService],
    seen: Set[str],
) -> None:
    """Append services whose patterns match any value, deduplicated by name.

    Args:
        values (Iterable[str]): Strings to search.
        table (FingerprintTable): Service fingerprints.
        field (str): Fingerprint pattern attribute to use.
        source (Optional[str]): Source label recorded on new services.
        services (List[DetectedService]): Output list, extended in place.
        seen (Set[str]): Names already recorded, updated in place.
    """
    for value in values:
        for fingerprint in table:
            if fingerprint.name in seen:
                continue
            if match_pattern(value, getattr(fingerprint, field)) is None:
                continue
            services.append(
                DetectedService(name=fingerprint.name, type=fingerprint.type or "", source=source)
            )
            seen.add(fingerprint.name)


def identify_security_services(
    mx_servers: List[str], txt_records: List[str], table: FingerprintTable
) -> ServiceReport:
    """Identify email security services from MX hosts and SPF policies.

    Args:
        mx_servers (List[str]): MX exchange hostnames.
        txt_records (List[str]): TXT strings.
        table (FingerprintTable): Security service fingerprints.

    Returns:
        ServiceReport: Services, each with the first source it was seen in.
    """
    services: List[DetectedService] = []
    seen: Set[str] = set()
    _collect_services(mx_servers, table, "mx_patterns", MX_SOURCE, services, seen)
    _collect_services(spf_strings(txt_records), table, "spf_patterns", SPF_SOURCE, services, seen)
    return ServiceReport(services=tuple(services))


def identify_marketing_services(txt_records: List[str], table: FingerprintTable) -> ServiceReport:
    """Identify email marketing services from SPF policies.

    Args:
        txt_records (List[str]): TXT strings.
        table (FingerprintTable): Marketing service fingerprints.

    Returns:
        ServiceReport: Services in detection order.
    """
    services: List[DetectedService] = []
    _collect_services(spf_strings(txt_records), table, "spf_patterns", None, services, set())
    return ServiceReport(services=tuple(services))


def identify_authorized_senders(
    txt_records: List[str], table: FingerprintTable
) -> AuthorizedSenders:
    """Identify third-party senders from SPF include directives.

    Args:
        txt_records (List[str]): TXT strings.
        table (FingerprintTable): Sender fingerprints matched by SPF patterns.

    Returns:
        AuthorizedSenders: Matched provider names and raw include domains.
    """
    includes: List[str] = []
    for spf in spf_strings(txt_records):
        includes.extend(extract_spf_includes(spf))
    providers: List[str] = []
    for domain in includes:
        for fingerprint in table:
            if fingerprint.name in providers:
                continue
            if match_pattern(domain, fingerprint.spf_patterns) is not None:
                providers.append(fingerprint.name)
    return AuthorizedSenders(providers=tuple(providers), spf_includes=tuple(includes))
