"""Classify mail, DNS, security and marketing infrastructure from DNS records."""

from __future__ import annotations

import logging
from typing import Iterable, Optional

from ..fingerprints import FingerprintTables, default_tables
from .inference import (
    identify_authorized_senders,
    identify_dns_provider,
    identify_mail_host,
    identify_marketing_services,
    identify_security_services,
)
from .matching import coerce_mx, coerce_ns, coerce_txt, extract_spf_includes
from .report import (
    AuthorizedSenders,
    DetectedService,
    DnsProvider,
    EmailHost,
    ProviderReport,
    ReportSummary,
    ServiceReport,
)

LOGGER = logging.getLogger(__name__)


def classify(
    mx: Optional[Iterable[object]] = None,
    ns: Optional[Iterable[object]] = None,
    txt: Optional[Iterable[object]] = None,
    *,
    tables: Optional[FingerprintTables] = None,
) -> ProviderReport:
    """Build a provider report from raw MX, NS and TXT records.

    Malformed entries are skipped, so the call never fails on bad data.

    Args:
        mx (Optional[Iterable[object]]): MX entries.
        ns (Optional[Iterable[object]]): NS entries.
        txt (Optional[Iterable[object]]): TXT entries (strings or chunk lists).
        tables (Optional[FingerprintTables]): Fingerprint tables; defaults to packaged ones.

    Returns:
        ProviderReport: Classification report.
    """
    tables = tables or default_tables()
    mx_servers = coerce_mx(mx)
    nameservers = coerce_ns(ns)
    txt_records = coerce_txt(txt)

    email_host = identify_mail_host(mx_servers, tables.mail_hosts)
    dns_provider = identify_dns_provider(nameservers, tables.dns_providers)
    security = identify_security_services(mx_servers, txt_records, tables.security)
    marketing = identify_marketing_services(txt_records, tables.marketing)
    senders = identify_authorized_senders(txt_records, tables.senders)

    names = {email_host.provider, dns_provider.provider, *senders.providers}
    names.update(service.name for service in security.services)
    names.update(service.name for service in marketing.services)
    summary = ReportSummary(
        total_mx_records=len(mx_servers),
        total_ns_records=len(nameservers),
        total_spf_includes=len(senders.spf_includes),
        security_services_detected=security.count,
        marketing_services_detected=marketing.count,
        distinct_providers=len(names),
    )
    LOGGER.info(
        "Classified mail host %s, DNS provider %s", email_host.provider, dns_provider.provider
    )
    return ProviderReport(
        email_host=email_host,
        dns_provider=dns_provider,
        security=security,
        marketing=marketing,
        authorized_senders=senders,
        summary=summary,
    )


__all__ = [
    "AuthorizedSenders",
    "DetectedService",
    "DnsProvider",
    "EmailHost",
    "ProviderReport",
    "ReportSummary",
    "ServiceReport",
    "classify",
    "extract_spf_includes",
    "identify_authorized_senders",
    "identify_dns_provider",
    "identify_mail_host",
    "identify_marketing_services",
    "identify_security_services",
]
