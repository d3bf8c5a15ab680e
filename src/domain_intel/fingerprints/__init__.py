"""Provider fingerprint tables."""

from __future__ import annotations

from .loader import (
    default_tables,
    list_providers,
    load_fingerprint_tables,
    load_table,
    parse_table,
    with_provider,
)
from .models import (
    DNS_PROVIDERS,
    HOSTING,
    MAIL_HOSTS,
    MARKETING,
    SECURITY,
    TABLE_NAMES,
    Fingerprint,
    FingerprintTable,
    FingerprintTables,
)

__all__ = [
    "DNS_PROVIDERS",
    "Fingerprint",
    "FingerprintTable",
    "FingerprintTables",
    "HOSTING",
    "MAIL_HOSTS",
    "MARKETING",
    "SECURITY",
    "TABLE_NAMES",
    "default_tables",
    "list_providers",
    "load_fingerprint_tables",
    "load_table",
    "parse_table",
    "with_provider",
]
