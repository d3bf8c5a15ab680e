"""Dataclasses for provider fingerprint tables."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Dict, Iterator, List, Optional, Tuple

MAIL_HOSTS = "mail_hosts"
DNS_PROVIDERS = "dns_providers"
SECURITY = "security"
MARKETING = "marketing"
HOSTING = "hosting"

TABLE_NAMES = (MAIL_HOSTS, DNS_PROVIDERS, SECURITY, MARKETING, HOSTING)

# Pattern fields each table's entries must define.
REQUIRED_FIELDS: Dict[str, frozenset[str]] = {
    MAIL_HOSTS: frozenset({"mx_patterns", "spf_patterns"}),
    DNS_PROVIDERS: frozenset({"ns_patterns"}),
    SECURITY: frozenset({"type", "mx_patterns", "spf_patterns"}),
    MARKETING: frozenset({"type", "spf_patterns"}),
    HOSTING: frozenset({"patterns"}),
}


@dataclass(frozen=True)
class Fingerprint:
    """Identify a named provider by substrings of DNS or WHOIS data.

    Attributes:
        key (str): Stable table key for the provider.
        name (str): Canonical provider display name.
        type (Optional[str]): Service category label, where the table has one.
        mx_patterns (Tuple[str, ...]): Substrings matched against MX exchanges.
        ns_patterns (Tuple[str, ...]): Substrings matched against NS hostnames.
        spf_patterns (Tuple[str, ...]): Substrings matched against SPF data.
        patterns (Tuple[str, ...]): Substrings matched against free text.
    """

    key: str
    name: str
    type: Optional[str] = None
    mx_patterns: Tuple[str, ...] = ()
    ns_patterns: Tuple[str, ...] = ()
    spf_patterns: Tuple[str, ...] = ()
    patterns: Tuple[str, ...] = ()


@dataclass(frozen=True)
class FingerprintTable:
    """Ordered, immutable collection of fingerprints.

    Attributes:
        name (str): Table name (one of TABLE_NAMES).
        entries (Tuple[Fingerprint, ...]): Fingerprints in match priority order.
    """

    name: str
    entries: Tuple[Fingerprint, ...] = ()

    def __iter__(self) -> Iterator[Fingerprint]:
        """Iterate fingerprints in priority order.

        Returns:
            Iterator[Fingerprint]: Fingerprint iterator.
        """
        return iter(self.entries)

    def __len__(self) -> int:
        """Return the number of fingerprints.

        Returns:
            int: Entry count.
        """
        return len(self.entries)

    def get(self, key: str) -> Optional[Fingerprint]:
        """Look up a fingerprint by key.

        Args:
            key (str): Fingerprint key.

        Returns:
            Optional[Fingerprint]: Matching fingerprint or None.
        """
        for entry in self.entries:
            if entry.key == key:
                return entry
        return None

    def with_entry(self, fingerprint: Fingerprint) -> "FingerprintTable":
        """Return a new table with a fingerprint added or replaced.

        A fingerprint whose key already exists replaces that entry in place;
        new keys are appended.

        Args:
            fingerprint (Fingerprint): Fingerprint to register.

        Returns:
            FingerprintTable: New table instance.
        """
        entries: List[Fingerprint] = []
        replaced = False
        for entry in self.entries:
            if entry.key == fingerprint.key:
                entries.append(fingerprint)
                replaced = True
            else:
                entries.append(entry)
        if not replaced:
            entries.append(fingerprint)
        return replace(self, entries=tuple(entries))


@dataclass(frozen=True)
class FingerprintTables:
    """Bundle of every fingerprint table used for classification.

    Attributes:
        mail_hosts (FingerprintTable): Mail host / email service provider table.
        dns_providers (FingerprintTable): DNS and registrar table.
        security (FingerprintTable): Email security services table.
        marketing (FingerprintTable): Email marketing services table.
        hosting (FingerprintTable): Hosting brands searched in WHOIS data.
    """

    mail_hosts: FingerprintTable = field(default_factory=lambda: FingerprintTable(MAIL_HOSTS))
    dns_providers: FingerprintTable = field(
        default_factory=lambda: FingerprintTable(DNS_PROVIDERS)
    )
    security: FingerprintTable = field(default_factory=lambda: FingerprintTable(SECURITY))
    marketing: FingerprintTable = field(default_factory=lambda: FingerprintTable(MARKETING))
    hosting: FingerprintTable = field(default_factory=lambda: FingerprintTable(HOSTING))

    @property
    def senders(self) -> FingerprintTable:
        """FingerprintTable: Table used to name authorized SPF senders."""
        return self.mail_hosts

    def table(self, name: str) -> FingerprintTable:
        """Return a table by name.

        Args:
            name (str): Table name.

        Returns:
            FingerprintTable: Matching table.

        Raises:
            ValueError: If the table name is unknown.
        """
        if name not in TABLE_NAMES:
            raise ValueError(f"Unknown fingerprint table '{name}'")
        return getattr(self, name)

    def with_table(self, table: FingerprintTable) -> "FingerprintTables":
        """Return a new bundle with one table replaced.

        Args:
            table (FingerprintTable): Replacement table.

        Returns:
            FingerprintTables: New bundle.

        Raises:
            ValueError: If the table name is unknown.
        """
        if table.name not in TABLE_NAMES:
            raise ValueError(f"Unknown fingerprint table '{table.name}'")
        return replace(self, **{table.name: table})
