"""Record kind registry, concurrent record gathering and existence checks."""

from __future__ import annotations

import logging
import re
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Iterable, List, Optional, Union

from .dns_resolver import DnsLookupError, DnsResolver

LOGGER = logging.getLogger(__name__)


class RecordKind(Enum):
    """DNS record kinds that can be gathered for a domain."""

    A = "A"
    AAAA = "AAAA"
    MX = "MX"
    NS = "NS"
    TXT = "TXT"
    CNAME = "CNAME"
    SOA = "SOA"
    SRV = "SRV"


RESOLVER_METHODS: Dict[RecordKind, str] = {
    RecordKind.A: "get_a",
    RecordKind.AAAA: "get_aaaa",
    RecordKind.MX: "get_mx",
    RecordKind.NS: "get_ns",
    RecordKind.TXT: "get_txt",
    RecordKind.CNAME: "get_cname",
    RecordKind.SOA: "get_soa",
    RecordKind.SRV: "get_srv",
}

DEFAULT_RECORD_KINDS = (RecordKind.MX, RecordKind.TXT, RecordKind.NS)

_PROTOCOL_RE = re.compile(r"^https?://", re.IGNORECASE)


def coerce_record_kind(value: Union[RecordKind, str]) -> RecordKind:
    """Normalize a record kind string or enum into a RecordKind value.

    Args:
        value (RecordKind | str): Record kind enum or name (case-insensitive).

    Returns:
        RecordKind: Normalized record kind.

    Raises:
        ValueError: If the value is not a supported record kind.
    """
    if isinstance(value, RecordKind):
        return value
    try:
        return RecordKind(str(value).strip().upper())
    except ValueError:
        allowed = ", ".join(kind.value for kind in RecordKind)
        raise ValueError(f"Unsupported record type '{value}'. Choose from {allowed}") from None


def normalize_lookup_domain(domain: str) -> str:
    """Strip protocol, path and a leading www. from a domain for lookups.

    Args:
        domain (str): Domain or URL-like string.

    Returns:
        str: Bare domain to query.
    """
    cleaned = _PROTOCOL_RE.sub("", domain.strip())
    cleaned = cleaned.rstrip("/").split("/")[0]
    if cleaned.lower().startswith("www."):
        cleaned = cleaned[4:]
    return cleaned


@dataclass(frozen=True)
class RecordLookup:
    """Outcome of a single record kind lookup.

    Attributes:
        kind (RecordKind): Record kind that was queried.
        success (bool): Whether the lookup completed.
        data (object): Parsed records when successful.
        error (Optional[str]): Error message when the lookup failed.
    """

    kind: RecordKind
    success: bool
    data: object = None
    error: Optional[str] = None


@dataclass(frozen=True)
class DnsRecordSet:
    """Records gathered for a domain, keyed by record kind.

    Attributes:
        domain (str): Domain that was queried.
        lookups (Dict[RecordKind, RecordLookup]): Per-kind lookup outcomes.
    """

    domain: str
    lookups: Dict[RecordKind, RecordLookup] = field(default_factory=dict)

    def records(self, kind: RecordKind) -> list:
        """Return successfully resolved records for a kind as a list.

        Args:
            kind (RecordKind): Record kind to read.

        Returns:
            list: Records, or an empty list when missing or failed.
        """
        lookup = self.lookups.get(kind)
        if lookup is None or not lookup.success or lookup.data is None:
            return []
        if isinstance(lookup.data, list):
            return list(lookup.data)
        return [lookup.data]

    @property
    def mx(self) -> list:
        """list: MX (host, priority) tuples."""
        return self.records(RecordKind.MX)

    @property
    def ns(self) -> list:
        """list: Nameserver hostnames."""
        return self.records(RecordKind.NS)

    @property
    def txt(self) -> list:
        """list: TXT record strings."""
        return self.records(RecordKind.TXT)

    @property
    def errors(self) -> Dict[str, str]:
        """Dict[str, str]: Error messages keyed by record kind name."""
        return {
            kind.value: lookup.error or ""
            for kind, lookup in self.lookups.items()
            if not lookup.success
        }


def _lookup_kind(resolver: object, kind: RecordKind, domain: str) -> RecordLookup:
    """Run one record kind lookup, capturing failures.

    Args:
        resolver (object): Resolver providing lookup methods.
        kind (RecordKind): Record kind to query.
        domain (str): Domain to query.

    Returns:
        RecordLookup: Lookup outcome.
    """
    method = getattr(resolver, RESOLVER_METHODS[kind])
    try:
        data = method(domain)
    except Exception as exc:
        LOGGER.debug("%s lookup failed for %s: %s", kind.value, domain, exc)
        return RecordLookup(kind=kind, success=False, error=str(exc))
    return RecordLookup(kind=kind, success=True, data=data)


def gather_records(
    domain: str,
    kinds: Iterable[Union[RecordKind, str]] = DEFAULT_RECORD_KINDS,
    *,
    resolver: Optional[object] = None,
) -> DnsRecordSet:
    """Query several record kinds concurrently and collect the results.

    Args:
        domain (str): Domain or URL-like string to query.
        kinds (Iterable[RecordKind | str]): Record kinds to gather.
        resolver (Optional[object]): Resolver to use; defaults to DnsResolver.

    Returns:
        DnsRecordSet: Per-kind lookup outcomes.

    Raises:
        ValueError: If a record kind is not supported.
    """
    clean_domain = normalize_lookup_domain(domain)
    ordered: List[RecordKind] = []
    for value in kinds:
        kind = coerce_record_kind(value)
        if kind not in ordered:
            ordered.append(kind)
    if not ordered:
        return DnsRecordSet(domain=clean_domain)

    resolver = resolver or DnsResolver()
    LOGGER.info(
        "Gathering %s records for %s", ", ".join(kind.value for kind in ordered), clean_domain
    )
    with ThreadPoolExecutor(max_workers=len(ordered)) as pool:
        futures = [pool.submit(_lookup_kind, resolver, kind, clean_domain) for kind in ordered]
        results = [future.result() for future in futures]
    return DnsRecordSet(domain=clean_domain, lookups={result.kind: result for result in results})


@dataclass(frozen=True)
class DomainCheck:
    """Result of a domain existence check.

    Attributes:
        exists (bool): Whether the domain has SOA or NS records.
        status (str): NOERROR, NXDOMAIN or ERROR.
        domain (str): Domain that was checked.
        error (Optional[str]): Error description when the domain does not exist.
    """

    exists: bool
    status: str
    domain: str
    error: Optional[str] = None


def check_domain_exists(domain: str, *, resolver: Optional[object] = None) -> DomainCheck:
    """Check whether a domain exists using an SOA query with NS fallback.

    Args:
        domain (str): Domain or URL-like string to check.
        resolver (Optional[object]): Resolver to use; defaults to DnsResolver.

    Returns:
        DomainCheck: Existence result.
    """
    clean_domain = normalize_lookup_domain(domain)
    if not clean_domain:
        return DomainCheck(exists=False, status="ERROR", domain=clean_domain, error="Empty domain")
    resolver = resolver or DnsResolver()
    LOGGER.info("Checking if domain exists: %s", clean_domain)
    errors: List[str] = []
    for method_name in ("get_soa", "get_ns"):
        try:
            if getattr(resolver, method_name)(clean_domain):
                return DomainCheck(exists=True, status="NOERROR", domain=clean_domain)
        except DnsLookupError as err:
            errors.append(str(err))
    if len(errors) == 2:
        return DomainCheck(exists=False, status="ERROR", domain=clean_domain, error=errors[-1])
    return DomainCheck(
        exists=False,
        status="NXDOMAIN",
        domain=clean_domain,
        error="Domain does not exist or cannot be resolved",
    )


__all__ = [
    "DEFAULT_RECORD_KINDS",
    "DnsRecordSet",
    "DomainCheck",
    "RESOLVER_METHODS",
    "RecordKind",
    "RecordLookup",
    "check_domain_exists",
    "coerce_record_kind",
    "gather_records",
    "normalize_lookup_domain",
]
