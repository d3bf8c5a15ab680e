"""Record coercion and fingerprint matching helpers."""

from __future__ import annotations

import collections.abc
import re
from typing import Iterable, List, Mapping, Optional, Tuple

from ..fingerprints import Fingerprint

SPF_MARKER = "v=spf1"
SPF_INCLUDE_RE = re.compile(r"include:([a-zA-Z0-9.-]+)")


def _strip_dot(host: str) -> str:
    """Strip whitespace and a trailing root dot from a hostname.

    Args:
        host (str): Hostname.

    Returns:
        str: Cleaned hostname.
    """
    return host.strip().rstrip(".")


def _as_text(value: object) -> Optional[str]:
    """Convert a string-like value to text.

    Args:
        value (object): str, bytes or other value.

    Returns:
        Optional[str]: Text, or None when the value is not string-like.
    """
    if isinstance(value, str):
        return value
    if isinstance(value, bytes):
        return value.decode("utf-8", errors="replace")
    return None


def mx_exchange(entry: object) -> Optional[str]:
    """Extract the exchange hostname from an MX entry.

    Accepts ``(host, priority)`` tuples, dnspython MX rdata objects, mappings
    with an ``exchange`` key, and plain strings.

    Args:
        entry (object): MX entry in any supported shape.

    Returns:
        Optional[str]: Hostname without trailing dot, or None if malformed.
    """
    host: object = None
    if isinstance(entry, (str, bytes)):
        host = entry
    elif isinstance(entry, Mapping):
        host = entry.get("exchange")
    elif isinstance(entry, (tuple, list)):
        host = entry[0] if entry else None
    elif hasattr(entry, "exchange"):
        host = str(entry.exchange)
    text = _as_text(host)
    if not text or not text.strip():
        return None
    return _strip_dot(text)


def ns_host(entry: object) -> Optional[str]:
    """Extract a nameserver hostname from an NS entry.

    Args:
        entry (object): NS hostname string or dnspython NS rdata.

    Returns:
        Optional[str]: Hostname without trailing dot, or None if malformed.
    """
    text = _as_text(entry)
    if text is None and hasattr(entry, "target"):
        text = str(entry.target)
    if not text or not text.strip():
        return None
    return _strip_dot(text)


def txt_string(entry: object) -> Optional[str]:
    """Join a TXT entry into a single string.

    Args:
        entry (object): TXT string or list of string chunks.

    Returns:
        Optional[str]: Joined text, or None if malformed.
    """
    if isinstance(entry, (list, tuple)):
        chunks = [_as_text(chunk) for chunk in entry]
        if any(chunk is None for chunk in chunks):
            return None
        return "".join(chunks)
    return _as_text(entry)


def _entries(records: object) -> List[object]:
    """Return the entries of a record section, or nothing when it is malformed.

    Args:
        records (object): Record section; expected to be a non-string iterable.

    Returns:
        List[object]: Section entries, empty for strings, mappings and scalars.
    """
    if isinstance(records, (str, bytes, Mapping)):
        return []
    if not isinstance(records, collections.abc.Iterable):
        return []
    return list(records)


def coerce_mx(records: Iterable[object] | None) -> List[str]:
    """Coerce MX entries into exchange hostnames, skipping malformed ones.

    Args:
        records (Iterable[object] | None): MX entries.

    Returns:
        List[str]: Exchange hostnames in input order.
    """
    hosts = (mx_exchange(entry) for entry in _entries(records))
    return [host for host in hosts if host]


def coerce_ns(records: Iterable[object] | None) -> List[str]:
    """Coerce NS entries into hostnames, skipping malformed ones.

    Args:
        records (Iterable[object] | None): NS entries.

    Returns:
        List[str]: Nameserver hostnames in input order.
    """
    hosts = (ns_host(entry) for entry in _entries(records))
    return [host for host in hosts if host]


def coerce_txt(records: Iterable[object] | None) -> List[str]:
    """Coerce TXT entries into strings, skipping malformed ones.

    Args:
        records (Iterable[object] | None): TXT entries.

    Returns:
        List[str]: TXT strings in input order.
    """
    values = (txt_string(entry) for entry in _entries(records))
    return [value for value in values if value]


def spf_strings(txt_records: Iterable[str]) -> List[str]:
    """Filter TXT strings down to SPF policies.

    Args:
        txt_records (Iterable[str]): TXT strings.

    Returns:
        List[str]: Strings containing ``v=spf1``.
    """
    return [value for value in txt_records if SPF_MARKER in value.lower()]


def extract_spf_includes(spf: str) -> List[str]:
    """Extract include domains from an SPF string.

    Args:
        spf (str): SPF policy text.

    Returns:
        List[str]: Include domains in order of appearance.
    """
    if not spf:
        return []
    return SPF_INCLUDE_RE.findall(spf)


def match_pattern(value: str, patterns: Iterable[str]) -> Optional[str]:
    """Return the first pattern contained in a value, case-insensitively.

    Args:
        value (str): Text to search.
        patterns (Iterable[str]): Substring patterns.

    Returns:
        Optional[str]: First matching pattern, or None.
    """
    lowered = value.lower()
    for pattern in patterns:
        if pattern.lower() in lowered:
            return pattern
    return None


def first_provider_match(
    table: Iterable[Fingerprint], values: List[str], field: str
) -> Optional[Tuple[Fingerprint, str]]:
    """Find the first provider whose patterns match any value.

    Providers are checked in table order; for each provider every value is
    tried before moving on.

    Args:
        table (Iterable[Fingerprint]): Fingerprints in priority order.
        values (List[str]): Hostnames or strings to search.
        field (str): Fingerprint pattern attribute to use.

    Returns:
        Optional[Tuple[Fingerprint, str]]: Matching fingerprint and pattern.
    """
    for fingerprint in table:
        patterns = getattr(fingerprint, field)
        for value in values:
            pattern = match_pattern(value, patterns)
            if pattern is not None:
                return fingerprint, pattern
    return None
