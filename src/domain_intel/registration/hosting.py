"""Hosting provider inference from nameservers and WHOIS text."""

from __future__ import annotations

from typing import List, Optional

from ..fingerprints import FingerprintTable


def _match_hosting(text: str, table: FingerprintTable) -> Optional[str]:
    """Return the first hosting brand mentioned in lowercase text.

    Args:
        text (str): Lowercased text to search.
        table (FingerprintTable): Hosting fingerprints.

    Returns:
        Optional[str]: Provider name, or None.
    """
    for fingerprint in table:
        if any(pattern.lower() in text for pattern in fingerprint.patterns):
            return fingerprint.name
    return None


def nameserver_parent(nameserver: str) -> str:
    """Drop the first label of a nameserver hostname.

    Args:
        nameserver (str): Nameserver hostname.

    Returns:
        str: Parent domain, empty when the host has a single label.
    """
    return ".".join(nameserver.split(".")[1:])


def detect_hosting_provider(
    name_servers: List[str], whois_text: str, table: FingerprintTable
) -> Optional[str]:
    """Infer a hosting provider.

    Nameservers are searched first, then the whole WHOIS text, and finally the
    parent domain of the first nameserver is reported.

    Args:
        name_servers (List[str]): Nameservers extracted from WHOIS.
        whois_text (str): Raw WHOIS text.
        table (FingerprintTable): Hosting fingerprints in priority order.

    Returns:
        Optional[str]: Hosting provider label, or None without nameservers.
    """
    if not name_servers:
        return None
    provider = _match_hosting(" ".join(name_servers).lower(), table)
    if provider is None:
        provider = _match_hosting(whois_text.lower(), table)
    if provider is not None:
        return provider
    parent = nameserver_parent(name_servers[0])
    if parent:
        return f"Nameserver: {parent}"
    return None
