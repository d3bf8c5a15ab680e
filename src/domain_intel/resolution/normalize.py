"""Input normalization and domain-shape helpers."""

from __future__ import annotations

import re
from typing import Iterable, List, Optional
from urllib.parse import urlparse

_PROTOCOL_RE = re.compile(r"^https?://")
_TAIL_RE = re.compile(r"[/?#].*$")
_WWW_RE = re.compile(r"^www\.")
_TLD_RE = re.compile(r"\.[a-z]{2,}$")
_NON_ALNUM_RE = re.compile(r"[^a-z0-9\s]")


def _normalize_once(value: str) -> str:
    """Apply one round of normalization steps.

    Args:
        value (str): Raw input.

    Returns:
        str: Normalized input.
    """
    value = value.lower().strip()
    value = _PROTOCOL_RE.sub("", value)
    value = _TAIL_RE.sub("", value)
    return _WWW_RE.sub("", value).strip()


def normalize_input(value: str) -> str:
    """Normalize free-text input into canonical form.

    Lowercases, trims, and strips a protocol, any path, query or fragment, and
    a leading ``www.``. Steps repeat until the value is stable, so the result
    is a fixed point.

    Args:
        value (str): Business name, domain or URL.

    Returns:
        str: Normalized input, possibly empty.
    """
    current = value or ""
    while True:
        normalized = _normalize_once(current)
        if normalized == current:
            return normalized
        current = normalized


def looks_like_domain(value: str, common_tlds: Iterable[str]) -> bool:
    """Check whether normalized input already looks like a domain.

    Args:
        value (str): Normalized input.
        common_tlds (Iterable[str]): Known multi-level and generic suffixes.

    Returns:
        bool: True when the input has a dot and a TLD-shaped ending.
    """
    if "." not in value or any(ch.isspace() for ch in value):
        return False
    return any(value.endswith(tld) for tld in common_tlds) or bool(_TLD_RE.search(value))


def extract_domain(url: str) -> str:
    """Extract the hostname from a URL.

    Args:
        url (str): URL or bare host.

    Returns:
        str: Lowercase hostname, or the input when it cannot be parsed.
    """
    candidate = url if url.startswith("http") else f"https://{url}"
    try:
        hostname: Optional[str] = urlparse(candidate).hostname
    except ValueError:
        return url
    return hostname or url


def input_tokens(value: str, min_length: int) -> List[str]:
    """Split input into whitespace tokens of a minimum length.

    Args:
        value (str): Normalized input.
        min_length (int): Shortest token to keep.

    Returns:
        List[str]: Lowercase tokens.
    """
    return [token for token in value.lower().split() if len(token) >= min_length]


def squash_name(value: str) -> str:
    """Concatenate the alphanumeric words of a name.

    Args:
        value (str): Business name.

    Returns:
        str: Lowercase alphanumeric string.
    """
    return "".join(_NON_ALNUM_RE.sub("", value.lower()).split())
