"""WHOIS lookups via python-whois."""

from __future__ import annotations

import logging
from typing import Optional

import whois

from ..dns_records import normalize_lookup_domain
from .models import WhoisLookup
from .parser import WhoisParser, parse_whois

LOGGER = logging.getLogger(__name__)


class WhoisClient:
    """Fetch raw WHOIS text for a domain."""

    def lookup(self, domain: str) -> str:
        """Return the raw WHOIS response for a domain.

        Args:
            domain (str): Bare domain to query.

        Returns:
            str: Raw WHOIS text.

        Raises:
            Exception: Propagates python-whois lookup failures.
        """
        entry = whois.whois(domain)
        return getattr(entry, "text", "") or ""


def query_whois(
    domain: str,
    *,
    client: Optional[object] = None,
    parser: Optional[WhoisParser] = None,
) -> WhoisLookup:
    """Look up and parse WHOIS data for a domain.

    Args:
        domain (str): Domain or URL-like string.
        client (Optional[object]): Object with lookup(domain) -> str.
        parser (Optional[WhoisParser]): Parser for the raw text.

    Returns:
        WhoisLookup: Success envelope with the parsed record, or the error.
    """
    clean_domain = normalize_lookup_domain(domain)
    client = client or WhoisClient()
    LOGGER.info("Querying WHOIS information for %s", clean_domain)
    try:
        text = client.lookup(clean_domain)
    except Exception as exc:
        LOGGER.warning("WHOIS lookup failed for %s: %s", clean_domain, exc)
        return WhoisLookup(success=False, domain=clean_domain, error=str(exc) or type(exc).__name__)
    if not text.strip():
        return WhoisLookup(success=False, domain=clean_domain, error="Empty WHOIS response")
    return WhoisLookup(success=True, domain=clean_domain, record=parse_whois(text, parser))
