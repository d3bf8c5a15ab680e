"""WHOIS lookup, field extraction and registrar name handling."""

from __future__ import annotations

from .hosting import detect_hosting_provider
from .lookup import WhoisClient, query_whois
from .models import RegistrarName, WhoisLookup, WhoisRecord
from .parser import LineWhoisParser, WhoisParser, parse_whois
from .registrar import split_registrar

__all__ = [
    "LineWhoisParser",
    "RegistrarName",
    "WhoisClient",
    "WhoisLookup",
    "WhoisParser",
    "WhoisRecord",
    "detect_hosting_provider",
    "parse_whois",
    "query_whois",
    "split_registrar",
]
