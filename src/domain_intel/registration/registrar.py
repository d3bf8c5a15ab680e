"""Split registrar names into legal and trading names."""

from __future__ import annotations

from typing import Optional

from .models import RegistrarName

TRADING_AS = "trading as"
TRADING_AS_SEPARATOR = "trading as "


def split_registrar(name: Optional[str]) -> Optional[RegistrarName]:
    """Split a registrar string on the literal ``trading as ``.

    Only the text between the first and second separator is the trading name.
    When nothing precedes the separator the full string is kept as the legal
    name.

    Args:
        name (Optional[str]): Registrar name from WHOIS.

    Returns:
        Optional[RegistrarName]: Legal and trading names, or None when empty.
    """
    if not name or not name.strip():
        return None
    if TRADING_AS not in name:
        return RegistrarName(legal_name=name.strip())
    parts = name.split(TRADING_AS_SEPARATOR)
    legal = parts[0].strip() or name
    trading = parts[1].strip() if len(parts) > 1 else ""
    return RegistrarName(legal_name=legal, trading_name=trading or None)
