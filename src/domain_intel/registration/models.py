"""WHOIS record dataclasses."""

from __future__ import annotations

import dataclasses
from typing import Optional, Tuple

# Scalar WhoisRecord fields in serialization order.
SCALAR_FIELDS = (
    "registrar_url",
    "registrar_name",
    "tech_contact_name",
    "tech_contact_id",
    "tech_contact_email",
    "admin_contact_name",
    "admin_contact_email",
    "registrant_contact_name",
    "registrant_contact_email",
)


@dataclasses.dataclass(frozen=True)
class WhoisRecord:
    """Structured fields extracted from free-text WHOIS output.

    Every scalar field is either None or a non-empty trimmed string.

    Attributes:
        registrar_url (Optional[str]): Registrar website.
        registrar_name (Optional[str]): Registrar name.
        tech_contact_name (Optional[str]): Technical contact name.
        tech_contact_id (Optional[str]): Technical contact handle.
        tech_contact_email (Optional[str]): Technical contact email.
        admin_contact_name (Optional[str]): Administrative contact name.
        admin_contact_email (Optional[str]): Administrative contact email.
        registrant_contact_name (Optional[str]): Registrant name.
        registrant_contact_email (Optional[str]): Registrant email.
        name_servers (Tuple[str, ...]): Deduplicated nameservers in order seen.
        hosting_provider (Optional[str]): Inferred hosting provider.
    """

    registrar_url: Optional[str] = None
    registrar_name: Optional[str] = None
    tech_contact_name: Optional[str] = None
    tech_contact_id: Optional[str] = None
    tech_contact_email: Optional[str] = None
    admin_contact_name: Optional[str] = None
    admin_contact_email: Optional[str] = None
    registrant_contact_name: Optional[str] = None
    registrant_contact_email: Optional[str] = None
    name_servers: Tuple[str, ...] = ()
    hosting_provider: Optional[str] = None

    def __post_init__(self) -> None:
        """Store nameservers as a tuple."""
        object.__setattr__(self, "name_servers", tuple(self.name_servers))


@dataclasses.dataclass(frozen=True)
class RegistrarName:
    """Registrar legal name with an optional trading name.

    Attributes:
        legal_name (str): Registered legal name.
        trading_name (Optional[str]): Name the registrar trades as.
    """

    legal_name: str
    trading_name: Optional[str] = None


@dataclasses.dataclass(frozen=True)
class WhoisLookup:
    """Envelope for a WHOIS lookup and parse.

    Attributes:
        success (bool): Whether the lookup returned data.
        domain (str): Normalized domain that was queried.
        record (Optional[WhoisRecord]): Parsed record on success.
        error (Optional[str]): Error message on failure.
    """

    success: bool
    domain: str
    record: Optional[WhoisRecord] = None
    error: Optional[str] = None
