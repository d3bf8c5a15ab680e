"""Line-oriented WHOIS text parsing."""

from __future__ import annotations

import logging
import re
from typing import Dict, List, Optional, Pattern, Tuple

from ..fingerprints import FingerprintTable, default_tables
from .hosting import detect_hosting_provider
from .models import WhoisRecord

LOGGER = logging.getLogger(__name__)

_VALUE_RE = re.compile(r":\s*(.+?)$")

# Field name and label pattern, checked against every trimmed line.
FIELD_LABELS: Tuple[Tuple[str, Pattern[str]], ...] = (
    (
        "registrar_url",
        re.compile(r"registrar\s+url|registrar\s+website|registrar\s+web\s+site", re.I),
    ),
    ("registrar_name", re.compile(r"^registrar\s+name|^registrar:", re.I)),
    ("tech_contact_name", re.compile(r"tech\s+contact\s+name|tech\s+name", re.I)),
    (
        "tech_contact_id",
        re.compile(r"tech\s+contact\s+id|tech\s+contact\s+handle|tech\s+handle", re.I),
    ),
    ("tech_contact_email", re.compile(r"tech\s+contact\s+email|tech\s+email", re.I)),
    ("admin_contact_name", re.compile(r"admin\s+contact\s+name|admin\s+name", re.I)),
    ("admin_contact_email", re.compile(r"admin\s+contact\s+email|admin\s+email", re.I)),
    (
        "registrant_contact_name",
        re.compile(r"registrant\s+contact\s+name|registrant\s+name", re.I),
    ),
    (
        "registrant_contact_email",
        re.compile(r"registrant\s+contact\s+email|registrant\s+email", re.I),
    ),
)
NAME_SERVER_LABEL = re.compile(r"name\s+server|nameserver|ns\s+\d+", re.I)


def line_value(line: str) -> Optional[str]:
    """Return the trimmed text after the first colon of a line.

    Args:
        line (str): WHOIS line.

    Returns:
        Optional[str]: Value, or None when nothing follows a colon.
    """
    match = _VALUE_RE.search(line)
    if not match:
        return None
    value = match.group(1).strip()
    return value or None


class WhoisParser:
    """Base class for WHOIS text parsers."""

    def parse(self, text: str) -> WhoisRecord:
        """Parse raw WHOIS text.

        Args:
            text (str): Raw WHOIS response.

        Returns:
            WhoisRecord: Extracted fields.

        Raises:
            NotImplementedError: Always, in the base class.
        """
        raise NotImplementedError


class LineWhoisParser(WhoisParser):
    """Scan WHOIS lines for known labels and keep the first value per field."""

    def __init__(self, hosting_table: Optional[FingerprintTable] = None) -> None:
        """Initialize the parser.

        Args:
            hosting_table (Optional[FingerprintTable]): Hosting fingerprints;
                defaults to the packaged table.
        """
        self._hosting_table = hosting_table

    @property
    def hosting_table(self) -> FingerprintTable:
        """FingerprintTable: Hosting fingerprints used for inference."""
        if self._hosting_table is None:
            self._hosting_table = default_tables().hosting
        return self._hosting_table

    def parse(self, text: str) -> WhoisRecord:
        """Parse raw WHOIS text.

        Args:
            text (str): Raw WHOIS response.

        Returns:
            WhoisRecord: Extracted fields; unknown fields stay None.
        """
        text = text or ""
        fields: Dict[str, str] = {}
        name_servers: List[str] = []
        for raw_line in text.splitlines():
            line = raw_line.strip()
            if not line:
                continue
            for field, label in FIELD_LABELS:
                if field in fields or not label.search(line):
                    continue
                value = line_value(line)
                if value:
                    fields[field] = value
            if NAME_SERVER_LABEL.search(line):
                value = line_value(line)
                if value and value not in name_servers:
                    name_servers.append(value)

        hosting = detect_hosting_provider(name_servers, text, self.hosting_table)
        LOGGER.debug(
            "Parsed %d WHOIS fields and %d nameservers", len(fields), len(name_servers)
        )
        return WhoisRecord(name_servers=tuple(name_servers), hosting_provider=hosting, **fields)


def parse_whois(text: str, parser: Optional[WhoisParser] = None) -> WhoisRecord:
    """Parse raw WHOIS text with the given or default parser.

    Args:
        text (str): Raw WHOIS response.
        parser (Optional[WhoisParser]): Parser to use; defaults to LineWhoisParser.

    Returns:
        WhoisRecord: Extracted fields.
    """
    return (parser or LineWhoisParser()).parse(text)
