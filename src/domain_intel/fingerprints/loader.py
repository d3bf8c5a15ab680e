"""Load fingerprint tables from packaged and external YAML files."""

from __future__ import annotations

import logging
from functools import lru_cache
from importlib import resources
from pathlib import Path
from typing import Iterable, List, Optional, Tuple

from ..config import (
    FINGERPRINT_DIR_NAME,
    FINGERPRINT_PACKAGE,
    external_config_dirs,
    load_yaml_mapping,
)
from ..errors import ConfigurationError, FingerprintConfigError
from .models import REQUIRED_FIELDS, TABLE_NAMES, Fingerprint, FingerprintTable, FingerprintTables
from ..schema_validation import collect_fingerprint_schema_errors

LOGGER = logging.getLogger(__name__)

_PATTERN_FIELDS = ("mx_patterns", "ns_patterns", "spf_patterns", "patterns")


def _table_filename(table: str) -> str:
    """Build the YAML filename for a table.

    Args:
        table (str): Table name.

    Returns:
        str: YAML filename.
    """
    return f"{table}.yaml"


def _external_table_path(table: str, fingerprint_dirs: Iterable[Path | str] | None) -> Optional[Path]:
    """Find an external override file for a table.

    Args:
        table (str): Table name.
        fingerprint_dirs (Iterable[Path | str] | None): Extra directories searched first.

    Returns:
        Optional[Path]: Override path if one exists.
    """
    search_dirs: List[Path] = [Path(entry).expanduser() for entry in fingerprint_dirs or []]
    search_dirs.extend(base / FINGERPRINT_DIR_NAME for base in external_config_dirs())
    for directory in search_dirs:
        candidate = directory / _table_filename(table)
        if candidate.is_file():
            return candidate
    return None


def _build_fingerprint(table: str, key: str, data: dict) -> Fingerprint:
    """Build a fingerprint from a validated provider mapping.

    Args:
        table (str): Table name for error messages.
        key (str): Provider key.
        data (dict): Provider mapping.

    Returns:
        Fingerprint: Parsed fingerprint.

    Raises:
        FingerprintConfigError: If required fields for the table are missing.
    """
    missing = sorted(name for name in REQUIRED_FIELDS[table] if not data.get(name))
    if missing:
        raise FingerprintConfigError(table, f"provider {key} is missing {', '.join(missing)}")
    patterns = {name: tuple(data.get(name) or ()) for name in _PATTERN_FIELDS}
    return Fingerprint(key=key, name=data["name"], type=data.get("type"), **patterns)


def parse_table(table: str, data: dict) -> FingerprintTable:
    """Parse and validate a fingerprint table payload.

    Args:
        table (str): Table name.
        data (dict): Raw YAML mapping.

    Returns:
        FingerprintTable: Parsed table preserving file order.

    Raises:
        FingerprintConfigError: If the payload does not match the schema.
    """
    if table not in TABLE_NAMES:
        raise FingerprintConfigError(table, "unknown table name")
    errors = collect_fingerprint_schema_errors(data)
    if errors:
        first = errors[0]
        raise FingerprintConfigError(table, f"{first['location']}: {first['message']}")
    declared = data.get("table", table)
    if declared != table:
        raise FingerprintConfigError(table, f"file declares table '{declared}'")
    entries = tuple(
        _build_fingerprint(table, key, value) for key, value in data["providers"].items()
    )
    return FingerprintTable(name=table, entries=entries)


def load_table(table: str, fingerprint_dirs: Iterable[Path | str] | None = None) -> FingerprintTable:
    """Load one fingerprint table, preferring external overrides.

    Args:
        table (str): Table name.
        fingerprint_dirs (Iterable[Path | str] | None): Extra directories searched first.

    Returns:
        FingerprintTable: Loaded table.

    Raises:
        FingerprintConfigError: If the table file is invalid.
    """
    override = _external_table_path(table, fingerprint_dirs)
    if override is not None:
        LOGGER.info("Loading %s fingerprints from %s", table, override)
        source = override
    else:
        source = resources.files(FINGERPRINT_PACKAGE).joinpath(_table_filename(table))
    try:
        data = load_yaml_mapping(source)
    except ConfigurationError as exc:
        raise FingerprintConfigError(table, str(exc)) from exc
    return parse_table(table, data)


def load_fingerprint_tables(
    fingerprint_dirs: Iterable[Path | str] | None = None,
) -> FingerprintTables:
    """Load every fingerprint table.

    Args:
        fingerprint_dirs (Iterable[Path | str] | None): Extra directories searched first.

    Returns:
        FingerprintTables: Loaded table bundle.
    """
    dirs = list(fingerprint_dirs or [])
    return FingerprintTables(**{table: load_table(table, dirs) for table in TABLE_NAMES})


@lru_cache(maxsize=1)
def default_tables() -> FingerprintTables:
    """Load and cache the default fingerprint tables.

    Returns:
        FingerprintTables: Tables loaded once per process.
    """
    return load_fingerprint_tables()


def with_provider(
    table: FingerprintTable,
    key: str,
    *,
    name: str,
    type: Optional[str] = None,
    mx_patterns: Iterable[str] = (),
    ns_patterns: Iterable[str] = (),
    spf_patterns: Iterable[str] = (),
    patterns: Iterable[str] = (),
) -> FingerprintTable:
    """Register a provider, producing a new table.

    Args:
        table (FingerprintTable): Table to extend.
        key (str): Unique key for the provider.
        name (str): Provider display name.
        type (Optional[str]): Service category label.
        mx_patterns (Iterable[str]): MX exchange substrings.
        ns_patterns (Iterable[str]): NS hostname substrings.
        spf_patterns (Iterable[str]): SPF substrings.
        patterns (Iterable[str]): Free-text substrings.

    Returns:
        FingerprintTable: New table containing the provider.

    Raises:
        ValueError: If the key or name is empty or required patterns are missing.
    """
    if not key or not name:
        raise ValueError("Provider config must have a key and name")
    fingerprint = Fingerprint(
        key=key,
        name=name,
        type=type,
        mx_patterns=tuple(mx_patterns),
        ns_patterns=tuple(ns_patterns),
        spf_patterns=tuple(spf_patterns),
        patterns=tuple(patterns),
    )
    required = REQUIRED_FIELDS.get(table.name, frozenset())
    missing = sorted(field for field in required if not getattr(fingerprint, field))
    if missing:
        raise ValueError(f"Provider config must have name, {', '.join(missing)}")
    LOGGER.info("Added provider %s to %s", name, table.name)
    return table.with_entry(fingerprint)


def list_providers(table: FingerprintTable) -> List[Tuple[str, str]]:
    """List registered providers in a table.

    Args:
        table (FingerprintTable): Table to list.

    Returns:
        List[Tuple[str, str]]: (key, name) pairs in table order.
    """
    return [(entry.key, entry.name) for entry in table]
