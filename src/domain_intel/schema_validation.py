"""Shared JSON Schema validation for YAML configuration payloads."""

from __future__ import annotations

import json
from functools import lru_cache
from importlib import resources

from jsonschema import Draft202012Validator
from jsonschema.exceptions import ValidationError

from .config import FINGERPRINT_PACKAGE, RESOURCE_PACKAGE

_FINGERPRINT_SCHEMA_FILENAME = "fingerprint.schema.json"
_SETTINGS_SCHEMA_FILENAME = "settings.schema.json"


@lru_cache(maxsize=None)
def _load_schema_validator(package: str, filename: str) -> Draft202012Validator:
    """Load and cache a packaged JSON Schema validator.

    Args:
        package (str): Resource package holding the schema.
        filename (str): Schema file name.

    Returns:
        Draft202012Validator: Validator for the schema.
    """
    schema_text = resources.files(package).joinpath(filename).read_text(encoding="utf-8")
    schema = json.loads(schema_text)
    return Draft202012Validator(schema)


def _schema_error_data(err: ValidationError) -> dict[str, str]:
    """Render one schema validation error as a structured mapping.

    Args:
        err (ValidationError): JSON Schema validation error.

    Returns:
        dict[str, str]: Error location and message fields.
    """
    location = ".".join(str(part) for part in err.absolute_path) or "<root>"
    return {"location": location, "message": str(err.message)}


def _collect_schema_errors(
    payload: object, package: str, filename: str
) -> list[dict[str, str]]:
    """Collect deterministic schema validation errors.

    Args:
        payload (object): Payload to validate.
        package (str): Resource package holding the schema.
        filename (str): Schema file name.

    Returns:
        list[dict[str, str]]: Sorted schema validation errors.
    """
    validator = _load_schema_validator(package, filename)
    errors = [_schema_error_data(err) for err in validator.iter_errors(payload)]
    return sorted(errors, key=lambda item: (item["location"], item["message"]))


def collect_fingerprint_schema_errors(payload: object) -> list[dict[str, str]]:
    """Collect schema validation errors for a fingerprint table payload.

    Args:
        payload (object): Fingerprint table payload to validate.

    Returns:
        list[dict[str, str]]: Sorted schema validation errors.
    """
    return _collect_schema_errors(payload, FINGERPRINT_PACKAGE, _FINGERPRINT_SCHEMA_FILENAME)


def collect_settings_schema_errors(payload: object) -> list[dict[str, str]]:
    """Collect schema validation errors for a resolver settings payload.

    Args:
        payload (object): Settings mapping to validate.

    Returns:
        list[dict[str, str]]: Sorted schema validation errors.
    """
    return _collect_schema_errors(payload, RESOURCE_PACKAGE, _SETTINGS_SCHEMA_FILENAME)
