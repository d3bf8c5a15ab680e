"""Exception hierarchy for the domain intelligence pipeline."""

from __future__ import annotations


class DomainIntelError(Exception):
    """Base class for errors raised by the package."""


class ConfigurationError(DomainIntelError):
    """Raised for fatal misconfiguration where no fallback is possible."""


class MissingCredentialsError(ConfigurationError):
    """Raised when a collaborator requires credentials that are not configured."""

    def __init__(self, variable: str) -> None:
        """Initialize a missing credentials error.

        Args:
            variable (str): Name of the environment variable that is not set.
        """
        super().__init__(f"{variable} is not set in environment variables")
        self.variable = variable


class FingerprintConfigError(ConfigurationError):
    """Raised when a fingerprint table file is invalid."""

    def __init__(self, table: str, message: str) -> None:
        """Initialize a fingerprint configuration error.

        Args:
            table (str): Fingerprint table name.
            message (str): Description of the problem.
        """
        super().__init__(f"Fingerprint table {table}: {message}")
        self.table = table


__all__ = [
    "ConfigurationError",
    "DomainIntelError",
    "FingerprintConfigError",
    "MissingCredentialsError",
]
