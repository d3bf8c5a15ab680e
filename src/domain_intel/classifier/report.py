"""Provider report dataclasses."""

from __future__ import annotations

import dataclasses
from typing import Optional, Tuple

SELF_HOSTED = "Self-Hosted / Custom"
UNKNOWN_MAIL_HOST = "Unknown/Self-Hosted"
CUSTOM_DNS = "Other / Custom DNS"
UNKNOWN_DNS = "Unknown"

MX_SOURCE = "MX Record"
SPF_SOURCE = "SPF Record"


@dataclasses.dataclass(frozen=True)
class EmailHost:
    """Primary mail host identified from MX records.

    Attributes:
        provider (str): Provider display name or a self-hosted label.
        mx_servers (Tuple[str, ...]): MX exchange hostnames without trailing dots.
        matched_pattern (Optional[str]): Fingerprint pattern that matched.
    """

    provider: str
    mx_servers: Tuple[str, ...]
    matched_pattern: Optional[str] = None

    def __post_init__(self) -> None:
        """Store MX servers as a tuple."""
        object.__setattr__(self, "mx_servers", tuple(self.mx_servers))


@dataclasses.dataclass(frozen=True)
class DnsProvider:
    """DNS or registrar provider identified from NS records.

    Attributes:
        provider (str): Provider display name or a custom DNS label.
        nameservers (Tuple[str, ...]): Nameserver hostnames without trailing dots.
        matched_pattern (Optional[str]): Fingerprint pattern that matched.
    """

    provider: str
    nameservers: Tuple[str, ...]
    matched_pattern: Optional[str] = None

    def __post_init__(self) -> None:
        """Store nameservers as a tuple."""
        object.__setattr__(self, "nameservers", tuple(self.nameservers))


@dataclasses.dataclass(frozen=True)
class DetectedService:
    """Security or marketing service found in DNS data.

    Attributes:
        name (str): Service display name.
        type (str): Service category label.
        source (Optional[str]): Record kind the service was first seen in.
    """

    name: str
    type: str
    source: Optional[str] = None


@dataclasses.dataclass(frozen=True)
class ServiceReport:
    """Deduplicated services of one category.

    Attributes:
        services (Tuple[DetectedService, ...]): Services in detection order.
    """

    services: Tuple[DetectedService, ...]

    def __post_init__(self) -> None:
        """Store services as a tuple."""
        object.__setattr__(self, "services", tuple(self.services))

    @property
    def detected(self) -> bool:
        """bool: Whether any service was detected."""
        return bool(self.services)

    @property
    def count(self) -> int:
        """int: Number of detected services."""
        return len(self.services)


@dataclasses.dataclass(frozen=True)
class AuthorizedSenders:
    """Third-party senders authorized by SPF includes.

    Attributes:
        providers (Tuple[str, ...]): Provider names matched from include domains.
        spf_includes (Tuple[str, ...]): Every include domain in record order.
    """

    providers: Tuple[str, ...]
    spf_includes: Tuple[str, ...]

    def __post_init__(self) -> None:
        """Store providers and includes as tuples."""
        object.__setattr__(self, "providers", tuple(self.providers))
        object.__setattr__(self, "spf_includes", tuple(self.spf_includes))


@dataclasses.dataclass(frozen=True)
class ReportSummary:
    """Counts summarizing a provider report.

    Attributes:
        total_mx_records (int): MX records considered.
        total_ns_records (int): NS records considered.
        total_spf_includes (int): SPF include directives found.
        security_services_detected (int): Security services found.
        marketing_services_detected (int): Marketing services found.
        distinct_providers (int): Size of the union of all provider names.
    """

    total_mx_records: int
    total_ns_records: int
    total_spf_includes: int
    security_services_detected: int
    marketing_services_detected: int
    distinct_providers: int


@dataclasses.dataclass(frozen=True)
class ProviderReport:
    """Infrastructure classification for a domain.

    Attributes:
        email_host (EmailHost): Primary mail host.
        dns_provider (DnsProvider): DNS provider.
        security (ServiceReport): Email security services.
        marketing (ServiceReport): Email marketing services.
        authorized_senders (AuthorizedSenders): SPF-authorized senders.
        summary (ReportSummary): Summary counts.
    """

    email_host: EmailHost
    dns_provider: DnsProvider
    security: ServiceReport
    marketing: ServiceReport
    authorized_senders: AuthorizedSenders
    summary: ReportSummary
