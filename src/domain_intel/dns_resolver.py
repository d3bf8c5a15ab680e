"""DNS resolver wrapper over dnspython used by record gathering."""

from __future__ import annotations

import ipaddress
import logging
from typing import Iterable, List, Optional

import dns.exception
import dns.resolver

from .errors import DomainIntelError

LOGGER = logging.getLogger(__name__)


def _is_ip_address(value: str) -> bool:
    """Check whether a string is a valid IP address.

    Args:
        value (str): Input string to validate.

    Returns:
        bool: True if the value is a valid IPv4 or IPv6 address.
    """
    try:
        ipaddress.ip_address(value)
    except ValueError:
        return False
    return True


def _normalize_target(value: object) -> str:
    """Normalize a DNS name to lowercase with a trailing dot.

    Args:
        value (object): dnspython name or string.

    Returns:
        str: Normalized hostname ending in a dot.
    """
    return str(value).lower().rstrip(".") + "."


class DnsLookupError(DomainIntelError):
    """Raised when a DNS lookup fails."""

    def __init__(self, record_type: str, name: str, error: Exception) -> None:
        """Initialize a DNS lookup error.

        Args:
            record_type (str): DNS record type being queried.
            name (str): DNS name that failed to resolve.
            error (Exception): Underlying exception.
        """
        super().__init__(f"{record_type} lookup failed for {name}: {error}")
        self.record_type = record_type
        self.name = name
        self.error = error


class DnsResolver:
    """Perform DNS lookups using dnspython."""

    def __init__(
        self,
        nameservers: Optional[Iterable[str]] = None,
        timeout: Optional[float] = None,
        lifetime: Optional[float] = None,
    ) -> None:
        """Initialize the DNS resolver.

        Args:
            nameservers (Optional[Iterable[str]]): Optional nameserver IP addresses.
            timeout (Optional[float]): Per-query timeout in seconds.
            lifetime (Optional[float]): Total timeout across retries in seconds.

        Raises:
            ValueError: If a timeout or nameserver is invalid.
        """
        self._resolver = dns.resolver.Resolver()
        if timeout is not None:
            if timeout <= 0:
                raise ValueError("DNS timeout must be a positive number")
            self._resolver.timeout = timeout
        if lifetime is not None:
            if lifetime <= 0:
                raise ValueError("DNS lifetime must be a positive number")
            self._resolver.lifetime = lifetime
        if nameservers:
            servers = [str(server).strip() for server in nameservers]
            invalid = [server for server in servers if not _is_ip_address(server)]
            if invalid:
                raise ValueError(f"DNS servers must be IP addresses: {', '.join(invalid)}")
            self._resolver.nameservers = servers

    def _resolve(self, name: str, record_type: str):
        """Run a single query, mapping missing data to None.

        Args:
            name (str): DNS name to query.
            record_type (str): DNS record type.

        Returns:
            object: dnspython answer, or None for NXDOMAIN/NoAnswer.

        Raises:
            DnsLookupError: If any other DNS error occurs.
        """
        try:
            return self._resolver.resolve(name, record_type)
        except (dns.resolver.NXDOMAIN, dns.resolver.NoAnswer):
            return None
        except dns.exception.DNSException as err:
            LOGGER.warning("%s lookup failed for %s: %s", record_type, name, err)
            raise DnsLookupError(record_type, name, err) from err

    def get_a(self, name: str) -> List[str]:
        """Resolve A records for a DNS name.

        Args:
            name (str): DNS name to query.

        Returns:
            List[str]: IPv4 address strings.

        Raises:
            DnsLookupError: If a DNS error occurs during lookup.
        """
        answers = self._resolve(name, "A")
        return [str(rdata.address) for rdata in answers or []]

    def get_aaaa(self, name: str) -> List[str]:
        """Resolve AAAA records for a DNS name.

        Args:
            name (str): DNS name to query.

        Returns:
            List[str]: IPv6 address strings.

        Raises:
            DnsLookupError: If a DNS error occurs during lookup.
        """
        answers = self._resolve(name, "AAAA")
        return [str(rdata.address) for rdata in answers or []]

    def get_mx(self, domain: str) -> List[tuple[str, int]]:
        """Resolve MX records for a domain.

        Args:
            domain (str): Domain name to query.

        Returns:
            List[tuple[str, int]]: List of (host, priority) tuples.

        Raises:
            DnsLookupError: If a DNS error occurs during lookup.
        """
        answers = self._resolve(domain, "MX")
        return [
            (_normalize_target(rdata.exchange), int(rdata.preference)) for rdata in answers or []
        ]

    def get_ns(self, domain: str) -> List[str]:
        """Resolve NS records for a domain.

        Args:
            domain (str): Domain name to query.

        Returns:
            List[str]: Nameserver hostnames with trailing dots.

        Raises:
            DnsLookupError: If a DNS error occurs during lookup.
        """
        answers = self._resolve(domain, "NS")
        return [_normalize_target(rdata.target) for rdata in answers or []]

    def get_txt(self, domain: str) -> List[str]:
        """Resolve TXT records for a domain.

        Args:
            domain (str): Domain name to query.

        Returns:
            List[str]: TXT record strings with chunks joined.

        Raises:
            DnsLookupError: If a DNS error occurs during lookup.
        """
        answers = self._resolve(domain, "TXT")
        records: List[str] = []
        for rdata in answers or []:
            chunks = [
                part.decode("utf-8", errors="replace") if isinstance(part, bytes) else str(part)
                for part in rdata.strings
            ]
            records.append("".join(chunks))
        return records

    def get_cname(self, name: str) -> Optional[str]:
        """Resolve a CNAME record for a DNS name.

        Args:
            name (str): DNS name to query.

        Returns:
            Optional[str]: CNAME target with trailing dot or None if not found.

        Raises:
            DnsLookupError: If a DNS error occurs during lookup.
        """
        answers = self._resolve(name, "CNAME")
        if not answers:
            return None
        return _normalize_target(answers[0].target)

    def get_soa(self, name: str) -> Optional[tuple[str, str, int]]:
        """Resolve the SOA record for a DNS name.

        Args:
            name (str): DNS name to query.

        Returns:
            Optional[tuple[str, str, int]]: (mname, rname, serial) or None if not found.

        Raises:
            DnsLookupError: If a DNS error occurs during lookup.
        """
        answers = self._resolve(name, "SOA")
        if not answers:
            return None
        rdata = answers[0]
        return _normalize_target(rdata.mname), _normalize_target(rdata.rname), int(rdata.serial)

    def get_srv(self, name: str) -> List[tuple[int, int, int, str]]:
        """Resolve SRV records for a DNS name.

        Args:
            name (str): DNS name to query.

        Returns:
            List[tuple[int, int, int, str]]: (priority, weight, port, target) tuples.

        Raises:
            DnsLookupError: If a DNS error occurs during lookup.
        """
        answers = self._resolve(name, "SRV")
        return [
            (int(rdata.priority), int(rdata.weight), int(rdata.port), _normalize_target(rdata.target))
            for rdata in answers or []
        ]


class CachingResolver:
    """Cache DNS lookup results for a resolver instance.

    Attributes:
        resolver (object): Wrapped resolver providing DNS lookup methods.
    """

    _METHODS = frozenset(
        {"get_a", "get_aaaa", "get_mx", "get_ns", "get_txt", "get_cname", "get_soa", "get_srv"}
    )

    def __init__(self, resolver: object) -> None:
        """Initialize the caching resolver wrapper.

        Args:
            resolver (object): Base resolver providing DNS lookup methods.
        """
        self.resolver = resolver
        self._cache: dict[tuple[str, str], object] = {}

    def _cached(self, key: tuple[str, str], fn, name: str):
        """Execute a lookup and cache the result or exception.

        Args:
            key (tuple[str, str]): Cache key for the lookup.
            fn (callable): Lookup function to invoke.
            name (str): Lookup name.

        Returns:
            object: Lookup result.

        Raises:
            Exception: Any exception raised by the lookup function.
        """
        if key in self._cache:
            cached = self._cache[key]
            if isinstance(cached, Exception):
                raise cached
            return cached
        try:
            result = fn(name)
        except Exception as exc:
            self._cache[key] = exc
            raise
        self._cache[key] = result
        return result

    def __getattr__(self, attribute: str):
        """Return a caching wrapper for a resolver lookup method.

        Args:
            attribute (str): Attribute name being accessed.

        Returns:
            callable: Lookup function that caches its results.

        Raises:
            AttributeError: If the attribute is not a known lookup method.
        """
        if attribute not in self._METHODS:
            raise AttributeError(attribute)
        fn = getattr(self.resolver, attribute)

        def _lookup(name: str):
            """Resolve a name through the cache.

            Args:
                name (str): DNS name to query.

            Returns:
                object: Cached or fresh lookup result.
            """
            return self._cached((attribute, name), fn, name)

        return _lookup


__all__ = ["CachingResolver", "DnsLookupError", "DnsResolver"]
