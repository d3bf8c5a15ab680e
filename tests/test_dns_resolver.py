from types import SimpleNamespace

import dns.exception
import dns.resolver
import pytest

from domain_intel.dns_records import RecordKind, gather_records
from domain_intel.dns_resolver import CachingResolver, DnsLookupError, DnsResolver
from domain_intel.errors import DomainIntelError


class DummyResolver:
    def __init__(self, answers):
        self.answers = answers
        self.nameservers = []
        self.timeout = None
        self.lifetime = None

    def resolve(self, name: str, record_type: str):
        result = self.answers[(name, record_type)]
        if isinstance(result, Exception):
            raise result
        return result


def _make_resolver(monkeypatch, answers):
    dummy = DummyResolver(answers)
    monkeypatch.setattr(dns.resolver, "Resolver", lambda: dummy)
    return DnsResolver()


def test_get_mx_success(monkeypatch):
    answers = {
        ("example.com", "MX"): [
            SimpleNamespace(exchange="ASPMX.L.Google.com.", preference=1),
            SimpleNamespace(exchange="alt1.aspmx.l.google.com", preference=5),
        ]
    }
    resolver = _make_resolver(monkeypatch, answers)

    assert resolver.get_mx("example.com") == [
        ("aspmx.l.google.com.", 1),
        ("alt1.aspmx.l.google.com.", 5),
    ]


def test_get_mx_nxdomain_returns_empty(monkeypatch):
    answers = {("example.com", "MX"): dns.resolver.NXDOMAIN()}
    resolver = _make_resolver(monkeypatch, answers)

    assert resolver.get_mx("example.com") == []


def test_get_mx_dns_exception_raises_lookup_error(monkeypatch):
    answers = {("example.com", "MX"): dns.exception.DNSException("boom")}
    resolver = _make_resolver(monkeypatch, answers)

    with pytest.raises(DnsLookupError) as exc:
        resolver.get_mx("example.com")

    assert exc.value.record_type == "MX"
    assert exc.value.name == "example.com"
    assert isinstance(exc.value, DomainIntelError)


def test_get_ns_success(monkeypatch):
    answers = {
        ("example.com", "NS"): [
            SimpleNamespace(target="NS1.Cloudflare.com."),
            SimpleNamespace(target="ns2.cloudflare.com."),
        ]
    }
    resolver = _make_resolver(monkeypatch, answers)

    assert resolver.get_ns("example.com") == ["ns1.cloudflare.com.", "ns2.cloudflare.com."]


def test_get_ns_no_answer_returns_empty(monkeypatch):
    answers = {("example.com", "NS"): dns.resolver.NoAnswer()}
    resolver = _make_resolver(monkeypatch, answers)

    assert resolver.get_ns("example.com") == []


def test_get_txt_joins_chunks(monkeypatch):
    answers = {
        ("example.com", "TXT"): [
            SimpleNamespace(strings=[b"v=spf1 ", b"include:_spf.google.com", " ~all"]),
        ]
    }
    resolver = _make_resolver(monkeypatch, answers)

    assert resolver.get_txt("example.com") == ["v=spf1 include:_spf.google.com ~all"]


def test_get_txt_replaces_undecodable_bytes(monkeypatch):
    answers = {
        ("example.com", "TXT"): [
            SimpleNamespace(strings=[b"v=spf1 include:_spf.google.com ~all"]),
            SimpleNamespace(strings=[b"verif=\xff\xfe"]),
        ]
    }
    resolver = _make_resolver(monkeypatch, answers)

    assert resolver.get_txt("example.com") == [
        "v=spf1 include:_spf.google.com ~all",
        "verif=\ufffd\ufffd",
    ]


def test_undecodable_txt_keeps_spf_in_gathered_records(monkeypatch):
    answers = {
        ("example.com", "TXT"): [
            SimpleNamespace(strings=[b"v=spf1 include:_spf.google.com ~all"]),
            SimpleNamespace(strings=[b"verif=\xff\xfe"]),
        ]
    }
    resolver = _make_resolver(monkeypatch, answers)

    records = gather_records("example.com", ["TXT"], resolver=resolver)

    assert records.lookups[RecordKind.TXT].success is True
    assert records.txt[0] == "v=spf1 include:_spf.google.com ~all"


def test_get_txt_dns_exception_raises_lookup_error(monkeypatch):
    answers = {("example.com", "TXT"): dns.exception.Timeout()}
    resolver = _make_resolver(monkeypatch, answers)

    with pytest.raises(DnsLookupError) as exc:
        resolver.get_txt("example.com")

    assert exc.value.record_type == "TXT"


def test_get_soa_success(monkeypatch):
    answers = {
        ("example.com", "SOA"): [
            SimpleNamespace(mname="ns1.example.com.", rname="hostmaster.example.com.", serial=7)
        ]
    }
    resolver = _make_resolver(monkeypatch, answers)

    assert resolver.get_soa("example.com") == ("ns1.example.com.", "hostmaster.example.com.", 7)


def test_get_soa_nxdomain_returns_none(monkeypatch):
    answers = {("missing.example", "SOA"): dns.resolver.NXDOMAIN()}
    resolver = _make_resolver(monkeypatch, answers)

    assert resolver.get_soa("missing.example") is None


def test_get_cname_success(monkeypatch):
    answers = {("www.example.com", "CNAME"): [SimpleNamespace(target="Edge.Example.net.")]}
    resolver = _make_resolver(monkeypatch, answers)

    assert resolver.get_cname("www.example.com") == "edge.example.net."


def test_get_srv_success(monkeypatch):
    answers = {
        ("_sip._tls.example.com", "SRV"): [
            SimpleNamespace(priority=100, weight=1, port=443, target="sip.provider.test."),
        ]
    }
    resolver = _make_resolver(monkeypatch, answers)

    assert resolver.get_srv("_sip._tls.example.com") == [(100, 1, 443, "sip.provider.test.")]


def test_get_a_and_aaaa_success(monkeypatch):
    answers = {
        ("example.com", "A"): [SimpleNamespace(address="192.0.2.1")],
        ("example.com", "AAAA"): [SimpleNamespace(address="2001:db8::1")],
    }
    resolver = _make_resolver(monkeypatch, answers)

    assert resolver.get_a("example.com") == ["192.0.2.1"]
    assert resolver.get_aaaa("example.com") == ["2001:db8::1"]


def test_nameserver_ips_are_used(monkeypatch):
    dummy = DummyResolver({})
    monkeypatch.setattr(dns.resolver, "Resolver", lambda: dummy)

    DnsResolver(nameservers=["1.1.1.1", "2001:db8::1"])

    assert dummy.nameservers == ["1.1.1.1", "2001:db8::1"]


def test_nameserver_hostnames_are_rejected(monkeypatch):
    dummy = DummyResolver({})
    monkeypatch.setattr(dns.resolver, "Resolver", lambda: dummy)

    with pytest.raises(ValueError):
        DnsResolver(nameservers=["dns.example.test"])


def test_dns_timeout_and_lifetime_are_set(monkeypatch):
    dummy = DummyResolver({})
    monkeypatch.setattr(dns.resolver, "Resolver", lambda: dummy)

    DnsResolver(timeout=2.5, lifetime=7.0)

    assert dummy.timeout == 2.5
    assert dummy.lifetime == 7.0


def test_dns_timeout_rejects_non_positive(monkeypatch):
    dummy = DummyResolver({})
    monkeypatch.setattr(dns.resolver, "Resolver", lambda: dummy)

    with pytest.raises(ValueError):
        DnsResolver(timeout=0)
    with pytest.raises(ValueError):
        DnsResolver(lifetime=-1)


def test_caching_resolver_caches_successful_lookup():
    class _Resolver:
        def __init__(self):
            self.calls = 0

        def get_ns(self, domain: str):
            self.calls += 1
            return ["ns1.example.test."]

    resolver = _Resolver()
    cached = CachingResolver(resolver)

    assert cached.get_ns("example.com") == ["ns1.example.test."]
    assert cached.get_ns("example.com") == ["ns1.example.test."]
    assert resolver.calls == 1


def test_caching_resolver_caches_errors():
    class _Resolver:
        def __init__(self):
            self.calls = 0

        def get_txt(self, domain: str):
            self.calls += 1
            raise DnsLookupError("TXT", domain, ValueError("boom"))

    resolver = _Resolver()
    cached = CachingResolver(resolver)

    with pytest.raises(DnsLookupError):
        cached.get_txt("example.com")
    with pytest.raises(DnsLookupError):
        cached.get_txt("example.com")

    assert resolver.calls == 1


def test_caching_resolver_rejects_unknown_methods():
    cached = CachingResolver(object())

    with pytest.raises(AttributeError):
        cached.get_caa("example.com")
