from domain_intel.dns_resolver import DnsLookupError
from domain_intel.resolution import SearchCandidate

GOOGLE_SPF = "v=spf1 include:_spf.google.com include:sendgrid.net ~all"


class FakeResolver:
    def __init__(
        self,
        mx=None,
        txt=None,
        ns=None,
        a=None,
        aaaa=None,
        cname=None,
        soa=None,
        srv=None,
        errors=None,
    ):
        self.mx = mx or {}
        self.txt = txt or {}
        self.ns = ns or {}
        self.a = a or {}
        self.aaaa = aaaa or {}
        self.cname = cname or {}
        self.soa = soa or {}
        self.srv = srv or {}
        self.errors = errors or {}

    def _maybe_fail(self, record_type: str, name: str):
        error = self.errors.get((record_type, name))
        if error is not None:
            raise DnsLookupError(record_type, name, error)

    def get_mx(self, domain: str):
        self._maybe_fail("MX", domain)
        return self.mx.get(domain, [])

    def get_txt(self, domain: str):
        self._maybe_fail("TXT", domain)
        return self.txt.get(domain, [])

    def get_ns(self, domain: str):
        self._maybe_fail("NS", domain)
        return self.ns.get(domain, [])

    def get_a(self, name: str):
        self._maybe_fail("A", name)
        return self.a.get(name, [])

    def get_aaaa(self, name: str):
        self._maybe_fail("AAAA", name)
        return self.aaaa.get(name, [])

    def get_cname(self, name: str):
        self._maybe_fail("CNAME", name)
        return self.cname.get(name)

    def get_soa(self, name: str):
        self._maybe_fail("SOA", name)
        return self.soa.get(name)

    def get_srv(self, name: str):
        self._maybe_fail("SRV", name)
        return self.srv.get(name, [])


def google_workspace_resolver(domain: str = "example.com") -> FakeResolver:
    return FakeResolver(
        mx={domain: [("aspmx.l.google.com.", 1), ("alt1.aspmx.l.google.com.", 5)]},
        txt={domain: [GOOGLE_SPF, "google-site-verification=abc"]},
        ns={domain: ["ns1.cloudflare.com.", "ns2.cloudflare.com."]},
        soa={domain: ("ns1.cloudflare.com.", "dns.cloudflare.com.", 1)},
    )


class FakeReachability:
    def __init__(self, reachable=()):
        self.reachable = set(reachable)
        self.calls = []

    def is_reachable(self, domain: str) -> bool:
        self.calls.append(domain)
        return domain in self.reachable


class FakeSearch:
    def __init__(self, result=None):
        self.result = result
        self.calls = []

    def top_result(self, name: str):
        self.calls.append(name)
        return self.result


class FakeInference:
    def __init__(self, domains=None, error=None):
        self.domains = domains or []
        self.error = error
        self.calls = []

    def suggest_domains(self, name: str):
        self.calls.append(name)
        if self.error is not None:
            raise self.error
        return list(self.domains)


class FakeWhoisClient:
    def __init__(self, text="", error=None):
        self.text = text
        self.error = error
        self.calls = []

    def lookup(self, domain: str) -> str:
        self.calls.append(domain)
        if self.error is not None:
            raise self.error
        return self.text


def search_candidate(domain: str, *, title=None, score: float = 0.9) -> SearchCandidate:
    return SearchCandidate(
        domain=domain,
        url=f"https://{domain}/",
        title=domain if title is None else title,
        snippet="Matched 1 tokens",
        relevance_score=score,
    )


SAMPLE_WHOIS = """\
Domain Name: EXAMPLE.COM
Registrar WHOIS Server: whois.example-registrar.test
Registrar URL: http://www.example-registrar.test
Registrar: Example Registrar Pty Ltd trading as Example Names
Registrant Name: Jane Citizen
Registrant Email: jane@example.com
Admin Name: Admin Person
Admin Email: admin@example.com
Tech Name: Tech Person
Tech Email: tech@example.com
Name Server: ns1.cloudflare.com
Name Server: NS2.CLOUDFLARE.COM
Name Server: ns1.cloudflare.com
"""
