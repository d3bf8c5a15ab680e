import pytest

from domain_intel.output import to_text, whois_to_text
from domain_intel.registration import WhoisRecord
from domain_intel.resolution import ResolutionResult
from domain_intel.runner import build_report
from domain_intel.status import SearchMethod

from tests.support import SAMPLE_WHOIS, FakeWhoisClient, google_workspace_resolver, search_candidate


@pytest.fixture(autouse=True)
def _isolated_config_home(monkeypatch, tmp_path):
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg"))


def _resolution():
    return ResolutionResult(
        original_input="Example Pty Ltd",
        search_method=SearchMethod.FALLBACK_GUESS,
        domain="examplepty.com",
        alternatives=[search_candidate("examplepty.com", score=0.4)],
    )


def test_resolution_text():
    text = to_text(_resolution())

    lines = text.splitlines()
    assert lines[0] == "Input: Example Pty Ltd"
    assert "Domain: examplepty.com" in lines
    assert "Method: fallback_guess" in lines
    assert "Confidence: low" in lines
    assert "  - examplepty.com (0.40) Matched 1 tokens" in lines


def test_no_result_text():
    text = to_text(ResolutionResult.no_result("???"))

    assert "Domain: (not found)" in text
    assert "Confidence: none" in text
    assert "Alternatives:" not in text


def test_report_text_sections():
    report = build_report(
        "example.com",
        resolver=google_workspace_resolver(),
        whois_client=FakeWhoisClient(text=SAMPLE_WHOIS),
        report_time="2026-01-31 19:37",
    )

    text = to_text(_resolution(), report)
    lines = text.splitlines()

    assert "Report for example.com (2026-01-31 19:37 UTC)" in lines
    assert "Domain check: NOERROR" in lines
    assert "Email host: Google Workspace (matched aspmx.l.google.com)" in lines
    assert "  MX aspmx.l.google.com" in lines
    assert "DNS provider: Cloudflare (matched cloudflare.com)" in lines
    assert "Authorized senders: Google Workspace, SendGrid" in lines
    assert "SPF includes: _spf.google.com, sendgrid.net" in lines
    assert "  registrarUrl: http://www.example-registrar.test" in lines
    assert "  nameServers: ns1.cloudflare.com, NS2.CLOUDFLARE.COM" in lines
    assert "Registrar: Example Registrar Pty Ltd (trading as Example Names)" in lines


def test_whois_text_lists_present_fields():
    text = whois_to_text(WhoisRecord(registrar_name="Acme", name_servers=["ns1.acme.test"]))

    assert text.splitlines() == ["registrarName: Acme", "nameServers: ns1.acme.test"]


def test_whois_text_empty_record():
    assert whois_to_text(WhoisRecord()) == "No WHOIS fields found"


def test_template_override_from_config_home(tmp_path):
    template_dir = tmp_path / "xdg" / "domain-intel" / "templates"
    template_dir.mkdir(parents=True)
    (template_dir / "resolution.txt.j2").write_text(
        "{{ resolution.domain }} via {{ resolution.searchMethod }}\n", encoding="utf-8"
    )

    assert to_text(_resolution()) == "examplepty.com via fallback_guess"
