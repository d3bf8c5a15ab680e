from domain_intel.fingerprints import HOSTING, Fingerprint, FingerprintTable, default_tables
from domain_intel.registration import LineWhoisParser, WhoisRecord, parse_whois
from domain_intel.registration.hosting import detect_hosting_provider, nameserver_parent
from domain_intel.registration.parser import line_value

from tests.support import SAMPLE_WHOIS

ACME_HOSTING = FingerprintTable(
    HOSTING,
    (
        Fingerprint(key="acme", name="Acme Hosting", patterns=("acmehost",)),
        Fingerprint(key="other", name="Other Cloud", patterns=("othercloud",)),
    ),
)


def test_parse_sample_whois():
    record = parse_whois(SAMPLE_WHOIS, LineWhoisParser(default_tables().hosting))

    assert record.registrar_url == "http://www.example-registrar.test"
    assert record.registrar_name == "Example Registrar Pty Ltd trading as Example Names"
    assert record.registrant_contact_name == "Jane Citizen"
    assert record.registrant_contact_email == "jane@example.com"
    assert record.admin_contact_name == "Admin Person"
    assert record.admin_contact_email == "admin@example.com"
    assert record.tech_contact_name == "Tech Person"
    assert record.tech_contact_email == "tech@example.com"
    assert record.tech_contact_id is None
    assert record.name_servers == ("ns1.cloudflare.com", "NS2.CLOUDFLARE.COM")
    assert record.hosting_provider == "Cloudflare"


def test_registrar_url_keeps_text_after_first_colon():
    record = LineWhoisParser(ACME_HOSTING).parse("Registrar URL: https://www.example.test\n")

    assert record.registrar_url == "https://www.example.test"
    assert record.registrar_name is None


def test_first_match_wins_per_field():
    text = "Registrar: First Registrar\nRegistrar: Second Registrar\n"

    record = LineWhoisParser(ACME_HOSTING).parse(text)

    assert record.registrar_name == "First Registrar"


def test_empty_values_are_skipped():
    text = "Tech Email:\nTech Email:   \nTech Email: ops@example.com\n"

    record = LineWhoisParser(ACME_HOSTING).parse(text)

    assert record.tech_contact_email == "ops@example.com"


def test_labels_are_case_insensitive():
    text = "REGISTRANT CONTACT NAME: Jane\nNameserver: ns1.acmehost.net\nNS 1: ns2.acmehost.net\n"

    record = LineWhoisParser(ACME_HOSTING).parse(text)

    assert record.registrant_contact_name == "Jane"
    assert record.name_servers == ("ns1.acmehost.net", "ns2.acmehost.net")
    assert record.hosting_provider == "Acme Hosting"


def test_no_nameservers_means_no_hosting_provider():
    record = LineWhoisParser(ACME_HOSTING).parse("Registrar: Acmehost Registrar\n")

    assert record.name_servers == ()
    assert record.hosting_provider is None


def test_empty_text_yields_empty_record():
    assert LineWhoisParser(ACME_HOSTING).parse("") == WhoisRecord()


def test_hosting_checks_full_text_after_nameservers():
    provider = detect_hosting_provider(
        ["ns1.example.net"], "Registrar: OtherCloud Inc.\nName Server: ns1.example.net", ACME_HOSTING
    )

    assert provider == "Other Cloud"


def test_hosting_falls_back_to_nameserver_parent():
    provider = detect_hosting_provider(["ns1.example.net", "ns2.example.org"], "", ACME_HOSTING)

    assert provider == "Nameserver: example.net"


def test_hosting_prefers_table_order():
    provider = detect_hosting_provider(["ns.othercloud.test", "ns.acmehost.test"], "", ACME_HOSTING)

    assert provider == "Acme Hosting"


def test_nameserver_parent_of_single_label_is_empty():
    assert nameserver_parent("localhost") == ""
    assert detect_hosting_provider(["localhost"], "", ACME_HOSTING) is None


def test_line_value():
    assert line_value("Registrar: Acme") == "Acme"
    assert line_value("Registrar:") is None
    assert line_value("no colon here") is None
