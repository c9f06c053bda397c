"""Unit tests for domain parsing and DNSPod envelope models."""

from unittest.mock import Mock

import pytest

from dnspod_dyndns.exceptions import DecodeError, ValidationError
from dnspod_dyndns.models import (
    AddressFamily,
    Domain,
    Domains,
    ExistingRecord,
    ProviderCredential,
    ProviderStatus,
    RecordListResult,
    UpdateStatus,
)


@pytest.mark.parametrize("value, domain_name, sub_domain", [
    ("example.com", "example.com", ""),
    ("www.example.com", "example.com", "www"),
    ("a.b.example.com", "example.com", "a.b"),
    ("WWW.Example.COM.", "example.com", "www"),
    ("home.example.com.cn", "example.com.cn", "home"),
    ("example.co.uk", "example.co.uk", ""),
    ("sub:example.com", "example.com", "sub"),
    ("a.b:example.com", "example.com", "a.b"),
    (":example.com", "example.com", ""),
])
def test_domain_parse(value, domain_name, sub_domain):
    domain = Domain.parse(value)
    assert domain.domain_name == domain_name
    assert domain.sub_domain == sub_domain
    assert domain.update_status is UpdateStatus.UNSET


@pytest.mark.parametrize("value", ["localhost", "", "example..com", "sub:", "sub:localhost", "co.uk"])
def test_domain_parse_invalid(value):
    with pytest.raises(ValidationError):
        Domain.parse(value)


def test_domain_sub_domain_and_str():
    assert Domain("example.com").get_sub_domain() == "@"
    assert str(Domain("example.com")) == "example.com"
    assert Domain("example.com", "@").get_sub_domain() == "@"
    assert str(Domain("example.com", "@")) == "example.com"
    assert Domain("example.com", "www").get_sub_domain() == "www"
    assert str(Domain("example.com", "www")) == "www.example.com"


def test_address_family_record_types():
    assert AddressFamily.IPV4.record_type == "A"
    assert AddressFamily.IPV6.record_type == "AAAA"
    assert AddressFamily.from_record_type("AAAA") is AddressFamily.IPV6
    assert [f.record_type for f in AddressFamily] == ["A", "AAAA"]

    with pytest.raises(ValidationError):
        AddressFamily.from_record_type("MX")


def test_credential_login_token_hides_secret():
    credential = ProviderCredential(id="12345", secret="s3cr3t")
    assert credential.login_token == "12345,s3cr3t"
    assert "s3cr3t" not in repr(credential)


def test_provider_status_success_is_exact_string_match():
    assert ProviderStatus.from_envelope({"status": {"code": "1", "message": "ok"}}).ok
    assert ProviderStatus.from_envelope({"status": {"code": 1}}).ok
    assert not ProviderStatus.from_envelope({"status": {"code": "10", "message": "denied"}}).ok
    assert not ProviderStatus.from_envelope({"status": {"code": "1.0"}}).ok
    assert not ProviderStatus.from_envelope({"status": {}}).ok


@pytest.mark.parametrize("payload", [None, [], {"records": []}, {"status": "1"}])
def test_provider_status_requires_status_object(payload):
    with pytest.raises(DecodeError):
        ProviderStatus.from_envelope(payload)


def test_record_list_parses_records():
    result = RecordListResult.from_envelope({
        "status": {"code": "1", "message": "Action completed successful"},
        "records": [
            {"id": "42", "name": "sub", "type": "A", "value": "9.9.9.9", "enabled": "1"},
            {"id": 43, "name": "sub", "type": "A", "value": "8.8.8.8", "enabled": "0"},
        ],
    })

    assert result.status.ok
    assert result.records == [
        ExistingRecord(id="42", value="9.9.9.9", name="sub", type="A", enabled=True),
        ExistingRecord(id="43", value="8.8.8.8", name="sub", type="A", enabled=False),
    ]


def test_record_list_without_records_is_empty():
    result = RecordListResult.from_envelope({"status": {"code": "10", "message": "No records"}})
    assert result.records == []


@pytest.mark.parametrize("payload", [
    {"status": {"code": "1"}, "records": "nope"},
    {"status": {"code": "1"}, "records": ["nope"]},
])
def test_record_list_malformed_records(payload):
    with pytest.raises(DecodeError):
        RecordListResult.from_envelope(payload)


def test_domains_new_ip_result_by_record_type():
    v4 = [Domain("example.com", "a")]
    v6 = [Domain("example.com", "b")]
    domains = Domains(ipv4_domains=v4, ipv6_domains=v6)
    domains.ipv4_addr = "1.2.3.4"
    domains.ipv6_addr = "2001:db8::1"

    assert domains.get_new_ip_result("A") == ("1.2.3.4", v4)
    assert domains.get_new_ip_result("AAAA") == ("2001:db8::1", v6)
    assert domains.all() == v4 + v6


def test_domains_get_new_ip_skips_family_without_domains():
    network = Mock()
    network.load_current_ip_addresses.return_value = ("1.2.3.4", "2001:db8::1")
    domains = Domains(ipv4_domains=[Domain("example.com")])

    domains.get_new_ip(network)

    assert domains.ipv4_addr == "1.2.3.4"
    assert domains.ipv6_addr == ""


def test_domains_get_new_ip_undetected_is_empty():
    network = Mock()
    network.load_current_ip_addresses.return_value = (None, None)
    domains = Domains(ipv4_domains=[Domain("example.com")], ipv6_domains=[Domain("example.com")])

    domains.get_new_ip(network)

    assert domains.get_new_ip_result("A") == ("", domains.ipv4_domains)
    assert domains.get_new_ip_result("AAAA")[0] == ""
