import pytest

from tls_peer_verify.core.identity_extractor import (
    extract_identities,
    get_common_names,
    get_subject_alt_names,
)


class TestExtractIdentities:
    """从 cryptography 证书提取CN与SAN"""

    def test_common_name_and_dns_names(self, root_ca):
        cert = root_ca.issue_leaf("www.example.com", dns_names=["www.example.com", "*.example.com"])
        identities = extract_identities(cert)
        assert identities.common_names == ("www.example.com",)
        assert identities.subject_alt_names == ("www.example.com", "*.example.com")

    def test_ip_address_names_are_strings(self, root_ca):
        cert = root_ca.issue_leaf("node", dns_names=["node.local"], ip_addresses=["192.0.2.1", "2001:db8::1"])
        assert get_subject_alt_names(cert) == ["node.local", "192.0.2.1", "2001:db8::1"]

    def test_most_specific_common_name_first(self, root_ca):
        cert = root_ca.issue_leaf("outer.example.com", "inner.example.com")
        assert get_common_names(cert) == ["inner.example.com", "outer.example.com"]
        assert extract_identities(cert).first_common_name == "inner.example.com"

    def test_certificate_without_names(self, root_ca):
        cert = root_ca.issue_leaf()
        identities = extract_identities(cert)
        assert identities.is_empty
        assert identities.candidates() == []

    def test_no_san_extension(self, root_ca):
        cert = root_ca.issue_leaf("only-cn.example.com")
        assert get_subject_alt_names(cert) == []
        assert extract_identities(cert).candidates() == ["only-cn.example.com"]

    def test_malformed_san_extension_yields_empty_set(self, bad_san_leaf):
        with pytest.raises(ValueError):
            get_subject_alt_names(bad_san_leaf)
        identities = extract_identities(bad_san_leaf)
        assert identities.is_empty
        assert identities.candidates() == []
