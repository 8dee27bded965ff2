"""测试用证书链生成（ECDSA-P256）"""

import ipaddress
from datetime import datetime, timedelta, timezone

import pytest
from cryptography import x509
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.asymmetric import ec
from cryptography.x509.oid import ExtensionOID, NameOID


def make_name(*common_names, unit=None):
    attributes = [x509.NameAttribute(NameOID.ORGANIZATION_NAME, "PQC-TLS Research Lab")]
    if unit:
        attributes.append(x509.NameAttribute(NameOID.ORGANIZATIONAL_UNIT_NAME, unit))
    for common_name in common_names:
        attributes.append(x509.NameAttribute(NameOID.COMMON_NAME, common_name))
    return x509.Name(attributes)


def build_certificate(subject, issuer, public_key, signing_key,
                      ca=False, path_length=None,
                      dns_names=(), ip_addresses=(),
                      not_before=None, not_after=None, extra_extensions=()):
    now = datetime.now(timezone.utc)
    builder = x509.CertificateBuilder().subject_name(
        subject
    ).issuer_name(
        issuer
    ).public_key(
        public_key
    ).serial_number(
        x509.random_serial_number()
    ).not_valid_before(
        not_before or now - timedelta(days=1)
    ).not_valid_after(
        not_after or now + timedelta(days=365)
    ).add_extension(
        x509.BasicConstraints(ca=ca, path_length=path_length if ca else None),
        critical=True,
    )

    general_names = [x509.DNSName(name) for name in dns_names]
    general_names += [x509.IPAddress(ipaddress.ip_address(address)) for address in ip_addresses]
    if general_names:
        builder = builder.add_extension(x509.SubjectAlternativeName(general_names), critical=False)
    for extension in extra_extensions:
        builder = builder.add_extension(extension, critical=False)

    return builder.sign(signing_key, hashes.SHA256())


class CertificateAuthority:
    """测试CA：可以签发中间CA和服务器证书"""

    def __init__(self, common_name, issuer=None, path_length=None,
                 not_before=None, not_after=None, ca=True):
        self.key = ec.generate_private_key(ec.SECP256R1())
        self.name = make_name(common_name, unit="Root CA" if issuer is None else "Intermediate CA")
        self.cert = build_certificate(
            self.name,
            issuer.name if issuer else self.name,
            self.key.public_key(),
            issuer.key if issuer else self.key,
            ca=ca,
            path_length=path_length,
            not_before=not_before,
            not_after=not_after,
        )

    def issue_ca(self, common_name, path_length=None, **kwargs):
        return CertificateAuthority(common_name, issuer=self, path_length=path_length, **kwargs)

    def issue_leaf(self, *common_names, dns_names=(), ip_addresses=(), **kwargs):
        key = ec.generate_private_key(ec.SECP256R1())
        return build_certificate(
            make_name(*common_names, unit="Server"),
            self.name,
            key.public_key(),
            self.key,
            dns_names=dns_names,
            ip_addresses=ip_addresses,
            **kwargs,
        )


@pytest.fixture
def make_ca():
    return CertificateAuthority


@pytest.fixture(scope="session")
def root_ca():
    return CertificateAuthority("ECDSA Root CA")


@pytest.fixture(scope="session")
def intermediate_ca(root_ca):
    return root_ca.issue_ca("ECDSA Intermediate CA", path_length=0)


@pytest.fixture(scope="session")
def server_chain(root_ca, intermediate_ca):
    """svc.internal 的完整证书链：叶子、中间CA、根CA"""
    leaf = intermediate_ca.issue_leaf("svc.internal", dns_names=["svc.internal", "*.svc.internal"])
    return [leaf, intermediate_ca.cert, root_ca.cert]


@pytest.fixture(scope="session")
def bad_san_leaf(root_ca):
    """CN为 svc.internal，但SAN扩展的DER编码被截断"""
    truncated_san = x509.UnrecognizedExtension(ExtensionOID.SUBJECT_ALTERNATIVE_NAME, b"\x30\x03\xff\xff")
    return root_ca.issue_leaf("svc.internal", extra_extensions=[truncated_san])
