import logging
from typing import List

from cryptography import x509
from cryptography.x509.oid import ExtensionOID, NameOID

from ..models.identities import CertificateIdentitySet

logger = logging.getLogger(__name__)


def get_common_names(cert: x509.Certificate) -> List[str]:
    """提取主题中的CN，最具体的（DN中最后出现的）排在最前"""
    names = []
    for attribute in cert.subject.get_attributes_for_oid(NameOID.COMMON_NAME):
        value = attribute.value
        if isinstance(value, bytes):
            value = value.decode("utf-8", errors="replace")
        names.append(value)
    names.reverse()
    return names


def get_subject_alt_names(cert: x509.Certificate) -> List[str]:
    """
    提取SAN中的DNS名称和IP地址，保持扩展中的顺序

    Raises:
        ValueError: 证书扩展编码错误
    """
    try:
        san_ext = cert.extensions.get_extension_for_oid(ExtensionOID.SUBJECT_ALTERNATIVE_NAME)
    except x509.ExtensionNotFound:
        return []

    names = []
    for name in san_ext.value:
        if isinstance(name, x509.DNSName):
            names.append(name.value)
        elif isinstance(name, x509.IPAddress):
            names.append(str(name.value))
    return names


def extract_identities(cert: x509.Certificate) -> CertificateIdentitySet:
    """
    从对端叶子证书提取身份集合

    名称字段无法解析时返回空集合，不退回到仅用CN匹配。
    """
    try:
        return CertificateIdentitySet.of(
            common_names=get_common_names(cert),
            subject_alt_names=get_subject_alt_names(cert),
        )
    except ValueError as e:
        logger.warning("无法解析对端证书的身份字段: %s", e)
        return CertificateIdentitySet.of()
