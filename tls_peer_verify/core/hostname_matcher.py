"""
主机名匹配

目标主机必须匹配证书的第一个CN或任意一个SAN。通配符只能占据最左侧的
完整标签（如 "*.example.com"）：

- 严格模式下 "*.example.com" 只匹配同一级的子域名，例如 "a.example.com"，
  不匹配 "a.b.example.com"
- 默认模式下匹配所有子域名，包括 "a.b.example.com"

IP地址形式的主机永远不参与通配符匹配，只能与证书身份精确相等。
"""

import ipaddress
import logging
from typing import List, Optional

from ..models.identities import CertificateIdentitySet

logger = logging.getLogger(__name__)

# 这些二级域名下的 "*.co.uk" 之类通配符会覆盖整个注册域，一律拒绝
BAD_COUNTRY_2LDS = frozenset({
    "ac", "co", "com", "ed", "edu", "go", "gouv", "gov",
    "info", "lg", "ne", "net", "or", "org",
})


def _strip_brackets(host: str) -> str:
    if host.startswith("[") and host.endswith("]"):
        return host[1:-1]
    return host


def is_ip_literal(host: Optional[str]) -> bool:
    """判断主机是否为IPv4/IPv6字面量（允许方括号和zone id）"""
    if not host:
        return False
    try:
        ipaddress.ip_address(_strip_brackets(host.strip()))
    except ValueError:
        return False
    return True


def normalize_host(name: str) -> str:
    """去空白、转小写；IP字面量转换为规范形式，使 0:0:0:0:0:0:0:1 与 ::1 相等"""
    name = name.strip().lower()
    try:
        return str(ipaddress.ip_address(_strip_brackets(name)))
    except ValueError:
        return name


def _valid_country_wildcard(labels: List[str]) -> bool:
    if len(labels) != 3 or len(labels[2]) != 2:
        return True
    return labels[1] not in BAD_COUNTRY_2LDS


def _wildcard_matches(identity: str, host: str, strict: bool) -> bool:
    labels = identity.split(".")
    if identity.count("*") != 1 or labels[0] != "*" or len(labels) < 3:
        return False
    if not _valid_country_wildcard(labels):
        return False

    suffix = identity[1:]  # ".example.com"
    if not host.endswith(suffix):
        return False
    prefix = host[:-len(suffix)]
    if not prefix or any(not label for label in prefix.split(".")):
        return False

    if strict:
        return "." not in prefix
    return True


def matches(host: Optional[str],
            identity_set: Optional[CertificateIdentitySet],
            strict: bool) -> bool:
    """
    检查主机名是否匹配证书身份集合

    Args:
        host: 目标主机名
        identity_set: 证书声明的身份（CN与SAN）
        strict: True时通配符只覆盖一个标签

    Returns:
        第一个匹配的候选身份出现时返回True；身份集合为空或全部不匹配返回False
    """
    if not host or identity_set is None:
        return False

    host = normalize_host(host)
    ip_host = is_ip_literal(host)

    for candidate in identity_set.candidates():
        if not isinstance(candidate, str):
            continue
        identity = candidate.strip().lower()
        if "*" in identity:
            matched = not ip_host and _wildcard_matches(identity, host, strict)
        else:
            matched = host == normalize_host(identity)

        if matched:
            logger.debug("主机 %s 匹配证书身份 %s (strict=%s)", host, candidate, strict)
            return True

    return False
