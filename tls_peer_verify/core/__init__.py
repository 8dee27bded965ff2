"""
对端验证 - 核心包

提供主机名匹配、验证策略、目标主机解析、握手配置和证书链验证。
"""

from .loopback import is_localhost, LOCALHOSTS
from .hostname_matcher import matches, is_ip_literal
from .policies import (
    VerificationPolicy,
    evaluate,
    STRICT,
    DEFAULT,
    DEFAULT_AND_LOCALHOST,
    ALLOW_ALL,
)
from .endpoint_resolver import resolve_intended_host
from .identity_extractor import extract_identities
from .session import PeerSession, SSLObjectSession, StaticPeerSession
from .handshake_configurator import HandshakeConfigurator, SSLContextEngine, configure_context
from .chain_builder import CertificateChainBuilder
from .chain_verifier import ChainVerifier, TrustStoreChainVerifier
from .validator import PeerValidator

__all__ = [
    'is_localhost',
    'LOCALHOSTS',
    'matches',
    'is_ip_literal',
    'VerificationPolicy',
    'evaluate',
    'STRICT',
    'DEFAULT',
    'DEFAULT_AND_LOCALHOST',
    'ALLOW_ALL',
    'resolve_intended_host',
    'extract_identities',
    'PeerSession',
    'SSLObjectSession',
    'StaticPeerSession',
    'HandshakeConfigurator',
    'SSLContextEngine',
    'configure_context',
    'CertificateChainBuilder',
    'ChainVerifier',
    'TrustStoreChainVerifier',
    'PeerValidator',
]
