"""
TLS客户端对端验证模块

握手完成后判断对端是否为调用方想要连接的主机，以及其证书链当前是否有效。

主要功能：
- 四种主机名验证策略：Strict、Default、DefaultAndLocalhost、AllowAll
- CN/SAN通配符匹配，IP地址只允许精确匹配
- 端点URL优先于套接字地址确定目标主机
- 握手前限制协议版本与加密套件
- 基于本地信任存储的证书链验证

使用示例：
    from tls_peer_verify import PeerValidator, SSLObjectSession, STRICT

    validator = PeerValidator(policy=STRICT)
    validator.validate(SSLObjectSession(ssl_sock), "https://svc.internal:8443/path")
"""

from .core import (
    PeerValidator,
    VerificationPolicy,
    HandshakeConfigurator,
    TrustStoreChainVerifier,
    SSLObjectSession,
    StaticPeerSession,
    evaluate,
    extract_identities,
    is_localhost,
    matches,
    resolve_intended_host,
    STRICT,
    DEFAULT,
    DEFAULT_AND_LOCALHOST,
    ALLOW_ALL,
)

from .models import (
    CertificateIdentitySet,
    VerificationMode,
    ConnectionContext,
    HandshakeConfig,
)

from .exceptions import (
    PeerVerificationError,
    ConfigurationError,
    MalformedEndpointHintError,
    HostnameMismatchError,
    ChainValidationError,
    UnsupportedHandshakeParameterError,
    CertificateVerificationError,
    CertificateChainError,
    CertificateExpiredError,
)

__all__ = [
    # 核心类
    'PeerValidator',
    'VerificationPolicy',
    'HandshakeConfigurator',
    'TrustStoreChainVerifier',
    'SSLObjectSession',
    'StaticPeerSession',
    'evaluate',
    'extract_identities',
    'is_localhost',
    'matches',
    'resolve_intended_host',
    'STRICT',
    'DEFAULT',
    'DEFAULT_AND_LOCALHOST',
    'ALLOW_ALL',

    # 数据模型
    'CertificateIdentitySet',
    'VerificationMode',
    'ConnectionContext',
    'HandshakeConfig',

    # 异常类
    'PeerVerificationError',
    'ConfigurationError',
    'MalformedEndpointHintError',
    'HostnameMismatchError',
    'ChainValidationError',
    'UnsupportedHandshakeParameterError',
    'CertificateVerificationError',
    'CertificateChainError',
    'CertificateExpiredError',
]

__version__ = "1.0.0"
