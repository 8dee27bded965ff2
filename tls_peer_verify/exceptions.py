from typing import Optional, Sequence


class PeerVerificationError(Exception):
    """对端验证基础异常"""
    pass


class ConfigurationError(PeerVerificationError, ValueError):
    """客户端TLS配置无效"""
    pass


class MalformedEndpointHintError(PeerVerificationError, ValueError):
    """端点URL无法解析"""

    def __init__(self, endpoint_hint: str, reason: Optional[str] = None):
        self.endpoint_hint = endpoint_hint
        message = f"Invalid endpointURI: {endpoint_hint}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)


class HostnameMismatchError(PeerVerificationError):
    """证书中没有与目标主机匹配的身份"""

    def __init__(self, host: str, mode=None, detail: Optional[str] = None):
        self.host = host
        self.mode = mode
        self.detail = detail
        message = f"Host name verification failed for host : {host}"
        if detail:
            message = f"{message} ({detail})"
        super().__init__(message)


class ChainValidationError(PeerVerificationError):
    """证书链有效性验证失败，原始异常保存在 __cause__"""

    def __init__(self, host: str):
        self.host = host
        super().__init__(f"Certificate Chain Validation failed for host : {host}")


class UnsupportedHandshakeParameterError(PeerVerificationError, ValueError):
    """TLS引擎不支持的协议或加密套件"""

    def __init__(self, parameter: str, values: Sequence[str], reason: Optional[str] = None):
        self.parameter = parameter
        self.values = tuple(values)
        message = f"Unsupported {parameter}: {', '.join(self.values)}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)


class CertificateVerificationError(PeerVerificationError):
    """证书链验证器（外部协作者）抛出的异常"""
    pass


class CertificateChainError(CertificateVerificationError):
    """证书链构建失败"""
    pass


class CertificateExpiredError(CertificateVerificationError):
    """证书不在有效期内"""
    pass
