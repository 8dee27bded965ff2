import logging
import ssl
from typing import Optional, Protocol, Sequence

from ..exceptions import UnsupportedHandshakeParameterError
from ..models.connection import HandshakeConfig

logger = logging.getLogger(__name__)

# 协议名称 -> ssl.TLSVersion，按版本从低到高排列
PROTOCOL_VERSIONS = {
    "SSLv3": ssl.TLSVersion.SSLv3,
    "TLSv1": ssl.TLSVersion.TLSv1,
    "TLSv1.1": ssl.TLSVersion.TLSv1_1,
    "TLSv1.2": ssl.TLSVersion.TLSv1_2,
    "TLSv1.3": ssl.TLSVersion.TLSv1_3,
}
_ORDERED_VERSIONS = list(PROTOCOL_VERSIONS.values())


class HandshakeEngine(Protocol):
    def set_enabled_protocols(self, protocols: Sequence[str]) -> None:
        ...

    def set_enabled_ciphers(self, ciphers: Sequence[str]) -> None:
        ...


class SSLContextEngine:
    """
    把协议/加密套件列表应用到 ssl.SSLContext

    OpenSSL上下文只能设置最低和最高版本，所以协议列表必须是连续的版本区间。
    """

    def __init__(self, context: ssl.SSLContext):
        self.context = context

    def set_enabled_protocols(self, protocols: Sequence[str]) -> None:
        unknown = [name for name in protocols if name not in PROTOCOL_VERSIONS]
        if unknown:
            raise UnsupportedHandshakeParameterError("protocols", unknown, "unknown protocol name")

        positions = sorted({_ORDERED_VERSIONS.index(PROTOCOL_VERSIONS[name]) for name in protocols})
        if positions != list(range(positions[0], positions[-1] + 1)):
            raise UnsupportedHandshakeParameterError(
                "protocols", protocols, "protocol versions must form a contiguous range"
            )

        try:
            self.context.minimum_version = _ORDERED_VERSIONS[positions[0]]
            self.context.maximum_version = _ORDERED_VERSIONS[positions[-1]]
        except (ValueError, ssl.SSLError) as e:
            raise UnsupportedHandshakeParameterError("protocols", protocols, str(e)) from e

    def set_enabled_ciphers(self, ciphers: Sequence[str]) -> None:
        try:
            self.context.set_ciphers(":".join(ciphers))
        except ssl.SSLError as e:
            raise UnsupportedHandshakeParameterError("ciphers", ciphers, str(e)) from e


class HandshakeConfigurator:
    """握手开始前应用协议与加密套件限制；未配置的项保持实现默认值"""

    def configure(self, engine, config: Optional[HandshakeConfig]) -> None:
        if config is None:
            return
        if isinstance(engine, ssl.SSLContext):
            engine = SSLContextEngine(engine)

        if config.protocols:
            engine.set_enabled_protocols(list(config.protocols))
            logger.debug("启用握手协议: %s", ", ".join(config.protocols))

        if config.ciphers:
            engine.set_enabled_ciphers(list(config.ciphers))
            logger.debug("启用加密套件: %s", ", ".join(config.ciphers))


def configure_context(context: ssl.SSLContext, config: Optional[HandshakeConfig]) -> ssl.SSLContext:
    """便捷函数：配置并返回同一个 SSLContext"""
    HandshakeConfigurator().configure(context, config)
    return context
