"""
TLS客户端配置
主机名验证模式、握手协议/加密套件限制、信任存储
"""

import os
from pathlib import Path
from typing import List, Mapping, Optional, Tuple

from cryptography import x509
from pydantic import BaseModel, ConfigDict, field_validator

from .core.chain_verifier import verifier_from_anchors
from .core.policies import VerificationPolicy
from .core.validator import PeerValidator
from .exceptions import ConfigurationError
from .models.connection import HandshakeConfig, parse_name_list
from .models.identities import VerificationMode

# 环境变量
ENV_HOSTNAME_VERIFIER = "TLS_HOSTNAME_VERIFIER"
ENV_HTTPS_PROTOCOLS = "TLS_HTTPS_PROTOCOLS"
ENV_PREFERRED_CIPHERS = "TLS_PREFERRED_CIPHERS"
ENV_TRUST_STORE = "TLS_TRUST_STORE"

# 默认验证模式
DEFAULT_VERIFICATION_MODE = VerificationMode.DEFAULT

# 传输配置中使用的策略名称
VERIFIER_NAMES = {
    "strict": VerificationMode.STRICT,
    "default": VerificationMode.DEFAULT,
    "defaultandlocalhost": VerificationMode.DEFAULT_AND_LOCALHOST,
    "allowall": VerificationMode.ALLOW_ALL,
}


def parse_verification_mode(name) -> VerificationMode:
    """
    解析验证模式名称

    支持 "Strict"、"Default"、"DefaultAndLocalhost"、"AllowAll"（不区分大小写）
    以及枚举值（如 "default_and_localhost"）；空值返回默认模式。
    """
    if isinstance(name, VerificationMode):
        return name
    if name is None or not str(name).strip():
        return DEFAULT_VERIFICATION_MODE

    key = str(name).strip().lower().replace("_", "").replace("-", "")
    if key not in VERIFIER_NAMES:
        raise ConfigurationError(
            f"Unknown hostname verifier '{name}', expected one of: "
            "Strict, Default, DefaultAndLocalhost, AllowAll"
        )
    return VERIFIER_NAMES[key]


class ClientTLSConfig(BaseModel):
    """客户端TLS配置"""

    model_config = ConfigDict(frozen=True)

    hostname_verifier: VerificationMode = DEFAULT_VERIFICATION_MODE
    https_protocols: Optional[Tuple[str, ...]] = None
    preferred_ciphers: Optional[Tuple[str, ...]] = None
    trust_store_paths: Tuple[str, ...] = ()

    @field_validator("hostname_verifier", mode="before")
    @classmethod
    def _parse_verifier(cls, value):
        return parse_verification_mode(value)

    @field_validator("https_protocols", "preferred_ciphers", mode="before")
    @classmethod
    def _parse_names(cls, value):
        return parse_name_list(value)

    @field_validator("trust_store_paths", mode="before")
    @classmethod
    def _parse_paths(cls, value):
        if value is None:
            return ()
        if isinstance(value, (str, Path)):
            value = str(value).split(os.pathsep)
        return tuple(str(path).strip() for path in value if str(path).strip())

    @property
    def policy(self) -> VerificationPolicy:
        return VerificationPolicy.for_mode(self.hostname_verifier)

    def handshake_config(self) -> HandshakeConfig:
        return HandshakeConfig(protocols=self.https_protocols, ciphers=self.preferred_ciphers)


def get_config_from_env(environ: Optional[Mapping[str, str]] = None) -> ClientTLSConfig:
    """从环境变量读取客户端TLS配置"""
    if environ is None:
        environ = os.environ

    return ClientTLSConfig(
        hostname_verifier=environ.get(ENV_HOSTNAME_VERIFIER),
        https_protocols=environ.get(ENV_HTTPS_PROTOCOLS),
        preferred_ciphers=environ.get(ENV_PREFERRED_CIPHERS),
        trust_store_paths=environ.get(ENV_TRUST_STORE),
    )


def load_trust_anchors(paths) -> List[x509.Certificate]:
    """加载PEM格式的根CA证书（每个文件可以包含多张证书）"""
    anchors: List[x509.Certificate] = []
    for path in paths:
        try:
            data = Path(path).read_bytes()
            anchors.extend(x509.load_pem_x509_certificates(data))
        except (OSError, ValueError) as e:
            raise ConfigurationError(f"Cannot load trust store {path}: {e}") from e
    return anchors


def build_peer_validator(config: Optional[ClientTLSConfig] = None) -> PeerValidator:
    """根据配置创建对端验证器；没有信任存储时不做证书链验证"""
    if config is None:
        config = get_config_from_env()

    chain_verifier = verifier_from_anchors(load_trust_anchors(config.trust_store_paths))
    return PeerValidator(policy=config.policy, chain_verifier=chain_verifier)
