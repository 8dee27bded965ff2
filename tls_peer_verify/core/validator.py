import logging
from typing import Any, Optional

from ..exceptions import (
    CertificateChainError,
    ChainValidationError,
    HostnameMismatchError,
)
from ..models.connection import ConnectionContext
from ..models.identities import VerificationMode
from .chain_verifier import ChainVerifier
from .endpoint_resolver import resolve_intended_host
from .identity_extractor import extract_identities
from .policies import DEFAULT, VerificationPolicy, evaluate
from .session import PeerSession

logger = logging.getLogger(__name__)


class PeerValidator:
    """
    握手完成后的对端验证 - 核心类

    流程：确定目标主机 -> 主机名策略验证 -> 证书链有效性验证。
    任一步失败都会抛出异常，调用方应终止该连接。
    """

    def __init__(self,
                 policy: Optional[VerificationPolicy] = None,
                 chain_verifier: Optional[ChainVerifier] = None):
        self.policy = policy or DEFAULT
        self.chain_verifier = chain_verifier

        if self.policy.mode is VerificationMode.ALLOW_ALL:
            logger.warning("主机名验证已关闭 (AllowAll)")

    def validate(self,
                 session: PeerSession,
                 endpoint_hint: Optional[str] = None,
                 remote_address: Any = None) -> None:
        """
        验证对端

        Raises:
            MalformedEndpointHintError: 端点URL无法解析
            HostnameMismatchError: 证书身份与目标主机不匹配
            ChainValidationError: 证书链验证失败（验证器抛出的原始异常在 __cause__）
        """
        # 1. 确定目标主机
        host = resolve_intended_host(endpoint_hint, remote_address)

        # 2. 主机名验证
        chain = session.peer_certificate_chain()
        # AllowAll 不读取证书内容
        identity_set = None
        if chain and self.policy.mode is not VerificationMode.ALLOW_ALL:
            identity_set = extract_identities(chain[0])
        try:
            evaluate(self.policy, host, identity_set)
        except HostnameMismatchError as e:
            logger.warning("主机名验证失败: %s", e)
            raise

        # 3. 证书链验证
        if self.chain_verifier is None:
            logger.info("未配置证书链验证器，跳过证书链验证: %s", host)
            return

        try:
            if not chain:
                raise CertificateChainError("Peer presented no certificate")
            self.chain_verifier.verify_certificate_validity(chain)
        except Exception as e:
            logger.warning("证书链验证失败 %s: %s", host, e)
            raise ChainValidationError(host) from e

    def validate_connection(self, context: ConnectionContext, session: PeerSession) -> None:
        """使用连接上下文中记录的端点URL和对端地址进行验证"""
        self.validate(session, context.endpoint_hint, context.remote_address)
