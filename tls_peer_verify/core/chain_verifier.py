import logging
from datetime import datetime, timezone
from typing import List, Optional, Protocol, Sequence

from cryptography import x509
from cryptography.exceptions import InvalidSignature

from ..exceptions import (
    CertificateChainError,
    CertificateExpiredError,
    CertificateVerificationError,
)
from .chain_builder import CertificateChainBuilder

logger = logging.getLogger(__name__)


class ChainVerifier(Protocol):
    """
    证书链有效性验证器

    失败时应抛出 CertificateVerificationError；PeerValidator 会把任何异常
    包装为 ChainValidationError。
    """

    def verify_certificate_validity(self, chain: Sequence[x509.Certificate]) -> None:
        ...


class TrustStoreChainVerifier:
    """
    基于本地信任存储的证书链验证器

    验证内容：
    1. 从叶子证书构建到信任锚的证书链
    2. 每张证书都在有效期内
    3. 中间证书是CA且满足路径长度约束
    4. 每张证书的签名由其颁发者验证通过

    不做吊销检查（OCSP/CRL）。
    """

    def __init__(self,
                 trust_anchors: Sequence[x509.Certificate],
                 validation_time: Optional[datetime] = None):
        if not trust_anchors:
            raise ValueError("At least one trust anchor is required")
        self.trust_anchors = list(trust_anchors)
        self.validation_time = validation_time
        self.chain_builder = CertificateChainBuilder(self.trust_anchors)

    def verify_certificate_validity(self, chain: Sequence[x509.Certificate]) -> None:
        if not chain:
            raise CertificateChainError("Empty certificate chain")

        # 1. 构建证书链
        built_chain = self.chain_builder.build_chain(chain[0], list(chain[1:]))

        # 2. 有效期
        now = self._now()
        for cert in built_chain:
            self._validate_validity_period(cert, now)

        # 3. CA约束（信任锚由配置决定，不检查）
        for depth, ca_cert in enumerate(built_chain[1:-1]):
            self._validate_ca_certificate(ca_cert, depth)

        # 4. 签名
        for i in range(len(built_chain) - 1):
            self._verify_certificate_signature(built_chain[i], built_chain[i + 1])

        logger.debug("证书链验证通过: %d 张证书", len(built_chain))

    def _now(self) -> datetime:
        if self.validation_time is None:
            return datetime.now(timezone.utc)
        if self.validation_time.tzinfo is None:
            return self.validation_time.replace(tzinfo=timezone.utc)
        return self.validation_time

    def _validate_validity_period(self, cert: x509.Certificate, now: datetime) -> None:
        if now < cert.not_valid_before_utc:
            raise CertificateExpiredError(
                f"Certificate not yet valid: {cert.subject.rfc4514_string()}"
            )
        if now > cert.not_valid_after_utc:
            raise CertificateExpiredError(
                f"Certificate expired: {cert.subject.rfc4514_string()}"
            )

    def _validate_ca_certificate(self, cert: x509.Certificate, depth: int) -> None:
        try:
            constraints = cert.extensions.get_extension_for_class(x509.BasicConstraints).value
        except x509.ExtensionNotFound:
            constraints = None

        if constraints is None or not constraints.ca:
            raise CertificateChainError(
                f"Intermediate certificate at depth {depth} is not a CA"
            )

        # 路径长度约束检查
        if constraints.path_length is not None and depth > constraints.path_length:
            raise CertificateChainError(
                f"Path length constraint violated at depth {depth}"
            )

    def _verify_certificate_signature(self, subject_cert: x509.Certificate,
                                      issuer_cert: x509.Certificate) -> None:
        try:
            subject_cert.verify_directly_issued_by(issuer_cert)
        except (InvalidSignature, ValueError, TypeError) as e:
            raise CertificateVerificationError(
                f"Signature verification failed for: {subject_cert.subject.rfc4514_string()}"
            ) from e


def verifier_from_anchors(trust_anchors: List[x509.Certificate]) -> Optional[TrustStoreChainVerifier]:
    """信任锚为空时返回None（跳过证书链验证）"""
    if not trust_anchors:
        return None
    return TrustStoreChainVerifier(trust_anchors)
