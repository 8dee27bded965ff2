from typing import Dict, List, Optional, Sequence

from cryptography import x509
from cryptography.exceptions import InvalidSignature

from ..exceptions import CertificateChainError


class CertificateChainBuilder:
    """X.509证书链构建器：从叶子证书一直找到信任锚"""

    def __init__(self, trust_anchors: Sequence[x509.Certificate]):
        self.trust_anchors = list(trust_anchors)

    def build_chain(self, leaf_cert: x509.Certificate,
                    intermediate_certs: Sequence[x509.Certificate]) -> List[x509.Certificate]:
        """
        构建从叶子证书到信任锚的完整证书链

        对端发来的根证书只有在信任存储中存在时才被当作信任锚。
        """
        # 每次构建使用独立的缓存，验证器可以被多个连接同时使用
        cert_cache = self._build_cert_cache(intermediate_certs)

        chain = [leaf_cert]
        current_cert = leaf_cert

        while not self._is_trust_anchor(current_cert):
            issuer = self._find_issuer(current_cert, cert_cache)
            if issuer is None:
                raise CertificateChainError(
                    f"Cannot find issuer for certificate: {current_cert.subject.rfc4514_string()}"
                )

            # 检查循环引用
            if issuer in chain:
                raise CertificateChainError(
                    f"Certificate chain cycle detected: {issuer.subject.rfc4514_string()}"
                )

            chain.append(issuer)
            current_cert = issuer

        return chain

    def _build_cert_cache(self, certificates: Sequence[x509.Certificate]) -> Dict[x509.Name, List[x509.Certificate]]:
        cache: Dict[x509.Name, List[x509.Certificate]] = {}
        for cert in certificates:
            cache.setdefault(cert.subject, []).append(cert)
        return cache

    def _find_issuer(self, certificate: x509.Certificate,
                     cert_cache: Dict[x509.Name, List[x509.Certificate]]) -> Optional[x509.Certificate]:
        """
        查找证书的颁发者，信任锚优先于对端提供的中间证书

        同名候选有多个时（如根CA换密钥）优先选择签名能验证通过的；
        都不通过时返回第一个，由签名检查报错。
        """
        issuer_name = certificate.issuer

        candidates = [anchor for anchor in self.trust_anchors if anchor.subject == issuer_name]
        candidates += [cert for cert in cert_cache.get(issuer_name, []) if cert != certificate]
        if not candidates:
            return None

        for candidate in candidates:
            if self._is_issued_by(certificate, candidate):
                return candidate
        return candidates[0]

    @staticmethod
    def _is_issued_by(certificate: x509.Certificate, issuer: x509.Certificate) -> bool:
        try:
            certificate.verify_directly_issued_by(issuer)
        except (InvalidSignature, ValueError, TypeError):
            return False
        return True

    def _is_trust_anchor(self, certificate: x509.Certificate) -> bool:
        return any(anchor == certificate for anchor in self.trust_anchors)
