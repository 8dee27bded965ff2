from typing import List, Protocol, Sequence

from cryptography import x509


class PeerSession(Protocol):
    """握手完成后的会话，只需提供对端证书链（叶子在前，根在后）"""

    def peer_certificate_chain(self) -> List[x509.Certificate]:
        ...


class StaticPeerSession:
    """已经解析好的证书链"""

    def __init__(self, chain: Sequence[x509.Certificate]):
        self._chain = list(chain)

    def peer_certificate_chain(self) -> List[x509.Certificate]:
        return list(self._chain)


class SSLObjectSession:
    """
    ssl.SSLSocket / ssl.SSLObject 适配器

    解释器提供 get_unverified_chain() 时返回完整链，否则只能拿到叶子证书。
    """

    def __init__(self, ssl_object):
        self.ssl_object = ssl_object

    def _der_chain(self) -> List[bytes]:
        get_chain = getattr(self.ssl_object, "get_unverified_chain", None)
        if get_chain is not None:
            chain = get_chain()
            if chain:
                return list(chain)

        leaf = self.ssl_object.getpeercert(binary_form=True)
        return [leaf] if leaf else []

    def peer_certificate_chain(self) -> List[x509.Certificate]:
        return [x509.load_der_x509_certificate(der) for der in self._der_chain()]
