from dataclasses import dataclass
from typing import Optional

from ..exceptions import HostnameMismatchError
from ..models.identities import CertificateIdentitySet, VerificationMode
from .hostname_matcher import matches
from .loopback import is_localhost


@dataclass(frozen=True)
class VerificationPolicy:
    """
    主机名验证策略

    不可变，只保存验证模式；同一个实例可以在所有连接之间共享。
    """
    mode: VerificationMode = VerificationMode.DEFAULT

    def __post_init__(self):
        object.__setattr__(self, "mode", VerificationMode(self.mode))

    def evaluate(self, host: Optional[str], identity_set: Optional[CertificateIdentitySet]) -> None:
        evaluate(self, host, identity_set)

    @classmethod
    def for_mode(cls, mode: VerificationMode) -> "VerificationPolicy":
        return _POLICIES[VerificationMode(mode)]


# 与 curl/Firefox 行为一致：通配符匹配所有子域名
DEFAULT = VerificationPolicy(VerificationMode.DEFAULT)

# 与 DEFAULT 相同，但 localhost、localhost.localdomain、127.0.0.1、::1 无条件通过
DEFAULT_AND_LOCALHOST = VerificationPolicy(VerificationMode.DEFAULT_AND_LOCALHOST)

# 只检查第一个CN，通配符只匹配同一级子域名（RFC 2818）
STRICT = VerificationPolicy(VerificationMode.STRICT)

# 关闭主机名验证，永远不抛出异常
ALLOW_ALL = VerificationPolicy(VerificationMode.ALLOW_ALL)

_POLICIES = {
    VerificationMode.DEFAULT: DEFAULT,
    VerificationMode.DEFAULT_AND_LOCALHOST: DEFAULT_AND_LOCALHOST,
    VerificationMode.STRICT: STRICT,
    VerificationMode.ALLOW_ALL: ALLOW_ALL,
}


def _mismatch_detail(identity_set: Optional[CertificateIdentitySet]) -> str:
    if identity_set is None or not identity_set.candidates():
        return "certificate doesn't contain CN or DNS subjectAlt"
    names = ", ".join(repr(name) for name in identity_set.candidates())
    return f"doesn't match any of {names}"


def evaluate(policy: VerificationPolicy,
             host: Optional[str],
             identity_set: Optional[CertificateIdentitySet]) -> None:
    """
    按策略验证主机名，失败时抛出 HostnameMismatchError

    异常中携带的是被验证的主机名，而不是证书内容。
    """
    mode = policy.mode

    if mode is VerificationMode.ALLOW_ALL:
        return
    if mode is VerificationMode.DEFAULT_AND_LOCALHOST and is_localhost(host):
        return

    if mode is VerificationMode.STRICT:
        strict = True
    elif mode in (VerificationMode.DEFAULT, VerificationMode.DEFAULT_AND_LOCALHOST):
        strict = False
    else:
        raise ValueError(f"Unknown verification mode: {mode!r}")

    if not matches(host, identity_set, strict):
        raise HostnameMismatchError(host, mode, _mismatch_detail(identity_set))
