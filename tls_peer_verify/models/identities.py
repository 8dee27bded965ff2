from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List, Optional, Tuple


class VerificationMode(str, Enum):
    """主机名验证模式"""
    STRICT = "strict"                                  # 通配符只匹配一级子域名
    DEFAULT = "default"                                # 通配符匹配所有子域名
    DEFAULT_AND_LOCALHOST = "default_and_localhost"    # DEFAULT + 本机地址直接放行
    ALLOW_ALL = "allow_all"                            # 关闭主机名验证


@dataclass(frozen=True)
class CertificateIdentitySet:
    """
    证书声明的身份集合

    common_names 按从具体到宽泛的顺序排列，只有第一个参与匹配；
    subject_alt_names 保持证书扩展中的原始顺序。
    """
    common_names: Tuple[str, ...] = ()
    subject_alt_names: Tuple[str, ...] = ()

    @classmethod
    def of(cls,
           common_names: Optional[Iterable[str]] = None,
           subject_alt_names: Optional[Iterable[str]] = None) -> "CertificateIdentitySet":
        return cls(
            common_names=tuple(common_names or ()),
            subject_alt_names=tuple(subject_alt_names or ()),
        )

    @property
    def first_common_name(self) -> Optional[str]:
        return self.common_names[0] if self.common_names else None

    @property
    def is_empty(self) -> bool:
        return not self.common_names and not self.subject_alt_names

    def candidates(self) -> List[str]:
        """按匹配顺序返回候选身份：第一个CN，然后是全部SAN"""
        names = []
        if self.first_common_name:
            names.append(self.first_common_name)
        names.extend(name for name in self.subject_alt_names if name)
        return names
