from dataclasses import dataclass, field
from typing import Any, Iterable, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, field_validator


def parse_name_list(value: Union[None, str, Iterable[str]]) -> Optional[Tuple[str, ...]]:
    """
    解析协议/加密套件名称列表

    支持逗号分隔的字符串（如 "TLSv1.1,TLSv1.2"）或字符串序列，
    去掉空白项；结果为空时返回None，表示使用实现默认值。
    """
    if value is None:
        return None
    if isinstance(value, str):
        value = value.split(",")
    names = tuple(str(name).strip() for name in value if name is not None and str(name).strip())
    return names or None


class HandshakeConfig(BaseModel):
    """握手前生效的协议版本与加密套件限制"""

    model_config = ConfigDict(frozen=True)

    protocols: Optional[Tuple[str, ...]] = None   # 例如 ("TLSv1.2", "TLSv1.3")
    ciphers: Optional[Tuple[str, ...]] = None     # 例如 ("ECDHE-ECDSA-AES256-GCM-SHA384",)

    @field_validator("protocols", "ciphers", mode="before")
    @classmethod
    def _normalize_names(cls, value):
        return parse_name_list(value)


@dataclass
class ConnectionContext:
    """
    单个连接的上下文

    endpoint_hint 是请求发出前记录的逻辑端点URL；存在时优先于
    remote_address 决定目标主机。每个连接独占，不在连接之间共享。
    """
    remote_address: Any = None
    endpoint_hint: Optional[str] = None
    handshake_config: HandshakeConfig = field(default_factory=HandshakeConfig)
