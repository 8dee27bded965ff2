import logging
from typing import Any, Optional
from urllib.parse import urlsplit

from ..exceptions import MalformedEndpointHintError

logger = logging.getLogger(__name__)


def _host_from_endpoint(endpoint_hint: str) -> str:
    """从端点URL中取出主机部分"""
    if any(ch.isspace() or ord(ch) < 0x20 for ch in endpoint_hint):
        raise MalformedEndpointHintError(endpoint_hint, "illegal character in URL")

    try:
        host = urlsplit(endpoint_hint).hostname
    except ValueError as e:
        raise MalformedEndpointHintError(endpoint_hint, str(e)) from e

    if not host:
        raise MalformedEndpointHintError(endpoint_hint, "no host component")

    # 只解码IPv6字面量中的 zone id 分隔符（URL中写作 %25），其余百分号编码一律拒绝
    if "%" in host:
        address, sep, zone = host.partition("%25")
        if not sep or not zone or ":" not in address or "%" in address or "%" in zone:
            raise MalformedEndpointHintError(endpoint_hint, "percent-encoded host")
        host = f"{address}%{zone}"

    if any(ch == "/" or ord(ch) < 0x20 or ord(ch) == 0x7f for ch in host):
        raise MalformedEndpointHintError(endpoint_hint, "illegal character in host")

    return host


def _host_from_socket_address(remote_address: Any) -> Optional[str]:
    # AF_INET: (host, port)，AF_INET6: (host, port, flowinfo, scope_id)
    if isinstance(remote_address, (tuple, list)) and len(remote_address) >= 2:
        host = remote_address[0]
        if isinstance(host, str) and host:
            return host
    return None


def resolve_intended_host(endpoint_hint: Optional[str], remote_address: Any) -> str:
    """
    确定调用方真正想连接的主机名

    端点URL存在时只使用URL中的主机，不信任套接字地址；否则使用
    对端套接字地址中的主机；都不可用时退回地址的字符串形式（仅用于报错）。

    Raises:
        MalformedEndpointHintError: 端点URL无法解析
    """
    if endpoint_hint:
        host = _host_from_endpoint(endpoint_hint)
        logger.debug("目标主机 %s 来自端点URL %s", host, endpoint_hint)
        return host

    host = _host_from_socket_address(remote_address)
    if host:
        logger.debug("目标主机 %s 来自对端套接字地址", host)
        return host

    fallback = "" if remote_address is None else str(remote_address)
    logger.debug("对端地址没有主机部分，使用字符串形式: %r", fallback)
    return fallback
