from typing import FrozenSet, Optional

# 本机地址表，进程内只读
LOCALHOSTS: FrozenSet[str] = frozenset({
    "::1",
    "127.0.0.1",
    "localhost",
    "localhost.localdomain",
})


def is_localhost(host: Optional[str]) -> bool:
    """判断主机名是否指向本机（只看主机名本身，不看证书内容）"""
    host = host.strip().lower() if host else ""
    if host.startswith("::1"):
        # 去掉 IPv6 zone id，例如 ::1%eth0
        zone = host.rfind("%")
        if zone >= 0:
            host = host[:zone]
    return host in LOCALHOSTS
