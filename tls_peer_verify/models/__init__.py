"""
对端验证 - 数据模型包

定义主机名验证相关的数据模型和枚举类型。
"""

from .identities import CertificateIdentitySet, VerificationMode
from .connection import ConnectionContext, HandshakeConfig, parse_name_list

__all__ = [
    'CertificateIdentitySet',
    'VerificationMode',
    'ConnectionContext',
    'HandshakeConfig',
    'parse_name_list',
]
