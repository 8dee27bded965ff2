import ssl

import pytest
from pydantic import ValidationError

from tls_peer_verify.core.handshake_configurator import (
    HandshakeConfigurator,
    SSLContextEngine,
    configure_context,
)
from tls_peer_verify.exceptions import UnsupportedHandshakeParameterError
from tls_peer_verify.models import ConnectionContext, HandshakeConfig


class RecordingEngine:
    """记录调用的假握手引擎"""

    def __init__(self):
        self.protocols = None
        self.ciphers = None
        self.calls = 0

    def set_enabled_protocols(self, protocols):
        self.protocols = list(protocols)
        self.calls += 1

    def set_enabled_ciphers(self, ciphers):
        self.ciphers = list(ciphers)
        self.calls += 1


class TestHandshakeConfig:

    def test_comma_separated_names(self):
        config = HandshakeConfig(protocols="TLSv1.1, TLSv1.2,,", ciphers=["A", " ", "B"])
        assert config.protocols == ("TLSv1.1", "TLSv1.2")
        assert config.ciphers == ("A", "B")

    def test_empty_lists_mean_defaults(self):
        config = HandshakeConfig(protocols="", ciphers=[])
        assert config.protocols is None
        assert config.ciphers is None

    def test_config_is_frozen(self):
        config = HandshakeConfig(protocols=["TLSv1.2"])
        with pytest.raises(ValidationError):
            config.protocols = ("TLSv1.3",)


class TestHandshakeConfigurator:

    def test_applies_both_lists_in_order(self):
        engine = RecordingEngine()
        HandshakeConfigurator().configure(
            engine, HandshakeConfig(protocols=["TLSv1.3", "TLSv1.2"], ciphers=["C1", "C2"])
        )
        assert engine.protocols == ["TLSv1.3", "TLSv1.2"]
        assert engine.ciphers == ["C1", "C2"]

    def test_absent_lists_leave_defaults(self):
        engine = RecordingEngine()
        HandshakeConfigurator().configure(engine, HandshakeConfig())
        HandshakeConfigurator().configure(engine, None)
        assert engine.calls == 0

    def test_connection_context_defaults_to_no_restrictions(self):
        engine = RecordingEngine()
        context = ConnectionContext(remote_address=("10.0.0.5", 443))
        HandshakeConfigurator().configure(engine, context.handshake_config)
        assert engine.calls == 0

    def test_only_protocols(self):
        engine = RecordingEngine()
        HandshakeConfigurator().configure(engine, HandshakeConfig(protocols="TLSv1.2"))
        assert engine.protocols == ["TLSv1.2"]
        assert engine.ciphers is None

    def test_idempotent(self):
        engine = RecordingEngine()
        config = HandshakeConfig(protocols=["TLSv1.2"], ciphers=["C1"])
        HandshakeConfigurator().configure(engine, config)
        HandshakeConfigurator().configure(engine, config)
        assert engine.protocols == ["TLSv1.2"]
        assert engine.ciphers == ["C1"]


class TestSSLContextEngine:

    def test_protocol_range_on_context(self):
        context = ssl.SSLContext(ssl.PROTOCOL_TLS_CLIENT)
        configure_context(context, HandshakeConfig(protocols=["TLSv1.3", "TLSv1.2"]))
        assert context.minimum_version == ssl.TLSVersion.TLSv1_2
        assert context.maximum_version == ssl.TLSVersion.TLSv1_3

    def test_single_protocol(self):
        context = ssl.SSLContext(ssl.PROTOCOL_TLS_CLIENT)
        HandshakeConfigurator().configure(context, HandshakeConfig(protocols=["TLSv1.3"]))
        assert context.minimum_version == ssl.TLSVersion.TLSv1_3
        assert context.maximum_version == ssl.TLSVersion.TLSv1_3

    def test_unknown_protocol_name(self):
        engine = SSLContextEngine(ssl.SSLContext(ssl.PROTOCOL_TLS_CLIENT))
        with pytest.raises(UnsupportedHandshakeParameterError) as excinfo:
            engine.set_enabled_protocols(["TLSv1.2", "TLSv9"])
        assert excinfo.value.parameter == "protocols"
        assert excinfo.value.values == ("TLSv9",)

    def test_non_contiguous_protocols(self):
        engine = SSLContextEngine(ssl.SSLContext(ssl.PROTOCOL_TLS_CLIENT))
        with pytest.raises(UnsupportedHandshakeParameterError):
            engine.set_enabled_protocols(["TLSv1", "TLSv1.3"])

    def test_known_cipher(self):
        context = ssl.SSLContext(ssl.PROTOCOL_TLS_CLIENT)
        configure_context(context, HandshakeConfig(ciphers=["ECDHE-ECDSA-AES256-GCM-SHA384"]))
        names = [cipher["name"] for cipher in context.get_ciphers()]
        assert "ECDHE-ECDSA-AES256-GCM-SHA384" in names

    def test_unknown_cipher(self):
        context = ssl.SSLContext(ssl.PROTOCOL_TLS_CLIENT)
        with pytest.raises(UnsupportedHandshakeParameterError) as excinfo:
            configure_context(context, HandshakeConfig(ciphers=["NOT-A-REAL-CIPHER"]))
        assert excinfo.value.parameter == "ciphers"
        assert isinstance(excinfo.value.__cause__, ssl.SSLError)
