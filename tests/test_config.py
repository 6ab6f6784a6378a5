"""Tests for ssebridge.config — ClientConfig frozen dataclass."""

import pytest

from ssebridge.config import ClientConfig
from ssebridge.errors import ConfigurationError


class TestClientConfig:
    def test_defaults(self) -> None:
        cfg = ClientConfig()

        assert cfg.connect_timeout == 15.0
        assert cfg.keepalive_interval == 30.0
        assert cfg.idle_timeout == 90.0
        assert cfg.accept == "text/event-stream"

    def test_override(self) -> None:
        cfg = ClientConfig(idle_timeout=120.0, user_agent="monitor/1.0")

        assert cfg.idle_timeout == 120.0
        assert cfg.user_agent == "monitor/1.0"
        assert cfg.connect_timeout == 15.0

    def test_frozen(self) -> None:
        cfg = ClientConfig()

        with pytest.raises(AttributeError):
            cfg.idle_timeout = 1.0  # type: ignore[misc]

    @pytest.mark.parametrize("field", ["connect_timeout", "keepalive_interval", "idle_timeout"])
    @pytest.mark.parametrize("value", [0, -1.5])
    def test_non_positive_rejected(self, field: str, value: float) -> None:
        with pytest.raises(ConfigurationError, match=field):
            ClientConfig(**{field: value})
