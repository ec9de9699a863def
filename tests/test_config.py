"""Tests for environment-driven settings."""
from __future__ import annotations

from pathlib import Path

from gateway_library.core.config import load_settings
from gateway_library.core.constants import (
    ANTIGRAVITY_DEFAULT_API_BASE,
    DEFAULT_HTTP_TIMEOUT,
    DEFAULT_QUOTA_WIDGET_TTL,
    KILO_DEFAULT_API_BASE,
)


def test_defaults(tmp_path) -> None:
    settings = load_settings({"PI_AGENT_DIR": str(tmp_path)})
    assert settings.agent_dir == tmp_path
    assert settings.kilo_api_base == KILO_DEFAULT_API_BASE
    assert settings.kilo_api_key_env == "KILO_API_KEY"
    assert settings.antigravity_api_base == ANTIGRAVITY_DEFAULT_API_BASE
    assert settings.http_timeout == DEFAULT_HTTP_TIMEOUT
    assert settings.quota_widget_ttl == DEFAULT_QUOTA_WIDGET_TTL
    assert settings.dump_antigravity_responses is True
    assert settings.project_root is None
    assert settings.host_hostname is None


def test_default_agent_dir(monkeypatch) -> None:
    monkeypatch.delenv("PI_AGENT_DIR", raising=False)
    settings = load_settings({})
    assert settings.agent_dir == Path.home() / ".pi" / "agent"


def test_overrides() -> None:
    settings = load_settings(
        {
            "PI_AGENT_DIR": "/tmp/agent",
            "KILO_API_BASE": "https://gateway.example/api/",
            "KILO_API_KEY_ENV": "MY_KILO_KEY",
            "COPILOT_API_BASE": "https://ghe.example/api/v3/",
            "PI_HTTP_TIMEOUT": "5",
            "PI_QUOTA_WIDGET_TTL": "12.5",
            "ANTIGRAVITY_DUMP_RESPONSES": "off",
            "PI_PROJECT_ROOT": "/work/app",
            "PI_HOST_HOSTNAME": "devbox",
        }
    )
    assert settings.agent_dir == Path("/tmp/agent")
    assert settings.kilo_api_base == "https://gateway.example/api"
    assert settings.kilo_api_key_env == "MY_KILO_KEY"
    assert settings.copilot_api_base == "https://ghe.example/api/v3"
    assert settings.http_timeout == 5.0
    assert settings.quota_widget_ttl == 12.5
    assert settings.dump_antigravity_responses is False
    assert settings.project_root == "/work/app"
    assert settings.host_hostname == "devbox"


def test_invalid_numbers_fall_back(caplog) -> None:
    settings = load_settings(
        {"PI_HTTP_TIMEOUT": "soon", "PI_QUOTA_WIDGET_TTL": "-1", "ANTIGRAVITY_DUMP_RESPONSES": "maybe"}
    )
    assert settings.http_timeout == DEFAULT_HTTP_TIMEOUT
    assert settings.quota_widget_ttl == DEFAULT_QUOTA_WIDGET_TTL
    assert settings.dump_antigravity_responses is True
    assert "PI_HTTP_TIMEOUT" in caplog.text
