# SPDX-License-Identifier: LGPL-3.0-only
# Copyright (c) 2026 pi-gateway-extensions contributors

"""
Environment-driven settings for the extensions.

Values are read from the process environment; the CLI loads a .env file
first so the same variables can live there.
"""

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

from ..utils.paths import get_agent_dir
from .constants import (
    ANTIGRAVITY_DEFAULT_API_BASE,
    COPILOT_DEFAULT_API_BASE,
    DEFAULT_HTTP_TIMEOUT,
    DEFAULT_QUOTA_WIDGET_TTL,
    KILO_DEFAULT_API_BASE,
    KILO_DEFAULT_API_KEY_ENV,
)

lib_logger = logging.getLogger("gateway_library")

_TRUTHY = ("1", "true", "yes", "on")
_FALSY = ("0", "false", "no", "off")


def _env_float(env: Mapping[str, str], name: str, default: float) -> float:
    """Parse a positive float from the environment with fallback to default."""
    raw = env.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = float(raw)
    except ValueError:
        lib_logger.warning(f"Invalid {name} value {raw!r}, using default {default}")
        return default
    if value <= 0:
        lib_logger.warning(f"{name} must be positive, using default {default}")
        return default
    return value


def _env_bool(env: Mapping[str, str], name: str, default: bool) -> bool:
    raw = env.get(name)
    if raw is None:
        return default
    lowered = raw.strip().lower()
    if lowered in _TRUTHY:
        return True
    if lowered in _FALSY:
        return False
    lib_logger.warning(f"Invalid {name} value {raw!r}, using default {default}")
    return default


@dataclass(frozen=True)
class ExtensionSettings:
    """
    Resolved configuration for all extensions.

    Built by load_settings(); tests construct it directly.
    """

    agent_dir: Path
    kilo_api_base: str = KILO_DEFAULT_API_BASE
    kilo_api_key_env: str = KILO_DEFAULT_API_KEY_ENV
    antigravity_api_base: str = ANTIGRAVITY_DEFAULT_API_BASE
    copilot_api_base: str = COPILOT_DEFAULT_API_BASE
    http_timeout: float = DEFAULT_HTTP_TIMEOUT
    quota_widget_ttl: float = DEFAULT_QUOTA_WIDGET_TTL
    dump_antigravity_responses: bool = True
    project_root: Optional[str] = None
    host_hostname: Optional[str] = None


def load_settings(env: Optional[Mapping[str, str]] = None) -> ExtensionSettings:
    """
    Build settings from environment variables.

    Args:
        env: Mapping to read from (defaults to os.environ)

    Returns:
        ExtensionSettings with defaults applied for missing/malformed values
    """
    env = os.environ if env is None else env
    return ExtensionSettings(
        agent_dir=get_agent_dir(env.get("PI_AGENT_DIR")),
        kilo_api_base=env.get("KILO_API_BASE", KILO_DEFAULT_API_BASE).rstrip("/"),
        kilo_api_key_env=env.get("KILO_API_KEY_ENV", KILO_DEFAULT_API_KEY_ENV),
        antigravity_api_base=env.get(
            "ANTIGRAVITY_API_BASE", ANTIGRAVITY_DEFAULT_API_BASE
        ).rstrip("/"),
        copilot_api_base=env.get("COPILOT_API_BASE", COPILOT_DEFAULT_API_BASE).rstrip(
            "/"
        ),
        http_timeout=_env_float(env, "PI_HTTP_TIMEOUT", DEFAULT_HTTP_TIMEOUT),
        quota_widget_ttl=_env_float(
            env, "PI_QUOTA_WIDGET_TTL", DEFAULT_QUOTA_WIDGET_TTL
        ),
        dump_antigravity_responses=_env_bool(env, "ANTIGRAVITY_DUMP_RESPONSES", True),
        project_root=env.get("PI_PROJECT_ROOT") or None,
        host_hostname=env.get("PI_HOST_HOSTNAME") or None,
    )
