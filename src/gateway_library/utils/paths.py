# SPDX-License-Identifier: LGPL-3.0-only
# Copyright (c) 2026 pi-gateway-extensions contributors

"""
Filesystem locations used by the extensions.

Everything lives under the pi agent directory (~/.pi/agent by default,
overridable with PI_AGENT_DIR).
"""

import os
from pathlib import Path
from typing import Optional

AUTH_FILE_NAME = "auth.json"


def get_agent_dir(override: Optional[str] = None) -> Path:
    """Get the pi agent directory (does not create it)."""
    raw = override or os.environ.get("PI_AGENT_DIR")
    if raw:
        return Path(raw).expanduser()
    return Path.home() / ".pi" / "agent"


def get_auth_file(agent_dir: Optional[Path] = None) -> Path:
    """Get the path of the shared credential store."""
    return (agent_dir or get_agent_dir()) / AUTH_FILE_NAME


def get_logs_dir(agent_dir: Optional[Path] = None, create: bool = False) -> Path:
    """Get the diagnostics log directory, optionally creating it."""
    logs_dir = (agent_dir or get_agent_dir()) / "sessions" / "logs"
    if create:
        logs_dir.mkdir(parents=True, exist_ok=True)
    return logs_dir
