from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Callable, Dict

import pytest

from gateway_library.core.config import ExtensionSettings


@pytest.fixture
def settings(tmp_path: Path) -> ExtensionSettings:
    return ExtensionSettings(
        agent_dir=tmp_path,
        kilo_api_base="https://kilo.test/api/gateway",
        antigravity_api_base="https://cloudcode.test",
        copilot_api_base="https://github.test",
        quota_widget_ttl=60.0,
    )


@pytest.fixture
def write_auth(tmp_path: Path) -> Callable[[Dict[str, Any]], Path]:
    def _write(data: Dict[str, Any]) -> Path:
        path = tmp_path / "auth.json"
        path.write_text(json.dumps(data), encoding="utf-8")
        return path

    return _write
