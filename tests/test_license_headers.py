"""Every source module carries the SPDX header of its package."""
from __future__ import annotations

from pathlib import Path

import pytest

SRC = Path(__file__).resolve().parent.parent / "src"

PACKAGE_LICENSES = {
    "gateway_library": "LGPL-3.0-only",
    "extension_app": "MIT",
}


def _modules():
    for package, license_id in PACKAGE_LICENSES.items():
        for path in sorted((SRC / package).rglob("*.py")):
            if path.stat().st_size:
                yield pytest.param(path, license_id, id=str(path.relative_to(SRC)))


@pytest.mark.parametrize("path, license_id", _modules())
def test_header(path: Path, license_id: str) -> None:
    lines = path.read_text(encoding="utf-8").splitlines()
    assert lines[0] == f"# SPDX-License-Identifier: {license_id}"
    assert lines[1] == "# Copyright (c) 2026 pi-gateway-extensions contributors"
