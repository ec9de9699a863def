"""Tests for self-clearing widgets."""
from __future__ import annotations

import asyncio

import pytest
from rich.text import Text

from extension_app.widget import TransientWidget

from tests.fakes import FakeUI


@pytest.mark.asyncio
async def test_widget_clears_after_ttl() -> None:
    ui = FakeUI()
    widget = TransientWidget("antigravity-quota", ttl=0.02)

    widget.show(ui, [Text("hello")])
    assert ui.widget_text("antigravity-quota") == "hello"
    assert widget.is_pending

    await asyncio.sleep(0.06)

    assert "antigravity-quota" not in ui.widgets
    assert ui.clears("antigravity-quota") == 1
    assert not widget.is_pending


@pytest.mark.asyncio
async def test_show_uses_placement() -> None:
    ui = FakeUI()
    widget = TransientWidget("copilot-quota", ttl=10)
    widget.show(ui, [Text("x")])
    assert ui.widget_calls[0][2] == "aboveEditor"
    widget.clear(ui)


@pytest.mark.asyncio
async def test_reshow_replaces_and_restarts_window() -> None:
    ui = FakeUI()
    widget = TransientWidget("antigravity-quota", ttl=0.2)

    widget.show(ui, [Text("first")])
    await asyncio.sleep(0.12)
    widget.show(ui, [Text("second")])
    await asyncio.sleep(0.12)

    # The first window has passed but its clear was superseded
    assert ui.widget_text("antigravity-quota") == "second"
    assert ui.clears("antigravity-quota") == 0

    await asyncio.sleep(0.2)
    assert ui.clears("antigravity-quota") == 1


@pytest.mark.asyncio
async def test_explicit_clear_cancels_pending_expiry() -> None:
    ui = FakeUI()
    widget = TransientWidget("copilot-quota", ttl=0.02)

    widget.show(ui, [Text("x")])
    widget.clear(ui)
    await asyncio.sleep(0.05)

    assert ui.clears("copilot-quota") == 1
    assert not widget.is_pending


def test_show_requires_running_loop() -> None:
    widget = TransientWidget("copilot-quota")
    with pytest.raises(RuntimeError):
        widget.show(FakeUI(), [Text("x")])
