# SPDX-License-Identifier: MIT
# Copyright (c) 2026 pi-gateway-extensions contributors

"""
Ports to the host coding-agent runtime.

The host owns the provider/command/tool registries and the UI. The
extensions only call these interfaces; the console host in cli.py and the
fakes in the test suite implement them.
"""

from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Dict, List, Optional, Protocol, Sequence

from rich.text import Text

from gateway_library.core.types import ProviderRegistration

WIDGET_PLACEMENT_ABOVE_EDITOR = "aboveEditor"


class ExtensionUI(Protocol):
    def notify(self, message: str, level: str = "info") -> None:
        """Show a one-line notification ("info", "warning" or "error")."""

    def set_widget(
        self,
        key: str,
        lines: Optional[Sequence[Text]],
        placement: str = WIDGET_PLACEMENT_ABOVE_EDITOR,
    ) -> None:
        """Show, replace, or (with lines=None) remove a widget."""

    def set_status(self, key: str, text: Optional[Text]) -> None:
        """Set or clear a footer status entry."""


class CommandContext(Protocol):
    ui: ExtensionUI
    has_ui: bool


CommandHandler = Callable[[str, CommandContext], Awaitable[None]]
EventHandler = Callable[[Dict[str, Any], CommandContext], Any]


@dataclass
class ToolResult:
    """Structured tool output: content blocks plus an error flag."""

    content: List[Dict[str, str]]
    details: Any = None
    is_error: bool = False

    @classmethod
    def text(cls, text: str, details: Any = None) -> "ToolResult":
        return cls(content=[{"type": "text", "text": text}], details=details)

    @classmethod
    def error(cls, message: str) -> "ToolResult":
        return cls(content=[{"type": "text", "text": f"Error: {message}"}], is_error=True)


ToolExecutor = Callable[[Dict[str, Any]], Awaitable[ToolResult]]

# Tools without arguments
EMPTY_PARAMETERS: Dict[str, Any] = {"type": "object", "properties": {}}


@dataclass
class CommandSpec:
    name: str
    description: str
    handler: CommandHandler


@dataclass
class ToolSpec:
    name: str
    label: str
    description: str
    execute: ToolExecutor
    parameters: Dict[str, Any] = field(default_factory=lambda: dict(EMPTY_PARAMETERS))


class ExtensionAPI(Protocol):
    def register_provider(self, registration: ProviderRegistration) -> None:
        """Register a provider, replacing any previous registration of that name."""

    def register_command(self, command: CommandSpec) -> None:
        ...

    def register_tool(self, tool: ToolSpec) -> None:
        ...

    def on(self, event: str, handler: EventHandler) -> None:
        ...
