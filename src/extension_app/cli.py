# SPDX-License-Identifier: MIT
# Copyright (c) 2026 pi-gateway-extensions contributors

"""
Console host for the extensions.

Implements the host ports on top of a rich Console so the catalog and quota
extensions can be used from a terminal without the agent runtime:

    pi-extensions models          # show the published Kilo Code catalog
    pi-extensions refresh         # /kilo-refresh-models
    pi-extensions free-models     # /kilo-free-models
    pi-extensions quota           # /quota (Antigravity)
    pi-extensions quota-copilot   # /quota-copilot
    pi-extensions status          # project-root footer status
"""

import argparse
import asyncio
import logging
from typing import Any, Dict, List, Optional, Sequence

import httpx
from dotenv import load_dotenv
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from gateway_library.core.config import ExtensionSettings, load_settings
from gateway_library.core.types import ProviderRegistration

from .extensions import activate_extensions
from .host import (
    WIDGET_PLACEMENT_ABOVE_EDITOR,
    CommandSpec,
    EventHandler,
    ToolSpec,
)

app_logger = logging.getLogger("extension_app")

NOTIFY_STYLES = {
    "info": "cyan",
    "warning": "yellow",
    "error": "bold red",
}

# CLI subcommand -> (extension to activate, host command to run)
CLI_COMMANDS = {
    "models": ("kilo-code", None),
    "refresh": ("kilo-code", "kilo-refresh-models"),
    "free-models": ("kilo-code", "kilo-free-models"),
    "quota": ("antigravity-quota", "quota"),
    "quota-copilot": ("copilot-quota", "quota-copilot"),
    "status": ("project-root", None),
}


class ConsoleUI:
    """ExtensionUI that prints to a rich Console."""

    def __init__(self, console: Console):
        self.console = console
        self.widgets: Dict[str, List[Text]] = {}
        self.statuses: Dict[str, Text] = {}

    def notify(self, message: str, level: str = "info") -> None:
        self.console.print(Text(message, style=NOTIFY_STYLES.get(level, "")))

    def set_widget(
        self,
        key: str,
        lines: Optional[Sequence[Text]],
        placement: str = WIDGET_PLACEMENT_ABOVE_EDITOR,
    ) -> None:
        if lines is None:
            self.widgets.pop(key, None)
            app_logger.debug(f"Widget '{key}' cleared")
            return
        self.widgets[key] = list(lines)
        self.console.print(
            Panel(Text("\n").join(lines), title=key, border_style="blue", expand=False)
        )

    def set_status(self, key: str, text: Optional[Text]) -> None:
        if text is None:
            self.statuses.pop(key, None)
            return
        self.statuses[key] = text
        self.console.print(Text.assemble(Text(f"{key}:", style="bold"), text))


class ConsoleContext:
    def __init__(self, ui: ConsoleUI):
        self.ui = ui
        self.has_ui = True


class ConsoleHost:
    """ExtensionAPI that keeps registrations in memory and dispatches by name."""

    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console()
        self.ui = ConsoleUI(self.console)
        self.providers: Dict[str, ProviderRegistration] = {}
        self.commands: Dict[str, CommandSpec] = {}
        self.tools: Dict[str, ToolSpec] = {}
        self.event_handlers: Dict[str, List[EventHandler]] = {}

    def register_provider(self, registration: ProviderRegistration) -> None:
        self.providers[registration.name] = registration

    def register_command(self, command: CommandSpec) -> None:
        self.commands[command.name] = command

    def register_tool(self, tool: ToolSpec) -> None:
        self.tools[tool.name] = tool

    def on(self, event: str, handler: EventHandler) -> None:
        self.event_handlers.setdefault(event, []).append(handler)

    async def run_command(self, name: str, args: str = "") -> None:
        command = self.commands.get(name)
        if command is None:
            raise KeyError(f"Command '{name}' is not registered")
        await command.handler(args, ConsoleContext(self.ui))

    async def emit(self, event: str, payload: Optional[Dict[str, Any]] = None) -> None:
        for handler in self.event_handlers.get(event, []):
            result = handler(payload or {}, ConsoleContext(self.ui))
            if asyncio.iscoroutine(result):
                await result

    def print_catalog(self) -> None:
        for registration in self.providers.values():
            table = Table(
                title=f"{registration.name} ({registration.base_url})",
                box=None,
                show_header=True,
                header_style="bold",
                padding=(0, 1),
            )
            table.add_column("Model", style="cyan")
            table.add_column("Name")
            table.add_column("Context", justify="right")
            table.add_column("Max out", justify="right")
            table.add_column("Reasoning", justify="center")
            table.add_column("Input")
            for model in registration.models:
                table.add_row(
                    model.id,
                    model.name,
                    f"{model.context_window:,}",
                    f"{model.max_tokens:,}",
                    "yes" if model.reasoning else "-",
                    "+".join(model.input),
                )
            self.console.print(table)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pi-extensions",
        description="Kilo Code catalog and provider quota tools",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Enable debug logging"
    )
    parser.add_argument(
        "--env-file", default=None, help="Load environment from this .env file"
    )
    parser.add_argument("command", choices=sorted(CLI_COMMANDS))
    return parser


async def _run(
    command: str, host: ConsoleHost, client: Optional[httpx.AsyncClient] = None
) -> None:
    settings = load_settings()
    if client is not None:
        await _dispatch(command, host, settings, client)
    else:
        async with httpx.AsyncClient(timeout=settings.http_timeout) as new_client:
            await _dispatch(command, host, settings, new_client)


async def _dispatch(
    command: str,
    host: ConsoleHost,
    settings: ExtensionSettings,
    client: httpx.AsyncClient,
) -> None:
    extension_name, host_command = CLI_COMMANDS[command]
    # refresh publishes on its own
    await activate_extensions(
        host,
        settings,
        client=client,
        only=[extension_name],
        load_catalog=command != "refresh",
    )
    if command == "models":
        host.print_catalog()
    elif command == "status":
        await host.emit("session_start")
    else:
        await host.run_command(host_command)


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    load_dotenv(args.env_file)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(show_path=False)],
    )

    asyncio.run(_run(args.command, ConsoleHost()))
    return 0
