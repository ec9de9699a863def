# SPDX-License-Identifier: MIT
# Copyright (c) 2026 pi-gateway-extensions contributors

"""
Shared command/tool wiring for the quota extensions.

Each quota extension registers one command that renders a transient
widget and one tool that returns the raw vendor JSON. Failures are shown
as-is; quota figures are never synthesized.
"""

import json
import logging
from typing import Any, Dict, List, Optional

import httpx
from rich.text import Text

from gateway_library.core.errors import GatewayError

from ..host import CommandContext, CommandSpec, ExtensionAPI, ToolResult, ToolSpec
from ..widget import TransientWidget

app_logger = logging.getLogger("extension_app")


class QuotaExtension:
    """
    Base class for quota extensions.

    Subclasses set the class attributes below and implement render().
    The provider must expose `async fetch_quota(client)` returning a
    response with `to_payload()`.
    """

    command_name: str
    command_description: str
    tool_name: str
    tool_label: str
    tool_description: str
    widget_key: str
    display_name: str

    def __init__(
        self,
        pi: ExtensionAPI,
        provider: Any,
        widget_ttl: float,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self.pi = pi
        self.provider = provider
        self.widget = TransientWidget(self.widget_key, ttl=widget_ttl)
        self._client = client

    def render(self, response: Any) -> List[Text]:
        raise NotImplementedError

    def activate(self) -> None:
        self.pi.register_command(
            CommandSpec(
                name=self.command_name,
                description=self.command_description,
                handler=self.handle_command,
            )
        )
        self.pi.register_tool(
            ToolSpec(
                name=self.tool_name,
                label=self.tool_label,
                description=self.tool_description,
                execute=self.execute_tool,
            )
        )

    async def handle_command(self, _args: str, ctx: CommandContext) -> None:
        ctx.ui.notify(f"Fetching {self.display_name} quota...", "info")
        try:
            response = await self.provider.fetch_quota(self._client)
        except GatewayError as e:
            ctx.ui.notify(f"Error fetching {self.display_name} quota: {e.message}", "error")
            return
        self.widget.show(ctx.ui, self.render(response))

    async def execute_tool(self, _params: Dict[str, Any]) -> ToolResult:
        try:
            response = await self.provider.fetch_quota(self._client)
        except GatewayError as e:
            app_logger.debug(f"{self.tool_name} failed: {e}")
            return ToolResult.error(e.message)
        payload = response.to_payload()
        return ToolResult.text(json.dumps(payload, indent=2), details=payload)
