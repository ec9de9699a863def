# SPDX-License-Identifier: MIT
# Copyright (c) 2026 pi-gateway-extensions contributors

"""
Footer status showing which host and project directory the agent runs in.
"""

from typing import Any, Dict, Optional

from rich.text import Text

from gateway_library.core.config import ExtensionSettings, load_settings

from ..host import CommandContext, ExtensionAPI

STATUS_KEY = "project-info"


def build_project_status(
    hostname: Optional[str], project_root: Optional[str]
) -> Optional[Text]:
    """Status text " [host:root]" from whichever parts are set, None if neither is."""
    status = ""
    if hostname:
        status += f"{hostname}:"
    if project_root:
        status += project_root
    if not status:
        return None
    return Text(f" [{status}]", style="dim")


class ProjectRootExtension:
    def __init__(self, pi: ExtensionAPI, settings: Optional[ExtensionSettings] = None):
        self.pi = pi
        self.settings = settings or load_settings()

    def activate(self) -> None:
        self.pi.on("session_start", self.handle_session_start)

    def handle_session_start(self, _event: Dict[str, Any], ctx: CommandContext) -> None:
        if not ctx.has_ui:
            return
        status = build_project_status(
            self.settings.host_hostname, self.settings.project_root
        )
        if status is not None:
            ctx.ui.set_status(STATUS_KEY, status)
