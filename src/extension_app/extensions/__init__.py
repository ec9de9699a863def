# SPDX-License-Identifier: MIT
# Copyright (c) 2026 pi-gateway-extensions contributors

"""
All extensions shipped with this package.

Hosts call activate_extensions() once at start-up.
"""

from typing import List, Optional, Sequence

import httpx

from gateway_library.core.config import ExtensionSettings, load_settings

from ..host import ExtensionAPI
from .antigravity_quota import AntigravityQuotaExtension
from .copilot_quota import CopilotQuotaExtension
from .kilo_code import KiloCodeExtension
from .project_root import ProjectRootExtension

EXTENSION_NAMES = ("kilo-code", "antigravity-quota", "copilot-quota", "project-root")


async def activate_extensions(
    pi: ExtensionAPI,
    settings: Optional[ExtensionSettings] = None,
    client: Optional[httpx.AsyncClient] = None,
    only: Optional[Sequence[str]] = None,
    load_catalog: bool = True,
) -> List[object]:
    """
    Activate extensions against a host.

    Args:
        pi: Host registry/UI ports
        settings: Shared settings (loaded from the environment when omitted)
        client: Optional HTTP client shared by every fetch
        only: Subset of EXTENSION_NAMES to activate (all when omitted)
        load_catalog: Run the initial Kilo catalog fetch (skip when a refresh follows)

    Returns:
        The activated extension objects, in EXTENSION_NAMES order
    """
    settings = settings or load_settings()
    selected = EXTENSION_NAMES if only is None else tuple(only)
    unknown = set(selected) - set(EXTENSION_NAMES)
    if unknown:
        raise ValueError(f"Unknown extensions: {', '.join(sorted(unknown))}")

    activated: List[object] = []
    if "kilo-code" in selected:
        kilo = KiloCodeExtension(pi, settings, client=client)
        await kilo.activate(load_catalog=load_catalog)
        activated.append(kilo)
    if "antigravity-quota" in selected:
        antigravity = AntigravityQuotaExtension(pi, settings, client=client)
        antigravity.activate()
        activated.append(antigravity)
    if "copilot-quota" in selected:
        copilot = CopilotQuotaExtension(pi, settings, client=client)
        copilot.activate()
        activated.append(copilot)
    if "project-root" in selected:
        project_root = ProjectRootExtension(pi, settings)
        project_root.activate()
        activated.append(project_root)
    return activated


__all__ = [
    "EXTENSION_NAMES",
    "activate_extensions",
    "AntigravityQuotaExtension",
    "CopilotQuotaExtension",
    "KiloCodeExtension",
    "ProjectRootExtension",
]
