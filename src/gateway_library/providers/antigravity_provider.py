# SPDX-License-Identifier: LGPL-3.0-only
# Copyright (c) 2026 pi-gateway-extensions contributors

"""
Antigravity Provider with Quota Tracking

Quota reporting for Google's Antigravity (cloud code assist) service.
Uses the AntigravityQuotaTracker mixin for the two-step quota fetch.

Environment variables:
    ANTIGRAVITY_API_BASE: API base URL (default: https://cloudcode-pa.googleapis.com)
    ANTIGRAVITY_DUMP_RESPONSES: Write raw responses to the logs dir (default: true)
    PI_AGENT_DIR: Location of auth.json and sessions/logs (default: ~/.pi/agent)
"""

from typing import Optional

import httpx

from ..core.config import ExtensionSettings, load_settings
from ..core.constants import ANTIGRAVITY_PROVIDER_NAME
from ..core.types import AntigravityQuotaResponse
from ..credential_store import CredentialStore
from ..utils.paths import get_auth_file, get_logs_dir
from .utilities.antigravity_quota_tracker import AntigravityQuotaTracker


class AntigravityProvider(AntigravityQuotaTracker):
    """
    Quota reporting for the google-antigravity credential in auth.json.
    """

    provider_name = ANTIGRAVITY_PROVIDER_NAME

    def __init__(
        self,
        settings: Optional[ExtensionSettings] = None,
        credentials: Optional[CredentialStore] = None,
    ):
        settings = settings or load_settings()
        self._credentials = credentials or CredentialStore(
            get_auth_file(settings.agent_dir)
        )
        self.api_base = settings.antigravity_api_base.rstrip("/")
        self.http_timeout = settings.http_timeout
        self.dump_responses = settings.dump_antigravity_responses
        self.logs_dir = get_logs_dir(settings.agent_dir)

    async def fetch_quota(
        self, client: Optional[httpx.AsyncClient] = None
    ) -> AntigravityQuotaResponse:
        return await self.fetch_antigravity_quota(client)
