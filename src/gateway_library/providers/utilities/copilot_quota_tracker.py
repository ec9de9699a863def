# SPDX-License-Identifier: LGPL-3.0-only
# Copyright (c) 2026 pi-gateway-extensions contributors

"""
GitHub Copilot Quota Tracking Mixin

Provides quota fetching for the GitHub Copilot subscription.
Copilot reports counter-based snapshots per SKU plus an account-level
monthly reset date.

API Details:
- Endpoint: GET {base}/copilot_internal/user
- Auth: Bearer token from auth.json["github-copilot"]["refresh"], plus the
  four editor identification headers in COPILOT_HEADERS
- Response: {
    "login": str, "copilot_plan": str, "sku": str, "access_type_sku": str?,
    "quota_reset_date_utc": str,
    "quota_snapshots": {"<id>": {"entitlement": n, "remaining": n,
                                 "percent_remaining": 0-100, "unlimited": bool,
                                 "quota_id": str}}
  }

Required from provider:
    - self._credentials: CredentialStore
    - self.api_base: str
    - self.http_timeout: float
"""

import logging
from typing import Any, Dict, Optional

import httpx

from ...core.constants import (
    COPILOT_HEADERS,
    COPILOT_PROVIDER_NAME,
    COPILOT_USER_ENDPOINT,
)
from ...core.errors import FetchError, describe_http_failure
from ...core.types import CopilotQuotaResponse, CopilotQuotaSnapshot
from ...credential_store import CredentialStore
from ...utils.timeparse import parse_iso_timestamp

lib_logger = logging.getLogger("gateway_library")


def _as_number(value: Any, default: Optional[float] = 0.0) -> Optional[float]:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return default
    return float(value)


def _as_str(value: Any) -> str:
    return value if isinstance(value, str) else ""


def parse_copilot_snapshot(quota_id: str, raw: Dict[str, Any]) -> CopilotQuotaSnapshot:
    return CopilotQuotaSnapshot(
        quota_id=_as_str(raw.get("quota_id")) or quota_id,
        entitlement=_as_number(raw.get("entitlement")),
        remaining=_as_number(raw.get("remaining")),
        percent_remaining=_as_number(raw.get("percent_remaining"), default=None),
        unlimited=raw.get("unlimited") is True,
    )


def parse_copilot_response(data: Dict[str, Any]) -> CopilotQuotaResponse:
    snapshots: Dict[str, CopilotQuotaSnapshot] = {}
    raw_snapshots = data.get("quota_snapshots")
    if isinstance(raw_snapshots, dict):
        for quota_id, raw in raw_snapshots.items():
            if isinstance(raw, dict):
                snapshots[quota_id] = parse_copilot_snapshot(quota_id, raw)

    return CopilotQuotaResponse(
        raw=data,
        login=_as_str(data.get("login")),
        plan=_as_str(data.get("copilot_plan")),
        sku=_as_str(data.get("sku")),
        access_type_sku=_as_str(data.get("access_type_sku")) or None,
        quota_reset_date=parse_iso_timestamp(data.get("quota_reset_date_utc")),
        snapshots=snapshots,
    )


class CopilotQuotaTracker:
    """
    Mixin class providing quota fetching for GitHub Copilot.

    Usage:
        class CopilotProvider(CopilotQuotaTracker):
            ...

    The provider class must initialize these instance attributes in __init__:
        self._credentials: CredentialStore
        self.api_base: str
        self.http_timeout: float
    """

    _credentials: CredentialStore
    api_base: str
    http_timeout: float

    async def fetch_copilot_quota(
        self, client: Optional[httpx.AsyncClient] = None
    ) -> CopilotQuotaResponse:
        """
        Fetch the Copilot quota snapshots for the stored account.

        Args:
            client: Optional HTTP client for connection reuse

        Returns:
            CopilotQuotaResponse with the raw payload

        Raises:
            AuthError: No usable github-copilot credential in auth.json
            FetchError: The call failed
        """
        credential = self._credentials.get_vendor_credential(
            COPILOT_PROVIDER_NAME, "refresh"
        )
        headers = {
            "Authorization": f"Bearer {credential['refresh']}",
            "Accept": "application/json",
            **COPILOT_HEADERS,
        }
        url = f"{self.api_base}{COPILOT_USER_ENDPOINT}"

        try:
            if client is not None:
                response = await client.get(url, headers=headers, timeout=self.http_timeout)
            else:
                async with httpx.AsyncClient() as new_client:
                    response = await new_client.get(
                        url, headers=headers, timeout=self.http_timeout
                    )
        except httpx.RequestError as e:
            raise FetchError(
                f"Failed to fetch Copilot quota: {type(e).__name__}: {e}",
                provider=COPILOT_PROVIDER_NAME,
            ) from e

        if not response.is_success:
            if response.status_code in (401, 403):
                lib_logger.warning(
                    f"GitHub rejected the Copilot token (HTTP {response.status_code}). "
                    "Log in to github-copilot again to refresh auth.json"
                )
            raise FetchError(
                describe_http_failure("fetch Copilot quota", response.status_code),
                provider=COPILOT_PROVIDER_NAME,
                status_code=response.status_code,
            )

        try:
            data = response.json()
        except ValueError as e:
            raise FetchError(
                f"Failed to fetch Copilot quota: invalid JSON ({e})",
                provider=COPILOT_PROVIDER_NAME,
                status_code=response.status_code,
            ) from e

        result = parse_copilot_response(data if isinstance(data, dict) else {})
        lib_logger.debug(
            f"Copilot quota for {result.login or 'unknown account'}: "
            f"{len(result.snapshots)} snapshots"
        )
        return result
