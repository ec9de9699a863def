"""Tests for the GitHub Copilot quota fetch."""
from __future__ import annotations

import pytest

from gateway_library.core.errors import AuthError, FetchError
from gateway_library.providers.copilot_provider import CopilotProvider
from gateway_library.providers.utilities.copilot_quota_tracker import (
    parse_copilot_response,
)

from tests.fakes import RecordingHandler, json_response, make_client


USER_DATA = {
    "login": "octocat",
    "copilot_plan": "individual",
    "sku": "copilot_pro",
    "access_type_sku": "monthly_subscriber",
    "quota_reset_date_utc": "2026-02-01T00:00:00.000Z",
    "quota_snapshots": {
        "chat": {"quota_id": "chat", "unlimited": True, "entitlement": 0, "remaining": 0},
        "premium_interactions": {
            "quota_id": "premium_interactions",
            "entitlement": 300,
            "remaining": 120,
            "percent_remaining": 40.0,
            "unlimited": False,
        },
        "completions": "garbage",
    },
}


def test_parse_response() -> None:
    result = parse_copilot_response(USER_DATA)
    assert result.login == "octocat"
    assert result.plan == "individual"
    assert result.sku == "copilot_pro"
    assert result.access_type_sku == "monthly_subscriber"
    assert result.quota_reset_date.month == 2
    assert list(result.snapshots) == ["chat", "premium_interactions"]
    assert result.snapshots["chat"].unlimited is True
    premium = result.snapshots["premium_interactions"]
    assert premium.entitlement == 300
    assert premium.remaining == 120
    assert premium.percent_remaining == 40.0
    assert result.to_payload() is USER_DATA


def test_parse_response_tolerates_missing_fields() -> None:
    result = parse_copilot_response({})
    assert result.login == ""
    assert result.access_type_sku is None
    assert result.quota_reset_date is None
    assert result.snapshots == {}


@pytest.mark.asyncio
async def test_fetch_sends_refresh_token_and_editor_headers(settings, write_auth) -> None:
    write_auth({"github-copilot": {"access": "tid=short-lived", "refresh": "gho_abc"}})
    handler = RecordingHandler(json_response(200, USER_DATA))
    provider = CopilotProvider(settings)
    async with make_client(handler) as client:
        result = await provider.fetch_quota(client)

    request = handler.requests[0]
    assert request.method == "GET"
    assert str(request.url) == "https://github.test/copilot_internal/user"
    assert request.headers["Authorization"] == "Bearer gho_abc"
    assert request.headers["Accept"] == "application/json"
    assert request.headers["User-Agent"] == "GitHubCopilotChat/0.35.0"
    assert request.headers["Editor-Version"] == "vscode/1.107.0"
    assert request.headers["Editor-Plugin-Version"] == "copilot-chat/0.35.0"
    assert request.headers["Copilot-Integration-Id"] == "vscode-chat"
    assert result.login == "octocat"


@pytest.mark.asyncio
async def test_missing_credential(settings, write_auth) -> None:
    write_auth({"github-copilot": {"access": "only-access"}})
    handler = RecordingHandler()
    provider = CopilotProvider(settings)
    async with make_client(handler) as client:
        with pytest.raises(AuthError):
            await provider.fetch_quota(client)

    assert handler.requests == []


@pytest.mark.asyncio
async def test_http_error(settings, write_auth) -> None:
    write_auth({"github-copilot": {"refresh": "gho_revoked"}})
    handler = RecordingHandler(json_response(401, {"message": "Bad credentials"}))
    provider = CopilotProvider(settings)
    async with make_client(handler) as client:
        with pytest.raises(FetchError) as exc_info:
            await provider.fetch_quota(client)

    assert str(exc_info.value) == "Failed to fetch Copilot quota: HTTP 401"
    assert exc_info.value.status_code == 401
