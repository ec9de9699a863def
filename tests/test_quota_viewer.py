"""Tests for quota row projection and widget rendering."""
from __future__ import annotations

from datetime import datetime, timezone

import pytest

from extension_app.quota_viewer import (
    SEVERITY_STYLES,
    antigravity_quota_rows,
    classify_fraction,
    copilot_quota_rows,
    format_percent,
    format_reset_time,
    render_antigravity_lines,
    render_copilot_lines,
)
from gateway_library.core.types import (
    AntigravityQuotaInfo,
    AntigravityQuotaResponse,
    CopilotQuotaResponse,
    CopilotQuotaSnapshot,
    Severity,
)


def antigravity_response(models, recommended=(), credits=None) -> AntigravityQuotaResponse:
    return AntigravityQuotaResponse(
        load_data={},
        models_data={},
        available_prompt_credits=credits,
        models=models,
        recommended_ids=list(recommended),
    )


def styles_of(line, fragment: str):
    start = line.plain.index(fragment)
    return {span.style for span in line.spans if span.start <= start < span.end}


# ---------------------------------------------------------------------------
# Classification and formatting
# ---------------------------------------------------------------------------


@pytest.mark.parametrize(
    "fraction, exhausted, expected",
    [
        (0.05, False, Severity.CRITICAL),
        (0.099, False, Severity.CRITICAL),
        (0.10, False, Severity.WARNING),
        (0.32, False, Severity.WARNING),
        (0.50, False, Severity.NORMAL),
        (0.91, False, Severity.NORMAL),
        (0.91, True, Severity.CRITICAL),
        (None, False, Severity.NORMAL),
        (None, True, Severity.CRITICAL),
    ],
)
def test_classify_fraction(fraction, exhausted, expected) -> None:
    assert classify_fraction(fraction, exhausted) == expected


def test_format_percent() -> None:
    assert format_percent(0.767) == "76.7%"
    assert format_percent(1.0) == "100.0%"
    assert format_percent(0) == "0.0%"
    assert format_percent(None) == "N/A"


def test_format_reset_time_same_day() -> None:
    now = datetime(2026, 1, 2, 9, 0).astimezone()
    reset = datetime(2026, 1, 2, 17, 45).astimezone()
    assert format_reset_time(reset, now) == "17:45"


def test_format_reset_time_other_day() -> None:
    now = datetime(2026, 1, 2, 9, 0).astimezone()
    reset = datetime(2026, 1, 5, 8, 5).astimezone()
    assert format_reset_time(reset, now) == "5.1 08:05"


def test_format_reset_time_unknown() -> None:
    assert format_reset_time(None) == "Unknown"


# ---------------------------------------------------------------------------
# Antigravity rows
# ---------------------------------------------------------------------------


def test_antigravity_rows_sorted_by_remaining_fraction() -> None:
    response = antigravity_response(
        {
            "A": AntigravityQuotaInfo(remaining_fraction=0.32),
            "B": AntigravityQuotaInfo(remaining_fraction=0.05),
            "C": AntigravityQuotaInfo(remaining_fraction=0.91),
        }
    )
    rows = antigravity_quota_rows(response)
    assert [row.key for row in rows] == ["B", "A", "C"]
    assert [row.severity for row in rows] == [
        Severity.CRITICAL,
        Severity.WARNING,
        Severity.NORMAL,
    ]


def test_antigravity_unknown_fraction_sorts_last() -> None:
    response = antigravity_response(
        {
            "C": AntigravityQuotaInfo(),
            "A": AntigravityQuotaInfo(remaining_fraction=0.8),
            "B": AntigravityQuotaInfo(remaining_fraction=0.2),
        },
        recommended=["C"],
    )
    assert [row.key for row in antigravity_quota_rows(response)] == ["B", "A", "C"]


def test_antigravity_rows_visibility() -> None:
    response = antigravity_response(
        {
            "full-recommended": AntigravityQuotaInfo(remaining_fraction=1.0),
            "full-hidden": AntigravityQuotaInfo(remaining_fraction=1.0),
            "unknown-recommended": AntigravityQuotaInfo(),
            "no-info": None,
            "partial": AntigravityQuotaInfo(remaining_fraction=0.6),
        },
        recommended=["full-recommended", "unknown-recommended", "no-info"],
    )
    rows = antigravity_quota_rows(response)
    assert [row.key for row in rows] == ["partial", "full-recommended", "unknown-recommended"]


def test_antigravity_exhausted_row_is_critical() -> None:
    response = antigravity_response(
        {"m": AntigravityQuotaInfo(remaining_fraction=0.8, is_exhausted=True)}
    )
    (row,) = antigravity_quota_rows(response)
    assert row.severity == Severity.CRITICAL
    assert row.exhausted is True


def test_render_antigravity_lines() -> None:
    now = datetime(2026, 1, 2, 9, 0).astimezone()
    response = antigravity_response(
        {
            "gemini-3-pro": AntigravityQuotaInfo(
                remaining_fraction=0.05,
                reset_time=datetime(2026, 1, 2, 17, 45).astimezone(),
                is_exhausted=True,
            ),
            "claude": AntigravityQuotaInfo(remaining_fraction=0.75),
        },
        credits=500,
    )
    lines = render_antigravity_lines(response, now)
    plain = [line.plain for line in lines]

    assert plain[0] == "Antigravity Usage Limits:"
    assert set(plain[1]) == {"="}
    assert plain[2] == "Available Prompt Credits: 500"
    assert plain[3] == "gemini-3-pro:   5.0% rem, reset: 17:45 (EX)"
    assert plain[4] == "claude      :  75.0% rem, reset: Unknown"
    assert SEVERITY_STYLES[Severity.CRITICAL] in styles_of(lines[3], "5.0%")
    assert SEVERITY_STYLES[Severity.NORMAL] in styles_of(lines[4], "75.0%")


def test_render_antigravity_without_credits_or_rows() -> None:
    lines = render_antigravity_lines(antigravity_response({}))
    assert [line.plain for line in lines][0] == "Antigravity Usage Limits:"
    assert len(lines) == 2


# ---------------------------------------------------------------------------
# Copilot rows
# ---------------------------------------------------------------------------


def copilot_response(**kwargs) -> CopilotQuotaResponse:
    snapshots = {
        "chat": CopilotQuotaSnapshot(quota_id="chat", unlimited=True),
        "premium_interactions": CopilotQuotaSnapshot(
            quota_id="premium_interactions",
            entitlement=300,
            remaining=24,
            percent_remaining=8.0,
        ),
        "completions": CopilotQuotaSnapshot(
            quota_id="completions", entitlement=2000, remaining=1500
        ),
    }
    defaults = dict(
        raw={},
        login="octocat",
        plan="individual",
        sku="copilot_pro",
        access_type_sku="monthly_subscriber",
        snapshots=snapshots,
    )
    defaults.update(kwargs)
    return CopilotQuotaResponse(**defaults)


def test_copilot_rows() -> None:
    rows = copilot_quota_rows(copilot_response())
    assert [row.key for row in rows] == ["chat", "premium_interactions", "completions"]

    chat, premium, completions = rows
    assert chat.unlimited is True
    assert chat.severity == Severity.UNLIMITED
    assert premium.fraction == pytest.approx(0.08)
    assert premium.severity == Severity.CRITICAL
    assert premium.detail == "24/300"
    assert completions.fraction == pytest.approx(0.75)
    assert completions.severity == Severity.NORMAL


def test_unlimited_snapshot_ignores_numeric_fields() -> None:
    response = copilot_response(
        snapshots={
            "chat": CopilotQuotaSnapshot(
                quota_id="chat",
                unlimited=True,
                percent_remaining=5.0,
                entitlement=300,
                remaining=15,
            )
        }
    )
    (row,) = copilot_quota_rows(response)
    assert row.severity == Severity.UNLIMITED
    assert row.fraction is None
    assert row.detail is None

    lines = render_copilot_lines(response)
    (chat_line,) = [line for line in lines if line.plain.startswith("chat")]
    assert chat_line.plain == "chat                : Unlimited"
    assert "%" not in chat_line.plain
    assert SEVERITY_STYLES[Severity.CRITICAL] not in styles_of(chat_line, "Unlimited")


def test_copilot_row_without_entitlement_has_unknown_fraction() -> None:
    response = copilot_response(
        snapshots={"x": CopilotQuotaSnapshot(quota_id="x", entitlement=0, remaining=0)}
    )
    (row,) = copilot_quota_rows(response)
    assert row.fraction is None
    assert row.severity == Severity.NORMAL


def test_render_copilot_lines() -> None:
    now = datetime(2026, 1, 2, 9, 0).astimezone()
    reset = datetime(2026, 2, 1, 0, 0, tzinfo=timezone.utc)
    lines = render_copilot_lines(copilot_response(quota_reset_date=reset), now)
    plain = [line.plain for line in lines]

    assert plain[0] == "GitHub Copilot Quotas:"
    assert plain[2] == "Account: octocat"
    assert plain[3] == "Plan:    individual"
    assert plain[4] == "SKU:     monthly_subscriber"
    assert plain[5] == "chat                : Unlimited"
    assert plain[6] == "premium_interactions:   8.0% (24/300)"
    assert plain[7] == "completions         :  75.0% (1500/2000)"
    assert plain[8] == ""
    assert plain[9] == f"Next Reset          : {format_reset_time(reset, now)}"
    assert SEVERITY_STYLES[Severity.UNLIMITED] in styles_of(lines[5], "Unlimited")
    assert SEVERITY_STYLES[Severity.CRITICAL] in styles_of(lines[6], "8.0%")


def test_render_copilot_without_reset_date() -> None:
    lines = render_copilot_lines(copilot_response(snapshots={}, access_type_sku=None))
    plain = [line.plain for line in lines]
    assert "Next Reset" not in "\n".join(plain)
    assert not any(line.startswith("SKU") for line in plain)
