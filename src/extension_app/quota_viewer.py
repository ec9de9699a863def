# SPDX-License-Identifier: MIT
# Copyright (c) 2026 pi-gateway-extensions contributors

"""
Quota snapshot view for the transient quota widgets.

Turns a vendor quota response into ordered QuotaRows with a severity
each, then into rich Text lines. The two vendor shapes stay separate
until this module projects them onto rows.
"""

from datetime import datetime
from typing import Dict, List, Optional

from rich.text import Text

from gateway_library.core.constants import (
    CRITICAL_FRACTION_THRESHOLD,
    WARNING_FRACTION_THRESHOLD,
)
from gateway_library.core.types import (
    AntigravityQuotaResponse,
    CopilotQuotaResponse,
    CopilotQuotaSnapshot,
    QuotaRow,
    Severity,
)

# =============================================================================
# DISPLAY CONFIGURATION
# =============================================================================

HEADER_STYLE = "bold cyan"
BORDER_STYLE = "blue"
LABEL_STYLE = "dim"
VALUE_STYLE = "green"
BORDER = "=" * 25

# Width of the percentage column (e.g. " 76.7%")
PCT_WIDTH = 6
# Width of the label column in the Copilot widget
COPILOT_LABEL_WIDTH = 20

SEVERITY_STYLES: Dict[str, str] = {
    Severity.CRITICAL: "red",
    Severity.WARNING: "yellow",
    Severity.NORMAL: "default",
    Severity.UNLIMITED: "green",
}

# =============================================================================


def classify_fraction(fraction: Optional[float], exhausted: bool = False) -> str:
    """
    Severity for a remaining fraction.

    Exhausted or < 10% is critical, < 50% is a warning, anything else
    (including an unknown fraction) is normal.
    """
    if exhausted:
        return Severity.CRITICAL
    if fraction is None:
        return Severity.NORMAL
    if fraction < CRITICAL_FRACTION_THRESHOLD:
        return Severity.CRITICAL
    if fraction < WARNING_FRACTION_THRESHOLD:
        return Severity.WARNING
    return Severity.NORMAL


def format_percent(fraction: Optional[float]) -> str:
    """Format a 0-1 fraction as a percentage (e.g. 0.767 -> '76.7%')."""
    if fraction is None:
        return "N/A"
    return f"{fraction * 100:.1f}%"


def format_reset_time(reset_time: Optional[datetime], now: Optional[datetime] = None) -> str:
    """
    Format a reset timestamp in local time.

    Same calendar day as now: "HH:MM". Any other day: "D.M HH:MM".
    """
    if reset_time is None:
        return "Unknown"
    local_dt = reset_time.astimezone()
    local_now = (now or datetime.now()).astimezone()
    time_str = local_dt.strftime("%H:%M")
    if local_dt.date() == local_now.date():
        return time_str
    return f"{local_dt.day}.{local_dt.month} {time_str}"


# =============================================================================
# ROW PROJECTION
# =============================================================================


def antigravity_quota_rows(response: AntigravityQuotaResponse) -> List[QuotaRow]:
    """
    Rows worth showing for an Antigravity response, least quota first.

    A model is shown when the vendor recommends it or when its quota is
    below 100%. Models without quota info are never shown. Unknown
    fractions sort as 1.0; ties keep the vendor's order.
    """
    recommended = set(response.recommended_ids)
    rows: List[QuotaRow] = []
    for model_id, info in response.models.items():
        if info is None:
            continue
        fraction = info.remaining_fraction
        below_full = fraction is not None and fraction < 1
        if model_id not in recommended and not below_full:
            continue
        rows.append(
            QuotaRow(
                key=model_id,
                severity=classify_fraction(fraction, info.is_exhausted),
                fraction=fraction,
                reset_time=info.reset_time,
                exhausted=info.is_exhausted,
            )
        )
    rows.sort(key=lambda row: row.fraction if row.fraction is not None else 1.0)
    return rows


def _copilot_fraction(snapshot: CopilotQuotaSnapshot) -> Optional[float]:
    if snapshot.percent_remaining is not None:
        return min(1.0, max(0.0, snapshot.percent_remaining / 100))
    if snapshot.entitlement > 0:
        return min(1.0, max(0.0, snapshot.remaining / snapshot.entitlement))
    return None


def _format_count(value: float) -> str:
    return str(int(value)) if float(value).is_integer() else f"{value:g}"


def copilot_quota_rows(response: CopilotQuotaResponse) -> List[QuotaRow]:
    """One row per Copilot snapshot, in the vendor's order."""
    rows: List[QuotaRow] = []
    for quota_id, snapshot in response.snapshots.items():
        if snapshot.unlimited:
            rows.append(QuotaRow(key=quota_id, severity=Severity.UNLIMITED, unlimited=True))
            continue
        fraction = _copilot_fraction(snapshot)
        rows.append(
            QuotaRow(
                key=quota_id,
                severity=classify_fraction(fraction),
                fraction=fraction,
                reset_time=response.quota_reset_date,
                detail=f"{_format_count(snapshot.remaining)}/{_format_count(snapshot.entitlement)}",
            )
        )
    return rows


# =============================================================================
# RENDERING
# =============================================================================


def _header(title: str) -> List[Text]:
    return [Text(title, style=HEADER_STYLE), Text(BORDER, style=BORDER_STYLE)]


def render_antigravity_lines(
    response: AntigravityQuotaResponse, now: Optional[datetime] = None
) -> List[Text]:
    lines = _header("Antigravity Usage Limits:")

    if response.available_prompt_credits is not None:
        line = Text("Available Prompt Credits: ")
        line.append(f"{response.available_prompt_credits:g}", style=VALUE_STYLE)
        lines.append(line)

    rows = antigravity_quota_rows(response)
    id_width = max((len(row.key) for row in rows), default=0)
    for row in rows:
        line = Text()
        line.append(row.key.ljust(id_width), style=LABEL_STYLE)
        line.append(": ")
        line.append(
            format_percent(row.fraction).rjust(PCT_WIDTH),
            style=SEVERITY_STYLES[row.severity],
        )
        line.append(" rem, reset: ")
        line.append(format_reset_time(row.reset_time, now), style=LABEL_STYLE)
        if row.exhausted:
            line.append(" (EX)", style=SEVERITY_STYLES[Severity.CRITICAL])
        lines.append(line)
    return lines


def render_copilot_lines(
    response: CopilotQuotaResponse, now: Optional[datetime] = None
) -> List[Text]:
    lines = _header("GitHub Copilot Quotas:")

    for label, value in (
        ("Account: ", response.login),
        ("Plan:    ", response.plan),
        ("SKU:     ", response.access_type_sku),
    ):
        if value:
            line = Text(label)
            line.append(value, style=VALUE_STYLE)
            lines.append(line)

    for row in copilot_quota_rows(response):
        line = Text()
        line.append(row.key.ljust(COPILOT_LABEL_WIDTH), style=LABEL_STYLE)
        line.append(": ")
        if row.unlimited:
            line.append("Unlimited", style=SEVERITY_STYLES[Severity.UNLIMITED])
        else:
            line.append(
                format_percent(row.fraction).rjust(PCT_WIDTH),
                style=SEVERITY_STYLES[row.severity],
            )
            line.append(f" ({row.detail})")
        lines.append(line)

    if response.quota_reset_date is not None:
        lines.append(Text(""))
        line = Text()
        line.append("Next Reset".ljust(COPILOT_LABEL_WIDTH), style=LABEL_STYLE)
        line.append(f": {format_reset_time(response.quota_reset_date, now)}")
        lines.append(line)
    return lines
