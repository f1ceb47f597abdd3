"""
Dashboard Views
===============

What the dashboard shows depends on who is logged in. There are exactly two
views and the role picks one ONCE per session:

    AdminView - summary cards, consumption chart, user management panel
    UserView  - summary cards, consumption chart (read only)

The choice is advisory UI behavior only. The server checks roles on every
admin request regardless of what the view shows.

Author: EnergiSense Team
"""

from datetime import timezone
from typing import Optional

from pydantic import BaseModel

from energisense.dashboard.session import Session
from energisense.models import AccountResponse, ReadingResponse, Role


# How many of the latest readings the text chart draws
CHART_ROWS = 10
CHART_WIDTH = 30


class DashboardSummary(BaseModel):
    """The numbers on the summary cards."""
    current_reading: float
    total_records: int
    average_consumption: float
    peak: float


def summarize(readings: list[ReadingResponse]) -> DashboardSummary:
    """
    Compute the summary cards from a window of readings (oldest first).

    An empty window gives zeros across the board.
    """
    if not readings:
        return DashboardSummary(current_reading=0, total_records=0, average_consumption=0, peak=0)

    values = [r.value for r in readings]
    return DashboardSummary(
        current_reading=values[-1],
        total_records=len(values),
        average_consumption=sum(values) / len(values),
        peak=max(values),
    )


def render_chart(readings: list[ReadingResponse], rows: int = CHART_ROWS) -> list[str]:
    """A horizontal bar per reading, newest at the bottom."""
    window = readings[-rows:]
    if not window:
        return ["  (no readings yet)"]

    peak = max(r.value for r in window) or 1.0
    lines = []
    for reading in window:
        stamp = reading.timestamp.astimezone(timezone.utc).strftime("%H:%M:%S")
        bar = "#" * max(1, round(reading.value / peak * CHART_WIDTH)) if reading.value > 0 else ""
        lines.append(f"  {stamp}  {reading.value:>9.2f} {reading.type:<4} {bar}")
    return lines


# =============================================================================
# VIEWS
# =============================================================================

class DashboardView:
    """Base class - use select_view() instead of building one directly."""

    role: Role
    title = "EnergiSense"
    shows_user_panel = False

    def __init__(self, session: Session):
        self.session = session


    def _render_common(self, readings: list[ReadingResponse]) -> list[str]:
        summary = summarize(readings)
        unit = readings[-1].type if readings else "kWh"
        lines = [
            "=" * 60,
            f"{self.title} - {self.session.email} ({self.session.role.value})",
            "=" * 60,
            f"Current reading:      {summary.current_reading:.2f} {unit}",
            f"Average consumption:  {summary.average_consumption:.2f} {unit}",
            f"Peak in window:       {summary.peak:.2f} {unit}",
            f"Records in window:    {summary.total_records}",
            "",
            f"Latest {min(CHART_ROWS, len(readings)) or CHART_ROWS} readings (UTC):",
        ]
        lines.extend(render_chart(readings))
        return lines


    def render(
        self,
        readings: list[ReadingResponse],
        users: Optional[list[AccountResponse]] = None,
    ) -> str:
        return "\n".join(self._render_common(readings))


class AdminView(DashboardView):
    """Everything, plus the user management panel."""

    role = Role.ADMIN
    title = "EnergiSense Admin"
    shows_user_panel = True

    def render(
        self,
        readings: list[ReadingResponse],
        users: Optional[list[AccountResponse]] = None,
    ) -> str:
        lines = self._render_common(readings)
        lines.append("")
        lines.append("User management:")
        if users is None:
            lines.append("  (user list unavailable)")
        elif not users:
            lines.append("  (no accounts)")
        else:
            for account in users:
                lines.append(f"  {account.email:<40} {account.role.value}")
        return "\n".join(lines)


class UserView(DashboardView):
    """Read-only monitoring view."""

    role = Role.USER
    title = "EnergiSense Monitor"


VIEWS: dict[Role, type[DashboardView]] = {
    Role.ADMIN: AdminView,
    Role.USER: UserView,
}


def select_view(session: Session) -> DashboardView:
    """
    Pick the view for this session's role.

    Raises:
        ValueError: If the role has no view
    """
    try:
        view_class = VIEWS[Role(session.role)]
    except (KeyError, ValueError):
        raise ValueError(f"No dashboard view for role {session.role!r}")
    return view_class(session)
