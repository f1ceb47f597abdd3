"""
Dashboard Poller
================

Refreshes the dashboard on a fixed timer (5 seconds by default) for as long
as there is a session.

ON EVERY TICK:
    1. GET /api/data/latest (and /api/admin/users for the admin view)
    2. Render the view and hand the text to the output callback

WHEN THINGS GO WRONG:
    401 / 403 -> the session is cleared and polling stops; log in again
    anything else -> logged, the next tick tries again (no backoff)

Author: EnergiSense Team
"""

import asyncio
import logging
from datetime import datetime, timezone
from typing import Callable, Optional

import httpx
from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.interval import IntervalTrigger

from energisense.dashboard.client import EnergiSenseClient, SessionExpiredError
from energisense.dashboard.session import Session, SessionStore
from energisense.dashboard.views import select_view

logger = logging.getLogger(__name__)


class DashboardPoller:
    """
    Polls the API and renders the role's view.

    HOW TO USE:
    ----------
    poller = DashboardPoller(client, store, session, interval=5)
    await poller.run()              # until the session expires or Ctrl+C
    await poller.run(max_ticks=1)   # one refresh
    """

    JOB_ID = "dashboard_refresh"

    def __init__(
        self,
        client: EnergiSenseClient,
        session_store: SessionStore,
        session: Session,
        interval: float = 5,
        output: Callable[[str], None] = print,
    ):
        self.client = client
        self.session_store = session_store
        self.session: Optional[Session] = session
        self.interval = interval
        self.output = output

        # Picked once for the whole session
        self.view = select_view(session)

        self.ticks = 0
        self.last_error: Optional[str] = None
        self._remaining: Optional[int] = None
        self._done: Optional[asyncio.Event] = None


    @property
    def active(self) -> bool:
        return self.session is not None


    async def refresh(self) -> bool:
        """
        Fetch and render once.

        Returns:
            False if the session was rejected and polling should stop,
            True otherwise (including transient failures)
        """
        if self.session is None:
            return False

        try:
            readings = await self.client.latest_readings(self.session)
            users = None
            if self.view.shows_user_panel:
                users = await self.client.list_users(self.session)
        except SessionExpiredError as e:
            logger.warning(f"Session rejected by the API ({e}). Logging out.")
            self.session_store.clear()
            self.session = None
            self.output("Session expired or not authorized. Please log in again.")
            return False
        except httpx.HTTPError as e:
            self.last_error = str(e)
            logger.error(f"Could not refresh dashboard: {e}. Retrying on the next tick.")
            return True

        self.last_error = None
        self.output(self.view.render(readings, users))
        return True


    async def _tick(self):
        keep_going = await self.refresh()
        self.ticks += 1

        if self._remaining is not None:
            self._remaining -= 1

        if not keep_going or (self._remaining is not None and self._remaining <= 0):
            if self._done is not None:
                self._done.set()


    async def run(self, max_ticks: Optional[int] = None):
        """
        Refresh now, then every `interval` seconds.

        Stops when the session is rejected or after max_ticks refreshes.
        """
        self._remaining = max_ticks
        self._done = asyncio.Event()

        scheduler = AsyncIOScheduler()
        scheduler.add_job(
            self._tick,
            trigger=IntervalTrigger(seconds=self.interval),
            id=self.JOB_ID,
            next_run_time=datetime.now(timezone.utc),
            max_instances=1,
            coalesce=True,
        )
        scheduler.start()

        try:
            await self._done.wait()
        finally:
            scheduler.shutdown(wait=False)
