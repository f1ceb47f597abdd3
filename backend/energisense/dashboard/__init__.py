"""
Dashboard Package
=================

A terminal version of the EnergiSense dashboard.

- Session / SessionStore: who is logged in, saved between runs
- EnergiSenseClient: HTTP calls to the API
- AdminView / UserView: what gets shown, picked by role
- DashboardPoller: refreshes the view every few seconds
"""

from .session import Session, SessionStore
from .client import EnergiSenseClient, LoginFailedError, SessionExpiredError
from .views import AdminView, DashboardSummary, DashboardView, UserView, select_view, summarize
from .poller import DashboardPoller

__all__ = [
    "Session",
    "SessionStore",
    "EnergiSenseClient",
    "LoginFailedError",
    "SessionExpiredError",
    "AdminView",
    "UserView",
    "DashboardView",
    "DashboardSummary",
    "select_view",
    "summarize",
    "DashboardPoller",
]
