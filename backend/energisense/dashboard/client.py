"""
EnergiSense API Client
======================

The HTTP side of the dashboard. Every call that needs a token takes the
Session explicitly.

Errors:
    LoginFailedError    - login refused (bad credentials or bad input)
    SessionExpiredError - the API answered 401 or 403: the token is dead
                          or lacks the role, the caller must log in again
    httpx.HTTPError     - anything else (network down, 500, ...)

Author: EnergiSense Team
"""

import logging
from typing import Optional

import httpx

from energisense.dashboard.session import Session
from energisense.models import AccountResponse, ReadingResponse, Role

logger = logging.getLogger(__name__)


class LoginFailedError(Exception):
    """The API refused the login."""


class SessionExpiredError(Exception):
    """The API rejected the session's token (401/403)."""

    def __init__(self, status_code: int, detail: str):
        super().__init__(f"HTTP {status_code}: {detail}")
        self.status_code = status_code
        self.detail = detail


def _detail(response: httpx.Response) -> str:
    try:
        return str(response.json().get("detail", response.text))
    except (ValueError, AttributeError):
        return response.text


class EnergiSenseClient:
    """
    Talks to the EnergiSense API.

    HOW TO USE:
    ----------
    client = EnergiSenseClient("http://localhost:5000")
    session = await client.login("admin@example.com", "password123")
    readings = await client.latest_readings(session)
    await client.close()
    """

    def __init__(
        self,
        api_url: str,
        request_timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.api_url = api_url.rstrip("/")
        self.http_client = httpx.AsyncClient(
            base_url=self.api_url,
            timeout=request_timeout,
            transport=transport,
        )


    def _check(self, response: httpx.Response):
        """Turn auth failures into SessionExpiredError, other errors into httpx errors."""
        if response.status_code in (401, 403):
            raise SessionExpiredError(response.status_code, _detail(response))
        response.raise_for_status()


    async def login(self, email: str, password: str) -> Session:
        response = await self.http_client.post(
            "/api/auth/login",
            json={"email": email, "password": password},
        )
        if response.status_code == 400:
            raise LoginFailedError(_detail(response))
        response.raise_for_status()

        data = response.json()
        return Session(email=data["email"], role=data["role"], token=data["token"])


    async def latest_readings(self, session: Session) -> list[ReadingResponse]:
        response = await self.http_client.get("/api/data/latest", headers=session.auth_header)
        self._check(response)
        return [ReadingResponse.model_validate(item) for item in response.json()]


    async def list_users(self, session: Session) -> list[AccountResponse]:
        response = await self.http_client.get("/api/admin/users", headers=session.auth_header)
        self._check(response)
        return [AccountResponse.model_validate(item) for item in response.json()]


    async def register_user(
        self,
        session: Optional[Session],
        email: str,
        password: str,
        role: Role = Role.USER,
    ) -> dict:
        """
        Create an account. With no session this only works when the server
        has open registration.

        Raises:
            ValueError: The API rejected the input (e.g. email already taken)
        """
        headers = session.auth_header if session else {}
        response = await self.http_client.post(
            "/api/auth/register",
            json={"email": email, "password": password, "role": Role(role).value},
            headers=headers,
        )
        if response.status_code == 400:
            raise ValueError(_detail(response))
        self._check(response)
        return response.json()


    async def close(self):
        await self.http_client.aclose()
