# src/tududi_cli/api/session.py

"""
Session client.

Every logical operation (one fetch, one mutation) opens its own HTTP client,
logs in, performs exactly one API call and closes the client again. Nothing
about the login survives the operation: there is no token cache.
"""

from __future__ import annotations

import contextlib
import logging
from collections.abc import Iterator
from dataclasses import dataclass
from typing import Any

import httpx

from .errors import AuthenticationError

logger = logging.getLogger(__name__)

LOGIN_PATH = "/api/login"


@dataclass(frozen=True, slots=True)
class SessionToken:
    """Opaque credential: the login response's Set-Cookie header, verbatim."""

    cookie: str | None

    def headers(self) -> dict[str, str]:
        return {"Cookie": self.cookie} if self.cookie else {}


class ApiSession:
    """An authenticated, single-operation view of the HTTP client."""

    def __init__(self, http: httpx.Client, token: SessionToken) -> None:
        self._http = http
        self.token = token

    def request(
        self,
        method: str,
        path: str,
        *,
        params: dict[str, Any] | None = None,
        json: Any = None,
    ) -> httpx.Response:
        headers = self.token.headers()
        if json is not None:
            headers["Content-Type"] = "application/json"
        return self._http.request(method, path, params=params, json=json, headers=headers)


class SessionClient:
    def __init__(
        self,
        base_url: str,
        email: str,
        password: str,
        *,
        timeout: float | None = None,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self._email = email
        self._password = password
        self._timeout = timeout
        self._transport = transport

    @classmethod
    def from_settings(cls, settings, *, transport: httpx.BaseTransport | None = None) -> "SessionClient":
        return cls(
            settings.api_url,
            settings.email,
            settings.password,
            timeout=getattr(settings, "timeout_seconds", None),
            transport=transport,
        )

    def _new_http(self) -> httpx.Client:
        return httpx.Client(
            base_url=self.base_url,
            timeout=httpx.Timeout(self._timeout),
            transport=self._transport,
        )

    def authenticate(self, http: httpx.Client) -> SessionToken:
        """Log in once and return the session credential."""
        try:
            resp = http.post(
                LOGIN_PATH,
                json={"email": self._email, "password": self._password},
            )
        except httpx.HTTPError as e:
            raise AuthenticationError(f"Login failed: cannot reach {self.base_url}.") from e

        if not resp.is_success:
            logger.warning("Login rejected status=%s", resp.status_code)
            raise AuthenticationError(
                "Login failed.",
                status_code=resp.status_code,
                status_text=resp.reason_phrase,
            )

        cookie = resp.headers.get("set-cookie")
        # The credential travels only as an explicit header, never via the jar.
        http.cookies.clear()
        logger.debug("Login ok (cookie=%s)", "yes" if cookie else "no")
        return SessionToken(cookie=cookie)

    @contextlib.contextmanager
    def open_session(self) -> Iterator[ApiSession]:
        """Fresh client + fresh login, scoped to one operation."""
        with self._new_http() as http:
            token = self.authenticate(http)
            yield ApiSession(http, token)
