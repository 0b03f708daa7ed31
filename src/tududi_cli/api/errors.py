# src/tududi_cli/api/errors.py

"""Error taxonomy for talking to a Tududi server."""

from __future__ import annotations


class TududiError(RuntimeError):
    """Base error. Carries the HTTP status when the server answered."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        status_text: str | None = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.status_text = status_text


class ConfigError(TududiError):
    """Required settings (endpoint, email, password) are missing."""


class AuthenticationError(TududiError):
    """Login was rejected or the server could not be reached."""


class FetchError(TududiError):
    """A required read failed at the transport/HTTP level."""


class ShapeError(TududiError):
    """A response was JSON but matched no known collection shape."""


class UpdateError(TududiError):
    """The server rejected a task update."""


class CreateError(TududiError):
    """The server rejected a task creation."""


def friendly_error_message(err: Exception) -> str:
    msg = str(err).strip() or err.__class__.__name__
    if isinstance(err, ConfigError):
        return f"{msg} Set them in the environment or in .env."
    if isinstance(err, TududiError) and err.status_text:
        return f"{msg} ({err.status_text})"
    return msg
