"""
Error kinds raised by the relay and mapped to HTTP responses in server.py.
"""

import json
from typing import Optional


class RelayError(Exception):
    """Base class for errors that carry an HTTP status."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(RelayError):
    """A required request field is missing or malformed. No remote call is made."""

    status_code = 400


class NotFoundError(RelayError):
    """Catalog lookup miss."""

    status_code = 404


class RemoteServiceError(RelayError):
    """Non-2xx, transport failure or malformed body from the assistant service."""

    status_code = 500

    def __init__(self, message: str, remote_status: Optional[int] = None, body: str = ""):
        super().__init__(message)
        self.remote_status = remote_status
        self.body = body or ""

    @property
    def remote_message(self) -> str:
        """The service's own error message when the body carries one."""
        try:
            payload = json.loads(self.body)
        except (TypeError, ValueError):
            return self.message
        if isinstance(payload, dict):
            error = payload.get("error")
            if isinstance(error, dict) and error.get("message"):
                return error["message"]
            if isinstance(error, str) and error:
                return error
        return self.message


class ParseError(ValueError):
    """Malformed tool-call arguments. Recovered locally and never surfaced."""
