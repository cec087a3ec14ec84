"""Exception hierarchy raised by the client."""

from __future__ import annotations

from typing import Any, Optional, Sequence


class ClientException(Exception):
    """Base class for every error raised by this package."""


class ConfigurationError(ClientException):
    pass


class InvalidDocument(ClientException):
    """A document is not a mapping or lacks required top-level fields."""

    def __init__(self, missing_fields: Sequence[str] = (), message: Optional[str] = None) -> None:
        self.missing_fields = tuple(missing_fields)
        if message is None:
            message = f"missing required fields ({', '.join(self.missing_fields)})"
        super().__init__(message)


class Timeout(ClientException, TimeoutError):
    """Polling deadline elapsed before the check succeeded."""


class TransportError(ClientException):
    """Network or HTTP level failure talking to the API."""

    def __init__(self, message: str, *, status_code: Optional[int] = None, response: Any = None) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.response = response


class BadRequest(TransportError):
    pass


class InvalidCredentials(TransportError):
    pass


class Forbidden(TransportError):
    pass


class NonExistentRecord(TransportError):
    pass


class RecordAlreadyExists(TransportError):
    pass


class UnexpectedHTTPException(TransportError):
    pass


STATUS_ERRORS = {
    400: BadRequest,
    401: InvalidCredentials,
    403: Forbidden,
    404: NonExistentRecord,
    409: RecordAlreadyExists,
}
