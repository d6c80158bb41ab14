"""Exceptions raised by the processing clients and the document task layer."""

from enum import Enum


class DocumentTaskError(Exception):
    """Base exception for all document task related errors."""


class RemoteErrorKind(str, Enum):
    NOT_FOUND = "not_found"
    UNAUTHORIZED = "unauthorized"
    MALFORMED_REQUEST = "malformed_request"
    SERVER_ERROR = "server_error"
    TRANSPORT_ERROR = "transport_error"
    INVALID_RESPONSE = "invalid_response"


class RemoteError(DocumentTaskError):
    """Raised when a call to the remote processing service fails.

    Attributes:
        kind (RemoteErrorKind): Classification of the failure.
        status_code (int | None): HTTP status code, if a response was received.
        url (str | None): The requested URL, if known.
    """

    def __init__(self, message: str, kind: RemoteErrorKind, status_code: int | None = None, url: str | None = None) -> None:
        super().__init__(message)
        self.kind = kind
        self.status_code = status_code
        self.url = url

    @classmethod
    def from_status(cls, status_code: int, url: str) -> "RemoteError":
        """Build a RemoteError from a non-2xx HTTP status code.

        Args:
            status_code (int): The HTTP status code of the response.
            url (str): The requested URL.

        Returns:
            RemoteError: The classified error.
        """
        if status_code in (401, 403):
            kind = RemoteErrorKind.UNAUTHORIZED
        elif status_code in (404, 410):
            kind = RemoteErrorKind.NOT_FOUND
        elif status_code >= 500:
            kind = RemoteErrorKind.SERVER_ERROR
        else:
            kind = RemoteErrorKind.MALFORMED_REQUEST
        return cls(f"Request to {url} failed with status {status_code}", kind=kind, status_code=status_code, url=url)


class UsageError(DocumentTaskError, ValueError):
    """Raised when an operation is invoked with arguments it cannot accept."""


class InvalidPageError(UsageError):
    """Raised when a preview is requested for a page the document does not have."""
