"""
Exception types shared across the API
"""
from typing import Optional


class RoomcraftError(Exception):
    """Base class for application errors"""


class CatalogUnavailable(RoomcraftError):
    """The product catalog could not be queried"""


class ExternalServiceError(RoomcraftError):
    """An upstream AI service call failed.

    kind is one of: timeout, http, auth, connection, empty, not_configured
    """

    def __init__(self, message: str, kind: str = "http", status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.kind = kind
        self.status_code = status_code

    def __str__(self) -> str:
        return f"[{self.kind}] {self.message}"


class ResponseParseError(RoomcraftError):
    """Model output could not be interpreted as a recommendation payload"""


class InvalidUpload(RoomcraftError):
    """An uploaded file failed validation"""

    def __init__(self, errors):
        super().__init__("; ".join(errors))
        self.errors = list(errors)
