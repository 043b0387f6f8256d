"""Error types raised by the conversion engine and its collaborators."""

from typing import Optional


class MdToTextError(Exception):
    """Base class for all md-to-text errors."""


class ConversionError(MdToTextError):
    """Raised when markdown cannot be converted.

    Either the input was not a non-empty string, or an unexpected failure
    happened while rendering. In the latter case the original exception is
    kept on ``cause``.
    """

    def __init__(self, message: str, cause: Optional[BaseException] = None):
        super().__init__(message)
        self.message = message
        self.cause = cause


class SecurityError(MdToTextError):
    """Raised when a path, URL or payload size is refused by validation."""


class NetworkError(MdToTextError):
    """Raised when remote content cannot be fetched."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code
