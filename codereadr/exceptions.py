from __future__ import annotations


class CodeReadrError(Exception):
    """
    Base exception for all client failures.
    """

    pass


class ConfigurationError(CodeReadrError):
    """
    Raised when the client configuration is missing or invalid.
    """

    pass


class TransportError(CodeReadrError):
    """
    Raised when the request could not be sent or the response not received.

    The underlying network exception is chained as __cause__.
    """

    pass


class DecodeError(CodeReadrError):
    """
    Raised when response bytes do not match the expected XML shape.

    This covers both the envelope and a caller-supplied result shape. When
    the failure comes from a field parser (e.g. a timestamp), that error is
    chained as __cause__.
    """

    pass


class ApiError(CodeReadrError):
    """
    Raised when the API reports failure (status != 1).

    Notes:
    - code defaults to 0 and message to "" when the response carries no
      error element, so "no detail" and "error #0" look the same.
    """

    def __init__(self, code: int = 0, message: str = ""):
        self.code = int(code)
        self.message = message
        super().__init__(f"{message} [Error #{self.code}]")


class TimestampParseError(ValueError):
    """
    Raised when a timestamp string is not in `YYYY-MM-DD HH:MM:SS` form.

    Subclasses ValueError so pydantic reports it as a validation error.
    """

    pass
