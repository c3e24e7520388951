"""Client for the CodeREADr action API.

Requests go out as multipart/form-data; XML responses are decoded into
pydantic result shapes.
"""

from .catalog import API_URL, Action, Section, ServiceValidationMethod
from .client import CodeReadrClient
from .config import ClientConfig
from .exceptions import (
    ApiError,
    CodeReadrError,
    ConfigurationError,
    DecodeError,
    TimestampParseError,
    TransportError,
)
from .protocol import FilePayload, Response, Scalar, decode_response, encode_request

__version__ = "0.1.0"

__all__ = [
    "API_URL",
    "Section",
    "Action",
    "ServiceValidationMethod",
    "CodeReadrClient",
    "ClientConfig",
    "CodeReadrError",
    "ConfigurationError",
    "TransportError",
    "DecodeError",
    "ApiError",
    "TimestampParseError",
    "Scalar",
    "FilePayload",
    "Response",
    "encode_request",
    "decode_response",
]
