from __future__ import annotations

from typing import Optional, Type, TypeVar

from pydantic import BaseModel, ValidationError

from codereadr.exceptions import ApiError, DecodeError, TimestampParseError
from codereadr.protocol.envelope import Response
from codereadr.protocol.xmlbind import bind_element, parse_document

M = TypeVar("M", bound=BaseModel)


def decode_envelope(raw: bytes) -> Response:
    """Decode only the envelope (status + optional error) of a response."""

    return _decode_as(raw, Response)


def decode_response(raw: bytes, shape: Optional[Type[M]] = None) -> Optional[M]:
    """Decode an API response.

    Steps:
    1) decode the envelope; failure here is a DecodeError
    2) status != 1 -> raise ApiError (the typed shape is not attempted)
    3) no shape -> return None
    4) decode the same bytes again into `shape` and return it

    Raises:
      ApiError: the server reported failure.
      DecodeError: the bytes do not match the envelope or `shape`.
    """

    envelope = decode_envelope(raw)
    if not envelope.ok:
        detail = envelope.error
        if detail is None:
            raise ApiError()
        raise ApiError(detail.code, detail.message)

    if shape is None:
        return None
    return _decode_as(raw, shape)


def _decode_as(raw: bytes, shape: Type[M]) -> M:
    # Each call parses its own tree; nothing is shared between passes.
    root = parse_document(raw)
    try:
        return shape.model_validate(bind_element(root, shape))
    except ValidationError as e:
        cause = _timestamp_cause(e)
        if cause is not None:
            raise DecodeError(f"response does not match {shape.__name__}: {cause}") from cause
        raise DecodeError(f"response does not match {shape.__name__}: {e}") from e


def _timestamp_cause(e: ValidationError) -> Optional[TimestampParseError]:
    for err in e.errors():
        exc = (err.get("ctx") or {}).get("error")
        if isinstance(exc, TimestampParseError):
            return exc
    return None
