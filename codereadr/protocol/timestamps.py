from __future__ import annotations

import re
from datetime import datetime
from typing import Annotated

from pydantic import BeforeValidator

from codereadr.exceptions import TimestampParseError

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"

# strptime alone accepts single-digit fields, so widths are checked first.
_TIMESTAMP_RE = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2} [0-9]{2}:[0-9]{2}:[0-9]{2}")


def parse_timestamp(raw: str) -> datetime:
    """Parse a server timestamp (`YYYY-MM-DD HH:MM:SS`).

    The result is naive: it is the wall-clock value the server sent, with no
    zone applied.

    Raises:
      TimestampParseError: on any other layout or an out-of-range component.
    """

    if not isinstance(raw, str) or not _TIMESTAMP_RE.fullmatch(raw):
        raise TimestampParseError(f"invalid timestamp: {raw!r}")
    try:
        return datetime.strptime(raw, TIMESTAMP_FORMAT)
    except ValueError as e:
        raise TimestampParseError(f"invalid timestamp: {raw!r}: {e}") from e


def _coerce_timestamp(value):
    if isinstance(value, datetime):
        return value
    return parse_timestamp(value)


# Field type for result shapes carrying a server timestamp.
Timestamp = Annotated[datetime, BeforeValidator(_coerce_timestamp)]
