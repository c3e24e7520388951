from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Any, Mapping

from pydantic import BaseModel


def to_jsonable(obj: Any) -> Any:
    """Render a decoded API result as plain JSON values for CLI output.

    Result shapes are dumped by field name (`users`, `description`), not by
    their XML tag. Scan timestamps stay naive, so the ISO text shows the
    server's wall-clock time with no offset.
    """

    if isinstance(obj, BaseModel):
        return to_jsonable(obj.model_dump())
    if isinstance(obj, Enum):
        return obj.value
    if isinstance(obj, datetime):
        return obj.isoformat(sep=" ")
    if isinstance(obj, Mapping):
        return {str(k): to_jsonable(v) for k, v in obj.items()}
    if isinstance(obj, (list, tuple)):
        return [to_jsonable(item) for item in obj]
    if obj is None or isinstance(obj, (str, int, float, bool)):
        return obj
    return str(obj)
