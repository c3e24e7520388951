from __future__ import annotations

from typing import Annotated, Optional

from pydantic import BaseModel, ConfigDict

from codereadr.protocol.xmlbind import XmlAttribute, XmlText


class ApiErrorDetail(BaseModel):
    """The optional <error code="..">message</error> element."""

    model_config = ConfigDict(frozen=True)

    code: Annotated[int, XmlAttribute()] = 0
    message: Annotated[str, XmlText()] = ""


class Response(BaseModel):
    """Envelope present in every API response.

    Action-specific shapes subclass this and add their own fields; the
    envelope itself never needs to know about them.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    status: int
    error: Optional[ApiErrorDetail] = None

    @property
    def ok(self) -> bool:
        return self.status == 1
