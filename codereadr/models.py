from __future__ import annotations

from typing import Annotated, Dict, List, Optional, Tuple, Type

from pydantic import BaseModel, ConfigDict, Field

from codereadr.catalog import Action, Section
from codereadr.protocol.envelope import Response
from codereadr.protocol.timestamps import Timestamp
from codereadr.protocol.xmlbind import XmlAttribute, XmlText


class _Record(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)


class ResponseCreate(Response):
    """Result of any `create` action: the new object's id."""

    id: int


class User(_Record):
    id: Annotated[int, XmlAttribute()]
    username: str = ""


class ResponseUsersRetrieve(Response):
    """users/retrieve"""

    count: int
    users: List[User] = Field(default_factory=list, alias="user")


class Database(_Record):
    id: Annotated[int, XmlAttribute()]


class ResponseDatabasesRetrieve(Response):
    """databases/retrieve"""

    count: int
    databases: List[Database] = Field(default_factory=list, alias="database")


class DatabaseValue(_Record):
    response: str = ""


class ResponseDatabasesShowValues(Response):
    """databases/showvalues"""

    count: int
    values: List[DatabaseValue] = Field(default_factory=list, alias="value")


class Service(_Record):
    id: Annotated[int, XmlAttribute()]
    name: str = ""
    description: str = Field(default="", alias="descriptionFromDb")


class ResponseServicesRetrieve(Response):
    """services/retrieve"""

    count: int
    services: List[Service] = Field(default_factory=list, alias="service")


class ScanService(_Record):
    """<service id="..">name</service> inside a scan record."""

    id: Annotated[int, XmlAttribute()]
    name: Annotated[str, XmlText()] = ""


class Scan(_Record):
    id: Annotated[int, XmlAttribute()]
    service: Optional[ScanService] = None
    tid: str = ""
    result: str = ""
    timestamp: Timestamp
    answer: str = ""


class ResponseScansRetrieve(Response):
    """scans/retrieve. Every scan must carry a well-formed timestamp."""

    count: int
    scans: List[Scan] = Field(default_factory=list, alias="scan")


RESPONSE_SHAPES: Dict[Tuple[Section, Action], Type[Response]] = {
    (Section.USERS, Action.RETRIEVE): ResponseUsersRetrieve,
    (Section.DATABASES, Action.RETRIEVE): ResponseDatabasesRetrieve,
    (Section.DATABASES, Action.SHOW_VALUES): ResponseDatabasesShowValues,
    (Section.SERVICES, Action.RETRIEVE): ResponseServicesRetrieve,
    (Section.SCANS, Action.RETRIEVE): ResponseScansRetrieve,
}


def response_shape_for(section: str, action: str) -> Optional[Type[Response]]:
    """Default result shape for a (section, action) pair.

    Returns None for actions whose response carries nothing beyond the
    envelope, and for pairs not in the catalog.
    """

    try:
        key = (Section(section), Action(action))
    except ValueError:
        return None
    if key[1] is Action.CREATE:
        return ResponseCreate
    return RESPONSE_SHAPES.get(key)
