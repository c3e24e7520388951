from __future__ import annotations

from enum import Enum

API_URL = "https://api.codereadr.com/api/"


class Section(str, Enum):
    """
    API resource sections.

    Using str Enum lets members go straight into form fields.
    """

    DATABASES = "databases"
    SCANS = "scans"
    SERVICES = "services"
    USERS = "users"


class Action(str, Enum):
    """API actions. Not every action is valid in every section; the server decides."""

    ADD_QUESTION = "addquestion"
    ADD_USER_PERMISSION = "adduserpermission"
    ADD_VALUE = "addvalue"
    CREATE = "create"
    DELETE = "delete"
    REMOVE_QUESTION = "removequestion"
    RETRIEVE = "retrieve"
    SHOW_VALUES = "showvalues"
    UPDATE = "update"
    UPLOAD = "upload"


class ServiceValidationMethod(str, Enum):
    """Values for the `validation_method` parameter of services create/update."""

    RECORD = "record"
    ON_DEVICE_RECORD = "ondevicerecord"
    DATABASE = "database"
    ON_DEVICE_DATABASE = "ondevicedatabase"
    POSTBACK = "postback"
