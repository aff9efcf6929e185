from __future__ import annotations

from enum import IntEnum
from typing import Any


class BridgeErrorType(IntEnum):
    UNAUTHORIZED_USER = 1
    BODY_CONTAINS_INVALID_JSON = 2
    RESOURCE_NOT_AVAILABLE = 3
    METHOD_NOT_AVAILABLE_FOR_RESOURCE = 4
    MISSING_PARAMETERS_IN_BODY = 5
    PARAMETER_NOT_AVAILABLE = 6
    INVALID_VALUE_FOR_PARAMETER = 7
    PARAMETER_IS_NOT_MODIFIABLE = 8
    TOO_MANY_ITEMS_IN_LIST = 11
    PORTAL_CONNECTION_REQUIRED = 12
    LINK_BUTTON_NOT_PRESSED = 101
    DHCP_CANNOT_BE_DISABLED = 110
    INVALID_UPDATE_STATE = 111
    DEVICE_IS_SET_TO_OFF = 201
    COMMISSIONABLE_LIGHT_LIST_IS_FULL = 203
    GROUP_TABLE_IS_FULL = 301
    GROUP_TYPE_NOT_MODIFIABLE = 305
    LIGHT_ALREADY_USED_IN_ANOTHER_ROOM = 306
    SCENE_BUFFER_IS_FULL = 402
    SCENE_COULD_NOT_BE_REMOVED = 403
    SCENE_GROUP_IS_EMPTY = 404
    SENSOR_TYPE_NOT_CREATABLE = 501
    SENSOR_LIST_IS_FULL = 502
    COMMISSIONABLE_SENSOR_LIST_IS_FULL = 503
    RULE_ENGINE_FULL = 601
    CONDITION_ERROR = 607
    ACTION_ERROR = 608
    UNABLE_TO_ACTIVATE = 609
    SCHEDULE_LIST_IS_FULL = 701
    SCHEDULE_TIMEZONE_NOT_VALID = 702
    SCHEDULE_CANNOT_SET_TIME_AND_LOCAL_TIME = 703
    CANNOT_CREATE_SCHEDULE = 704
    CANNOT_ENABLE_SCHEDULE_TIME_IN_PAST = 705
    COMMAND_ERROR = 706
    SOURCE_MODEL_INVALID = 801
    SOURCE_FACTORY_NEW = 802
    INVALID_STATE = 803
    INTERNAL_ERROR = 901

    @classmethod
    def lookup(cls, code: int) -> "BridgeErrorType | None":
        try:
            return cls(code)
        except ValueError:
            return None


class TransportError(Exception):
    """The HTTP exchange with the bridge failed; no device state is implied."""

    def __init__(self, cause: Any, *, status_code: int | None = None, body: str | None = None) -> None:
        if status_code is not None:
            message = f"Hue bridge returned HTTP {status_code}"
        else:
            message = f"Hue bridge unreachable: {cause}"
        super().__init__(message)
        self.cause = cause
        self.status_code = status_code
        self.body = body


class DecodeError(Exception):
    """The bridge replied, but the body is not JSON or not the expected shape."""

    def __init__(self, cause: Any, raw: Any) -> None:
        super().__init__(f"Unexpected Hue bridge payload: {cause}")
        self.cause = cause
        self.raw = raw


class BridgeError(Exception):
    def __init__(self, *, code: int, path: str, description: str) -> None:
        super().__init__(f"{description} ({path}, type {code})")
        self.code = code
        self.path = path
        self.description = description

    @property
    def kind(self) -> BridgeErrorType | None:
        return BridgeErrorType.lookup(self.code)


class ValidationError(ValueError):
    def __init__(self, field: str, message: str) -> None:
        super().__init__(f"{field}: {message}")
        self.field = field
        self.message = message


HUE_ERRORS = (TransportError, DecodeError, BridgeError, ValidationError)
