from __future__ import annotations

from enum import Enum

from hue_bindings.modifier import FieldSpec, Modifier, ResourceKind, ValueType


class Alert(str, Enum):
    NONE = "none"
    SELECT = "select"
    LSELECT = "lselect"


class Effect(str, Enum):
    NONE = "none"
    COLORLOOP = "colorloop"


class GroupType(str, Enum):
    LIGHT_GROUP = "LightGroup"
    ROOM = "Room"
    ENTERTAINMENT = "Entertainment"
    ZONE = "Zone"


class SceneType(str, Enum):
    LIGHT_SCENE = "LightScene"
    GROUP_SCENE = "GroupScene"


class ScheduleStatus(str, Enum):
    ENABLED = "enabled"
    DISABLED = "disabled"


class RuleStatus(str, Enum):
    ENABLED = "enabled"
    DISABLED = "disabled"


def _values(enum_cls: type[Enum]) -> tuple[str, ...]:
    return tuple(member.value for member in enum_cls)


NAME = FieldSpec("name", "name", ValueType.STRING, max_length=32)
ON = FieldSpec("on", "on", ValueType.BOOL)
BRIGHTNESS = FieldSpec(
    "brightness", "bri", ValueType.INT, minimum=0, maximum=254, increment_key="bri_inc", delta_limit=254
)
HUE = FieldSpec("hue", "hue", ValueType.INT, minimum=0, maximum=65535, increment_key="hue_inc", delta_limit=65534)
SATURATION = FieldSpec(
    "saturation", "sat", ValueType.INT, minimum=0, maximum=254, increment_key="sat_inc", delta_limit=254
)
XY = FieldSpec("xy", "xy", ValueType.XY, minimum=0.0, maximum=1.0, increment_key="xy_inc", delta_limit=0.5)
COLOR_TEMPERATURE = FieldSpec(
    "color_temperature", "ct", ValueType.INT, minimum=153, maximum=500, increment_key="ct_inc", delta_limit=65534
)
ALERT = FieldSpec("alert", "alert", ValueType.ENUM, choices=_values(Alert))
EFFECT = FieldSpec("effect", "effect", ValueType.ENUM, choices=_values(Effect))
TRANSITION_TIME = FieldSpec("transition_time", "transitiontime", ValueType.INT, minimum=0, maximum=65535)
LIGHTS = FieldSpec("lights", "lights", ValueType.STRING_LIST)
SENSORS = FieldSpec("sensors", "sensors", ValueType.STRING_LIST)
RECYCLE = FieldSpec("recycle", "recycle", ValueType.BOOL)


def _absolute(spec: FieldSpec) -> FieldSpec:
    return FieldSpec(
        spec.name,
        spec.wire_key,
        spec.value_type,
        minimum=spec.minimum,
        maximum=spec.maximum,
        choices=spec.choices,
        max_length=spec.max_length,
    )


LIGHT_STATE = ResourceKind(
    name="light_state",
    path_template="lights/{id}/state",
    fields=(ON, BRIGHTNESS, HUE, SATURATION, XY, COLOR_TEMPERATURE, ALERT, EFFECT, TRANSITION_TIME),
)

# Scene light states cannot be relative and carry no alert.
LIGHT_STATIC_STATE = ResourceKind(
    name="light_static_state",
    path_template="lights/{id}/state",
    fields=tuple(
        _absolute(spec)
        for spec in (ON, BRIGHTNESS, HUE, SATURATION, XY, COLOR_TEMPERATURE, EFFECT, TRANSITION_TIME)
    ),
)

LIGHT_ATTRIBUTES = ResourceKind(name="light_attributes", path_template="lights/{id}", fields=(NAME,))

GROUP_ACTION = ResourceKind(
    name="group_action",
    path_template="groups/{id}/action",
    fields=LIGHT_STATE.fields + (FieldSpec("scene", "scene", ValueType.STRING),),
)

_GROUP_CLASS = FieldSpec("room_class", "class", ValueType.STRING)

GROUP_ATTRIBUTES = ResourceKind(
    name="group_attributes",
    path_template="groups/{id}",
    fields=(NAME, LIGHTS, SENSORS, _GROUP_CLASS),
)

GROUP_CREATE = ResourceKind(
    name="group_create",
    path_template="groups",
    fields=(
        NAME,
        LIGHTS,
        SENSORS,
        FieldSpec("kind", "type", ValueType.ENUM, choices=_values(GroupType)),
        _GROUP_CLASS,
        RECYCLE,
    ),
    required=("name", "lights"),
)

_LIGHT_STATES = FieldSpec("light_states", "lightstates", ValueType.MAPPING, item_kind=LIGHT_STATIC_STATE)

SCENE = ResourceKind(
    name="scene",
    path_template="scenes/{id}",
    fields=(
        NAME,
        LIGHTS,
        _LIGHT_STATES,
        FieldSpec("store_light_state", "storelightstate", ValueType.BOOL),
    ),
)

SCENE_CREATE = ResourceKind(
    name="scene_create",
    path_template="scenes",
    fields=(
        NAME,
        LIGHTS,
        FieldSpec("kind", "type", ValueType.ENUM, choices=_values(SceneType)),
        FieldSpec("group", "group", ValueType.STRING),
        RECYCLE,
        FieldSpec("app_data", "appdata", ValueType.OBJECT),
        _LIGHT_STATES,
    ),
    required=("name",),
)

_SCHEDULE_FIELDS = (
    NAME,
    FieldSpec("description", "description", ValueType.STRING, max_length=64),
    FieldSpec("command", "command", ValueType.OBJECT),
    FieldSpec("local_time", "localtime", ValueType.STRING),
    FieldSpec("status", "status", ValueType.ENUM, choices=_values(ScheduleStatus)),
    FieldSpec("auto_delete", "autodelete", ValueType.BOOL),
)

SCHEDULE = ResourceKind(name="schedule", path_template="schedules/{id}", fields=_SCHEDULE_FIELDS)

SCHEDULE_CREATE = ResourceKind(
    name="schedule_create",
    path_template="schedules",
    fields=_SCHEDULE_FIELDS + (RECYCLE,),
    required=("command", "local_time"),
)

_RULE_FIELDS = (
    NAME,
    FieldSpec("status", "status", ValueType.ENUM, choices=_values(RuleStatus)),
    FieldSpec("conditions", "conditions", ValueType.OBJECT_LIST),
    FieldSpec("actions", "actions", ValueType.OBJECT_LIST),
)

RULE = ResourceKind(name="rule", path_template="rules/{id}", fields=_RULE_FIELDS)

RULE_CREATE = ResourceKind(
    name="rule_create",
    path_template="rules",
    fields=_RULE_FIELDS,
    required=("conditions", "actions"),
)

_RESOURCELINK_FIELDS = (
    NAME,
    FieldSpec("description", "description", ValueType.STRING, max_length=64),
    FieldSpec("kind", "type", ValueType.ENUM, choices=("Link",)),
    FieldSpec("class_id", "classid", ValueType.INT, minimum=0, maximum=65535),
    FieldSpec("links", "links", ValueType.STRING_LIST),
)

RESOURCELINK = ResourceKind(name="resourcelink", path_template="resourcelinks/{id}", fields=_RESOURCELINK_FIELDS)

RESOURCELINK_CREATE = ResourceKind(
    name="resourcelink_create",
    path_template="resourcelinks",
    fields=_RESOURCELINK_FIELDS + (FieldSpec("owner", "owner", ValueType.STRING), RECYCLE),
    required=("name", "class_id", "links"),
)

SENSOR_ATTRIBUTES = ResourceKind(name="sensor_attributes", path_template="sensors/{id}", fields=(NAME,))

SENSOR_STATE = ResourceKind(
    name="sensor_state",
    path_template="sensors/{id}/state",
    fields=(
        FieldSpec("presence", "presence", ValueType.BOOL),
        FieldSpec("flag", "flag", ValueType.BOOL),
        FieldSpec("status", "status", ValueType.INT),
    ),
)

SENSOR_CONFIG = ResourceKind(
    name="sensor_config",
    path_template="sensors/{id}/config",
    fields=(ON,),
)

CONFIG = ResourceKind(
    name="config",
    path_template="config",
    fields=(
        FieldSpec("name", "name", ValueType.STRING, max_length=16),
        FieldSpec("ip_address", "ipaddress", ValueType.IP),
        FieldSpec("netmask", "netmask", ValueType.STRING),
        FieldSpec("gateway", "gateway", ValueType.IP),
        FieldSpec("dhcp", "dhcp", ValueType.BOOL),
        FieldSpec("proxy_port", "proxyport", ValueType.INT, minimum=0, maximum=65535),
        FieldSpec("proxy_address", "proxyaddress", ValueType.STRING),
        FieldSpec("link_button", "linkbutton", ValueType.BOOL),
        FieldSpec("touchlink", "touchlink", ValueType.BOOL),
        FieldSpec("zigbee_channel", "zigbeechannel", ValueType.INT, choices=(11, 15, 20, 25)),
        FieldSpec("current_time", "UTC", ValueType.STRING),
        FieldSpec("timezone", "timezone", ValueType.STRING),
    ),
)


def light_state() -> Modifier:
    return Modifier(LIGHT_STATE)


def group_action() -> Modifier:
    return Modifier(GROUP_ACTION)


def scene_light_state() -> Modifier:
    return Modifier(LIGHT_STATIC_STATE)
