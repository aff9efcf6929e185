from __future__ import annotations

from datetime import datetime
from typing import Annotated, Any, Literal, Optional

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, field_validator


def _none_string(value: Any) -> Any:
    # The bridge writes "none" where a date or owner is absent.
    if value == "none":
        return None
    return value


OptionalDateTime = Annotated[Optional[datetime], BeforeValidator(_none_string)]
OptionalString = Annotated[Optional[str], BeforeValidator(_none_string)]


class _BridgeModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="allow", protected_namespaces=())


class _Resource(_BridgeModel):
    id: str = Field(default="", description="Bridge identifier, taken from the URL or collection key.")


class LightState(_BridgeModel):
    on: bool | None = None
    brightness: int | None = Field(default=None, alias="bri", description="1 (dimmest) to 254.")
    hue: int | None = Field(default=None, description="0 and 65535 are red, 25500 green, 46920 blue.")
    saturation: int | None = Field(default=None, alias="sat")
    xy: tuple[float, float] | None = None
    color_temperature: int | None = Field(default=None, alias="ct", description="Mired color temperature.")
    alert: str | None = None
    effect: str | None = None
    color_mode: str | None = Field(default=None, alias="colormode")
    reachable: bool | None = None


class Light(_Resource):
    name: str
    kind: str = Field(..., alias="type")
    state: LightState
    model_id: str | None = Field(default=None, alias="modelid")
    unique_id: str | None = Field(default=None, alias="uniqueid")
    product_id: str | None = Field(default=None, alias="productid")
    product_name: str | None = Field(default=None, alias="productname")
    manufacturer_name: str | None = Field(default=None, alias="manufacturername")
    software_version: str | None = Field(default=None, alias="swversion")
    software_update: dict[str, Any] | None = Field(default=None, alias="swupdate")
    config: dict[str, Any] | None = None
    capabilities: dict[str, Any] | None = None


class GroupState(_BridgeModel):
    all_on: bool
    any_on: bool


class Group(_Resource):
    name: str
    lights: list[str] = Field(default_factory=list)
    sensors: list[str] = Field(default_factory=list)
    kind: str = Field(..., alias="type")
    room_class: str | None = Field(default=None, alias="class")
    state: GroupState | None = None
    action: LightState | None = None
    model_id: str | None = Field(default=None, alias="modelid")
    unique_id: str | None = Field(default=None, alias="uniqueid")
    recycle: bool | None = None


class Scene(_Resource):
    name: str
    kind: str | None = Field(default=None, alias="type")
    group: str | None = None
    lights: list[str] | None = None
    owner: OptionalString = None
    recycle: bool | None = None
    locked: bool | None = None
    app_data: dict[str, Any] | None = Field(default=None, alias="appdata")
    picture: str | None = None
    last_update: OptionalDateTime = Field(default=None, alias="lastupdate")
    version: int | None = None
    light_states: dict[str, LightState] | None = Field(default=None, alias="lightstates")


class Action(_BridgeModel):
    """A request executed by a schedule or rule."""

    address: str
    method: Literal["PUT", "POST", "DELETE"]
    body: dict[str, Any] = Field(default_factory=dict)


class Condition(_BridgeModel):
    address: str
    operator: Literal["lt", "gt", "eq", "dx", "ddx", "stable", "not stable", "in", "not in"]
    value: str | None = None


class Schedule(_Resource):
    name: str | None = None
    description: str | None = None
    command: Action
    local_time: str | None = Field(default=None, alias="localtime")
    created: OptionalDateTime = None
    start_time: OptionalDateTime = Field(default=None, alias="starttime")
    status: str | None = None
    auto_delete: bool | None = Field(default=None, alias="autodelete")
    recycle: bool | None = None


class SensorState(_BridgeModel):
    presence: bool | None = None
    flag: bool | None = None
    status: int | None = None
    last_updated: OptionalDateTime = Field(default=None, alias="lastupdated")


class SensorConfig(_BridgeModel):
    on: bool | None = None
    reachable: bool | None = None
    battery: int | None = None


class Sensor(_Resource):
    name: str
    kind: str = Field(..., alias="type")
    model_id: str | None = Field(default=None, alias="modelid")
    unique_id: str | None = Field(default=None, alias="uniqueid")
    manufacturer_name: str | None = Field(default=None, alias="manufacturername")
    software_version: str | None = Field(default=None, alias="swversion")
    state: SensorState = Field(default_factory=SensorState)
    config: SensorConfig = Field(default_factory=SensorConfig)
    recycle: bool | None = None


class Rule(_Resource):
    name: str
    owner: OptionalString = None
    last_triggered: OptionalDateTime = Field(default=None, alias="lasttriggered")
    times_triggered: int = Field(default=0, alias="timestriggered")
    created: OptionalDateTime = None
    status: str | None = None
    conditions: list[Condition] = Field(default_factory=list)
    actions: list[Action] = Field(default_factory=list)


class Resourcelink(_Resource):
    name: str
    description: str | None = None
    owner: OptionalString = None
    kind: str | None = Field(default=None, alias="type")
    class_id: int | None = Field(default=None, alias="classid")
    recycle: bool | None = None
    links: list[str] = Field(default_factory=list)


class WhitelistUser(_BridgeModel):
    id: str = ""
    name: str
    last_use_date: OptionalDateTime = Field(default=None, alias="last use date")
    create_date: OptionalDateTime = Field(default=None, alias="create date")


class Configuration(_BridgeModel):
    name: str
    software_version: str | None = Field(default=None, alias="swversion")
    api_version: str | None = Field(default=None, alias="apiversion")
    link_button: bool | None = Field(default=None, alias="linkbutton")
    ip_address: str | None = Field(default=None, alias="ipaddress")
    mac_address: str | None = Field(default=None, alias="mac")
    netmask: str | None = None
    gateway: str | None = None
    dhcp: bool | None = None
    portal_services: bool | None = Field(default=None, alias="portalservices")
    current_time: OptionalDateTime = Field(default=None, alias="UTC")
    local_time: OptionalDateTime = Field(default=None, alias="localtime")
    timezone: OptionalString = None
    zigbee_channel: int | None = Field(default=None, alias="zigbeechannel")
    model_id: str | None = Field(default=None, alias="modelid")
    bridge_id: str | None = Field(default=None, alias="bridgeid")
    factory_new: bool | None = Field(default=None, alias="factorynew")
    replaces_bridge_id: OptionalString = Field(default=None, alias="replacesbridgeid")
    datastore_version: str | None = Field(default=None, alias="datastoreversion")
    starterkit_id: str | None = Field(default=None, alias="starterkitid")
    whitelist: list[WhitelistUser] = Field(default_factory=list)

    @field_validator("whitelist", mode="before")
    @classmethod
    def _whitelist_from_mapping(cls, value: Any) -> Any:
        if isinstance(value, dict):
            return [{**user, "id": user_id} for user_id, user in value.items() if isinstance(user, dict)]
        return value


class CapabilityInfo(_BridgeModel):
    available: int
    total: int | None = None


class Capabilities(_BridgeModel):
    lights: CapabilityInfo
    groups: CapabilityInfo
    sensors: CapabilityInfo
    scenes: CapabilityInfo
    schedules: CapabilityInfo
    rules: CapabilityInfo
    resourcelinks: CapabilityInfo
    streaming: dict[str, Any] | None = None
    timezones: dict[str, Any] | None = None


class ScanResource(_BridgeModel):
    id: str
    name: str


class Scan(_BridgeModel):
    """Result of the last search for new lights or sensors."""

    last_scan: Annotated[Optional[datetime | Literal["active"]], BeforeValidator(_none_string)] = Field(
        default=None, alias="lastscan"
    )
    resources: list[ScanResource] = Field(default_factory=list)

    @classmethod
    def from_reply(cls, raw: dict[str, Any]) -> "Scan":
        resources = [
            {"id": key, "name": value.get("name", "")}
            for key, value in raw.items()
            if key != "lastscan" and isinstance(value, dict)
        ]
        return cls.model_validate({"lastscan": raw.get("lastscan"), "resources": resources})
