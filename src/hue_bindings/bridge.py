from __future__ import annotations

import logging
from typing import Any, TypeVar

import httpx
import pydantic

from hue_bindings import resources
from hue_bindings.client import BridgeClient
from hue_bindings.config import BridgeConfig
from hue_bindings.errors import DecodeError
from hue_bindings.modifier import Modifier, ResourceKind
from hue_bindings.models import (
    Capabilities,
    Configuration,
    Group,
    Light,
    Resourcelink,
    Rule,
    Scan,
    Scene,
    Schedule,
    Sensor,
)
from hue_bindings.response import (
    CommandOutcome,
    check_acknowledgement,
    created_id,
    errors,
    is_error_reply,
    parse_outcomes,
)


logger = logging.getLogger("hue_bindings.bridge")

M = TypeVar("M", bound=pydantic.BaseModel)


class Bridge:
    """Resource endpoints of one bridge, scoped to one registered username."""

    def __init__(self, client: BridgeClient) -> None:
        self.client = client

    @classmethod
    def from_config(cls, config: BridgeConfig, *, transport: httpx.AsyncBaseTransport | None = None) -> "Bridge":
        return cls(BridgeClient.from_config(config, transport=transport))

    async def __aenter__(self) -> "Bridge":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.close()

    async def close(self) -> None:
        await self.client.close()

    async def _read(self, path: str) -> Any:
        raw = await self.client.send("GET", path)
        if is_error_reply(raw):
            check_acknowledgement(raw)
        return raw

    @staticmethod
    def _validate(model: type[M], raw: Any, resource_id: str | None = None) -> M:
        if not isinstance(raw, dict):
            raise DecodeError(f"expected an object for {model.__name__}", raw)
        data = {**raw, "id": resource_id} if resource_id is not None else raw
        try:
            return model.model_validate(data)
        except pydantic.ValidationError as exc:
            raise DecodeError(exc, raw) from exc

    async def _get(self, model: type[M], path: str, resource_id: str | None = None) -> M:
        return self._validate(model, await self._read(path), resource_id)

    async def _get_all(self, model: type[M], path: str) -> list[M]:
        raw = await self._read(path)
        if not isinstance(raw, dict):
            raise DecodeError(f"expected an object keyed by {model.__name__} id", raw)
        return [self._validate(model, item, resource_id) for resource_id, item in raw.items()]

    @staticmethod
    def _check_kind(modifier: Modifier, expected: ResourceKind) -> None:
        if modifier.kind is not expected:
            raise ValueError(f"expected a {expected.name} modifier, got {modifier.kind.name}")

    async def _modify(self, modifier: Modifier, expected: ResourceKind, resource_id: str | None) -> list[CommandOutcome]:
        self._check_kind(modifier, expected)
        body = modifier.render()
        raw = await self.client.send("PUT", modifier.path(resource_id), body)
        outcomes = parse_outcomes(raw)
        failed = len(errors(outcomes))
        if failed:
            logger.debug("%s %s: %d of %d changes rejected", expected.name, resource_id, failed, len(outcomes))
        return outcomes

    async def _create(self, modifier: Modifier, expected: ResourceKind) -> str:
        self._check_kind(modifier, expected)
        body = modifier.render()
        raw = await self.client.send("POST", modifier.path(), body)
        return created_id(parse_outcomes(raw))

    async def _delete(self, path: str) -> None:
        raw = await self.client.send("DELETE", path)
        check_acknowledgement(raw)

    async def _search(self, path: str, device_ids: list[str] | None) -> None:
        body = {"deviceid": list(device_ids)} if device_ids else None
        raw = await self.client.send("POST", path, body)
        check_acknowledgement(raw)

    async def get_config(self) -> Configuration:
        return await self._get(Configuration, "config")

    async def set_config(self, modifier: Modifier) -> list[CommandOutcome]:
        return await self._modify(modifier, resources.CONFIG, None)

    async def get_capabilities(self) -> Capabilities:
        return await self._get(Capabilities, "capabilities")

    async def get_light(self, light_id: str) -> Light:
        return await self._get(Light, f"lights/{light_id}", light_id)

    async def get_all_lights(self) -> list[Light]:
        return await self._get_all(Light, "lights")

    async def set_light_attribute(self, light_id: str, modifier: Modifier) -> list[CommandOutcome]:
        return await self._modify(modifier, resources.LIGHT_ATTRIBUTES, light_id)

    async def set_light_state(self, light_id: str, modifier: Modifier) -> list[CommandOutcome]:
        return await self._modify(modifier, resources.LIGHT_STATE, light_id)

    async def delete_light(self, light_id: str) -> None:
        await self._delete(f"lights/{light_id}")

    async def search_new_lights(self, device_ids: list[str] | None = None) -> None:
        await self._search("lights", device_ids)

    async def get_new_lights(self) -> Scan:
        raw = await self._read("lights/new")
        if not isinstance(raw, dict):
            raise DecodeError("expected an object for the light scan", raw)
        return Scan.from_reply(raw)

    async def create_group(self, modifier: Modifier) -> str:
        return await self._create(modifier, resources.GROUP_CREATE)

    async def get_group(self, group_id: str) -> Group:
        return await self._get(Group, f"groups/{group_id}", group_id)

    async def get_all_groups(self) -> list[Group]:
        return await self._get_all(Group, "groups")

    async def set_group_attribute(self, group_id: str, modifier: Modifier) -> list[CommandOutcome]:
        return await self._modify(modifier, resources.GROUP_ATTRIBUTES, group_id)

    async def set_group_state(self, group_id: str, modifier: Modifier) -> list[CommandOutcome]:
        return await self._modify(modifier, resources.GROUP_ACTION, group_id)

    async def delete_group(self, group_id: str) -> None:
        await self._delete(f"groups/{group_id}")

    async def create_scene(self, modifier: Modifier) -> str:
        return await self._create(modifier, resources.SCENE_CREATE)

    async def get_scene(self, scene_id: str) -> Scene:
        return await self._get(Scene, f"scenes/{scene_id}", scene_id)

    async def get_all_scenes(self) -> list[Scene]:
        return await self._get_all(Scene, "scenes")

    async def set_scene(self, scene_id: str, modifier: Modifier) -> list[CommandOutcome]:
        return await self._modify(modifier, resources.SCENE, scene_id)

    async def delete_scene(self, scene_id: str) -> None:
        await self._delete(f"scenes/{scene_id}")

    async def create_schedule(self, modifier: Modifier) -> str:
        return await self._create(modifier, resources.SCHEDULE_CREATE)

    async def get_schedule(self, schedule_id: str) -> Schedule:
        return await self._get(Schedule, f"schedules/{schedule_id}", schedule_id)

    async def get_all_schedules(self) -> list[Schedule]:
        return await self._get_all(Schedule, "schedules")

    async def set_schedule(self, schedule_id: str, modifier: Modifier) -> list[CommandOutcome]:
        return await self._modify(modifier, resources.SCHEDULE, schedule_id)

    async def delete_schedule(self, schedule_id: str) -> None:
        await self._delete(f"schedules/{schedule_id}")

    async def get_sensor(self, sensor_id: str) -> Sensor:
        return await self._get(Sensor, f"sensors/{sensor_id}", sensor_id)

    async def get_all_sensors(self) -> list[Sensor]:
        return await self._get_all(Sensor, "sensors")

    async def set_sensor_attribute(self, sensor_id: str, modifier: Modifier) -> list[CommandOutcome]:
        return await self._modify(modifier, resources.SENSOR_ATTRIBUTES, sensor_id)

    async def set_sensor_state(self, sensor_id: str, modifier: Modifier) -> list[CommandOutcome]:
        return await self._modify(modifier, resources.SENSOR_STATE, sensor_id)

    async def set_sensor_config(self, sensor_id: str, modifier: Modifier) -> list[CommandOutcome]:
        return await self._modify(modifier, resources.SENSOR_CONFIG, sensor_id)

    async def delete_sensor(self, sensor_id: str) -> None:
        await self._delete(f"sensors/{sensor_id}")

    async def search_new_sensors(self, device_ids: list[str] | None = None) -> None:
        await self._search("sensors", device_ids)

    async def get_new_sensors(self) -> Scan:
        raw = await self._read("sensors/new")
        if not isinstance(raw, dict):
            raise DecodeError("expected an object for the sensor scan", raw)
        return Scan.from_reply(raw)

    async def create_rule(self, modifier: Modifier) -> str:
        return await self._create(modifier, resources.RULE_CREATE)

    async def get_rule(self, rule_id: str) -> Rule:
        return await self._get(Rule, f"rules/{rule_id}", rule_id)

    async def get_all_rules(self) -> list[Rule]:
        return await self._get_all(Rule, "rules")

    async def set_rule(self, rule_id: str, modifier: Modifier) -> list[CommandOutcome]:
        return await self._modify(modifier, resources.RULE, rule_id)

    async def delete_rule(self, rule_id: str) -> None:
        await self._delete(f"rules/{rule_id}")

    async def create_resourcelink(self, modifier: Modifier) -> str:
        return await self._create(modifier, resources.RESOURCELINK_CREATE)

    async def get_resourcelink(self, resourcelink_id: str) -> Resourcelink:
        return await self._get(Resourcelink, f"resourcelinks/{resourcelink_id}", resourcelink_id)

    async def get_all_resourcelinks(self) -> list[Resourcelink]:
        return await self._get_all(Resourcelink, "resourcelinks")

    async def set_resourcelink(self, resourcelink_id: str, modifier: Modifier) -> list[CommandOutcome]:
        return await self._modify(modifier, resources.RESOURCELINK, resourcelink_id)

    async def delete_resourcelink(self, resourcelink_id: str) -> None:
        await self._delete(f"resourcelinks/{resourcelink_id}")
