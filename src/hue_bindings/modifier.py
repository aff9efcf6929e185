from __future__ import annotations

import ipaddress
from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterator

from pydantic import BaseModel

from hue_bindings.color import Color
from hue_bindings.errors import ValidationError


class ModifierMode(str, Enum):
    """How a field value combines with the current value held by the bridge."""

    OVERRIDE = "override"
    INCREMENT = "increment"
    DECREMENT = "decrement"


class ValueType(str, Enum):
    BOOL = "bool"
    INT = "int"
    STRING = "string"
    ENUM = "enum"
    XY = "xy"
    IP = "ip"
    STRING_LIST = "string_list"
    OBJECT = "object"
    OBJECT_LIST = "object_list"
    MAPPING = "mapping"


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def to_wire(value: Any) -> Any:
    """Convert a field value into plain JSON data, copying every container."""
    if isinstance(value, Modifier):
        return value.render()
    if isinstance(value, BaseModel):
        return value.model_dump(by_alias=True, exclude_none=True, mode="json")
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, (ipaddress.IPv4Address, ipaddress.IPv6Address)):
        return str(value)
    if isinstance(value, dict):
        return {str(k): to_wire(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_wire(v) for v in value]
    return value


@dataclass(frozen=True)
class FieldSpec:
    name: str
    wire_key: str
    value_type: ValueType
    minimum: float | None = None
    maximum: float | None = None
    increment_key: str | None = None
    delta_limit: float | None = None
    choices: tuple[Any, ...] = ()
    max_length: int | None = None
    item_kind: "ResourceKind | None" = None

    def check(self, value: Any, mode: ModifierMode) -> None:
        if mode is not ModifierMode.OVERRIDE:
            # Fields without an increment key are rejected by render().
            if self.increment_key is not None:
                self._check_delta(value)
            return

        vt = self.value_type
        if vt is ValueType.BOOL:
            if not isinstance(value, bool):
                raise ValidationError(self.name, "must be a boolean")
        elif vt is ValueType.INT:
            if not isinstance(value, int) or isinstance(value, bool):
                raise ValidationError(self.name, "must be an integer")
            self._check_range(value)
            if self.choices and value not in self.choices:
                raise ValidationError(self.name, f"must be one of {list(self.choices)}")
        elif vt is ValueType.STRING:
            if not isinstance(value, str):
                raise ValidationError(self.name, "must be a string")
            if self.max_length is not None and len(value) > self.max_length:
                raise ValidationError(self.name, f"must be at most {self.max_length} characters")
        elif vt is ValueType.ENUM:
            raw = value.value if isinstance(value, Enum) else value
            if raw not in self.choices:
                raise ValidationError(self.name, f"must be one of {list(self.choices)}")
        elif vt is ValueType.XY:
            pair = self._pair(value)
            for coord in pair:
                self._check_range(coord)
        elif vt is ValueType.IP:
            try:
                ipaddress.ip_address(str(value))
            except ValueError as exc:
                raise ValidationError(self.name, "must be an IP address") from exc
        elif vt is ValueType.STRING_LIST:
            if not isinstance(value, (list, tuple)) or not all(isinstance(v, str) for v in value):
                raise ValidationError(self.name, "must be a list of strings")
        elif vt is ValueType.OBJECT:
            if not isinstance(value, (dict, BaseModel)):
                raise ValidationError(self.name, "must be an object")
        elif vt is ValueType.OBJECT_LIST:
            if not isinstance(value, (list, tuple)) or not all(isinstance(v, (dict, BaseModel)) for v in value):
                raise ValidationError(self.name, "must be a list of objects")
        elif vt is ValueType.MAPPING:
            self._check_mapping(value)

    def _check_range(self, value: float) -> None:
        if self.minimum is not None and value < self.minimum:
            raise ValidationError(self.name, f"{value} is below the minimum of {self.minimum}")
        if self.maximum is not None and value > self.maximum:
            raise ValidationError(self.name, f"{value} is above the maximum of {self.maximum}")

    def _pair(self, value: Any) -> tuple[float, float]:
        if not isinstance(value, (list, tuple)) or len(value) != 2 or not all(_is_number(v) for v in value):
            raise ValidationError(self.name, "must be a pair of numbers")
        return float(value[0]), float(value[1])

    def _check_delta(self, value: Any) -> None:
        # xy components may point in different directions; DECREMENT negates both.
        if self.value_type is ValueType.XY:
            for delta in self._pair(value):
                if self.delta_limit is not None and abs(delta) > self.delta_limit:
                    raise ValidationError(self.name, f"delta {delta} is outside +/-{self.delta_limit}")
            return
        # Scalar deltas are magnitudes; the mode carries the sign.
        if self.value_type is ValueType.INT:
            if not isinstance(value, int) or isinstance(value, bool):
                raise ValidationError(self.name, "must be an integer")
        elif not _is_number(value):
            raise ValidationError(self.name, "relative changes need a numeric value")
        if value < 0:
            raise ValidationError(self.name, "delta must not be negative; use DECREMENT instead")
        if self.delta_limit is not None and value > self.delta_limit:
            raise ValidationError(self.name, f"delta {value} is above the limit of {self.delta_limit}")

    def _check_mapping(self, value: Any) -> None:
        if not isinstance(value, dict):
            raise ValidationError(self.name, "must be a mapping")
        for key, item in value.items():
            if not isinstance(key, str):
                raise ValidationError(self.name, "keys must be strings")
            if isinstance(item, Modifier):
                if self.item_kind is not None and item.kind is not self.item_kind:
                    raise ValidationError(self.name, f"entries must be {self.item_kind.name} modifiers")
            elif not isinstance(item, dict):
                raise ValidationError(self.name, "entries must be modifiers or objects")

    def encode(self, value: Any, mode: ModifierMode) -> tuple[str, Any]:
        if mode is ModifierMode.OVERRIDE:
            return self.wire_key, to_wire(value)
        if self.increment_key is None:
            raise ValidationError(self.name, f"cannot be changed with mode {mode.value}")
        sign = -1 if mode is ModifierMode.DECREMENT else 1
        if self.value_type is ValueType.XY:
            return self.increment_key, [sign * float(value[0]), sign * float(value[1])]
        return self.increment_key, sign * value


@dataclass(frozen=True)
class ResourceKind:
    """Field vocabulary and URL template for one kind of write command."""

    name: str
    path_template: str
    fields: tuple[FieldSpec, ...]
    required: tuple[str, ...] = ()

    def field(self, name: str) -> FieldSpec | None:
        for spec in self.fields:
            if spec.name == name:
                return spec
        return None

    def path(self, resource_id: str | None = None) -> str:
        if "{id}" in self.path_template:
            if resource_id is None or str(resource_id) == "":
                raise ValueError(f"{self.name} requires a resource id")
            return self.path_template.format(id=resource_id)
        return self.path_template


@dataclass(frozen=True)
class FieldChange:
    field: str
    value: Any
    mode: ModifierMode = ModifierMode.OVERRIDE


class Modifier:
    """Accumulates field changes for one write command.

    Setting a field twice replaces the earlier change (last write wins); the
    field keeps its original position in the rendered body. Values of declared
    fields are checked immediately, while undeclared fields and unsupported
    modes are reported by :meth:`render`.
    """

    def __init__(self, kind: ResourceKind) -> None:
        self.kind = kind
        self._changes: dict[str, FieldChange] = {}

    def set(self, field: str, value: Any, mode: ModifierMode | str = ModifierMode.OVERRIDE) -> "Modifier":
        try:
            mode = ModifierMode(mode)
        except ValueError as exc:
            raise ValidationError(field, f"unknown modifier mode {mode!r}") from exc
        spec = self.kind.field(field)
        if spec is not None:
            spec.check(value, mode)
        self._changes[field] = FieldChange(field=field, value=value, mode=mode)
        return self

    def unset(self, field: str) -> "Modifier":
        self._changes.pop(field, None)
        return self

    def with_color(self, color: Color) -> "Modifier":
        self.set("xy", color.space_coordinates)
        if color.brightness is not None:
            self.set("brightness", color.brightness)
        return self

    def changes(self) -> list[FieldChange]:
        return list(self._changes.values())

    def is_empty(self) -> bool:
        return not self._changes

    def path(self, resource_id: str | None = None) -> str:
        return self.kind.path(resource_id)

    def render(self) -> dict[str, Any]:
        for name in self.kind.required:
            if name not in self._changes:
                raise ValidationError(name, f"is required for {self.kind.name}")

        body: dict[str, Any] = {}
        for change in self._changes.values():
            spec = self.kind.field(change.field)
            if spec is None:
                raise ValidationError(change.field, f"is not a field of {self.kind.name}")
            key, value = spec.encode(change.value, change.mode)
            body[key] = value
        return body

    def __contains__(self, field: object) -> bool:
        return field in self._changes

    def __iter__(self) -> Iterator[FieldChange]:
        return iter(self.changes())

    def __len__(self) -> int:
        return len(self._changes)

    def __repr__(self) -> str:
        fields = ", ".join(f"{c.field}={c.value!r}/{c.mode.value}" for c in self._changes.values())
        return f"Modifier({self.kind.name}: {fields})"
