import json

import pytest

from hue_bindings import resources
from hue_bindings.color import Color
from hue_bindings.errors import ValidationError
from hue_bindings.models import Action, Condition
from hue_bindings.modifier import Modifier, ModifierMode
from hue_bindings.resources import Alert, Effect


def test_override_and_relative_fields_use_their_own_wire_keys():
    modifier = (
        resources.light_state()
        .set("on", True)
        .set("brightness", 40, ModifierMode.INCREMENT)
        .set("saturation", 200, ModifierMode.OVERRIDE)
        .set("hue", 1000, ModifierMode.DECREMENT)
        .set("color_temperature", 300)
        .set("alert", Alert.NONE)
        .set("effect", "colorloop")
        .set("transition_time", 4)
    )
    assert modifier.render() == {
        "on": True,
        "bri_inc": 40,
        "sat": 200,
        "hue_inc": -1000,
        "ct": 300,
        "alert": "none",
        "effect": "colorloop",
        "transitiontime": 4,
    }


def test_render_has_one_entry_per_change_in_insertion_order():
    modifier = resources.light_state().set("saturation", 3, "decrement").set("brightness", 1).set("on", False)
    body = modifier.render()
    assert list(body) == ["sat_inc", "bri", "on"]
    assert len(body) == len(modifier)


def test_xy_pairs_render_as_lists_and_decrement_negates_both_coordinates():
    modifier = resources.light_state().set("xy", (0.1, 0.2), ModifierMode.DECREMENT)
    assert modifier.render() == {"xy_inc": [-0.1, -0.2]}

    modifier.set("xy", (0.3, 0.4))
    assert modifier.render() == {"xy": [0.3, 0.4]}


def test_render_is_idempotent():
    modifier = resources.group_action().set("brightness", 10, ModifierMode.INCREMENT).set("scene", "abc")
    first = modifier.render()
    second = modifier.render()
    assert json.dumps(first) == json.dumps(second)
    first["bri_inc"] = 99
    assert modifier.render()["bri_inc"] == 10


def test_setting_a_field_again_replaces_the_earlier_change():
    modifier = resources.light_state().set("brightness", 10, ModifierMode.OVERRIDE)
    modifier.set("brightness", 200, ModifierMode.OVERRIDE)
    assert modifier.render() == {"bri": 200}

    modifier.set("brightness", 5, ModifierMode.INCREMENT)
    assert modifier.render() == {"bri_inc": 5}


def test_out_of_domain_value_fails_at_set():
    modifier = resources.light_state()
    with pytest.raises(ValidationError) as exc:
        modifier.set("brightness", 300)
    assert exc.value.field == "brightness"
    assert modifier.is_empty()


@pytest.mark.parametrize(
    "field,value,mode",
    [
        ("brightness", -1, ModifierMode.OVERRIDE),
        ("hue", 65536, ModifierMode.OVERRIDE),
        ("hue", 70000, ModifierMode.INCREMENT),
        ("brightness", -5, ModifierMode.INCREMENT),
        ("saturation", True, ModifierMode.OVERRIDE),
        ("on", 1, ModifierMode.OVERRIDE),
        ("xy", (1.5, 0.2), ModifierMode.OVERRIDE),
        ("xy", (0.6, 0.0), ModifierMode.INCREMENT),
        ("xy", (0.0, -0.6), ModifierMode.DECREMENT),
        ("xy", [0.1], ModifierMode.OVERRIDE),
        ("alert", "blink", ModifierMode.OVERRIDE),
        ("color_temperature", 100, ModifierMode.OVERRIDE),
    ],
)
def test_domain_violations_raise_validation_error(field, value, mode):
    with pytest.raises(ValidationError):
        resources.light_state().set(field, value, mode)


def test_hue_delta_may_exceed_a_full_turn_less_one():
    body = resources.light_state().set("hue", 65534, ModifierMode.INCREMENT).render()
    assert body == {"hue_inc": 65534}


def test_unknown_field_is_reported_at_render():
    modifier = resources.light_state().set("sparkle", 3)
    with pytest.raises(ValidationError) as exc:
        modifier.render()
    assert exc.value.field == "sparkle"


def test_relative_mode_without_increment_key_is_reported_at_render():
    modifier = resources.light_state().set("transition_time", 4, ModifierMode.INCREMENT)
    with pytest.raises(ValidationError):
        modifier.render()


def test_scene_light_states_cannot_be_relative():
    modifier = resources.scene_light_state().set("brightness", 10, ModifierMode.INCREMENT)
    with pytest.raises(ValidationError):
        modifier.render()


def test_with_color_sets_xy_and_brightness():
    body = resources.light_state().set("brightness", 10, ModifierMode.INCREMENT).with_color(Color.from_rgb(0, 0, 0)).render()
    assert body == {"bri": 0, "xy": [0.0, 0.0]}


def test_unset_removes_a_change():
    modifier = resources.light_state().set("on", True).set("brightness", 5)
    modifier.unset("on")
    assert "on" not in modifier
    assert modifier.render() == {"bri": 5}


def test_creators_require_their_mandatory_fields():
    modifier = Modifier(resources.GROUP_CREATE).set("name", "Kitchen")
    with pytest.raises(ValidationError) as exc:
        modifier.render()
    assert exc.value.field == "lights"

    modifier.set("lights", ["1", "2"]).set("kind", resources.GroupType.ROOM).set("room_class", "Kitchen")
    assert modifier.render() == {"name": "Kitchen", "lights": ["1", "2"], "type": "Room", "class": "Kitchen"}


def test_scene_light_states_render_nested_modifiers():
    state = resources.scene_light_state().set("on", True).set("brightness", 100)
    modifier = Modifier(resources.SCENE).set("light_states", {"1": state}).set("store_light_state", True)
    assert modifier.render() == {"lightstates": {"1": {"on": True, "bri": 100}}, "storelightstate": True}


def test_scene_light_states_reject_relative_light_modifiers():
    with pytest.raises(ValidationError):
        Modifier(resources.SCENE).set("light_states", {"1": resources.light_state().set("on", True)})


def test_rule_conditions_and_actions_render_from_models():
    modifier = (
        Modifier(resources.RULE_CREATE)
        .set("name", "Motion")
        .set("conditions", [Condition(address="/sensors/2/state/presence", operator="eq", value="true")])
        .set("actions", [Action(address="/groups/0/action", method="PUT", body={"on": True})])
    )
    assert modifier.render() == {
        "name": "Motion",
        "conditions": [{"address": "/sensors/2/state/presence", "operator": "eq", "value": "true"}],
        "actions": [{"address": "/groups/0/action", "method": "PUT", "body": {"on": True}}],
    }


def test_config_fields_validate_addresses_and_channels():
    modifier = Modifier(resources.CONFIG).set("ip_address", "192.168.1.20").set("zigbee_channel", 15)
    assert modifier.render() == {"ipaddress": "192.168.1.20", "zigbeechannel": 15}
    with pytest.raises(ValidationError):
        modifier.set("gateway", "not-an-ip")
    with pytest.raises(ValidationError):
        modifier.set("zigbee_channel", 12)


def test_names_are_length_limited():
    with pytest.raises(ValidationError):
        Modifier(resources.LIGHT_ATTRIBUTES).set("name", "x" * 33)


def test_path_uses_the_resource_template():
    assert resources.light_state().path("7") == "lights/7/state"
    assert Modifier(resources.CONFIG).path() == "config"
    with pytest.raises(ValueError):
        resources.group_action().path()


def test_effect_enum_members_are_accepted():
    assert resources.light_state().set("effect", Effect.NONE).render() == {"effect": "none"}


def test_xy_delta_components_may_point_in_different_directions():
    body = resources.light_state().set("xy", (0.05, -0.05), ModifierMode.INCREMENT).render()
    assert body == {"xy_inc": [0.05, -0.05]}

    body = resources.light_state().set("xy", (0.05, -0.05), ModifierMode.DECREMENT).render()
    assert body == {"xy_inc": [-0.05, 0.05]}


@pytest.mark.parametrize(
    "field,value",
    [("alert", "select"), ("on", True), ("transition_time", 4), ("name", "Desk")],
)
def test_relative_mode_on_fields_without_increment_key_fails_at_render(field, value):
    kind = resources.LIGHT_ATTRIBUTES if field == "name" else resources.LIGHT_STATE
    modifier = Modifier(kind).set(field, value, ModifierMode.INCREMENT)
    with pytest.raises(ValidationError) as exc:
        modifier.render()
    assert exc.value.field == field


def test_unknown_mode_is_a_validation_error():
    with pytest.raises(ValidationError) as exc:
        resources.light_state().set("on", True, "up")
    assert exc.value.field == "on"
