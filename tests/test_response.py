import pytest

from hue_bindings.errors import BridgeError, BridgeErrorType, DecodeError
from hue_bindings.response import (
    CommandError,
    CommandSuccess,
    check_acknowledgement,
    created_id,
    errors,
    is_error_reply,
    parse_outcomes,
    raise_for_errors,
    successes,
)


def test_mixed_reply_keeps_order_and_values():
    raw = [
        {"success": {"/lights/1/state/bri": 200}},
        {"error": {"type": 7, "address": "/lights/1/state/hue", "description": "invalid value"}},
        {"success": {"/lights/1/state/xy": [0.3, 0.4]}},
    ]
    outcomes = parse_outcomes(raw)
    assert outcomes == [
        CommandSuccess(path="/lights/1/state/bri", value=200),
        CommandError(code=7, path="/lights/1/state/hue", description="invalid value"),
        CommandSuccess(path="/lights/1/state/xy", value=[0.3, 0.4]),
    ]
    assert outcomes[1].kind is BridgeErrorType.INVALID_VALUE_FOR_PARAMETER
    assert len(successes(outcomes)) == 2
    assert len(errors(outcomes)) == 1


def test_success_then_error_round_trip():
    raw = [
        {"success": {"/lights/1/state/bri": 200}},
        {"error": {"type": 201, "address": "/lights/1/state/sat", "description": "parameter not modifiable"}},
    ]
    assert parse_outcomes(raw) == [
        CommandSuccess(path="/lights/1/state/bri", value=200),
        CommandError(code=201, path="/lights/1/state/sat", description="parameter not modifiable"),
    ]


def test_empty_reply_has_no_outcomes():
    assert parse_outcomes([]) == []


@pytest.mark.parametrize(
    "raw",
    [
        {"success": {"/lights/1/state/on": True}},
        "ok",
        [{}],
        [{"success": {"a": 1}, "error": {"type": 1, "address": "/", "description": "x"}}],
        [{"success": {"a": 1, "b": 2}}],
        [{"success": {}}],
        [{"error": {"type": "7", "address": "/", "description": "x"}}],
        [{"error": {"type": True, "address": "/", "description": "x"}}],
        ["success"],
    ],
)
def test_malformed_replies_raise_decode_error(raw):
    with pytest.raises(DecodeError) as exc:
        parse_outcomes(raw)
    assert exc.value.raw == raw


def test_unknown_error_codes_are_preserved():
    (outcome,) = parse_outcomes([{"error": {"type": 9999, "address": "/x", "description": "new"}}])
    assert outcome.code == 9999
    assert outcome.kind is None
    exc = outcome.to_exception()
    assert exc.code == 9999
    assert exc.kind is None


def test_error_without_address_defaults_to_empty_path():
    (outcome,) = parse_outcomes([{"error": {"type": 1, "description": "unauthorized user"}}])
    assert outcome == CommandError(code=1, path="", description="unauthorized user")


def test_is_error_reply():
    assert is_error_reply([{"error": {"type": 3, "address": "/lights/9", "description": "not available"}}])
    assert not is_error_reply([])
    assert not is_error_reply({"error": {}})
    assert not is_error_reply([{"success": {"id": "1"}}, {"error": {"type": 3}}])


def test_raise_for_errors_raises_first_error():
    outcomes = parse_outcomes(
        [
            {"success": {"/groups/1/name": "Kitchen"}},
            {"error": {"type": 8, "address": "/groups/1/type", "description": "not modifiable"}},
            {"error": {"type": 7, "address": "/groups/1/class", "description": "invalid value"}},
        ]
    )
    with pytest.raises(BridgeError) as exc:
        raise_for_errors(outcomes)
    assert exc.value.code == 8
    assert exc.value.path == "/groups/1/type"
    assert exc.value.kind is BridgeErrorType.PARAMETER_IS_NOT_MODIFIABLE


def test_created_id_reads_the_id_success():
    assert created_id(parse_outcomes([{"success": {"id": "5"}}])) == "5"
    assert created_id(parse_outcomes([{"success": {"id": 12}}])) == "12"


def test_created_id_without_id_raises_decode_error():
    with pytest.raises(DecodeError):
        created_id(parse_outcomes([{"success": {"/groups/1/name": "x"}}]))


def test_created_id_raises_bridge_error_first():
    outcomes = parse_outcomes([{"error": {"type": 301, "address": "/groups", "description": "group table full"}}])
    with pytest.raises(BridgeError) as exc:
        created_id(outcomes)
    assert exc.value.kind is BridgeErrorType.GROUP_TABLE_IS_FULL


def test_acknowledgement_accepts_free_form_success_payloads():
    check_acknowledgement([{"success": "/lights/4 deleted"}])
    check_acknowledgement([{"success": {"/lights": "Searching for new devices"}}])
    check_acknowledgement([])


def test_acknowledgement_raises_the_error_element():
    with pytest.raises(BridgeError) as exc:
        check_acknowledgement([{"error": {"type": 3, "address": "/lights/4", "description": "not available"}}])
    assert exc.value.kind is BridgeErrorType.RESOURCE_NOT_AVAILABLE

    with pytest.raises(DecodeError):
        check_acknowledgement([{"deleted": "/lights/4"}])
