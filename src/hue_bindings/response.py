from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Iterable, Union

from hue_bindings.errors import BridgeError, BridgeErrorType, DecodeError


@dataclass(frozen=True)
class CommandSuccess:
    path: str
    value: Any

    def __str__(self) -> str:
        return f"Set '{self.path}' to {self.value!r}"


@dataclass(frozen=True)
class CommandError:
    code: int
    path: str
    description: str

    @property
    def kind(self) -> BridgeErrorType | None:
        return BridgeErrorType.lookup(self.code)

    def to_exception(self) -> BridgeError:
        return BridgeError(code=self.code, path=self.path, description=self.description)

    def __str__(self) -> str:
        return f"Error {self.code} at '{self.path}': {self.description}"


CommandOutcome = Union[CommandSuccess, CommandError]


def _parse_success(payload: Any, raw: Any) -> CommandSuccess:
    if not isinstance(payload, dict) or len(payload) != 1:
        raise DecodeError("success payload must be an object with exactly one entry", raw)
    ((path, value),) = payload.items()
    return CommandSuccess(path=path, value=value)


def parse_error(payload: Any, raw: Any) -> CommandError:
    if not isinstance(payload, dict):
        raise DecodeError("error payload must be an object", raw)
    code = payload.get("type")
    if not isinstance(code, int) or isinstance(code, bool):
        raise DecodeError("error payload needs an integer 'type'", raw)
    path = payload.get("address", "")
    description = payload.get("description", "")
    if not isinstance(path, str) or not isinstance(description, str):
        raise DecodeError("error 'address' and 'description' must be strings", raw)
    return CommandError(code=code, path=path, description=description)


def parse_outcomes(raw: Any) -> list[CommandOutcome]:
    """Decode a bridge write reply into outcomes, in the order the bridge sent them.

    Error elements are returned as :class:`CommandError` data; only a reply
    that does not follow the success/error protocol raises :class:`DecodeError`.
    """
    if not isinstance(raw, list):
        raise DecodeError("expected a JSON array of results", raw)

    outcomes: list[CommandOutcome] = []
    for index, element in enumerate(raw):
        if not isinstance(element, dict):
            raise DecodeError(f"result {index} is not an object", raw)
        has_success = "success" in element
        has_error = "error" in element
        if has_success == has_error:
            raise DecodeError(f"result {index} must hold exactly one of 'success' or 'error'", raw)
        if has_success:
            outcomes.append(_parse_success(element["success"], raw))
        else:
            outcomes.append(parse_error(element["error"], raw))
    return outcomes


def is_error_reply(raw: Any) -> bool:
    """True for a non-empty array made only of error elements."""
    return (
        isinstance(raw, list)
        and bool(raw)
        and all(isinstance(item, dict) and set(item) == {"error"} for item in raw)
    )


def successes(outcomes: Iterable[CommandOutcome]) -> list[CommandSuccess]:
    return [o for o in outcomes if isinstance(o, CommandSuccess)]


def errors(outcomes: Iterable[CommandOutcome]) -> list[CommandError]:
    return [o for o in outcomes if isinstance(o, CommandError)]


def raise_for_errors(outcomes: Iterable[CommandOutcome]) -> None:
    for outcome in outcomes:
        if isinstance(outcome, CommandError):
            raise outcome.to_exception()


def check_acknowledgement(raw: Any) -> None:
    """Raise the first error of a delete or search reply.

    Success payloads of these replies are free-form (a delete is acknowledged
    with a plain string) and are not inspected.
    """
    if not isinstance(raw, list):
        raise DecodeError("expected a JSON array of results", raw)
    for index, element in enumerate(raw):
        if not isinstance(element, dict) or ("success" in element) == ("error" in element):
            raise DecodeError(f"result {index} must hold exactly one of 'success' or 'error'", raw)
        if "error" in element:
            raise parse_error(element["error"], raw).to_exception()


def created_id(outcomes: Iterable[CommandOutcome]) -> str:
    outcomes = list(outcomes)
    raise_for_errors(outcomes)
    for outcome in outcomes:
        if outcome.path == "id":
            return str(outcome.value)
    raise DecodeError("no identifier in creation reply", [asdict(o) for o in outcomes])
