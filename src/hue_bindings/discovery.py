from __future__ import annotations

import logging
import xml.etree.ElementTree as ET
from dataclasses import dataclass
from typing import Any

import httpx

from hue_bindings.client import BridgeClient
from hue_bindings.errors import DecodeError, TransportError
from hue_bindings.response import parse_error


logger = logging.getLogger("hue_bindings.discovery")

NUPNP_URL = "https://discovery.meethue.com"
UPNP_NS = {"upnp": "urn:schemas-upnp-org:device-1-0"}


@dataclass(frozen=True)
class RegisteredUser:
    username: str
    client_key: str | None = None


@dataclass(frozen=True)
class BridgeIcon:
    mimetype: str | None
    width: int | None
    height: int | None
    depth: int | None
    url: str | None


@dataclass(frozen=True)
class BridgeDescription:
    url_base: str | None
    device_type: str | None
    friendly_name: str | None
    manufacturer: str | None
    model_name: str | None
    model_number: str | None
    serial_number: str | None
    udn: str | None
    icons: tuple[BridgeIcon, ...] = ()


async def register_user(
    bridge_host: str,
    devicetype: str,
    *,
    generate_client_key: bool = False,
    transport: httpx.AsyncBaseTransport | None = None,
) -> RegisteredUser:
    """Create a whitelisted user; the bridge's link button must have been pressed."""
    body: dict[str, Any] = {"devicetype": devicetype}
    if generate_client_key:
        body["generateclientkey"] = True

    async with BridgeClient(bridge_host=bridge_host, username=None, transport=transport) as client:
        raw = await client.send_unscoped("POST", "/api", body)

    if not isinstance(raw, list) or not raw or not isinstance(raw[-1], dict):
        raise DecodeError("unexpected registration reply", raw)
    last = raw[-1]
    if "error" in last:
        raise parse_error(last["error"], raw).to_exception()
    success = last.get("success")
    if not isinstance(success, dict) or not isinstance(success.get("username"), str):
        raise DecodeError("registration reply carries no username", raw)
    client_key = success.get("clientkey")
    logger.info("Registered user on bridge %s", bridge_host)
    return RegisteredUser(username=success["username"], client_key=client_key if isinstance(client_key, str) else None)


async def discover_nupnp(
    *,
    url: str = NUPNP_URL,
    timeout: float = 5.0,
    transport: httpx.AsyncBaseTransport | None = None,
) -> list[str]:
    """Ask the vendor's discovery service for bridges on the caller's network."""
    try:
        async with httpx.AsyncClient(timeout=timeout, transport=transport, follow_redirects=True) as client:
            resp = await client.get(url)
    except httpx.TransportError as exc:
        raise TransportError(exc) from exc
    if resp.status_code >= 400:
        raise TransportError(f"HTTP {resp.status_code}", status_code=resp.status_code, body=resp.text)
    try:
        payload = resp.json()
    except ValueError as exc:
        raise DecodeError(exc, resp.content) from exc
    if not isinstance(payload, list):
        raise DecodeError("expected a JSON array of bridges", payload)

    addresses: list[str] = []
    for entry in payload:
        if isinstance(entry, dict) and isinstance(entry.get("internalipaddress"), str):
            addresses.append(entry["internalipaddress"])
    return addresses


def _int_or_none(value: str | None) -> int | None:
    if value is None:
        return None
    try:
        return int(value)
    except ValueError:
        return None


def parse_description(xml_text: str) -> BridgeDescription:
    try:
        root = ET.fromstring(xml_text)
    except ET.ParseError as exc:
        raise DecodeError(exc, xml_text) from exc

    device = root.find(".//upnp:device", UPNP_NS)
    if device is None:
        device = root.find(".//device")
    if device is None:
        raise DecodeError("description has no device element", xml_text)

    def _text(node: ET.Element, tag: str) -> str | None:
        el = node.find(f"upnp:{tag}", UPNP_NS)
        if el is None:
            el = node.find(tag)
        if el is not None and el.text:
            return el.text.strip()
        return None

    icons: list[BridgeIcon] = []
    icon_nodes = device.findall("upnp:iconList/upnp:icon", UPNP_NS) or device.findall("iconList/icon")
    for icon in icon_nodes:
        icons.append(
            BridgeIcon(
                mimetype=_text(icon, "mimetype"),
                width=_int_or_none(_text(icon, "width")),
                height=_int_or_none(_text(icon, "height")),
                depth=_int_or_none(_text(icon, "depth")),
                url=_text(icon, "url"),
            )
        )

    udn = _text(device, "UDN")
    if udn and udn.startswith("uuid:"):
        udn = udn[len("uuid:") :]

    return BridgeDescription(
        url_base=_text(root, "URLBase"),
        device_type=_text(device, "deviceType"),
        friendly_name=_text(device, "friendlyName"),
        manufacturer=_text(device, "manufacturer"),
        model_name=_text(device, "modelName"),
        model_number=_text(device, "modelNumber"),
        serial_number=_text(device, "serialNumber"),
        udn=udn,
        icons=tuple(icons),
    )


async def fetch_description(
    bridge_host: str,
    *,
    timeout: float = 2.0,
    transport: httpx.AsyncBaseTransport | None = None,
) -> BridgeDescription:
    try:
        async with httpx.AsyncClient(timeout=timeout, transport=transport, follow_redirects=True) as client:
            resp = await client.get(f"http://{bridge_host}/description.xml")
    except httpx.TransportError as exc:
        raise TransportError(exc) from exc
    if resp.status_code != 200:
        raise TransportError(f"HTTP {resp.status_code}", status_code=resp.status_code, body=resp.text)
    return parse_description(resp.text)
