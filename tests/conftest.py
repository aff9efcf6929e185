import json

import httpx
import pytest

from hue_bindings.bridge import Bridge
from hue_bindings.client import BridgeClient
from hue_bindings.config import BridgeConfig


@pytest.fixture
def config() -> BridgeConfig:
    return BridgeConfig(
        bridge_host="bridge.test",
        username="user",
        timeout_seconds=1.0,
        connect_timeout_seconds=1.0,
    )


@pytest.fixture
def make_bridge(config):
    """Return (bridge, requests): the bridge sends to ``handler`` and each request is recorded."""

    def _make(handler):
        seen: list[dict] = []

        async def recording(request: httpx.Request) -> httpx.Response:
            seen.append(
                {
                    "method": request.method,
                    "path": request.url.path,
                    "body": json.loads(request.content) if request.content else None,
                }
            )
            return await handler(request)

        bridge = Bridge(BridgeClient.from_config(config, transport=httpx.MockTransport(recording)))
        return bridge, seen

    return _make
