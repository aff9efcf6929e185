from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import os


@dataclass(frozen=True)
class BridgeConfig:
    bridge_host: Optional[str]
    username: Optional[str]
    timeout_seconds: float = 10.0
    connect_timeout_seconds: float = 3.0

    @staticmethod
    def from_env() -> "BridgeConfig":
        return BridgeConfig(
            bridge_host=os.getenv("HUE_BRIDGE_HOST"),
            username=os.getenv("HUE_USERNAME"),
            timeout_seconds=float(os.getenv("HUE_TIMEOUT_SECONDS", "10")),
            connect_timeout_seconds=float(os.getenv("HUE_CONNECT_TIMEOUT_SECONDS", "3")),
        )
