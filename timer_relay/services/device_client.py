from __future__ import annotations

import logging
import math
from typing import Any

import httpx

from timer_relay.config import Config
from timer_relay.constants import RELAY_IDS, RELAY_PATH, STATUS_PATH
from timer_relay.errors import DeviceConnectionError
from timer_relay.state import DeviceInfo, DeviceStatus, RelayAction, RelayState

logger = logging.getLogger(__name__)


def _seconds(value: Any, key: str) -> int:
    # Absent or null means no countdown; JSON may still carry inf/nan or strings
    if value is None:
        return 0
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise DeviceConnectionError(f"'{key}.remaining_seconds' is not a number: {value!r}")
    if isinstance(value, float) and not math.isfinite(value):
        raise DeviceConnectionError(f"'{key}.remaining_seconds' is not finite: {value!r}")
    return max(0, int(value))


def _parse_relay(raw: Any, key: str) -> RelayState:
    if not isinstance(raw, dict):
        raise DeviceConnectionError(f"Status body has no '{key}' object")
    active = raw.get("active")
    if not isinstance(active, bool):
        raise DeviceConnectionError(f"'{key}.active' is not a boolean: {active!r}")
    return RelayState(active=active, remaining_seconds=_seconds(raw.get("remaining_seconds"), key))


def _rssi(value: Any) -> int | None:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    if isinstance(value, float) and not math.isfinite(value):
        return None
    return int(value)


def parse_status(payload: Any) -> DeviceStatus:
    """
    Convert a decoded GET /api/status body into a DeviceStatus.

    Raises:
        DeviceConnectionError: if the body is not an object, misses a relay block
            or carries a relay field of the wrong type
    """
    if not isinstance(payload, dict):
        raise DeviceConnectionError("Status body is not a JSON object")
    relays = {rid: _parse_relay(payload.get(f"relay{rid}"), f"relay{rid}") for rid in RELAY_IDS}

    device = None
    if any(k in payload for k in ("device_id", "wifi_connected", "wifi_rssi")):
        rssi = payload.get("wifi_rssi")
        wifi = payload.get("wifi_connected")
        device = DeviceInfo(
            device_id=str(payload["device_id"]) if payload.get("device_id") else None,
            wifi_connected=bool(wifi) if wifi is not None else None,
            wifi_rssi=_rssi(rssi),
        )
    return DeviceStatus(relays=relays, device=device)


class AsyncDeviceClient:
    """
    Async HTTP client for the ESP32 timer relay controller.

    - GET /api/status for the relay states
    - POST /api/relay to switch or reset one relay

    The underlying httpx.AsyncClient is created on first use and shared by
    every view; host/port may be changed until then (CLI overrides).
    """

    def __init__(
        self,
        host: str,
        port: int = 80,
        timeout: float = 5.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.host = host
        self.port = port
        self.timeout = timeout
        self._transport = transport
        self._http: httpx.AsyncClient | None = None

    @property
    def base_url(self) -> str:
        if self.port == 80:
            return f"http://{self.host}"
        return f"http://{self.host}:{self.port}"

    def _client(self) -> httpx.AsyncClient:
        if self._http is None or self._http.is_closed:
            self._http = httpx.AsyncClient(
                base_url=self.base_url,
                timeout=self.timeout,
                transport=self._transport,
            )
        return self._http

    async def aclose(self) -> None:
        if self._http is not None:
            await self._http.aclose()
            self._http = None

    async def get_status(self) -> DeviceStatus:
        try:
            resp = await self._client().get(STATUS_PATH)
            payload = resp.json()
        except httpx.HTTPError as e:
            raise DeviceConnectionError(f"GET {STATUS_PATH} failed: {e!r}") from e
        except ValueError as e:
            raise DeviceConnectionError(f"GET {STATUS_PATH} returned non-JSON body") from e
        try:
            return parse_status(payload)
        except (TypeError, ValueError, OverflowError) as e:
            raise DeviceConnectionError(f"GET {STATUS_PATH} returned a malformed body: {e}") from e

    async def send_command(self, relay_id: int, action: RelayAction) -> None:
        """Send one control command. The device's reply is not inspected."""
        body = {"relay": relay_id, "action": RelayAction(action).value}
        try:
            resp = await self._client().post(RELAY_PATH, json=body)
        except httpx.HTTPError as e:
            raise DeviceConnectionError(f"POST {RELAY_PATH} failed: {e!r}") from e
        logger.debug("POST %s %s -> %s", RELAY_PATH, body, resp.status_code)


# Module-level singleton instance (host/port overridden from CLI in main)
_cfg = Config.from_env()
client = AsyncDeviceClient(
    host=_cfg.DEVICE_HOST, port=_cfg.DEVICE_PORT, timeout=_cfg.REQUEST_TIMEOUT_S
)
