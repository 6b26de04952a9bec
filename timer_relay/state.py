from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Mapping

from nicegui import binding

from timer_relay.constants import RELAY_IDS
from timer_relay.formatting import calculate_progress, format_time, urgency


class Connectivity(str, Enum):
    UNKNOWN = "unknown"
    CONNECTED = "connected"
    DISCONNECTED = "disconnected"


class RelayAction(str, Enum):
    ON = "ON"
    OFF = "OFF"
    RESET = "RESET"  # restart the countdown of an active relay


@dataclass(frozen=True)
class RelayState:
    active: bool = False
    remaining_seconds: int = 0  # only meaningful while active

    def __post_init__(self) -> None:
        if self.remaining_seconds < 0:
            object.__setattr__(self, "remaining_seconds", 0)


@dataclass(frozen=True)
class DeviceInfo:
    device_id: str | None = None
    wifi_connected: bool | None = None
    wifi_rssi: int | None = None


def _default_relays() -> Mapping[int, RelayState]:
    return MappingProxyType({rid: RelayState() for rid in RELAY_IDS})


@dataclass(frozen=True)
class DeviceSnapshot:
    """Last confirmed state of both relays plus the outcome of the last network call."""

    connectivity: Connectivity = Connectivity.UNKNOWN
    relays: Mapping[int, RelayState] = field(default_factory=_default_relays)
    device: DeviceInfo | None = None

    @property
    def connected(self) -> bool:
        return self.connectivity is Connectivity.CONNECTED

    def relay(self, relay_id: int) -> RelayState:
        return self.relays[relay_id]


@dataclass(frozen=True)
class DeviceStatus:
    """Parsed body of GET /api/status."""

    relays: Mapping[int, RelayState]
    device: DeviceInfo | None = None


# Bindable per-view state; flattened scalars keep the UI bindings simple
@binding.bindable_dataclass
class DeviceView:
    connectivity: str = Connectivity.UNKNOWN.value
    device_id: str = ""
    relay1_active: bool = False
    relay1_remaining: int = 0
    relay2_active: bool = False
    relay2_remaining: int = 0
    # Derived fields for the relay cards
    relay1_time: str = "00:00"
    relay1_progress: float = 0.0
    relay1_urgency: str = "normal"
    relay2_time: str = "00:00"
    relay2_progress: float = 0.0
    relay2_urgency: str = "normal"

    def update_from(self, snapshot: DeviceSnapshot) -> None:
        """Copy a snapshot into the bindable fields."""
        self.connectivity = snapshot.connectivity.value
        if snapshot.device is not None and snapshot.device.device_id:
            self.device_id = snapshot.device.device_id
        for rid in RELAY_IDS:
            relay = snapshot.relays.get(rid, RelayState())
            # Inactive relays render as a reset countdown
            seconds = relay.remaining_seconds if relay.active else 0
            setattr(self, f"relay{rid}_active", relay.active)
            setattr(self, f"relay{rid}_remaining", seconds)
            setattr(self, f"relay{rid}_time", format_time(seconds))
            setattr(self, f"relay{rid}_progress", calculate_progress(seconds) / 100.0)
            setattr(self, f"relay{rid}_urgency", urgency(seconds) if relay.active else "normal")
