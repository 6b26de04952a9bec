from __future__ import annotations

import logging
from typing import Callable, Protocol

from timer_relay.common.logging_config import TRACE
from timer_relay.constants import RELAY_IDS
from timer_relay.errors import DeviceConnectionError
from timer_relay.state import (
    Connectivity,
    DeviceSnapshot,
    DeviceStatus,
    RelayAction,
)

logger = logging.getLogger(__name__)

SnapshotListener = Callable[[DeviceSnapshot], None]


class DeviceClient(Protocol):
    async def get_status(self) -> DeviceStatus: ...

    async def send_command(self, relay_id: int, action: RelayAction) -> None: ...


class DeviceSync:
    """
    Keeps one view's DeviceSnapshot in step with the relay controller.

    - poll():          fetch status, replace relays on success, flag connectivity
    - send_command():  POST one command, then poll once regardless of outcome

    Concurrent poll() calls are not serialized: a slow device can have several
    in flight at once and whichever resolves last wins. The caller owns the
    cadence (the page's ui.timer).
    """

    def __init__(self, client: DeviceClient) -> None:
        self.client = client
        self.snapshot = DeviceSnapshot()
        self._listeners: list[SnapshotListener] = []

    # ---- State ----

    def add_listener(self, listener: SnapshotListener) -> None:
        self._listeners.append(listener)

    def _publish(self, snapshot: DeviceSnapshot) -> None:
        self.snapshot = snapshot
        for listener in list(self._listeners):
            listener(snapshot)

    def _mark_disconnected(self) -> None:
        # Last known relay states survive a failed call
        if self.snapshot.connectivity is not Connectivity.DISCONNECTED:
            logger.info("Relay controller disconnected")
        self._publish(
            DeviceSnapshot(
                connectivity=Connectivity.DISCONNECTED,
                relays=self.snapshot.relays,
                device=self.snapshot.device,
            )
        )

    # ---- Status Poller ----

    async def poll(self) -> DeviceSnapshot:
        try:
            status = await self.client.get_status()
        except DeviceConnectionError as e:
            logger.warning("Status poll failed: %s", e)
            self._mark_disconnected()
            return self.snapshot

        if self.snapshot.connectivity is not Connectivity.CONNECTED:
            logger.info("Relay controller connected")
        logger.log(TRACE, "Status: %s", status)
        self._publish(
            DeviceSnapshot(
                connectivity=Connectivity.CONNECTED,
                relays=status.relays,
                device=status.device if status.device is not None else self.snapshot.device,
            )
        )
        return self.snapshot

    # ---- Command Dispatcher ----

    async def send_command(self, relay_id: int, action: RelayAction | str) -> None:
        if relay_id not in RELAY_IDS:
            raise ValueError(f"Unknown relay id: {relay_id}")
        action = RelayAction(action)
        try:
            await self.client.send_command(relay_id, action)
            logger.info("RELAY%s -> %s", relay_id, action.value)
        except DeviceConnectionError as e:
            logger.error("RELAY%s %s failed: %s", relay_id, action.value, e)
            self._mark_disconnected()
        await self.poll()

    async def toggle(self, relay_id: int) -> None:
        """Switch a relay to the opposite of its last known state."""
        if relay_id not in RELAY_IDS:
            raise ValueError(f"Unknown relay id: {relay_id}")
        active = self.snapshot.relay(relay_id).active
        await self.send_command(relay_id, RelayAction.OFF if active else RelayAction.ON)

    async def reset(self, relay_id: int) -> None:
        """Restart the countdown of a running relay."""
        await self.send_command(relay_id, RelayAction.RESET)
