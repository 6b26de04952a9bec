import logging
import sys

from nicegui import app as ng_app
from nicegui import background_tasks, ui

from timer_relay.common.logging_config import configure_logging
from timer_relay.common.theme import apply_theme
from timer_relay.config import Config, build_arg_parser
from timer_relay.constants import POLL_INTERVAL_S, RELAY_IDS
from timer_relay.pages.relay_panel import RelayPanel
from timer_relay.services.device_client import client
from timer_relay.services.device_sync import DeviceSync
from timer_relay.state import Connectivity, DeviceSnapshot, DeviceView

_CONNECTIVITY_LABELS = {
    Connectivity.UNKNOWN.value: ("Connecting…", "wifi_find", "#9E9E9E"),
    Connectivity.CONNECTED.value: ("Connected", "wifi", "#21BA45"),
    Connectivity.DISCONNECTED.value: ("Disconnected", "wifi_off", "#DB2828"),
}


class ConnectionIndicator:
    """Header icon + label reflecting the outcome of the last device call."""

    def __init__(self) -> None:
        self.icon: ui.icon | None = None
        self.label: ui.label | None = None
        self._shown: str | None = None

    def build(self) -> None:
        with ui.row().classes("items-center gap-1"):
            self.icon = ui.icon("wifi_find").classes("text-xl")
            self.label = ui.label("Connecting…").classes("text-sm").mark("connection-label")
        self.refresh(Connectivity.UNKNOWN.value)

    def refresh(self, connectivity: str) -> None:
        if connectivity == self._shown:
            return
        text, icon_name, color = _CONNECTIVITY_LABELS[connectivity]
        if self.icon:
            self.icon.name = icon_name
            self.icon.style(f"color: {color}")
        if self.label:
            self.label.text = text
            self.label.style(f"color: {color}")
        self._shown = connectivity


def build_header(view: DeviceView, indicator: ConnectionIndicator) -> None:
    with (
        ui.header().classes("px-4 py-2"),
        ui.row().classes("w-full items-center justify-between"),
    ):
        with ui.column().classes("gap-0"):
            ui.label("Timer Relay Control").classes("text-lg font-medium")
            ui.label().bind_text_from(
                view, "device_id", backward=lambda v: v or "ESP32 timer relay"
            ).classes("text-xs opacity-80")
        indicator.build()


def index() -> None:
    """One view: its own snapshot, poller and widgets for as long as the tab is open."""
    apply_theme("system")

    view = DeviceView()
    sync = DeviceSync(client)
    indicator = ConnectionIndicator()
    panels = [RelayPanel(rid, view, sync) for rid in RELAY_IDS]

    def on_snapshot(snapshot: DeviceSnapshot) -> None:
        view.update_from(snapshot)
        indicator.refresh(view.connectivity)
        for panel in panels:
            panel.refresh()

    build_header(view, indicator)
    with ui.column().classes("w-full max-w-xl mx-auto gap-4 p-4"):
        for panel in panels:
            panel.build()

    def spawn_poll() -> None:
        # Fire and forget: a slow device must not delay the next tick
        background_tasks.create(sync.poll(), name="status-poll")

    sync.add_listener(on_snapshot)
    # Deleted with the page's client; websocket drops do not stop it
    ui.timer(POLL_INTERVAL_S, spawn_poll, immediate=True)


ui.page("/")(index)
ng_app.on_shutdown(client.aclose)


def main() -> None:
    args, _ = build_arg_parser().parse_known_args()
    config = Config.from_env().apply_args(args)

    client.host = config.DEVICE_HOST
    client.port = config.DEVICE_PORT
    client.timeout = config.REQUEST_TIMEOUT_S

    configure_logging(config.LOG_LEVEL)
    logging.info(
        "Webserver bind: host=%s port=%s", config.SERVER_HOST, config.SERVER_PORT
    )
    logging.info("Relay controller target: %s", client.base_url)

    ui.run(
        title="Relay Control",
        host=config.SERVER_HOST,
        port=config.SERVER_PORT,
        reload=False,
        show=False,
        loop="uvloop" if sys.platform != "win32" else "asyncio",
        http="httptools",
        ws="wsproto",
    )


if __name__ in {"__main__", "__mp_main__"}:
    main()
