from __future__ import annotations

from nicegui import ui

from timer_relay.common.theme import URGENCY_COLORS
from timer_relay.services.device_sync import DeviceSync
from timer_relay.state import DeviceView


class RelayPanel:
    """Card for one timer relay: state, countdown, progress and controls."""

    def __init__(self, relay_id: int, view: DeviceView, sync: DeviceSync) -> None:
        self.relay_id = relay_id
        self.view = view
        self.sync = sync
        # Elements bound to the view
        self.state_label: ui.label | None = None
        self.time_label: ui.label | None = None
        self.progress: ui.linear_progress | None = None
        self.toggle_button: ui.button | None = None
        self.reset_button: ui.button | None = None
        self._color = "positive"

    def _field(self, name: str) -> str:
        return f"relay{self.relay_id}_{name}"

    # ---- Actions ----

    async def on_toggle(self) -> None:
        await self.sync.toggle(self.relay_id)

    async def on_reset(self) -> None:
        await self.sync.reset(self.relay_id)

    def refresh(self) -> None:
        """Recolor the progress bar after the view was updated."""
        color = URGENCY_COLORS.get(getattr(self.view, self._field("urgency")), "positive")
        if self.progress is not None and color != self._color:
            self.progress.props(f"color={color}")
            self._color = color

    # ---- UI ----

    def build(self) -> None:
        with ui.card().classes("w-full"):
            with ui.row().classes("w-full items-center justify-between"):
                ui.label(f"Relay {self.relay_id}").classes("text-lg font-medium")
                self.state_label = (
                    ui.label("OFF")
                    .bind_text_from(
                        self.view,
                        self._field("active"),
                        backward=lambda v: "ON" if v else "OFF",
                    )
                    .classes("text-sm font-bold")
                )

            with ui.column().classes("w-full gap-1").bind_visibility_from(
                self.view, self._field("active")
            ):
                with ui.row().classes("w-full items-center justify-between"):
                    ui.label("Remaining").classes("text-sm text-[var(--tr-muted)]")
                    self.time_label = ui.label("00:00").bind_text_from(
                        self.view, self._field("time")
                    ).classes("relay-time text-xl")
                self.progress = ui.linear_progress(
                    value=0.0, show_value=False, size="10px", color="positive"
                ).bind_value_from(self.view, self._field("progress")).mark(
                    f"relay{self.relay_id}-progress"
                )
                ui.label().bind_text_from(
                    self.view, self._field("urgency"), backward=self._urgency_text
                ).classes("text-xs text-[var(--tr-muted)]")

            with ui.row().classes("items-center gap-2"):
                self.toggle_button = (
                    ui.button("Turn ON", on_click=self.on_toggle)
                    .bind_text_from(
                        self.view,
                        self._field("active"),
                        backward=lambda v: "Turn OFF" if v else "Turn ON",
                    )
                    .props("unelevated")
                    .mark(f"relay{self.relay_id}-toggle")
                )
                self.reset_button = (
                    ui.button("Reset timer", on_click=self.on_reset)
                    .bind_enabled_from(self.view, self._field("active"))
                    .props("flat")
                    .mark(f"relay{self.relay_id}-reset")
                )

    @staticmethod
    def _urgency_text(value: str) -> str:
        if value == "urgent":
            return "Switching off shortly"
        if value == "warning":
            return "Less than 3 minutes left"
        return ""
