from __future__ import annotations

import logging
from typing import Literal

from nicegui import ui

ThemeMode = Literal["light", "dark", "system"]

# Relay card accents per countdown urgency
URGENCY_COLORS = {
    "normal": "positive",
    "warning": "warning",
    "urgent": "negative",
}


def get_palette(mode: ThemeMode) -> dict[str, str]:
    """Return palette tokens for the given mode ('system' resolves to light tokens)."""
    if mode == "dark":
        return {
            "primary": "#1F538D",
            "background": "#1A1A1A",
            "surface": "#212121",
            "text": "#D6D6D6",
            "muted": "#949A9F",
            # Accent/hard-coded semantic colors
            "accent": "#22D3EE",
            "positive": "#21BA45",
            "negative": "#DB2828",
            "info": "#31CCEC",
            "warning": "#F2C037",
        }
    # light
    return {
        "primary": "#3B8ED0",
        "background": "#F3F4F6",
        "surface": "#FFFFFF",
        "text": "#1A1A1A",
        "muted": "#6B7280",
        # Accent/hard-coded semantic colors
        "accent": "#22D3EE",
        "positive": "#21BA45",
        "negative": "#DB2828",
        "info": "#31CCEC",
        "warning": "#F2C037",
    }


def _inject_css_vars(light: dict[str, str], dark: dict[str, str]) -> None:
    """Inject CSS variables for both Quasar body modes."""
    ui.add_css(
        f"""
:root {{
  --tr-bg: {light["background"]};
  --tr-surface: {light["surface"]};
  --tr-text: {light["text"]};
  --tr-muted: {light["muted"]};
}}
body.body--dark {{
  --tr-bg: {dark["background"]};
  --tr-surface: {dark["surface"]};
  --tr-text: {dark["text"]};
  --tr-muted: {dark["muted"]};
}}

body, .q-page {{ background: var(--tr-bg); color: var(--tr-text); }}
.q-card {{ background: var(--tr-surface); color: var(--tr-text); border-radius: 12px; }}
.relay-time {{ font-variant-numeric: tabular-nums; }}
"""
    )


def apply_theme(mode: ThemeMode = "system") -> None:
    """
    Apply the selected theme:
    - Set NiceGUI/Quasar colors and dark mode ('system' follows the browser).
    - Inject CSS variables for the relay cards.
    """
    pal = get_palette("dark" if mode == "dark" else "light")
    ui.colors(
        primary=pal["primary"],
        accent=pal["accent"],
        positive=pal["positive"],
        negative=pal["negative"],
        info=pal["info"],
        warning=pal["warning"],
    )
    if mode == "system":
        ui.dark_mode(None)
    else:
        ui.dark_mode(mode == "dark")
    logging.debug("Applied theme mode: %s", mode)

    _inject_css_vars(get_palette("light"), get_palette("dark"))
