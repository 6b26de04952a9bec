from __future__ import annotations

# Device HTTP API
STATUS_PATH = "/api/status"
RELAY_PATH = "/api/relay"
RELAY_IDS: tuple[int, ...] = (1, 2)

# Status cadence is fixed: one poll per second for every open view
POLL_INTERVAL_S = 1.0

# Firmware countdown (40 minutes) and its LED warning thresholds
COUNTDOWN_SECONDS = 40 * 60
WARNING_SECONDS = 3 * 60
URGENT_SECONDS = 30

# Placeholder device address, edit per deployment or override via env/CLI
DEFAULT_DEVICE_HOST = "192.168.1.100"
