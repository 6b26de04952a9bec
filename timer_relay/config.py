from __future__ import annotations

import argparse
import logging
import os
from dataclasses import dataclass

from timer_relay.common.logging_config import TRACE
from timer_relay.constants import DEFAULT_DEVICE_HOST

_LEVELS = {
    "TRACE": TRACE,
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = float(raw)
    except ValueError:
        return default
    return value if value > 0 else default


def _resolve_log_level() -> int:
    s = os.getenv("TIMER_RELAY_LOG_LEVEL")
    if s:
        return _LEVELS.get(s.strip().upper(), logging.WARNING)
    else:
        return logging.WARNING


@dataclass
class Config:
    """Runtime configuration for the NiceGUI app and the device connection."""

    DEVICE_HOST: str = DEFAULT_DEVICE_HOST
    DEVICE_PORT: int = 80
    REQUEST_TIMEOUT_S: float = 5.0
    SERVER_HOST: str = "0.0.0.0"
    SERVER_PORT: int = 8080  # NiceGUI server port
    LOG_LEVEL: int = logging.WARNING

    @classmethod
    def from_env(cls) -> "Config":
        return cls(
            DEVICE_HOST=os.getenv("TIMER_RELAY_DEVICE_HOST") or DEFAULT_DEVICE_HOST,
            DEVICE_PORT=_env_int("TIMER_RELAY_DEVICE_PORT", 80),
            REQUEST_TIMEOUT_S=_env_float("TIMER_RELAY_REQUEST_TIMEOUT", 5.0),
            SERVER_HOST=os.getenv("TIMER_RELAY_SERVER_IP") or "0.0.0.0",
            SERVER_PORT=_env_int("TIMER_RELAY_SERVER_PORT", 8080),
            LOG_LEVEL=_resolve_log_level(),
        )

    def apply_args(self, args: argparse.Namespace) -> "Config":
        """
        Overlay parsed CLI arguments on top of this (env-derived) config.

        Log level priority: explicit --log-level > -v/-q > env default.
        """
        self.DEVICE_HOST = args.device_host or self.DEVICE_HOST
        if args.device_port is not None:
            self.DEVICE_PORT = int(args.device_port)
        if args.timeout is not None and args.timeout > 0:
            self.REQUEST_TIMEOUT_S = float(args.timeout)
        self.SERVER_HOST = args.host or self.SERVER_HOST
        if args.port is not None:
            self.SERVER_PORT = int(args.port)

        if args.log_level:
            self.LOG_LEVEL = _LEVELS[args.log_level]
        elif args.verbose >= 3:
            self.LOG_LEVEL = TRACE
        elif args.verbose == 2:
            self.LOG_LEVEL = logging.DEBUG
        elif args.verbose == 1:
            self.LOG_LEVEL = logging.INFO
        elif args.quiet:
            self.LOG_LEVEL = logging.WARNING
        return self


def build_arg_parser() -> argparse.ArgumentParser:
    # Defaults are None so that unset flags leave the env-derived values alone
    parser = argparse.ArgumentParser(description="ESP32 Timer Relay NiceGUI Webserver")
    parser.add_argument("--host", default=None, help="Webserver bind host")
    parser.add_argument("--port", type=int, default=None, help="Webserver bind port")
    parser.add_argument(
        "--device-host", default=None, help="ESP32 relay controller host to poll"
    )
    parser.add_argument(
        "--device-port", type=int, default=None, help="ESP32 relay controller HTTP port"
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=None,
        help="Per-request timeout towards the device, in seconds",
    )
    parser.add_argument(
        "--log-level",
        choices=list(_LEVELS),
        help="Set log level",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Increase verbosity; -v=INFO, -vv=DEBUG, -vvv=TRACE",
    )
    parser.add_argument(
        "-q", "--quiet", action="store_true", help="Enable WARNING logging"
    )
    return parser
