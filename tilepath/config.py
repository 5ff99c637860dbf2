# tilepath/config.py
#!/usr/bin/env python3
"""
Runtime settings, resolved from the environment.

- TILEPATH_FRONTIER      scan | heap           (default scan)
- TILEPATH_PROBE_RADIUS  float >= 0, world units (default 0: floor division)
- TILEPATH_STRICT        1/true/yes/on -> unresolved positions raise
- TILEPATH_LOG_LEVEL     DEBUG | INFO | WARNING | ... (default INFO)
"""

import logging
import math
import os
from dataclasses import dataclass
from typing import Mapping, Optional

FRONTIER_ALIASES = {
    "scan": "scan", "list": "scan", "linear": "scan",
    "heap": "heap", "heapq": "heap", "pq": "heap",
}
TRUTHY = ("1", "true", "yes", "on")
FALSY = ("", "0", "false", "no", "off")


@dataclass(frozen=True)
class Settings:
    frontier: str = "scan"
    probe_radius: float = 0.0
    strict_positions: bool = False
    log_level: int = logging.INFO


def _frontier(raw: str) -> str:
    key = raw.strip().lower()
    if key not in FRONTIER_ALIASES:
        raise ValueError(f"TILEPATH_FRONTIER: unknown frontier {raw!r}")
    return FRONTIER_ALIASES[key]


def _probe_radius(raw: str) -> float:
    try:
        value = float(raw)
    except ValueError:
        raise ValueError(f"TILEPATH_PROBE_RADIUS: not a number: {raw!r}") from None
    if not (math.isfinite(value) and value >= 0):
        raise ValueError(f"TILEPATH_PROBE_RADIUS: must be finite and >= 0, got {raw!r}")
    return value


def _flag(raw: str) -> bool:
    key = raw.strip().lower()
    if key in TRUTHY:
        return True
    if key in FALSY:
        return False
    raise ValueError(f"TILEPATH_STRICT: expected a boolean, got {raw!r}")


def _log_level(raw: str) -> int:
    level = logging.getLevelName(raw.strip().upper())
    if not isinstance(level, int):
        raise ValueError(f"TILEPATH_LOG_LEVEL: unknown level {raw!r}")
    return level


def resolve_settings(environ: Optional[Mapping[str, str]] = None) -> Settings:
    env = os.environ if environ is None else environ
    defaults = Settings()
    return Settings(
        frontier=_frontier(env.get("TILEPATH_FRONTIER", defaults.frontier)),
        probe_radius=_probe_radius(env.get("TILEPATH_PROBE_RADIUS", str(defaults.probe_radius))),
        strict_positions=_flag(env.get("TILEPATH_STRICT", "0")),
        log_level=_log_level(env.get("TILEPATH_LOG_LEVEL", "INFO")),
    )
