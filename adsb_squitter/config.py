"""Configuration file for adsb-squitter.

Reads/writes ~/.adsb-squitter/config.yaml: the receiver location (used as
the reference point for range checks) and plausibility thresholds.

The file is a flat, two-level YAML subset:

    receiver:
      name: "home"
      lat: 52.52
      lon: 13.40
    plausibility:
      max_speed_kts: 1000.0
"""

from __future__ import annotations

import logging
from pathlib import Path

from .plausibility import MAX_RANGE_NM, MAX_SPEED_KTS
from .position import Position

logger = logging.getLogger(__name__)

CONFIG_DIR = Path.home() / ".adsb-squitter"
CONFIG_FILE = CONFIG_DIR / "config.yaml"


def _parse_value(val: str):
    """Turn a scalar from the file into None/bool/int/float/str."""
    if val in ("", "~", "null"):
        return None
    lowered = val.lower()
    if lowered in ("true", "false"):
        return lowered == "true"
    for cast in (int, float):
        try:
            return cast(val)
        except ValueError:
            pass
    if len(val) >= 2 and val[0] == val[-1] and val[0] in "\"'":
        return val[1:-1]
    return val


def _format_value(val) -> str:
    if val is None:
        return "null"
    if isinstance(val, bool):
        return "true" if val else "false"
    if isinstance(val, str):
        return f'"{val}"'
    return str(val)


def _default_config() -> dict:
    return {
        "receiver": {
            "name": "default",
            "lat": None,
            "lon": None,
            "alt_ft": None,
        },
        "plausibility": {
            "max_speed_kts": MAX_SPEED_KTS,
            "max_range_nm": MAX_RANGE_NM,
        },
    }


def load_config() -> dict:
    """Load config, layering the file (if any) over the defaults.

    An unreadable file is logged and ignored.
    """
    config = _default_config()
    if not CONFIG_FILE.exists():
        return config

    try:
        text = CONFIG_FILE.read_text()
    except OSError as e:
        logger.warning("Could not read %s, using defaults: %s", CONFIG_FILE, e)
        return config

    section: str | None = None
    for line_no, line in enumerate(text.splitlines(), start=1):
        stripped = line.strip()
        if not stripped or stripped.startswith("#"):
            continue
        if ":" not in stripped:
            logger.warning("%s:%d: ignoring line without ':'", CONFIG_FILE, line_no)
            continue

        key, _, val = stripped.partition(":")
        key, val = key.strip(), val.strip()
        indented = line[:1] in (" ", "\t")

        if not indented:
            if val:
                section = None
                config[key] = _parse_value(val)
            else:
                section = key
                if not isinstance(config.get(section), dict):
                    config[section] = {}
            continue

        if section is None:
            config[key] = _parse_value(val)
        else:
            config[section][key] = _parse_value(val)

    return config


def save_config(config: dict) -> Path:
    """Write config to CONFIG_FILE and return its path."""
    CONFIG_DIR.mkdir(parents=True, exist_ok=True)

    lines = ["# adsb-squitter configuration", ""]
    for section, values in config.items():
        if isinstance(values, dict):
            lines.append(f"{section}:")
            lines.extend(f"  {k}: {_format_value(v)}" for k, v in values.items())
            lines.append("")
        else:
            lines.append(f"{section}: {_format_value(values)}")

    CONFIG_FILE.write_text("\n".join(lines) + "\n")
    return CONFIG_FILE


def receiver_position(config: dict) -> Position | None:
    """The configured receiver as a Position, or None if lat/lon aren't set."""
    rx = config.get("receiver") or {}
    if rx.get("lat") is None or rx.get("lon") is None:
        return None
    alt = rx.get("alt_ft")
    return Position(
        longitude=float(rx["lon"]),
        latitude=float(rx["lat"]),
        altitude=float(alt) if alt is not None else None,
    )
