"""Plausibility checks that clear Position.reasonable.

Some transponders broadcast garbage positions, and a CPR pair straddling a
zone boundary can decode to somewhere far away. Two cheap checks catch most
of it:
- Speed: the implied ground speed between consecutive fixes of one aircraft
- Range: the distance from the receiver, beyond what 1090 MHz can reach

A check only ever clears the flag. Re-validating a position is up to the
caller.
"""

from __future__ import annotations

import logging

from .position import Position

logger = logging.getLogger(__name__)

METERS_PER_NM = 1852.0
SECONDS_PER_HOUR = 3600.0

# --- Thresholds ---

MAX_SPEED_KTS = 1000.0  # well above any civil airframe
MAX_RANGE_NM = 400.0  # beyond radio horizon at FL450


def implied_speed_kts(
    prev: Position, prev_time: float, cur: Position, cur_time: float
) -> float | None:
    """Ground speed in knots needed to get from `prev` to `cur`.

    Returns None when the surface distance is unknown or time didn't advance.
    """
    elapsed = cur_time - prev_time
    if elapsed <= 0:
        return None
    dist_m = prev.haversine(cur)
    if dist_m is None:
        return None
    return (dist_m / METERS_PER_NM) / (elapsed / SECONDS_PER_HOUR)


def check_speed(
    prev: Position,
    prev_time: float,
    cur: Position,
    cur_time: float,
    max_speed_kts: float = MAX_SPEED_KTS,
) -> bool:
    """Flag `cur` unreasonable if reaching it from `prev` is too fast.

    Returns cur.reasonable after the check. An unknown speed leaves the flag
    alone.
    """
    speed = implied_speed_kts(prev, prev_time, cur, cur_time)
    if speed is not None and speed > max_speed_kts:
        logger.info(
            "Implausible position %s: %.0f kts since last fix (limit %.0f)",
            cur, speed, max_speed_kts,
        )
        cur.reasonable = False
    return cur.reasonable


def check_range(
    receiver: Position, pos: Position, max_range_nm: float = MAX_RANGE_NM
) -> bool:
    """Flag `pos` unreasonable if it is farther from `receiver` than radio reach.

    Returns pos.reasonable after the check.
    """
    dist_m = receiver.haversine(pos)
    if dist_m is not None and dist_m / METERS_PER_NM > max_range_nm:
        logger.info(
            "Implausible position %s: %.0f nm from receiver (limit %.0f)",
            pos, dist_m / METERS_PER_NM, max_range_nm,
        )
        pos.reasonable = False
    return pos.reasonable
