"""logic/picking.py — Seat under a pointing ray.

Each seat is an axis-aligned box: its footprint (``seat_size`` square)
extruded ``seat_size`` upward from the seat position.  The nearest box
hit at a positive distance wins.

    direction = ray_from_angles(yaw_deg=-90.0, pitch_deg=-20.0)
    idx = pick_seat(seat_map.seats, eye, direction, layout.seat_size)
"""

from __future__ import annotations
import math

from components import Seat, Vec3

# Direction components below this are treated as parallel to a slab.
_PARALLEL_EPS = 1e-4
_PITCH_LIMIT = 89.0


def ray_box_intersection(origin: Vec3, direction: Vec3,
                         box_min: Vec3, box_max: Vec3) -> float | None:
    """Slab test.  Returns the hit distance along *direction*, or None.

    When the origin is inside the box the exit distance is returned.
    """
    t_near = -math.inf
    t_far = math.inf
    for axis in range(3):
        o = origin[axis]
        d = direction[axis]
        lo = box_min[axis]
        hi = box_max[axis]
        if abs(d) < _PARALLEL_EPS:
            if o < lo or o > hi:
                return None
            continue
        t1 = (lo - o) / d
        t2 = (hi - o) / d
        if t1 > t2:
            t1, t2 = t2, t1
        t_near = max(t_near, t1)
        t_far = min(t_far, t2)
        if t_near > t_far:
            return None
    if t_far < 0.0:
        return None
    return t_near if t_near > 0.0 else t_far


def seat_bounds(position: Vec3, size: float) -> tuple[Vec3, Vec3]:
    half = size / 2.0
    return (Vec3(position.x - half, position.y, position.z - half),
            Vec3(position.x + half, position.y + size, position.z + half))


def pick_seat(seats: list[Seat], origin: Vec3, direction: Vec3,
              seat_size: float) -> int | None:
    """Index of the nearest seat hit by the ray, or None."""
    best: int | None = None
    best_t = math.inf
    for i, seat in enumerate(seats):
        lo, hi = seat_bounds(seat.position, seat_size)
        t = ray_box_intersection(origin, direction, lo, hi)
        if t is not None and 0.0 < t < best_t:
            best_t = t
            best = i
    return best


def ray_from_angles(yaw_deg: float, pitch_deg: float) -> Vec3:
    """Unit view direction for a yaw/pitch camera (yaw -90° looks down -z)."""
    pitch_deg = max(-_PITCH_LIMIT, min(_PITCH_LIMIT, pitch_deg))
    yaw = math.radians(yaw_deg)
    pitch = math.radians(pitch_deg)
    return Vec3(math.cos(yaw) * math.cos(pitch),
                math.sin(pitch),
                math.sin(yaw) * math.cos(pitch)).normalized()
