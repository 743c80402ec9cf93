"""components — Venue data records, organised by domain.

Submodules
----------
spatial        Vec3
seating        Seat, SeatStatus
crowd          Person, PersonState
resources      ShowState, ShowTimers, Door
dev_log        DevLog

All public names are re-exported here so code can do
``from components import Seat``.
"""

# ── Spatial ──────────────────────────────────────────────────────────
from components.spatial import Vec3

# ── Seating ──────────────────────────────────────────────────────────
from components.seating import Seat, SeatStatus

# ── Crowd ────────────────────────────────────────────────────────────
from components.crowd import Person, PersonState

# ── Venue resources / singletons ─────────────────────────────────────
from components.resources import ShowState, ShowTimers, Door

# ── Observability ────────────────────────────────────────────────────
from components.dev_log import DevLog

__all__ = [
    # spatial
    "Vec3",
    # seating
    "Seat", "SeatStatus",
    # crowd
    "Person", "PersonState",
    # resources
    "ShowState", "ShowTimers", "Door",
    # observability
    "DevLog",
]
