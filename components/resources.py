"""components.resources — Venue-level singletons (not per-person)."""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum, auto


class ShowState(Enum):
    WAITING = auto()
    ENTERING = auto()
    MOVIE = auto()
    LEAVING = auto()


@dataclass
class ShowTimers:
    """Clock references for the running show.

    All times are simulation seconds (``VenueSim.time``).
    ``movie_start_time`` is ``None`` until the first MOVIE transition.
    """
    state_start_time: float = 0.0
    movie_start_time: float | None = None
    frame_timer: float = 0.0
    movie_frame: int = 0


@dataclass
class Door:
    """Sliding entry door.  ``open_amount`` is 0 (shut) .. 1 (open)."""
    open_amount: float = 0.0
    speed: float = 1.5     # amount per second
