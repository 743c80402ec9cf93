"""logic/show.py — Venue lifecycle state machine.

    WAITING ──start──▶ ENTERING ──all seated──▶ MOVIE
       ▲                                          │
       └──── all exited ◀── LEAVING ◀── film over ┘

``next_transition()`` is the only place that decides a state change.
It returns a ``Transition`` describing the new state and the side
effects the caller must carry out (plan exits, clear the crowd, free
the seats); it never mutates anything itself.  ``ShowStateMachine``
keeps the timers, the door and the projector frame, and applies
transitions.

Starting a show is a command, not a tick-driven transition: see
``start_check()`` and ``choose_attendees()``.
"""

from __future__ import annotations
import random
from dataclasses import dataclass

from components import Door, ShowState, ShowTimers
from core import constants as C
from core.tuning import get as _tun
from logic.crowd import CrowdReport

# Door target per state: open while people pass through.
_DOOR_TARGET = {
    ShowState.WAITING: 0.0,
    ShowState.ENTERING: 1.0,
    ShowState.MOVIE: 0.0,
    ShowState.LEAVING: 1.0,
}


@dataclass
class Transition:
    target: ShowState
    reason: str = ""
    build_exit_routes: bool = False
    clear_people: bool = False
    reset_seats: bool = False


def lights_for(state: ShowState) -> bool:
    """Room lights are on in every state except during the film."""
    return state is not ShowState.MOVIE


def start_check(state: ShowState, occupied: int) -> str:
    """Return why a show cannot start now, or ``""`` if it can."""
    if state is not ShowState.WAITING:
        return f"show already running ({state.name})"
    if occupied <= 0:
        return "no reserved seats"
    return ""


def choose_attendees(occupied: list[int], rng: random.Random) -> list[int]:
    """Pick which reserved/bought seats actually get a viewer.

    Between 1 and ``len(occupied)`` seats, chosen without repetition,
    in shuffled order (the order viewers will walk in).
    """
    count = 1 + rng.randrange(len(occupied))
    pool = list(occupied)
    rng.shuffle(pool)
    return pool[:count]


def next_transition(state: ShowState, report: CrowdReport, people_count: int,
                    now: float, timers: ShowTimers,
                    movie_duration: float) -> Transition | None:
    """Decide the automatic transition for this tick, if any."""
    if state is ShowState.ENTERING:
        if report.all_seated and people_count > 0:
            return Transition(ShowState.MOVIE, reason="all seated")
    elif state is ShowState.MOVIE:
        if timers.movie_start_time is not None and \
                now - timers.movie_start_time >= movie_duration:
            return Transition(ShowState.LEAVING, reason="movie ended",
                              build_exit_routes=True)
    elif state is ShowState.LEAVING:
        if report.all_exited:
            return Transition(ShowState.WAITING, reason="all exited",
                              clear_people=True, reset_seats=True)
    return None


class ShowStateMachine:
    def __init__(self):
        self.state = ShowState.WAITING
        self.timers = ShowTimers()
        self.door = Door(speed=float(_tun("show", "door_speed", C.DOOR_SPEED)))
        self.lights_on = True
        self.movie_duration = float(_tun("show", "movie_duration", C.MOVIE_DURATION))
        self.frame_switch_time = float(_tun("show", "frame_switch_time", C.FRAME_SWITCH_TIME))
        self.movie_frame_count = int(_tun("show", "movie_frame_count", C.MOVIE_FRAME_COUNT))

    def phase_time(self, now: float) -> float:
        return now - self.timers.state_start_time

    # -- Transitions --

    def enter(self, target: ShowState, now: float) -> ShowState:
        """Switch to *target*, stamping the timers it needs.

        Returns the previous state.
        """
        old = self.state
        self.state = target
        self.lights_on = lights_for(target)
        if target in (ShowState.ENTERING, ShowState.LEAVING):
            self.timers.state_start_time = now
        elif target is ShowState.MOVIE:
            self.timers.movie_start_time = now
            self.timers.frame_timer = 0.0
            self.timers.movie_frame = 0
        return old

    def evaluate(self, report: CrowdReport, people_count: int,
                 now: float) -> Transition | None:
        return next_transition(self.state, report, people_count, now,
                               self.timers, self.movie_duration)

    # -- Continuous state --

    def update_door(self, dt: float) -> float:
        """Ease the door toward this state's target, clamped to [0, 1]."""
        target = _DOOR_TARGET[self.state]
        amount = self.door.open_amount
        step = max(0.0, dt) * self.door.speed
        if amount < target:
            amount = min(target, amount + step)
        elif amount > target:
            amount = max(target, amount - step)
        self.door.open_amount = min(1.0, max(0.0, amount))
        return self.door.open_amount

    def update_projector(self, dt: float) -> int:
        """Advance the projected frame while the film runs."""
        if self.state is not ShowState.MOVIE:
            return self.timers.movie_frame
        self.timers.frame_timer += dt
        if self.timers.frame_timer >= self.frame_switch_time:
            self.timers.frame_timer = 0.0
            self.timers.movie_frame = (self.timers.movie_frame + 1) % max(1, self.movie_frame_count)
        return self.timers.movie_frame
