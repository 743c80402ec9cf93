"""core/events.py — Venue event bus.

The simulation *signals* what happened (a seat sold, a viewer sat down,
the show moved on); the viewer HUD and the tests *react*.  Each
``VenueSim`` owns one bus::

    sim.bus.subscribe("PersonSeated", on_seated)
    sim.bus.emit(PersonSeated(seat_index=12, t=sim.time))

Nothing is delivered on ``emit()``.  Events are delivered at exactly two
drain points:

  - the end of every tick (``logic.tick.tick_venue``), which carries the
    transition and arrival events of that tick;
  - right after a viewer command (``VenueScene.handle_event``), so a
    rejected click or a sold block shows up on the HUD before the next
    tick runs.

Events are plain dataclasses; handlers are keyed by class name.
"""

from __future__ import annotations
import traceback
from collections import defaultdict
from dataclasses import dataclass, field
from typing import Any, Callable


# ═══════════════════════════════════════════════════════════════════
#  Event definitions
# ═══════════════════════════════════════════════════════════════════

@dataclass
class ShowStateChanged:
    """The venue lifecycle moved to a new state."""
    old: str = ""
    new: str = ""
    t: float = 0.0


@dataclass
class SeatStatusChanged:
    """A single seat was reserved or released."""
    seat_index: int = -1
    status: str = ""


@dataclass
class SeatsBought:
    """A block of adjacent seats was sold."""
    seat_indices: list[int] = field(default_factory=list)


@dataclass
class CommandRejected:
    """A command was ignored; nothing was mutated."""
    command: str = ""
    reason: str = ""


@dataclass
class PersonSeated:
    seat_index: int = -1
    t: float = 0.0


@dataclass
class PersonExited:
    seat_index: int = -1
    t: float = 0.0


# ═══════════════════════════════════════════════════════════════════
#  Event Bus
# ═══════════════════════════════════════════════════════════════════

# Rounds of handler-emitted follow-ups one drain will chase.
_MAX_ROUNDS = 100


class EventBus:
    """Queue of venue events, delivered in FIFO order on ``drain()``."""

    def __init__(self):
        self._pending: list[Any] = []
        self._handlers: dict[str, list[Callable]] = defaultdict(list)
        self._delivered: dict[str, int] = defaultdict(int)

    def emit(self, event) -> None:
        self._pending.append(event)

    def subscribe(self, event_type: str, handler: Callable) -> None:
        """Call *handler(event)* for every drained event of *event_type*.

        *event_type* is the event class name, e.g. ``"CommandRejected"``.
        """
        self._handlers[event_type].append(handler)

    def drain(self) -> int:
        """Deliver everything queued so far.  Returns the event count.

        A handler that emits (say, a HUD reacting to ``SeatsBought``) has
        its events delivered in the same drain, after the current batch.
        A failing handler is reported and does not stop the others.
        """
        delivered = 0
        for _ in range(_MAX_ROUNDS):
            if not self._pending:
                break
            batch, self._pending = self._pending, []
            for event in batch:
                name = type(event).__name__
                self._delivered[name] += 1
                for handler in self._handlers.get(name, ()):
                    try:
                        handler(event)
                    except Exception as exc:
                        print(f"[EVENT] {name} handler failed: {exc}")
                        traceback.print_exc()
            delivered += len(batch)
        return delivered

    def stats(self) -> dict[str, int]:
        """Delivered event counts by class name."""
        return dict(self._delivered)

    def __repr__(self) -> str:
        return f"EventBus(pending={len(self._pending)}, types={len(self._handlers)})"
