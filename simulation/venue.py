"""simulation/venue.py — The venue simulation context.

``VenueSim`` owns everything the running hall needs — seat map, crowd,
show state machine, clock, random source, event bus and dev log — and
is the single boundary the viewer talks to:

    sim = VenueSim(seed=3)
    sim.reserve(12)
    sim.buy_adjacent(4)
    result = sim.start_show()
    if not result.ok:
        print(result.reason)
    for _ in range(clock.advance(frame_dt)):
        sim.tick(clock.step)

Commands never raise for a bad request; they return a ``CommandResult``
and report the rejection on the bus and in the dev log.  Queries are
read-only and meant to be polled once per rendered frame.
"""

from __future__ import annotations
import random
from dataclasses import dataclass, field

from components import (
    DevLog, Person, PersonState, Seat, SeatStatus, ShowState, Vec3,
)
from core.events import (
    EventBus, CommandRejected, PersonExited, PersonSeated, SeatsBought,
    SeatStatusChanged, ShowStateChanged,
)
from core.layout import VenueLayout
from core.tuning import get as _tun
from core import constants as C
from logic.crowd import CrowdIntegrator, CrowdReport
from logic.picking import pick_seat
from logic.seat_map import SeatMap
from logic.show import (
    ShowStateMachine, Transition, choose_attendees, start_check,
)
from logic.tick import tick_venue
from logic.waypoints import WaypointPlanner


@dataclass
class CommandResult:
    ok: bool
    reason: str = ""
    seats: list[int] = field(default_factory=list)


@dataclass(frozen=True)
class PersonView:
    """What the viewer needs to draw one person."""
    position: Vec3
    facing_angle: float
    walk_cycle: float
    variant: int
    state: PersonState


class VenueSim:
    def __init__(self, layout: VenueLayout | None = None, *,
                 seed: int | None = None, rng: random.Random | None = None,
                 verbose: bool = False):
        self.layout = layout or VenueLayout.from_tuning()
        self.rng = rng or random.Random(seed)
        self.verbose = verbose

        self.seat_map = SeatMap(self.layout)
        self.people: list[Person] = []
        self.show = ShowStateMachine()
        self.planner = WaypointPlanner(self.layout, self.rng)
        self.crowd = CrowdIntegrator(self.layout)

        self.bus = EventBus()
        self.log = DevLog()

        self.time = 0.0
        self.ticks = 0
        self.last_report = CrowdReport()
        self.num_variants = int(_tun("crowd", "num_variants", C.NUM_VARIANTS))
        self.status_interval = int(_tun("crowd", "status_interval", 60))

    # ── Reporting ───────────────────────────────────────────────────

    def say(self, tag: str, msg: str) -> None:
        if self.verbose:
            print(f"[{tag}] {msg}")

    def _reject(self, command: str, reason: str) -> CommandResult:
        self.say("VENUE", f"{command} rejected: {reason}")
        self.log.record(-1, "rejected", f"{command}: {reason}", t=self.time)
        self.bus.emit(CommandRejected(command=command, reason=reason))
        return CommandResult(ok=False, reason=reason)

    # ── Commands ────────────────────────────────────────────────────

    def reserve(self, index: int) -> CommandResult:
        """Toggle the reservation on one seat (WAITING only)."""
        if self.show.state is not ShowState.WAITING:
            return self._reject("reserve", "seats are locked during a show")
        if not self.seat_map.valid(index):
            return self._reject("reserve", f"no seat {index}")
        seat = self.seat_map[index]
        if seat.status is SeatStatus.BOUGHT:
            return self._reject("reserve", f"seat {self.seat_map.label(index)} is bought")

        status = self.seat_map.reserve(index)
        verb = "reserved" if status is SeatStatus.RESERVED else "unreserved"
        self.say("SEATS", f"Seat {self.seat_map.label(index)} {verb}.")
        self.log.record(index, "seats", verb, t=self.time,
                        details={"row": seat.row, "col": seat.col})
        self.bus.emit(SeatStatusChanged(seat_index=index, status=status.name))
        return CommandResult(ok=True, seats=[index])

    def buy_adjacent(self, n: int) -> CommandResult:
        """Buy *n* adjacent free seats in one row (WAITING only)."""
        if self.show.state is not ShowState.WAITING:
            return self._reject("buy", "tickets are not sold during a show")
        block = self.seat_map.find_contiguous_free(n)
        if not block:
            return self._reject("buy", f"cannot find {n} adjacent free seats")
        self.seat_map.buy(block)
        self.say("SEATS", f"Bought {n} ticket(s): "
                 + " ".join(self.seat_map.label(i) for i in block))
        self.log.record(block[0], "seats", f"bought {n}", t=self.time,
                        details={"seats": list(block)})
        self.bus.emit(SeatsBought(seat_indices=list(block)))
        return CommandResult(ok=True, seats=block)

    def start_show(self) -> CommandResult:
        """WAITING → ENTERING: seat a random subset of ticket holders."""
        occupied = self.seat_map.occupied_indices()
        reason = start_check(self.show.state, len(occupied))
        if reason:
            return self._reject("start", reason)

        attendees = choose_attendees(occupied, self.rng)
        self.people = []
        for idx in attendees:
            variant = self.rng.randrange(self.num_variants) if self.num_variants > 0 else 0
            self.people.append(Person(seat_index=idx, variant=variant))
            self.seat_map[idx].has_occupant = True

        self.planner.plan_entry(self.people, self.seat_map)
        self._enter(ShowState.ENTERING, "start command")
        self.say("VENUE", f"Movie starting! {len(self.people)} of "
                 f"{len(occupied)} viewers entering.")
        return CommandResult(ok=True, seats=list(attendees))

    def pick_seat(self, origin: Vec3, direction: Vec3) -> int | None:
        """Seat index under a pointing ray (WAITING only), or None."""
        if self.show.state is not ShowState.WAITING:
            return None
        return pick_seat(self.seat_map.seats, origin, direction, self.layout.seat_size)

    # ── Tick ────────────────────────────────────────────────────────

    def tick(self, dt: float) -> None:
        tick_venue(self, dt)

    def on_arrivals(self, report: CrowdReport) -> None:
        for i in report.seated_now:
            idx = self.people[i].seat_index
            self.say("CROWD", f"Viewer seated at {self.seat_map.label(idx)}")
            self.log.record(idx, "crowd", "seated", t=self.time)
            self.bus.emit(PersonSeated(seat_index=idx, t=self.time))
        for i in report.exited_now:
            idx = self.people[i].seat_index
            self.log.record(idx, "crowd", "exited", t=self.time)
            self.bus.emit(PersonExited(seat_index=idx, t=self.time))

    def apply_transition(self, tr: Transition) -> None:
        """Carry out a lifecycle transition and its side effects."""
        if tr.build_exit_routes:
            self.planner.plan_exit(self.people, self.seat_map)
        if tr.clear_people:
            self.people = []
        if tr.reset_seats:
            self.seat_map.reset_all()
        self._enter(tr.target, tr.reason)

    def _enter(self, target: ShowState, reason: str) -> None:
        old = self.show.enter(target, self.time)
        self.say("VENUE", f"{old.name} → {target.name} ({reason})")
        self.log.record(-1, "show", f"{old.name} → {target.name}", t=self.time,
                        details={"reason": reason, "people": len(self.people)})
        self.bus.emit(ShowStateChanged(old=old.name, new=target.name, t=self.time))

    # ── Queries ─────────────────────────────────────────────────────

    @property
    def state(self) -> ShowState:
        return self.show.state

    @property
    def door_open_amount(self) -> float:
        return self.show.door.open_amount

    @property
    def lights_on(self) -> bool:
        return self.show.lights_on

    @property
    def movie_frame(self) -> int:
        return self.show.timers.movie_frame

    @property
    def seats(self) -> list[Seat]:
        return self.seat_map.seats

    def visible_people(self) -> list[PersonView]:
        """People inside the hall, for drawing.

        Viewers still waiting outside the door are hidden; viewers
        waiting in their seat for their turn to leave are not.
        """
        return [
            PersonView(p.position, p.facing_angle, p.walk_cycle, p.variant, p.state)
            for p in self.people
            if p.state is not PersonState.EXITED and (p.active or p.state.leaving)
        ]

    def status_line(self) -> str:
        r = self.last_report
        return (f"Status: Seated={r.seated} Walking={r.walking} "
                f"Waiting={r.waiting} Total={len(self.people)}")

    def log_lines(self, n: int = 4) -> list[str]:
        """The newest *n* dev-log entries as ``[t] cat: msg`` lines, oldest first."""
        return [f"[{e['t']:6.2f}] {e['cat']}: {e['msg']}" for e in self.log.recent(n)]
