"""test_crowd.py — Route planning and per-tick crowd movement.

Tests:
1. Entry routes and staggered delays
2. Exit routes: row order, aisle-first, seated-only
3. A single viewer walks the whole entry route (small and large ticks)
4. Separation push values
5. Crowd step is independent of list order
6. Entry delay gating and leaving speed

Run:  python test_crowd.py
"""
from __future__ import annotations
import sys, copy, math, random, traceback

from components import Person, PersonState, Vec3
from core.layout import VenueLayout
from logic.crowd import CrowdIntegrator, separation_push
from logic.seat_map import SeatMap
from logic.waypoints import ENTRY_LEGS, EXIT_LEGS, WaypointPlanner


# ── Test harness ─────────────────────────────────────────────────────

_passed = 0
_failed = 0

def ok(label: str):
    global _passed
    _passed += 1
    print(f"  [PASS] {label}")

def fail(label: str, detail: str = ""):
    global _failed
    _failed += 1
    msg = f"  [FAIL] {label}"
    if detail:
        msg += f" — {detail}"
    print(msg)

def check(cond: bool, label: str, detail: str = ""):
    if cond:
        ok(label)
    else:
        fail(label, detail)
    assert cond, f"{label}: {detail}"


LAYOUT = VenueLayout()
DT = 1.0 / 75.0


def _planar(a: Vec3, b: Vec3) -> float:
    return math.hypot(a.x - b.x, a.z - b.z)


def _walk_to_seat(seat_index: int, dt: float, max_ticks: int = 20000):
    """Plan one entry and run the crowd until the viewer sits down.

    Returns (person, seat_map, index_steps, ticks).
    """
    seat_map = SeatMap(LAYOUT)
    planner = WaypointPlanner(LAYOUT, random.Random(3))
    crowd = CrowdIntegrator(LAYOUT)
    p = Person(seat_index=seat_index)
    seat_map[seat_index].has_occupant = True
    planner.plan_entry([p], seat_map)

    steps = []
    t = 0.0
    ticks = 0
    while p.state is not PersonState.SEATED and ticks < max_ticks:
        before = p.waypoint_index
        t += dt
        crowd.step([p], seat_map.seats, t, dt)
        ticks += 1
        if p.waypoint_index != before:
            steps.append(p.waypoint_index - before)
    return p, seat_map, steps, ticks


# ═══════════════════════════════════════════════════════════════════════
#  SECTION 1:  ENTRY PLANNING
# ═══════════════════════════════════════════════════════════════════════

def test_entry_planning():
    print("\n=== 1: Entry routes and delays ===")
    seat_map = SeatMap(LAYOUT)
    planner = WaypointPlanner(LAYOUT, random.Random(11))
    people = [Person(seat_index=i) for i in (3, 17, 28, 41, 49, 0, 22)]
    planner.plan_entry(people, seat_map)

    delays = [p.entry_delay for p in people]
    check(delays[0] == 0.0, "First viewer leaves the door at once", f"{delays[0]}")
    gaps = [b - a for a, b in zip(delays, delays[1:])]
    check(all(0.4 - 1e-9 <= g <= 0.69 + 1e-9 for g in gaps),
          "Each next viewer 0.40-0.69 s later", f"{gaps}")

    p = people[1]
    seat = seat_map[p.seat_index]
    check(len(p.waypoints) == 6, "Entry route has six checkpoints", f"{len(p.waypoints)}")
    check(p.waypoints[0] == LAYOUT.door_point() and p.position == LAYOUT.door_point(),
          "Starts at the door")
    check(p.waypoints[1] == LAYOUT.aisle_front(), "Then the front of the aisle")
    check(p.waypoints[2] == LAYOUT.aisle_position_at(seat.row), "Then up the aisle")
    last = p.waypoints[-1]
    check(abs(last.x - seat.position.x) < 1e-9 and abs(last.z - seat.position.z) < 1e-9
          and abs(last.y - (seat.position.y + 0.6)) < 1e-9,
          "Ends just above the seat")
    check(p.leg_states == ENTRY_LEGS and p.state is PersonState.WALKING_TO_AISLE,
          "Entry leg states installed")
    check(all(not q.active and q.waypoint_index == 0 for q in people),
          "Everyone parked at checkpoint 0")


# ═══════════════════════════════════════════════════════════════════════
#  SECTION 2:  EXIT PLANNING
# ═══════════════════════════════════════════════════════════════════════

def test_exit_planning():
    print("\n=== 2: Exit routes and order ===")
    seat_map = SeatMap(LAYOUT)
    planner = WaypointPlanner(LAYOUT, random.Random(2))
    idx = LAYOUT.seat_index
    far = Person(seat_index=idx(4, 0))      # front row, far from the aisle
    near = Person(seat_index=idx(4, 5))     # front row, next to the aisle
    mid = Person(seat_index=idx(2, 7))
    back = Person(seat_index=idx(0, 1))
    straggler = Person(seat_index=idx(1, 1))
    people = [far, near, mid, back, straggler]
    for p in people[:4]:
        p.state = PersonState.SEATED
        p.position = seat_map[p.seat_index].position
    straggler.state = PersonState.WALKING_TO_SEAT

    planner.plan_exit(people, seat_map)

    check(near.entry_delay == 0.0, "Aisle seat of the door-side row leaves first",
          f"{near.entry_delay}")
    check(0.15 - 1e-9 <= far.entry_delay <= 0.24 + 1e-9,
          "Farther seat in the same row staggered 0.15-0.24 s", f"{far.entry_delay}")
    check(abs(mid.entry_delay - 1.0) < 1e-9, "Row 2 waits 1.0 s", f"{mid.entry_delay}")
    check(abs(back.entry_delay - 2.0) < 1e-9, "Row 0 waits 2.0 s", f"{back.entry_delay}")

    check(near.leg_states == EXIT_LEGS and near.state is PersonState.WALKING_FROM_SEAT,
          "Exit leg states installed")
    check(near.state.leaving and not near.active, "Exit route parks the viewer")
    check(len(back.waypoints) == 5 and back.waypoints[-1] == LAYOUT.door_point(),
          "Exit route ends at the door")
    check(back.waypoints[2] == LAYOUT.aisle_position_at(0), "Exit passes the row's aisle point")
    check(straggler.state is PersonState.WALKING_TO_SEAT and not straggler.waypoints,
          "Non-seated viewer gets no exit route")


# ═══════════════════════════════════════════════════════════════════════
#  SECTION 3:  SINGLE VIEWER
# ═══════════════════════════════════════════════════════════════════════

def test_single_viewer_entry():
    print("\n=== 3: One viewer walks in ===")
    # 0.05 s moves 0.125 m per tick, inside the 0.2 m checkpoint band.
    for dt, name in ((DT, "1/75 s"), (0.05, "0.05 s")):
        idx = LAYOUT.seat_index(1, 7)
        p, seat_map, steps, ticks = _walk_to_seat(idx, dt)
        seat = seat_map[idx]
        check(p.state is PersonState.SEATED, f"[{name}] Seated", f"after {ticks} ticks")
        check(steps == [1] * 5, f"[{name}] Checkpoints consumed one at a time", f"{steps}")
        check(p.position == seat.position, f"[{name}] Snapped onto the seat")
        check(abs(p.facing_angle - math.pi) < 1e-9, f"[{name}] Facing the screen")
        check(p.walk_cycle == 0.0, f"[{name}] Walk cycle reset")


def test_stays_on_floor():
    print("\n=== 3b: Walking height follows the steps ===")
    seat_map = SeatMap(LAYOUT)
    planner = WaypointPlanner(LAYOUT, random.Random(1))
    crowd = CrowdIntegrator(LAYOUT)
    p = Person(seat_index=LAYOUT.seat_index(0, 2))
    planner.plan_entry([p], seat_map)
    bad = 0
    t = 0.0
    for _ in range(5000):
        t += DT
        before = p.position
        crowd.step([p], seat_map.seats, t, DT)
        if p.state is PersonState.SEATED:
            break
        moved = p.position != before
        if moved and not p.on_last_waypoint:
            if abs(p.position.y - LAYOUT.step_height_at(p.position.z)) > 1e-9:
                bad += 1
    check(p.state is PersonState.SEATED, "Reached the back row")
    check(bad == 0, "Height snapped to the step under the viewer", f"{bad} ticks off")


# ═══════════════════════════════════════════════════════════════════════
#  SECTION 4:  SEPARATION
# ═══════════════════════════════════════════════════════════════════════

def test_separation_push():
    print("\n=== 4: Separation push ===")
    px, pz = separation_push(0.0, 0.0, [(0.3, 0.0)], 0.6, 3.0)
    check(abs(px + 0.9) < 1e-9 and abs(pz) < 1e-9, "0.3 m → push 0.9 away", f"{px},{pz}")
    px, pz = separation_push(0.0, 0.0, [(0.0, 0.6)], 0.6, 3.0)
    check(px == 0.0 and pz == 0.0, "No push at the radius")
    px, pz = separation_push(0.0, 0.0, [(0.005, 0.0)], 0.6, 3.0)
    check(px == 0.0 and pz == 0.0, "No push when standing on top of each other")
    px, pz = separation_push(0.0, 0.0, [(0.3, 0.0), (-0.3, 0.0)], 0.6, 3.0)
    check(abs(px) < 1e-9, "Opposite pushes cancel", f"{px}")


# ═══════════════════════════════════════════════════════════════════════
#  SECTION 5:  ORDER INDEPENDENCE
# ═══════════════════════════════════════════════════════════════════════

def _walker(seat_index: int, x: float, z: float) -> Person:
    p = Person(seat_index=seat_index, position=Vec3(x, 0.4, z))
    p.set_route([Vec3(0.0, 0.4, -3.4), LAYOUT.door_point()])
    p.state = PersonState.WALKING_TO_AISLE
    p.active = True
    return p


def test_order_independence():
    print("\n=== 5: Order independence ===")
    crowd = CrowdIntegrator(LAYOUT)
    seats = SeatMap(LAYOUT).seats
    group = [_walker(0, -5.0, -7.0), _walker(1, -4.8, -7.1),
             _walker(2, -4.9, -6.8), _walker(3, -4.6, -6.9)]
    forward = copy.deepcopy(group)
    backward = list(reversed(copy.deepcopy(group)))

    for _ in range(20):
        crowd.step(forward, seats, 1.0, DT)
        crowd.step(backward, seats, 1.0, DT)

    by_seat = {p.seat_index: p.position for p in backward}
    worst = max(_planar(p.position, by_seat[p.seat_index]) for p in forward)
    check(worst < 1e-9, "Same positions whatever the list order", f"max diff {worst}")

    alone = copy.deepcopy(group[0])
    crowd.step([alone], seats, 1.0, DT)
    crowded = copy.deepcopy(group)
    crowd.step(crowded, seats, 1.0, DT)
    check(_planar(alone.position, crowded[0].position) > 1e-6,
          "Neighbours within the radius change the step")


# ═══════════════════════════════════════════════════════════════════════
#  SECTION 6:  DELAYS AND SPEED
# ═══════════════════════════════════════════════════════════════════════

def test_delay_gating():
    print("\n=== 6: Delay gating ===")
    crowd = CrowdIntegrator(LAYOUT)
    seats = SeatMap(LAYOUT).seats
    p = _walker(0, -5.0, -7.0)
    p.active = False
    p.entry_delay = 1.0
    start = p.position

    report = crowd.step([p], seats, 0.5, DT)
    check(not p.active and p.position == start, "Waits before its delay")
    check(report.waiting == 1 and report.walking == 0, "Counted as waiting")
    check(not report.all_seated and not report.all_exited, "Not done while waiting")

    report = crowd.step([p], seats, 1.0, DT)
    check(p.active and p.position != start, "Starts walking once the delay is up")
    check(report.walking == 1, "Counted as walking")


def test_speeds():
    print("\n=== 6b: Walking and leaving speed ===")
    crowd = CrowdIntegrator(LAYOUT)
    seats = SeatMap(LAYOUT).seats

    p = _walker(0, -5.0, -7.0)
    p.set_route([Vec3(5.0, 0.4, -7.0), LAYOUT.door_point()])
    p.state = PersonState.WALKING_TO_AISLE
    p.active = True
    before = p.position
    crowd.step([p], seats, 1.0, DT)
    check(abs(_planar(before, p.position) - 2.5 * DT) < 1e-9, "Enters at 2.5 m/s",
          f"{_planar(before, p.position)}")

    q = _walker(1, -5.0, -7.0)
    q.set_route([Vec3(5.0, 0.4, -7.0), LAYOUT.door_point()])
    q.state = PersonState.WALKING_OUT_AISLE
    q.active = True
    before = q.position
    crowd.step([q], seats, 1.0, DT, leaving=True)
    check(abs(_planar(before, q.position) - 4.5 * DT) < 1e-9, "Leaves at 4.5 m/s",
          f"{_planar(before, q.position)}")
    check(abs(q.facing_angle - math.atan2(1.0, 0.0)) < 1e-9, "Faces the direction of travel")

    # A long tick moves the whole speed * dt even past a near checkpoint.
    r = _walker(2, 0.0, -7.0)
    r.set_route([Vec3(0.5, 0.4, -7.0), LAYOUT.door_point()])
    r.state = PersonState.WALKING_TO_AISLE
    r.active = True
    crowd.step([r], seats, 1.0, 0.5)
    check(abs(r.position.x - 1.25) < 1e-9 and abs(r.position.z + 7.0) < 1e-9,
          "Step length is speed * dt, not capped at the checkpoint", f"{r.position}")


def test_exit_arrival():
    print("\n=== 6c: Reaching the door ===")
    crowd = CrowdIntegrator(LAYOUT)
    seat_map = SeatMap(LAYOUT)
    seat_map[4].has_occupant = True
    door = LAYOUT.door_point()
    p = Person(seat_index=4, position=Vec3(door.x + 0.1, door.y, door.z))
    p.set_route([door])
    p.state = PersonState.EXITING
    p.active = True

    report = crowd.step([p], seat_map.seats, 1.0, DT, leaving=True)
    check(p.state is PersonState.EXITED and not p.active, "Exited at the door")
    check(not seat_map[4].has_occupant, "Seat released")
    check(report.exited_now == [0], "Reported as exited this tick")
    report = crowd.step([p], seat_map.seats, 1.0, DT, leaving=True)
    check(report.all_exited and report.walking == 0, "Exited viewers are ignored")


# ═══════════════════════════════════════════════════════════════════════
#  MAIN
# ═══════════════════════════════════════════════════════════════════════

if __name__ == "__main__":
    sections = [
        ("Entry Planning", test_entry_planning),
        ("Exit Planning", test_exit_planning),
        ("Single Viewer", test_single_viewer_entry),
        ("Floor Height", test_stays_on_floor),
        ("Separation", test_separation_push),
        ("Order Independence", test_order_independence),
        ("Delay Gating", test_delay_gating),
        ("Speeds", test_speeds),
        ("Exit Arrival", test_exit_arrival),
    ]

    for name, fn in sections:
        try:
            fn()
        except AssertionError:
            pass
        except Exception:
            _failed += 1
            print(f"\n  [CRASH] {name} — unhandled exception:")
            traceback.print_exc()

    total = _passed + _failed
    print(f"\n{'=' * 60}")
    print(f"  Crowd Tests: {_passed} passed, {_failed} failed  (total {total})")
    print(f"{'=' * 60}")
    sys.exit(1 if _failed else 0)
