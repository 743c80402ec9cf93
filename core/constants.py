"""core/constants.py — Shared constants used across the codebase.

Centralises the default venue numbers so there's exactly one place to
change them.  Every value here can be overridden from ``data/venue.toml``
(see ``core.tuning``); these are the fallbacks used when the file or a
key is missing.

Unit System
-----------
    Distance / position     m       (metres)
    Speed                   m/s     (metres per second)
    Time                    s       (simulation seconds)
    Angles                  rad     (radians, unless a name says _deg)

Axes
~~~~
``x`` runs across the hall, ``y`` is height above the floor and ``z``
runs from the screen wall (negative) toward the back wall (positive).
Row 0 is the row farthest from the screen and sits on the highest step;
row ``ROWS - 1`` is the row nearest the screen and the door.

Rendering converts to pixels via ``PIXELS_PER_METRE``.
No simulation code should reference pixels — only the viewer.
"""

# ── Seat grid ───────────────────────────────────────────────────────
ROWS = 5
COLS = 10
AISLE_POSITION = COLS // 2   # first column right of the aisle

# ── Hall geometry (m) ───────────────────────────────────────────────
ROOM_WIDTH = 24.0
ROOM_DEPTH = 18.0

SEAT_SIZE = 0.7
SEAT_SPACING_X = 1.3
SEAT_SPACING_Z = 1.6
ROW_HEIGHT_STEP = 0.5
STEP_BASE_Y = 0.2
AISLE_WIDTH = 1.5

# Distance from the back wall to row 0.
BACK_ROW_INSET = 5.0

# Door sits on the screen wall, left corner.
DOOR_OFFSET_X = 1.5
DOOR_OFFSET_Z = 0.5

# ── Timing (s) ──────────────────────────────────────────────────────
TARGET_FPS = 75.0
FRAME_TIME = 1.0 / TARGET_FPS
MOVIE_DURATION = 20.0
FRAME_SWITCH_TIME = 0.5
MOVIE_FRAME_COUNT = 25
DOOR_SPEED = 1.5             # door amount per second

# ── Crowd ───────────────────────────────────────────────────────────
WALK_SPEED = 2.5             # m/s, arriving
LEAVE_SPEED = 4.5            # m/s, leaving
WAYPOINT_TOLERANCE = 0.2     # m
SEAT_TOLERANCE = 0.5         # m, final checkpoint
SEPARATION_RADIUS = 0.6      # m
SEPARATION_STRENGTH = 3.0
WALK_CYCLE_RATE = 8.0        # animation phase per second
NUM_VARIANTS = 15            # viewer appearance variants

# ── Render ──────────────────────────────────────────────────────────
PIXELS_PER_METRE = 30

STATUS_COLORS = {
    "FREE": (70, 160, 80),
    "RESERVED": (220, 190, 60),
    "BOUGHT": (200, 70, 70),
}
