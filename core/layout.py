"""core/layout.py — Hall geometry.

``VenueLayout`` turns grid coordinates into positions in the hall: seat
centres, the aisle line, row depths and the stepped floor.  It is a
frozen snapshot so the simulation never sees geometry change mid-show.

    layout = VenueLayout.from_tuning()
    layout.seat_position(2, 7)       # Vec3 of row 2, column 7
    layout.aisle_position(2)         # aisle point level with row 2

This lives in ``core/`` because the seat map, the route planner, the
crowd integrator and the viewer all need it.
"""

from __future__ import annotations
from dataclasses import dataclass

from components.spatial import Vec3
from core import constants as C
from core.tuning import get as _tun


@dataclass(frozen=True)
class VenueLayout:
    rows: int = C.ROWS
    cols: int = C.COLS
    aisle_position: int = C.AISLE_POSITION
    room_width: float = C.ROOM_WIDTH
    room_depth: float = C.ROOM_DEPTH
    seat_size: float = C.SEAT_SIZE
    seat_spacing_x: float = C.SEAT_SPACING_X
    seat_spacing_z: float = C.SEAT_SPACING_Z
    row_height_step: float = C.ROW_HEIGHT_STEP
    step_base_y: float = C.STEP_BASE_Y
    aisle_width: float = C.AISLE_WIDTH
    back_row_inset: float = C.BACK_ROW_INSET
    door_offset_x: float = C.DOOR_OFFSET_X
    door_offset_z: float = C.DOOR_OFFSET_Z

    @classmethod
    def from_tuning(cls) -> VenueLayout:
        """Build a layout from the ``[grid]`` and ``[hall]`` tables."""
        cols = int(_tun("grid", "cols", C.COLS))
        return cls(
            rows=int(_tun("grid", "rows", C.ROWS)),
            cols=cols,
            aisle_position=int(_tun("grid", "aisle_position", cols // 2)),
            room_width=float(_tun("hall", "room_width", C.ROOM_WIDTH)),
            room_depth=float(_tun("hall", "room_depth", C.ROOM_DEPTH)),
            seat_size=float(_tun("hall", "seat_size", C.SEAT_SIZE)),
            seat_spacing_x=float(_tun("hall", "seat_spacing_x", C.SEAT_SPACING_X)),
            seat_spacing_z=float(_tun("hall", "seat_spacing_z", C.SEAT_SPACING_Z)),
            row_height_step=float(_tun("hall", "row_height_step", C.ROW_HEIGHT_STEP)),
            step_base_y=float(_tun("hall", "step_base_y", C.STEP_BASE_Y)),
            aisle_width=float(_tun("hall", "aisle_width", C.AISLE_WIDTH)),
            back_row_inset=float(_tun("hall", "back_row_inset", C.BACK_ROW_INSET)),
            door_offset_x=float(_tun("hall", "door_offset_x", C.DOOR_OFFSET_X)),
            door_offset_z=float(_tun("hall", "door_offset_z", C.DOOR_OFFSET_Z)),
        )

    # -- Grid indexing --

    @property
    def total_seats(self) -> int:
        return self.rows * self.cols

    def seat_index(self, row: int, col: int) -> int:
        return row * self.cols + col

    def row_col(self, index: int) -> tuple[int, int]:
        return divmod(index, self.cols)

    # -- Seats --

    def seat_x(self, col: int) -> float:
        total_width = (self.cols - 1) * self.seat_spacing_x + self.aisle_width
        x = -total_width / 2.0 + col * self.seat_spacing_x
        if col >= self.aisle_position:
            x += self.aisle_width
        return x

    def row_z(self, row: int) -> float:
        return self.room_depth / 2.0 - self.back_row_inset - row * self.seat_spacing_z

    def row_elevation(self, row: int) -> float:
        """Floor height of the step that *row* stands on."""
        return self.step_base_y + (self.rows - 1 - row) * self.row_height_step

    def seat_position(self, row: int, col: int) -> Vec3:
        return Vec3(self.seat_x(col), 0.3 + self.row_elevation(row), self.row_z(row))

    # -- Walkways --

    @property
    def aisle_x(self) -> float:
        return (self.seat_x(self.aisle_position - 1) + self.seat_x(self.aisle_position)) / 2.0

    @property
    def front_row_z(self) -> float:
        """Depth of the row nearest the screen."""
        return self.row_z(self.rows - 1)

    def aisle_position_at(self, row: int) -> Vec3:
        return Vec3(self.aisle_x, self.row_elevation(row) + 0.2, self.row_z(row))

    def aisle_front(self) -> Vec3:
        """Aisle point on the flat floor just in front of the first step."""
        return Vec3(self.aisle_x, 0.1, self.front_row_z - 1.0)

    def walk_z(self, row: int) -> float:
        """Depth of the walkway in front of *row*'s seats."""
        return self.row_z(row) - self.seat_spacing_z * 0.35

    def walk_y(self, row: int) -> float:
        return self.row_elevation(row) + 0.2

    # -- Door --

    @property
    def door_position(self) -> Vec3:
        return Vec3(-self.room_width / 2.0 + self.door_offset_x, 0.0,
                    -self.room_depth / 2.0 + self.door_offset_z)

    def door_point(self) -> Vec3:
        """Where viewers appear and disappear, just inside the door."""
        return self.door_position + Vec3(0.0, 0.1, 0.5)

    # -- Stepped floor --

    def step_height_at(self, z: float) -> float:
        """Walking height at depth *z*.

        The first row (back to front) whose half-spacing band starts
        in front of *z* decides the step; anywhere past the front row
        is the flat floor.
        """
        half = self.seat_spacing_z / 2.0
        for r in range(self.rows):
            if z > self.row_z(r) - half:
                return self.row_elevation(r) + 0.2
        return self.step_base_y + 0.2
