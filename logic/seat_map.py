"""logic/seat_map.py — Seat records, sale status and the block search.

The seat list is built once from a ``VenueLayout`` and never resized;
a seat's index (``row * cols + col``) is the only way other systems
refer to it.

    seat_map = SeatMap(layout)
    seat_map.reserve(3)                  # FREE → RESERVED
    block = seat_map.find_contiguous_free(4)
    if block:
        seat_map.buy(block)
"""

from __future__ import annotations
from collections import Counter

from components import Seat, SeatStatus
from core.layout import VenueLayout


class SeatMap:
    def __init__(self, layout: VenueLayout):
        self.layout = layout
        self.seats: list[Seat] = [
            Seat(row=r, col=c, position=layout.seat_position(r, c))
            for r in range(layout.rows)
            for c in range(layout.cols)
        ]

    def __len__(self) -> int:
        return len(self.seats)

    def __getitem__(self, index: int) -> Seat:
        return self.seats[index]

    def __iter__(self):
        return iter(self.seats)

    def valid(self, index: int) -> bool:
        return 0 <= index < len(self.seats)

    # -- Commands --

    def reserve(self, index: int) -> SeatStatus | None:
        """Toggle FREE ↔ RESERVED.  BOUGHT seats are left alone.

        Returns the seat's status afterwards, or ``None`` for an index
        outside the hall.
        """
        if not self.valid(index):
            return None
        seat = self.seats[index]
        if seat.status is SeatStatus.FREE:
            seat.status = SeatStatus.RESERVED
        elif seat.status is SeatStatus.RESERVED:
            seat.status = SeatStatus.FREE
        return seat.status

    def buy(self, indices: list[int]) -> None:
        for idx in indices:
            self.seats[idx].status = SeatStatus.BOUGHT

    def reset_all(self) -> None:
        """Free every seat and drop all occupancy (end of a show)."""
        for seat in self.seats:
            seat.status = SeatStatus.FREE
            seat.has_occupant = False

    # -- Search --

    def crosses_aisle(self, col: int, n: int) -> bool:
        """True if a block of *n* seats starting at *col* spans the aisle.

        Only the column left of the aisle is checked against offsets
        ``0 .. n-2``: a block may end on it but not continue past it.
        """
        last_left = self.layout.aisle_position - 1
        return any(col + i == last_left for i in range(n - 1))

    def find_contiguous_free(self, n: int) -> list[int]:
        """Find *n* adjacent FREE seats in one row, not spanning the aisle.

        Rows are searched front to back (row 0 first); within a row the
        starting column runs from ``cols - n`` down to 0.  Returns the
        first valid block's indices in column order, or ``[]``.
        """
        cols = self.layout.cols
        if n <= 0 or n > cols:
            return []
        for row in range(self.layout.rows):
            for col in range(cols - n, -1, -1):
                if self.crosses_aisle(col, n):
                    continue
                block = [self.layout.seat_index(row, col + i) for i in range(n)]
                if all(self.seats[idx].status is SeatStatus.FREE for idx in block):
                    return block
        return []

    # -- Queries --

    def occupied_indices(self) -> list[int]:
        """Indices of RESERVED or BOUGHT seats, ascending."""
        return [i for i, s in enumerate(self.seats) if s.occupied]

    def counts(self) -> dict[SeatStatus, int]:
        tally = Counter(s.status for s in self.seats)
        return {status: tally.get(status, 0) for status in SeatStatus}

    def label(self, index: int) -> str:
        seat = self.seats[index]
        return f"[{seat.row},{seat.col}]"
