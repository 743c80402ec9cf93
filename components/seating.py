"""components.seating — Seat records and their sale status."""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum, auto

from components.spatial import Vec3


class SeatStatus(Enum):
    FREE = auto()
    RESERVED = auto()
    BOUGHT = auto()


@dataclass
class Seat:
    """One seat of the hall.

    ``row``/``col`` and ``position`` are fixed when the seat map is
    built.  ``has_occupant`` is set while a viewer holds this seat for
    the running show.
    """
    row: int
    col: int
    position: Vec3
    status: SeatStatus = SeatStatus.FREE
    has_occupant: bool = False

    @property
    def occupied(self) -> bool:
        """True when the seat is reserved or bought."""
        return self.status is not SeatStatus.FREE
