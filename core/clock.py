"""core/clock.py — Fixed-timestep accumulator.

Real frame time goes in, whole simulation ticks come out::

    clock = FixedStepClock(step=1 / 75)
    for _ in range(clock.advance(frame_dt)):
        sim.tick(clock.step)

At most ``max_steps`` ticks run per ``advance()``; time that did not
fit rolls into the next frame.  The default of one tick per frame
means a slow machine runs the show slower instead of in bursts.
"""

from __future__ import annotations
from dataclasses import dataclass

from core.constants import FRAME_TIME


@dataclass
class FixedStepClock:
    step: float = FRAME_TIME     # s per tick
    max_steps: int = 1
    accumulator: float = 0.0
    ticks: int = 0

    def advance(self, frame_dt: float) -> int:
        """Add *frame_dt* seconds and return how many ticks are due now."""
        if frame_dt > 0.0:
            self.accumulator += frame_dt
        n = 0
        while self.accumulator >= self.step and n < self.max_steps:
            self.accumulator -= self.step
            n += 1
        self.ticks += n
        return n

    @property
    def time(self) -> float:
        """Simulated seconds consumed so far."""
        return self.ticks * self.step

    def reset(self) -> None:
        self.accumulator = 0.0
        self.ticks = 0
