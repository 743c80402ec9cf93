"""components.dev_log — Structured venue event log.

A ring-buffer resource that records timestamped seat commands, show
transitions, viewer arrivals and rejected commands.  The viewer HUD
shows the newest lines; tests read it to learn *why* something did
not happen.

Usage:
    log = sim.log
    log.record(12, "seats", "reserved", t=sim.time, details={"row": 1})

Each entry is a dict:
    {"t": float, "ref": int, "cat": str, "msg": str, "details": dict | None}

``ref`` is a seat index, or -1 for venue-wide entries.
"""

from __future__ import annotations
from dataclasses import dataclass, field


@dataclass
class DevLog:
    """Ring-buffer of venue events."""

    entries: list[dict] = field(default_factory=list)
    max_entries: int = 500

    def record(self, ref: int, cat: str, msg: str, *,
               t: float = 0.0, details: dict | None = None) -> None:
        self.entries.append({
            "t": t,
            "ref": ref,
            "cat": cat,
            "msg": msg,
            "details": details,
        })
        if len(self.entries) > self.max_entries:
            self.entries = self.entries[-self.max_entries:]

    def recent(self, n: int = 50) -> list[dict]:
        """Return the *n* most recent entries (newest last)."""
        return self.entries[-n:]

    def for_cat(self, cat: str, n: int = 50) -> list[dict]:
        """Return last *n* entries in a category."""
        return [e for e in self.entries if e["cat"] == cat][-n:]
