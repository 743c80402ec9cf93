"""core/tuning.py — Data-driven venue constants.

All venue numbers live in ``data/venue.toml`` and are loaded once at
startup.  Any system can read a value with::

    from core.tuning import get
    speed = get("crowd", "walk_speed", 2.5)

Hot-reload: call ``reload()`` to re-read the file.  In the viewer,
press F5.  Geometry is snapshotted into a ``VenueLayout`` when a
``VenueSim`` is built, so a reload only affects the next venue.
"""

from __future__ import annotations
from pathlib import Path

try:
    import tomllib                         # Python 3.11+
except ModuleNotFoundError:
    import tomli as tomllib                # pip install tomli


_data: dict = {}
_path: Path | None = None


def load(path: str | Path | None = None, *, verbose: bool = True) -> None:
    """Load (or reload) venue constants from *path*.

    If *path* is ``None``, default to ``data/venue.toml`` relative to
    the project root (one level above ``core/``).
    """
    global _data, _path

    if path is None:
        root = Path(__file__).resolve().parent.parent
        path = root / "data" / "venue.toml"
    else:
        path = Path(path)

    _path = path

    if not path.exists():
        if verbose:
            print(f"[TUNING] {path} not found — using defaults")
        _data = {}
        return

    with open(path, "rb") as f:
        _data = tomllib.load(f)

    if verbose:
        print(f"[TUNING] Loaded {_count_leaves(_data)} values from {path}")


def reload() -> None:
    """Re-read the tuning file from disk (hot-reload)."""
    load(_path)


def clear() -> None:
    """Forget every loaded value so ``get`` falls back to defaults."""
    global _data
    _data = {}


def get(section: str, key: str, default=None):
    """Read a tuning value.

    *section* uses dot-notation to traverse nested tables, e.g.
    ``"crowd.exit"`` looks up ``[crowd.exit]``.

    >>> get("show", "movie_duration", 20.0)
    20.0
    """
    node = _data
    for part in section.split("."):
        if isinstance(node, dict):
            node = node.get(part)
        else:
            return default
        if node is None:
            return default
    if isinstance(node, dict):
        return node.get(key, default)
    return default


def section(section_path: str) -> dict:
    """Return an entire section dict (shallow copy), or empty dict."""
    node = _data
    for part in section_path.split("."):
        if isinstance(node, dict):
            node = node.get(part)
        else:
            return {}
        if node is None:
            return {}
    if isinstance(node, dict):
        return dict(node)
    return {}


def _count_leaves(d: dict, _n: int = 0) -> int:
    for v in d.values():
        if isinstance(v, dict):
            _n = _count_leaves(v, _n)
        else:
            _n += 1
    return _n
