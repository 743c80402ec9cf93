"""logic — Venue systems package.

Modules
-------
seat_map    — seat records, reserve/buy, adjacent-block search
picking     — ray vs. seat box query
waypoints   — entry / exit route planning with staggered starts
crowd       — per-tick movement, separation and arrivals
show        — lifecycle state machine, door and projector
tick        — fixed-step system orchestrator
"""
