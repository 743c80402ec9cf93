"""scenes/venue_draw.py — Rendering helpers for the venue scene.

All pure-draw functions live here so that VenueScene.draw() stays thin.
Every function receives the data it needs as parameters — no implicit
coupling to the scene object beyond what is explicitly passed.

The view is top-down: screen wall at the top, back wall at the bottom.
"""

from __future__ import annotations
import math
from dataclasses import dataclass

import pygame

from components import Seat, ShowState, Vec3
from core.app import App
from core.constants import PIXELS_PER_METRE, STATUS_COLORS
from core.layout import VenueLayout
from simulation.venue import PersonView

_FLOOR_LIT = (52, 44, 40)
_FLOOR_DARK = (18, 15, 20)
_SCREEN_ON = (230, 230, 250)
_SCREEN_OFF = (70, 70, 80)
_DOOR_FRAME = (115, 77, 51)
_DOOR_LEAF = (166, 102, 64)
_PERSON_COLORS = [
    (90, 160, 230), (230, 150, 80), (150, 220, 120), (220, 110, 160),
    (200, 200, 90), (120, 200, 200), (180, 130, 230), (240, 240, 240),
]


@dataclass(frozen=True)
class TopDownView:
    """Maps hall metres (x, z) to virtual-surface pixels and back."""
    cx: int
    cy: int
    scale: float = PIXELS_PER_METRE

    def to_screen(self, x: float, z: float) -> tuple[int, int]:
        return int(self.cx + x * self.scale), int(self.cy + z * self.scale)

    def to_world(self, px: int, py: int) -> tuple[float, float]:
        return (px - self.cx) / self.scale, (py - self.cy) / self.scale


# ── Hall ────────────────────────────────────────────────────────────

def draw_hall(surface: pygame.Surface, view: TopDownView, layout: VenueLayout,
              lights_on: bool, state: ShowState, movie_frame: int):
    surface.fill((0, 0, 0))
    x0, z0 = view.to_screen(-layout.room_width / 2, -layout.room_depth / 2)
    x1, z1 = view.to_screen(layout.room_width / 2, layout.room_depth / 2)
    pygame.draw.rect(surface, _FLOOR_LIT if lights_on else _FLOOR_DARK,
                     pygame.Rect(x0, z0, x1 - x0, z1 - z0))

    # Screen on the front wall; flickers through frames while the film runs.
    sx0, sy = view.to_screen(-7.0, -layout.room_depth / 2 + 0.2)
    sx1, _ = view.to_screen(7.0, 0.0)
    color = _SCREEN_OFF
    if state is ShowState.MOVIE:
        shade = 200 + (movie_frame * 37) % 50
        color = (shade, shade, min(255, shade + 20))
    elif lights_on:
        color = _SCREEN_ON
    pygame.draw.rect(surface, color, pygame.Rect(sx0, sy, sx1 - sx0, 6))

    # Steps: one band per row, lighter toward the back.
    for r in range(layout.rows):
        z = layout.row_z(r)
        top = view.to_screen(0.0, z - layout.seat_spacing_z / 2)[1]
        shade = 30 + int(layout.row_elevation(r) * 12)
        band = pygame.Surface((x1 - x0, int(layout.seat_spacing_z * view.scale)),
                              pygame.SRCALPHA)
        band.fill((shade, shade, shade, 50))
        surface.blit(band, (x0, top))


def draw_door(surface: pygame.Surface, view: TopDownView, layout: VenueLayout,
              open_amount: float):
    door = layout.door_position
    half = 0.65
    slide = open_amount * 0.7
    px, py = view.to_screen(door.x, door.z)
    s = view.scale
    pygame.draw.rect(surface, _DOOR_FRAME, pygame.Rect(px - int(half * s) - 3, py - 3, 6, 6))
    pygame.draw.rect(surface, _DOOR_FRAME, pygame.Rect(px + int(half * s) - 3, py - 3, 6, 6))
    leaf_w = int(0.55 * s)
    left = view.to_screen(door.x - 0.3 - slide, door.z)[0]
    right = view.to_screen(door.x + 0.3 + slide, door.z)[0]
    pygame.draw.rect(surface, _DOOR_LEAF, pygame.Rect(left - leaf_w // 2, py - 2, leaf_w, 4))
    pygame.draw.rect(surface, _DOOR_LEAF, pygame.Rect(right - leaf_w // 2, py - 2, leaf_w, 4))


# ── Seats ───────────────────────────────────────────────────────────

def draw_seats(surface: pygame.Surface, view: TopDownView, seats: list[Seat],
               seat_size: float, hover: int | None):
    size = int(seat_size * view.scale)
    for i, seat in enumerate(seats):
        px, py = view.to_screen(seat.position.x, seat.position.z)
        rect = pygame.Rect(px - size // 2, py - size // 2, size, size)
        pygame.draw.rect(surface, STATUS_COLORS[seat.status.name], rect)
        if seat.has_occupant:
            pygame.draw.rect(surface, (255, 255, 255), rect, 1)
        if i == hover:
            pygame.draw.rect(surface, (255, 255, 0), rect.inflate(4, 4), 2)


# ── People ──────────────────────────────────────────────────────────

def draw_people(surface: pygame.Surface, view: TopDownView, people: list[PersonView]):
    radius = max(3, int(0.22 * view.scale))
    for p in people:
        px, py = view.to_screen(p.position.x, p.position.z)
        # Walk bob: radius pulses with the walk cycle.
        r = radius + int(math.sin(p.walk_cycle) * 1.5)
        color = _PERSON_COLORS[p.variant % len(_PERSON_COLORS)]
        pygame.draw.circle(surface, color, (px, py), r)
        # facing_angle 0 faces +z (down the screen)
        fx = px + int(math.sin(p.facing_angle) * r * 1.6)
        fy = py + int(math.cos(p.facing_angle) * r * 1.6)
        pygame.draw.line(surface, (20, 20, 20), (px, py), (fx, fy), 2)


# ── HUD ─────────────────────────────────────────────────────────────

def draw_hud(surface: pygame.Surface, app: App, state: ShowState, status: str,
             door: float, message: str, counts: dict[str, int],
             log_lines: list[str]):
    y = 6
    app.draw_text_bg(surface, f"State: {state.name}   Door: {door:.2f}", 8, y)
    y += 18
    app.draw_text_bg(surface, status, 8, y, font=app.font_sm)
    y += 16
    tally = "  ".join(f"{k}={v}" for k, v in counts.items())
    app.draw_text_bg(surface, tally, 8, y, font=app.font_sm)
    # Newest dev-log lines, bottom-up above the message strip.
    ly = surface.get_height() - 66
    for line in reversed(log_lines):
        app.draw_text_bg(surface, line, 8, ly, color=(170, 170, 190), font=app.font_sm)
        ly -= 14
    if message:
        app.draw_text_bg(surface, message, 8, surface.get_height() - 44,
                         color=(255, 220, 120))
    app.draw_text_bg(surface, "Click: reserve  1-9: buy N  Enter: start  Esc: quit",
                     8, surface.get_height() - 22, font=app.font_sm)


def pointer_ray(view: TopDownView, px: int, py: int) -> tuple[Vec3, Vec3]:
    """Straight-down ray through the hall point under a pixel."""
    x, z = view.to_world(px, py)
    return Vec3(x, 20.0, z), Vec3(0.0, -1.0, 0.0)
