"""
scenes/venue_scene.py — Top-down cinema view

Draws the seat grid, the door and the walking viewers, and turns
mouse/keyboard input into venue commands:

    Left click   reserve / unreserve the seat under the cursor
    1-9          buy N adjacent seats
    Enter        start the show
    F5           reload data/venue.toml (applies to the next venue)
    Esc          quit
"""

from __future__ import annotations
import pygame

from core.app import App
from core.scene import Scene
from core import tuning as tuning_mod
from scenes.venue_draw import (
    TopDownView, draw_hall, draw_door, draw_seats, draw_people, draw_hud,
    pointer_ray,
)
from simulation.venue import VenueSim

_MESSAGE_TIME = 3.0   # s a HUD message stays up


class VenueScene(Scene):
    def __init__(self, sim: VenueSim):
        self.sim = sim
        self.view = TopDownView(cx=480, cy=330)
        self.hover: int | None = None
        self.message = ""
        self.message_timer = 0.0

    def on_enter(self, app: App):
        bus = self.sim.bus
        bus.subscribe("CommandRejected", lambda e: self._flash(e.reason))
        bus.subscribe("SeatsBought",
                      lambda e: self._flash(f"Bought {len(e.seat_indices)} ticket(s)."))
        bus.subscribe("ShowStateChanged", lambda e: self._flash(f"{e.old} → {e.new}"))

    def _flash(self, text: str):
        self.message = text
        self.message_timer = _MESSAGE_TIME

    # -- Input --

    def handle_event(self, event: pygame.event.Event, app: App):
        if event.type == pygame.KEYDOWN:
            if event.key == pygame.K_ESCAPE:
                app.quit()
            elif event.key in (pygame.K_RETURN, pygame.K_KP_ENTER):
                self.sim.start_show()
            elif pygame.K_1 <= event.key <= pygame.K_9:
                self.sim.buy_adjacent(event.key - pygame.K_0)
            elif event.key == pygame.K_F5:
                tuning_mod.reload()
                self._flash("Tuning reloaded")
        elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            idx = self._seat_at(*app.to_virtual(*event.pos))
            if idx is not None:
                self.sim.reserve(idx)

        # Commands emit events; show their feedback right away.
        self.sim.bus.drain()

    def _seat_at(self, px: int, py: int) -> int | None:
        origin, direction = pointer_ray(self.view, px, py)
        return self.sim.pick_seat(origin, direction)

    # -- Simulation --

    def tick(self, dt: float, app: App):
        self.sim.tick(dt)

    def update(self, frame_dt: float, app: App):
        if self.message_timer > 0:
            self.message_timer -= frame_dt
            if self.message_timer <= 0:
                self.message = ""
        self.hover = self._seat_at(*app.mouse_pos())

    # -- Draw --

    def draw(self, surface: pygame.Surface, app: App):
        sim = self.sim
        draw_hall(surface, self.view, sim.layout, sim.lights_on, sim.state,
                  sim.movie_frame)
        draw_door(surface, self.view, sim.layout, sim.door_open_amount)
        draw_seats(surface, self.view, sim.seats, sim.layout.seat_size, self.hover)
        draw_people(surface, self.view, sim.visible_people())
        counts = {status.name: n for status, n in sim.seat_map.counts().items()}
        draw_hud(surface, app, sim.state, sim.status_line(), sim.door_open_amount,
                 self.message, counts, sim.log_lines())
