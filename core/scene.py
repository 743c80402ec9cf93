"""
core/scene.py — Scene interface

Every screen of the viewer is a Scene. The app holds a stack of them.
Only the top scene gets tick/update/draw calls. Scenes below stay frozen.

To make a new scene:

    class MyScene(Scene):
        def on_enter(self, app):
            # setup, called when scene becomes active
            pass

        def handle_event(self, event, app):
            # pygame event
            pass

        def tick(self, dt, app):
            # one fixed simulation step of dt seconds
            pass

        def update(self, frame_dt, app):
            # once per rendered frame, real seconds since the last one
            pass

        def draw(self, surface, app):
            # draw to the surface
            pass
"""

from __future__ import annotations
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import pygame
    from core.app import App


class Scene:
    def on_enter(self, app: App):
        """Called when this scene becomes active (pushed or revealed)."""
        pass

    def on_exit(self, app: App):
        """Called when this scene is removed or covered."""
        pass

    def handle_event(self, event: pygame.event.Event, app: App):
        """Process a single pygame event."""
        pass

    def tick(self, dt: float, app: App):
        """Advance the simulation by one fixed step."""
        pass

    def update(self, frame_dt: float, app: App):
        """Per-frame work that is not simulation (HUD timers, etc.)."""
        pass

    def draw(self, surface: pygame.Surface, app: App):
        """Draw to the screen surface."""
        pass
