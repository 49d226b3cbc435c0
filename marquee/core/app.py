# marquee/core/app.py
"""
Demo application: a grid of objects seen by an orbiting 3D camera, with
marquee selection on the left mouse button.

Controls:
- Left drag      : select (Shift = add, Ctrl = toggle)
- A              : select everything visible
- Escape         : cancel the drag in progress, else clear the selection
- Arrow keys     : orbit the camera
- Window closing : quit
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Sequence, Tuple

import pygame

import marquee.utils.settings as settings
from marquee.core.camera import Camera3D
from marquee.core.projection import OverlaySurface, RenderMode
from marquee.core.safe_main import init_pygame_display
from marquee.core.selector import MarqueeSelector
from marquee.entities.scene_object import SceneObject, make_grid
from marquee.utils.event_bus import SELECTION_CHANGED
from marquee.utils.logging_setup import get_logger
from marquee.world.visibility import VisibilityTracker

log = get_logger("app")

_MAX_DT = 1 / 15.0


class App:
    """Main demo orchestrator."""

    def __init__(
        self,
        size: Optional[Tuple[int, int]] = None,
        *,
        objects: Optional[Sequence[SceneObject]] = None,
    ) -> None:
        w, h = size or (settings.SCREEN_WIDTH, settings.SCREEN_HEIGHT)

        # Window & clock (an offscreen surface when there is no display)
        self.screen = init_pygame_display((w, h), caption=settings.WINDOW_TITLE) or pygame.Surface((w, h))
        self.clock = pygame.time.Clock()

        # Scene
        self.camera = Camera3D(w, h)
        self.objects: List[SceneObject] = list(objects) if objects is not None else make_grid()
        self.visibility = VisibilityTracker()
        for obj in self.objects:
            self.visibility.register(obj)
        self.visibility.refresh_from_camera(self.camera)

        # Selection
        self.surface = OverlaySurface(pygame.Rect(0, 0, w, h), RenderMode.OVERLAY)
        self.selector = MarqueeSelector(self.surface, self.visibility, camera=self.camera)

        self.font = pygame.font.SysFont("Arial", settings.HUD_FONT_SIZE) if pygame.font.get_init() else None
        self.status = "Drag to select"
        self._running = True

    # ------------------------------------------------------------------ #
    # Event handling
    # ------------------------------------------------------------------ #

    def _on_selection_changed(self, payload: Dict[str, Any]) -> None:
        self.status = (
            f"{len(payload['selected'])} selected "
            f"(+{len(payload['entered'])} / -{len(payload['exited'])})"
        )
        log.info("Selection changed: %s", self.status)

    def handle_event(self, ev: pygame.event.Event) -> None:
        """Central input dispatch."""
        if ev.type == pygame.QUIT:
            self._running = False
            return

        if ev.type == pygame.KEYDOWN:
            if ev.key == pygame.K_ESCAPE:
                # Escape cancels a drag first; otherwise it clears the selection
                if not self.selector.cancel_gesture():
                    self.selector.clear_selection()
                return
            if ev.key == pygame.K_a and not self.selector.dragging:
                self.selector.select_all_visible()
                return

        self.selector.handle_event(ev)

    # ------------------------------------------------------------------ #
    # Update / Render
    # ------------------------------------------------------------------ #

    def update(self, dt: float, keys: Optional[Sequence[bool]] = None) -> None:
        """Orbit the camera, refresh visibility and poll the pointer."""
        if keys is None:
            keys = pygame.key.get_pressed()
        step = settings.CAMERA_ORBIT_SPEED_DEG * max(0.0, min(_MAX_DT, dt))
        d_yaw = (keys[pygame.K_RIGHT] - keys[pygame.K_LEFT]) * step
        d_pitch = (keys[pygame.K_UP] - keys[pygame.K_DOWN]) * step
        if d_yaw or d_pitch:
            self.camera.orbit(d_yaw, d_pitch)

        self.visibility.refresh_from_camera(self.camera)
        self.selector.update(pygame.mouse.get_pos())

    def render(self) -> None:
        self.screen.fill(settings.BG_COLOR)

        alive = [o for o in self.objects if o.alive]
        projected = self.camera.world_to_screen_many([o.world_pos for o in alive])
        # Back to front so nearer objects overdraw farther ones
        order = sorted(range(len(alive)), key=lambda i: -projected[i][2])
        for i in order:
            alive[i].draw(self.screen, self.camera, projected[i])

        # UI last (selection box, pointer, HUD)
        self.selector.draw(self.screen)
        if self.font is not None:
            text = self.font.render(self.status, True, settings.HUD_FONT_COLOR)
            self.screen.blit(text, (10, 10))

        if pygame.display.get_surface() is not None:
            pygame.display.flip()

    # ------------------------------------------------------------------ #
    # Main loop
    # ------------------------------------------------------------------ #

    def run(self, max_frames: Optional[int] = None) -> int:
        """Main loop; `max_frames` bounds it for smoke tests."""
        self._running = True
        frames = 0
        off_selection = self.selector.engine.bus.on(SELECTION_CHANGED, self._on_selection_changed)
        try:
            while self._running:
                dt = self.clock.tick(settings.FPS) / 1000.0
                for ev in pygame.event.get():
                    self.handle_event(ev)
                self.update(dt)
                self.render()
                frames += 1
                if max_frames is not None and frames >= max_frames:
                    break
        finally:
            self.selector.clear_selection()
            off_selection()
        return 0


def main() -> int:
    from marquee.core.safe_main import run_app
    return run_app()


if __name__ == "__main__":
    raise SystemExit(main())
