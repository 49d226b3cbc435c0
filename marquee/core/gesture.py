# marquee/core/gesture.py
"""
Drag gesture state machine: IDLE -> DRAGGING -> IDLE.

- pointer_down: capture the start point (screen and overlay-local), show the
  selection box anchored there with zero size.
- pointer_move / update: resize the box so it spans start..current in local
  space, whatever the drag direction.
- pointer_up: hide the box and hand the normalized screen rectangle to the
  release callback (the selection engine).
- cancel_gesture: hide the box and drop the gesture without selecting.

The pointer indicator is updated every frame through `track_pointer`; it
never reads or changes drag state.
"""

from __future__ import annotations

import enum
import logging
from typing import Any, Callable, NamedTuple, Optional

import pygame

import marquee.utils.settings as settings
from marquee.core.errors import ConfigurationError
from marquee.core.geometry import DragRect
from marquee.core.projection import OverlaySurface, camera_for_surface, screen_to_surface_local
from marquee.utils.camera_types import OverlayRendererLike, Point2, PointerIndicatorLike

log = logging.getLogger(__name__)

PIVOT_TOP_LEFT = "top_left"

ReleaseCallback = Callable[[pygame.Vector2, pygame.Vector2], Any]


class GestureState(enum.Enum):
    IDLE = "idle"
    DRAGGING = "dragging"


class LocalBounds(NamedTuple):
    """Drag rectangle in overlay-local space. `top` is the edge nearest the top of the screen."""

    left: float
    right: float
    top: float
    bottom: float

    @property
    def anchor(self) -> pygame.Vector2:
        return pygame.Vector2(self.left, self.top)

    @property
    def size(self) -> pygame.Vector2:
        return pygame.Vector2(self.right - self.left, abs(self.top - self.bottom))


def local_bounds(a: Point2, b: Point2, *, y_up: bool) -> LocalBounds:
    """Normalize two local points; `y_up` selects which vertical extreme is the top."""
    ax, ay = float(a[0]), float(a[1])
    bx, by = float(b[0]), float(b[1])
    if y_up:
        top, bottom = max(ay, by), min(ay, by)
    else:
        top, bottom = min(ay, by), max(ay, by)
    return LocalBounds(min(ax, bx), max(ax, bx), top, bottom)


class GestureTracker:
    """Tracks one marquee drag at a time and drives the selection box overlay."""

    def __init__(
        self,
        surface: Optional[OverlaySurface],
        *,
        overlay: Optional[OverlayRendererLike] = None,
        pointer_indicator: Optional[PointerIndicatorLike] = None,
        on_release: Optional[ReleaseCallback] = None,
        select_button: int = settings.SELECT_MOUSE_BUTTON,
    ) -> None:
        # Fail fast: no surface, or a camera-space surface without a camera.
        camera_for_surface(surface)
        pivot = getattr(overlay, "pivot", PIVOT_TOP_LEFT)
        if overlay is not None and pivot != PIVOT_TOP_LEFT:
            raise ConfigurationError(f"selection overlay must use a top-left pivot (got {pivot!r})")

        self.surface: OverlaySurface = surface  # type: ignore[assignment]
        self.overlay = overlay
        self.pointer_indicator = pointer_indicator
        self.on_release = on_release
        self.select_button = int(select_button)

        self.state = GestureState.IDLE
        self.start_screen: Optional[pygame.Vector2] = None
        self.start_local: Optional[pygame.Vector2] = None
        self.current_screen: Optional[pygame.Vector2] = None
        self.current_local: Optional[pygame.Vector2] = None

        if self.overlay is not None:
            self.overlay.set_visible(False)

    # ------------------------------------------------------------------ #
    # Queries
    # ------------------------------------------------------------------ #

    @property
    def dragging(self) -> bool:
        return self.state is GestureState.DRAGGING

    def to_local(self, screen_pos: Point2) -> pygame.Vector2:
        return screen_to_surface_local(screen_pos, self.surface, camera_for_surface(self.surface))

    def screen_rect(self) -> Optional[DragRect]:
        """Current normalized screen rectangle (None when idle)."""
        if not self.dragging:
            return None
        return DragRect.from_points(self.start_screen, self.current_screen)

    def local_bounds(self) -> Optional[LocalBounds]:
        """Current rectangle in overlay-local space (None when idle)."""
        if not self.dragging:
            return None
        return local_bounds(self.start_local, self.current_local, y_up=self.surface.y_up)

    # ------------------------------------------------------------------ #
    # Transitions
    # ------------------------------------------------------------------ #

    def pointer_down(self, screen_pos: Point2) -> None:
        """Start a gesture (restarts one already in progress)."""
        if self.dragging:
            log.debug("Pointer down while dragging; restarting gesture")
        self.start_screen = pygame.Vector2(screen_pos)
        self.start_local = self.to_local(self.start_screen)
        self.current_screen = pygame.Vector2(self.start_screen)
        self.current_local = pygame.Vector2(self.start_local)
        self.state = GestureState.DRAGGING

        if self.overlay is not None:
            self.overlay.set_visible(True)
            self.overlay.set_anchor(self.start_local)
            self.overlay.set_size(pygame.Vector2(0, 0))

    def pointer_move(self, screen_pos: Point2) -> None:
        if not self.dragging:
            return
        self.current_screen = pygame.Vector2(screen_pos)
        self.current_local = self.to_local(self.current_screen)

        if self.overlay is not None:
            bounds = self.local_bounds()
            self.overlay.set_anchor(bounds.anchor)
            self.overlay.set_size(bounds.size)

    def pointer_up(self, screen_pos: Point2) -> Any:
        """Finish the gesture; returns whatever the release callback returns (None when idle)."""
        if not self.dragging:
            return None
        end_screen = pygame.Vector2(screen_pos)
        rect = DragRect.from_points(self.start_screen, end_screen)
        self._reset()

        log.debug("Gesture released: %s", rect)
        if self.on_release is None:
            return None
        return self.on_release(rect.min, rect.max)

    def cancel_gesture(self) -> bool:
        """Abandon the current gesture without selecting. Returns True if one was in progress."""
        if not self.dragging:
            return False
        log.debug("Gesture cancelled")
        self._reset()
        return True

    def _reset(self) -> None:
        self.state = GestureState.IDLE
        self.start_screen = self.start_local = None
        self.current_screen = self.current_local = None
        if self.overlay is not None:
            self.overlay.set_visible(False)

    # ------------------------------------------------------------------ #
    # Per-frame polling & events
    # ------------------------------------------------------------------ #

    def track_pointer(self, screen_pos: Point2) -> None:
        """Move the pointer indicator; independent of drag state."""
        if self.pointer_indicator is None:
            return
        self.pointer_indicator.set_anchor(self.to_local(screen_pos))

    def update(self, pointer_pos: Point2) -> None:
        """Polled once per frame with the current pointer position."""
        self.track_pointer(pointer_pos)
        if self.dragging:
            self.pointer_move(pointer_pos)

    def handle_event(self, event: pygame.event.Event) -> bool:
        """Feed a pygame event; return True if it was consumed."""
        if event.type == pygame.MOUSEBUTTONDOWN and event.button == self.select_button:
            self.pointer_down(event.pos)
            return True

        if event.type == pygame.MOUSEMOTION:
            self.track_pointer(event.pos)
            if self.dragging:
                self.pointer_move(event.pos)
                return True
            return False

        if event.type == pygame.MOUSEBUTTONUP and event.button == self.select_button:
            if not self.dragging:
                return False
            self.pointer_up(event.pos)
            return True

        if event.type == pygame.WINDOWFOCUSLOST:
            return self.cancel_gesture()

        if event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
            return self.cancel_gesture()

        return False


__all__ = ["GestureState", "GestureTracker", "LocalBounds", "PIVOT_TOP_LEFT", "local_bounds"]
