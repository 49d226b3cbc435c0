# marquee/core/selector.py
"""
MarqueeSelector: one object a frame loop talks to.

Wires the gesture tracker (input -> rectangle), the selection box and
pointer indicator overlays, the selection engine (rectangle -> delta) and
the visual state manager (delta -> tint). Every collaborator can be
injected; missing required ones raise ConfigurationError at construction.

Frame usage:

    for ev in pygame.event.get():
        selector.handle_event(ev)
    selector.update(pygame.mouse.get_pos())
    ...
    selector.draw(screen)
"""

from __future__ import annotations

import logging
from typing import Any, List, Optional

import pygame

import marquee.utils.settings as settings
from marquee.core.errors import ConfigurationError
from marquee.core.gesture import GestureTracker
from marquee.core.projection import OverlaySurface, camera_for_surface
from marquee.core.selection_engine import SelectionDelta, SelectionEngine, SelectionMode, mode_from_mods
from marquee.core.visual_state import VisualStateManager
from marquee.ui.pointer_indicator import PointerIndicator
from marquee.ui.selection_box import SelectionBoxOverlay
from marquee.utils.camera_types import CameraLike, Point2, VisibleObjectProvider
from marquee.utils.event_bus import GESTURE_CANCELLED, EventBus

log = logging.getLogger(__name__)


class MarqueeSelector:
    """Marquee (rubber-band) selection for a pygame frame loop."""

    def __init__(
        self,
        surface: Optional[OverlaySurface],
        provider: Optional[VisibleObjectProvider],
        *,
        camera: Optional[CameraLike] = None,
        overlay: Optional[SelectionBoxOverlay] = None,
        pointer_indicator: Optional[PointerIndicator] = None,
        show_pointer: bool = True,
        visual_state: Optional[VisualStateManager] = None,
        bus: Optional[EventBus] = None,
        select_button: int = settings.SELECT_MOUSE_BUTTON,
    ) -> None:
        if surface is None:
            raise ConfigurationError("MarqueeSelector needs an overlay surface")
        if provider is None:
            raise ConfigurationError("MarqueeSelector needs a visible object provider")
        camera_for_surface(surface)

        # Objects are projected with the explicit camera, else the surface's one.
        self.camera = camera if camera is not None else surface.camera
        if self.camera is None:
            raise ConfigurationError("MarqueeSelector needs a camera to project objects")

        self.surface = surface
        self.provider = provider
        self.overlay = overlay if overlay is not None else SelectionBoxOverlay(surface)
        if pointer_indicator is None and show_pointer:
            pointer_indicator = PointerIndicator(surface)
        self.pointer_indicator = pointer_indicator

        self.engine = SelectionEngine(visual_state, bus=bus)
        self.tracker = GestureTracker(
            surface,
            overlay=self.overlay,
            pointer_indicator=self.pointer_indicator,
            on_release=self._on_release,
            select_button=select_button,
        )

        self.mode = SelectionMode.REPLACE
        self.last_delta: Optional[SelectionDelta] = None

    # ------------------------------------------------------------------ #
    # Queries
    # ------------------------------------------------------------------ #

    @property
    def dragging(self) -> bool:
        return self.tracker.dragging

    @property
    def visual_state(self) -> VisualStateManager:
        return self.engine.visual_state

    def selected_objects(self) -> List[Any]:
        return self.engine.selected_objects()

    # ------------------------------------------------------------------ #
    # Frame loop
    # ------------------------------------------------------------------ #

    def handle_event(self, event: pygame.event.Event, *, mods: Optional[int] = None) -> bool:
        """
        Entry point for pygame events; return True if consumed.
        Modifiers held at release pick the mode (Shift=add, Ctrl=toggle);
        `mods` overrides the live keyboard state.
        """
        if event.type == pygame.MOUSEBUTTONUP and event.button == self.tracker.select_button:
            self.mode = mode_from_mods(pygame.key.get_mods() if mods is None else mods)
        was_dragging = self.tracker.dragging
        consumed = self.tracker.handle_event(event)
        if was_dragging and not self.tracker.dragging and event.type != pygame.MOUSEBUTTONUP:
            self.engine.bus.emit(GESTURE_CANCELLED)
        return consumed

    def update(self, pointer_pos: Point2) -> None:
        """Poll once per frame with the current pointer position."""
        self.tracker.update(pointer_pos)

    def draw(self, screen: pygame.Surface) -> None:
        self.overlay.draw(screen)
        if self.pointer_indicator is not None:
            self.pointer_indicator.draw(screen)

    # ------------------------------------------------------------------ #
    # Commands
    # ------------------------------------------------------------------ #

    def cancel_gesture(self) -> bool:
        cancelled = self.tracker.cancel_gesture()
        if cancelled:
            self.engine.bus.emit(GESTURE_CANCELLED)
        return cancelled

    def clear_selection(self) -> SelectionDelta:
        self.last_delta = self.engine.clear()
        return self.last_delta

    def select_all_visible(self, *, mode: SelectionMode = SelectionMode.REPLACE) -> SelectionDelta:
        self.last_delta = self.engine.select_all_visible(self.provider.snapshot(), self.camera, mode=mode)
        return self.last_delta

    def _on_release(self, min_screen: pygame.Vector2, max_screen: pygame.Vector2) -> SelectionDelta:
        self.last_delta = self.engine.evaluate(
            min_screen, max_screen, self.provider.snapshot(), self.camera, mode=self.mode
        )
        log.debug(
            "Marquee %s: +%d -%d (%d selected)",
            self.mode.value, len(self.last_delta.entered), len(self.last_delta.exited), len(self.engine),
        )
        return self.last_delta


__all__ = ["MarqueeSelector"]
