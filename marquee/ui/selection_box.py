# marquee/ui/selection_box.py
"""
Rubber-band rectangle drawn while a marquee drag is in progress.

The gesture tracker positions it in overlay-local space: `anchor` is the
top-left corner (top-left pivot), `size` the (width, height) extent.
Drawing converts both corners back to screen space through the surface.
"""

from __future__ import annotations

from typing import Optional, Tuple

import pygame

import marquee.utils.settings as settings
from marquee.core.geometry import DragRect
from marquee.core.gesture import PIVOT_TOP_LEFT
from marquee.core.projection import OverlaySurface, camera_for_surface, surface_local_to_screen
from marquee.utils.camera_types import Point2


class SelectionBoxOverlay:
    """Overlay renderer for the selection rectangle."""

    pivot = PIVOT_TOP_LEFT

    def __init__(
        self,
        surface: OverlaySurface,
        *,
        color: Tuple[int, int, int] = settings.SELECTION_BOX_COLOR,
        fill_alpha: int = settings.SELECTION_BOX_FILL_ALPHA,
        border_width: int = settings.SELECTION_BOX_BORDER_WIDTH,
    ) -> None:
        self.surface = surface
        self.color = color
        self.fill_alpha = int(fill_alpha)
        self.border_width = int(border_width)

        # Hidden until a drag starts
        self.visible: bool = False
        self.anchor = pygame.Vector2(0, 0)
        self.size = pygame.Vector2(0, 0)

    # ---- renderer contract -------------------------------------------------

    def set_visible(self, visible: bool) -> None:
        self.visible = bool(visible)

    def set_anchor(self, local_pos: Point2) -> None:
        self.anchor = pygame.Vector2(local_pos)

    def set_size(self, local_size: Point2) -> None:
        self.size = pygame.Vector2(local_size)

    # ---- drawing -----------------------------------------------------------

    def screen_rect(self) -> pygame.Rect:
        """The box in screen pixels (normalized)."""
        cam = camera_for_surface(self.surface)
        down = -1.0 if self.surface.y_up else 1.0
        far_corner = (self.anchor.x + self.size.x, self.anchor.y + down * self.size.y)
        a = surface_local_to_screen(self.anchor, self.surface, cam)
        b = surface_local_to_screen(far_corner, self.surface, cam)
        return DragRect.from_points(a, b).to_rect()

    def draw(self, screen: pygame.Surface) -> Optional[pygame.Rect]:
        if not self.visible:
            return None
        rect = self.screen_rect()
        if rect.width > 0 and rect.height > 0 and self.fill_alpha > 0:
            fill = pygame.Surface(rect.size, pygame.SRCALPHA)
            fill.fill((*self.color[:3], self.fill_alpha))
            screen.blit(fill, rect.topleft)
        pygame.draw.rect(screen, self.color, rect, self.border_width)
        return rect


__all__ = ["SelectionBoxOverlay"]
