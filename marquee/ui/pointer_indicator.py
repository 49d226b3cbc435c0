# marquee/ui/pointer_indicator.py
from __future__ import annotations

from typing import Tuple

import pygame

import marquee.utils.settings as settings
from marquee.core.projection import OverlaySurface, camera_for_surface, surface_local_to_screen
from marquee.utils.camera_types import Point2


class PointerIndicator:
    """Small crosshair that follows the pointer every frame, dragging or not."""

    def __init__(
        self,
        surface: OverlaySurface,
        *,
        color: Tuple[int, int, int] = settings.POINTER_INDICATOR_COLOR,
        radius: int = settings.POINTER_INDICATOR_RADIUS,
        width: int = settings.POINTER_INDICATOR_WIDTH,
    ) -> None:
        self.surface = surface
        self.color = color
        self.radius = int(radius)
        self.width = int(width)
        self.visible = True
        self.anchor = pygame.Vector2(0, 0)

    def set_anchor(self, local_pos: Point2) -> None:
        self.anchor = pygame.Vector2(local_pos)

    def screen_pos(self) -> pygame.Vector2:
        return surface_local_to_screen(self.anchor, self.surface, camera_for_surface(self.surface))

    def draw(self, screen: pygame.Surface) -> None:
        if not self.visible:
            return
        p = self.screen_pos()
        x, y, r = round(p.x), round(p.y), self.radius
        pygame.draw.line(screen, self.color, (x - r, y), (x + r, y), self.width)
        pygame.draw.line(screen, self.color, (x, y - r), (x, y + r), self.width)
        pygame.draw.circle(screen, self.color, (x, y), max(1, r // 2), self.width)


__all__ = ["PointerIndicator"]
