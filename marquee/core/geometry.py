# marquee/core/geometry.py
from __future__ import annotations

from dataclasses import dataclass

import pygame

from marquee.utils.camera_types import Point2


@dataclass
class DragRect:
    """
    Screen-space rectangle spanned by a drag gesture.

    Always normalized: `min` holds the componentwise minimum of the two
    pointer samples and `max` the maximum, whatever the drag direction.
    Build it with `DragRect.from_points`.
    """

    min: pygame.Vector2
    max: pygame.Vector2

    @classmethod
    def from_points(cls, a: Point2, b: Point2) -> "DragRect":
        ax, ay = float(a[0]), float(a[1])
        bx, by = float(b[0]), float(b[1])
        return cls(
            pygame.Vector2(min(ax, bx), min(ay, by)),
            pygame.Vector2(max(ax, bx), max(ay, by)),
        )

    @classmethod
    def full_viewport(cls, width: int, height: int) -> "DragRect":
        return cls(pygame.Vector2(0, 0), pygame.Vector2(width, height))

    @property
    def width(self) -> float:
        return self.max.x - self.min.x

    @property
    def height(self) -> float:
        return self.max.y - self.min.y

    @property
    def is_degenerate(self) -> bool:
        """Zero area (a click without movement, or a pure horizontal/vertical drag)."""
        return self.width == 0 or self.height == 0

    def contains(self, point: Point2) -> bool:
        """Inclusive on both axes: points on the edges are inside."""
        x, y = float(point[0]), float(point[1])
        return self.min.x <= x <= self.max.x and self.min.y <= y <= self.max.y

    def to_rect(self) -> pygame.Rect:
        r = pygame.Rect(round(self.min.x), round(self.min.y), round(self.width), round(self.height))
        r.normalize()
        return r


__all__ = ["DragRect"]
