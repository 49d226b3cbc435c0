"""
SceneObject: a world-space marker that can be marquee-selected and tinted.
Implements the trackable capability (world position + appearance) and
draws itself as a perspective-scaled disc.
"""
from __future__ import annotations

import itertools
from typing import Any, Iterator, List, Optional, Sequence, Tuple

import pygame

import marquee.utils.settings as settings
from marquee.core.errors import MissingCapability
from marquee.utils.camera_types import CameraLike, Point3

_handles: Iterator[int] = itertools.count(1)


class SceneObject:
    """Represents a single selectable object in the scene."""

    # ---------- initialization ----------
    def __init__(
        self,
        world_pos: Point3,
        *,
        color: Any = settings.OBJECT_COLOR,
        radius: float = settings.OBJECT_RADIUS,
        renderable: bool = True,
        name: Optional[str] = None,
    ) -> None:
        self.handle: int = next(_handles)
        self.name = name or f"object-{self.handle}"
        self.world_pos = pygame.Vector3(world_pos)

        # Appearance (None when the object has no renderer)
        self.renderable = bool(renderable)
        self.color: Optional[pygame.Color] = pygame.Color(color) if self.renderable else None
        self.radius = float(radius)

        # Lifetime is owned by the scene, not by the selection
        self.alive: bool = True

    def __repr__(self) -> str:
        p = self.world_pos
        return f"SceneObject({self.name!r}, handle={self.handle}, pos=({p.x:.2f}, {p.y:.2f}, {p.z:.2f}))"

    # ---------- trackable capability ----------
    def get_world_position(self) -> pygame.Vector3:
        return pygame.Vector3(self.world_pos)

    def get_appearance(self) -> pygame.Color:
        if self.color is None:
            raise MissingCapability(f"{self.name} has no renderer")
        return pygame.Color(self.color)

    def set_appearance(self, value: Any) -> None:
        if self.color is None:
            raise MissingCapability(f"{self.name} has no renderer")
        self.color = pygame.Color(value)

    # ---------- lifetime ----------
    def destroy(self) -> None:
        self.alive = False

    # ---------- rendering ----------
    def screen_radius(self, camera: CameraLike, depth: float) -> int:
        if depth <= 0:
            return 0
        r = self.radius / max(1e-9, camera.world_units_per_pixel(depth))
        return max(settings.OBJECT_MIN_SCREEN_RADIUS, int(round(r)))

    def draw(self, screen: pygame.Surface, camera: CameraLike, projected: Optional[Sequence[float]] = None) -> None:
        """Draw as a disc; `projected` is an optional precomputed (x, y, depth)."""
        if not self.alive or self.color is None:
            return
        p = projected if projected is not None else camera.world_to_screen(self.world_pos)
        x, y, depth = float(p[0]), float(p[1]), float(p[2])
        if depth <= 0:
            return
        r = self.screen_radius(camera, depth)
        pygame.draw.circle(screen, self.color, (round(x), round(y)), r)
        pygame.draw.circle(screen, (20, 20, 20), (round(x), round(y)), r, 1)


def make_grid(
    cols: int = settings.DEMO_GRID_COLS,
    rows: int = settings.DEMO_GRID_ROWS,
    spacing: float = settings.DEMO_GRID_SPACING,
    *,
    height: float = 0.0,
    color: Any = settings.OBJECT_COLOR,
) -> List[SceneObject]:
    """Lay out cols x rows objects on the XZ plane, centred on the origin."""
    x0 = -(cols - 1) * spacing * 0.5
    z0 = -(rows - 1) * spacing * 0.5
    out: List[SceneObject] = []
    for row in range(rows):
        for col in range(cols):
            pos: Tuple[float, float, float] = (x0 + col * spacing, height, z0 + row * spacing)
            out.append(SceneObject(pos, color=color, name=f"cell-{col}-{row}"))
    return out


__all__ = ["SceneObject", "make_grid"]
