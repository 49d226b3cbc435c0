# marquee/core/projection.py
"""
Coordinate projector: world -> screen, and screen <-> overlay-surface local space.

The overlay surface is the 2D space the selection rectangle is drawn in.
Two render modes are supported and must not be mixed up:

- OVERLAY: the surface is pinned to the screen; conversions never use a
  camera. Local coordinates are pixels relative to the surface's pivot,
  divided by `scale`.
- CAMERA_SPACE: the surface is a plane `plane_distance` in front of its
  camera. Screen points are unprojected onto that plane and expressed in the
  plane's own frame (origin on the camera axis). A camera is mandatory.

`y_up` picks the local vertical axis direction. Screen space itself is
always pygame's (origin top-left, y down).
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Optional, Tuple

import pygame

import marquee.utils.settings as settings
from marquee.core.errors import ConfigurationError
from marquee.utils.camera_types import CameraLike, Point2, Point3


class RenderMode(enum.Enum):
    OVERLAY = "overlay"
    CAMERA_SPACE = "camera_space"


@dataclass
class OverlaySurface:
    """Screen-space description of the surface the selection box lives on."""

    rect: pygame.Rect
    render_mode: RenderMode = RenderMode.OVERLAY
    camera: Optional[CameraLike] = None
    pivot: Tuple[float, float] = settings.OVERLAY_PIVOT
    y_up: bool = settings.OVERLAY_Y_UP
    plane_distance: float = settings.OVERLAY_PLANE_DISTANCE
    scale: float = settings.OVERLAY_SCALE
    name: str = field(default="overlay", compare=False)

    def __post_init__(self) -> None:
        if not isinstance(self.rect, pygame.Rect):
            self.rect = pygame.Rect(self.rect)
        if self.scale <= 0:
            raise ConfigurationError(f"{self.name}: scale must be > 0 (got {self.scale})")

    @property
    def requires_camera(self) -> bool:
        return self.render_mode is RenderMode.CAMERA_SPACE

    def pivot_screen(self) -> pygame.Vector2:
        """Screen position of the surface's local origin (OVERLAY mode)."""
        px, py = self.pivot
        return pygame.Vector2(self.rect.left + px * self.rect.width, self.rect.top + py * self.rect.height)

    def validate(self) -> None:
        """Fail fast if the surface cannot be used in its render mode."""
        if self.requires_camera and self.camera is None:
            raise ConfigurationError(f"{self.name}: camera-space surface has no camera")


# ---------------------------------------------------------------------------
# World -> screen
# ---------------------------------------------------------------------------

def world_to_screen(world_pos: Point3, camera: Optional[CameraLike]) -> pygame.Vector3:
    """Project a world point to (screen_x, screen_y, depth); depth > 0 means in front."""
    if camera is None:
        raise ConfigurationError("world_to_screen requires a camera")
    p = camera.world_to_screen(world_pos)
    return pygame.Vector3(float(p[0]), float(p[1]), float(p[2]))


# ---------------------------------------------------------------------------
# Screen <-> surface local
# ---------------------------------------------------------------------------

def camera_for_surface(surface: Optional[OverlaySurface]) -> Optional[CameraLike]:
    """
    Camera to use for surface-local conversions: None for OVERLAY surfaces,
    the surface camera otherwise.
    """
    if surface is None:
        raise ConfigurationError("no overlay surface configured")
    if not surface.requires_camera:
        return None
    surface.validate()
    return surface.camera


def _plane_frame(surface: OverlaySurface, camera: CameraLike):
    right, up, forward = camera.basis()
    centre = camera.position + forward * surface.plane_distance
    unit = camera.world_units_per_pixel(surface.plane_distance) * surface.scale
    return centre, right, up, unit


def screen_to_surface_local(
    screen_pos: Point2,
    surface: OverlaySurface,
    camera: Optional[CameraLike] = None,
) -> pygame.Vector2:
    """Map a screen coordinate into the surface's local space."""
    flip = 1.0 if surface.y_up else -1.0

    if not surface.requires_camera:
        origin = surface.pivot_screen()
        lx = (float(screen_pos[0]) - origin.x) / surface.scale
        # screen y grows downward; local y grows upward when y_up
        ly = (origin.y - float(screen_pos[1])) / surface.scale * flip
        return pygame.Vector2(lx, ly)

    if camera is None:
        raise ConfigurationError(f"{surface.name}: camera-space surface needs a camera for local conversion")

    world = camera.screen_to_world(screen_pos, surface.plane_distance)
    centre, right, up, unit = _plane_frame(surface, camera)
    rel = (world[0] - centre[0], world[1] - centre[1], world[2] - centre[2])
    lx = (rel[0] * right[0] + rel[1] * right[1] + rel[2] * right[2]) / unit
    ly = (rel[0] * up[0] + rel[1] * up[1] + rel[2] * up[2]) / unit * flip
    return pygame.Vector2(float(lx), float(ly))


def surface_local_to_screen(
    local_pos: Point2,
    surface: OverlaySurface,
    camera: Optional[CameraLike] = None,
) -> pygame.Vector2:
    """Inverse of `screen_to_surface_local`."""
    flip = 1.0 if surface.y_up else -1.0
    lx, ly = float(local_pos[0]), float(local_pos[1]) * flip

    if not surface.requires_camera:
        origin = surface.pivot_screen()
        return pygame.Vector2(origin.x + lx * surface.scale, origin.y - ly * surface.scale)

    if camera is None:
        raise ConfigurationError(f"{surface.name}: camera-space surface needs a camera for local conversion")

    centre, right, up, unit = _plane_frame(surface, camera)
    world = centre + right * (lx * unit) + up * (ly * unit)
    p = camera.world_to_screen(world)
    return pygame.Vector2(float(p[0]), float(p[1]))


__all__ = [
    "OverlaySurface",
    "RenderMode",
    "camera_for_surface",
    "screen_to_surface_local",
    "surface_local_to_screen",
    "world_to_screen",
]
