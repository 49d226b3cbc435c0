# marquee/core/camera.py
"""
3D camera used to project world-space objects onto the screen.

- Left-handed view basis (x right, y up, z forward), so a camera at the
  origin looking down +z sees +x on the right of the screen.
- Perspective or orthographic projection (numpy 4x4 matrices).
- Screen space follows pygame: origin at the top-left, y grows downward.
- `world_to_screen` returns (x, y, depth); depth is the distance along the
  camera's forward axis and is <= 0 for points on or behind the camera plane.
- Batch projection (`world_to_screen_many`) for culling many objects per frame.
"""

from __future__ import annotations

import math
from typing import Iterable, Sequence, Tuple

import numpy as np
import pygame

import marquee.utils.settings as settings
from marquee.utils.camera_types import Point2, Point3

_EPS = 1e-9
_MAX_PITCH = math.radians(89.0)


def _clamp(x: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, x))


def _normalized(v: np.ndarray) -> np.ndarray:
    n = float(np.linalg.norm(v))
    if n < _EPS:
        raise ValueError("cannot normalize a zero-length vector")
    return v / n


class Camera3D:
    """Perspective/orthographic camera with a look-at target."""

    __slots__ = (
        "width", "height",
        "position", "target", "world_up",
        "fov_deg", "near", "far",
        "orthographic", "ortho_size",
    )

    def __init__(
        self,
        width: int,
        height: int,
        *,
        position: Point3 = settings.CAMERA_START_POSITION,
        target: Point3 = settings.CAMERA_TARGET,
        world_up: Point3 = (0.0, 1.0, 0.0),
        fov_deg: float = settings.CAMERA_FOV_DEG,
        near: float = settings.CAMERA_NEAR,
        far: float = settings.CAMERA_FAR,
        orthographic: bool = False,
        ortho_size: float = settings.CAMERA_ORTHO_SIZE,
    ) -> None:
        self.width = int(width)
        self.height = int(height)
        self.position = np.asarray(position, dtype=float).reshape(3)
        self.target = np.asarray(target, dtype=float).reshape(3)
        self.world_up = np.asarray(world_up, dtype=float).reshape(3)
        self.fov_deg = float(fov_deg)
        self.near = float(near)
        self.far = float(far)
        self.orthographic = bool(orthographic)
        self.ortho_size = float(ortho_size)

    def __repr__(self) -> str:
        kind = "ortho" if self.orthographic else f"fov={self.fov_deg:g}"
        return (
            f"Camera3D({self.width}x{self.height}, {kind}, "
            f"pos={tuple(round(float(c), 3) for c in self.position)}, "
            f"target={tuple(round(float(c), 3) for c in self.target)})"
        )

    # ------------------------------------------------------------------ #
    # Configuration
    # ------------------------------------------------------------------ #

    @property
    def aspect(self) -> float:
        return self.width / max(1, self.height)

    def set_viewport(self, width: int, height: int) -> None:
        self.width = int(width)
        self.height = int(height)

    def look_at(self, target: Point3) -> None:
        self.target = np.asarray(target, dtype=float).reshape(3)

    def orbit(self, d_yaw_deg: float, d_pitch_deg: float) -> None:
        """Rotate the camera around its target, keeping the distance. Pitch is clamped short of the poles."""
        offset = self.position - self.target
        radius = float(np.linalg.norm(offset))
        if radius < _EPS:
            return
        yaw = math.atan2(offset[0], offset[2]) + math.radians(d_yaw_deg)
        pitch = math.asin(_clamp(offset[1] / radius, -1.0, 1.0)) + math.radians(d_pitch_deg)
        pitch = _clamp(pitch, -_MAX_PITCH, _MAX_PITCH)
        self.position = self.target + radius * np.array(
            [math.cos(pitch) * math.sin(yaw), math.sin(pitch), math.cos(pitch) * math.cos(yaw)]
        )

    # ------------------------------------------------------------------ #
    # Matrices
    # ------------------------------------------------------------------ #

    def basis(self) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
        """(right, up, forward) unit vectors in world space."""
        forward = _normalized(self.target - self.position)
        right = np.cross(self.world_up, forward)
        if np.linalg.norm(right) < 1e-6:
            # Looking along world_up; pick any perpendicular helper axis.
            helper = np.array([0.0, 0.0, 1.0]) if abs(forward[2]) < 0.9 else np.array([1.0, 0.0, 0.0])
            right = np.cross(helper, forward)
        right = _normalized(right)
        up = np.cross(forward, right)
        return right, up, forward

    def view_matrix(self) -> np.ndarray:
        """World -> camera space (4x4). Camera-space z is the forward depth."""
        right, up, forward = self.basis()
        m = np.identity(4)
        m[0, :3] = right
        m[1, :3] = up
        m[2, :3] = forward
        m[:3, 3] = -m[:3, :3] @ self.position
        return m

    def projection_matrix(self) -> np.ndarray:
        """
        Camera -> clip space (4x4). Perspective puts depth in w, so the
        divide by w yields normalized device coordinates in [-1, 1].
        """
        depth_range = max(_EPS, self.far - self.near)
        if self.orthographic:
            size = max(_EPS, self.ortho_size)
            m = np.identity(4)
            m[0, 0] = 1.0 / (size * self.aspect)
            m[1, 1] = 1.0 / size
            m[2, 2] = 1.0 / depth_range
            m[2, 3] = -self.near / depth_range
            return m

        t = math.tan(math.radians(self.fov_deg) * 0.5)
        m = np.zeros((4, 4))
        m[0, 0] = 1.0 / (t * self.aspect)
        m[1, 1] = 1.0 / t
        m[2, 2] = self.far / depth_range
        m[2, 3] = -self.near * self.far / depth_range
        m[3, 2] = 1.0
        return m

    # ------------------------------------------------------------------ #
    # Transforms
    # ------------------------------------------------------------------ #

    def world_to_screen_many(self, points: Iterable[Point3]) -> np.ndarray:
        """
        Project a batch of world points. Returns an (N, 3) array of
        (screen_x, screen_y, depth). Points on the camera plane (w == 0)
        are placed at the viewport centre; their depth is 0.
        """
        pts = np.asarray([tuple(p) for p in points], dtype=float).reshape(-1, 3)
        if len(pts) == 0:
            return np.zeros((0, 3))

        homo = np.hstack([pts, np.ones((len(pts), 1))])
        cam = homo @ self.view_matrix().T
        clip = cam @ self.projection_matrix().T
        w = clip[:, 3]
        degenerate = np.abs(w) < _EPS
        safe_w = np.where(degenerate, 1.0, w)
        ndc_x = np.where(degenerate, 0.0, clip[:, 0] / safe_w)
        ndc_y = np.where(degenerate, 0.0, clip[:, 1] / safe_w)

        sx = (ndc_x + 1.0) * 0.5 * self.width
        sy = (1.0 - ndc_y) * 0.5 * self.height
        return np.column_stack([sx, sy, cam[:, 2]])

    def world_to_screen(self, world_pos: Point3) -> pygame.Vector3:
        """Convert world -> (screen_x, screen_y, depth)."""
        sx, sy, depth = self.world_to_screen_many([world_pos])[0]
        return pygame.Vector3(float(sx), float(sy), float(depth))

    def screen_to_world(self, screen_pos: Point2, depth: float) -> pygame.Vector3:
        """World point on the ray through `screen_pos`, `depth` units in front of the camera."""
        sx, sy = float(screen_pos[0]), float(screen_pos[1])
        ndc_x = sx / max(1, self.width) * 2.0 - 1.0
        ndc_y = 1.0 - sy / max(1, self.height) * 2.0

        if self.orthographic:
            half_h = self.ortho_size
        else:
            half_h = depth * math.tan(math.radians(self.fov_deg) * 0.5)
        half_w = half_h * self.aspect

        right, up, forward = self.basis()
        p = self.position + right * (ndc_x * half_w) + up * (ndc_y * half_h) + forward * depth
        return pygame.Vector3(float(p[0]), float(p[1]), float(p[2]))

    def world_units_per_pixel(self, depth: float) -> float:
        """Size of one screen pixel, in world units, on a plane `depth` in front of the camera."""
        if self.orthographic:
            return 2.0 * self.ortho_size / max(1, self.height)
        return 2.0 * depth * math.tan(math.radians(self.fov_deg) * 0.5) / max(1, self.height)

    def is_in_front(self, world_pos: Point3) -> bool:
        return self.world_to_screen(world_pos).z > 0.0

    def in_viewport(self, screen: Sequence[float]) -> bool:
        """True if a projected (x, y, depth) lies inside the viewport and in front of the camera."""
        x, y, depth = float(screen[0]), float(screen[1]), float(screen[2])
        return depth > 0.0 and 0.0 <= x <= self.width and 0.0 <= y <= self.height


__all__ = ["Camera3D"]
