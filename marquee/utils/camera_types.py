"""
Lightweight type hints for the collaborators the selection core consumes.

- Uses `from __future__ import annotations` so pygame types in annotations
  don't need pygame at import-time (helps headless CI).
- Imports pygame only under TYPE_CHECKING to keep runtime import optional.
- Any object providing these attributes/methods satisfies the protocol;
  nothing has to inherit from them.
"""

from __future__ import annotations

from typing import Any, Hashable, Protocol, Sequence, Tuple, TYPE_CHECKING, Union

# Import pygame for type checking only; avoids runtime dependency on a display.
if TYPE_CHECKING:  # pragma: no cover
    import pygame  # noqa: F401

Point2 = Union[Tuple[float, float], Sequence[float], "pygame.Vector2"]
Point3 = Union[Tuple[float, float, float], Sequence[float], "pygame.Vector3"]
Handle = Hashable


# ---- Camera protocol --------------------------------------------------------

class CameraLike(Protocol):
    """
    Minimal requirements for objects treated as a camera by the projector.

    `world_to_screen` returns (x, y, depth): pixels with the origin at the
    top-left and y growing downward, depth positive in front of the camera.
    `basis`, `position`, `screen_to_world` and `world_units_per_pixel` are
    only needed for camera-space overlay surfaces.
    """

    width: int
    height: int
    position: Any  # world-space position, indexable (x, y, z)

    def basis(self) -> Tuple[Any, Any, Any]: ...
    def world_to_screen(self, world_pos: Point3) -> "pygame.Vector3": ...
    def screen_to_world(self, screen_pos: Point2, depth: float) -> "pygame.Vector3": ...
    def world_units_per_pixel(self, depth: float) -> float: ...


# ---- Consumed capabilities --------------------------------------------------

class TrackableLike(Protocol):
    """An externally owned object the core may select and tint."""

    def get_world_position(self) -> Point3: ...
    def get_appearance(self) -> Any: ...
    def set_appearance(self, value: Any) -> None: ...


class OverlayRendererLike(Protocol):
    """Draws the rubber-band rectangle; anchor is the top-left corner (local space)."""

    def set_visible(self, visible: bool) -> None: ...
    def set_anchor(self, local_pos: Point2) -> None: ...
    def set_size(self, local_size: Point2) -> None: ...


class PointerIndicatorLike(Protocol):
    def set_anchor(self, local_pos: Point2) -> None: ...


class VisibleObjectProvider(Protocol):
    """Externally refreshed collection of objects eligible for selection."""

    def snapshot(self) -> Tuple[TrackableLike, ...]: ...


__all__ = [
    "CameraLike",
    "Handle",
    "OverlayRendererLike",
    "Point2",
    "Point3",
    "PointerIndicatorLike",
    "TrackableLike",
    "VisibleObjectProvider",
]
