# marquee/world/visibility.py
"""
Visible object provider.

Holds the objects eligible for selection, in registration order, and hands
out read-only snapshots. An object is in a snapshot when it is alive, not
hidden by the host (`set_visible(obj, False)`), and not culled by the last
`refresh_from_camera`. Host hides and camera culling are tracked apart, so a
refresh never brings back an object the host hid. It is an ordinary object
passed to the selector, never module-level state, so tests can build one
per case.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Iterator, List, Set, Tuple

from marquee.core.handles import object_handle
from marquee.utils.camera_types import CameraLike, Handle, TrackableLike

log = logging.getLogger(__name__)


def _in_viewport(camera: CameraLike, p) -> bool:
    check = getattr(camera, "in_viewport", None)
    if callable(check):
        return bool(check(p))
    x, y, depth = float(p[0]), float(p[1]), float(p[2])
    return depth > 0.0 and 0.0 <= x <= camera.width and 0.0 <= y <= camera.height


class VisibilityTracker:
    """Registry of trackable objects with a per-object visible flag."""

    def __init__(self) -> None:
        self._objects: Dict[Handle, TrackableLike] = {}
        self._hidden: Set[Handle] = set()  # hidden by the host
        self._culled: Set[Handle] = set()  # outside the camera view at the last refresh

    def __len__(self) -> int:
        return len(self._objects)

    def __contains__(self, obj: Any) -> bool:
        return object_handle(obj) in self._objects

    def __iter__(self) -> Iterator[TrackableLike]:
        return iter(list(self._objects.values()))

    # ------------------------------------------------------------------ #
    # Registration
    # ------------------------------------------------------------------ #

    def register(self, obj: TrackableLike, *, visible: bool = True) -> None:
        h = object_handle(obj)
        self._objects[h] = obj
        self._culled.discard(h)
        if visible:
            self._hidden.discard(h)
        else:
            self._hidden.add(h)

    def unregister(self, obj: TrackableLike) -> bool:
        h = object_handle(obj)
        self._hidden.discard(h)
        self._culled.discard(h)
        return self._objects.pop(h, None) is not None

    def clear(self) -> None:
        self._objects.clear()
        self._hidden.clear()
        self._culled.clear()

    # ------------------------------------------------------------------ #
    # Visibility
    # ------------------------------------------------------------------ #

    def set_visible(self, obj: TrackableLike, visible: bool) -> None:
        """Host-side show/hide; kept across camera refreshes."""
        h = object_handle(obj)
        if h not in self._objects:
            raise KeyError(f"{obj!r} is not registered")
        if visible:
            self._hidden.discard(h)
        else:
            self._hidden.add(h)

    def _shown(self, h: Handle, obj: Any) -> bool:
        return h not in self._hidden and h not in self._culled and getattr(obj, "alive", True)

    def is_visible(self, obj: TrackableLike) -> bool:
        h = object_handle(obj)
        return h in self._objects and self._shown(h, obj)

    def refresh_from_camera(self, camera: CameraLike) -> int:
        """
        Cull objects that do not project inside the viewport in front of the
        camera. An object whose position cannot be read or projected is
        logged and culled. Returns the number of visible objects.
        """
        items: List[Tuple[Handle, TrackableLike]] = []
        positions = []
        culled: Set[Handle] = set()
        for h, obj in self._objects.items():
            try:
                positions.append(obj.get_world_position())
            except Exception:
                log.warning("Could not read position of %r; culling it", obj, exc_info=True)
                culled.add(h)
                continue
            items.append((h, obj))

        many = getattr(camera, "world_to_screen_many", None)
        if items and callable(many):
            projected = list(many(positions))
        else:
            projected = []
            for (h, obj), pos in zip(items, positions):
                try:
                    projected.append(camera.world_to_screen(pos))
                except Exception:
                    log.warning("Could not project %r; culling it", obj, exc_info=True)
                    projected.append(None)

        for (h, _), p in zip(items, projected):
            if p is None or not _in_viewport(camera, p):
                culled.add(h)
        self._culled = culled

        visible = sum(1 for h, obj in self._objects.items() if self._shown(h, obj))
        log.debug("Visibility refresh: %d/%d visible", visible, len(self._objects))
        return visible

    def snapshot(self) -> Tuple[TrackableLike, ...]:
        """Visible, alive objects at this instant (a tuple; later changes do not affect it)."""
        return tuple(obj for h, obj in self._objects.items() if self._shown(h, obj))


__all__ = ["VisibilityTracker"]
