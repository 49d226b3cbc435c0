# marquee/core/selection_engine.py
"""
Selection engine: turns a screen rectangle plus a snapshot of visible objects
into a new selected set and the (entered, exited) delta between evaluations.

Rules for a candidate object:
- its world position projects in front of the camera (depth > 0), and
- the projected (x, y) lies inside the rectangle, edges included.

Objects selected previously but missing from the snapshot (or destroyed)
exit implicitly. Objects selected before and after an evaluation receive no
appearance writes. The stored selection is swapped in one assignment once
all transitions have been applied.
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from typing import Any, Dict, FrozenSet, Iterable, List, Optional, Set

import pygame

from marquee.core.errors import ConfigurationError
from marquee.core.geometry import DragRect
from marquee.core.handles import ObjectRef, make_ref, object_handle, resolve
from marquee.core.projection import world_to_screen
from marquee.core.visual_state import VisualStateManager
from marquee.utils.camera_types import CameraLike, Handle, Point2, TrackableLike
from marquee.utils.event_bus import SELECTION_CHANGED, EventBus, bus as shared_bus

log = logging.getLogger(__name__)


class SelectionMode(enum.Enum):
    REPLACE = "replace"  # the rectangle's contents become the selection
    ADD = "add"          # union with the previous selection
    TOGGLE = "toggle"    # flip membership of everything in the rectangle


def mode_from_mods(mods: int) -> SelectionMode:
    """Modifiers: Ctrl=toggle, Shift=additive, none=replace."""
    if mods & pygame.KMOD_CTRL:
        return SelectionMode.TOGGLE
    if mods & pygame.KMOD_SHIFT:
        return SelectionMode.ADD
    return SelectionMode.REPLACE


@dataclass(frozen=True)
class SelectionDelta:
    """
    Handles that entered/exited the selection in one evaluation, plus the
    resulting set. A handle taken over by a new object after its previous
    owner died is in both `exited` and `entered`.
    """

    entered: FrozenSet[Handle] = frozenset()
    exited: FrozenSet[Handle] = frozenset()
    selected: FrozenSet[Handle] = frozenset()

    @property
    def changed(self) -> bool:
        return bool(self.entered or self.exited)


class SelectionEngine:
    """Owns the selected set; delegates appearance changes to a VisualStateManager."""

    def __init__(self, visual_state: Optional[VisualStateManager] = None, *, bus: Optional[EventBus] = None) -> None:
        self.visual_state = visual_state if visual_state is not None else VisualStateManager()
        self.bus = bus if bus is not None else shared_bus
        self._selected: Dict[Handle, ObjectRef] = {}

    # ------------------------------------------------------------------ #
    # Queries
    # ------------------------------------------------------------------ #

    @property
    def selected(self) -> FrozenSet[Handle]:
        return frozenset(self._selected)

    def __len__(self) -> int:
        return len(self._selected)

    def __contains__(self, handle: Handle) -> bool:
        return handle in self._selected

    def is_selected(self, obj: Any) -> bool:
        return object_handle(obj) in self._selected

    def resolve(self, handle: Handle) -> Optional[Any]:
        """Live object behind a selected handle, or None if it is gone."""
        ref = self._selected.get(handle)
        return resolve(ref) if ref is not None else None

    def selected_objects(self) -> List[Any]:
        """Live selected objects (destroyed ones are left out)."""
        out = []
        for ref in self._selected.values():
            obj = resolve(ref)
            if obj is not None:
                out.append(obj)
        return out

    def contains(self, rect: DragRect, obj: TrackableLike, camera: CameraLike) -> bool:
        """Whether `obj` projects in front of `camera` and inside `rect`."""
        try:
            p = world_to_screen(obj.get_world_position(), camera)
        except ConfigurationError:
            raise
        except Exception:
            log.warning("Could not project %r; leaving it out of the selection", obj, exc_info=True)
            return False
        return p.z > 0.0 and rect.contains(p)

    # ------------------------------------------------------------------ #
    # Evaluation
    # ------------------------------------------------------------------ #

    def evaluate(
        self,
        min_screen: Point2,
        max_screen: Point2,
        visible_objects: Iterable[TrackableLike],
        camera: Optional[CameraLike],
        *,
        mode: SelectionMode = SelectionMode.REPLACE,
    ) -> SelectionDelta:
        """Recompute the selection from a screen rectangle and a visible-object snapshot."""
        if camera is None:
            raise ConfigurationError("selection evaluation requires a camera")

        rect = DragRect.from_points(min_screen, max_screen)
        snapshot = tuple(visible_objects)

        present: Set[Handle] = set()
        hits: Dict[Handle, Any] = {}
        for obj in snapshot:
            if not getattr(obj, "alive", True):
                continue
            h = object_handle(obj)
            present.add(h)
            if self.contains(rect, obj, camera):
                hits[h] = obj

        # Entries whose object is gone always exit; a handle reused by a new
        # object afterwards is a fresh entry with its own reference.
        dead = {h for h, ref in self._selected.items() if resolve(ref) is None}
        previous = {h: ref for h, ref in self._selected.items() if h not in dead}
        kept = {h for h in previous if h in present}
        hit_set = set(hits)

        if mode is SelectionMode.REPLACE:
            target = hit_set
        elif mode is SelectionMode.ADD:
            target = kept | hit_set
        else:
            target = (kept - hit_set) | (hit_set - kept)

        exited = frozenset(dead | (set(previous) - target))
        entered = frozenset(target - set(previous))

        for h in exited:
            self.visual_state.on_exit(h)
        for h in entered:
            self.visual_state.on_enter(h, hits[h])

        self._selected = {h: previous[h] if h in previous else make_ref(hits[h]) for h in target}

        delta = SelectionDelta(entered=entered, exited=exited, selected=frozenset(target))
        log.debug(
            "Selection %s in %s: %d visible, %d hit, +%d -%d, %d selected",
            mode.value, rect, len(snapshot), len(hits), len(entered), len(exited), len(target),
        )
        self._notify(delta)
        return delta

    def select_all_visible(
        self,
        visible_objects: Iterable[TrackableLike],
        camera: Optional[CameraLike],
        *,
        mode: SelectionMode = SelectionMode.REPLACE,
    ) -> SelectionDelta:
        """Evaluate with the whole viewport as the rectangle."""
        if camera is None:
            raise ConfigurationError("selection evaluation requires a camera")
        rect = DragRect.full_viewport(camera.width, camera.height)
        return self.evaluate(rect.min, rect.max, visible_objects, camera, mode=mode)

    def clear(self) -> SelectionDelta:
        """Deselect everything, restoring appearances."""
        exited = frozenset(self._selected)
        for h in exited:
            self.visual_state.on_exit(h)
        self._selected = {}
        delta = SelectionDelta(exited=exited)
        self._notify(delta)
        return delta

    def _notify(self, delta: SelectionDelta) -> None:
        if delta.changed:
            self.bus.emit(SELECTION_CHANGED, entered=delta.entered, exited=delta.exited, selected=delta.selected)


__all__ = ["SelectionDelta", "SelectionEngine", "SelectionMode", "mode_from_mods"]
