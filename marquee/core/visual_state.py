# marquee/core/visual_state.py
"""
Highlight bookkeeping for selected objects.

Each selected object with a renderable appearance gets exactly one entry
(handle -> original appearance). `on_enter` records the original once and
applies the highlight; `on_exit` puts the original back and drops the entry.
Objects without an appearance are skipped silently.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Iterator, Optional, Tuple

import marquee.utils.settings as settings
from marquee.core.errors import MissingCapability
from marquee.core.handles import ObjectRef, make_ref, resolve
from marquee.utils.camera_types import Handle

log = logging.getLogger(__name__)


def read_appearance(obj: Any) -> Any:
    """Current appearance of `obj`, or MissingCapability if it has none."""
    getter = getattr(obj, "get_appearance", None)
    setter = getattr(obj, "set_appearance", None)
    if not callable(getter) or not callable(setter):
        raise MissingCapability(f"{obj!r} has no appearance accessors")
    value = getter()
    if value is None:
        raise MissingCapability(f"{obj!r} has no renderable appearance")
    return value


class VisualStateManager:
    """Applies and reverts the selection highlight."""

    def __init__(self, highlight: Any = settings.HIGHLIGHT_COLOR) -> None:
        self.highlight = highlight
        self._originals: Dict[Handle, Tuple[ObjectRef, Any]] = {}

    def __len__(self) -> int:
        return len(self._originals)

    def __contains__(self, handle: Handle) -> bool:
        return handle in self._originals

    def __iter__(self) -> Iterator[Handle]:
        return iter(list(self._originals))

    def original_appearance(self, handle: Handle) -> Optional[Any]:
        entry = self._originals.get(handle)
        return entry[1] if entry is not None else None

    # ------------------------------------------------------------------ #
    # Transitions
    # ------------------------------------------------------------------ #

    def on_enter(self, handle: Handle, obj: Any) -> bool:
        """Record the original appearance (first time only) and highlight. Returns True if highlighted."""
        if handle not in self._originals:
            try:
                original = read_appearance(obj)
            except MissingCapability as e:
                log.debug("Skipping highlight for %s: %s", handle, e)
                return False
            except Exception:
                log.warning("Failed to read appearance of %s", handle, exc_info=True)
                return False
            self._originals[handle] = (make_ref(obj), original)

        try:
            obj.set_appearance(self.highlight)
        except MissingCapability as e:
            self._originals.pop(handle, None)
            log.debug("Skipping highlight for %s: %s", handle, e)
            return False
        except Exception:
            self._originals.pop(handle, None)
            log.warning("Failed to highlight %s", handle, exc_info=True)
            return False
        return True

    def on_exit(self, handle: Handle) -> bool:
        """Restore the recorded appearance and forget it. Returns True if restored."""
        entry = self._originals.pop(handle, None)
        if entry is None:
            return False

        ref, original = entry
        obj = resolve(ref)
        if obj is None:
            log.debug("Object %s vanished before its appearance could be restored", handle)
            return False

        try:
            obj.set_appearance(original)
        except Exception:
            log.warning("Failed to restore appearance of %s", handle, exc_info=True)
            return False
        return True

    def restore_all(self) -> int:
        """Restore every recorded object (shutdown / teardown). Returns the number restored."""
        return sum(1 for h in list(self._originals) if self.on_exit(h))


__all__ = ["VisualStateManager", "read_appearance"]
