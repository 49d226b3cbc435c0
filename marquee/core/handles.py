# marquee/core/handles.py
"""
Stable object handles and non-owning references.

Selection bookkeeping is keyed by handle, never by the object itself, and
holds objects through weak references so externally destroyed objects are
detected (and skipped) instead of being kept alive or mutated.

Types that cannot be weakly referenced (e.g. `__slots__` without
`__weakref__`) fall back to a strong reference: they stay alive while
selected, and their `alive` flag is the only signal that they are gone.
"""
from __future__ import annotations

import weakref
from typing import Any, Callable, Optional

from marquee.utils.camera_types import Handle

ObjectRef = Callable[[], Optional[Any]]


def object_handle(obj: Any) -> Handle:
    """`obj.handle` when the object carries one, otherwise its identity."""
    handle = getattr(obj, "handle", None)
    return handle if handle is not None else id(obj)


def make_ref(obj: Any) -> ObjectRef:
    """Weak reference when the type supports it; otherwise a closure holding a strong reference."""
    try:
        return weakref.ref(obj)
    except TypeError:
        return lambda: obj


def resolve(ref: ObjectRef) -> Optional[Any]:
    """Dereference, treating objects flagged `alive = False` as gone."""
    obj = ref()
    if obj is None or not getattr(obj, "alive", True):
        return None
    return obj


__all__ = ["ObjectRef", "make_ref", "object_handle", "resolve"]
