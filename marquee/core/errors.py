# marquee/core/errors.py
"""
Error taxonomy for marquee selection.

- ConfigurationError: a required collaborator is missing (camera when the
  overlay needs one, the overlay surface, the object provider). Raised at
  setup and never recovered mid-gesture.
- MissingCapability: an object has no renderable appearance. Non-fatal; the
  visual state manager skips the object and the evaluation pass continues.

Objects vanishing between evaluations are not an error at all: they are
treated as implicit exits by the selection engine.
"""
from __future__ import annotations


class ConfigurationError(RuntimeError):
    """A required collaborator was not provided."""


class MissingCapability(LookupError):
    """The object cannot report or accept an appearance."""


__all__ = ["ConfigurationError", "MissingCapability"]
