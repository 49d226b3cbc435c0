# marquee/world/__init__.py
from .visibility import VisibilityTracker

__all__ = ["VisibilityTracker"]
