# marquee/entities/__init__.py
from .scene_object import SceneObject, make_grid

__all__ = ["SceneObject", "make_grid"]
