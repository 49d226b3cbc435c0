"""Overlay renderers driven by the gesture tracker."""
__all__ = []
