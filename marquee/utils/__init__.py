"""Utilities package marker (settings, logging, event bus, typing protocols)."""
__all__ = []
