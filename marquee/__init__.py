# --- FILE: marquee/__init__.py
"""
Top-level package for Marquee Select: rubber-band selection of projected
3D objects in a pygame frame loop.

Having an __init__ here ensures imports like
`from marquee.core.selector import MarqueeSelector` work consistently on all
environments, including test runners that don't inject the project root.
"""
__version__ = "0.1.0"
__all__ = ["core", "entities", "ui", "utils", "world"]
