"""
Selection core: camera and projection, gesture tracking, the selection
engine and highlight bookkeeping.

Submodules are imported explicitly by callers; nothing is re-exported here
so `marquee.ui` can import from `marquee.core` without cycles.
"""
__all__ = []
