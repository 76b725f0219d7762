"""
Storage module.

Provides persistence of named grid layouts:
- LayoutStore: msgpack-backed save/load/list/delete
- Layout / LayoutSummary: Loaded layout and listing entry
"""

from pathviz.storage.layouts import Layout, LayoutStore, LayoutSummary

__all__ = ["Layout", "LayoutStore", "LayoutSummary"]
