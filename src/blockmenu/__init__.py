"""blockmenu - context menus and scheduling timestamps for a block outliner."""

__version__ = "0.3.0"
