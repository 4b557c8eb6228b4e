"""reltag: CI helpers for tag enumeration and tag-driven GitHub releases."""

__version__ = "0.1.0"
