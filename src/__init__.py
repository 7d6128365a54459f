# src/__init__.py — v1
"""watchbutler: catalog question answering with live market prices."""

from watchbutler.version import __version__

__all__ = ["__version__"]
