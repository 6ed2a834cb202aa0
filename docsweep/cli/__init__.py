"""Command line interface for docsweep."""

from .sweep import sweep

__all__ = ["sweep"]
