"""Version information for docsweep."""

__version__ = "1.0.0"
