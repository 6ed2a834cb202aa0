"""docsweep - move the loose contents of directories into a subdirectory."""

from .version import __version__

__all__ = ["__version__"]
