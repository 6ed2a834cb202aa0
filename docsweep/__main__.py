"""Allow ``python -m docsweep``."""

from .cli.sweep import sweep

if __name__ == "__main__":
    sweep()
