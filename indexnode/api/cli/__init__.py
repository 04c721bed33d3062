"""IndexNode CLI package - resolves and prints the index node parameters."""

from .main import main

__all__ = ["main"]
