"""Command-line interface for active document encoding inspection and conversion."""

from .main import main

__all__ = ["main"]
