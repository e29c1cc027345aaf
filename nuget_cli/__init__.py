"""Command line interface for the NuGet release plugin."""

from .main import main

__all__ = ["main"]
