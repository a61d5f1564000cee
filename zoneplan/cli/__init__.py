"""Command line interface for zoneplan."""

from .main import app

__all__ = ["app"]
