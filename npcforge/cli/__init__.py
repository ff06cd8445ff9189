"""Command line interface for npcforge."""

from .app import app

__all__ = ["app"]
