"""CLI commands for folder-contents."""

from . import db, ls, serve

__all__ = ["db", "ls", "serve"]
