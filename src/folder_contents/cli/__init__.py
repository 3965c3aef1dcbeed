"""Command line interface for folder-contents."""
