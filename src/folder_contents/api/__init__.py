"""HTTP API for folder-contents."""
