"""Main CLI entry point for folder-contents."""  # pragma: no cover

from folder_contents.cli.app import app  # pragma: no cover

# Register commands
from folder_contents.cli.commands import (  # noqa: F401  # pragma: no cover
    db,
    ls,
    serve,
)

if __name__ == "__main__":  # pragma: no cover
    app()
