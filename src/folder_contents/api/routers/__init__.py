"""API routers."""

from . import folder_contents_router as folder_contents

__all__ = ["folder_contents"]
