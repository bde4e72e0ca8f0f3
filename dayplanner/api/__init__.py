"""API routers."""

from dayplanner.api import plans

__all__ = ["plans"]
