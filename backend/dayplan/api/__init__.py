"""API routers."""

from dayplan.api import timeline

__all__ = [
    "timeline",
]
