"""HTTP route modules for catalog_service."""

from . import applist, apps, browse, search, stream

__all__ = ["applist", "apps", "browse", "search", "stream"]
