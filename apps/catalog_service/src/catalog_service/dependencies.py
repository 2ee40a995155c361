import logging

from fastapi import Request

from .runtime import CatalogRuntime

logger = logging.getLogger(__name__)


async def get_runtime(request: Request) -> CatalogRuntime:
    """
    Dependency that provides the process-wide CatalogRuntime.

    The runtime is built in the FastAPI lifespan event and stored in the
    app's state. This dependency retrieves it. No cleanup is needed here
    since the runtime lifecycle is managed by the lifespan context manager.

    Args:
        request: FastAPI request object containing app state

    Returns:
        Initialized CatalogRuntime instance

    Raises:
        RuntimeError: If the runtime is not available in app state
    """
    if (
        not hasattr(request.app.state, "runtime")
        or request.app.state.runtime is None
    ):
        logger.error("CatalogRuntime not initialized in app state.")
        raise RuntimeError("CatalogRuntime not available.")
    return request.app.state.runtime
