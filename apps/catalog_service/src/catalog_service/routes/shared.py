"""Shared helpers for catalog_service route handlers."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager

from enrichment.exceptions import InvalidRequestError, ProviderError
from fastapi import HTTPException

logger = logging.getLogger(__name__)


@contextmanager
def translate_errors() -> Iterator[None]:
    """Map domain exceptions raised inside a handler to HTTP errors.

    ``InvalidRequestError`` becomes 400 and ``ProviderError`` becomes 502.
    """
    try:
        yield
    except InvalidRequestError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e
    except ProviderError as e:
        logger.warning("Upstream failure: %s", e)
        raise HTTPException(status_code=502, detail=str(e)) from e
