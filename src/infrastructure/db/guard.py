from __future__ import annotations

import functools
from collections.abc import Awaitable, Callable
from typing import ParamSpec, TypeVar

import structlog
from sqlalchemy.exc import InterfaceError, OperationalError
from src.domain.errors import StoreUnavailableError

logger = structlog.get_logger()

P = ParamSpec("P")
R = TypeVar("R")


def translate_store_errors(func: Callable[P, Awaitable[R]]) -> Callable[P, Awaitable[R]]:
    """Surface connectivity failures as ``StoreUnavailableError``.

    No retry happens here; retrying is left to the calling layer.
    """

    @functools.wraps(func)
    async def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
        try:
            return await func(*args, **kwargs)
        except (OperationalError, InterfaceError) as exc:
            await logger.aerror("store_unavailable", operation=func.__qualname__, error=str(exc))
            raise StoreUnavailableError("The data store is unavailable") from exc

    return wrapper
