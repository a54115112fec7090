"""Context composer: run stages strictly in order, threading the context."""

from __future__ import annotations

import asyncio
import inspect
import logging
from collections.abc import Sequence
from typing import Any, Callable

from .context import EMPTY_CONTEXT

logger = logging.getLogger(__name__)


def is_async_callable(fn: Callable[..., Any]) -> bool:
    """True for coroutine functions and objects whose ``__call__`` is one."""
    return inspect.iscoroutinefunction(fn) or inspect.iscoroutinefunction(
        getattr(fn, "__call__", None)
    )


async def invoke(fn: Callable[..., Any], *args: Any, **kwargs: Any) -> Any:
    """Call *fn* and await the outcome.

    Coroutine functions are awaited on the running loop.  Plain functions run
    in a worker thread via ``asyncio.to_thread`` so they never block the loop;
    an awaitable they return is awaited as well.
    """
    if is_async_callable(fn):
        return await fn(*args, **kwargs)
    result = await asyncio.to_thread(fn, *args, **kwargs)
    if inspect.isawaitable(result):
        result = await result
    return result


async def compose_context(
    stages: Sequence[Callable[..., Any]], initial: Any = EMPTY_CONTEXT
) -> Any:
    """Run *stages* one after the other and return the final context.

    Stage *i* receives exactly what stage *i-1* returned (``initial`` for the
    first).  Exceptions are not caught here: the first failing stage aborts
    the rest and the exception reaches the caller unchanged.
    """
    ctx = initial
    for index, stage in enumerate(stages):
        logger.debug(
            "Running stage %d/%d: %s",
            index + 1,
            len(stages),
            getattr(stage, "__qualname__", type(stage).__name__),
        )
        ctx = await invoke(stage, ctx)
    return ctx
