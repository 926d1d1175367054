"""Adapters from asynchronous completions to ``Optional`` results.

``of_completion`` works on asyncio futures and coroutines and hands back a new
future. ``settle`` is the coroutine form and runs under any anyio backend.
Both swallow the source's failure: it is reported on the package logger at
DEBUG level and is otherwise discarded.
"""
from __future__ import annotations
import asyncio
from typing import Awaitable, TypeVar

import anyio

from .logger import ConsoleLogger, get_logger
from .optional import Optional

T = TypeVar("T")


def of_completion(source: Awaitable[T], *, logger: ConsoleLogger | None = None) -> "asyncio.Future[Optional[T]]":
    # coroutines are scheduled on the running loop
    src = asyncio.ensure_future(source)
    out: asyncio.Future[Optional[T]] = src.get_loop().create_future()
    log = logger if logger is not None else get_logger()

    def _settle(f: "asyncio.Future[T]") -> None:
        # retrieve the exception even when out was cancelled
        ex = None if f.cancelled() else f.exception()
        if out.done():
            return
        if f.cancelled():
            log.debug("completion cancelled, settling empty")
            out.set_result(Optional.empty())
        elif ex is not None:
            log.debug("completion failed, settling empty", error=repr(ex))
            out.set_result(Optional.empty())
        else:
            out.set_result(Optional.of(f.result()))

    src.add_done_callback(_settle)
    return out


async def settle(source: Awaitable[T], *, logger: ConsoleLogger | None = None) -> Optional[T]:
    log = logger if logger is not None else get_logger()
    try:
        value = await source
    except anyio.get_cancelled_exc_class():
        # cancellation always propagates
        raise
    except Exception as ex:
        log.debug("completion failed, settling empty", error=repr(ex))
        return Optional.empty()
    return Optional.of(value)
