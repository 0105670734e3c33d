"""Abort downstream work when the inbound caller disconnects."""

from __future__ import annotations

import asyncio
from typing import Awaitable, TypeVar

from fastapi import Request

from services.errors import ClientDisconnectedError

T = TypeVar("T")

DISCONNECT_POLL_INTERVAL = 0.1


async def run_while_connected(
    request: Request,
    awaitable: Awaitable[T],
    poll_interval: float = DISCONNECT_POLL_INTERVAL,
) -> T:
    """Await ``awaitable`` but cancel it as soon as the client goes away.

    Cancelling the task cancels any in-flight httpx call it is waiting on.
    """
    task = asyncio.ensure_future(awaitable)
    try:
        while True:
            done, _ = await asyncio.wait({task}, timeout=poll_interval)
            if done:
                return task.result()
            if await request.is_disconnected():
                task.cancel()
                raise ClientDisconnectedError("client disconnected")
    finally:
        if not task.done():
            task.cancel()
