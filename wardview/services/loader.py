"""
concurrent page loads

a page asks for several stores at once and waits for all of them. if any one
call fails the whole batch fails: the caller gets a BatchLoadError and no
partial data. there is no automatic retry, the client re-requests the page.
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable
from typing import Any

from wardview.core.errors import BatchLoadError
from wardview.core.logging_config import get_logger

logger = get_logger(__name__)


async def load_batch(view: str, **calls: Awaitable[Any]) -> dict[str, Any]:
    """
    Runs every awaitable concurrently and returns their results by name.

        data = await load_batch(
            "dashboard",
            patients=registry.patients.get_all(),
            staff=registry.staff.get_all(),
        )
    """
    names = list(calls)
    tasks = [asyncio.ensure_future(c) for c in calls.values()]

    try:
        results = await asyncio.gather(*tasks)
    except Exception as exc:
        # gather does not cancel the siblings on the first failure, we do
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        logger.error("batch_failed", view=view, error=repr(exc))
        raise BatchLoadError(view, exc) from exc

    logger.debug("batch_loaded", view=view, parts=names)
    return dict(zip(names, results))
