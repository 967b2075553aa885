"""Race-to-success combinator and its file-reading consumer."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path
from typing import TypeVar

from mimic_core.exceptions import AllFailedError
from mimic_core.fs import read_text

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class FileHit:
    """First readable file among a set of candidates."""

    path: Path
    content: str


def _succeeded(task: asyncio.Future) -> bool:
    return not task.cancelled() and task.exception() is None


def _failure(task: asyncio.Future) -> BaseException:
    if task.cancelled():
        return asyncio.CancelledError()
    return task.exception()  # type: ignore[return-value]


def _consume(task: asyncio.Future) -> None:
    # Mark late outcomes as retrieved so abandoned attempts stay silent
    if not task.cancelled():
        task.exception()


# Losers left running by cancel_pending=False, held until they finish
_background: set[asyncio.Future] = set()


def _schedule(attempts: Iterable[Awaitable[T]]) -> list[asyncio.Future]:
    """Wrap every attempt in a task; on any failure cancel the ones already started."""
    tasks: list[asyncio.Future] = []
    try:
        for attempt in attempts:
            tasks.append(asyncio.ensure_future(attempt))
    except BaseException:
        for task in tasks:
            task.cancel()
        raise
    return tasks


async def race_to_success(attempts: Iterable[Awaitable[T]], *, cancel_pending: bool = True) -> T:
    """Return the result of the first attempt to succeed.

    All attempts run concurrently. The race is decided by completion order,
    not input order: the first attempt to finish successfully wins and the
    outcomes of the others are discarded. It fails only once every attempt
    has failed.

    Args:
        attempts: Awaitables to race (coroutines, tasks or futures).
        cancel_pending: Cancel attempts still running once a winner is known.
            When False they run to completion in the background.

    Returns:
        Result of the winning attempt.

    Raises:
        AllFailedError: If every attempt failed, or none was given. ``errors``
            holds one failure per attempt, in input order.

    Example:
        hit = await race_to_success([fetch(mirror) for mirror in mirrors])
    """
    tasks = _schedule(attempts)
    if not tasks:
        raise AllFailedError([])

    for task in tasks:
        task.add_done_callback(_consume)

    pending: set[asyncio.Future] = set(tasks)
    try:
        while pending:
            done, pending = await asyncio.wait(pending, return_when=asyncio.FIRST_COMPLETED)
            # Ties within one wakeup go to the earliest attempt
            winner = next((task for task in tasks if task in done and _succeeded(task)), None)
            if winner is not None:
                logger.debug(f"Attempt {tasks.index(winner)} of {len(tasks)} won the race")
                for task in pending:
                    if cancel_pending:
                        task.cancel()
                    else:
                        _background.add(task)
                        task.add_done_callback(_background.discard)
                return winner.result()
    except asyncio.CancelledError:
        for task in pending:
            task.cancel()
        raise

    raise AllFailedError([_failure(task) for task in tasks])


async def _read_hit(path: Path) -> FileHit:
    return FileHit(path=path, content=await read_text(path))


async def read_first_available(paths: Iterable[str | Path]) -> FileHit:
    """Read whichever candidate file can be read first.

    Args:
        paths: Candidate file paths, all read concurrently.

    Returns:
        Path and content of the winning candidate.

    Raises:
        AllFailedError: If no candidate could be read; ``errors`` holds the
            per-path ``OSError`` in candidate order.
    """
    return await race_to_success(_read_hit(Path(path)) for path in paths)
