"""Composition primitives for asynchronous remote calls.

All remote operations are coroutines. These helpers compose them into
sequential chains: a stage only starts once the previous one resolved, and the
first failure ends the whole chain with that failure.
"""

import asyncio
from typing import Awaitable, Callable, Iterable, TypeVar

A = TypeVar("A")
B = TypeVar("B")
T = TypeVar("T")


async def chain(first: Awaitable[A], then: Callable[[A], Awaitable[B]]) -> B:
    """Await ``first`` and feed its result into ``then``.

    Args:
        first (Awaitable[A]): The first stage.
        then (Callable[[A], Awaitable[B]]): Builds the second stage from the first stage's result.

    Returns:
        B: The result of the second stage.

    Raises:
        Exception: Whatever the first or second stage raised. If the first stage fails, ``then`` is never called.
    """
    result = await first
    return await then(result)


async def delay_then(seconds: float, continuation: Callable[[], Awaitable[T]]) -> T:
    """Wait at least ``seconds`` before starting ``continuation``.

    The delay is measured from the moment this stage starts. A delay of 0 still
    yields to the event loop once.

    Args:
        seconds (float): Minimum delay in seconds.
        continuation (Callable[[], Awaitable[T]]): Builds the stage to run after the delay.

    Returns:
        T: The result of the continuation.

    Raises:
        ValueError: If ``seconds`` is negative.
    """
    if seconds < 0:
        raise ValueError(f"Delay must not be negative, got {seconds}.")
    await asyncio.sleep(seconds)
    return await continuation()


async def run_sequentially(steps: Iterable[Callable[[], Awaitable[T]]]) -> list[T]:
    """Run the given steps one after another and collect their results.

    Each step is a zero-argument callable returning an awaitable, so a step is
    only created once the previous one resolved.

    Args:
        steps (Iterable[Callable[[], Awaitable[T]]]): The steps in execution order.

    Returns:
        list[T]: The results in execution order.

    Raises:
        Exception: The error of the first failing step. Later steps are not started.
    """
    results: list[T] = []
    for step in steps:
        results.append(await step())
    return results
