"""Bounded task runner for per-post detail work.

A runner takes zero-argument callables and returns, in submission order,
either each task's result or the exception it raised.  Width 1 runs the
tasks inline one after another; wider runners use a ``ThreadPoolExecutor``
capped at that many workers.
"""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from typing import Callable, Iterable, List, TypeVar, Union

T = TypeVar("T")

Task = Callable[[], T]
Outcome = Union[T, Exception]
Runner = Callable[[Iterable[Task]], List[Outcome]]


def run_sequential(tasks: Iterable[Task]) -> List[Outcome]:
    outcomes: List[Outcome] = []
    for task in tasks:
        try:
            outcomes.append(task())
        except Exception as exc:
            outcomes.append(exc)
    return outcomes


def make_runner(max_workers: int = 1) -> Runner:
    """Return a runner executing at most *max_workers* tasks at a time."""
    if max_workers <= 1:
        return run_sequential

    def run_pooled(tasks: Iterable[Task]) -> List[Outcome]:
        outcomes: List[Outcome] = []
        with ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="detail") as pool:
            futures = [pool.submit(task) for task in tasks]
            for future in futures:
                try:
                    outcomes.append(future.result())
                except Exception as exc:
                    outcomes.append(exc)
        return outcomes

    return run_pooled
