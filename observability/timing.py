"""Wall-clock timing for census parsing and edits, reported to the metrics client."""

from __future__ import annotations

import functools
import logging
import time
from contextlib import contextmanager
from typing import Any, Callable, Generator, TypeVar

from .metrics import get_metrics_client

F = TypeVar("F", bound=Callable[..., Any])

LOGGER = logging.getLogger("signout.timing")


class TimingContext:
    """Times one block.

    On exit ``elapsed_ms`` and ``failed`` are set and the timing is reported
    with an ``outcome`` tag of ``ok`` or ``error``. A failed block also bumps
    the ``<name>.errors`` counter. Exceptions are never suppressed.
    """

    def __init__(self, name: str, tags: dict[str, str] | None = None, emit_metric: bool = True):
        self.name = name
        self.tags = dict(tags or {})
        self.emit_metric = emit_metric
        self.started_at: float = 0.0
        self.elapsed_ms: float = 0.0
        self.failed = False

    def __enter__(self) -> "TimingContext":
        self.started_at = time.perf_counter()
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.elapsed_ms = (time.perf_counter() - self.started_at) * 1000
        self.failed = exc_type is not None
        LOGGER.debug(
            "%s %s in %.2fms", self.name, "failed" if self.failed else "finished", self.elapsed_ms
        )
        if not self.emit_metric:
            return
        tags = {**self.tags, "outcome": "error" if self.failed else "ok"}
        client = get_metrics_client()
        client.timing(self.name, self.elapsed_ms, tags)
        if self.failed:
            client.incr(f"{self.name}.errors", tags)


@contextmanager
def timed(
    name: str, tags: dict[str, str] | None = None, emit_metric: bool = True
) -> Generator[TimingContext, None, None]:
    """Time a block.

    Usage:
        with timed("census.parse", tags={"surface": "api"}) as t:
            sections = parse_sections(text)
    """
    with TimingContext(name, tags, emit_metric) as ctx:
        yield ctx


def timed_function(
    name: str | None = None, tags: dict[str, str] | None = None
) -> Callable[[F], F]:
    """Decorator form of :func:`timed`; the metric defaults to ``census.<function name>``."""

    def decorator(func: F) -> F:
        metric_name = name or f"census.{func.__name__}"

        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            with timed(metric_name, tags):
                return func(*args, **kwargs)

        return wrapper  # type: ignore[return-value]

    return decorator
