from __future__ import annotations

import json
import logging
import time
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from functools import wraps
from typing import Any, AsyncIterator, Awaitable, Callable, TypeVar

from ...domain.shared.errors import error_kind_of

T = TypeVar("T")


class MetricsClient:
    """
    Emits one JSON line per timed network action (RPC call, transaction,
    metadata fetch) to the ``metrics.actions`` logger.

    Failed actions carry the exception class and its ``ErrorKind`` value.
    """

    def __init__(self):
        self._logger = logging.getLogger("metrics.actions")
        self._labels: dict[str, Any] = {}

    def configure(self, logger: logging.Logger | None = None, *, network: str | None = None) -> None:
        if logger:
            self._logger = logger
        if network:
            self._labels["network"] = network

    def _emit(
        self,
        action: str,
        duration_ms: float,
        failure: BaseException | None,
        *,
        source: str | None,
        extra: dict | None,
    ) -> None:
        record: dict[str, Any] = {
            "ts": datetime.now(timezone.utc).isoformat(),
            "action": action,
            "duration_ms": round(duration_ms, 3),
            "success": failure is None,
            **self._labels,
        }
        if source:
            record["source"] = source
        if failure is not None:
            record["error"] = failure.__class__.__name__
            record["error_kind"] = error_kind_of(failure).value
        if extra:
            record.update(extra)
        self._logger.info(json.dumps(record, ensure_ascii=False, default=str))

    @asynccontextmanager
    async def span_async(
        self,
        action: str,
        *,
        source: str | None = None,
        extra: dict | None = None,
    ) -> AsyncIterator[None]:
        started = time.perf_counter()
        failure: BaseException | None = None
        try:
            yield
        except Exception as exc:
            failure = exc
            raise
        finally:
            self._emit(action, (time.perf_counter() - started) * 1000, failure, source=source, extra=extra)

    def wrap_async(
        self,
        action: str,
        *,
        source: str | None = None,
        extra_fn: Callable[..., dict | None] | None = None,
    ):
        def decorator(func: Callable[..., Awaitable[T]]):
            @wraps(func)
            async def timed(*args, **kwargs):
                extra = extra_fn(*args, **kwargs) if extra_fn else None
                async with self.span_async(action, source=source, extra=extra):
                    return await func(*args, **kwargs)

            return timed

        return decorator


metrics = MetricsClient()
