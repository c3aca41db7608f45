"""Per-request execution lifecycle.

``execute`` is called from the UI's event loop. Each request runs on its own
asyncio task, and the task only reports back through ``post``. The records
are written by ``apply``, which the UI calls when it handles that message,
so no two writes to the table ever interleave.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Protocol

from .errors import ExecutionError
from .models import ExecutionRecord, HttpResponse, Request
from .store import RequestStore

logger = logging.getLogger(__name__)


class Executor(Protocol):
    async def send(self, request: Request) -> HttpResponse: ...


@dataclass(frozen=True)
class ExecutionOutcome:
    index: int
    generation: int
    response: Any = None
    error: str | None = None


class ExecutionController:
    def __init__(
        self,
        store: RequestStore,
        executor: Executor,
        post: Callable[[ExecutionOutcome], None],
    ) -> None:
        self.executor = executor
        self.post = post
        self.generation = 0
        self._tasks: set[asyncio.Task[None]] = set()
        self._store = store
        self._records = [ExecutionRecord.idle() for _ in store]

    @property
    def records(self) -> tuple[ExecutionRecord, ...]:
        return tuple(self._records)

    def record(self, index: int) -> ExecutionRecord:
        return self._records[index]

    def execute(self, index: int) -> asyncio.Task[None] | None:
        """Start request ``index`` unless it is already in flight."""
        request = self._store.get(index)
        if request is None:
            logger.debug("Ignoring execute for out-of-range index %s", index)
            return None
        if self._records[index].is_pending:
            logger.debug("Request %s already pending; ignoring", index)
            return None

        self._records[index] = ExecutionRecord.pending()
        task = asyncio.create_task(self._run(index, self.generation, request))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    async def _run(self, index: int, generation: int, request: Request) -> None:
        try:
            response = await self.executor.send(request)
        except ExecutionError as exc:
            logger.warning("%s failed: %s", request.display_name, exc)
            outcome = ExecutionOutcome(index, generation, error=str(exc))
        except Exception as exc:
            logger.exception("Unexpected error while sending %s", request.display_name)
            outcome = ExecutionOutcome(index, generation, error=f"Request failed: {exc!r}")
        else:
            outcome = ExecutionOutcome(index, generation, response=response)
        self.post(outcome)

    def apply(self, outcome: ExecutionOutcome) -> bool:
        """Record a finished execution. Returns False when it was discarded."""
        if outcome.generation != self.generation:
            logger.debug("Discarding result for index %s from a previous load", outcome.index)
            return False
        if not 0 <= outcome.index < len(self._records):
            return False

        if outcome.error is not None:
            record = ExecutionRecord.failed(outcome.error)
        elif isinstance(outcome.response, HttpResponse):
            record = ExecutionRecord.succeeded(outcome.response)
        else:
            logger.warning("Executor returned %r for index %s", type(outcome.response).__name__, outcome.index)
            record = ExecutionRecord.failed("Malformed response from executor.")
        self._records[outcome.index] = record
        return True

    def reset(self, store: RequestStore) -> None:
        """Switch to a reloaded store; in-flight results for the old one are dropped."""
        self._store = store
        self._records = [ExecutionRecord.idle() for _ in store]
        self.generation += 1

    @property
    def in_flight(self) -> int:
        return sum(1 for record in self._records if record.is_pending)
