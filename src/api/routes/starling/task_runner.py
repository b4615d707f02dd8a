"""Runner de processamento em background (WEBHOOK_PROCESSING_MODE=async).

Uma instância por processo: criada no lifespan, guardada em
`app.state.task_runner` e drenada no shutdown.
"""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Coroutine

    from app.domain.transfer import ProcessingResult

logger = logging.getLogger(__name__)


class FeedItemTaskRunner:
    """Executa entregas de feed item fora do request, com teto de concorrência.

    Cada task herda o contexto do request (correlation_id incluso). Tasks
    concluídas saem do registro sozinhas; falhas que escapam do pipeline são
    logadas no callback.
    """

    def __init__(self, max_concurrent: int = 100) -> None:
        if max_concurrent <= 0:
            msg = "max_concurrent deve ser > 0"
            raise ValueError(msg)
        self._max_concurrent = max_concurrent
        self._slots = asyncio.Semaphore(max_concurrent)
        self._tasks: set[asyncio.Task[Any]] = set()

    @property
    def max_concurrent(self) -> int:
        return self._max_concurrent

    @property
    def pending(self) -> int:
        """Tasks agendadas e ainda não concluídas."""
        return len(self._tasks)

    def submit(
        self,
        coroutine: Coroutine[Any, Any, ProcessingResult | None],
        *,
        correlation_id: str,
    ) -> asyncio.Task[ProcessingResult | None]:
        """Agenda o processamento de uma entrega e devolve a task."""
        task = asyncio.create_task(
            self._run_in_slot(coroutine),
            name=f"feed-item:{correlation_id}",
        )
        self._tasks.add(task)
        task.add_done_callback(self._forget)
        logger.info(
            "feed_item_task_submitted",
            extra={"correlation_id": correlation_id, "pending_tasks": self.pending},
        )
        return task

    async def _run_in_slot(
        self,
        coroutine: Coroutine[Any, Any, ProcessingResult | None],
    ) -> ProcessingResult | None:
        async with self._slots:
            return await coroutine

    def _forget(self, task: asyncio.Task[Any]) -> None:
        self._tasks.discard(task)
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            logger.error(
                "feed_item_task_failed",
                extra={"task": task.get_name(), "error_type": type(exc).__name__},
            )

    async def drain(self, timeout_seconds: float = 30.0) -> int:
        """Aguarda as tasks pendentes; cancela as que passarem do timeout.

        Returns:
            Quantidade de tasks canceladas.
        """
        if not self._tasks:
            return 0

        logger.info(
            "feed_item_tasks_draining",
            extra={"pending_tasks": self.pending, "timeout_seconds": timeout_seconds},
        )
        finished, overdue = await asyncio.wait(set(self._tasks), timeout=timeout_seconds)
        self._tasks -= finished
        for task in overdue:
            task.cancel()
        if overdue:
            await asyncio.gather(*overdue, return_exceptions=True)
            self._tasks -= overdue
            logger.warning(
                "feed_item_tasks_cancelled",
                extra={"cancelled_tasks": len(overdue)},
            )
        return len(overdue)
