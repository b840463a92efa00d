import asyncio
import copy
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, List, Sequence

from loguru import logger

from nhl_stats.upstream.base_client import UpstreamError


@dataclass(frozen=True)
class FetchTask:
    """One outbound call in a fetch plan.

    ``required`` tasks fail the whole plan. Best-effort tasks swallow an
    ``UpstreamError`` and yield a fresh copy of ``fallback`` instead.
    """

    name: str
    call: Callable[[], Awaitable[Any]]
    required: bool = True
    fallback: Any = None


class FetchPlan:
    """A fixed set of fetches run either concurrently or in declaration order."""

    def __init__(self, tasks: Sequence[FetchTask], concurrent: bool = True):
        names = [task.name for task in tasks]
        if len(set(names)) != len(names):
            raise ValueError(f"Duplicate task names in fetch plan: {names}")
        self.tasks: List[FetchTask] = list(tasks)
        self.concurrent = concurrent

    async def _run_task(self, task: FetchTask) -> Any:
        if task.required:
            return await task.call()
        try:
            return await task.call()
        except UpstreamError as e:
            logger.warning(f"Best-effort fetch '{task.name}' failed, using fallback: {e}")
            return copy.deepcopy(task.fallback)

    async def run(self) -> Dict[str, Any]:
        """Runs every task and returns payloads keyed by task name."""
        logger.debug(
            f"Running {'concurrent' if self.concurrent else 'sequential'} fetch plan: "
            f"{[t.name for t in self.tasks]}"
        )
        if self.concurrent:
            # Every fetch settles before the first failure is raised
            results = await asyncio.gather(
                *(self._run_task(t) for t in self.tasks), return_exceptions=True
            )
            for task, result in zip(self.tasks, results):
                if isinstance(result, BaseException):
                    logger.warning(f"Fetch '{task.name}' failed: {result}")
                    raise result
        else:
            results = []
            for task in self.tasks:
                results.append(await self._run_task(task))
        return {task.name: result for task, result in zip(self.tasks, results)}
