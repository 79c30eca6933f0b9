# ===== IMPORTS & DEPENDENCIES =====
import asyncio
import logging
from datetime import datetime
from typing import Awaitable, Callable, Optional, Set

from croniter import croniter

# ===== CONFIGURATION & CONSTANTS =====
logger = logging.getLogger(__name__)

Job = Callable[[], Awaitable[None]]


def _local_now() -> datetime:
    return datetime.now().astimezone()


def parse_schedule(expression: str, start: datetime) -> croniter:
    """
    Parses a cron expression. Six fields mean seconds come first
    ('0 0 0 * * *' is midnight every day); five fields are classic cron.
    Raises ValueError for invalid expressions.
    """
    fields = expression.split()
    try:
        if len(fields) == 6:
            return croniter(expression, start, second_at_beginning=True)
        return croniter(expression, start)
    except (KeyError, ValueError) as e:
        raise ValueError(f"invalid cron expression {expression!r}: {e}") from e


# ===== CORE BUSINESS LOGIC =====
class CronScheduler:
    """
    Fires an async job on a cron schedule from inside the running event loop.
    Each tick starts the job as its own task, so a slow run never delays the
    next one and runs may overlap.
    """

    def __init__(self, expression: str, job: Job, clock: Callable[[], datetime] = _local_now):
        self.expression = expression
        self._job = job
        self._clock = clock
        self._schedule = parse_schedule(expression, clock())
        self._loop_task: Optional[asyncio.Task] = None
        self._running_jobs: Set[asyncio.Task] = set()

    def next_fire_time(self) -> datetime:
        return self._schedule.get_next(datetime)

    async def _run_job(self) -> None:
        try:
            await self._job()
        except Exception as e:
            logger.error(f"❌ [{self.__class__.__name__}] Scheduled job failed: {e}", exc_info=True)

    def _fire(self) -> None:
        task = asyncio.create_task(self._run_job())
        self._running_jobs.add(task)
        task.add_done_callback(self._running_jobs.discard)

    async def _loop(self) -> None:
        while True:
            fire_at = self.next_fire_time()
            delay = (fire_at - self._clock()).total_seconds()
            logger.debug(f"[{self.__class__.__name__}] Next run at {fire_at.isoformat()} (in {delay:.0f}s)")
            await asyncio.sleep(max(delay, 0))
            self._fire()

    def start(self) -> asyncio.Task:
        if self._loop_task is None:
            self._loop_task = asyncio.create_task(self._loop())
            logger.info(f"[{self.__class__.__name__}] Cron scheduler started with schedule: {self.expression}")
        return self._loop_task

    async def stop(self) -> None:
        tasks = [t for t in (self._loop_task, *self._running_jobs) if t is not None]
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        self._loop_task = None
