import asyncio
import logging
from datetime import datetime, timedelta

import pytest

from epic_free_games.core.scheduler import CronScheduler, parse_schedule

START = datetime(2025, 4, 3, 12, 0, 0)


class TestParseSchedule:
    def test_six_fields_start_with_seconds(self):
        schedule = parse_schedule("0 0 0 * * *", START)
        assert schedule.get_next(datetime) == datetime(2025, 4, 4, 0, 0, 0)

    def test_six_fields_fire_on_seconds(self):
        schedule = parse_schedule("*/30 * * * * *", START)
        assert schedule.get_next(datetime) == datetime(2025, 4, 3, 12, 0, 30)

    def test_five_fields_are_classic_cron(self):
        schedule = parse_schedule("0 * * * *", START)
        assert schedule.get_next(datetime) == datetime(2025, 4, 3, 13, 0, 0)

    @pytest.mark.parametrize("expression", ["not a cron", "61 * * * * *", ""])
    def test_invalid_expressions_raise(self, expression):
        with pytest.raises(ValueError):
            parse_schedule(expression, START)


def _late_clock():
    """The first reading is START; later ones are far ahead so every tick is already due."""
    readings = iter([START])
    return lambda: next(readings, START + timedelta(days=1))


class TestCronScheduler:
    def test_invalid_expression_fails_at_construction(self):
        async def job():
            pass

        with pytest.raises(ValueError):
            CronScheduler("every day", job)

    def test_next_fire_time_follows_schedule(self):
        async def job():
            pass

        scheduler = CronScheduler("0 0 0 * * *", job, clock=lambda: START)
        assert scheduler.next_fire_time() == datetime(2025, 4, 4, 0, 0, 0)
        assert scheduler.next_fire_time() == datetime(2025, 4, 5, 0, 0, 0)

    def test_due_job_runs_and_stop_cancels(self):
        async def scenario():
            ran = asyncio.Event()

            async def job():
                ran.set()

            scheduler = CronScheduler("0 0 0 * * *", job, clock=_late_clock())
            scheduler.start()
            await asyncio.wait_for(ran.wait(), timeout=1)
            await scheduler.stop()
            return ran.is_set()

        assert asyncio.run(scenario()) is True

    def test_job_failures_are_logged(self, caplog):
        async def scenario():
            failed = asyncio.Event()

            async def job():
                failed.set()
                raise RuntimeError("upstream down")

            scheduler = CronScheduler("0 0 0 * * *", job, clock=_late_clock())
            scheduler.start()
            await asyncio.wait_for(failed.wait(), timeout=1)
            await asyncio.sleep(0)
            await scheduler.stop()

        with caplog.at_level(logging.ERROR, logger="epic_free_games.core.scheduler"):
            asyncio.run(scenario())
        assert "Scheduled job failed: upstream down" in caplog.text
