"""Unit tests for the crontab evaluator and job value objects."""
from __future__ import annotations

from datetime import UTC, datetime, timedelta, timezone

import pytest

from vercel_local_cron.application.scheduler import (
    CronEvaluator,
    CrontabEvaluator,
    JobDefinition,
    RuntimeContext,
)
from vercel_local_cron.application.scheduler.evaluator import standard_day_of_week

NOON = datetime(2026, 1, 1, 12, 0, tzinfo=UTC)


# ---------------------------------------------------------------------------
# JobDefinition / RuntimeContext
# ---------------------------------------------------------------------------
class TestJobDefinition:
    def test_is_frozen(self):
        job = JobDefinition("/api/cron/a", "* * * * *")
        with pytest.raises(AttributeError):
            job.path = "/b"  # type: ignore[misc]

    def test_equality(self):
        assert JobDefinition("/a", "* * * * *") == JobDefinition("/a", "* * * * *")


class TestRuntimeContext:
    def test_secret_optional(self):
        ctx = RuntimeContext(4000)
        assert ctx.port == 4000
        assert ctx.secret is None

    def test_empty_secret_becomes_none(self):
        assert RuntimeContext(4000, "").secret is None

    @pytest.mark.parametrize("port", [0, -1, True, "3000", 3000.0])
    def test_rejects_invalid_port(self, port):
        with pytest.raises(ValueError):
            RuntimeContext(port)


# ---------------------------------------------------------------------------
# CrontabEvaluator
# ---------------------------------------------------------------------------
class TestCrontabEvaluator:
    def test_satisfies_protocol(self):
        assert isinstance(CrontabEvaluator("* * * * *"), CronEvaluator)

    def test_next_due_every_minute(self):
        ev = CrontabEvaluator("* * * * *")
        assert ev.next_due_instant(NOON + timedelta(seconds=1)) == NOON + timedelta(minutes=1)

    def test_next_due_is_at_or_after_now(self):
        assert CrontabEvaluator("* * * * *").next_due_instant(NOON) == NOON

    def test_daily_at_midnight(self):
        ev = CrontabEvaluator("0 0 * * *")
        assert ev.next_due_instant(NOON) == datetime(2026, 1, 2, 0, 0, tzinfo=UTC)

    def test_step_expression(self):
        ev = CrontabEvaluator("*/15 * * * *")
        assert ev.next_due_instant(NOON + timedelta(minutes=1)) == NOON + timedelta(minutes=15)

    def test_evaluated_in_utc(self):
        plus_two = timezone(timedelta(hours=2))
        now = datetime(2026, 1, 1, 14, 30, tzinfo=plus_two)  # 12:30 UTC
        due = CrontabEvaluator("0 13 * * *").next_due_instant(now)
        assert due == datetime(2026, 1, 1, 13, 0, tzinfo=UTC)

    @pytest.mark.parametrize("expression", ["not-a-cron", "* * * *", "61 * * * *", "* * * * * * *"])
    def test_invalid_expression_raises_value_error(self, expression):
        with pytest.raises(ValueError):
            CrontabEvaluator(expression)

    def test_is_due_now_uses_the_current_minute(self):
        ev = CrontabEvaluator("0 12 * * *")
        assert ev.is_due_now(NOON + timedelta(seconds=30))
        assert not ev.is_due_now(NOON + timedelta(minutes=1))

    def test_cancel(self):
        ev = CrontabEvaluator("* * * * *")
        ev.cancel()
        assert ev.cancelled
        assert ev.next_due_instant(NOON) is None
        assert not ev.is_due_now(NOON)

    def test_repr(self):
        assert "0 0 * * *" in repr(CrontabEvaluator("0 0 * * *"))


# ---------------------------------------------------------------------------
# Day of week (standard cron: 0 and 7 are Sunday)
# ---------------------------------------------------------------------------
THURSDAY_NOON = NOON                                      # 2026-01-01 is a Thursday
SATURDAY_NOON = datetime(2026, 1, 3, 12, 0, tzinfo=UTC)


def _at_nine(day):
    return datetime(2026, 1, day, 9, 0, tzinfo=UTC)


class TestDayOfWeek:
    @pytest.mark.parametrize(
        "expression,now,expected",
        [
            ("0 9 * * 0", THURSDAY_NOON, _at_nine(4)),      # Sunday
            ("0 9 * * 7", THURSDAY_NOON, _at_nine(4)),      # Sunday
            ("0 9 * * 1", THURSDAY_NOON, _at_nine(5)),      # Monday
            ("0 9 * * MON", THURSDAY_NOON, _at_nine(5)),
            ("0 9 * * 1-5", THURSDAY_NOON, _at_nine(2)),    # Friday
            ("0 9 * * 1-5", SATURDAY_NOON, _at_nine(5)),    # Monday
            ("0 9 * * 5-7", SATURDAY_NOON, _at_nine(4)),    # Sunday
            ("0 9 * * 0,6", THURSDAY_NOON, _at_nine(3)),    # Saturday
            ("0 9 * * */2", THURSDAY_NOON, _at_nine(3)),    # sun,tue,thu,sat
        ],
    )
    def test_next_due(self, expression, now, expected):
        assert CrontabEvaluator(expression).next_due_instant(now) == expected

    def test_every_minute_on_sunday(self):
        ev = CrontabEvaluator("* * * * 0")
        assert ev.next_due_instant(THURSDAY_NOON) == datetime(2026, 1, 4, 0, 0, tzinfo=UTC)
        assert ev.is_due_now(datetime(2026, 1, 4, 15, 30, tzinfo=UTC))
        assert not ev.is_due_now(datetime(2026, 1, 5, 15, 30, tzinfo=UTC))

    @pytest.mark.parametrize("field", ["8", "5-1", "sat-sun", "*/0", "funday", "1,,2"])
    def test_invalid_day_of_week(self, field):
        with pytest.raises(ValueError):
            CrontabEvaluator(f"0 9 * * {field}")

    @pytest.mark.parametrize(
        "field,expected",
        [
            ("*", "*"),
            ("0", "sun"),
            ("7", "sun"),
            ("1-5", "mon,tue,wed,thu,fri"),
            ("*/2", "sun,tue,thu,sat"),
            ("1/2", "mon,wed,fri"),
            ("MON,fri", "mon,fri"),
        ],
    )
    def test_standard_day_of_week(self, field, expected):
        assert standard_day_of_week(field) == expected
