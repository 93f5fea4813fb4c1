"""Application scheduler – cron evaluator port and its APScheduler-backed default."""
from __future__ import annotations

from datetime import UTC, datetime, tzinfo
from typing import Callable, Protocol, runtime_checkable

from apscheduler.triggers.cron import CronTrigger

__all__ = ["CronEvaluator", "CrontabEvaluator", "EvaluatorFactory", "standard_day_of_week"]


@runtime_checkable
class CronEvaluator(Protocol):
    """Port: cron math for one expression.

    Constructing an evaluator for an invalid expression must raise
    ``ValueError``.
    """

    expression: str

    def next_due_instant(self, now: datetime) -> datetime | None: ...
    def is_due_now(self, now: datetime) -> bool: ...
    def cancel(self) -> None: ...


EvaluatorFactory = Callable[[str], CronEvaluator]


# Standard cron numbers days from Sunday (0 and 7); APScheduler's crontab
# parser numbers them from Monday. Names are unambiguous in both.
_WEEKDAYS = ("sun", "mon", "tue", "wed", "thu", "fri", "sat")


def _weekday(token: str) -> int:
    name = token.lower()
    if name in _WEEKDAYS:
        return _WEEKDAYS.index(name)
    if token.isdigit() and int(token) <= 7:
        return int(token)
    raise ValueError(f"Invalid day-of-week value {token!r}")


def standard_day_of_week(field: str) -> str:
    """Rewrite a crontab day-of-week field as an explicit list of day names.

    ``1-5`` becomes ``mon,tue,wed,thu,fri``; ``*/2`` becomes
    ``sun,tue,thu,sat``; ``7`` is Sunday.
    """
    if field in ("*", "?"):
        return "*"
    days: set[int] = set()
    for part in field.split(","):
        base, _, step_text = part.partition("/")
        step = 1
        if step_text:
            if not step_text.isdigit() or int(step_text) == 0:
                raise ValueError(f"Invalid day-of-week step {part!r}")
            step = int(step_text)
        if base in ("*", "?"):
            first, last = 0, 6
        elif "-" in base:
            start, _, end = base.partition("-")
            first, last = _weekday(start), _weekday(end)
            if first > last:
                raise ValueError(f"Invalid day-of-week range {base!r}")
        else:
            first = _weekday(base)
            last = max(first, 6) if step_text else first
        days.update(day % 7 for day in range(first, last + 1, step))
    return ",".join(_WEEKDAYS[day] for day in sorted(days))


def _to_apscheduler_crontab(expression: str) -> str:
    fields = expression.split()
    if len(fields) != 5:
        return expression  # CronTrigger.from_crontab reports the field count
    fields[4] = standard_day_of_week(fields[4])
    return " ".join(fields)


class CrontabEvaluator:
    """Five-field crontab expression evaluated by APScheduler's ``CronTrigger``.

    Vercel evaluates cron expressions in UTC, so that is the default zone.
    Day-of-week follows standard cron: 0 and 7 are Sunday.
    """

    def __init__(self, expression: str, timezone: tzinfo = UTC) -> None:
        self.expression = expression
        self._trigger = CronTrigger.from_crontab(_to_apscheduler_crontab(expression), timezone=timezone)
        self._cancelled = False

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    def next_due_instant(self, now: datetime) -> datetime | None:
        """Earliest fire time at or after *now* (second precision), or ``None``."""
        if self._cancelled:
            return None
        return self._trigger.get_next_fire_time(None, now)

    def is_due_now(self, now: datetime) -> bool:
        """True when the minute containing *now* matches the expression."""
        if self._cancelled:
            return False
        minute = now.replace(second=0, microsecond=0)
        return self._trigger.get_next_fire_time(None, minute) == minute

    def cancel(self) -> None:
        self._cancelled = True

    def __repr__(self) -> str:
        return f"CrontabEvaluator({self.expression!r})"
