"""Daily pacing for writing goals.

Turns a goal and the project's live word total into today's target and an
ahead/behind verdict. Two policies:

- elastic: the target is recomputed from the words still needed and the
  writing days left, so it rises when behind and falls when ahead.
- strict: the target is fixed at goal start as ``target / writing days``
  and never rebalances.

Pacing is advisory. Missing or malformed goals produce ``None`` instead of
raising.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from datetime import date
from typing import Any, assert_never

from wordpace.clock import pacific_today
from wordpace.ledger import today_words as ledger_today_words
from wordpace.models import DailyInfo, Goal, GoalMode, parse_goal
from wordpace.writing_days import count_writing_days

logger = logging.getLogger(__name__)


def _ceil_div(numerator: int, denominator: int) -> int:
    return -(-numerator // denominator)


def strict_daily_target(goal: Goal, today: date) -> int:
    """Fixed daily target anchored at the goal's start date."""
    if goal.deadline is None:
        return 0
    anchor = goal.start_date or goal.last_calculated_date or today
    total_days = count_writing_days(anchor, goal.deadline, goal)
    return _ceil_div(goal.target, total_days) if total_days > 0 else 0


def elastic_daily_target(words_remaining: int, remaining_days: int) -> int:
    """Target that spreads the remaining words over the remaining days."""
    if remaining_days <= 0:
        return 0
    return _ceil_div(words_remaining, remaining_days)


def calculate_daily_goal_info(
    goal: Goal | Mapping[str, Any] | None,
    total_words: int,
    today: date | None = None,
) -> DailyInfo | None:
    """Compute today's pacing for ``goal``.

    Args:
        goal: A Goal or a raw ``goal.json`` mapping.
        total_words: Live cumulative word count for the project.
        today: Calendar day to compute for. Defaults to today in US Pacific
            time so all devices agree on the day boundary.

    Returns:
        DailyInfo, or None when the goal has no target or deadline or
        cannot be parsed.
    """
    parsed = parse_goal(goal)
    if parsed is None or not parsed.target or parsed.deadline is None:
        return None
    deadline = parsed.deadline

    if today is None:
        today = pacific_today()
    total_words = max(0, total_words)

    written_today = ledger_today_words(total_words, parsed.ledger, today)
    remaining_days = count_writing_days(today, deadline, parsed)
    words_remaining = max(0, parsed.target - total_words)

    if remaining_days <= 0:
        return DailyInfo(
            target=0,
            today_words=written_today,
            remaining=0,
            words_remaining=words_remaining,
        )

    match parsed.mode:
        case GoalMode.ELASTIC:
            target = elastic_daily_target(words_remaining, remaining_days)
        case GoalMode.STRICT:
            target = strict_daily_target(parsed, today)
        case _:
            assert_never(parsed.mode)

    logger.debug(
        "Pacing %s: target=%d today=%d days_left=%d",
        parsed.mode.value,
        target,
        written_today,
        remaining_days,
    )
    return DailyInfo(
        target=target,
        today_words=written_today,
        remaining=remaining_days,
        words_remaining=words_remaining,
        is_ahead=written_today > target,
        is_behind=written_today < target,
    )
