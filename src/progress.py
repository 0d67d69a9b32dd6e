"""Progress aggregation: word goal, live word total and optional pacing."""

from __future__ import annotations

from collections.abc import Mapping
from datetime import date
from typing import Any

from wordpace.models import Goal, ProgressSnapshot, parse_goal
from wordpace.pacing import calculate_daily_goal_info


def percentage(total_words: int, word_goal: int) -> int:
    """Whole-number percent of ``word_goal`` reached, capped at 100.

    Rounds half up. Returns 0 when there is no positive word goal.
    """
    if word_goal <= 0:
        return 0
    total_words = max(0, total_words)
    rounded = (total_words * 200 + word_goal) // (2 * word_goal)
    return min(100, rounded)


def build_progress(
    word_goal: int,
    total_words: int,
    goal: Goal | Mapping[str, Any] | None = None,
    *,
    today: date | None = None,
    updated_at: str | None = None,
) -> ProgressSnapshot:
    """Merge the word goal, live total and goal record into a snapshot.

    Pacing is only computed when a goal is present; a malformed goal is
    dropped rather than failing the snapshot.
    """
    parsed = parse_goal(goal)
    daily_info = (
        calculate_daily_goal_info(parsed, total_words, today=today) if parsed else None
    )
    return ProgressSnapshot(
        word_goal=word_goal,
        total_words=total_words,
        percentage=percentage(total_words, word_goal),
        goal=parsed,
        daily_info=daily_info,
        updated_at=updated_at,
    )
