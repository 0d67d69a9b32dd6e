"""Day-keyed word ledger.

The ledger maps a calendar date to the words credited to that day. Entries
for past days are never rewritten; only today's entry may be refreshed.
Reads never mutate the ledger, and write helpers return a new ``Goal``.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from datetime import date

from wordpace.errors import LedgerError
from wordpace.models import Goal

logger = logging.getLogger(__name__)


def non_today_total(ledger: Mapping[date, int], today: date) -> int:
    """Sum of words credited to every day except ``today``."""
    return sum(words for day, words in ledger.items() if day != today)


def today_words(total_words: int, ledger: Mapping[date, int], today: date) -> int:
    """Words attributable to ``today``, never negative."""
    return max(0, total_words - non_today_total(ledger, today))


def record_day(goal: Goal, day: date, words: int, *, today: date) -> Goal:
    """Return a copy of ``goal`` with ``words`` credited to ``day``.

    Raises:
        LedgerError: If ``day`` already has an entry and is not ``today``,
            or if ``words`` is negative.
    """
    if words < 0:
        raise LedgerError(f"Cannot credit negative words to {day.isoformat()}")
    if day in goal.ledger and day != today:
        raise LedgerError(f"Ledger entry for {day.isoformat()} is already closed")
    ledger = dict(goal.ledger)
    ledger[day] = words
    return goal.model_copy(update={"ledger": dict(sorted(ledger.items()))})


def close_day(goal: Goal, total_words: int, day: date) -> Goal:
    """Credit ``day`` with the words written on it and return the new goal.

    The credited amount is the live total minus everything already credited
    to other days. Callers decide when a day is closed; typically once, at
    the first read after the day ends.
    """
    words = today_words(total_words, goal.ledger, day)
    if day in goal.ledger:
        raise LedgerError(f"Ledger entry for {day.isoformat()} is already closed")
    logger.debug("Closing %s with %d words", day.isoformat(), words)
    return record_day(goal, day, words, today=day)


def reanchor(goal: Goal, day: date) -> Goal:
    """Return a copy of ``goal`` whose strict-mode baseline starts at ``day``."""
    return goal.model_copy(update={"start_date": day, "last_calculated_date": day})
