"""Tests for the day-keyed word ledger."""

from datetime import date

import pytest
from wordpace.errors import LedgerError
from wordpace.ledger import close_day, non_today_total, reanchor, record_day, today_words
from wordpace.models import Goal

DEC_28 = date(2025, 12, 28)
DEC_29 = date(2025, 12, 29)


class TestNonTodayTotal:
    def test_excludes_today(self):
        ledger = {DEC_28: 1800, DEC_29: 1950}
        assert non_today_total(ledger, DEC_29) == 1800

    def test_empty(self):
        assert non_today_total({}, DEC_29) == 0

    def test_does_not_mutate(self):
        ledger = {DEC_28: 1800, DEC_29: 1950}
        non_today_total(ledger, DEC_29)
        assert ledger == {DEC_28: 1800, DEC_29: 1950}


class TestTodayWords:
    def test_backs_out_prior_days(self):
        ledger = {DEC_28: 1800, DEC_29: 1950}
        assert today_words(2000, ledger, DEC_29) == 200

    def test_never_negative(self):
        assert today_words(2000, {DEC_28: 5000}, DEC_29) == 0


class TestRecordDay:
    def test_appends_new_day(self):
        goal = Goal(target=1000)
        updated = record_day(goal, DEC_28, 400, today=DEC_29)
        assert updated.ledger == {DEC_28: 400}
        assert goal.ledger == {}

    def test_refreshes_today(self):
        goal = Goal(target=1000, ledger={DEC_29: 100})
        updated = record_day(goal, DEC_29, 250, today=DEC_29)
        assert updated.ledger[DEC_29] == 250

    def test_refuses_to_rewrite_past_day(self):
        goal = Goal(target=1000, ledger={DEC_28: 100})
        with pytest.raises(LedgerError):
            record_day(goal, DEC_28, 500, today=DEC_29)

    def test_refuses_negative_words(self):
        with pytest.raises(LedgerError):
            record_day(Goal(target=1000), DEC_28, -1, today=DEC_29)


class TestCloseDay:
    def test_credits_words_written_that_day(self):
        goal = Goal(target=3000, ledger={DEC_28: 1800})
        closed = close_day(goal, 2000, DEC_29)
        assert closed.ledger == {DEC_28: 1800, DEC_29: 200}

    def test_closing_twice_fails(self):
        goal = Goal(target=3000, ledger={DEC_29: 200})
        with pytest.raises(LedgerError):
            close_day(goal, 2500, DEC_29)

    def test_after_close_today_words_resets(self):
        goal = close_day(Goal(target=3000, ledger={DEC_28: 1800}), 2000, DEC_29)
        assert today_words(2000, goal.ledger, date(2025, 12, 30)) == 0


class TestReanchor:
    def test_moves_both_anchor_dates(self):
        goal = Goal(target=3000, start_date=date(2025, 12, 1))
        moved = reanchor(goal, DEC_29)
        assert moved.start_date == DEC_29
        assert moved.last_calculated_date == DEC_29
        assert goal.start_date == date(2025, 12, 1)
