"""Goal and progress models.

Field names are snake_case in Python and camelCase on disk, matching the
``goal.json`` files written by the writing app. Serialize with
``model_dump(mode="json", by_alias=True)``.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from datetime import date
from enum import StrEnum
from typing import Annotated, Any

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    NonNegativeInt,
    ValidationError,
    field_validator,
)
from pydantic.alias_generators import to_camel

from wordpace.clock import parse_iso_date
from wordpace.errors import GoalError

logger = logging.getLogger(__name__)

WEEKDAY_COUNT = 7

WeekPattern = Annotated[list[bool], Field(min_length=WEEKDAY_COUNT, max_length=WEEKDAY_COUNT)]


class GoalMode(StrEnum):
    """How the daily target reacts to progress."""

    ELASTIC = "elastic"
    STRICT = "strict"


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Goal(_CamelModel):
    """A word-count goal with a deadline and a weekly writing calendar.

    A goal without ``writingDays`` has no writing days at all, and any mode
    other than ``elastic`` (including a missing one) paces strictly.
    """

    target: int = Field(default=0, ge=0)
    deadline: date | None = None
    start_date: date | None = None
    writing_days: WeekPattern | None = None
    days_off: list[date] = Field(default_factory=list)
    mode: GoalMode = GoalMode.STRICT
    ledger: dict[date, NonNegativeInt] = Field(default_factory=dict)
    last_calculated_date: date | None = None

    @field_validator("mode", mode="before")
    @classmethod
    def _elastic_or_strict(cls, value: Any) -> Any:
        if value == GoalMode.ELASTIC.value:
            return GoalMode.ELASTIC
        return GoalMode.STRICT

    @field_validator("deadline", "start_date", "last_calculated_date", mode="before")
    @classmethod
    def _strip_time(cls, value: Any) -> Any:
        # Deadlines are stored as "YYYY-MM-DDT23:59:59"; only the day matters.
        if value is None or value == "":
            return None
        return parse_iso_date(value)

    @field_validator("days_off", mode="before")
    @classmethod
    def _dedupe_days_off(cls, value: Any) -> Any:
        if isinstance(value, (list, tuple, set, frozenset)):
            seen: dict[date, None] = {}
            for item in value:
                seen[parse_iso_date(item)] = None
            return sorted(seen)
        return value

    @property
    def is_pacing_enabled(self) -> bool:
        """True when both a non-zero target and a deadline are set."""
        return bool(self.target) and self.deadline is not None

    def to_json_dict(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)


class DailyInfo(_CamelModel):
    """Today's pacing numbers for a goal."""

    target: int
    today_words: int
    remaining: int
    words_remaining: int
    is_ahead: bool | None = None
    is_behind: bool | None = None


class ProgressSnapshot(_CamelModel):
    """Derived progress for display. Recomputed on every read."""

    word_goal: int
    total_words: int
    percentage: int
    goal: Goal | None = None
    daily_info: DailyInfo | None = None
    updated_at: str | None = None

    def to_json_dict(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


def parse_goal(data: Goal | Mapping[str, Any] | None, *, strict: bool = False) -> Goal | None:
    """Validate a raw goal record.

    Malformed input yields None so that a broken goal never blocks the rest
    of a progress snapshot. With ``strict=True`` a ``GoalError`` is raised
    instead.
    """
    if data is None:
        return None
    if isinstance(data, Goal):
        return data
    try:
        return Goal.model_validate(dict(data))
    except (ValidationError, TypeError, ValueError) as exc:
        if strict:
            raise GoalError(f"Invalid goal: {exc}") from exc
        logger.warning("Ignoring malformed goal record: %s", exc)
        return None
