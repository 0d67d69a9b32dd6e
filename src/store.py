"""Local project folder store.

A project folder holds three optional JSON files:

- ``project.json``: project metadata (``wordGoal``, ``updatedAt``)
- ``goal.json``: the pacing goal, including its day-keyed ledger
- ``data.json``: content units (``snippets``) and their ordering (``groups``)

Each file is read independently. A missing or corrupt file is logged and
recorded as a ``LoadIssue``; defaults stand in so progress still renders.
"""

from __future__ import annotations

import json
import logging
import os
import re
import tempfile
from collections.abc import Mapping
from datetime import date
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field

from wordpace.errors import LoadIssue, ProjectError
from wordpace.models import Goal, GoalMode, parse_goal

logger = logging.getLogger(__name__)

PROJECT_FILENAME = "project.json"
GOAL_FILENAME = "goal.json"
DATA_FILENAME = "data.json"
DEFAULT_WORD_GOAL = 3000

_WHITESPACE = re.compile(r"\s+")


class ProjectLoad(BaseModel):
    """Everything read from a project folder, plus any problems found."""

    project_id: str
    word_goal: int = DEFAULT_WORD_GOAL
    total_words: int = 0
    goal: Goal | None = None
    updated_at: str | None = None
    issues: list[LoadIssue] = Field(default_factory=list)

    @property
    def has_issues(self) -> bool:
        return bool(self.issues)


def count_words(text: str) -> int:
    """Count whitespace-separated words. Blank text has zero words."""
    if not text or not text.strip():
        return 0
    return len([w for w in _WHITESPACE.split(text) if w])


def story_word_count(
    snippets: Mapping[str, Mapping[str, Any]],
    groups: Mapping[str, Mapping[str, Any]],
) -> int:
    """Sum words over every snippet referenced by a group.

    A snippet's stored ``words`` count wins; otherwise its ``body`` is
    counted. Snippets not referenced by any group are ignored.
    """
    total = 0
    for group in groups.values():
        for snippet_id in group.get("snippetIds") or []:
            snippet = snippets.get(snippet_id)
            if not snippet:
                continue
            if snippet.get("words") is not None:
                total += int(snippet["words"])
            elif snippet.get("body"):
                total += count_words(snippet["body"])
    return total


def _atomic_write(path: Path, content: str) -> None:
    """Write ``content`` to ``path`` via a temp file and ``os.replace``."""
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(content)
        os.replace(tmp_name, path)
    except BaseException:
        Path(tmp_name).unlink(missing_ok=True)
        raise


def _read_json(path: Path, load: ProjectLoad) -> dict[str, Any] | None:
    if not path.exists():
        return None
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        logger.warning("Failed to parse %s for project %s: %s", path.name, load.project_id, exc)
        load.issues.append(LoadIssue(source=path.name, error_type="parse_error", message=str(exc)))
        return None
    except OSError as exc:
        logger.warning("Failed to read %s for project %s: %s", path.name, load.project_id, exc)
        load.issues.append(LoadIssue(source=path.name, error_type="read_error", message=str(exc)))
        return None
    if not isinstance(data, dict):
        load.issues.append(
            LoadIssue(source=path.name, error_type="schema_error", message="expected an object")
        )
        return None
    return data


def load_project(path: str | Path, default_word_goal: int = DEFAULT_WORD_GOAL) -> ProjectLoad:
    """Read a project folder.

    Raises:
        ProjectError: If ``path`` is not a directory.
    """
    folder = Path(path)
    if not folder.is_dir():
        raise ProjectError(f"Project folder not found: {folder}")

    load = ProjectLoad(project_id=folder.resolve().name, word_goal=default_word_goal)

    project = _read_json(folder / PROJECT_FILENAME, load)
    if project is not None:
        word_goal = project.get("wordGoal")
        if isinstance(word_goal, int) and not isinstance(word_goal, bool):
            load.word_goal = word_goal
        load.updated_at = project.get("updatedAt")

    raw_goal = _read_json(folder / GOAL_FILENAME, load)
    if raw_goal is not None:
        load.goal = parse_goal(raw_goal)
        if load.goal is None:
            load.issues.append(
                LoadIssue(source=GOAL_FILENAME, error_type="schema_error", message="invalid goal")
            )

    data = _read_json(folder / DATA_FILENAME, load)
    if data is not None and data.get("snippets") and data.get("groups"):
        try:
            load.total_words = story_word_count(data["snippets"], data["groups"])
        except (AttributeError, TypeError, ValueError) as exc:
            logger.warning("Failed to count words for project %s: %s", load.project_id, exc)
            load.issues.append(
                LoadIssue(source=DATA_FILENAME, error_type="schema_error", message=str(exc))
            )

    return load


def save_goal(path: str | Path, goal: Goal) -> Path:
    """Write ``goal.json`` into the project folder atomically."""
    goal_path = Path(path) / GOAL_FILENAME
    _atomic_write(goal_path, json.dumps(goal.to_json_dict(), indent=2) + "\n")
    return goal_path


def create_goal(
    target: int,
    deadline: date,
    today: date,
    *,
    writing_days: list[bool] | None = None,
    days_off: list[date] | None = None,
    mode: GoalMode = GoalMode.ELASTIC,
) -> Goal:
    """Build a new goal anchored at ``today`` with an empty ledger."""
    return Goal(
        target=target,
        deadline=deadline,
        start_date=today,
        writing_days=writing_days if writing_days is not None else [True] * 7,
        days_off=days_off or [],
        mode=mode,
        ledger={},
        last_calculated_date=today,
    )
