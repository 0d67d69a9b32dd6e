"""Project-level operations that tie the store, cache and pacing together."""

from __future__ import annotations

import logging
from datetime import date
from pathlib import Path

from wordpace.cache import ProgressCache
from wordpace.clock import today_in
from wordpace.config import WordpaceConfig
from wordpace.errors import GoalError, ProjectError
from wordpace.ledger import close_day, reanchor
from wordpace.models import Goal, GoalMode, ProgressSnapshot
from wordpace.progress import build_progress
from wordpace.store import create_goal, load_project, save_goal

logger = logging.getLogger(__name__)


def cache_key(path: str | Path) -> str:
    """Cache key for a project folder: its resolved absolute path."""
    return str(Path(path).resolve())


def make_cache(config: WordpaceConfig) -> ProgressCache | None:
    """Build the progress cache described by ``config``, if enabled."""
    if not config.cache.enabled or config.cache.ttl_seconds <= 0:
        return None
    return ProgressCache(config.cache.resolved_path, ttl_seconds=config.cache.ttl_seconds)


def project_progress(
    path: str | Path,
    config: WordpaceConfig | None = None,
    cache: ProgressCache | None = None,
    today: date | None = None,
) -> ProgressSnapshot:
    """Compute the progress snapshot for a project folder.

    Args:
        path: Project folder.
        config: Loaded configuration; defaults are used when omitted.
        cache: Optional snapshot cache consulted before reading the folder.
        today: Override for the canonical calendar day.

    Raises:
        ProjectError: If the folder does not exist.
    """
    config = config or WordpaceConfig()
    folder = Path(path)
    project_id = cache_key(folder)

    # An injected day bypasses the cache so explicit recomputation is exact.
    if cache is not None and today is None:
        cached = cache.get(project_id)
        if cached is not None:
            logger.debug("Using cached progress for %s", project_id)
            return cached

    load = load_project(folder, default_word_goal=config.pacing.default_word_goal)
    for issue in load.issues:
        logger.info("Project %s: %s", project_id, issue.summary_text())

    snapshot = build_progress(
        load.word_goal,
        load.total_words,
        load.goal,
        today=today or today_in(config.pacing.timezone),
        updated_at=load.updated_at,
    )
    if cache is not None:
        cache.put(project_id, snapshot)
    return snapshot


def set_goal(
    path: str | Path,
    target: int,
    deadline: date,
    config: WordpaceConfig | None = None,
    *,
    mode: GoalMode | None = None,
    writing_days: list[bool] | None = None,
    days_off: list[date] | None = None,
    today: date | None = None,
    cache: ProgressCache | None = None,
) -> Goal:
    """Create (or replace) a project's goal, anchored at today.

    Replacing a goal starts a fresh ledger and strict-mode baseline.

    Raises:
        GoalError: If the target is negative or the deadline precedes today.
    """
    config = config or WordpaceConfig()
    folder = Path(path)
    if not folder.is_dir():
        raise ProjectError(f"Project folder not found: {folder}")
    today = today or today_in(config.pacing.timezone)
    if target < 0:
        raise GoalError("Goal target must be zero or more")
    if deadline < today:
        raise GoalError(f"Deadline {deadline.isoformat()} is before today ({today.isoformat()})")

    goal = create_goal(
        target,
        deadline,
        today,
        writing_days=writing_days or list(config.goal_defaults.writing_days),
        days_off=days_off,
        mode=mode or config.goal_defaults.mode,
    )
    save_goal(folder, goal)
    if cache is not None:
        cache.clear(cache_key(folder))
    logger.info("Saved %s goal of %d words for %s", goal.mode.value, target, folder.name)
    return goal


def close_project_day(
    path: str | Path,
    day: date,
    config: WordpaceConfig | None = None,
    cache: ProgressCache | None = None,
) -> Goal:
    """Credit ``day`` in the project's ledger with the words written on it.

    Raises:
        GoalError: If the project has no usable goal.
        LedgerError: If ``day`` is already recorded.
    """
    config = config or WordpaceConfig()
    load = load_project(path, default_word_goal=config.pacing.default_word_goal)
    if load.goal is None:
        raise GoalError(f"Project {load.project_id} has no goal")
    goal = close_day(load.goal, load.total_words, day)
    save_goal(path, goal)
    if cache is not None:
        cache.clear(cache_key(path))
    return goal


def reanchor_project_goal(
    path: str | Path,
    day: date,
    config: WordpaceConfig | None = None,
    cache: ProgressCache | None = None,
) -> Goal:
    """Restart the strict-mode baseline of a project's goal at ``day``.

    The ledger and target are kept; only the anchor dates move.

    Raises:
        GoalError: If the project has no usable goal, or ``day`` is after
            the deadline.
    """
    config = config or WordpaceConfig()
    load = load_project(path, default_word_goal=config.pacing.default_word_goal)
    if load.goal is None:
        raise GoalError(f"Project {load.project_id} has no goal")
    if load.goal.deadline is not None and day > load.goal.deadline:
        raise GoalError(f"Cannot anchor after the deadline ({load.goal.deadline.isoformat()})")
    goal = reanchor(load.goal, day)
    save_goal(path, goal)
    if cache is not None:
        cache.clear(cache_key(path))
    logger.info("Re-anchored goal for %s at %s", load.project_id, day.isoformat())
    return goal
