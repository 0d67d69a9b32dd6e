"""Writing goal pacing for word-count targets with deadlines."""

from wordpace.models import DailyInfo, Goal, GoalMode, ProgressSnapshot, parse_goal
from wordpace.pacing import calculate_daily_goal_info
from wordpace.progress import build_progress

__version__ = "0.1.0"

__all__ = [
    "DailyInfo",
    "Goal",
    "GoalMode",
    "ProgressSnapshot",
    "__version__",
    "build_progress",
    "calculate_daily_goal_info",
    "parse_goal",
]
