"""Dashboard statistics computed over already-fetched topics and goals.

Nothing here is stored; the numbers are recomputed from the collections
every time they are asked for.
"""
import math
from datetime import datetime, timedelta
from typing import Iterable, Optional

from mern_buddy.models.goal import Goal
from mern_buddy.models.stats import CategoryProgress, ProgressStats
from mern_buddy.models.topic import Topic, TopicCategory, TopicStatus
from mern_buddy.utils.time_utils import date_to_datetime, utcnow

UPCOMING_WINDOW_DAYS = 7


def round_half_up(value: float) -> int:
    """
    Round to the nearest integer with halves going up.

    Examples:
        >>> round_half_up(62.5)
        63
        >>> round(62.5)
        62
    """
    return int(math.floor(value + 0.5))


def category_average(topics: Iterable[Topic], category: TopicCategory) -> int:
    """Rounded mean progress of the topics in ``category``, 0 when there are none."""
    values = [topic.progress for topic in topics if topic.category == category]
    if not values:
        return 0
    return round_half_up(sum(values) / len(values))


def is_upcoming(
    goal: Goal, now: datetime, window_days: int = UPCOMING_WINDOW_DAYS
) -> bool:
    """Whether an uncompleted goal is due within the window (overdue included)."""
    if goal.completed:
        return False
    return date_to_datetime(goal.target_date) <= now + timedelta(days=window_days)


def compute_progress_stats(
    topics: list[Topic],
    goals: list[Goal],
    now: Optional[datetime] = None,
    window_days: int = UPCOMING_WINDOW_DAYS,
) -> ProgressStats:
    """
    Compute the dashboard aggregates.

    Args:
        topics: All of the caller's topics
        goals: All of the caller's goals
        now: Reference time for deadlines, defaults to the current UTC time
        window_days: How far ahead a deadline counts as upcoming

    Returns:
        ProgressStats with every ratio defined as 0 for empty inputs
    """
    now = now or utcnow()

    total = len(topics)
    completed = sum(1 for t in topics if t.status == TopicStatus.COMPLETED)
    learning = sum(1 for t in topics if t.status == TopicStatus.LEARNING)
    overall = round_half_up(100 * completed / total) if total else 0

    category_progress = CategoryProgress(
        **{c.value: category_average(topics, c) for c in TopicCategory}
    )

    return ProgressStats(
        total_topics=total,
        completed_topics=completed,
        in_progress_topics=learning,
        overall_progress=overall,
        category_progress=category_progress,
        active_goals=sum(1 for g in goals if not g.completed),
        upcoming_deadlines=sum(1 for g in goals if is_upcoming(g, now, window_days)),
    )
