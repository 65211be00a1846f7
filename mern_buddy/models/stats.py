"""Dashboard statistics models."""
from pydantic import Field

from mern_buddy.models.base import CamelModel
from mern_buddy.models.goal import Goal
from mern_buddy.models.topic import Topic


class CategoryProgress(CamelModel):
    """Average progress per MERN category, 0 when a category has no topics."""

    mongodb: int = 0
    express: int = 0
    react: int = 0
    nodejs: int = 0


class ProgressStats(CamelModel):
    """Aggregates shown on the dashboard."""

    total_topics: int = 0
    completed_topics: int = 0
    in_progress_topics: int = 0
    overall_progress: int = 0
    category_progress: CategoryProgress = Field(default_factory=CategoryProgress)
    active_goals: int = 0
    upcoming_deadlines: int = 0


class Dashboard(CamelModel):
    """Topics and goals fetched together with the stats computed over them."""

    topics: list[Topic]
    goals: list[Goal]
    stats: ProgressStats
