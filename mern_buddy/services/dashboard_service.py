"""Dashboard service - fetches a user's collections and derives stats."""
import asyncio

from mern_buddy.models.stats import Dashboard
from mern_buddy.services.goal_service import GoalService
from mern_buddy.services.topic_service import TopicService
from mern_buddy.utils.stats import UPCOMING_WINDOW_DAYS, compute_progress_stats


class DashboardService:
    """Service assembling the dashboard from topics and goals."""

    def __init__(self, db):
        """Initialize service with database connection."""
        self.topic_service = TopicService(db)
        self.goal_service = GoalService(db)

    async def get_dashboard(
        self,
        user_id: str,
        window_days: int = UPCOMING_WINDOW_DAYS,
    ) -> Dashboard:
        """
        Fetch topics and goals concurrently and compute stats over them.

        Args:
            user_id: User ID
            window_days: How far ahead a goal deadline counts as upcoming

        Returns:
            Dashboard with both collections and their ProgressStats
        """
        topics, goals = await asyncio.gather(
            self.topic_service.list_topics(user_id=user_id),
            self.goal_service.list_goals(user_id=user_id),
        )

        return Dashboard(
            topics=topics,
            goals=goals,
            stats=compute_progress_stats(topics, goals, window_days=window_days),
        )
