"""Tests for dashboard statistics."""
from datetime import date, datetime

from mern_buddy.models.goal import Goal
from mern_buddy.models.topic import Topic
from mern_buddy.utils.stats import compute_progress_stats, round_half_up

NOW = datetime(2025, 1, 1, 12, 0)


def make_topic(category="react", status="not-started", progress=0):
    return Topic(
        _id="t", owner="user123", name="Topic", category=category,
        status=status, progress=progress, created_at=NOW, updated_at=NOW,
    )


def make_goal(target_date, completed=False):
    return Goal(
        _id="g", owner="user123", title="Goal", target_date=target_date,
        completed=completed, created_at=NOW, updated_at=NOW,
    )


class TestRounding:
    """Tests for half-up rounding."""

    def test_halves_round_up(self):
        assert round_half_up(62.5) == 63
        assert round_half_up(0.5) == 1
        assert round_half_up(33.3) == 33


class TestTopicStats:
    """Tests for topic aggregates."""

    def test_empty_collections_are_all_zero(self):
        """Test empty input never divides by zero."""
        stats = compute_progress_stats([], [], now=NOW)

        assert stats.total_topics == 0
        assert stats.overall_progress == 0
        assert stats.category_progress.model_dump() == {
            "mongodb": 0, "express": 0, "react": 0, "nodejs": 0,
        }
        assert stats.active_goals == 0
        assert stats.upcoming_deadlines == 0

    def test_counts_and_overall_progress(self):
        """Test overall progress is the rounded share of completed topics."""
        topics = [
            make_topic(status="completed", progress=100),
            make_topic(status="learning", progress=50),
            make_topic(status="not-started"),
        ]

        stats = compute_progress_stats(topics, [], now=NOW)

        assert stats.total_topics == 3
        assert stats.completed_topics == 1
        assert stats.in_progress_topics == 1
        assert stats.overall_progress == 33

    def test_category_progress_averages(self):
        """Test per-category averages with missing categories at 0."""
        topics = [
            make_topic(category="mongodb", progress=100),
            make_topic(category="mongodb", progress=25),
            make_topic(category="express", progress=65),
        ]

        stats = compute_progress_stats(topics, [], now=NOW)

        assert stats.category_progress.mongodb == 63
        assert stats.category_progress.express == 65
        assert stats.category_progress.react == 0
        assert stats.category_progress.nodejs == 0

    def test_completed_status_uses_status_not_progress(self):
        """Test a completed topic below 100% still counts as completed."""
        stats = compute_progress_stats([make_topic(status="completed", progress=20)], [], now=NOW)

        assert stats.completed_topics == 1
        assert stats.overall_progress == 100
        assert stats.category_progress.react == 20


class TestGoalStats:
    """Tests for goal aggregates."""

    def test_active_goals_and_upcoming_deadlines(self):
        """Test upcoming counts uncompleted goals due within a week, overdue included."""
        goals = [
            make_goal(date(2025, 1, 4)),                   # 3 days out
            make_goal(date(2025, 1, 11)),                  # 10 days out
            make_goal(date(2024, 12, 20)),                 # overdue
            make_goal(date(2025, 1, 2), completed=True),   # done
        ]

        stats = compute_progress_stats([], goals, now=NOW)

        assert stats.active_goals == 3
        assert stats.upcoming_deadlines == 2

    def test_window_boundary(self):
        """Test a goal due exactly at the edge of the window counts."""
        goals = [make_goal(date(2025, 1, 8))]

        stats = compute_progress_stats([], goals, now=datetime(2025, 1, 1))

        assert stats.upcoming_deadlines == 1

    def test_camel_case_serialization(self):
        """Test stats are exposed with camelCase keys."""
        data = compute_progress_stats([], [], now=NOW).model_dump(by_alias=True)

        assert set(data) == {
            "totalTopics", "completedTopics", "inProgressTopics", "overallProgress",
            "categoryProgress", "activeGoals", "upcomingDeadlines",
        }
