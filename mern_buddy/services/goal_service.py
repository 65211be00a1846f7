"""Goal service - business logic for dated learning goals."""
from datetime import timedelta

from pydantic import ValidationError
from pymongo import ASCENDING

from mern_buddy.exceptions import InvalidRecordError, NotFoundError, describe_errors
from mern_buddy.models.goal import Goal, GoalCreate, GoalRecord, GoalUpdate
from mern_buddy.utils.ownership import owned_record_query, owner_query
from mern_buddy.utils.stats import UPCOMING_WINDOW_DAYS
from mern_buddy.utils.time_utils import date_to_datetime, datetime_to_date, utcnow

# Soonest deadline first
GOAL_SORT = [("target_date", ASCENDING), ("_id", ASCENDING)]


class GoalService:
    """Service for handling goal operations."""

    def __init__(self, db):
        """Initialize service with database connection."""
        self.db = db
        self.goals = db["goals"]

    def _doc_to_goal(self, doc: dict) -> Goal:
        """
        Convert database document to Goal model.

        Handles datetime to date conversion for the target date.
        """
        return Goal(
            _id=str(doc["_id"]),
            owner=doc["user_id"],
            title=doc["title"],
            description=doc.get("description", ""),
            target_date=datetime_to_date(doc["target_date"]),
            completed=doc.get("completed", False),
            priority=doc.get("priority", "medium"),
            created_at=doc["created_at"],
            updated_at=doc["updated_at"],
        )

    @staticmethod
    def _record_fields(goal: GoalRecord) -> dict:
        """Mutable fields of a validated goal, ready for MongoDB."""
        return {
            "title": goal.title,
            "description": goal.description,
            "target_date": date_to_datetime(goal.target_date),
            "completed": goal.completed,
            "priority": goal.priority.value,
        }

    async def create_goal(
        self,
        user_id: str,
        goal_create: GoalCreate,
    ) -> Goal:
        """
        Create a new goal.

        Args:
            user_id: User ID who owns the goal
            goal_create: Goal creation data

        Returns:
            Created goal object, always uncompleted
        """
        record = GoalRecord(**goal_create.model_dump(), completed=False)

        now = utcnow()
        goal_doc = {
            "user_id": user_id,
            **self._record_fields(record),
            "created_at": now,
            "updated_at": now,
        }

        result = await self.goals.insert_one(goal_doc)
        goal_doc["_id"] = result.inserted_id

        return self._doc_to_goal(goal_doc)

    async def list_goals(self, user_id: str) -> list[Goal]:
        """
        List all goals for a user, soonest target date first.

        Args:
            user_id: User ID

        Returns:
            List of goals
        """
        cursor = self.goals.find(owner_query(user_id)).sort(GOAL_SORT)
        goal_docs = await cursor.to_list(length=None)

        return [self._doc_to_goal(doc) for doc in goal_docs]

    async def list_upcoming_goals(
        self,
        user_id: str,
        window_days: int = UPCOMING_WINDOW_DAYS,
    ) -> list[Goal]:
        """
        List uncompleted goals due within ``window_days``.

        Overdue goals are included since their target date is already past.
        """
        deadline = utcnow() + timedelta(days=window_days)
        query = owner_query(
            user_id,
            completed=False,
            target_date={"$lte": deadline},
        )

        cursor = self.goals.find(query).sort(GOAL_SORT)
        goal_docs = await cursor.to_list(length=None)

        return [self._doc_to_goal(doc) for doc in goal_docs]

    async def update_goal(
        self,
        user_id: str,
        goal_id: str,
        goal_update: GoalUpdate,
    ) -> Goal:
        """
        Apply a partial update to a goal.

        Args:
            user_id: User ID
            goal_id: Goal ID
            goal_update: Fields to change; None means unchanged

        Returns:
            Updated goal

        Raises:
            NotFoundError: If the goal does not exist for this user
            InvalidRecordError: If the merged goal is invalid
        """
        query = owned_record_query(user_id, goal_id, label="Goal")

        existing = await self.goals.find_one(query)
        if not existing:
            raise NotFoundError("Goal not found")

        current = self._doc_to_goal(existing)
        changes = goal_update.model_dump(exclude_none=True)
        try:
            merged = GoalRecord.model_validate({**current.model_dump(), **changes})
        except ValidationError as e:
            raise InvalidRecordError(describe_errors(e.errors())) from e

        update_doc = {
            **self._record_fields(merged),
            "updated_at": utcnow(),
        }

        updated_doc = await self.goals.find_one_and_update(
            query,
            {"$set": update_doc},
            return_document=True,
        )
        if not updated_doc:
            raise NotFoundError("Goal not found")

        return self._doc_to_goal(updated_doc)

    async def delete_goal(
        self,
        user_id: str,
        goal_id: str,
    ) -> dict:
        """
        Permanently delete a goal.

        Raises:
            NotFoundError: If the goal does not exist for this user
        """
        query = owned_record_query(user_id, goal_id, label="Goal")

        deleted = await self.goals.find_one_and_delete(query)
        if not deleted:
            raise NotFoundError("Goal not found")

        return {"message": "Goal deleted successfully", "id": goal_id}
