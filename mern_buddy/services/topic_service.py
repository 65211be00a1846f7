"""Topic service - business logic for learning topics."""
from typing import Optional

from pydantic import ValidationError
from pymongo import DESCENDING

from mern_buddy.exceptions import InvalidRecordError, NotFoundError, describe_errors
from mern_buddy.models.topic import (
    Topic,
    TopicBase,
    TopicCategory,
    TopicCreate,
    TopicStatus,
    TopicUpdate,
)
from mern_buddy.utils.ownership import owned_record_query, owner_query
from mern_buddy.utils.time_utils import utcnow

# Newest first; _id breaks ties between topics created in the same millisecond
TOPIC_SORT = [("created_at", DESCENDING), ("_id", DESCENDING)]


class TopicService:
    """Service for handling topic operations."""

    def __init__(self, db):
        """Initialize service with database connection."""
        self.db = db
        self.topics = db["topics"]

    def _doc_to_topic(self, doc: dict) -> Topic:
        """Convert database document to Topic model."""
        return Topic(
            _id=str(doc["_id"]),
            owner=doc["user_id"],
            name=doc["name"],
            category=doc["category"],
            status=doc.get("status", TopicStatus.NOT_STARTED.value),
            progress=doc.get("progress", 0),
            notes=doc.get("notes", ""),
            code_snippet=doc.get("code_snippet", ""),
            created_at=doc["created_at"],
            updated_at=doc["updated_at"],
        )

    @staticmethod
    def _record_fields(topic: TopicBase) -> dict:
        """Mutable fields of a validated topic, ready for MongoDB."""
        return {
            "name": topic.name,
            "category": topic.category.value,
            "status": topic.status.value,
            "progress": topic.progress,
            "notes": topic.notes,
            "code_snippet": topic.code_snippet,
        }

    async def create_topic(
        self,
        user_id: str,
        topic_create: TopicCreate,
    ) -> Topic:
        """
        Create a new topic.

        Args:
            user_id: User ID who owns the topic
            topic_create: Topic creation data

        Returns:
            Created topic object
        """
        now = utcnow()
        topic_doc = {
            "user_id": user_id,
            **self._record_fields(topic_create),
            "created_at": now,
            "updated_at": now,
        }

        result = await self.topics.insert_one(topic_doc)
        topic_doc["_id"] = result.inserted_id

        return self._doc_to_topic(topic_doc)

    async def list_topics(
        self,
        user_id: str,
        category: Optional[TopicCategory] = None,
    ) -> list[Topic]:
        """
        List topics for a user, newest first.

        Args:
            user_id: User ID
            category: Optional category filter

        Returns:
            List of topics
        """
        query = owner_query(user_id)
        if category:
            query["category"] = TopicCategory(category).value

        cursor = self.topics.find(query).sort(TOPIC_SORT)
        topic_docs = await cursor.to_list(length=None)

        return [self._doc_to_topic(doc) for doc in topic_docs]

    async def list_topics_by_category(
        self,
        user_id: str,
        category: TopicCategory,
    ) -> list[Topic]:
        """List a user's topics in one category, newest first."""
        return await self.list_topics(user_id=user_id, category=category)

    async def update_topic(
        self,
        user_id: str,
        topic_id: str,
        topic_update: TopicUpdate,
    ) -> Topic:
        """
        Apply a partial update to a topic.

        Provided fields are merged over the stored topic and the result is
        validated like a new topic before anything is written.

        Args:
            user_id: User ID
            topic_id: Topic ID
            topic_update: Fields to change; None means unchanged

        Returns:
            Updated topic

        Raises:
            NotFoundError: If the topic does not exist for this user
            InvalidRecordError: If the merged topic is invalid
        """
        query = owned_record_query(user_id, topic_id, label="Topic")

        existing = await self.topics.find_one(query)
        if not existing:
            raise NotFoundError("Topic not found")

        current = self._doc_to_topic(existing)
        changes = topic_update.model_dump(exclude_none=True)
        try:
            merged = TopicBase.model_validate({**current.model_dump(), **changes})
        except ValidationError as e:
            raise InvalidRecordError(describe_errors(e.errors())) from e

        update_doc = {
            **self._record_fields(merged),
            "updated_at": utcnow(),
        }

        updated_doc = await self.topics.find_one_and_update(
            query,
            {"$set": update_doc},
            return_document=True,
        )
        if not updated_doc:
            raise NotFoundError("Topic not found")

        return self._doc_to_topic(updated_doc)

    async def delete_topic(
        self,
        user_id: str,
        topic_id: str,
    ) -> dict:
        """
        Permanently delete a topic.

        Raises:
            NotFoundError: If the topic does not exist for this user
        """
        query = owned_record_query(user_id, topic_id, label="Topic")

        deleted = await self.topics.find_one_and_delete(query)
        if not deleted:
            raise NotFoundError("Topic not found")

        return {"message": "Topic deleted successfully", "id": topic_id}
