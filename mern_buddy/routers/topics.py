"""Topic router - API endpoints for learning topics."""
import logging

from fastapi import APIRouter, Depends, HTTPException, status
from pymongo.errors import PyMongoError

from mern_buddy.database import get_database
from mern_buddy.exceptions import InvalidRecordError, NotFoundError
from mern_buddy.models.topic import Topic, TopicCategory, TopicCreate, TopicUpdate
from mern_buddy.routers.auth import get_current_user_id
from mern_buddy.services.topic_service import TopicService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/topics", tags=["topics"])


@router.get("", response_model=list[Topic])
async def list_topics(
    user_id: str = Depends(get_current_user_id),
    db=Depends(get_database),
):
    """
    List topics for the authenticated user.

    - Requires authentication
    - Newest topics first
    """
    service = TopicService(db)
    try:
        return await service.list_topics(user_id=user_id)
    except PyMongoError:
        logger.exception("Get topics error")
        raise HTTPException(status_code=500, detail="Error fetching topics")


@router.post("", response_model=Topic, status_code=status.HTTP_201_CREATED)
async def create_topic(
    topic: TopicCreate,
    user_id: str = Depends(get_current_user_id),
    db=Depends(get_database),
):
    """
    Create a new topic.

    - Requires authentication
    - Owner is always the authenticated user
    - Returns 400 if name or category is missing
    """
    service = TopicService(db)
    try:
        return await service.create_topic(user_id=user_id, topic_create=topic)
    except PyMongoError:
        logger.exception("Create topic error")
        raise HTTPException(status_code=500, detail="Error creating topic")


@router.put("/{topic_id}", response_model=Topic)
async def update_topic(
    topic_id: str,
    topic_update: TopicUpdate,
    user_id: str = Depends(get_current_user_id),
    db=Depends(get_database),
):
    """
    Update some fields of a topic.

    - Requires authentication
    - Returns 400 if the result would be invalid; nothing is written then
    - Returns 404 if the topic does not exist or belongs to another user
    """
    service = TopicService(db)
    try:
        return await service.update_topic(
            user_id=user_id,
            topic_id=topic_id,
            topic_update=topic_update,
        )
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except InvalidRecordError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except PyMongoError:
        logger.exception("Update topic error")
        raise HTTPException(status_code=500, detail="Error updating topic")


@router.delete("/{topic_id}")
async def delete_topic(
    topic_id: str,
    user_id: str = Depends(get_current_user_id),
    db=Depends(get_database),
):
    """
    Permanently delete a topic.

    - Requires authentication
    - Returns 404 if the topic does not exist or belongs to another user
    """
    service = TopicService(db)
    try:
        return await service.delete_topic(user_id=user_id, topic_id=topic_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except PyMongoError:
        logger.exception("Delete topic error")
        raise HTTPException(status_code=500, detail="Error deleting topic")


@router.get("/category/{category}", response_model=list[Topic])
async def list_topics_by_category(
    category: TopicCategory,
    user_id: str = Depends(get_current_user_id),
    db=Depends(get_database),
):
    """
    List the authenticated user's topics in one category.

    - Requires authentication
    - Returns 400 for an unknown category
    """
    service = TopicService(db)
    try:
        return await service.list_topics_by_category(user_id=user_id, category=category)
    except PyMongoError:
        logger.exception("Get topics by category error")
        raise HTTPException(status_code=500, detail="Error fetching topics by category")
