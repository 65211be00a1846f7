"""Goal router - API endpoints for learning goals."""
import logging

from fastapi import APIRouter, Depends, HTTPException, status
from pymongo.errors import PyMongoError

from mern_buddy.config import settings
from mern_buddy.database import get_database
from mern_buddy.exceptions import InvalidRecordError, NotFoundError
from mern_buddy.models.goal import Goal, GoalCreate, GoalUpdate
from mern_buddy.routers.auth import get_current_user_id
from mern_buddy.services.goal_service import GoalService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/goals", tags=["goals"])


@router.get("", response_model=list[Goal])
async def list_goals(
    user_id: str = Depends(get_current_user_id),
    db=Depends(get_database),
):
    """
    List goals for the authenticated user, soonest target date first.
    """
    service = GoalService(db)
    try:
        return await service.list_goals(user_id=user_id)
    except PyMongoError:
        logger.exception("Get goals error")
        raise HTTPException(status_code=500, detail="Error fetching goals")


@router.post("", response_model=Goal, status_code=status.HTTP_201_CREATED)
async def create_goal(
    goal: GoalCreate,
    user_id: str = Depends(get_current_user_id),
    db=Depends(get_database),
):
    """
    Create a new goal.

    - Requires authentication
    - Starts uncompleted
    - Returns 400 if title or target date is missing
    """
    service = GoalService(db)
    try:
        return await service.create_goal(user_id=user_id, goal_create=goal)
    except PyMongoError:
        logger.exception("Create goal error")
        raise HTTPException(status_code=500, detail="Error creating goal")


@router.get("/upcoming", response_model=list[Goal])
async def list_upcoming_goals(
    user_id: str = Depends(get_current_user_id),
    db=Depends(get_database),
):
    """
    List uncompleted goals due within the upcoming window (7 days by default).
    """
    service = GoalService(db)
    try:
        return await service.list_upcoming_goals(
            user_id=user_id,
            window_days=settings.upcoming_window_days,
        )
    except PyMongoError:
        logger.exception("Get upcoming goals error")
        raise HTTPException(status_code=500, detail="Error fetching upcoming goals")


@router.put("/{goal_id}", response_model=Goal)
async def update_goal(
    goal_id: str,
    goal_update: GoalUpdate,
    user_id: str = Depends(get_current_user_id),
    db=Depends(get_database),
):
    """
    Update some fields of a goal.

    - Requires authentication
    - Returns 400 if the result would be invalid; nothing is written then
    - Returns 404 if the goal does not exist or belongs to another user
    """
    service = GoalService(db)
    try:
        return await service.update_goal(
            user_id=user_id,
            goal_id=goal_id,
            goal_update=goal_update,
        )
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except InvalidRecordError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except PyMongoError:
        logger.exception("Update goal error")
        raise HTTPException(status_code=500, detail="Error updating goal")


@router.delete("/{goal_id}")
async def delete_goal(
    goal_id: str,
    user_id: str = Depends(get_current_user_id),
    db=Depends(get_database),
):
    """
    Permanently delete a goal.

    - Requires authentication
    - Returns 404 if the goal does not exist or belongs to another user
    """
    service = GoalService(db)
    try:
        return await service.delete_goal(user_id=user_id, goal_id=goal_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except PyMongoError:
        logger.exception("Delete goal error")
        raise HTTPException(status_code=500, detail="Error deleting goal")
