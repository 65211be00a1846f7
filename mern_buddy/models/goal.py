"""Goal model definitions."""
from datetime import date
from enum import Enum
from typing import Optional

from pydantic import Field

from mern_buddy.models.base import CamelModel, NonEmptyStr, UtcDatetime


class GoalPriority(str, Enum):
    """Goal priorities."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class GoalBase(CamelModel):
    """Base goal fields."""

    title: NonEmptyStr
    description: str = ""
    target_date: date
    priority: GoalPriority = GoalPriority.MEDIUM


class GoalCreate(GoalBase):
    """Goal creation model. New goals always start uncompleted."""

    pass


class GoalUpdate(CamelModel):
    """Goal update model - all fields optional."""

    title: Optional[NonEmptyStr] = None
    description: Optional[str] = None
    target_date: Optional[date] = None
    completed: Optional[bool] = Field(default=None, strict=True)
    priority: Optional[GoalPriority] = None


class GoalRecord(GoalBase):
    """Goal fields as validated before persisting."""

    completed: bool = Field(default=False, strict=True)


class Goal(GoalRecord):
    """Full goal model with database fields."""

    id: str = Field(alias="_id", serialization_alias="id")
    owner: str
    created_at: UtcDatetime
    updated_at: UtcDatetime
