"""Topic model definitions."""
from enum import Enum
from typing import Optional

from pydantic import Field

from mern_buddy.models.base import CamelModel, NonEmptyStr, UtcDatetime


class TopicCategory(str, Enum):
    """MERN stack categories a topic can belong to."""

    MONGODB = "mongodb"
    EXPRESS = "express"
    REACT = "react"
    NODEJS = "nodejs"


class TopicStatus(str, Enum):
    """Learning status of a topic."""

    NOT_STARTED = "not-started"
    LEARNING = "learning"
    COMPLETED = "completed"


class TopicBase(CamelModel):
    """Base topic fields."""

    name: NonEmptyStr
    category: TopicCategory
    status: TopicStatus = TopicStatus.NOT_STARTED
    progress: int = Field(default=0, ge=0, le=100, strict=True)
    notes: str = ""
    code_snippet: str = ""


class TopicCreate(TopicBase):
    """Topic creation model."""

    pass


class TopicUpdate(CamelModel):
    """Topic update model - all fields optional."""

    name: Optional[NonEmptyStr] = None
    category: Optional[TopicCategory] = None
    status: Optional[TopicStatus] = None
    progress: Optional[int] = Field(default=None, ge=0, le=100, strict=True)
    notes: Optional[str] = None
    code_snippet: Optional[str] = None


class Topic(TopicBase):
    """Full topic model with database fields."""

    id: str = Field(alias="_id", serialization_alias="id")
    owner: str
    created_at: UtcDatetime
    updated_at: UtcDatetime
