"""Pydantic schemas for project comment contracts."""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field


class CommentCreate(BaseModel):
    comment: Optional[str] = None


class CommentOut(BaseModel):
    id: int
    project_id: int
    project_title: str
    user_id: int
    user_name: str
    user_email: str
    user_role: str
    comment: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class CommentEnvelope(BaseModel):
    comment: CommentOut


class CommentListEnvelope(BaseModel):
    comments: List[CommentOut] = Field(default_factory=list)
