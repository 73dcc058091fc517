"""
Task-related Pydantic schemas
"""

from datetime import datetime
from typing import Literal, Optional
from pydantic import BaseModel, Field

from .common import PartialUpdate, UtcDatetime

TaskStatus = Literal["pending", "in-progress", "completed"]
TaskPriority = Literal["low", "medium", "high"]

class TaskCreate(BaseModel):
    """Schema for creating a task"""
    title: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = None
    status: TaskStatus = "pending"
    priority: TaskPriority = "medium"
    category: Optional[str] = None
    due_date: Optional[UtcDatetime] = None
    assigned_to: Optional[str] = None


class TaskUpdate(PartialUpdate):
    """Schema for updating a task"""
    non_nullable = ("title", "status", "priority")

    title: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = None
    status: Optional[TaskStatus] = None
    priority: Optional[TaskPriority] = None
    category: Optional[str] = None
    due_date: Optional[UtcDatetime] = None
    assigned_to: Optional[str] = None


class TaskResponse(BaseModel):
    """Task response schema"""
    id: int
    event_id: int
    title: str
    description: Optional[str] = None
    status: str
    priority: str
    category: Optional[str] = None
    due_date: Optional[datetime] = None
    assigned_to: Optional[str] = None
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
