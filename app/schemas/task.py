"""Pydantic schemas for task request/response validation."""

from datetime import datetime
from typing import Optional

from app.schemas.base import CamelModel


class TaskCreate(CamelModel):
    title: Optional[str] = None
    description: Optional[str] = None
    priority: str = "medium"


class TaskUpdate(CamelModel):
    """Schema for updating an existing task."""

    title: Optional[str] = None
    description: Optional[str] = None
    priority: Optional[str] = None


class TaskResponse(CamelModel):
    id: int
    user_id: int
    title: str
    description: Optional[str]
    priority: str
    is_completed: bool
    created_at: datetime
    updated_at: datetime


class TaskDeleteResponse(CamelModel):
    message: str
    deleted_progress_records: int
    deleted_focus_entries: int


class CleanupResponse(CamelModel):
    message: str
    deleted_orphaned_records: int
    deleted_orphaned_focus_entries: int


class ServerDateResponse(CamelModel):
    server_time: datetime
    reference_time: datetime
    reference_date: str
    utc_offset_minutes: int
