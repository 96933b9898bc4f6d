from datetime import date, datetime
from typing import Optional, Literal

from app.schemas.base import CamelModel
from app.schemas.task import TaskResponse


class CompletionResponse(CamelModel):
    id: int
    user_id: int
    task_id: int
    day: date
    completed: bool
    completed_at: Optional[datetime]


class CompletionWithTask(CompletionResponse):
    task: Optional[TaskResponse]


class ToggleResponse(CamelModel):
    task_id: int
    day: date
    state: Literal["completed", "incomplete"]
    completion: Optional[CompletionResponse] = None
