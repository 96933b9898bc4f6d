from datetime import datetime
from typing import Any, List, Optional

from app.schemas.base import CamelModel
from app.schemas.task import TaskResponse


class FocusAddRequest(CamelModel):
    task_id: Optional[int] = None


class FocusReorderRequest(CamelModel):
    # validé dans le service (doit être une liste de {focusId, order})
    focus_orders: Any = None


class FocusItem(CamelModel):
    focus_id: int
    task_id: int
    order: int
    added_to_focus_at: datetime
    task: Optional[TaskResponse] = None


class FocusState(CamelModel):
    is_enabled: bool
    total_tasks: int
    tasks: List[FocusItem]
    message: Optional[str] = None


class FocusAddResponse(FocusState):
    focus_entry: FocusItem


class AvailableTasksResponse(CamelModel):
    available_tasks: List[TaskResponse]
    total_available: int
