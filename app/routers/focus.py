"""
Router focus mode.

Endpoints:
- GET /focus - état + tâches du focus
- POST /focus/enable - vide la liste (mode prêt)
- POST /focus/disable - vide la liste (sortie du mode)
- GET /focus/available - tâches pas encore dans le focus
- POST /focus/tasks - ajoute une tâche existante
- DELETE /focus/tasks/{focus_id} - retire une entrée (renumérotation)
- PUT /focus/reorder - applique de nouvelles positions
"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from typing import List, Optional

from app.core.database import get_db
from app.core.security import get_current_user
from app.models.focus_entry import FocusEntry
from app.models.user import User
from app.schemas.focus import (
    AvailableTasksResponse,
    FocusAddRequest,
    FocusAddResponse,
    FocusItem,
    FocusReorderRequest,
    FocusState
)
from app.schemas.task import TaskResponse
from app.services import focus_service

router = APIRouter(prefix="/focus", tags=["focus"])


def to_item(entry: FocusEntry) -> FocusItem:
    return FocusItem(
        focus_id=entry.id,
        task_id=entry.task_id,
        order=entry.order,
        added_to_focus_at=entry.added_at,
        task=TaskResponse.model_validate(entry.task) if entry.task else None
    )


def focus_state(db: Session, user_id: int, message: Optional[str] = None) -> FocusState:
    entries = focus_service.list_entries(db, user_id)
    return FocusState(
        is_enabled=len(entries) > 0,
        total_tasks=len(entries),
        tasks=[to_item(entry) for entry in entries],
        message=message
    )


@router.get("", response_model=FocusState)
def get_focus(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    return focus_state(db, current_user.id)


@router.post("/enable", response_model=FocusState)
def enable_focus(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    focus_service.enable(db, current_user.id)
    # actif même sans entrée, le temps d'en ajouter
    return FocusState(
        is_enabled=True,
        total_tasks=0,
        tasks=[],
        message="Focus mode enabled. Ready to add tasks."
    )


@router.post("/disable", response_model=FocusState)
def disable_focus(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    removed = focus_service.disable(db, current_user.id)
    return FocusState(
        is_enabled=False,
        total_tasks=0,
        tasks=[],
        message=f"Focus mode disabled. {removed} tasks removed from focus."
    )


@router.get("/available", response_model=AvailableTasksResponse)
def available_tasks(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    tasks = focus_service.list_available(db, current_user.id)
    return AvailableTasksResponse(
        available_tasks=[TaskResponse.model_validate(task) for task in tasks],
        total_available=len(tasks)
    )


@router.post("/tasks", response_model=FocusAddResponse, status_code=status.HTTP_201_CREATED)
def add_focus_task(
    request: FocusAddRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    entry = focus_service.add(db, current_user.id, request.task_id)
    state = focus_state(db, current_user.id, message="Task added to focus mode")
    return FocusAddResponse(focus_entry=to_item(entry), **state.model_dump())


@router.delete("/tasks/{focus_id}", response_model=FocusState)
def remove_focus_task(
    focus_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    focus_service.remove(db, current_user.id, focus_id)
    return focus_state(db, current_user.id, message="Task removed from focus mode")


@router.put("/reorder", response_model=FocusState)
def reorder_focus_tasks(
    request: FocusReorderRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    focus_service.reorder(db, current_user.id, request.focus_orders)
    return focus_state(db, current_user.id, message="Focus tasks reordered successfully")
