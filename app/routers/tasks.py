from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from typing import List

from app.core.config import settings
from app.core.database import get_db
from app.core.security import get_current_user
from app.core.timezone import day_key, reference_today, to_reference_time, utc_now
from app.models.user import User
from app.schemas.task import (
    TaskCreate,
    TaskUpdate,
    TaskResponse,
    TaskDeleteResponse,
    CleanupResponse,
    ServerDateResponse
)
from app.schemas.completion import CompletionResponse, CompletionWithTask, ToggleResponse
from app.services import progress_service, store, task_service

router = APIRouter(prefix="/tasks", tags=["tasks"])


@router.get("", response_model=List[TaskResponse])
def list_tasks(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    return store.list_tasks(db, current_user.id)


@router.post("", response_model=TaskResponse, status_code=status.HTTP_201_CREATED)
def create_task(
    task_data: TaskCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    return task_service.create_task(
        db,
        current_user.id,
        title=task_data.title,
        description=task_data.description,
        priority=task_data.priority
    )


@router.get("/progress/today", response_model=List[CompletionWithTask])
def today_progress(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Complétions du jour de référence, avec la tâche"""
    return progress_service.get_today_progress(db, current_user.id)


@router.post("/cleanup", response_model=CleanupResponse)
def cleanup(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Supprime les complétions / entrées focus orphelines"""
    deleted_progress, deleted_focus = task_service.cleanup_orphans(db, current_user.id)
    return CleanupResponse(
        message="Cleanup completed",
        deleted_orphaned_records=deleted_progress,
        deleted_orphaned_focus_entries=deleted_focus
    )


@router.get("/debug/date", response_model=ServerDateResponse)
def server_date(current_user: User = Depends(get_current_user)):
    now = utc_now()
    return ServerDateResponse(
        server_time=now,
        reference_time=to_reference_time(now),
        reference_date=day_key(reference_today(now)),
        utc_offset_minutes=settings.REFERENCE_UTC_OFFSET_MINUTES
    )


@router.get("/{task_id}", response_model=TaskResponse)
def get_task(
    task_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    return store.get_task(db, current_user.id, task_id)


@router.put("/{task_id}", response_model=TaskResponse)
def update_task(
    task_id: int,
    task_data: TaskUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    changes = task_data.model_dump(exclude_unset=True)
    return task_service.update_task(db, current_user.id, task_id, changes)


@router.delete("/{task_id}", response_model=TaskDeleteResponse)
def delete_task(
    task_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    deleted_progress, deleted_focus = task_service.delete_task(db, current_user.id, task_id)
    return TaskDeleteResponse(
        message="Task and its progress history permanently deleted",
        deleted_progress_records=deleted_progress,
        deleted_focus_entries=deleted_focus
    )


@router.post("/{task_id}/toggle", response_model=ToggleResponse)
def toggle_completion(
    task_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """
    Bascule la complétion du jour.

    Pas de ligne -> créée (completed), ligne présente -> supprimée (incomplete).
    """
    result = progress_service.toggle(db, current_user.id, task_id)
    return ToggleResponse(
        task_id=result.task_id,
        day=result.day,
        state=result.state.value,
        completion=CompletionResponse.model_validate(result.completion) if result.completion else None
    )
