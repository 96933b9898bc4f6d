"""Task service : CRUD, suppression en cascade et nettoyage des orphelins"""

import logging
from typing import Optional, Tuple

from sqlalchemy.orm import Session

from app.core.errors import ValidationError
from app.models.task import Task, PRIORITIES
from app.models.daily_completion import DailyCompletion
from app.models.focus_entry import FocusEntry
from app.services import focus_service, store

logger = logging.getLogger(__name__)


def _clean_title(title: Optional[str]) -> str:
    title = (title or "").strip()
    if not title:
        raise ValidationError("Please provide a task title")
    return title


def _clean_description(description: Optional[str]) -> Optional[str]:
    if description is None:
        return None
    return description.strip()


def _check_priority(priority: str) -> str:
    if priority not in PRIORITIES:
        raise ValidationError(f"Priority must be one of: {', '.join(PRIORITIES)}")
    return priority


def create_task(db: Session, user_id: int, title: Optional[str], description: Optional[str] = None,
                priority: str = "medium") -> Task:
    task = Task(
        user_id=user_id,
        title=_clean_title(title),
        description=_clean_description(description),
        priority=_check_priority(priority or "medium")
    )
    db.add(task)
    store.commit(db)
    db.refresh(task)
    return task


def update_task(db: Session, user_id: int, task_id: int, changes: dict) -> Task:
    task = store.get_task(db, user_id, task_id)

    if "title" in changes:
        task.title = _clean_title(changes["title"])
    if "description" in changes:
        task.description = _clean_description(changes["description"])
    if changes.get("priority") is not None:
        task.priority = _check_priority(changes["priority"])

    store.commit(db)
    db.refresh(task)
    return task


def delete_task(db: Session, user_id: int, task_id: int) -> Tuple[int, int]:
    """
    Suppression définitive d'une tâche et de ses DailyCompletion / FocusEntry.

    Retourne (nb completions supprimées, nb entrées focus supprimées).
    Si le batch échoue en cours de route, cleanup_orphans rattrape les restes.
    """
    task = store.get_task(db, user_id, task_id)

    deleted_progress = db.query(DailyCompletion).filter(
        DailyCompletion.task_id == task.id,
        DailyCompletion.user_id == user_id
    ).delete(synchronize_session=False)
    deleted_focus = db.query(FocusEntry).filter(
        FocusEntry.task_id == task.id,
        FocusEntry.user_id == user_id
    ).delete(synchronize_session=False)

    db.delete(task)
    store.commit(db)
    if deleted_focus:
        focus_service.renumber(db, user_id)

    logger.info("Deleted task %s and %s progress records, %s focus entries",
                task_id, deleted_progress, deleted_focus)
    return deleted_progress, deleted_focus


def cleanup_orphans(db: Session, user_id: int) -> Tuple[int, int]:
    """
    Supprime les DailyCompletion et FocusEntry qui pointent vers une tâche disparue.
    Best-effort : retourne simplement les compteurs.
    """
    existing_ids = store.task_ids(db, user_id)

    completions = db.query(DailyCompletion).filter(DailyCompletion.user_id == user_id)
    focus_entries = db.query(FocusEntry).filter(FocusEntry.user_id == user_id)
    if existing_ids:
        completions = completions.filter(DailyCompletion.task_id.notin_(existing_ids))
        focus_entries = focus_entries.filter(FocusEntry.task_id.notin_(existing_ids))

    deleted_progress = completions.delete(synchronize_session=False)
    deleted_focus = focus_entries.delete(synchronize_session=False)
    store.commit(db)
    if deleted_focus:
        focus_service.renumber(db, user_id)

    if deleted_progress or deleted_focus:
        logger.info("Cleanup for user %s: %s orphaned progress records, %s orphaned focus entries",
                    user_id, deleted_progress, deleted_focus)
    return deleted_progress, deleted_focus
