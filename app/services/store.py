"""
Entity store : accès persistant aux Task, DailyCompletion et FocusEntry.

Toutes les lectures sont filtrées par propriétaire. Les contraintes d'unicité
sont portées par la base ; une violation remonte en ConstraintViolation.
"""

from datetime import date
from typing import List, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.errors import ConstraintViolation, NotFound
from app.models.task import Task
from app.models.daily_completion import DailyCompletion
from app.models.focus_entry import FocusEntry


def commit(db: Session) -> None:
    """Commit ; en cas d'échec la session est remise à zéro"""
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        raise ConstraintViolation("Record violates a uniqueness constraint") from e
    except Exception:
        db.rollback()
        raise


# ============ TASKS ============

def find_task(db: Session, user_id: int, task_id: int) -> Optional[Task]:
    return db.query(Task).filter(Task.id == task_id, Task.user_id == user_id).first()


def get_task(db: Session, user_id: int, task_id: int) -> Task:
    task = find_task(db, user_id, task_id)
    if not task:
        raise NotFound("Task not found")
    return task


def list_tasks(db: Session, user_id: int) -> List[Task]:
    return db.query(Task).filter(Task.user_id == user_id).order_by(Task.created_at.desc(), Task.id.desc()).all()


def task_ids(db: Session, user_id: int) -> List[int]:
    return [row.id for row in db.query(Task.id).filter(Task.user_id == user_id).all()]


# ============ DAILY COMPLETIONS ============

def find_completion(db: Session, user_id: int, task_id: int, day: date) -> Optional[DailyCompletion]:
    return db.query(DailyCompletion).filter(
        DailyCompletion.user_id == user_id,
        DailyCompletion.task_id == task_id,
        DailyCompletion.day == day
    ).first()


def insert_completion(db: Session, completion: DailyCompletion) -> DailyCompletion:
    db.add(completion)
    commit(db)
    db.refresh(completion)
    return completion


def completions_between(db: Session, user_id: int, task_ids_: List[int], start: date, end: date) -> List[DailyCompletion]:
    if not task_ids_:
        return []
    return db.query(DailyCompletion).filter(
        DailyCompletion.user_id == user_id,
        DailyCompletion.task_id.in_(task_ids_),
        DailyCompletion.day >= start,
        DailyCompletion.day <= end
    ).order_by(DailyCompletion.day).all()


# ============ FOCUS ENTRIES ============

def find_focus_entry(db: Session, user_id: int, focus_id: int) -> Optional[FocusEntry]:
    return db.query(FocusEntry).filter(FocusEntry.id == focus_id, FocusEntry.user_id == user_id).first()


def find_focus_for_task(db: Session, user_id: int, task_id: int) -> Optional[FocusEntry]:
    return db.query(FocusEntry).filter(FocusEntry.user_id == user_id, FocusEntry.task_id == task_id).first()


def list_focus_entries(db: Session, user_id: int) -> List[FocusEntry]:
    return db.query(FocusEntry).filter(
        FocusEntry.user_id == user_id
    ).order_by(FocusEntry.order, FocusEntry.added_at, FocusEntry.id).all()


def insert_focus_entry(db: Session, entry: FocusEntry) -> FocusEntry:
    db.add(entry)
    commit(db)
    db.refresh(entry)
    return entry


def delete_focus_entries(db: Session, user_id: int) -> int:
    deleted = db.query(FocusEntry).filter(FocusEntry.user_id == user_id).delete(synchronize_session=False)
    commit(db)
    return deleted
