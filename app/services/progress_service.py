"""
Service de complétion quotidienne.

L'état d'une tâche pour un jour donné est la présence ou l'absence d'une
ligne DailyCompletion : ABSENT <-> PRESENT. Le basculement crée ou supprime
cette ligne ; la contrainte unique (user, task, day) sert de verrou optimiste.
"""

import enum
import logging
from dataclasses import dataclass
from datetime import date, datetime
from typing import List, Optional

from sqlalchemy.orm import Session, joinedload

from app.core.errors import ConstraintViolation
from app.core.timezone import as_utc, reference_today, utc_now
from app.models.daily_completion import DailyCompletion
from app.services import store

logger = logging.getLogger(__name__)


class CompletionState(str, enum.Enum):
    ABSENT = "incomplete"
    PRESENT = "completed"


@dataclass
class ToggleResult:
    task_id: int
    day: date
    state: CompletionState
    completion: Optional[DailyCompletion] = None


def completion_state(db: Session, user_id: int, task_id: int, day: date) -> CompletionState:
    if store.find_completion(db, user_id, task_id, day):
        return CompletionState.PRESENT
    return CompletionState.ABSENT


def mark_complete(db: Session, user_id: int, task_id: int, day: date,
                  now: Optional[datetime] = None) -> DailyCompletion:
    """Insère la ligne du jour ; ConstraintViolation si elle existe déjà"""
    completed_at = as_utc(now or utc_now()).replace(tzinfo=None)
    completion = DailyCompletion(
        user_id=user_id,
        task_id=task_id,
        day=day,
        completed=True,
        completed_at=completed_at
    )
    return store.insert_completion(db, completion)


def toggle(db: Session, user_id: int, task_id: int, now: Optional[datetime] = None) -> ToggleResult:
    """
    Bascule la complétion de la tâche pour "aujourd'hui" (jour de référence).

    1. jour de référence de `now`
    2. la tâche doit appartenir à l'utilisateur (NotFound sinon)
    3. ABSENT -> création, PRESENT -> suppression
    """
    now = now or utc_now()
    today = reference_today(now)
    store.get_task(db, user_id, task_id)

    existing = store.find_completion(db, user_id, task_id, today)
    if existing:
        db.delete(existing)
        store.commit(db)
        logger.info("Task %s marked incomplete for %s", task_id, today)
        return ToggleResult(task_id=task_id, day=today, state=CompletionState.ABSENT)

    try:
        completion = mark_complete(db, user_id, task_id, today, now)
    except ConstraintViolation:
        # un toggle concurrent a déjà créé la ligne : l'état voulu est atteint
        logger.warning("Concurrent toggle on task %s for %s, keeping existing completion", task_id, today)
        completion = store.find_completion(db, user_id, task_id, today)
        if completion is None:
            raise

    logger.info("Task %s marked complete for %s", task_id, today)
    return ToggleResult(task_id=task_id, day=today, state=CompletionState.PRESENT, completion=completion)


def get_today_progress(db: Session, user_id: int, now: Optional[datetime] = None) -> List[DailyCompletion]:
    today = reference_today(now)
    return db.query(DailyCompletion).options(joinedload(DailyCompletion.task)).filter(
        DailyCompletion.user_id == user_id,
        DailyCompletion.day == today
    ).order_by(DailyCompletion.completed_at).all()
