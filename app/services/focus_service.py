"""
Focus mode : sous-ensemble ordonné des tâches d'un utilisateur.

Le mode est "actif" dès qu'il existe au moins une FocusEntry ; ce flag
n'est jamais stocké. remove() renumérote toujours les entrées en 1..N.
"""

import logging
from typing import Any, List, Optional

from sqlalchemy import func, select
from sqlalchemy.orm import Session, joinedload

from app.core.errors import AlreadyInFocus, NotFound, ValidationError
from app.models.focus_entry import FocusEntry
from app.models.task import Task
from app.services import store

logger = logging.getLogger(__name__)


def list_entries(db: Session, user_id: int) -> List[FocusEntry]:
    return db.query(FocusEntry).options(joinedload(FocusEntry.task)).filter(
        FocusEntry.user_id == user_id
    ).order_by(FocusEntry.order, FocusEntry.added_at, FocusEntry.id).all()


def is_enabled(db: Session, user_id: int) -> bool:
    return db.query(FocusEntry.id).filter(FocusEntry.user_id == user_id).first() is not None


def enable(db: Session, user_id: int) -> int:
    """Repart d'une liste focus vide"""
    cleared = store.delete_focus_entries(db, user_id)
    logger.info("Focus mode enabled for user %s (%s entries cleared)", user_id, cleared)
    return cleared


def disable(db: Session, user_id: int) -> int:
    """Sort du focus mode ; retourne le nombre d'entrées supprimées"""
    removed = store.delete_focus_entries(db, user_id)
    logger.info("Focus mode disabled for user %s (%s entries removed)", user_id, removed)
    return removed


def add(db: Session, user_id: int, task_id: Optional[int]) -> FocusEntry:
    if task_id is None:
        raise ValidationError("Task ID is required")

    store.get_task(db, user_id, task_id)
    if store.find_focus_for_task(db, user_id, task_id):
        raise AlreadyInFocus()

    last_order = db.query(func.max(FocusEntry.order)).filter(FocusEntry.user_id == user_id).scalar()
    entry = FocusEntry(user_id=user_id, task_id=task_id, order=(last_order or 0) + 1)
    entry = store.insert_focus_entry(db, entry)

    logger.info("Task %s added to focus for user %s at position %s", task_id, user_id, entry.order)
    return entry


def renumber(db: Session, user_id: int) -> None:
    """Ramène les ordres à 1..N en conservant l'ordre relatif"""
    for position, entry in enumerate(store.list_focus_entries(db, user_id), start=1):
        if entry.order != position:
            entry.order = position
    store.commit(db)


def remove(db: Session, user_id: int, focus_id: int) -> None:
    entry = store.find_focus_entry(db, user_id, focus_id)
    if not entry:
        raise NotFound("Focus entry not found")

    db.delete(entry)
    store.commit(db)
    renumber(db, user_id)
    logger.info("Focus entry %s removed for user %s", focus_id, user_id)


def reorder(db: Session, user_id: int, focus_orders: Any) -> int:
    """
    Applique les positions données [{focusId, order}, ...].

    Les entrées d'un autre utilisateur (ou inconnues) sont ignorées.
    Pas de renumérotation ici : doublons et trous éventuels sont conservés.
    """
    if not isinstance(focus_orders, list):
        raise ValidationError("focusOrders must be an array")

    updates = []
    for item in focus_orders:
        if not isinstance(item, dict):
            raise ValidationError("Each focusOrders item must be an object")
        focus_id = item.get("focusId", item.get("focus_id"))
        order = item.get("order")
        if not isinstance(focus_id, int) or isinstance(focus_id, bool) \
                or not isinstance(order, int) or isinstance(order, bool):
            raise ValidationError("Each focusOrders item needs integer focusId and order")
        updates.append((focus_id, order))

    applied = 0
    for focus_id, order in updates:
        entry = store.find_focus_entry(db, user_id, focus_id)
        if entry is None:
            continue
        entry.order = order
        applied += 1
    store.commit(db)

    logger.info("Reordered %s focus entries for user %s", applied, user_id)
    return applied


def list_available(db: Session, user_id: int) -> List[Task]:
    """Tâches de l'utilisateur qui ne sont pas dans le focus"""
    in_focus = select(FocusEntry.task_id).where(FocusEntry.user_id == user_id)
    return db.query(Task).filter(
        Task.user_id == user_id,
        Task.id.notin_(in_focus)
    ).order_by(Task.created_at.desc(), Task.id.desc()).all()
