"""
Service d'analytics : statistiques journalières, répartition par priorité,
matrice tâche x jour, streaks et classement des tâches.

Tout est calculé à la demande (lecture seule), à partir des DailyCompletion.
"""

import logging
from collections import defaultdict
from datetime import datetime, timedelta
from typing import Dict, List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.errors import AggregationFailed
from app.core.timezone import day_key, day_window, utc_now
from app.models.daily_completion import DailyCompletion
from app.models.task import PRIORITIES
from app.services import store

logger = logging.getLogger(__name__)


def clamp_days(days: Optional[int]) -> int:
    """Fenêtre bornée à [1, ANALYTICS_MAX_DAYS]"""
    if days is None:
        days = settings.ANALYTICS_DEFAULT_DAYS
    return max(1, min(int(days), settings.ANALYTICS_MAX_DAYS))


def rate(completed: int, total: int) -> float:
    """Pourcentage arrondi à 1 décimale, 0 si total nul"""
    if total <= 0:
        return 0.0
    return round(completed / total * 100, 1)


def compute_streaks(daily_stats: List[dict]) -> tuple:
    """
    daily_stats triés du plus ancien au plus récent.
    Retourne (streak courante, plus longue streak).
    La streak courante peut se terminer hier si rien n'est encore fait aujourd'hui.
    """
    longest = run = 0
    for stat in daily_stats:
        run = run + 1 if stat["completed"] > 0 else 0
        longest = max(longest, run)

    current = 0
    days = list(reversed(daily_stats))
    if days and days[0]["completed"] == 0:
        days = days[1:]
    for stat in days:
        if stat["completed"] == 0:
            break
        current += 1

    return current, longest


def get_analytics(db: Session, user_id: int, days: Optional[int] = None, now: Optional[datetime] = None) -> dict:
    max_days = clamp_days(days)
    start, end = day_window(max_days, now)

    try:
        tasks = store.list_tasks(db, user_id)
        progress = store.completions_between(db, user_id, [t.id for t in tasks], start, end)
    except SQLAlchemyError as e:
        logger.error("Analytics query failed for user %s: %s", user_id, e)
        raise AggregationFailed() from e

    priority_of = {t.id: t.priority for t in tasks}
    priority_breakdown = {p: {"total": 0, "completed": 0} for p in reversed(PRIORITIES)}
    for task in tasks:
        priority_breakdown[task.priority]["total"] += 1

    progress_by_date = defaultdict(lambda: {"completed": 0, "total": 0})
    task_progress_by_date: Dict[int, Dict[str, dict]] = {t.id: {} for t in tasks}
    completed_task_ids = set()

    for row in progress:
        key = day_key(row.day)
        progress_by_date[key]["total"] += 1
        task_progress_by_date[row.task_id][key] = {
            "completed": row.completed,
            "completed_at": row.completed_at
        }
        if row.completed:
            progress_by_date[key]["completed"] += 1
            completed_task_ids.add(row.task_id)

    for task_id in completed_task_ids:
        priority_breakdown[priority_of[task_id]]["completed"] += 1

    # un jour sans ligne donne une entrée à zéro : exactement max_days entrées
    daily_stats = []
    for offset in range(max_days):
        key = day_key(start + timedelta(days=offset))
        day_data = progress_by_date.get(key, {"completed": 0, "total": 0})
        daily_stats.append({
            "date": key,
            "completed": day_data["completed"],
            "total": day_data["total"],
            "completion_rate": rate(day_data["completed"], day_data["total"])
        })

    current_streak, longest_streak = compute_streaks(daily_stats)

    total_tasks = len(tasks)
    completed_tasks = len(completed_task_ids)

    return {
        "total_tasks": total_tasks,
        "completed_tasks": completed_tasks,
        "completion_rate": rate(completed_tasks, total_tasks),
        "daily_stats": sorted(daily_stats, key=lambda s: s["date"], reverse=True),
        "priority_breakdown": priority_breakdown,
        "tasks": tasks,
        "task_progress_by_date": task_progress_by_date,
        "date_range": {"start": start, "end": end, "days": max_days},
        "current_streak": current_streak,
        "longest_streak": longest_streak
    }


def get_task_rankings(db: Session, user_id: int) -> dict:
    """Classement all-time des tâches par nombre de jours complétés"""
    try:
        tasks = store.list_tasks(db, user_id)
        rows = []
        if tasks:
            rows = db.query(DailyCompletion).filter(
                DailyCompletion.user_id == user_id,
                DailyCompletion.task_id.in_([t.id for t in tasks]),
                DailyCompletion.completed == True
            ).order_by(DailyCompletion.day, DailyCompletion.completed_at).all()
    except SQLAlchemyError as e:
        logger.error("Ranking query failed for user %s: %s", user_id, e)
        raise AggregationFailed("Failed to fetch task rankings, please retry") from e

    completions = {t.id: [] for t in tasks}
    for row in rows:
        completions[row.task_id].append(row.completed_at)

    # plus complétée d'abord, puis la plus récente
    ordered = sorted(tasks, key=lambda t: t.created_at or datetime.min, reverse=True)
    ordered = sorted(ordered, key=lambda t: len(completions[t.id]), reverse=True)

    ranked = []
    for index, task in enumerate(ordered):
        done = completions[task.id]
        ranked.append({
            "rank": index + 1,
            "task_id": task.id,
            "title": task.title,
            "description": task.description,
            "priority": task.priority,
            "completion_count": len(done),
            "created_at": task.created_at,
            "first_completed_at": done[0] if done else None,
            "last_completed_at": done[-1] if done else None
        })

    with_completions = [t for t in ranked if t["completion_count"] > 0]
    total_completions = sum(t["completion_count"] for t in ranked)
    average = round(total_completions / len(ranked), 2) if ranked else 0.0

    return {
        "summary": {
            "total_tasks": len(ranked),
            "tasks_with_completions": len(with_completions),
            "tasks_without_completions": len(ranked) - len(with_completions),
            "total_completions": total_completions,
            "average_completions_per_task": average,
            "most_completed_task": ranked[0] if ranked else None,
            "least_completed_task": with_completions[-1] if with_completions else None
        },
        "top_performers": ranked[:10],
        "bottom_performers": list(reversed(with_completions[-10:])),
        "all_tasks": ranked,
        "generated_at": utc_now()
    }
