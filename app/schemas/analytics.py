"""Schemas de la réponse /analytics"""

from datetime import date, datetime
from typing import Dict, List, Optional

from app.schemas.base import CamelModel


class DateRange(CamelModel):
    start: date
    end: date
    days: int


class DailyStat(CamelModel):
    date: str
    completed: int
    total: int
    completion_rate: float


class PriorityStat(CamelModel):
    total: int = 0
    completed: int = 0


class PriorityBreakdown(CamelModel):
    high: PriorityStat
    medium: PriorityStat
    low: PriorityStat


class ProgressCell(CamelModel):
    completed: bool
    completed_at: Optional[datetime]


class TaskSummary(CamelModel):
    id: int
    title: str
    description: Optional[str]
    priority: str
    created_at: datetime


class AnalyticsResponse(CamelModel):
    total_tasks: int
    completed_tasks: int
    completion_rate: float
    daily_stats: List[DailyStat]
    priority_breakdown: PriorityBreakdown
    tasks: List[TaskSummary]
    task_progress_by_date: Dict[int, Dict[str, ProgressCell]]
    date_range: DateRange
    current_streak: int
    longest_streak: int


class RankedTask(CamelModel):
    rank: int
    task_id: int
    title: str
    description: Optional[str]
    priority: str
    completion_count: int
    created_at: datetime
    first_completed_at: Optional[datetime]
    last_completed_at: Optional[datetime]


class RankingSummary(CamelModel):
    total_tasks: int
    tasks_with_completions: int
    tasks_without_completions: int
    total_completions: int
    average_completions_per_task: float
    most_completed_task: Optional[RankedTask]
    least_completed_task: Optional[RankedTask]


class RankingResponse(CamelModel):
    summary: RankingSummary
    top_performers: List[RankedTask]
    bottom_performers: List[RankedTask]
    all_tasks: List[RankedTask]
    generated_at: datetime
