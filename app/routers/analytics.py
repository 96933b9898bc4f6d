"""
Router analytics.

Endpoints:
- GET /analytics?days=N - stats des N derniers jours (1..365)
- GET /analytics/rankings - classement all-time des tâches
"""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import Optional

from app.core.database import get_db
from app.core.security import get_current_user
from app.models.user import User
from app.schemas.analytics import AnalyticsResponse, RankingResponse
from app.services import analytics_service

router = APIRouter(prefix="/analytics", tags=["analytics"])


@router.get("", response_model=AnalyticsResponse)
def get_analytics(
    days: Optional[int] = Query(None),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    return analytics_service.get_analytics(db, current_user.id, days)


@router.get("/rankings", response_model=RankingResponse)
def get_rankings(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    return analytics_service.get_task_rankings(db, current_user.id)
