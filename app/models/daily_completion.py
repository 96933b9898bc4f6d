"""DailyCompletion model : une ligne = tâche complétée ce jour-là"""

from sqlalchemy import Column, Integer, Date, DateTime, Boolean, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship
from datetime import datetime
from app.core.database import Base
from app.models.task import Task


class DailyCompletion(Base):
    __tablename__ = "daily_completions"
    __table_args__ = (
        UniqueConstraint("user_id", "task_id", "day", name="uq_completion_user_task_day"),
    )

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    task_id = Column(Integer, ForeignKey("tasks.id"), nullable=False, index=True)

    # jour calendaire dans le fuseau de référence, sans heure
    day = Column(Date, nullable=False, index=True)
    completed = Column(Boolean, default=True, nullable=False)
    completed_at = Column(DateTime, default=datetime.utcnow)

    created_at = Column(DateTime, default=datetime.utcnow)

    task = relationship(Task)
