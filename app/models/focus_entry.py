"""FocusEntry model"""

from sqlalchemy import Column, Integer, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship
from datetime import datetime
from app.core.database import Base
from app.models.task import Task


class FocusEntry(Base):
    __tablename__ = "focus_entries"
    __table_args__ = (
        UniqueConstraint("user_id", "task_id", name="uq_focus_user_task"),
    )

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    task_id = Column(Integer, ForeignKey("tasks.id"), nullable=False, index=True)

    order = Column(Integer, default=0)  # position 1..N dans la file focus
    added_at = Column(DateTime, default=datetime.utcnow)

    task = relationship(Task)
