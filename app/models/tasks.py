import enum
import uuid

from sqlalchemy import Column, Integer, String, Text
from app.database import Base
from app.models.types import UTCDateTime, utcnow


class TaskStatus(str, enum.Enum):
    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"


class TaskPriority(str, enum.Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"

    @property
    def rank(self) -> int:
        return PRIORITY_RANKS[self]

    @classmethod
    def from_rank(cls, rank: int) -> "TaskPriority":
        for priority, value in PRIORITY_RANKS.items():
            if value == rank:
                return priority
        raise ValueError(f"unknown priority rank: {rank}")


# Stored as an ordinal so that sorting by priority is numeric
PRIORITY_RANKS = {
    TaskPriority.LOW: 1,
    TaskPriority.MEDIUM: 2,
    TaskPriority.HIGH: 3,
}


class Task(Base):
    __tablename__ = "tasks"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    title = Column(String(200), nullable=False)
    description = Column(Text, nullable=False, default="")
    status = Column(String(20), nullable=False, index=True, default=TaskStatus.PENDING.value)
    priority = Column(Integer, nullable=False, index=True, default=PRIORITY_RANKS[TaskPriority.MEDIUM])
    due_date = Column(UTCDateTime, nullable=True, index=True)
    created_at = Column(UTCDateTime, nullable=False, index=True, default=utcnow)
    updated_at = Column(UTCDateTime, nullable=False, default=utcnow, onupdate=utcnow)

    @property
    def priority_name(self) -> TaskPriority:
        return TaskPriority.from_rank(self.priority)
