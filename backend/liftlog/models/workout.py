from datetime import datetime
from enum import Enum
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.ext.orderinglist import ordering_list
from sqlalchemy import Float, Integer, String, DateTime, Text, func, Enum as SAEnum
from liftlog.db import Base

class WorkoutStatus(str, Enum):
    in_progress = "in-progress"
    completed = "completed"

class Workout(Base):
    """One user's training session for a calendar day."""
    __tablename__ = "workouts"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    username: Mapped[str] = mapped_column(String(64), index=True, nullable=False)
    date: Mapped[datetime] = mapped_column(DateTime, index=True, nullable=False)
    start_time: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    end_time: Mapped[datetime | None] = mapped_column(DateTime, nullable=True)
    duration: Mapped[int | None] = mapped_column(Integer, nullable=True)  # minutes
    intensity: Mapped[float | None] = mapped_column(Float, nullable=True)  # 0..10
    notes: Mapped[str] = mapped_column(Text, nullable=False, default="", server_default="")
    status: Mapped[WorkoutStatus] = mapped_column(
        SAEnum(WorkoutStatus, name="workout_status", values_callable=lambda e: [m.value for m in e]),
        nullable=False,
        default=WorkoutStatus.in_progress,
        server_default=WorkoutStatus.in_progress.value,
    )
    created_at: Mapped[DateTime] = mapped_column(DateTime, server_default=func.now())
    updated_at: Mapped[DateTime] = mapped_column(DateTime, server_default=func.now(), onupdate=func.now())

    # list position is the exerciseIndex clients address
    exercises = relationship(
        "ExerciseLog",
        back_populates="workout",
        order_by="ExerciseLog.position",
        collection_class=ordering_list("position"),
        cascade="all, delete-orphan",
        lazy="selectin",
    )
