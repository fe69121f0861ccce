from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.ext.orderinglist import ordering_list
from sqlalchemy import Integer, ForeignKey, Text
from liftlog.db import Base

class ExerciseLog(Base):
    __tablename__ = "exercise_logs"
    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    workout_id: Mapped[int] = mapped_column(ForeignKey("workouts.id", ondelete="CASCADE"), index=True)
    position: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    # catalog entry is referenced, not owned
    exercise_id: Mapped[int | None] = mapped_column(
        ForeignKey("exercises.id", ondelete="SET NULL"), index=True, nullable=True
    )
    notes: Mapped[str] = mapped_column(Text, nullable=False, default="", server_default="")

    workout = relationship("Workout", back_populates="exercises")
    exercise = relationship("Exercise", lazy="joined")
    sets = relationship(
        "WorkoutSet",
        back_populates="exercise_log",
        order_by="WorkoutSet.set_number",
        collection_class=ordering_list("set_number", count_from=1),
        cascade="all, delete-orphan",
        lazy="selectin",
    )
