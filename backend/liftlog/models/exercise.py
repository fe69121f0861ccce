from enum import Enum
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy import Boolean, String, Text, DateTime, Integer, false, func, Enum as SAEnum
from liftlog.db import Base

class BodyPart(str, Enum):
    chest = "chest"
    back = "back"
    shoulders = "shoulders"
    legs = "legs"
    arms = "arms"
    core = "core"
    full_body = "full-body"

class Difficulty(str, Enum):
    beginner = "beginner"
    intermediate = "intermediate"
    advanced = "advanced"

def _enum_values(enum_cls):
    return [m.value for m in enum_cls]

class Exercise(Base):
    __tablename__ = "exercises"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    name: Mapped[str] = mapped_column(String(120), unique=True, index=True, nullable=False)
    body_part: Mapped[BodyPart] = mapped_column(
        SAEnum(BodyPart, name="body_part", values_callable=_enum_values), nullable=False, index=True
    )
    difficulty: Mapped[Difficulty] = mapped_column(
        SAEnum(Difficulty, name="difficulty", values_callable=_enum_values), nullable=False, index=True
    )
    description: Mapped[str] = mapped_column(Text, nullable=False, default="", server_default="")
    recommended_sets: Mapped[int] = mapped_column(Integer, nullable=False, default=3, server_default="3")
    recommended_reps: Mapped[int] = mapped_column(Integer, nullable=False, default=12, server_default="12")
    is_default: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False, server_default=false())
    created_at: Mapped[DateTime] = mapped_column(DateTime, server_default=func.now())
    updated_at: Mapped[DateTime] = mapped_column(DateTime, server_default=func.now(), onupdate=func.now())
