from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy import Float, ForeignKey, Integer, UniqueConstraint
from fittrack.db import Base

class WorkoutPlanExercise(Base):
    __tablename__ = "workout_plan_exercises"
    __table_args__ = (UniqueConstraint("workout_plan_id", "order", name="uq_plan_exercise_order"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    workout_plan_id: Mapped[int] = mapped_column(ForeignKey("workout_plans.id", ondelete="CASCADE"), index=True)
    exercise_id: Mapped[int] = mapped_column(ForeignKey("exercises.id", ondelete="RESTRICT"), index=True)
    sets: Mapped[int] = mapped_column(Integer, nullable=False)
    reps: Mapped[int] = mapped_column(Integer, nullable=False)
    weight: Mapped[float | None] = mapped_column(Float, nullable=True)  # kg
    rest_time: Mapped[int | None] = mapped_column(Integer, nullable=True)  # seconds
    order: Mapped[int] = mapped_column(Integer, nullable=False)

    workout_plan = relationship("WorkoutPlan", back_populates="exercises")
    exercise = relationship("Exercise")
