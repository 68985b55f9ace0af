from datetime import datetime
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy import String, DateTime, Float, func, Integer
from fittrack.db import Base, utcnow

class User(Base):
    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    username: Mapped[str] = mapped_column(String(64), unique=True, index=True, nullable=False)
    email: Mapped[str] = mapped_column(String(255), unique=True, index=True, nullable=False)
    name: Mapped[str] = mapped_column(String(120), nullable=False)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False, server_default="")
    height_feet: Mapped[int | None] = mapped_column(Integer, nullable=True, default=5)
    height_inches: Mapped[int | None] = mapped_column(Integer, nullable=True, default=10)
    current_weight: Mapped[float | None] = mapped_column(Float, nullable=True, default=75.0)
    goal_weight: Mapped[float | None] = mapped_column(Float, nullable=True, default=70.0)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, server_default=func.now())

    workout_plans = relationship("WorkoutPlan", back_populates="user")
    sessions = relationship("WorkoutSession", back_populates="user")
    weight_logs = relationship("WeightLog", back_populates="user")
