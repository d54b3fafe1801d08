"""
Ember — ORM Models
Hosted storage for accounts, assessment results, daily planner entries,
check-ins with supplement doses, weekly self-assessments and journal entries.
"""

from sqlalchemy import (
    String, Integer, Boolean, ForeignKey, Date, DateTime, JSON, Text, UniqueConstraint
)
from sqlalchemy.orm import Mapped, mapped_column, relationship
from database import Base
import datetime


class User(Base):
    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    email: Mapped[str] = mapped_column(String(256), unique=True, nullable=False, index=True)
    full_name: Mapped[str | None] = mapped_column(String(128), nullable=True)
    hashed_password: Mapped[str] = mapped_column(String(256), nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True)

    assessments: Mapped[list["AssessmentRecord"]] = relationship(back_populates="user", cascade="all, delete-orphan")
    daily_entries: Mapped[list["DailyEntryRecord"]] = relationship(back_populates="user", cascade="all, delete-orphan")
    checkins: Mapped[list["DailyCheckinRecord"]] = relationship(back_populates="user", cascade="all, delete-orphan")
    supplement_logs: Mapped[list["SupplementComplianceRecord"]] = relationship(back_populates="user", cascade="all, delete-orphan")
    weekly_assessments: Mapped[list["WeeklyAssessmentRecord"]] = relationship(back_populates="user", cascade="all, delete-orphan")
    journal_entries: Mapped[list["JournalEntryRecord"]] = relationship(back_populates="user", cascade="all, delete-orphan")


class AssessmentRecord(Base):
    __tablename__ = "assessment_results"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(ForeignKey("users.id"), nullable=False, index=True)

    # Raw answers {question_id: 0-3} and the persisted result shape
    answers: Mapped[dict] = mapped_column(JSON, nullable=False)
    section_scores: Mapped[list] = mapped_column(JSON, nullable=False)
    primary_profile: Mapped[str] = mapped_column(String(128), nullable=False)
    completed_at: Mapped[datetime.datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    viewed_at: Mapped[datetime.datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    user: Mapped["User"] = relationship(back_populates="assessments")


class DailyEntryRecord(Base):
    __tablename__ = "daily_entries"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(ForeignKey("users.id"), nullable=False, index=True)
    entry_date: Mapped[datetime.date] = mapped_column(Date, nullable=False)

    # Full camelCase entry document; completion_score is denormalized for queries
    payload: Mapped[dict] = mapped_column(JSON, nullable=False)
    completion_score: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    __table_args__ = (
        UniqueConstraint("user_id", "entry_date", name="uq_user_date_entry"),
    )

    user: Mapped["User"] = relationship(back_populates="daily_entries")


class DailyCheckinRecord(Base):
    __tablename__ = "daily_checkins"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(ForeignKey("users.id"), nullable=False, index=True)
    checkin_date: Mapped[datetime.date] = mapped_column(Date, nullable=False)

    # Energy at three points in the day, 1-10
    energy_morning: Mapped[int | None] = mapped_column(Integer, nullable=True)
    energy_afternoon: Mapped[int | None] = mapped_column(Integer, nullable=True)
    energy_evening: Mapped[int | None] = mapped_column(Integer, nullable=True)
    mood_rating: Mapped[int | None] = mapped_column(Integer, nullable=True)
    sleep_quality: Mapped[int | None] = mapped_column(Integer, nullable=True)
    stress_level: Mapped[int | None] = mapped_column(Integer, nullable=True)

    water_intake: Mapped[int] = mapped_column(Integer, default=0)
    protein_meals: Mapped[int] = mapped_column(Integer, default=0)
    exercise_completed: Mapped[bool] = mapped_column(Boolean, default=False)
    sunlight_exposure: Mapped[bool] = mapped_column(Boolean, default=False)
    stress_management: Mapped[bool] = mapped_column(Boolean, default=False)
    screen_free_evening: Mapped[bool] = mapped_column(Boolean, default=False)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)

    __table_args__ = (
        UniqueConstraint("user_id", "checkin_date", name="uq_user_date_checkin"),
    )

    user: Mapped["User"] = relationship(back_populates="checkins")


class SupplementComplianceRecord(Base):
    __tablename__ = "supplement_compliance"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(ForeignKey("users.id"), nullable=False, index=True)
    compliance_date: Mapped[datetime.date] = mapped_column(Date, nullable=False)
    supplement_name: Mapped[str] = mapped_column(String(128), nullable=False)
    morning_taken: Mapped[bool] = mapped_column(Boolean, default=False)
    evening_taken: Mapped[bool] = mapped_column(Boolean, default=False)

    __table_args__ = (
        UniqueConstraint("user_id", "compliance_date", "supplement_name", name="uq_user_date_supplement"),
    )

    user: Mapped["User"] = relationship(back_populates="supplement_logs")


class WeeklyAssessmentRecord(Base):
    __tablename__ = "weekly_assessments"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(ForeignKey("users.id"), nullable=False, index=True)
    week_start_date: Mapped[datetime.date] = mapped_column(Date, nullable=False)

    # Seven 0-24 self-ratings, in PROFILE_CATEGORIES order
    profile_scores: Mapped[list] = mapped_column(JSON, nullable=False)
    weekly_wins: Mapped[str | None] = mapped_column(Text, nullable=True)
    weekly_challenges: Mapped[str | None] = mapped_column(Text, nullable=True)
    goals_next_week: Mapped[str | None] = mapped_column(Text, nullable=True)

    __table_args__ = (
        UniqueConstraint("user_id", "week_start_date", name="uq_user_week_assessment"),
    )

    user: Mapped["User"] = relationship(back_populates="weekly_assessments")


class JournalEntryRecord(Base):
    __tablename__ = "journal_entries"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(ForeignKey("users.id"), nullable=False, index=True)
    entry_uid: Mapped[str] = mapped_column(String(64), nullable=False)
    entry_date: Mapped[datetime.date] = mapped_column(Date, nullable=False, index=True)

    payload: Mapped[dict] = mapped_column(JSON, nullable=False)
    is_favorite: Mapped[bool] = mapped_column(Boolean, default=False)

    __table_args__ = (
        UniqueConstraint("user_id", "entry_uid", name="uq_user_journal_entry"),
    )

    user: Mapped["User"] = relationship(back_populates="journal_entries")
