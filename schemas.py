"""
Ember — Pydantic Schemas
Request/response models for the API. Planner entry bodies use the record
types from planner.py directly.
"""

from pydantic import BaseModel, Field, EmailStr, field_validator
from typing import Optional, List, Dict
from datetime import date, datetime

from catalog import QUESTION_IDS, MIN_ANSWER, MAX_ANSWER
from progress_engine import (
    PROFILE_CATEGORIES, WEEKLY_SCORE_DEFAULT, WEEKLY_SCORE_MIN, WEEKLY_SCORE_MAX,
)


# ══════════════════════════════════════════════════════════════════════════════
# AUTH
# ══════════════════════════════════════════════════════════════════════════════

class UserRegisterSchema(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=8, max_length=128)
    full_name: Optional[str] = Field(None, max_length=128)

class UserLoginSchema(BaseModel):
    email: EmailStr
    password: str

class TokenResponseSchema(BaseModel):
    access_token: str
    refresh_token: str
    token_type: str = "bearer"
    expires_in: int  # seconds

class UserPublicSchema(BaseModel):
    id: int
    email: str
    full_name: Optional[str] = None
    created_at: datetime

    class Config:
        from_attributes = True


# ══════════════════════════════════════════════════════════════════════════════
# ASSESSMENT
# ══════════════════════════════════════════════════════════════════════════════

class QuestionSchema(BaseModel):
    id: str
    text: str

    class Config:
        from_attributes = True


class SectionSchema(BaseModel):
    id: str
    title: str
    max_score: int
    questions: List[QuestionSchema]

    class Config:
        from_attributes = True


class AssessmentSubmitSchema(BaseModel):
    """Answers keyed by question id. Unanswered questions may be omitted."""
    responses: Dict[str, int]

    @field_validator("responses")
    @classmethod
    def validate_responses(cls, v: Dict[str, int]) -> Dict[str, int]:
        unknown = sorted(set(v) - QUESTION_IDS)
        if unknown:
            raise ValueError(f"Unknown question ids: {', '.join(unknown)}")
        for qid, answer in v.items():
            if not MIN_ANSWER <= answer <= MAX_ANSWER:
                raise ValueError(f"Answer for {qid} must be between {MIN_ANSWER} and {MAX_ANSWER}.")
        return v


class SectionScoreSchema(BaseModel):
    section_id: str
    title: str
    score: int = Field(..., ge=0)
    max_score: int
    impact_level: str
    impact_label: str

class AssessmentResultSchema(BaseModel):
    section_scores: List[SectionScoreSchema]
    primary_profile: str
    completed_at: datetime
    top_priorities: List[str] = Field(default_factory=list, description="Section ids, highest first")


# ══════════════════════════════════════════════════════════════════════════════
# PROTOCOL
# ══════════════════════════════════════════════════════════════════════════════

class SupplementSchema(BaseModel):
    name: str
    dosage: str
    purpose: str
    timing: str
    benefits: str

    class Config:
        from_attributes = True


class LifestyleCategorySchema(BaseModel):
    key: str
    title: str
    items: List[str]


class ProtocolSchema(BaseModel):
    profile: str
    description: str
    detailed_description: str
    supplements: List[SupplementSchema]
    lifestyle: List[LifestyleCategorySchema]
    timeline: Dict[str, str]
    optional: List[str]


class ProtocolResponseSchema(BaseModel):
    primary_profile: str
    available: bool
    protocol: Optional[ProtocolSchema] = None
    message: Optional[str] = None


# ══════════════════════════════════════════════════════════════════════════════
# PROGRESS ANALYTICS
# ══════════════════════════════════════════════════════════════════════════════

class WeeklyTrendSchema(BaseModel):
    week: str
    start_date: date
    days: int
    avg_completion: int
    avg_wellness: int
    avg_energy: float
    avg_mood: float
    avg_sleep: float

    class Config:
        from_attributes = True


class StreakSchema(BaseModel):
    type: str
    title: str
    current_streak: int = Field(..., ge=0)
    longest_streak: int = Field(..., ge=0)
    last_date: Optional[date] = None

    class Config:
        from_attributes = True


class AdherenceRatesSchema(BaseModel):
    supplements: int = Field(..., ge=0, le=100)
    exercise: int = Field(..., ge=0, le=100)
    meditation: int = Field(..., ge=0, le=100)
    protocol_meals: int = Field(..., ge=0, le=100)

    class Config:
        from_attributes = True


class ProgressAnalyticsSchema(BaseModel):
    weekly_trends: List[WeeklyTrendSchema]
    streaks: List[StreakSchema]
    adherence_rates: AdherenceRatesSchema

    class Config:
        from_attributes = True


class ProgressSummarySchema(BaseModel):
    total_days: int
    avg_completion: int
    avg_wellness: int
    great_days: int
    best_streak: int
    tracking_period: str
    tracking_description: str


class CalendarDaySchema(BaseModel):
    date: date
    has_entry: bool
    completion_score: int
    status: str
    wellness_score: int

    class Config:
        from_attributes = True


# ══════════════════════════════════════════════════════════════════════════════
# CHECK-INS & WEEKLY REVIEW
# ══════════════════════════════════════════════════════════════════════════════

class SupplementDoseSchema(BaseModel):
    supplement_name: str = Field(..., min_length=1, max_length=128)
    morning_taken: bool = False
    evening_taken: bool = False

    class Config:
        from_attributes = True


class DailyCheckinSchema(BaseModel):
    energy_morning: int = Field(5, ge=1, le=10)
    energy_afternoon: int = Field(5, ge=1, le=10)
    energy_evening: int = Field(5, ge=1, le=10)
    mood_rating: int = Field(5, ge=1, le=10)
    sleep_quality: int = Field(5, ge=1, le=10)
    stress_level: int = Field(5, ge=1, le=10)
    water_intake: int = Field(0, ge=0, le=20)             # glasses
    protein_meals: int = Field(0, ge=0, le=10)
    exercise_completed: bool = False
    sunlight_exposure: bool = False
    stress_management: bool = False
    screen_free_evening: bool = False
    notes: Optional[str] = Field(None, max_length=2000)
    supplements: List[SupplementDoseSchema] = []

    @field_validator("supplements")
    @classmethod
    def unique_supplements(cls, v):
        names = [s.supplement_name for s in v]
        if len(names) != len(set(names)):
            raise ValueError("Each supplement may be logged once per day")
        return v


class DailyCheckinResponseSchema(DailyCheckinSchema):
    date: date


class SupplementItemSchema(BaseModel):
    name: str
    dosage: str


class SupplementProtocolSchema(BaseModel):
    morning: List[SupplementItemSchema]
    evening: List[SupplementItemSchema]


class WeeklyAssessmentInputSchema(BaseModel):
    profile_scores: List[int] = Field(
        default_factory=lambda: [WEEKLY_SCORE_DEFAULT] * len(PROFILE_CATEGORIES),
        min_length=len(PROFILE_CATEGORIES),
        max_length=len(PROFILE_CATEGORIES),
    )
    weekly_wins: Optional[str] = Field(None, max_length=2000)
    weekly_challenges: Optional[str] = Field(None, max_length=2000)
    goals_next_week: Optional[str] = Field(None, max_length=2000)

    @field_validator("profile_scores")
    @classmethod
    def scores_in_range(cls, v):
        for score in v:
            if not WEEKLY_SCORE_MIN <= score <= WEEKLY_SCORE_MAX:
                raise ValueError(f"Weekly scores must be {WEEKLY_SCORE_MIN}-{WEEKLY_SCORE_MAX}, got {score}")
        return v


class WeeklyAssessmentSchema(WeeklyAssessmentInputSchema):
    week_start_date: date
    categories: List[str] = list(PROFILE_CATEGORIES)

    class Config:
        from_attributes = True


class WeeklyStatsSchema(BaseModel):
    week_start: date
    energy_improvement: int
    compliance_rate: int = Field(..., ge=0, le=100)
    days_completed: int = Field(..., ge=0, le=7)
    has_completed_this_week: bool
    high_compliance: bool
    message: str

    class Config:
        from_attributes = True


class DashboardStatsSchema(BaseModel):
    current_streak: int = Field(..., ge=0)
    days_on_protocol: int = Field(..., ge=0)
    overall_progress: int = Field(..., ge=0, le=100)

    class Config:
        from_attributes = True


# ══════════════════════════════════════════════════════════════════════════════
# GENERIC
# ══════════════════════════════════════════════════════════════════════════════

class MessageSchema(BaseModel):
    message: str
    detail: Optional[str] = None
