"""
Ember — Daily Planner Records
Immutable value types for one day of tracking, plus the weighted
completion score derived from them.

Records serialize to the camelCase JSON shape used by exports and the
planner UI. `completionScore` is always recomputed from the sub-records;
any value supplied on input is ignored.
"""

import datetime as dt
import logging
import math
from typing import Literal, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, computed_field, model_validator
from pydantic.alias_generators import to_camel

log = logging.getLogger(__name__)


def round_half_up(value: float, ndigits: int = 0) -> float:
    """Round .5 away from zero for positive values (built-in round() is banker's)."""
    factor = 10 ** ndigits
    return math.floor(value * factor + 0.5) / factor


def _now() -> dt.datetime:
    return dt.datetime.now(dt.timezone.utc)


class PlannerRecord(BaseModel):
    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    def with_changes(self, **changes) -> "PlannerRecord":
        """Return a validated copy with the given fields replaced."""
        return type(self).model_validate({**dict(self), **changes})


# ══════════════════════════════════════════════════════════════════════════════
# MORNING ROUTINE
# ══════════════════════════════════════════════════════════════════════════════

class SupplementIntake(PlannerRecord):
    name: str
    dosage: str = ""
    time: Literal["morning", "afternoon", "evening"] = "morning"
    taken: bool = False


class MorningRoutine(PlannerRecord):
    supplements: Tuple[SupplementIntake, ...] = ()
    water_intake: int = Field(0, ge=0, le=40)          # glasses
    exercise: bool = False
    exercise_type: Optional[str] = None
    exercise_duration: Optional[int] = Field(None, ge=0)   # minutes
    meditation: bool = False
    meditation_duration: Optional[int] = Field(None, ge=0)
    mood_rating: int = Field(5, ge=0, le=10)
    energy_level: int = Field(5, ge=0, le=10)

    @property
    def supplements_taken(self) -> bool:
        return any(s.taken for s in self.supplements)


# ══════════════════════════════════════════════════════════════════════════════
# MEAL PLAN
# ══════════════════════════════════════════════════════════════════════════════

class Meal(PlannerRecord):
    planned: str = ""
    actual: Optional[str] = None
    photo_url: Optional[str] = None
    protocol_aligned: bool = False
    hunger_before: int = Field(5, ge=0, le=10)
    satiety_after: int = Field(5, ge=0, le=10)


class Snack(PlannerRecord):
    name: str
    time: str = ""
    photo_url: Optional[str] = None
    protocol_aligned: bool = False


class MealPlan(PlannerRecord):
    breakfast: Meal = Meal()
    lunch: Meal = Meal()
    dinner: Meal = Meal()
    snacks: Tuple[Snack, ...] = ()
    hunger_levels: Tuple[int, ...] = ()
    satiety_levels: Tuple[int, ...] = ()

    @property
    def protocol_aligned(self) -> bool:
        """True when any of the three named meals followed the protocol."""
        return (
            self.breakfast.protocol_aligned
            or self.lunch.protocol_aligned
            or self.dinner.protocol_aligned
        )


# ══════════════════════════════════════════════════════════════════════════════
# WELLNESS METRICS
# ══════════════════════════════════════════════════════════════════════════════

class Symptom(PlannerRecord):
    name: str
    severity: int = Field(..., ge=1, le=10)
    notes: Optional[str] = None


class WellnessMetrics(PlannerRecord):
    sleep_quality: int = Field(5, ge=0, le=10)
    sleep_hours: float = Field(8, ge=0, le=24)
    stress_level: int = Field(5, ge=0, le=10)
    symptoms: Tuple[Symptom, ...] = ()
    cycle_day: Optional[int] = Field(None, ge=1, le=60)
    cycle_phase: Optional[Literal["menstrual", "follicular", "ovulation", "luteal"]] = None


# ══════════════════════════════════════════════════════════════════════════════
# EVENING REFLECTION
# ══════════════════════════════════════════════════════════════════════════════

class EveningReflection(PlannerRecord):
    daily_wins: Tuple[str, ...] = ()
    challenges: Tuple[str, ...] = ()
    tomorrow_intentions: Tuple[str, ...] = ()
    gratitude: Tuple[str, ...] = ()
    overall_wellness: int = Field(50, ge=0, le=100)   # free slider, not derived


# ══════════════════════════════════════════════════════════════════════════════
# DAILY ENTRY
# ══════════════════════════════════════════════════════════════════════════════

class DailyEntry(PlannerRecord):
    """
    One day of tracking. `date` is the unique key per user.
    A bare `DailyEntry(date=...)` carries the planner's blank-day defaults.
    """
    id: str
    date: dt.date
    morning_routine: MorningRoutine = MorningRoutine()
    meal_plan: MealPlan = MealPlan()
    wellness_metrics: WellnessMetrics = WellnessMetrics()
    evening_reflection: EveningReflection = EveningReflection()
    created_at: dt.datetime = Field(default_factory=_now)
    updated_at: dt.datetime = Field(default_factory=_now)

    @model_validator(mode="before")
    @classmethod
    def _default_id(cls, data):
        if isinstance(data, dict) and not data.get("id") and data.get("date"):
            data = {**data, "id": f"entry-{data['date']}"}
        return data

    @computed_field(alias="completionScore")
    @property
    def completion_score(self) -> int:
        return compute_completion_score(self)

    def with_morning_routine(self, routine: MorningRoutine) -> "DailyEntry":
        return self.with_changes(morning_routine=routine)

    def with_meal_plan(self, meal_plan: MealPlan) -> "DailyEntry":
        return self.with_changes(meal_plan=meal_plan)

    def with_wellness_metrics(self, metrics: WellnessMetrics) -> "DailyEntry":
        return self.with_changes(wellness_metrics=metrics)

    def with_evening_reflection(self, reflection: EveningReflection) -> "DailyEntry":
        return self.with_changes(evening_reflection=reflection)

    def to_dict(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)

    @classmethod
    def from_dict(cls, data: dict) -> "DailyEntry":
        return cls.model_validate(data)


# ══════════════════════════════════════════════════════════════════════════════
# COMPLETION SCORE
# ══════════════════════════════════════════════════════════════════════════════

# Each category is worth 25 points; sub-items are all-or-nothing.
TOTAL_POINTS = 100


def _morning_points(m: MorningRoutine) -> float:
    points = 0.0
    if m.supplements:
        points += 5
    if m.water_intake > 0:
        points += 5
    if m.exercise:
        points += 5
    if m.meditation:
        points += 5
    if m.mood_rating > 0:
        points += 2.5
    if m.energy_level > 0:
        points += 2.5
    return points


def _meal_points(p: MealPlan) -> float:
    points = 0.0
    if p.breakfast.planned:
        points += 8
    if p.lunch.planned:
        points += 8
    if p.dinner.planned:
        points += 9
    return points


def _wellness_points(w: WellnessMetrics) -> float:
    points = 0.0
    if w.sleep_quality > 0:
        points += 8
    if w.sleep_hours > 0:
        points += 8
    if w.stress_level > 0:
        points += 9
    return points


def _reflection_points(r: EveningReflection) -> float:
    points = 0.0
    if r.daily_wins:
        points += 6
    if r.challenges:
        points += 6
    if r.tomorrow_intentions:
        points += 6
    if r.gratitude:
        points += 7
    return points


def compute_completion_score(entry: DailyEntry) -> int:
    """Weighted 0–100 completion for one day."""
    earned = (
        _morning_points(entry.morning_routine)
        + _meal_points(entry.meal_plan)
        + _wellness_points(entry.wellness_metrics)
        + _reflection_points(entry.evening_reflection)
    )
    # earned * 100 is exact for half-point totals
    return int(round_half_up(earned * 100 / TOTAL_POINTS))
