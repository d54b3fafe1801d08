"""
Ember — Progress Analytics Engine
Derived statistics over a collection of daily planner entries:
weekly trends, per-habit adherence and streaks, calendar status and
tracking-period progress.

Everything here is recomputed from the full entry collection on each call.
Inputs are never mutated.
"""

import datetime as dt
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Optional, Sequence

from planner import DailyEntry, round_half_up

log = logging.getLogger(__name__)

WEEK_LENGTH = 7
HIGH_COMPLETION = 80
PARTIAL_COMPLETION = 40


# ══════════════════════════════════════════════════════════════════════════════
# HABITS
# ══════════════════════════════════════════════════════════════════════════════

class Habit(str, Enum):
    supplements = "supplements"
    exercise = "exercise"
    meditation = "meditation"
    protocol_meals = "protocol_meals"
    protocol_adherence = "protocol_adherence"    # completion score >= 80

    def qualifies(self, entry: DailyEntry) -> bool:
        return _PREDICATES[self](entry)


_PREDICATES = {
    Habit.supplements:        lambda e: e.morning_routine.supplements_taken,
    Habit.exercise:           lambda e: e.morning_routine.exercise,
    Habit.meditation:         lambda e: e.morning_routine.meditation,
    Habit.protocol_meals:     lambda e: e.meal_plan.protocol_aligned,
    Habit.protocol_adherence: lambda e: e.completion_score >= HIGH_COMPLETION,
}

STREAK_HABITS = (Habit.supplements, Habit.exercise, Habit.meditation, Habit.protocol_adherence)

# Adherence report key -> habit
ADHERENCE_HABITS = {
    "supplements":   Habit.supplements,
    "exercise":      Habit.exercise,
    "meditation":    Habit.meditation,
    "protocolMeals": Habit.protocol_meals,
}

STREAK_TITLES = {
    Habit.supplements:        "Supplement Streak",
    Habit.exercise:           "Exercise Streak",
    Habit.meditation:         "Meditation Streak",
    Habit.protocol_adherence: "High Completion Streak",
}


# ══════════════════════════════════════════════════════════════════════════════
# DATA STRUCTURES
# ══════════════════════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class WeeklyTrend:
    week: str                       # "Week 1", "Week 2", ...
    start_date: dt.date             # first entry in the bucket
    days: int
    avg_completion: int
    avg_wellness: int
    avg_energy: float               # one decimal
    avg_mood: float
    avg_sleep: float


@dataclass(frozen=True)
class ProgressStreak:
    type: Habit
    current_streak: int
    longest_streak: int
    last_date: Optional[dt.date]    # most recent qualifying day

    @property
    def title(self) -> str:
        return STREAK_TITLES.get(self.type, self.type.value)


@dataclass(frozen=True)
class AdherenceRates:
    supplements: int = 0
    exercise: int = 0
    meditation: int = 0
    protocol_meals: int = 0


@dataclass(frozen=True)
class ProgressAnalytics:
    weekly_trends: tuple[WeeklyTrend, ...]
    streaks: tuple[ProgressStreak, ...]
    adherence_rates: AdherenceRates


@dataclass(frozen=True)
class ProgressSummary:
    total_days: int
    avg_completion: float           # unrounded, as exported
    avg_wellness: float
    great_days: int
    best_streak: int


@dataclass(frozen=True)
class CalendarDay:
    date: dt.date
    has_entry: bool
    completion_score: int
    status: str                     # complete / partial / missed / future
    wellness_score: int


class TrackingPeriod(str, Enum):
    ninety_day = "90-day"
    six_month = "6-month"
    one_year = "1-year"
    custom = "custom"

    @property
    def target_days(self) -> Optional[int]:
        return {"90-day": 90, "6-month": 180, "1-year": 365}.get(self.value)


@dataclass(frozen=True)
class TrackingProgress:
    period: TrackingPeriod
    days_passed: int
    target_days: Optional[int]
    percent: Optional[int]
    description: str


# ══════════════════════════════════════════════════════════════════════════════
# HELPERS
# ══════════════════════════════════════════════════════════════════════════════

def sort_entries(entries: Iterable[DailyEntry]) -> list[DailyEntry]:
    """Ascending by date; returns a new list."""
    return sorted(entries, key=lambda e: e.date)


def _mean(values: Sequence[float]) -> float:
    return sum(values) / len(values) if values else 0.0


def _rate(matching: int, total: int) -> int:
    if total == 0:
        return 0
    return int(round_half_up(matching * 100 / total))


# ══════════════════════════════════════════════════════════════════════════════
# ENGINE
# ══════════════════════════════════════════════════════════════════════════════

class ProgressAnalyticsEngine:

    def weekly_trends(self, sorted_entries: Sequence[DailyEntry]) -> tuple[WeeklyTrend, ...]:
        """
        Buckets of 7 consecutive entries by position, not by calendar week.
        With gaps in the history a bucket may span more than 7 days.
        """
        trends = []
        for i in range(0, len(sorted_entries), WEEK_LENGTH):
            week = sorted_entries[i:i + WEEK_LENGTH]
            trends.append(WeeklyTrend(
                week=f"Week {i // WEEK_LENGTH + 1}",
                start_date=week[0].date,
                days=len(week),
                avg_completion=int(round_half_up(_mean([e.completion_score for e in week]))),
                avg_wellness=int(round_half_up(_mean([e.evening_reflection.overall_wellness for e in week]))),
                avg_energy=round_half_up(_mean([e.morning_routine.energy_level for e in week]), 1),
                avg_mood=round_half_up(_mean([e.morning_routine.mood_rating for e in week]), 1),
                avg_sleep=round_half_up(_mean([e.wellness_metrics.sleep_quality for e in week]), 1),
            ))
        return tuple(trends)

    def adherence_rates(self, entries: Sequence[DailyEntry]) -> AdherenceRates:
        total = len(entries)
        rates = {
            key: _rate(sum(1 for e in entries if habit.qualifies(e)), total)
            for key, habit in ADHERENCE_HABITS.items()
        }
        return AdherenceRates(
            supplements=rates["supplements"],
            exercise=rates["exercise"],
            meditation=rates["meditation"],
            protocol_meals=rates["protocolMeals"],
        )

    def streak(self, habit: Habit, sorted_entries: Sequence[DailyEntry]) -> ProgressStreak:
        """
        A run continues only across consecutive calendar days that each have
        a qualifying entry. A missing date breaks the run like a failed day.
        """
        run = longest = 0
        prev_day: Optional[dt.date] = None
        last_date: Optional[dt.date] = None

        for entry in sorted_entries:
            if habit.qualifies(entry):
                consecutive = prev_day is not None and (entry.date - prev_day).days == 1
                run = run + 1 if consecutive and run > 0 else 1
                last_date = entry.date
            else:
                run = 0
            longest = max(longest, run)
            prev_day = entry.date

        return ProgressStreak(
            type=habit,
            current_streak=run,
            longest_streak=longest,
            last_date=last_date,
        )

    def analyze(self, entries: Iterable[DailyEntry]) -> ProgressAnalytics:
        ordered = sort_entries(entries)
        log.debug("Analyzing %d daily entries", len(ordered))
        return ProgressAnalytics(
            weekly_trends=self.weekly_trends(ordered),
            streaks=tuple(self.streak(h, ordered) for h in STREAK_HABITS),
            adherence_rates=self.adherence_rates(ordered),
        )

    # ── Dashboard / settings extras ──────────────────────────────────────────

    def summarize(self, entries: Iterable[DailyEntry]) -> ProgressSummary:
        ordered = sort_entries(entries)
        streaks = [self.streak(h, ordered) for h in STREAK_HABITS]
        return ProgressSummary(
            total_days=len(ordered),
            avg_completion=_mean([e.completion_score for e in ordered]),
            avg_wellness=_mean([e.evening_reflection.overall_wellness for e in ordered]),
            great_days=sum(1 for e in ordered if e.completion_score >= HIGH_COMPLETION),
            best_streak=max(s.longest_streak for s in streaks),
        )

    def calendar_days(
        self,
        entries: Iterable[DailyEntry],
        start: dt.date,
        end: dt.date,
        today: Optional[dt.date] = None,
    ) -> list[CalendarDay]:
        """One cell per date in [start, end]."""
        today = today or dt.date.today()
        by_date = {e.date: e for e in entries}
        days = []
        current = start
        while current <= end:
            entry = by_date.get(current)
            score = entry.completion_score if entry else 0
            if current > today:
                status = "future"
            elif entry is None:
                status = "missed"
            elif score >= HIGH_COMPLETION:
                status = "complete"
            elif score >= PARTIAL_COMPLETION:
                status = "partial"
            else:
                status = "missed"
            days.append(CalendarDay(
                date=current,
                has_entry=entry is not None,
                completion_score=score,
                status=status,
                wellness_score=entry.evening_reflection.overall_wellness if entry else 0,
            ))
            current += dt.timedelta(days=1)
        return days

    def tracking_progress(
        self,
        entries: Iterable[DailyEntry],
        period: TrackingPeriod,
        today: Optional[dt.date] = None,
    ) -> TrackingProgress:
        today = today or dt.date.today()
        dates = [e.date for e in entries]
        # Future-dated entries do not count as elapsed time
        days_passed = max((today - min(dates)).days, 0) if dates else 0
        target = period.target_days

        if target is None:
            return TrackingProgress(
                period=period,
                days_passed=days_passed,
                target_days=None,
                percent=None,
                description=f"{days_passed} days of tracking",
            )

        percent = int(round_half_up(days_passed * 100 / target))
        return TrackingProgress(
            period=period,
            days_passed=days_passed,
            target_days=target,
            percent=percent,
            description=f"{days_passed}/{target} days completed ({percent}%)",
        )


# Module-level singleton
analytics_engine = ProgressAnalyticsEngine()
