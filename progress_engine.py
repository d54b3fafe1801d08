"""
Ember — Check-in Progress Engine
Dashboard and weekly-review statistics over daily check-ins and supplement
dose logs.

  • Current streak: consecutive check-in days counting back from today
  • Overall progress: current streak against a 30-day target, capped at 100
  • Energy change: this week's mean check-in energy vs last week's, in percent
  • Compliance: taken doses / (logged supplement-days × 2)

Weeks start on Sunday.
"""

import datetime as dt
import logging
from dataclasses import dataclass
from typing import Iterable, Optional, Sequence

from planner import round_half_up

log = logging.getLogger(__name__)

STREAK_WINDOW = 30              # most recent check-ins examined for the streak
PROGRESS_TARGET_DAYS = 30
DOSES_PER_DAY = 2               # morning + evening
HIGH_COMPLIANCE = 80
CONSISTENT_DAYS = 5
STEADY_DAYS = 3

# Weekly self-ratings, one 0-24 score per category
PROFILE_CATEGORIES = (
    "Hormonal Balance",
    "Adrenal Function",
    "Metabolic Health",
    "Digestive Wellness",
    "Sleep Quality",
    "Mental Clarity",
    "Physical Vitality",
)
WEEKLY_SCORE_MIN = 0
WEEKLY_SCORE_MAX = 24
WEEKLY_SCORE_DEFAULT = 12

# Supplements offered on the daily check-in: (name, dosage)
MORNING_SUPPLEMENTS = (
    ("Vitamin D3", "5000 IU"),
    ("Magnesium", "400mg"),
    ("B-Complex", "1 capsule"),
)
EVENING_SUPPLEMENTS = (
    ("Magnesium Glycinate", "200mg"),
    ("Melatonin", "3mg"),
)


# ══════════════════════════════════════════════════════════════════════════════
# DATA STRUCTURES
# ══════════════════════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class CheckinEnergy:
    date: dt.date
    morning: Optional[int] = None
    afternoon: Optional[int] = None
    evening: Optional[int] = None

    @property
    def average(self) -> Optional[float]:
        """Mean of the recorded readings; None when none were recorded."""
        readings = [r for r in (self.morning, self.afternoon, self.evening) if r is not None]
        return sum(readings) / len(readings) if readings else None


@dataclass(frozen=True)
class DoseLog:
    date: dt.date
    supplement_name: str
    morning_taken: bool = False
    evening_taken: bool = False

    @property
    def taken(self) -> int:
        return int(self.morning_taken) + int(self.evening_taken)


@dataclass(frozen=True)
class WeeklyStats:
    week_start: dt.date
    energy_improvement: int         # percent, signed
    compliance_rate: int            # 0-100
    days_completed: int
    has_completed_this_week: bool
    message: str

    @property
    def high_compliance(self) -> bool:
        return self.compliance_rate >= HIGH_COMPLIANCE


@dataclass(frozen=True)
class DashboardStats:
    current_streak: int
    days_on_protocol: int
    overall_progress: int           # 0-100


# ══════════════════════════════════════════════════════════════════════════════
# HELPERS
# ══════════════════════════════════════════════════════════════════════════════

def week_start(day: dt.date) -> dt.date:
    """The Sunday on or before `day`."""
    return day - dt.timedelta(days=(day.weekday() + 1) % 7)


def _mean_energy(checkins: Iterable[CheckinEnergy]) -> Optional[float]:
    averages = [c.average for c in checkins if c.average is not None]
    return sum(averages) / len(averages) if averages else None


# ══════════════════════════════════════════════════════════════════════════════
# ENGINE
# ══════════════════════════════════════════════════════════════════════════════

class CheckinProgressEngine:

    def energy_improvement(
        self,
        this_week: Sequence[CheckinEnergy],
        last_week: Sequence[CheckinEnergy],
    ) -> int:
        """Percent change in mean energy; 0 unless both weeks have readings."""
        current, previous = _mean_energy(this_week), _mean_energy(last_week)
        if current is None or not previous:
            return 0
        return int(round_half_up((current - previous) * 100 / previous))

    def compliance_rate(self, doses: Sequence[DoseLog]) -> int:
        if not doses:
            return 0
        taken = sum(d.taken for d in doses)
        return int(round_half_up(taken * 100 / (len(doses) * DOSES_PER_DAY)))

    def consistency_message(self, days_completed: int) -> str:
        if days_completed >= CONSISTENT_DAYS:
            return "Great consistency this week! You're building strong habits."
        if days_completed >= STEADY_DAYS:
            return "Good progress! Try to maintain consistency for better results."
        return "Let's focus on building daily habits. Small steps lead to big changes!"

    def weekly_stats(
        self,
        checkins: Iterable[CheckinEnergy],
        doses: Iterable[DoseLog],
        has_assessment: bool,
        today: Optional[dt.date] = None,
    ) -> WeeklyStats:
        today = today or dt.date.today()
        start = week_start(today)
        previous_start = start - dt.timedelta(days=7)

        checkins = list(checkins)
        this_week = [c for c in checkins if c.date >= start]
        last_week = [c for c in checkins if previous_start <= c.date < start]
        week_doses = [d for d in doses if d.date >= start]

        return WeeklyStats(
            week_start=start,
            energy_improvement=self.energy_improvement(this_week, last_week),
            compliance_rate=self.compliance_rate(week_doses),
            days_completed=len(this_week),
            has_completed_this_week=has_assessment,
            message=self.consistency_message(len(this_week)),
        )

    def current_streak(self, checkin_dates: Iterable[dt.date], today: Optional[dt.date] = None) -> int:
        """
        Consecutive check-in days ending today. A day without a check-in,
        today included, ends the count. Future-dated check-ins are ignored.
        """
        today = today or dt.date.today()
        recent = sorted({d for d in checkin_dates if d <= today}, reverse=True)[:STREAK_WINDOW]
        streak = 0
        expected = today
        for day in recent:
            if day != expected:
                break
            streak += 1
            expected -= dt.timedelta(days=1)
        return streak

    def dashboard_stats(self, checkin_dates: Iterable[dt.date], today: Optional[dt.date] = None) -> DashboardStats:
        dates = set(checkin_dates)
        streak = self.current_streak(dates, today)
        progress = min(int(round_half_up(streak * 100 / PROGRESS_TARGET_DAYS)), 100)
        log.debug("Dashboard stats: streak=%d days=%d", streak, len(dates))
        return DashboardStats(
            current_streak=streak,
            days_on_protocol=len(dates),
            overall_progress=progress,
        )


# Module-level singleton
progress_engine = CheckinProgressEngine()
