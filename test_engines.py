"""
Ember — Unit Tests
All scoring functions must be numerically verified.
Run with: pytest test_engines.py -v
"""

import datetime as dt
import json

import pytest


def _answers(prefix: str, total: int) -> dict:
    """Spread a section total over its eight questions, 3 points at a time."""
    answers = {}
    for i in range(1, 9):
        value = min(3, total)
        answers[f"{prefix}-{i}"] = value
        total -= value
    return answers


# ══════════════════════════════════════════════════════════════════════════════
# ASSESSMENT SCORER TESTS
# ══════════════════════════════════════════════════════════════════════════════

class TestImpactThresholds:

    def setup_method(self):
        from assessment_engine import classify_impact
        self.classify = classify_impact

    @pytest.mark.parametrize("score,level", [
        (0, "minimal"), (8, "minimal"),
        (9, "moderate"), (16, "moderate"),
        (17, "major"), (24, "major"),
    ])
    def test_boundaries(self, score, level):
        assert self.classify(score) == level

    def test_impact_label(self):
        from assessment_engine import impact_label
        assert impact_label("major") == "Major Impact (17-24 points)"


class TestCatalog:

    def test_seven_sections_of_eight(self):
        from catalog import ASSESSMENT_SECTIONS
        assert len(ASSESSMENT_SECTIONS) == 7
        assert all(len(s.questions) == 8 for s in ASSESSMENT_SECTIONS)

    def test_max_score_is_24(self):
        from catalog import ASSESSMENT_SECTIONS
        assert all(s.max_score == 24 for s in ASSESSMENT_SECTIONS)

    def test_question_ids_unique(self):
        from catalog import QUESTION_IDS
        assert len(QUESTION_IDS) == 56
        assert "if-8" in QUESTION_IDS


class TestAssessmentScorer:

    def setup_method(self):
        from assessment_engine import AssessmentScorer
        self.scorer = AssessmentScorer()

    def test_empty_responses_score_zero(self):
        result = self.scorer.score({})
        assert all(s.score == 0 for s in result.section_scores)
        assert all(s.impact_level == "minimal" for s in result.section_scores)

    def test_empty_responses_pick_first_section(self):
        result = self.scorer.score({})
        assert result.primary_profile == "Profile 2: Hormonal Roller Coaster"

    def test_section_order_follows_catalog(self):
        result = self.scorer.score({})
        assert [s.section_id for s in result.section_scores] == [
            "hormonal-chaos", "adrenal-exhaustion", "cellular-starvation", "sleep-disruption",
            "chemical-interference", "inflammatory-fire", "blood-sugar-chaos",
        ]

    def test_section_sum(self):
        result = self.scorer.score({"sd-1": 3, "sd-2": 2, "sd-8": 1, "hc-1": 1})
        assert result.score_for("sleep-disruption") == 6
        assert result.score_for("hormonal-chaos") == 1
        assert result.primary_profile == "Profile 6: Sleep-Deprived Zombie"

    def test_highest_section_wins(self):
        responses = {**_answers("ae", 12), **_answers("bsc", 20)}
        result = self.scorer.score(responses)
        assert result.primary_profile == "Profile 5: Sugar-Burning Crash Queen"
        assert result.section_scores[-1].impact_level == "major"
        assert result.section_scores[1].impact_level == "moderate"

    def test_toxic_override_beats_higher_section(self):
        responses = {**_answers("ci", 18), **_answers("if", 20), **_answers("ae", 24)}
        result = self.scorer.score(responses)
        assert result.score_for("chemical-interference") == 18
        assert result.score_for("inflammatory-fire") == 20
        assert result.primary_profile == "Profile 7: Toxic and Overwhelmed"

    def test_no_override_when_one_side_is_moderate(self):
        responses = {**_answers("ci", 16), **_answers("if", 20)}
        result = self.scorer.score(responses)
        assert result.primary_profile == "Profile 4: Inflamed and Exhausted"

    def test_tie_keeps_earlier_section(self):
        responses = {**_answers("sd", 24), **_answers("ae", 24)}
        result = self.scorer.score(responses)
        assert result.primary_profile == "Profile 1: Depleted High Achiever"

    def test_unmapped_winner_falls_back(self):
        result = self.scorer.score(_answers("cs", 20))
        assert result.primary_profile == "Profile Assessment Complete"

    def test_completed_at_defaults_to_now(self):
        before = dt.datetime.now(dt.timezone.utc)
        result = self.scorer.score({})
        assert result.completed_at >= before
        assert result.completed_at.tzinfo is not None

    def test_top_priorities(self):
        from assessment_engine import top_priorities
        responses = {**_answers("hc", 17), **_answers("sd", 23), **_answers("ae", 9)}
        result = self.scorer.score(responses)
        assert [s.section_id for s in top_priorities(result)] == ["sleep-disruption", "hormonal-chaos"]

    def test_focus_areas_skip_minimal(self):
        from assessment_engine import focus_areas
        result = self.scorer.score({**_answers("ae", 9), **_answers("bsc", 8)})
        assert [s.section_id for s in focus_areas(result)] == ["adrenal-exhaustion"]


class TestAssessmentPersistence:

    def test_json_round_trip(self):
        from assessment_engine import AssessmentResult, assessment_scorer
        completed = dt.datetime(2024, 3, 5, 14, 30, tzinfo=dt.timezone.utc)
        result = assessment_scorer.score({**_answers("if", 19), "hc-2": 2}, completed_at=completed)

        restored = AssessmentResult.from_dict(json.loads(json.dumps(result.to_dict())))
        assert restored.section_scores == result.section_scores
        assert restored.primary_profile == result.primary_profile
        assert restored.completed_at == completed

    def test_accepts_browser_timestamp(self):
        from assessment_engine import AssessmentResult
        restored = AssessmentResult.from_dict({
            "sectionScores": [],
            "primaryProfile": "Profile Assessment Complete",
            "completedAt": "2024-03-05T14:30:00.000Z",
        })
        assert restored.completed_at == dt.datetime(2024, 3, 5, 14, 30, tzinfo=dt.timezone.utc)


# ══════════════════════════════════════════════════════════════════════════════
# COMPLETION SCORE TESTS
# ══════════════════════════════════════════════════════════════════════════════

def _full_entry(day: dt.date):
    from planner import (
        DailyEntry, MorningRoutine, SupplementIntake, MealPlan, Meal, EveningReflection,
    )
    return DailyEntry(
        date=day,
        morning_routine=MorningRoutine(
            supplements=(SupplementIntake(name="Magnesium glycinate", dosage="400mg", taken=True),),
            water_intake=8,
            exercise=True,
            meditation=True,
        ),
        meal_plan=MealPlan(
            breakfast=Meal(planned="Eggs and greens"),
            lunch=Meal(planned="Salmon salad", protocol_aligned=True),
            dinner=Meal(planned="Chicken and vegetables"),
        ),
        evening_reflection=EveningReflection(
            daily_wins=("Walked after lunch",),
            challenges=("Afternoon sugar craving",),
            tomorrow_intentions=("Lights out by 10",),
            gratitude=("Sunny morning",),
            overall_wellness=80,
        ),
    )


class TestRoundHalfUp:

    def test_half_rounds_up(self):
        from planner import round_half_up
        assert round_half_up(0.5) == 1
        assert round_half_up(2.5) == 3
        assert round_half_up(32.5) == 33

    def test_one_decimal(self):
        from planner import round_half_up
        assert round_half_up(7.25, 1) == pytest.approx(7.3)
        assert round_half_up(5.0, 1) == 5.0


class TestCompletionScore:

    def setup_method(self):
        from planner import DailyEntry, compute_completion_score
        self.blank = DailyEntry(date=dt.date(2024, 1, 1))
        self.compute = compute_completion_score

    def test_blank_day_defaults(self):
        # mood, energy, sleep quality, sleep hours and stress carry non-zero defaults
        assert self.blank.completion_score == 30

    def test_full_day(self):
        assert _full_entry(dt.date(2024, 1, 1)).completion_score == 100

    def test_idempotent_and_bounded(self):
        entry = _full_entry(dt.date(2024, 1, 2))
        first, second = self.compute(entry), self.compute(entry)
        assert first == second
        assert 0 <= first <= 100

    def test_adding_supplement_never_decreases(self):
        from planner import SupplementIntake
        routine = self.blank.morning_routine.with_changes(
            supplements=(SupplementIntake(name="Vitamin D3", taken=True),)
        )
        updated = self.blank.with_morning_routine(routine)
        assert updated.completion_score >= self.blank.completion_score
        assert updated.completion_score == 35

    def test_zeroed_metrics_earn_nothing(self):
        from planner import MorningRoutine, WellnessMetrics
        entry = self.blank.with_morning_routine(
            MorningRoutine(mood_rating=0, energy_level=0)
        ).with_wellness_metrics(
            WellnessMetrics(sleep_quality=0, sleep_hours=0, stress_level=0)
        )
        assert entry.completion_score == 0

    def test_meal_weights(self):
        from planner import MealPlan, Meal
        entry = self.blank.with_meal_plan(MealPlan(dinner=Meal(planned="Soup")))
        assert entry.completion_score == 39

    def test_half_point_total_rounds_up(self):
        from planner import MorningRoutine, MealPlan, Meal, EveningReflection
        # 15 morning + 2.5 mood + 8 breakfast + 25 wellness + 7 gratitude = 57.5
        entry = self.blank.with_morning_routine(
            MorningRoutine(water_intake=2, exercise=True, meditation=True, energy_level=0)
        ).with_meal_plan(
            MealPlan(breakfast=Meal(planned="Eggs"))
        ).with_evening_reflection(
            EveningReflection(gratitude=("Sunshine",))
        )
        assert entry.completion_score == 58

    def test_input_score_is_ignored(self):
        from planner import DailyEntry
        entry = DailyEntry.from_dict({"date": "2024-01-01", "completionScore": 99})
        assert entry.completion_score == 30

    def test_default_id_from_date(self):
        assert self.blank.id == "entry-2024-01-01"

    def test_entries_are_immutable(self):
        from pydantic import ValidationError
        with pytest.raises(ValidationError):
            self.blank.date = dt.date(2024, 2, 1)

    def test_dict_is_camel_case(self):
        data = self.blank.to_dict()
        assert data["completionScore"] == 30
        assert data["morningRoutine"]["moodRating"] == 5
        assert data["eveningReflection"]["overallWellness"] == 50

    def test_dict_round_trip(self):
        from planner import DailyEntry
        entry = _full_entry(dt.date(2024, 1, 3))
        assert DailyEntry.from_dict(entry.to_dict()).to_dict() == entry.to_dict()


# ══════════════════════════════════════════════════════════════════════════════
# ANALYTICS ENGINE TESTS
# ══════════════════════════════════════════════════════════════════════════════

START = dt.date(2024, 1, 1)


def _day(offset: int) -> dt.date:
    return START + dt.timedelta(days=offset)


def _blank(offset: int, **routine):
    from planner import DailyEntry, MorningRoutine
    return DailyEntry(date=_day(offset), morning_routine=MorningRoutine(**routine))


def _with_supplement(offset: int, taken: bool = True):
    from planner import SupplementIntake
    return _blank(offset, supplements=(SupplementIntake(name="Omega-3", taken=taken),))


class TestStreaks:

    def setup_method(self):
        from analytics_engine import ProgressAnalyticsEngine, Habit
        self.engine = ProgressAnalyticsEngine()
        self.Habit = Habit

    def test_broken_by_failed_day(self):
        entries = [
            _blank(0, exercise=True), _blank(1, exercise=True), _blank(2, exercise=False),
            _blank(3, exercise=True), _blank(4, exercise=True),
        ]
        streak = self.engine.streak(self.Habit.exercise, entries)
        assert streak.current_streak == 2
        assert streak.longest_streak == 2
        assert streak.last_date == _day(4)

    def test_broken_by_missing_day(self):
        entries = [
            _blank(0, exercise=True), _blank(1, exercise=True),
            _blank(3, exercise=True), _blank(4, exercise=True),
        ]
        streak = self.engine.streak(self.Habit.exercise, entries)
        assert streak.current_streak == 2
        assert streak.longest_streak == 2

    def test_current_zero_when_latest_fails(self):
        entries = [_blank(i, meditation=True) for i in range(4)] + [_blank(4)]
        streak = self.engine.streak(self.Habit.meditation, entries)
        assert streak.current_streak == 0
        assert streak.longest_streak == 4
        assert streak.last_date == _day(3)

    def test_high_completion_habit(self):
        entries = [_full_entry(_day(0)), _full_entry(_day(1)), _blank(2)]
        streak = self.engine.streak(self.Habit.protocol_adherence, entries)
        assert streak.longest_streak == 2
        assert streak.current_streak == 0

    def test_analyze_reports_four_streaks(self):
        analytics = self.engine.analyze([_blank(0)])
        assert [s.type for s in analytics.streaks] == [
            self.Habit.supplements, self.Habit.exercise, self.Habit.meditation, self.Habit.protocol_adherence,
        ]

    def test_unsorted_input_not_mutated(self):
        entries = [_blank(2, exercise=True), _blank(0, exercise=True), _blank(1, exercise=True)]
        original = list(entries)
        analytics = self.engine.analyze(entries)
        assert entries == original
        exercise = analytics.streaks[1]
        assert exercise.current_streak == 3


class TestAdherenceRates:

    def setup_method(self):
        from analytics_engine import ProgressAnalyticsEngine
        self.engine = ProgressAnalyticsEngine()

    def test_supplement_rate(self):
        entries = [_with_supplement(i) for i in range(7)] + [_blank(i) for i in range(7, 10)]
        rates = self.engine.adherence_rates(entries)
        assert rates.supplements == 70

    def test_untaken_supplement_does_not_count(self):
        rates = self.engine.adherence_rates([_with_supplement(0, taken=False), _with_supplement(1)])
        assert rates.supplements == 50

    def test_protocol_meals_any_meal(self):
        from planner import MealPlan, Meal
        aligned = _blank(0).with_meal_plan(MealPlan(dinner=Meal(planned="Stew", protocol_aligned=True)))
        rates = self.engine.adherence_rates([aligned, _blank(1), _blank(2)])
        assert rates.protocol_meals == 33

    def test_empty_is_zero(self):
        rates = self.engine.adherence_rates([])
        assert (rates.supplements, rates.exercise, rates.meditation, rates.protocol_meals) == (0, 0, 0, 0)


class TestWeeklyTrends:

    def setup_method(self):
        from analytics_engine import ProgressAnalyticsEngine
        self.engine = ProgressAnalyticsEngine()

    def test_chunks_of_seven(self):
        # 30 each for blank days, 35 with a supplement
        entries = [_with_supplement(i) for i in range(3)] + [_blank(i) for i in range(3, 7)]
        entries += [_with_supplement(i) for i in range(7, 10)]
        trends = self.engine.analyze(entries).weekly_trends

        assert len(trends) == 2
        assert [t.days for t in trends] == [7, 3]
        assert [t.week for t in trends] == ["Week 1", "Week 2"]
        assert trends[0].avg_completion == 32     # 225 / 7 = 32.14
        assert trends[1].avg_completion == 35
        assert trends[1].start_date == _day(7)

    def test_chunks_by_position_across_gaps(self):
        entries = [_blank(i * 3) for i in range(8)]
        trends = self.engine.analyze(entries).weekly_trends
        assert [t.days for t in trends] == [7, 1]
        assert trends[1].start_date == _day(21)

    def test_one_decimal_metrics(self):
        entries = [_blank(0, energy_level=7, mood_rating=6), _blank(1, energy_level=8, mood_rating=6)]
        trend = self.engine.analyze(entries).weekly_trends[0]
        assert trend.avg_energy == pytest.approx(7.5)
        assert trend.avg_mood == pytest.approx(6.0)
        assert trend.avg_sleep == pytest.approx(5.0)
        assert trend.avg_wellness == 50

    def test_empty_history(self):
        analytics = self.engine.analyze([])
        assert analytics.weekly_trends == ()
        assert all(s.current_streak == 0 and s.longest_streak == 0 for s in analytics.streaks)
        assert all(s.last_date is None for s in analytics.streaks)


class TestSummaryAndCalendar:

    def setup_method(self):
        from analytics_engine import ProgressAnalyticsEngine
        self.engine = ProgressAnalyticsEngine()

    def test_summary(self):
        entries = [_full_entry(_day(0)), _full_entry(_day(1)), _blank(2)]
        summary = self.engine.summarize(entries)
        assert summary.total_days == 3
        assert summary.avg_completion == pytest.approx(230 / 3)
        assert summary.avg_wellness == pytest.approx(70.0)
        assert summary.great_days == 2
        assert summary.best_streak == 2

    def test_summary_empty(self):
        summary = self.engine.summarize([])
        assert summary.total_days == 0
        assert summary.avg_completion == 0
        assert summary.best_streak == 0

    def test_calendar_statuses(self):
        from planner import MealPlan, Meal
        partial = _blank(1).with_meal_plan(MealPlan(breakfast=Meal(planned="Oats"), lunch=Meal(planned="Soup")))
        entries = [_full_entry(_day(0)), partial, _blank(2)]
        days = self.engine.calendar_days(entries, _day(0), _day(5), today=_day(3))

        assert [d.status for d in days] == ["complete", "partial", "missed", "missed", "future", "future"]
        assert days[1].completion_score == 46
        assert days[3].has_entry is False
        assert days[0].wellness_score == 80

    def test_tracking_progress(self):
        from analytics_engine import TrackingPeriod
        progress = self.engine.tracking_progress([_blank(0), _blank(5)], TrackingPeriod.ninety_day, today=_day(30))
        assert progress.days_passed == 30
        assert progress.target_days == 90
        assert progress.percent == 33
        assert progress.description == "30/90 days completed (33%)"

    def test_tracking_progress_before_first_entry(self):
        from analytics_engine import TrackingPeriod
        progress = self.engine.tracking_progress([_blank(10)], TrackingPeriod.ninety_day, today=_day(4))
        assert progress.days_passed == 0
        assert progress.percent == 0
        assert progress.description == "0/90 days completed (0%)"

    def test_custom_tracking_has_no_target(self):
        from analytics_engine import TrackingPeriod
        progress = self.engine.tracking_progress([_blank(0)], TrackingPeriod("custom"), today=_day(12))
        assert progress.target_days is None
        assert progress.description == "12 days of tracking"


# ══════════════════════════════════════════════════════════════════════════════
# CHECK-IN PROGRESS TESTS
# ══════════════════════════════════════════════════════════════════════════════

WEDNESDAY = dt.date(2024, 1, 10)        # week of Sunday 2024-01-07


def _checkin(day: dt.date, level: int):
    from progress_engine import CheckinEnergy
    return CheckinEnergy(date=day, morning=level, afternoon=level, evening=level)


def _dose(day: dt.date, morning: bool, evening: bool, name: str = "Magnesium"):
    from progress_engine import DoseLog
    return DoseLog(date=day, supplement_name=name, morning_taken=morning, evening_taken=evening)


class TestCheckinProgress:

    def setup_method(self):
        from progress_engine import CheckinProgressEngine
        self.engine = CheckinProgressEngine()

    def test_week_starts_on_sunday(self):
        from progress_engine import week_start
        assert week_start(WEDNESDAY) == dt.date(2024, 1, 7)
        assert week_start(dt.date(2024, 1, 7)) == dt.date(2024, 1, 7)
        assert week_start(dt.date(2024, 1, 13)) == dt.date(2024, 1, 7)

    def test_energy_average_skips_missing_readings(self):
        from progress_engine import CheckinEnergy
        assert CheckinEnergy(date=WEDNESDAY, morning=6, evening=9).average == pytest.approx(7.5)
        assert CheckinEnergy(date=WEDNESDAY).average is None

    def test_energy_improvement(self):
        last = [_checkin(dt.date(2024, 1, 1), 5), _checkin(dt.date(2024, 1, 2), 5)]
        assert self.engine.energy_improvement([_checkin(WEDNESDAY, 6)], last) == 20
        assert self.engine.energy_improvement([_checkin(WEDNESDAY, 4)], last) == -20

    def test_energy_improvement_needs_both_weeks(self):
        assert self.engine.energy_improvement([_checkin(WEDNESDAY, 8)], []) == 0
        assert self.engine.energy_improvement([], [_checkin(dt.date(2024, 1, 2), 5)]) == 0

    def test_compliance_counts_doses(self):
        doses = [_dose(WEDNESDAY, True, True, "A"), _dose(WEDNESDAY, True, False, "B"), _dose(WEDNESDAY, False, False, "C")]
        assert self.engine.compliance_rate(doses) == 50
        assert self.engine.compliance_rate([]) == 0

    def test_compliance_half_rounds_up(self):
        # 1 of 8 doses is 12.5%
        doses = [_dose(WEDNESDAY, i == 0, False, f"S{i}") for i in range(4)]
        assert self.engine.compliance_rate(doses) == 13

    def test_consistency_messages(self):
        assert self.engine.consistency_message(5).startswith("Great consistency")
        assert self.engine.consistency_message(3).startswith("Good progress")
        assert self.engine.consistency_message(2).startswith("Let's focus")

    def test_weekly_stats(self):
        checkins = [
            _checkin(dt.date(2024, 1, 3), 4),       # last week
            _checkin(dt.date(2024, 1, 8), 5),
            _checkin(dt.date(2024, 1, 9), 5),
            _checkin(WEDNESDAY, 5),
        ]
        doses = [
            _dose(dt.date(2024, 1, 3), False, False),   # last week, ignored
            _dose(dt.date(2024, 1, 8), True, True),
            _dose(dt.date(2024, 1, 9), True, True),
        ]
        stats = self.engine.weekly_stats(checkins, doses, has_assessment=False, today=WEDNESDAY)
        assert stats.week_start == dt.date(2024, 1, 7)
        assert stats.days_completed == 3
        assert stats.energy_improvement == 25
        assert stats.compliance_rate == 100
        assert stats.high_compliance is True
        assert stats.has_completed_this_week is False
        assert stats.message.startswith("Good progress")

    def test_streak_counts_back_from_today(self):
        days = [WEDNESDAY - dt.timedelta(days=i) for i in (0, 1, 2, 4, 5)]
        assert self.engine.current_streak(days, today=WEDNESDAY) == 3

    def test_streak_zero_without_checkin_today(self):
        days = [WEDNESDAY - dt.timedelta(days=i) for i in (1, 2, 3)]
        assert self.engine.current_streak(days, today=WEDNESDAY) == 0

    def test_streak_ignores_future_checkins(self):
        days = [WEDNESDAY + dt.timedelta(days=1), WEDNESDAY, WEDNESDAY - dt.timedelta(days=1)]
        assert self.engine.current_streak(days, today=WEDNESDAY) == 2

    def test_dashboard_progress_capped(self):
        days = [WEDNESDAY - dt.timedelta(days=i) for i in range(40)]
        stats = self.engine.dashboard_stats(days, today=WEDNESDAY)
        assert stats.current_streak == 30
        assert stats.days_on_protocol == 40
        assert stats.overall_progress == 100

    def test_dashboard_partial_progress(self):
        days = [WEDNESDAY - dt.timedelta(days=i) for i in range(15)]
        stats = self.engine.dashboard_stats(days, today=WEDNESDAY)
        assert stats.overall_progress == 50
        assert self.engine.dashboard_stats([WEDNESDAY], today=WEDNESDAY).overall_progress == 3


# ══════════════════════════════════════════════════════════════════════════════
# JOURNAL TESTS
# ══════════════════════════════════════════════════════════════════════════════

def _journal(day: int, content: str = "Walked by the river", **fields):
    from journal import JournalEntry
    return JournalEntry(date=dt.date(2024, 3, day), content=content, **fields)


class TestJournalFilter:

    def setup_method(self):
        from journal import Weather, mood_for
        self.entries = [
            _journal(1, title="Morning Pages", tags=["sleep", "focus"], mood=mood_for(7)),
            _journal(2, content="Rainy and tired", weather=Weather(condition="rainy"), mood=mood_for(3)),
            _journal(3, tags=["gratitude"], is_favorite=True, weather=Weather(condition="sunny")),
        ]

    def _days(self, **criteria):
        from journal import JournalFilter, filter_entries
        return [e.date.day for e in filter_entries(self.entries, JournalFilter(**criteria))]

    def test_no_filter_newest_first(self):
        assert self._days() == [3, 2, 1]

    def test_search_matches_title_or_content(self):
        assert self._days(search_term="morning pages") == [1]
        assert self._days(search_term="TIRED") == [2]

    def test_any_tag_matches(self):
        assert self._days(tags=["focus", "gratitude"]) == [3, 1]

    def test_mood_and_weather(self):
        assert self._days(moods=[3, 4]) == [2]
        assert self._days(weather=["sunny"]) == [3]

    def test_favorites_and_date_range(self):
        assert self._days(favorites=True) == [3]
        assert self._days(start=dt.date(2024, 3, 2), end=dt.date(2024, 3, 3)) == [3, 2]

    def test_active_count(self):
        from journal import JournalFilter
        criteria = JournalFilter(moods=[1, 2], tags=["sleep"], favorites=True, start=dt.date(2024, 3, 1))
        assert criteria.active_count == 5
        assert JournalFilter().active_count == 0

    def test_all_tags_sorted_unique(self):
        from journal import all_tags
        assert all_tags(self.entries) == ["focus", "gratitude", "sleep"]

    def test_tags_trimmed_and_deduplicated(self):
        assert _journal(4, tags=[" calm ", "calm", ""]).tags == ("calm",)

    def test_weather_emoji_defaults_from_condition(self):
        from journal import Weather
        assert Weather(condition="foggy").emoji == "🌫️"
        assert Weather(condition="foggy", emoji="x").emoji == "x"

    def test_mood_scale(self):
        from journal import MOOD_OPTIONS, mood_for
        assert [m.value for m in MOOD_OPTIONS] == list(range(1, 11))
        assert mood_for(10).label == "Incredible"
        with pytest.raises(ValueError):
            mood_for(11)

    def test_empty_content_rejected(self):
        from pydantic import ValidationError
        with pytest.raises(ValidationError):
            _journal(5, content="")

    def test_templates_have_four_prompts(self):
        from journal import DEFAULT_TEMPLATES, template_for
        assert {t.category for t in DEFAULT_TEMPLATES} == {"daily", "wellness", "gratitude", "goals"}
        assert all(len(t.prompts) == 4 for t in DEFAULT_TEMPLATES)
        assert template_for("gratitude").name == "Gratitude Practice"
        assert template_for("missing") is None
