"""
Ember — API Routes
All endpoint implementations.
"""

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from pydantic import ValidationError
from sqlalchemy.ext.asyncio import AsyncSession
from datetime import date, timedelta
from typing import List, Optional
import json
import logging

from database import get_db
from models import User
from schemas import (
    UserRegisterSchema, UserLoginSchema, TokenResponseSchema, UserPublicSchema,
    SectionSchema, QuestionSchema, AssessmentSubmitSchema,
    SectionScoreSchema, AssessmentResultSchema,
    SupplementSchema, LifestyleCategorySchema, ProtocolSchema, ProtocolResponseSchema,
    WeeklyTrendSchema, StreakSchema, AdherenceRatesSchema, ProgressAnalyticsSchema,
    ProgressSummarySchema, CalendarDaySchema, MessageSchema,
    SupplementDoseSchema, DailyCheckinSchema, DailyCheckinResponseSchema,
    SupplementItemSchema, SupplementProtocolSchema,
    WeeklyAssessmentInputSchema, WeeklyAssessmentSchema, WeeklyStatsSchema, DashboardStatsSchema,
)
from auth_service import create_user, authenticate_user, issue_tokens, resolve_access_token
from catalog import ASSESSMENT_SECTIONS
from assessment_engine import AssessmentResult, assessment_scorer, impact_label, top_priorities
from analytics_engine import TrackingPeriod, analytics_engine
from planner import DailyEntry, round_half_up
from progress_engine import (
    DoseLog, EVENING_SUPPLEMENTS, MORNING_SUPPLEMENTS, progress_engine, week_start,
)
from journal import (
    DEFAULT_TEMPLATES, MOOD_OPTIONS, JournalEntry, JournalFilter, JournalTemplate, Mood,
    all_tags, filter_entries,
)
from protocols import lifestyle_title, lookup
from reporting import build_export, export_filename, render_assessment_pdf, report_filename
from storage import (
    CHECKIN_FIELDS, CheckinRepository, JournalRepository, SqlEntryRepository,
    get_weekly_assessment, save_weekly_assessment,
    save_assessment, latest_assessment, mark_results_viewed,
)
from config import settings

log = logging.getLogger(__name__)
bearer_scheme = HTTPBearer()


# ══════════════════════════════════════════════════════════════════════════════
# AUTH DEPENDENCY
# ══════════════════════════════════════════════════════════════════════════════

async def current_user(
    credentials: HTTPAuthorizationCredentials = Depends(bearer_scheme),
    db: AsyncSession = Depends(get_db),
) -> User:
    """FastAPI dependency — validate JWT and return authenticated user."""
    try:
        return await resolve_access_token(db, credentials.credentials)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=str(e))


def entry_repository(
    user: User = Depends(current_user),
    db: AsyncSession = Depends(get_db),
) -> SqlEntryRepository:
    return SqlEntryRepository(db, user.id)


# ══════════════════════════════════════════════════════════════════════════════
# AUTH ROUTER
# ══════════════════════════════════════════════════════════════════════════════

auth_router = APIRouter()


@auth_router.post("/register", response_model=UserPublicSchema, status_code=201)
async def register(data: UserRegisterSchema, db: AsyncSession = Depends(get_db)):
    try:
        return await create_user(db, data)
    except ValueError as e:
        raise HTTPException(status_code=409, detail=str(e))


@auth_router.post("/login", response_model=TokenResponseSchema)
async def login(data: UserLoginSchema, db: AsyncSession = Depends(get_db)):
    try:
        user = await authenticate_user(db, data.email, data.password)
    except ValueError as e:
        raise HTTPException(status_code=401, detail=str(e))
    return issue_tokens(user)


# ══════════════════════════════════════════════════════════════════════════════
# ASSESSMENT ROUTER
# ══════════════════════════════════════════════════════════════════════════════

assessment_router = APIRouter()


def _result_out(result: AssessmentResult) -> AssessmentResultSchema:
    return AssessmentResultSchema(
        section_scores=[
            SectionScoreSchema(
                section_id=s.section_id,
                title=s.title,
                score=s.score,
                max_score=s.max_score,
                impact_level=s.impact_level,
                impact_label=impact_label(s.impact_level),
            )
            for s in result.section_scores
        ],
        primary_profile=result.primary_profile,
        completed_at=result.completed_at,
        top_priorities=[s.section_id for s in top_priorities(result)],
    )


async def _latest_or_404(db: AsyncSession, user: User) -> AssessmentResult:
    result = await latest_assessment(db, user.id)
    if not result:
        raise HTTPException(status_code=404, detail="No assessment found. Complete the assessment first.")
    return result


@assessment_router.get("/catalog", response_model=List[SectionSchema])
async def get_catalog():
    """The questionnaire: seven sections of eight questions, answered 0-3."""
    return [
        SectionSchema(
            id=s.id,
            title=s.title,
            max_score=s.max_score,
            questions=[QuestionSchema(id=q.id, text=q.text) for q in s.questions],
        )
        for s in ASSESSMENT_SECTIONS
    ]


@assessment_router.post("/score", response_model=AssessmentResultSchema)
async def score_assessment(data: AssessmentSubmitSchema):
    """Score without saving. Used for the pending result before sign-in."""
    return _result_out(assessment_scorer.score(data.responses))


@assessment_router.post("/submit", response_model=AssessmentResultSchema, status_code=201)
async def submit_assessment(
    data: AssessmentSubmitSchema,
    user: User = Depends(current_user),
    db: AsyncSession = Depends(get_db),
):
    """Score the questionnaire and store the result against the user."""
    result = assessment_scorer.score(data.responses)
    await save_assessment(db, user.id, data.responses, result)
    log.info("Assessment saved for user %s: %s", user.id, result.primary_profile)
    return _result_out(result)


@assessment_router.get("/latest", response_model=AssessmentResultSchema)
async def get_latest_assessment(
    user: User = Depends(current_user),
    db: AsyncSession = Depends(get_db),
):
    return _result_out(await _latest_or_404(db, user))


@assessment_router.post("/viewed", response_model=MessageSchema)
async def mark_viewed(
    user: User = Depends(current_user),
    db: AsyncSession = Depends(get_db),
):
    count = await mark_results_viewed(db, user.id)
    return MessageSchema(message="Results marked as viewed.", detail=f"{count} result(s) updated")


@assessment_router.get("/protocol", response_model=ProtocolResponseSchema)
async def get_protocol(
    user: User = Depends(current_user),
    db: AsyncSession = Depends(get_db),
):
    """Recommendations for the user's latest primary profile."""
    result = await _latest_or_404(db, user)
    protocol = lookup(result.primary_profile)
    if protocol is None:
        return ProtocolResponseSchema(
            primary_profile=result.primary_profile,
            available=False,
            message="Your personalized protocol is being prepared.",
        )

    return ProtocolResponseSchema(
        primary_profile=result.primary_profile,
        available=True,
        protocol=ProtocolSchema(
            profile=protocol.profile,
            description=protocol.description,
            detailed_description=protocol.detailed_description,
            supplements=[SupplementSchema.model_validate(s) for s in protocol.supplements],
            lifestyle=[
                LifestyleCategorySchema(key=key, title=lifestyle_title(key), items=list(items))
                for key, items in protocol.lifestyle.items()
            ],
            timeline=protocol.timeline,
            optional=list(protocol.optional),
        ),
    )


@assessment_router.get("/report")
async def download_report(
    user: User = Depends(current_user),
    db: AsyncSession = Depends(get_db),
):
    """Printable PDF of the latest result, with its protocol when one exists."""
    result = await _latest_or_404(db, user)
    try:
        pdf = render_assessment_pdf(result)
    except Exception as e:
        log.error(f"Report rendering failed for user {user.id}: {e}", exc_info=True)
        raise HTTPException(status_code=503, detail="Report generation failed. Please try again.")

    return Response(
        content=pdf,
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="{report_filename(result)}"'},
    )


# ══════════════════════════════════════════════════════════════════════════════
# PLANNER ROUTER
# ══════════════════════════════════════════════════════════════════════════════

planner_router = APIRouter()


def _tracking_period(value: Optional[str]) -> TrackingPeriod:
    try:
        return TrackingPeriod(value or settings.DEFAULT_TRACKING_PERIOD)
    except ValueError:
        raise HTTPException(status_code=422, detail=f"Unknown tracking period '{value}'.")


@planner_router.get("/entries", response_model=List[DailyEntry])
async def list_entries(
    start: Optional[date] = None,
    end: Optional[date] = None,
    repo: SqlEntryRepository = Depends(entry_repository),
):
    return await repo.list(start, end)


@planner_router.delete("/entries", response_model=MessageSchema)
async def clear_entries(repo: SqlEntryRepository = Depends(entry_repository)):
    """Delete the entire planner history. Irreversible."""
    count = await repo.clear()
    return MessageSchema(message="All planner data cleared.", detail=f"{count} entries deleted")


@planner_router.get("/entries/{day}", response_model=DailyEntry)
async def get_entry(day: date, repo: SqlEntryRepository = Depends(entry_repository)):
    entry = await repo.get(day)
    if entry is None:
        raise HTTPException(status_code=404, detail=f"No entry for {day.isoformat()}.")
    return entry


@planner_router.put("/entries/{day}", response_model=DailyEntry)
async def put_entry(
    day: date,
    entry: DailyEntry,
    repo: SqlEntryRepository = Depends(entry_repository),
):
    """Create or replace the entry for a date. completionScore is recomputed."""
    if entry.date != day:
        raise HTTPException(status_code=422, detail="Entry date does not match the URL.")
    return await repo.upsert(entry)


@planner_router.get("/analytics", response_model=ProgressAnalyticsSchema)
async def get_analytics(repo: SqlEntryRepository = Depends(entry_repository)):
    """Weekly trends, streaks and adherence over the full history."""
    analytics = analytics_engine.analyze(await repo.list())
    return ProgressAnalyticsSchema(
        weekly_trends=[WeeklyTrendSchema.model_validate(w) for w in analytics.weekly_trends],
        streaks=[
            StreakSchema(
                type=s.type.value,
                title=s.title,
                current_streak=s.current_streak,
                longest_streak=s.longest_streak,
                last_date=s.last_date,
            )
            for s in analytics.streaks
        ],
        adherence_rates=AdherenceRatesSchema.model_validate(analytics.adherence_rates),
    )


@planner_router.get("/calendar", response_model=List[CalendarDaySchema])
async def get_calendar(
    year: int = Query(..., ge=2000, le=2100),
    month: int = Query(..., ge=1, le=12),
    repo: SqlEntryRepository = Depends(entry_repository),
):
    """Per-day completion status for one month."""
    start = date(year, month, 1)
    end = (date(year + month // 12, month % 12 + 1, 1) - timedelta(days=1))
    entries = await repo.list(start, end)
    return [CalendarDaySchema.model_validate(d) for d in analytics_engine.calendar_days(entries, start, end)]


@planner_router.get("/summary", response_model=ProgressSummarySchema)
async def get_summary(
    period: Optional[str] = None,
    repo: SqlEntryRepository = Depends(entry_repository),
):
    tracking = _tracking_period(period)
    entries = await repo.list()
    summary = analytics_engine.summarize(entries)
    progress = analytics_engine.tracking_progress(entries, tracking)
    return ProgressSummarySchema(
        total_days=summary.total_days,
        avg_completion=int(round_half_up(summary.avg_completion)),
        avg_wellness=int(round_half_up(summary.avg_wellness)),
        great_days=summary.great_days,
        best_streak=summary.best_streak,
        tracking_period=tracking.value,
        tracking_description=progress.description,
    )


@planner_router.get("/export")
async def export_entries(
    period: Optional[str] = None,
    repo: SqlEntryRepository = Depends(entry_repository),
):
    """JSON download of every entry plus summary statistics."""
    tracking = _tracking_period(period)
    document = build_export(await repo.list(), tracking)
    return Response(
        content=json.dumps(document, indent=2),
        media_type="application/json",
        headers={"Content-Disposition": f'attachment; filename="{export_filename()}"'},
    )


# ══════════════════════════════════════════════════════════════════════════════
# PROGRESS ROUTER (check-ins, dashboard, weekly review)
# ══════════════════════════════════════════════════════════════════════════════

progress_router = APIRouter()


def checkin_repository(
    user: User = Depends(current_user),
    db: AsyncSession = Depends(get_db),
) -> CheckinRepository:
    return CheckinRepository(db, user.id)


def _checkin_out(row, doses) -> DailyCheckinResponseSchema:
    values = {field: getattr(row, field) for field in CHECKIN_FIELDS if getattr(row, field) is not None}
    return DailyCheckinResponseSchema(
        date=row.checkin_date,
        supplements=[SupplementDoseSchema.model_validate(d) for d in doses],
        **values,
    )


def _weekly_out(row) -> WeeklyAssessmentSchema:
    return WeeklyAssessmentSchema(
        week_start_date=row.week_start_date,
        profile_scores=row.profile_scores,
        weekly_wins=row.weekly_wins,
        weekly_challenges=row.weekly_challenges,
        goals_next_week=row.goals_next_week,
    )


@progress_router.get("/supplement-protocol", response_model=SupplementProtocolSchema)
async def get_supplement_protocol():
    """Supplements listed on the daily check-in."""
    return SupplementProtocolSchema(
        morning=[SupplementItemSchema(name=n, dosage=d) for n, d in MORNING_SUPPLEMENTS],
        evening=[SupplementItemSchema(name=n, dosage=d) for n, d in EVENING_SUPPLEMENTS],
    )


@progress_router.get("/checkins/{day}", response_model=DailyCheckinResponseSchema)
async def get_checkin(day: date, repo: CheckinRepository = Depends(checkin_repository)):
    row = await repo.get_checkin(day)
    if row is None:
        raise HTTPException(status_code=404, detail=f"No check-in for {day.isoformat()}.")
    return _checkin_out(row, await repo.get_doses(day))


@progress_router.put("/checkins/{day}", response_model=DailyCheckinResponseSchema)
async def put_checkin(
    day: date,
    data: DailyCheckinSchema,
    repo: CheckinRepository = Depends(checkin_repository),
):
    """Create or replace the check-in for a date, with one dose row per supplement."""
    row = await repo.upsert_checkin(day, data.model_dump(exclude={"supplements"}))
    doses = await repo.upsert_doses(day, [
        DoseLog(date=day, supplement_name=s.supplement_name,
                morning_taken=s.morning_taken, evening_taken=s.evening_taken)
        for s in data.supplements
    ])
    return _checkin_out(row, doses)


@progress_router.get("/dashboard", response_model=DashboardStatsSchema)
async def get_dashboard(repo: CheckinRepository = Depends(checkin_repository)):
    """Current streak, total check-in days and progress toward 30 days."""
    stats = progress_engine.dashboard_stats(await repo.checkin_dates())
    return DashboardStatsSchema.model_validate(stats)


@progress_router.get("/weekly", response_model=WeeklyStatsSchema)
async def get_weekly_stats(
    user: User = Depends(current_user),
    db: AsyncSession = Depends(get_db),
):
    """This week's check-in count, energy change vs last week and dose compliance."""
    repo = CheckinRepository(db, user.id)
    this_week = week_start(date.today())
    since = this_week - timedelta(days=7)
    assessment = await get_weekly_assessment(db, user.id, this_week)
    stats = progress_engine.weekly_stats(
        await repo.energy_since(since),
        await repo.doses_since(since),
        has_assessment=assessment is not None,
    )
    return WeeklyStatsSchema(
        week_start=stats.week_start,
        energy_improvement=stats.energy_improvement,
        compliance_rate=stats.compliance_rate,
        days_completed=stats.days_completed,
        has_completed_this_week=stats.has_completed_this_week,
        high_compliance=stats.high_compliance,
        message=stats.message,
    )


@progress_router.get("/weekly-assessment", response_model=WeeklyAssessmentSchema)
async def get_weekly_review(
    week: Optional[date] = None,
    user: User = Depends(current_user),
    db: AsyncSession = Depends(get_db),
):
    """The self-assessment for the week containing `week` (default: this week)."""
    start = week_start(week or date.today())
    row = await get_weekly_assessment(db, user.id, start)
    if row is None:
        raise HTTPException(status_code=404, detail=f"No weekly assessment for the week of {start.isoformat()}.")
    return _weekly_out(row)


@progress_router.put("/weekly-assessment", response_model=WeeklyAssessmentSchema)
async def put_weekly_review(
    data: WeeklyAssessmentInputSchema,
    week: Optional[date] = None,
    user: User = Depends(current_user),
    db: AsyncSession = Depends(get_db),
):
    start = week_start(week or date.today())
    row = await save_weekly_assessment(
        db, user.id, start,
        profile_scores=data.profile_scores,
        weekly_wins=data.weekly_wins,
        weekly_challenges=data.weekly_challenges,
        goals_next_week=data.goals_next_week,
    )
    return _weekly_out(row)


# ══════════════════════════════════════════════════════════════════════════════
# JOURNAL ROUTER
# ══════════════════════════════════════════════════════════════════════════════

journal_router = APIRouter()


def journal_repository(
    user: User = Depends(current_user),
    db: AsyncSession = Depends(get_db),
) -> JournalRepository:
    return JournalRepository(db, user.id)


@journal_router.get("/entries", response_model=List[JournalEntry])
async def list_journal_entries(
    search: str = "",
    tags: List[str] = Query([]),
    moods: List[int] = Query([]),
    weather: List[str] = Query([]),
    favorites: bool = False,
    start: Optional[date] = None,
    end: Optional[date] = None,
    repo: JournalRepository = Depends(journal_repository),
):
    """Entries matching every given filter, newest first."""
    try:
        criteria = JournalFilter(
            search_term=search, tags=tags, moods=moods, weather=weather,
            favorites=favorites, start=start, end=end,
        )
    except ValidationError as e:
        raise HTTPException(status_code=422, detail=e.errors(include_url=False))
    return filter_entries(await repo.list(), criteria)


@journal_router.post("/entries", response_model=JournalEntry, status_code=201)
async def create_journal_entry(entry: JournalEntry, repo: JournalRepository = Depends(journal_repository)):
    if await repo.get(entry.id) is not None:
        raise HTTPException(status_code=409, detail=f"Journal entry {entry.id} already exists.")
    return await repo.upsert(entry)


@journal_router.put("/entries/{entry_id}", response_model=JournalEntry)
async def update_journal_entry(
    entry_id: str,
    entry: JournalEntry,
    repo: JournalRepository = Depends(journal_repository),
):
    if await repo.get(entry_id) is None:
        raise HTTPException(status_code=404, detail=f"No journal entry {entry_id}.")
    return await repo.upsert(entry.with_changes(id=entry_id))


@journal_router.delete("/entries/{entry_id}", response_model=MessageSchema)
async def delete_journal_entry(entry_id: str, repo: JournalRepository = Depends(journal_repository)):
    if not await repo.delete(entry_id):
        raise HTTPException(status_code=404, detail=f"No journal entry {entry_id}.")
    return MessageSchema(message="Journal entry deleted.")


@journal_router.get("/tags", response_model=List[str])
async def list_journal_tags(repo: JournalRepository = Depends(journal_repository)):
    return all_tags(await repo.list())


@journal_router.get("/templates", response_model=List[JournalTemplate])
async def list_journal_templates():
    return list(DEFAULT_TEMPLATES)


@journal_router.get("/moods", response_model=List[Mood])
async def list_moods():
    return list(MOOD_OPTIONS)
