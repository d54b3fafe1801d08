"""
Ember — Storage
Repositories for daily planner entries (one per user per date, upsert by
date), check-ins and supplement doses, weekly assessments and journal
entries, plus persistence helpers for assessment results.

Two entry backends share the same async interface:
    LocalEntryStore    — JSON document on disk (or in memory), single user
    SqlEntryRepository — hosted database, scoped to one user
"""

import datetime as dt
import json
import logging
from pathlib import Path
from typing import Iterable, Mapping, Optional, Protocol

from sqlalchemy import select, desc, delete, update
from sqlalchemy.ext.asyncio import AsyncSession

from assessment_engine import AssessmentResult
from journal import JournalEntry
from models import (
    AssessmentRecord, DailyCheckinRecord, DailyEntryRecord, JournalEntryRecord,
    SupplementComplianceRecord, WeeklyAssessmentRecord,
)
from planner import DailyEntry
from progress_engine import CheckinEnergy, DoseLog

log = logging.getLogger(__name__)


def _now() -> dt.datetime:
    return dt.datetime.now(dt.timezone.utc)


def _in_range(day: dt.date, start: Optional[dt.date], end: Optional[dt.date]) -> bool:
    return (start is None or day >= start) and (end is None or day <= end)


class EntryRepository(Protocol):
    async def get(self, day: dt.date) -> Optional[DailyEntry]: ...
    async def upsert(self, entry: DailyEntry) -> DailyEntry: ...
    async def list(self, start: Optional[dt.date] = None, end: Optional[dt.date] = None) -> list[DailyEntry]: ...
    async def clear(self) -> int: ...


# ══════════════════════════════════════════════════════════════════════════════
# LOCAL STORE
# ══════════════════════════════════════════════════════════════════════════════

class LocalEntryStore:
    """
    Device-local entry store. With a path, every write rewrites the JSON
    document (a list of camelCase entries); without one it lives in memory.
    """

    def __init__(self, path: Optional[Path] = None):
        self.path = Path(path) if path else None
        self._entries: dict[dt.date, DailyEntry] = {}
        if self.path and self.path.exists():
            self._load()

    def _load(self) -> None:
        try:
            raw = json.loads(self.path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as e:
            raise ValueError(f"Corrupt entry store at {self.path}: {e}")
        for item in raw:
            entry = DailyEntry.from_dict(item)
            self._entries[entry.date] = entry
        log.info("Loaded %d daily entries from %s", len(self._entries), self.path)

    def _flush(self) -> None:
        if not self.path:
            return
        self.path.parent.mkdir(parents=True, exist_ok=True)
        doc = [e.to_dict() for e in sorted(self._entries.values(), key=lambda e: e.date)]
        self.path.write_text(json.dumps(doc, indent=2), encoding="utf-8")

    async def get(self, day: dt.date) -> Optional[DailyEntry]:
        return self._entries.get(day)

    async def upsert(self, entry: DailyEntry) -> DailyEntry:
        existing = self._entries.get(entry.date)
        stored = entry.with_changes(
            created_at=existing.created_at if existing else entry.created_at,
            updated_at=_now(),
        )
        self._entries[stored.date] = stored
        self._flush()
        return stored

    async def list(self, start: Optional[dt.date] = None, end: Optional[dt.date] = None) -> list[DailyEntry]:
        return sorted(
            (e for e in self._entries.values() if _in_range(e.date, start, end)),
            key=lambda e: e.date,
        )

    async def clear(self) -> int:
        count = len(self._entries)
        self._entries.clear()
        self._flush()
        log.info("Cleared %d local daily entries", count)
        return count


# ══════════════════════════════════════════════════════════════════════════════
# HOSTED STORE
# ══════════════════════════════════════════════════════════════════════════════

class SqlEntryRepository:
    """Entries for one user. Uniqueness of (user_id, entry_date) is enforced by the table."""

    def __init__(self, db: AsyncSession, user_id: int):
        self.db = db
        self.user_id = user_id

    async def _row(self, day: dt.date) -> Optional[DailyEntryRecord]:
        result = await self.db.execute(
            select(DailyEntryRecord)
            .where(DailyEntryRecord.user_id == self.user_id, DailyEntryRecord.entry_date == day)
        )
        return result.scalar_one_or_none()

    async def get(self, day: dt.date) -> Optional[DailyEntry]:
        row = await self._row(day)
        return DailyEntry.from_dict(row.payload) if row else None

    async def upsert(self, entry: DailyEntry) -> DailyEntry:
        row = await self._row(entry.date)
        if row:
            previous = DailyEntry.from_dict(row.payload)
            stored = entry.with_changes(created_at=previous.created_at, updated_at=_now())
            row.payload = stored.to_dict()
            row.completion_score = stored.completion_score
        else:
            stored = entry.with_changes(updated_at=_now())
            row = DailyEntryRecord(
                user_id=self.user_id,
                entry_date=stored.date,
                payload=stored.to_dict(),
                completion_score=stored.completion_score,
            )
            self.db.add(row)
        await self.db.flush()
        log.info("Upserted entry %s for user %s (completion %d%%)", stored.date, self.user_id, stored.completion_score)
        return stored

    async def list(self, start: Optional[dt.date] = None, end: Optional[dt.date] = None) -> list[DailyEntry]:
        query = select(DailyEntryRecord).where(DailyEntryRecord.user_id == self.user_id)
        if start:
            query = query.where(DailyEntryRecord.entry_date >= start)
        if end:
            query = query.where(DailyEntryRecord.entry_date <= end)
        result = await self.db.execute(query.order_by(DailyEntryRecord.entry_date))
        return [DailyEntry.from_dict(r.payload) for r in result.scalars().all()]

    async def clear(self) -> int:
        result = await self.db.execute(
            delete(DailyEntryRecord).where(DailyEntryRecord.user_id == self.user_id)
        )
        log.info("Cleared %d daily entries for user %s", result.rowcount, self.user_id)
        return result.rowcount


# ══════════════════════════════════════════════════════════════════════════════
# ASSESSMENT RESULTS
# ══════════════════════════════════════════════════════════════════════════════

async def save_assessment(
    db: AsyncSession,
    user_id: int,
    answers: Mapping[str, int],
    result: AssessmentResult,
) -> AssessmentRecord:
    payload = result.to_dict()
    record = AssessmentRecord(
        user_id=user_id,
        answers=dict(answers),
        section_scores=payload["sectionScores"],
        primary_profile=result.primary_profile,
        completed_at=result.completed_at,
    )
    db.add(record)
    await db.flush()
    return record


async def latest_assessment(db: AsyncSession, user_id: int) -> Optional[AssessmentResult]:
    result = await db.execute(
        select(AssessmentRecord)
        .where(AssessmentRecord.user_id == user_id)
        .order_by(desc(AssessmentRecord.completed_at))
        .limit(1)
    )
    row = result.scalar_one_or_none()
    if not row:
        return None
    return AssessmentResult.from_dict({
        "sectionScores": row.section_scores,
        "primaryProfile": row.primary_profile,
        "completedAt": row.completed_at,
    })


async def mark_results_viewed(db: AsyncSession, user_id: int) -> int:
    """Stamp viewed_at on every result the user has not opened yet."""
    result = await db.execute(
        update(AssessmentRecord)
        .where(AssessmentRecord.user_id == user_id, AssessmentRecord.viewed_at.is_(None))
        .values(viewed_at=_now())
    )
    return result.rowcount


# ══════════════════════════════════════════════════════════════════════════════
# CHECK-INS & SUPPLEMENT DOSES
# ══════════════════════════════════════════════════════════════════════════════

CHECKIN_FIELDS = (
    "energy_morning", "energy_afternoon", "energy_evening",
    "mood_rating", "sleep_quality", "stress_level",
    "water_intake", "protein_meals",
    "exercise_completed", "sunlight_exposure", "stress_management", "screen_free_evening",
    "notes",
)


class CheckinRepository:
    """Daily check-ins and per-supplement dose rows for one user, one of each per date."""

    def __init__(self, db: AsyncSession, user_id: int):
        self.db = db
        self.user_id = user_id

    async def get_checkin(self, day: dt.date) -> Optional[DailyCheckinRecord]:
        result = await self.db.execute(
            select(DailyCheckinRecord)
            .where(DailyCheckinRecord.user_id == self.user_id, DailyCheckinRecord.checkin_date == day)
        )
        return result.scalar_one_or_none()

    async def upsert_checkin(self, day: dt.date, values: Mapping[str, object]) -> DailyCheckinRecord:
        row = await self.get_checkin(day)
        if not row:
            row = DailyCheckinRecord(user_id=self.user_id, checkin_date=day)
            self.db.add(row)
        for field in CHECKIN_FIELDS:
            if field in values:
                setattr(row, field, values[field])
        await self.db.flush()
        log.info("Saved check-in %s for user %s", day, self.user_id)
        return row

    async def get_doses(self, day: dt.date) -> list[SupplementComplianceRecord]:
        result = await self.db.execute(
            select(SupplementComplianceRecord)
            .where(
                SupplementComplianceRecord.user_id == self.user_id,
                SupplementComplianceRecord.compliance_date == day,
            )
            .order_by(SupplementComplianceRecord.supplement_name)
        )
        return list(result.scalars().all())

    async def upsert_doses(self, day: dt.date, doses: Iterable[DoseLog]) -> list[SupplementComplianceRecord]:
        """One row per supplement per day; repeated saves overwrite the taken flags."""
        existing = {r.supplement_name: r for r in await self.get_doses(day)}
        for dose in doses:
            row = existing.get(dose.supplement_name)
            if not row:
                row = SupplementComplianceRecord(
                    user_id=self.user_id,
                    compliance_date=day,
                    supplement_name=dose.supplement_name,
                )
                self.db.add(row)
                existing[dose.supplement_name] = row
            row.morning_taken = dose.morning_taken
            row.evening_taken = dose.evening_taken
        await self.db.flush()
        return sorted(existing.values(), key=lambda r: r.supplement_name)

    async def energy_since(self, start: dt.date) -> list[CheckinEnergy]:
        result = await self.db.execute(
            select(DailyCheckinRecord)
            .where(DailyCheckinRecord.user_id == self.user_id, DailyCheckinRecord.checkin_date >= start)
            .order_by(DailyCheckinRecord.checkin_date)
        )
        return [
            CheckinEnergy(
                date=r.checkin_date,
                morning=r.energy_morning,
                afternoon=r.energy_afternoon,
                evening=r.energy_evening,
            )
            for r in result.scalars().all()
        ]

    async def doses_since(self, start: dt.date) -> list[DoseLog]:
        result = await self.db.execute(
            select(SupplementComplianceRecord)
            .where(
                SupplementComplianceRecord.user_id == self.user_id,
                SupplementComplianceRecord.compliance_date >= start,
            )
        )
        return [
            DoseLog(
                date=r.compliance_date,
                supplement_name=r.supplement_name,
                morning_taken=r.morning_taken,
                evening_taken=r.evening_taken,
            )
            for r in result.scalars().all()
        ]

    async def checkin_dates(self) -> list[dt.date]:
        result = await self.db.execute(
            select(DailyCheckinRecord.checkin_date)
            .where(DailyCheckinRecord.user_id == self.user_id)
            .order_by(desc(DailyCheckinRecord.checkin_date))
        )
        return list(result.scalars().all())


# ══════════════════════════════════════════════════════════════════════════════
# WEEKLY ASSESSMENTS
# ══════════════════════════════════════════════════════════════════════════════

async def get_weekly_assessment(db: AsyncSession, user_id: int, week_start: dt.date) -> Optional[WeeklyAssessmentRecord]:
    result = await db.execute(
        select(WeeklyAssessmentRecord)
        .where(WeeklyAssessmentRecord.user_id == user_id, WeeklyAssessmentRecord.week_start_date == week_start)
    )
    return result.scalar_one_or_none()


async def save_weekly_assessment(
    db: AsyncSession,
    user_id: int,
    week_start: dt.date,
    profile_scores: list[int],
    weekly_wins: Optional[str] = None,
    weekly_challenges: Optional[str] = None,
    goals_next_week: Optional[str] = None,
) -> WeeklyAssessmentRecord:
    """Upsert keyed on (user, week start)."""
    row = await get_weekly_assessment(db, user_id, week_start)
    if not row:
        row = WeeklyAssessmentRecord(user_id=user_id, week_start_date=week_start)
        db.add(row)
    row.profile_scores = list(profile_scores)
    row.weekly_wins = weekly_wins
    row.weekly_challenges = weekly_challenges
    row.goals_next_week = goals_next_week
    await db.flush()
    log.info("Saved weekly assessment for week of %s (user %s)", week_start, user_id)
    return row


# ══════════════════════════════════════════════════════════════════════════════
# JOURNAL
# ══════════════════════════════════════════════════════════════════════════════

class JournalRepository:
    """Journal entries for one user, keyed by the entry's own id."""

    def __init__(self, db: AsyncSession, user_id: int):
        self.db = db
        self.user_id = user_id

    async def _row(self, entry_id: str) -> Optional[JournalEntryRecord]:
        result = await self.db.execute(
            select(JournalEntryRecord)
            .where(JournalEntryRecord.user_id == self.user_id, JournalEntryRecord.entry_uid == entry_id)
        )
        return result.scalar_one_or_none()

    async def get(self, entry_id: str) -> Optional[JournalEntry]:
        row = await self._row(entry_id)
        return JournalEntry.from_dict(row.payload) if row else None

    async def upsert(self, entry: JournalEntry) -> JournalEntry:
        row = await self._row(entry.id)
        if row:
            previous = JournalEntry.from_dict(row.payload)
            stored = entry.with_changes(created_at=previous.created_at, updated_at=_now())
        else:
            stored = entry.with_changes(updated_at=_now())
            row = JournalEntryRecord(user_id=self.user_id, entry_uid=stored.id)
            self.db.add(row)
        row.entry_date = stored.date
        row.payload = stored.to_dict()
        row.is_favorite = stored.is_favorite
        await self.db.flush()
        return stored

    async def list(self) -> list[JournalEntry]:
        result = await self.db.execute(
            select(JournalEntryRecord)
            .where(JournalEntryRecord.user_id == self.user_id)
            .order_by(desc(JournalEntryRecord.entry_date))
        )
        return [JournalEntry.from_dict(r.payload) for r in result.scalars().all()]

    async def delete(self, entry_id: str) -> bool:
        result = await self.db.execute(
            delete(JournalEntryRecord)
            .where(JournalEntryRecord.user_id == self.user_id, JournalEntryRecord.entry_uid == entry_id)
        )
        return result.rowcount > 0
