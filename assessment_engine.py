"""
Ember — Assessment Scoring Engine
Turns raw questionnaire answers into section scores, impact levels and a
single primary profile. Pure computation over the static catalog.
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Mapping, Optional, Sequence

from catalog import (
    ASSESSMENT_SECTIONS, PROFILE_MAPPING, TOXIC_OVERWHELMED, FALLBACK_PROFILE,
    Section,
)

log = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════════
# DATA STRUCTURES
# ══════════════════════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class SectionScore:
    section_id: str
    title: str
    score: int
    max_score: int
    impact_level: str               # minimal / moderate / major

    def to_dict(self) -> dict:
        return {
            "sectionId": self.section_id,
            "title": self.title,
            "score": self.score,
            "maxScore": self.max_score,
            "impactLevel": self.impact_level,
        }

    @classmethod
    def from_dict(cls, data: Mapping) -> "SectionScore":
        return cls(
            section_id=data["sectionId"],
            title=data["title"],
            score=int(data["score"]),
            max_score=int(data["maxScore"]),
            impact_level=data["impactLevel"],
        )


@dataclass(frozen=True)
class AssessmentResult:
    section_scores: tuple[SectionScore, ...]   # catalog order
    primary_profile: str
    completed_at: datetime

    def score_for(self, section_id: str) -> int:
        for s in self.section_scores:
            if s.section_id == section_id:
                return s.score
        return 0

    def to_dict(self) -> dict:
        """Persisted JSON shape; dates as ISO-8601 strings."""
        return {
            "sectionScores": [s.to_dict() for s in self.section_scores],
            "primaryProfile": self.primary_profile,
            "completedAt": self.completed_at.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: Mapping) -> "AssessmentResult":
        completed = data["completedAt"]
        if isinstance(completed, str):
            # Browser exports end in "Z"
            completed = datetime.fromisoformat(completed.replace("Z", "+00:00"))
        return cls(
            section_scores=tuple(SectionScore.from_dict(s) for s in data["sectionScores"]),
            primary_profile=data["primaryProfile"],
            completed_at=completed,
        )


# ══════════════════════════════════════════════════════════════════════════════
# IMPACT THRESHOLDS
# ══════════════════════════════════════════════════════════════════════════════

# Absolute breakpoints for the 8-question / 3-point design.
# They do not scale with max_score.
MINIMAL_MAX = 8
MODERATE_MAX = 16
MAJOR_MIN = MODERATE_MAX + 1

IMPACT_LABELS = {
    "minimal":  "Minimal Impact (0-8 points)",
    "moderate": "Moderate Impact (9-16 points)",
    "major":    "Major Impact (17-24 points)",
}


def classify_impact(score: int) -> str:
    if score <= MINIMAL_MAX:
        return "minimal"
    if score <= MODERATE_MAX:
        return "moderate"
    return "major"


def impact_label(level: str) -> str:
    return IMPACT_LABELS.get(level, level)


# ══════════════════════════════════════════════════════════════════════════════
# SCORER
# ══════════════════════════════════════════════════════════════════════════════

class AssessmentScorer:
    """
    Scores a completed questionnaire.

    Unanswered questions count as 0. The highest-scoring section decides the
    profile, with the earlier catalog section winning ties. When both
    chemical-interference and inflammatory-fire reach the major band the
    combined Toxic and Overwhelmed profile takes precedence.
    """

    OVERRIDE_SECTIONS = ("chemical-interference", "inflammatory-fire")

    def __init__(
        self,
        catalog: Sequence[Section] = ASSESSMENT_SECTIONS,
        profile_mapping: Mapping[str, str] = PROFILE_MAPPING,
    ):
        self.catalog = tuple(catalog)
        self.profile_mapping = profile_mapping

    def section_scores(self, responses: Mapping[str, int]) -> tuple[SectionScore, ...]:
        scores = []
        for section in self.catalog:
            total = sum(responses.get(q.id, 0) for q in section.questions)
            scores.append(SectionScore(
                section_id=section.id,
                title=section.title,
                score=total,
                max_score=section.max_score,
                impact_level=classify_impact(total),
            ))
        return tuple(scores)

    def primary_profile(self, scores: Sequence[SectionScore]) -> str:
        if not scores:
            return FALLBACK_PROFILE

        by_id = {s.section_id: s.score for s in scores}
        if all(by_id.get(sid, 0) >= MAJOR_MIN for sid in self.OVERRIDE_SECTIONS):
            return TOXIC_OVERWHELMED

        # Strictly greater replaces the incumbent; ties keep the earlier section.
        highest = scores[0]
        for s in scores[1:]:
            if s.score > highest.score:
                highest = s
        return self.profile_mapping.get(highest.section_id, FALLBACK_PROFILE)

    def score(
        self,
        responses: Mapping[str, int],
        completed_at: Optional[datetime] = None,
    ) -> AssessmentResult:
        scores = self.section_scores(responses)
        profile = self.primary_profile(scores)
        log.debug("Assessment scored: profile=%s answered=%d", profile, len(responses))
        return AssessmentResult(
            section_scores=scores,
            primary_profile=profile,
            completed_at=completed_at or datetime.now(timezone.utc),
        )


# ══════════════════════════════════════════════════════════════════════════════
# RESULT HELPERS
# ══════════════════════════════════════════════════════════════════════════════

def top_priorities(result: AssessmentResult, limit: int = 3) -> list[SectionScore]:
    """Major-impact sections, highest score first."""
    major = [s for s in result.section_scores if s.impact_level == "major"]
    return sorted(major, key=lambda s: s.score, reverse=True)[:limit]


def focus_areas(result: AssessmentResult) -> list[SectionScore]:
    """Every section that is not minimal, in catalog order."""
    return [s for s in result.section_scores if s.impact_level != "minimal"]


# Module-level singleton
assessment_scorer = AssessmentScorer()
