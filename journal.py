"""
Ember — Journal
Free-form journal entries with optional mood, weather, tags and photos,
writing templates, and the filter used by the journal list.
"""

import datetime as dt
import uuid
from typing import Iterable, List, Literal, Optional, Tuple

from pydantic import Field, field_validator, model_validator

from planner import PlannerRecord, _now

WeatherCondition = Literal["sunny", "cloudy", "rainy", "snowy", "stormy", "partly-cloudy", "foggy"]


class Mood(PlannerRecord):
    value: int = Field(..., ge=1, le=10)
    label: str
    emoji: str
    color: str


MOOD_OPTIONS: Tuple[Mood, ...] = (
    Mood(value=1, label="Terrible", emoji="😢", color="#ef4444"),
    Mood(value=2, label="Awful", emoji="😞", color="#f97316"),
    Mood(value=3, label="Bad", emoji="😔", color="#f59e0b"),
    Mood(value=4, label="Poor", emoji="😐", color="#eab308"),
    Mood(value=5, label="Okay", emoji="🙂", color="#84cc16"),
    Mood(value=6, label="Good", emoji="😊", color="#22c55e"),
    Mood(value=7, label="Great", emoji="😄", color="#10b981"),
    Mood(value=8, label="Excellent", emoji="😁", color="#06b6d4"),
    Mood(value=9, label="Amazing", emoji="🤩", color="#3b82f6"),
    Mood(value=10, label="Incredible", emoji="🥳", color="#8b5cf6"),
)

WEATHER_EMOJI = {
    "sunny": "☀️",
    "cloudy": "☁️",
    "rainy": "🌧️",
    "snowy": "❄️",
    "stormy": "⛈️",
    "partly-cloudy": "⛅",
    "foggy": "🌫️",
}


def mood_for(value: int) -> Mood:
    for mood in MOOD_OPTIONS:
        if mood.value == value:
            return mood
    raise ValueError(f"Mood must be between 1 and 10, got {value}")


class Weather(PlannerRecord):
    condition: WeatherCondition
    temperature: Optional[float] = None
    emoji: str = ""

    @model_validator(mode="before")
    @classmethod
    def _default_emoji(cls, data):
        if isinstance(data, dict) and not data.get("emoji"):
            data = {**data, "emoji": WEATHER_EMOJI.get(data.get("condition"), "")}
        return data


class JournalTemplate(PlannerRecord):
    id: str
    name: str
    prompts: Tuple[str, ...]
    category: Literal["daily", "wellness", "gratitude", "goals", "custom"]


DEFAULT_TEMPLATES: Tuple[JournalTemplate, ...] = (
    JournalTemplate(
        id="daily-reflection",
        name="Daily Reflection",
        category="daily",
        prompts=(
            "What am I grateful for today?",
            "What was the highlight of my day?",
            "What did I learn today?",
            "How can I improve tomorrow?",
        ),
    ),
    JournalTemplate(
        id="wellness-check",
        name="Wellness Check-in",
        category="wellness",
        prompts=(
            "How is my energy level today?",
            "What did I do for my physical health?",
            "How am I feeling emotionally?",
            "What self-care activities did I practice?",
        ),
    ),
    JournalTemplate(
        id="gratitude",
        name="Gratitude Practice",
        category="gratitude",
        prompts=(
            "Three things I'm grateful for:",
            "Someone who made me smile today:",
            "A small moment of joy:",
            "Something I appreciate about myself:",
        ),
    ),
    JournalTemplate(
        id="goals",
        name="Goal Setting",
        category="goals",
        prompts=(
            "What are my main goals this week?",
            "What progress did I make today?",
            "What obstacles am I facing?",
            "What's my next action step?",
        ),
    ),
)


def template_for(template_id: str) -> Optional[JournalTemplate]:
    return next((t for t in DEFAULT_TEMPLATES if t.id == template_id), None)


class JournalEntry(PlannerRecord):
    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    title: Optional[str] = None
    content: str = Field(..., min_length=1)
    date: dt.date
    mood: Optional[Mood] = None
    weather: Optional[Weather] = None
    location: Optional[str] = None
    photos: Tuple[str, ...] = ()
    tags: Tuple[str, ...] = ()
    is_favorite: bool = False
    template_id: Optional[str] = None
    created_at: dt.datetime = Field(default_factory=_now)
    updated_at: dt.datetime = Field(default_factory=_now)

    @field_validator("tags")
    @classmethod
    def _clean_tags(cls, v):
        # Trimmed, blanks dropped, first occurrence kept
        seen = []
        for tag in (t.strip() for t in v):
            if tag and tag not in seen:
                seen.append(tag)
        return tuple(seen)

    def to_dict(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)

    @classmethod
    def from_dict(cls, data: dict) -> "JournalEntry":
        return cls.model_validate(data)


# ══════════════════════════════════════════════════════════════════════════════
# FILTERING
# ══════════════════════════════════════════════════════════════════════════════

class JournalFilter(PlannerRecord):
    """All set criteria must hold; an empty list places no constraint."""
    start: Optional[dt.date] = None
    end: Optional[dt.date] = None
    moods: Tuple[int, ...] = ()
    tags: Tuple[str, ...] = ()
    weather: Tuple[WeatherCondition, ...] = ()
    favorites: bool = False
    search_term: str = ""

    @property
    def active_count(self) -> int:
        count = len(self.moods) + len(self.weather) + len(self.tags)
        if self.favorites:
            count += 1
        if self.start or self.end:
            count += 1
        return count

    def matches(self, entry: JournalEntry) -> bool:
        term = self.search_term.strip().lower()
        if term:
            haystacks = (entry.content, entry.title or "")
            if not any(term in h.lower() for h in haystacks):
                return False
        if self.tags and not set(self.tags) & set(entry.tags):
            return False
        if self.moods and (entry.mood is None or entry.mood.value not in self.moods):
            return False
        if self.weather and (entry.weather is None or entry.weather.condition not in self.weather):
            return False
        if self.favorites and not entry.is_favorite:
            return False
        if self.start and entry.date < self.start:
            return False
        if self.end and entry.date > self.end:
            return False
        return True


def filter_entries(entries: Iterable[JournalEntry], criteria: Optional[JournalFilter] = None) -> List[JournalEntry]:
    """Matching entries, newest first."""
    criteria = criteria or JournalFilter()
    matched = [e for e in entries if criteria.matches(e)]
    return sorted(matched, key=lambda e: (e.date, e.created_at), reverse=True)


def all_tags(entries: Iterable[JournalEntry]) -> List[str]:
    return sorted({tag for e in entries for tag in e.tags})
