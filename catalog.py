"""
Ember — Assessment Catalog
Static questionnaire: 7 sections x 8 questions, each answered on a 0–3 scale.
Section ids double as keys into the profile mapping below.
"""

from dataclasses import dataclass


# ══════════════════════════════════════════════════════════════════════════════
# DATA STRUCTURES
# ══════════════════════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class Question:
    id: str
    text: str


@dataclass(frozen=True)
class Section:
    id: str
    title: str
    questions: tuple[Question, ...]

    @property
    def max_score(self) -> int:
        return len(self.questions) * MAX_ANSWER


# Answer scale: 0 = never … 3 = almost always
MIN_ANSWER = 0
MAX_ANSWER = 3
ANSWER_LABELS = {
    0: "Never",
    1: "Sometimes",
    2: "Often",
    3: "Almost always",
}


def _section(section_id: str, title: str, prefix: str, texts: list[str]) -> Section:
    return Section(
        id=section_id,
        title=title,
        questions=tuple(
            Question(id=f"{prefix}-{i}", text=t) for i, t in enumerate(texts, start=1)
        ),
    )


# ══════════════════════════════════════════════════════════════════════════════
# SECTIONS
# ══════════════════════════════════════════════════════════════════════════════

ASSESSMENT_SECTIONS: tuple[Section, ...] = (
    _section("hormonal-chaos", "Hormonal Chaos", "hc", [
        "I experience mood swings or irritability",
        "My periods are irregular or unpredictable",
        "I have trouble losing weight despite diet and exercise",
        "I feel anxious or overwhelmed frequently",
        "I have low libido or sexual dysfunction",
        "I experience hot flashes or night sweats",
        "I have difficulty concentrating or brain fog",
        "I feel emotionally unstable or cry easily",
    ]),
    _section("adrenal-exhaustion", "Adrenal Exhaustion", "ae", [
        "I feel tired even after a full night of sleep",
        "I need caffeine to get through the day",
        "I feel overwhelmed by daily tasks",
        "I have difficulty handling stress",
        "I feel exhausted by 3-4 PM",
        "I crave salty or sweet foods",
        "I feel like I'm always \"running on empty\"",
        "I get sick frequently or take longer to recover",
    ]),
    _section("cellular-starvation", "Cellular Starvation", "cs", [
        "I feel weak or shaky if I don't eat regularly",
        "I have cold hands and feet",
        "My hair is thinning or falling out",
        "I have brittle or ridged nails",
        "I feel like my metabolism is slow",
        "I have trouble maintaining body temperature",
        "I feel tired after eating",
        "I have digestive issues or constipation",
    ]),
    _section("sleep-disruption", "Sleep Disruption", "sd", [
        "I have trouble falling asleep",
        "I wake up frequently during the night",
        "I wake up feeling unrefreshed",
        "I rely on sleep aids or melatonin",
        "My mind races when I try to sleep",
        "I snore or have sleep apnea symptoms",
        "I wake up too early and can't fall back asleep",
        "I feel like I never get quality sleep",
    ]),
    _section("chemical-interference", "Chemical Interference", "ci", [
        "I am sensitive to chemicals, perfumes, or cleaners",
        "I have multiple allergies or intolerances",
        "I take multiple prescription medications",
        "I have autoimmune symptoms or conditions",
        "I react poorly to supplements or medications",
        "I live in a polluted or toxic environment",
        "I have had negative reactions to vaccines or drugs",
        "I feel worse when exposed to WiFi or electronics",
    ]),
    _section("inflammatory-fire", "Inflammatory Fire", "if", [
        "I have joint pain or stiffness",
        "I experience headaches or migraines",
        "I have skin issues like rashes or eczema",
        "I have digestive inflammation or IBD",
        "I feel puffy or retain water",
        "I have chronic pain conditions",
        "I get frequent infections",
        "I feel like my body is \"on fire\" internally",
    ]),
    _section("blood-sugar-chaos", "Blood Sugar Chaos", "bsc", [
        "I experience energy crashes after meals",
        "I crave sugar or carbohydrates frequently",
        "I feel shaky or irritable when hungry",
        "I need to eat every 2-3 hours",
        "I have been told I'm pre-diabetic or diabetic",
        "I gain weight easily around my midsection",
        "I feel tired or sleepy after eating",
        "I have difficulty losing weight",
    ]),
)

QUESTION_IDS = frozenset(q.id for s in ASSESSMENT_SECTIONS for q in s.questions)


# ══════════════════════════════════════════════════════════════════════════════
# PROFILES
# ══════════════════════════════════════════════════════════════════════════════

TOXIC_OVERWHELMED = "Profile 7: Toxic and Overwhelmed"
FALLBACK_PROFILE = "Profile Assessment Complete"

# Keys are section ids, except the combined "toxic-overwhelmed" entry.
# Labels are literal keys into the protocol table; do not reword them.
PROFILE_MAPPING: dict[str, str] = {
    "adrenal-exhaustion":    "Profile 1: Depleted High Achiever",
    "hormonal-chaos":        "Profile 2: Hormonal Roller Coaster",
    "chemical-interference": "Profile 3: Medicated and Struggling",
    "inflammatory-fire":     "Profile 4: Inflamed and Exhausted",
    "blood-sugar-chaos":     "Profile 5: Sugar-Burning Crash Queen",
    "sleep-disruption":      "Profile 6: Sleep-Deprived Zombie",
    "toxic-overwhelmed":     TOXIC_OVERWHELMED,
}

PROFILE_LABELS: tuple[str, ...] = tuple(PROFILE_MAPPING.values())
