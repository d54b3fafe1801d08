"""
Ember — Protocol Library
Static recommendation bundles keyed by the exact primary-profile label.
Content only; the single contract is `lookup(profile)`, which returns None
for labels without a protocol.
"""

from dataclasses import dataclass, field
from typing import Optional

from catalog import PROFILE_MAPPING


# ══════════════════════════════════════════════════════════════════════════════
# DATA STRUCTURES
# ══════════════════════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class SupplementRecommendation:
    name: str
    dosage: str
    purpose: str
    timing: str
    benefits: str

    @property
    def summary(self) -> str:
        return f"{self.name}: {self.dosage} for {self.purpose[0].lower()}{self.purpose[1:]}"


@dataclass(frozen=True)
class ProtocolBundle:
    profile: str
    description: str
    detailed_description: str
    supplements: tuple[SupplementRecommendation, ...]
    lifestyle: dict[str, tuple[str, ...]]      # category key -> action items
    timeline: dict[str, str]                   # "week1" -> expectation
    optional: tuple[str, ...] = field(default_factory=tuple)


LIFESTYLE_TITLES = {
    "sleep": "Sleep Optimization", "stress": "Stress Management",
    "nutrition": "Nutrition Guidelines", "movement": "Movement & Activity",
    "tracking": "Tracking & Awareness", "cyclical": "Cycle-Aware Living",
    "selfcare": "Self-Care Practices", "hydration": "Hydration & Detox",
    "medical": "Medical Coordination", "detox": "Detox Support",
    "support": "Support Systems", "emergency": "Emergency Protocol",
    "planning": "Planning & Preparation", "environment": "Sleep Environment",
    "routine": "Sleep Routine", "timing": "Timing Guidelines",
    "troubleshooting": "Troubleshooting", "immediate": "Immediate Changes",
    "gentle": "Gentle Approach", "professional": "Professional Support",
    "healing": "Healing Focus",
}


def lifestyle_title(key: str) -> str:
    return LIFESTYLE_TITLES.get(key, key[:1].upper() + key[1:])


def _supp(name, dosage, purpose, timing, benefits) -> SupplementRecommendation:
    return SupplementRecommendation(name, dosage, purpose, timing, benefits)


# ══════════════════════════════════════════════════════════════════════════════
# PROTOCOLS
# ══════════════════════════════════════════════════════════════════════════════

_BUNDLES = (
    ProtocolBundle(
        profile=PROFILE_MAPPING["adrenal-exhaustion"],
        description=(
            "Your adrenal system is running on empty from chronic stress and perfectionism. "
            "This protocol focuses on rebuilding your stress resilience while supporting "
            "sustainable energy production."
        ),
        detailed_description=(
            "High achievers often push through exhaustion, creating a cycle of stress hormone "
            "depletion. Your body needs specific nutrients to rebuild adrenal function and "
            "support healthy cortisol patterns."
        ),
        supplements=(
            _supp("EMBER", "2 capsules with breakfast", "Cellular foundation and mitochondrial support",
                  "Morning with food", "Supports energy production at the cellular level, contains adaptogenic herbs for stress resilience"),
            _supp("STEADY", "1 capsule morning and evening", "Stress resilience and cortisol regulation",
                  "Morning and evening with food", "Helps regulate stress response, supports healthy sleep-wake cycles"),
            _supp("CHARGE", "1 capsule with lunch", "Sustained energy without crashes",
                  "Midday with meal", "Provides B-vitamins and adaptogens for sustained energy production"),
        ),
        lifestyle={
            "sleep": (
                "Set firm bedtime allowing 8+ hours sleep with room at 65-68°F",
                "Create a wind-down routine starting 1 hour before bed",
                "Use blackout curtains or eye mask for complete darkness",
                "Keep bedroom for sleep only - no work materials",
            ),
            "stress": (
                "Say \"no\" to one commitment this week and delegate one task",
                "Practice the \"good enough\" rule - not everything needs to be perfect",
                "Schedule one 20-minute \"do nothing\" break daily",
                "Try the 4-7-8 breathing technique when feeling overwhelmed",
            ),
            "nutrition": (
                "Take actual lunch breaks away from your desk",
                "Eat protein within 1 hour of waking to stabilize blood sugar",
                "Have a protein snack if you experience energy dips",
                "Avoid caffeine after 2 PM to protect sleep quality",
            ),
            "movement": (
                "10-minute walk outside or 5-minute breathing break every afternoon",
                "Gentle stretching or yoga before bed",
                "Take stairs instead of elevators when possible",
                "Park farther away to add movement to your day",
            ),
        },
        timeline={
            "week1": "Focus on sleep optimization and saying no to one commitment",
            "week2": "Add stress-reduction practices and protein timing",
            "week4": "Should notice improved energy stability",
            "week8": "Significant improvement in stress resilience and energy",
        },
        optional=(
            "B-complex vitamin for persistent low energy",
            "Rhodiola (200-400mg) if you prefer it over ashwagandha",
            "Magnesium glycinate (400mg) before bed for deeper sleep",
        ),
    ),
    ProtocolBundle(
        profile=PROFILE_MAPPING["hormonal-chaos"],
        description=(
            "Your hormonal fluctuations are creating chaos in your energy, mood, and libido. "
            "This protocol provides targeted support for hormone balance throughout your entire cycle."
        ),
        detailed_description=(
            "Hormonal imbalances often stem from stress, poor nutrition timing, and lack of cycle "
            "awareness. Supporting your body's natural rhythms while providing targeted nutrients "
            "can restore balance."
        ),
        supplements=(
            _supp("EMBER", "2 capsules with breakfast", "Comprehensive hormone support",
                  "Morning with food", "Contains hormone-balancing herbs and nutrients that support healthy estrogen and progesterone levels"),
            _supp("STEADY", "1 capsule daily (increase to 2 during luteal phase)", "Mood stability and PMS support",
                  "Morning, add evening dose days 22-28", "Helps manage mood swings, supports healthy stress response during hormonal fluctuations"),
            _supp("CHARGE", "1 capsule with breakfast", "Consistent energy throughout cycle",
                  "Morning with food", "Provides B-vitamins crucial for hormone production and energy metabolism"),
        ),
        lifestyle={
            "tracking": (
                "Track your cycle and energy patterns for 3 months using an app",
                "Note mood, energy, sleep quality, and libido daily",
                "Track when you feel most creative and productive",
                "Record any PMS symptoms and their severity",
            ),
            "cyclical": (
                "Schedule demanding tasks during days 8-21 (follicular/ovulation)",
                "Plan rest and self-care during days 22-28 (luteal phase)",
                "Allow for more carbohydrates during luteal phase",
                "Reduce intense exercise during menstruation",
            ),
            "selfcare": (
                "Take Epsom salt baths 2-3 times per week",
                "Practice gentle self-massage with essential oils",
                "Prioritize warm, cooked foods during menstruation",
                "Create cozy evening routines during luteal phase",
            ),
            "nutrition": (
                "Focus on anti-inflammatory foods especially during luteal phase",
                "Include healthy fats at every meal for hormone production",
                "Eat protein within 1 hour of waking",
                "Minimize sugar and processed foods during PMS week",
            ),
        },
        timeline={
            "week1": "Begin cycle tracking and supplement routine",
            "week4": "Should notice some mood stability improvements",
            "week12": "Significant improvements in PMS and energy patterns",
            "week24": "Hormonal patterns should be much more balanced",
        },
        optional=(
            "DIM (100-200mg) to support estrogen metabolism",
            "Evening primrose oil (1000mg) for hormone balance",
            "Extra magnesium during luteal phase (400-600mg)",
            "Vitex (400mg) for progesterone support if needed",
        ),
    ),
    ProtocolBundle(
        profile=PROFILE_MAPPING["chemical-interference"],
        description=(
            "Your chemical interference score suggests you need support while managing "
            "medications and reducing toxic burden."
        ),
        detailed_description=(
            "Many medications can interfere with libido and energy by depleting nutrients, "
            "affecting liver function, or disrupting hormonal balance. This protocol supports "
            "your body while you work with medications."
        ),
        supplements=(
            _supp("EMBER", "2 capsules morning and evening", "Comprehensive support and nutrient repletion",
                  "Morning and evening with food", "Replaces nutrients depleted by medications, supports liver detoxification pathways"),
            _supp("STEADY", "1 capsule twice daily", "Natural stress response support",
                  "Morning and evening with food", "Supports natural stress resilience when medications may interfere with normal responses"),
            _supp("CHARGE", "1 capsule with lunch", "Cellular energy and mitochondrial support",
                  "Midday with meal", "Supports energy production when medications may cause fatigue"),
        ),
        lifestyle={
            "medical": (
                "Work with your doctor to discuss medication timing to minimize sexual side effects",
                "Ask about medication holidays or dose reductions when appropriate",
                "Consider working with functional medicine doctor alongside conventional doctor",
                "Keep a medication and symptom diary to track patterns",
            ),
            "detox": (
                "Increase water intake by 16-32oz to your daily target",
                "Include cruciferous vegetables 3-4 times per week for liver support",
                "Add fiber-rich foods to support elimination",
                "Consider gentle lymphatic drainage massage",
            ),
            "nutrition": (
                "Take supplements at least 2 hours away from medications unless directed otherwise",
                "Focus on nutrient-dense whole foods to replace what medications deplete",
                "Avoid grapefruit if on medications that interact with it",
                "Consider meal timing to optimize medication absorption",
            ),
            "support": (
                "Find a healthcare team that understands medication effects on sexuality",
                "Join support groups for people managing similar health conditions",
                "Communicate openly with your partner about medication effects",
                "Practice stress reduction as medications can increase stress on the body",
            ),
        },
        timeline={
            "week1": "Begin detox support and nutrient repletion",
            "week4": "Should notice some improvement in energy levels",
            "week8": "Liver function support should be helping with detoxification",
            "week16": "Work with doctor to assess if any medication adjustments are possible",
        },
        optional=(
            "CoQ10 if on statins, B-complex if on metformin/birth control",
            "Vitamin D3 (2000-4000 IU) if on antidepressants",
            "Milk thistle (200mg) for additional liver support",
            "Probiotics if on medications affecting gut health",
        ),
    ),
    ProtocolBundle(
        profile=PROFILE_MAPPING["inflammatory-fire"],
        description=(
            "Your inflammatory fire score indicates you need comprehensive anti-inflammatory "
            "support and gentle healing approach."
        ),
        detailed_description=(
            "Chronic inflammation creates a cascade of problems including hormonal disruption, "
            "energy depletion, and immune dysfunction. This protocol focuses on reducing "
            "inflammation while supporting cellular repair."
        ),
        supplements=(
            _supp("EMBER", "2 capsules daily with meals", "Anti-inflammatory support and cellular repair",
                  "Morning and evening with food", "Contains powerful anti-inflammatory compounds and antioxidants to reduce systemic inflammation"),
            _supp("STEADY", "1 capsule twice daily", "Stress-related inflammation management",
                  "Morning and evening with food", "Helps break the stress-inflammation cycle that perpetuates chronic inflammation"),
            _supp("CHARGE", "1 capsule daily", "Cellular repair and energy support",
                  "Morning with food", "Supports mitochondrial function and cellular repair processes"),
        ),
        lifestyle={
            "nutrition": (
                "Remove \"Big 3\" inflammatory foods for 30 days: sugar, processed foods, excess caffeine",
                "Add bone broth or collagen-rich foods to meals",
                "Focus on colorful anti-inflammatory foods (berries, leafy greens, fatty fish)",
                "Consider an elimination diet to identify personal triggers",
            ),
            "movement": (
                "Focus on gentle movement only until inflammation reduces (yoga, walking)",
                "Avoid high-intensity exercise until inflammation is under control",
                "Try restorative yoga or gentle stretching daily",
                "Swimming in warm water can be soothing for inflamed joints",
            ),
            "stress": (
                "Stress reduction is absolutely critical - make it your #1 priority",
                "Practice daily meditation or deep breathing exercises",
                "Consider therapy or counseling to address chronic stress patterns",
                "Create boundaries to protect your energy and reduce stressors",
            ),
            "healing": (
                "Focus on sleep quality over quantity initially",
                "Consider working with functional medicine practitioner for advanced gut testing",
                "Try infrared sauna or warm baths to support detoxification",
                "Practice self-compassion as healing takes time",
            ),
        },
        timeline={
            "week1": "Begin anti-inflammatory diet and gentle movement",
            "week4": "Should notice reduction in pain and better sleep",
            "week8": "Energy levels should start improving",
            "week16": "Significant reduction in inflammatory symptoms",
        },
        optional=(
            "Remove full \"Big 8\": gluten, dairy, sugar, corn, soy, eggs, nuts, nightshades",
            "Omega-3 fatty acids (2-3g daily)",
            "Curcumin with black pepper (500-1000mg)",
            "L-glutamine (5g twice daily), Probiotics (50+ billion CFU daily)",
        ),
    ),
    ProtocolBundle(
        profile=PROFILE_MAPPING["blood-sugar-chaos"],
        description=(
            "Your blood sugar chaos score shows you need metabolic support and blood sugar "
            "stabilization strategies."
        ),
        detailed_description=(
            "Blood sugar instability creates a roller coaster of energy, mood, and hormone "
            "disruption. Stabilizing blood sugar is foundational to restoring energy and "
            "hormonal balance."
        ),
        supplements=(
            _supp("EMBER", "2 capsules with breakfast", "Metabolic support and insulin sensitivity",
                  "Morning with food", "Contains nutrients that support healthy glucose metabolism and insulin function"),
            _supp("STEADY", "1 capsule daily", "Stress-related blood sugar management",
                  "Morning with food", "Helps manage cortisol levels that can cause blood sugar swings"),
            _supp("CHARGE", "1 capsule with lunch", "Stable energy without crashes",
                  "Midday with meal", "Supports sustained energy production and prevents afternoon crashes"),
        ),
        lifestyle={
            "nutrition": (
                "Never eat carbohydrates alone - always pair with protein and fat",
                "Eat within 1 hour of waking, then every 3-4 hours maximum",
                "Stop eating 3 hours before bed, eat largest meals earlier in day",
                "Never skip meals, even if not hungry",
            ),
            "emergency": (
                "Always carry protein snacks (nuts, seeds, hard-boiled eggs)",
                "For severe crashes: 1 tablespoon almond butter with cinnamon",
                "Keep blood sugar emergency kit: protein bar, nuts, apple with nut butter",
                "Learn to recognize early warning signs of blood sugar drops",
            ),
            "planning": (
                "Plan all meals and snacks in advance",
                "Prepare emergency snacks for travel or busy days",
                "Track blood sugar patterns with food to identify triggers",
                "Consider continuous glucose monitoring for detailed insights",
            ),
            "hydration": (
                "Drink water before feeling thirsty to prevent dehydration crashes",
                "Avoid sugary drinks that cause blood sugar spikes",
                "Try herbal teas between meals for sustained hydration",
                "Add electrolytes if experiencing frequent crashes",
            ),
        },
        timeline={
            "week1": "Focus on meal timing and protein pairing",
            "week2": "Should notice fewer energy crashes",
            "week4": "Energy levels should be more stable throughout the day",
            "week8": "Blood sugar patterns should be significantly improved",
        },
        optional=(
            "Chromium (200-400mcg with meals)",
            "Alpha lipoic acid (300mg twice daily)",
            "Cinnamon extract (500mg with carbohydrate-containing meals)",
        ),
    ),
    ProtocolBundle(
        profile=PROFILE_MAPPING["sleep-disruption"],
        description=(
            "Your sleep disruption score indicates you need comprehensive sleep support and "
            "circadian rhythm restoration."
        ),
        detailed_description=(
            "Poor sleep creates a cascade of hormonal disruptions affecting cortisol, growth "
            "hormone, and sex hormones. Restoring healthy sleep patterns is crucial for energy "
            "and libido restoration."
        ),
        supplements=(
            _supp("EMBER", "1 capsule with breakfast, 1 capsule with dinner", "Circadian rhythm support",
                  "Morning and early evening with food", "Contains nutrients that support healthy sleep-wake cycles and hormone production"),
            _supp("STEADY", "1 capsule 2 hours before bed", "Sleep quality and relaxation",
                  "2 hours before bedtime", "Promotes relaxation and helps calm the nervous system for better sleep"),
            _supp("CHARGE", "1 capsule with breakfast only", "Morning energy without evening disruption",
                  "Morning with food only", "Provides energizing nutrients without interfering with sleep"),
        ),
        lifestyle={
            "environment": (
                "Room temperature 65-68°F with blackout curtains or eye mask",
                "White noise machine or earplugs for consistent sound environment",
                "Remove all electronics from bedroom or use airplane mode",
                "Invest in comfortable mattress and pillows that support good alignment",
            ),
            "routine": (
                "Same sleep/wake time every day, including weekends",
                "Create a wind-down routine starting 1-2 hours before bed",
                "No screens in bedroom, use blue light blockers if must use devices in evening",
                "Try reading, gentle stretching, or meditation before bed",
            ),
            "timing": (
                "No caffeine after 2 PM, exercise earlier in the day",
                "Finish eating at least 3 hours before bedtime",
                "Get morning sunlight exposure within 30 minutes of waking",
                "Dim lights in the evening to signal bedtime to your body",
            ),
            "troubleshooting": (
                "Consider sleep study if snoring or breathing issues persist",
                "Track sleep patterns to identify what helps vs. hurts",
                "Address racing thoughts with journaling or brain dump before bed",
                "If you can't fall asleep in 20 minutes, get up and do a quiet activity",
            ),
        },
        timeline={
            "week1": "Focus on sleep environment and routine",
            "week2": "Should notice easier time falling asleep",
            "week4": "Sleep quality and morning energy should improve",
            "week8": "Circadian rhythm should be well-established",
        },
        optional=(
            "Melatonin (0.5-3mg) 30 minutes before desired sleep time",
            "Magnesium glycinate (400-600mg before bed)",
            "L-theanine (200mg) if mind races at bedtime",
        ),
    ),
    ProtocolBundle(
        profile=PROFILE_MAPPING["toxic-overwhelmed"],
        description=(
            "Your combined chemical interference and inflammatory fire scores indicate you need "
            "gentle detox support and environmental modifications."
        ),
        detailed_description=(
            "Chemical toxins can overwhelm your body's natural detoxification systems, leading to "
            "hormonal disruption and chronic inflammation. This protocol supports gentle "
            "detoxification while reducing toxic burden."
        ),
        supplements=(
            _supp("EMBER", "Start with 1 capsule, gradually increase to 2 daily", "Gentle detox support and cellular protection",
                  "With meals, start slowly", "Supports liver detoxification pathways and provides antioxidant protection"),
            _supp("STEADY", "1 capsule twice daily", "Stress resilience during detoxification",
                  "Morning and evening with food", "Supports the nervous system during the stress of detoxification"),
            _supp("CHARGE", "1 capsule daily", "Cellular energy during healing",
                  "Morning with food", "Provides energy for cellular repair and detoxification processes"),
        ),
        lifestyle={
            "immediate": (
                "Switch to non-toxic cleaning products immediately",
                "Use glass containers instead of plastic for food storage",
                "Filter your water if possible",
                "Replace synthetic fragrances with essential oils or fragrance-free products",
            ),
            "nutrition": (
                "Choose organic foods when possible, especially \"Dirty Dozen\" list",
                "Support liver with cruciferous vegetables and sulfur-rich foods",
                "Increase fiber intake to support elimination",
                "Stay well-hydrated to support kidney function",
            ),
            "gentle": (
                "Go slowly with all changes - support your body's natural detox pathways",
                "Focus on gentle movement and stress reduction",
                "Don't overwhelm your system with aggressive detox protocols",
                "Listen to your body and rest when needed",
            ),
            "professional": (
                "Work with practitioner experienced in environmental illness",
                "Consider testing for heavy metals or chemical burden",
                "May need specific detox protocols based on your toxic load",
                "Consider mold testing if you suspect environmental mold exposure",
            ),
        },
        timeline={
            "week1": "Begin environmental changes and gentle supplement support",
            "week4": "Should notice some improvement in energy and mental clarity",
            "week8": "Detoxification pathways should be better supported",
            "week16": "Significant improvement in symptoms related to toxic burden",
        },
        optional=(
            "NAC (600mg) and milk thistle (300mg) for extra liver support",
            "Sauna or hot baths 2-3 times per week if tolerated",
            "Glutathione support if working with a practitioner",
            "Activated charcoal (away from supplements) for acute exposure",
        ),
    ),
)

PROTOCOLS: dict[str, ProtocolBundle] = {b.profile: b for b in _BUNDLES}


def lookup(profile: str) -> Optional[ProtocolBundle]:
    """Exact-label lookup. None means no recommendation is available."""
    return PROTOCOLS.get(profile)
