from enum import Enum
from typing import List, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field


# --- Custom Exceptions ---

class IncompleteAnswersError(ValueError):
    """Raised when the engine is invoked before every question has an answer."""

    def __init__(self, missing: List[str]):
        self.missing = list(missing)
        super().__init__(f"Missing answers for required questions: {self.missing}")


class InvalidAnswerError(ValueError):
    """Raised for answers outside the 1-5 scale or for unknown question IDs."""
    pass


class ScorecardValidationError(ValueError):
    """Custom exception for scorecard configuration errors not covered by Pydantic."""
    pass


class MissingConfigEntry(ScorecardValidationError):
    """A copy table lacks an entry for a pillar or severity band."""

    def __init__(self, table: str, key: str, slug: Optional[str] = None):
        self.table = table
        self.key = key
        self.slug = slug
        where = f" in scorecard '{slug}'" if slug else ""
        super().__init__(f"Missing '{key}' entry in '{table}'{where}")


# --- Enumerations ---

class Pillar(str, Enum):
    SOUL = "Soul"
    HEART = "Heart"
    HANDS = "Hands"
    ALIGNMENT = "Alignment"


# Canonical ranking order; earlier pillars win ties.
SCORED_PILLARS = (Pillar.SOUL, Pillar.HEART, Pillar.HANDS)
ALL_PILLARS = SCORED_PILLARS + (Pillar.ALIGNMENT,)


class SeverityBand(str, Enum):
    CRITICAL = "Critical"
    LEAKING = "Leaking"
    IMPROVING = "Improving"
    HEALTHY = "Healthy"


SCALE_MIN = 1
SCALE_MAX = 5


# --- Configuration Models ---

class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True)


class Question(_Frozen):
    id: str
    pillar: Pillar
    text: str


class PillarSection(_Frozen):
    id: Pillar
    title: str
    subtitle: str
    question_range: str


class Intro(_Frozen):
    heading: str
    body: str


class ThemeConfig(_Frozen):
    brand_name: str
    accent: str
    accent_hover: str
    logo_url: Optional[str] = None


class HandoffConfig(_Frozen):
    source: str
    route_tag: str


class ResultsCTA(_Frozen):
    label: str
    description: str
    button_text: str


class DiagnosisInsight(_Frozen):
    title: str
    pattern: str
    consequence: str


class CallToAction(_Frozen):
    label: str
    href: str


class PackageCard(_Frozen):
    title: str
    audience: str
    bullets: List[str]
    outcome: str
    cta: CallToAction


class PackageRecommendation(_Frozen):
    recommended: PackageCard
    alternative: PackageCard


class PatternCopy(_Frozen):
    critical: str  # Critical or Leaking
    improving: str  # Improving or Healthy


class ScorecardConfig(_Frozen):
    slug: str
    title: str
    subtitle: str
    intro: Intro
    pillars: List[PillarSection]
    questions: List[Question] = Field(..., min_length=1)
    scale_labels: List[str] = Field(..., min_length=5, max_length=5)  # index 0 = lowest
    theme: ThemeConfig
    handoff: HandoffConfig
    results_cta: ResultsCTA
    diagnosis_insights: Dict[Pillar, DiagnosisInsight]
    package_recommendations: Optional[Dict[Pillar, PackageRecommendation]] = None
    severity_copy: Dict[SeverityBand, str]
    thirty_day_rules: Dict[Pillar, str]
    patterns: Dict[Pillar, PatternCopy]
    alignment_notes: Dict[Pillar, str]

    def questions_for(self, pillar: Pillar) -> List[Question]:
        """Questions belonging to ``pillar``, in configuration order."""
        return [q for q in self.questions if q.pillar == pillar]

    @property
    def question_ids(self) -> List[str]:
        return [q.id for q in self.questions]


# --- Result Models ---

class ScoreResult(_Frozen):
    soul_avg: float
    heart_avg: float
    hands_avg: float
    align_avg: float
    primary: Pillar
    secondary: Pillar

    def average_for(self, pillar: Pillar) -> float:
        return {
            Pillar.SOUL: self.soul_avg,
            Pillar.HEART: self.heart_avg,
            Pillar.HANDS: self.hands_avg,
            Pillar.ALIGNMENT: self.align_avg,
        }[pillar]

    @property
    def primary_score(self) -> float:
        return self.average_for(self.primary)


class LowestQuestion(_Frozen):
    id: str
    number: int  # 1-based position in the scorecard
    pillar: Pillar
    text: str
    score: int


class AlignmentNote(_Frozen):
    status: str  # "weak" or "strong"
    message: str


class ScorecardReport(_Frozen):
    """Everything a results page needs for one completed scorecard."""
    slug: str
    scores: ScoreResult
    overall_avg: float
    primary_score: float
    severity: SeverityBand
    pattern: str
    diagnosis: DiagnosisInsight
    thirty_day_rule: str
    severity_copy: str
    severity_warning: Optional[str] = None
    lowest_questions: List[LowestQuestion]
    alignment_note: Optional[AlignmentNote] = None
    packages: Optional[PackageRecommendation] = None
