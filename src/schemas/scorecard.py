from typing import Annotated, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, StrictInt

from services.scorecard_engine.models import (
    Intro,
    PillarSection,
    Question,
    ResultsCTA,
    ScorecardConfig,
    ThemeConfig,
    SCALE_MIN,
    SCALE_MAX,
)

# Strict: true, "3" and 3.0 are rejected instead of coerced to an int
Score = Annotated[StrictInt, Field(ge=SCALE_MIN, le=SCALE_MAX)]


class ScoreRequest(BaseModel):
    answers: Dict[str, Score]  # question_id → score (1-5)


class ScorecardSummary(BaseModel):
    slug: str
    title: str
    subtitle: str


class ScorecardDetail(BaseModel):
    """Public view of a scorecard: everything needed to render the form."""
    slug: str
    title: str
    subtitle: str
    intro: Intro
    pillars: List[PillarSection]
    questions: List[Question]
    scale_labels: List[str]
    theme: ThemeConfig
    results_cta: ResultsCTA
    has_package_recommendations: bool

    @classmethod
    def from_config(cls, config: ScorecardConfig) -> "ScorecardDetail":
        return cls(
            slug=config.slug,
            title=config.title,
            subtitle=config.subtitle,
            intro=config.intro,
            pillars=config.pillars,
            questions=config.questions,
            scale_labels=config.scale_labels,
            theme=config.theme,
            results_cta=config.results_cta,
            has_package_recommendations=config.package_recommendations is not None,
        )


class PlanSubmissionResult(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    ok: bool
    edit_url: Optional[str] = Field(None, alias="editUrl")
