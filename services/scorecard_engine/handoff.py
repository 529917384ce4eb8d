# services/scorecard_engine/handoff.py
# Serializes a completed result into the payload the plan service expects.

from datetime import datetime, timezone
from typing import List, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field

from services.scorecard_engine import scorer
from services.scorecard_engine.models import Pillar, ScorecardConfig, ScoreResult


class _CamelModel(BaseModel):
    # Field names stay snake_case in Python; the wire format is camelCase.
    model_config = ConfigDict(populate_by_name=True, frozen=True)


class PillarAverages(_CamelModel):
    soul_avg: float = Field(..., alias="soulAvg")
    heart_avg: float = Field(..., alias="heartAvg")
    hands_avg: float = Field(..., alias="handsAvg")
    align_avg: float = Field(..., alias="alignAvg")


class Totals(_CamelModel):
    overall_avg: float = Field(..., alias="overallAvg")
    pillar_averages: PillarAverages = Field(..., alias="pillarAverages")


class AnswerEntry(_CamelModel):
    question_id: str = Field(..., alias="questionId")
    pillar_id: Pillar = Field(..., alias="pillarId")
    score: int


class InsightsPayload(_CamelModel):
    source: str
    route_tag: str = Field(..., alias="routeTag")
    completed_at: str = Field(..., alias="completedAt")
    totals: Totals
    lowest_pillars: List[Pillar] = Field(..., alias="lowestPillars")
    highest_pillars: List[Pillar] = Field(..., alias="highestPillars")
    answers: List[AnswerEntry]

    def to_wire(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)


def format_timestamp(moment: datetime) -> str:
    """UTC, millisecond precision, 'Z' suffix (e.g. 2026-01-15T09:30:00.000Z)."""
    utc = moment.astimezone(timezone.utc)
    return utc.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def build_insights_payload(
    config: ScorecardConfig,
    answers: Mapping[str, int],
    scores: ScoreResult,
    completed_at: Optional[datetime] = None,
) -> InsightsPayload:
    """
    Builds the plan-service payload from a scored result and the raw answers.
    Answers are listed in configuration order.
    """
    completed_at = completed_at or datetime.now(timezone.utc)
    return InsightsPayload(
        source=config.handoff.source,
        route_tag=config.handoff.route_tag,
        completed_at=format_timestamp(completed_at),
        totals=Totals(
            overall_avg=scorer.overall_average(scores),
            pillar_averages=PillarAverages(
                soul_avg=scores.soul_avg,
                heart_avg=scores.heart_avg,
                hands_avg=scores.hands_avg,
                align_avg=scores.align_avg,
            ),
        ),
        lowest_pillars=scorer.lowest_pillars(scores),
        highest_pillars=scorer.highest_pillars(scores),
        answers=[
            AnswerEntry(question_id=q.id, pillar_id=q.pillar, score=answers[q.id])
            for q in config.questions
        ],
    )
