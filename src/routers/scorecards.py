import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException

from services.scorecard_engine.engine import ScorecardEngine
from services.scorecard_engine.handoff import build_insights_payload
from services.scorecard_engine.models import (
    IncompleteAnswersError,
    InvalidAnswerError,
    ScorecardReport,
)
from services.scorecard_engine.registry import ScorecardRegistry
from src.core.dependencies import get_plan_client, get_scorecard_registry
from src.plan_service.client import PlanServiceClient, PlanServiceError
from src.schemas.scorecard import (
    PlanSubmissionResult,
    ScoreRequest,
    ScorecardDetail,
    ScorecardSummary,
)

router = APIRouter()
logger = logging.getLogger(__name__)


def get_scorecard_engine(
    slug: str,
    registry: ScorecardRegistry = Depends(get_scorecard_registry),
) -> ScorecardEngine:
    config = registry.get(slug)
    if config is None:
        logger.warning(f"Scorecard not found: {slug}")
        raise HTTPException(status_code=404, detail=f"Scorecard '{slug}' not found.")
    return ScorecardEngine(config)


def _answers_error(slug: str, error: ValueError) -> HTTPException:
    if isinstance(error, IncompleteAnswersError):
        logger.error(f"Incomplete answers for '{slug}': {error}")
        return HTTPException(status_code=422, detail=str(error))
    logger.error(f"Invalid submission for '{slug}': {error}")
    return HTTPException(status_code=400, detail=str(error))


@router.get("/scorecards", response_model=List[ScorecardSummary])
async def list_scorecards(registry: ScorecardRegistry = Depends(get_scorecard_registry)):
    return [
        ScorecardSummary(slug=config.slug, title=config.title, subtitle=config.subtitle)
        for config in registry
    ]


@router.get("/scorecards/{slug}", response_model=ScorecardDetail)
async def get_scorecard(engine: ScorecardEngine = Depends(get_scorecard_engine)):
    return ScorecardDetail.from_config(engine.config)


@router.post("/scorecards/{slug}/score", response_model=ScorecardReport)
async def score_scorecard(
    request: ScoreRequest,
    engine: ScorecardEngine = Depends(get_scorecard_engine),
):
    """
    Scores a complete set of answers and returns the diagnosis, severity,
    lowest-scoring questions and the copy for the results page.
    """
    try:
        return engine.build_report(request.answers)
    except (IncompleteAnswersError, InvalidAnswerError) as e:
        raise _answers_error(engine.slug, e)


@router.post("/scorecards/{slug}/plan", response_model=PlanSubmissionResult)
async def submit_plan(
    request: ScoreRequest,
    engine: ScorecardEngine = Depends(get_scorecard_engine),
    plan_client: PlanServiceClient = Depends(get_plan_client),
):
    """
    Scores the answers and forwards the insights payload to the plan service.
    Returns the plan's edit URL when the service provides one.
    """
    try:
        scores = engine.calculate_scores(request.answers)
    except (IncompleteAnswersError, InvalidAnswerError) as e:
        raise _answers_error(engine.slug, e)

    payload = build_insights_payload(engine.config, request.answers, scores)
    try:
        result = await plan_client.submit(payload)
    except PlanServiceError as e:
        logger.error(f"Plan submission failed for '{engine.slug}': {e}")
        raise HTTPException(status_code=502, detail="Something went wrong. Please try again.")

    return PlanSubmissionResult(ok=result.ok, edit_url=result.edit_url)
