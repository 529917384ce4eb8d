import logging
import uuid

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from services.scorecard_engine.registry import ScorecardRegistry
from services.scorecard_engine.scorer import missing_answers
from src.core.dependencies import get_scorecard_registry
from src.schemas.leads import LeadRequest, LeadResponse, is_valid_email

router = APIRouter()
logger = logging.getLogger(__name__)


@router.post("/leads", response_model=LeadResponse)
async def capture_lead(
    request: LeadRequest,
    registry: ScorecardRegistry = Depends(get_scorecard_registry),
):
    """
    Accepts an email address and the respondent's answers. Nothing is stored;
    the lead is acknowledged with a generated ID.
    """
    if not is_valid_email(request.email):
        logger.warning("Lead rejected: invalid email")
        return JSONResponse(status_code=400, content={"ok": False, "error": "Valid email is required."})

    lead_id = str(uuid.uuid4())
    answers = request.answers if isinstance(request.answers, dict) else {}
    config = registry.get(request.slug) if isinstance(request.slug, str) else None
    if config is not None:
        unanswered = missing_answers(answers, config)
        logger.info(f"Lead {lead_id} captured for '{config.slug}' ({len(unanswered)} unanswered questions)")
    else:
        logger.info(f"Lead {lead_id} captured ({len(answers)} answers)")

    return LeadResponse(ok=True, lead_id=lead_id)
