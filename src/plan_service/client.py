import logging
from typing import Any, Dict, Optional

import httpx
from pydantic import BaseModel
from tenacity import AsyncRetrying, retry_if_exception, stop_after_attempt, wait_exponential

from services.scorecard_engine.handoff import InsightsPayload

logger = logging.getLogger(__name__)

# One initial attempt plus a single retry.
MAX_ATTEMPTS = 2


class PlanServiceError(Exception):
    """Raised when the plan service cannot be reached or rejects the payload."""
    pass


class PlanResponse(BaseModel):
    ok: bool = True
    edit_url: Optional[str] = None


def _is_transient(exc: BaseException) -> bool:
    if isinstance(exc, httpx.TransportError):
        return True
    if isinstance(exc, httpx.HTTPStatusError):
        return exc.response.status_code >= 500
    return False


class PlanServiceClient:
    """
    Submits completed scorecard insights to the external plan-generation service.
    The service answers with either an ``editUrl`` to redirect to or a plain
    success acknowledgment.
    """
    def __init__(self, base_url: Optional[str], timeout: float = 30.0, retry_wait=None):
        self.base_url = base_url
        self.timeout = timeout
        self.retry_wait = retry_wait or wait_exponential(multiplier=1, min=1, max=4)

    @property
    def enabled(self) -> bool:
        return bool(self.base_url)

    async def submit(self, payload: InsightsPayload) -> PlanResponse:
        """
        POSTs the payload, retrying once on connection errors, timeouts and 5xx.

        Raises:
            PlanServiceError: If the request still fails after the retry, or on a 4xx.
        """
        if not self.enabled:
            logger.warning(f"Plan service URL not configured; acknowledging '{payload.route_tag}' without a plan")
            return PlanResponse(ok=True)

        body = payload.to_wire()
        try:
            async for attempt in AsyncRetrying(
                stop=stop_after_attempt(MAX_ATTEMPTS),
                wait=self.retry_wait,
                retry=retry_if_exception(_is_transient),
                reraise=True,
            ):
                with attempt:
                    attempt_number = attempt.retry_state.attempt_number
                    logger.info(f"Submitting insights for route '{payload.route_tag}' (attempt {attempt_number})")
                    data = await self._post(body)
        except httpx.HTTPStatusError as e:
            logger.error(f"Plan service returned {e.response.status_code}: {e.response.text}")
            raise PlanServiceError(f"Plan service returned status {e.response.status_code}") from e
        except httpx.RequestError as e:
            logger.error(f"Request error while contacting plan service: {e}")
            raise PlanServiceError(f"Could not reach plan service: {e}") from e

        edit_url = data.get("editUrl") if isinstance(data, dict) else None
        logger.info(f"Plan service accepted insights for '{payload.route_tag}' (edit_url={'yes' if edit_url else 'no'})")
        return PlanResponse(ok=True, edit_url=edit_url)

    async def _post(self, body: Dict[str, Any]) -> Any:
        async with httpx.AsyncClient(timeout=self.timeout) as client:
            response = await client.post(
                self.base_url,
                json=body,
                headers={'Accept': 'application/json'},
            )
            response.raise_for_status()
            if not response.content:
                return {}
            try:
                return response.json()
            except ValueError:
                # Non-JSON 2xx bodies count as a generic acknowledgment
                return {}
