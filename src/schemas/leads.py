import re
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


def is_valid_email(value: Any) -> bool:
    return isinstance(value, str) and EMAIL_PATTERN.fullmatch(value) is not None


class LeadRequest(BaseModel):
    # Left loose so any body with a bad email gets the lead-specific 400 rather than a schema 422
    email: Optional[Any] = None
    slug: Optional[Any] = None
    answers: Optional[Any] = None


class LeadResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    ok: bool = True
    lead_id: str = Field(..., alias="leadId")
