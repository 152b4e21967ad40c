from pydantic import BaseModel
from typing import Optional
from gift_lookup.models.enums import DisplayFormat, LookupStatus
from gift_lookup.models.lookup import LookupOutcome

class LookupRequest(BaseModel):
    """Decoded request fields. Validation of blank values happens in the normalizer."""
    last_name: Optional[str] = None
    postcode: Optional[str] = None
    format: Optional[str] = None

    @property
    def display_format(self) -> DisplayFormat:
        return resolve_display_format(self.format)

class LookupResponse(BaseModel):
    """Structured payload: category tag and message text only."""
    status: LookupStatus
    message: str = ""

    @classmethod
    def from_outcome(cls, outcome: LookupOutcome) -> "LookupResponse":
        return cls(status=outcome.status, message=outcome.message)

def resolve_display_format(hint: Optional[str]) -> DisplayFormat:
    """Unrecognized or absent hints fall back to the display fragment."""
    if hint and str(hint).strip().lower() == DisplayFormat.STRUCTURED.value:
        return DisplayFormat.STRUCTURED
    return DisplayFormat.DISPLAY
