# Update schemas
from .updates import (
    UpdateSubmission,
    UpdateEntry,
    CheckUpdateResponse,
    PushUpdateResponse,
    ErrorResponse
)

__all__ = [
    "UpdateSubmission",
    "UpdateEntry",
    "CheckUpdateResponse",
    "PushUpdateResponse",
    "ErrorResponse"
]
