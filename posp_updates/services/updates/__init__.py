# Update services
from .update_store import SqlUpdateStore, StoreUnavailableError, UpdateStore
from .validation import FIELD_MESSAGES, SubmissionInvalid, validate_submission

__all__ = [
    "SqlUpdateStore",
    "StoreUnavailableError",
    "UpdateStore",
    "FIELD_MESSAGES",
    "SubmissionInvalid",
    "validate_submission"
]
