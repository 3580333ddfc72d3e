# Database models
from .updates.update_record import MAX_BIGINT, MAX_LENGTHS, UpdateRecord

__all__ = [
    "MAX_BIGINT",
    "MAX_LENGTHS",
    "UpdateRecord"
]
