# posp_updates/services/updates/validation.py
from typing import Any, Dict, List, Mapping

from pydantic import ValidationError

from posp_updates.schemas.updates import UpdateSubmission

# Message shown to the operator for each field, in form order
FIELD_MESSAGES = {
    "devicename": "Please enter the device name.",
    "datetime": "Please enter the datetime.",
    "filename": "Please enter the file name.",
    "id": "Please enter the id.",
    "romtype": "Please enter the release type.",
    "size": "Please enter the file size.",
    "url": "Please enter a valid URL.",
    "version": "Please enter the version.",
}


class SubmissionInvalid(Exception):
    """Raised when a submitted update fails one or more field rules"""

    def __init__(self, errors: List[Dict[str, Any]]):
        self.errors = errors
        fields = ", ".join(e["field"] for e in errors)
        super().__init__(f"Invalid submission: {fields}")

    @property
    def fields(self) -> List[str]:
        return [e["field"] for e in self.errors]


def validate_submission(raw: Mapping[str, Any]) -> UpdateSubmission:
    """
    Validate a raw submitted field set.

    Every field is checked; all failures are collected into a single
    SubmissionInvalid, one entry per field, in FIELD_MESSAGES order.
    """
    try:
        return UpdateSubmission.model_validate(dict(raw))
    except ValidationError as e:
        failed = {str(err["loc"][0]) for err in e.errors() if err.get("loc")}
        errors = [
            {"field": field, "message": message, "value": raw.get(field, "")}
            for field, message in FIELD_MESSAGES.items()
            if field in failed
        ]
        raise SubmissionInvalid(errors) from e
