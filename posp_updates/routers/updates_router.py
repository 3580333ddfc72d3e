# posp_updates/routers/updates_router.py
from fastapi import (
    APIRouter,
    Depends,
    Query,
    Request,
    status
)
from fastapi.responses import HTMLResponse, JSONResponse
from starlette.concurrency import run_in_threadpool
from datetime import datetime, timezone
from typing import Any, Dict, Tuple
import json
import logging

from posp_updates.db.models import UpdateRecord
from posp_updates.services.auth import require_operator
from posp_updates.services.updates import (
    StoreUnavailableError,
    SubmissionInvalid,
    UpdateStore,
    validate_submission
)
from posp_updates.schemas.updates import (
    CheckUpdateResponse,
    ErrorResponse,
    PushUpdateResponse,
    UpdateEntry
)

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Updates"])

DEVICE_NOT_FOUND = "DeviceNotFound"
STORE_UNAVAILABLE = "StoreUnavailable"
VALIDATION_FAILED = "ValidationFailed"


def get_update_store(request: Request) -> UpdateStore:
    """Dependency returning the store opened at startup"""
    return request.app.state.update_store


def audit_log(action: str, operator: str, details: Dict[str, Any], success: bool = True):
    """Audit line for write operations"""
    audit_entry = {
        'timestamp': datetime.now(timezone.utc).isoformat(),
        'action': action,
        'operator': operator,
        'success': success,
        'details': details
    }
    logger.info(f"AUDIT: {json.dumps(audit_entry)}")


def render_form(request: Request, errors=None, data=None, status_code: int = 200):
    settings = request.app.state.settings
    return request.app.state.templates.TemplateResponse(
        request,
        "form.html",
        {
            "title": settings.APP_TITLE,
            "errors": errors or [],
            "data": data or {}
        },
        status_code=status_code
    )


def error_response(status_code: int, error: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": error})


async def read_submission(request: Request) -> Tuple[Dict[str, Any], bool]:
    """Submitted fields and whether they came as JSON"""
    content_type = request.headers.get("content-type", "")
    if content_type.startswith("application/json"):
        try:
            payload = await request.json()
        except ValueError:
            payload = {}
        return (payload if isinstance(payload, dict) else {}), True

    form = await request.form()
    return {key: value for key, value in form.items() if isinstance(value, str)}, False


@router.get("/", response_class=HTMLResponse)
async def submission_form(
    request: Request,
    _: str = Depends(require_operator)
):
    """Form for publishing an update (operator only)"""
    return render_form(request)


@router.get(
    "/checkUpdate",
    response_model=CheckUpdateResponse,
    responses={404: {"model": ErrorResponse}, 503: {"model": ErrorResponse}}
)
def check_update(
    request: Request,
    device: str = Query("", description="The user's device"),
    channel: str = Query("", alias="type", description="The release type"),
    store: UpdateStore = Depends(get_update_store)
):
    """
    Check if updates exist

    Returns every update published for the device on the given release
    channel. Build date and size are numbers.
    """
    try:
        records = store.find(device, channel)
    except StoreUnavailableError:
        if request.app.state.settings.STRICT_STORAGE_ERRORS:
            return error_response(status.HTTP_503_SERVICE_UNAVAILABLE, STORE_UNAVAILABLE)
        return error_response(status.HTTP_404_NOT_FOUND, DEVICE_NOT_FOUND)

    if not records:
        logger.info(f"No updates for device={device}, type={channel}")
        return error_response(status.HTTP_404_NOT_FOUND, DEVICE_NOT_FOUND)

    return CheckUpdateResponse(
        response=[UpdateEntry.model_validate(record) for record in records]
    )


@router.post(
    "/pushUpdate",
    response_model=PushUpdateResponse,
    responses={422: {"model": ErrorResponse}, 503: {"model": ErrorResponse}}
)
async def push_update(
    request: Request,
    operator: str = Depends(require_operator),
    store: UpdateStore = Depends(get_update_store)
):
    """
    Publish an update (operator only)

    Accepts a form or JSON body. Invalid form posts get the form back with
    the errors listed; invalid JSON posts get the errors as JSON.
    """
    raw, is_json = await read_submission(request)

    try:
        submission = validate_submission(raw)
    except SubmissionInvalid as e:
        logger.info(f"Rejected update from {operator}: {e}")
        if is_json:
            return JSONResponse(
                status_code=422,
                content={"error": VALIDATION_FAILED, "errors": e.errors}
            )
        return render_form(request, errors=e.errors, data=raw,
                           status_code=422)

    record = UpdateRecord(**submission.model_dump())
    details = {
        "devicename": submission.devicename,
        "romtype": submission.romtype,
        "id": submission.id
    }

    try:
        await run_in_threadpool(store.insert, record)
    except StoreUnavailableError:
        audit_log("push_update", operator, details, success=False)
        if request.app.state.settings.STRICT_STORAGE_ERRORS:
            return error_response(status.HTTP_503_SERVICE_UNAVAILABLE, STORE_UNAVAILABLE)
        # Legacy behaviour: failure stays in the logs
        return PushUpdateResponse(response="Successfully saved")

    audit_log("push_update", operator, details)
    return PushUpdateResponse(response="Successfully saved")
