# posp_updates/schemas/updates/updates.py
import re
from typing import Any, List

from pydantic import AnyUrl, BaseModel, ConfigDict, Field, TypeAdapter, ValidationError, field_validator

from posp_updates.db.models import MAX_BIGINT, MAX_LENGTHS

ALLOWED_URL_SCHEMES = ("http", "https", "ftp")

_INTEGER_RE = re.compile(r"^[0-9]+$")
_url_adapter = TypeAdapter(AnyUrl)


class UpdateSubmission(BaseModel):
    """Request schema for publishing an update (form or JSON body)"""
    devicename: str = Field(..., max_length=MAX_LENGTHS["devicename"], description="Device codename, e.g., 'beryllium'")
    datetime: int = Field(..., description="Build date as UNIX timestamp")
    filename: str = Field(..., max_length=MAX_LENGTHS["filename"], description="Name of the file to be downloaded")
    id: str = Field(..., max_length=MAX_LENGTHS["id"], description="String that identifies the build")
    romtype: str = Field(..., max_length=MAX_LENGTHS["romtype"], description="Release channel, e.g., 'weekly'")
    size: int = Field(..., description="Size of the file in bytes")
    url: str = Field(..., max_length=MAX_LENGTHS["url"], description="URL of the file to be downloaded")
    version: str = Field(..., max_length=MAX_LENGTHS["version"], description="Version to be compared against a prop")

    model_config = ConfigDict(extra="ignore")

    @field_validator("devicename", "filename", "id", "romtype", "version", "url", mode="before")
    @classmethod
    def non_empty_text(cls, value: Any) -> str:
        if isinstance(value, bool):
            raise ValueError("must be text")
        if isinstance(value, (int, float)):
            value = str(value)
        if not isinstance(value, str):
            raise ValueError("must be text")
        # Stored verbatim, whitespace-only counts as empty
        if not value.strip():
            raise ValueError("must not be empty")
        return value

    @field_validator("datetime", "size", mode="before")
    @classmethod
    def whole_number(cls, value: Any) -> int:
        if isinstance(value, bool):
            raise ValueError("must be numeric")
        if isinstance(value, int):
            number = value
        elif isinstance(value, str) and _INTEGER_RE.match(value.strip()):
            number = int(value.strip())
        else:
            raise ValueError("must be numeric")
        if number < 0 or number > MAX_BIGINT:
            raise ValueError("out of range")
        return number

    @field_validator("url")
    @classmethod
    def well_formed_url(cls, value: str) -> str:
        if "://" not in value or any(c.isspace() for c in value):
            raise ValueError("must be an absolute URL")
        try:
            parsed = _url_adapter.validate_python(value)
        except ValidationError:
            raise ValueError("must be an absolute URL")
        if parsed.scheme not in ALLOWED_URL_SCHEMES or not parsed.host:
            raise ValueError("must be an http, https or ftp URL")
        return value


class UpdateEntry(BaseModel):
    """One update as returned by /checkUpdate"""
    datetime: int
    filename: str
    id: str
    romtype: str
    size: int
    url: str
    version: str

    model_config = ConfigDict(from_attributes=True)


class CheckUpdateResponse(BaseModel):
    """Response schema for /checkUpdate"""
    response: List[UpdateEntry]


class PushUpdateResponse(BaseModel):
    """Response schema for a saved update"""
    response: str


class ErrorResponse(BaseModel):
    """Error body, e.g. {"error": "DeviceNotFound"}"""
    error: str
