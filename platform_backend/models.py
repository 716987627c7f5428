"""Typed request bodies, one per write endpoint.

Field names are snake_case in Python and camelCase on the wire
(``sub_headline`` <-> ``subHeadline``); both spellings are accepted on input.
"""

from datetime import datetime
from enum import Enum
from typing import Annotated, ClassVar, Optional

from flask import request
from pydantic import BaseModel, ConfigDict, Field, StringConstraints, field_validator
from pydantic import ValidationError as PydanticValidationError
from pydantic.alias_generators import to_camel

from .database import MAX_ROW_ID
from .errors import ValidationError
from .security import is_valid_email

DEFAULT_AUTHOR = "Citizen Reporter"

RequiredText = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]

MISSING_ERROR_TYPES = {"missing", "string_too_short"}


class ArticleStatus(str, Enum):
    PENDING = "pending"
    PUBLISHED = "published"
    REJECTED = "rejected"


class AdStatus(str, Enum):
    PENDING = "pending"
    ACTIVE = "active"
    REJECTED = "rejected"


class RequestModel(BaseModel):
    """Base for request bodies: camelCase aliases, unknown keys ignored."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")

    required_message: ClassVar[str] = "Missing required fields"


class EmailRequest(RequestModel):
    """Base for bodies carrying a contact email."""

    email: RequiredText

    @field_validator("email")
    @classmethod
    def email_must_be_valid(cls, value: str) -> str:
        if not is_valid_email(value):
            raise ValueError("Invalid email address")
        return value


class ArticleFields(RequestModel):
    """Fields shared by article submission and full update."""

    title: RequiredText
    sub_headline: Optional[str] = ""
    category: RequiredText
    author: Optional[str] = DEFAULT_AUTHOR
    image: Optional[str] = None
    excerpt: Optional[str] = None
    content: RequiredText

    required_message: ClassVar[str] = "Title, category, and content are required"

    @field_validator("author")
    @classmethod
    def default_author(cls, value: Optional[str]) -> str:
        if value is None or not value.strip():
            return DEFAULT_AUTHOR
        return value.strip()

    @field_validator("sub_headline")
    @classmethod
    def default_sub_headline(cls, value: Optional[str]) -> str:
        return value or ""


class ArticleSubmission(ArticleFields):
    """POST /api/articles"""

    status: Optional[ArticleStatus] = ArticleStatus.PENDING
    date: Optional[datetime] = None

    @field_validator("status", mode="before")
    @classmethod
    def default_status(cls, value):
        return value or ArticleStatus.PENDING


class ArticleUpdate(ArticleFields):
    """PUT /api/articles/<id>: every editable field is overwritten."""

    is_breaking: Optional[bool] = False

    @field_validator("is_breaking")
    @classmethod
    def default_is_breaking(cls, value: Optional[bool]) -> bool:
        return bool(value)


class ArticleApproval(RequestModel):
    """PATCH /api/admin/articles/<id>/approve (body optional)"""

    is_breaking: Optional[bool] = False

    @field_validator("is_breaking")
    @classmethod
    def default_is_breaking(cls, value: Optional[bool]) -> bool:
        return bool(value)


class AdSubmission(EmailRequest):
    """POST /api/ads"""

    client_name: RequiredText
    email: RequiredText
    plan: RequiredText
    amount: Optional[float] = Field(default=None, ge=0, allow_inf_nan=False)
    receipt_image: Optional[str] = None
    ad_image: Optional[str] = None
    ad_content: Optional[str] = None
    ad_url: Optional[str] = None
    ad_headline: Optional[str] = None
    ad_content_file: Optional[str] = None
    date_submitted: Optional[datetime] = None

    required_message: ClassVar[str] = "Client name, email, and plan are required"


class CommentSubmission(EmailRequest):
    """POST /api/comments"""

    article_id: int = Field(ge=1, le=MAX_ROW_ID)
    author: RequiredText
    email: RequiredText
    content: RequiredText

    required_message: ClassVar[str] = "Article, author, email, and content are required"


class SupportSubmission(EmailRequest):
    """POST /api/support"""

    name: RequiredText
    email: RequiredText
    subject: Optional[str] = None
    message: RequiredText

    required_message: ClassVar[str] = "Name, email, and message are required"


def _is_missing(error: dict) -> bool:
    if error["type"] in MISSING_ERROR_TYPES:
        return True
    # explicit null sent for a required field
    return error.get("input", "") is None and error["type"].endswith("_type")


def _describe(error: dict) -> str:
    ctx_error = error.get("ctx", {}).get("error")
    return str(ctx_error) if ctx_error else error["msg"]


def validation_error(model_cls, exc: PydanticValidationError) -> ValidationError:
    """Collapse pydantic's report into a single 400 with per-field details."""
    details = []
    missing = False
    for error in exc.errors():
        field = ".".join(str(part) for part in error["loc"])
        missing = missing or _is_missing(error)
        details.append({"field": field, "message": _describe(error)})

    if missing:
        message = model_cls.required_message
    else:
        message = f"Invalid field '{details[0]['field']}': {details[0]['message']}"
    return ValidationError(message, details=details)


def parse_payload(model_cls, data: dict):
    """Validate a JSON body against a request model or raise ValidationError."""
    try:
        return model_cls.model_validate(data)
    except PydanticValidationError as exc:
        raise validation_error(model_cls, exc) from exc


def json_body(required: bool = True) -> dict:
    """Read the request's JSON object; optional bodies may be absent."""
    if not request.is_json:
        if required:
            raise ValidationError("Content-Type must be application/json")
        return {}

    data = request.get_json(silent=True)
    if data is None:
        if required:
            raise ValidationError("Invalid JSON")
        return {}
    if not isinstance(data, dict):
        raise ValidationError("JSON body must be an object")
    return data
