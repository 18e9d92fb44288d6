"""
Shared schema building blocks: camelCase models, timestamp parsing and the
response envelope.
"""
from datetime import date, datetime
from typing import Annotated, Any, Dict, Generic, List, Optional, TypeVar

from email_validator import EmailNotValidError, validate_email
from pydantic import AfterValidator, BaseModel, BeforeValidator, ConfigDict, Field, HttpUrl, TypeAdapter, ValidationError
from pydantic.alias_generators import to_camel

from ..store.mapping import as_utc

T = TypeVar("T")


def _parse_timestamp(value: Any) -> Any:
    if value is None:
        return value
    if not isinstance(value, (str, datetime, date)):
        raise ValueError("must be an ISO 8601 date or datetime")
    try:
        return as_utc(value)
    except (TypeError, ValueError):
        raise ValueError("must be an ISO 8601 date or datetime") from None


Timestamp = Annotated[datetime, BeforeValidator(_parse_timestamp)]

_http_url = TypeAdapter(HttpUrl)


def _check_email(value: str) -> str:
    try:
        validate_email(value, check_deliverability=False)
    except EmailNotValidError as exc:
        raise ValueError(f"value is not a valid email address: {exc}") from None
    return value


def _check_url(value: str) -> str:
    try:
        _http_url.validate_python(value)
    except ValidationError:
        raise ValueError("must be a valid http or https URL") from None
    return value


# Format-checked strings that are stored exactly as submitted.
Email = Annotated[str, AfterValidator(_check_email)]
WebUrl = Annotated[str, AfterValidator(_check_url)]


class CamelModel(BaseModel):
    """Base model exchanging camelCase keys with API clients."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


class RecordPayload(CamelModel):
    """Request body that is written to a store. Numbers must be finite."""
    model_config = ConfigDict(use_enum_values=True, allow_inf_nan=False)

    def to_record(self, partial: bool = False) -> Dict[str, Any]:
        """
        Dump the payload in record shape.

        Args:
            partial: keep only the fields the caller actually sent
        """
        return self.model_dump(by_alias=True, exclude_unset=partial)


class ApiResponse(BaseModel, Generic[T]):
    """Uniform response envelope."""
    success: bool = Field(..., description="Whether the operation succeeded")
    data: Optional[T] = Field(None, description="Operation result")
    error: Optional[str] = Field(None, description="Human-readable failure message")


class PageData(BaseModel, Generic[T]):
    """One page of a listing."""
    items: List[T] = Field(..., description="Records on this page")
    next: Optional[str] = Field(None, description="Cursor for the following page, null on the last page")


class DeleteResult(BaseModel):
    """Result of a delete operation."""
    id: str = Field(..., description="Deleted record ID")
    deleted: bool = Field(..., description="Whether a record was removed")


def describe_errors(exc: ValidationError) -> str:
    """Flatten validation errors into "field: message" pairs."""
    return format_error_list(exc.errors())


def format_error_list(errors: List[Dict[str, Any]]) -> str:
    parts = []
    for error in errors:
        location = [str(p) for p in error.get("loc", ()) if p not in ("body", "query", "path")]
        field_name = ".".join(location) or "request"
        parts.append(f"{field_name}: {error.get('msg', 'invalid value')}")
    return "; ".join(parts)
