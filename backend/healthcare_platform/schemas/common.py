"""Shared request/response building blocks: search requests, page envelope, timestamp format."""

from collections.abc import Sequence
from datetime import date, datetime
from typing import Annotated, Any, Generic, Literal, TypeVar

from pydantic import AfterValidator, AliasChoices, BaseModel, ConfigDict, Field, PlainSerializer

from healthcare_platform.core.pagination import PageWindow, page_count
from healthcare_platform.models.shared import ensure_utc


def to_iso_string(value: datetime) -> str:
    """Canonical wire format: UTC, millisecond precision, ``Z`` suffix."""
    utc = ensure_utc(value)
    return utc.strftime("%Y-%m-%dT%H:%M:%S.") + f"{utc.microsecond // 1000:03d}Z"


def to_date_string(value: date) -> str:
    if isinstance(value, datetime):
        value = ensure_utc(value).date()
    return value.isoformat()


# Output timestamps; stored naive values are read as UTC.
IsoDateTime = Annotated[datetime, PlainSerializer(to_iso_string, return_type=str)]
IsoDate = Annotated[date, PlainSerializer(to_date_string, return_type=str)]

# Input timestamps; normalized so the store only ever sees UTC.
UtcDateTime = Annotated[datetime, AfterValidator(ensure_utc)]


class ResponseModel(BaseModel):
    """Base for DTOs mapped from ORM rows.

    Every declared field is always emitted; a NULL column becomes ``null``.
    """

    model_config = ConfigDict(from_attributes=True)


class CreateModel(BaseModel):
    model_config = ConfigDict(use_enum_values=True, validate_default=True)


class UpdateModel(BaseModel):
    """Base for update payloads.

    Fields left out are untouched (``exclude_unset``); an explicit ``null``
    clears the column. Unknown keys, including immutable ones such as ``id`` or
    ``organization_id``, are rejected.
    """

    model_config = ConfigDict(extra="forbid", use_enum_values=True)


class SearchRequest(BaseModel):
    """Paging and sorting fields accepted by every search endpoint."""

    page: int | None = None
    limit: int | None = Field(default=None, validation_alias=AliasChoices("limit", "page_size"))
    sort: str | None = None
    order: Literal["asc", "desc"] | None = None
    include_deleted: bool = False


class Pagination(BaseModel):
    current: int
    limit: int
    records: int
    pages: int


T = TypeVar("T")


class Page(BaseModel, Generic[T]):
    pagination: Pagination
    data: list[T]


def build_page(
    schema: type[BaseModel],
    rows: Sequence[Any],
    total: int,
    window: PageWindow,
) -> dict[str, Any]:
    """Assemble the search envelope from rows fetched with ``window``."""
    return {
        "pagination": Pagination(
            current=window.page,
            limit=window.limit,
            records=total,
            pages=page_count(total, window.limit),
        ),
        "data": [schema.model_validate(row) for row in rows],
    }
