"""
Shared building blocks for resource call wrappers.

Provides:
- ClientFn: the call signature every wrapper depends on
- QueryField / QueryRequest: declarative query-string mapping
- Pagination and ListResponse: cursor-based listing shapes
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Mapping, Sequence
from dataclasses import dataclass
from typing import Any, ClassVar, Generic, Literal, NotRequired, Protocol, TypedDict, TypeVar
from urllib.parse import quote

import httpx
from pydantic import BaseModel, ConfigDict, Field

T = TypeVar("T")

Id = str


class ClientFn(Protocol):
    """Anything callable like eventline.transport.Client."""

    def __call__(
        self, verb: Literal["GET", "POST", "PUT", "DELETE"], path: str, body: str | None = None
    ) -> Awaitable[Any]: ...


def _is_set(value: Any) -> bool:
    return value is not None


@dataclass(frozen=True)
class QueryField:
    """Maps a request attribute to a query-string parameter.

    Attributes:
        attribute: Attribute name on the request model
        key: Query parameter name
        present: Predicate deciding whether the value is sent
    """

    attribute: str
    key: str
    present: Callable[[Any], bool] = _is_set


def build_query(request: Any, fields: Sequence[QueryField]) -> dict[str, Any]:
    """Collect the query parameters of a request.

    Fields whose value fails the presence predicate are omitted entirely.
    """
    query: dict[str, Any] = {}
    for field in fields:
        value = getattr(request, field.attribute)
        if field.present(value):
            query[field.key] = value
    return query


def with_query(path: str, query: Mapping[str, Any]) -> str:
    """Append an encoded query string to a path, if there is anything to encode."""
    if not query:
        return path
    return f"{path}?{httpx.QueryParams(dict(query))}"


def path_segment(value: Any) -> str:
    """Encode a value for use as a single path segment."""
    return quote(str(value), safe="")


class QueryRequest(BaseModel):
    """Base class for requests serialized into a query string."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    query_fields: ClassVar[tuple[QueryField, ...]] = ()

    def to_query(self) -> dict[str, Any]:
        """Return the query parameters for this request."""
        return build_query(self, self.query_fields)


PAGINATION_QUERY_FIELDS: tuple[QueryField, ...] = (
    QueryField("before", "before"),
    QueryField("after", "after"),
    QueryField("size", "size"),
    QueryField("reverse", "reverse"),
    QueryField("sort", "sort"),
    QueryField("order", "order"),
)


class Pagination(QueryRequest):
    """Cursor pagination parameters.

    All fields are optional; unset fields never reach the query string.
    """

    before: Id | None = Field(default=None, description="Return elements before this cursor")
    after: Id | None = Field(default=None, description="Return elements after this cursor")
    size: int | None = Field(default=None, ge=1, description="Maximum number of elements")
    reverse: bool | None = Field(default=None, description="Reverse the listing order")
    sort: str | None = Field(default=None, description="Sort key")
    order: Literal["asc", "desc"] | None = Field(default=None, description="Sort order")

    query_fields: ClassVar[tuple[QueryField, ...]] = PAGINATION_QUERY_FIELDS


class Cursor(TypedDict):
    """Position of an adjacent page."""

    before: NotRequired[Id]
    after: NotRequired[Id]
    size: NotRequired[int]
    sort: NotRequired[str]
    order: NotRequired[str]


class ListResponse(TypedDict, Generic[T]):
    """A page of elements."""

    elements: list[T]
    next: NotRequired[Cursor]
    previous: NotRequired[Cursor]
