"""Request and response bodies for listing, composing and rewriting objects."""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from enum import Enum
from typing import Any, Dict, List, Optional

from gcstore.object import Object


def _require(data: Any, key: str) -> Any:
    if not isinstance(data, dict) or key not in data:
        raise ValueError(f"missing field `{key}`")
    return data[key]


def _string(data: Any, key: str) -> str:
    value = _require(data, key)
    if not isinstance(value, str):
        raise ValueError(f"invalid type for field `{key}`: expected a string")
    return value


def _string_list(data: Dict[str, Any], key: str) -> List[str]:
    value = data.get(key)
    if value is None:
        return []
    if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
        raise ValueError(f"invalid type for field `{key}`: expected a list of strings")
    return list(value)


@dataclass
class ObjectPrecondition:
    """A condition a source object must meet for a compose to go ahead."""

    if_generation_match: int

    def to_dict(self) -> Dict[str, Any]:
        """The precondition in its API form."""
        return {"ifGenerationMatch": self.if_generation_match}


@dataclass
class SourceObject:
    """One of the objects concatenated by a compose request."""

    name: str
    generation: Optional[int] = None
    object_preconditions: Optional[ObjectPrecondition] = None

    def to_dict(self) -> Dict[str, Any]:
        """The source object in its API form."""
        return {
            "name": self.name,
            "generation": self.generation,
            "objectPreconditions": (
                self.object_preconditions.to_dict()
                if self.object_preconditions is not None
                else None
            ),
        }


@dataclass
class ComposeRequest:
    """A request that concatenates several objects into one."""

    source_objects: List[SourceObject]
    destination: Optional[Object] = None
    kind: str = "storage#composeRequest"

    def to_dict(self) -> Dict[str, Any]:
        """The request in its API form."""
        return {
            "kind": self.kind,
            "sourceObjects": [source.to_dict() for source in self.source_objects],
            "destination": (
                self.destination.to_dict() if self.destination is not None else None
            ),
        }


class Projection(str, Enum):
    """Which properties a listing returns."""

    FULL = "full"
    NO_ACL = "noAcl"


_QUERY_NAMES = {
    "delimiter": "delimiter",
    "end_offset": "endOffset",
    "include_trailing_delimiter": "includeTrailingDelimiter",
    "max_results": "maxResults",
    "page_token": "pageToken",
    "prefix": "prefix",
    "projection": "projection",
    "start_offset": "startOffset",
    "versions": "versions",
}


def _query_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, Projection):
        return value.value
    return str(value)


@dataclass
class ListRequest:
    """Parameters of an object listing; unset fields are left out of the query."""

    delimiter: Optional[str] = None
    end_offset: Optional[str] = None
    include_trailing_delimiter: Optional[bool] = None
    max_results: Optional[int] = None
    page_token: Optional[str] = None
    prefix: Optional[str] = None
    projection: Optional[Projection] = None
    start_offset: Optional[str] = None
    versions: Optional[bool] = None

    def to_query(self) -> Dict[str, str]:
        """The query parameters of this request, in field order."""
        if self.max_results is not None and self.max_results < 0:
            raise ValueError(
                f"max_results may not be negative, but was {self.max_results}"
            )
        query: Dict[str, str] = {}
        for item in fields(self):
            value = getattr(self, item.name)
            if value is None:
                continue
            if item.name == "projection":
                value = Projection(value)
            query[_QUERY_NAMES[item.name]] = _query_value(value)
        return query


@dataclass
class ObjectList:
    """One page of an object listing."""

    kind: str = ""
    items: List[Object] = field(default_factory=list)
    prefixes: List[str] = field(default_factory=list)
    next_page_token: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ObjectList":
        """Build a page from a decoded API response."""
        raw_items = data.get("items") if isinstance(data, dict) else None
        if raw_items is None:
            raw_items = []
        if not isinstance(raw_items, list):
            raise ValueError("invalid type for field `items`: expected a list")
        token = data.get("nextPageToken")
        if token is not None and not isinstance(token, str):
            raise ValueError("invalid type for field `nextPageToken`")
        return cls(
            kind=_string(data, "kind"),
            items=[Object.from_dict(item) for item in raw_items],
            prefixes=_string_list(data, "prefixes"),
            next_page_token=token,
        )


@dataclass
class RewriteResponse:
    """The answer to a rewrite request."""

    kind: str
    total_bytes_rewritten: str
    object_size: str
    done: bool
    resource: Object

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "RewriteResponse":
        """Build a response from a decoded API response."""
        done = _require(data, "done")
        if not isinstance(done, bool):
            raise ValueError("invalid type for field `done`: expected a boolean")
        return cls(
            kind=_string(data, "kind"),
            total_bytes_rewritten=_string(data, "totalBytesRewritten"),
            object_size=_string(data, "objectSize"),
            done=done,
            resource=Object.from_dict(_require(data, "resource")),
        )