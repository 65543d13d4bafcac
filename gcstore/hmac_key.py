"""HMAC keys and their metadata."""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Any, Dict, List, Union

_RFC3339 = re.compile(
    r"^(\d{4})-(\d{2})-(\d{2})[Tt](\d{2}):(\d{2}):(\d{2})(?:\.(\d+))?"
    r"([Zz]|[+-]\d{2}:\d{2})$"
)


def _parse_rfc3339(value: Any) -> datetime:
    if not isinstance(value, str):
        raise ValueError(f"expected an RFC 3339 timestamp, got {value!r}")
    match = _RFC3339.match(value)
    if match is None:
        raise ValueError(f"invalid RFC 3339 timestamp: {value!r}")
    year, month, day, hour, minute, second, fraction, offset = match.groups()
    micros = int((fraction or "0")[:6].ljust(6, "0"))
    if offset in ("Z", "z"):
        tz = timezone.utc
    else:
        sign = -1 if offset[0] == "-" else 1
        hours, minutes = int(offset[1:3]), int(offset[4:6])
        tz = timezone(sign * timedelta(hours=hours, minutes=minutes))
    return datetime(
        int(year), int(month), int(day), int(hour), int(minute), int(second), micros, tz
    )


def _format_rfc3339(value: datetime) -> str:
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    text = value.strftime("%Y-%m-%dT%H:%M:%S")
    if value.microsecond:
        text += "." + f"{value.microsecond:06d}".rstrip("0")
    offset = value.utcoffset() or timedelta(0)
    if offset == timedelta(0):
        return text + "Z"
    sign = "-" if offset < timedelta(0) else "+"
    minutes = abs(int(offset.total_seconds())) // 60
    return f"{text}{sign}{minutes // 60:02d}:{minutes % 60:02d}"


def _field(data: Any, key: str, kind: type = str) -> Any:
    if not isinstance(data, dict) or key not in data:
        raise ValueError(f"missing field `{key}`")
    value = data[key]
    if not isinstance(value, kind):
        raise ValueError(f"invalid type for field `{key}`")
    return value


class HmacState(str, Enum):
    """The state of an HMAC key."""

    ACTIVE = "ACTIVE"
    INACTIVE = "INACTIVE"
    DELETED = "DELETED"


@dataclass
class HmacMeta:
    """Metadata of an HMAC key, without its secret."""

    kind: str
    id: str
    self_link: str
    access_id: str
    project_id: str
    service_account_email: str
    state: HmacState
    time_created: datetime
    updated: datetime
    etag: str

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "HmacMeta":
        """Build metadata from a decoded API response."""
        state_value = _field(data, "state")
        try:
            state = HmacState(state_value)
        except ValueError as exc:
            raise ValueError(f"unknown HMAC key state: {state_value!r}") from exc
        return cls(
            kind=_field(data, "kind"),
            id=_field(data, "id"),
            self_link=_field(data, "selfLink"),
            access_id=_field(data, "accessId"),
            project_id=_field(data, "projectId"),
            service_account_email=_field(data, "serviceAccountEmail"),
            state=state,
            time_created=_parse_rfc3339(_field(data, "timeCreated")),
            updated=_parse_rfc3339(_field(data, "updated")),
            etag=_field(data, "etag"),
        )

    def to_dict(self) -> Dict[str, Any]:
        """The metadata in its API form."""
        return {
            "kind": self.kind,
            "id": self.id,
            "selfLink": self.self_link,
            "accessId": self.access_id,
            "projectId": self.project_id,
            "serviceAccountEmail": self.service_account_email,
            "state": HmacState(self.state).value,
            "timeCreated": _format_rfc3339(self.time_created),
            "updated": _format_rfc3339(self.updated),
            "etag": self.etag,
        }


@dataclass
class HmacKey:
    """An HMAC key with its secret, as returned on creation."""

    kind: str
    metadata: HmacMeta
    secret: str

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "HmacKey":
        """Build a key from a decoded API response."""
        return cls(
            kind=_field(data, "kind"),
            metadata=HmacMeta.from_dict(_field(data, "metadata", dict)),
            secret=_field(data, "secret"),
        )

    def to_dict(self) -> Dict[str, Any]:
        """The key in its API form."""
        return {
            "kind": self.kind,
            "metadata": self.metadata.to_dict(),
            "secret": self.secret,
        }


def parse_hmac_list(data: Dict[str, Any]) -> List[HmacMeta]:
    """Return the metadata entries of a list response."""
    items = _field(data, "items", list)
    return [HmacMeta.from_dict(item) for item in items]


def update_request_body(state: Union[HmacState, str]) -> Dict[str, str]:
    """The request body that sets a key to ``state``."""
    return {"state": HmacState(state).value}