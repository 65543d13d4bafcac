"""Responses from the remote signing endpoint."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, List, Optional, Union


@dataclass(frozen=True)
class Link:
    """A help link attached to an error."""

    description: str
    url: str


@dataclass(frozen=True)
class Details:
    """Extra detail attached to an error."""

    type_: str
    links: List[Link]


@dataclass(frozen=True)
class SignatureError:
    """The error body of a failed signing request."""

    code: int
    message: str
    status: str
    details: Optional[List[Details]] = None


@dataclass(frozen=True)
class SuccessResponse:
    """A successful signing response."""

    key_id: str
    signature: str


@dataclass(frozen=True)
class FailureResponse:
    """A failed signing response."""

    error: SignatureError


def _string(data: Any, key: str) -> str:
    value = data.get(key) if isinstance(data, dict) else None
    if not isinstance(value, str):
        raise ValueError(f"missing or invalid string field `{key}`")
    return value


def _link(data: Any) -> Link:
    return Link(description=_string(data, "description"), url=_string(data, "url"))


def _details(data: Any) -> Details:
    links = data.get("links") if isinstance(data, dict) else None
    if not isinstance(links, list):
        raise ValueError("missing or invalid field `links`")
    return Details(type_=_string(data, "@type"), links=[_link(item) for item in links])


def _signature_error(data: Any) -> SignatureError:
    if not isinstance(data, dict):
        raise ValueError("`error` must be an object")
    code = data.get("code")
    if isinstance(code, bool) or not isinstance(code, int) or not 0 <= code <= 0xFFFF:
        raise ValueError("missing or invalid field `code`")
    raw_details = data.get("details")
    if raw_details is None:
        details = None
    elif isinstance(raw_details, list):
        details = [_details(item) for item in raw_details]
    else:
        raise ValueError("invalid field `details`")
    return SignatureError(
        code=code,
        message=_string(data, "message"),
        status=_string(data, "status"),
        details=details,
    )


def parse_signature_response(data: Any) -> Union[SuccessResponse, FailureResponse]:
    """Interpret a decoded JSON body as a success or a failure response."""
    try:
        return SuccessResponse(
            key_id=_string(data, "keyId"), signature=_string(data, "signature")
        )
    except ValueError:
        pass
    try:
        if not isinstance(data, dict) or "error" not in data:
            raise ValueError("missing field `error`")
        return FailureResponse(error=_signature_error(data["error"]))
    except ValueError as exc:
        raise ValueError(
            "data did not match any variant of the signature response"
        ) from exc