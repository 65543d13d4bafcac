"""V4 signed URLs for objects stored in Cloud Storage."""

from __future__ import annotations

import hashlib
from datetime import datetime, timezone
from typing import Mapping, Optional

from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import padding, rsa

from gcstore.service_account import ServiceAccount

MAX_DURATION = 604800
SIGNING_ALGORITHM = "GOOG4-RSA-SHA256"
HOST = "storage.googleapis.com"
_DATETIME_FORMAT = "%Y%m%dT%H%M%SZ"

_ALNUM = frozenset(
    b"ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789"
)
_SAFE = _ALNUM | frozenset(b"*-._")
_SAFE_NOSLASH = _SAFE | frozenset(b"/~")


class SigningError(Exception):
    """Raised when a URL cannot be signed."""


def _encode(value: str, safe: frozenset) -> str:
    return "".join(
        chr(byte) if byte in safe else f"%{byte:02X}" for byte in value.encode("utf-8")
    )


def percent_encode(value: str) -> str:
    """Percent-encode every byte except ASCII letters, digits and ``*-._``."""
    return _encode(value, _SAFE)


def percent_encode_noslash(value: str) -> str:
    """Like :func:`percent_encode`, but leave ``/`` and ``~`` untouched."""
    return _encode(value, _SAFE_NOSLASH)


def _as_utc(date: datetime) -> datetime:
    if date.tzinfo is None:
        return date.replace(tzinfo=timezone.utc)
    return date.astimezone(timezone.utc)


def _format_datetime(date: datetime) -> str:
    return _as_utc(date).strftime(_DATETIME_FORMAT)


def credential_scope(date: datetime) -> str:
    """The credential scope for a request issued at ``date``."""
    return f"{_as_utc(date).strftime('%Y%m%d')}/henk/storage/goog4_request"


def canonical_query_string(
    date: datetime,
    expires: int,
    signed_headers: str,
    client_email: str,
    content_disposition: Optional[str] = None,
) -> str:
    """The canonical query string of a signed URL."""
    credential = f"{client_email}/{credential_scope(date)}"
    query = (
        f"X-Goog-Algorithm={SIGNING_ALGORITHM}&"
        f"X-Goog-Credential={percent_encode(credential)}&"
        f"X-Goog-Date={_format_datetime(date)}&"
        f"X-Goog-Expires={expires}&"
        f"X-Goog-SignedHeaders={percent_encode(signed_headers)}"
    )
    if content_disposition is not None:
        query += f"&response-content-disposition={content_disposition}"
    return query


def canonical_request(
    path: str, query_string: str, http_verb: str, headers: str, signed_headers: str
) -> str:
    """The canonical request whose hash is signed."""
    return "\n".join(
        [http_verb, path, query_string, headers, "", signed_headers, "UNSIGNED-PAYLOAD"]
    )


def rsa_pkcs1_sha256(private_key: str, message: str) -> bytes:
    """Sign ``message`` with an RSA key in PEM form using PKCS#1 v1.5 and SHA-256."""
    try:
        key = serialization.load_pem_private_key(private_key.encode("utf-8"), None)
    except (ValueError, TypeError, UnsupportedAlgorithm) as exc:
        raise SigningError(f"invalid private key: {exc}") from exc
    if not isinstance(key, rsa.RSAPrivateKey):
        raise SigningError("private key is not an RSA key")
    return key.sign(message.encode("utf-8"), padding.PKCS1v15(), hashes.SHA256())


def sign_url(
    service_account: ServiceAccount,
    bucket: str,
    path: str,
    duration: int,
    http_verb: str = "GET",
    content_disposition: Optional[str] = None,
    custom_metadata: Optional[Mapping[str, str]] = None,
    now: Optional[datetime] = None,
) -> str:
    """Build a signed URL valid for ``duration`` seconds."""
    if duration > MAX_DURATION:
        raise SigningError(
            f"duration may not be greater than {MAX_DURATION}, but was {duration}"
        )
    issue_date = _as_utc(now) if now is not None else datetime.now(timezone.utc)

    headers = [("host", HOST)]
    headers.extend(
        (f"x-goog-meta-{key}", value) for key, value in (custom_metadata or {}).items()
    )
    headers.sort(key=lambda item: item[0])
    canonical_headers = "\n".join(
        f"{key.lower()}:{value.lower()}" for key, value in headers
    )
    signed_headers = ";".join(key.lower() for key, _ in headers)

    resource = f"/{bucket}/{percent_encode_noslash(path)}"
    query = canonical_query_string(
        issue_date,
        duration,
        signed_headers,
        service_account.client_email,
        content_disposition,
    )
    request = canonical_request(
        resource, query, http_verb, canonical_headers, signed_headers
    )
    hashed_request = hashlib.sha256(request.encode("utf-8")).hexdigest()

    string_to_sign = "\n".join(
        [
            SIGNING_ALGORITHM,
            _format_datetime(issue_date),
            credential_scope(issue_date),
            hashed_request,
        ]
    )
    signature = rsa_pkcs1_sha256(service_account.private_key, string_to_sign).hex()
    return f"https://{HOST}{resource}?{query}&X-Goog-Signature={signature}"