"""Objects stored in a bucket, and signed URLs that grant access to them."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, List, Mapping, Optional, Tuple

from gcstore.hmac_key import _format_rfc3339, _parse_rfc3339
from gcstore.service_account import ServiceAccount
from gcstore.signing import SigningError, sign_url


def _require(data: Any, key: str) -> Any:
    if not isinstance(data, dict) or key not in data:
        raise ValueError(f"missing field `{key}`")
    return data[key]


def _string(data: Any, key: str) -> str:
    value = _require(data, key)
    if not isinstance(value, str):
        raise ValueError(f"invalid type for field `{key}`: expected a string")
    return value


def _optional(data: Dict[str, Any], key: str, kind: type) -> Any:
    value = data.get(key)
    if value is None:
        return None
    if kind is int and isinstance(value, bool):
        raise ValueError(f"invalid type for field `{key}`")
    if not isinstance(value, kind):
        raise ValueError(f"invalid type for field `{key}`")
    return value


def _number(value: Any, key: str) -> int:
    if isinstance(value, bool):
        raise ValueError(f"invalid number for field `{key}`: {value!r}")
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError as exc:
            raise ValueError(f"invalid number for field `{key}`: {value!r}") from exc
    raise ValueError(f"invalid number for field `{key}`: {value!r}")


def _optional_time(data: Dict[str, Any], key: str) -> Optional[datetime]:
    value = data.get(key)
    if value is None:
        return None
    return _parse_rfc3339(value)


def _format_optional_time(value: Optional[datetime]) -> Optional[str]:
    return None if value is None else _format_rfc3339(value)


def _string_map(data: Dict[str, Any], key: str) -> Optional[Dict[str, str]]:
    value = data.get(key)
    if value is None:
        return None
    if not isinstance(value, dict) or not all(
        isinstance(k, str) and isinstance(v, str) for k, v in value.items()
    ):
        raise ValueError(f"invalid type for field `{key}`: expected a string map")
    return dict(value)


@dataclass
class CustomerEncryption:
    """How an object is encrypted with a customer-supplied key."""

    encryption_algorithm: str
    key_sha256: str

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CustomerEncryption":
        """Build from a decoded API response."""
        return cls(
            encryption_algorithm=_string(data, "encryptionAlgorithm"),
            key_sha256=_string(data, "keySha256"),
        )

    def to_dict(self) -> Dict[str, Any]:
        """The value in its API form."""
        return {
            "encryptionAlgorithm": self.encryption_algorithm,
            "keySha256": self.key_sha256,
        }


@dataclass(kw_only=True)
class Object:
    """A file stored in a bucket."""

    kind: str
    id: str
    self_link: str
    name: str
    bucket: str
    generation: int
    metageneration: int
    time_created: datetime
    updated: datetime
    storage_class: str
    time_storage_class_updated: datetime
    size: int
    media_link: str
    crc32c: str
    etag: str
    content_type: Optional[str] = None
    time_deleted: Optional[datetime] = None
    temporary_hold: Optional[bool] = None
    event_based_hold: Optional[bool] = None
    retention_expiration_time: Optional[datetime] = None
    md5_hash: Optional[str] = None
    content_encoding: Optional[str] = None
    content_disposition: Optional[str] = None
    content_language: Optional[str] = None
    cache_control: Optional[str] = None
    metadata: Optional[Dict[str, str]] = None
    acl: Optional[List[Dict[str, Any]]] = None
    owner: Optional[Dict[str, Any]] = None
    component_count: Optional[int] = None
    customer_encryption: Optional[CustomerEncryption] = None
    kms_key_name: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Object":
        """Build an object from a decoded API response."""
        if not isinstance(data, dict):
            raise ValueError("an object resource must be a JSON object")
        size = _number(_require(data, "size"), "size")
        if size < 0:
            raise ValueError(f"invalid number for field `size`: {size}")
        component_count = data.get("componentCount")
        if component_count is not None:
            component_count = _number(component_count, "componentCount")
        acl = _optional(data, "acl", list)
        if acl is not None and not all(isinstance(entry, dict) for entry in acl):
            raise ValueError("invalid type for field `acl`")
        encryption = _optional(data, "customerEncryption", dict)
        return cls(
            kind=_string(data, "kind"),
            id=_string(data, "id"),
            self_link=_string(data, "selfLink"),
            name=_string(data, "name"),
            bucket=_string(data, "bucket"),
            generation=_number(_require(data, "generation"), "generation"),
            metageneration=_number(_require(data, "metageneration"), "metageneration"),
            content_type=_optional(data, "contentType", str),
            time_created=_parse_rfc3339(_require(data, "timeCreated")),
            updated=_parse_rfc3339(_require(data, "updated")),
            time_deleted=_optional_time(data, "timeDeleted"),
            temporary_hold=_optional(data, "temporaryHold", bool),
            event_based_hold=_optional(data, "eventBasedHold", bool),
            retention_expiration_time=_optional_time(data, "retentionExpirationTime"),
            storage_class=_string(data, "storageClass"),
            time_storage_class_updated=_parse_rfc3339(
                _require(data, "timeStorageClassUpdated")
            ),
            size=size,
            md5_hash=_optional(data, "md5Hash", str),
            media_link=_string(data, "mediaLink"),
            content_encoding=_optional(data, "contentEncoding", str),
            content_disposition=_optional(data, "contentDisposition", str),
            content_language=_optional(data, "contentLanguage", str),
            cache_control=_optional(data, "cacheControl", str),
            metadata=_string_map(data, "metadata"),
            acl=[dict(entry) for entry in acl] if acl is not None else None,
            owner=_optional(data, "owner", dict),
            crc32c=_string(data, "crc32c"),
            component_count=component_count,
            etag=_string(data, "etag"),
            customer_encryption=(
                CustomerEncryption.from_dict(encryption) if encryption is not None else None
            ),
            kms_key_name=_optional(data, "kmsKeyName", str),
        )

    def to_dict(self) -> Dict[str, Any]:
        """The object in its API form."""
        return {
            "kind": self.kind,
            "id": self.id,
            "selfLink": self.self_link,
            "name": self.name,
            "bucket": self.bucket,
            "generation": self.generation,
            "metageneration": self.metageneration,
            "contentType": self.content_type,
            "timeCreated": _format_rfc3339(self.time_created),
            "updated": _format_rfc3339(self.updated),
            "timeDeleted": _format_optional_time(self.time_deleted),
            "temporaryHold": self.temporary_hold,
            "eventBasedHold": self.event_based_hold,
            "retentionExpirationTime": _format_optional_time(
                self.retention_expiration_time
            ),
            "storageClass": self.storage_class,
            "timeStorageClassUpdated": _format_rfc3339(self.time_storage_class_updated),
            "size": self.size,
            "md5Hash": self.md5_hash,
            "mediaLink": self.media_link,
            "contentEncoding": self.content_encoding,
            "contentDisposition": self.content_disposition,
            "contentLanguage": self.content_language,
            "cacheControl": self.cache_control,
            "metadata": dict(self.metadata) if self.metadata is not None else None,
            "acl": [dict(entry) for entry in self.acl] if self.acl is not None else None,
            "owner": dict(self.owner) if self.owner is not None else None,
            "crc32c": self.crc32c,
            "componentCount": self.component_count,
            "etag": self.etag,
            "customerEncryption": (
                self.customer_encryption.to_dict()
                if self.customer_encryption is not None
                else None
            ),
            "kmsKeyName": self.kms_key_name,
        }

    def _sign(
        self,
        duration: int,
        http_verb: str,
        content_disposition: Optional[str],
        custom_metadata: Mapping[str, str],
        service_account: Optional[ServiceAccount],
        now: Optional[datetime],
    ) -> str:
        if duration < 0:
            raise SigningError(f"duration may not be negative, but was {duration}")
        account = service_account if service_account is not None else ServiceAccount.from_env()
        return sign_url(
            account,
            self.bucket,
            self.name,
            duration,
            http_verb=http_verb,
            content_disposition=content_disposition,
            custom_metadata=custom_metadata,
            now=now,
        )

    def download_url(
        self,
        duration: int,
        service_account: Optional[ServiceAccount] = None,
        now: Optional[datetime] = None,
    ) -> str:
        """A signed URL that lets anyone download this object for ``duration`` seconds."""
        return self._sign(duration, "GET", None, {}, service_account, now)

    def download_url_with(
        self,
        duration: int,
        content_disposition: Optional[str] = None,
        service_account: Optional[ServiceAccount] = None,
        now: Optional[datetime] = None,
    ) -> str:
        """A signed download URL that also sets the response's Content-Disposition."""
        return self._sign(duration, "GET", content_disposition, {}, service_account, now)

    def upload_url(
        self,
        duration: int,
        service_account: Optional[ServiceAccount] = None,
        now: Optional[datetime] = None,
    ) -> str:
        """A signed URL that lets anyone PUT new contents for ``duration`` seconds."""
        return self._sign(duration, "PUT", None, {}, service_account, now)

    def upload_url_with(
        self,
        duration: int,
        custom_metadata: Mapping[str, str],
        service_account: Optional[ServiceAccount] = None,
        now: Optional[datetime] = None,
    ) -> Tuple[str, Dict[str, str]]:
        """A signed upload URL carrying custom metadata, and the headers the PUT must send."""
        url = self._sign(duration, "PUT", None, custom_metadata, service_account, now)
        headers = {f"x-goog-meta-{key}": str(value) for key, value in custom_metadata.items()}
        return url, headers