"""Service account credentials used to authenticate requests."""

from __future__ import annotations

import json
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping, Optional

from dotenv import load_dotenv


class CredentialsError(Exception):
    """Raised when service account credentials cannot be found or are invalid."""


_FIELDS = (
    "project_id",
    "private_key_id",
    "private_key",
    "client_email",
    "client_id",
    "auth_uri",
    "token_uri",
    "auth_provider_x509_cert_url",
    "client_x509_cert_url",
)


@dataclass(frozen=True)
class ServiceAccount:
    """A parsed service account credentials file."""

    account_type: str
    project_id: str
    private_key_id: str
    private_key: str
    client_email: str
    client_id: str
    auth_uri: str
    token_uri: str
    auth_provider_x509_cert_url: str
    client_x509_cert_url: str

    @classmethod
    def from_json(cls, text: str) -> "ServiceAccount":
        """Parse credentials from JSON text."""
        try:
            data: Any = json.loads(text)
        except json.JSONDecodeError as exc:
            raise CredentialsError("SERVICE_ACCOUNT file not valid") from exc
        if not isinstance(data, dict):
            raise CredentialsError("SERVICE_ACCOUNT file not valid")
        values = {}
        for key in ("type", *_FIELDS):
            value = data.get(key)
            if not isinstance(value, str):
                raise CredentialsError(
                    f"SERVICE_ACCOUNT file not valid: missing or invalid field `{key}`"
                )
            values[key] = value
        if values["type"] != "service_account":
            raise CredentialsError(
                "`type` parameter of `SERVICE_ACCOUNT` variable is not 'service_account'"
            )
        return cls(account_type=values.pop("type"), **values)

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "ServiceAccount":
        """Load credentials from the environment.

        A path in ``SERVICE_ACCOUNT`` or ``GOOGLE_APPLICATION_CREDENTIALS`` is read
        first; otherwise JSON is taken from ``SERVICE_ACCOUNT_JSON`` or
        ``GOOGLE_APPLICATION_CREDENTIALS_JSON``. With no mapping given, a ``.env``
        file is loaded and the process environment is used.
        """
        if environ is None:
            load_dotenv()
            environ = os.environ
        path = environ.get("SERVICE_ACCOUNT")
        if path is None:
            path = environ.get("GOOGLE_APPLICATION_CREDENTIALS")
        if path is not None:
            try:
                text = Path(path).read_text(encoding="utf-8")
            except OSError as exc:
                raise CredentialsError("SERVICE_ACCOUNT file not found") from exc
            return cls.from_json(text)
        text = environ.get("SERVICE_ACCOUNT_JSON")
        if text is None:
            text = environ.get("GOOGLE_APPLICATION_CREDENTIALS_JSON")
        if text is None:
            raise CredentialsError(
                "SERVICE_ACCOUNT(_JSON) or GOOGLE_APPLICATION_CREDENTIALS(_JSON) "
                "environment parameter required"
            )
        return cls.from_json(text)