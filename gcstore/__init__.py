"""Google Cloud Storage resource models, request bodies, signed URLs and streaming helpers."""

__version__ = "0.1.0"

__all__ = [
    "location",
    "topic",
    "service_account",
    "signature",
    "hmac_key",
    "signing",
    "streams",
    "object",
    "requests_model",
]