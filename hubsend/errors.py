"""Error taxonomy for hubsend.

Every failure carries a short snake_case ``reason`` so callers (and the local
hub stub) can report it without parsing messages.
"""

from __future__ import annotations

from typing import Optional


class HubSendError(Exception):
    reason = "hubsend_error"

    def __init__(self, detail: str = "", reason: Optional[str] = None):
        if reason:
            self.reason = reason
        self.detail = detail
        super().__init__(f"{self.reason}: {detail}" if detail else self.reason)


class ConfigError(HubSendError, ValueError):
    reason = "invalid_config"


class EncodingError(HubSendError, ValueError):
    reason = "encoding_failed"


class ValidationError(HubSendError, ValueError):
    reason = "validation_failure"


class InvalidTimestamp(HubSendError, ValueError):
    reason = "invalid_timestamp"


class InvalidKeyEncoding(HubSendError, ValueError):
    reason = "invalid_key_encoding"


class InvalidKeyLength(HubSendError, ValueError):
    reason = "invalid_key_length"


class UnsupportedScheme(HubSendError, ValueError):
    reason = "unsupported_scheme"


class VerificationError(HubSendError, ValueError):
    reason = "verification_failed"


class TransportError(HubSendError):
    reason = "transport_failed"


class NonSuccessStatus(HubSendError):
    reason = "non_success_status"

    def __init__(self, status: int, detail: str = ""):
        self.status = int(status)
        super().__init__(detail or f"HTTP {self.status}")
