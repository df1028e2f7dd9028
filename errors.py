# app/errors.py
from __future__ import annotations

from typing import Any, Dict, Optional

import httpx


class DisputeValidationError(ValueError):
    """Bad dispute id or unsupported chain id. Raised before any network call."""


class UpstreamError(Exception):
    """
    Structured failure from one of the upstreams (meta-evidence API, subgraph, IPFS).
    `code` is upstream-derived (httpx exception name) or a fixed fallback.
    """

    def __init__(self, message: str, code: str = "UPSTREAM_ERROR", details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details or {}

    @classmethod
    def from_http_error(cls, exc: httpx.HTTPError, prefix: str, **details) -> "UpstreamError":
        if isinstance(exc, httpx.HTTPStatusError):
            response = exc.response
            details.setdefault("status", response.status_code)
            details.setdefault("statusText", response.reason_phrase)
            reason = f"HTTP {response.status_code} {response.reason_phrase}".rstrip()
        else:
            details.setdefault("status", None)
            reason = describe(exc)
        return cls(f"{prefix}: {reason}", code=type(exc).__name__, details=details)

    def to_dict(self) -> Dict[str, Any]:
        return {"message": self.message, "code": self.code, "details": self.details}


class DisputeDataError(Exception):
    """The whole request failed: meta-evidence or evidence index could not be read."""

    def __init__(self, dispute_id: str, network: str, cause: BaseException):
        self.dispute_id = dispute_id
        self.network = network
        self.cause = cause
        super().__init__(
            f"Failed to retrieve dispute data for dispute {dispute_id} on {network}: {error_message(cause)}"
        )

    def to_dict(self) -> Dict[str, Any]:
        out = {"message": str(self), "code": "DISPUTE_DATA_ERROR", "details": {}}
        if isinstance(self.cause, UpstreamError):
            out["code"] = self.cause.code
            out["details"] = self.cause.details
        return out


def describe(exc: BaseException) -> str:
    # some httpx timeouts carry an empty message
    return str(exc) or type(exc).__name__


def error_message(exc: BaseException) -> str:
    """Structured message first, then the exception text, then the class name."""
    message = getattr(exc, "message", None)
    if isinstance(message, str) and message:
        return message
    return describe(exc)
