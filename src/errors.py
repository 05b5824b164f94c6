#!/usr/bin/env python3
"""
Exceptions raised by CI Triage Helper
"""

from typing import Optional


class ConfigError(ValueError):
    """Missing or invalid action input or workflow context"""


class UpstreamError(Exception):
    """A non-success response from an external service"""

    service = "Upstream"

    def __init__(self, status_code, reason: str = "", body: str = "", message: Optional[str] = None):
        self.status_code = status_code
        self.reason = reason or ""
        self.body = body or ""
        if message is None:
            message = f"{self.service} request failed: {status_code} {self.reason}".rstrip()
            if self.body:
                message += f" - {self.body}"
        super().__init__(message)


class UpstreamListingError(UpstreamError):
    service = "GitHub job listing"


class UpstreamLogError(UpstreamError):
    service = "GitHub job log"


class BackendError(UpstreamError):
    """The model backend failed or returned an unusable answer"""

    service = "OpenRouter"
