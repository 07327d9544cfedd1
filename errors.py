# errors.py
"""
Exceptions raised by the PIN analysis flow.

Everything derives from AnalysisError so the API layer can map the whole
family onto HTTP status codes in one place:

    InvalidInput           -> 400 (bad PIN list, bad PIN, unknown township)
    UpstreamFetchFailure   -> 502 (assessor page unreachable for one PIN)

A worksheet miss is not an exception; it comes back as an empty
valuation table.
"""

from typing import Any, Dict, Optional


class AnalysisError(Exception):
    status_code = 500

    def __init__(self, message: str, *, details: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        return self.message


class InvalidInput(AnalysisError):
    status_code = 400


class InvalidPinFormat(InvalidInput):
    def __init__(self, pin: Any) -> None:
        super().__init__(f"Invalid PIN format: {pin}", details={"pin": pin})
        self.pin = pin


class UnknownJurisdiction(InvalidInput):
    def __init__(self, township: Any) -> None:
        super().__init__("Invalid township", details={"township": township})
        self.township = township


class UpstreamFetchFailure(AnalysisError):
    """The assessor page for one PIN could not be fetched; the batch is aborted."""

    status_code = 502

    def __init__(self, pin: str, reason: str, *, url: Optional[str] = None) -> None:
        super().__init__(
            f"Failed to scrape current assessment for PIN {pin}",
            details={"pin": pin, "reason": reason, "url": url},
        )
        self.pin = pin
        self.reason = reason
        self.url = url
