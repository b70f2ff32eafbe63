"""
Domain error taxonomy for stock analysis.
Each error carries the HTTP status the entry point should answer with, so the
mapping lives next to the error rather than in every caller.
"""

from enum import Enum


class AnalysisError(Exception):
    status_code = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class InputValidationError(AnalysisError):
    """Missing or malformed ticker symbol."""

    status_code = 400


class DataUnavailableReason(str, Enum):
    NETWORK_ERROR = "NETWORK_ERROR"
    NOT_FOUND = "NOT_FOUND"
    MALFORMED_RESPONSE = "MALFORMED_RESPONSE"
    INSUFFICIENT_HISTORY = "INSUFFICIENT_HISTORY"


class DataUnavailableError(AnalysisError):
    """The upstream fetch failed or returned too few usable points."""

    def __init__(self, message: str, reason: DataUnavailableReason) -> None:
        super().__init__(message)
        self.reason = reason

    @property
    def status_code(self) -> int:  # type: ignore[override]
        if self.reason is DataUnavailableReason.INSUFFICIENT_HISTORY:
            return 400
        return 404
