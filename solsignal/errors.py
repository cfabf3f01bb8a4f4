"""
Error taxonomy.

CLIENT errors (malformed input) map to 4xx responses and are never retried.
UPSTREAM errors (store, aggregator) map to 5xx responses; retry policy,
if any, belongs to the caller.
"""
from typing import Optional


class SolSignalError(Exception):
    """Base class for all application errors."""

    status_code = 500
    error = "Internal error"

    def __init__(self, details: str, error: Optional[str] = None):
        super().__init__(details)
        self.details = details
        if error is not None:
            self.error = error

    def to_dict(self) -> dict:
        return {"error": self.error, "details": self.details}


class InvalidPayloadError(SolSignalError):
    """Request body could not be parsed or does not match the signal schema."""

    status_code = 400
    error = "Invalid request"


class DuplicateSignalError(SolSignalError):
    """A signal with the same ``id`` is already stored; the stored one is kept."""

    status_code = 409
    error = "Signal already exists"


class StoreError(SolSignalError):
    """Signal store unavailable or write rejected."""

    status_code = 500
    error = "Storage failure"


class QuoteError(SolSignalError):
    """Swap aggregator returned an error or an unusable response."""

    status_code = 502
    error = "Quote failed"


class QuoteTimeoutError(QuoteError):
    """Swap aggregator did not answer within the configured timeout."""

    status_code = 504
    error = "Quote timed out"


class TradeError(SolSignalError):
    """Any failure while building, signing, submitting or confirming a swap."""

    status_code = 502
    error = "Trade failed"
