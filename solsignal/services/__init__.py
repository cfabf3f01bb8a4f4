"""Application services."""
from functools import lru_cache

from config.settings import get_settings
from solsignal.services.signal_service import SignalService, load_json, parse_body
from solsignal.store import get_signal_store


@lru_cache()
def get_signal_service() -> SignalService:
    """Process-wide service over the process-wide store."""
    return SignalService(get_signal_store(), list_limit=get_settings().SIGNAL_LIST_LIMIT)


__all__ = ["SignalService", "load_json", "parse_body", "get_signal_service"]
