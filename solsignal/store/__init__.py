"""Signal store backends and the process-wide store instance."""
from functools import lru_cache

from config.settings import get_settings
from solsignal.models.base import Base, get_engine, get_session_factory
from solsignal.store.base import SignalStore
from solsignal.store.database import DatabaseSignalStore
from solsignal.store.memory import MemorySignalStore
from solsignal.utils.logging import get_logger

logger = get_logger(__name__)


def create_store(backend: str) -> SignalStore:
    """Build a store for ``backend`` ('memory' or 'database')."""
    settings = get_settings()
    if backend == "memory":
        return MemorySignalStore(max_signals=settings.MAX_SIGNALS)
    if backend == "database":
        Base.metadata.create_all(bind=get_engine())
        return DatabaseSignalStore(get_session_factory())
    raise ValueError(f"Unknown signal store backend: {backend}")


@lru_cache()
def get_signal_store() -> SignalStore:
    """Process-wide store, created once from settings."""
    backend = get_settings().SIGNAL_STORE.lower()
    logger.info(f"Using {backend} signal store")
    return create_store(backend)


__all__ = [
    "SignalStore",
    "MemorySignalStore",
    "DatabaseSignalStore",
    "create_store",
    "get_signal_store",
]
