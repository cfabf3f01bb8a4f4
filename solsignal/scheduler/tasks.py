"""
Celery background tasks.
"""
from config.settings import get_settings
from solsignal.scheduler.celery_app import app
from solsignal.store import DatabaseSignalStore, get_signal_store
from solsignal.utils.logging import get_logger
from solsignal.utils.metrics import record_signals_pruned

logger = get_logger(__name__)


@app.task
def prune_signals(max_rows: int = None) -> int:
    """
    Trim the durable signal table to its newest ``max_rows`` rows.
    Runs every 15 minutes. The volatile store bounds itself on write, so
    there is nothing to do for it.
    """
    store = get_signal_store()
    if not isinstance(store, DatabaseSignalStore):
        logger.debug(f"Skipping prune for {store.backend} store")
        return 0

    max_rows = max_rows or get_settings().PRUNE_MAX_ROWS
    removed = store.prune(max_rows)
    record_signals_pruned(removed)
    return removed
