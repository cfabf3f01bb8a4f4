"""Volatile signal store: a bounded, lock-guarded list with process lifetime."""
import copy
import threading
from collections import deque
from typing import List, Optional

from solsignal.errors import DuplicateSignalError
from solsignal.store.base import SignalStore, SignalRow
from solsignal.utils.constants import MAX_SIGNALS
from solsignal.utils.logging import get_logger

logger = get_logger(__name__)


class MemorySignalStore(SignalStore):
    """
    Newest-first list capped at ``max_signals``.

    Appending past the cap evicts the oldest rows by insertion order.
    Contents are lost on restart.
    """

    backend = "memory"

    def __init__(self, max_signals: int = MAX_SIGNALS):
        if max_signals < 1:
            raise ValueError("max_signals must be positive")
        self.max_signals = max_signals
        self._rows = deque()
        self._ids = set()
        self._lock = threading.Lock()

    def append(self, row: SignalRow) -> None:
        signal_id = row.get('id')
        with self._lock:
            if signal_id in self._ids:
                raise DuplicateSignalError(f"Signal {signal_id} already exists")
            self._rows.appendleft(copy.deepcopy(row))
            self._ids.add(signal_id)
            while len(self._rows) > self.max_signals:
                evicted = self._rows.pop()
                self._ids.discard(evicted.get('id'))
                logger.debug(f"Evicted signal {evicted.get('id')}")

    def list(self, limit: Optional[int] = None) -> List[SignalRow]:
        with self._lock:
            rows = list(self._rows) if limit is None else list(self._rows)[:limit]
        return [copy.deepcopy(r) for r in rows]

    def count(self) -> int:
        with self._lock:
            return len(self._rows)