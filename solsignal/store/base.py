"""Signal store interface."""
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

SignalRow = Dict[str, Any]


class SignalStore(ABC):
    """
    Holds signal rows keyed by internal (snake_case) field names.

    Rows are immutable once appended. Implementations raise
    ``StoreError`` when the backing storage fails.
    """

    backend = "abstract"

    @abstractmethod
    def append(self, row: SignalRow) -> None:
        """Insert a row at the head (newest first)."""

    @abstractmethod
    def list(self, limit: Optional[int] = None) -> List[SignalRow]:
        """Rows newest first, at most ``limit`` of them."""

    @abstractmethod
    def count(self) -> int:
        """Number of rows currently held."""

    def ping(self) -> None:
        """Raise ``StoreError`` if the store is unreachable."""
