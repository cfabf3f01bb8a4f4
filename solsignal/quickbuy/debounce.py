"""Debounced quoting: the latest input wins and stale answers are dropped."""
import threading
from typing import Callable, Optional

from config.settings import get_settings
from solsignal.errors import QuoteError
from solsignal.quickbuy.jupiter import JupiterClient, Quote, QuoteRequest
from solsignal.utils.logging import get_logger

logger = get_logger(__name__)


class QuoteDebouncer:
    """
    Re-quotes whenever the inputs change, once they have been stable for
    ``delay`` seconds.

    Each ``submit`` cancels the pending timer and bumps a generation counter;
    a response is only kept if its generation is still current.
    """

    def __init__(
        self,
        client: JupiterClient,
        delay: Optional[float] = None,
        on_update: Optional[Callable[["QuoteDebouncer"], None]] = None,
    ):
        self.client = client
        self.delay = get_settings().QUOTE_DEBOUNCE_SECONDS if delay is None else delay
        self.on_update = on_update
        self.quote: Optional[Quote] = None
        self.error: Optional[str] = None
        self.loading = False
        self._generation = 0
        self._timer: Optional[threading.Timer] = None
        self._lock = threading.Lock()
        self._settled = threading.Event()
        self._settled.set()

    def submit(self, request: QuoteRequest) -> None:
        """Schedule a quote for ``request``, superseding anything in flight."""
        with self._lock:
            self._generation += 1
            generation = self._generation
            if self._timer is not None:
                self._timer.cancel()
                self._timer = None

            if not request.token_address or not request.sol_amount or request.sol_amount <= 0:
                self.quote = None
                self.error = None
                self.loading = False
                self._settled.set()
                return

            self.loading = True
            self._settled.clear()
            self._timer = threading.Timer(self.delay, self._fetch, args=(generation, request))
            self._timer.daemon = True
            self._timer.start()

    def _fetch(self, generation: int, request: QuoteRequest) -> None:
        quote, error = None, None
        try:
            quote = self.client.get_quote(request)
        except QuoteError as e:
            error = e.details

        with self._lock:
            if generation != self._generation:
                logger.debug(f"Dropping stale quote for {request.token_address}")
                return
            self.quote = quote
            self.error = error
            self.loading = False
            self._timer = None
            self._settled.set()

        if self.on_update is not None:
            self.on_update(self)

    def wait(self, timeout: Optional[float] = None) -> bool:
        """Block until the latest submitted input has a quote or an error."""
        return self._settled.wait(timeout)

    def cancel(self) -> None:
        with self._lock:
            self._generation += 1
            if self._timer is not None:
                self._timer.cancel()
                self._timer = None
            self.loading = False
            self._settled.set()
