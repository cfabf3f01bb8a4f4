"""
Signal feed consumer.

Polls ``GET /signals`` on a fixed interval. Each poll runs on a worker pool,
so a slow or failing poll never delays the next tick. Overlapping polls are
not deduplicated; reads are idempotent.
"""
import threading
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Callable, Dict, List, Optional

import requests

from config.settings import get_settings
from solsignal.utils.formatting import now_ms
from solsignal.utils.logging import get_logger

logger = get_logger(__name__)


class FeedError(Exception):
    """A poll failed; the previous snapshot stays in place."""


def fetch_signals(base_url: str, session: Optional[requests.Session] = None,
                  timeout: float = 5, api_key: Optional[str] = None) -> List[Dict[str, Any]]:
    """One GET of the signal list."""
    headers = {'Content-Type': 'application/json'}
    if api_key:
        headers['apikey'] = api_key
        headers['Authorization'] = f'Bearer {api_key}'
    http = session or requests
    try:
        r = http.get(f"{base_url.rstrip('/')}/signals", headers=headers, timeout=timeout)
        r.raise_for_status()
        data = r.json()
        if not isinstance(data, dict):
            raise ValueError("response is not a JSON object")
        return data.get('signals') or []
    except (requests.RequestException, ValueError) as e:
        raise FeedError(f"Failed to load signals: {e}") from e


class SignalFeedPoller:
    """Keeps the latest signal snapshot fresh in the background."""

    def __init__(
        self,
        base_url: Optional[str] = None,
        interval: Optional[float] = None,
        fetch: Optional[Callable[[], List[Dict[str, Any]]]] = None,
        on_update: Optional[Callable[[List[Dict[str, Any]]], None]] = None,
        max_workers: int = 4,
    ):
        settings = get_settings()
        self.base_url = base_url or settings.API_URL
        self.interval = interval or settings.FEED_POLL_SECONDS
        self._fetch = fetch or (lambda: fetch_signals(self.base_url))
        self.on_update = on_update

        self.signals: List[Dict[str, Any]] = []
        self.error: Optional[str] = None
        self.last_updated: Optional[int] = None
        self.loading = True

        self.max_workers = max_workers
        self._executor: Optional[ThreadPoolExecutor] = None
        self._stop = threading.Event()
        self._thread: Optional[threading.Thread] = None

    def poll_once(self) -> None:
        """Fetch once and update the snapshot; errors are recorded, not raised."""
        try:
            signals = self._fetch()
        except FeedError as e:
            logger.warning(str(e))
            self.error = 'Failed to load signals'
        except Exception:
            logger.exception("Unexpected error while polling signals")
            self.error = 'Failed to load signals'
        else:
            self.signals = signals
            self.error = None
            self.last_updated = now_ms()
            if self.on_update is not None:
                self.on_update(signals)
        finally:
            self.loading = False

    def _run(self) -> None:
        while not self._stop.is_set():
            self._executor.submit(self.poll_once)
            self._stop.wait(self.interval)

    def start(self) -> None:
        if self._thread is not None:
            return
        self._executor = ThreadPoolExecutor(max_workers=self.max_workers, thread_name_prefix="feed-poll")
        self._stop.clear()
        self._thread = threading.Thread(target=self._run, name="feed-poller", daemon=True)
        self._thread.start()

    def stop(self) -> None:
        self._stop.set()
        if self._thread is not None:
            self._thread.join()
            self._thread = None
        if self._executor is not None:
            self._executor.shutdown(wait=False)
            self._executor = None
