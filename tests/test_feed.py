"""
Tests for the polling feed consumer.
"""
import threading
import time
from unittest.mock import MagicMock

import pytest
import requests

from solsignal.feed import FeedError, SignalFeedPoller, fetch_signals


class TestFetchSignals:

    def test_fetch(self):
        session = MagicMock()
        session.get.return_value.json.return_value = {"signals": [{"id": "a"}]}

        assert fetch_signals("http://api:8000/", session=session, api_key="anon") == [{"id": "a"}]
        args, kwargs = session.get.call_args
        assert args == ("http://api:8000/signals",)
        assert kwargs["headers"]["apikey"] == "anon"
        assert kwargs["headers"]["Authorization"] == "Bearer anon"

    def test_missing_key_is_empty(self):
        session = MagicMock()
        session.get.return_value.json.return_value = {}
        assert fetch_signals("http://api:8000", session=session) == []

    def test_http_error(self):
        session = MagicMock()
        session.get.return_value.raise_for_status.side_effect = requests.HTTPError("500")
        with pytest.raises(FeedError):
            fetch_signals("http://api:8000", session=session)

    def test_connection_error(self):
        session = MagicMock()
        session.get.side_effect = requests.ConnectionError("refused")
        with pytest.raises(FeedError):
            fetch_signals("http://api:8000", session=session)

    @pytest.mark.parametrize("payload", [[{"id": "a"}], "signals", None])
    def test_non_object_body(self, payload):
        session = MagicMock()
        session.get.return_value.json.return_value = payload
        with pytest.raises(FeedError):
            fetch_signals("http://api:8000", session=session)


class TestSignalFeedPoller:

    def test_poll_once(self):
        seen = []
        poller = SignalFeedPoller(fetch=lambda: [{"id": "a"}], on_update=seen.append, interval=1)
        assert poller.loading

        poller.poll_once()
        assert poller.signals == [{"id": "a"}]
        assert poller.error is None
        assert poller.last_updated is not None
        assert not poller.loading
        assert seen == [[{"id": "a"}]]

    def test_failed_poll_keeps_snapshot(self):
        responses = [[{"id": "a"}], FeedError("boom")]

        def fetch():
            result = responses.pop(0)
            if isinstance(result, Exception):
                raise result
            return result

        poller = SignalFeedPoller(fetch=fetch, interval=1)
        poller.poll_once()
        poller.poll_once()
        assert poller.signals == [{"id": "a"}]
        assert poller.error == "Failed to load signals"

    def test_polls_on_interval(self):
        calls = []
        poller = SignalFeedPoller(fetch=lambda: calls.append(1) or [], interval=0.05)
        poller.start()
        time.sleep(0.3)
        poller.stop()
        assert len(calls) >= 3

    def test_restart_after_stop(self):
        calls = []
        poller = SignalFeedPoller(fetch=lambda: calls.append(1) or [], interval=0.05)
        poller.start()
        time.sleep(0.1)
        poller.stop()

        before = len(calls)
        poller.start()
        time.sleep(0.2)
        poller.stop()
        assert len(calls) > before
        assert poller.error is None

    def test_slow_poll_does_not_block_next(self):
        started = []
        lock = threading.Lock()

        def slow_fetch():
            with lock:
                started.append(time.monotonic())
            time.sleep(0.25)
            return []

        poller = SignalFeedPoller(fetch=slow_fetch, interval=0.05, max_workers=4)
        poller.start()
        time.sleep(0.2)
        poller.stop()
        # several polls began while the first was still running
        assert len(started) >= 3
