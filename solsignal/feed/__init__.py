"""Polling consumer of the signal feed."""
from solsignal.feed.poller import FeedError, SignalFeedPoller, fetch_signals

__all__ = ["FeedError", "SignalFeedPoller", "fetch_signals"]
