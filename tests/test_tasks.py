"""
Tests for scheduled maintenance tasks.
"""
from unittest.mock import patch

from solsignal.scheduler.tasks import prune_signals
from solsignal.schemas.fields import to_internal


def test_prune_durable_store(db_store):
    for i in range(1, 6):
        db_store.append(to_internal({"id": f"s{i}", "timestamp": i}))

    with patch("solsignal.scheduler.tasks.get_signal_store", return_value=db_store):
        assert prune_signals(3) == 2

    assert [r["id"] for r in db_store.list()] == ["s5", "s4", "s3"]


def test_prune_skips_memory_store(memory_store):
    with patch("solsignal.scheduler.tasks.get_signal_store", return_value=memory_store):
        assert prune_signals(1) == 0


def test_prune_is_scheduled():
    from solsignal.scheduler.celery_app import app
    tasks = {entry["task"] for entry in app.conf.beat_schedule.values()}
    assert "solsignal.scheduler.tasks.prune_signals" in tasks
