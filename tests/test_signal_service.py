"""
Tests for the signal ingestion/query service.
"""
import logging
import threading

import pytest

from solsignal.errors import InvalidPayloadError, StoreError
from solsignal.services import SignalService, parse_body
from solsignal.store import MemorySignalStore
from solsignal.utils.formatting import now_ms


class FailingStore(MemorySignalStore):
    def append(self, row):
        raise StoreError("could not connect to server: Connection refused")


class TestCreate:

    def test_assigns_id_and_timestamp(self, service):
        before = now_ms()
        result = service.create({})
        after = now_ms()

        assert result.signal_id
        assert result.total_signals == 1
        listed = service.list()
        assert listed[0]["id"] == result.signal_id
        assert before <= listed[0]["timestamp"] <= after

    def test_empty_id_replaced(self, service):
        result = service.create({"id": ""})
        assert result.signal_id != ""

    def test_keeps_producer_id_and_timestamp(self, service):
        result = service.create({"id": "abc", "timestamp": 42})
        assert result.signal_id == "abc"
        assert service.list()[0]["timestamp"] == 42

    def test_generated_ids_are_unique(self, service):
        ids = {service.create({}).signal_id for _ in range(20)}
        assert len(ids) == 20

    def test_total_count(self, service):
        for i in range(3):
            result = service.create({"id": f"s{i}"})
        assert result.total_signals == 3

    def test_no_range_validation(self, service):
        service.create({"winPercentage": 250, "buySize": -3})
        stored = service.list()[0]
        assert stored["winPercentage"] == 250
        assert stored["buySize"] == -3

    def test_type_mismatch_rejected(self, service):
        with pytest.raises(InvalidPayloadError):
            service.create({"buySize": "lots"})
        assert service.store.count() == 0

    def test_unknown_risk_level_rejected(self, service):
        with pytest.raises(InvalidPayloadError):
            service.create({"riskLevel": "EXTREME"})

    def test_text_or_number_fields_kept_as_sent(self, service):
        service.create({"id": "a", "age": 15, "buys24h": 120, "percentChange1h": -3.5})
        service.create({"id": "b", "age": "2h", "buys24h": "1.2K", "percentChange1h": "+4%"})
        by_id = {s["id"]: s for s in service.list()}
        assert by_id["a"]["age"] == 15 and isinstance(by_id["a"]["age"], int)
        assert by_id["a"]["buys24h"] == 120
        assert by_id["a"]["percentChange1h"] == -3.5
        assert by_id["b"]["age"] == "2h"
        assert by_id["b"]["buys24h"] == "1.2K"

    def test_text_or_number_fields_durable(self, db_store):
        service = SignalService(db_store)
        service.create({"id": "a", "age": 15, "liquidityRatio": "6.8%"})
        stored = service.list()[0]
        assert stored["age"] == 15
        assert stored["liquidityRatio"] == "6.8%"

    @pytest.mark.parametrize("payload", [
        {"buySize": "1.5"},
        {"timestamp": "1754321968000"},
        {"totalHolders": 12.5},
        {"hasImage": "yes"},
        {"tokenSymbol": 42},
        {"age": [15]},
    ])
    def test_no_type_conversion(self, service, payload):
        with pytest.raises(InvalidPayloadError):
            service.create(payload)
        assert service.store.count() == 0

    @pytest.mark.parametrize("value", [float("nan"), float("inf"), float("-inf")])
    def test_non_finite_numbers_rejected(self, service, value):
        with pytest.raises(InvalidPayloadError):
            service.create({"winPercentage": value})
        assert service.store.count() == 0

    def test_unknown_fields_dropped_and_logged(self, service, caplog):
        with caplog.at_level(logging.WARNING):
            service.create({"tokenSymbol": "WIF", "mystery": 1})
        assert "mystery" not in service.list()[0]
        assert "mystery" in caplog.text

    def test_missing_required_logged(self, service, caplog):
        with caplog.at_level(logging.WARNING):
            service.create({"tokenSymbol": "WIF"})
        assert "walletAddress" in caplog.text

    def test_store_failure_propagates(self):
        service = SignalService(FailingStore())
        with pytest.raises(StoreError) as exc:
            service.create({"tokenSymbol": "WIF"})
        assert "Connection refused" in exc.value.details


class TestList:

    def test_newest_first(self, service):
        service.create({"id": "A"})
        service.create({"id": "B"})
        assert [s["id"] for s in service.list()] == ["B", "A"]

    def test_idempotent(self, service):
        service.create({"id": "A"})
        service.create({"id": "B"})
        assert service.list() == service.list()

    def test_full_round_trip(self, service, full_signal):
        service.create(full_signal)
        assert service.list() == [full_signal]

    def test_full_round_trip_durable(self, db_store, full_signal):
        service = SignalService(db_store)
        service.create(full_signal)
        assert service.list() == [full_signal]

    def test_absent_fields_are_none(self, service):
        service.create({"tokenSymbol": "WIF"})
        stored = service.list()[0]
        assert stored["tokenSymbol"] == "WIF"
        assert stored["riskLevel"] is None
        assert stored["analysis"] is None

    def test_list_limit(self, memory_store):
        service = SignalService(memory_store, list_limit=2)
        for i in range(4):
            service.create({"id": f"s{i}"})
        assert [s["id"] for s in service.list()] == ["s3", "s2"]

    def test_capacity(self, service):
        for i in range(101):
            service.create({"id": f"s{i}"})
        ids = [s["id"] for s in service.list()]
        assert len(ids) == 100
        assert "s0" not in ids


class TestConcurrency:

    def test_concurrent_creates(self, service):
        n = 60
        barrier = threading.Barrier(n)
        errors = []

        def producer(i):
            barrier.wait()
            try:
                service.create({"id": f"p{i}", "tokenSymbol": f"T{i}"})
            except Exception as e:
                errors.append(e)

        threads = [threading.Thread(target=producer, args=(i,)) for i in range(n)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert errors == []
        listed = service.list()
        assert len(listed) == n
        assert {s["id"] for s in listed} == {f"p{i}" for i in range(n)}
        assert all(s["tokenSymbol"] == "T" + s["id"][1:] for s in listed)


class TestParseBody:

    def test_object(self):
        assert parse_body(b'{"tokenSymbol": "WIF"}') == {"tokenSymbol": "WIF"}

    @pytest.mark.parametrize("body", [
        b"", b"{not json", b"[1, 2]", b'"text"', b"\xff\xfe",
        b'{"winPercentage": NaN}', b'{"buySize": Infinity}', b'{"buySize": -Infinity}',
        b'{"marketCap": 1e999}',
    ])
    def test_rejected(self, body):
        with pytest.raises(InvalidPayloadError):
            parse_body(body)
