"""
Signal ingestion and query service.

Translates between the external camelCase schema and the store's snake_case
rows. The service is a collection sink: it fills in ``id`` and ``timestamp``
when absent and otherwise stores what it is given, without range checks.
"""
import json
import math
import uuid
from typing import Any, Dict, List, Mapping, Union

from pydantic import ValidationError

from solsignal.errors import DuplicateSignalError, InvalidPayloadError
from solsignal.schemas.fields import missing_required, to_external, unknown_fields
from solsignal.schemas.signals import CreateResult, SignalPayload
from solsignal.store.base import SignalStore
from solsignal.utils.formatting import now_ms
from solsignal.utils.logging import get_logger
from solsignal.utils.metrics import record_signal_created, record_signal_rejected

logger = get_logger(__name__)


def _reject_constant(token: str):
    raise ValueError(f"Invalid JSON token: {token}")


def _finite_float(text: str) -> float:
    value = float(text)
    if math.isinf(value):
        raise ValueError(f"Number out of range: {text}")
    return value


def load_json(body: Union[bytes, str]) -> Any:
    """Strict RFC 8259 decoding: NaN, Infinity and overflowing numbers are rejected."""
    return json.loads(body, parse_constant=_reject_constant, parse_float=_finite_float)


def parse_body(body: Union[bytes, str]) -> Dict[str, Any]:
    """Decode a request body into a JSON object or raise ``InvalidPayloadError``."""
    try:
        payload = load_json(body)
    except (ValueError, UnicodeDecodeError) as e:
        record_signal_rejected("malformed")
        raise InvalidPayloadError(str(e))
    if not isinstance(payload, dict):
        record_signal_rejected("malformed")
        raise InvalidPayloadError(f"Expected a JSON object, got {type(payload).__name__}")
    return payload


class SignalService:
    """Only writer of the signal store."""

    def __init__(self, store: SignalStore, list_limit: int = None):
        self.store = store
        self.list_limit = list_limit

    def create(self, payload: Mapping[str, Any]) -> CreateResult:
        """
        Store one signal.

        Assigns a UUID when ``id`` is absent or empty and the current time
        when ``timestamp`` is absent. Raises ``InvalidPayloadError`` on type
        mismatches, ``DuplicateSignalError`` when ``id`` is already stored and
        ``StoreError`` when the store rejects the write.
        """
        try:
            signal = SignalPayload.model_validate(payload)
        except ValidationError as e:
            record_signal_rejected("schema")
            raise InvalidPayloadError(str(e))

        ignored = unknown_fields(payload)
        if ignored:
            logger.warning(f"Dropping unmapped signal fields: {', '.join(ignored)}")
        missing = missing_required(payload)
        if missing:
            logger.warning(f"Signal stored without required fields: {', '.join(missing)}")

        row = signal.model_dump()
        if not row['id']:
            row['id'] = str(uuid.uuid4())
        if row['timestamp'] is None:
            row['timestamp'] = now_ms()

        try:
            self.store.append(row)
        except DuplicateSignalError:
            record_signal_rejected("duplicate")
            raise
        total = self.store.count()

        logger.info(f"Stored signal {row['id']} ({row['token_symbol']}), {total} total")
        record_signal_created(row['source'], row['signal_type'], total)
        return CreateResult(signal_id=row['id'], total_signals=total)

    def list(self) -> List[Dict[str, Any]]:
        """All stored signals, newest first, with external field names."""
        return [to_external(row) for row in self.store.list(self.list_limit)]
