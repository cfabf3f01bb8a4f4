"""Durable signal store backed by the ``signals`` table."""
from contextlib import contextmanager
from typing import List, Optional

from sqlalchemy import desc, select, text
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import sessionmaker

from solsignal.errors import DuplicateSignalError, StoreError
from solsignal.models.signals import SignalRecord
from solsignal.schemas.fields import INTERNAL_FIELDS
from solsignal.store.base import SignalStore, SignalRow
from solsignal.utils.logging import get_logger

logger = get_logger(__name__)


class DatabaseSignalStore(SignalStore):
    """
    One row per signal, primary key ``id``, read newest first by ``timestamp``.

    There is no write-time eviction; ``prune`` trims old rows as a separate
    maintenance step.
    """

    backend = "database"

    def __init__(self, session_factory: sessionmaker):
        self.session_factory = session_factory

    @contextmanager
    def _session(self):
        db = self.session_factory()
        try:
            yield db
            db.commit()
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"Signal store operation failed: {e}")
            raise StoreError(str(e)) from e
        finally:
            db.close()

    def append(self, row: SignalRow) -> None:
        db = self.session_factory()
        try:
            db.add(SignalRecord(**{f: row.get(f) for f in INTERNAL_FIELDS}))
            db.commit()
        except IntegrityError as e:
            db.rollback()
            raise DuplicateSignalError(f"Signal {row.get('id')} already exists") from e
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"Signal store operation failed: {e}")
            raise StoreError(str(e)) from e
        finally:
            db.close()

    def list(self, limit: Optional[int] = None) -> List[SignalRow]:
        with self._session() as db:
            query = select(SignalRecord).order_by(desc(SignalRecord.timestamp))
            if limit is not None:
                query = query.limit(limit)
            records = db.execute(query).scalars().all()
            return [{f: getattr(r, f) for f in INTERNAL_FIELDS} for r in records]

    def count(self) -> int:
        with self._session() as db:
            return db.query(SignalRecord).count()

    def ping(self) -> None:
        with self._session() as db:
            db.execute(text("SELECT 1"))

    def prune(self, max_rows: int) -> int:
        """Delete rows older than the newest ``max_rows`` (rows tied with the oldest kept row stay). Returns rows removed."""
        if max_rows < 1:
            raise ValueError("max_rows must be positive")
        with self._session() as db:
            cutoff = (
                db.query(SignalRecord.timestamp)
                .order_by(desc(SignalRecord.timestamp))
                .offset(max_rows - 1)
                .limit(1)
                .scalar()
            )
            if cutoff is None:
                return 0
            removed = (
                db.query(SignalRecord)
                .filter(SignalRecord.timestamp < cutoff)
                .delete(synchronize_session=False)
            )
        logger.info(f"Pruned {removed} signals older than {cutoff}")
        return removed
