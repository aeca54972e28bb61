"""Record store adapters: the authoritative remote copy of every task.

A record store deals in plain dict records keyed by column name (see
``taskmirror.database.models.RECORD_COLUMNS``). Every call either returns its
result or raises ``RecordStoreError``.
"""

import asyncio
import logging
import uuid
from datetime import datetime
from typing import Any, Dict, List, Protocol

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from taskmirror.database.models import TaskDB, RECORD_COLUMNS

logger = logging.getLogger(__name__)


class RecordStoreError(Exception):
    """A remote read or write did not complete."""


class RecordStore(Protocol):
    """Durable CRUD by id plus bulk select by owner."""

    async def select(self, owner_id: str) -> List[Dict[str, Any]]:
        """Return every record owned by ``owner_id``."""
        ...

    async def insert(self, record: Dict[str, Any]) -> Dict[str, Any]:
        """Persist a new record and return it with generated id/created_at."""
        ...

    async def update(self, task_id: str, fields: Dict[str, Any]) -> None:
        """Apply a partial update to the record with this id."""
        ...

    async def delete(self, task_id: str) -> None:
        """Permanently remove the record with this id."""
        ...


class SqlRecordStore:
    """Record store backed by a SQLAlchemy session factory.

    Each call opens its own session and runs on a worker thread, so several
    calls may be in flight at once.
    """

    def __init__(self, session_factory: sessionmaker):
        self.session_factory = session_factory

    async def select(self, owner_id: str) -> List[Dict[str, Any]]:
        return await asyncio.to_thread(self._select, owner_id)

    async def insert(self, record: Dict[str, Any]) -> Dict[str, Any]:
        return await asyncio.to_thread(self._insert, record)

    async def update(self, task_id: str, fields: Dict[str, Any]) -> None:
        await asyncio.to_thread(self._update, task_id, fields)

    async def delete(self, task_id: str) -> None:
        await asyncio.to_thread(self._delete, task_id)

    def _select(self, owner_id: str) -> List[Dict[str, Any]]:
        db: Session = self.session_factory()
        try:
            rows = db.query(TaskDB).filter(TaskDB.user_id == owner_id).order_by(TaskDB.created_at).all()
            return [row.to_record() for row in rows]
        except SQLAlchemyError as e:
            logger.error(f"Failed to select tasks for user {owner_id}: {type(e).__name__}: {str(e)}")
            raise RecordStoreError(str(e)) from e
        finally:
            db.close()

    def _insert(self, record: Dict[str, Any]) -> Dict[str, Any]:
        db: Session = self.session_factory()
        try:
            values = {k: v for k, v in record.items() if k in RECORD_COLUMNS and k not in ("id", "created_at")}
            task_db = TaskDB(**values)
            db.add(task_db)
            db.commit()
            db.refresh(task_db)
            logger.debug(f"Inserted task {task_db.id}: {task_db.title[:50]}")
            return task_db.to_record()
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"Failed to insert task: {type(e).__name__}: {str(e)}")
            raise RecordStoreError(str(e)) from e
        finally:
            db.close()

    def _update(self, task_id: str, fields: Dict[str, Any]) -> None:
        db: Session = self.session_factory()
        try:
            values = {getattr(TaskDB, k): v for k, v in fields.items() if k in RECORD_COLUMNS}
            affected = db.query(TaskDB).filter(TaskDB.id == task_id).update(values, synchronize_session=False)
            db.commit()
            logger.debug(f"Updated task {task_id} ({affected} row(s)): {sorted(fields)}")
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"Failed to update task {task_id}: {type(e).__name__}: {str(e)}")
            raise RecordStoreError(str(e)) from e
        finally:
            db.close()

    def _delete(self, task_id: str) -> None:
        db: Session = self.session_factory()
        try:
            affected = db.query(TaskDB).filter(TaskDB.id == task_id).delete(synchronize_session=False)
            db.commit()
            logger.debug(f"Deleted task {task_id} ({affected} row(s))")
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"Failed to delete task {task_id}: {type(e).__name__}: {str(e)}")
            raise RecordStoreError(str(e)) from e
        finally:
            db.close()


class InMemoryRecordStore:
    """Dict-backed record store for local development and tests."""

    def __init__(self):
        self._records: Dict[str, Dict[str, Any]] = {}

    def __len__(self) -> int:
        return len(self._records)

    def get(self, task_id: str):
        record = self._records.get(task_id)
        return dict(record) if record is not None else None

    async def select(self, owner_id: str) -> List[Dict[str, Any]]:
        return [dict(r) for r in self._records.values() if r["user_id"] == owner_id]

    async def insert(self, record: Dict[str, Any]) -> Dict[str, Any]:
        stored = {column: None for column in RECORD_COLUMNS}
        stored.update({k: v for k, v in record.items() if k in RECORD_COLUMNS})
        stored["id"] = str(uuid.uuid4())
        stored["created_at"] = datetime.utcnow()
        self._records[stored["id"]] = stored
        logger.debug(f"Inserted task {stored['id']}: {str(stored['title'])[:50]}")
        return dict(stored)

    async def update(self, task_id: str, fields: Dict[str, Any]) -> None:
        record = self._records.get(task_id)
        if record is None:
            return
        record.update({k: v for k, v in fields.items() if k in RECORD_COLUMNS})

    async def delete(self, task_id: str) -> None:
        self._records.pop(task_id, None)
