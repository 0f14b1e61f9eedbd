"""Single-table store client used by the project consistency layer.

Every method touches exactly one table and every write commits on its own, so a
multi-table operation is never atomic here. Callers that need all-or-nothing
behaviour must compensate (see ``project_creation``). SQLAlchemy failures are
rolled back, logged and surfaced as ``PersistenceError``.
"""

import logging
from typing import Any, Dict, Iterable, List, Optional, Sequence

from fastapi import Depends
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.database import get_db
from app.exceptions import PersistenceError

logger = logging.getLogger(__name__)


class TableStore:
    def __init__(self, db: Session):
        self.db = db

    def _fail(self, model, action: str, exc: Exception) -> PersistenceError:
        self.db.rollback()
        table = model.__tablename__
        logger.warning("[store] %s on %s failed: %s", action, table, exc)
        return PersistenceError(f"Failed to {action} {table} rows.", table=table)

    def select(self, model, *criteria, order_by: Optional[Sequence[Any]] = None, limit: Optional[int] = None) -> List[Any]:
        try:
            query = self.db.query(model).filter(*criteria)
            if order_by is not None:
                query = query.order_by(*order_by)
            if limit is not None:
                query = query.limit(limit)
            return query.all()
        except SQLAlchemyError as exc:
            raise self._fail(model, "select", exc) from exc

    def first(self, model, *criteria) -> Optional[Any]:
        rows = self.select(model, *criteria, limit=1)
        return rows[0] if rows else None

    def insert(self, model, records: Iterable[Dict[str, Any]]) -> List[Any]:
        rows = [model(**record) for record in records]
        if not rows:
            return []
        try:
            self.db.add_all(rows)
            self.db.commit()
            for row in rows:
                self.db.refresh(row)
            return rows
        except SQLAlchemyError as exc:
            raise self._fail(model, "insert", exc) from exc

    def insert_one(self, model, record: Dict[str, Any]) -> Any:
        return self.insert(model, [record])[0]

    def update(self, model, values: Dict[str, Any], *criteria) -> List[Any]:
        """Apply ``values`` to every row matching ``criteria`` and return the updated rows."""
        try:
            rows = self.db.query(model).filter(*criteria).all()
            for row in rows:
                for key, value in values.items():
                    setattr(row, key, value)
            self.db.commit()
            for row in rows:
                self.db.refresh(row)
            return rows
        except SQLAlchemyError as exc:
            raise self._fail(model, "update", exc) from exc

    def delete(self, model, *criteria) -> int:
        try:
            count = self.db.query(model).filter(*criteria).delete(synchronize_session=False)
            self.db.commit()
            self.db.expire_all()
            return count
        except SQLAlchemyError as exc:
            raise self._fail(model, "delete", exc) from exc

    def upsert(self, model, records: Iterable[Dict[str, Any]], on_conflict: Sequence[str]) -> List[Any]:
        """Insert ``records``, reusing any row that already matches the ``on_conflict`` columns."""
        unique: Dict[tuple, Dict[str, Any]] = {}
        for record in records:
            key = tuple(record[column] for column in on_conflict)
            unique.setdefault(key, record)
        if not unique:
            return []
        try:
            rows = []
            for key, record in unique.items():
                criteria = [getattr(model, column) == value for column, value in zip(on_conflict, key)]
                row = self.db.query(model).filter(*criteria).first()
                if row is None:
                    row = model(**record)
                    self.db.add(row)
                else:
                    for column, value in record.items():
                        setattr(row, column, value)
                rows.append(row)
            self.db.commit()
            for row in rows:
                self.db.refresh(row)
            return rows
        except SQLAlchemyError as exc:
            raise self._fail(model, "upsert", exc) from exc


def get_store(db: Session = Depends(get_db)) -> TableStore:
    return TableStore(db)
