"""
Record store over the SQLAlchemy models.

The coordinator only sees plain dicts and the taxonomy errors; SQLAlchemy
failures are rolled back and surfaced as PersistenceError.
"""
from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Sequence, Tuple

from sqlalchemy import func, inspect
from sqlalchemy.exc import SQLAlchemyError

from .errors import NotFoundError, PersistenceError, ValidationError
from .models import db, utcnow

logger = logging.getLogger(__name__)

CONTAINS = "__contains"


class RecordStore:
    """CRUD plus a max() aggregate for one record kind."""

    def __init__(self, model):
        self.model = model
        self.kind = model.__name__
        self.fields = {attr.key for attr in inspect(model).column_attrs}

    def _column(self, name: str):
        if name not in self.fields:
            raise ValidationError(f"Unknown {self.kind} field: {name}")
        return getattr(self.model, name)

    def _filtered(self, query, filters: Optional[Dict[str, Any]]):
        for key, value in (filters or {}).items():
            if key.endswith(CONTAINS):
                column = self._column(key[: -len(CONTAINS)])
                query = query.filter(column.icontains(str(value), autoescape=True))
            else:
                query = query.filter(self._column(key) == value)
        return query

    def _fail(self, op: str, exc: SQLAlchemyError) -> PersistenceError:
        db.session.rollback()
        logger.error(f"{self.kind} {op} failed: {exc}")
        return PersistenceError(f"Failed to {op} {self.kind.lower()}")

    def list(self, filters: Optional[Dict[str, Any]] = None,
             order_by: Optional[Sequence[Tuple[str, str]]] = None) -> List[Dict]:
        query = self._filtered(db.session.query(self.model), filters)
        for name, direction in order_by or []:
            column = self._column(name)
            query = query.order_by(column.desc() if direction == "desc" else column.asc())
        try:
            return [record.to_dict() for record in query.all()]
        except SQLAlchemyError as e:
            raise self._fail("list", e) from e

    def get(self, record_id: str) -> Optional[Dict]:
        try:
            record = db.session.get(self.model, record_id)
            return record.to_dict() if record else None
        except SQLAlchemyError as e:
            raise self._fail("fetch", e) from e

    def create(self, fields: Dict[str, Any]) -> Dict:
        for name in fields:
            self._column(name)
        try:
            record = self.model(**fields)
            db.session.add(record)
            db.session.commit()
            logger.debug(f"{self.kind} {record.id} created")
            return record.to_dict()
        except SQLAlchemyError as e:
            raise self._fail("create", e) from e

    def update(self, record_id: str, fields: Dict[str, Any]) -> Dict:
        for name in fields:
            self._column(name)
        try:
            record = db.session.get(self.model, record_id)
            if record is None:
                raise NotFoundError(f"{self.kind} {record_id} not found")
            for name, value in fields.items():
                setattr(record, name, value)
            record.updated_at = utcnow()
            db.session.commit()
            return record.to_dict()
        except SQLAlchemyError as e:
            raise self._fail("update", e) from e

    def delete(self, record_id: str) -> bool:
        """Delete a record. Returns False when nothing matched."""
        try:
            record = db.session.get(self.model, record_id)
            if record is None:
                return False
            db.session.delete(record)
            db.session.commit()
            logger.debug(f"{self.kind} {record_id} deleted")
            return True
        except SQLAlchemyError as e:
            raise self._fail("delete", e) from e

    def max_of(self, field: str, filters: Optional[Dict[str, Any]] = None) -> Optional[Any]:
        query = self._filtered(db.session.query(func.max(self._column(field))), filters)
        try:
            return query.scalar()
        except SQLAlchemyError as e:
            raise self._fail("aggregate", e) from e
