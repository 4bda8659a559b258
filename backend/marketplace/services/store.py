"""
Persistence gateway over a SQLAlchemy session.

Every driver failure is rolled back and surfaced as ``StoreUnavailable``;
integrity violations (unique constraints, CHECKs) as ``StoreConflict``.
Nothing above this module sees a raw SQLAlchemy exception.
"""
import logging
import uuid

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from marketplace.errors import StoreConflict, StoreUnavailable

logger = logging.getLogger("marketplace.store")


class Store:
    def __init__(self, db: Session):
        self.db = db

    def _fail(self, action: str, model, exc: SQLAlchemyError):
        self.db.rollback()
        if isinstance(exc, IntegrityError):
            logger.info("%s %s rejected by constraint: %s", action, model.__tablename__, exc.orig)
            raise StoreConflict(str(exc.orig)) from exc
        logger.error("%s %s failed: %s", action, model.__tablename__, exc)
        raise StoreUnavailable() from exc

    def insert(self, model, fields: dict):
        record = model(id=str(uuid.uuid4()), **fields)
        try:
            self.db.add(record)
            self.db.commit()
            self.db.refresh(record)
        except SQLAlchemyError as exc:
            self._fail("insert", model, exc)
        return record

    def update(self, model, record_id: str, fields: dict, *expected):
        """Conditional update of one row.

        ``expected`` criteria are added to the WHERE clause, so a status
        check and the write happen in a single statement. Returns the fresh
        record, or None when no row matched.
        """
        try:
            matched = (
                self.db.query(model)
                .filter(model.id == record_id, *expected)
                .update(fields, synchronize_session=False)
            )
            self.db.commit()
        except SQLAlchemyError as exc:
            self._fail("update", model, exc)
        if not matched:
            return None
        # commit() expired the identity map, so this reads the new row state
        return self.query_one(model, model.id == record_id)

    def update_where(self, model, criteria: list, fields: dict) -> int:
        try:
            matched = (
                self.db.query(model)
                .filter(*criteria)
                .update(fields, synchronize_session=False)
            )
            self.db.commit()
        except SQLAlchemyError as exc:
            self._fail("update", model, exc)
        return matched

    def query_one(self, model, *criteria, options=()):
        try:
            return self.db.query(model).options(*options).filter(*criteria).first()
        except SQLAlchemyError as exc:
            self._fail("query", model, exc)

    def query_many(self, model, *criteria, order_by=(), limit: int | None = None, options=()):
        try:
            query = self.db.query(model).options(*options).filter(*criteria).order_by(*order_by)
            if limit is not None:
                query = query.limit(limit)
            return query.all()
        except SQLAlchemyError as exc:
            self._fail("query", model, exc)
