"""
Policy-enforcing access to the tenancy tables.

TenancyStore is the interceptor between callers and the database: every
select gets the caller's read predicate injected as a filter, every write is
checked against the write predicate before (`using`) and after (`with check`)
the change. A store built with ExecutionContext.elevated() skips the engine;
only provisioning and catalog seeding construct one.
"""

from contextlib import contextmanager
from typing import Any, Dict, Iterator, List, Optional, Sequence
import logging

from sqlalchemy import inspect, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from sqlalchemy.orm.exc import FlushError

from pos_backend.core.errors import ConstraintViolation, InvalidRequest, NotFound
from pos_backend.core.policy import ExecutionContext, PolicyDecision, PolicyEngine
from pos_backend.database.registry import TABLE_MODELS

logger = logging.getLogger(__name__)


def row_to_dict(obj) -> Dict[str, Any]:
    return {attr.key: getattr(obj, attr.key) for attr in inspect(obj).mapper.column_attrs}


class TenancyStore:
    def __init__(
        self,
        session: Session,
        context: ExecutionContext,
        engine: Optional[PolicyEngine] = None,
    ):
        self.session = session
        self.context = context
        self.engine = engine or PolicyEngine(session)

    @contextmanager
    def transaction(self) -> Iterator["TenancyStore"]:
        """Commit on success, roll back every write on any exception."""
        try:
            yield self
            self.session.commit()
        except Exception:
            self.session.rollback()
            raise

    # ------------------------------------------------------------------
    # helpers

    def _model(self, table: str):
        model = TABLE_MODELS.get(table)
        if model is None:
            raise InvalidRequest(f"Unknown table: {table}")
        return model

    def _columns(self, model) -> Dict[str, Any]:
        return {attr.key: attr.columns[0] for attr in inspect(model).column_attrs}

    def _check_keys(self, model, keys) -> None:
        unknown = set(keys) - set(self._columns(model))
        if unknown:
            raise InvalidRequest(f"Unknown column(s): {', '.join(sorted(unknown))}")

    def _scoped_query(self, model, decision: PolicyDecision, filters: Optional[Dict[str, Any]]):
        columns = self._columns(model)
        # Rows may have changed in another session since they were last loaded
        query = select(model).execution_options(populate_existing=True)
        if decision.readable is not None:
            if not decision.readable:
                return None
            query = query.where(columns[decision.policy.org_column].in_(sorted(decision.readable)))
        for key, value in (filters or {}).items():
            column = columns[key]
            if isinstance(value, (list, tuple, set, frozenset)):
                query = query.where(column.in_(list(value)))
            elif value is None:
                query = query.where(column.is_(None))
            else:
                query = query.where(column == value)
        return query

    def _order(self, model, query, order_by: Optional[Sequence[str]]):
        columns = self._columns(model)
        keys = list(order_by) if order_by else ["created_at"] + [c.key for c in inspect(model).primary_key]
        self._check_keys(model, [k.lstrip("-") for k in keys])
        for key in keys:
            column = columns[key.lstrip("-")]
            query = query.order_by(column.desc() if key.startswith("-") else column.asc())
        return query

    def _flush(self) -> None:
        try:
            self.session.flush()
        except IntegrityError as e:
            logger.info("Constraint violation: %s", e.orig.__class__.__name__)
            raise ConstraintViolation() from e
        except FlushError as e:
            # Primary key already present in this session's identity map
            raise ConstraintViolation() from e

    def _load(self, table: str, filters: Optional[Dict[str, Any]], for_update: bool = False):
        model = self._model(table)
        self._check_keys(model, (filters or {}).keys())
        decision = self.engine.evaluate(self.context, table)
        query = self._scoped_query(model, decision, filters)
        if query is None:
            return decision, []
        if for_update:
            query = query.with_for_update()
        query = self._order(model, query, None)
        return decision, list(self.session.scalars(query))

    # ------------------------------------------------------------------
    # operations

    def select(
        self,
        table: str,
        filters: Optional[Dict[str, Any]] = None,
        order_by: Optional[Sequence[str]] = None,
        limit: Optional[int] = None,
        offset: int = 0,
    ) -> List[Dict[str, Any]]:
        """Rows of `table` matching `filters` that the caller may read."""
        model = self._model(table)
        self._check_keys(model, (filters or {}).keys())
        decision = self.engine.evaluate(self.context, table)
        query = self._scoped_query(model, decision, filters)
        if query is None:
            return []
        query = self._order(model, query, order_by)
        if offset:
            query = query.offset(offset)
        if limit is not None:
            query = query.limit(limit)
        return [row_to_dict(obj) for obj in self.session.scalars(query)]

    def get(self, table: str, filters: Dict[str, Any]) -> Dict[str, Any]:
        rows = self.select(table, filters, limit=1)
        if not rows:
            raise NotFound()
        return rows[0]

    def insert(self, table: str, values: Dict[str, Any]) -> Dict[str, Any]:
        model = self._model(table)
        self._check_keys(model, values.keys())
        decision = self.engine.evaluate(self.context, table)
        decision.check_rows([values])
        obj = model(**values)
        self.session.add(obj)
        self._flush()
        return row_to_dict(obj)

    def update(self, table: str, filters: Dict[str, Any], values: Dict[str, Any]) -> List[Dict[str, Any]]:
        """Apply `values` to every readable row matching `filters`; all-or-nothing."""
        model = self._model(table)
        self._check_keys(model, values.keys())
        decision, objs = self._load(table, filters, for_update=True)
        if not objs:
            return []
        decision.check_rows(row_to_dict(obj) for obj in objs)
        decision.check_rows({**row_to_dict(obj), **values} for obj in objs)
        for obj in objs:
            for key, value in values.items():
                setattr(obj, key, value)
        self._flush()
        return [row_to_dict(obj) for obj in objs]

    def delete(self, table: str, filters: Dict[str, Any]) -> List[Dict[str, Any]]:
        """Delete every readable row matching `filters`; dependents cascade."""
        decision, objs = self._load(table, filters, for_update=True)
        if not objs:
            return []
        rows = [row_to_dict(obj) for obj in objs]
        decision.check_rows(rows)
        for obj in objs:
            self.session.delete(obj)
        self._flush()
        return rows
