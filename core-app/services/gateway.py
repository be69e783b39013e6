"""
Thin table-oriented CRUD client over the SQLAlchemy session.

Domain operations talk to the store only through ``DataGateway`` so that every
multi-step workflow has one explicit transaction boundary.
"""
import logging
from contextlib import contextmanager
from typing import Any, Dict, Iterable, Iterator, List, Optional, Sequence, Type

from sqlalchemy import func, inspect as sa_inspect, select as sa_select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import selectinload

from extensions import db
from utils.errors import (
    EntityNotFound, InventoryError, StoreError, ValidationError, WorkflowAborted
)

logger = logging.getLogger(__name__)
logger.addHandler(logging.NullHandler())


class _Marker:
    def __init__(self, name: str):
        self.name = name

    def __repr__(self):
        return self.name


# Filter sentinels: ``{'return_date': IS_NULL}``
IS_NULL = _Marker('IS_NULL')
NOT_NULL = _Marker('NOT_NULL')


class DataGateway:
    """CRUD over the models, mirroring select/insert/update/delete of a table API."""

    def __init__(self, session=None):
        self._session = session

    @property
    def session(self):
        return self._session if self._session is not None else db.session

    # -- reads -------------------------------------------------------------

    def _column(self, model, name: str):
        column = getattr(model, name, None)
        if column is None or name not in model.column_names():
            raise ValidationError(f'{model.__name__} has no column {name!r}')
        return column

    def _build(self, model, filters: Optional[Dict[str, Any]], order_by: Sequence[str],
               limit: Optional[int], embed: Iterable[str]):
        stmt = sa_select(model)
        for name, value in (filters or {}).items():
            column = self._column(model, name)
            if value is IS_NULL:
                stmt = stmt.where(column.is_(None))
            elif value is NOT_NULL:
                stmt = stmt.where(column.isnot(None))
            else:
                stmt = stmt.where(column == value)
        for key in order_by:
            descending = key.startswith('-')
            column = self._column(model, key.lstrip('-'))
            stmt = stmt.order_by(column.desc() if descending else column.asc())
        for rel in embed:
            # inspecting the mapper configures backrefs before getattr
            if rel not in sa_inspect(model).relationships:
                raise ValidationError(f'{model.__name__} has no relationship {rel!r}')
            stmt = stmt.options(selectinload(getattr(model, rel)))
        if limit is not None:
            stmt = stmt.limit(limit)
        return stmt

    def select(self, model: Type, filters: Optional[Dict[str, Any]] = None,
               order_by: Sequence[str] = (), limit: Optional[int] = None,
               embed: Iterable[str] = ()) -> List[Any]:
        stmt = self._build(model, filters, order_by, limit, embed)
        try:
            return list(self.session.scalars(stmt))
        except SQLAlchemyError as exc:
            logger.exception('select on %s failed', model.__tablename__)
            raise StoreError(f'Could not read {model.__tablename__}') from exc

    def first(self, model: Type, filters: Optional[Dict[str, Any]] = None,
              order_by: Sequence[str] = (), embed: Iterable[str] = ()) -> Optional[Any]:
        rows = self.select(model, filters, order_by=order_by, limit=1, embed=embed)
        return rows[0] if rows else None

    def get(self, model: Type, entity_id, embed: Iterable[str] = ()) -> Any:
        """Fetch one row by id or raise ``EntityNotFound``."""
        if entity_id is None:
            raise EntityNotFound(model.__name__, entity_id)
        row = self.first(model, {'id': entity_id}, embed=embed)
        if row is None:
            raise EntityNotFound(model.__name__, entity_id)
        return row

    def count(self, model: Type, filters: Optional[Dict[str, Any]] = None) -> int:
        inner = self._build(model, filters, (), None, ()).subquery()
        try:
            return self.session.scalar(sa_select(func.count()).select_from(inner)) or 0
        except SQLAlchemyError as exc:
            logger.exception('count on %s failed', model.__tablename__)
            raise StoreError(f'Could not count {model.__tablename__}') from exc

    # -- writes ------------------------------------------------------------

    def _flush(self, what: str):
        try:
            self.session.flush()
        except IntegrityError as exc:
            raise ValidationError(f'{what} conflicts with existing data') from exc

    def insert(self, entity: Type, /, **values) -> Any:
        # positional-only: several tables have a ``model`` column
        record = entity()
        record.update(**values)
        self.session.add(record)
        self._flush(f'New {entity.__name__}')
        return record

    def update(self, record, **values) -> Any:
        record.update(**values)
        self._flush(f'{type(record).__name__} {record.id}')
        return record

    def delete(self, record) -> None:
        self.session.delete(record)
        self._flush(f'Deleting {type(record).__name__} {record.id}')

    def delete_where(self, model: Type, filters: Dict[str, Any]) -> int:
        rows = self.select(model, filters)
        for row in rows:
            self.session.delete(row)
        self._flush(f'Deleting {model.__name__} rows')
        return len(rows)

    # -- transactions ------------------------------------------------------

    @contextmanager
    def transaction(self, name: str) -> Iterator['DataGateway']:
        """
        Run the enclosed writes as one unit.

        Commits on success. Domain errors roll back and propagate unchanged;
        store errors roll back and surface as ``WorkflowAborted(name)``.
        """
        try:
            yield self
            self.session.commit()
        except WorkflowAborted:
            self.session.rollback()
            raise
        except StoreError as exc:
            self.session.rollback()
            logger.error('%s aborted after a store error, rolled back', name)
            raise WorkflowAborted(name, exc) from exc
        except InventoryError:
            self.session.rollback()
            raise
        except SQLAlchemyError as exc:
            self.session.rollback()
            logger.exception('%s aborted, rolled back', name)
            raise WorkflowAborted(name, exc) from exc
        except Exception:
            self.session.rollback()
            raise


gateway = DataGateway()
