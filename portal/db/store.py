"""
Store - the record-level storage interface the services depend on.

Capabilities:
- get(table, id)                   fetch one row by primary key
- insert(table, values)            insert and return the stored row
- patch(table, id, values)         update some columns, return the row
- increment(table, id, column)     atomic counter bump
- query(index, *values)            rows matching a declared index
- scan(table)                      every row in a table

Rows come back as plain dicts. One short-lived session per call,
committed on success and rolled back on error.
"""

from typing import Any, Dict, List, Optional

from sqlalchemy import select, insert, update, func
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker

from portal.core.errors import NotFoundError
from portal.db.postgres import get_db_session
from portal.db.tables import metadata, INDEXES, PRIMARY_KEYS


def _row_to_dict(row) -> Optional[dict]:
    if row is None:
        return None
    return dict(row._mapping)


class Store:
    def __init__(self, engine: Engine):
        self.engine = engine
        self.session_factory = sessionmaker(bind=engine, autocommit=False, autoflush=False)

    def _table(self, name: str):
        try:
            return metadata.tables[name]
        except KeyError:
            raise ValueError(f"Unknown table '{name}'")

    def _pk(self, table):
        return table.c[PRIMARY_KEYS[table.name]]

    def get(self, table_name: str, record_id: int) -> Optional[dict]:
        table = self._table(table_name)
        with get_db_session(self.session_factory) as db:
            row = db.execute(select(table).where(self._pk(table) == record_id)).fetchone()
        return _row_to_dict(row)

    def insert(self, table_name: str, values: Dict[str, Any]) -> dict:
        table = self._table(table_name)
        with get_db_session(self.session_factory) as db:
            result = db.execute(insert(table).values(**values))
            record_id = result.inserted_primary_key[0]
            row = db.execute(select(table).where(self._pk(table) == record_id)).fetchone()
        return _row_to_dict(row)

    def patch(self, table_name: str, record_id: int, values: Dict[str, Any]) -> dict:
        table = self._table(table_name)
        pk = self._pk(table)
        with get_db_session(self.session_factory) as db:
            result = db.execute(update(table).where(pk == record_id).values(**values))
            if result.rowcount == 0:
                raise NotFoundError(f"{table_name} record {record_id} not found")
            row = db.execute(select(table).where(pk == record_id)).fetchone()
        return _row_to_dict(row)

    def increment(self, table_name: str, record_id: int, column: str, amount: int = 1) -> dict:
        """Add `amount` to an integer column in a single UPDATE."""
        table = self._table(table_name)
        pk = self._pk(table)
        col = table.c[column]
        with get_db_session(self.session_factory) as db:
            result = db.execute(
                update(table).where(pk == record_id).values({col: func.coalesce(col, 0) + amount})
            )
            if result.rowcount == 0:
                raise NotFoundError(f"{table_name} record {record_id} not found")
            row = db.execute(select(table).where(pk == record_id)).fetchone()
        return _row_to_dict(row)

    def query(
        self,
        index_name: str,
        *values: Any,
        order_by: str = None,
        descending: bool = False,
        limit: int = None
    ) -> List[dict]:
        """
        Rows whose index columns equal `values` (a prefix of the index is allowed).
        Default order is insertion order (primary key).
        """
        if index_name not in INDEXES:
            raise ValueError(f"Unknown index '{index_name}'")
        table, columns = INDEXES[index_name]
        if not values or len(values) > len(columns):
            raise ValueError(f"Index '{index_name}' takes 1..{len(columns)} values")

        stmt = select(table)
        for column, value in zip(columns, values):
            stmt = stmt.where(table.c[column] == value)
        return self._fetch(table, stmt, order_by, descending, limit)

    def scan(self, table_name: str, order_by: str = None, descending: bool = False, limit: int = None) -> List[dict]:
        table = self._table(table_name)
        return self._fetch(table, select(table), order_by, descending, limit)

    def unique(self, index_name: str, *values: Any) -> Optional[dict]:
        rows = self.query(index_name, *values, limit=2)
        if len(rows) > 1:
            raise ValueError(f"Index '{index_name}' matched more than one row")
        return rows[0] if rows else None

    def _fetch(self, table, stmt, order_by, descending, limit) -> List[dict]:
        order_cols = [table.c[order_by]] if order_by else []
        order_cols.append(self._pk(table))
        stmt = stmt.order_by(*[c.desc() if descending else c.asc() for c in order_cols])
        if limit is not None:
            stmt = stmt.limit(limit)
        with get_db_session(self.session_factory) as db:
            rows = db.execute(stmt).fetchall()
        return [_row_to_dict(r) for r in rows]
