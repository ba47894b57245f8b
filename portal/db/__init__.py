"""
Database module - SQL store and MongoDB file storage connections.
"""
from portal.db.postgres import get_engine, init_schema, test_db_connection
from portal.db.store import Store

__all__ = [
    "get_engine",
    "init_schema",
    "test_db_connection",
    "Store"
]
