"""
Base Repository - Revyn Audit Platform
revyn_audit/repositories/base.py

Snowflake access shared by all repositories: one connection per call,
DictCursor rows, driver errors translated to repository exceptions.
"""

import json
import logging
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Any, Dict, Iterator, List, Optional, Sequence
from uuid import UUID

from snowflake.connector import DictCursor
from snowflake.connector.errors import DatabaseError, InterfaceError, ProgrammingError

from revyn_audit.core.exceptions import (
    DatabaseConnectionException,
    DuplicateEntityException,
    ForeignKeyViolationException,
    RepositoryException,
)
from revyn_audit.services.snowflake import get_snowflake_connection

logger = logging.getLogger(__name__)

Row = Dict[str, Any]


def _translate(table: str, error: DatabaseError) -> RepositoryException:
    """Map a driver error to the repository exception callers handle."""
    if isinstance(error, ProgrammingError):
        text = str(error).upper()
        if "UNIQUE" in text or "DUPLICATE" in text:
            return DuplicateEntityException(str(error))
        if "FOREIGN KEY" in text:
            return ForeignKeyViolationException(str(error))
        logger.warning("Query failed on %s: %s", table, error)
        return RepositoryException(f"Query error: {error}")
    logger.error("Database error on %s: %s", table, error)
    return RepositoryException(f"Database error: {error}")


def optional_uuid(value: Optional[str]) -> Optional[UUID]:
    return UUID(value) if value else None


def utc(dt: Optional[datetime]) -> Optional[datetime]:
    """TIMESTAMP_NTZ comes back naive; everything we store is UTC."""
    if dt is None:
        return None
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def variant(value: Any) -> Any:
    """VARIANT columns come back as JSON text; parse them."""
    if isinstance(value, str):
        return json.loads(value)
    return value


class BaseRepository:
    """Snowflake connection handling for one table family."""

    TABLE_NAME = ""

    @contextmanager
    def transaction(self) -> Iterator[Any]:
        """
        Cursor inside a single unit of work.

        Commits when the block exits cleanly, rolls back otherwise. The
        connection is always closed.
        """
        try:
            conn = get_snowflake_connection()
        except InterfaceError as e:
            logger.error("Snowflake connection failed: %s", e)
            raise DatabaseConnectionException(f"Failed to connect to Snowflake: {e}")

        cursor = conn.cursor(DictCursor)
        try:
            yield cursor
            conn.commit()
        except DatabaseError as e:
            conn.rollback()
            raise _translate(self.TABLE_NAME or "query", e)
        except Exception:
            conn.rollback()
            raise
        finally:
            cursor.close()
            conn.close()

    def fetch_one(self, sql: str, params: Sequence[Any] = ()) -> Optional[Row]:
        with self.transaction() as cursor:
            cursor.execute(sql, tuple(params))
            return cursor.fetchone()

    def fetch_all(self, sql: str, params: Sequence[Any] = ()) -> List[Row]:
        with self.transaction() as cursor:
            cursor.execute(sql, tuple(params))
            return cursor.fetchall() or []

    def execute(self, sql: str, params: Sequence[Any] = ()) -> int:
        """Run a write and return the affected row count."""
        with self.transaction() as cursor:
            cursor.execute(sql, tuple(params))
            return cursor.rowcount
