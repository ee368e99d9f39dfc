"""
PostgreSQL repository adapters - Implement the registration and category ports.

This module provides the PostgreSQL implementation of the domain's
repository ports using psycopg3 with raw SQL.

Store Semantics:
----------------
1. **Store-assigned identity**: ids come from gen_random_uuid() and the
   creation timestamp from NOW(), both returned by INSERT ... RETURNING so
   the caller never needs a second round trip.

2. **Single-statement writes**: each insert is one statement committed on
   its own. Either the row exists with its id, or nothing was written.

3. **No retries**: driver errors are raised as PersistenceError with the
   original exception chained. Retrying is the caller's policy.

4. **Opaque ids**: ids that are not valid UUIDs are reported as absent
   rather than sent to the database, where the uuid cast would fail.
"""

import logging
from pathlib import Path
from typing import Any
from uuid import UUID

import psycopg
from psycopg.rows import dict_row
from psycopg_pool import ConnectionPool

from src.domain.exceptions import PersistenceError
from src.domain.models import Category, CategoryInput, RegistrationInput, RegistrationRecord

logger = logging.getLogger(__name__)

_REGISTRATION_COLUMNS = "id, name, email, phone, category_id, signature, photo, created_at"


def _is_uuid(value: str) -> bool:
    try:
        UUID(value)
    except ValueError:
        return False
    return True


def _to_registration(row: dict[str, Any]) -> RegistrationRecord:
    return RegistrationRecord(
        id=str(row["id"]),
        name=row["name"],
        email=row["email"],
        phone=row["phone"],
        category_id=row["category_id"],
        signature=row["signature"],
        photo=row["photo"],
        created_at=row["created_at"],
    )


def _to_category(row: dict[str, Any]) -> Category:
    return Category(id=str(row["id"]), name=row["name"], description=row["description"])


class PostgresRegistrationRepository:
    """
    Implements RegistrationRepository protocol via psycopg3.

    Uses structural subtyping - no explicit inheritance from Protocol.
    All SQL uses parameterized queries for security.
    """

    def __init__(self, pool: ConnectionPool) -> None:
        """
        Initialize repository with connection pool.

        Args:
            pool: psycopg3 ConnectionPool for database connections
        """
        self._pool = pool

    def insert(self, payload: RegistrationInput) -> RegistrationRecord:
        """
        Append a registration row and return it with its assigned id.

        Args:
            payload: Validated registration fields

        Returns:
            The stored record

        Raises:
            PersistenceError: If the INSERT failed
        """
        sql = f"""
            INSERT INTO registrations (name, email, phone, category_id, signature, photo)
            VALUES (%s, %s, %s, %s, %s, %s)
            RETURNING {_REGISTRATION_COLUMNS}
        """
        params = (
            payload.name,
            payload.email,
            payload.phone,
            payload.category_id,
            payload.signature,
            payload.photo,
        )

        try:
            with self._pool.connection() as conn, conn.cursor(row_factory=dict_row) as cursor:
                cursor.execute(sql, params)
                row = cursor.fetchone()
                conn.commit()
        except psycopg.Error as e:
            raise PersistenceError("Failed to insert registration") from e

        if row is None:
            raise PersistenceError("Insert returned no row")
        return _to_registration(row)

    def get_by_id(self, record_id: str) -> RegistrationRecord | None:
        """
        Read a registration by id.

        Raises:
            PersistenceError: If the query failed
        """
        if not _is_uuid(record_id):
            return None

        sql = f"SELECT {_REGISTRATION_COLUMNS} FROM registrations WHERE id = %s"
        try:
            with self._pool.connection() as conn, conn.cursor(row_factory=dict_row) as cursor:
                cursor.execute(sql, (record_id,))
                row = cursor.fetchone()
        except psycopg.Error as e:
            raise PersistenceError(f"Failed to read registration {record_id}") from e

        return _to_registration(row) if row is not None else None

    def list_recent(self) -> list[RegistrationRecord]:
        """
        List all registrations, newest first.

        Raises:
            PersistenceError: If the query failed
        """
        sql = f"SELECT {_REGISTRATION_COLUMNS} FROM registrations ORDER BY created_at DESC"
        try:
            with self._pool.connection() as conn, conn.cursor(row_factory=dict_row) as cursor:
                cursor.execute(sql)
                rows = cursor.fetchall()
        except psycopg.Error as e:
            raise PersistenceError("Failed to list registrations") from e

        return [_to_registration(row) for row in rows]


class PostgresCategoryRepository:
    """
    Implements CategoryRepository protocol via psycopg3.

    Uses structural subtyping - no explicit inheritance from Protocol.
    """

    def __init__(self, pool: ConnectionPool) -> None:
        self._pool = pool

    def list_all(self) -> list[Category]:
        sql = "SELECT id, name, description FROM categories ORDER BY name"
        return [_to_category(row) for row in self._fetch_all(sql, ())]

    def get_by_id(self, category_id: str) -> Category | None:
        if not _is_uuid(category_id):
            return None
        sql = "SELECT id, name, description FROM categories WHERE id = %s"
        row = self._fetch_one(sql, (category_id,))
        return _to_category(row) if row is not None else None

    def add(self, payload: CategoryInput) -> Category:
        sql = """
            INSERT INTO categories (name, description)
            VALUES (%s, %s)
            RETURNING id, name, description
        """
        row = self._fetch_one(sql, (payload.name, payload.description), commit=True)
        if row is None:
            raise PersistenceError("Insert returned no row")
        return _to_category(row)

    def update(self, category_id: str, payload: CategoryInput) -> Category | None:
        if not _is_uuid(category_id):
            return None
        sql = """
            UPDATE categories
            SET name = %s, description = %s, updated_at = NOW()
            WHERE id = %s
            RETURNING id, name, description
        """
        row = self._fetch_one(sql, (payload.name, payload.description, category_id), commit=True)
        return _to_category(row) if row is not None else None

    def delete(self, category_id: str) -> bool:
        if not _is_uuid(category_id):
            return False
        sql = "DELETE FROM categories WHERE id = %s"
        try:
            with self._pool.connection() as conn, conn.cursor() as cursor:
                cursor.execute(sql, (category_id,))
                conn.commit()
                return cursor.rowcount == 1
        except psycopg.Error as e:
            raise PersistenceError(f"Failed to delete category {category_id}") from e

    def _fetch_one(
        self, sql: str, params: tuple[Any, ...], commit: bool = False
    ) -> dict[str, Any] | None:
        try:
            with self._pool.connection() as conn, conn.cursor(row_factory=dict_row) as cursor:
                cursor.execute(sql, params)
                row = cursor.fetchone()
                if commit:
                    conn.commit()
                return row
        except psycopg.Error as e:
            raise PersistenceError("Category query failed") from e

    def _fetch_all(self, sql: str, params: tuple[Any, ...]) -> list[dict[str, Any]]:
        try:
            with self._pool.connection() as conn, conn.cursor(row_factory=dict_row) as cursor:
                cursor.execute(sql, params)
                return cursor.fetchall()
        except psycopg.Error as e:
            raise PersistenceError("Category query failed") from e


def run_migrations(pool: ConnectionPool) -> None:
    """
    Execute all SQL migration files from the migrations directory.

    Migrations are executed in sorted order (alphabetically by filename).
    Each migration should be idempotent (use IF NOT EXISTS, etc.).

    Args:
        pool: psycopg3 ConnectionPool instance
    """
    # Structure: src/adapters/repository/postgres.py -> migrations/
    migrations_dir = Path(__file__).parent.parent.parent.parent / "migrations"

    if not migrations_dir.exists():
        logger.warning("Migrations directory not found: %s", migrations_dir)
        return

    sql_files = sorted(migrations_dir.glob("*.sql"))

    if not sql_files:
        logger.info("No migration files found")
        return

    logger.info("Running %d migration(s)", len(sql_files))

    for sql_file in sql_files:
        logger.info("Executing migration: %s", sql_file.name)
        try:
            sql_content = sql_file.read_text()

            with pool.connection() as conn:
                conn.execute(sql_content)
                # pool.connection() commits on clean exit

            logger.info("Migration complete: %s", sql_file.name)
        except Exception as e:
            logger.error("Migration failed: %s - %s", sql_file.name, e)
            raise RuntimeError(f"Database migration failed: {sql_file.name}") from e
