"""
PostgreSQL repository adapter - Implements the persistence ports.

This module provides the PostgreSQL implementation of the domain's
unit of work and repository ports using psycopg3 with raw SQL.

Consistency Design:
-------------------
1. **One transaction per unit**: PostgresUnitOfWork checks a connection out
   of the pool, runs every repository call on it and commits only when
   the workflow calls commit(). Anything else is rolled back.

2. **Uniqueness at write time**: customers.email and customers.pin carry
   UNIQUE constraints. INSERT ... ON CONFLICT DO NOTHING waits for any
   concurrent transaction holding the same key and returns no row if it
   committed, so two registrations can never both succeed.

3. **Single redemption**: token lookup uses SELECT ... FOR UPDATE, and the
   DELETE reports its rowcount, so a token activates its customer once.
"""

import logging
from pathlib import Path
from types import TracebackType

from psycopg import Connection
from psycopg_pool import ConnectionPool

from onboarding.domain.models import ConfirmToken, Customer

logger = logging.getLogger(__name__)

_CUSTOMER_COLUMNS = "id, name, surname, email, pin, password_hash, enabled"


def _customer_from_row(row: tuple) -> Customer:
    return Customer(
        id=row[0],
        name=row[1],
        surname=row[2],
        email=row[3],
        pin=row[4],
        password_hash=row[5],
        enabled=row[6],
    )


class PostgresCustomerRepository:
    """
    Implements CustomerRepository protocol on a single connection.

    Uses structural subtyping - no explicit inheritance from Protocol.
    All SQL uses parameterized queries.
    """

    def __init__(self, conn: Connection) -> None:
        self._conn = conn

    def find_by_email(self, email: str) -> Customer | None:
        sql = f"SELECT {_CUSTOMER_COLUMNS} FROM customers WHERE email = %s"
        with self._conn.cursor() as cursor:
            cursor.execute(sql, (email,))
            row = cursor.fetchone()
        return _customer_from_row(row) if row is not None else None

    def find_by_pin(self, pin: str) -> Customer | None:
        sql = f"SELECT {_CUSTOMER_COLUMNS} FROM customers WHERE pin = %s"
        with self._conn.cursor() as cursor:
            cursor.execute(sql, (pin,))
            row = cursor.fetchone()
        return _customer_from_row(row) if row is not None else None

    def add(self, customer: Customer) -> Customer | None:
        """
        Insert a customer, relying on the UNIQUE constraints for email and pin.

        Returns:
            The customer with its id set, or None if email or pin is taken
        """
        sql = """
            INSERT INTO customers (name, surname, email, pin, password_hash, enabled)
            VALUES (%s, %s, %s, %s, %s, %s)
            ON CONFLICT DO NOTHING
            RETURNING id
        """
        with self._conn.cursor() as cursor:
            cursor.execute(
                sql,
                (
                    customer.name,
                    customer.surname,
                    customer.email,
                    customer.pin,
                    customer.password_hash,
                    customer.enabled,
                ),
            )
            row = cursor.fetchone()
        if row is None:
            return None
        customer.id = row[0]
        return customer

    def enable(self, customer: Customer) -> None:
        with self._conn.cursor() as cursor:
            cursor.execute("UPDATE customers SET enabled = TRUE WHERE id = %s", (customer.id,))
        customer.enabled = True


class PostgresConfirmTokenRepository:
    """Implements ConfirmTokenRepository protocol on a single connection."""

    def __init__(self, conn: Connection) -> None:
        self._conn = conn

    def add(self, token: ConfirmToken) -> ConfirmToken:
        sql = """
            INSERT INTO confirm_tokens (token, email, customer_id, created_at)
            VALUES (%s, %s, %s, %s)
        """
        with self._conn.cursor() as cursor:
            cursor.execute(sql, (token.token, token.email, token.customer_id, token.created_at))
        return token

    def find_by_token(self, value: str) -> ConfirmToken | None:
        # Row lock serializes concurrent redemptions of the same token
        sql = """
            SELECT token, email, customer_id, created_at
            FROM confirm_tokens
            WHERE token = %s
            FOR UPDATE
        """
        with self._conn.cursor() as cursor:
            cursor.execute(sql, (value,))
            row = cursor.fetchone()
        if row is None:
            return None
        return ConfirmToken(token=row[0], email=row[1], customer_id=row[2], created_at=row[3])

    def delete(self, token: ConfirmToken) -> bool:
        with self._conn.cursor() as cursor:
            cursor.execute("DELETE FROM confirm_tokens WHERE token = %s", (token.token,))
            return cursor.rowcount == 1


class PostgresUnitOfWork:
    """
    Implements UnitOfWork protocol with one pooled connection per unit.

    Connections are checked out with getconn() rather than the pool's
    connection() context, which would commit on a clean exit.
    """

    def __init__(self, pool: ConnectionPool) -> None:
        """
        Initialize unit of work with connection pool.

        Args:
            pool: psycopg3 ConnectionPool for database connections
        """
        self._pool = pool
        self._conn: Connection | None = None
        self._committed = False

    def __enter__(self) -> "PostgresUnitOfWork":
        self._conn = self._pool.getconn()
        self._committed = False
        self.customers = PostgresCustomerRepository(self._conn)
        self.tokens = PostgresConfirmTokenRepository(self._conn)
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        conn = self._conn
        self._conn = None
        if conn is None:
            return
        try:
            if not self._committed:
                conn.rollback()
        finally:
            self._pool.putconn(conn)

    def commit(self) -> None:
        if self._conn is None:
            raise RuntimeError("Unit of work is not active")
        self._conn.commit()
        self._committed = True


def check_health(pool: ConnectionPool) -> None:
    """Run a trivial query; raises if the database is unreachable."""
    with pool.connection() as conn:
        conn.execute("SELECT 1")


def run_migrations(pool: ConnectionPool) -> None:
    """
    Execute all SQL migration files from the migrations directory.

    Migrations are executed in sorted order (alphabetically by filename).
    Each migration should be idempotent (use IF NOT EXISTS, etc.).

    Args:
        pool: psycopg3 ConnectionPool instance
    """
    # Structure: onboarding/adapters/repository/postgres.py -> migrations/
    migrations_dir = Path(__file__).parent.parent.parent.parent / "migrations"

    if not migrations_dir.exists():
        logger.warning(f"Migrations directory not found: {migrations_dir}")
        return

    sql_files = sorted(migrations_dir.glob("*.sql"))

    if not sql_files:
        logger.info("No migration files found")
        return

    logger.info(f"Running {len(sql_files)} migration(s)")

    for sql_file in sql_files:
        logger.info(f"Executing migration: {sql_file.name}")
        try:
            sql_content = sql_file.read_text()

            with pool.connection() as conn:
                conn.execute(sql_content)

            logger.info(f"Migration complete: {sql_file.name}")
        except Exception as e:
            logger.error(f"Migration failed: {sql_file.name} - {e}")
            raise RuntimeError(f"Database migration failed: {sql_file.name}") from e
