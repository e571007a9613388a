"""Repository adapters - Database and in-memory implementations."""

from .memory import InMemoryStore, InMemoryUnitOfWork
from .postgres import PostgresUnitOfWork, check_health, run_migrations

__all__ = [
    "InMemoryStore",
    "InMemoryUnitOfWork",
    "PostgresUnitOfWork",
    "check_health",
    "run_migrations",
]
