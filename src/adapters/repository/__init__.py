"""Repository adapters - Database implementations."""

from .postgres import PostgresCategoryRepository, PostgresRegistrationRepository, run_migrations

__all__ = ["PostgresCategoryRepository", "PostgresRegistrationRepository", "run_migrations"]
