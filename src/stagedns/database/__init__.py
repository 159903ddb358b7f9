"""PostgreSQL connection establishment through the staged resolver.

Attributes:
    DatabaseConfig: Connection parameters, loadable from ``DATABASE_URL`` /
        ``DB_*`` environment variables.
    connect: Resolve the host once and open a single ``asyncpg`` connection.
"""

from .connection import DatabaseConfig, connect


__all__ = ["DatabaseConfig", "connect"]
