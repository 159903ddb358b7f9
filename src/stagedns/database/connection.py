"""
PostgreSQL connection helper that resolves hosts through the staged resolver.

Managed databases are often reachable over IPv6 only, while many client
environments prefer IPv4 or have unreliable family-restricted lookups.
[connect()][stagedns.database.connection.connect] resolves the database host
once through [Resolver][stagedns.resolver.Resolver] and opens a single
``asyncpg`` connection to the returned address verbatim. Every other
connection parameter (DSN options, credentials, SSL mode) is passed through.

Pooling, query execution and retry-after-connect are left to the caller.

Examples:
    ```python
    config = DatabaseConfig.from_env()
    conn = await connect(config)
    try:
        await conn.fetchval("SELECT 1")
    finally:
        await conn.close()
    ```
"""

from __future__ import annotations

import os
from collections.abc import Mapping  # noqa: TC003
from typing import Any, Literal
from urllib.parse import urlsplit

import asyncpg
from pydantic import (
    BaseModel,
    Field,
    SecretStr,
    ValidationError,
    ValidationInfo,
    model_validator,
)

from stagedns.core.exceptions import ConfigurationError, ConnectivityError
from stagedns.core.logger import Logger
from stagedns.resolver import Resolver


logger = Logger("database")


class DatabaseConfig(BaseModel):
    """PostgreSQL connection parameters.

    Either ``url`` (a ``postgresql://`` DSN) or the discrete ``host`` /
    ``port`` / ``database`` / ``user`` fields describe the target. When both
    are present, the DSN wins for host and port.

    The password is never read from configuration files: unless given
    explicitly, it is loaded from the environment variable named by
    ``password_env``. A DSN may carry its own password instead.

    Warning:
        ``password`` is a ``SecretStr`` and never appears in string
        representations or serialized output.
    """

    url: str | None = Field(default=None, description="postgresql:// DSN")
    host: str = Field(default="localhost", min_length=1, description="Database hostname")
    port: int = Field(default=5432, ge=1, le=65535, description="Database port")
    database: str = Field(default="postgres", min_length=1, description="Database name")
    user: str = Field(default="postgres", min_length=1, description="Database user")
    password_env: str = Field(
        default="DB_PASSWORD",  # pragma: allowlist secret
        min_length=1,
        description="Environment variable name for the database password",
    )
    password: SecretStr | None = Field(default=None, description="Loaded from password_env")
    ssl: bool = Field(default=True, description="Require an encrypted connection")
    connect_timeout: float = Field(
        default=30.0, gt=0.0, le=300.0, description="Connection establishment timeout (seconds)"
    )

    @model_validator(mode="before")
    @classmethod
    def resolve_password(cls, data: Any, info: ValidationInfo) -> Any:
        """Load the password from the environment variable when not given.

        The variable is looked up in ``info.context["environ"]`` when a
        validation context supplies one, otherwise in ``os.environ``.
        """
        if isinstance(data, dict) and data.get("password") is None:
            environ = (info.context or {}).get("environ", os.environ)
            env_var = data.get("password_env", "DB_PASSWORD")  # pragma: allowlist secret
            value = environ.get(env_var)
            if value:
                data = {**data, "password": SecretStr(value)}
        return data

    @model_validator(mode="after")
    def validate_url(self) -> DatabaseConfig:
        if self.url is not None:
            parts = urlsplit(self.url)
            if parts.scheme not in ("postgres", "postgresql"):
                raise ValueError(f"url must use postgres:// or postgresql://, got {parts.scheme!r}")
            if not parts.hostname:
                raise ValueError("url must include a hostname")
            # urlsplit only parses the port lazily
            try:
                parts.port  # noqa: B018
            except ValueError as e:
                raise ValueError(f"url has an invalid port: {e}") from e
        return self

    @property
    def dsn_has_password(self) -> bool:
        return self.url is not None and urlsplit(self.url).password is not None

    @property
    def target_host(self) -> str:
        """Hostname handed to the resolver."""
        if self.url is not None:
            hostname = urlsplit(self.url).hostname
            if hostname:
                return hostname
        return self.host

    @property
    def target_port(self) -> int:
        if self.url is not None:
            port = urlsplit(self.url).port
            if port:
                return port
        return self.port

    @property
    def ssl_mode(self) -> Literal["require", "disable"]:
        return "require" if self.ssl else "disable"

    @classmethod
    def from_dict(
        cls, config_dict: dict[str, Any], environ: Mapping[str, str] | None = None
    ) -> DatabaseConfig:
        """Validate a configuration mapping.

        Args:
            config_dict: Field values.
            environ: Where ``password_env`` is looked up. Defaults to
                ``os.environ``.

        Raises:
            ConfigurationError: If the mapping does not match the schema.
        """
        context = None if environ is None else {"environ": environ}
        try:
            return cls.model_validate(config_dict, context=context)
        except ValidationError as e:
            raise ConfigurationError(f"invalid database configuration: {e}") from e

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> DatabaseConfig:
        """Build the configuration from environment variables.

        Reads ``DATABASE_URL``, ``DB_HOST``, ``DB_PORT``, ``DB_NAME``,
        ``DB_USER`` and ``DB_SSL`` (``"true"`` unless set otherwise). Unset
        variables fall back to the field defaults; the password follows
        ``password_env`` as usual.
        """
        env = os.environ if environ is None else environ
        data: dict[str, Any] = {}
        for key, field in (
            ("DATABASE_URL", "url"),
            ("DB_HOST", "host"),
            ("DB_PORT", "port"),
            ("DB_NAME", "database"),
            ("DB_USER", "user"),
        ):
            if env.get(key):
                data[field] = env[key]
        data["ssl"] = env.get("DB_SSL", "true").strip().lower() == "true"
        return cls.from_dict(data, environ=env)


async def connect(
    config: DatabaseConfig,
    resolver: Resolver | None = None,
) -> asyncpg.Connection[asyncpg.Record]:
    """Resolve the database host and open one connection to the result.

    Args:
        config: Connection parameters.
        resolver: Resolver to use; a default one is built when omitted.

    Returns:
        An open ``asyncpg`` connection. The caller owns and closes it.

    Raises:
        ResolutionExhaustedError: If the host could not be resolved. No
            connection is attempted.
        ConnectivityError: If the connection to the resolved address failed.
    """
    resolver = resolver or Resolver()
    host = config.target_host
    port = config.target_port

    logger.info("connection_starting", host=host, port=port, ssl=config.ssl_mode)
    resolved = await resolver.resolve(host)

    params: dict[str, Any] = {
        "host": resolved.address,
        "port": port,
        "ssl": config.ssl_mode,
        "timeout": config.connect_timeout,
    }
    if config.url is None:
        params["database"] = config.database
        params["user"] = config.user
    # Credentials inside the DSN take precedence over password_env
    if config.password is not None and not config.dsn_has_password:
        params["password"] = config.password.get_secret_value()

    try:
        conn = await asyncpg.connect(config.url, **params)
    except (asyncpg.PostgresError, asyncpg.InterfaceError, OSError, TimeoutError) as e:
        logger.error(
            "connection_failed",
            host=host,
            address=resolved.address,
            family=int(resolved.family),
            error=str(e) or type(e).__name__,
        )
        raise ConnectivityError(
            f"failed to connect to {host} at {resolved.address}:{port}: {e}"
        ) from e

    logger.info(
        "connection_established",
        host=host,
        address=resolved.address,
        family=int(resolved.family),
        stage=resolved.stage.value,
    )
    return conn
