from __future__ import annotations

import os
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Mapping

import yaml

from .errors import ConfigError

CONFIG_ENV_VAR = "TABLESCOPE_CONFIG"
DEFAULT_CONFIG_PATH = "config.yml"

_ENV_REF_RE = re.compile(r"\$\{([A-Za-z_][A-Za-z0-9_]*)\}")


@dataclass
class ConnectionConfig:
    user: str
    password: str | None = None
    host: str = "localhost"
    port: int = 3306
    database: str | None = None
    backend: str = "mysql"
    charset: str = "utf8mb4"
    connect_timeout: int = 10


@dataclass
class PoolConfig:
    min_size: int = 1
    max_size: int = 5
    pool_recycle: int = -1


@dataclass
class ObservabilityConfig:
    log_level: str = "info"


@dataclass
class AppConfig:
    connection: ConnectionConfig
    pool: PoolConfig = field(default_factory=PoolConfig)
    observability: ObservabilityConfig = field(default_factory=ObservabilityConfig)


def _resolve_env(value: Any, env: Mapping[str, str]) -> Any:
    if isinstance(value, str):

        def substitute(match: re.Match[str]) -> str:
            key = match.group(1)
            if key not in env:
                raise ConfigError(f"Environment variable {key} is required but not set")
            return env[key]

        return _ENV_REF_RE.sub(substitute, value)
    if isinstance(value, list):
        return [_resolve_env(v, env) for v in value]
    if isinstance(value, dict):
        return {k: _resolve_env(v, env) for k, v in value.items()}
    return value


def _section(value: Any, name: str) -> dict[str, Any]:
    if not isinstance(value, dict):
        raise ConfigError(f"Config section {name} must be a mapping")
    return value


def _as_int(value: Any, field_name: str) -> int:
    try:
        return int(value)
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"{field_name} must be an integer") from exc


def _validate_pool(pool: PoolConfig) -> PoolConfig:
    if pool.max_size < 1:
        raise ConfigError("pool.max_size must be at least 1")
    if pool.min_size < 0:
        raise ConfigError("pool.min_size cannot be negative")
    if pool.min_size > pool.max_size:
        raise ConfigError("pool.min_size cannot exceed pool.max_size")
    if pool.pool_recycle != -1 and pool.pool_recycle <= 0:
        raise ConfigError("pool.pool_recycle must be greater than 0 or -1 to disable")
    return pool


def config_path(env: Mapping[str, str] | None = None) -> Path:
    """Config file location, taken from TABLESCOPE_CONFIG when set."""
    env = os.environ if env is None else env
    return Path(env.get(CONFIG_ENV_VAR, DEFAULT_CONFIG_PATH))


def load_config(path: str | Path, env: Mapping[str, str] | None = None) -> AppConfig:
    env = os.environ if env is None else env
    raw = yaml.safe_load(Path(path).read_text()) or {}
    resolved = _resolve_env(raw, env)

    if not isinstance(resolved, dict):
        raise ConfigError("Config file must contain a mapping at the top level")
    try:
        connection_raw = resolved["connection"]
    except KeyError as exc:
        raise ConfigError(f"Missing config section: {exc.args[0]}") from exc
    connection_raw = _section(connection_raw, "connection")
    pool_raw = _section(resolved.get("pool") or {}, "pool")
    observability_raw = _section(resolved.get("observability") or {}, "observability")

    user = connection_raw.get("user")
    if not user:
        raise ConfigError("connection.user is required")

    connection = ConnectionConfig(
        user=str(user),
        password=connection_raw.get("password"),
        host=str(connection_raw.get("host", "localhost")),
        port=_as_int(connection_raw.get("port", 3306), "connection.port"),
        database=connection_raw.get("database"),
        backend=str(connection_raw.get("backend", "mysql")).lower(),
        charset=str(connection_raw.get("charset", "utf8mb4")),
        connect_timeout=_as_int(
            connection_raw.get("connect_timeout", 10), "connection.connect_timeout"
        ),
    )
    if not connection.host:
        raise ConfigError("connection.host cannot be empty")
    if connection.connect_timeout <= 0:
        raise ConfigError("connection.connect_timeout must be greater than 0")

    pool = _validate_pool(
        PoolConfig(
            min_size=_as_int(pool_raw.get("min_size", 1), "pool.min_size"),
            max_size=_as_int(pool_raw.get("max_size", 5), "pool.max_size"),
            pool_recycle=_as_int(pool_raw.get("pool_recycle", -1), "pool.pool_recycle"),
        )
    )

    observability = ObservabilityConfig(
        log_level=str(observability_raw.get("log_level", "info")),
    )

    return AppConfig(connection=connection, pool=pool, observability=observability)
