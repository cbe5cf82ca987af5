"""
Driver registry.

    from tablescope.drivers import open_driver_from_file

    driver = await open_driver_from_file("config.yml")
    async with driver:
        await driver.list_databases(ignore_default_schemas=True)
"""

from __future__ import annotations

from pathlib import Path

from ..config import AppConfig, config_path, load_config
from ..errors import ConfigError
from ..logging_utils import configure_logging
from .base import Driver
from .mysql import DEFAULT_SCHEMAS, MySQLDriver

__all__ = [
    "DEFAULT_SCHEMAS",
    "DRIVERS",
    "Driver",
    "MySQLDriver",
    "open_driver",
    "open_driver_from_file",
]

DRIVERS: dict[str, type[Driver]] = {
    "mysql": MySQLDriver,
    "mariadb": MySQLDriver,
}


async def open_driver(config: AppConfig) -> Driver:
    """Create the driver named by ``connection.backend``."""
    backend = config.connection.backend.lower().strip()
    driver_cls = DRIVERS.get(backend)
    if driver_cls is None:
        raise ConfigError(
            f"Unknown backend '{backend}'. "
            f"Supported: {', '.join(sorted(DRIVERS))}"
        )
    return await driver_cls.create(config.connection, config.pool)


async def open_driver_from_file(path: str | Path | None = None) -> Driver:
    """Load configuration, apply its log level, and open the driver.

    Args:
        path: Config file. Defaults to ``$TABLESCOPE_CONFIG`` or ``config.yml``.
    """
    config = load_config(path if path is not None else config_path())
    configure_logging(config.observability.log_level)
    return await open_driver(config)
