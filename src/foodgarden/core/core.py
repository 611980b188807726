from __future__ import annotations

import importlib
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Any, cast
from urllib.parse import urlparse

import structlog
from pymongo import AsyncMongoClient
from pymongo.asynchronous.database import AsyncDatabase
from pymongo.errors import PyMongoError

from foodgarden.config import Config
from foodgarden.errors import ConfigError

logger = structlog.get_logger(__name__)

DEFAULT_DATABASE_NAME = "foodsdb"


class Service:
    """Base class for services with direct database access."""

    def __init__(self, database: AsyncDatabase[dict[str, Any]]) -> None:
        self.database = database
        self._core: Core | None = None

    async def on_start(self) -> None:
        """Initialize service on application startup."""

    async def on_stop(self) -> None:
        """Cleanup service on application shutdown."""

    @property
    def core(self) -> Core:
        """Get the core application context."""
        if self._core is None:
            raise RuntimeError("Core not set for service")
        return self._core

    def set_core(self, core: Core) -> None:
        """Set the core application context."""
        self._core = core


class Services:
    """Service registry that automatically discovers and initializes services."""

    from foodgarden.core.modules.access.service import AccessService  # noqa: PLC0415
    from foodgarden.core.modules.food.service import FoodService  # noqa: PLC0415
    from foodgarden.core.modules.session.service import SessionService  # noqa: PLC0415

    session: SessionService
    access: AccessService
    food: FoodService

    def __init__(self, database: AsyncDatabase[dict[str, Any]]) -> None:
        """Initialize all services automatically using service configuration."""
        self._services: list[Service] = []
        self._database = database

        # Service configuration: (attribute_name, module_path, class_name)
        service_configs = [
            ("session", "foodgarden.core.modules.session.service", "SessionService"),
            ("access", "foodgarden.core.modules.access.service", "AccessService"),
            ("food", "foodgarden.core.modules.food.service", "FoodService"),
        ]

        for attr_name, module_path, class_name in service_configs:
            module = importlib.import_module(module_path)
            service_class = cast(type[Service], getattr(module, class_name))
            service_instance = service_class(database)
            setattr(self, attr_name, service_instance)
            self._services.append(service_instance)

    def set_core(self, core: Core) -> None:
        """Set core reference for all services."""
        for service in self._services:
            service.set_core(core)

    async def start_all(self) -> None:
        for service in self._services:
            await service.on_start()

    async def stop_all(self) -> None:
        for service in self._services:
            await service.on_stop()


class Core:
    """Container providing config, database, and all service instances.

    A database may be passed in explicitly (tests use an in-memory double);
    otherwise a MongoDB client is created from ``config.database_url``.
    """

    config: Config
    mongo_client: AsyncMongoClient[dict[str, Any]] | None
    database: AsyncDatabase[dict[str, Any]]
    services: Services

    def __init__(self, config: Config, database: AsyncDatabase[dict[str, Any]] | None = None) -> None:
        self.config = config
        if database is None:
            self.mongo_client = AsyncMongoClient(config.database_url)
            database_name = urlparse(config.database_url).path[1:] or DEFAULT_DATABASE_NAME
            database = self.mongo_client.get_database(database_name)
        else:
            self.mongo_client = None
        self.database = database
        self.services = Services(self.database)
        self.services.set_core(self)

    @asynccontextmanager
    async def lifespan(self) -> AsyncGenerator[None]:
        """Manage application lifecycle - startup and shutdown."""
        await self.on_start()
        try:
            yield
        finally:
            await self.on_stop()

    async def on_start(self) -> None:
        """Check the store is reachable, then start all services."""
        try:
            await self.database.command("ping")
        except PyMongoError as e:
            logger.error("mongodb_unreachable", error=str(e))
            raise ConfigError(f"Cannot connect to MongoDB: {e}") from e
        logger.info("mongodb_connected", database=self.database.name)
        await self.services.start_all()

    async def on_stop(self) -> None:
        """Stop services and close MongoDB connection on shutdown."""
        await self.services.stop_all()
        if self.mongo_client is not None:
            await self.mongo_client.aclose()
