"""Uvicorn server runner with custom configuration."""

from urllib.parse import urlparse

import structlog
import uvicorn
from uvicorn.config import LOGGING_CONFIG

from foodgarden.app import App
from foodgarden.config import Config
from foodgarden.core.core import DEFAULT_DATABASE_NAME
from foodgarden.web.server import create_fastapi_app

logger = structlog.get_logger(__name__)


def describe_store(database_url: str) -> dict[str, str]:
    """Host and database name of the store, without credentials, for startup logs."""
    parsed = urlparse(database_url)
    return {"store_host": parsed.hostname or "", "store_database": parsed.path[1:] or DEFAULT_DATABASE_NAME}


def run_server(app: App, config: Config) -> None:
    """Run Uvicorn; startup fails (lifespan="on") when the store cannot be reached."""
    fastapi_app = create_fastapi_app(app, config)

    logger.info(
        "starting_server",
        host=config.host,
        port=config.port,
        cookie_mode="production" if config.production else "development",
        cors_origins=config.cors_origins,
        **describe_store(config.database_url),
    )

    log_config = LOGGING_CONFIG.copy()
    log_config["formatters"]["access"]["fmt"] = '%(asctime)s - "%(request_line)s" %(status_code)s'
    log_config["formatters"]["default"]["fmt"] = "%(asctime)s - %(levelname)s - %(message)s"

    uvicorn.run(
        fastapi_app, host=config.host, port=config.port, log_config=log_config, access_log=True, lifespan="on"
    )
