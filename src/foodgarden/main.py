"""Application entry point for the Food Garden backend server."""

import pydantic

from foodgarden.app import App
from foodgarden.config import Config
from foodgarden.logging import setup_logging
from foodgarden.web.runner import run_server


def load_config() -> Config:
    """Load configuration from the environment; invalid settings end the process."""
    try:
        return Config()
    except pydantic.ValidationError as e:
        raise SystemExit(f"Invalid configuration (FOODGARDEN_* environment): {e}") from e


def main() -> None:
    config = load_config()
    setup_logging(config.debug)
    run_server(App(config), config)


if __name__ == "__main__":
    main()
