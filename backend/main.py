"""Backend entrypoint: configure logging and serve the finance API."""

from __future__ import annotations

import logging

import uvicorn

from shared import config


def configure_logging() -> None:
    logging.basicConfig(
        level=config.log_level(),
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )


def run() -> None:
    """Run the API with uvicorn using host and port from the environment."""

    configure_logging()
    uvicorn.run("backend.api:app", host=config.api_host(), port=config.api_port(), log_level=config.log_level().lower())


if __name__ == "__main__":
    run()
