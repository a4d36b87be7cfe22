"""Service configuration read from the environment and an optional .env file."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

log = logging.getLogger(__name__)

DEFAULT_PORT = "8080"
DEFAULT_MAX_IMAGE_SIZE = "10"


@dataclass(frozen=True)
class Config:
    """Port to listen on and the upload limit in megabytes, both as text."""

    port: str = DEFAULT_PORT
    max_image_size: str = DEFAULT_MAX_IMAGE_SIZE


def get_config() -> Config:
    """Load ``.env`` from the working directory if present, then read settings.

    Variables already set in the environment take precedence over the file.
    """
    env_file = Path(".env")
    if env_file.is_file():
        load_dotenv(env_file)
        log.info(".env file loaded successfully.")
    else:
        log.warning(
            ".env file not found or could not be loaded. "
            "Relying on system environment variables."
        )

    port = os.getenv("PORT", "")
    if not port:
        log.warning("No port found, defaulting to %s", DEFAULT_PORT)
        port = DEFAULT_PORT

    max_image_size = os.getenv("MAXIMAGESIZE", "")
    if not max_image_size:
        log.warning("No MAXIMAGESIZE found, defaulting to %s MB", DEFAULT_MAX_IMAGE_SIZE)
        max_image_size = DEFAULT_MAX_IMAGE_SIZE

    return Config(port=port, max_image_size=max_image_size)