"""
Runtime settings and logging setup.

Settings are loaded from ``GLM_SANDBOX_*`` environment variables (and an
optional local ``.env``) with the defaults in :mod:`glm_sandbox.constants`.
"""

import logging
import sys
from functools import lru_cache
from typing import Optional

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from .constants import DEFAULT_SAMPLE_SIZE, MIN_SAMPLE_SIZE, MAX_SAMPLE_SIZE

ENV_PREFIX = "GLM_SANDBOX_"


class Settings(BaseSettings):
    """
    Sandbox settings.

    Attributes
    ----------
    app_name : str
        Display name (``GLM_SANDBOX_APP_NAME``)
    version : str
        Application version (``GLM_SANDBOX_VERSION``)
    debug : bool
        Enable DEBUG logging in :func:`configure_logging` (``GLM_SANDBOX_DEBUG``)
    default_sample_size : int
        Sample size for a fresh application state, 1 to 10,000
        (``GLM_SANDBOX_SAMPLE_SIZE``)
    seed : int, optional
        Seed for the application state's random source (``GLM_SANDBOX_SEED``)
    """

    model_config = SettingsConfigDict(
        env_prefix=ENV_PREFIX,
        env_file=".env",
        env_file_encoding="utf-8",
        env_ignore_empty=True,
        extra="ignore",
        frozen=True,
    )

    app_name: str = "GLM Learning Sandbox"
    version: str = "1.0.0"
    debug: bool = False
    default_sample_size: int = Field(
        DEFAULT_SAMPLE_SIZE,
        ge=MIN_SAMPLE_SIZE,
        le=MAX_SAMPLE_SIZE,
        validation_alias=AliasChoices(ENV_PREFIX + "SAMPLE_SIZE", "default_sample_size"),
    )
    seed: Optional[int] = None


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Process-wide settings (read once).

    Raises
    ------
    pydantic.ValidationError
        If an environment value does not parse or is out of range.
    """
    return Settings()


def configure_logging(debug: Optional[bool] = None, stream=None) -> None:
    """
    Attach a stream handler to the ``glm_sandbox`` logger.

    The library never configures logging on import; scripts and the
    worked examples call this explicitly.
    """
    if debug is None:
        debug = get_settings().debug

    logger = logging.getLogger("glm_sandbox")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG if debug else logging.INFO)


__all__ = ["Settings", "get_settings", "configure_logging", "ENV_PREFIX"]
