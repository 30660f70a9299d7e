"""
Configuration for text2world.

Fixed generation geometry lives here as module constants; server settings
are read from the environment (prefix ``TEXT2WORLD_``).
"""

import logging
from typing import List

import structlog
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


# Grid subdivisions per side; the heightmap has RESOLUTION + 1 samples per side
RESOLUTION = 128

# Side length of the square terrain footprint in world units
TERRAIN_SIZE = 100.0

BANDS = ("north", "center", "south")

TERRAIN_COLOR = "#7a8b5c"


class Settings(BaseSettings):
    """Server and logging settings."""

    model_config = SettingsConfigDict(env_prefix="TEXT2WORLD_", env_file=".env", extra="ignore")

    # API
    api_host: str = Field(default="0.0.0.0", description="API host")
    api_port: int = Field(default=8000, description="API port")
    cors_origins: List[str] = Field(default_factory=lambda: ["*"], description="Allowed CORS origins")

    # Logging
    log_level: str = Field(default="INFO", description="Log level")


def configure_logging(level: str = "INFO") -> None:
    """Install the structlog processor chain on top of stdlib logging."""

    logging.basicConfig(format="%(message)s", level=getattr(logging, level.upper(), logging.INFO))

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.JSONRenderer()
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )
