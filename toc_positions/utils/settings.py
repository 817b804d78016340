import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

DEFAULT_BYTES_PER_POSITION = 1024
DEFAULT_LOG_LEVEL = "INFO"


def get_project_root() -> Path:
    """Returns the root directory of the project."""
    # This file is in toc_positions/utils/settings.py
    # Root is 3 levels up
    return Path(__file__).resolve().parent.parent.parent


@dataclass
class Settings:
    bytes_per_position: int = DEFAULT_BYTES_PER_POSITION
    log_level: str = DEFAULT_LOG_LEVEL


def load_settings() -> Settings:
    """Reads settings from the environment, after loading the project's .env file."""
    load_dotenv(get_project_root() / ".env")

    raw_bytes = os.getenv("TOC_POSITIONS_BYTES_PER_POSITION", str(DEFAULT_BYTES_PER_POSITION))
    try:
        bytes_per_position = int(raw_bytes)
    except ValueError:
        raise ValueError(f"TOC_POSITIONS_BYTES_PER_POSITION must be an integer, got {raw_bytes!r}")
    if bytes_per_position <= 0:
        raise ValueError("TOC_POSITIONS_BYTES_PER_POSITION must be positive")

    return Settings(
        bytes_per_position=bytes_per_position,
        log_level=os.getenv("TOC_POSITIONS_LOG_LEVEL", DEFAULT_LOG_LEVEL).upper(),
    )
