"""Configuration management for Daybook."""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path

logger = logging.getLogger(__name__)

DAYBOOK_HOME = Path(os.environ.get("DAYBOOK_HOME", Path.home() / "daybook"))
CONFIG_FILE = DAYBOOK_HOME / "config" / "daybook.conf"
DATA_DIR = DAYBOOK_HOME / "data"

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class Config:
    """Daybook configuration."""

    db_path: Path = field(default_factory=lambda: DATA_DIR / "journal.db")
    recent_entries_limit: int = 50
    log_level: str = "WARNING"


def _unquote(value: str) -> str:
    """Strip surrounding quotes, or an inline comment from an unquoted value."""
    for quote in ('"', "'"):
        if value.startswith(quote):
            end_quote = value.find(quote, 1)
            return value[1:end_quote] if end_quote != -1 else value[1:]
    if "#" in value:
        value = value.split("#")[0].strip()
    return value


def load_config(path: Path | None = None) -> Config:
    """Load configuration from daybook.conf (KEY=value lines)."""
    config = Config()
    path = path or CONFIG_FILE

    if not path.exists():
        return config

    for line in path.read_text().splitlines():
        line = line.strip()
        if not line or line.startswith("#"):
            continue

        if "=" not in line:
            continue

        key, _, value = line.partition("=")
        key = key.strip().lower()
        value = _unquote(value.strip())

        match key:
            case "db_path":
                if value:
                    config.db_path = Path(value).expanduser()
            case "recent_entries_limit":
                try:
                    config.recent_entries_limit = int(value)
                except ValueError:
                    logger.warning(f"Invalid RECENT_ENTRIES_LIMIT: {value!r}")
            case "log_level":
                level = value.upper()
                if level in LOG_LEVELS:
                    config.log_level = level
                else:
                    logger.warning(f"Unknown LOG_LEVEL: {value!r}")

    return config
