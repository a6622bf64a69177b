"""
Shared Utilities
=================
Config I/O, logging, date parsing — kept separate from scoring logic.
"""

import logging
from datetime import date, datetime
from pathlib import Path
from typing import Optional, Union

import yaml


_PROJECT_ROOT = Path(__file__).resolve().parents[2]
_DEFAULT_CONFIG = _PROJECT_ROOT / "config" / "config.yaml"


def load_config(config_path: Optional[str] = None) -> dict:
    """Load YAML config, defaulting to the project-root config file."""
    path = Path(config_path) if config_path else _DEFAULT_CONFIG
    if not path.exists():
        raise FileNotFoundError(f"Config not found: {path}")
    with open(path, "r", encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


def setup_logging(level: int = logging.INFO) -> logging.Logger:
    """Project-wide logger."""
    logger = logging.getLogger("zen_oncall")
    if not logger.handlers:
        handler = logging.StreamHandler()
        fmt = logging.Formatter(
            "[%(asctime)s] %(levelname)-8s %(name)s — %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
        handler.setFormatter(fmt)
        logger.addHandler(handler)
    logger.setLevel(level)
    return logger


def ensure_dir(path) -> Path:
    """Create directory (and parents) if missing; return Path."""
    p = Path(path)
    p.mkdir(parents=True, exist_ok=True)
    return p


def parse_datetime(value: Union[str, datetime, date]) -> datetime:
    """Parse an ISO-8601 timestamp into a naive local datetime.

    Accepts the shapes the hosted database hands back: full timestamps
    (with or without a ``Z`` / offset suffix), bare dates, or already
    parsed objects.  Aware values are converted to local time.
    """
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        parsed = datetime(value.year, value.month, value.day)
    elif isinstance(value, str):
        text = value.strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError as exc:
            raise ValueError(f"Invalid timestamp: {value!r}") from exc
    else:
        raise ValueError(f"Invalid timestamp: {value!r}")

    if parsed.tzinfo is not None:
        parsed = parsed.astimezone().replace(tzinfo=None)
    return parsed


def parse_date(value: Union[str, datetime, date]) -> date:
    """Parse a calendar date (``YYYY-MM-DD`` or a full timestamp)."""
    if isinstance(value, datetime):
        return parse_datetime(value).date()
    if isinstance(value, date):
        return value
    if isinstance(value, str) and len(value.strip()) == 10:
        try:
            return date.fromisoformat(value.strip())
        except ValueError as exc:
            raise ValueError(f"Invalid date: {value!r}") from exc
    return parse_datetime(value).date()
