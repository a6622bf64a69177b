"""Shared utilities — config loading, logging, date parsing."""

from zen_oncall.utils.helpers import (
    load_config,
    setup_logging,
    ensure_dir,
    parse_datetime,
    parse_date,
)

__all__ = ["load_config", "setup_logging", "ensure_dir", "parse_datetime", "parse_date"]
