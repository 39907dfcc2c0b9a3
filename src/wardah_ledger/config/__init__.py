"""Configuration module for Wardah Ledger."""

from wardah_ledger.config.logging import configure_logging, get_logger
from wardah_ledger.config.settings import Settings, get_settings

__all__ = ["Settings", "get_settings", "configure_logging", "get_logger"]
