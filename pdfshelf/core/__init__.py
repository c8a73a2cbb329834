"""
Core module providing foundational components.

This module contains the configuration loader, centralized logging setup,
and custom exception hierarchy. It has no internal dependencies.
"""

from .config_loader import get_config, reload_config, set_config, Config, TitleConfig
from .logger import get_logger, setup_logging
from .exceptions import (
    PDFShelfError,
    ConfigurationError,
    ExtractionError,
    ReaderInitError,
    ReaderAbortError,
    MalformedEncodingAbort,
    DatabaseError,
    SearchError
)

__all__ = [
    "get_config",
    "reload_config",
    "set_config",
    "Config",
    "TitleConfig",
    "get_logger",
    "setup_logging",
    "PDFShelfError",
    "ConfigurationError",
    "ExtractionError",
    "ReaderInitError",
    "ReaderAbortError",
    "MalformedEncodingAbort",
    "DatabaseError",
    "SearchError"
]
