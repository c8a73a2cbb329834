"""
Configuration loader for pdfshelf.

Loads settings from config.json and provides typed access via dataclasses.
Supports singleton pattern for global access and runtime reload capability.
"""

import json
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from .exceptions import ConfigurationError


APP_NAME = "pdfshelf"


@dataclass
class PathsConfig:
    """Configuration for file system paths."""
    database_path: Path
    logs_directory: Optional[Path]


@dataclass
class ExtractionConfig:
    """Configuration for PDF extraction settings."""
    primary_backend: str
    fallback_backend: str
    max_file_size_mb: int
    max_text_mb: int
    max_cover_mb: int
    timeout_seconds: float
    supported_extensions: List[str]


@dataclass
class IndexingConfig:
    """Configuration for indexing behavior."""
    log_progress_every: int


@dataclass
class TitleConfig:
    """
    Tunable constants of the title inference engine.

    Defaults match the values the engine was calibrated with, so a
    TitleConfig() is usable without any configuration file.
    """
    spacing_coefficient: float = 0.16
    font_size_tolerance: float = 4.0
    dictionary_ratio: float = 0.20
    min_title_length: int = 4
    max_title_length: int = 80
    min_token_length: int = 3
    max_token_length: int = 30
    dictionary_path: Optional[Path] = None


@dataclass
class SearchConfig:
    """Configuration for search functionality."""
    default_limit: int
    snippet_tokens: int
    tokenizer: str


@dataclass
class LoggingConfig:
    """Configuration for logging behavior."""
    level: str
    format: str
    max_file_size_mb: int
    backup_count: int


@dataclass
class Config:
    """
    Main configuration container holding all config sections.

    Provides singleton access via get_config() function.
    """
    paths: PathsConfig
    extraction: ExtractionConfig
    indexing: IndexingConfig
    title: TitleConfig
    search: SearchConfig
    logging: LoggingConfig
    project_root: Path = field(default_factory=Path)

    @classmethod
    def from_file(cls, config_path: Path) -> "Config":
        """
        Load configuration from a JSON file.

        Args:
            config_path: Path to the config.json file.

        Returns:
            Populated Config instance.

        Raises:
            ConfigurationError: If file is missing or invalid.
        """
        config_path = Path(config_path)

        if not config_path.exists():
            raise ConfigurationError(
                f"Configuration file not found: {config_path}",
                {"path": str(config_path)}
            )

        try:
            with open(config_path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigurationError(
                f"Invalid JSON in config file: {e}",
                {"path": str(config_path)}
            )

        project_root = config_path.parent.parent

        return cls._parse_config(data, project_root)

    @classmethod
    def defaults(cls, project_root: Path = None) -> "Config":
        """Build a Config from built-in defaults only."""
        return cls._parse_config({}, Path(project_root or Path.cwd()))

    @classmethod
    def _parse_config(cls, data: dict, project_root: Path) -> "Config":
        """Parse raw config dict into typed Config object."""
        paths_data = data.get("paths", {})
        logs_directory = paths_data.get("logs_directory")
        paths = PathsConfig(
            database_path=resolve_database_path(
                paths_data.get("database_path", "main.db"), project_root
            ),
            logs_directory=(
                cls._resolve_path(logs_directory, project_root)
                if logs_directory else None
            )
        )

        ext_data = data.get("extraction", {})
        extraction = ExtractionConfig(
            primary_backend=ext_data.get("primary_backend", "pypdf"),
            fallback_backend=ext_data.get("fallback_backend", "pdfplumber"),
            max_file_size_mb=ext_data.get("max_file_size_mb", 500),
            max_text_mb=ext_data.get("max_text_mb", 100),
            max_cover_mb=ext_data.get("max_cover_mb", 10),
            timeout_seconds=ext_data.get("timeout_seconds", 300),
            supported_extensions=ext_data.get("supported_extensions", [".pdf"])
        )

        idx_data = data.get("indexing", {})
        indexing = IndexingConfig(
            log_progress_every=idx_data.get("log_progress_every", 100)
        )

        title_data = data.get("title", {})
        dictionary_path = title_data.get("dictionary_path")
        title = TitleConfig(
            spacing_coefficient=float(title_data.get("spacing_coefficient", 0.16)),
            font_size_tolerance=float(title_data.get("font_size_tolerance", 4.0)),
            dictionary_ratio=float(title_data.get("dictionary_ratio", 0.20)),
            min_title_length=int(title_data.get("min_title_length", 4)),
            max_title_length=int(title_data.get("max_title_length", 80)),
            min_token_length=int(title_data.get("min_token_length", 3)),
            max_token_length=int(title_data.get("max_token_length", 30)),
            dictionary_path=(
                cls._resolve_path(dictionary_path, project_root)
                if dictionary_path else None
            )
        )
        cls._validate_title(title)

        search_data = data.get("search", {})
        search = SearchConfig(
            default_limit=search_data.get("default_limit", 10),
            snippet_tokens=search_data.get("snippet_tokens", 16),
            tokenizer=search_data.get("tokenizer", "unicode61")
        )

        log_data = data.get("logging", {})
        logging_cfg = LoggingConfig(
            level=log_data.get("level", "INFO"),
            format=log_data.get("format", "%(asctime)s - %(name)s - %(levelname)s - %(message)s"),
            max_file_size_mb=log_data.get("max_file_size_mb", 10),
            backup_count=log_data.get("backup_count", 5)
        )

        return cls(
            paths=paths,
            extraction=extraction,
            indexing=indexing,
            title=title,
            search=search,
            logging=logging_cfg,
            project_root=project_root
        )

    @staticmethod
    def _validate_title(title: TitleConfig) -> None:
        """Reject title settings the engine cannot work with."""
        if not 0.0 < title.dictionary_ratio <= 1.0:
            raise ConfigurationError(
                "title.dictionary_ratio must be in (0, 1]",
                {"dictionary_ratio": title.dictionary_ratio}
            )
        if title.max_title_length <= 0:
            raise ConfigurationError(
                "title.max_title_length must be positive",
                {"max_title_length": title.max_title_length}
            )
        if not 0 < title.min_token_length <= title.max_token_length:
            raise ConfigurationError(
                "title token length bounds are inconsistent",
                {
                    "min_token_length": title.min_token_length,
                    "max_token_length": title.max_token_length
                }
            )

    @staticmethod
    def _resolve_path(path_str: str, project_root: Path) -> Path:
        """Resolve a path string, making relative paths absolute."""
        path = Path(path_str).expanduser()
        if path.is_absolute():
            return path
        return project_root / path


def user_config_directory() -> Path:
    """Directory holding per-user pdfshelf data."""
    base = os.environ.get("XDG_CONFIG_HOME")
    root = Path(base) if base else Path.home() / ".config"
    return root / APP_NAME


def resolve_database_path(name: str, project_root: Path = None) -> Path:
    """
    Resolve a database name to a file path.

    A name containing a path separator is used as given (relative names
    resolve against project_root). A bare name is placed in the user
    config directory.

    Args:
        name: Database file name or path.
        project_root: Base for relative paths.

    Returns:
        Path to the database file.
    """
    if os.sep in name or (os.altsep and os.altsep in name):
        path = Path(name).expanduser()
        if path.is_absolute() or project_root is None:
            return path
        return project_root / path

    return user_config_directory() / name


_config_instance: Optional[Config] = None


def get_config(config_path: Path = None) -> Config:
    """
    Get the singleton Config instance.

    Args:
        config_path: Optional path to config file. If not provided,
                    searches upward from current directory.

    Returns:
        The global Config instance.

    Raises:
        ConfigurationError: If config cannot be loaded.
    """
    global _config_instance

    if _config_instance is None or config_path is not None:
        if config_path is None:
            config_path = _find_config_file()
        _config_instance = Config.from_file(config_path)

    return _config_instance


def _find_config_file() -> Path:
    """Search upward from current directory to find config/config.json."""
    current = Path.cwd()

    for _ in range(10):
        config_path = current / "config" / "config.json"
        if config_path.exists():
            return config_path

        parent = current.parent
        if parent == current:
            break
        current = parent

    raise ConfigurationError(
        "Could not find config/config.json in current directory or parents"
    )


def set_config(config: Config) -> Config:
    """
    Install config as the singleton instance.

    Args:
        config: Configuration to use from now on.

    Returns:
        The installed Config.
    """
    global _config_instance
    _config_instance = config
    return _config_instance


def reload_config(config_path: Path = None) -> Config:
    """
    Force reload of configuration.

    Args:
        config_path: Optional path to config file.

    Returns:
        Fresh Config instance.
    """
    global _config_instance
    _config_instance = None
    return get_config(config_path)
