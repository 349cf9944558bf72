"""Configuration management for mngr.

Supports TOML configuration format with auto-discovery.
"""

from __future__ import annotations

import logging
import re
import tomllib
from dataclasses import dataclass, field, replace
from pathlib import Path

CONFIG_FILENAME = "mngr.toml"
DEFAULT_NAME_PATTERN = r"^[a-zA-Z0-9]+[a-zA-Z0-9.]*$"


@dataclass
class ServerConfig:
    """Server configuration."""

    host: str = "127.0.0.1"
    port: int = 8080


@dataclass
class DataConfig:
    """Data root configuration."""

    root: Path = field(default_factory=lambda: Path("data"))


@dataclass
class NamesConfig:
    """Allow-list for names submitted through the new file/folder form."""

    pattern: re.Pattern[str] = field(default_factory=lambda: re.compile(DEFAULT_NAME_PATTERN))


@dataclass
class LoggingConfig:
    """Logging configuration."""

    level: str = "INFO"
    access_log: Path | None = None


@dataclass
class Config:
    """Application configuration."""

    server: ServerConfig
    data: DataConfig
    names: NamesConfig
    logging: LoggingConfig
    config_path: Path | None = None

    @classmethod
    def load(cls, config_path: Path | None = None) -> Config:
        """Load configuration from file.

        If config_path is provided, loads from that file.
        Otherwise, searches for mngr.toml in current directory and parents.

        Args:
            config_path: Optional explicit path to config file

        Returns:
            Config instance with defaults for missing sections

        Raises:
            FileNotFoundError: If explicit config_path doesn't exist
            ValueError: If configuration is invalid
        """
        if config_path is not None:
            if not config_path.exists():
                raise FileNotFoundError(f"Configuration file not found: {config_path}")
            return cls._load_from_file(config_path)

        discovered_path = cls._discover_config()
        if discovered_path is None:
            return cls.default()

        return cls._load_from_file(discovered_path)

    @classmethod
    def default(cls) -> Config:
        """Create config with all defaults."""
        return cls(
            server=ServerConfig(),
            data=DataConfig(),
            names=NamesConfig(),
            logging=LoggingConfig(),
        )

    @classmethod
    def _discover_config(cls) -> Path | None:
        """Search for config file in current directory and parents."""
        current = Path.cwd()
        while True:
            candidate = current / CONFIG_FILENAME
            if candidate.exists():
                return candidate
            parent = current.parent
            if parent == current:
                return None
            current = parent

    @classmethod
    def _load_from_file(cls, path: Path) -> Config:
        """Load configuration from a specific file.

        Raises:
            ValueError: If configuration is invalid
        """
        with path.open("rb") as f:
            data = tomllib.load(f)

        config_dir = path.parent

        return cls(
            server=cls._parse_server(data.get("server")),
            data=cls._parse_data(data.get("data"), config_dir),
            names=cls._parse_names(data.get("names")),
            logging=cls._parse_logging(data.get("logging"), config_dir),
            config_path=path,
        )

    @classmethod
    def _parse_server(cls, data: object) -> ServerConfig:
        if data is None:
            return ServerConfig()

        if not isinstance(data, dict):
            raise ValueError("server section must be a dictionary")

        host = data.get("host", "127.0.0.1")
        if not isinstance(host, str):
            raise ValueError("server.host must be a string")

        port = data.get("port", 8080)
        if not isinstance(port, int) or isinstance(port, bool):
            raise ValueError("server.port must be an integer")

        return ServerConfig(host=host, port=port)

    @classmethod
    def _parse_data(cls, data: object, config_dir: Path) -> DataConfig:
        """Parse data section. Relative roots are resolved against config_dir."""
        if data is None:
            return DataConfig(root=config_dir / "data")

        if not isinstance(data, dict):
            raise ValueError("data section must be a dictionary")

        root = data.get("root", "data")
        if not isinstance(root, str):
            raise ValueError("data.root must be a string")

        return DataConfig(root=config_dir / root)

    @classmethod
    def _parse_names(cls, data: object) -> NamesConfig:
        if data is None:
            return NamesConfig()

        if not isinstance(data, dict):
            raise ValueError("names section must be a dictionary")

        pattern = data.get("pattern", DEFAULT_NAME_PATTERN)
        if not isinstance(pattern, str):
            raise ValueError("names.pattern must be a string")
        try:
            compiled = re.compile(pattern)
        except re.error as e:
            raise ValueError(f"names.pattern is not a valid regular expression: {e}") from e

        return NamesConfig(pattern=compiled)

    @classmethod
    def _parse_logging(cls, data: object, config_dir: Path) -> LoggingConfig:
        if data is None:
            return LoggingConfig()

        if not isinstance(data, dict):
            raise ValueError("logging section must be a dictionary")

        level = data.get("level", "INFO")
        if not isinstance(level, str):
            raise ValueError("logging.level must be a string")
        level = level.upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"logging.level is not a known level: {level}")

        access_log = data.get("access_log")
        if access_log is not None and not isinstance(access_log, str):
            raise ValueError("logging.access_log must be a string")

        return LoggingConfig(
            level=level,
            access_log=config_dir / access_log if access_log is not None else None,
        )

    def with_overrides(
        self,
        *,
        host: str | None = None,
        port: int | None = None,
        data_root: Path | None = None,
        access_log: Path | None = None,
    ) -> Config:
        """Create a new Config with CLI overrides applied.

        Only non-None values override the existing config. The original
        Config is not modified.
        """
        server = self.server
        if host is not None or port is not None:
            server = replace(
                self.server,
                host=host if host is not None else self.server.host,
                port=port if port is not None else self.server.port,
            )

        data = self.data
        if data_root is not None:
            data = replace(self.data, root=data_root)

        logging_config = self.logging
        if access_log is not None:
            logging_config = replace(self.logging, access_log=access_log)

        return replace(self, server=server, data=data, logging=logging_config)
