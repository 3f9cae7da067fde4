"""Configuration management for Pagestage.

Supports TOML configuration format with auto-discovery.
"""

from __future__ import annotations

import tomllib
from dataclasses import dataclass, field, replace
from pathlib import Path

CONFIG_FILENAME = "pagestage.toml"


@dataclass
class ServerConfig:
    """Server configuration."""

    host: str = "127.0.0.1"
    port: int = 8080
    admin_host_prefix: str = "cms."


@dataclass
class ContentConfig:
    """Content source configuration."""

    manifest: Path = field(default_factory=lambda: Path("content.toml"))
    layouts_dir: Path | None = None
    attachments_dir: Path = field(default_factory=lambda: Path("attachments"))


@dataclass
class CacheConfig:
    """Page cache configuration."""

    enabled: bool = True
    cache_dir: Path = field(default_factory=lambda: Path(".cache"))


@dataclass
class ErrorsConfig:
    """Error page configuration."""

    not_found: str = "/system/not_found"
    access_denied: str = "/system/access_denied"
    server_error: str = "/system/server_error"
    raw_errors_for_editors: bool = True
    raw_errors_on_admin_site: bool = True


@dataclass
class SessionConfig:
    """Session cookie configuration."""

    secret: str = "pagestage-development-secret"
    cookie_name: str = "pagestage_session"


@dataclass
class Config:
    """Application configuration."""

    server: ServerConfig
    content: ContentConfig
    cache: CacheConfig
    errors: ErrorsConfig
    session: SessionConfig
    config_path: Path | None = None

    @classmethod
    def load(cls, config_path: Path | None = None) -> Config:
        """Load configuration from file.

        If config_path is provided, loads from that file.
        Otherwise, searches for pagestage.toml in current directory and parents.

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
            return cls._default()

        return cls._load_from_file(discovered_path)

    @classmethod
    def _discover_config(cls) -> Path | None:
        """Search for config file in current directory and parents.

        Returns:
            Path to config file or None if not found
        """
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
    def _default(cls) -> Config:
        """Create config with all defaults."""
        return cls(
            server=ServerConfig(),
            content=ContentConfig(),
            cache=CacheConfig(),
            errors=ErrorsConfig(),
            session=SessionConfig(),
        )

    @classmethod
    def _load_from_file(cls, path: Path) -> Config:
        """Load configuration from a specific file.

        Args:
            path: Path to TOML configuration file

        Returns:
            Config instance

        Raises:
            ValueError: If configuration is invalid
        """
        with path.open("rb") as f:
            data = tomllib.load(f)

        config_dir = path.parent

        return cls(
            server=cls._parse_server(data.get("server")),
            content=cls._parse_content(data.get("content"), config_dir),
            cache=cls._parse_cache(data.get("cache"), config_dir),
            errors=cls._parse_errors(data.get("errors")),
            session=cls._parse_session(data.get("session")),
            config_path=path,
        )

    @classmethod
    def _parse_server(cls, data: object) -> ServerConfig:
        """Parse server configuration section."""
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

        admin_host_prefix = data.get("admin_host_prefix", "cms.")
        if not isinstance(admin_host_prefix, str):
            raise ValueError("server.admin_host_prefix must be a string")

        return ServerConfig(host=host, port=port, admin_host_prefix=admin_host_prefix)

    @classmethod
    def _parse_content(cls, data: object, config_dir: Path) -> ContentConfig:
        """Parse content configuration section.

        Args:
            data: Raw content section data
            config_dir: Directory containing config file (for relative paths)

        Returns:
            ContentConfig instance
        """
        if data is None:
            return ContentConfig(
                manifest=config_dir / "content.toml",
                attachments_dir=config_dir / "attachments",
            )

        if not isinstance(data, dict):
            raise ValueError("content section must be a dictionary")

        manifest = data.get("manifest", "content.toml")
        if not isinstance(manifest, str):
            raise ValueError("content.manifest must be a string")

        layouts_dir = data.get("layouts_dir")
        if layouts_dir is not None and not isinstance(layouts_dir, str):
            raise ValueError("content.layouts_dir must be a string")

        attachments_dir = data.get("attachments_dir", "attachments")
        if not isinstance(attachments_dir, str):
            raise ValueError("content.attachments_dir must be a string")

        return ContentConfig(
            manifest=config_dir / manifest,
            layouts_dir=config_dir / layouts_dir if layouts_dir is not None else None,
            attachments_dir=config_dir / attachments_dir,
        )

    @classmethod
    def _parse_cache(cls, data: object, config_dir: Path) -> CacheConfig:
        """Parse cache configuration section."""
        if data is None:
            return CacheConfig(cache_dir=config_dir / ".cache")

        if not isinstance(data, dict):
            raise ValueError("cache section must be a dictionary")

        enabled = data.get("enabled", True)
        if not isinstance(enabled, bool):
            raise ValueError("cache.enabled must be a boolean")

        cache_dir = data.get("cache_dir", ".cache")
        if not isinstance(cache_dir, str):
            raise ValueError("cache.cache_dir must be a string")

        return CacheConfig(enabled=enabled, cache_dir=config_dir / cache_dir)

    @classmethod
    def _parse_errors(cls, data: object) -> ErrorsConfig:
        """Parse errors configuration section."""
        if data is None:
            return ErrorsConfig()

        if not isinstance(data, dict):
            raise ValueError("errors section must be a dictionary")

        defaults = ErrorsConfig()
        paths: dict[str, str] = {}
        for key in ("not_found", "access_denied", "server_error"):
            value = data.get(key, getattr(defaults, key))
            if not isinstance(value, str) or not value.startswith("/"):
                raise ValueError(f"errors.{key} must be a path starting with '/'")
            paths[key] = value

        flags: dict[str, bool] = {}
        for key in ("raw_errors_for_editors", "raw_errors_on_admin_site"):
            value = data.get(key, getattr(defaults, key))
            if not isinstance(value, bool):
                raise ValueError(f"errors.{key} must be a boolean")
            flags[key] = value

        return ErrorsConfig(**paths, **flags)

    @classmethod
    def _parse_session(cls, data: object) -> SessionConfig:
        """Parse session configuration section."""
        if data is None:
            return SessionConfig()

        if not isinstance(data, dict):
            raise ValueError("session section must be a dictionary")

        secret = data.get("secret", SessionConfig.secret)
        if not isinstance(secret, str) or not secret:
            raise ValueError("session.secret must be a non-empty string")

        cookie_name = data.get("cookie_name", SessionConfig.cookie_name)
        if not isinstance(cookie_name, str):
            raise ValueError("session.cookie_name must be a string")

        return SessionConfig(secret=secret, cookie_name=cookie_name)

    def with_overrides(
        self,
        *,
        host: str | None = None,
        port: int | None = None,
        manifest: Path | None = None,
        cache_dir: Path | None = None,
        cache_enabled: bool | None = None,
    ) -> Config:
        """Create a new Config with CLI overrides applied.

        Only non-None values override the existing config. The original
        Config is not modified.

        Args:
            host: Override server.host
            port: Override server.port
            manifest: Override content.manifest
            cache_dir: Override cache.cache_dir
            cache_enabled: Override cache.enabled

        Returns:
            New Config instance with overrides applied
        """
        server = self.server
        if host is not None or port is not None:
            server = replace(
                self.server,
                host=host if host is not None else self.server.host,
                port=port if port is not None else self.server.port,
            )

        content = self.content
        if manifest is not None:
            content = replace(self.content, manifest=manifest)

        cache = self.cache
        if cache_dir is not None or cache_enabled is not None:
            cache = replace(
                self.cache,
                cache_dir=cache_dir if cache_dir is not None else self.cache.cache_dir,
                enabled=cache_enabled if cache_enabled is not None else self.cache.enabled,
            )

        return replace(self, server=server, content=content, cache=cache)
