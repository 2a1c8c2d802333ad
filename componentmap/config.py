"""Configuration loading for componentmap (.componentmap.yml)."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import yaml

from .errors import ConfigError

CONFIG_FILENAME = ".componentmap.yml"
DEFAULT_ROUTES_COMMAND = ["npx", "remix", "routes", "--json"]


@dataclass
class ServerConfig:
    """Host and port the inspection service listens on."""

    host: str = "127.0.0.1"
    port: int = 8080


@dataclass
class RoutesConfig:
    """Where the host framework's route table comes from."""

    file: Optional[Path] = None
    command: List[str] = field(default_factory=lambda: list(DEFAULT_ROUTES_COMMAND))


@dataclass
class ComponentMapConfig:
    """Represents the settings defined in .componentmap.yml."""

    root: Path
    app_directory: str = "app"
    mode: str = "development"
    server: ServerConfig = field(default_factory=ServerConfig)
    routes: RoutesConfig = field(default_factory=RoutesConfig)


def load_config(config_path: Path) -> ComponentMapConfig:
    """Load configuration from disk, falling back to defaults when absent."""
    config_file = _resolve_config_path(config_path)
    root = config_file.parent.resolve()

    if not config_file.exists():
        return ComponentMapConfig(root=root)

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{CONFIG_FILENAME} must contain a mapping at the root")

    config = ComponentMapConfig(root=root)
    config.app_directory = _as_str(data.get("app_directory")) or config.app_directory
    config.mode = _as_str(data.get("mode")) or config.mode

    server_data = _as_dict(data.get("server"))
    if server_data:
        config.server.host = _as_str(server_data.get("host")) or config.server.host
        port = _as_int(server_data.get("port"))
        if port is not None:
            config.server.port = port

    routes_data = _as_dict(data.get("routes"))
    if routes_data:
        routes_file = _as_str(routes_data.get("file"))
        if routes_file:
            config.routes.file = root / routes_file
        command = _as_str_list(routes_data.get("command"))
        if command:
            config.routes.command = command

    return config


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    if config_path.name != CONFIG_FILENAME:
        return (config_path.parent / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Any:
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"Failed to read {path.name}: {exc}") from exc
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return {} if loaded is None else loaded


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_str(value: Any) -> Optional[str]:
    return str(value) if isinstance(value, (str, int, float, bool)) else None


def _as_int(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value)
        except ValueError:
            return None
    return None


def _as_str_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return value.split()
    if isinstance(value, Sequence):
        return [str(item) for item in value if isinstance(item, (str, int, float, bool))]
    return []


__all__ = [
    "CONFIG_FILENAME",
    "ComponentMapConfig",
    "ConfigError",
    "RoutesConfig",
    "ServerConfig",
    "load_config",
]
