"""Configuration loading for respfmt (.respfmt.yml)."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

CONFIG_FILENAME = ".respfmt.yml"


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be parsed."""


@dataclass
class ServiceConfig:
    """Bind address and reply backend for ``respfmt serve``."""

    host: str = "127.0.0.1"
    port: int = 8000
    generator: Optional[str] = None


@dataclass
class LoggingConfig:
    """Log verbosity and optional file sink."""

    verbose: bool = False
    log_file: Optional[Path] = None


@dataclass
class RespFmtConfig:
    """Represents the settings defined in .respfmt.yml."""

    root: Path
    service: ServiceConfig = field(default_factory=ServiceConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def load_config(config_path: Path) -> RespFmtConfig:
    """Load configuration from disk, falling back to defaults when absent."""
    config_file = _resolve_config_path(config_path)
    root = config_file.parent.resolve()

    if not config_file.exists():
        return RespFmtConfig(root=root)

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{CONFIG_FILENAME} must contain a mapping at the root")

    service = ServiceConfig()
    service_data = _as_dict(data.get("service"), "service")
    if "host" in service_data:
        service.host = _as_str(service_data["host"], "service.host")
    if "port" in service_data:
        service.port = _as_port(service_data["port"])
    if service_data.get("generator") is not None:
        service.generator = _as_str(service_data["generator"], "service.generator")

    logging_config = LoggingConfig()
    logging_data = _as_dict(data.get("logging"), "logging")
    if "verbose" in logging_data:
        logging_config.verbose = _as_bool(logging_data["verbose"], "logging.verbose")
    if logging_data.get("log_file") is not None:
        logging_config.log_file = root / _as_str(logging_data["log_file"], "logging.log_file")

    return RespFmtConfig(root=root, service=service, logging=logging_config)


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Any:
    text = path.read_text(encoding="utf-8")
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return {} if loaded is None else loaded


def _as_dict(value: Any, name: str) -> Dict[str, Any]:
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ConfigError(f"'{name}' must be a mapping")
    return value


def _as_str(value: Any, name: str) -> str:
    if isinstance(value, str) and value.strip():
        return value.strip()
    raise ConfigError(f"'{name}' must be a non-empty string")


def _as_bool(value: Any, name: str) -> bool:
    if isinstance(value, bool):
        return value
    raise ConfigError(f"'{name}' must be true or false")


def _as_port(value: Any) -> int:
    # bool is an int subclass; reject it explicitly.
    if isinstance(value, int) and not isinstance(value, bool) and 0 < value < 65536:
        return value
    raise ConfigError("'service.port' must be an integer between 1 and 65535")


__all__ = [
    "CONFIG_FILENAME",
    "ConfigError",
    "LoggingConfig",
    "RespFmtConfig",
    "ServiceConfig",
    "load_config",
]
