"""
Syncer Configuration

Configuration management for the synchronizer: defaults, file and
environment based loading, validation and logging setup.
"""

import json
import logging
import os
from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Any, Dict, List, Union

import yaml

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


@dataclass
class SyncerConfig:
    """Main configuration class for the synchronizer"""

    # Logging
    log_level: str = "INFO"
    log_format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    # Number of settled records kept for lookup, 0 disables history
    history_size: int = 1024

    # Tombstone count that triggers stack compaction, 0 keeps every tombstone
    compact_threshold: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def get_default_config() -> SyncerConfig:
    """Get default synchronizer configuration"""
    return SyncerConfig()


def load_config_from_file(config_path: Union[str, Path]) -> SyncerConfig:
    """
    Load configuration from a JSON or YAML file

    Args:
        config_path: Path to configuration file

    Returns:
        SyncerConfig instance
    """
    config_path = Path(config_path)

    if not config_path.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    with open(config_path, "r", encoding="utf-8") as f:
        if config_path.suffix.lower() in [".yaml", ".yml"]:
            data = yaml.safe_load(f)
        elif config_path.suffix.lower() == ".json":
            data = json.load(f)
        else:
            raise ValueError(f"Unsupported config file format: {config_path.suffix}")

    return _config_from_dict(data or {})


def load_config_from_env() -> SyncerConfig:
    """
    Load configuration from environment variables

    Environment variables are prefixed with SYNCER_,
    for example SYNCER_LOG_LEVEL=DEBUG or SYNCER_HISTORY_SIZE=0

    Returns:
        SyncerConfig instance
    """
    config = SyncerConfig()

    env_mappings = {
        "SYNCER_LOG_LEVEL": ("log_level", str),
        "SYNCER_LOG_FORMAT": ("log_format", str),
        "SYNCER_HISTORY_SIZE": ("history_size", int),
        "SYNCER_COMPACT_THRESHOLD": ("compact_threshold", int),
    }

    for env_var, (attr_name, converter) in env_mappings.items():
        value = os.getenv(env_var)
        if value is not None:
            try:
                setattr(config, attr_name, converter(value))
            except ValueError as e:
                raise ValueError(f"Invalid value for {env_var}: {value}") from e

    return config


def _config_from_dict(data: Dict[str, Any]) -> SyncerConfig:
    """Create config from dictionary, ignoring unknown keys"""
    values = {}
    for field in fields(SyncerConfig):
        if field.name not in data:
            continue
        value = data[field.name]
        try:
            values[field.name] = field.type(value)
        except (TypeError, ValueError) as e:
            raise ValueError(f"Invalid value for {field.name}: {value!r}") from e
    return SyncerConfig(**values)


def validate_config(config: SyncerConfig) -> List[str]:
    """
    Validate configuration

    Args:
        config: Configuration to validate

    Returns:
        List of validation errors, empty if valid
    """
    errors = []

    if config.log_level.upper() not in LOG_LEVELS:
        errors.append(f"Invalid log_level: {config.log_level}")

    if config.history_size < 0:
        errors.append("history_size must be non-negative")

    if config.compact_threshold < 0:
        errors.append("compact_threshold must be non-negative")

    return errors


def configure_logging(config: SyncerConfig) -> logging.Logger:
    """
    Attach a stream handler to the package logger

    Args:
        config: Configuration providing level and format

    Returns:
        The configured "syncer" logger
    """
    logger = logging.getLogger("syncer")
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(config.log_format))
        logger.addHandler(handler)
    logger.setLevel(config.log_level.upper())
    return logger
