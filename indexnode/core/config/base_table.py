"""
Layered key/value store backing the index node parameter table.

Keys are dotted, case-insensitive paths (``minio.bucketName``). Lookups search
the override layer first (runtime overrides and values derived from the
environment), then the default layer populated from YAML documents.
"""

from pathlib import Path
from typing import Dict, Optional, Union

from loguru import logger
from pydantic import BaseModel, Field, ValidationError, field_validator

from indexnode.core.exceptions import KeyMissingError, TypeCoercionError

from .settings_sources import StoreEnvironment, YamlConfigSource

DEFAULT_CONFIG_DIR = Path(__file__).resolve().parent.parent.parent / "configs"
BASE_CONFIG_FILE = "milvus.yaml"

MINIO_ADDRESS_KEY = "_MinioAddress"
ETCD_ENDPOINTS_KEY = "_EtcdEndpoints"

# log.level values mapped to loguru level names
LOG_LEVELS = {
    "debug": "DEBUG",
    "info": "INFO",
    "warn": "WARNING",
    "warning": "WARNING",
    "error": "ERROR",
    "panic": "CRITICAL",
    "fatal": "CRITICAL",
}


class LogConfig(BaseModel):
    """Log settings resolved from the ``log`` section of the base document."""

    level: str = Field(
        default="DEBUG",
        description="Minimum log level"
    )

    file_root_path: str = Field(
        default="",
        description="Directory for log files, empty to log to stderr only"
    )

    @field_validator('level', mode='before')
    @classmethod
    def validate_level(cls, v: str) -> str:
        """Map debug/info/warn/error/panic/fatal to loguru level names."""
        level = LOG_LEVELS.get(str(v).strip().lower())
        if level is None:
            raise ValueError(f"Unknown log level: {v}")
        return level


class BaseTable:
    """Hierarchical key/value lookup over YAML defaults and overrides."""

    def __init__(
        self,
        config_dir: Optional[Union[str, Path]] = None,
        overrides: Optional[Dict[str, str]] = None,
    ):
        """Initialize the store.

        Args:
            config_dir: Directory YAML file names are resolved against. Falls
                back to $MILVUSCONF, then to the packaged configs directory.
            overrides: Runtime overrides taking precedence over every file
        """
        self._env = StoreEnvironment()
        self._defaults: Dict[str, str] = {}
        self._overrides: Dict[str, str] = {}
        self.config_dir = self._init_config_dir(config_dir)
        self.log_config = LogConfig()

        for key, value in (overrides or {}).items():
            self.save(key, value)

    def _init_config_dir(self, config_dir: Optional[Union[str, Path]]) -> Path:
        if config_dir is not None:
            return Path(config_dir)
        if self._env.milvusconf:
            return Path(self._env.milvusconf)
        return DEFAULT_CONFIG_DIR

    def init(self) -> None:
        """Load the base document and apply environment-derived overrides."""
        self.load_yaml(BASE_CONFIG_FILE)
        self._try_load_from_env()
        self._init_log_config()

    def _try_load_from_env(self) -> None:
        if not self._has_override(MINIO_ADDRESS_KEY):
            minio_address = self._env.minio_address
            if not minio_address:
                host = self.load("minio.address")
                port = self.load("minio.port")
                minio_address = f"{host}:{port}"
            self.save(MINIO_ADDRESS_KEY, minio_address)

        if not self._has_override(ETCD_ENDPOINTS_KEY):
            etcd_endpoints = self._env.etcd_endpoints
            if not etcd_endpoints:
                etcd_endpoints = self.load("etcd.endpoints")
            self.save(ETCD_ENDPOINTS_KEY, etcd_endpoints)

    def _init_log_config(self) -> None:
        level = self.load_with_default("log.level", "debug")
        try:
            self.log_config = LogConfig(
                level=level,
                file_root_path=self.load_with_default("log.file.rootPath", ""),
            )
        except ValidationError as e:
            raise TypeCoercionError("log.level", level, "log level", cause=e) from e

    def load_yaml(self, file_name: str) -> None:
        """Merge a YAML document into the default layer.

        Args:
            file_name: File name relative to the config directory, or an
                absolute path

        Raises:
            SourceUnavailableError: If the file is missing or malformed
        """
        path = Path(file_name)
        if not path.is_absolute():
            path = self.config_dir / path

        values = YamlConfigSource(path).load()
        self._defaults.update(values)
        logger.debug(f"Loaded {len(values)} keys from {path}")

    def load(self, key: str) -> str:
        """Return the value of a key, searching overrides before defaults.

        Raises:
            KeyMissingError: If the key is absent from every layer
        """
        normalized = key.lower()
        if normalized in self._overrides:
            return self._overrides[normalized]
        if normalized in self._defaults:
            return self._defaults[normalized]
        raise KeyMissingError(key)

    def load_with_default(self, key: str, default: str) -> str:
        """Return the value of a key, or ``default`` when absent."""
        try:
            return self.load(key)
        except KeyMissingError:
            return default

    def load_prefix(self, prefix: str) -> Dict[str, str]:
        """Return the merged view of every key under ``prefix``."""
        normalized = prefix.lower()
        merged = {k: v for k, v in self._defaults.items() if k.startswith(normalized)}
        merged.update({k: v for k, v in self._overrides.items() if k.startswith(normalized)})
        return merged

    def save(self, key: str, value: str) -> None:
        """Set a runtime override."""
        self._overrides[key.lower()] = value

    def remove(self, key: str) -> None:
        """Drop a runtime override, exposing the default layer again."""
        self._overrides.pop(key.lower(), None)

    def _has_override(self, key: str) -> bool:
        return key.lower() in self._overrides

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"config_dir={str(self.config_dir)!r}, "
            f"defaults={len(self._defaults)}, "
            f"overrides={len(self._overrides)})"
        )
