"""
Settings sources for the index node parameter table.

This module provides the two raw sources the layered store is built from:
YAML documents, flattened into dotted string keys for the default layer, and
the process environment, read through pydantic-settings for the override
layer.
"""

from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from indexnode.core.exceptions import SourceUnavailableError


class StoreEnvironment(BaseSettings):
    """
    Environment variables recognised by the layered store.

    Environment Variable Examples:
        MILVUSCONF=/etc/milvus/configs/
        MINIO_ADDRESS=minio.internal:9000
        ETCD_ENDPOINTS=etcd-0:2379,etcd-1:2379
    """

    model_config = SettingsConfigDict(
        case_sensitive=False,
        extra='ignore',
        env_file=None,
    )

    milvusconf: Optional[str] = Field(
        default=None,
        description="Directory holding milvus.yaml and advanced/*.yaml"
    )

    minio_address: Optional[str] = Field(
        default=None,
        description="Object store address overriding minio.address:minio.port"
    )

    etcd_endpoints: Optional[str] = Field(
        default=None,
        description="Comma-separated etcd endpoints overriding etcd.endpoints"
    )


class YamlConfigSource:
    """Configuration source for a single YAML document.

    The document is flattened so that nested mappings become lowercased dotted
    keys and every value becomes a string, which is the shape the layered store
    keeps in its default layer.
    """

    def __init__(self, config_file: Union[str, Path]):
        self.config_file = Path(config_file)

    def load(self) -> Dict[str, str]:
        """Load and flatten the YAML document.

        Returns:
            Mapping of lowercased dotted keys to string values

        Raises:
            SourceUnavailableError: If the file is missing, unreadable,
                malformed, or its root is not a mapping
        """
        path = str(self.config_file)

        if not self.config_file.is_file():
            raise SourceUnavailableError(path, "file does not exist")

        try:
            with open(self.config_file, 'r', encoding='utf-8') as f:
                data = yaml.safe_load(f)
        except UnicodeDecodeError as e:
            raise SourceUnavailableError(path, f"not valid UTF-8: {e}", cause=e) from e
        except OSError as e:
            raise SourceUnavailableError(path, f"cannot read file: {e}", cause=e) from e
        except yaml.YAMLError as e:
            raise SourceUnavailableError(path, f"malformed YAML: {e}", cause=e) from e

        if data is None:
            return {}

        if not isinstance(data, dict):
            raise SourceUnavailableError(
                path, f"root must be a mapping, got {type(data).__name__}"
            )

        flat: Dict[str, str] = {}
        self._flatten(data, "", flat)
        return flat

    def _flatten(self, data: Dict[Any, Any], prefix: str, out: Dict[str, str]) -> None:
        for raw_key, value in data.items():
            key = f"{prefix}{str(raw_key).lower()}"
            if isinstance(value, dict):
                self._flatten(value, f"{key}.", out)
            else:
                out[key] = self._to_string(key, value)

    def _to_string(self, key: str, value: Any) -> str:
        if value is None:
            return ""
        if isinstance(value, bool):
            return "true" if value else "false"
        if isinstance(value, list):
            return ",".join(self._to_string(key, item) for item in value)
        if isinstance(value, dict):
            raise SourceUnavailableError(
                str(self.config_file),
                f"unsupported nested mapping inside sequence at key '{key}'"
            )
        return str(value)

    def __repr__(self) -> str:
        return f'{self.__class__.__name__}(config_file={str(self.config_file)!r})'
