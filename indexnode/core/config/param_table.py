"""
Parameter table for the index node role.

This module resolves the raw values held by the layered store into the typed
``IndexNodeParams`` snapshot the rest of the index node reads for its whole
lifetime. The snapshot is built once, in one step, after every parameter has
been resolved, so no caller can observe a partially resolved configuration.

Resolution order:
1. Base document (milvus.yaml) and environment overrides
2. Role document (advanced/knowhere.yaml)
3. Direct lookups, coercions and compositions
4. SIMD backend, with a fallback to "auto"
"""

import threading
from datetime import datetime
from pathlib import Path
from typing import Optional, Tuple, Union

from loguru import logger
from pydantic import BaseModel, ConfigDict, Field, SecretStr

from indexnode.core.exceptions import ConfigurationError

from .base_table import ETCD_ENDPOINTS_KEY, MINIO_ADDRESS_KEY, BaseTable
from .derivations import join_path, parse_bool, parse_int, split_list

ROLE_NAME = "indexnode"
ROLE_CONFIG_FILE = "advanced/knowhere.yaml"
INDEX_FILES_DIR = "index_files"
DEFAULT_SIMD_TYPE = "auto"
DEFAULT_IP = "localhost"
DEFAULT_PORT = "21121"


class IndexNodeParams(BaseModel):
    """Resolved, read-only configuration of one index node process."""

    model_config = ConfigDict(frozen=True)

    ip: str = Field(description="Address the index node listens on")
    port: int = Field(description="Port the index node listens on")
    address: str = Field(description="ip:port of the index node")

    etcd_endpoints: Tuple[str, ...] = Field(description="Coordination service endpoints")
    meta_root_path: str = Field(description="etcd root path joined with the meta sub-path")
    index_root_path: str = Field(description="Object store root path for index files")

    minio_address: str
    minio_access_key_id: str
    minio_secret_access_key: SecretStr
    minio_use_ssl: bool
    minio_bucket_name: str

    simd_type: str = Field(description="Vector SIMD backend, 'auto' when unset")
    role_name: str = ROLE_NAME

    created_time: datetime = Field(default_factory=datetime.now)
    updated_time: datetime = Field(default_factory=datetime.now)

    def __repr__(self) -> str:
        """String representation hiding sensitive information."""
        return (
            f"IndexNodeParams("
            f"address={self.address}, "
            f"etcd_endpoints={self.etcd_endpoints}, "
            f"meta_root_path={self.meta_root_path}, "
            f"index_root_path={self.index_root_path}, "
            f"minio_address={self.minio_address}, "
            f"minio_bucket_name={self.minio_bucket_name}, "
            f"minio_secret_access_key=***, "
            f"simd_type={self.simd_type})"
        )


class ParamTable:
    """Resolves and holds the index node configuration.

    A single ParamTable is constructed during process bootstrap and passed to
    every component that needs configuration. ``init_once`` may be called
    defensively from any number of threads; the resolution body runs exactly
    once and every caller returns only after it has finished.
    """

    def __init__(
        self,
        base_table: Optional[BaseTable] = None,
        config_dir: Optional[Union[str, Path]] = None,
    ):
        """Initialize the parameter table.

        Args:
            base_table: Layered store to resolve from (created if None)
            config_dir: Config directory for a newly created store
        """
        self.base_table = base_table or BaseTable(config_dir=config_dir)

        self.node_id: int = 0
        self.alias: str = ""

        self._params: Optional[IndexNodeParams] = None
        self._once_lock = threading.Lock()
        self._once_done = False
        self._once_error: Optional[Exception] = None

    @property
    def params(self) -> IndexNodeParams:
        """The resolved snapshot.

        Raises:
            ConfigurationError: If read before initialization completed
        """
        if self._params is None:
            raise ConfigurationError("Index node parameters are not initialized")
        return self._params

    @property
    def initialized(self) -> bool:
        return self._params is not None

    def init_alias(self, alias: str) -> None:
        self.alias = alias

    def set_node_id(self, node_id: int) -> None:
        self.node_id = node_id

    def init_once(self) -> IndexNodeParams:
        """Run ``init`` at most once for the lifetime of this table.

        Returns:
            The resolved snapshot

        Raises:
            ConfigurationError: If resolution failed, on this call or on the
                call that ran the body. Any other failure of the body is
                re-raised the same way. The gate is never re-armed.
        """
        with self._once_lock:
            if not self._once_done:
                try:
                    self.init()
                except Exception as e:
                    self._once_error = e
                    raise
                finally:
                    self._once_done = True

        if self._once_error is not None:
            raise self._once_error
        return self.params

    def init(self) -> IndexNodeParams:
        """Resolve every parameter and publish a new snapshot.

        This is the ungated body of ``init_once``. Nothing is published unless
        every parameter resolves.

        Raises:
            SourceUnavailableError: If a YAML document cannot be loaded
            KeyMissingError: If a required key is absent
            TypeCoercionError: If a value cannot be parsed
        """
        self.base_table.init()
        self.base_table.load_yaml(ROLE_CONFIG_FILE)

        params = self._resolve()
        self._params = params
        logger.info(f"Index node parameters initialized: {params!r}")
        return params

    def _resolve(self) -> IndexNodeParams:
        bt = self.base_table

        ip = bt.load_with_default("indexNode.address", DEFAULT_IP)
        port = parse_int("indexNode.port", bt.load_with_default("indexNode.port", DEFAULT_PORT))

        minio_address = bt.load(MINIO_ADDRESS_KEY)
        minio_access_key_id = bt.load("minio.accessKeyID")
        minio_secret_access_key = bt.load("minio.secretAccessKey")
        minio_use_ssl = parse_bool("minio.useSSL", bt.load("minio.useSSL"))
        minio_bucket_name = bt.load("minio.bucketName")

        etcd_endpoints = tuple(split_list(bt.load(ETCD_ENDPOINTS_KEY)))

        etcd_root_path = bt.load("etcd.rootPath")
        meta_sub_path = bt.load("etcd.metaSubPath")
        meta_root_path = join_path(etcd_root_path, meta_sub_path)

        minio_root_path = bt.load("minio.rootPath")
        index_root_path = join_path(minio_root_path, INDEX_FILES_DIR)

        simd_type = self._resolve_simd_type()

        return IndexNodeParams(
            ip=ip,
            port=port,
            address=f"{ip}:{port}",
            etcd_endpoints=etcd_endpoints,
            meta_root_path=meta_root_path,
            index_root_path=index_root_path,
            minio_address=minio_address,
            minio_access_key_id=minio_access_key_id,
            minio_secret_access_key=minio_secret_access_key,
            minio_use_ssl=minio_use_ssl,
            minio_bucket_name=minio_bucket_name,
            simd_type=simd_type,
        )

    def _resolve_simd_type(self) -> str:
        simd_type = self.base_table.load_with_default("knowhere.simdType", DEFAULT_SIMD_TYPE)
        # an explicitly empty value falls back too
        simd_type = simd_type or DEFAULT_SIMD_TYPE
        logger.debug(f"Initialize the knowhere simd type: simd_type={simd_type}")
        return simd_type
