"""Shared fixtures for the index node parameter tests."""

from pathlib import Path
from typing import Any, Dict, Optional

import pytest
import yaml


BASE_CONFIG: Dict[str, Any] = {
    'etcd': {
        'endpoints': ['h1:2379', 'h2:2379'],
        'rootPath': 'a',
        'metaSubPath': 'b',
    },
    'minio': {
        'address': 'minio-host',
        'port': 9000,
        'accessKeyID': 'access',
        'secretAccessKey': 'secret',
        'useSSL': False,
        'bucketName': 'bucket',
        'rootPath': 'x',
    },
    'indexNode': {
        'port': 21121,
    },
    'log': {
        'level': 'info',
    },
}

KNOWHERE_CONFIG: Dict[str, Any] = {
    'knowhere': {
        'simdType': 'avx512',
    },
}


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep the developer's environment out of the layered store."""
    for name in ('MILVUSCONF', 'MINIO_ADDRESS', 'ETCD_ENDPOINTS'):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def write_config(tmp_path):
    """Write milvus.yaml and advanced/knowhere.yaml into a temp config dir."""
    def _write(
        base: Optional[Dict[str, Any]] = None,
        knowhere: Optional[Dict[str, Any]] = None,
    ) -> Path:
        (tmp_path / 'advanced').mkdir(exist_ok=True)
        with open(tmp_path / 'milvus.yaml', 'w') as f:
            yaml.safe_dump(BASE_CONFIG if base is None else base, f)
        with open(tmp_path / 'advanced' / 'knowhere.yaml', 'w') as f:
            yaml.safe_dump(KNOWHERE_CONFIG if knowhere is None else knowhere, f)
        return tmp_path

    return _write
