"""Tests for the YAML and environment settings sources."""

import pytest

from indexnode.core.config.settings_sources import StoreEnvironment, YamlConfigSource
from indexnode.core.exceptions import SourceUnavailableError


class TestYamlConfigSource:
    """Test flattening of YAML documents into dotted keys."""

    def test_nested_keys_are_flattened_and_lowercased(self, tmp_path):
        path = tmp_path / 'conf.yaml'
        path.write_text("minio:\n  bucketName: b1\n  rootPath: files\n")

        data = YamlConfigSource(path).load()

        assert data == {'minio.bucketname': 'b1', 'minio.rootpath': 'files'}

    def test_scalar_values_become_strings(self, tmp_path):
        path = tmp_path / 'conf.yaml'
        path.write_text("a:\n  port: 9000\n  ssl: true\n  tls: false\n  empty:\n")

        data = YamlConfigSource(path).load()

        assert data['a.port'] == '9000'
        assert data['a.ssl'] == 'true'
        assert data['a.tls'] == 'false'
        assert data['a.empty'] == ''

    def test_sequences_are_comma_joined(self, tmp_path):
        path = tmp_path / 'conf.yaml'
        path.write_text("etcd:\n  endpoints:\n    - h1:2379\n    - h2:2379\n")

        data = YamlConfigSource(path).load()

        assert data['etcd.endpoints'] == 'h1:2379,h2:2379'

    def test_empty_document(self, tmp_path):
        path = tmp_path / 'conf.yaml'
        path.write_text("")

        assert YamlConfigSource(path).load() == {}

    def test_missing_file(self, tmp_path):
        path = tmp_path / 'missing.yaml'

        with pytest.raises(SourceUnavailableError, match="does not exist") as exc_info:
            YamlConfigSource(path).load()

        assert exc_info.value.path == str(path)

    def test_malformed_yaml(self, tmp_path):
        path = tmp_path / 'bad.yaml'
        path.write_text("minio: [unclosed\n")

        with pytest.raises(SourceUnavailableError, match="malformed YAML"):
            YamlConfigSource(path).load()

    def test_root_must_be_mapping(self, tmp_path):
        path = tmp_path / 'list.yaml'
        path.write_text("- a\n- b\n")

        with pytest.raises(SourceUnavailableError, match="root must be a mapping"):
            YamlConfigSource(path).load()

    def test_invalid_utf8(self, tmp_path):
        path = tmp_path / 'binary.yaml'
        path.write_bytes(b'\xff\xfe')

        with pytest.raises(SourceUnavailableError, match="not valid UTF-8"):
            YamlConfigSource(path).load()

    def test_mapping_inside_sequence_is_rejected(self, tmp_path):
        path = tmp_path / 'nested.yaml'
        path.write_text("servers:\n  - name: a\n")

        with pytest.raises(SourceUnavailableError, match="servers"):
            YamlConfigSource(path).load()


class TestStoreEnvironment:
    """Test environment variables read by the store."""

    def test_defaults_to_none(self):
        env = StoreEnvironment()

        assert env.milvusconf is None
        assert env.minio_address is None
        assert env.etcd_endpoints is None

    def test_reads_environment(self, monkeypatch):
        monkeypatch.setenv('MINIO_ADDRESS', 'minio:9000')
        monkeypatch.setenv('ETCD_ENDPOINTS', 'e1:2379,e2:2379')
        monkeypatch.setenv('MILVUSCONF', '/etc/milvus')

        env = StoreEnvironment()

        assert env.minio_address == 'minio:9000'
        assert env.etcd_endpoints == 'e1:2379,e2:2379'
        assert env.milvusconf == '/etc/milvus'
