"""Tests for the parameter derivation rules."""

import pytest

from indexnode.core.config.derivations import join_path, parse_bool, parse_int, split_list
from indexnode.core.exceptions import TypeCoercionError


class TestJoinPath:

    def test_simple_join(self):
        assert join_path('a', 'b') == 'a/b'
        assert join_path('x', 'index_files') == 'x/index_files'

    def test_exactly_one_separator(self):
        assert join_path('a/', 'b') == 'a/b'
        assert join_path('a', '/b') == 'a/b'
        assert join_path('a/', '/b/') == 'a/b'

    def test_absolute_root_is_kept(self):
        assert join_path('/var/lib', 'meta') == '/var/lib/meta'

    def test_root_separator_is_not_doubled(self):
        assert join_path('/', 'meta') == '/meta'
        assert join_path('//a', 'b') == '/a/b'

    def test_empty_segments(self):
        assert join_path('', 'b') == 'b'
        assert join_path('a', '') == 'a'
        assert join_path('', '') == ''


class TestSplitList:

    def test_split_on_comma(self):
        assert split_list('h1:2379,h2:2379') == ['h1:2379', 'h2:2379']

    def test_single_element(self):
        assert split_list('h1:2379') == ['h1:2379']

    def test_empty_string_keeps_one_empty_element(self):
        assert split_list('') == ['']

    def test_whitespace_is_preserved(self):
        assert split_list('h1, h2') == ['h1', ' h2']


class TestParseBool:

    @pytest.mark.parametrize('value', ['true', 'True', 'TRUE', '1'])
    def test_truthy(self, value):
        assert parse_bool('minio.useSSL', value) is True

    @pytest.mark.parametrize('value', ['yes', 'on', 't', 'y'])
    def test_other_truthy_tokens(self, value):
        assert parse_bool('minio.useSSL', value) is True

    @pytest.mark.parametrize('value', ['false', 'False', 'FALSE', '0'])
    def test_falsy(self, value):
        assert parse_bool('minio.useSSL', value) is False

    def test_invalid(self):
        with pytest.raises(TypeCoercionError) as exc_info:
            parse_bool('minio.useSSL', 'notabool')

        error = exc_info.value
        assert error.key == 'minio.useSSL'
        assert error.value == 'notabool'
        assert error.target == 'bool'
        assert error.kind == 'type-coercion'


class TestParseInt:

    def test_valid(self):
        assert parse_int('indexNode.port', '21121') == 21121

    def test_invalid(self):
        with pytest.raises(TypeCoercionError, match="indexNode.port"):
            parse_int('indexNode.port', 'abc')
