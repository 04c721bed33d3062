"""Derivation rules turning raw store values into typed parameters."""

import posixpath
import re
from typing import List

from pydantic import TypeAdapter, ValidationError

from indexnode.core.exceptions import TypeCoercionError

_BOOL = TypeAdapter(bool)
_INT = TypeAdapter(int)


def join_path(*segments: str) -> str:
    """Join path segments with exactly one ``/`` between them.

    Empty segments are skipped and the result is normalized, so
    ``join_path("a/", "/b")`` is ``"a/b"``. Joining only empty segments
    yields ``""``.
    """
    parts = [segment for segment in segments if segment]
    if not parts:
        return ""
    joined = posixpath.normpath("/".join(parts))
    # normpath keeps a leading "//"
    return re.sub(r"^/+", "/", joined)


def split_list(value: str, sep: str = ",") -> List[str]:
    """Split a delimited value, keeping order and surrounding whitespace.

    An empty value yields a single empty element.
    """
    return value.split(sep)


def parse_bool(key: str, value: str) -> bool:
    """Parse a boolean token, case-insensitively.

    Accepted tokens: ``true``/``false``, ``t``/``f``, ``1``/``0``,
    ``yes``/``no``, ``y``/``n``, ``on``/``off``.

    Raises:
        TypeCoercionError: If the value is not a recognised boolean token
    """
    try:
        return _BOOL.validate_python(value)
    except ValidationError as e:
        raise TypeCoercionError(key, value, "bool", cause=e) from e


def parse_int(key: str, value: str) -> int:
    """Parse an integer value.

    Raises:
        TypeCoercionError: If the value is not an integer
    """
    try:
        return _INT.validate_python(value)
    except ValidationError as e:
        raise TypeCoercionError(key, value, "int", cause=e) from e
