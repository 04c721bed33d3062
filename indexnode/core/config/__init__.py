"""
Configuration package for the index node.

This package turns layered raw configuration into the typed parameters of the
index node role:
- YAML documents flattened into dotted keys (default layer)
- Environment variables and runtime overrides (override layer)
- Typed derivations (paths, lists, booleans, integers)
- A run-once parameter table publishing an immutable snapshot
"""

from .base_table import BaseTable, LogConfig
from .derivations import join_path, parse_bool, parse_int, split_list
from .param_table import IndexNodeParams, ParamTable
from .settings_sources import StoreEnvironment, YamlConfigSource

__all__ = [
    "BaseTable",
    "LogConfig",
    "IndexNodeParams",
    "ParamTable",
    "StoreEnvironment",
    "YamlConfigSource",
    "join_path",
    "parse_bool",
    "parse_int",
    "split_list",
]
