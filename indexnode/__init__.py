"""IndexNode - Parameter table for the index node service role."""

__version__ = "0.1.0"
__description__ = "Layered configuration resolver for the index node service role"

# Import modules only when needed to keep `import indexnode` cheap
__all__ = [
    "ParamTable",
    "IndexNodeParams",
]

def __getattr__(name: str):
    """Lazy import of the public configuration types."""
    if name == "ParamTable":
        from .core.config import ParamTable
        return ParamTable
    elif name == "IndexNodeParams":
        from .core.config import IndexNodeParams
        return IndexNodeParams
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
