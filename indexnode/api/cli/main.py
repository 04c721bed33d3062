"""CLI entry point for resolving the index node parameters."""

import argparse
import sys
from pathlib import Path
from typing import Dict, List, Optional

from loguru import logger

from indexnode.core.config import BaseTable, IndexNodeParams, LogConfig, ParamTable
from indexnode.core.exceptions import ConfigurationError

LOG_FILE_NAME = "indexnode.log"


def setup_logging(verbose: bool = False, log_config: Optional[LogConfig] = None) -> None:
    """Configure logging for the CLI.

    Args:
        verbose: Whether to enable verbose logging
        log_config: Resolved log settings; adds a file sink when a root path is set
    """
    logger.remove()

    if verbose:
        logger.add(
            sys.stderr,
            level="DEBUG",
            format="<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>"
        )
    else:
        logger.add(
            sys.stderr,
            level="INFO",
            format="<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | <level>{message}</level>"
        )

    if log_config and log_config.file_root_path:
        logger.add(
            Path(log_config.file_root_path) / LOG_FILE_NAME,
            level=log_config.level,
            format="{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} - {message}"
        )


def parse_overrides(items: List[str]) -> Dict[str, str]:
    """Parse ``key=value`` override arguments.

    Raises:
        ValueError: If an item has no ``=``
    """
    overrides = {}
    for item in items:
        key, sep, value = item.partition("=")
        if not sep or not key:
            raise ValueError(f"Override must be key=value: {item}")
        overrides[key.strip()] = value
    return overrides


def create_parser() -> argparse.ArgumentParser:
    """Create and configure the argument parser.

    Returns:
        Configured ArgumentParser instance
    """
    parser = argparse.ArgumentParser(
        prog="indexnode-params",
        description="Resolve and print the index node parameters",
    )
    parser.add_argument(
        "--config-dir",
        type=Path,
        default=None,
        help="Directory holding milvus.yaml and advanced/knowhere.yaml (default: $MILVUSCONF or packaged configs)",
    )
    parser.add_argument(
        "--set",
        dest="overrides",
        action="append",
        default=[],
        metavar="KEY=VALUE",
        help="Runtime override, may be repeated (e.g. --set minio.bucketName=b1)",
    )
    parser.add_argument("--alias", default="", help="Role alias of this index node")
    parser.add_argument("--node-id", type=int, default=0, help="Node ID assigned to this index node")
    parser.add_argument("--json", action="store_true", help="Print parameters as JSON")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable verbose logging")
    return parser


def format_params(table: ParamTable) -> str:
    """Render the resolved parameters for humans, hiding secrets."""
    params: IndexNodeParams = table.params
    lines = [
        f"Index node parameters ({params.role_name}):",
        f"  Alias:            {table.alias or '-'}",
        f"  Node ID:          {table.node_id}",
        f"  Address:          {params.address}",
        f"  Etcd endpoints:   {', '.join(params.etcd_endpoints)}",
        f"  Meta root path:   {params.meta_root_path}",
        f"  Index root path:  {params.index_root_path}",
        f"  MinIO address:    {params.minio_address}",
        f"  MinIO access key: {params.minio_access_key_id}",
        f"  MinIO secret key: {params.minio_secret_access_key}",
        f"  MinIO use SSL:    {params.minio_use_ssl}",
        f"  MinIO bucket:     {params.minio_bucket_name}",
        f"  SIMD type:        {params.simd_type}",
    ]
    return "\n".join(lines)


def exit_on_config_error(error: ConfigurationError) -> None:
    """Log a fatal configuration error and exit with status 1."""
    logger.error(f"Configuration error [{error.kind}]: {error}")
    sys.exit(1)


def main(argv: Optional[List[str]] = None) -> None:
    """Main entry point for the CLI."""
    parser = create_parser()
    args = parser.parse_args(argv)

    setup_logging(args.verbose)

    try:
        overrides = parse_overrides(args.overrides)
    except ValueError as e:
        parser.error(str(e))

    table = ParamTable(BaseTable(config_dir=args.config_dir, overrides=overrides))
    table.init_alias(args.alias)
    table.set_node_id(args.node_id)

    try:
        table.init_once()
    except ConfigurationError as e:
        exit_on_config_error(e)

    setup_logging(args.verbose, table.base_table.log_config)

    if args.json:
        print(table.params.model_dump_json(indent=2))
    else:
        print(format_params(table))


if __name__ == "__main__":
    main()
