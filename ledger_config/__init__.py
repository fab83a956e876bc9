"""
ledger_config -- single public entrypoint for ledger configuration.

Responsibility:
    Provides the ONLY way to obtain configuration at runtime through
    ``get_active_config()``.  No other component reads configuration files
    or environment variables directly.

Architecture position:
    Configuration sits beside ``ledger_kernel`` and below
    ``ledger_services``.  The kernel MUST NEVER import from
    ``ledger_config``; values are passed into kernel constructors.

Environment overrides (applied after the YAML file):
    DATABASE_URL      -> database.url
    LEDGER_LOG_LEVEL  -> logging.level

Audit relevance:
    Every successful ``get_active_config()`` call emits a
    ``ledger_config_loaded`` log entry with the checksum of the effective
    configuration.
"""

from __future__ import annotations

import logging
import os
from dataclasses import replace
from pathlib import Path

from ledger_config.loader import (
    compute_checksum,
    load_config,
    load_yaml_file,
    parse_config,
    parse_log_level,
)
from ledger_config.schema import DatabaseConfig, DepositPolicy, LedgerConfig, LoggingConfig

_logger = logging.getLogger("ledger_kernel.config")

_DEFAULT_CONFIG_PATH = Path(__file__).parent / "sets" / "default.yaml"


def get_active_config(
    path: Path | None = None,
    environ: dict[str, str] | None = None,
) -> LedgerConfig:
    """The ONLY public configuration entrypoint.

    Args:
        path: YAML file to load.  Defaults to ledger_config/sets/default.yaml.
        environ: Environment mapping for overrides.  Defaults to os.environ.

    Raises:
        FileNotFoundError: If the YAML file does not exist.
        KeyError: If a required key is missing.
        ValueError: If a value (or an override) is invalid.
    """
    env = os.environ if environ is None else environ
    config = load_config(path or _DEFAULT_CONFIG_PATH)

    if env.get("DATABASE_URL"):
        config = replace(config, database=replace(config.database, url=env["DATABASE_URL"]))
    if env.get("LEDGER_LOG_LEVEL"):
        config = replace(
            config, logging=LoggingConfig(level=parse_log_level(env["LEDGER_LOG_LEVEL"]))
        )
    config = replace(config, checksum=compute_checksum(config))

    _logger.info(
        "ledger_config_loaded",
        extra={
            "config_path": str(path or _DEFAULT_CONFIG_PATH),
            "checksum": config.checksum,
            "cap_ratio": config.deposit.cap_ratio,
            "dialect": config.database.url.split(":", 1)[0],
        },
    )
    return config


__all__ = [
    "DatabaseConfig",
    "DepositPolicy",
    "LedgerConfig",
    "LoggingConfig",
    "get_active_config",
    "load_config",
    "load_yaml_file",
    "parse_config",
]
