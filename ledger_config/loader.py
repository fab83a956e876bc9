"""
Configuration Loader (``ledger_config.loader``).

Responsibility
--------------
Loads a YAML configuration file and parses it into the typed
``ledger_config.schema`` dataclasses.  The single public entry point for
runtime config is ``ledger_config.get_active_config()``.

Invariants enforced
-------------------
* Parse errors raise ``ValueError`` or ``KeyError`` with descriptive
  messages; no silent defaults for required fields (``database.url``).
* ``deposit.cap_ratio`` is parsed as Decimal from its string form and must
  lie in (0, 1].
* ``compute_checksum`` produces a deterministic SHA-256 hash of the
  effective configuration.

Failure modes
-------------
* Missing YAML file  -> ``FileNotFoundError`` propagates.
* Malformed YAML  -> ``yaml.YAMLError`` propagates.
* Missing required keys  -> ``KeyError`` propagates.
"""

from __future__ import annotations

import hashlib
import json
import logging
from dataclasses import replace
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Any

import yaml

from ledger_config.schema import DatabaseConfig, DepositPolicy, LedgerConfig, LoggingConfig

_LOG_LEVELS = frozenset(logging.getLevelNamesMapping())


def load_yaml_file(path: Path) -> dict[str, Any]:
    """
    Load a single YAML file and return its contents as a dict.

    Raises:
        FileNotFoundError: if the file does not exist.
        yaml.YAMLError: if the file contains invalid YAML.
    """
    with open(path) as f:
        return yaml.safe_load(f) or {}


def parse_database(data: dict[str, Any]) -> DatabaseConfig:
    url = data["url"]
    if not isinstance(url, str) or not url:
        raise ValueError(f"database.url must be a non-empty string, got {url!r}")
    return DatabaseConfig(
        url=url,
        echo=bool(data.get("echo", False)),
        pool_size=int(data.get("pool_size", 20)),
        max_overflow=int(data.get("max_overflow", 10)),
        pool_timeout=int(data.get("pool_timeout", 30)),
    )


def parse_deposit(data: dict[str, Any]) -> DepositPolicy:
    raw = data.get("cap_ratio", "0.25")
    try:
        ratio = Decimal(str(raw))
    except InvalidOperation:
        raise ValueError(f"deposit.cap_ratio is not a number: {raw!r}") from None
    if not (Decimal("0") < ratio <= Decimal("1")):
        raise ValueError(f"deposit.cap_ratio must be in (0, 1], got {ratio}")
    return DepositPolicy(cap_ratio=ratio)


def parse_logging(data: dict[str, Any]) -> LoggingConfig:
    return LoggingConfig(level=parse_log_level(data.get("level", "INFO")))


def parse_log_level(value: Any) -> str:
    level = str(value).upper()
    if level not in _LOG_LEVELS:
        raise ValueError(f"Unknown log level {value!r}")
    return level


def parse_config(data: dict[str, Any]) -> LedgerConfig:
    """
    Parse a ``LedgerConfig`` from a dict.

    Raises:
        KeyError: if ``database`` or ``database.url`` is missing.
        ValueError: if a value is out of range.
    """
    config = LedgerConfig(
        database=parse_database(data["database"]),
        deposit=parse_deposit(data.get("deposit") or {}),
        logging=parse_logging(data.get("logging") or {}),
    )
    return replace(config, checksum=compute_checksum(config))


def compute_checksum(config: LedgerConfig) -> str:
    """SHA-256 over the canonical JSON form of the effective configuration."""
    canonical = {
        "database": {
            "url": config.database.url,
            "echo": config.database.echo,
            "pool_size": config.database.pool_size,
            "max_overflow": config.database.max_overflow,
            "pool_timeout": config.database.pool_timeout,
        },
        "deposit": {"cap_ratio": str(config.deposit.cap_ratio)},
        "logging": {"level": config.logging.level},
    }
    encoded = json.dumps(canonical, sort_keys=True, separators=(",", ":"))
    return hashlib.sha256(encoded.encode()).hexdigest()


def load_config(path: Path) -> LedgerConfig:
    """Load and parse one YAML configuration file."""
    return parse_config(load_yaml_file(path))
