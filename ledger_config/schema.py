"""
Configuration schema (``ledger_config.schema``).

Frozen dataclasses parsed from YAML by ``ledger_config.loader``.  Nothing in
here reads files or the environment.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal


@dataclass(frozen=True)
class DatabaseConfig:
    url: str
    echo: bool = False
    pool_size: int = 20
    max_overflow: int = 10
    pool_timeout: int = 30


@dataclass(frozen=True)
class DepositPolicy:
    """Deposit allowance as a fraction of outstanding obligations."""

    cap_ratio: Decimal = Decimal("0.25")


@dataclass(frozen=True)
class LoggingConfig:
    level: str = "INFO"


@dataclass(frozen=True)
class LedgerConfig:
    """Effective runtime configuration."""

    database: DatabaseConfig
    deposit: DepositPolicy = field(default_factory=DepositPolicy)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    checksum: str = ""
