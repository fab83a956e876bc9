#!/usr/bin/env python3
"""
Seed the database with the canonical ledger dataset.

Drops all tables, recreates them, loads 8 profiles, 9 contracts and 15 jobs,
and commits.

Usage:
    python -m scripts.seed_data
    DATABASE_URL=sqlite:///ledger.db python -m scripts.seed_data
"""

import sys

from ledger_config import get_active_config
from ledger_kernel.db.engine import (
    create_tables,
    drop_tables,
    init_engine_from_url,
    session_scope,
)
from ledger_kernel.db.seed import seed
from ledger_kernel.logging_config import configure_logging


def main() -> int:
    config = get_active_config()
    configure_logging(level=config.logging.level)

    try:
        init_engine_from_url(config.database.url, echo=config.database.echo)
    except Exception as exc:
        print(f"  ERROR: {exc}", file=sys.stderr)
        return 1

    drop_tables()
    create_tables()
    with session_scope() as session:
        seed(session)

    print(f"  Seeded {config.database.url.split('@')[-1]}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
