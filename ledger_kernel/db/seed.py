"""
Canonical seed dataset.

Eight profiles, nine contracts and fifteen jobs.  The test suite and the
scenario walkthroughs depend on these exact ids, balances and prices, e.g.
client 1 (balance 1150) owes job 2 (price 201) to contractor 6 (balance 1214).
"""

from datetime import UTC, datetime
from decimal import Decimal

from sqlalchemy import delete, text
from sqlalchemy.orm import Session

from ledger_kernel.logging_config import get_logger
from ledger_kernel.models import Contract, ContractStatus, Job, Profile, ProfileRole

logger = get_logger("db.seed")


def _ts(value: str) -> datetime:
    return datetime.fromisoformat(value).replace(tzinfo=UTC)


PROFILES = [
    (1, "Harry", "Potter", "Wizard", "1150", ProfileRole.CLIENT),
    (2, "Mr", "Robot", "Hacker", "231.11", ProfileRole.CLIENT),
    (3, "John", "Snow", "Knows nothing", "451.3", ProfileRole.CLIENT),
    (4, "Ash", "Kethcum", "Pokemon master", "1.3", ProfileRole.CLIENT),
    (5, "John", "Lenon", "Musician", "64", ProfileRole.CONTRACTOR),
    (6, "Linus", "Torvalds", "Programmer", "1214", ProfileRole.CONTRACTOR),
    (7, "Alan", "Turing", "Programmer", "22", ProfileRole.CONTRACTOR),
    (8, "Aragorn", "II Elessar Telcontarion", "Fighter", "314", ProfileRole.CONTRACTOR),
]

# (id, status, client_id, contractor_id)
CONTRACTS = [
    (1, ContractStatus.TERMINATED, 1, 5),
    (2, ContractStatus.IN_PROGRESS, 1, 6),
    (3, ContractStatus.IN_PROGRESS, 2, 6),
    (4, ContractStatus.IN_PROGRESS, 2, 7),
    (5, ContractStatus.NEW, 3, 8),
    (6, ContractStatus.IN_PROGRESS, 3, 7),
    (7, ContractStatus.IN_PROGRESS, 4, 7),
    (8, ContractStatus.IN_PROGRESS, 4, 6),
    (9, ContractStatus.IN_PROGRESS, 4, 8),
]

# (id, price, contract_id, payment_date or None)
JOBS = [
    (1, "200", 1, None),
    (2, "201", 2, None),
    (3, "202", 3, None),
    (4, "200", 4, None),
    (5, "200", 7, None),
    (6, "2020", 7, "2020-08-15T19:11:26.737"),
    (7, "200", 2, "2020-08-15T19:11:26.737"),
    (8, "200", 3, "2020-08-16T19:11:26.737"),
    (9, "200", 1, "2020-08-17T19:11:26.737"),
    (10, "200", 5, "2020-08-17T19:11:26.737"),
    (11, "21", 1, "2020-08-10T19:11:26.737"),
    (12, "21", 2, "2020-08-15T19:11:26.737"),
    (13, "121", 3, "2020-08-15T19:11:26.737"),
    (14, "121", 3, "2020-08-14T23:11:26.737"),
    (15, "150", 9, None),
]


def seed(session: Session) -> None:
    """
    Clear the ledger tables and load the canonical dataset.

    Flushes only; the caller owns the transaction.
    """
    session.execute(delete(Job))
    session.execute(delete(Contract))
    session.execute(delete(Profile))

    session.add_all(
        Profile(
            id=pid,
            first_name=first,
            last_name=last,
            profession=profession,
            balance=Decimal(balance),
            role=role,
        )
        for pid, first, last, profession, balance, role in PROFILES
    )
    session.flush()

    session.add_all(
        Contract(
            id=cid,
            terms="bla bla bla",
            status=status,
            client_id=client_id,
            contractor_id=contractor_id,
        )
        for cid, status, client_id, contractor_id in CONTRACTS
    )
    session.flush()

    session.add_all(
        Job(
            id=jid,
            description="work",
            price=Decimal(price),
            contract_id=contract_id,
            paid=paid_at is not None,
            payment_date=_ts(paid_at) if paid_at else None,
        )
        for jid, price, contract_id, paid_at in JOBS
    )
    session.flush()

    if session.get_bind().dialect.name == "postgresql":
        _advance_sequences(session)

    logger.info(
        "seed_loaded",
        extra={
            "profiles": len(PROFILES),
            "contracts": len(CONTRACTS),
            "jobs": len(JOBS),
        },
    )


def _advance_sequences(session: Session) -> None:
    # Explicit ids do not move the serial sequences
    for table in ("profiles", "contracts", "jobs"):
        session.execute(
            text(
                f"SELECT setval(pg_get_serial_sequence('{table}', 'id'), "
                f"(SELECT COALESCE(MAX(id), 1) FROM {table}))"
            )
        )
