#!/usr/bin/env python3
"""
Command-line access to the ledger operations.

Prints the JSON body of each outcome to stdout.  Failures print the error
body and exit with status 1.

Usage:
    python -m scripts.ledger_cli --profile 1 contracts
    python -m scripts.ledger_cli --profile 3 contract 5
    python -m scripts.ledger_cli --profile 1 unpaid
    python -m scripts.ledger_cli --profile 1 pay 2
    python -m scripts.ledger_cli deposit 1 10
    python -m scripts.ledger_cli best-profession 2020-08-15 2020-08-17

The database comes from the active configuration (DATABASE_URL overrides).
"""

import argparse
import json
import sys
from decimal import Decimal, InvalidOperation
from pathlib import Path

from ledger_config import get_active_config
from ledger_services import LedgerFacade, Outcome, to_outcome


def _json_default(value: object) -> str:
    if isinstance(value, Decimal):
        return str(value)
    if hasattr(value, "isoformat"):
        return value.isoformat()
    return str(value)


def _amount(text: str) -> Decimal:
    try:
        return Decimal(text)
    except InvalidOperation:
        raise argparse.ArgumentTypeError(f"not a number: {text!r}") from None


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Balance ledger operations.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="YAML configuration file (default: ledger_config/sets/default.yaml)",
    )
    parser.add_argument(
        "--profile",
        default=None,
        help="Credential of the requesting profile (its id)",
    )

    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("contracts", help="List your non-terminated contracts")

    contract = sub.add_parser("contract", help="Show one of your contracts")
    contract.add_argument("contract_id", type=int)

    sub.add_parser("unpaid", help="List unpaid jobs under your active contracts")

    pay = sub.add_parser("pay", help="Pay one of your jobs")
    pay.add_argument("job_id", type=int)

    deposit = sub.add_parser("deposit", help="Deposit into a client balance")
    deposit.add_argument("user_id", type=int)
    deposit.add_argument("amount", type=_amount)

    best_profession = sub.add_parser("best-profession", help="Top-earning profession")
    best_profession.add_argument("start")
    best_profession.add_argument("end")

    return parser


def dispatch(facade: LedgerFacade, args: argparse.Namespace) -> Outcome:
    """Run one parsed command against the facade."""
    if args.command == "deposit":
        return to_outcome(facade.deposit_to_client, args.user_id, args.amount)
    if args.command == "best-profession":
        return to_outcome(facade.best_profession, args.start, args.end)

    identity = to_outcome(facade.resolve_profile, args.profile)
    if not identity.ok:
        return identity
    requester_id = identity.body["id"]

    if args.command == "contracts":
        return to_outcome(facade.list_contracts, requester_id)
    if args.command == "contract":
        return to_outcome(facade.get_contract, requester_id, args.contract_id)
    if args.command == "unpaid":
        return to_outcome(facade.list_unpaid_jobs, requester_id)
    if args.command == "pay":
        return to_outcome(facade.pay_job, requester_id, args.job_id)
    raise ValueError(f"Unknown command {args.command!r}")


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    facade = LedgerFacade.from_config(get_active_config(args.config))

    outcome = dispatch(facade, args)
    if outcome.body is not None:
        print(json.dumps(outcome.body, default=_json_default, indent=2))
    else:
        print(json.dumps({"status": outcome.status}))
    return 0 if outcome.ok else 1


if __name__ == "__main__":
    raise SystemExit(main(sys.argv[1:]))
