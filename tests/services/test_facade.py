"""
Tests for LedgerFacade and outcome mapping.

These go through real commits: each operation runs in its own session, and
state is read back through a fresh one.
"""

from decimal import Decimal

import pytest
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import Session, sessionmaker

from ledger_kernel.db.engine import get_engine
from ledger_kernel.exceptions import TransactionFailureError
from ledger_services import LedgerFacade, Outcome, to_outcome


class _CommitFailsSession(Session):
    def commit(self):
        raise OperationalError("COMMIT", {}, Exception("server closed the connection"))


class TestFacadeWrites:
    def test_payment_is_committed(self, facade, read_state):
        job = facade.pay_job(1, 2)

        balances, paid = read_state()
        assert job.paid is True
        assert balances[1] == Decimal("949")
        assert balances[6] == Decimal("1415")
        assert paid[2] is True

    def test_rejected_payment_commits_nothing(self, facade, read_state):
        before = read_state()
        outcome = to_outcome(facade.pay_job, 4, 5)

        assert outcome.status == 402
        assert read_state() == before

    def test_deposit_is_committed(self, facade, read_state):
        profile = facade.deposit_to_client(1, 10)

        balances, _ = read_state()
        assert profile.balance == Decimal("1160")
        assert balances[1] == Decimal("1160")

    def test_commit_failure_becomes_transaction_failure(self, seeded_db, read_state):
        factory = sessionmaker(
            bind=get_engine(), class_=_CommitFailsSession, expire_on_commit=False
        )
        facade = LedgerFacade(factory)
        before = read_state()

        with pytest.raises(TransactionFailureError) as exc_info:
            facade.pay_job(1, 2)

        assert exc_info.value.operation == "pay_job"
        assert isinstance(exc_info.value.__cause__, OperationalError)
        assert read_state() == before


class TestFacadeReads:
    def test_resolve_profile(self, facade):
        assert facade.resolve_profile("3").full_name == "John Snow"

    def test_contract_views(self, facade):
        assert facade.get_contract(3, 5).id == 5
        assert [c.id for c in facade.list_contracts(3)] == [5, 6]

    def test_unpaid_jobs(self, facade):
        assert [j.id for j in facade.list_unpaid_jobs(1)] == [2]

    def test_reports(self, facade):
        assert facade.best_profession("2020-08-15", "2020-08-17") == {
            "profession": "Programmer"
        }


class TestOutcomes:
    """Every result or typed failure maps to exactly one status."""

    def test_success_body(self, facade):
        outcome = to_outcome(facade.pay_job, 1, 2)

        assert outcome.ok
        assert outcome.status == 200
        assert outcome.body["id"] == 2
        assert outcome.body["paid"] is True
        assert outcome.body["contract"]["status"] == "in_progress"

    def test_list_body(self, facade):
        outcome = to_outcome(facade.list_contracts, 1)
        assert outcome.body == [
            {
                "id": 2,
                "terms": "bla bla bla",
                "status": "in_progress",
                "client_id": 1,
                "contractor_id": 6,
            }
        ]

    def test_empty_list_is_success(self, facade):
        outcome = to_outcome(facade.list_unpaid_jobs, 5)
        assert outcome == Outcome(status=200, body=[])

    def test_zero_deposit_has_no_content(self, facade):
        outcome = to_outcome(facade.deposit_to_client, 1, 0)
        assert outcome.status == 204
        assert outcome.body is None
        assert outcome.ok

    @pytest.mark.parametrize(
        "call, args, status, code",
        [
            ("resolve_profile", (None,), 401, "UNAUTHENTICATED"),
            ("resolve_profile", ("999",), 401, "UNAUTHENTICATED"),
            ("pay_job", (6, 2), 401, "UNAUTHORIZED_ROLE"),
            ("pay_job", (4, 15), 402, "INSUFFICIENT_FUNDS"),
            ("pay_job", (2, 2), 404, "JOB_NOT_FOUND"),
            ("get_contract", (5, 5), 404, "CONTRACT_NOT_FOUND"),
            ("deposit_to_client", (3, 10), 403, "NO_OUTSTANDING_JOBS"),
            ("deposit_to_client", (1, 60), 403, "DEPOSIT_LIMIT_EXCEEDED"),
            ("deposit_to_client", (1, "ten"), 400, "INVALID_AMOUNT"),
            ("deposit_to_client", (6, 10), 404, "PROFILE_NOT_FOUND"),
            ("best_profession", ("2020-08-17", "2020-08-15"), 400, "INVALID_TIME_RANGE"),
        ],
    )
    def test_failure_statuses(self, facade, call, args, status, code):
        outcome = to_outcome(getattr(facade, call), *args)

        assert not outcome.ok
        assert outcome.status == status
        assert outcome.error_code == code
        assert outcome.body["error"] == code
        assert outcome.body["message"]

    def test_unexpected_errors_propagate(self):
        def broken():
            raise RuntimeError("bug")

        with pytest.raises(RuntimeError):
            to_outcome(broken)
