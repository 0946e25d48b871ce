"""
Comprehensive tests for the LedgerService.

Tests cover:
- Recording balanced transactions
- Required description and minimum line count
- Per-line account and debit/credit checks
- Amount precision and text length limits
- Imbalance rejection with both totals reported
- Check ordering (first violation wins)
- Reading and deleting transactions
"""

from datetime import datetime
from decimal import Decimal

import pytest

from erp_accounting.models.enums import AccountType
from erp_accounting.services.chart_service import ChartOfAccountsService
from erp_accounting.services.exceptions import (
    ImbalancedTransactionError,
    NotFoundError,
    ValidationError,
)
from erp_accounting.services.ledger_service import LedgerService
from erp_accounting.schemas.account import AccountCreate
from erp_accounting.schemas.transaction import (
    TransactionCreate,
    TransactionLineCreate,
)


# --- Helpers to reduce repetition ---

def make_account(db, code, account_type):
    return ChartOfAccountsService(db).create_account(AccountCreate(
        code=code, name=code.title(), account_type=account_type,
    ))


def line(account, debit="0", credit="0"):
    return TransactionLineCreate(
        account_id=account.id if hasattr(account, "id") else account,
        debit=Decimal(debit),
        credit=Decimal(credit),
    )


def record(service, lines, description="Test", date=None, created_by="user-1"):
    return service.record_transaction(
        TransactionCreate(date=date, description=description, lines=lines),
        created_by=created_by,
    )


@pytest.fixture
def accounts(db_session):
    """Cash (asset) and Equity (capital) accounts."""
    cash = make_account(db_session, "CASH", AccountType.ASSET)
    equity = make_account(db_session, "EQUITY", AccountType.CAPITAL)
    db_session.commit()
    return cash, equity


# --- Recording Tests ---

class TestRecordTransaction:

    def test_balanced_transaction_succeeds(self, db_session, accounts):
        cash, equity = accounts
        service = LedgerService(db_session)

        txn = record(service, [
            line(cash, debit="1000"),
            line(equity, credit="1000"),
        ], description="Owner contribution")
        db_session.commit()

        assert txn.id is not None
        assert txn.description == "Owner contribution"
        assert txn.created_by == "user-1"
        assert len(txn.lines) == 2
        assert txn.total_debit == txn.total_credit == Decimal("1000")

    def test_lines_keep_submission_order(self, db_session, accounts):
        cash, equity = accounts
        service = LedgerService(db_session)

        txn = record(service, [
            line(equity, credit="300"),
            line(cash, debit="100"),
            line(cash, debit="200"),
        ])
        db_session.commit()

        fetched = service.get_transaction(txn.id)
        assert [entry.position for entry in fetched.lines] == [0, 1, 2]
        assert [entry.account_id for entry in fetched.lines] == [
            equity.id, cash.id, cash.id,
        ]

    def test_description_is_trimmed(self, db_session, accounts):
        cash, equity = accounts
        txn = record(LedgerService(db_session), [
            line(cash, debit="5"), line(equity, credit="5"),
        ], description="  Opening balance  ")

        assert txn.description == "Opening balance"

    def test_date_defaults_to_now(self, db_session, accounts):
        cash, equity = accounts
        before = datetime.utcnow()
        txn = record(LedgerService(db_session), [
            line(cash, debit="5"), line(equity, credit="5"),
        ])

        assert txn.date >= before.replace(microsecond=0)

    def test_explicit_date_is_kept(self, db_session, accounts):
        cash, equity = accounts
        when = datetime(2024, 1, 31, 12, 0)
        txn = record(LedgerService(db_session), [
            line(cash, debit="5"), line(equity, credit="5"),
        ], date=when)

        assert txn.date == when

    def test_many_lines_balanced(self, db_session, accounts):
        cash, equity = accounts
        bank = make_account(db_session, "BANK", AccountType.ASSET)
        db_session.commit()

        txn = record(LedgerService(db_session), [
            line(cash, debit="250.50"),
            line(bank, debit="749.50"),
            line(equity, credit="1000.00"),
        ])

        assert txn.total_debit == Decimal("1000.00")

    def test_decimal_amounts_balance_exactly(self, db_session, accounts):
        cash, equity = accounts

        txn = record(LedgerService(db_session), [
            line(cash, debit="0.1"),
            line(cash, debit="0.2"),
            line(equity, credit="0.3"),
        ])

        assert txn.id is not None


class TestRecordTransactionValidation:

    @pytest.mark.parametrize("description", [None, "", "   "])
    def test_missing_description_rejected(
        self, db_session, accounts, description
    ):
        cash, equity = accounts

        with pytest.raises(ValidationError, match="description"):
            record(LedgerService(db_session), [
                line(cash, debit="10"), line(equity, credit="10"),
            ], description=description)

    def test_single_line_rejected(self, db_session, accounts):
        cash, _ = accounts

        with pytest.raises(ValidationError, match="at least two lines"):
            record(LedgerService(db_session), [line(cash, debit="10")])

    def test_no_lines_rejected(self, db_session):
        with pytest.raises(ValidationError):
            record(LedgerService(db_session), [])

    def test_line_with_both_sides_rejected(self, db_session, accounts):
        cash, equity = accounts

        with pytest.raises(ValidationError, match="Line 1"):
            record(LedgerService(db_session), [
                line(cash, debit="100", credit="50"),
                line(equity, credit="50"),
            ])

    def test_line_with_neither_side_rejected(self, db_session, accounts):
        cash, equity = accounts

        with pytest.raises(ValidationError, match="Line 2"):
            record(LedgerService(db_session), [
                line(cash, debit="100"),
                line(equity),
                line(equity, credit="100"),
            ])

    def test_negative_amount_rejected(self, db_session, accounts):
        cash, equity = accounts

        with pytest.raises(ValidationError, match="Line 1"):
            record(LedgerService(db_session), [
                line(cash, debit="-100"),
                line(equity, debit="-100"),
            ])

    def test_line_without_account_rejected(self, db_session, accounts):
        _, equity = accounts

        with pytest.raises(ValidationError, match="Line 1: account is required"):
            record(LedgerService(db_session), [
                TransactionLineCreate(debit=Decimal("10")),
                line(equity, credit="10"),
            ])

    def test_nonexistent_account_rejected(self, db_session, accounts):
        cash, _ = accounts

        with pytest.raises(NotFoundError, match="Line 2: account 999"):
            record(LedgerService(db_session), [
                line(cash, debit="10"),
                line(999, credit="10"),
            ])

    def test_unbalanced_transaction_rejected(self, db_session, accounts):
        cash, equity = accounts

        with pytest.raises(ImbalancedTransactionError) as excinfo:
            record(LedgerService(db_session), [
                line(cash, debit="500"),
                line(equity, credit="300"),
            ])

        assert excinfo.value.total_debit == Decimal("500")
        assert excinfo.value.total_credit == Decimal("300")
        assert "does not balance" in str(excinfo.value)

    def test_imbalance_is_not_a_validation_error(self, db_session, accounts):
        cash, equity = accounts

        with pytest.raises(ImbalancedTransactionError) as excinfo:
            record(LedgerService(db_session), [
                line(cash, debit="1"), line(equity, credit="2"),
            ])

        assert not isinstance(excinfo.value, ValidationError)

    def test_first_violation_wins(self, db_session, accounts):
        """A bad account on line 1 is reported before the imbalance."""
        _, equity = accounts

        with pytest.raises(NotFoundError, match="Line 1"):
            record(LedgerService(db_session), [
                line(999, debit="10"),
                line(equity, credit="99"),
            ])

    def test_amount_below_four_places_rejected(self, db_session, accounts):
        cash, equity = accounts
        service = LedgerService(db_session)

        with pytest.raises(ValidationError, match="Line 1: amounts"):
            record(service, [
                line(cash, debit="0.00001"),
                line(equity, credit="0.00001"),
            ])
        db_session.commit()

        assert service.list_transactions() == []

    def test_fifth_decimal_rejected_even_when_balanced(
        self, db_session, accounts
    ):
        cash, equity = accounts

        with pytest.raises(ValidationError, match="Line 2"):
            record(LedgerService(db_session), [
                line(cash, debit="10.0001"),
                line(equity, credit="10.00005"),
                line(cash, credit="0.00005"),
            ])

    def test_trailing_zeros_beyond_four_places_accepted(
        self, db_session, accounts
    ):
        cash, equity = accounts

        txn = record(LedgerService(db_session), [
            line(cash, debit="1.500000"), line(equity, credit="1.5"),
        ])

        assert txn.id is not None

    def test_oversized_amount_rejected(self, db_session, accounts):
        cash, equity = accounts

        with pytest.raises(ValidationError, match="Line 1"):
            record(LedgerService(db_session), [
                line(cash, debit="100000000000000"),
                line(equity, credit="100000000000000"),
            ])

    def test_description_too_long_rejected(self, db_session, accounts):
        cash, equity = accounts

        with pytest.raises(ValidationError, match="at most 255"):
            record(LedgerService(db_session), [
                line(cash, debit="1"), line(equity, credit="1"),
            ], description="x" * 256)

    def test_actor_too_long_rejected(self, db_session, accounts):
        cash, equity = accounts

        with pytest.raises(ValidationError, match="Acting user"):
            record(LedgerService(db_session), [
                line(cash, debit="1"), line(equity, credit="1"),
            ], created_by="u" * 101)

    def test_missing_actor_rejected(self, db_session, accounts):
        cash, equity = accounts

        with pytest.raises(ValidationError, match="acting user"):
            record(LedgerService(db_session), [
                line(cash, debit="10"), line(equity, credit="10"),
            ], created_by="")

    def test_rejected_transaction_is_not_persisted(self, db_session, accounts):
        cash, equity = accounts
        service = LedgerService(db_session)

        with pytest.raises(ImbalancedTransactionError):
            record(service, [line(cash, debit="10"), line(equity, credit="9")])
        db_session.commit()

        assert service.list_transactions() == []


# --- Read / Delete Tests ---

class TestTransactionLookup:

    def test_get_transaction(self, db_session, accounts):
        cash, equity = accounts
        service = LedgerService(db_session)
        txn = record(service, [line(cash, debit="10"), line(equity, credit="10")])
        db_session.commit()

        fetched = service.get_transaction(txn.id)
        assert fetched.id == txn.id
        assert fetched.lines[0].account.code == "CASH"

    def test_stored_amounts_reload_exactly(self, db_session, accounts):
        cash, equity = accounts
        service = LedgerService(db_session)
        txn = record(service, [
            line(cash, debit="12345678901234.5678"),
            line(cash, debit="0.0001"),
            line(equity, credit="12345678901234.5679"),
        ])
        db_session.commit()
        db_session.expire_all()

        fetched = service.get_transaction(txn.id)
        amounts = [(entry.debit, entry.credit) for entry in fetched.lines]
        assert amounts == [
            (Decimal("12345678901234.5678"), Decimal("0")),
            (Decimal("0.0001"), Decimal("0")),
            (Decimal("0"), Decimal("12345678901234.5679")),
        ]
        assert all((d > 0) != (c > 0) for d, c in amounts)
        assert fetched.total_debit == fetched.total_credit

    def test_get_nonexistent_transaction(self, db_session):
        with pytest.raises(NotFoundError, match="Transaction 999"):
            LedgerService(db_session).get_transaction(999)

    def test_list_is_ordered_by_date(self, db_session, accounts):
        cash, equity = accounts
        service = LedgerService(db_session)
        record(service, [line(cash, debit="2"), line(equity, credit="2")],
               description="Later", date=datetime(2024, 3, 1))
        record(service, [line(cash, debit="1"), line(equity, credit="1")],
               description="Earlier", date=datetime(2024, 1, 1))
        db_session.commit()

        descriptions = [t.description for t in service.list_transactions()]
        assert descriptions == ["Earlier", "Later"]

    def test_delete_transaction(self, db_session, accounts):
        cash, equity = accounts
        service = LedgerService(db_session)
        txn = record(service, [line(cash, debit="10"), line(equity, credit="10")])
        db_session.commit()

        service.delete_transaction(txn.id)
        db_session.commit()

        assert service.list_transactions() == []
        with pytest.raises(NotFoundError):
            service.get_transaction(txn.id)

    def test_delete_nonexistent_transaction(self, db_session):
        with pytest.raises(NotFoundError):
            LedgerService(db_session).delete_transaction(999)
