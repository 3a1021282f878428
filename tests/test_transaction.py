"""Tests for transaction service."""

from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest
from sqlalchemy import event

from churchbook.domain.errors import (
    AccountNotFoundError,
    DuplicateReferenceError,
    InvalidAmountError,
    InvalidTransactionTypeError,
    MemberNotFoundError,
    TransactionNotFoundError,
    ValidationError,
)
from churchbook.utils.time_utils import utcnow

from conftest import CREATOR


def test_create_transaction_defaults_date_to_now(transaction_service, bank_account):
    """Test create transaction defaults date to now."""
    before = utcnow()
    transaction = transaction_service.create_transaction(
        transaction_type="receipts",
        amount=Decimal("100.50"),
        debit_account_id=bank_account.id,
        created_by=CREATOR,
    )
    after = utcnow()

    assert transaction.amount == Decimal("100.50")
    assert before <= transaction.transaction_date <= after
    assert transaction.transaction_ref is None
    assert transaction.member_id is None
    assert transaction.created_by == CREATOR


def test_create_transaction_round_trip(transaction_service, sample_transaction):
    """Test create transaction round trip."""
    fetched = transaction_service.get_transaction(sample_transaction.id)
    assert fetched == sample_transaction


@pytest.mark.parametrize("amount", [0, Decimal("-5"), "0.00"])
def test_create_transaction_rejects_non_positive_amount(transaction_service, bank_account, amount):
    """Test create transaction rejects non positive amount."""
    with pytest.raises(InvalidAmountError):
        transaction_service.create_transaction(
            transaction_type="receipts",
            amount=amount,
            debit_account_id=bank_account.id,
            created_by=CREATOR,
        )


def test_create_transaction_requires_amount(transaction_service, bank_account):
    """Test create transaction requires amount."""
    with pytest.raises(ValidationError, match="Amount is required"):
        transaction_service.create_transaction(
            transaction_type="receipts",
            amount=None,
            debit_account_id=bank_account.id,
            created_by=CREATOR,
        )


def test_create_transaction_accepts_string_amount(transaction_service, bank_account):
    """Test create transaction accepts string amount."""
    transaction = transaction_service.create_transaction(
        transaction_type="expenses",
        amount="42.10",
        debit_account_id=bank_account.id,
        created_by=CREATOR,
    )
    assert transaction.amount == Decimal("42.10")


@pytest.mark.parametrize("amount", ["0.001", "10.005"])
def test_create_transaction_rejects_sub_cent_amount(transaction_service, bank_account, amount):
    """Test create transaction rejects amounts the ledger cannot store exactly."""
    with pytest.raises(InvalidAmountError, match="two decimal places"):
        transaction_service.create_transaction(
            transaction_type="receipts",
            amount=amount,
            debit_account_id=bank_account.id,
            created_by=CREATOR,
        )


def test_create_transaction_amount_matches_stored(transaction_service, bank_account):
    """Test the amount returned on create equals the amount read back."""
    created = transaction_service.create_transaction(
        transaction_type="receipts",
        amount="10.50",
        debit_account_id=bank_account.id,
        created_by=CREATOR,
    )
    fetched = transaction_service.get_transaction(created.id)
    assert fetched.amount == created.amount == Decimal("10.50")


def test_create_transaction_invalid_type(transaction_service, bank_account):
    """Test create transaction invalid type."""
    with pytest.raises(InvalidTransactionTypeError):
        transaction_service.create_transaction(
            transaction_type="Receipts",
            amount=Decimal("10"),
            debit_account_id=bank_account.id,
            created_by=CREATOR,
        )


def test_create_transaction_unknown_account(transaction_service):
    """Test create transaction unknown account."""
    with pytest.raises(AccountNotFoundError):
        transaction_service.create_transaction(
            transaction_type="receipts",
            amount=Decimal("10"),
            debit_account_id="missing",
            created_by=CREATOR,
        )


def test_create_transaction_requires_account(transaction_service):
    """Test create transaction requires account."""
    with pytest.raises(ValidationError, match="Debit account is required"):
        transaction_service.create_transaction(
            transaction_type="receipts",
            amount=Decimal("10"),
            debit_account_id="",
            created_by=CREATOR,
        )


def test_create_transaction_unknown_member(transaction_service, bank_account):
    """Test create transaction unknown member."""
    with pytest.raises(MemberNotFoundError):
        transaction_service.create_transaction(
            transaction_type="receipts",
            amount=Decimal("10"),
            debit_account_id=bank_account.id,
            created_by=CREATOR,
            member_id="missing",
        )


def test_create_transaction_duplicate_reference(transaction_service, sample_transaction, bank_account):
    """Test create transaction duplicate reference."""
    with pytest.raises(DuplicateReferenceError):
        transaction_service.create_transaction(
            transaction_type="withdrawal",
            amount=Decimal("10"),
            debit_account_id=bank_account.id,
            created_by=CREATOR,
            transaction_ref="REF-001",
        )


def test_create_transaction_reference_too_long(transaction_service, bank_account):
    """Test create transaction reference too long."""
    with pytest.raises(ValidationError):
        transaction_service.create_transaction(
            transaction_type="receipts",
            amount=Decimal("10"),
            debit_account_id=bank_account.id,
            created_by=CREATOR,
            transaction_ref="R" * 21,
        )


def test_create_transaction_aware_date_stored_as_utc(transaction_service, bank_account):
    """Test create transaction aware date stored as utc."""
    eat = timezone(timedelta(hours=3))
    transaction = transaction_service.create_transaction(
        transaction_type="receipts",
        amount=Decimal("10"),
        debit_account_id=bank_account.id,
        created_by=CREATOR,
        transaction_date=datetime(2024, 3, 1, 12, 0, tzinfo=eat),
    )
    assert transaction.transaction_date == datetime(2024, 3, 1, 9, 0)


def test_get_transaction_with_related(transaction_service, sample_transaction, bank_account, sample_member):
    """Test get transaction with related."""
    transaction = transaction_service.get_transaction(sample_transaction.id, with_related=True)

    assert transaction.debit_account.id == bank_account.id
    assert transaction.member.id == sample_member.id


def test_get_transaction_not_found(transaction_service):
    """Test get transaction not found."""
    with pytest.raises(TransactionNotFoundError):
        transaction_service.get_transaction("missing")


def test_get_transaction_by_ref(transaction_service, sample_transaction):
    """Test get transaction by ref."""
    assert transaction_service.get_transaction_by_ref("REF-001").id == sample_transaction.id

    with pytest.raises(TransactionNotFoundError):
        transaction_service.get_transaction_by_ref("REF-404")


def _create(service, account_id, when, transaction_type="receipts", member_id=None):
    return service.create_transaction(
        transaction_type=transaction_type,
        amount=Decimal("10"),
        debit_account_id=account_id,
        created_by=CREATOR,
        transaction_date=when,
        member_id=member_id,
    )


def test_list_transactions_newest_first(transaction_service, bank_account):
    """Test list transactions newest first."""
    old = _create(transaction_service, bank_account.id, datetime(2024, 1, 1))
    new = _create(transaction_service, bank_account.id, datetime(2024, 6, 1))

    assert [t.id for t in transaction_service.list_transactions()] == [new.id, old.id]


def test_list_transactions_by_account(transaction_service, account_service, bank_account):
    """Test list transactions by account."""
    other = account_service.create_account(account_name="Petty Cash", account_type="Bank", created_by=CREATOR)
    mine = _create(transaction_service, bank_account.id, datetime(2024, 1, 1))
    _create(transaction_service, other.id, datetime(2024, 1, 2))

    assert [t.id for t in transaction_service.list_transactions_by_account(bank_account.id)] == [mine.id]


def test_list_transactions_by_member(transaction_service, sample_transaction, sample_member, bank_account):
    """Test list transactions by member."""
    _create(transaction_service, bank_account.id, datetime(2024, 1, 1))

    result = transaction_service.list_transactions_by_member(sample_member.id)
    assert [t.id for t in result] == [sample_transaction.id]


def test_list_transactions_by_type(transaction_service, bank_account):
    """Test list transactions by type."""
    _create(transaction_service, bank_account.id, datetime(2024, 1, 1), "receipts")
    expense = _create(transaction_service, bank_account.id, datetime(2024, 1, 2), "expenses")

    assert [t.id for t in transaction_service.list_transactions_by_type("expenses")] == [expense.id]
    with pytest.raises(InvalidTransactionTypeError):
        transaction_service.list_transactions_by_type("gift")


def test_list_transactions_by_date_range_inclusive(transaction_service, bank_account):
    """Test list transactions by date range inclusive."""
    _create(transaction_service, bank_account.id, datetime(2024, 1, 31, 23, 59))
    first = _create(transaction_service, bank_account.id, datetime(2024, 2, 1))
    last = _create(transaction_service, bank_account.id, datetime(2024, 2, 29, 23, 59, 59))
    _create(transaction_service, bank_account.id, datetime(2024, 3, 1))

    result = transaction_service.list_transactions_by_date_range(
        datetime(2024, 2, 1), datetime(2024, 2, 29, 23, 59, 59)
    )
    assert [t.id for t in result] == [last.id, first.id]


def test_list_transactions_by_date_range_validation(transaction_service):
    """Test list transactions by date range validation."""
    with pytest.raises(ValidationError):
        transaction_service.list_transactions_by_date_range(datetime(2024, 3, 1), datetime(2024, 2, 1))
    with pytest.raises(ValidationError):
        transaction_service.list_transactions_by_date_range(None, datetime(2024, 2, 1))


def test_update_transaction_notes_only(transaction_service, sample_transaction):
    """Test update transaction notes only."""
    updated = transaction_service.update_transaction(sample_transaction.id, notes="x")

    assert updated.notes == "x"
    assert updated.amount == sample_transaction.amount
    assert updated.transaction_type == sample_transaction.transaction_type
    assert updated.transaction_ref == sample_transaction.transaction_ref
    assert updated.member_id == sample_transaction.member_id
    assert updated.transaction_date == sample_transaction.transaction_date


def test_update_transaction_amount(transaction_service, sample_transaction):
    """Test update transaction amount."""
    updated = transaction_service.update_transaction(sample_transaction.id, amount=Decimal("99.99"))
    assert updated.amount == Decimal("99.99")

    with pytest.raises(InvalidAmountError):
        transaction_service.update_transaction(sample_transaction.id, amount=Decimal("0"))


def test_update_transaction_duplicate_reference(transaction_service, sample_transaction, bank_account):
    """Test update transaction duplicate reference."""
    other = _create(transaction_service, bank_account.id, datetime(2024, 1, 1))

    with pytest.raises(DuplicateReferenceError):
        transaction_service.update_transaction(other.id, transaction_ref="REF-001")


def test_update_transaction_clear_reference(transaction_service, bank_account):
    """Test an empty reference clears it, and several transactions may have none."""
    first = transaction_service.create_transaction(
        transaction_type="receipts",
        amount=Decimal("10.00"),
        debit_account_id=bank_account.id,
        transaction_ref="A1",
        created_by=CREATOR,
    )
    second = transaction_service.create_transaction(
        transaction_type="receipts",
        amount=Decimal("20.00"),
        debit_account_id=bank_account.id,
        transaction_ref="B1",
        created_by=CREATOR,
    )

    assert transaction_service.update_transaction(first.id, transaction_ref="").transaction_ref is None
    assert transaction_service.update_transaction(second.id, transaction_ref="").transaction_ref is None
    assert transaction_service.get_transaction(second.id).transaction_ref is None


def test_update_transaction_detach_member(transaction_service, sample_transaction):
    """Test update transaction detach member."""
    updated = transaction_service.update_transaction(sample_transaction.id, member_id="")
    assert updated.member_id is None


def test_update_transaction_not_found(transaction_service):
    """Test update transaction not found."""
    with pytest.raises(TransactionNotFoundError):
        transaction_service.update_transaction("missing", notes="x")


def test_delete_transaction(transaction_service, sample_transaction):
    """Test delete transaction."""
    transaction_service.delete_transaction(sample_transaction.id)

    with pytest.raises(TransactionNotFoundError):
        transaction_service.get_transaction(sample_transaction.id)
    with pytest.raises(TransactionNotFoundError):
        transaction_service.delete_transaction(sample_transaction.id)


@pytest.fixture
def enforcing_db(temp_db):
    """Turn on SQLite foreign key enforcement for every new connection."""
    engine = temp_db.session_factory.kw["bind"]

    def enable_foreign_keys(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    event.listen(engine, "connect", enable_foreign_keys)
    engine.dispose()
    yield temp_db
    event.remove(engine, "connect", enable_foreign_keys)


def test_delete_transaction_with_receipt_on_enforcing_store(
    enforcing_db, transaction_service, receipt_service, sample_transaction, income_account
):
    """Test delete transaction keeps its receipt when the store enforces foreign keys."""
    receipt = receipt_service.create_receipt(sample_transaction.id, income_account.id, Decimal("350.00"))

    transaction_service.delete_transaction(sample_transaction.id)

    with pytest.raises(TransactionNotFoundError):
        transaction_service.get_transaction(sample_transaction.id)
    assert [r.id for r in receipt_service.list_receipts_by_transaction(sample_transaction.id)] == [receipt.id]


def test_delete_member_with_transaction_on_enforcing_store(
    enforcing_db, transaction_service, member_service, sample_transaction, sample_member
):
    """Test delete member keeps its transactions when the store enforces foreign keys."""
    member_service.delete_member(sample_member.id)

    fetched = transaction_service.get_transaction(sample_transaction.id, with_related=True)
    assert fetched.member_id == sample_member.id
    assert fetched.member is None
    assert fetched.debit_account is not None
