"""Shared pytest fixtures for churchbook tests."""

import os
import tempfile
from decimal import Decimal

import pytest

from churchbook.config import Settings
from churchbook.database.factories import create_sqlite_database
from churchbook.domain.account import AccountService
from churchbook.domain.expenditure import ExpenditureService
from churchbook.domain.member import MemberService
from churchbook.domain.members_group import MembersGroupService
from churchbook.domain.receipt import ReceiptService
from churchbook.domain.transaction import TransactionService
from churchbook.domain.transfer import TransferService
from churchbook.domain.user import UserService

# Lowest cost bcrypt accepts; keeps hashing fast in tests
TEST_BCRYPT_ROUNDS = 4

CREATOR = "test-user"


@pytest.fixture
def temp_db():
    """Create a temporary database for testing."""
    # Create a temporary file for the database
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    # Create database
    db = create_sqlite_database(database_path=db_path)
    # Store the path for tests that need it
    db.database_path = db_path
    db.connect()
    db.initialize_schema()

    yield db

    # Cleanup
    db.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def db_url(temp_db):
    """SQLAlchemy URL of the temporary database."""
    return f"sqlite:///{temp_db.database_path}"


@pytest.fixture
def account_service(temp_db):
    """Create an AccountService with a temporary database."""
    return AccountService(temp_db)


@pytest.fixture
def group_service(temp_db):
    """Create a MembersGroupService with a temporary database."""
    return MembersGroupService(temp_db)


@pytest.fixture
def member_service(temp_db):
    """Create a MemberService with a temporary database."""
    return MemberService(temp_db)


@pytest.fixture
def transaction_service(temp_db):
    """Create a TransactionService with a temporary database."""
    return TransactionService(temp_db)


@pytest.fixture
def receipt_service(temp_db):
    """Create a ReceiptService with a temporary database."""
    return ReceiptService(temp_db)


@pytest.fixture
def expenditure_service(temp_db):
    """Create an ExpenditureService with a temporary database."""
    return ExpenditureService(temp_db)


@pytest.fixture
def transfer_service(temp_db):
    """Create a TransferService with a temporary database."""
    return TransferService(temp_db)


@pytest.fixture
def user_service(temp_db):
    """Create a UserService with a temporary database and cheap hashing."""
    return UserService(temp_db, bcrypt_rounds=TEST_BCRYPT_ROUNDS)


@pytest.fixture
def bank_account(account_service):
    """Create a sample bank account for testing."""
    return account_service.create_account(
        account_name="Main Bank", account_type="Bank", created_by=CREATOR
    )


@pytest.fixture
def income_account(account_service):
    """Create a sample income account for testing."""
    return account_service.create_account(
        account_name="Tithes", account_type="Income", created_by=CREATOR, local_share=Decimal("0.3")
    )


@pytest.fixture
def sample_group(group_service):
    """Create a sample members group for testing."""
    return group_service.create_group(group_name="Youth", created_by=CREATOR, notes="Under 30")


@pytest.fixture
def sample_member(member_service, sample_group):
    """Create a sample member in the sample group."""
    return member_service.create_member(
        full_name="Grace Wanjiru",
        phone_number="+254712345678",
        created_by=CREATOR,
        email="grace@example.com",
        group_id=sample_group.id,
    )


@pytest.fixture
def sample_transaction(transaction_service, bank_account, sample_member):
    """Create a sample receipts-type transaction."""
    return transaction_service.create_transaction(
        transaction_type="receipts",
        amount=Decimal("350.00"),
        debit_account_id=bank_account.id,
        created_by=CREATOR,
        transaction_ref="REF-001",
        member_id=sample_member.id,
    )


@pytest.fixture
def sample_user(user_service):
    """Create an active treasurer with password 'Secret123'."""
    return user_service.create_user(
        username="treasurer",
        email="treasurer@example.com",
        password="Secret123",
        full_name="Paul Otieno",
        role="Treasurer",
        phone_number="0712345678",
    )


@pytest.fixture
def app(temp_db):
    """Flask app bound to the temporary database."""
    from churchbook.api import create_app

    settings = Settings(database_url=None, bcrypt_rounds=TEST_BCRYPT_ROUNDS)
    flask_app = create_app(settings=settings, db=temp_db)
    flask_app.config.update(TESTING=True)
    return flask_app


@pytest.fixture
def client(app):
    """Flask test client."""
    return app.test_client()


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()
