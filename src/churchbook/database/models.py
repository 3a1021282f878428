"""SQLAlchemy models for churchbook database.

Cross-table references are plain string columns with no storage-level
foreign keys. The domain services check that referenced rows exist.
"""

from sqlalchemy import (
    Column,
    String,
    Text,
    DateTime,
    Numeric,
    Boolean,
    create_engine,
)
from sqlalchemy.orm import declarative_base, relationship, sessionmaker, Session

from churchbook.utils.time_utils import utcnow

Base = declarative_base()


class User(Base):
    """System user model."""

    __tablename__ = "users"

    id = Column(String(36), primary_key=True)
    username = Column(String(50), unique=True, nullable=False)
    email = Column(String(255), unique=True, nullable=False)
    password_hash = Column(String(255), nullable=False)
    full_name = Column(String(200), nullable=False)
    role = Column(String(20), nullable=False)
    phone_number = Column(String(12), nullable=False, default="")
    is_active = Column(Boolean, default=True, nullable=False)
    last_login = Column(DateTime, nullable=True)
    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, nullable=False)


class MembersGroup(Base):
    """Members group (cohort or estate) model."""

    __tablename__ = "members_groups"

    id = Column(String(36), primary_key=True)
    group_name = Column(String(50), unique=True, nullable=False)
    notes = Column(Text, nullable=True)
    created_by = Column(String(36), nullable=False)
    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, nullable=False)

    # Relationships
    members = relationship(
        "Member", primaryjoin="MembersGroup.id == foreign(Member.group_id)", back_populates="group"
    )


class Member(Base):
    """Church member model."""

    __tablename__ = "members"

    id = Column(String(36), primary_key=True)
    full_name = Column(String(100), nullable=False)
    phone_number = Column(String(20), unique=True, nullable=False)
    email = Column(String(255), unique=True, nullable=True)
    notes = Column(Text, nullable=True)
    group_id = Column(String(36), nullable=True)
    created_by = Column(String(36), nullable=False)
    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, nullable=False)

    # Relationships
    group = relationship(
        "MembersGroup", primaryjoin="foreign(Member.group_id) == MembersGroup.id", back_populates="members"
    )


class Account(Base):
    """Ledger account model."""

    __tablename__ = "accounts"

    id = Column(String(36), primary_key=True)
    account_name = Column(String(100), unique=True, nullable=False)
    account_type = Column(String(20), nullable=False)
    local_share = Column(Numeric(5, 4), nullable=True)
    notes = Column(Text, nullable=True)
    is_active = Column(Boolean, default=True, nullable=False)
    created_by = Column(String(36), nullable=False)
    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, nullable=False)


class Transaction(Base):
    """Parent ledger entry model."""

    __tablename__ = "transactions"

    id = Column(String(36), primary_key=True)
    transaction_ref = Column(String(20), unique=True, nullable=True)
    transaction_date = Column(DateTime, default=utcnow, nullable=False)
    transaction_type = Column(String(20), nullable=False)
    amount = Column(Numeric(12, 2), nullable=False)
    notes = Column(Text, nullable=True)
    debit_account_id = Column(String(36), nullable=False)
    member_id = Column(String(36), nullable=True)
    created_by = Column(String(36), nullable=False)
    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, nullable=False)

    # Relationships
    debit_account = relationship("Account", primaryjoin="foreign(Transaction.debit_account_id) == Account.id")
    member = relationship("Member", primaryjoin="foreign(Transaction.member_id) == Member.id")


class Receipt(Base):
    """Income line model."""

    __tablename__ = "receipts"

    id = Column(String(36), primary_key=True)
    transaction_id = Column(String(36), nullable=False)
    income_account_id = Column(String(36), nullable=False)
    amount = Column(Numeric(12, 2), nullable=False)
    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, nullable=False)

    # Relationships
    transaction = relationship("Transaction", primaryjoin="foreign(Receipt.transaction_id) == Transaction.id")
    income_account = relationship("Account", primaryjoin="foreign(Receipt.income_account_id) == Account.id")


class Expenditure(Base):
    """Expense line model."""

    __tablename__ = "expenditures"

    id = Column(String(36), primary_key=True)
    transaction_id = Column(String(36), nullable=False)
    particulars = Column(String(255), nullable=False)
    bank_account_id = Column(String(36), nullable=False)
    amount = Column(Numeric(12, 2), nullable=False)
    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, nullable=False)

    # Relationships
    transaction = relationship("Transaction", primaryjoin="foreign(Expenditure.transaction_id) == Transaction.id")
    bank_account = relationship("Account", primaryjoin="foreign(Expenditure.bank_account_id) == Account.id")


class Transfer(Base):
    """Inter-account transfer line model."""

    __tablename__ = "transfers"

    id = Column(String(36), primary_key=True)
    transaction_id = Column(String(36), nullable=False)
    particulars = Column(String(255), nullable=False)
    credit_account_id = Column(String(36), nullable=False)
    amount = Column(Numeric(12, 2), nullable=False)
    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, nullable=False)

    # Relationships
    transaction = relationship("Transaction", primaryjoin="foreign(Transfer.transaction_id) == Transaction.id")
    credit_account = relationship("Account", primaryjoin="foreign(Transfer.credit_account_id) == Account.id")


def create_session_factory(database_url: str) -> sessionmaker[Session]:
    """Create a SQLAlchemy session factory.

    The engine's connection pool is shared by every session the factory
    produces.
    """
    engine = create_engine(database_url, echo=False)
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine, expire_on_commit=False)
