"""Mapper functions to convert SQLAlchemy models to domain entities.

Related objects are only loaded when ``with_related`` is set; the mapper
must then run while the owning session is still open.
"""

from decimal import Decimal
from typing import Optional

from churchbook.domain import entities as domain
from churchbook.database.models import (
    User as ORMUser,
    MembersGroup as ORMMembersGroup,
    Member as ORMMember,
    Account as ORMAccount,
    Transaction as ORMTransaction,
    Receipt as ORMReceipt,
    Expenditure as ORMExpenditure,
    Transfer as ORMTransfer,
)


def _decimal(value) -> Optional[Decimal]:
    if value is None:
        return None
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def user_to_domain(orm_user: ORMUser) -> domain.User:
    """Convert SQLAlchemy User model to domain User entity."""
    return domain.User(
        id=orm_user.id,
        username=orm_user.username,
        email=orm_user.email,
        password_hash=orm_user.password_hash,
        full_name=orm_user.full_name,
        role=orm_user.role,
        phone_number=orm_user.phone_number or "",
        is_active=bool(orm_user.is_active),
        last_login=orm_user.last_login,
        created_at=orm_user.created_at,
        updated_at=orm_user.updated_at,
    )


def group_to_domain(orm_group: ORMMembersGroup) -> domain.MembersGroup:
    """Convert SQLAlchemy MembersGroup model to domain MembersGroup entity."""
    return domain.MembersGroup(
        id=orm_group.id,
        group_name=orm_group.group_name,
        notes=orm_group.notes,
        created_by=orm_group.created_by,
        created_at=orm_group.created_at,
        updated_at=orm_group.updated_at,
    )


def member_to_domain(orm_member: ORMMember, with_related: bool = False) -> domain.Member:
    """Convert SQLAlchemy Member model to domain Member entity."""
    group = None
    if with_related and orm_member.group is not None:
        group = group_to_domain(orm_member.group)
    return domain.Member(
        id=orm_member.id,
        full_name=orm_member.full_name,
        phone_number=orm_member.phone_number,
        email=orm_member.email,
        notes=orm_member.notes,
        group_id=orm_member.group_id,
        created_by=orm_member.created_by,
        created_at=orm_member.created_at,
        updated_at=orm_member.updated_at,
        group=group,
    )


def account_to_domain(orm_account: ORMAccount) -> domain.Account:
    """Convert SQLAlchemy Account model to domain Account entity."""
    return domain.Account(
        id=orm_account.id,
        account_name=orm_account.account_name,
        account_type=orm_account.account_type,
        local_share=_decimal(orm_account.local_share),
        notes=orm_account.notes,
        is_active=bool(orm_account.is_active),
        created_by=orm_account.created_by,
        created_at=orm_account.created_at,
        updated_at=orm_account.updated_at,
    )


def transaction_to_domain(
    orm_transaction: ORMTransaction, with_related: bool = False
) -> domain.Transaction:
    """Convert SQLAlchemy Transaction model to domain Transaction entity."""
    debit_account = None
    member = None
    if with_related:
        if orm_transaction.debit_account is not None:
            debit_account = account_to_domain(orm_transaction.debit_account)
        if orm_transaction.member is not None:
            member = member_to_domain(orm_transaction.member)
    return domain.Transaction(
        id=orm_transaction.id,
        transaction_ref=orm_transaction.transaction_ref,
        transaction_date=orm_transaction.transaction_date,
        transaction_type=orm_transaction.transaction_type,
        amount=_decimal(orm_transaction.amount),
        notes=orm_transaction.notes,
        debit_account_id=orm_transaction.debit_account_id,
        member_id=orm_transaction.member_id,
        created_by=orm_transaction.created_by,
        created_at=orm_transaction.created_at,
        updated_at=orm_transaction.updated_at,
        debit_account=debit_account,
        member=member,
    )


def _related_transaction(orm_child, with_related: bool) -> Optional[domain.Transaction]:
    if with_related and orm_child.transaction is not None:
        return transaction_to_domain(orm_child.transaction)
    return None


def _related_account(orm_account: Optional[ORMAccount], with_related: bool) -> Optional[domain.Account]:
    if with_related and orm_account is not None:
        return account_to_domain(orm_account)
    return None


def receipt_to_domain(orm_receipt: ORMReceipt, with_related: bool = False) -> domain.Receipt:
    """Convert SQLAlchemy Receipt model to domain Receipt entity."""
    return domain.Receipt(
        id=orm_receipt.id,
        transaction_id=orm_receipt.transaction_id,
        income_account_id=orm_receipt.income_account_id,
        amount=_decimal(orm_receipt.amount),
        created_at=orm_receipt.created_at,
        updated_at=orm_receipt.updated_at,
        transaction=_related_transaction(orm_receipt, with_related),
        income_account=_related_account(
            orm_receipt.income_account if with_related else None, with_related
        ),
    )


def expenditure_to_domain(
    orm_expenditure: ORMExpenditure, with_related: bool = False
) -> domain.Expenditure:
    """Convert SQLAlchemy Expenditure model to domain Expenditure entity."""
    return domain.Expenditure(
        id=orm_expenditure.id,
        transaction_id=orm_expenditure.transaction_id,
        particulars=orm_expenditure.particulars,
        bank_account_id=orm_expenditure.bank_account_id,
        amount=_decimal(orm_expenditure.amount),
        created_at=orm_expenditure.created_at,
        updated_at=orm_expenditure.updated_at,
        transaction=_related_transaction(orm_expenditure, with_related),
        bank_account=_related_account(
            orm_expenditure.bank_account if with_related else None, with_related
        ),
    )


def transfer_to_domain(orm_transfer: ORMTransfer, with_related: bool = False) -> domain.Transfer:
    """Convert SQLAlchemy Transfer model to domain Transfer entity."""
    return domain.Transfer(
        id=orm_transfer.id,
        transaction_id=orm_transfer.transaction_id,
        particulars=orm_transfer.particulars,
        credit_account_id=orm_transfer.credit_account_id,
        amount=_decimal(orm_transfer.amount),
        created_at=orm_transfer.created_at,
        updated_at=orm_transfer.updated_at,
        transaction=_related_transaction(orm_transfer, with_related),
        credit_account=_related_account(
            orm_transfer.credit_account if with_related else None, with_related
        ),
    )
