"""Domain layer for churchbook application."""

from churchbook.domain.account import AccountService
from churchbook.domain.member import MemberService
from churchbook.domain.members_group import MembersGroupService
from churchbook.domain.transaction import TransactionService
from churchbook.domain.receipt import ReceiptService
from churchbook.domain.expenditure import ExpenditureService
from churchbook.domain.transfer import TransferService
from churchbook.domain.user import UserService

__all__ = [
    "AccountService",
    "MemberService",
    "MembersGroupService",
    "TransactionService",
    "ReceiptService",
    "ExpenditureService",
    "TransferService",
    "UserService",
]
