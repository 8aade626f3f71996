"""Record types for documents kept in the Appwrite collections."""

from .bank_account import BankAccountRecord
from .user import UserRecord

__all__ = ["BankAccountRecord", "UserRecord"]
