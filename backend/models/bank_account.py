"""BankAccountRecord - a linked bank account in the Appwrite bank collection."""

from dataclasses import dataclass


@dataclass
class BankAccountRecord:
    """One Plaid account linked to a user.

    Created once per successful linking run and never updated in place;
    re-linking the same institution creates another record.
    """

    id: str  # Appwrite document $id
    user_id: str  # UserRecord.id of the owner
    bank_id: str  # Plaid item_id
    account_id: str  # Plaid account_id
    access_token: str  # Plaid access_token, never returned by the API
    funding_source_url: str = ""  # Dwolla funding source, empty until created
    shareable_id: str = ""  # encrypted account_id

    @classmethod
    def from_document(cls, document: dict) -> "BankAccountRecord":
        return cls(
            id=document["$id"],
            user_id=document.get("userId") or "",
            bank_id=document.get("bankId") or "",
            account_id=document.get("accountId") or "",
            access_token=document.get("accessToken") or "",
            funding_source_url=document.get("fundingSourceUrl") or "",
            shareable_id=document.get("shareableId") or "",
        )

    def to_document(self) -> dict:
        return {
            "userId": self.user_id,
            "bankId": self.bank_id,
            "accountId": self.account_id,
            "accessToken": self.access_token,
            "fundingSourceUrl": self.funding_source_url,
            "shareableId": self.shareable_id,
        }
