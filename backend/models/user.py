"""UserRecord - a user document in the Appwrite user collection."""

from dataclasses import dataclass


@dataclass
class UserRecord:
    """Profile document created at sign-up (or back-filled at sign-in).

    Appwrite stores attributes in camelCase; ``from_document`` and
    ``to_document`` translate between the collection schema and this
    record.
    """

    id: str  # Appwrite document $id
    email: str
    first_name: str = ""
    last_name: str = ""
    user_id: str = ""  # Appwrite account $id
    username: str = ""
    password_hash: str = ""  # bcrypt hash, never returned by the API
    status: str = "active"
    address1: str = ""
    city: str = ""
    state: str = ""
    postal_code: str = ""
    date_of_birth: str = ""
    ssn: str = ""
    dwolla_customer_url: str = ""
    dwolla_customer_id: str = ""

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    @classmethod
    def from_document(cls, document: dict) -> "UserRecord":
        """Build a record from an Appwrite document dict."""
        return cls(
            id=document["$id"],
            email=document.get("email") or "",
            first_name=document.get("firstName") or "",
            last_name=document.get("lastName") or "",
            user_id=document.get("userId") or "",
            username=document.get("username") or "",
            password_hash=document.get("passwordHash") or "",
            status=document.get("status") or "active",
            address1=document.get("address1") or "",
            city=document.get("city") or "",
            state=document.get("state") or "",
            postal_code=document.get("postalCode") or "",
            date_of_birth=document.get("dateOfBirth") or "",
            ssn=document.get("ssn") or "",
            dwolla_customer_url=document.get("dwollaCustomerUrl") or "",
            dwolla_customer_id=document.get("dwollaCustomerId") or "",
        )

    def to_document(self) -> dict:
        """Return the attribute payload for ``create_document`` (no ``$id``)."""
        return {
            "userId": self.user_id,
            "username": self.username,
            "passwordHash": self.password_hash,
            "status": self.status,
            "firstName": self.first_name,
            "lastName": self.last_name,
            "email": self.email,
            "address1": self.address1,
            "city": self.city,
            "state": self.state,
            "postalCode": self.postal_code,
            "dateOfBirth": self.date_of_birth,
            "ssn": self.ssn,
            "dwollaCustomerUrl": self.dwolla_customer_url,
            "dwollaCustomerId": self.dwolla_customer_id,
        }
