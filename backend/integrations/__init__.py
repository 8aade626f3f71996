"""External API integrations.

This package contains:
- Appwrite client: identity accounts, sessions and documents
- Plaid client: Link tokens, token exchange and account lookup
- Dwolla client: customers, funding sources and transfers
- Typed exceptions shared by all of the above
"""

from integrations.appwrite_client import AppwriteClient
from integrations.dwolla_client import DwollaClient
from integrations.plaid_client import PlaidAccount, PlaidClient

__all__ = [
    "AppwriteClient",
    "DwollaClient",
    "PlaidAccount",
    "PlaidClient",
]
