"""API route handlers."""
from . import auth, banks, home, plaid, transfers

__all__ = ["auth", "banks", "home", "plaid", "transfers"]
