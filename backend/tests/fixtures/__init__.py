"""Test fixtures and sample data."""
import pytest

from models import BankAccountRecord, UserRecord
from utils.shareable_id import ShareableIdCipher


@pytest.fixture
def cipher() -> ShareableIdCipher:
    """A cipher with a fresh random key."""
    return ShareableIdCipher.from_encoded_key(ShareableIdCipher.generate_key())


@pytest.fixture
def user_record() -> UserRecord:
    """A user document as the services see it."""
    return UserRecord(
        id="user_doc_1",
        email="jane@example.com",
        first_name="Jane",
        last_name="Doe",
        user_id="acct_1",
        username="jane",
    )


@pytest.fixture
def bank_record(user_record) -> BankAccountRecord:
    return BankAccountRecord(
        id="bank_doc_1",
        user_id=user_record.id,
        bank_id="item-sandbox-test",
        account_id="acc_checking_001",
        access_token="access-sandbox-test",
        funding_source_url="https://api-sandbox.dwolla.com/funding-sources/src",
        shareable_id="",
    )
