"""Unit tests for BankService."""

import pytest

from integrations.exceptions import IdentityStoreError
from services.bank_service import BankService
from tests.fixtures.mocks import MockAppwriteClient


@pytest.fixture
def appwrite():
    return MockAppwriteClient()


class TestCreateBankAccount:
    def test_creates_document(self, appwrite):
        record = BankService(appwrite).create_bank_account(
            user_id="user_doc_1",
            bank_id="item-1",
            account_id="acc_1",
            access_token="access-1",
            funding_source_url="",
            shareable_id="shr_1",
        )

        assert record.id
        assert record.user_id == "user_doc_1"
        assert record.funding_source_url == ""
        stored = appwrite.collections["banks"][0]
        assert stored["accountId"] == "acc_1"
        assert stored["accessToken"] == "access-1"
        assert stored["shareableId"] == "shr_1"

    def test_store_failure_raises(self):
        appwrite = MockAppwriteClient(fail_on={"create_document"})
        with pytest.raises(IdentityStoreError):
            BankService(appwrite).create_bank_account(
                user_id="u",
                bank_id="i",
                account_id="a",
                access_token="t",
                funding_source_url="",
                shareable_id="s",
            )


class TestGetBanks:
    def test_returns_users_banks_in_order(self, appwrite):
        first = appwrite.add_bank("user_doc_1", "acc_1")
        second = appwrite.add_bank("user_doc_1", "acc_2")
        appwrite.add_bank("someone_else", "acc_3")

        banks = BankService(appwrite).get_banks("user_doc_1")

        assert [b.id for b in banks] == [first["$id"], second["$id"]]

    def test_no_banks(self, appwrite):
        assert BankService(appwrite).get_banks("user_doc_1") == []

    def test_store_failure_returns_empty(self):
        appwrite = MockAppwriteClient(fail_on={"list_documents"})
        assert BankService(appwrite).get_banks("user_doc_1") == []


class TestFindBanks:
    def test_returns_users_banks(self, appwrite):
        bank = appwrite.add_bank("user_doc_1", "acc_1")
        assert [b.id for b in BankService(appwrite).find_banks("user_doc_1")] == [bank["$id"]]

    def test_store_failure_raises(self):
        appwrite = MockAppwriteClient(fail_on={"list_documents"})
        with pytest.raises(IdentityStoreError):
            BankService(appwrite).find_banks("user_doc_1")


class TestGetBank:
    def test_by_document_id(self, appwrite):
        created = appwrite.add_bank("user_doc_1", "acc_1")
        bank = BankService(appwrite).get_bank(created["$id"])
        assert bank.account_id == "acc_1"

    def test_missing(self, appwrite):
        assert BankService(appwrite).get_bank("nope") is None

    def test_store_failure_returns_none(self):
        appwrite = MockAppwriteClient(fail_on={"list_documents"})
        assert BankService(appwrite).get_bank("b1") is None


class TestGetBankByAccountId:
    def test_single_match(self, appwrite):
        created = appwrite.add_bank("user_doc_1", "acc_1")
        bank = BankService(appwrite).get_bank_by_account_id("acc_1")
        assert bank.id == created["$id"]

    def test_no_match(self, appwrite):
        assert BankService(appwrite).get_bank_by_account_id("acc_1") is None

    def test_ambiguous_match_is_none(self, appwrite):
        appwrite.add_bank("user_doc_1", "acc_1")
        appwrite.add_bank("user_doc_1", "acc_1")
        assert BankService(appwrite).get_bank_by_account_id("acc_1") is None

    def test_total_disagreeing_with_documents_is_none(self, appwrite):
        appwrite.list_documents = lambda collection_id, filters: {"total": 1, "documents": []}
        assert BankService(appwrite).get_bank_by_account_id("acc_1") is None

    def test_store_failure_returns_none(self):
        appwrite = MockAppwriteClient(fail_on={"list_documents"})
        assert BankService(appwrite).get_bank_by_account_id("acc_1") is None
