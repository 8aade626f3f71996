"""Integration tests for bank account endpoints."""


class TestListBanks:
    def test_lists_only_own_banks(self, auth_client, appwrite, seeded_user):
        document, _ = seeded_user
        own = appwrite.add_bank(document["$id"], "acc_1")
        appwrite.add_bank("someone_else", "acc_2")

        response = auth_client.get("/api/banks")

        assert response.status_code == 200
        data = response.json()
        assert [b["id"] for b in data] == [own["$id"]]
        assert "access_token" not in data[0]

    def test_empty(self, auth_client):
        response = auth_client.get("/api/banks")
        assert response.status_code == 200
        assert response.json() == []

    def test_requires_session(self, client):
        assert client.get("/api/banks").status_code == 401


class TestGetBank:
    def test_get_own_bank(self, auth_client, appwrite, seeded_user):
        document, _ = seeded_user
        bank = appwrite.add_bank(document["$id"], "acc_1")

        response = auth_client.get(f"/api/banks/{bank['$id']}")

        assert response.status_code == 200
        assert response.json()["account_id"] == "acc_1"

    def test_other_users_bank_is_404(self, auth_client, appwrite):
        bank = appwrite.add_bank("someone_else", "acc_1")
        assert auth_client.get(f"/api/banks/{bank['$id']}").status_code == 404

    def test_missing_bank_is_404(self, auth_client):
        assert auth_client.get("/api/banks/nope").status_code == 404


class TestGetBankByAccountId:
    def test_unique_match(self, auth_client, appwrite, seeded_user):
        document, _ = seeded_user
        bank = appwrite.add_bank(document["$id"], "acc_1")

        response = auth_client.get("/api/banks/by-account/acc_1")

        assert response.status_code == 200
        assert response.json()["id"] == bank["$id"]

    def test_ambiguous_match_is_404(self, auth_client, appwrite, seeded_user):
        document, _ = seeded_user
        appwrite.add_bank(document["$id"], "acc_1")
        appwrite.add_bank(document["$id"], "acc_1")

        assert auth_client.get("/api/banks/by-account/acc_1").status_code == 404

    def test_no_match_is_404(self, auth_client):
        assert auth_client.get("/api/banks/by-account/acc_1").status_code == 404
