"""
Tests for account, balance and bank endpoints: the full CRUD lifecycle over HTTP.

These tests verify:
  - POST returns 201 with server-assigned id and audit fields
  - GET by id, PUT, soft DELETE and hard DELETE behave per the CRUD contract
  - Missing ids are 404 on every by-id endpoint
  - Lists are paged and hide soft-deleted rows unless include_inactive=true
  - Display names (bank_name, account_name) and per-parent filters
  - Rows that other rows still point at cannot be hard-deleted (409)
"""

import pytest

API = "/api/v1"


async def _create(client, resource, payload):
    response = await client.post(f"{API}/{resource}", json=payload)
    assert response.status_code == 201, response.text
    return response.json()


# ---------------------------------------------------------------------------
# Account lifecycle
# ---------------------------------------------------------------------------

class TestAccountLifecycle:
    """Tests for the standard CRUD endpoints under /accounts."""

    async def test_create_account(self, authenticated_client):
        """Create returns 201 with id, audit fields and the given currency."""
        currency = await _create(
            authenticated_client, "currencies", {"name": "Euro", "currency_code_alf3": "EUR"}
        )

        response = await authenticated_client.post(
            f"{API}/accounts",
            json={
                "name": "Checking",
                "currency_id": currency["id"],
                "iban": "IT60X0542811101000000123456",
            },
        )

        assert response.status_code == 201
        data = response.json()
        assert data["id"] > 0
        assert data["is_active"] is True
        assert data["created_date"] is not None
        assert data["last_updated_date"] is not None
        assert data["currency_id"] == currency["id"]
        assert data["bank_name"] is None

    async def test_client_cannot_choose_id_or_active_flag(self, authenticated_client):
        """id and is_active in the body are ignored on create."""
        response = await authenticated_client.post(
            f"{API}/accounts", json={"name": "Checking", "id": 777, "is_active": False}
        )
        data = response.json()
        assert data["id"] != 777
        assert data["is_active"] is True

    async def test_missing_name_rejected(self, authenticated_client):
        """name is required (422)."""
        response = await authenticated_client.post(f"{API}/accounts", json={"iban": "X"})
        assert response.status_code == 422

    async def test_get_update_and_soft_delete(self, authenticated_client):
        """A soft-deleted account is still readable by id, flagged inactive."""
        account = await _create(authenticated_client, "accounts", {"name": "Checking"})

        fetched = await authenticated_client.get(f"{API}/accounts/{account['id']}")
        assert fetched.status_code == 200
        assert fetched.json()["name"] == "Checking"

        updated = await authenticated_client.put(
            f"{API}/accounts/{account['id']}",
            json={"name": "Joint checking", "is_active": False},
        )
        assert updated.status_code == 200
        assert updated.json()["name"] == "Joint checking"
        assert updated.json()["is_active"] is True
        assert updated.json()["created_date"] == account["created_date"]

        deleted = await authenticated_client.delete(f"{API}/accounts/{account['id']}")
        assert deleted.status_code == 204

        after = await authenticated_client.get(f"{API}/accounts/{account['id']}")
        assert after.status_code == 200
        assert after.json()["is_active"] is False

    async def test_hard_delete(self, authenticated_client):
        """After a hard delete the account is gone (404)."""
        account = await _create(authenticated_client, "accounts", {"name": "Checking"})

        response = await authenticated_client.delete(f"{API}/accounts/{account['id']}/hard")
        assert response.status_code == 204

        after = await authenticated_client.get(f"{API}/accounts/{account['id']}")
        assert after.status_code == 404

    @pytest.mark.parametrize(
        "method, path",
        [
            ("get", "/accounts/999"),
            ("put", "/accounts/999"),
            ("delete", "/accounts/999"),
            ("delete", "/accounts/999/hard"),
        ],
    )
    async def test_missing_id_is_404(self, authenticated_client, method, path):
        """Every by-id endpoint reports an unknown id as not_found."""
        kwargs = {"json": {"name": "Ghost"}} if method == "put" else {}
        response = await getattr(authenticated_client, method)(f"{API}{path}", **kwargs)

        assert response.status_code == 404
        assert response.json()["error_type"] == "not_found"


# ---------------------------------------------------------------------------
# Listing
# ---------------------------------------------------------------------------

class TestAccountListing:
    """Tests for GET /accounts and its filters."""

    async def test_list_is_paged_and_hides_inactive(self, authenticated_client):
        """Soft-deleted accounts are not counted; pages are ordered by name."""
        for name in ("Cash", "Checking", "Savings"):
            await _create(authenticated_client, "accounts", {"name": name})
        retired = await _create(authenticated_client, "accounts", {"name": "Old card"})
        await authenticated_client.delete(f"{API}/accounts/{retired['id']}")

        response = await authenticated_client.get(f"{API}/accounts?page=1&page_size=2")

        assert response.status_code == 200
        data = response.json()
        assert data["total_count"] == 3
        assert data["total_pages"] == 2
        assert data["has_next"] is True
        assert data["has_previous"] is False
        assert [a["name"] for a in data["items"]] == ["Cash", "Checking"]

    async def test_include_inactive(self, authenticated_client):
        """include_inactive=true brings soft-deleted accounts back."""
        await _create(authenticated_client, "accounts", {"name": "Cash"})
        retired = await _create(authenticated_client, "accounts", {"name": "Old card"})
        await authenticated_client.delete(f"{API}/accounts/{retired['id']}")

        response = await authenticated_client.get(f"{API}/accounts?include_inactive=true")
        assert response.json()["total_count"] == 2

    async def test_accounts_by_bank(self, authenticated_client):
        """Only the bank's accounts are listed, with bank_name filled."""
        bank = await _create(authenticated_client, "banks", {"name": "Main Street Bank", "city": "Milan"})
        await _create(authenticated_client, "accounts", {"name": "Checking", "bank_id": bank["id"]})
        await _create(authenticated_client, "accounts", {"name": "Cash"})

        response = await authenticated_client.get(f"{API}/accounts/bank/{bank['id']}")

        assert response.status_code == 200
        accounts = response.json()
        assert [a["name"] for a in accounts] == ["Checking"]
        assert accounts[0]["bank_name"] == "Main Street Bank"


# ---------------------------------------------------------------------------
# Balances
# ---------------------------------------------------------------------------

class TestBalances:
    """Tests for balance snapshots of an account."""

    async def test_balances_by_account_newest_first(self, authenticated_client):
        """Balances of one account come back newest first."""
        account = await _create(authenticated_client, "accounts", {"name": "Checking"})
        for day, amount in (("2024-01-31", 1000.0), ("2024-03-31", 1300.0), ("2024-02-29", 1200.0)):
            await _create(
                authenticated_client,
                "balances",
                {"amount": amount, "balance_date": f"{day}T00:00:00", "account_id": account["id"]},
            )

        response = await authenticated_client.get(f"{API}/balances/account/{account['id']}")

        assert response.status_code == 200
        balances = response.json()
        assert [b["amount"] for b in balances] == [1300.0, 1200.0, 1000.0]
        assert balances[0]["account_name"] == "Checking"

    async def test_balance_date_offset_is_normalised(self, authenticated_client):
        """An offset-aware balance_date is stored as the same instant in UTC."""
        account = await _create(authenticated_client, "accounts", {"name": "Checking"})

        balance = await _create(
            authenticated_client,
            "balances",
            {"amount": 10.0, "balance_date": "2024-03-31T23:30:00-02:00", "account_id": account["id"]},
        )

        assert balance["balance_date"].startswith("2024-04-01T01:30:00")


# ---------------------------------------------------------------------------
# Referential integrity
# ---------------------------------------------------------------------------

class TestReferentialIntegrity:
    """Hard delete is refused while other rows still reference the target."""

    async def test_bank_with_accounts_cannot_be_hard_deleted(self, authenticated_client):
        """409, and the account keeps pointing at its bank."""
        bank = await _create(authenticated_client, "banks", {"name": "Main Street Bank"})
        account = await _create(authenticated_client, "accounts", {"name": "Checking", "bank_id": bank["id"]})

        response = await authenticated_client.delete(f"{API}/banks/{bank['id']}/hard")

        assert response.status_code == 409
        assert response.json()["error_type"] == "conflict"

        after = (await authenticated_client.get(f"{API}/accounts/{account['id']}")).json()
        assert after["bank_id"] == bank["id"]
        assert after["bank_name"] == "Main Street Bank"
        assert after["last_updated_date"] == account["last_updated_date"]

        still_there = await authenticated_client.get(f"{API}/banks/{bank['id']}")
        assert still_there.status_code == 200

    async def test_account_with_transactions_cannot_be_hard_deleted(self, authenticated_client):
        """A transaction is never left pointing at a removed account."""
        account = await _create(authenticated_client, "accounts", {"name": "Checking"})
        transaction = await _create(
            authenticated_client,
            "transactions",
            {"transaction_date": "2024-03-15T10:30:00", "amount": -42.5, "account_id": account["id"]},
        )

        response = await authenticated_client.delete(f"{API}/accounts/{account['id']}/hard")
        assert response.status_code == 409

        after = (await authenticated_client.get(f"{API}/transactions/{transaction['id']}")).json()
        assert after["account_id"] == account["id"]
        assert after["account_name"] == "Checking"

    async def test_account_with_balances_cannot_be_hard_deleted(self, authenticated_client):
        """Balances hold their account in place too."""
        account = await _create(authenticated_client, "accounts", {"name": "Savings"})
        await _create(
            authenticated_client,
            "balances",
            {"amount": 100.0, "balance_date": "2024-01-31T00:00:00", "account_id": account["id"]},
        )

        response = await authenticated_client.delete(f"{API}/accounts/{account['id']}/hard")
        assert response.status_code == 409

    async def test_hard_delete_allowed_once_unreferenced(self, authenticated_client):
        """Removing the child first lets the parent go."""
        bank = await _create(authenticated_client, "banks", {"name": "Main Street Bank"})
        account = await _create(authenticated_client, "accounts", {"name": "Checking", "bank_id": bank["id"]})

        assert (await authenticated_client.delete(f"{API}/accounts/{account['id']}/hard")).status_code == 204
        assert (await authenticated_client.delete(f"{API}/banks/{bank['id']}/hard")).status_code == 204

    async def test_unknown_currency_on_create_is_conflict(self, authenticated_client):
        """A currency_id that does not exist is refused by the database (409)."""
        response = await authenticated_client.post(
            f"{API}/accounts", json={"name": "Checking", "currency_id": 999}
        )

        assert response.status_code == 409
        listed = await authenticated_client.get(f"{API}/accounts?include_inactive=true")
        assert listed.json()["total_count"] == 0
