"""
Tests for the entity/DTO mapping layer.

These tests verify:
  - Create-mapping copies only allow-listed fields and yields an active entity
  - Update-mapping never carries identity, created timestamp or active flag
  - Allow-lists naming a server-managed field are refused
  - Display names come from loaded relationships only, never via lazy loads
  - The TransactionCategory value object trims and rejects blank names
"""

from datetime import datetime

import pytest

from houseledger import models  # noqa: F401
from houseledger.mapping import (
    ACCOUNT_MAPPING,
    HOUSE_THING_MAPPING,
    SALARY_MAPPING,
    EntityMapping,
    create_patch,
    related_attribute,
    to_response,
    update_patch,
)
from houseledger.models.account import Account
from houseledger.models.bank import Bank
from houseledger.models.transaction import TransactionCategory, build_unique_key
from houseledger.schemas.account import (
    AccountCreateRequest,
    AccountResponse,
    AccountUpdateRequest,
)
from houseledger.schemas.house_thing import HouseThingUpdateRequest
from houseledger.schemas.salary import SalaryCreateRequest


# ---------------------------------------------------------------------------
# Create / update patches
# ---------------------------------------------------------------------------

class TestCreatePatch:
    """Building a new entity from a create request."""

    def test_client_id_is_never_copied(self):
        """An id smuggled into the body does not reach the entity."""
        request = AccountCreateRequest.model_validate(
            {"name": "Checking", "currency_id": 2, "id": 999, "is_active": False}
        )
        patch = create_patch(request, ACCOUNT_MAPPING)

        assert "id" not in patch
        assert "created_date" not in patch
        assert patch["is_active"] is True
        assert patch["name"] == "Checking"
        assert patch["currency_id"] == 2

    def test_entity_built_from_patch_is_active(self):
        """A new entity starts active and without an id."""
        account = Account(**create_patch(AccountCreateRequest(name="Savings"), ACCOUNT_MAPPING))
        assert account.is_active is True
        assert account.id is None

    def test_salary_computed_fields_not_copied(self):
        """exchange_rate and salary_value_eur are server-side only."""
        request = SalaryCreateRequest.model_validate({
            "salary_value": "1000",
            "salary_date": "2024-03-27T00:00:00",
            "exchange_rate": "9",
            "salary_value_eur": "1",
        })
        patch = create_patch(request, SALARY_MAPPING)
        assert "exchange_rate" not in patch
        assert "salary_value_eur" not in patch


class TestUpdatePatch:
    """Merging an update request into an existing entity."""

    def test_server_fields_never_included(self):
        """id, timestamps and is_active never reach the update patch."""
        request = AccountUpdateRequest.model_validate({
            "name": "Renamed",
            "id": 7,
            "created_date": "2001-01-01T00:00:00",
            "is_active": False,
        })
        patch = update_patch(request, ACCOUNT_MAPPING)

        assert patch["name"] == "Renamed"
        assert {"id", "created_date", "last_updated_date", "is_active"}.isdisjoint(patch)

    def test_house_thing_update_keeps_history_group(self):
        """history_id can only be set on create."""
        patch = update_patch(HouseThingUpdateRequest(name="Fridge"), HOUSE_THING_MAPPING)
        assert "history_id" not in patch


class TestEntityMapping:
    """Allow-list validation at definition time."""

    @pytest.mark.parametrize("field", ["id", "created_date", "last_updated_date", "is_active"])
    def test_server_managed_field_refused(self, field):
        """An allow-list naming a server-managed field raises."""
        with pytest.raises(ValueError, match="Server-managed"):
            EntityMapping(create_fields=("name", field), update_fields=("name",))

    def test_note_is_writable(self):
        """note is a client field like any other."""
        mapping = EntityMapping(create_fields=("name", "note"), update_fields=("note",))
        assert "note" in mapping.update_fields


# ---------------------------------------------------------------------------
# Entity -> DTO
# ---------------------------------------------------------------------------

def _account(**kwargs) -> Account:
    now = datetime(2024, 1, 1, 12, 0)
    return Account(
        id=1,
        name="Checking",
        created_date=now,
        last_updated_date=now,
        is_active=True,
        **kwargs,
    )


class TestToResponse:
    """Display names are resolved from loaded relationships only."""

    def test_loaded_relationship_fills_display_name(self):
        """A loaded bank fills bank_name."""
        account = _account(bank=Bank(name="Main Street Bank"))
        response = to_response(account, AccountResponse, ACCOUNT_MAPPING)

        assert response.bank_name == "Main Street Bank"
        assert response.name == "Checking"
        assert response.is_active is True

    def test_unloaded_relationship_gives_none(self):
        """bank was never loaded: no lazy load, just None."""
        account = _account(bank_id=3)
        response = to_response(account, AccountResponse, ACCOUNT_MAPPING)

        assert response.bank_name is None
        assert response.bank_id == 3

    def test_related_attribute_on_empty_relationship(self):
        """A relationship loaded as None gives None."""
        account = _account(bank=None)
        assert related_attribute(account, "bank", "name") is None


# ---------------------------------------------------------------------------
# Transaction category / unique key
# ---------------------------------------------------------------------------

class TestTransactionCategory:
    """Value object rules."""

    def test_name_is_trimmed(self):
        """Surrounding whitespace is stripped from the name."""
        category = TransactionCategory("  Groceries ", True)
        assert category.name == "Groceries"
        assert category.is_confirmed is True

    @pytest.mark.parametrize("name", ["", "   ", None])
    def test_blank_name_rejected(self, name):
        """Empty, whitespace-only and missing names raise ValueError."""
        with pytest.raises(ValueError):
            TransactionCategory(name)

    def test_unique_key_format(self):
        """account_date_abs(amount) with two decimals."""
        key = build_unique_key(12, datetime(2024, 3, 5, 18, 30), -42.5)
        assert key == "12_20240305_42.50"
