"""
Entity <-> DTO mapping with explicit allow-lists.

Every aggregate declares an EntityMapping naming exactly which request
fields may flow into an entity on create and on update, and which display
names are resolved from related entities on the way out. Nothing is copied
by reflection from a request: a field that is not on the allow-list is
never written, whatever the client sends.

Server-managed fields (id, created_date, last_updated_date, is_active) can
never appear on an allow-list; EntityMapping refuses them at import time.

All functions here are pure. They do not touch the session, never mutate
their source, and reading a display name never triggers a lazy load: an
unloaded relationship yields None.
"""

from dataclasses import dataclass, field
from typing import Any, TypeVar

from pydantic import BaseModel
from sqlalchemy import inspect

SERVER_MANAGED_FIELDS = frozenset({"id", "created_date", "last_updated_date", "is_active"})

ResponseT = TypeVar("ResponseT", bound=BaseModel)


@dataclass(frozen=True)
class EntityMapping:
    """
    Allow-lists for one aggregate.

    Attributes:
        create_fields: Request fields copied into a new entity.
        update_fields: Request fields merged into an existing entity.
        display_fields: Response field -> (relationship, attribute), e.g.
            {"bank_name": ("bank", "name")}.
    """
    create_fields: tuple[str, ...]
    update_fields: tuple[str, ...]
    display_fields: dict[str, tuple[str, str]] = field(default_factory=dict)

    def __post_init__(self):
        for allow_list in (self.create_fields, self.update_fields):
            forbidden = SERVER_MANAGED_FIELDS.intersection(allow_list)
            if forbidden:
                raise ValueError(
                    f"Server-managed fields cannot be client-writable: {sorted(forbidden)}"
                )


def create_patch(request: BaseModel, mapping: EntityMapping) -> dict[str, Any]:
    """Values for a brand-new entity. Always active; timestamps left to the DB layer."""
    patch = {name: getattr(request, name) for name in mapping.create_fields}
    patch["is_active"] = True
    return patch


def update_patch(request: BaseModel, mapping: EntityMapping) -> dict[str, Any]:
    """Values to merge into an existing entity."""
    return {name: getattr(request, name) for name in mapping.update_fields}


def apply_patch(entity: Any, patch: dict[str, Any]) -> None:
    for name, value in patch.items():
        setattr(entity, name, value)


def related_attribute(entity: Any, relationship: str, attribute: str) -> Any:
    """
    Read `entity.<relationship>.<attribute>` without emitting SQL.

    Returns None when the relationship has not been loaded or is empty.
    """
    if relationship in inspect(entity).unloaded:
        return None
    related = getattr(entity, relationship)
    if related is None:
        return None
    return getattr(related, attribute)


def to_response(entity: Any, schema: type[ResponseT], mapping: EntityMapping) -> ResponseT:
    """Build the caller-visible DTO for an entity."""
    data = {
        name: getattr(entity, name)
        for name in schema.model_fields
        if name not in mapping.display_fields
    }
    for name, (relationship, attribute) in mapping.display_fields.items():
        data[name] = related_attribute(entity, relationship, attribute)
    return schema.model_validate(data)


# ---------------------------------------------------------------------------
# Per-aggregate allow-lists
# ---------------------------------------------------------------------------

_ACCOUNT_FIELDS = (
    "name", "account_number", "description", "iban", "bic",
    "account_type", "currency_id", "bank_id", "note",
)
ACCOUNT_MAPPING = EntityMapping(
    create_fields=_ACCOUNT_FIELDS,
    update_fields=_ACCOUNT_FIELDS,
    display_fields={"bank_name": ("bank", "name")},
)

_BALANCE_FIELDS = ("amount", "balance_date", "account_id", "note")
BALANCE_MAPPING = EntityMapping(
    create_fields=_BALANCE_FIELDS,
    update_fields=_BALANCE_FIELDS,
    display_fields={"account_name": ("account", "name")},
)

_BANK_FIELDS = (
    "name", "description", "web_url", "address", "city",
    "phone", "mail", "reference_name", "country_id", "note",
)
BANK_MAPPING = EntityMapping(create_fields=_BANK_FIELDS, update_fields=_BANK_FIELDS)

_COUNTRY_FIELDS = ("name", "description", "country_code_alf3", "country_code_num3", "note")
COUNTRY_MAPPING = EntityMapping(create_fields=_COUNTRY_FIELDS, update_fields=_COUNTRY_FIELDS)

_CURRENCY_FIELDS = ("name", "description", "currency_code_alf3", "currency_code_num3", "note")
CURRENCY_MAPPING = EntityMapping(create_fields=_CURRENCY_FIELDS, update_fields=_CURRENCY_FIELDS)

_CURRENCY_RATE_FIELDS = ("rate_value", "currency_code_alf3", "referring_date", "unique_key", "note")
CURRENCY_RATE_MAPPING = EntityMapping(
    create_fields=_CURRENCY_RATE_FIELDS,
    update_fields=_CURRENCY_RATE_FIELDS,
)

_SERVICE_USER_FIELDS = ("name", "surname", "note")
SERVICE_USER_MAPPING = EntityMapping(
    create_fields=_SERVICE_USER_FIELDS,
    update_fields=_SERVICE_USER_FIELDS,
)

_SUPPLIER_FIELDS = ("name", "unit_measure", "description", "type", "contract", "note")
SUPPLIER_MAPPING = EntityMapping(create_fields=_SUPPLIER_FIELDS, update_fields=_SUPPLIER_FIELDS)

# salary_value_eur and exchange_rate are computed by the salary service
_SALARY_FIELDS = (
    "salary_value", "salary_date", "refer_year", "refer_month",
    "file_name", "currency_id", "user_id", "note",
)
SALARY_MAPPING = EntityMapping(
    create_fields=_SALARY_FIELDS,
    update_fields=_SALARY_FIELDS,
    display_fields={
        "currency_name": ("currency", "name"),
        "currency_code": ("currency", "currency_code_alf3"),
        "user_name": ("user", "name"),
    },
)

_ROOM_FIELDS = ("name", "description", "color", "icon", "note")
ROOM_MAPPING = EntityMapping(create_fields=_ROOM_FIELDS, update_fields=_ROOM_FIELDS)

_HOUSE_THING_FIELDS = (
    "name", "description", "item_type", "model", "cost",
    "purchase_date", "room_id", "note",
)
HOUSE_THING_MAPPING = EntityMapping(
    create_fields=_HOUSE_THING_FIELDS + ("history_id",),
    update_fields=_HOUSE_THING_FIELDS,
    display_fields={"room_name": ("room", "name")},
)
# Renewal builds the replacement from the same fields; history_id is inherited
HOUSE_THING_RENEW_MAPPING = EntityMapping(
    create_fields=_HOUSE_THING_FIELDS,
    update_fields=(),
    display_fields=HOUSE_THING_MAPPING.display_fields,
)

# category_name / is_category_confirmed go through TransactionCategory and
# unique_key is generated, so neither is copied directly
_TRANSACTION_FIELDS = ("transaction_date", "amount", "description", "account_id", "note")
TRANSACTION_MAPPING = EntityMapping(
    create_fields=_TRANSACTION_FIELDS,
    update_fields=_TRANSACTION_FIELDS,
    display_fields={"account_name": ("account", "name")},
)
