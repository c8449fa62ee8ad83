"""
Tests for salaries and their conversion to EUR.

These tests verify:
  - The exchange-rate resolution order (none / EUR / same-day / latest / none stored)
  - salary_value_eur = salary_value / exchange_rate, rounded to cents
  - Conversion is recomputed on update and cannot be set by clients
  - Filters by household member and by reference year
  - get_all hides soft-deleted salaries
"""

from datetime import datetime
from decimal import Decimal

import pytest

from houseledger.exceptions import ConflictError
from houseledger.schemas.currency import CurrencyCreateRequest
from houseledger.schemas.currency_rate import CurrencyRateCreateRequest
from houseledger.schemas.salary import SalaryCreateRequest, SalaryUpdateRequest
from houseledger.schemas.service_user import ServiceUserCreateRequest
from houseledger.services.currency_rate_service import currency_rate_service
from houseledger.services.reference_services import currency_service, service_user_service
from houseledger.services.salary_service import (
    convert_to_eur,
    resolve_exchange_rate,
    salary_service,
)

API = "/api/v1"


async def _currency(db, code, name):
    return await currency_service.create(
        db, CurrencyCreateRequest(name=name, currency_code_alf3=code)
    )


async def _rate(db, code, value, day):
    return await currency_rate_service.create(
        db,
        CurrencyRateCreateRequest(
            rate_value=Decimal(value), currency_code_alf3=code, referring_date=day
        ),
    )


def _salary(value="1000", day=datetime(2024, 3, 27), **kwargs):
    return SalaryCreateRequest(salary_value=Decimal(value), salary_date=day, **kwargs)


# ---------------------------------------------------------------------------
# Conversion arithmetic
# ---------------------------------------------------------------------------

class TestConvertToEur:
    """Tests for convert_to_eur."""

    def test_division_rounded_half_up(self):
        """The EUR value is value / rate, rounded half-up to cents."""
        assert convert_to_eur(Decimal("1000"), Decimal("1.1")) == Decimal("909.09")
        assert convert_to_eur(Decimal("0.125"), Decimal("1")) == Decimal("0.13")

    def test_neutral_rate(self):
        """Rate 1 leaves the value unchanged."""
        assert convert_to_eur(Decimal("2500.50"), Decimal("1")) == Decimal("2500.50")

    def test_non_positive_rate_rejected(self):
        """A zero rate raises ValueError."""
        with pytest.raises(ValueError):
            convert_to_eur(Decimal("10"), Decimal("0"))


# ---------------------------------------------------------------------------
# Exchange rate resolution
# ---------------------------------------------------------------------------

class TestExchangeRateResolution:
    """The order in which an exchange rate is chosen."""

    async def test_no_currency_uses_rate_one(self, db_session):
        """A salary without currency is taken to be in EUR."""
        salary = await salary_service.create(db_session, _salary("3000"))

        assert salary.exchange_rate == Decimal("1")
        assert salary.salary_value_eur == Decimal("3000")
        assert salary.currency_name is None

    async def test_unknown_currency_uses_rate_one(self, db_session):
        """A currency id with no row behind it resolves to rate 1."""
        rate = await resolve_exchange_rate(db_session, 99, datetime(2024, 3, 27))
        assert rate == Decimal("1")

    async def test_unknown_currency_cannot_be_stored(self, db_session):
        """The salary itself is refused: currency_id must point at a real currency."""
        with pytest.raises(ConflictError):
            await salary_service.create(db_session, _salary("3000", currency_id=99))

    async def test_eur_uses_rate_one_even_with_rates_stored(self, db_session):
        """EUR salaries ignore stored EUR rates."""
        eur = await _currency(db_session, "eur", "Euro")
        await _rate(db_session, "EUR", "2", datetime(2024, 3, 27))

        salary = await salary_service.create(db_session, _salary("1500", currency_id=eur.id))

        assert salary.exchange_rate == Decimal("1")
        assert salary.salary_value_eur == Decimal("1500")

    async def test_same_day_rate_is_used(self, db_session):
        """Non-EUR salary with a stored rate converts by division."""
        chf = await _currency(db_session, "CHF", "Swiss franc")
        await _rate(db_session, "CHF", "0.95", datetime(2024, 3, 1))
        await _rate(db_session, "CHF", "0.96", datetime(2024, 3, 27, 16, 0))

        salary = await salary_service.create(
            db_session, _salary("9600", day=datetime(2024, 3, 27, 9, 0), currency_id=chf.id)
        )

        assert salary.exchange_rate == Decimal("0.96")
        assert salary.salary_value_eur == Decimal("10000.00")
        assert salary.currency_code == "CHF"
        assert salary.currency_name == "Swiss franc"

    async def test_offset_salary_date_matches_utc_day(self, db_session):
        """An offset-aware salary_date is matched to rates by its UTC calendar day."""
        chf = await _currency(db_session, "CHF", "Swiss franc")
        await _rate(db_session, "CHF", "0.8", datetime(2024, 3, 27, 8, 0))
        await _rate(db_session, "CHF", "0.5", datetime(2024, 3, 28, 8, 0))
        await _rate(db_session, "CHF", "0.9", datetime(2024, 3, 29, 8, 0))

        request = SalaryCreateRequest.model_validate({
            "salary_value": "100",
            "salary_date": "2024-03-27T23:30:00-01:00",
            "currency_id": chf.id,
        })
        salary = await salary_service.create(db_session, request)

        assert salary.salary_date == datetime(2024, 3, 28, 0, 30)
        assert salary.exchange_rate == Decimal("0.5")

    async def test_latest_rate_when_none_on_the_day(self, db_session):
        """Without a same-day rate the latest rate is used."""
        usd = await _currency(db_session, "USD", "US dollar")
        await _rate(db_session, "USD", "1.25", datetime(2024, 1, 2))
        await _rate(db_session, "USD", "1.10", datetime(2024, 2, 1))

        salary = await salary_service.create(
            db_session, _salary("1100", day=datetime(2024, 3, 27), currency_id=usd.id)
        )

        assert salary.exchange_rate == Decimal("1.10")
        assert salary.salary_value_eur == Decimal("1000.00")

    async def test_soft_deleted_rates_are_ignored(self, db_session):
        """Inactive rates are not considered."""
        usd = await _currency(db_session, "USD", "US dollar")
        rate = await _rate(db_session, "USD", "2", datetime(2024, 3, 27))
        await currency_rate_service.soft_delete(db_session, rate.id)

        salary = await salary_service.create(db_session, _salary("100", currency_id=usd.id))
        assert salary.exchange_rate == Decimal("1")

    async def test_no_rate_stored_uses_rate_one(self, db_session):
        """A currency with no rates at all falls back to rate 1."""
        gbp = await _currency(db_session, "GBP", "Pound sterling")

        salary = await salary_service.create(db_session, _salary("2000", currency_id=gbp.id))

        assert salary.exchange_rate == Decimal("1")
        assert salary.salary_value_eur == Decimal("2000")

    async def test_update_recomputes_conversion(self, db_session):
        """Changing the currency on update recomputes the EUR value."""
        chf = await _currency(db_session, "CHF", "Swiss franc")
        await _rate(db_session, "CHF", "0.5", datetime(2024, 3, 27))
        salary = await salary_service.create(db_session, _salary("100"))
        assert salary.salary_value_eur == Decimal("100")

        updated = await salary_service.update(
            db_session,
            salary.id,
            SalaryUpdateRequest(
                salary_value=Decimal("100"),
                salary_date=datetime(2024, 3, 27),
                currency_id=chf.id,
            ),
        )

        assert updated.exchange_rate == Decimal("0.5")
        assert updated.salary_value_eur == Decimal("200.00")


# ---------------------------------------------------------------------------
# Filters
# ---------------------------------------------------------------------------

class TestSalaryQueries:
    """Tests for the salary filters."""

    async def test_get_all_excludes_soft_deleted(self, db_session):
        """One active and one soft-deleted salary: only the active one is listed."""
        kept = await salary_service.create(db_session, _salary("1000"))
        gone = await salary_service.create(db_session, _salary("2000"))
        await salary_service.soft_delete(db_session, gone.id)

        salaries = await salary_service.get_all(db_session, include_inactive=False)
        assert [s.id for s in salaries] == [kept.id]

    async def test_get_by_user_id(self, db_session):
        """Only the household member's salaries, with user_name."""
        anna = await service_user_service.create(
            db_session, ServiceUserCreateRequest(name="Anna", surname="Rossi")
        )
        await salary_service.create(db_session, _salary("1000", user_id=anna.id))
        await salary_service.create(db_session, _salary("1200"))

        salaries = await salary_service.get_by_user_id(db_session, anna.id)

        assert len(salaries) == 1
        assert salaries[0].user_name == "Anna"

    async def test_get_by_year_newest_first(self, db_session):
        """Salaries of a reference year, newest first."""
        await salary_service.create(
            db_session, _salary("1", day=datetime(2024, 1, 27), refer_year="2024", refer_month="01")
        )
        await salary_service.create(
            db_session, _salary("2", day=datetime(2024, 2, 27), refer_year="2024", refer_month="02")
        )
        await salary_service.create(
            db_session, _salary("3", day=datetime(2023, 12, 27), refer_year="2023", refer_month="12")
        )

        salaries = await salary_service.get_by_year(db_session, 2024)
        assert [s.refer_month for s in salaries] == ["02", "01"]


# ---------------------------------------------------------------------------
# HTTP
# ---------------------------------------------------------------------------

class TestSalaryEndpoints:
    """Tests for the /salaries endpoints."""

    async def test_create_ignores_client_conversion_fields(self, authenticated_client):
        """exchange_rate and salary_value_eur in the body are ignored."""
        response = await authenticated_client.post(
            f"{API}/salaries",
            json={
                "salary_value": "2500.00",
                "salary_date": "2024-03-27T00:00:00",
                "refer_year": "2024",
                "refer_month": "03",
                "exchange_rate": "4",
                "salary_value_eur": "1",
            },
        )
        assert response.status_code == 201
        data = response.json()
        assert Decimal(data["exchange_rate"]) == Decimal("1")
        assert Decimal(data["salary_value_eur"]) == Decimal("2500")

    async def test_invalid_month_rejected(self, authenticated_client):
        """refer_month 13 is rejected (422)."""
        response = await authenticated_client.post(
            f"{API}/salaries",
            json={"salary_value": "1", "salary_date": "2024-03-27T00:00:00", "refer_month": "13"},
        )
        assert response.status_code == 422

    async def test_list_by_year(self, authenticated_client):
        """GET /year/{year} lists that year's salaries."""
        await authenticated_client.post(
            f"{API}/salaries",
            json={"salary_value": "10", "salary_date": "2022-05-27T00:00:00", "refer_year": "2022"},
        )
        response = await authenticated_client.get(f"{API}/salaries/year/2022")
        assert response.status_code == 200
        assert len(response.json()) == 1
