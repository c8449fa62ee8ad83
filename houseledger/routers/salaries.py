"""
Salaries router.

  GET /salaries/user/{user_id}   - one household member's pay slips, newest first
  GET /salaries/year/{year}      - all pay slips referring to a year

Responses carry the server-computed exchange_rate and salary_value_eur.
"""

from fastapi import APIRouter, Depends, Path
from sqlalchemy.ext.asyncio import AsyncSession

from houseledger.database import get_db
from houseledger.routers.crud import add_crud_routes
from houseledger.schemas.salary import (
    SalaryCreateRequest,
    SalaryResponse,
    SalaryUpdateRequest,
)
from houseledger.services.salary_service import salary_service

router = APIRouter()


@router.get(
    "/user/{user_id}",
    response_model=list[SalaryResponse],
    summary="List a household member's salaries",
)
async def list_salaries_by_user(user_id: int, db: AsyncSession = Depends(get_db)):
    return await salary_service.get_by_user_id(db, user_id)


@router.get(
    "/year/{year}",
    response_model=list[SalaryResponse],
    summary="List salaries referring to a year",
)
async def list_salaries_by_year(
    year: int = Path(ge=1900, le=9999),
    db: AsyncSession = Depends(get_db),
):
    return await salary_service.get_by_year(db, year)


add_crud_routes(
    router, salary_service,
    SalaryCreateRequest, SalaryUpdateRequest, SalaryResponse,
)
