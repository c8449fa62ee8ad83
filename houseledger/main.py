"""
FastAPI application factory and entry point.

This module creates and configures the FastAPI application:
  1. Logging - one stdout handler on the root logger, level from LOG_LEVEL
  2. Lifespan manager - handles startup/shutdown (DB table creation, cleanup)
  3. CORS middleware - allows frontend origins to make cross-origin requests
  4. Exception handlers - maps domain errors to HTTP responses
  5. Router registration - every ledger resource under /api/v1, behind JWT auth

Running locally:
    uvicorn houseledger.main:app --reload
"""

import logging
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware

from houseledger import models  # noqa: F401  (registers every table on Base.metadata)
from houseledger.config import settings
from houseledger.database import Base, engine
from houseledger.dependencies import get_current_user
from houseledger.exceptions import register_exception_handlers
from houseledger.logging_config import configure_logging
from houseledger.routers import accounts, auth, house, reference, salaries, transactions

configure_logging(settings.LOG_LEVEL)
logger = logging.getLogger(__name__)

API_PREFIX = "/api/v1"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.

    Startup:
      Creates all database tables if they don't exist. The legacy tables
      are usually already there; create_all leaves existing tables alone.

    Shutdown:
      Disposes of the database engine, closing all connections cleanly.
    """
    # --- Startup ---
    logger.info("Starting %s %s", settings.APP_NAME, settings.APP_VERSION)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield
    # --- Shutdown ---
    await engine.dispose()
    logger.info("Shut down %s", settings.APP_NAME)


# Create the FastAPI application instance
app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    description="Household ledger: accounts, balances, transactions, salaries and household items",
    lifespan=lifespan,
)

# ---------------------------------------------------------------------------
# Middleware
# ---------------------------------------------------------------------------

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# ---------------------------------------------------------------------------
# Exception handlers
# ---------------------------------------------------------------------------

register_exception_handlers(app)

# ---------------------------------------------------------------------------
# Routers
# ---------------------------------------------------------------------------

app.include_router(auth.router, prefix=f"{API_PREFIX}/auth", tags=["Auth"])

# (router, path, tag); all require a bearer token
_protected_routers = [
    (accounts.accounts_router, "/accounts", "Accounts"),
    (accounts.balances_router, "/balances", "Balances"),
    (accounts.banks_router, "/banks", "Banks"),
    (transactions.router, "/transactions", "Transactions"),
    (reference.countries_router, "/countries", "Countries"),
    (reference.currencies_router, "/currencies", "Currencies"),
    (reference.currency_rates_router, "/currency-conversion-rates", "Currency Conversion Rates"),
    (reference.service_users_router, "/service-users", "Service Users"),
    (reference.suppliers_router, "/suppliers", "Suppliers"),
    (salaries.router, "/salaries", "Salaries"),
    (house.rooms_router, "/rooms", "Rooms"),
    (house.house_things_router, "/house-things", "House Things"),
]

for router, path, tag in _protected_routers:
    app.include_router(
        router,
        prefix=f"{API_PREFIX}{path}",
        tags=[tag],
        dependencies=[Depends(get_current_user)],
    )


# ---------------------------------------------------------------------------
# Health check
# ---------------------------------------------------------------------------

@app.get("/health", tags=["Health"])
async def health_check():
    """Liveness check for deployment orchestrators; does not touch the database."""
    return {"status": "ok", "version": settings.APP_VERSION}
