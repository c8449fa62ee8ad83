"""
Custom exception classes and FastAPI exception handlers.

The service layer raises domain-specific errors without importing HTTP
concepts; the handlers registered here translate them into HTTP responses
with one consistent body shape: {"detail": ..., "error_type": ...}.

"Not found" is NOT raised by the generic CRUD services: they return None
(or False for deletes) and the routers raise ResourceNotFoundError.

Exception hierarchy:
    HouseLedgerError (base)
    ├── ResourceNotFoundError        - id does not exist (404)
    ├── InvalidReferenceError        - referenced row missing or inactive (400)
    ├── ConflictError                - duplicate / uniqueness violation (409)
    ├── PersistenceUnavailableError  - database unreachable or timed out (503)
    ├── DuplicateEmailError          - register with a taken email (409)
    └── InvalidCredentialsError      - bad login (401)

SQLAlchemy's IntegrityError and OperationalError are also mapped here, so a
constraint violation or a dropped connection never surfaces as a bare 500.
"""

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError, OperationalError

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Base exception
# ---------------------------------------------------------------------------

class HouseLedgerError(Exception):
    """Base exception for all HouseLedger domain errors."""

    def __init__(self, detail: str = "An error occurred"):
        self.detail = detail
        super().__init__(self.detail)


# ---------------------------------------------------------------------------
# Domain exceptions
# ---------------------------------------------------------------------------

class ResourceNotFoundError(HouseLedgerError):
    """
    Raised by a router when the service reports that an id is absent.

    Attributes:
        resource: Human-readable aggregate name, e.g. "Account".
        resource_id: The id that was looked up.
    """

    def __init__(self, resource: str, resource_id: int | str):
        self.resource = resource
        self.resource_id = resource_id
        super().__init__(f"{resource} {resource_id} not found")


class InvalidReferenceError(HouseLedgerError):
    """Raised when a write points at a related row that is missing or inactive."""

    def __init__(self, resource: str, resource_id: int):
        self.resource = resource
        self.resource_id = resource_id
        super().__init__(f"{resource} {resource_id} does not exist or is inactive")


class ConflictError(HouseLedgerError):
    """Raised when a write would duplicate an existing active record."""


class PersistenceUnavailableError(HouseLedgerError):
    """Raised when the database cannot be reached. Clients may retry."""

    def __init__(self, detail: str = "The database is temporarily unavailable"):
        super().__init__(detail)


class DuplicateEmailError(HouseLedgerError):
    """Raised when attempting to register with an email that's already in use."""

    def __init__(self, email: str):
        self.email = email
        super().__init__(f"Email {email} is already registered")


class InvalidCredentialsError(HouseLedgerError):
    """Raised when login credentials are incorrect."""

    def __init__(self):
        super().__init__("Invalid email or password")


# ---------------------------------------------------------------------------
# FastAPI exception handlers
# ---------------------------------------------------------------------------

def _error_response(status_code: int, detail: str, error_type: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"detail": detail, "error_type": error_type},
    )


def register_exception_handlers(app: FastAPI) -> None:
    """
    Register custom exception handlers with the FastAPI application.

    Client errors are logged at WARNING, persistence failures at ERROR.
    This is called once during app startup in main.py.
    """

    @app.exception_handler(ResourceNotFoundError)
    async def not_found_handler(
        request: Request, exc: ResourceNotFoundError
    ) -> JSONResponse:
        logger.warning("%s %s: %s", request.method, request.url.path, exc.detail)
        return _error_response(404, exc.detail, "not_found")

    @app.exception_handler(InvalidReferenceError)
    async def invalid_reference_handler(
        request: Request, exc: InvalidReferenceError
    ) -> JSONResponse:
        logger.warning("%s %s: %s", request.method, request.url.path, exc.detail)
        return _error_response(400, exc.detail, "invalid_reference")

    @app.exception_handler(ConflictError)
    async def conflict_handler(
        request: Request, exc: ConflictError
    ) -> JSONResponse:
        logger.warning("%s %s: %s", request.method, request.url.path, exc.detail)
        return _error_response(409, exc.detail, "conflict")

    @app.exception_handler(PersistenceUnavailableError)
    async def persistence_unavailable_handler(
        request: Request, exc: PersistenceUnavailableError
    ) -> JSONResponse:
        logger.error("%s %s: %s", request.method, request.url.path, exc.detail)
        return JSONResponse(
            status_code=503,
            content={"detail": exc.detail, "error_type": "persistence_unavailable"},
            headers={"Retry-After": "5"},
        )

    @app.exception_handler(DuplicateEmailError)
    async def duplicate_email_handler(
        request: Request, exc: DuplicateEmailError
    ) -> JSONResponse:
        return _error_response(409, exc.detail, "duplicate_email")

    @app.exception_handler(InvalidCredentialsError)
    async def invalid_credentials_handler(
        request: Request, exc: InvalidCredentialsError
    ) -> JSONResponse:
        return _error_response(401, exc.detail, "invalid_credentials")

    # --- Raw SQLAlchemy errors that escaped the service layer ---

    @app.exception_handler(IntegrityError)
    async def integrity_error_handler(
        request: Request, exc: IntegrityError
    ) -> JSONResponse:
        logger.warning(
            "%s %s: integrity violation: %s", request.method, request.url.path, exc.orig
        )
        return _error_response(
            409, "The request conflicts with existing data", "conflict"
        )

    @app.exception_handler(OperationalError)
    async def operational_error_handler(
        request: Request, exc: OperationalError
    ) -> JSONResponse:
        logger.error(
            "%s %s: database unavailable: %s", request.method, request.url.path, exc.orig
        )
        return JSONResponse(
            status_code=503,
            content={
                "detail": "The database is temporarily unavailable",
                "error_type": "persistence_unavailable",
            },
            headers={"Retry-After": "5"},
        )
