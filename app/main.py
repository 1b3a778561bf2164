# =============================================================================
# app/main.py - FastAPI Application Entry Point
# =============================================================================
# This is the main entry point for the AdminDesk API.
# It configures the FastAPI application with middleware, routers, and handlers.
#
# Usage:
#   poetry run uvicorn app.main:app --reload
# =============================================================================

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.config import settings
from app.exceptions import (
    AdminDeskException,
    admindesk_exception_handler,
    validation_exception_handler,
)
from app.routers import categories, customers, forms, health, message_templates, subcategories
from app.auth import routes as auth_routes
from core.services.seed_service import seed_development_data

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)

API_PREFIX = "/api/v1"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    - Startup: log configuration, optionally seed development data
    - Shutdown: log
    """
    logger.info(f"Starting AdminDesk API in {settings.ENVIRONMENT} mode")
    logger.info(f"CORS origins: {settings.cors_origins_list}")

    if settings.should_seed:
        seeded = seed_development_data(settings)
        logger.info(f"Development data ready: {seeded}")

    yield

    logger.info("Shutting down AdminDesk API")


# Create FastAPI application
app = FastAPI(
    title="AdminDesk API",
    description="""
## Service Business Admin API

Back office for a service business: customers, configurable form
categories/subcategories, form links, and message templates.

### Authentication

Mutation endpoints need a token, sent as `Authorization: Bearer <token>`
or in the `token` cookie. Deleting categories and subcategories requires
the `admin` role.

### Errors

Every error body has the same shape:

```json
{"detail": "Form category already exists", "code": "DUPLICATE_NAME", "suggestion": "..."}
```
""",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
    openapi_tags=[
        {"name": "Auth", "description": "Check the current token and profile"},
        {"name": "Categories", "description": "Top-level form categories"},
        {"name": "Subcategories", "description": "Subcategories and their field definitions"},
        {"name": "Forms", "description": "Named links to hosted forms"},
        {"name": "Customers", "description": "Customer directory and search"},
        {"name": "Message Templates", "description": "Reusable message templates"},
        {"name": "Health", "description": "API health and readiness checks"},
    ],
)


# =============================================================================
# Middleware
# =============================================================================

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization", "X-Requested-With", "Accept"],
)


# =============================================================================
# Exception Handlers
# =============================================================================

@app.exception_handler(AdminDeskException)
async def handle_admindesk_exception(request: Request, exc: AdminDeskException):
    """Handle custom AdminDesk exceptions."""
    return await admindesk_exception_handler(request, exc)


@app.exception_handler(RequestValidationError)
async def handle_validation_exception(request: Request, exc: RequestValidationError):
    """Handle malformed request bodies / parameters as VALIDATION_FAILED (400)."""
    return await validation_exception_handler(request, exc)


@app.exception_handler(Exception)
async def handle_general_exception(request: Request, exc: Exception):
    """Handle unexpected exceptions."""
    logger.exception(f"Unexpected error on {request.method} {request.url.path}: {exc}")
    return JSONResponse(
        status_code=500,
        content={
            "detail": "An unexpected error occurred",
            "code": "INTERNAL_ERROR",
        }
    )


# =============================================================================
# Routers
# =============================================================================

app.include_router(auth_routes.router, prefix=f"{API_PREFIX}/auth", tags=["Auth"])
app.include_router(health.router, prefix=API_PREFIX, tags=["Health"])
app.include_router(categories.router, prefix=f"{API_PREFIX}/categories", tags=["Categories"])
app.include_router(subcategories.router, prefix=f"{API_PREFIX}/subcategories", tags=["Subcategories"])
app.include_router(forms.router, prefix=f"{API_PREFIX}/forms", tags=["Forms"])
app.include_router(customers.router, prefix=f"{API_PREFIX}/customers", tags=["Customers"])
app.include_router(
    message_templates.router,
    prefix=f"{API_PREFIX}/message-templates",
    tags=["Message Templates"],
)


# =============================================================================
# Root Endpoint
# =============================================================================

@app.get("/", tags=["Root"])
async def root():
    """
    Root endpoint - returns API info.
    """
    return {
        "name": "AdminDesk API",
        "version": "1.0.0",
        "docs": "/docs",
        "health": f"{API_PREFIX}/health",
    }
