"""
Customer REST API
Main FastAPI application
"""
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException
from contextlib import asynccontextmanager

from customer_api.config import get_settings
from customer_api.utils.logger import log
from customer_api.utils.error_result import ErrorResult, error_result, serialize_errors
from customer_api import __version__

# Import routers
from customer_api.api import admin, customers, health
from customer_api.middleware.security_middleware import SecurityMiddleware
from customer_api.services.admin_menu import ApiMenuContributor, admin_menu_registry

settings = get_settings()

# Menu entries contributed by this service, registered once at startup
admin_menu_registry.register(ApiMenuContributor())


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown events"""
    log.info(f"Starting {settings.app_name} v{__version__}")
    log.info(f"Environment: {settings.environment}")

    try:
        from customer_api.models.base import init_db
        init_db()
        log.info("Database initialized")
    except Exception as e:
        log.error(f"Database initialization error: {str(e)}")

    yield

    log.info("Shutting down application")


# Create FastAPI app
app = FastAPI(
    title=settings.app_name,
    version=__version__,
    description="""
    REST API for customer data

    - Paged customer lists with creation-date and since-id filters
    - field:value customer search
    - Customer details with addresses, newsletter status and cookie consent
    - Customer language and currency preferences
    """,
    lifespan=lifespan
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Security middleware (Basic Auth gate, Cache-Control)
app.add_middleware(SecurityMiddleware)


# ── Error responses ──────────────────────────────────────

@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    if isinstance(exc.detail, dict):
        errors = {key: v if isinstance(v, list) else [str(v)] for key, v in exc.detail.items()}
    else:
        errors = {"error": [str(exc.detail)]}
    response = ErrorResult(serialize_errors(errors), exc.status_code)
    if exc.headers:
        response.headers.update(exc.headers)
    return response


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    errors: dict[str, list[str]] = {}
    for err in exc.errors():
        key = str(err["loc"][-1]) if err.get("loc") else "request"
        errors.setdefault(key, []).append(err.get("msg", "invalid value"))
    return ErrorResult(serialize_errors(errors), 400)


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    log.exception(f"Unhandled error on {request.method} {request.url.path}: {exc}")
    return error_result("error", "internal server error", 500)


# Include routers
app.include_router(health.router, tags=["health"])
app.include_router(customers.router)
app.include_router(admin.router)


@app.get("/")
async def root():
    """Root endpoint with API information"""
    return {
        "app": settings.app_name,
        "version": __version__,
        "docs": "/docs",
        "health": "/health",
        "endpoints": {
            "list_customers": "GET /api/customers",
            "count_customers": "GET /api/customers/count",
            "search_customers": "GET /api/customers/search?query=first_name:John",
            "get_customer": "GET /api/customers/{id}",
            "customer_language": "GET|PUT /api/customers/{id}/language",
            "customer_currency": "GET|PUT /api/customers/{id}/currency",
            "admin_menu": "GET /admin/menu",
        },
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "customer_api.main:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.debug
    )
