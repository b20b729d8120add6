import structlog
from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

load_dotenv()

from revyn_audit import __version__
from revyn_audit.config import settings
from revyn_audit.core.exceptions import RepositoryException
from revyn_audit.core.logging_config import configure_logging
from revyn_audit.routers.audit import router as audit_router
from revyn_audit.routers.chat import router as chat_router
from revyn_audit.routers.errors import repository_exception_handler, validation_exception_handler
from revyn_audit.routers.health import router as health_router
from revyn_audit.routers.payments import router as payments_router
from revyn_audit.routers.progress import router as progress_router
from revyn_audit.routers.reports import router as reports_router
from revyn_audit.services.cache import reset_cache

logger = structlog.get_logger(__name__)


# SWAGGER UI tag display order
_OPENAPI_TAGS = [
    {"name": "Root"},
    {"name": "Health"},
    {"name": "Audit"},
    {"name": "Progress"},
    {"name": "Reports"},
    {"name": "Payments"},
    {"name": "Chat"},
]

# FASTAPI APPLICATION CONFIGURATION
app = FastAPI(
    title=settings.APP_NAME,
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
    openapi_tags=_OPENAPI_TAGS,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_methods=["*"],
    allow_headers=["*"],
)

# REGISTER EXCEPTION HANDLERS
app.add_exception_handler(RequestValidationError, validation_exception_handler)
app.add_exception_handler(RepositoryException, repository_exception_handler)

# REGISTER ROUTERS (order matches _OPENAPI_TAGS)
app.include_router(health_router)    # Health
app.include_router(audit_router)     # Audit
app.include_router(progress_router)  # Progress
app.include_router(reports_router)   # Reports
app.include_router(payments_router)  # Payments
app.include_router(chat_router)      # Chat


# ROOT ENDPOINT
@app.get("/", tags=["Root"], summary="Root endpoint")
async def root():
    return {
        "service": settings.APP_NAME,
        "version": __version__,
        "docs": {
            "swagger": "/docs",
            "redoc": "/redoc"
        },
        "status": "running"
    }


# STARTUP EVENT
@app.on_event("startup")
async def startup_event():
    configure_logging()
    logger.info("api_starting", env=settings.APP_ENV, version=__version__)


# SHUTDOWN EVENT
@app.on_event("shutdown")
async def shutdown_event():
    reset_cache()
    logger.info("api_stopping")


# RUN WITH UVICORN
if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "revyn_audit.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.DEBUG,
    )
