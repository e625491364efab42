from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
import logging

# Import database components
from sellersync.database.database import engine, Base

# Import middleware
from sellersync.common.middleware import RequestLoggingMiddleware, SecurityHeadersMiddleware
from sellersync.common.exceptions import (
    SellerSyncError, ValidationError, NotFoundError, ConflictStateError, PersistenceFailure
)

# Import routers
from sellersync.modules.auth.router import auth_router
from sellersync.modules.sellers.router import seller_router
from sellersync.modules.stock.router import stock_router
from sellersync.modules.sales.router import sale_router
from sellersync.modules.payments.router import payment_router
from sellersync.modules.exhibitions.router import exhibition_router
from sellersync.modules.reports.routers import financial_router, dashboard_router

# Import models for table creation
import sellersync.modules.auth.models
import sellersync.modules.sellers.models
import sellersync.modules.stock.models
import sellersync.modules.sales.models
import sellersync.modules.payments.models
import sellersync.modules.exhibitions.models

from sellersync.core.config import settings

# Configure logging
logging.basicConfig(
    level=logging.INFO if settings.ENVIRONMENT == "production" else logging.DEBUG,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)

# FastAPI app
app = FastAPI(
    title="SellerSync API",
    description="Consignment back-office: sellers, stock, sales, payments and exhibitions",
    version="1.0.0",
    docs_url="/docs" if settings.ENVIRONMENT != "production" else None,
    redoc_url="/redoc" if settings.ENVIRONMENT != "production" else None
)

app.add_middleware(SecurityHeadersMiddleware, enable_hsts=settings.ENVIRONMENT == "production")
app.add_middleware(RequestLoggingMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Domain error -> HTTP status
ERROR_STATUS = (
    (ValidationError, status.HTTP_422_UNPROCESSABLE_ENTITY),
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (ConflictStateError, status.HTTP_409_CONFLICT),
    (PersistenceFailure, status.HTTP_500_INTERNAL_SERVER_ERROR),
)


def status_for(exc: SellerSyncError) -> int:
    for error_type, status_code in ERROR_STATUS:
        if isinstance(exc, error_type):
            return status_code
    return status.HTTP_400_BAD_REQUEST


@app.exception_handler(SellerSyncError)
async def sellersync_error_handler(request: Request, exc: SellerSyncError):
    status_code = status_for(exc)
    if status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.code} {exc.message}")
    return JSONResponse(
        status_code=status_code,
        content={"detail": exc.message, "code": exc.code},
    )

# Include routers
app.include_router(auth_router, prefix="/api/auth", tags=["Auth"])
app.include_router(seller_router, prefix="/api/sellers")
app.include_router(stock_router, prefix="/api/stock")
app.include_router(sale_router, prefix="/api/sales")
app.include_router(payment_router, prefix="/api/payments")
app.include_router(exhibition_router, prefix="/api/exhibitions")
app.include_router(financial_router, prefix="/api")
app.include_router(dashboard_router, prefix="/api")

# Create database tables (only for development - use migrations in production)
if settings.ENVIRONMENT == "development":
    Base.metadata.create_all(bind=engine)

@app.get("/")
async def read_root():
    return {
        "message": "SellerSync API is running",
        "version": "1.0.0",
        "environment": settings.ENVIRONMENT
    }

@app.get("/health")
async def health_check():
    return {"status": "healthy", "environment": settings.ENVIRONMENT}

@app.on_event("startup")
async def startup_event():
    logger.info("SellerSync API starting up...")
    logger.info(f"Environment: {settings.ENVIRONMENT}")
    logger.info(f"Debug mode: {settings.DEBUG}")

@app.on_event("shutdown")
async def shutdown_event():
    logger.info("SellerSync API shutting down...")
