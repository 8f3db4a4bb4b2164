from fastapi import Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
import asyncio
import datetime
import logging
import sqlite3
from app.config import settings
from app.db.init_db import init_db
from app.models.schemas import Operator
from app.realtime.feed import change_feed
from app.routers import admin_router, auth_router, operator_router, realtime_router
from app.tasks.pool_tasks import sweep_stale_claims
from app.utils.auth import require_admin
from app.utils.logger import setup_logging

logger = logging.getLogger(__name__)

app = FastAPI(title="Call Queue")

# CORS middleware for frontend
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

@app.on_event("startup")
async def startup_event():
    setup_logging()
    logger.info("Call Queue - Starting")
    logger.info("Backend: http://%s:%s", settings.BACKEND_HOST, settings.BACKEND_PORT)
    logger.info("Database: %s", settings.DB_PATH)
    init_db()

    # Lease sweep only runs when claims can expire
    app.state.sweeper = None
    if settings.CLAIM_LEASE_SECONDS > 0:
        logger.info("Claim lease: %ss", settings.CLAIM_LEASE_SECONDS)
        app.state.sweeper = asyncio.create_task(sweep_stale_claims())


@app.on_event("shutdown")
async def shutdown_event():
    sweeper = getattr(app.state, "sweeper", None)
    if sweeper is not None:
        sweeper.cancel()
        app.state.sweeper = None


@app.exception_handler(sqlite3.Error)
async def store_error_handler(request: Request, exc: sqlite3.Error):
    logger.error("Store operation failed on %s %s", request.method, request.url.path, exc_info=exc)
    return JSONResponse(status_code=503, content={"detail": "Store operation failed"})


@app.get("/")
def health():
    return {
        "status": "alive",
        "timestamp": datetime.datetime.now(datetime.timezone.utc).isoformat(),
        "version": "1.0",
    }

@app.get("/config")
def get_config(operator: Operator = Depends(require_admin)):
    """Get current configuration (without sensitive data)"""
    return {
        "database": settings.DB_PATH,
        "claim_max_attempts": settings.CLAIM_MAX_ATTEMPTS,
        "claim_lease_seconds": settings.CLAIM_LEASE_SECONDS,
        "stale_claim_sweep_seconds": settings.STALE_CLAIM_SWEEP_SECONDS,
        "subscribers": change_feed.subscriber_count(),
    }

app.include_router(auth_router.router)
app.include_router(operator_router.router)
app.include_router(admin_router.router)
app.include_router(realtime_router.router)


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host=settings.BACKEND_HOST, port=settings.BACKEND_PORT)
