"""Main entry point for the deals server.

Startup sequence:
1. Initialize DI container
2. Inject handler and debug dependencies into routers
3. Warm the restaurant snapshot (optional)
4. Start the scheduled snapshot refresh job
5. Serve HTTP with FastAPI
"""
import logging
import time
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.responses import PlainTextResponse
from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.interval import IntervalTrigger
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST

from app.config import Settings
from app.container import Container
from app.routers import (
    deal_router,
    set_deal_handler,
    debug_router,
    set_debug_dependencies,
)
from app.middleware import PrometheusMiddleware
from app.metrics import (
    BACKGROUND_JOB_RUNS_TOTAL,
    BACKGROUND_JOB_DURATION_SECONDS,
    BACKGROUND_JOB_LAST_RUN_TIMESTAMP,
)

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

# Global container and scheduler
container: Container = None
scheduler: AsyncIOScheduler = None


async def run_snapshot_refresh_job():
    """Background job: Re-fetch the restaurant snapshot from upstream."""
    job_name = "snapshot_refresh"
    logger.info("[Scheduler] Running SnapshotRefreshJob")
    start_time = time.perf_counter()
    try:
        await container.snapshot_provider.refresh()
        duration = time.perf_counter() - start_time
        BACKGROUND_JOB_DURATION_SECONDS.labels(job_name=job_name).observe(duration)
        BACKGROUND_JOB_RUNS_TOTAL.labels(job_name=job_name, status="success").inc()
        BACKGROUND_JOB_LAST_RUN_TIMESTAMP.labels(job_name=job_name).set_to_current_time()
        logger.info("[Scheduler] SnapshotRefreshJob completed")
    except Exception as e:
        duration = time.perf_counter() - start_time
        BACKGROUND_JOB_DURATION_SECONDS.labels(job_name=job_name).observe(duration)
        BACKGROUND_JOB_RUNS_TOTAL.labels(job_name=job_name, status="error").inc()
        logger.error(f"[Scheduler] SnapshotRefreshJob failed: {e}")


def start_background_jobs(settings: Settings):
    """Start background jobs using APScheduler."""
    global scheduler

    if settings.snapshot_refresh_minutes <= 0:
        logger.info("[Scheduler] Snapshot refresh job disabled (SNAPSHOT_REFRESH_MINUTES<=0)")
        return

    scheduler = AsyncIOScheduler()
    scheduler.add_job(
        run_snapshot_refresh_job,
        trigger=IntervalTrigger(minutes=settings.snapshot_refresh_minutes),
        id="snapshot_refresh",
        name="Restaurant Snapshot Refresh",
        replace_existing=True,
    )
    logger.info(
        f"[Scheduler] Scheduled snapshot refresh every "
        f"{settings.snapshot_refresh_minutes} minutes"
    )

    scheduler.start()
    logger.info("[Scheduler] Background jobs started")


async def startup_sequence(settings: Settings):
    """Wire dependencies, warm the snapshot and start jobs."""
    global container

    logger.info("[Main] Starting startup sequence")

    logger.info("[Main] Initializing DI container")
    container = Container(settings)

    logger.info("[Main] Injecting handler into routers")
    set_deal_handler(container.deal_handler)
    set_debug_dependencies(container.snapshot_provider)

    if settings.refresh_on_startup:
        logger.info("[Main] Fetching restaurant snapshot (initial load)")
        try:
            await container.snapshot_provider.refresh()
            logger.info("[Main] Initial snapshot fetch completed")
        except Exception as e:
            # Requests will retry the fetch on demand
            logger.error(f"[Main] Initial snapshot fetch failed: {e}")
    else:
        logger.info("[Main] Skipping initial refresh (REFRESH_ON_STARTUP=false)")

    logger.info("[Main] Starting periodic jobs")
    start_background_jobs(settings)

    logger.info("[Main] Startup sequence completed")


async def shutdown_sequence():
    """Clean up resources on shutdown."""
    global container, scheduler

    logger.info("[Main] Starting shutdown sequence")

    if scheduler:
        logger.info("[Main] Stopping scheduler")
        scheduler.shutdown(wait=False)
        logger.info("[Main] Scheduler stopped")

    if container:
        logger.info("[Main] Shutting down container")
        await container.shutdown()
        logger.info("[Main] Container shut down")

    logger.info("[Main] Shutdown sequence completed")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """FastAPI lifespan context manager for startup and shutdown."""
    await startup_sequence(settings)
    yield
    await shutdown_sequence()


# Create FastAPI app
settings = Settings()
logging.getLogger().setLevel(settings.log_level.upper())

app = FastAPI(
    title="Deals Server API",
    description="Active restaurant deals and peak deal availability window",
    version="1.0.0",
    lifespan=lifespan,
)

# Add Prometheus metrics middleware
app.add_middleware(PrometheusMiddleware)

# Register routers at app creation time (before uvicorn starts)
app.include_router(deal_router)
app.include_router(debug_router)


# Health check endpoint
@app.get("/health")
def health():
    """Health check endpoint."""
    return {"status": "healthy"}


# Prometheus metrics endpoint
@app.get("/metrics", response_class=PlainTextResponse)
def metrics():
    """Prometheus metrics endpoint for scraping."""
    return PlainTextResponse(
        content=generate_latest(),
        media_type=CONTENT_TYPE_LATEST,
    )


if __name__ == "__main__":
    import uvicorn

    logger.info("[Main] Starting Deals Server")
    uvicorn.run(
        "main:app",
        host="0.0.0.0",
        port=settings.server_port,
        log_level=settings.log_level.lower(),
    )
