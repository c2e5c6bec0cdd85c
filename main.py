"""Application entry point for the FitForge coaching API.

Defines the FastAPI app, middleware, exception handlers and the `/health`
endpoint, and includes the API routers from the `api` package. The
`lifespan` handler initializes the DB and the photo directory on startup.
"""

import os
import time
from contextlib import asynccontextmanager
from datetime import datetime

from fastapi import Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from api.chat import router as chat_router
from api.intake import router as intake_router
from api.jobs import router as jobs_router
from api.plans import router as plans_router
from api.progress import router as progress_router
from api.users import router as users_router
from core import config
from core.error_handlers import register_exception_handlers
from core.logger import get_logger
from database import init_db
from database.deps import get_db_read
from services.fitness_coach import FitnessCoachAI, get_fitness_coach
from services.health_checks import STATUS_CODES, check_ai_service, check_database, check_storage, overall_status

logger = get_logger("main")

STARTED_AT = time.time()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Fastapi lifespan context: initialize resources before serving requests."""
    init_db()
    os.makedirs(config.PHOTO_STORAGE_DIR, exist_ok=True)
    yield


app = FastAPI(title=config.APP_NAME, version=config.APP_VERSION, lifespan=lifespan)


app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Register exception handlers
register_exception_handlers(app)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    """Log incoming requests and their responses."""
    logger.info("%s %s", request.method, request.url.path)
    try:
        response = await call_next(request)
        logger.info("%s %s -> %s", request.method, request.url.path, response.status_code)
        return response
    except Exception:
        logger.exception("Request error: %s %s", request.method, request.url.path)
        raise


@app.get("/health")
def health(db: Session = Depends(get_db_read), coach: FitnessCoachAI = Depends(get_fitness_coach)):
    """Report service status and the state of the database, AI provider and photo storage.

    Healthy (200) when everything is up, degraded (207) when something is not
    configured, unhealthy (503) when anything is down.
    """
    start = time.perf_counter()
    services = {
        "database": check_database(db),
        "ai": check_ai_service(coach.llm),
        "storage": check_storage(),
    }
    status = overall_status(services)
    if status != "healthy":
        logger.warning("Health check %s: %s", status, services)

    body = {
        "status": status,
        "timestamp": datetime.utcnow().isoformat() + "Z",
        "version": config.APP_VERSION,
        "uptime": round(time.time() - STARTED_AT, 3),
        "services": services,
        "metrics": {"response_time_ms": round((time.perf_counter() - start) * 1000, 2)},
    }
    return JSONResponse(status_code=STATUS_CODES[status], content=body)


# include routers
app.include_router(users_router)
app.include_router(intake_router)
app.include_router(jobs_router)
app.include_router(plans_router)
app.include_router(progress_router)
app.include_router(chat_router)


if __name__ == "__main__":
    # Allow starting the app via `python ./main.py`
    import uvicorn

    uvicorn.run("main:app", host="0.0.0.0", port=8000, reload=True)
