from contextlib import asynccontextmanager

from fastapi import FastAPI, Depends
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from sqlalchemy import text

from habitlab.db.base import get_db, init_db
from habitlab.core.config import settings
from habitlab.core.logging import setup_logging
from habitlab.routers import habits as habits_router
from habitlab.routers import progress as progress_router
from habitlab.routers import stats as stats_router
from habitlab.core.errors import (
    HabitLabException,
    habitlab_exception_handler,
    validation_exception_handler,
    unhandled_exception_handler,
)

setup_logging(settings.LOG_LEVEL, settings.LOG_FILE)


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db()
    yield


app = FastAPI(
    title="HabitLab API",
    description=(
        "**Personal habit tracker**\n\n"
        "Stores recurring habits scheduled on weekdays, records completions "
        "(flagging late ones) and derives daily, weekly and streak progress.\n\n"
        "All error responses follow the `{code, message, details}` envelope."
    ),
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

# --- CORS ---
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# --- Exception handlers (most specific first) ---
app.add_exception_handler(HabitLabException, habitlab_exception_handler)
app.add_exception_handler(RequestValidationError, validation_exception_handler)
app.add_exception_handler(Exception, unhandled_exception_handler)

# --- Routers ---
app.include_router(habits_router.router)
app.include_router(progress_router.router)
app.include_router(stats_router.router)


@app.get("/health", tags=["health"], summary="Health check")
def health(db: Session = Depends(get_db)):
    """
    Returns `{"status": "ok", "db": "ok"}` when both the API and the database
    are reachable. Returns HTTP 503 if the DB is down.
    """
    try:
        db.execute(text("SELECT 1"))
        db_status = "ok"
    except SQLAlchemyError:
        db_status = "unreachable"

    if db_status != "ok":
        return JSONResponse(
            status_code=503,
            content={"status": "error", "db": db_status},
        )
    return {"status": "ok", "db": "ok", "env": settings.APP_ENV}
