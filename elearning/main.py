import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse
from starlette.concurrency import run_in_threadpool

from elearning.core.config import get_settings
from elearning.core.error_handlers import register_error_handlers
from elearning.core.logging_middleware import LoggingMiddleware
from elearning.db.session import Database
from elearning.routers.courses import router as courses_router
from elearning.routers.enrollments import router as enrollments_router
from elearning.routers.users import router as users_router

settings = get_settings()

logging.basicConfig(level=getattr(logging, settings.log_level.upper(), logging.INFO))
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = get_settings()
    # raises ConfigurationError without DATABASE_URL; startup aborts
    database = Database(
        settings.database_url,
        pool_size=settings.db_pool_size,
        connect_timeout=settings.db_connect_timeout,
    )
    if settings.db_connect_on_startup:
        await run_in_threadpool(database.ensure_connected)
    app.state.database = database
    logger.info("E-Learning API started")
    yield
    database.dispose()
    logger.info("E-Learning API stopped")


app = FastAPI(title="E-Learning API", lifespan=lifespan)

# Middleware
app.add_middleware(LoggingMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_error_handlers(app)


@app.get("/", response_class=PlainTextResponse)
def root():
    return "E-Learning API Ready!"


# Health check
@app.get("/health")
def health():
    return {"status": "ok"}


# Include routers
app.include_router(users_router, prefix="/api", tags=["users"])
app.include_router(courses_router, prefix="/api", tags=["courses"])
app.include_router(enrollments_router, prefix="/api", tags=["enrollments"])


if __name__ == "__main__":
    uvicorn.run(app, host=settings.host, port=settings.port)
