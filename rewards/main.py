"""Rewards API - FastAPI app entry point."""
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from rewards.core.config import get_settings
from rewards.core.exceptions import InternalError, RewardsError
from rewards.core.logging_config import get_logger, setup_logging
from rewards.db.base import Base
from rewards.db.session import engine
from rewards.routers import admin, auth, referrals, tasks, user

setup_logging()
logger = get_logger(__name__)
settings = get_settings()


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Schema for local runs; deployments use `alembic upgrade head`
    if settings.auto_create_tables:
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
    logger.info("app_started", environment=settings.environment)

    yield

    await engine.dispose()


app = FastAPI(
    title=settings.app_name,
    description="Tasks, wallet connection and referral rewards",
    lifespan=lifespan,
)


@app.exception_handler(RewardsError)
async def rewards_error_handler(request: Request, exc: RewardsError):
    if exc.status_code >= 500:
        logger.error("request_failed", path=request.url.path, error=exc.message)
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    errors = [
        {"field": ".".join(str(p) for p in err["loc"][1:]), "message": err["msg"]}
        for err in exc.errors()
    ]
    return JSONResponse(
        status_code=400,
        content=jsonable_encoder({"message": "Invalid input", "errors": errors}),
    )


@app.exception_handler(SQLAlchemyError)
async def database_error_handler(request: Request, exc: SQLAlchemyError):
    logger.exception("database_error", path=request.url.path)
    return JSONResponse(status_code=500, content=InternalError().to_dict())


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception("unhandled_exception", path=request.url.path)
    return JSONResponse(status_code=500, content=InternalError().to_dict())


app.include_router(auth.router)
app.include_router(user.router)
app.include_router(tasks.router)
app.include_router(referrals.router)
app.include_router(admin.router)


@app.get("/health")
async def health():
    return {"status": "ok"}
