import logging
import os
import uuid
from contextlib import asynccontextmanager

import uvicorn
from fastapi import Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.encoders import jsonable_encoder
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.orm import Session

from mementogram.api import deps
from mementogram.api.api import api_router
from mementogram.core.config import settings
from mementogram.core.exceptions import MementogramError
from mementogram.crud.crud_user import seed_initial_roles
from mementogram.db.base import Base
from mementogram.db.session import SessionLocal, engine

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Application is starting up")
    Base.metadata.create_all(bind=engine)
    logger.info("Database tables created")
    db = SessionLocal()
    try:
        seed_initial_roles(db)
    except Exception as e:
        logger.error(f"Error seeding initial roles: {str(e)}")
    finally:
        db.close()
    yield
    logger.info("Application is shutting down")


app = FastAPI(
    title=settings.PROJECT_NAME,
    openapi_url=f"{settings.API_V1_STR}/openapi.json",
    lifespan=lifespan
)

app.include_router(api_router, prefix=settings.API_V1_STR)
logger.info("API router included")

if settings.BACKEND_CORS_ORIGINS:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.BACKEND_CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE"],
        allow_headers=["*"],
    )
    logger.info(f"CORS middleware added with origins: {settings.BACKEND_CORS_ORIGINS}")
else:
    logger.warning("No CORS origins specified. CORS middleware not added.")


@app.get("/")
async def read_root():
    return {"message": f"{settings.PROJECT_NAME} backend is running!"}


@app.get("/health")
def health_check(db: Session = Depends(deps.get_db)):
    try:
        db.execute(text("SELECT 1"))
        logger.info("Health check passed")
        return {"status": "healthy", "database": "connected"}
    except Exception as e:
        logger.error(f"Health check failed: {str(e)}")
        return JSONResponse(
            status_code=500,
            content={"status": "unhealthy", "database": "disconnected"}
        )


@app.exception_handler(MementogramError)
async def mementogram_error_handler(request: Request, exc: MementogramError):
    logger.warning(f"{type(exc).__name__} on {request.method} {request.url.path}: {exc.detail}")
    return JSONResponse({"detail": exc.detail}, status_code=exc.status_code)


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    logger.warning(f"Invalid request for {request.url.path}: {exc.errors()}")
    return JSONResponse(
        status_code=400,
        content={"detail": jsonable_encoder(exc.errors())}
    )


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    logger.error(f"Unhandled exception: {str(exc)}", exc_info=exc)
    return JSONResponse(
        status_code=500,
        content={"detail": "An unexpected error occurred."}
    )


@app.middleware("http")
async def add_request_id_header(request: Request, call_next):
    request_id = str(uuid.uuid4())
    logger.info(f"Request {request_id}: {request.method} {request.url}")
    try:
        response = await call_next(request)
    except Exception as e:
        logger.error(f"Unhandled exception in request {request_id}: {str(e)}", exc_info=e)
        response = JSONResponse(
            status_code=500,
            content={"detail": "An unexpected error occurred."}
        )
    response.headers["X-Request-ID"] = request_id
    logger.info(f"Response {request_id}: Status {response.status_code}")
    return response


def run_server():
    environment = os.getenv("ENVIRONMENT", "development")
    logger.info(f"Running server in {environment} environment")
    port = int(os.getenv("PORT", 8080))
    if environment == "development":
        uvicorn.run("mementogram.main:app", host="0.0.0.0", port=port, reload=True)
    else:
        uvicorn.run(app, host="0.0.0.0", port=port)


if __name__ == "__main__":
    run_server()
