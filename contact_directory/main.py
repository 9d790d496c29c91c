import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

from contact_directory.api.v1.endpoints.contacts import request_validation_error_handler
from contact_directory.api.v1.router import api_v1_router
from contact_directory.core.config import settings
from contact_directory.core.database import check_connection, init_db

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    if settings.DATABASE_CONNECT_ON_STARTUP:
        # Fail fast: without a store there is nothing to serve.
        try:
            check_connection()
            init_db()
        except Exception:
            logger.exception("Error connecting to database")
            raise

    yield

    logger.info("Shutting down contact directory")


app = FastAPI(
    title=settings.PROJECT_NAME,
    openapi_url=f"{settings.API_V1_PREFIX}/openapi.json",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.add_exception_handler(RequestValidationError, request_validation_error_handler)

app.include_router(api_v1_router, prefix=settings.API_V1_PREFIX)


@app.get("/")
def root():
    return {"message": "Contact Directory API"}


@app.get("/health")
def health_check():
    return {"status": "healthy"}
