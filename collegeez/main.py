"""
CollegeEZNow - Main Application

FastAPI backend with:
- MongoDB for colleges and students
- Aggregation pipelines for ratings, rankings and reviews

Run: uvicorn collegeez.main:app --reload
  or python -m collegeez.main
"""

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse
from pymongo.errors import PyMongoError

from collegeez.api import api_router
from collegeez.core.config import get_settings
from collegeez.core.exceptions import (
    CollegeEZException,
    collegeez_exception_handler,
    database_exception_handler,
    unhandled_exception_handler,
)
from collegeez.db.mongodb import close_mongo_client, init_mongo_indexes, test_mongo_connection
from collegeez.schemas.schemas import HealthResponse

settings = get_settings()

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if settings.debug else settings.log_level.upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Startup: create MongoDB indexes (the unique email index included).
    Shutdown: close the shared client.
    """
    try:
        init_mongo_indexes()
    except PyMongoError as e:
        logger.warning(f"MongoDB index initialization failed: {e}")

    yield

    logger.info("Shutting down CollegeEZNow")
    close_mongo_client()


# Create FastAPI app
app = FastAPI(
    title="CollegeEZNow",
    description="""
    College, review and student data.

    ## Features
    - **Colleges**: raw documents, average ratings, top 3, search
    - **Reviews**: reviews grouped per college with the mean rating
    - **Research**: research papers per college
    - **Students**: registration and lookup with college logo
    """,
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

# CORS middleware (allow all by default)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Error kind -> HTTP status, shared by every route
app.add_exception_handler(CollegeEZException, collegeez_exception_handler)
app.add_exception_handler(PyMongoError, database_exception_handler)
app.add_exception_handler(Exception, unhandled_exception_handler)

app.include_router(api_router)


@app.get("/", response_class=PlainTextResponse, tags=["Health"])
async def root():
    return "CollegeEZNow is running"


@app.get("/health", response_model=HealthResponse, tags=["Health"])
def health_check():
    """MongoDB connectivity."""
    return {
        "status": "healthy",
        "mongodb": "connected" if test_mongo_connection() else "disconnected"
    }


def run():
    logger.info(f"CollegeEZNow Server is running on port {settings.port}")
    uvicorn.run(app, host=settings.host, port=settings.port)


if __name__ == "__main__":
    run()
