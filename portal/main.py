"""
Student Portal - Main Application

FastAPI backend with:
- PostgreSQL for structured data (via SQLAlchemy)
- MongoDB GridFS for uploaded study materials
- OpenAI-compatible completion API for the study assistant
- JWT authentication

Run: uvicorn portal.main:app --reload
"""

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from portal.api.routes import api_router
from portal.api.deps import shutdown_task_queue
from portal.core.errors import register_exception_handlers
from portal.core.logging_config import configure_logging
from portal.db.postgres import get_engine, init_schema, test_db_connection
from portal.db.mongodb import init_mongo_indexes, test_mongo_connection

configure_logging()
logger = logging.getLogger(__name__)

# Create FastAPI app
app = FastAPI(
    title="Student Portal",
    description="""
    University student portal API.

    ## Features
    - **Profiles**: USN, branch, semester, batch
    - **Results**: Subject results with SGPA/CGPA calculation
    - **Placements**: Drives filtered by branch and CGPA eligibility
    - **Study Materials**: Upload handshake, listing, download counts
    - **AI Assistant**: Chat sessions with background-generated replies
    """,
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc"
)

# CORS middleware (allow all for development)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

# Include API routes
app.include_router(api_router, prefix="/api")


@app.on_event("startup")
async def startup_event():
    """Create tables and MongoDB indexes on startup."""
    try:
        init_schema(get_engine())
        logger.info("Database schema ready")
    except Exception as e:
        logger.warning("Database schema initialization failed: %s", e)

    try:
        init_mongo_indexes()
    except Exception as e:
        logger.warning("MongoDB index initialization failed: %s", e)


@app.on_event("shutdown")
async def shutdown_event():
    """Let queued chat replies finish."""
    shutdown_task_queue()


@app.get("/", tags=["Health"])
async def root():
    return {"status": "healthy", "app": "Student Portal"}


@app.get("/health", tags=["Health"])
async def health_check():
    """Detailed health check."""
    return {
        "status": "healthy",
        "database": "connected" if test_db_connection(get_engine()) else "disconnected",
        "mongodb": "connected" if test_mongo_connection() else "disconnected"
    }
