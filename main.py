from fastapi import FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from contextlib import asynccontextmanager
import logging

from config.database import close_db
from config.settings import settings
from api.dependencies import get_content_repository, get_curriculum_repository, get_vector_store
from content.content_storage import SQLContentRepository
from api.health import router as health_router
from api.discover import router as discover_router
from api.content import router as content_router
from api.vectordb import router as vectordb_router
from api.curriculum import router as curriculum_router

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifecycle events for FastAPI application"""
    # Startup
    logger.info("🚀 Starting Content Authoring Backend...")

    try:
        repository = get_content_repository()
        get_curriculum_repository()
        get_vector_store()

        logger.info(f"✅ Content Authoring Backend started (storage: {settings.STORAGE_BACKEND}, model: {settings.DEFAULT_MODEL})")
        logger.info("📚 API docs at http://0.0.0.0:8000/docs")

    except Exception as e:
        logger.error(f"❌ Startup failed: {e}")
        raise

    yield

    logger.info("⏳ Shutting down Content Authoring Backend...")

    if isinstance(repository, SQLContentRepository):
        close_db(repository.engine)


# Initialize FastAPI app
app = FastAPI(
    title="Educational Content Authoring Backend",
    description="Discover, generate and modify lessons, quizzes, exercises and projects with generative models",
    version="1.0.0",
    lifespan=lifespan
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=[
        settings.FRONTEND_URL,
        "http://localhost:5173",
        "http://localhost:3000"
    ],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(HTTPException)
async def http_exception_handler(request: Request, exc: HTTPException):
    return JSONResponse(status_code=exc.status_code, content={"message": str(exc.detail)})


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    if errors:
        first = errors[0]
        location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
        detail = str(first.get("msg", "")).replace("Value error, ", "")
        message = f"{location}: {detail}" if location else detail
    else:
        message = "Invalid request"
    return JSONResponse(status_code=400, content={"message": message})


# Include routers
app.include_router(health_router)
app.include_router(discover_router)
app.include_router(content_router)
app.include_router(vectordb_router)
app.include_router(curriculum_router)


@app.get("/")
async def root():
    """Root endpoint"""
    return {
        "service": "Educational Content Authoring Backend",
        "version": "1.0.0",
        "status": "running",
        "docs": "/docs",
        "health": "/health"
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
        log_level=settings.LOG_LEVEL.lower()
    )
