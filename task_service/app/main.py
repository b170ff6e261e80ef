import logging
import time
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .core.config import Settings, get_settings
from .core.database import Database
from .core.errors import NotFoundError, ServiceError
from .routers import tasks

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Open the database on startup, dispose it on shutdown"""
    logger.info("Starting Task Service...")
    app.state.database.connect()
    logger.info("Task Service startup completed")
    yield
    logger.info("Shutting down Task Service...")
    app.state.database.close()
    logger.info("Task Service shutdown completed")


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Build the Task Service application around its own Database"""
    settings = settings or get_settings()

    # Configure logging
    logging.basicConfig(
        level=settings.log_level.upper(),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    app = FastAPI(
        title="Task Service",
        description="Microservice for task management",
        version=settings.service_version,
        lifespan=lifespan
    )
    app.state.settings = settings
    app.state.database = Database(settings.database_url, echo=settings.debug)

    # Add CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def request_logging_middleware(request: Request, call_next):
        """Log all requests with timing"""
        start_time = time.time()
        response = await call_next(request)
        process_time = time.time() - start_time

        if request.url.path != "/health":
            logger.info(f"{request.method} {request.url.path} - {response.status_code} ({process_time:.3f}s)")

        return response

    @app.exception_handler(ServiceError)
    async def service_error_handler(request: Request, exc: ServiceError):
        """Map service errors to 404 (not found) or 500 (persistence)"""
        if isinstance(exc, NotFoundError):
            logger.warning(f"{request.method} {request.url.path}: {exc.message}")
        else:
            logger.error(f"{request.method} {request.url.path}: {exc.message}")
        return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})

    app.include_router(
        tasks.router,
        prefix=settings.api_prefix + "/tasks",
        tags=["tasks"]
    )

    @app.get("/")
    async def root():
        """Root endpoint"""
        return {
            "service": settings.service_name,
            "version": settings.service_version,
            "status": "running",
            "message": "Task Service is operational"
        }

    @app.get("/health")
    def health_check():
        """Health check endpoint"""
        db_healthy = app.state.database.check_connection()
        return {
            "service": settings.service_name,
            "version": settings.service_version,
            "status": "healthy" if db_healthy else "unhealthy",
            "database": "connected" if db_healthy else "disconnected",
            "timestamp": time.time()
        }

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    settings = get_settings()
    uvicorn.run("task_service.app.main:app", host=settings.host, port=settings.port, reload=settings.debug)
