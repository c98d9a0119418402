from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from motor.motor_asyncio import AsyncIOMotorClient
from contextlib import asynccontextmanager
from datetime import datetime
from typing import Optional
import logging
import uvicorn

from examServer.config import Settings, get_settings
from examServer.routers import exams, submissions, results
from examServer.services.code_runner import CodeRunner, PythonSubprocessRunner

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = app.state.settings
    client = None
    if app.state.database is None:
        client = AsyncIOMotorClient(settings.mongodb_url)
        app.state.database = client.get_database(settings.database_name)
        logger.info(f"MongoDB connected at {datetime.utcnow().isoformat()}")
    yield
    if client:
        client.close()
        app.state.database = None
        logger.info(f"MongoDB connection closed at {datetime.utcnow().isoformat()}")


def create_app(
    settings: Optional[Settings] = None,
    database=None,
    code_runner: Optional[CodeRunner] = None,
) -> FastAPI:
    settings = settings or get_settings()
    logging.basicConfig(level=settings.log_level.upper())

    app = FastAPI(
        title="Proctored Exam API",
        description="Backend API for exam authoring, submission and auto-grading",
        version="1.0.0",
        lifespan=lifespan
    )
    app.state.settings = settings
    app.state.database = database
    app.state.code_runner = code_runner or PythonSubprocessRunner(
        settings.python_executable, timeout=settings.code_timeout_seconds
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(exams.router, prefix="/api/exams", tags=["exams"])
    app.include_router(submissions.router, prefix="/api/submissions", tags=["submissions"])
    app.include_router(results.router, prefix="/api/results", tags=["results"])

    @app.get("/api/health")
    async def health_check():
        return {
            "status": "OK",
            "timestamp": datetime.utcnow().isoformat()
        }

    @app.exception_handler(Exception)
    async def global_exception_handler(request, exc):
        logger.exception(f"Server error on {request.method} {request.url.path}: {exc}")
        return JSONResponse(
            status_code=500,
            content={
                "error": "Internal server error",
                "message": str(exc),
                "timestamp": datetime.utcnow().isoformat()
            }
        )

    return app


app = create_app()

if __name__ == "__main__":
    uvicorn.run(
        "examServer.main:app",
        host="0.0.0.0",
        port=get_settings().port,
        reload=True
    )
