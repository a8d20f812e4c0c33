import traceback
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from config import settings
from api.routes_leaderboard import router as leaderboard_router
from services.talent_client import ConfigurationError, UpstreamError, talent_client
from utils.logger import setup_logging, api_logger as logger

# Setup logging
setup_logging(level=settings.LOG_LEVEL, json_format=settings.LOG_JSON)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown events"""
    if not settings.TALENT_API_KEY:
        logger.warning("TALENT_API_KEY is not set; leaderboard requests will fail")
    logger.info("Creator leaderboard API ready", talent_api_url=settings.TALENT_API_URL)
    try:
        yield
    finally:
        await talent_client.close()
        logger.info("Shutdown complete")


app = FastAPI(
    title="Creator Leaderboard",
    description="Tie-aware creator score leaderboard and reward eligibility stats",
    version="1.0.0",
    lifespan=lifespan,
)


@app.exception_handler(ConfigurationError)
async def configuration_error_handler(request: Request, exc: ConfigurationError):
    logger.error("Leaderboard misconfigured", path=request.url.path, error=str(exc))
    return JSONResponse(status_code=500, content={"error": str(exc)})


@app.exception_handler(UpstreamError)
async def upstream_error_handler(request: Request, exc: UpstreamError):
    logger.error(
        "Talent API error",
        path=request.url.path,
        status_code=exc.status_code,
    )
    return JSONResponse(status_code=exc.status_code, content={"error": exc.body})


# Global exception handler
@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    logger.error(
        "Unhandled exception",
        path=request.url.path,
        method=request.method,
        error=str(exc),
        traceback=traceback.format_exc(),
    )
    return JSONResponse(
        status_code=500, content={"detail": "Internal server error", "error": str(exc)}
    )


# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# API routes
app.include_router(leaderboard_router, prefix="/api", tags=["Leaderboard"])


# Health checks
@app.get("/health")
async def health_check():
    """Basic health check - for load balancers"""
    return {"status": "ok"}


if __name__ == "__main__":
    import os
    import uvicorn

    port = int(os.environ.get("PORT", 8000))
    uvicorn.run(app, host="0.0.0.0", port=port)
