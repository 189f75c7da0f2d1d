"""
FastAPI back-end for the AI Product Image Editor.

Features:
- Product photo editing via Stability AI (image-to-image)
- Product photo generation from a text instruction (text-to-image)
- Request logging and a health check
"""
import time

import uvicorn
from fastapi import FastAPI, Request, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from config import Config
from image.routes import router as image_router
from utils.logger import get_logger
from common.error_messages import ErrorCode, get_error_response

logger = get_logger("main")

app = FastAPI(
    title="AI Product Image Editor",
    description="Edit or generate e-commerce product photos with Stability AI.",
    version="1.0.0"
)


# CORS middleware - MUST be added FIRST so it runs on all responses (including error responses and OPTIONS)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Handle all unhandled exceptions globally."""
    if isinstance(exc, HTTPException):
        return JSONResponse(
            status_code=exc.status_code,
            content={"detail": exc.detail}
        )

    logger.error(f"Unhandled exception: {exc}", exc_info=True)

    message, status_code = get_error_response(ErrorCode.UNKNOWN_ERROR)
    return JSONResponse(
        status_code=status_code,
        content={"error": message}
    )


@app.middleware("http")
async def log_requests(request: Request, call_next):
    """Log all HTTP requests with timing. Bodies are multipart images, so they are never logged."""
    start_time = time.time()
    full_url = str(request.url)
    client = request.client.host if request.client else "unknown"

    logger.info(f"→ {request.method} {full_url} - Client: {client}")
    try:
        response = await call_next(request)
    except Exception as e:
        process_time = (time.time() - start_time) * 1000
        logger.error(f"← {request.method} {full_url} - Error: {str(e)} - Time: {process_time:.2f}ms")
        raise

    process_time = (time.time() - start_time) * 1000
    logger.info(f"← {request.method} {full_url} - Status: {response.status_code} - Time: {process_time:.2f}ms")
    return response


app.include_router(image_router)
logger.info("Image router included")


@app.on_event("startup")
async def startup_event():
    """Log startup event."""
    logger.info("=" * 80)
    logger.info("FastAPI application starting up")
    logger.info(f"Host: {Config.HOST}:{Config.PORT}")
    logger.info(f"Stability endpoint: {Config.STABILITY_API_URL} (model: {Config.STABILITY_MODEL})")
    # Missing credential degrades to always-fail at call time, not a startup crash
    try:
        Config.validate()
        logger.info("Configuration validated successfully")
    except ValueError as e:
        logger.warning(f"{e}. Image generation will fail until you configure it.")
    logger.info("=" * 80)


@app.on_event("shutdown")
async def shutdown_event():
    """Log shutdown event."""
    logger.info("=" * 80)
    logger.info("FastAPI application shutting down")
    logger.info("=" * 80)


@app.get("/healthz")
def health():
    """Health check endpoint."""
    return {"status": "ok", "image_provider_configured": Config.has_stability_api_key()}


# Run server directly
if __name__ == "__main__":
    logger.info(f"Starting server on {Config.HOST}:{Config.PORT}")
    uvicorn.run(
        "app:app",
        host=Config.HOST,
        port=Config.PORT,
        reload=True,
        log_level="info"
    )
