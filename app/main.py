"""
Main FastAPI application for the Intramural Scheduling Service.
"""

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.api import routes
from app.core.config import CORS_ORIGINS
from app.core.logging_config import setup_logging

setup_logging()

app = FastAPI(
    title="Intramural Scheduling API",
    description="API for generating and managing intramural game schedules",
    version="1.0.0"
)

# Enable CORS for frontend
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include API routes
app.include_router(routes.router)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    """Malformed or incomplete request bodies are client errors (400)."""
    return JSONResponse(
        status_code=400,
        content={
            "detail": {
                "message": "Invalid request",
                "reason": "invalid_request",
                "errors": jsonable_encoder(exc.errors())
            }
        }
    )


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "message": "Intramural Scheduling API",
        "version": "1.0.0",
        "endpoints": {
            "generate": "/api/schedule/generate",
            "games": "/api/games",
            "health": "/api/health"
        }
    }
