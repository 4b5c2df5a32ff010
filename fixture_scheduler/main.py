"""
Main FastAPI application for the Fixture Scheduling Engine.
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from fixture_scheduler.api import routes
from fixture_scheduler.core.config import CORS_ORIGINS
from fixture_scheduler.core.logging_config import setup_logging

setup_logging()

app = FastAPI(
    title="Fixture Scheduling API",
    description="API for generating tournament fixtures with venue and kickoff assignment",
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

app.include_router(routes.router)


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "message": "Fixture Scheduling API",
        "version": "1.0.0",
        "endpoints": {
            "generate": "/api/fixtures",
            "validate": "/api/fixtures/validate",
            "generate_async": "/api/fixtures/async",
            "health": "/api/health"
        }
    }
