"""
Life Insurance Death Claim Intake

FastAPI application entry point.
"""
import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from claim_intake import config
from claim_intake.api import router as sessions_router

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifecycle management."""
    logger.info(f"Starting Claim Intake (adjudication service: {config.get_claim_api_url()})")
    yield
    logger.info("Shutting down Claim Intake")


# Create FastAPI application
app = FastAPI(
    title="Death Claim Intake",
    description="""
    Collects a life-insurance death claim, validates it and forwards it to the
    adjudication service.

    ## Workflow

    1. Start a session with `POST /sessions`
    2. Fill in fields with `PATCH /sessions/{id}/fields`
    3. Attach documents with `PUT /sessions/{id}/attachments/{slot}`
    4. Submit with `POST /sessions/{id}/submit`; the outcome is Approved,
       Rejected or Manual Review
    5. Start another claim with `POST /sessions/{id}/reset`

    A police report is required when the cause of death is Accident or Suicide.
    """,
    version="1.0.0",
    lifespan=lifespan
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(sessions_router)


@app.get("/", tags=["root"])
async def root():
    """Root endpoint with system info."""
    return {
        "system": "Death Claim Intake",
        "version": "1.0.0",
        "status": "operational",
        "docs": "/docs"
    }


@app.get("/health", tags=["health"])
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy"}


def main() -> None:
    """Launch the Uvicorn server."""
    logger.info(f"Starting server on port {config.BACKEND_PORT}")
    uvicorn.run("claim_intake.main:app", host="0.0.0.0", port=config.BACKEND_PORT, log_level="info")


if __name__ == "__main__":
    main()
