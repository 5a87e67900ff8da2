"""
Main FastAPI application entry point.
Configures the application, middleware, and includes routers.
"""
from dotenv import load_dotenv

# Load environment variables from .env file first
load_dotenv()

from fastapi import FastAPI
import logging
from .auth.router import router as auth_router
from .database import Base, engine
from .config import settings
from .exceptions import register_exception_handlers
from .core.middleware import setup_middlewares
from .auth import models  # noqa: F401  registers owner/vet tables on Base

# Configure logging
logging.basicConfig(level=settings.log_level)
logger = logging.getLogger(__name__)

# Create database tables if they don't exist
Base.metadata.create_all(bind=engine)

logger.info("Starting Clinic SSO service")

# Create FastAPI application
app = FastAPI(
    title="Clinic SSO API",
    description="Sign-up, sign-in and token verification for owners and vets",
    version="1.0.0"
)

# Register exception handlers
register_exception_handlers(app)

# Setup custom middleware
setup_middlewares(app)

# Include routers
app.include_router(auth_router)

# Root endpoint
@app.get("/")
def root():
    """
    Root endpoint for API health check.

    Returns:
        dict: Welcome message and API version
    """
    return {"message": "Welcome to Clinic SSO API", "version": app.version}

# Health check endpoint
@app.get("/health")
def health_check():
    """
    Health check endpoint for monitoring.

    Returns:
        dict: Health status information
    """
    return {"status": "healthy"}
