"""Main FastAPI application module.

This module initializes the FastAPI application and registers all route handlers.
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from core.logging_config import setup_logging
from config import (
    API_HOST,
    API_PORT,
    API_TITLE,
    API_VERSION,
    CORS_ALLOWED_ORIGINS,
)
from core.database import close_db, init_db
from core.error_handlers import register_error_handlers
from api.routes import auth, courses, departments, metrics, system_config
from api.routes import user_courses, users

API_DESCRIPTION = "Administrative API for a learning management system."

# Setup logging
setup_logging()

# Initialize FastAPI application
app = FastAPI(
    title=API_TITLE,
    description=API_DESCRIPTION,
    version=API_VERSION,
)

# Configure CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_error_handlers(app)

# Register route handlers
app.include_router(auth.router)
app.include_router(users.router)
app.include_router(departments.router)
app.include_router(courses.router)
app.include_router(user_courses.router)
app.include_router(system_config.router)
app.include_router(metrics.router)


@app.on_event("startup")
def startup_tasks() -> None:
    """Create missing tables."""
    init_db()


@app.on_event("shutdown")
def shutdown_tasks() -> None:
    """Release pooled database connections."""
    close_db()


@app.get("/", summary="API root", tags=["Info"])
def root() -> dict:
    """API root, returns API information and documentation links.

    Returns:
        Dictionary with API information and documentation links.
    """
    return {
        "name": API_TITLE,
        "version": API_VERSION,
        "description": API_DESCRIPTION,
        "docs": {
            "swagger": "/docs",
            "redoc": "/redoc",
        },
        "health": "/api/health",
    }


@app.get("/api/health", summary="Health check", tags=["Health"])
def health() -> dict:
    """Health check endpoint.

    Returns:
        Dictionary with status "ok".
    """
    return {"status": "ok"}


# --- Startup code for direct execution ---
if __name__ == "__main__":
    import uvicorn

    print("🚀 Starting LMS Admin API server...")
    server_url = f"http://{API_HOST}:{API_PORT}"
    print(f"🌐 Server: {server_url}")
    print(f"📚 API docs: {server_url}/docs")
    print()

    uvicorn.run("app:app", host=API_HOST, port=API_PORT, reload=True)
