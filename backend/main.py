"""
DevLog API - personal developer journal backend.

This is the main entry point for the FastAPI application.
All application configuration and setup is handled by the app factory.
"""

# Initialize settings and logging first
from core import get_settings, setup_logging

settings = get_settings()
setup_logging(debug_mode=settings.debug)

# Create the FastAPI application
from core.app_factory import create_app

app = create_app(settings)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("main:app", host="0.0.0.0", port=settings.port, reload=settings.is_development)
