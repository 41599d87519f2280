"""Main FastAPI application entry point."""

from pathlib import Path

from dotenv import load_dotenv

from view_tools.config import get_settings
from view_tools.core.app_factory import create_app
from view_tools.logging_config import setup_logging

# Load environment variables from .env file
load_dotenv(Path(__file__).parent.parent / ".env")

settings = get_settings()

# Configure structured logging (JSON to file + console)
setup_logging(settings.log_level)

# Create application
app = create_app(settings)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "view_tools.main:app",
        host=settings.app_host,
        port=settings.app_port,
        reload=True,
    )
