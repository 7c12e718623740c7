"""CLI entry point for the Prompt API."""
import uvicorn

from shared.config import settings
from shared.utils import configure_logging


def run_api():
    """Run the Prompt API server."""
    configure_logging(settings.log_level, "API")
    uvicorn.run(
        "prompt_api.main:app",
        host=settings.api_host,
        port=settings.api_port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    run_api()
