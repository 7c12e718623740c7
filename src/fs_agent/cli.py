"""CLI entry point for the filesystem agent."""
import uvicorn

from shared.config import settings
from shared.utils import configure_logging


def run_agent():
    """Run the filesystem agent server."""
    configure_logging(settings.log_level, "AGENT")
    uvicorn.run(
        "fs_agent.main:app",
        host=settings.agent_host,
        port=settings.agent_port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    run_agent()
