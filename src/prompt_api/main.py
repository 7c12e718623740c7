"""Prompt API main application."""
from contextlib import asynccontextmanager

import loguru
from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

from prompt_api.api import create_api_router
from prompt_api.dao import WorkspaceDAO
from prompt_api.services import AgentService, SubscriptionBroker, WorkspaceService
from shared.config import settings
from shared.database import close_db, ping_db
from shared.utils import validation_exception_handler


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan context manager.

    Builds the single SubscriptionBroker of the process and closes the
    database client on shutdown.
    """
    if await ping_db():
        try:
            await WorkspaceDAO().create_indexes()
            loguru.logger.info("Workspace indexes created")
        except Exception as e:
            loguru.logger.warning(f"Failed to create indexes: {e}")

    app.state.broker = SubscriptionBroker(WorkspaceService(), AgentService())
    loguru.logger.info(
        f"Prompt API ready agent_url={settings.agent_url} public_base_url={settings.public_base_url}"
    )

    yield

    loguru.logger.info("Shutting down...")
    await close_db()


app = FastAPI(
    title="Prompt API",
    description="Workspace records, agent facade and live filesystem change relay",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.api_cors_origin_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.add_exception_handler(RequestValidationError, validation_exception_handler)

app.include_router(create_api_router())


if __name__ == '__main__':
    import uvicorn
    uvicorn.run(
        'prompt_api.main:app',
        host=settings.api_host,
        port=settings.api_port,
    )
