"""Filesystem agent main application."""
from contextlib import asynccontextmanager

import loguru
from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

from fs_agent.api import create_api_router
from fs_agent.services import ChangeNotifier, WatchRegistry
from shared.config import settings
from shared.utils import validation_exception_handler


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan context manager.

    Builds the single WatchRegistry of the process and closes every watch on
    shutdown.
    """
    app.state.watch_registry = WatchRegistry(notifier=ChangeNotifier())
    loguru.logger.info(
        f"File system agent ready debounce_ms={settings.watch_debounce_ms} "
        f"max_depth={settings.watch_max_depth} cors={','.join(settings.agent_cors_origin_list)}"
    )

    yield

    loguru.logger.info("Shutting down, closing all watchers...")
    await app.state.watch_registry.stop_all()


app = FastAPI(
    title="File System Agent",
    description="Local agent serving directory structures, file contents and live watches",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.agent_cors_origin_list,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization"],
)

app.add_exception_handler(RequestValidationError, validation_exception_handler)

app.include_router(create_api_router())


if __name__ == '__main__':
    import uvicorn
    uvicorn.run(
        'fs_agent.main:app',
        host=settings.agent_host,
        port=settings.agent_port,
    )
