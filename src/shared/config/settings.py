"""Shared settings and configuration."""
from pydantic_settings import BaseSettings, SettingsConfigDict


def _split_origins(raw: str) -> list[str]:
    """Split a comma separated origin list, dropping blanks."""
    origins = [o.strip() for o in raw.split(",") if o.strip()]
    return origins or ["*"]


class Settings(BaseSettings):
    """Application settings."""

    # Logging
    log_level: str = "INFO"

    # Filesystem agent - listener
    agent_host: str = "0.0.0.0"
    agent_port: int = 4001
    agent_cors_origins: str = "*"  # comma separated, e.g. "http://localhost:5173,http://localhost:3000"

    # Filesystem agent - watcher tuning
    watch_debounce_ms: int = 200  # quiet period before a batch of changes is relayed
    watch_step_ms: int = 50
    watch_max_depth: int = 20  # subdirectory levels below the watched root
    notify_timeout_seconds: float = 5.0  # callback POST timeout, notifications are dropped after it

    # Main server -> agent
    agent_url: str = "http://localhost:4001"
    agent_timeout_seconds: float = 10.0

    # Main server - listener
    api_host: str = "0.0.0.0"
    api_port: int = 3001
    api_cors_origins: str = "*"
    # Externally reachable base URL of the main server, used to build the
    # notify-change callback handed to the agent
    public_base_url: str = "http://localhost:3001"

    # MongoDB (workspace and settings records)
    mongodb_url: str = "mongodb://localhost:27017"
    mongodb_db: str = "prompt_composer"

    model_config = SettingsConfigDict(
        env_file=[".env", ".env.local"],
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @property
    def agent_cors_origin_list(self) -> list[str]:
        return _split_origins(self.agent_cors_origins)

    @property
    def api_cors_origin_list(self) -> list[str]:
        return _split_origins(self.api_cors_origins)

    def notify_callback_url(self, workspace_id: str) -> str:
        """Build the agent -> main server notify-change callback URL for a workspace."""
        return f"{self.public_base_url.rstrip('/')}/internal/workspaces/{workspace_id}/notify-change"


settings = Settings()
