"""Workspace structure and file contents through the filesystem agent."""
import loguru

from shared.schemas import FileContent, FileNode

from .agent_service import AgentService, AgentUnavailableError
from .workspace_service import WorkspaceNotFoundError, WorkspaceService


class StructureService:
    """Resolve a workspace, check the agent, then delegate to it."""

    def __init__(self, workspace_service: WorkspaceService, agent_service: AgentService):
        self.workspace_service = workspace_service
        self.agent_service = agent_service

    async def _resolve(self, workspace_id: str) -> tuple[dict, list[str]]:
        workspace = await self.workspace_service.get_workspace(workspace_id)
        if workspace is None:
            raise WorkspaceNotFoundError(workspace_id)

        if not await self.agent_service.check_status():
            raise AgentUnavailableError(
                f"File system agent not available. Make sure it is running at {self.agent_service.base_url}"
            )

        patterns = await self.workspace_service.get_effective_ignore_patterns(workspace)
        return workspace, patterns

    async def get_structure(self, workspace_id: str) -> list[FileNode]:
        """
        Structure tree of a workspace.

        Raises:
            WorkspaceNotFoundError: Unknown workspace
            AgentUnavailableError: Agent not running or unreachable
            AgentResponseError: Agent rejected the request
        """
        workspace, patterns = await self._resolve(workspace_id)
        structure = await self.agent_service.get_structure(workspace["path"], patterns)
        loguru.logger.info(f"Structure fetched workspace_id={workspace_id} entries={len(structure)}")
        return structure

    async def read_files(self, workspace_id: str, files: list[str]) -> list[FileContent]:
        """
        Contents of files inside a workspace; unreadable files are omitted.

        Raises:
            WorkspaceNotFoundError: Unknown workspace
            AgentUnavailableError: Agent not running or unreachable
            AgentResponseError: Agent rejected the request
        """
        workspace, _ = await self._resolve(workspace_id)
        contents = await self.agent_service.read_files(workspace["path"], files)
        loguru.logger.info(
            f"Files fetched workspace_id={workspace_id} requested={len(files)} returned={len(contents)}"
        )
        return contents
