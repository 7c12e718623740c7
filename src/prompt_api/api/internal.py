"""Agent -> main server callback routes."""
import loguru
from fastapi import APIRouter, Depends, HTTPException, Response, status

from prompt_api.dependencies import get_broker
from prompt_api.schemas import ChangeNotification
from prompt_api.services import SubscriptionBroker

router = APIRouter(prefix="/internal")


@router.post(
    "/workspaces/{workspace_id}/notify-change",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
)
async def notify_change(
    workspace_id: str,
    body: ChangeNotification,
    broker: SubscriptionBroker = Depends(get_broker),
):
    """Relay a filesystem change from the agent to the workspace's live subscribers."""
    try:
        delivered = await broker.broadcast(workspace_id, body.type, body.path)
    except Exception as e:
        loguru.logger.error(f"Change relay failed workspace_id={workspace_id}: {e}")
        raise HTTPException(status_code=500, detail="Internal server error")

    loguru.logger.debug(
        f"Change relayed workspace_id={workspace_id} type={body.type.value} path={body.path} delivered={delivered}"
    )
    return Response(status_code=status.HTTP_204_NO_CONTENT)
