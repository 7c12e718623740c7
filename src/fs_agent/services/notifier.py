"""Change notification delivery to the main server."""
import httpx
import loguru

from shared.config import settings
from shared.schemas import ChangeType


class ChangeNotifier:
    """POST filesystem changes to a callback URL, at most once.

    Failures (network errors, timeouts, non-2xx answers) are logged and the
    notification is dropped; nothing is retried.
    """

    def __init__(
        self,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.timeout = timeout if timeout is not None else settings.notify_timeout_seconds
        self._transport = transport

    async def notify(self, callback_url: str, change_type: ChangeType, relative_path: str) -> bool:
        """
        Send one change notification.

        Args:
            callback_url: Main server notify-change endpoint
            change_type: Kind of change
            relative_path: Changed path relative to the watched root

        Returns:
            True if the callback answered 2xx
        """
        payload = {"type": change_type.value, "path": relative_path}
        loguru.logger.info(f"File change detected type={change_type.value} path={relative_path}")
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                resp = await client.post(callback_url, json=payload)
        except httpx.HTTPError as e:
            loguru.logger.warning(f"Network error when notifying {callback_url}: {e!r}")
            return False

        if not resp.is_success:
            loguru.logger.warning(
                f"Notification to {callback_url} failed status={resp.status_code} body={resp.text[:200]}"
            )
            return False

        loguru.logger.debug(f"Notified {callback_url} for {relative_path} status={resp.status_code}")
        return True
