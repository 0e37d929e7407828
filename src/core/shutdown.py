import asyncio
from typing import Optional

from .log import get_logger

logger = get_logger(__name__)


class ShutdownController:
    """
    Process-wide, one-shot shutdown signal.

    Any subsystem may trigger it; every other subsystem awaits ``wait()``.
    Only the first trigger is kept, later ones are ignored.
    """

    def __init__(self):
        self._event = asyncio.Event()
        self._reason: Optional[str] = None

    @property
    def is_triggered(self) -> bool:
        return self._event.is_set()

    @property
    def reason(self) -> Optional[str]:
        return self._reason

    def trigger_shutdown(self, reason: str) -> bool:
        """Request shutdown. Returns False if it had already been requested."""
        if self._event.is_set():
            logger.debug(f"Shutdown already triggered, ignoring: {reason}")
            return False

        logger.error(f"Shutdown triggered: {reason}")
        self._reason = reason
        self._event.set()
        return True

    async def wait(self) -> str:
        """Block until shutdown is triggered and return its reason."""
        await self._event.wait()
        return self._reason or ""
