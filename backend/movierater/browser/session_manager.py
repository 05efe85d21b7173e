import asyncio
import logging
from typing import Optional

from movierater.core.enums import SessionStatus
from movierater.core.exceptions import BaseAppException
from movierater.core.storage import GUEST_SESSION_KEY, StorageInterface

logger = logging.getLogger(__name__)


class SessionManager:
    """Guest session lifecycle: UNINITIALIZED -> CREATING -> READY(token)

    A token found in storage is reused verbatim. A new one is minted only
    when storage holds none, and concurrent callers share that one creation.
    Failure returns to UNINITIALIZED; callers treat a missing token as
    "rating unavailable", never as a fatal error.
    """

    def __init__(self, gateway, storage: StorageInterface, key: str = GUEST_SESSION_KEY):
        self.gateway = gateway
        self.storage = storage
        self.key = key
        self.status = SessionStatus.UNINITIALIZED
        self.token: Optional[str] = None
        self.last_error: Optional[BaseAppException] = None
        self._pending: Optional[asyncio.Task] = None

    @property
    def ready(self) -> bool:
        return self.status is SessionStatus.READY and self.token is not None

    async def initialize(self) -> Optional[str]:
        """Return the session token, creating one only when none is stored"""
        stored = self.storage.get_item(self.key)
        if stored and stored == self.token and self.ready:
            return self.token
        if stored:
            logger.info(f"Reusing existing guest session: {stored}")
            self.token = stored
            self.status = SessionStatus.READY
            return stored

        if self._pending is None:
            self.status = SessionStatus.CREATING
            self._pending = asyncio.ensure_future(self._create())
        pending = self._pending
        try:
            return await asyncio.shield(pending)
        finally:
            if pending.done() and self._pending is pending:
                self._pending = None

    async def _create(self) -> Optional[str]:
        try:
            token = await self.gateway.create_guest_session()
            self.storage.set_item(self.key, token)
        except Exception as e:
            logger.error(f"Error creating guest session: {e}")
            self.last_error = e if isinstance(e, BaseAppException) else BaseAppException(str(e))
            self.token = None
            self.status = SessionStatus.UNINITIALIZED
            return None

        logger.info(f"New guest session created: {token}")
        self.token = token
        self.last_error = None
        self.status = SessionStatus.READY
        return token

    def reset(self) -> None:
        """Forget the current session and its stored token"""
        self.storage.remove_item(self.key)
        self.token = None
        self.status = SessionStatus.UNINITIALIZED
