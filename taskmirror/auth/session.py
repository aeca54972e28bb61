"""Session provider: the current identity and its login/logout transitions."""

import logging
from typing import Awaitable, Callable, List, Optional

from taskmirror.models.user import User

logger = logging.getLogger(__name__)

IdentityListener = Callable[[Optional[User]], Awaitable[None]]


class SessionProvider:
    """Holds the signed-in user and notifies listeners when it changes."""

    def __init__(self, user: Optional[User] = None):
        self._user = user
        self._listeners: List[IdentityListener] = []

    @property
    def current_user(self) -> Optional[User]:
        return self._user

    def subscribe(self, listener: IdentityListener) -> Callable[[], None]:
        """Register a listener; returns a callable that unsubscribes it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    async def login(self, user: User) -> None:
        """Sign ``user`` in. Re-signing the same identity is a no-op."""
        if self._user is not None and self._user.id == user.id:
            return
        self._user = user
        logger.info(f"User {user.id} signed in")
        await self._emit()

    async def logout(self) -> None:
        if self._user is None:
            return
        logger.info(f"User {self._user.id} signed out")
        self._user = None
        await self._emit()

    async def _emit(self) -> None:
        user = self._user
        for listener in list(self._listeners):
            await listener(user)
