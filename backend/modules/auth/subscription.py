"""
Auth state change subscriptions.

The auth client invokes registered callbacks on sign-in, sign-out and
token refresh. Each registration is wrapped in a handle so the owner can
release it deterministically.
"""

import logging
from typing import Any, Callable, Optional

logger = logging.getLogger(__name__)

AuthStateCallback = Callable[[str, Any], None]


class AuthStateSubscription:
    """
    Handle for a single auth state listener.

    Callbacks fire from the auth client, not from this handle, so a
    callback may still run while a concurrent sign-out is in flight.
    ``unsubscribe`` is idempotent.
    """

    def __init__(
        self,
        subscription: Any,
        on_release: Optional[Callable[["AuthStateSubscription"], None]] = None,
    ) -> None:
        self._subscription = subscription
        self._on_release = on_release
        self._active = True

    @property
    def active(self) -> bool:
        return self._active

    @property
    def id(self) -> Optional[str]:
        return getattr(self._subscription, "id", None)

    def unsubscribe(self) -> None:
        """Stop receiving auth state events."""
        if not self._active:
            return
        self._active = False
        self._subscription.unsubscribe()
        logger.debug("Auth state listener %s unsubscribed", self.id)
        if self._on_release is not None:
            self._on_release(self)

    def __enter__(self) -> "AuthStateSubscription":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.unsubscribe()
