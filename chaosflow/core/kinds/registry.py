"""Registry mapping experiment kinds to their codec handlers."""

import logging

from chaosflow.core.kinds.base import KindHandler

logger = logging.getLogger(__name__)


class KindRegistrationError(Exception):
    """Raised when a kind handler registration fails."""


class KindRegistry:
    """Holds one :class:`KindHandler` per experiment kind.

    Kinds without a registered handler resolve to a pass-through
    :class:`KindHandler`, so new kinds only need registering when their
    fields need reshaping.
    """

    def __init__(self):
        self._handlers: dict[str, KindHandler] = {}

    def register(self, handler: KindHandler, *, force: bool = False) -> None:
        """Register *handler* under ``handler.kind``.

        Args:
            handler: The handler to register.
            force: When True, replaces an existing registration without error.
        """
        if handler.kind in self._handlers and not force:
            raise KindRegistrationError(
                f"Kind handler already registered: kind={handler.kind} "
                f"existing={self._handlers[handler.kind]!r}"
            )
        self._handlers[handler.kind] = handler
        logger.debug("Registered kind handler: %r", handler)

    def get(self, kind: str) -> KindHandler:
        handler = self._handlers.get(kind)
        if handler is None:
            return KindHandler(kind)
        return handler

    def has(self, kind: str) -> bool:
        return kind in self._handlers

    def kinds(self) -> list[str]:
        return sorted(self._handlers)
