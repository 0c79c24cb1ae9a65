"""In-memory participant source with synchronous delivery."""

from __future__ import annotations

import logging
from typing import Any
from uuid import uuid4

from rosterkit.models.enums import UpdateReason
from rosterkit.transport.base import ParticipantHandlers, ParticipantSource

logger = logging.getLogger("rosterkit.transport")


class InMemoryParticipantSource(ParticipantSource):
    """In-process participant source.

    Events are delivered synchronously, in subscription order, before the
    publishing call returns. A handler that raises is logged and does not
    prevent delivery to the remaining subscribers.
    """

    def __init__(self) -> None:
        self._subscriptions: dict[str, ParticipantHandlers] = {}
        self._closed = False

    def subscribe(self, handlers: ParticipantHandlers) -> str:
        sub_id = uuid4().hex
        self._subscriptions[sub_id] = handlers
        return sub_id

    def unsubscribe(self, subscription_id: str) -> bool:
        return self._subscriptions.pop(subscription_id, None) is not None

    def close(self) -> None:
        """Drop all subscriptions and stop delivering events."""
        self._closed = True
        self._subscriptions.clear()

    @property
    def subscription_count(self) -> int:
        """Return the number of active subscriptions."""
        return len(self._subscriptions)

    def join(self, user: Any) -> None:
        """Publish a participant-joined event."""
        for sub_id, handlers in self._targets():
            try:
                handlers.on_joined(user)
            except Exception:
                logger.exception("Error in joined handler for subscription %s", sub_id)

    def update(
        self,
        old_user: Any,
        new_user: Any,
        reason: UpdateReason | str = UpdateReason.STATE_CHANGE,
    ) -> None:
        """Publish a participant-updated event."""
        for sub_id, handlers in self._targets():
            try:
                handlers.on_updated(old_user, new_user, reason)
            except Exception:
                logger.exception("Error in updated handler for subscription %s", sub_id)

    def leave(self, participant_id: Any) -> None:
        """Publish a participant-left event."""
        for sub_id, handlers in self._targets():
            try:
                handlers.on_left(participant_id)
            except Exception:
                logger.exception("Error in left handler for subscription %s", sub_id)

    def _targets(self) -> list[tuple[str, ParticipantHandlers]]:
        if self._closed:
            return []
        # Copy so handlers may unsubscribe while an event is being delivered
        return list(self._subscriptions.items())
