"""Abstract base class and types for participant event sources."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

JoinedCallback = Callable[[Any], None]
UpdatedCallback = Callable[[Any, Any, Any], None]
LeftCallback = Callable[[Any], None]


@dataclass(frozen=True)
class ParticipantHandlers:
    """The three callbacks a participant source drives.

    Attributes:
        on_joined: Called with the user payload when a participant joins.
        on_updated: Called with ``(old_user, new_user, reason)`` when a
            participant's state or info changes.
        on_left: Called with the participant id when a participant leaves.
    """

    on_joined: JoinedCallback
    on_updated: UpdatedCallback
    on_left: LeftCallback


class ParticipantSource(ABC):
    """Abstract source of participant join, update and leave events.

    Implement this to bridge a real-time communication layer into a
    ``RosterEngine``. The library ships with ``InMemoryParticipantSource``
    for single-process use and tests.
    """

    @abstractmethod
    def subscribe(self, handlers: ParticipantHandlers) -> str:
        """Start delivering participant events to *handlers*.

        Returns:
            A subscription ID that can be used to unsubscribe.
        """
        ...

    @abstractmethod
    def unsubscribe(self, subscription_id: str) -> bool:
        """Stop delivering events to a subscription.

        Returns:
            True if the subscription existed and was removed.
        """
        ...

    def close(self) -> None:
        """Clean up resources.

        Override this method in subclasses that need cleanup.
        The default implementation does nothing.
        """
        return None
