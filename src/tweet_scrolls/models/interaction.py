"""Interaction event and conversation thread models."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from types import MappingProxyType


class InteractionType(str, Enum):
    """Kinds of interaction extracted from an archive."""

    ORIGINAL = "original"
    REPLY_TO_SELF = "reply_to_self"
    REPLY_TO_OTHER = "reply_to_other"
    DM_SENT = "dm_sent"
    DM_RECEIVED = "dm_received"
    MENTION = "mention"

    @property
    def label(self) -> str:
        """Human-readable label."""
        return _LABELS[self]

    @property
    def is_direct_message(self) -> bool:
        """True for DM variants."""
        return self in (InteractionType.DM_SENT, InteractionType.DM_RECEIVED)

    @property
    def is_self_directed(self) -> bool:
        """True when the owner is on the receiving end of the reference."""
        return self in (InteractionType.REPLY_TO_SELF, InteractionType.DM_SENT)


_LABELS = {
    InteractionType.ORIGINAL: "Original Post",
    InteractionType.REPLY_TO_SELF: "Reply To Self",
    InteractionType.REPLY_TO_OTHER: "Reply To Other",
    InteractionType.DM_SENT: "DM Sent",
    InteractionType.DM_RECEIVED: "DM Received",
    InteractionType.MENTION: "Mention",
}


@dataclass(frozen=True, slots=True)
class InteractionEvent:
    """A single classified interaction.

    Attributes:
        id: Source identifier (tweet id, DM message id, ...).
        timestamp: Timezone-aware UTC timestamp.
        interaction_type: Classification of the interaction.
        counterpart: Identifier of the other party.
        content: Text content, empty when redacted.
        metadata: Read-only string metadata.
    """

    id: str
    timestamp: datetime
    interaction_type: InteractionType
    counterpart: str
    content: str = ""
    metadata: Mapping[str, str] = field(default_factory=dict, hash=False)

    def __post_init__(self) -> None:
        # Metadata is read-only once the event exists
        object.__setattr__(self, "metadata", MappingProxyType(dict(self.metadata)))

    def with_metadata(self, **values: str) -> InteractionEvent:
        """Return a copy with additional metadata entries."""
        merged = {**self.metadata, **values}
        return InteractionEvent(
            id=self.id,
            timestamp=self.timestamp,
            interaction_type=self.interaction_type,
            counterpart=self.counterpart,
            content=self.content,
            metadata=merged,
        )


@dataclass
class ConversationThread:
    """Ordered run of events with no gap longer than the conversation window.

    Events are held in ascending timestamp order; ``add_event`` expects
    callers to append in that order.
    """

    id: str
    events: list[InteractionEvent] = field(default_factory=list)
    participants: list[str] = field(default_factory=list)

    def add_event(self, event: InteractionEvent) -> None:
        """Append an event and record its counterpart as a participant."""
        if self.events and event.timestamp < self.events[-1].timestamp:
            raise ValueError(
                f"Event {event.id} is earlier than the last event in thread {self.id}"
            )
        if event.counterpart not in self.participants:
            self.participants.append(event.counterpart)
        self.events.append(event)

    @property
    def started_at(self) -> datetime | None:
        """Timestamp of the first event."""
        return self.events[0].timestamp if self.events else None

    @property
    def last_activity(self) -> datetime | None:
        """Timestamp of the last event."""
        return self.events[-1].timestamp if self.events else None

    @property
    def duration_seconds(self) -> float:
        """Seconds between first and last event."""
        if not self.events:
            return 0.0
        return (self.events[-1].timestamp - self.events[0].timestamp).total_seconds()

    def __len__(self) -> int:
        return len(self.events)
