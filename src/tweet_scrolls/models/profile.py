"""Per-counterpart relationship profile."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime


@dataclass
class UserProfile:
    """Aggregated interaction statistics for one counterpart.

    ``total_interactions`` always equals the sum of ``interaction_counts``.
    """

    user_id: str
    total_interactions: int = 0
    first_interaction: datetime | None = None
    last_interaction: datetime | None = None
    interaction_counts: dict[str, int] = field(default_factory=dict)
    metadata: dict[str, str] = field(default_factory=dict)

    def add_interaction(self, interaction_type: str, timestamp: datetime) -> None:
        """Fold one interaction into the profile."""
        self.total_interactions += 1
        self.interaction_counts[interaction_type] = (
            self.interaction_counts.get(interaction_type, 0) + 1
        )

        if self.first_interaction is None or timestamp < self.first_interaction:
            self.first_interaction = timestamp
        if self.last_interaction is None or timestamp > self.last_interaction:
            self.last_interaction = timestamp

    def merge(self, other: UserProfile) -> UserProfile:
        """Combine two profiles for the same counterpart into a new one.

        Raises:
            ValueError: If the profiles belong to different counterparts.
        """
        if other.user_id != self.user_id:
            raise ValueError(f"Cannot merge profile {other.user_id} into {self.user_id}")

        counts = dict(self.interaction_counts)
        for key, value in other.interaction_counts.items():
            counts[key] = counts.get(key, 0) + value

        firsts = [t for t in (self.first_interaction, other.first_interaction) if t]
        lasts = [t for t in (self.last_interaction, other.last_interaction) if t]

        return UserProfile(
            user_id=self.user_id,
            total_interactions=self.total_interactions + other.total_interactions,
            first_interaction=min(firsts) if firsts else None,
            last_interaction=max(lasts) if lasts else None,
            interaction_counts=counts,
            metadata={**self.metadata, **other.metadata},
        )

    @property
    def span_days(self) -> float:
        """Days between first and last interaction."""
        if self.first_interaction is None or self.last_interaction is None:
            return 0.0
        return (self.last_interaction - self.first_interaction).total_seconds() / 86400
