"""Pipeline status utilities.

Summarizes what a run has produced so far from its analysis context.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from tweet_scrolls.analysis.aggregator import WEEKDAY_NAMES
from tweet_scrolls.pipeline.context import AnalysisContext


@dataclass
class PipelineStatus:
    """Status of an analysis run."""

    tweets: int = 0
    dm_conversations: int = 0
    tweet_events: int = 0
    dm_events: int = 0
    skipped_records: int = 0
    problematic_fields: int = 0
    timeline_events: int = 0
    threads: int = 0
    profiles: int = 0
    peak_hour: int | None = None
    peak_day: int | None = None
    owner_id: str | None = None

    @property
    def total_events(self) -> int:
        """Events extracted from both sources."""
        return self.tweet_events + self.dm_events

    @property
    def peak_day_name(self) -> str | None:
        """Weekday name of the peak day."""
        return WEEKDAY_NAMES[self.peak_day] if self.peak_day is not None else None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "tweets": self.tweets,
            "dm_conversations": self.dm_conversations,
            "tweet_events": self.tweet_events,
            "dm_events": self.dm_events,
            "total_events": self.total_events,
            "skipped_records": self.skipped_records,
            "problematic_fields": self.problematic_fields,
            "timeline_events": self.timeline_events,
            "threads": self.threads,
            "profiles": self.profiles,
            "peak_hour": self.peak_hour,
            "peak_day": self.peak_day,
            "owner_id": self.owner_id,
        }


def get_status(context: AnalysisContext) -> PipelineStatus:
    """Get the current status of a run.

    Args:
        context: Analysis context of the run.

    Returns:
        PipelineStatus with current counts.
    """
    status = PipelineStatus(
        tweets=len(context.tweets),
        dm_conversations=len(context.dm_conversations),
        tweet_events=len(context.tweet_events),
        dm_events=len(context.dm_events),
        skipped_records=context.total_skipped,
        problematic_fields=sum(
            len(report.problematic_fields()) for report in context.schema_reports.values()
        ),
        timeline_events=len(context.timeline),
        threads=len(context.threads),
        owner_id=context.owner_id,
    )

    if context.aggregator is not None:
        status.profiles = len(context.aggregator.profiles)
        status.peak_hour = context.aggregator.peak_hour()
        status.peak_day = context.aggregator.peak_day()

    return status


def format_status(status: PipelineStatus) -> str:
    """Format pipeline status for display.

    Args:
        status: Pipeline status.

    Returns:
        Formatted status string.
    """
    peak_hour = f"{status.peak_hour:02d}:00" if status.peak_hour is not None else "-"
    lines = [
        "=" * 60,
        "ANALYSIS STATUS",
        "=" * 60,
        f"Tweets decoded:         {status.tweets:,}",
        f"DM conversations:       {status.dm_conversations:,}",
        f"Events extracted:       {status.total_events:,}",
        f"  - From tweets:        {status.tweet_events:,}",
        f"  - From DMs:           {status.dm_events:,}",
        f"Records skipped:        {status.skipped_records:,}",
        f"Problematic fields:     {status.problematic_fields:,}",
        f"Conversations:          {status.threads:,}",
        f"Relationship profiles:  {status.profiles:,}",
        f"Peak hour (UTC):        {peak_hour}",
        f"Peak day:               {status.peak_day_name or '-'}",
    ]

    if status.owner_id:
        lines.append(f"Owner account id:       {status.owner_id}")

    lines.append("=" * 60)
    return "\n".join(lines)
