"""Per-run analysis state threaded through the pipeline stages.

Each stage reads what earlier stages produced from the context and stores
its own output there. Nothing is shared between runs.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone

from tweet_scrolls.analysis.aggregator import RelationshipAggregator
from tweet_scrolls.analysis.patterns import TimelineAnalysis
from tweet_scrolls.analysis.schema_discovery import SchemaReport
from tweet_scrolls.models.interaction import ConversationThread, InteractionEvent
from tweet_scrolls.schemas.direct_message import DmConversation
from tweet_scrolls.schemas.report import (
    AnalysisReport,
    ConversationSummary,
    ResponseTimeSummary,
    SchemaFieldSummary,
    UserProfileSummary,
)
from tweet_scrolls.schemas.tweet import TweetRecord

TWEETS_SOURCE = "tweets"
DMS_SOURCE = "direct_messages"


@dataclass
class AnalysisContext:
    """Mutable state for one analysis run.

    Attributes:
        raw_text: Archive file content keyed by source label.
        schema_reports: Schema discovery results keyed by source label.
        tweets: Decoded tweets.
        dm_conversations: Decoded DM conversations.
        owner_id: Owner account id, configured or inferred.
        tweet_events: Events extracted from tweets.
        dm_events: Events extracted from direct messages.
        skipped: Records skipped per source label.
        timeline: Events, most recent first.
        threads: Gap-grouped conversation threads over the whole timeline.
        threads_by_counterpart: Threads per counterpart.
        aggregator: Merged relationship aggregator.
        analysis: Timeline pattern analysis.
    """

    raw_text: dict[str, str] = field(default_factory=dict)
    schema_reports: dict[str, SchemaReport] = field(default_factory=dict)
    tweets: list[TweetRecord] = field(default_factory=list)
    dm_conversations: list[DmConversation] = field(default_factory=list)
    owner_id: str | None = None
    tweet_events: list[InteractionEvent] = field(default_factory=list)
    dm_events: list[InteractionEvent] = field(default_factory=list)
    skipped: dict[str, int] = field(default_factory=dict)
    timeline: list[InteractionEvent] = field(default_factory=list)
    threads: list[ConversationThread] = field(default_factory=list)
    threads_by_counterpart: dict[str, list[ConversationThread]] = field(default_factory=dict)
    aggregator: RelationshipAggregator | None = None
    analysis: TimelineAnalysis | None = None

    def flexible_paths(self, source: str) -> list[str]:
        """Paths needing flexible decoding for ``source``; empty if undiscovered."""
        report = self.schema_reports.get(source)
        return report.flexible_paths() if report else []

    @property
    def total_skipped(self) -> int:
        """Records skipped across all sources."""
        return sum(self.skipped.values())

    def to_report(self, screen_name: str, top_n: int = 10) -> AnalysisReport:
        """Build the JSON-serializable report for this run."""
        aggregator = self.aggregator or RelationshipAggregator()
        analysis = self.analysis or TimelineAnalysis()

        schema_fields = {
            source: [
                SchemaFieldSummary(
                    path=info.path,
                    kinds=sorted(info.kinds),
                    occurrence_count=info.occurrence_count,
                    sample_values=info.sample_values,
                    problematic=report.is_problematic(info.path),
                )
                for info in sorted(report.fields.values(), key=lambda i: i.path)
            ]
            for source, report in self.schema_reports.items()
        }

        return AnalysisReport(
            screen_name=screen_name,
            owner_id=self.owner_id,
            generated_at=datetime.now(timezone.utc),
            total_events=len(self.timeline),
            skipped_records=self.total_skipped,
            hourly_histogram=list(aggregator.hourly_histogram),
            daily_histogram=list(aggregator.daily_histogram),
            peak_hour=aggregator.peak_hour(),
            peak_day=aggregator.peak_day(),
            top_relationships=[
                UserProfileSummary.model_validate(profile)
                for profile in aggregator.top_relationships(top_n)
            ],
            conversations=[
                ConversationSummary(
                    id=thread.id,
                    event_count=len(thread),
                    participants=list(thread.participants),
                    started_at=thread.started_at,
                    last_activity=thread.last_activity,
                    duration_seconds=thread.duration_seconds,
                )
                for thread in self.threads
            ],
            response_times=ResponseTimeSummary.model_validate(analysis.response_times),
            patterns=[pattern.kind.value for pattern in analysis.patterns],
            schema_fields=schema_fields,
        )
