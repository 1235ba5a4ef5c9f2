"""Relationship analysis engine."""

from tweet_scrolls.analysis.aggregator import (
    WEEKDAY_NAMES,
    RelationshipAggregator,
    aggregate,
    peak_day,
    peak_hour,
    top_relationships,
)
from tweet_scrolls.analysis.classifier import classify, classify_dm, classify_tweet
from tweet_scrolls.analysis.conversations import (
    group_conversations_by_counterpart,
    group_into_conversations,
)
from tweet_scrolls.analysis.events import (
    events_from_dm_conversations,
    events_from_tweets,
    infer_owner_id,
)
from tweet_scrolls.analysis.patterns import (
    CommunicationFrequency,
    PatternKind,
    TimelineAnalysis,
    TimelineDensity,
    TimelinePattern,
    analyze_timeline,
    communication_frequency,
)
from tweet_scrolls.analysis.response_times import (
    ResponseTimeStats,
    response_times,
    response_times_seconds,
    summarize_response_times,
)
from tweet_scrolls.analysis.schema_discovery import (
    SchemaDiscovery,
    SchemaFieldInfo,
    SchemaReport,
    discover_schema,
)
from tweet_scrolls.analysis.timeline import build_timeline, merge_timelines, sort_ascending

__all__ = [
    "WEEKDAY_NAMES",
    "CommunicationFrequency",
    "PatternKind",
    "RelationshipAggregator",
    "ResponseTimeStats",
    "SchemaDiscovery",
    "SchemaFieldInfo",
    "SchemaReport",
    "TimelineAnalysis",
    "TimelineDensity",
    "TimelinePattern",
    "aggregate",
    "analyze_timeline",
    "build_timeline",
    "classify",
    "classify_dm",
    "classify_tweet",
    "communication_frequency",
    "discover_schema",
    "events_from_dm_conversations",
    "events_from_tweets",
    "group_conversations_by_counterpart",
    "group_into_conversations",
    "infer_owner_id",
    "merge_timelines",
    "peak_day",
    "peak_hour",
    "response_times",
    "response_times_seconds",
    "sort_ascending",
    "summarize_response_times",
    "top_relationships",
]
