"""Stage 4: Merge tweet and DM events into one most-recent-first timeline."""

from __future__ import annotations

import time

from tweet_scrolls.analysis.timeline import merge_timelines
from tweet_scrolls.core.config import Config
from tweet_scrolls.pipeline.context import AnalysisContext
from tweet_scrolls.pipeline.stages.base import StageResult


def run(config: Config, context: AnalysisContext) -> StageResult:
    """Run Stage 4: Build the event timeline.

    Args:
        config: Application configuration.
        context: Run context with tweet and DM events; receives the timeline.

    Returns:
        StageResult with the timeline length.
    """
    start_time = time.time()

    context.timeline = merge_timelines(context.tweet_events, context.dm_events)
    count = len(context.timeline)

    metadata: dict[str, str] = {}
    if context.timeline:
        metadata["newest"] = context.timeline[0].timestamp.isoformat()
        metadata["oldest"] = context.timeline[-1].timestamp.isoformat()

    return StageResult(
        success=True,
        records_processed=count,
        duration_seconds=time.time() - start_time,
        message=f"Built timeline of {count} events",
        metadata=metadata,
    )
