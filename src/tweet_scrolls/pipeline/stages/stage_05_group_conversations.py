"""Stage 5: Group the timeline into conversation threads.

Threads are split wherever two consecutive events are further apart than
the configured conversation window, both across the whole timeline and
separately for each counterpart.
"""

from __future__ import annotations

import time

from tweet_scrolls.analysis.conversations import (
    group_conversations_by_counterpart,
    group_into_conversations,
)
from tweet_scrolls.core.config import Config
from tweet_scrolls.pipeline.context import AnalysisContext
from tweet_scrolls.pipeline.stages.base import StageResult


def run(config: Config, context: AnalysisContext) -> StageResult:
    """Run Stage 5: Conversation grouping.

    Args:
        config: Application configuration with conversation_window_seconds.
        context: Run context with the timeline; receives threads.

    Returns:
        StageResult with the number of threads.
    """
    start_time = time.time()
    window = config.conversation_window_seconds

    context.threads = group_into_conversations(context.timeline, window)
    context.threads_by_counterpart = group_conversations_by_counterpart(context.timeline, window)

    count = len(context.threads)
    multi_event = sum(1 for thread in context.threads if len(thread) > 1)

    return StageResult(
        success=True,
        records_processed=count,
        duration_seconds=time.time() - start_time,
        message=f"Grouped {len(context.timeline)} events into {count} conversations",
        metadata={
            "threads": count,
            "multi_event_threads": multi_event,
            "counterparts": len(context.threads_by_counterpart),
            "window_seconds": window,
        },
    )
