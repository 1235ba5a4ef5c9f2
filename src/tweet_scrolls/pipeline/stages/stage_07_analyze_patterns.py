"""Stage 7: Extract activity patterns and response times from the timeline."""

from __future__ import annotations

import time

from tweet_scrolls.analysis.patterns import analyze_timeline
from tweet_scrolls.core.config import Config
from tweet_scrolls.pipeline.context import AnalysisContext
from tweet_scrolls.pipeline.stages.base import StageResult


def run(config: Config, context: AnalysisContext) -> StageResult:
    """Run Stage 7: Timeline pattern analysis.

    Args:
        config: Application configuration with conversation_window_seconds.
        context: Run context with the timeline; receives the analysis.

    Returns:
        StageResult with the number of events analyzed.
    """
    start_time = time.time()

    analysis = analyze_timeline(context.timeline, config.conversation_window_seconds)
    context.analysis = analysis
    patterns = [pattern.kind.value for pattern in analysis.patterns]

    return StageResult(
        success=True,
        records_processed=analysis.total_interactions,
        duration_seconds=time.time() - start_time,
        message=(
            f"Detected {len(patterns)} patterns across "
            f"{analysis.unique_participants} participants"
        ),
        metadata={
            "patterns": patterns,
            "avg_per_day": analysis.density.avg_interactions_per_day,
            "median_response_seconds": analysis.response_times.median,
        },
    )
