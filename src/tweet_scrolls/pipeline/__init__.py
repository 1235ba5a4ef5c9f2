"""Pipeline module for archive relationship analysis.

This module provides the analysis pipeline with 7 stages:
1. Discover archive schema
2. Load tweets
3. Load direct messages
4. Build event timeline
5. Group conversations
6. Aggregate relationship profiles
7. Analyze activity patterns
"""

from __future__ import annotations

from tweet_scrolls.pipeline.context import AnalysisContext
from tweet_scrolls.pipeline.orchestrator import (
    PipelineOptions,
    PipelineOrchestrator,
    PipelineResult,
)
from tweet_scrolls.pipeline.stages.base import StageResult
from tweet_scrolls.pipeline.status import (
    PipelineStatus,
    format_status,
    get_status,
)

__all__ = [
    "AnalysisContext",
    "PipelineOptions",
    "PipelineOrchestrator",
    "PipelineResult",
    "PipelineStatus",
    "StageResult",
    "format_status",
    "get_status",
]
