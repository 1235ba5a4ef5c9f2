"""Pipeline stages module.

Each stage is a module that exports a run() function returning StageResult.
"""

from __future__ import annotations

from tweet_scrolls.pipeline.stages import (
    stage_01_discover_schema,
    stage_02_load_tweets,
    stage_03_load_direct_messages,
    stage_04_build_timeline,
    stage_05_group_conversations,
    stage_06_aggregate_relationships,
    stage_07_analyze_patterns,
)
from tweet_scrolls.pipeline.stages.base import StageResult

__all__ = [
    "StageResult",
    "stage_01_discover_schema",
    "stage_02_load_tweets",
    "stage_03_load_direct_messages",
    "stage_04_build_timeline",
    "stage_05_group_conversations",
    "stage_06_aggregate_relationships",
    "stage_07_analyze_patterns",
]
