"""Stage 1: Discover the field schema of each archive file.

Samples the first records of the tweets and direct-message exports and
records, per field path, the value kinds seen. Paths seen with more than
one kind drive flexible decoding in the load stages.
"""

from __future__ import annotations

import time

import structlog

from tweet_scrolls.analysis.schema_discovery import discover_schema
from tweet_scrolls.core.config import Config
from tweet_scrolls.parsers.archive import read_archive_file
from tweet_scrolls.pipeline.context import DMS_SOURCE, TWEETS_SOURCE, AnalysisContext
from tweet_scrolls.pipeline.stages.base import StageResult
from tweet_scrolls.schemas.direct_message import DM_SCALAR_PATHS
from tweet_scrolls.schemas.tweet import TWEET_SCALAR_PATHS

logger = structlog.get_logger(__name__)


def run(config: Config, context: AnalysisContext) -> StageResult:
    """Run Stage 1: Schema discovery over the configured archive files.

    Args:
        config: Application configuration with archive paths.
        context: Run context; receives raw file text and schema reports.

    Returns:
        StageResult with the number of sampled records.

    Raises:
        ArchiveIOError: If an archive file cannot be read.
        MalformedInputError: If a sampled record cannot be decoded.
    """
    start_time = time.time()
    sources = []
    if config.tweets_path is not None:
        sources.append((TWEETS_SOURCE, config.tweets_path, TWEET_SCALAR_PATHS))
    if config.dms_path is not None:
        sources.append((DMS_SOURCE, config.dms_path, DM_SCALAR_PATHS))

    sampled = 0
    metadata: dict[str, int] = {}
    for source, path, scalar_paths in sources:
        logger.info("schema_discovery_started", source=source, path=str(path))
        raw_text = read_archive_file(path)
        context.raw_text[source] = raw_text
        report = discover_schema(raw_text, config.schema_sample_limit, scalar_paths)
        context.schema_reports[source] = report

        sampled += report.total_records_analyzed
        metadata[f"{source}_fields"] = len(report.fields)
        metadata[f"{source}_problematic"] = len(report.problematic_fields())

    problematic = sum(v for k, v in metadata.items() if k.endswith("_problematic"))
    return StageResult(
        success=True,
        records_processed=sampled,
        duration_seconds=time.time() - start_time,
        message=f"Sampled {sampled} records, {problematic} problematic fields",
        metadata=metadata,
    )
