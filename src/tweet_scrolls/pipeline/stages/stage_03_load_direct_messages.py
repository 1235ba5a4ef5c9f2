"""Stage 3: Decode direct-message conversations and extract events.

The owner's account id comes from configuration; without one it is
inferred from the conversation ids, which all contain the owner.
"""

from __future__ import annotations

import time

import structlog

from tweet_scrolls.analysis.events import events_from_dm_conversations, infer_owner_id
from tweet_scrolls.core.config import Config
from tweet_scrolls.parsers.archive import parse_dm_conversations, read_archive_file
from tweet_scrolls.pipeline.context import DMS_SOURCE, AnalysisContext
from tweet_scrolls.pipeline.stages.base import StageResult

logger = structlog.get_logger(__name__)


def run(config: Config, context: AnalysisContext, *, redact: bool = False) -> StageResult:
    """Run Stage 3: Load direct messages into interaction events.

    Args:
        config: Application configuration with dms_path and optional owner_id.
        context: Run context; receives conversations, owner id and DM events.
        redact: Drop message text from events.

    Returns:
        StageResult with the number of events extracted. Fails when messages
        exist but no owner id is configured or inferable.
    """
    start_time = time.time()

    if config.dms_path is None:
        return StageResult(
            success=True,
            records_processed=0,
            duration_seconds=time.time() - start_time,
            message="No direct-messages archive configured",
        )

    raw_text = context.raw_text.get(DMS_SOURCE)
    if raw_text is None:
        raw_text = read_archive_file(config.dms_path)
        context.raw_text[DMS_SOURCE] = raw_text

    conversations, invalid = parse_dm_conversations(raw_text, context.flexible_paths(DMS_SOURCE))
    context.dm_conversations = conversations

    owner_id = config.owner_id
    if owner_id is None:
        owner_id = infer_owner_id(conversations)
        if owner_id is not None:
            logger.info("owner_id_inferred", owner_id=owner_id)
    context.owner_id = owner_id

    if owner_id is None:
        if any(conversation.messages for conversation in conversations):
            return StageResult.failed(
                "OWNER_ID not configured and could not be inferred",
                duration_seconds=time.time() - start_time,
            )
        owner_id = ""

    events, unusable = events_from_dm_conversations(conversations, owner_id, redact=redact)
    context.dm_events = events
    context.skipped[DMS_SOURCE] = invalid + unusable
    logger.info(
        "direct_messages_loaded",
        conversations=len(conversations),
        events=len(events),
        skipped=invalid + unusable,
    )

    return StageResult(
        success=True,
        records_processed=len(events),
        duration_seconds=time.time() - start_time,
        message=f"Loaded {len(conversations)} conversations into {len(events)} events",
        skipped=invalid + unusable,
        metadata={
            "conversations": len(conversations),
            "events": len(events),
            "invalid_records": invalid,
            "unusable_records": unusable,
            "owner_id": owner_id,
        },
    )
