"""Read Twitter archive export files into validated records.

Archive files are JavaScript assignments such as
``window.YTD.tweets.part0 = [ ... ]``. Everything between the first ``[``
and the last ``]`` is the JSON payload. This module is the only place that
touches raw text: core analysis receives fully materialized records.
"""

from __future__ import annotations

import json
from collections.abc import Iterable, Iterator
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

import structlog
from pydantic import ValidationError

from tweet_scrolls.core.errors import ArchiveIOError, MalformedInputError
from tweet_scrolls.schemas.direct_message import DmConversation, DmWrapper
from tweet_scrolls.schemas.flexible import coerce_to_string
from tweet_scrolls.schemas.tweet import TweetRecord, TweetWrapper

logger = structlog.get_logger(__name__)

TWEET_TIMESTAMP_FORMAT = "%a %b %d %H:%M:%S %z %Y"
_WHITESPACE = " \t\n\r"


def read_archive_file(path: Path | str) -> str:
    """Read an archive file as UTF-8 text.

    Raises:
        ArchiveIOError: If the file cannot be read.
        MalformedInputError: If the file is not valid UTF-8.
    """
    path = Path(path)
    try:
        return path.read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        raise MalformedInputError(f"Archive file is not UTF-8 text: {path}") from e
    except OSError as e:
        raise ArchiveIOError(path, f"Cannot read archive file ({e.strerror or e})") from e


def write_artifact(path: Path | str, content: str) -> Path:
    """Write a text artifact, creating parent directories.

    Raises:
        ArchiveIOError: If the location is not writable.
    """
    path = Path(path)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
    except OSError as e:
        raise ArchiveIOError(path, f"Cannot write output ({e.strerror or e})") from e
    return path


def _array_bounds(raw_text: str) -> tuple[int, int]:
    """Offsets of the first ``[`` and the last ``]`` of the payload."""
    start = raw_text.find("[")
    end = raw_text.rfind("]")
    if start == -1 or end == -1 or end < start:
        raise MalformedInputError("Invalid archive format: missing array brackets")
    return start, end


def extract_json_array(raw_text: str) -> str:
    """Strip the JavaScript assignment wrapper around the JSON array.

    Raises:
        MalformedInputError: If no ``[ ... ]`` pair can be located.
    """
    start, end = _array_bounds(raw_text)
    return raw_text[start : end + 1]


def _skip_whitespace(text: str, index: int) -> int:
    while index < len(text) and text[index] in _WHITESPACE:
        index += 1
    return index


def iter_json_array(raw_text: str, limit: int | None = None) -> Iterator[Any]:
    """Decode array elements one at a time.

    Elements are decoded in place from ``raw_text`` and only the first
    ``limit`` of them are touched, so sampling a large archive costs the
    same as sampling a small one.

    Raises:
        MalformedInputError: On a missing wrapper or an undecodable element.
    """
    start, end = _array_bounds(raw_text)
    decoder = json.JSONDecoder()
    index = _skip_whitespace(raw_text, start + 1)
    if raw_text[index] == "]":
        return

    count = 0
    while limit is None or count < limit:
        try:
            value, index = decoder.raw_decode(raw_text, index)
        except json.JSONDecodeError as e:
            raise MalformedInputError(f"Failed to parse JSON element {count}: {e.msg}") from e
        yield value
        count += 1

        index = _skip_whitespace(raw_text, index)
        if index > end:
            raise MalformedInputError("Unterminated JSON array")
        if raw_text[index] == ",":
            index = _skip_whitespace(raw_text, index + 1)
        elif index == end:
            return
        else:
            raise MalformedInputError(f"Unexpected character after JSON element {count - 1}")


def load_records(raw_text: str) -> list[Any]:
    """Decode the whole JSON array of an archive file.

    Raises:
        MalformedInputError: If the payload is not a JSON array.
    """
    try:
        data = json.loads(extract_json_array(raw_text))
    except json.JSONDecodeError as e:
        raise MalformedInputError(f"Failed to parse JSON: {e.msg} (line {e.lineno})") from e
    if not isinstance(data, list):
        raise MalformedInputError("Archive payload is not a JSON array")
    return data


def _path_segments(path: str) -> list[str]:
    """Split ``a.b[].c`` into ``["a", "b", "[]", "c"]``."""
    segments: list[str] = []
    for part in path.split("."):
        depth = 0
        while part.endswith("[]"):
            part = part[:-2]
            depth += 1
        if part:
            segments.append(part)
        segments.extend(["[]"] * depth)
    return segments


def _coerce_at(node: Any, segments: list[str]) -> int:
    """Coerce the values addressed by ``segments`` in place; return how many changed."""
    if not segments:
        return 0
    head, rest = segments[0], segments[1:]

    if head == "[]":
        if not isinstance(node, list):
            return 0
        if not rest:
            changed = 0
            for i, item in enumerate(node):
                if item is not None and not isinstance(item, str):
                    node[i] = coerce_to_string(item)
                    changed += 1
            return changed
        return sum(_coerce_at(item, rest) for item in node)

    if not isinstance(node, dict) or head not in node:
        return 0
    if not rest:
        value = node[head]
        if value is None or isinstance(value, str):
            return 0
        node[head] = coerce_to_string(value)
        return 1
    return _coerce_at(node[head], rest)


def apply_flexible_decoding(record: Any, paths: Iterable[str]) -> Any:
    """Coerce flexible fields of one record to their string representation.

    ``paths`` are dotted field paths as reported by schema discovery, with
    array elements written ``[]``. The record is modified in place and
    returned.
    """
    changed = 0
    for path in paths:
        changed += _coerce_at(record, _path_segments(path))
    if changed:
        logger.debug("flexible_fields_coerced", count=changed)
    return record


def parse_tweet_timestamp(text: str | None) -> datetime | None:
    """Parse a tweet ``created_at`` value (``Mon Jan 01 12:00:00 +0000 2023``)."""
    if not text:
        return None
    try:
        return datetime.strptime(text.strip(), TWEET_TIMESTAMP_FORMAT).astimezone(timezone.utc)
    except ValueError:
        return None


def parse_iso_timestamp(text: str | None) -> datetime | None:
    """Parse an ISO-8601 DM timestamp (``2023-01-01T10:00:00.000Z``).

    Naive values are taken to be UTC.
    """
    if not text:
        return None
    value = text.strip()
    if value.endswith(("Z", "z")):
        value = value[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(value)
    except ValueError:
        return None
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


def parse_tweets(
    raw_text: str, flexible_paths: Iterable[str] = ()
) -> tuple[list[TweetRecord], int]:
    """Decode a ``tweets.js`` export.

    Elements may be wrapped (``{"tweet": {...}}``) or bare tweet objects.
    Elements that fail validation are skipped.

    Args:
        raw_text: Full file content.
        flexible_paths: Field paths to coerce before validation.

    Returns:
        Tuple of (tweets, skipped_count).

    Raises:
        MalformedInputError: If the file payload cannot be decoded.
    """
    paths = list(flexible_paths)
    tweets: list[TweetRecord] = []
    skipped = 0

    for index, item in enumerate(load_records(raw_text)):
        if not isinstance(item, dict):
            skipped += 1
            logger.warning("tweet_record_skipped", index=index, reason="not an object")
            continue
        apply_flexible_decoding(item, paths)
        try:
            if "tweet" in item:
                tweets.append(TweetWrapper.model_validate(item).tweet)
            else:
                tweets.append(TweetRecord.model_validate(item))
        except ValidationError as e:
            skipped += 1
            logger.warning(
                "tweet_record_skipped",
                index=index,
                reason="validation",
                errors=e.error_count(),
            )

    logger.info("tweets_parsed", count=len(tweets), skipped=skipped)
    return tweets, skipped


def parse_dm_conversations(
    raw_text: str, flexible_paths: Iterable[str] = ()
) -> tuple[list[DmConversation], int]:
    """Decode a ``direct-messages.js`` export.

    Args:
        raw_text: Full file content.
        flexible_paths: Field paths to coerce before validation.

    Returns:
        Tuple of (conversations, skipped_count).

    Raises:
        MalformedInputError: If the file payload cannot be decoded.
    """
    paths = list(flexible_paths)
    conversations: list[DmConversation] = []
    skipped = 0

    for index, item in enumerate(load_records(raw_text)):
        if not isinstance(item, dict):
            skipped += 1
            logger.warning("dm_record_skipped", index=index, reason="not an object")
            continue
        apply_flexible_decoding(item, paths)
        try:
            if "dmConversation" in item:
                conversations.append(DmWrapper.model_validate(item).dm_conversation)
            else:
                conversations.append(DmConversation.model_validate(item))
        except ValidationError as e:
            skipped += 1
            logger.warning(
                "dm_record_skipped",
                index=index,
                reason="validation",
                errors=e.error_count(),
            )

    logger.info("dm_conversations_parsed", count=len(conversations), skipped=skipped)
    return conversations, skipped
