"""Archive file readers.

Turns raw export text into validated records before any analysis runs.
"""

from tweet_scrolls.parsers.archive import (
    apply_flexible_decoding,
    extract_json_array,
    iter_json_array,
    load_records,
    parse_dm_conversations,
    parse_iso_timestamp,
    parse_tweet_timestamp,
    parse_tweets,
    read_archive_file,
    write_artifact,
)

__all__ = [
    "apply_flexible_decoding",
    "extract_json_array",
    "iter_json_array",
    "load_records",
    "parse_dm_conversations",
    "parse_iso_timestamp",
    "parse_tweet_timestamp",
    "parse_tweets",
    "read_archive_file",
    "write_artifact",
]
