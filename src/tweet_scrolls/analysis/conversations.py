"""Split an event stream into conversation threads by inactivity gaps.

Thread boundaries depend only on the gap between consecutive events, never
on conversation ids in the source data, so noisy or inconsistent thread
metadata cannot split or merge conversations. A single pass over the
ascending events runs a two-state machine:

- ``NO_ACTIVE_THREAD`` + event: open a thread, move to ``IN_THREAD``
- ``IN_THREAD`` + event within the window: append
- ``IN_THREAD`` + event beyond the window: emit the thread, open a new one
- end of input in ``IN_THREAD``: emit the thread
"""

from __future__ import annotations

from collections.abc import Iterable
from datetime import timedelta
from enum import Enum

from tweet_scrolls.analysis.timeline import sort_ascending
from tweet_scrolls.models.interaction import ConversationThread, InteractionEvent


class GrouperState(str, Enum):
    """States of the conversation grouper."""

    NO_ACTIVE_THREAD = "no_active_thread"
    IN_THREAD = "in_thread"


def group_into_conversations(
    events: Iterable[InteractionEvent],
    window_seconds: float,
    id_prefix: str = "",
) -> list[ConversationThread]:
    """Partition events into threads separated by gaps over ``window_seconds``.

    A gap exactly equal to the window keeps events in the same thread.
    Every input event lands in exactly one thread; threads and their events
    are in ascending time order. Thread ids are ``<id_prefix><n>`` numbered
    from zero.

    Args:
        events: Events in any order.
        window_seconds: Maximum inactivity gap inside a thread.
        id_prefix: Prefix for generated thread ids.

    Returns:
        Threads in chronological order; empty for empty input.

    Raises:
        ValueError: If ``window_seconds`` is negative.
    """
    if window_seconds < 0:
        raise ValueError(f"window_seconds must be non-negative, got {window_seconds}")

    window = timedelta(seconds=window_seconds)
    threads: list[ConversationThread] = []
    state = GrouperState.NO_ACTIVE_THREAD
    active: ConversationThread | None = None

    for event in sort_ascending(events):
        if state is GrouperState.NO_ACTIVE_THREAD or active is None:
            active = ConversationThread(id=f"{id_prefix}{len(threads)}")
            active.add_event(event)
            state = GrouperState.IN_THREAD
            continue

        gap = event.timestamp - active.events[-1].timestamp
        if gap <= window:
            active.add_event(event)
        else:
            threads.append(active)
            active = ConversationThread(id=f"{id_prefix}{len(threads)}")
            active.add_event(event)

    if state is GrouperState.IN_THREAD and active is not None:
        threads.append(active)

    return threads


def group_conversations_by_counterpart(
    events: Iterable[InteractionEvent],
    window_seconds: float,
) -> dict[str, list[ConversationThread]]:
    """Group each counterpart's events into their own conversation threads.

    Thread ids are ``<counterpart>:<n>``. Counterparts are returned in
    ascending order.
    """
    by_counterpart: dict[str, list[InteractionEvent]] = {}
    for event in events:
        by_counterpart.setdefault(event.counterpart, []).append(event)

    return {
        counterpart: group_into_conversations(
            by_counterpart[counterpart], window_seconds, id_prefix=f"{counterpart}:"
        )
        for counterpart in sorted(by_counterpart)
    }
