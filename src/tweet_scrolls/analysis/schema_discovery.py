"""Sampling-based schema discovery for heterogeneous archive exports.

Archive exports change shape between accounts and export dates: a field
that is a string in one record can be an object in the next, or be absent
entirely. Discovery walks the first ``sample_limit`` records, records every
dotted field path with the set of value kinds seen, and reports the paths
that need tolerant decoding. It never fails on a field; anomalies are data.

Array elements are collapsed to a single ``[]`` path segment
(``dmConversation.messages[].messageCreate.text``) and only the first
``MAX_ARRAY_ITEMS`` elements of each array are visited, which keeps the
report size and the work per record bounded.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Any

import structlog

from tweet_scrolls.core.types import ValueKind
from tweet_scrolls.parsers.archive import iter_json_array

logger = structlog.get_logger(__name__)

MAX_ARRAY_ITEMS = 5
MAX_SAMPLE_VALUES = 3
MAX_SAMPLE_LENGTH = 50

SCALAR_KINDS = frozenset({"string", "number", "boolean"})
CONTAINER_KINDS = frozenset({"object", "array"})


def value_kind(value: Any) -> ValueKind:
    """Return the JSON kind of a decoded value."""
    if value is None:
        return "null"
    # bool is a subclass of int
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, dict):
        return "object"
    if isinstance(value, list):
        return "array"
    return "string"


def sample_value(value: Any) -> str:
    """Short display form of a value for the report."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, str):
        return value[:MAX_SAMPLE_LENGTH]
    if isinstance(value, list):
        return f"[{len(value)} items]"
    if isinstance(value, dict):
        return f"{{{len(value)} fields}}"
    return str(value)


@dataclass
class SchemaFieldInfo:
    """What was observed for one field path across the sampled records.

    Attributes:
        path: Dotted field path, array elements written ``[]``.
        kinds: Value kinds observed, including ``"missing"`` when some
            sampled records lack the path.
        occurrence_count: Number of times the path was visited.
        records_present: Number of sampled records containing the path.
        sample_values: Up to ``MAX_SAMPLE_VALUES`` example values.
    """

    path: str
    kinds: set[str] = field(default_factory=set)
    occurrence_count: int = 0
    records_present: int = 0
    sample_values: list[str] = field(default_factory=list)

    @property
    def present_kinds(self) -> set[str]:
        """Kinds observed where a value was actually present and non-null."""
        return self.kinds - {"missing", "null"}

    @property
    def is_optional(self) -> bool:
        """True when some sampled records lack this path."""
        return "missing" in self.kinds

    @property
    def is_mixed_type(self) -> bool:
        """True when more than one non-null kind was observed."""
        return len(self.present_kinds) > 1


@dataclass
class SchemaReport:
    """Result of a discovery run."""

    fields: dict[str, SchemaFieldInfo] = field(default_factory=dict)
    total_records_analyzed: int = 0
    non_object_records: int = 0
    scalar_paths: frozenset[str] | None = None

    def is_problematic(self, path: str) -> bool:
        """Whether a path needs flexible decoding downstream.

        A path is problematic when it was observed with more than one kind,
        or observed as an object where the consumer expects a scalar. With
        no declared scalar paths every object-valued path is flagged.
        """
        info = self.fields.get(path)
        if info is None:
            return False
        if len(info.kinds) > 1:
            return True
        if "object" in info.kinds:
            return self.scalar_paths is None or path in self.scalar_paths
        return False

    def problematic_fields(self) -> list[SchemaFieldInfo]:
        """Problematic fields sorted by path."""
        return [self.fields[path] for path in sorted(self.fields) if self.is_problematic(path)]

    def flexible_paths(self) -> list[str]:
        """Paths whose values must be coerced to strings before validation.

        With declared scalar paths, only those are candidates: a declared
        path qualifies when it was seen holding a container or more than one
        kind. Paths the consumer decodes as objects are never coerced, so a
        stray string in one record cannot flatten the objects of the rest.
        Without declared paths, any path seen both as a scalar and as some
        other kind qualifies.
        """
        paths = []
        for path in sorted(self.fields):
            present = self.fields[path].present_kinds
            if self.scalar_paths is not None:
                if path in self.scalar_paths and (
                    len(present) > 1 or bool(present & CONTAINER_KINDS)
                ):
                    paths.append(path)
            elif len(present) > 1 and bool(present & SCALAR_KINDS):
                paths.append(path)
        return paths

    def summary(self) -> dict[str, int]:
        """Counts for display."""
        optional = sum(1 for info in self.fields.values() if info.is_optional)
        mixed = sum(1 for info in self.fields.values() if info.is_mixed_type)
        return {
            "total_fields": len(self.fields),
            "required_fields": len(self.fields) - optional,
            "optional_fields": optional,
            "mixed_type_fields": mixed,
            "problematic_fields": len(self.problematic_fields()),
            "records_analyzed": self.total_records_analyzed,
        }


class SchemaDiscovery:
    """Accumulates field observations over sampled records."""

    def __init__(self, scalar_paths: Iterable[str] | None = None) -> None:
        self._fields: dict[str, SchemaFieldInfo] = {}
        self._scalar_paths = frozenset(scalar_paths) if scalar_paths is not None else None
        self.total_records_analyzed = 0
        self.non_object_records = 0

    def analyze_record(self, record: Any) -> None:
        """Fold one top-level record into the observations."""
        self.total_records_analyzed += 1
        if not isinstance(record, dict):
            self.non_object_records += 1
            return

        seen: set[str] = set()
        self._visit(record, "", seen)
        for path in seen:
            self._fields[path].records_present += 1

    def analyze_records(self, records: Iterable[Any], sample_limit: int | None = None) -> None:
        """Fold up to ``sample_limit`` records into the observations."""
        for index, record in enumerate(records):
            if sample_limit is not None and index >= sample_limit:
                break
            self.analyze_record(record)

    def analyze_sample(self, raw_text: str, sample_limit: int) -> SchemaReport:
        """Scan the first ``sample_limit`` records of an archive file.

        Raises:
            MalformedInputError: If the file wrapper or a sampled element
                cannot be decoded.
        """
        self.analyze_records(iter_json_array(raw_text, limit=sample_limit))
        report = self.report()
        logger.info(
            "schema_discovery_complete",
            records=report.total_records_analyzed,
            fields=len(report.fields),
            problematic=len(report.problematic_fields()),
        )
        return report

    def _observe(self, path: str, value: Any, seen: set[str]) -> None:
        info = self._fields.get(path)
        if info is None:
            info = SchemaFieldInfo(path=path)
            self._fields[path] = info
        info.kinds.add(value_kind(value))
        info.occurrence_count += 1
        sample = sample_value(value)
        if len(info.sample_values) < MAX_SAMPLE_VALUES and sample not in info.sample_values:
            info.sample_values.append(sample)
        seen.add(path)

    def _visit(self, value: Any, path: str, seen: set[str]) -> None:
        if isinstance(value, dict):
            for key, child in value.items():
                child_path = f"{path}.{key}" if path else str(key)
                self._observe(child_path, child, seen)
                self._visit(child, child_path, seen)
        elif isinstance(value, list):
            item_path = f"{path}[]"
            for item in value[:MAX_ARRAY_ITEMS]:
                self._observe(item_path, item, seen)
                self._visit(item, item_path, seen)

    def report(self) -> SchemaReport:
        """Snapshot the observations, marking paths absent from some records."""
        fields: dict[str, SchemaFieldInfo] = {}
        object_records = self.total_records_analyzed - self.non_object_records
        for path, info in self._fields.items():
            kinds = set(info.kinds)
            if info.records_present < object_records:
                kinds.add("missing")
            fields[path] = SchemaFieldInfo(
                path=path,
                kinds=kinds,
                occurrence_count=info.occurrence_count,
                records_present=info.records_present,
                sample_values=list(info.sample_values),
            )
        return SchemaReport(
            fields=fields,
            total_records_analyzed=self.total_records_analyzed,
            non_object_records=self.non_object_records,
            scalar_paths=self._scalar_paths,
        )


def discover_schema(
    raw_text: str,
    sample_limit: int,
    scalar_paths: Iterable[str] | None = None,
) -> SchemaReport:
    """Run schema discovery over the first ``sample_limit`` archive records.

    Args:
        raw_text: Full archive file content, wrapper included.
        sample_limit: Maximum number of top-level records to inspect.
        scalar_paths: Paths the consumer decodes as scalars; an object seen
            at one of these is reported as problematic.

    Returns:
        SchemaReport describing every field path seen.
    """
    return SchemaDiscovery(scalar_paths).analyze_sample(raw_text, sample_limit)
