"""Tests for tweet_scrolls.analysis.schema_discovery."""

from __future__ import annotations

import json

from tweet_scrolls.analysis.schema_discovery import (
    MAX_ARRAY_ITEMS,
    MAX_SAMPLE_LENGTH,
    MAX_SAMPLE_VALUES,
    SchemaDiscovery,
    discover_schema,
    sample_value,
    value_kind,
)


def wrap(records: list[object]) -> str:
    """Render records as an archive file."""
    return "window.YTD.tweets.part0 = " + json.dumps(records)


class TestValueKind:
    """Tests for value_kind function."""

    def test_kinds(self) -> None:
        """Test every JSON kind."""
        assert value_kind(None) == "null"
        assert value_kind(True) == "boolean"
        assert value_kind(3) == "number"
        assert value_kind(1.5) == "number"
        assert value_kind("x") == "string"
        assert value_kind({}) == "object"
        assert value_kind([]) == "array"


class TestSampleValue:
    """Tests for sample_value function."""

    def test_truncates_strings(self) -> None:
        """Test long strings are cut to the sample length."""
        assert len(sample_value("x" * 200)) == MAX_SAMPLE_LENGTH

    def test_containers(self) -> None:
        """Test containers are summarized."""
        assert sample_value([1, 2]) == "[2 items]"
        assert sample_value({"a": 1}) == "{1 fields}"


class TestSchemaDiscovery:
    """Tests for SchemaDiscovery class."""

    def test_mixed_string_object_field_is_problematic(self) -> None:
        """Test a field seen as string and object is flagged."""
        report = discover_schema(
            wrap([{"text": "hello"}, {"text": {"body": "hi"}}]),
            sample_limit=1000,
        )

        info = report.fields["text"]
        assert info.kinds == {"string", "object"}
        assert info.is_mixed_type is True
        assert report.is_problematic("text") is True
        assert "text" in report.flexible_paths()

    def test_consistent_field_not_problematic(self) -> None:
        """Test a field with one kind in every record is clean."""
        report = discover_schema(wrap([{"id": "1"}, {"id": "2"}]), sample_limit=1000)

        assert report.fields["id"].kinds == {"string"}
        assert report.is_problematic("id") is False
        assert report.problematic_fields() == []

    def test_optional_field(self) -> None:
        """Test a field absent from some records gains the missing kind."""
        report = discover_schema(wrap([{"id": "1", "note": "x"}, {"id": "2"}]), 1000)

        note = report.fields["note"]
        assert note.is_optional is True
        assert note.kinds == {"string", "missing"}
        assert note.records_present == 1
        assert report.is_problematic("note") is True
        assert "note" not in report.flexible_paths()

    def test_nested_paths(self) -> None:
        """Test nested objects and arrays produce dotted paths."""
        report = discover_schema(
            wrap([{"tweet": {"entities": {"user_mentions": [{"screen_name": "bob"}]}}}]),
            1000,
        )

        assert "tweet.entities.user_mentions" in report.fields
        assert report.fields["tweet.entities.user_mentions"].kinds == {"array"}
        assert "tweet.entities.user_mentions[].screen_name" in report.fields

    def test_object_at_declared_scalar_path(self) -> None:
        """Test an object where a scalar is expected is flagged."""
        report = discover_schema(
            wrap([{"tweet": {"full_text": {"text": "hi"}}}]),
            1000,
            scalar_paths={"tweet.full_text"},
        )

        assert report.is_problematic("tweet.full_text") is True
        assert report.is_problematic("tweet") is False
        assert report.flexible_paths() == ["tweet.full_text"]

    def test_sample_limit_bounds_work(self) -> None:
        """Test only the first records are analyzed."""
        records = [{"id": str(i)} for i in range(20)] + [{"id": {"late": True}}]
        report = discover_schema(wrap(records), sample_limit=20)

        assert report.total_records_analyzed == 20
        assert report.fields["id"].kinds == {"string"}

    def test_array_items_capped(self) -> None:
        """Test only the first array items are visited."""
        report = discover_schema(wrap([{"values": list(range(20))}]), 1000)
        assert report.fields["values[]"].occurrence_count == MAX_ARRAY_ITEMS

    def test_sample_values_capped(self) -> None:
        """Test at most a few distinct samples are kept."""
        report = discover_schema(wrap([{"id": str(i)} for i in range(10)]), 1000)
        assert report.fields["id"].sample_values == ["0", "1", "2"][:MAX_SAMPLE_VALUES]

    def test_non_object_records_counted(self) -> None:
        """Test top-level non-objects are counted, not inspected."""
        discovery = SchemaDiscovery()
        discovery.analyze_records([{"id": "1"}, "junk", 5])
        report = discovery.report()

        assert report.total_records_analyzed == 3
        assert report.non_object_records == 2
        assert report.fields["id"].is_optional is False

    def test_empty_archive(self) -> None:
        """Test an empty array yields an empty report."""
        report = discover_schema(wrap([]), 1000)
        assert report.fields == {}
        assert report.summary()["records_analyzed"] == 0

    def test_summary(self) -> None:
        """Test summary counts."""
        report = discover_schema(wrap([{"a": 1, "b": "x"}, {"a": "1"}]), 1000)
        summary = report.summary()

        assert summary["total_fields"] == 2
        assert summary["optional_fields"] == 1
        assert summary["mixed_type_fields"] == 1
        assert summary["problematic_fields"] == 2
