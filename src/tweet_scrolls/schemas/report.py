"""Pydantic schemas for the JSON analysis report."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class UserProfileSummary(BaseModel):
    """Schema for one counterpart's relationship profile."""

    user_id: str
    total_interactions: int = Field(default=0, ge=0)
    first_interaction: datetime | None = None
    last_interaction: datetime | None = None
    interaction_counts: dict[str, int] = Field(default_factory=dict)

    model_config = ConfigDict(from_attributes=True)


class ConversationSummary(BaseModel):
    """Schema for a gap-grouped conversation thread."""

    id: str
    event_count: int = Field(ge=0)
    participants: list[str] = Field(default_factory=list)
    started_at: datetime | None = None
    last_activity: datetime | None = None
    duration_seconds: float = Field(default=0.0, ge=0)


class SchemaFieldSummary(BaseModel):
    """Schema for a field observed during schema discovery."""

    path: str
    kinds: list[str] = Field(default_factory=list)
    occurrence_count: int = Field(default=0, ge=0)
    sample_values: list[str] = Field(default_factory=list)
    problematic: bool = False


class ResponseTimeSummary(BaseModel):
    """Schema for response-time statistics, in seconds."""

    count: int = 0
    average: float = 0.0
    median: float = 0.0
    min: float = 0.0
    max: float = 0.0
    percentiles: dict[str, float] = Field(default_factory=dict)

    model_config = ConfigDict(from_attributes=True)


class AnalysisReport(BaseModel):
    """Complete output of one analysis run."""

    screen_name: str
    owner_id: str | None = None
    generated_at: datetime
    total_events: int = Field(default=0, ge=0)
    skipped_records: int = Field(default=0, ge=0)
    hourly_histogram: list[int] = Field(default_factory=list)
    daily_histogram: list[int] = Field(
        default_factory=list,
        description="Day-of-week buckets, index 0 is Sunday",
    )
    peak_hour: int | None = Field(default=None, ge=0, le=23)
    peak_day: int | None = Field(default=None, ge=0, le=6)
    top_relationships: list[UserProfileSummary] = Field(default_factory=list)
    conversations: list[ConversationSummary] = Field(default_factory=list)
    response_times: ResponseTimeSummary = Field(default_factory=ResponseTimeSummary)
    patterns: list[str] = Field(default_factory=list)
    schema_fields: dict[str, list[SchemaFieldSummary]] = Field(
        default_factory=dict,
        description="Discovered fields keyed by source file label",
    )
