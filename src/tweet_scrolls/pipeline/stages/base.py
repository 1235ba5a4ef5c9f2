"""Result type shared by the analysis stages."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass
class StageResult:
    """Outcome of one stage over the analysis context.

    Attributes:
        success: Whether the stage finished; a failure halts the run.
        records_processed: Records, events, threads or profiles produced.
        duration_seconds: Wall-clock time of the stage.
        message: One-line summary for progress output.
        skipped: Archive records dropped as unusable by this stage.
        metadata: Stage-specific counts for status and debugging.
    """

    success: bool
    records_processed: int
    duration_seconds: float
    message: str
    skipped: int = 0
    metadata: dict[str, Any] | None = None

    @classmethod
    def failed(cls, message: str, duration_seconds: float = 0.0) -> StageResult:
        """Build a failed result with nothing processed."""
        return cls(
            success=False,
            records_processed=0,
            duration_seconds=duration_seconds,
            message=message,
        )

    def __str__(self) -> str:
        outcome = "SUCCESS" if self.success else "FAILED"
        detail = f"{self.records_processed:,} records"
        if self.skipped:
            detail += f", {self.skipped:,} skipped"
        return f"{outcome}: {self.message} ({detail} in {self.duration_seconds:.1f}s)"
