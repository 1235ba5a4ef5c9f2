"""Pipeline orchestrator.

Runs the analysis stages in order over one AnalysisContext, skipping
stages whose archive source is not configured.
"""

from __future__ import annotations

import time
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

import structlog

from tweet_scrolls.core.config import Config
from tweet_scrolls.pipeline.context import AnalysisContext
from tweet_scrolls.pipeline.stages import (
    StageResult,
    stage_01_discover_schema,
    stage_02_load_tweets,
    stage_03_load_direct_messages,
    stage_04_build_timeline,
    stage_05_group_conversations,
    stage_06_aggregate_relationships,
    stage_07_analyze_patterns,
)
from tweet_scrolls.pipeline.status import PipelineStatus, get_status

logger = structlog.get_logger(__name__)


@dataclass
class PipelineOptions:
    """Run-wide switches forwarded to individual stages."""

    workers: int = 1
    include_mentions: bool = True
    redact: bool = False
    schema_only: bool = False
    top_n: int = 10


@dataclass
class PipelineResult:
    """Outcome of a full analysis run."""

    success: bool
    stages_completed: list[int] = field(default_factory=list)
    stages_skipped: list[int] = field(default_factory=list)
    stages_failed: list[int] = field(default_factory=list)
    duration_seconds: float = 0.0
    final_status: PipelineStatus | None = None
    error: str | None = None

    @property
    def message(self) -> str:
        """One-line summary of the run."""
        if self.error:
            return f"Pipeline failed: {self.error}"
        if self.stages_failed:
            return f"Pipeline failed at stage {self.stages_failed[0]}"
        completed = len(self.stages_completed)
        return f"Pipeline completed: {completed} stages in {self.duration_seconds:.1f}s"


StageRunner = Callable[[Config, AnalysisContext], StageResult]


@dataclass
class StageDefinition:
    """A stage, its runner and the archive sources it needs."""

    number: int
    name: str
    description: str
    runner: StageRunner
    requires_tweets: bool = False
    requires_dms: bool = False


class PipelineOrchestrator:
    """Runs analysis stages against a shared context."""

    def __init__(
        self,
        config: Config,
        options: PipelineOptions | None = None,
        context: AnalysisContext | None = None,
    ) -> None:
        """Initialize the orchestrator.

        Args:
            config: Application configuration.
            options: Pipeline options.
            context: Analysis context to fill; a fresh one by default.
        """
        self.config = config
        self.options = options or PipelineOptions()
        self.context = context or AnalysisContext()
        self._stages = self._build_stages()
        self._callbacks: list[Callable[[int, str, StageResult | None], None]] = []

    def _build_stages(self) -> list[StageDefinition]:
        """Stage table in execution order."""
        return [
            StageDefinition(
                number=1,
                name="discover_schema",
                description="Discover archive schema",
                runner=self._run_stage_01,
            ),
            StageDefinition(
                number=2,
                name="load_tweets",
                description="Load tweets",
                runner=self._run_stage_02,
                requires_tweets=True,
            ),
            StageDefinition(
                number=3,
                name="load_direct_messages",
                description="Load direct messages",
                runner=self._run_stage_03,
                requires_dms=True,
            ),
            StageDefinition(
                number=4,
                name="build_timeline",
                description="Build event timeline",
                runner=self._run_stage_04,
            ),
            StageDefinition(
                number=5,
                name="group_conversations",
                description="Group conversations",
                runner=self._run_stage_05,
            ),
            StageDefinition(
                number=6,
                name="aggregate_relationships",
                description="Aggregate relationship profiles",
                runner=self._run_stage_06,
            ),
            StageDefinition(
                number=7,
                name="analyze_patterns",
                description="Analyze activity patterns",
                runner=self._run_stage_07,
            ),
        ]

    @property
    def stage_count(self) -> int:
        """Number of defined stages."""
        return len(self._stages)

    def add_callback(self, callback: Callable[[int, str, StageResult | None], None]) -> None:
        """Add a callback for stage events.

        Args:
            callback: Function called with (stage_number, event, result).
                     event is 'start', 'complete', 'skip', or 'fail'.
        """
        self._callbacks.append(callback)

    def _notify(self, stage_num: int, event: str, result: StageResult | None) -> None:
        """Notify callbacks of a stage event."""
        for callback in self._callbacks:
            callback(stage_num, event, result)

    def _run_stage_01(self, config: Config, context: AnalysisContext) -> StageResult:
        """Run stage 1: Discover schema."""
        return stage_01_discover_schema.run(config, context)

    def _run_stage_02(self, config: Config, context: AnalysisContext) -> StageResult:
        """Run stage 2: Load tweets."""
        return stage_02_load_tweets.run(
            config,
            context,
            include_mentions=self.options.include_mentions,
            redact=self.options.redact,
        )

    def _run_stage_03(self, config: Config, context: AnalysisContext) -> StageResult:
        """Run stage 3: Load direct messages."""
        return stage_03_load_direct_messages.run(config, context, redact=self.options.redact)

    def _run_stage_04(self, config: Config, context: AnalysisContext) -> StageResult:
        """Run stage 4: Build timeline."""
        return stage_04_build_timeline.run(config, context)

    def _run_stage_05(self, config: Config, context: AnalysisContext) -> StageResult:
        """Run stage 5: Group conversations."""
        return stage_05_group_conversations.run(config, context)

    def _run_stage_06(self, config: Config, context: AnalysisContext) -> StageResult:
        """Run stage 6: Aggregate relationships."""
        return stage_06_aggregate_relationships.run(
            config, context, workers=self.options.workers
        )

    def _run_stage_07(self, config: Config, context: AnalysisContext) -> StageResult:
        """Run stage 7: Analyze patterns."""
        return stage_07_analyze_patterns.run(config, context)

    def validate(self) -> list[str]:
        """Check archive paths and options before a run.

        Returns:
            List of validation errors (empty if valid).
        """
        errors = [f"{name} not configured" for name in self.config.validate()]

        for label, path in (("Tweets", self.config.tweets_path), ("DMs", self.config.dms_path)):
            if path is not None and not path.exists():
                errors.append(f"{label} file not found: {path}")

        if self.options.workers < 1:
            errors.append(f"workers must be at least 1, got {self.options.workers}")

        return errors

    def _should_skip(self, stage: StageDefinition) -> bool:
        if self.options.schema_only and stage.number > 1:
            return True
        if stage.requires_tweets and not self.config.has_tweets():
            return True
        if stage.requires_dms and not self.config.has_dms():
            return True
        return False

    def run(self) -> PipelineResult:
        """Run every stage that applies, stopping at the first failure.

        Returns:
            PipelineResult with execution details.
        """
        start_time = time.time()
        result = PipelineResult(success=True)

        for stage in self._stages:
            if self._should_skip(stage):
                result.stages_skipped.append(stage.number)
                self._notify(stage.number, "skip", None)
                continue

            # Run the stage
            self._notify(stage.number, "start", None)
            logger.info("stage_started", stage=stage.number, name=stage.name)
            try:
                stage_result = stage.runner(self.config, self.context)
            except Exception as e:
                logger.exception("stage_error", stage=stage.number, name=stage.name)
                stage_result = StageResult.failed(str(e))

            if stage_result.success:
                result.stages_completed.append(stage.number)
                logger.info(
                    "stage_completed",
                    stage=stage.number,
                    name=stage.name,
                    records=stage_result.records_processed,
                )
                self._notify(stage.number, "complete", stage_result)
            else:
                result.success = False
                result.stages_failed.append(stage.number)
                result.error = f"Stage {stage.number} failed: {stage_result.message}"
                self._notify(stage.number, "fail", stage_result)
                break

        result.duration_seconds = time.time() - start_time
        result.final_status = get_status(self.context)

        return result

    def run_stage(self, stage_number: int) -> StageResult:
        """Run a single stage by number against the orchestrator's context.

        Args:
            stage_number: Stage number (1-7).

        Returns:
            StageResult from the stage.

        Raises:
            ValueError: If stage number is invalid.
        """
        for stage in self._stages:
            if stage.number == stage_number:
                return stage.runner(self.config, self.context)

        raise ValueError(f"Invalid stage number: {stage_number}")

    def get_stage_info(self) -> list[dict[str, Any]]:
        """Describe every stage for progress output.

        Returns:
            List of stage info dictionaries.
        """
        return [
            {
                "number": stage.number,
                "name": stage.name,
                "description": stage.description,
                "requires_tweets": stage.requires_tweets,
                "requires_dms": stage.requires_dms,
            }
            for stage in self._stages
        ]
