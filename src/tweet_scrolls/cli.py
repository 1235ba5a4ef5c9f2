"""CLI entry point for tweet-scrolls.

Usage:
    tweet-scrolls --tweets tweets.js --screen-name me     # Analyze tweets
    tweet-scrolls --tweets tweets.js --dms direct-messages.js
    tweet-scrolls --tweets tweets.js --schema-only        # Schema report only
    tweet-scrolls --help                                  # Show all options
"""

from __future__ import annotations

import argparse
import sys
from datetime import datetime, timezone
from pathlib import Path

from tweet_scrolls.analysis.aggregator import WEEKDAY_NAMES
from tweet_scrolls.core.config import Config
from tweet_scrolls.core.errors import ArchiveError
from tweet_scrolls.parsers.archive import write_artifact
from tweet_scrolls.pipeline import (
    AnalysisContext,
    PipelineOptions,
    PipelineOrchestrator,
    StageResult,
    format_status,
)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Relationship intelligence from Twitter archive exports",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--env-file",
        type=Path,
        default=None,
        help="Path to .env file (default: .env in working directory)",
    )
    parser.add_argument(
        "--tweets",
        type=Path,
        default=None,
        help="Path to tweets.js (overrides TWEETS_PATH)",
    )
    parser.add_argument(
        "--dms",
        type=Path,
        default=None,
        help="Path to direct-messages.js (overrides DMS_PATH)",
    )
    parser.add_argument(
        "--screen-name",
        type=str,
        default=None,
        help="Archive owner's screen name (overrides SCREEN_NAME)",
    )
    parser.add_argument(
        "--owner-id",
        type=str,
        default=None,
        help="Owner's numeric account id (default: inferred from DMs)",
    )
    parser.add_argument(
        "--window",
        type=int,
        default=None,
        metavar="SECONDS",
        help="Conversation gap window in seconds (default: 3600)",
    )
    parser.add_argument(
        "--sample-limit",
        type=int,
        default=None,
        help="Records sampled for schema discovery (default: 1000)",
    )
    parser.add_argument(
        "--top",
        type=int,
        default=10,
        help="Number of top relationships to show (default: 10)",
    )
    parser.add_argument(
        "--no-mentions",
        action="store_true",
        help="Do not count mentioned accounts as interactions",
    )
    parser.add_argument(
        "--redact",
        action="store_true",
        help="Drop tweet and message text from events",
    )
    parser.add_argument(
        "--workers",
        type=int,
        default=1,
        help="Aggregate tweets and DMs in parallel when above 1 (default: 1)",
    )
    parser.add_argument(
        "--output-json",
        type=Path,
        default=None,
        help="Write the analysis report as JSON to this path",
    )
    parser.add_argument(
        "--schema-only",
        action="store_true",
        help="Only run schema discovery and print its report",
    )
    return parser.parse_args(argv)


def get_env_file(args: argparse.Namespace) -> Path | None:
    """Get the .env file path from args or the working directory."""
    env_file = args.env_file if args.env_file is not None else Path(".env")
    return env_file if env_file.exists() else None


def report_path(config: Config, args: argparse.Namespace) -> Path | None:
    """Where to write the JSON report, if anywhere.

    An explicit ``--output-json`` wins; otherwise a run-stamped file named
    after the screen name is placed in OUTPUT_DIR when configured.
    """
    if args.output_json is not None:
        return args.output_json
    if config.output_dir is None:
        return None
    stamp = datetime.now(timezone.utc).strftime("%Y%m%d_%H%M%S")
    return config.output_dir / f"relationships_{config.screen_name}_{stamp}.json"


def print_schema_report(context: AnalysisContext) -> None:
    """Print discovered fields, flagging problematic ones."""
    for source, report in context.schema_reports.items():
        summary = report.summary()
        print(f"\nSchema: {source} ({summary['records_analyzed']} records sampled)")
        print(
            f"  {summary['total_fields']} fields, {summary['optional_fields']} optional, "
            f"{summary['mixed_type_fields']} mixed, {summary['problematic_fields']} problematic"
        )
        for info in report.problematic_fields():
            kinds = ", ".join(sorted(info.kinds))
            samples = "; ".join(info.sample_values)
            print(f"  ! {info.path} [{kinds}] e.g. {samples}")


def print_relationships(context: AnalysisContext, top_n: int) -> None:
    """Print the top relationships and activity peaks."""
    if context.aggregator is None:
        return
    print(f"\nTop {top_n} relationships:")
    for rank, profile in enumerate(context.aggregator.top_relationships(top_n), start=1):
        counts = ", ".join(f"{k}={v}" for k, v in sorted(profile.interaction_counts.items()))
        print(f"  {rank:>3}. {profile.user_id}: {profile.total_interactions} ({counts})")

    peak_day = context.aggregator.peak_day()
    if peak_day is not None:
        print(f"Most active day: {WEEKDAY_NAMES[peak_day]}")


def run_pipeline(args: argparse.Namespace, config: Config) -> None:
    """Run the analysis pipeline."""
    config = config.with_overrides(
        tweets_path=args.tweets,
        dms_path=args.dms,
        owner_id=args.owner_id,
        conversation_window_seconds=args.window,
        schema_sample_limit=args.sample_limit,
    )

    options = PipelineOptions(
        workers=args.workers,
        include_mentions=not args.no_mentions,
        redact=args.redact,
        schema_only=args.schema_only,
        top_n=args.top,
    )

    # Create and validate orchestrator
    orchestrator = PipelineOrchestrator(config, options)
    errors = orchestrator.validate()
    if errors:
        print("Configuration errors:", file=sys.stderr)
        for error in errors:
            print(f"  - {error}", file=sys.stderr)
        sys.exit(1)

    print(f"Analyzing archive for @{config.screen_name} (workers={options.workers})")
    total = orchestrator.stage_count

    def on_stage_event(stage: int, event: str, result: StageResult | None) -> None:
        """Handle stage events for progress output."""
        if event == "start":
            info = orchestrator.get_stage_info()
            stage_info = next((s for s in info if s["number"] == stage), None)
            desc = stage_info["description"] if stage_info else f"Stage {stage}"
            print(f"\n[{stage}/{total}] {desc}...")
        elif event == "complete" and result:
            print(f"  {result}")
        elif event == "skip":
            print(f"  - Stage {stage} skipped")
        elif event == "fail" and result:
            print(f"  FAIL: {result.message}")

    orchestrator.add_callback(on_stage_event)
    result = orchestrator.run()
    context = orchestrator.context

    if result.success:
        if options.schema_only:
            print_schema_report(context)
        else:
            print_relationships(context, options.top_n)
            output = report_path(config, args)
            if output is not None:
                report = context.to_report(config.screen_name, options.top_n)
                try:
                    written = write_artifact(output, report.model_dump_json(indent=2))
                except ArchiveError as e:
                    print(f"Could not write report: {e}", file=sys.stderr)
                    sys.exit(1)
                print(f"\nReport written to {written}")

    # Print summary
    print("\n" + "=" * 60)
    if result.success:
        print(f"ANALYSIS COMPLETED in {result.duration_seconds:.1f}s")
        if result.final_status:
            print(format_status(result.final_status))
    else:
        print(f"ANALYSIS FAILED: {result.error}")
    print("=" * 60)

    sys.exit(0 if result.success else 1)


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for archive analysis."""
    args = parse_args(argv)

    # Load configuration
    env_file = get_env_file(args)
    try:
        config = Config.from_env(env_file, screen_name=args.screen_name)
    except ValueError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        sys.exit(1)

    run_pipeline(args, config)


if __name__ == "__main__":
    main()
