"""Command-line entry point for Questwright.

Runs one simulation (or one per archetype) against an adventure and writes
the reports to disk.

Usage:
    # Fair dice, thorough GM and player
    questwright --adventure a-change-of-heart

    # Reproducible run as the detective archetype with lucky dice
    questwright --adventure a-change-of-heart --archetype detective --seed 42 --dice lucky

    # Every archetype, same seed, text reports only
    questwright --adventure a-change-of-heart --all-archetypes --seed 7 --format text

Exit codes:
    0: Every run completed
    1: At least one run ended in a non-completed terminal state
    2: Invalid arguments or configuration
"""

import argparse
import asyncio
import logging
import sys

from questwright.archetypes import list_archetype_ids
from questwright.engine.runner import SimulationRunner
from questwright.models.config import DiceMode, GMBehavior, PlayerBehavior, SimulationConfig
from questwright.models.report import SimulationReport, TerminationReason
from questwright.probe import ContentIndexProbe
from questwright.reporting import ReportWriter, render_text
from questwright.storage import (
    ContentSource,
    FileContentSource,
    get_content_source,
    get_diagnostics_path,
    get_reports_path,
)

logger = logging.getLogger(__name__)

OUTPUT_FORMATS = ("json", "text", "both")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="questwright",
        description="Simulate playthroughs of a tabletop adventure and report on its quality",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )

    # Content
    parser.add_argument(
        "--adventure",
        "-a",
        type=str,
        help="Adventure id to simulate",
    )
    parser.add_argument(
        "--content-path",
        type=str,
        default=None,
        help="Adventures directory (default: $QUESTWRIGHT_CONTENT_PATH or ./adventures)",
    )
    parser.add_argument(
        "--list",
        action="store_true",
        help="List available adventures and exit",
    )

    # Player
    parser.add_argument(
        "--archetype",
        type=str,
        default=None,
        help=f"Player archetype ({', '.join(list_archetype_ids())})",
    )
    parser.add_argument(
        "--all-archetypes",
        action="store_true",
        help="Run once per archetype with the same seed",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Random seed for reproducible runs",
    )

    # Simulation configuration
    parser.add_argument(
        "--dice",
        type=str,
        choices=[m.value for m in DiceMode],
        default=DiceMode.FAIR.value,
        help="Dice weighting (default: fair)",
    )
    parser.add_argument(
        "--gm",
        type=str,
        choices=[b.value for b in GMBehavior],
        default=GMBehavior.THOROUGH.value,
        help="GM behavior (default: thorough)",
    )
    parser.add_argument(
        "--player",
        type=str,
        choices=[b.value for b in PlayerBehavior],
        default=PlayerBehavior.THOROUGH.value,
        help="Player behavior (default: thorough)",
    )
    parser.add_argument(
        "--max-scenes",
        type=int,
        default=10,
        help="Scene budget; 0 or less runs every selected scene (default: 10)",
    )
    parser.add_argument(
        "--random-order",
        action="store_true",
        help="Shuffle the scene order",
    )
    parser.add_argument(
        "--max-wounds",
        type=int,
        default=6,
        help="Wounds at which the player dies (default: 6)",
    )
    parser.add_argument(
        "--max-turns",
        type=int,
        default=20,
        help="Maximum player questions resolved per scene (default: 20)",
    )
    parser.add_argument(
        "--loop-threshold",
        type=int,
        default=None,
        help="Scene activations that end the run as an infinite loop (default: off)",
    )

    # Output
    parser.add_argument(
        "--output",
        "-o",
        type=str,
        default=None,
        help="Report directory (default: $QUESTWRIGHT_REPORTS_PATH or ./simulation-results)",
    )
    parser.add_argument(
        "--format",
        type=str,
        choices=OUTPUT_FORMATS,
        default="both",
        help="Report files to write (default: both)",
    )
    parser.add_argument(
        "--print",
        dest="print_report",
        action="store_true",
        help="Also print the text report to stdout",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="count",
        default=0,
        help="Log simulation events (-v) or debug detail (-vv)",
    )
    return parser


def build_config(args: argparse.Namespace) -> SimulationConfig:
    """Build a SimulationConfig from parsed arguments.

    Raises:
        ValueError: If a value is out of range
    """
    return SimulationConfig(
        max_scenes=args.max_scenes,
        random_order=args.random_order,
        dice_mode=DiceMode(args.dice),
        gm_behavior=GMBehavior(args.gm),
        player_behavior=PlayerBehavior(args.player),
        max_turns_per_scene=args.max_turns,
        player_max_wounds=args.max_wounds,
        loop_visit_threshold=args.loop_threshold,
    )


def run_once(
    source: ContentSource,
    adventure_id: str,
    config: SimulationConfig,
    archetype_id: str | None,
    seed: int | None,
    diagnostics_dir: str | None,
) -> SimulationReport:
    runner = SimulationRunner(
        adventure_id=adventure_id,
        content_source=source,
        probe=ContentIndexProbe(diagnostics_dir=diagnostics_dir),
        config=config,
        archetype_id=archetype_id,
        random_seed=seed,
    )
    return asyncio.run(runner.run())


def write_report(writer: ReportWriter, report: SimulationReport, suffix: str, fmt: str) -> None:
    if fmt == "both":
        writer.write(report, suffix)
    elif fmt == "json":
        logger.info(f"Report written to {writer.write_json(report, suffix)}")
    else:
        logger.info(f"Report written to {writer.write_text(report, suffix)}")


def print_summary(report: SimulationReport, label: str) -> None:
    summary = report.summary
    print(
        f"{label}: {report.termination.reason.value} - "
        f"{summary.scenes_completed}/{summary.total_scenes} scenes, "
        f"{summary.total_wounds} wounds, "
        f"lookups {summary.information_lookups_succeeded}/{summary.information_lookups_attempted}, "
        f"difficulty {summary.difficulty_rating}, coherence {summary.coherence_score}"
    )


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.verbose > 1:
        level = logging.DEBUG
    elif args.verbose == 1:
        level = logging.INFO
    else:
        level = logging.WARNING
    logging.basicConfig(level=level, format="%(asctime)s - %(levelname)s - %(message)s")

    source = FileContentSource(args.content_path) if args.content_path else get_content_source()

    if args.list:
        for adventure_id in source.list_adventures():
            print(adventure_id)
        return 0

    if not args.adventure:
        parser.error("--adventure is required unless --list is given")

    try:
        config = build_config(args)
    except ValueError as e:
        logger.error(f"Invalid configuration: {e}")
        return 2

    if args.all_archetypes:
        archetype_ids: list[str | None] = list(list_archetype_ids())
    else:
        archetype_ids = [args.archetype]

    output_dir = args.output or get_reports_path()
    writer = ReportWriter(output_dir)
    diagnostics_dir = get_diagnostics_path() if args.output is None else f"{output_dir}/diagnostics"

    all_completed = True
    for archetype_id in archetype_ids:
        try:
            report = run_once(
                source, args.adventure, config, archetype_id, args.seed, diagnostics_dir
            )
        except ValueError as e:
            logger.error(f"Cannot run simulation: {e}")
            return 2

        suffix = f"{args.adventure}-{archetype_id or config.dice_mode.value}"
        write_report(writer, report, suffix, args.format)
        print_summary(report, archetype_id or args.adventure)
        if args.print_report:
            print(render_text(report))

        if report.termination.reason != TerminationReason.COMPLETED:
            all_completed = False

    return 0 if all_completed else 1


if __name__ == "__main__":
    sys.exit(main())
