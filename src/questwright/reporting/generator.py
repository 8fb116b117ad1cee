"""Final report assembly and plain-text rendering.

The summary counters are derived only from fields that end up in the
report itself (scene analyses, issues, events, lookups), so any consumer
can recompute them.
"""

from __future__ import annotations

import logging
from datetime import datetime

from questwright.analysis.coherence import CoherenceAnalyzer
from questwright.archetypes.catalog import PLAYER_ARCHETYPES
from questwright.models.config import SimulationConfig
from questwright.models.content import Scene
from questwright.models.report import (
    ArchetypeReport,
    CoherenceAnalysis,
    DiceStats,
    DifficultyRating,
    GMValidatedReport,
    InformationLookup,
    Issue,
    Recommendation,
    ReportMeta,
    ReportSummary,
    SceneAnalysis,
    SimulationEvent,
    SimulationReport,
    Termination,
    TerminationReason,
)
from questwright.models.state import NPCTracker, PlayerState

logger = logging.getLogger(__name__)

NEAR_DEATH_ACTION = "NEAR DEATH"
DEAD_END_ISSUE = "NO_EXIT_PATH"
SOFT_LOCK_ISSUE = "SOFT_LOCK"

BREADCRUMB_SCORES = {"strong": 100, "medium": 70, "weak": 40, "none": 0}
NPC_ISSUE_PENALTY = 10
INFORMATION_GAP_PENALTY = 5

# (max wounds per scene, max failure rate, rating), checked in order
DIFFICULTY_BANDS: tuple[tuple[float, float, DifficultyRating], ...] = (
    (0.5, 0.1, "trivial"),
    (1.0, 0.25, "easy"),
    (2.0, 0.4, "moderate"),
    (3.0, 0.55, "hard"),
)

CRITICAL_QUESTION_TYPES = ("npc_info", "npc_motivation")


def difficulty_rating(wounds_per_scene: float, failure_rate: float) -> DifficultyRating:
    for max_wounds, max_failures, rating in DIFFICULTY_BANDS:
        if wounds_per_scene < max_wounds and failure_rate < max_failures:
            return rating
    return "deadly"


def coherence_score(coherence: CoherenceAnalysis) -> int:
    """Blend breadcrumbs and pacing, minus continuity and gap penalties (0-100)."""
    score = (BREADCRUMB_SCORES[coherence.breadcrumb_strength] + coherence.pace_score) / 2
    score -= NPC_ISSUE_PENALTY * len(coherence.npc_continuity_issues)
    score -= INFORMATION_GAP_PENALTY * len(coherence.information_gaps)
    return round(max(0.0, min(100.0, score)))


def build_summary(
    scene_analyses: list[SceneAnalysis],
    issues: list[Issue],
    events: list[SimulationEvent],
    lookups: list[InformationLookup],
    coherence: CoherenceAnalysis,
    termination_reason: TerminationReason,
) -> ReportSummary:
    """Compute the summary counters from the run's records."""
    total_wounds = sum(a.wounds_taken for a in scene_analyses)
    checks_made = sum(a.checks_attempted for a in scene_analyses)
    checks_passed = sum(a.checks_passed for a in scene_analyses)
    succeeded = sum(1 for lookup in lookups if lookup.found)

    wounds_per_scene = total_wounds / max(1, len(scene_analyses))
    failure_rate = 1 - checks_passed / checks_made if checks_made else 0.0

    return ReportSummary(
        total_scenes=len(scene_analyses),
        scenes_completed=sum(1 for a in scene_analyses if a.completed),
        total_wounds=total_wounds,
        near_death_count=sum(1 for e in events if e.action == NEAR_DEATH_ACTION),
        deaths=1 if termination_reason == TerminationReason.PLAYER_DEATH else 0,
        triggers_activated=sum(a.triggers_fired for a in scene_analyses),
        skill_checks_made=checks_made,
        skill_checks_passed=checks_passed,
        npcs_interacted=sum(a.npcs_interacted for a in scene_analyses),
        dead_ends_found=sum(1 for i in issues if i.type == DEAD_END_ISSUE),
        soft_locks_found=sum(1 for i in issues if i.type == SOFT_LOCK_ISSUE),
        difficulty_rating=difficulty_rating(wounds_per_scene, failure_rate),
        coherence_score=coherence_score(coherence),
        information_lookups_attempted=len(lookups),
        information_lookups_succeeded=succeeded,
        information_lookups_failed=len(lookups) - succeeded,
    )


def lookup_recommendation(lookups: list[InformationLookup]) -> Recommendation | None:
    """Recommendation for failed information lookups, if there were any."""
    failed = [lookup for lookup in lookups if not lookup.found]
    if not failed:
        return None
    failed_types = list(dict.fromkeys(lookup.question.type for lookup in failed))
    return Recommendation(
        priority="high" if len(failed) > 2 else "medium",
        type="information",
        title="Missing Information for the GM",
        description=(
            f"GM could not find answers to {len(failed)} player question(s). "
            f"Types: {', '.join(failed_types)}"
        ),
        suggestion=(
            "Ensure all scene-relevant information is reachable by the GM. Check NPC "
            "details, environment descriptions, and navigation hints."
        ),
    )


class ReportGenerator:
    """Builds the SimulationReport for one run.

    Args:
        adventure_id: Adventure that was simulated
        config: Configuration of the run
        scenes: Every scene fetched for the adventure, in content order
        random_seed: Seed the run was started with, if any
    """

    def __init__(
        self,
        adventure_id: str,
        config: SimulationConfig,
        scenes: list[Scene],
        random_seed: int | None = None,
    ):
        self.adventure_id = adventure_id
        self.config = config
        self.scenes = scenes
        self.random_seed = random_seed

    def generate(
        self,
        *,
        start_time: datetime,
        end_time: datetime,
        termination: Termination,
        player_state: PlayerState,
        npc_states: list[NPCTracker],
        scene_analyses: list[SceneAnalysis],
        dice_stats: DiceStats,
        lookups: list[InformationLookup],
        events: list[SimulationEvent],
        issues: list[Issue],
        archetype: str | None = None,
        archetype_report: ArchetypeReport | None = None,
        gm_validated_report: GMValidatedReport | None = None,
    ) -> SimulationReport:
        analyzer = CoherenceAnalyzer(self.scenes, scene_analyses)
        coherence = analyzer.analyze()
        recommendations = analyzer.recommendations()
        lookup_rec = lookup_recommendation(lookups)
        if lookup_rec is not None:
            recommendations.append(lookup_rec)

        summary = build_summary(
            scene_analyses, issues, events, lookups, coherence, termination.reason
        )
        logger.info(
            f"Report for {self.adventure_id}: {termination.reason.value}, "
            f"{summary.scenes_completed}/{summary.total_scenes} scenes, "
            f"difficulty {summary.difficulty_rating}"
        )

        return SimulationReport(
            meta=ReportMeta(
                adventure_id=self.adventure_id,
                start_time=start_time,
                end_time=end_time,
                duration_ms=(end_time - start_time).total_seconds() * 1000,
                config=self.config,
                random_seed=self.random_seed,
            ),
            termination=termination,
            player_state=player_state,
            npc_states=npc_states,
            scene_analyses=scene_analyses,
            dice_stats=dice_stats,
            coherence=coherence,
            recommendations=recommendations,
            information_lookups=lookups,
            events=events,
            issues=issues,
            summary=summary,
            archetype=archetype,
            archetype_report=archetype_report,
            gm_validated_report=gm_validated_report,
        )


# =============================================================================
# Plain-text rendering
# =============================================================================


def _section(lines: list[str], title: str) -> None:
    lines.append(f"--- {title} ---")


def render_text(report: SimulationReport) -> str:
    """Render a report as human-readable text."""
    lines = ["=" * 60, "ADVENTURE SIMULATION REPORT".center(60), "=" * 60, ""]

    meta = report.meta
    config = meta.config
    lines.append(f"Adventure: {meta.adventure_id}")
    lines.append(f"Start:     {meta.start_time.isoformat()}")
    lines.append(f"End:       {meta.end_time.isoformat()}")
    lines.append(f"Duration:  {meta.duration_ms:.0f}ms")
    lines.append(f"Dice:      {config.dice_mode.value}")
    lines.append(f"GM:        {config.gm_behavior.value}")
    lines.append(f"Player:    {config.player_behavior.value}")
    if meta.random_seed is not None:
        lines.append(f"Seed:      {meta.random_seed}")
    if report.archetype:
        archetype = PLAYER_ARCHETYPES.get(report.archetype)
        lines.append(f"Archetype: {archetype.name if archetype else report.archetype}")
    lines.append("")

    lines.append(f"Termination: {report.termination.reason.value}")
    if report.termination.details:
        lines.append(f"  {report.termination.details}")
    lines.append("")

    s = report.summary
    _section(lines, "SUMMARY")
    lines.append(f"Scenes:        {s.scenes_completed} / {s.total_scenes}")
    lines.append(f"Wounds:        {s.total_wounds} ({s.near_death_count} near-death)")
    lines.append(f"Deaths:        {s.deaths}")
    lines.append(f"Skill Checks:  {s.skill_checks_passed} / {s.skill_checks_made} passed")
    lines.append(f"Triggers:      {s.triggers_activated}")
    lines.append(f"NPCs:          {s.npcs_interacted}")
    lines.append(f"Dead Ends:     {s.dead_ends_found}")
    lines.append(f"Difficulty:    {s.difficulty_rating.upper()}")
    lines.append(f"Coherence:     {s.coherence_score}/100")
    lines.append(
        f"Info Lookups:  {s.information_lookups_succeeded}/{s.information_lookups_attempted} found"
    )
    lines.append("")

    dice = report.dice_stats
    if dice.total_rolls > 0:
        _section(lines, "DICE STATS")
        lines.append(f"Total Rolls:   {dice.total_rolls}")
        lines.append(f"Average:       {dice.average:.1f}")
        lines.append(f"Nat 20s:       {dice.critical_successes}")
        lines.append(f"Nat 1s:        {dice.critical_failures}")
        lines.append("")

    _section(lines, "SCENES")
    for i, scene in enumerate(report.scene_analyses, start=1):
        status = "done" if scene.completed else "stopped"
        wounds = f" wounds:{scene.wounds_taken}" if scene.wounds_taken else ""
        checks = (
            f" checks:{scene.checks_passed}/{scene.checks_attempted}"
            if scene.checks_attempted
            else ""
        )
        lines.append(f"  {i}. [{status}] {scene.title}{wounds}{checks}")
        for issue in scene.issues:
            lines.append(f"      {issue}")
    lines.append("")

    if report.issues:
        _section(lines, "ISSUES")
        for issue in report.issues:
            lines.append(f"  {issue.severity.upper()} [{issue.type}] {issue.message}")
            lines.append(f"     Scene: {issue.scene}")
        lines.append("")

    if report.npc_states:
        _section(lines, "NPC STATES")
        for npc in report.npc_states:
            lines.append(f"  {npc.name}: {npc.state} ({npc.interaction_count} interactions)")
        lines.append("")

    c = report.coherence
    _section(lines, "COHERENCE ANALYSIS")
    lines.append(f"Breadcrumbs:   {c.breadcrumb_strength.upper()}")
    lines.append(f"Pacing Score:  {c.pace_score}/100")
    if c.forward_references:
        lines.append(f"Forward Refs:  {len(c.forward_references)} found")
    if c.backward_references:
        lines.append(f"Backward Refs: {len(c.backward_references)} found")
    if c.npc_continuity_issues:
        lines.append(f"NPC Issues:    {len(c.npc_continuity_issues)}")
        lines.extend(f"  - {issue}" for issue in c.npc_continuity_issues)
    if c.information_gaps:
        lines.append(f"Info Gaps:     {len(c.information_gaps)}")
        lines.extend(f"  - {gap}" for gap in c.information_gaps)
    lines.append("")

    failed = [lookup for lookup in report.information_lookups if not lookup.found]
    if failed:
        _section(lines, "FAILED INFORMATION LOOKUPS")
        for lookup in failed:
            marker = "!!" if lookup.question.type in CRITICAL_QUESTION_TYPES else "!"
            lines.append(f'{marker} [{lookup.question.type.upper()}] "{lookup.question.query}"')
            lines.append(f"   Search path: {' -> '.join(lookup.search_path)}")
            lines.append(
                f"   Time: {lookup.time_to_find_ms:.1f}ms, interactions: {lookup.interactions}"
            )
            if lookup.diagnostic_path:
                lines.append(f"   Diagnostic: {lookup.diagnostic_path}")
            lines.append("")

    if report.recommendations:
        _section(lines, "RECOMMENDATIONS")
        for rec in report.recommendations:
            lines.append(f"[{rec.priority.upper()}] [{rec.type.upper()}] {rec.title}")
            lines.append(f"   {rec.description}")
            lines.append(f"   > {rec.suggestion}")
            if rec.scene:
                lines.append(f"   Scene: {rec.scene}")
            lines.append("")

    if report.archetype_report:
        _render_archetype(lines, report.archetype_report)

    if report.gm_validated_report:
        _render_gm_validation(lines, report.gm_validated_report)

    return "\n".join(lines)


def _render_archetype(lines: list[str], ar: ArchetypeReport) -> None:
    archetype = PLAYER_ARCHETYPES.get(ar.archetype)
    _section(lines, "ARCHETYPE ANALYSIS")
    lines.append(f"Archetype:     {archetype.name if archetype else ar.archetype}")
    lines.append(f"Motivation:    {archetype.motivation if archetype else 'Unknown'}")
    lines.append("")

    groups = (
        ("Successful Paths", ar.successful_paths),
        ("Satisfying Moments", ar.satisfying_moments),
        ("Unhandled Actions", ar.failed_actions),
        ("Unanswered Questions", [f"[{q.type}] {q.query}" for q in ar.unanswered_questions]),
        ("Confusion Points", ar.confusion_points),
    )
    for title, items in groups:
        if items:
            lines.append(f"{title}:")
            lines.extend(f"   - {item}" for item in items)
            lines.append("")

    if ar.feedback:
        lines.append("Archetype Feedback:")
        for f in ar.feedback:
            lines.append(f"   {f.severity.upper()} [{f.type}] {f.description}")
            lines.append(f"      Scene: {f.scene}")
            lines.append(f"      > {f.suggestion}")
        lines.append("")


def _render_gm_validation(lines: list[str], gm: GMValidatedReport) -> None:
    _section(lines, "GM VALIDATION")
    lines.append(f"Critiques:          {gm.total_critiques}")
    lines.append(f"Valid Issues:       {gm.summary.valid_issue_count}")
    lines.append(f"Intentional Design: {gm.summary.intentional_design_count}")
    lines.append(f"GM Discretion:      {gm.summary.gm_discretion_count}")
    lines.append(f"False Positives:    {gm.summary.false_positive_count}")
    lines.append("")
    for title, bucket in (
        ("Valid Issues", gm.valid_issues),
        ("Intentional Design", gm.intentional_design),
        ("GM Discretion", gm.gm_discretion),
    ):
        if not bucket:
            continue
        lines.append(f"{title}:")
        for critique in bucket:
            lines.append(f"   [{critique.validation.status}] {critique.feedback.description}")
            lines.append(f"      {critique.validation.reasoning}")
            if critique.validation.gm_notes:
                lines.append(f"      GM: {critique.validation.gm_notes}")
        lines.append("")
