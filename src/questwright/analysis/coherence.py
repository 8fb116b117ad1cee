"""Structural coherence analysis of an adventure.

The analyzer is a pure function of the scene list (content order) and the
SceneAnalysis records from a run. It never mutates its inputs, so calling
``analyze`` or ``recommendations`` repeatedly gives identical results.
"""

from __future__ import annotations

from typing import Literal

from questwright.heuristics import DEFAULT_MATCHER, HeuristicMatcher
from questwright.models.content import Scene
from questwright.models.report import CoherenceAnalysis, Recommendation, SceneAnalysis
from questwright.models.state import classify_npc_transition

BreadcrumbStrength = Literal["strong", "medium", "weak", "none"]

# Ideal share of action / social / exploration scenes
IDEAL_PACE = (0.3, 0.4, 0.3)
NEUTRAL_PACE_SCORE = 50

LOW_PASS_RATE = 0.3
HIGH_WOUND_SCENE = 2
POOR_PACE_SCORE = 50


class CoherenceAnalyzer:
    """Post-run structural diagnostics.

    Args:
        scenes: Scenes in content order (the run's working list)
        scene_analyses: Per-scene records produced by the run
        matcher: Keyword tables used for pacing classification
    """

    def __init__(
        self,
        scenes: list[Scene],
        scene_analyses: list[SceneAnalysis] | None = None,
        matcher: HeuristicMatcher = DEFAULT_MATCHER,
    ):
        self.scenes = list(scenes)
        self.scene_analyses = list(scene_analyses or [])
        self.matcher = matcher

    def analyze(self) -> CoherenceAnalysis:
        return CoherenceAnalysis(
            breadcrumb_strength=self.breadcrumb_strength(),
            forward_references=self.forward_references(),
            backward_references=self.backward_references(),
            npc_continuity_issues=self.npc_continuity_issues(),
            information_gaps=self.information_gaps(),
            pace_score=self.pace_score(),
        )

    # -------------------------------------------------------------------------
    # Breadcrumbs and references
    # -------------------------------------------------------------------------

    def breadcrumb_strength(self) -> BreadcrumbStrength:
        """Rate how well each scene points at its successor."""
        pairs = len(self.scenes) - 1
        if pairs <= 0:
            return "none"

        strong = 0
        weak = 0
        for scene, following in zip(self.scenes, self.scenes[1:]):
            next_location = following.location.lower()
            if next_location and next_location in scene.narrative.lower():
                strong += 1
            elif scene.exits or scene.transitions:
                strong += 1
            elif scene.next_scene:
                weak += 1

        ratio = strong / pairs
        if ratio > 0.7:
            return "strong"
        if ratio > 0.4:
            return "medium"
        if ratio > 0.1 or weak > 0:
            return "weak"
        return "none"

    def forward_references(self) -> list[str]:
        refs = []
        for i, scene in enumerate(self.scenes):
            narrative = scene.narrative.lower()
            for later in self.scenes[i + 1 :]:
                if later.location and later.location.lower() in narrative:
                    refs.append(f'Scene "{scene.title}" mentions future location "{later.location}"')
        return refs

    def backward_references(self) -> list[str]:
        refs = []
        for i, scene in enumerate(self.scenes):
            narrative = scene.narrative.lower()
            for earlier in self.scenes[:i]:
                if earlier.location and earlier.location.lower() in narrative:
                    refs.append(
                        f'Scene "{scene.title}" references past location "{earlier.location}"'
                    )
        return refs

    # -------------------------------------------------------------------------
    # Continuity and gaps
    # -------------------------------------------------------------------------

    def npc_continuity_issues(self) -> list[str]:
        """Walk scenes in order and flag suspicious NPC state changes."""
        issues = []
        last_seen: dict[str, tuple[str, str]] = {}
        for scene in self.scenes:
            for npc in scene.npcs:
                previous = last_seen.get(npc.id)
                if previous is not None:
                    seen_in, previous_state = previous
                    verdict = classify_npc_transition(previous_state, npc.state)
                    if verdict == "violation":
                        issues.append(
                            f'NPC "{npc.name}" was defeated in "{seen_in}" '
                            f'but appears active in "{scene.title}"'
                        )
                    elif verdict == "review":
                        issues.append(
                            f'NPC "{npc.name}" was absent in "{seen_in}" but appears in '
                            f'"{scene.title}" - verify this is intentional'
                        )
                last_seen[npc.id] = (scene.title, npc.state)
        return issues

    def information_gaps(self) -> list[str]:
        gaps = []
        for scene in self.scenes:
            for check in scene.challenges:
                if check.type == "hidden" and not check.description:
                    gaps.append(
                        f'Hidden check "{check.name}" in "{scene.title}" has no description for GM'
                    )
            for trigger in scene.triggers:
                if trigger.irreversible and not trigger.text:
                    gaps.append(
                        f'Irreversible trigger "{trigger.label}" in "{scene.title}" '
                        "has no narrative text"
                    )
        return gaps

    # -------------------------------------------------------------------------
    # Pacing
    # -------------------------------------------------------------------------

    def pace_counts(self) -> tuple[int, int, int]:
        """Number of (action, social, exploration) scenes."""
        action = social = exploration = 0
        for scene in self.scenes:
            if self.matcher.is_combat_scene(scene):
                action += 1
            elif scene.npcs:
                social += 1
            else:
                exploration += 1
        return action, social, exploration

    def pace_score(self) -> int:
        """0-100, highest when the scene mix matches the ideal split."""
        total = len(self.scenes)
        if total == 0:
            return NEUTRAL_PACE_SCORE
        ratios = [count / total for count in self.pace_counts()]
        mean_deviation = sum(abs(r - ideal) for r, ideal in zip(ratios, IDEAL_PACE)) / 3
        return round(max(0.0, 100 - mean_deviation * 200))

    # -------------------------------------------------------------------------
    # Recommendations
    # -------------------------------------------------------------------------

    def recommendations(self) -> list[Recommendation]:
        """Recommendations derived from the structure and the run's metrics."""
        recs = []

        dead_ends = [a for a in self.scene_analyses if not a.has_exit_path]
        if dead_ends:
            recs.append(
                Recommendation(
                    priority="high",
                    type="dead_end",
                    title="Missing Scene Transitions",
                    description=f"{len(dead_ends)} scene(s) have no explicit exit paths defined.",
                    suggestion='Add "exits" array to these scenes to define how players progress.',
                )
            )

        hard = [
            a for a in self.scene_analyses if a.pass_rate is not None and a.pass_rate < LOW_PASS_RATE
        ]
        if hard:
            recs.append(
                Recommendation(
                    priority="medium",
                    type="difficulty",
                    scene=hard[0].scene_id,
                    title="High Difficulty Spike",
                    description=f'Scene "{hard[0].title}" has a very low pass rate on skill checks.',
                    suggestion="Consider lowering DCs or adding alternative paths for failed checks.",
                )
            )

        bloody = [a for a in self.scene_analyses if a.wounds_taken >= HIGH_WOUND_SCENE]
        if bloody:
            recs.append(
                Recommendation(
                    priority="medium",
                    type="balance",
                    scene=bloody[0].scene_id,
                    title="High Damage Scene",
                    description=f'Scene "{bloody[0].title}" deals significant damage to players.',
                    suggestion="Consider adding healing opportunities before or after this scene.",
                )
            )

        npc_issues = self.npc_continuity_issues()
        if npc_issues:
            recs.append(
                Recommendation(
                    priority="low",
                    type="npc",
                    title="NPC Continuity Issues",
                    description=f"Found {len(npc_issues)} potential NPC continuity issue(s).",
                    suggestion="Review NPC states across scenes to ensure logical progression.",
                )
            )

        pace = self.pace_score()
        if pace < POOR_PACE_SCORE:
            recs.append(
                Recommendation(
                    priority="low",
                    type="pacing",
                    title="Unbalanced Pacing",
                    description=f"Adventure pacing score is {pace}/100.",
                    suggestion=(
                        "Consider adding more variety between action, social, "
                        "and exploration scenes."
                    ),
                )
            )

        if self.breadcrumb_strength() in ("none", "weak"):
            recs.append(
                Recommendation(
                    priority="medium",
                    type="coherence",
                    title="Weak Navigation Breadcrumbs",
                    description="Scenes lack clear direction to the next location.",
                    suggestion=(
                        "Add hints in narrative text or NPC dialogue pointing to the next scene."
                    ),
                )
            )

        return recs
