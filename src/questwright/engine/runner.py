"""Simulation runner for Questwright.

The runner plays an adventure end to end with a synthetic GM and player:

    fetch scenes -> select working list -> for each scene:
        activate -> GM phase -> player phase -> question phase -> finish

and ends in exactly one terminal state (see TerminationReason). Scenes are
processed strictly one at a time; the only suspension points are probe
calls, which are awaited individually. All randomness comes from a single
``random.Random`` seeded by ``random_seed``, so a seeded run is fully
reproducible.

Usage:
    runner = SimulationRunner(
        adventure_id="a-change-of-heart",
        config=SimulationConfig(dice_mode=DiceMode.LUCKY),
        archetype_id="detective",
        random_seed=42,
    )
    report = await runner.run()
"""

from __future__ import annotations

import asyncio
import logging
import random
import time
from collections import Counter
from datetime import datetime
from typing import Any

from questwright.analysis.gm_validator import GMValidator
from questwright.analysis.knowledge import extract_knowledge
from questwright.archetypes.catalog import PlayerArchetype, get_archetype
from questwright.archetypes.generator import (
    ArchetypeQuestionGenerator,
    generate_fallback_questions,
)
from questwright.engine.dice import DiceEngine, RollResult
from questwright.engine.policies import (
    coin_flip,
    get_check_policy,
    get_interaction_policy,
    get_trigger_policy,
    gm_introduces_npcs,
    player_observes_environment,
)
from questwright.engine.scene_analysis import SceneAnalyzer
from questwright.heuristics import DEFAULT_MATCHER, HeuristicMatcher
from questwright.models.config import SimulationConfig
from questwright.models.content import (
    ADVENTURE_END_FLAG,
    ADVENTURE_START_FLAG,
    Challenge,
    NPCReference,
    Scene,
    Trigger,
)
from questwright.models.report import (
    ArchetypeFeedback,
    ArchetypeReport,
    InformationLookup,
    Issue,
    PlayerQuestion,
    SceneAnalysis,
    SimulationEvent,
    SimulationReport,
    Termination,
    TerminationReason,
)
from questwright.models.state import NPCRegistry, PlayerStateTracker, classify_npc_transition
from questwright.probe.base import InterfaceProbe, ProbeResult
from questwright.probe.content_probe import ContentIndexProbe
from questwright.reporting.generator import CRITICAL_QUESTION_TYPES, ReportGenerator
from questwright.storage import ContentSource, get_content_source

logger = logging.getLogger(__name__)

_LOG_LEVELS = {"info": logging.INFO, "warning": logging.WARNING, "critical": logging.CRITICAL}

# Failed lookup question type -> archetype feedback type
LOOKUP_FEEDBACK_TYPES = {
    "npc_info": "shallow_npc",
    "npc_motivation": "shallow_npc",
    "next_steps": "unclear_direction",
}
LOOKUP_FEEDBACK_SUGGESTIONS = {
    "shallow_npc": "Give the GM quick access to who this NPC is and what they want.",
    "unclear_direction": "Add clear hooks, exits or conversation prompts pointing onward.",
    "missing_content": "Add GM-facing detail that answers this kind of question.",
}

POSSIBLE_LOOP_PRIOR_VISITS = 2
NARRATION_PREVIEW = 100


class SimulationRunner:
    """Runs one simulated playthrough of an adventure.

    Args:
        adventure_id: Adventure to simulate
        content_source: Where scenes and the guide come from (default: from env config)
        probe: Interface probe for player questions (default: ContentIndexProbe)
        config: Run configuration (default: SimulationConfig())
        archetype_id: Optional player archetype; enables archetype questions,
            creative actions, the archetype report and GM validation
        random_seed: Optional seed for reproducibility
        matcher: Keyword heuristics for action support and knowledge matching

    Raises:
        ValueError: If archetype_id is not in the catalog
    """

    def __init__(
        self,
        adventure_id: str,
        content_source: ContentSource | None = None,
        probe: InterfaceProbe | None = None,
        config: SimulationConfig | None = None,
        archetype_id: str | None = None,
        random_seed: int | None = None,
        matcher: HeuristicMatcher = DEFAULT_MATCHER,
    ):
        self.adventure_id = adventure_id
        self.content_source = content_source or get_content_source()
        self.probe = probe or ContentIndexProbe()
        self.config = config or SimulationConfig()
        self.random_seed = random_seed
        self.matcher = matcher
        self.rng = random.Random(random_seed)

        self.dice = DiceEngine(self.config.dice_mode, self.rng)
        self.player = PlayerStateTracker(self.config.player_max_wounds)
        self.npcs = NPCRegistry()
        self.analyzer = SceneAnalyzer()

        self._fire_trigger = get_trigger_policy(self.config.gm_behavior)
        self._call_check = get_check_policy(self.config.gm_behavior)
        self._interact = get_interaction_policy(self.config.player_behavior)

        self.all_scenes: list[Scene] = []
        self.scene_analyses: list[SceneAnalysis] = []
        self.events: list[SimulationEvent] = []
        self.issues: list[Issue] = []
        self.lookups: list[InformationLookup] = []
        self.visit_counts: Counter[str] = Counter()
        self.termination: Termination | None = None
        self.gm_validator: GMValidator | None = None
        self._current_scene: Scene | None = None

        self.archetype: PlayerArchetype | None = None
        self.question_generator: ArchetypeQuestionGenerator | None = None
        self.archetype_report: ArchetypeReport | None = None
        if archetype_id is not None:
            self.archetype = get_archetype(archetype_id)
            self.question_generator = ArchetypeQuestionGenerator(self.archetype, self.rng)
            self.archetype_report = ArchetypeReport(archetype=self.archetype.id)
            self.log(
                "system",
                f"Archetype initialized: {self.archetype.name}",
                {
                    "motivation": self.archetype.motivation,
                    "traits": {
                        "risk_tolerance": self.archetype.risk_tolerance,
                        "curiosity": self.archetype.curiosity,
                        "empathy": self.archetype.empathy,
                        "suspicion": self.archetype.suspicion,
                    },
                },
            )

    # -------------------------------------------------------------------------
    # Event and issue log
    # -------------------------------------------------------------------------

    def log(
        self,
        actor: str,
        action: str,
        details: dict[str, Any] | None = None,
        result: str | None = None,
        severity: str = "info",
    ) -> SimulationEvent:
        """Append an event to the run's log and mirror it to the logger."""
        event = SimulationEvent(
            timestamp=time.time(),
            actor=actor,
            action=action,
            details=details,
            result=result,
            severity=severity,
        )
        self.events.append(event)
        suffix = f" -> {result}" if result else ""
        logger.log(
            _LOG_LEVELS.get(severity, logging.INFO),
            f"[{actor.upper()}] {action}{suffix}" + (f" {details}" if details else ""),
        )
        return event

    def add_issue(self, severity: str, issue_type: str, message: str) -> Issue:
        """Record a recoverable problem against the current scene."""
        scene_id = self.analyzer.current.scene_id if self.analyzer.active else "unknown"
        issue = Issue(severity=severity, type=issue_type, scene=scene_id, message=message)
        self.issues.append(issue)
        if self.analyzer.active:
            self.analyzer.record_issue(f"[{severity.upper()}] {issue_type}: {message}")
        self.log("system", f"Issue: {issue_type}", {"message": message}, severity=severity)
        return issue

    # -------------------------------------------------------------------------
    # Termination
    # -------------------------------------------------------------------------

    @property
    def terminated(self) -> bool:
        return self.termination is not None

    def terminate(self, reason: TerminationReason, details: str) -> bool:
        """Move to a terminal state. Only the first call has any effect.

        Returns:
            True if this call terminated the run
        """
        if self.termination is not None:
            return False
        at_scene = self.analyzer.current.scene_id if self.analyzer.active else ""
        self.termination = Termination(reason=reason, details=details, at_scene=at_scene)
        severity = "info" if reason == TerminationReason.COMPLETED else "critical"
        self.log(
            "system",
            "SIMULATION TERMINATED",
            {"reason": reason.value, "details": details},
            severity=severity,
        )
        return True

    # -------------------------------------------------------------------------
    # Player state
    # -------------------------------------------------------------------------

    def deal_wound(self, amount: int = 1, source: str = "unknown") -> None:
        """Apply wounds; terminates the run when the player dies.

        Raises:
            ValueError: If amount is not positive
        """
        wounds = self.player.deal_wound(amount)
        if self.analyzer.active:
            self.analyzer.record_wounds(amount)
        self.log(
            "player",
            "Took wound",
            {"amount": amount, "source": source, "total": wounds},
            severity="warning",
        )

        if self.player.is_near_death:
            self.log(
                "system",
                "NEAR DEATH",
                {"wounds": wounds, "max": self.player.max_wounds},
                severity="warning",
            )
        if self.player.is_dead:
            self.terminate(
                TerminationReason.PLAYER_DEATH,
                f"Player died from {source}. Wounds: {wounds}/{self.player.max_wounds}",
            )

    def heal_wound(self, amount: int = 1) -> None:
        remaining = self.player.heal_wound(amount)
        self.log("player", "Healed", {"amount": amount, "remaining": remaining})

    def interact_with_npc(self, npc: NPCReference, interaction: str) -> None:
        if self.npcs.interact(npc.id):
            self.analyzer.record_interaction()
            self.log("player", "NPC interaction", {"npc": npc.name, "interaction": interaction})

    # -------------------------------------------------------------------------
    # Scene selection
    # -------------------------------------------------------------------------

    def select_scenes(self, scenes: list[Scene]) -> list[Scene]:
        """Build the working scene list.

        Restricts to the span between the adventure start and end markers,
        then optionally shuffles, then truncates to ``max_scenes`` when that
        is positive.
        """
        start = next((i for i, s in enumerate(scenes) if s.has_flag(ADVENTURE_START_FLAG)), 0)
        end = next(
            (i for i, s in enumerate(scenes) if s.has_flag(ADVENTURE_END_FLAG)), len(scenes) - 1
        )
        selected = list(scenes[start : max(start, end) + 1])

        if self.config.random_order:
            self.rng.shuffle(selected)
        if self.config.max_scenes > 0:
            selected = selected[: self.config.max_scenes]
        return selected

    # -------------------------------------------------------------------------
    # Main loop
    # -------------------------------------------------------------------------

    async def run(self) -> SimulationReport:
        """Run the simulation to a terminal state.

        Returns:
            The run's SimulationReport; one is produced even when the run
            does not complete
        """
        start_time = datetime.now()
        self.log(
            "system",
            "Simulation starting",
            {"adventure": self.adventure_id, "config": self.config.model_dump(mode="json")},
        )

        scenes = self.content_source.fetch_scenes(self.adventure_id)
        if not scenes:
            logger.error(f"No scenes found for adventure {self.adventure_id}")
            self.terminate(TerminationReason.NO_VALID_EXITS, "No scenes found")
            return self._build_report(start_time)

        self.all_scenes = scenes
        self.log("system", "Scenes loaded", {"count": len(scenes)})
        try:
            await self.probe.prepare(scenes)
        except Exception as e:
            self.log("system", "Probe preparation failed", {"error": str(e)}, severity="warning")

        guide = self.content_source.fetch_guide(self.adventure_id)
        if guide is not None and self.archetype is not None:
            knowledge = extract_knowledge(guide)
            self.gm_validator = GMValidator(knowledge, scenes, self.matcher)
            self.log(
                "system",
                "GM Validator initialized",
                {"mysteries": len(knowledge.mysteries), "npc_secrets": len(knowledge.npc_secrets)},
            )

        for scene in self.select_scenes(scenes):
            if self.terminated:
                break
            await self.play_scene(scene)

        if not self.terminated:
            self.terminate(TerminationReason.COMPLETED, "All selected scenes processed successfully")

        return self._build_report(start_time)

    async def play_scene(self, scene: Scene) -> None:
        """Drive one scene through every phase, stopping early on termination."""
        self.log("system", "SCENE START", {"title": scene.title, "id": scene.id})
        self._current_scene = scene

        self.activate_scene(scene)
        if not self.terminated:
            self.gm_phase(scene)
        if not self.terminated:
            self.player_phase(scene)
        if not self.terminated:
            await self.question_phase(scene)

        if self.terminated:
            await self._interrupt_scene()
            return

        exit_taken = scene.next_scene or next(
            (e.target for e in [*scene.exits, *scene.transitions] if e.target), None
        )
        self._finish_scene(completed=True, exit_taken=exit_taken)

    def activate_scene(self, scene: Scene) -> None:
        prior_visits = sum(1 for a in self.scene_analyses if a.scene_id == scene.id)
        self.visit_counts[scene.id] += 1
        self.log("gm", "Activating scene", {"id": scene.id, "title": scene.title})

        analysis = self.analyzer.begin(scene)
        for npc in scene.npcs:
            previous = self.npcs.track(npc, scene.id)
            if previous is None:
                continue
            verdict = classify_npc_transition(previous, npc.state)
            if verdict == "violation":
                self.add_issue(
                    "warning",
                    "NPC_CONTINUITY",
                    f'NPC "{npc.name}" was defeated earlier but appears active in "{scene.title}"',
                )
            elif verdict == "review":
                self.add_issue(
                    "info",
                    "NPC_CONTINUITY",
                    f'NPC "{npc.name}" was absent earlier but appears in "{scene.title}" '
                    "- verify this is intentional",
                )

        if not analysis.has_exit_path:
            self.add_issue("warning", "NO_EXIT_PATH", "Scene has no explicit transitions defined")

        if prior_visits > POSSIBLE_LOOP_PRIOR_VISITS:
            self.add_issue("warning", "POSSIBLE_LOOP", f"Scene {scene.id} visited multiple times")

        threshold = self.config.loop_visit_threshold
        if threshold is not None and self.visit_counts[scene.id] >= threshold:
            self.terminate(
                TerminationReason.INFINITE_LOOP_DETECTED,
                f"Scene {scene.id} activated {self.visit_counts[scene.id]} times",
            )

        if self.question_generator is not None:
            self.question_generator.update_context(scene, self.player.flags)

    # -------------------------------------------------------------------------
    # GM phase
    # -------------------------------------------------------------------------

    def gm_phase(self, scene: Scene) -> None:
        self.log(
            "gm",
            "Processing scene",
            {
                "title": scene.title,
                "location": scene.location,
                "npcs": len(scene.npcs),
                "triggers": len(scene.triggers),
                "challenges": len(scene.challenges),
            },
        )

        for trigger in scene.triggers:
            if self._fire_trigger(trigger, self.rng):
                self.fire_trigger(trigger)
                if self.terminated:
                    return

        for npc in scene.npcs:
            if gm_introduces_npcs(self.config.gm_behavior, self.rng):
                self.log(
                    "gm",
                    "Introducing NPC",
                    {"name": npc.name, "role": npc.role, "state": npc.state},
                )

        for challenge in scene.challenges:
            if self._call_check(challenge, self.rng):
                self.resolve_check(challenge)
                if self.terminated:
                    return

    def fire_trigger(self, trigger: Trigger) -> None:
        self.log("gm", "Firing trigger", {"label": trigger.label, "irreversible": trigger.irreversible})
        self.analyzer.record_trigger()
        if trigger.damage > 0:
            self.deal_wound(trigger.damage, f"trigger: {trigger.label}")
        if trigger.text:
            preview = trigger.text
            if len(preview) > NARRATION_PREVIEW:
                preview = preview[:NARRATION_PREVIEW] + "..."
            self.log("gm", "Narrating", {"text": preview})

    def resolve_check(self, challenge: Challenge) -> RollResult:
        """Roll the player's skill against a challenge and apply the fallout."""
        bonus = self.player.skill_bonus(challenge.skill)
        self.log(
            "gm",
            "Calling for skill check",
            {"skill": challenge.skill, "dc": challenge.difficulty, "name": challenge.name},
        )

        result = self.dice.roll(challenge.difficulty, bonus)
        self.analyzer.record_check(result.success)
        self.log(
            "player",
            "Rolling skill check",
            {
                "skill": challenge.skill,
                "roll": result.roll,
                "bonus": bonus,
                "total": result.total,
                "dc": challenge.difficulty,
                "critical": result.critical,
            },
            result="SUCCESS" if result.success else "FAILURE",
            severity="info" if result.success else "warning",
        )

        if result.critical == "success" and self.archetype_report is not None:
            title = self._current_scene.title if self._current_scene else ""
            self.archetype_report.satisfying_moments.append(
                f"Natural 20 on {challenge.name or challenge.skill} in {title}"
            )

        if not result.success and challenge.failure_damage > 0:
            self.deal_wound(challenge.failure_damage, f"failed {challenge.skill} check")

        if result.critical == "failure" and (
            challenge.critical_failure or challenge.critical_failure_damage > 0
        ):
            self.log("system", "CRITICAL FAILURE", {"check": challenge.name})
            if challenge.critical_failure_damage > 0 and not self.terminated:
                self.deal_wound(
                    challenge.critical_failure_damage, f"critical failure on {challenge.skill}"
                )

        return result

    # -------------------------------------------------------------------------
    # Player phase
    # -------------------------------------------------------------------------

    def player_phase(self, scene: Scene) -> None:
        self.log("player", "Observing scene", {"location": scene.location})

        environment = scene.environment or {}
        if environment and player_observes_environment(self.config.player_behavior):
            smell = environment.get("smell") or environment.get("Smell")
            if smell and coin_flip(self.rng):
                self.log("player", "Investigating smell", {"smell": smell})
            audio = environment.get("audio") or environment.get("Audio")
            if audio and coin_flip(self.rng):
                description = audio.get("description") if isinstance(audio, dict) else audio
                self.log("player", "Listening", {"audio": description})

        for npc in scene.npcs:
            if self._interact(npc, self.rng):
                self.interact_with_npc(npc, "conversation")

    # -------------------------------------------------------------------------
    # Question phase
    # -------------------------------------------------------------------------

    def generate_questions(self, scene: Scene) -> list[PlayerQuestion]:
        if self.question_generator is not None:
            questions = self.question_generator.generate_questions(scene)
            self.log(
                "player",
                f"{self.archetype.name} generating questions",
                {"count": len(questions), "types": [q.type for q in questions]},
            )
            return questions
        return generate_fallback_questions(scene, self.rng)

    async def question_phase(self, scene: Scene) -> None:
        questions = self.generate_questions(scene)
        budget = self.config.max_turns_per_scene
        for question in questions[:budget]:
            await self.ask(question)
        if len(questions) > budget:
            self.log(
                "player",
                "Questions skipped",
                {"skipped": len(questions) - budget, "budget": budget},
            )

        if self.question_generator is not None:
            self.attempt_creative_actions(scene)

    async def ask(self, question: PlayerQuestion) -> InformationLookup:
        """Resolve one question through the probe and record the lookup."""
        self.log("player", "Asking question", {"type": question.type, "query": question.query})

        started = time.perf_counter()
        try:
            result = await self.probe.lookup(question)
        except Exception as e:
            self.log("system", "Lookup error", {"error": str(e)}, severity="warning")
            result = ProbeResult(search_path=[f"Error: {e}"])
        elapsed_ms = (time.perf_counter() - started) * 1000

        diagnostic_path = None
        if not result.found:
            diagnostic_path = await self._capture_diagnostic(f"info-not-found-{question.type}")
            severity = "critical" if question.type in CRITICAL_QUESTION_TYPES else "warning"
            self.add_issue(
                severity,
                "INFORMATION_NOT_FOUND",
                f'GM could not find answer to player question: "{question.query}" '
                f"(type: {question.type})",
            )
            self._record_unanswered(question)

        lookup = InformationLookup(
            question=question,
            search_path=list(result.search_path),
            found=result.found,
            found_in=result.found_in,
            time_to_find_ms=elapsed_ms,
            interactions=result.interactions,
            diagnostic_path=diagnostic_path,
        )
        self.lookups.append(lookup)
        self.log(
            "gm",
            "Information lookup",
            {
                "type": question.type,
                "found": lookup.found,
                "time_ms": round(elapsed_ms, 2),
                "interactions": lookup.interactions,
            },
            result="FOUND" if lookup.found else "NOT FOUND",
            severity="info" if lookup.found else "warning",
        )
        return lookup

    def _record_unanswered(self, question: PlayerQuestion) -> None:
        if self.archetype_report is None or self.archetype is None:
            return
        report = self.archetype_report
        report.unanswered_questions.append(question)

        scene = self._current_scene
        scene_id = scene.id if scene else question.context.scene_id
        if question.type == "next_steps":
            report.confusion_points.append(f"{scene.title if scene else scene_id}: {question.query}")

        feedback_type = LOOKUP_FEEDBACK_TYPES.get(question.type, "missing_content")
        weight = self.archetype.weight(question.type)
        severity = "high" if weight >= 80 else "medium" if weight >= 50 else "low"
        report.feedback.append(
            ArchetypeFeedback(
                scene=scene_id,
                type=feedback_type,
                description=f"{self.archetype.name} asked: {question.query}",
                suggestion=LOOKUP_FEEDBACK_SUGGESTIONS[feedback_type],
                severity=severity,
            )
        )

    def attempt_creative_actions(self, scene: Scene) -> list[str]:
        """Check the archetype's off-script actions against the scene.

        Returns:
            The actions the scene does not support
        """
        actions = self.question_generator.generate_creative_actions(scene)
        if not actions:
            return []
        self.log("player", f"{self.archetype.name} might attempt", {"actions": actions})

        unsupported = []
        for action in actions:
            if self.matcher.supports_action(scene, action):
                continue
            unsupported.append(action)
            self.archetype_report.failed_actions.append(action)
            self.archetype_report.feedback.append(
                ArchetypeFeedback(
                    scene=scene.id,
                    type="unhandled_action",
                    description=f"{self.archetype.name} wanted to: {action}",
                    suggestion=(
                        "Consider adding support for this action or explaining why "
                        "it's not possible."
                    ),
                    severity="medium",
                )
            )
        return unsupported

    # -------------------------------------------------------------------------
    # Scene completion
    # -------------------------------------------------------------------------

    async def _capture_diagnostic(self, label: str) -> str | None:
        try:
            path = await self.probe.capture_diagnostic(label)
        except Exception as e:
            self.log(
                "system",
                "Diagnostic capture failed",
                {"label": label, "error": str(e)},
                severity="warning",
            )
            return None
        if path:
            self.log("system", "Diagnostic captured", {"path": path})
        return path

    async def _interrupt_scene(self) -> None:
        if self.termination is not None and self.termination.reason == TerminationReason.PLAYER_DEATH:
            self.termination.diagnostic_path = await self._capture_diagnostic("player-death")
        if self.analyzer.active:
            self._finish_scene(completed=False)

    def _finish_scene(self, completed: bool, exit_taken: str | None = None) -> None:
        if exit_taken:
            self.analyzer.record_exit(exit_taken)
        analysis = self.analyzer.finish(completed=completed)
        self.scene_analyses.append(analysis)
        if completed and self.archetype_report is not None:
            self.archetype_report.successful_paths.append(analysis.title)
        self.log(
            "system",
            "SCENE END",
            {
                "title": analysis.title,
                "completed": completed,
                "wounds": analysis.wounds_taken,
                "checks": f"{analysis.checks_passed}/{analysis.checks_attempted}",
            },
        )
        self._current_scene = None

    # -------------------------------------------------------------------------
    # Report
    # -------------------------------------------------------------------------

    def _build_report(self, start_time: datetime) -> SimulationReport:
        gm_validated = None
        if self.gm_validator is not None and self.archetype_report is not None:
            gm_validated = self.gm_validator.generate_validated_report(self.archetype_report)
            self.log(
                "system",
                "GM Validation complete",
                {
                    "total_critiques": gm_validated.total_critiques,
                    **gm_validated.summary.model_dump(),
                },
            )

        generator = ReportGenerator(
            adventure_id=self.adventure_id,
            config=self.config,
            scenes=self.all_scenes,
            random_seed=self.random_seed,
        )
        return generator.generate(
            start_time=start_time,
            end_time=datetime.now(),
            termination=self.termination,
            player_state=self.player.snapshot(),
            npc_states=self.npcs.snapshot(),
            scene_analyses=list(self.scene_analyses),
            dice_stats=self.dice.stats(),
            lookups=list(self.lookups),
            events=list(self.events),
            issues=list(self.issues),
            archetype=self.archetype.id if self.archetype else None,
            archetype_report=self.archetype_report,
            gm_validated_report=gm_validated,
        )


def run_simulation_sync(
    adventure_id: str,
    content_source: ContentSource | None = None,
    probe: InterfaceProbe | None = None,
    config: SimulationConfig | None = None,
    archetype_id: str | None = None,
    random_seed: int | None = None,
) -> SimulationReport:
    """Synchronous wrapper for running a single simulation.

    Args:
        adventure_id: Adventure to simulate
        content_source: Optional content source (default: from env config)
        probe: Optional interface probe
        config: Optional run configuration
        archetype_id: Optional player archetype id
        random_seed: Optional seed for reproducibility

    Returns:
        The run's SimulationReport
    """
    runner = SimulationRunner(
        adventure_id=adventure_id,
        content_source=content_source,
        probe=probe,
        config=config,
        archetype_id=archetype_id,
        random_seed=random_seed,
    )
    return asyncio.run(runner.run())
