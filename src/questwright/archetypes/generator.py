"""Question and creative-action generation for archetype players.

For each scene the generator:

1. Runs one Bernoulli trial per candidate question, using the archetype's
   weight for that question type (``random() * 100 < weight``).
2. Adds the archetype's own hand-written questions.
3. Sorts everything by descending weight so favored question types are
   resolved first.

Separately it lists "creative actions": things the archetype would try that
the content may not support. The runner checks those against the scene with
the HeuristicMatcher.
"""

from __future__ import annotations

import random
from collections.abc import Callable

from questwright.archetypes.catalog import PlayerArchetype
from questwright.models.content import NPCReference, Scene
from questwright.models.report import PlayerQuestion, QuestionContext

BACKGROUND_NPC_ROLE = "Background NPC"
COMPANION_ROLE = "The Companion"
COMBATANTS_ROLE = "Combatants"
COMBAT_SCENE_TYPE = "combat"


def _question(
    question_type: str, query: str, scene: Scene, npc: NPCReference | None = None
) -> PlayerQuestion:
    return PlayerQuestion(
        type=question_type,
        query=query,
        context=QuestionContext(scene_id=scene.id, npc_id=npc.id if npc else None),
    )


# =============================================================================
# Archetype-specific questions
# =============================================================================


def detective_questions(scene: Scene, visited: set[str]) -> list[PlayerQuestion]:
    questions = []
    if len(scene.npcs) > 1:
        questions.append(
            _question("npc_motivation", "Are any of these NPCs lying or hiding something?", scene)
        )
    questions.append(
        _question("backstory", "What happened here before I arrived? What's the timeline?", scene)
    )
    if len(visited) > 1:
        questions.append(
            _question("backstory", "How does this location connect to what I've seen before?", scene)
        )
    return questions


def chaos_agent_questions(scene: Scene, visited: set[str]) -> list[PlayerQuestion]:
    questions = [
        _question("skill_check", "What happens if I do the opposite of what's expected?", scene)
    ]
    if any(npc.hostile or npc.role == COMBATANTS_ROLE for npc in scene.npcs):
        questions.append(
            _question("npc_motivation", "Can I ally with the enemies instead of fighting them?", scene)
        )
    if any(npc.role == COMPANION_ROLE for npc in scene.npcs):
        questions.append(
            _question("skill_check", "What if I betray or abandon my companion?", scene)
        )
    return questions


def empath_questions(scene: Scene, visited: set[str]) -> list[PlayerQuestion]:
    questions = [
        _question("npc_motivation", f"How is {npc.name} feeling? Are they suffering?", scene, npc)
        for npc in scene.npcs
    ]
    if scene.scene_type.lower() == COMBAT_SCENE_TYPE:
        questions.append(
            _question("skill_check", "Is there a way to resolve this without violence?", scene)
        )
    questions.append(
        _question(
            "next_steps", "Is there a way to help everyone here? A good ending for all?", scene
        )
    )
    return questions


def skeptic_questions(scene: Scene, visited: set[str]) -> list[PlayerQuestion]:
    questions = [
        _question("npc_motivation", f"Can I trust {npc.name}? What's their real agenda?", scene, npc)
        for npc in scene.npcs
    ]
    questions.append(_question("environment", "Are there any traps or hidden dangers here?", scene))
    questions.append(
        _question("location_detail", "What are my escape routes if things go wrong?", scene)
    )
    return questions


def explorer_questions(scene: Scene, visited: set[str]) -> list[PlayerQuestion]:
    return [
        _question(
            "location_detail",
            "Are there any hidden rooms, secret passages, or unexplored areas?",
            scene,
        ),
        _question("environment", "What objects can I interact with here?", scene),
        _question("backstory", "What's the history of this place? Any interesting lore?", scene),
    ]


QuestionBuilder = Callable[[Scene, set[str]], list[PlayerQuestion]]

ARCHETYPE_QUESTION_BUILDERS: dict[str, QuestionBuilder] = {
    "detective": detective_questions,
    "chaos_agent": chaos_agent_questions,
    "empath": empath_questions,
    "skeptic": skeptic_questions,
    "explorer": explorer_questions,
}


# =============================================================================
# Creative actions
# =============================================================================

CREATIVE_ACTIONS: dict[str, tuple[str, ...]] = {
    "chaos_agent": (
        "Attempt to betray companion",
        "Try to ally with enemies",
        "Refuse to cooperate with the plot",
        "Steal from friendly NPCs",
    ),
    "empath": (
        "Try to save everyone",
        "Negotiate with hostile NPCs",
        "Ask for consent before major decisions",
        "Look for non-violent solutions",
    ),
    "detective": (
        "Examine every item for clues",
        "Cross-reference NPC statements",
        "Search for hidden documents",
        "Analyze physical evidence",
    ),
    "explorer": (
        "Check every door and container",
        "Look for secret passages",
        "Go back to previous areas",
        "Explore off the main path",
    ),
    "tactician": (
        "Prepare ambush before combat",
        "Gather resources before proceeding",
        "Scout ahead before committing",
        "Set up escape route",
    ),
}


class ArchetypeQuestionGenerator:
    """Generates the questions and actions one archetype produces per scene.

    The generator keeps a small amount of play context (visited scene ids and
    NPCs seen so far) so that questions can refer back to earlier scenes.
    """

    def __init__(self, archetype: PlayerArchetype, rng: random.Random | None = None):
        self.archetype = archetype
        self._rng = rng or random.Random()
        self.visited_scenes: set[str] = set()
        self.known_npcs: dict[str, NPCReference] = {}
        self.current_flags: set[str] = set()

    def update_context(self, scene: Scene, flags: set[str]) -> None:
        self.visited_scenes.add(scene.id)
        self.current_flags = set(flags)
        for npc in scene.npcs:
            self.known_npcs[npc.id] = npc

    def should_ask(self, question_type: str) -> bool:
        return self._rng.random() * 100 < self.archetype.weight(question_type)

    def generate_questions(self, scene: Scene) -> list[PlayerQuestion]:
        """Questions for a scene, highest-affinity type first."""
        questions = self._npc_questions(scene)
        questions.extend(self._environment_questions(scene))
        builder = ARCHETYPE_QUESTION_BUILDERS.get(self.archetype.id)
        if builder is not None:
            questions.extend(builder(scene, self.visited_scenes))
        # sorted() is stable, so ties keep generation order
        return sorted(questions, key=lambda q: self.archetype.weight(q.type), reverse=True)

    def _npc_questions(self, scene: Scene) -> list[PlayerQuestion]:
        questions = []
        for npc in scene.npcs:
            if self.should_ask("npc_info"):
                questions.append(
                    _question(
                        "npc_info", f"Who is {npc.name}? What do I know about them?", scene, npc
                    )
                )
            if self.should_ask("npc_motivation"):
                questions.append(
                    _question(
                        "npc_motivation", f"What does {npc.name} want? Why are they here?", scene, npc
                    )
                )
            if self.should_ask("backstory") and npc.role != BACKGROUND_NPC_ROLE:
                questions.append(
                    _question(
                        "backstory",
                        f"What's {npc.name}'s history? How did they end up here?",
                        scene,
                        npc,
                    )
                )
        return questions

    def _environment_questions(self, scene: Scene) -> list[PlayerQuestion]:
        questions = []
        if self.should_ask("environment"):
            questions.append(_question("environment", "What do I see, hear, and smell here?", scene))
        if self.should_ask("location_detail"):
            questions.append(
                _question(
                    "location_detail", f"What is {scene.location} like? Describe it in detail.", scene
                )
            )
        if self.should_ask("next_steps"):
            questions.append(
                _question("next_steps", "What should I do next? Where can I go from here?", scene)
            )
        return questions

    def generate_creative_actions(self, scene: Scene) -> list[str]:
        """Off-script actions this archetype would attempt in a scene."""
        actions = list(CREATIVE_ACTIONS.get(self.archetype.id, ()))
        if self.archetype.id == "chaos_agent" and scene.npcs:
            actions.append(f"Attack {scene.npcs[0].name or 'an NPC'} unprovoked")
        return actions


def generate_fallback_questions(scene: Scene, rng: random.Random) -> list[PlayerQuestion]:
    """Questions asked when the run has no archetype.

    One random NPC is always asked about; the other question types each fire
    with a fixed probability.
    """
    questions = []
    if scene.npcs:
        npc = scene.npcs[int(rng.random() * len(scene.npcs))]
        questions.append(_question("npc_info", f"Who is {npc.name}?", scene, npc))
        if rng.random() > 0.5:
            questions.append(_question("npc_motivation", f"What does {npc.name} want?", scene, npc))
    if rng.random() > 0.6:
        questions.append(_question("environment", "What do I see/hear/smell here?", scene))
    if rng.random() > 0.7:
        questions.append(_question("location_detail", f"What is {scene.location} like?", scene))
    if rng.random() > 0.8:
        questions.append(_question("next_steps", "What should I do next?", scene))
    return questions
