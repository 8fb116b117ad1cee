"""GM-side review of archetype critiques.

Players critique from a limited view of the story. The GM, who knows the
whole adventure, sorts each critique into a genuine content gap, intended
design (mysteries, delayed reveals, red herrings) or something the GM can
simply handle at the table.

Rules are applied in a fixed order and the first match wins:

1. A mystery whose question shares a keyword with the critique and whose
   reveal scene comes strictly later -> ``red_herring`` / ``delayed_reveal``
2. An NPC secret whose NPC id or first public word appears in the critique
   -> ``intentional_mystery``
3. An unhandled action phrased as betrayal, alliance or contrarianism
   -> ``gm_discretion``
4. Emotional or NPC-depth critiques under a noir tone or grief theme
   -> ``gm_discretion``
5. Anything else -> ``valid_issue``
"""

from __future__ import annotations

import logging

from questwright.analysis.knowledge import AdventureKnowledge
from questwright.heuristics import DEFAULT_MATCHER, HeuristicMatcher
from questwright.models.content import Scene
from questwright.models.report import (
    ArchetypeFeedback,
    ArchetypeReport,
    GMValidatedReport,
    GMValidatedSummary,
    GMValidation,
    ValidatedCritique,
)

logger = logging.getLogger(__name__)

INTENTIONAL_STATUSES = frozenset({"intentional_mystery", "delayed_reveal", "red_herring"})
DISCRETION_STATUSES = frozenset({"gm_discretion", "player_choice"})
FALSE_POSITIVE_STATUSES = frozenset({"out_of_scope", "false_positive"})

STYLISTIC_FEEDBACK_TYPES = frozenset({"emotional_gap", "shallow_npc"})


class GMValidator:
    """Classifies archetype critiques against the adventure's knowledge base.

    Args:
        knowledge: What the GM knows
        scenes: Scenes in content order, used to compare reveal points
        matcher: Keyword tables for the matching rules
    """

    def __init__(
        self,
        knowledge: AdventureKnowledge,
        scenes: list[Scene],
        matcher: HeuristicMatcher = DEFAULT_MATCHER,
    ):
        self.knowledge = knowledge
        self.scenes = list(scenes)
        self.matcher = matcher
        self._scene_order = {scene.id: i for i, scene in enumerate(self.scenes)}

    def scene_title(self, scene_id: str) -> str:
        for scene in self.scenes:
            if scene.id == scene_id:
                return scene.title or scene_id
        return scene_id

    def validate_critique(self, feedback: ArchetypeFeedback, scene_index: int) -> GMValidation:
        """Classify one critique.

        Args:
            feedback: The critique to classify
            scene_index: Content-order position of the critique's scene, used
                when the feedback's scene id is not in the scene list

        Returns:
            The GM's verdict
        """
        current_index = self._scene_order.get(feedback.scene, scene_index)
        description = feedback.description

        for mystery in self.knowledge.mysteries:
            if not self.matcher.relates_to(description, mystery.question):
                continue
            reveal_index = self._scene_order.get(mystery.reveal_scene)
            if reveal_index is not None and reveal_index > current_index:
                title = self.scene_title(mystery.reveal_scene)
                return GMValidation(
                    status="red_herring" if mystery.is_red_herring else "delayed_reveal",
                    reasoning=f'This is answered in "{title}". Player isn\'t supposed to know yet.',
                    reveal_scene=mystery.reveal_scene,
                    gm_notes=(
                        "Let the player wonder. This is intentional misdirection."
                        if mystery.is_red_herring
                        else "Acknowledge the question but don't answer. Build anticipation."
                    ),
                )

        for npc_id, secret in self.knowledge.npc_secrets.items():
            public_words = secret.public_info.split()
            first_word = public_words[0] if public_words else ""
            if self.matcher.mentions(description, npc_id) or self.matcher.mentions(
                description, first_word
            ):
                return GMValidation(
                    status="intentional_mystery",
                    reasoning=f'{npc_id}\'s true nature is a secret: "{secret.secret}"',
                    gm_notes=f"Reveal condition: {secret.reveal_condition}",
                )

        if feedback.type == "unhandled_action" and self.matcher.is_player_agency(description):
            return GMValidation(
                status="gm_discretion",
                reasoning="This is a valid player choice that the GM can adjudicate at the table.",
                gm_notes=(
                    "Consider: What would the consequences be? How would NPCs react? "
                    "This doesn't need to be pre-scripted."
                ),
            )

        if feedback.type in STYLISTIC_FEEDBACK_TYPES and self.matcher.is_stylistic_distance(
            self.knowledge.tone, list(self.knowledge.themes)
        ):
            return GMValidation(
                status="gm_discretion",
                reasoning=(
                    f"The {self.knowledge.tone or 'adventure'} tone may intentionally "
                    "limit emotional exposition."
                ),
                gm_notes=(
                    "Consider if this NPC needs more depth or if their mystery serves "
                    "the atmosphere."
                ),
            )

        return GMValidation(
            status="valid_issue",
            reasoning="This critique appears to identify a genuine gap in the adventure content.",
            gm_notes="Consider addressing this in the scene content or GM notes.",
        )

    def generate_validated_report(self, report: ArchetypeReport) -> GMValidatedReport:
        """Validate every critique in an archetype report.

        Each feedback item gets its GMValidation attached and is filed into
        the matching bucket.
        """
        valid: list[ValidatedCritique] = []
        intentional: list[ValidatedCritique] = []
        discretion: list[ValidatedCritique] = []
        false_positives = 0

        for index, feedback in enumerate(report.feedback):
            validation = self.validate_critique(feedback, index)
            feedback.gm_validation = validation
            critique = ValidatedCritique(feedback=feedback, validation=validation)

            if validation.status == "valid_issue":
                valid.append(critique)
            elif validation.status in INTENTIONAL_STATUSES:
                intentional.append(critique)
            elif validation.status in DISCRETION_STATUSES:
                discretion.append(critique)
            elif validation.status in FALSE_POSITIVE_STATUSES:
                false_positives += 1

        logger.info(
            f"GM validation for {report.archetype}: {len(valid)} valid, "
            f"{len(intentional)} intentional, {len(discretion)} discretion"
        )
        return GMValidatedReport(
            archetype=report.archetype,
            total_critiques=len(report.feedback),
            valid_issues=valid,
            intentional_design=intentional,
            gm_discretion=discretion,
            summary=GMValidatedSummary(
                valid_issue_count=len(valid),
                intentional_design_count=len(intentional),
                gm_discretion_count=len(discretion),
                false_positive_count=false_positives,
            ),
        )
