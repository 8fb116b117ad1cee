"""Keyword heuristics shared by the runner and the analyzers.

Nothing here tries to understand language. Every decision is a case-folded
substring test against a small rule table, so any verdict can be traced back
to the exact keyword pair that produced it. The tables are plain tuples and
can be replaced per HeuristicMatcher instance.
"""

from __future__ import annotations

import string
from dataclasses import dataclass

from questwright.models.content import Scene

# (keyword in the attempted action, keyword in trigger label + text)
TRIGGER_ACTION_RULES: tuple[tuple[str, str], ...] = (
    ("betray", "betray"),
    ("ally", "ally"),
    ("negotiate", "negotiat"),
    ("save", "save"),
    ("escape", "escape"),
)

# (keyword in the attempted action, keyword in challenge description)
CHALLENGE_ACTION_RULES: tuple[tuple[str, str], ...] = (
    ("negotiate", "negotiat"),
    ("persuad", "persuad"),
    ("sneak", "stealth"),
)

# Actions containing this keyword are supported by any non-default exit
RETREAT_KEYWORD = "retreat"
DEFAULT_EXIT_CONDITION = "default"

# Off-script phrasing that is player agency rather than missing content
AGENCY_PATTERNS: tuple[str, ...] = ("betray", "ally with enemies", "opposite of what")

# Tone substrings and theme names under which emotional distance is stylistic
STYLISTIC_TONES: tuple[str, ...] = ("noir",)
STYLISTIC_THEMES: tuple[str, ...] = ("Grief",)

# Words shorter than this are ignored when comparing against mystery questions
MIN_KEYWORD_LENGTH = 4

# Scenes whose challenges mention these are paced as action scenes
COMBAT_SKILL_KEYWORDS: tuple[str, ...] = ("attack",)
COMBAT_NAME_KEYWORDS: tuple[str, ...] = ("combat",)


@dataclass(frozen=True)
class HeuristicMatcher:
    """Bundle of keyword tables with the predicates that use them.

    Example:
        >>> matcher = HeuristicMatcher()
        >>> matcher.is_player_agency("Chaos Agent wanted to: Attempt to betray companion")
        True
    """

    trigger_rules: tuple[tuple[str, str], ...] = TRIGGER_ACTION_RULES
    challenge_rules: tuple[tuple[str, str], ...] = CHALLENGE_ACTION_RULES
    retreat_keyword: str = RETREAT_KEYWORD
    agency_patterns: tuple[str, ...] = AGENCY_PATTERNS
    stylistic_tones: tuple[str, ...] = STYLISTIC_TONES
    stylistic_themes: tuple[str, ...] = STYLISTIC_THEMES
    min_keyword_length: int = MIN_KEYWORD_LENGTH
    combat_skill_keywords: tuple[str, ...] = COMBAT_SKILL_KEYWORDS
    combat_name_keywords: tuple[str, ...] = COMBAT_NAME_KEYWORDS

    # -------------------------------------------------------------------------
    # Action support
    # -------------------------------------------------------------------------

    def supporting_rule(self, scene: Scene, action: str) -> str | None:
        """Find the content element that supports an attempted action.

        Args:
            scene: Scene the action is attempted in
            action: Free-text action description

        Returns:
            A short description of the matching element, or None if nothing
            in the scene supports the action
        """
        action_lower = action.lower()

        for trigger in scene.triggers:
            trigger_text = f"{trigger.label} {trigger.text}".lower()
            for action_kw, content_kw in self.trigger_rules:
                if action_kw in action_lower and content_kw in trigger_text:
                    return f"trigger:{trigger.id or trigger.label}"

        for challenge in scene.challenges:
            challenge_text = challenge.description.lower()
            for action_kw, content_kw in self.challenge_rules:
                if action_kw in action_lower and content_kw in challenge_text:
                    return f"challenge:{challenge.id or challenge.name}"

        if scene.exits and self.retreat_keyword in action_lower:
            for scene_exit in scene.exits:
                if scene_exit.condition != DEFAULT_EXIT_CONDITION:
                    return f"exit:{scene_exit.target}"

        return None

    def supports_action(self, scene: Scene, action: str) -> bool:
        return self.supporting_rule(scene, action) is not None

    # -------------------------------------------------------------------------
    # Knowledge matching
    # -------------------------------------------------------------------------

    def keywords(self, text: str) -> list[str]:
        """Space-separated words of at least ``min_keyword_length`` characters.

        Surrounding punctuation is stripped first, so "here?" counts as "here".
        """
        words = (w.strip(string.punctuation) for w in text.lower().split(" "))
        return [w for w in words if len(w) >= self.min_keyword_length]

    def shared_keyword(self, text: str, question: str) -> str | None:
        """First keyword of ``question`` that appears anywhere in ``text``."""
        haystack = text.lower()
        for term in self.keywords(question):
            if term in haystack:
                return term
        return None

    def relates_to(self, text: str, question: str) -> bool:
        return self.shared_keyword(text, question) is not None

    def mentions(self, text: str, term: str) -> bool:
        """Case-insensitive substring test; empty terms never match."""
        term = term.strip().lower()
        return bool(term) and term in text.lower()

    def is_player_agency(self, text: str) -> bool:
        lowered = text.lower()
        return any(pattern in lowered for pattern in self.agency_patterns)

    def is_stylistic_distance(self, tone: str, themes: list[str]) -> bool:
        """Whether tone or themes make emotional distance a stylistic choice."""
        tone_lower = tone.lower()
        if any(marker in tone_lower for marker in self.stylistic_tones):
            return True
        return any(theme in themes for theme in self.stylistic_themes)

    # -------------------------------------------------------------------------
    # Pacing
    # -------------------------------------------------------------------------

    def is_combat_scene(self, scene: Scene) -> bool:
        """Action pacing: combat-flavored challenges or damaging triggers."""
        for challenge in scene.challenges:
            skill = challenge.skill.lower()
            name = challenge.name.lower()
            if any(kw in skill for kw in self.combat_skill_keywords):
                return True
            if any(kw in name for kw in self.combat_name_keywords):
                return True
        return any(trigger.damage > 0 for trigger in scene.triggers)


DEFAULT_MATCHER = HeuristicMatcher()
