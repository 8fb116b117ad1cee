"""GM and player behavior policies.

Every behavior enum value has one pure predicate. Each predicate takes the
content item under consideration plus the run's ``random.Random`` so that
coin-flip behaviors stay reproducible under a seed.

Lookups fall back to the random branch for values without a dedicated
policy. ``dramatic`` has no check policy and ``optimal`` has no interaction
policy; both resolve through that fallback.
"""

from __future__ import annotations

import random
from collections.abc import Callable

from questwright.models.config import GMBehavior, PlayerBehavior
from questwright.models.content import Challenge, NPCReference, Trigger

TriggerPolicy = Callable[[Trigger, random.Random], bool]
CheckPolicy = Callable[[Challenge, random.Random], bool]
InteractionPolicy = Callable[[NPCReference, random.Random], bool]

# Checks at or below this difficulty are the only ones a supportive GM calls
SUPPORTIVE_MAX_DIFFICULTY = 10


def coin_flip(rng: random.Random, threshold: float = 0.5) -> bool:
    """True with probability ``1 - threshold``."""
    return rng.random() > threshold


# =============================================================================
# GM: which triggers fire
# =============================================================================


def fire_thorough(trigger: Trigger, rng: random.Random) -> bool:
    return True


def fire_efficient(trigger: Trigger, rng: random.Random) -> bool:
    return trigger.required


def fire_dramatic(trigger: Trigger, rng: random.Random) -> bool:
    return trigger.irreversible or trigger.dramatic


def fire_adversarial(trigger: Trigger, rng: random.Random) -> bool:
    return trigger.harmful


def fire_supportive(trigger: Trigger, rng: random.Random) -> bool:
    return trigger.helpful


def fire_random(trigger: Trigger, rng: random.Random) -> bool:
    return coin_flip(rng)


TRIGGER_POLICIES: dict[GMBehavior, TriggerPolicy] = {
    GMBehavior.THOROUGH: fire_thorough,
    GMBehavior.EFFICIENT: fire_efficient,
    GMBehavior.DRAMATIC: fire_dramatic,
    GMBehavior.ADVERSARIAL: fire_adversarial,
    GMBehavior.SUPPORTIVE: fire_supportive,
    GMBehavior.RANDOM: fire_random,
}


# =============================================================================
# GM: which checks get called
# =============================================================================


def call_always(challenge: Challenge, rng: random.Random) -> bool:
    return True


def call_required(challenge: Challenge, rng: random.Random) -> bool:
    return challenge.required


def call_supportive(challenge: Challenge, rng: random.Random) -> bool:
    return challenge.difficulty <= SUPPORTIVE_MAX_DIFFICULTY


def call_random(challenge: Challenge, rng: random.Random) -> bool:
    return coin_flip(rng, 0.3)


CHECK_POLICIES: dict[GMBehavior, CheckPolicy] = {
    GMBehavior.THOROUGH: call_always,
    GMBehavior.ADVERSARIAL: call_always,
    GMBehavior.EFFICIENT: call_required,
    GMBehavior.SUPPORTIVE: call_supportive,
    GMBehavior.RANDOM: call_random,
}


# =============================================================================
# Player: which NPCs to engage
# =============================================================================


def interact_always(npc: NPCReference, rng: random.Random) -> bool:
    return True


def interact_cautious(npc: NPCReference, rng: random.Random) -> bool:
    return not npc.hostile


def interact_speedrun(npc: NPCReference, rng: random.Random) -> bool:
    return npc.required


def interact_random(npc: NPCReference, rng: random.Random) -> bool:
    return coin_flip(rng)


INTERACTION_POLICIES: dict[PlayerBehavior, InteractionPolicy] = {
    PlayerBehavior.THOROUGH: interact_always,
    PlayerBehavior.AGGRESSIVE: interact_always,
    PlayerBehavior.CAUTIOUS: interact_cautious,
    PlayerBehavior.SPEEDRUN: interact_speedrun,
    PlayerBehavior.RANDOM: interact_random,
}


def get_trigger_policy(behavior: GMBehavior | str) -> TriggerPolicy:
    try:
        return TRIGGER_POLICIES.get(GMBehavior(behavior), fire_random)
    except ValueError:
        return fire_random


def get_check_policy(behavior: GMBehavior | str) -> CheckPolicy:
    try:
        return CHECK_POLICIES.get(GMBehavior(behavior), call_random)
    except ValueError:
        return call_random


def get_interaction_policy(behavior: PlayerBehavior | str) -> InteractionPolicy:
    try:
        return INTERACTION_POLICIES.get(PlayerBehavior(behavior), interact_random)
    except ValueError:
        return interact_random


def gm_introduces_npcs(behavior: GMBehavior | str, rng: random.Random) -> bool:
    """Whether the GM narrates NPC introductions this scene."""
    if behavior == GMBehavior.THOROUGH:
        return True
    if behavior == GMBehavior.RANDOM:
        return coin_flip(rng)
    return False


def player_observes_environment(behavior: PlayerBehavior | str) -> bool:
    """Whether the player pokes at the scene's sensory details."""
    return behavior in (PlayerBehavior.THOROUGH, PlayerBehavior.RANDOM)
