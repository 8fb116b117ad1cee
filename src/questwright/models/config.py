"""Simulation configuration for Questwright.

The enums are validated here, when the caller builds a SimulationConfig.
Inside the engine, policy dispatch falls back to its default branch for
anything it has no policy for and never raises.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field


class DiceMode(str, Enum):
    """Weighting policy for d20 rolls."""

    FAIR = "fair"
    LUCKY = "lucky"
    UNLUCKY = "unlucky"
    BLESSED = "blessed"
    CURSED = "cursed"


class GMBehavior(str, Enum):
    """How the synthetic GM decides which triggers and checks to run."""

    THOROUGH = "thorough"
    EFFICIENT = "efficient"
    DRAMATIC = "dramatic"
    RANDOM = "random"
    ADVERSARIAL = "adversarial"
    SUPPORTIVE = "supportive"


class PlayerBehavior(str, Enum):
    """How the synthetic player decides which NPCs to engage."""

    CAUTIOUS = "cautious"
    AGGRESSIVE = "aggressive"
    THOROUGH = "thorough"
    SPEEDRUN = "speedrun"
    RANDOM = "random"
    OPTIMAL = "optimal"


class SimulationConfig(BaseModel):
    """Configuration for a single simulation run.

    Attributes:
        max_scenes: Scene budget; values <= 0 mean "all selected scenes"
        random_order: Shuffle the working scene list before the run
        dice_mode: Dice weighting policy
        gm_behavior: GM policy
        player_behavior: Player policy
        max_turns_per_scene: Upper bound on player questions resolved per scene
        player_max_wounds: Wound threshold at which the player dies
        loop_visit_threshold: Activations of one scene id that end the run as
            ``infinite_loop_detected``; None disables loop termination
    """

    max_scenes: int = 10
    random_order: bool = False
    dice_mode: DiceMode = DiceMode.FAIR
    gm_behavior: GMBehavior = GMBehavior.THOROUGH
    player_behavior: PlayerBehavior = PlayerBehavior.THOROUGH
    max_turns_per_scene: int = Field(default=20, ge=1)
    player_max_wounds: int = Field(default=6, ge=1)
    loop_visit_threshold: int | None = Field(default=None, ge=2)
