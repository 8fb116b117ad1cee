"""Simulation engine module for Questwright.

This module contains the run loop and the pieces it is assembled from:
- dice: d20 resolution under the configured weighting
- policies: GM trigger/check and player interaction decisions
- scene_analysis: per-scene metric accumulation
- runner: the SimulationRunner state machine

Usage:
    from questwright.engine import SimulationRunner
    from questwright.storage import get_content_source

    runner = SimulationRunner(
        adventure_id="a-change-of-heart",
        content_source=get_content_source(),
        archetype_id="detective",
        random_seed=42,
    )
    report = await runner.run()
    print(report.termination.reason)
"""

from questwright.engine.dice import DiceEngine, RollResult, get_roll_policy
from questwright.engine.policies import (
    get_check_policy,
    get_interaction_policy,
    get_trigger_policy,
)
from questwright.engine.runner import SimulationRunner, run_simulation_sync
from questwright.engine.scene_analysis import SceneAnalyzer, has_exit_path

__all__ = [
    "DiceEngine",
    "RollResult",
    "get_roll_policy",
    "get_trigger_policy",
    "get_check_policy",
    "get_interaction_policy",
    "SceneAnalyzer",
    "has_exit_path",
    "SimulationRunner",
    "run_simulation_sync",
]
