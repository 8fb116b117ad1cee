"""Questwright: adventure simulation and validation.

Plays a tabletop adventure with a synthetic GM and player, probes how well
the GM-facing content answers player questions, and produces a report on
difficulty, coherence and content gaps.
"""

from questwright.engine import SimulationRunner, run_simulation_sync
from questwright.models import DiceMode, GMBehavior, PlayerBehavior, SimulationConfig, SimulationReport

__version__ = "0.1.0"

__all__ = [
    "SimulationRunner",
    "run_simulation_sync",
    "SimulationConfig",
    "SimulationReport",
    "DiceMode",
    "GMBehavior",
    "PlayerBehavior",
]
