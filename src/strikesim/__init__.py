"""Behavior engine for a predator fish striking at an evasive prey in a circular arena."""
from strikesim.config import SimParameters, default_parameters
from strikesim.dispatch import give_behavior
from strikesim.state import BehavioralState, SimulationMode, SimulationVector, StrikeTestMode

__all__ = [
    'BehavioralState',
    'SimParameters',
    'SimulationMode',
    'SimulationVector',
    'StrikeTestMode',
    'default_parameters',
    'give_behavior',
]
