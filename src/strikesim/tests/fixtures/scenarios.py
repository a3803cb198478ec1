import numpy as np

from strikesim.config import default_parameters
from strikesim.dispatch import update_body_positions
from strikesim.state import SimulationVector, initialize_state


def make_params(seed=0, **sections):
    """Default parameters with some sections overridden, e.g. pred={'strike_reach': 0.02}."""
    params = default_parameters(seed=seed)
    if sections:
        params = params.replace(**sections)
    return params


def pose(prey=(0.0, 0.0, 0.0), pred=(-0.05, 0.0, 0.0)):
    """Simulation vector from (x, y, theta) of the prey and of the predator."""
    return SimulationVector.from_array([*prey, *pred])


def prepared_state(params, X, seed=0):
    """Freshly initialized state with both outlines placed at pose `X`."""
    state = initialize_state(params, np.random.default_rng(seed))
    update_body_positions(state, X)
    return state


def capture_params():
    """Parameters with a long reach so a prey just ahead of the rostrum can be captured."""
    return make_params(pred={'strike_reach': 0.02})


def prey_in_mouth():
    """Prey facing the predator, rostrum 2 mm ahead of the predator's rostrum."""
    return pose(prey=(0.002, 0.0, np.pi), pred=(0.0, 0.0, 0.0))
