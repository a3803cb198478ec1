"""
dispatch.py

Entry point called by the integrator once per time step. Determines the
behavior of each fish for a single instant of time:

    state = None
    for t in times:
        state = give_behavior('default', params, state, t, X)
        if state.stopsim:
            break
        X = advance(X, state)

The first call initializes the state. Every call first places both body
outlines in the global frame, then runs the behavior for the requested
simulation type:

- 'default': prey, predator, deterministic strike
- 'weihs': simplified prey/predator update, no strike
- 'weihs-with-acceleration': as 'weihs', prey speed ramps up during the escape
- 'weihs-with-capture-check': simplified prey, predator targeting, deterministic strike
- 'simple-strike': as 'weihs-with-acceleration'; the run stops once a strike
  has run its course, otherwise the deterministic strike is evaluated
"""
import logging
from typing import Optional, Union

import numpy as np

from strikesim.collaborators import DEFAULT_MODELS, BehaviorModels
from strikesim.config import SimParameters
from strikesim.geometry import BODY_TO_GLOBAL
from strikesim.predator import predator_behavior
from strikesim.prey import prey_behavior
from strikesim.state import (BehavioralState, SimulationMode, SimulationVector, StrikeTestMode,
                             initialize_state)
from strikesim.strike import strike
from strikesim.weihs import weihs

logger = logging.getLogger(__name__)


def update_body_positions(state: BehavioralState, X: SimulationVector,
                          models: Optional[BehaviorModels] = None) -> BehavioralState:
    """Transform both body outlines into the global frame and store the orientations."""
    models = models or DEFAULT_MODELS
    state.pred.body_global = models.coord_trans(BODY_TO_GLOBAL, X.theta_pred, X.pred_position,
                                                state.pred.body_local)
    state.prey.body_global = models.coord_trans(BODY_TO_GLOBAL, X.theta_prey, X.prey_position,
                                                state.prey.body_local)
    state.prey.theta = X.theta_prey
    state.pred.theta = X.theta_pred
    return state


def give_behavior(sim_type: Union[str, SimulationMode], params: SimParameters,
                  state: Optional[BehavioralState], t: float, X,
                  rng: Optional[np.random.Generator] = None,
                  models: Optional[BehaviorModels] = None) -> BehavioralState:
    """Determine the behavior of both fish at time `t`.

    Parameters
    - sim_type: a `SimulationMode` or its string value
    - params: run parameters
    - state: state returned by the previous call, or None on the first call
    - t: current time (s)
    - X: pose (x_prey, y_prey, theta_prey, x_pred, y_pred, theta_pred)
    - rng: random generator; defaults to the one kept on the state
    - models: replacement sub-models; defaults to `DEFAULT_MODELS`

    Returns the updated state (the same object when one was passed in).
    Raises ValueError for an unknown `sim_type` or a malformed `X`.
    """
    mode = SimulationMode.parse(sim_type)
    X = SimulationVector.from_array(X)
    models = models or DEFAULT_MODELS

    if state is None:
        state = initialize_state(params, rng)
    if rng is None:
        rng = state.rng
    if rng is None:
        rng = state.rng = np.random.default_rng(params.seed)

    update_body_positions(state, X, models)

    if mode is SimulationMode.DEFAULT:
        prey_behavior(params, state.prey, t, X, rng, models)
        predator_behavior(params, state.pred, state.prey, t, X, models)
        state.pred.strike_type = StrikeTestMode.DETERMINISTIC
        strike(params, state, t, X, rng=rng, models=models)

    elif mode is SimulationMode.WEIHS:
        weihs(params, state, t, X, models=models)

    elif mode is SimulationMode.WEIHS_ACCELERATION:
        weihs(params, state, t, X, accelerate=True, models=models)

    elif mode is SimulationMode.WEIHS_CAPTURE_CHECK:
        weihs(params, state, t, X, capture_check=True, models=models)
        state.pred.strike_type = StrikeTestMode.DETERMINISTIC
        strike(params, state, t, X, rng=rng, models=models)

    elif mode is SimulationMode.SIMPLE_STRIKE:
        weihs(params, state, t, X, accelerate=True, models=models)
        strike_time = state.pred.strike_time
        if strike_time is not None and t > strike_time + params.pred.strike_dur:
            state.stopsim = True
            logger.info('Strike completed at t=%.4f s; stopping simulation', t)
        else:
            state.pred.strike_type = StrikeTestMode.DETERMINISTIC
            strike(params, state, t, X, rng=rng, models=models)

    else:
        raise ValueError(f'Simulation type not recognized: {sim_type!r}')

    return state
