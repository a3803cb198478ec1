"""
weihs.py

Simplified behavior used to validate the model against Weihs & Webb's
analytical predator-prey evasion model. Neither fish forages or avoids the
wall. The prey escapes at most once (`escape_num` counts started escapes
from 1); after that it keeps swimming straight at escape speed. The
predator cruises straight or, with a capture check, steers toward a
visible prey.
"""
import logging
from typing import Optional

from strikesim.collaborators import DEFAULT_MODELS, BehaviorModels
from strikesim.config import SimParameters
from strikesim.escape import WEIHS
from strikesim.predator import detect_prey, targeting_omega
from strikesim.prey import escape_expired
from strikesim.state import AgentMode, BehavioralState, SimulationVector

logger = logging.getLogger(__name__)

# escape_num at which the prey stops responding
MAX_ESCAPE_NUM = 2


def weihs_prey(params: SimParameters, state: BehavioralState, t: float, X: SimulationVector,
               accelerate: bool = False, models: Optional[BehaviorModels] = None) -> None:
    models = models or DEFAULT_MODELS
    p = params.prey
    prey = state.prey

    if prey.escape_num >= MAX_ESCAPE_NUM:
        prey.spd = p.spd_escape
        prey.omega = 0.0
        prey.mode = AgentMode.CRUISE
        return

    if not prey.escape_on and X.distance < p.thrsh_escape:
        prey.escape_on = True
        prey.stim_time = t
        logger.info('Prey escape triggered at t=%.4f s', t)

    if escape_expired(prey, t, p.lat, p.dur_escape):
        prey.escape_on = False
        prey.omega = 0.0
        prey.escape_num += 1
        logger.debug('t=%.4f prey escape %d over', t, prey.escape_num - 1)

    if prey.escape_on:
        if accelerate:
            prey.spd = p.spd_escape / p.dur_escape * (t - prey.stim_time) + p.spd0
        else:
            prey.spd = p.spd_escape
        prey.omega, _ = models.prey_escape(t, prey.stim_time, p, 0.0, 0.0, 1.0, WEIHS)
        prey.mode = AgentMode.ESCAPE
    else:
        if not accelerate:
            prey.spd = p.spd0
        prey.omega = 0.0
        prey.mode = AgentMode.CRUISE


def weihs_predator(params: SimParameters, state: BehavioralState, t: float, X: SimulationVector,
                   capture_check: bool = False, models: Optional[BehaviorModels] = None) -> None:
    models = models or DEFAULT_MODELS
    pred = state.pred
    pred.spd = params.pred.spd0

    if not capture_check:
        pred.omega = 0.0
        pred.mode = AgentMode.CRUISE
        return

    detect_prey(params, pred, state.prey, t, X, models)
    if pred.theta_target is not None:
        pred.omega = targeting_omega(pred.theta_target, X.theta_pred, params.pred.wall_omega)
        pred.mode = AgentMode.TARGETING
    else:
        pred.omega = 0.0
        pred.mode = AgentMode.CRUISE


def weihs(params: SimParameters, state: BehavioralState, t: float, X: SimulationVector,
          accelerate: bool = False, capture_check: bool = False,
          models: Optional[BehaviorModels] = None) -> BehavioralState:
    """Combined prey and predator update for the Weihs variants."""
    state.prey.theta = X.theta_prey
    state.pred.theta = X.theta_pred
    weihs_prey(params, state, t, X, accelerate=accelerate, models=models)
    weihs_predator(params, state, t, X, capture_check=capture_check, models=models)
    return state
