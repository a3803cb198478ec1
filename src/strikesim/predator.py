"""
predator.py

Behavior of the predator for a single instant: wall avoidance trumps
targeted swimming toward a visible prey, which trumps foraging.
"""
import logging
from typing import Optional

import numpy as np

from strikesim.avoidance import wall_avoidance, wall_in_field
from strikesim.collaborators import DEFAULT_MODELS, BehaviorModels
from strikesim.config import SimParameters
from strikesim.state import AgentMode, PredatorState, PreyState, SimulationVector

logger = logging.getLogger(__name__)


def targeting_omega(theta_target: float, theta: float, gain: float) -> float:
    """Turning rate proportional to the normalized deviation from the target."""
    return (theta_target - theta) / np.pi * gain


def detect_prey(params: SimParameters, pred: PredatorState, prey: PreyState, t: float,
                X: SimulationVector, models: BehaviorModels) -> None:
    """Update the predator's target bearing and in-field time from the visual detector."""
    was_tracking = pred.theta_target is not None
    pred.theta_target, pred.in_field_time = models.see_fish(
        t, X.pred_position, X.theta_pred, prey.body_global, params.pred,
        pred.in_field_time, pred.theta_target)
    if pred.theta_target is not None and not was_tracking:
        logger.debug('t=%.4f predator acquired target at %.3f rad', t, pred.theta_target)


def predator_behavior(params: SimParameters, pred: PredatorState, prey: PreyState, t: float,
                      X: SimulationVector, models: Optional[BehaviorModels] = None) -> PredatorState:
    """Set the predator's turning rate and speed for time `t`.

    Both body outlines must already be in the global frame; detection uses
    the prey's.
    """
    models = models or DEFAULT_MODELS
    p = params.pred

    pred.spd = p.spd0
    detect_prey(params, pred, prey, t, X, models)

    if wall_in_field(pred.body_global, params.param.tank_radius, p.field_size):
        pred.omega, bearing = wall_avoidance(X.pred_position, X.theta_pred, params.param.tank_radius,
                                             p.wall_omega, models.coord_trans)
        # wall avoidance disables targeting
        pred.theta_target = None
        pred.in_field_time = None
        pred.t_sccd = t
        pred.on_sccd = False
        pred.mode = AgentMode.WALL_AVOIDANCE
        logger.debug('t=%.4f predator wall avoidance: bearing=%.3f omega=%.3f', t, bearing, pred.omega)
    elif pred.theta_target is not None:
        pred.omega = targeting_omega(pred.theta_target, X.theta_pred, p.wall_omega)
        pred.t_sccd = t
        pred.on_sccd = False
        pred.mode = AgentMode.TARGETING
    else:
        pred.omega, pred.t_sccd, pred.dir_sccd, pred.on_sccd = models.foraging(
            p, pred.t_sccd, t, pred.dir_sccd, pred.on_sccd)
        pred.mode = AgentMode.FORAGING
    return pred
