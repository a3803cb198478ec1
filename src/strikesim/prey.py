"""
prey.py

Behavior of the prey for a single instant: wall avoidance trumps the escape
response, which trumps foraging.
"""
import logging
from typing import Optional

import numpy as np

from strikesim.avoidance import wall_avoidance, wall_in_field
from strikesim.collaborators import DEFAULT_MODELS, BehaviorModels
from strikesim.config import SimParameters
from strikesim.escape import FULL
from strikesim.state import AgentMode, PreyState, SimulationVector, saccade_direction

logger = logging.getLogger(__name__)

# standard deviation of the escape turning rate (rad/s)
ESCAPE_RATE_SD = 1.5


def trigger_escape(prey: PreyState, t: float, rng: np.random.Generator, rot_spd_mean: float) -> None:
    """Start an escape: note its onset and draw its direction and turning rate."""
    prey.escape_on = True
    prey.stim_time = t
    prey.dir_esc = saccade_direction(rng.random())
    prey.escape_rate = float(rng.normal(rot_spd_mean, ESCAPE_RATE_SD))
    logger.info('Prey escape triggered at t=%.4f s (dir=%+.0f, rate=%.2f rad/s)',
                t, prey.dir_esc, prey.escape_rate)


def escape_expired(prey: PreyState, t: float, lat: float, dur_escape: float) -> bool:
    return prey.escape_on and prey.stim_time is not None and (t - prey.stim_time - lat) > dur_escape


def prey_behavior(params: SimParameters, prey: PreyState, t: float, X: SimulationVector,
                  rng: np.random.Generator, models: Optional[BehaviorModels] = None) -> PreyState:
    """Set the prey's turning rate and speed for time `t`.

    `prey.body_global` must already hold the outline for the current pose.
    """
    models = models or DEFAULT_MODELS
    p = params.prey
    position = X.prey_position

    prey.spd = p.spd0
    prey.theta0 = p.theta0

    if wall_in_field(prey.body_global, params.param.tank_radius, p.field_size):
        prey.omega, bearing = wall_avoidance(position, X.theta_prey, params.param.tank_radius,
                                             p.wall_omega, models.coord_trans)
        prey.t_sccd = t
        prey.on_sccd = False
        prey.mode = AgentMode.WALL_AVOIDANCE
        logger.debug('t=%.4f prey wall avoidance: bearing=%.3f omega=%.3f', t, bearing, prey.omega)
        return prey

    if not prey.escape_on and X.distance < p.thrsh_escape:
        trigger_escape(prey, t, rng, p.rot_spd_escape)

    if escape_expired(prey, t, p.lat, p.dur_escape):
        prey.escape_on = False
        logger.debug('t=%.4f prey escape over', t)

    if prey.escape_on:
        prey.omega, prey.spd = models.prey_escape(t, prey.stim_time, p, prey.theta0, prey.spd,
                                                  prey.dir_esc, FULL, prey.escape_rate)
        prey.mode = AgentMode.ESCAPE
    else:
        prey.omega, prey.t_sccd, prey.dir_sccd, prey.on_sccd = models.foraging(
            p, prey.t_sccd, t, prey.dir_sccd, prey.on_sccd)
        prey.mode = AgentMode.FORAGING
    return prey
