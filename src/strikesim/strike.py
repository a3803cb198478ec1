"""
strike.py

The predator's strike: a time-bounded suction event that starts once the
prey is within `strike_thresh`. During the strike the suction zone reaches
out and back in a smooth bump, sweeping a fan of `strike_range` in front of
the rostrum. The prey is captured when more than half of its outline falls
inside the zone.

Public functions:
- `strike_reach(t_c, dur, reach)` -> radius of the suction zone
- `capture_zone_mask(points_local, cap_range, strike_range)` -> bool mask
- `suction_zone(r_suc, strike_range, num_pts)` -> local fan of points
- `strike(params, state, t, X, ...)` -> BehavioralState
"""
import logging
import warnings
from typing import Optional, Union

import numpy as np
from scipy import stats

from strikesim.collaborators import DEFAULT_MODELS, BehaviorModels
from strikesim.config import SimParameters
from strikesim.geometry import BODY_TO_GLOBAL, GLOBAL_TO_BODY, cart2pol
from strikesim.state import BehavioralState, SimulationVector, StrikeTestMode

logger = logging.getLogger(__name__)


def strike_reach(t_c: float, dur: float, reach: float) -> float:
    """Radius of the suction zone `t_c` seconds into a strike of duration `dur`.

    Rises from 0 to half of `reach` at mid-strike and returns to 0 at `dur`.
    """
    return 0.5 * reach * (0.5 * (np.sin(2 * np.pi * t_c / dur - np.pi / 2) + 1))


def suction_zone(r_suc: float, strike_range: float, num_pts: int) -> np.ndarray:
    """Local outline of the suction zone: origin, arc of `num_pts`, origin."""
    phi = np.linspace(-strike_range / 2, strike_range / 2, num_pts)
    x = np.concatenate(([0.0], r_suc * np.cos(phi), [0.0]))
    y = np.concatenate(([0.0], r_suc * np.sin(phi), [0.0]))
    return np.column_stack((x, y))


def capture_zone_mask(points_local, cap_range: float, strike_range: float) -> np.ndarray:
    """Mask of points (predator frame) that lie inside the capture zone."""
    phi, r = cart2pol(points_local)
    return (r < cap_range) & (phi >= -strike_range / 2) & (phi <= strike_range / 2)


def capture_range(r_suc: float, strike_type: StrikeTestMode, rng: Optional[np.random.Generator]) -> float:
    if strike_type is StrikeTestMode.DETERMINISTIC:
        return r_suc
    if strike_type is StrikeTestMode.PROBABILISTIC:
        if rng is None:
            raise ValueError('A random generator is required for a probabilistic strike')
        return float(stats.chi2.rvs(2, random_state=rng)) / 2.0 * r_suc
    raise ValueError(f'Do not recognize requested strike type: {strike_type!r}')


def resolve_strike_type(state: BehavioralState, mode: Union[str, StrikeTestMode, None]) -> StrikeTestMode:
    """Strike-test mode from the argument or the predator state; unset falls back to deterministic."""
    if mode is None:
        mode = state.pred.strike_type
    if mode is None:
        warnings.warn('Strike type set to deterministic', RuntimeWarning, stacklevel=3)
        logger.warning('Strike type not set; using deterministic')
        mode = StrikeTestMode.DETERMINISTIC
    strike_type = StrikeTestMode.parse(mode)
    state.pred.strike_type = strike_type
    return strike_type


def strike(params: SimParameters, state: BehavioralState, t: float, X: SimulationVector,
           mode: Union[str, StrikeTestMode, None] = None, rng: Optional[np.random.Generator] = None,
           models: Optional[BehaviorModels] = None) -> BehavioralState:
    """Run the strike model for time `t` and test for capture."""
    models = models or DEFAULT_MODELS
    strike_type = resolve_strike_type(state, mode)
    if rng is None:
        rng = state.rng
    p = params.pred
    pred, prey = state.pred, state.prey

    num_suc = p.num_bod_pts // 2
    pred.suction_points = np.zeros((num_suc + 2, 2))
    pred.r_suc = 0.0

    if pred.strike_time is None and X.distance <= p.strike_thresh:
        pred.strike_time = t
        logger.info('Strike initiated at t=%.4f s (distance %.4f m)', t, X.distance)

    if pred.strike_time is None or t < pred.strike_time:
        return state

    if t > pred.strike_time + p.strike_dur:
        logger.debug('t=%.4f strike over without capture', t)
        pred.strike_time = None
        return state

    t_c = t - pred.strike_time
    pred.r_suc = float(strike_reach(t_c, p.strike_dur, p.strike_reach))

    zone_local = suction_zone(pred.r_suc, p.strike_range, num_suc)
    pred.suction_points = models.coord_trans(BODY_TO_GLOBAL, X.theta_pred, X.pred_position, zone_local)

    prey_local = models.coord_trans(GLOBAL_TO_BODY, X.theta_pred, X.pred_position, prey.body_global)
    cap_range = capture_range(pred.r_suc, strike_type, rng)
    idx = capture_zone_mask(prey_local, cap_range, p.strike_range)

    if idx.sum() > idx.size / 2:
        prey.captured = True
        state.stopsim = True
        logger.info('Prey captured at t=%.4f s (%d of %d body points in zone, %s)',
                    t, int(idx.sum()), idx.size, strike_type.value)
    return state
