"""
simulate.py

Reference driver for the behavior engine: a fixed-step explicit Euler
integrator that advances the pose of both fish from the speeds and turning
rates chosen by `give_behavior`, and records the trial in a DataFrame.

Usage Example:
--------------
    from strikesim.config import default_parameters
    from strikesim.simulate import run_trial

    params = default_parameters(seed=1)
    result = run_trial('default', params, dt=1e-3)
    result.captured, result.t_stop
    result.trajectory[['t', 'x_prey', 'y_prey', 'x_pred', 'y_pred']]

Or from the command line:

    strikesim --mode weihs-with-capture-check --seed 4 --duration 2 --out trial.csv
"""
import argparse
import logging
import sys
from dataclasses import dataclass
from typing import List, Optional, Sequence

import numpy as np
import pandas as pd

from strikesim.collaborators import BehaviorModels
from strikesim.config import SimParameters, default_parameters
from strikesim.dispatch import give_behavior
from strikesim.state import BehavioralState, SimulationMode, SimulationVector

log = logging.getLogger(__name__)

TRAJECTORY_COLUMNS = [
    't', 'x_prey', 'y_prey', 'theta_prey', 'x_pred', 'y_pred', 'theta_pred',
    'spd_prey', 'omega_prey', 'mode_prey', 'spd_pred', 'omega_pred', 'mode_pred',
    'striking', 'r_suc',
]


@dataclass
class TrialResult:
    trajectory: pd.DataFrame
    state: BehavioralState
    captured: bool
    t_stop: float


def default_pose(params: SimParameters) -> np.ndarray:
    """Prey and predator on the x-axis, 30% of the tank radius either side of center."""
    r = 0.3 * params.param.tank_radius
    return np.array([r, 0.0, params.prey.theta0, -r, 0.0, params.pred.theta0])


def step_pose(X, state: BehavioralState, dt: float) -> np.ndarray:
    """Advance the pose by one explicit Euler step."""
    x = SimulationVector.from_array(X)
    prey, pred = state.prey, state.pred
    return np.array([
        x.x_prey + prey.spd * np.cos(x.theta_prey) * dt,
        x.y_prey + prey.spd * np.sin(x.theta_prey) * dt,
        x.theta_prey + prey.omega * dt,
        x.x_pred + pred.spd * np.cos(x.theta_pred) * dt,
        x.y_pred + pred.spd * np.sin(x.theta_pred) * dt,
        x.theta_pred + pred.omega * dt,
    ])


def _record(t: float, X: np.ndarray, state: BehavioralState) -> list:
    prey, pred = state.prey, state.pred
    return [
        t, *X.tolist(),
        prey.spd, prey.omega, prey.mode.value if prey.mode else None,
        pred.spd, pred.omega, pred.mode.value if pred.mode else None,
        pred.strike_time is not None, pred.r_suc,
    ]


def run_trial(sim_type, params: SimParameters, X0=None, dt: float = 1e-3, t_end: Optional[float] = None,
              rng: Optional[np.random.Generator] = None,
              models: Optional[BehaviorModels] = None) -> TrialResult:
    """Integrate one trial until the behavior code stops it or `t_end` is reached."""
    if dt <= 0.0:
        raise ValueError('dt must be positive')
    t0, t_default_end = params.param.t_span
    if t_end is None:
        t_end = t_default_end
    if t_end < t0:
        raise ValueError(f't_end ({t_end}) precedes the start time ({t0})')
    X = default_pose(params) if X0 is None else SimulationVector.from_array(X0).as_array()

    n_steps = int(np.floor((t_end - t0) / dt + 1e-9)) + 1
    rows: List[list] = []
    state = None
    t = t0
    for i in range(n_steps):
        t = t0 + i * dt
        state = give_behavior(sim_type, params, state, t, X, rng=rng, models=models)
        rows.append(_record(t, X, state))
        if state.stopsim:
            log.info('[SIM] Halted at t=%.4f s (captured=%s)', t, state.prey.captured)
            break
        X = step_pose(X, state, dt)
    else:
        log.info('[SIM] Completed at t=%.4f s without capture', t)

    trajectory = pd.DataFrame(rows, columns=TRAJECTORY_COLUMNS)
    return TrialResult(trajectory=trajectory, state=state, captured=bool(state.prey.captured), t_stop=float(t))


def _configure_logging(verbose: bool) -> None:
    pkg_log = logging.getLogger('strikesim')
    if not pkg_log.handlers:
        h = logging.StreamHandler(sys.stdout)
        h.setFormatter(logging.Formatter('[%(levelname)s] %(message)s'))
        pkg_log.addHandler(h)
    pkg_log.setLevel(logging.DEBUG if verbose else logging.INFO)


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = argparse.ArgumentParser(prog='strikesim', description='Run a single predator-prey trial.')
    parser.add_argument('--mode', default=SimulationMode.DEFAULT.value,
                        choices=[m.value for m in SimulationMode], help='simulation type')
    parser.add_argument('--seed', type=int, default=None, help='random seed')
    parser.add_argument('--dt', type=float, default=1e-3, help='integration step (s)')
    parser.add_argument('--duration', type=float, default=None, help='trial duration (s)')
    parser.add_argument('--out', default=None, help='write the trajectory to this CSV file')
    parser.add_argument('--verbose', action='store_true', help='log every tick')
    args = parser.parse_args(argv)

    _configure_logging(args.verbose)
    params = default_parameters(seed=args.seed)
    t_end = None if args.duration is None else params.param.t_span[0] + args.duration
    result = run_trial(args.mode, params, dt=args.dt, t_end=t_end)

    log.info('[SIM] mode=%s captured=%s t_stop=%.4f s steps=%d',
             args.mode, result.captured, result.t_stop, len(result.trajectory))
    if args.out:
        result.trajectory.to_csv(args.out, index=False)
        log.info('[SIM] Trajectory written to %s', args.out)
    return 0


if __name__ == '__main__':
    sys.exit(main())
