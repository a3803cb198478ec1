"""Behavioral state containers for the predator and the prey.

The state is created once per run by `initialize_state`, handed back to the
caller after every tick, and mutated in place by the behavior code. Values
that may be absent (no strike in progress, no visual target, ...) are
`None` rather than a numeric sentinel.
"""
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import NamedTuple, Optional, Union

import numpy as np

from strikesim.config import SimParameters
from strikesim.geometry import body_outline

logger = logging.getLogger(__name__)


class SimulationMode(str, Enum):
    """Simulation variants understood by the dispatcher."""
    DEFAULT = 'default'
    WEIHS = 'weihs'
    WEIHS_ACCELERATION = 'weihs-with-acceleration'
    WEIHS_CAPTURE_CHECK = 'weihs-with-capture-check'
    SIMPLE_STRIKE = 'simple-strike'

    @classmethod
    def parse(cls, value: Union[str, 'SimulationMode']) -> 'SimulationMode':
        try:
            return cls(value)
        except ValueError:
            raise ValueError(f'Simulation type not recognized: {value!r}') from None


class StrikeTestMode(str, Enum):
    """How the capture radius of a strike is decided."""
    DETERMINISTIC = 'deterministic'
    PROBABILISTIC = 'probabilistic'

    @classmethod
    def parse(cls, value: Union[str, 'StrikeTestMode']) -> 'StrikeTestMode':
        try:
            return cls(value.lower() if isinstance(value, str) else value)
        except (ValueError, AttributeError):
            raise ValueError(f'Do not recognize requested strike type: {value!r}') from None


class AgentMode(str, Enum):
    """Behavior that produced an agent's turning rate on the last tick."""
    WALL_AVOIDANCE = 'wall avoidance'
    ESCAPE = 'escape'
    TARGETING = 'targeting'
    FORAGING = 'foraging'
    CRUISE = 'cruise'


class SimulationVector(NamedTuple):
    """Pose of both fish as produced by the integrator."""
    x_prey: float
    y_prey: float
    theta_prey: float
    x_pred: float
    y_pred: float
    theta_pred: float

    @classmethod
    def from_array(cls, X) -> 'SimulationVector':
        if X is None:
            raise ValueError('A simulation vector (6 values) is required for this action')
        arr = np.asarray(X, dtype=float).ravel()
        if arr.shape[0] != 6:
            raise ValueError(f'Simulation vector must have 6 values, got {arr.shape[0]}')
        if not np.all(np.isfinite(arr)):
            raise ValueError(f'Simulation vector contains non-finite values: {arr}')
        return cls(*(float(v) for v in arr))

    @property
    def prey_position(self) -> np.ndarray:
        return np.array([self.x_prey, self.y_prey])

    @property
    def pred_position(self) -> np.ndarray:
        return np.array([self.x_pred, self.y_pred])

    @property
    def distance(self) -> float:
        """Distance between the predator and prey origins."""
        return float(np.hypot(self.x_prey - self.x_pred, self.y_prey - self.y_pred))

    def as_array(self) -> np.ndarray:
        return np.array(self, dtype=float)


@dataclass
class PredatorState:
    t_sccd: float = 0.0
    dir_sccd: float = 1.0
    on_sccd: bool = False
    in_field_time: Optional[float] = None
    strike_time: Optional[float] = None
    theta_target: Optional[float] = None
    spd: float = 0.0
    omega: float = 0.0
    theta: float = 0.0
    strike_type: Optional[StrikeTestMode] = None
    body_local: np.ndarray = field(default_factory=lambda: np.zeros((0, 2)))
    body_global: np.ndarray = field(default_factory=lambda: np.zeros((0, 2)))
    suction_points: np.ndarray = field(default_factory=lambda: np.zeros((0, 2)))
    r_suc: float = 0.0
    mode: Optional[AgentMode] = None


@dataclass
class PreyState:
    t_sccd: float = 0.0
    dir_sccd: float = 1.0
    on_sccd: bool = False
    escape_on: bool = False
    stim_time: Optional[float] = None
    dir_esc: float = 1.0
    escape_rate: Optional[float] = None
    escape_num: int = 1
    spd: float = 0.0
    omega: float = 0.0
    theta: float = 0.0
    theta0: float = 0.0
    captured: bool = False
    body_local: np.ndarray = field(default_factory=lambda: np.zeros((0, 2)))
    body_global: np.ndarray = field(default_factory=lambda: np.zeros((0, 2)))
    mode: Optional[AgentMode] = None


@dataclass
class BehavioralState:
    pred: PredatorState
    prey: PreyState
    stopsim: bool = False
    rng: Optional[np.random.Generator] = None


def saccade_direction(sample: float) -> float:
    """Map a uniform sample in [0, 1) to a turning direction of +1 or -1."""
    return 1.0 if sample >= 0.5 else -1.0


def initialize_state(params: SimParameters, rng: Optional[np.random.Generator] = None) -> BehavioralState:
    """Create the behavioral state for a new run.

    Draws the initial saccade direction of each fish from `rng` (predator
    first) and renders both body outlines. When no generator is given one is
    created from `params.seed` and kept on the state.
    """
    if rng is None:
        rng = np.random.default_rng(params.seed)
    t0 = float(params.param.t_span[0])

    pred = PredatorState(
        t_sccd=t0,
        dir_sccd=saccade_direction(rng.random()),
        spd=params.pred.spd0,
        theta=params.pred.theta0,
        body_local=body_outline(params.pred.bod_len, params.pred.bod_width,
                                params.pred.com_len, params.pred.num_bod_pts),
    )
    prey = PreyState(
        t_sccd=t0,
        dir_sccd=saccade_direction(rng.random()),
        spd=params.prey.spd0,
        theta=params.prey.theta0,
        theta0=params.prey.theta0,
        body_local=body_outline(params.prey.bod_len, params.prey.bod_width,
                                params.prey.com_len, params.prey.num_bod_pts),
    )
    logger.debug('Initialized behavioral state: pred dir_sccd=%+.0f, prey dir_sccd=%+.0f',
                 pred.dir_sccd, prey.dir_sccd)
    return BehavioralState(pred=pred, prey=prey, stopsim=False, rng=rng)
