# -*- coding: utf-8 -*-

"""
config.py

Central parameter tables for the predator/prey strike simulation.

Contents:
---------
1. ARENA:
   - Radius of the circular tank and the time span of a run.

2. PREDATOR:
   - Body geometry used to render the outline, cruising and wall-avoidance
     turning, saccadic foraging, the visual field, and the strike (trigger
     distance, duration, reach and angular range of the suction zone).

3. PREY:
   - Body geometry, cruising, foraging, and the escape response (threshold
     distance, latency, duration, escape speed and turning).

The tables are plain dicts so they can be printed, copied and overridden.
`SimParameters.from_dict` turns a nested mapping into the frozen dataclasses
consumed by the behavior code:

    from strikesim.config import SimParameters

    params = SimParameters.from_dict({'prey': {'thrsh_escape': 0.02}, 'seed': 3})
    params.prey.thrsh_escape   # 0.02
    params.pred.spd0           # default predator cruise speed

All values are SI (meters, seconds, radians).
"""
import dataclasses
from dataclasses import dataclass, field, fields
from typing import Any, Mapping, Optional, Tuple

import numpy as np

# ───────────────────────────────────────────────────────────────────────────────
# 1) ARENA
# ───────────────────────────────────────────────────────────────────────────────
ARENA = {
    'tank_radius': 0.1,         # Radius of the circular arena (m)
    't_span': (0.0, 10.0),      # Start and end time of a run (s)
}

# ───────────────────────────────────────────────────────────────────────────────
# 2) PREDATOR (adult zebrafish)
# ───────────────────────────────────────────────────────────────────────────────
PREDATOR = {
    # body geometry
    'bod_len': 0.035,           # Body length (m)
    'bod_width': 0.006,         # Maximum body width (m)
    'COM_len': 0.012,           # Rostrum to center of mass (m)
    'numBodPts': 40,            # Points used to render the body outline

    # routine swimming
    'spd0': 0.03,               # Cruise speed (m/s)
    'theta0': 0.0,              # Initial orientation (rad)
    'fieldSize': 0.01,          # Distance at which the wall is sensed (m)
    'wall_omega': 4.0,          # Turning gain for wall avoidance and targeting (rad/s)

    # foraging saccades
    'sccd_intvl': 1.0,          # Glide time between saccades (s)
    'sccd_dur': 0.1,            # Duration of a saccade (s)
    'sccd_omega': 3.0,          # Turning rate during a saccade (rad/s)

    # vision
    'vis_dist': 0.06,           # Maximum distance at which prey is seen (m)
    'vis_az': np.radians(160),  # Total angular width of the visual field (rad)
    'vis_lat': 0.1,             # Time prey must stay in view before targeting (s)

    # strike
    'strike_thresh': 0.004,     # Predator-prey distance that triggers a strike (m)
    'strike_dur': 0.03,         # Duration of the strike (s)
    'strike_reach': 0.004,      # Reach parameter of the suction zone (m)
    'strike_range': np.radians(120),  # Angular width of the suction zone (rad)
}

# ───────────────────────────────────────────────────────────────────────────────
# 3) PREY (larval zebrafish)
# ───────────────────────────────────────────────────────────────────────────────
PREY = {
    # body geometry
    'bod_len': 0.0042,          # Body length (m)
    'bod_width': 0.0006,        # Maximum body width (m)
    'COM_len': 0.0012,          # Rostrum to center of mass (m)
    'numBodPts': 20,            # Points used to render the body outline

    # routine swimming
    'spd0': 0.002,              # Cruise speed (m/s)
    'theta0': 0.0,              # Initial orientation (rad)
    'fieldSize': 0.003,         # Distance at which the wall is sensed (m)
    'wall_omega': 6.0,          # Wall-avoidance turning gain (rad/s)

    # foraging saccades
    'sccd_intvl': 0.5,          # Glide time between saccades (s)
    'sccd_dur': 0.05,           # Duration of a saccade (s)
    'sccd_omega': 8.0,          # Turning rate during a saccade (rad/s)

    # escape response
    'thrsh_escape': 0.01,       # Predator distance that triggers an escape (m)
    'lat': 0.012,               # Latency between stimulus and response (s)
    'durEscape': 0.02,          # Duration of the escape maneuver (s)
    'spdEscape': 0.1,           # Speed during the escape (m/s)
    'rotSpdEscape': 30.0,       # Mean peak turning rate of the escape (rad/s)
    'escape_angle': np.radians(100),  # Turn completed by the Weihs escape (rad)
}

# legacy camelCase key names -> dataclass field names
_KEY_ALIASES = {
    'COM_len': 'com_len',
    'numBodPts': 'num_bod_pts',
    'fieldSize': 'field_size',
    'durEscape': 'dur_escape',
    'spdEscape': 'spd_escape',
    'rotSpdEscape': 'rot_spd_escape',
}


def _normalize_keys(mapping: Mapping[str, Any]) -> dict:
    return {_KEY_ALIASES.get(k, k): v for k, v in mapping.items()}


def _build(cls, defaults: Mapping[str, Any], overrides: Optional[Mapping[str, Any]], label: str):
    values = _normalize_keys(defaults)
    if overrides:
        extra = _normalize_keys(overrides)
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(extra) - known)
        if unknown:
            raise ValueError(f"Unknown {label} parameter(s): {', '.join(unknown)}")
        values.update(extra)
    return cls(**values)


@dataclass(frozen=True)
class AgentParams:
    """Parameters shared by both fish."""
    bod_len: float
    bod_width: float
    com_len: float
    num_bod_pts: int
    spd0: float
    theta0: float
    field_size: float
    wall_omega: float
    sccd_intvl: float
    sccd_dur: float
    sccd_omega: float

    def __post_init__(self):
        if self.num_bod_pts < 2:
            raise ValueError('num_bod_pts must be at least 2')
        if not 0.0 < self.com_len < self.bod_len:
            raise ValueError('com_len must lie between 0 and bod_len')


@dataclass(frozen=True)
class PredatorParams(AgentParams):
    vis_dist: float = PREDATOR['vis_dist']
    vis_az: float = PREDATOR['vis_az']
    vis_lat: float = PREDATOR['vis_lat']
    strike_thresh: float = PREDATOR['strike_thresh']
    strike_dur: float = PREDATOR['strike_dur']
    strike_reach: float = PREDATOR['strike_reach']
    strike_range: float = PREDATOR['strike_range']

    def __post_init__(self):
        super().__post_init__()
        if self.strike_dur <= 0.0:
            raise ValueError('strike_dur must be positive')


@dataclass(frozen=True)
class PreyParams(AgentParams):
    thrsh_escape: float = PREY['thrsh_escape']
    lat: float = PREY['lat']
    dur_escape: float = PREY['durEscape']
    spd_escape: float = PREY['spdEscape']
    rot_spd_escape: float = PREY['rotSpdEscape']
    escape_angle: float = PREY['escape_angle']

    def __post_init__(self):
        super().__post_init__()
        if self.dur_escape <= 0.0:
            raise ValueError('dur_escape must be positive')


@dataclass(frozen=True)
class ArenaParams:
    tank_radius: float = ARENA['tank_radius']
    t_span: Tuple[float, float] = ARENA['t_span']

    def __post_init__(self):
        if self.tank_radius <= 0.0:
            raise ValueError('tank_radius must be positive')


@dataclass(frozen=True)
class SimParameters:
    """Immutable configuration of one run.

    `param` holds the arena (kept under the historical name used by the
    parameter files), `pred` and `prey` the per-fish parameters. `seed`
    seeds the generator created when the behavioral state is initialized.
    """
    param: ArenaParams = field(default_factory=ArenaParams)
    pred: PredatorParams = field(default_factory=lambda: _build(PredatorParams, PREDATOR, None, 'predator'))
    prey: PreyParams = field(default_factory=lambda: _build(PreyParams, PREY, None, 'prey'))
    seed: Optional[int] = None

    @property
    def arena(self) -> ArenaParams:
        return self.param

    @classmethod
    def from_dict(cls, mapping: Optional[Mapping[str, Any]] = None) -> 'SimParameters':
        """Build parameters from a nested mapping, filling gaps from the tables above.

        Accepted top-level keys: 'param' (or 'arena'), 'pred', 'prey', 'seed'.
        """
        mapping = dict(mapping or {})
        unknown = sorted(set(mapping) - {'param', 'arena', 'pred', 'prey', 'seed'})
        if unknown:
            raise ValueError(f"Unknown parameter section(s): {', '.join(unknown)}")
        arena_over = dict(mapping.get('arena') or {})
        arena_over.update(mapping.get('param') or {})
        return cls(
            param=_build(ArenaParams, ARENA, arena_over, 'arena'),
            pred=_build(PredatorParams, PREDATOR, mapping.get('pred'), 'predator'),
            prey=_build(PreyParams, PREY, mapping.get('prey'), 'prey'),
            seed=mapping.get('seed'),
        )

    def replace(self, **sections) -> 'SimParameters':
        """Return a copy with some sections swapped; dict values update that section's fields."""
        updates = {}
        for name, value in sections.items():
            current = getattr(self, name)
            if isinstance(value, Mapping) and dataclasses.is_dataclass(current):
                label = {'param': 'arena', 'pred': 'predator'}.get(name, name)
                known = {f.name for f in fields(current)}
                extra = _normalize_keys(value)
                unknown = sorted(set(extra) - known)
                if unknown:
                    raise ValueError(f"Unknown {label} parameter(s): {', '.join(unknown)}")
                value = dataclasses.replace(current, **extra)
            updates[name] = value
        return dataclasses.replace(self, **updates)


def default_parameters(seed: Optional[int] = None) -> SimParameters:
    """Parameters built from the default tables."""
    return SimParameters.from_dict({'seed': seed})
