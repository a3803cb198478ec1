"""Escape kinematics of the prey.

Two profiles:
- 'full': a reflexive C-start. After the latency the prey turns with a
  half-sine turning-rate pulse peaking at `rot_spd` and swims at the
  escape speed.
- 'weihs': the reduced profile of Weihs & Webb's evasion model. After the
  latency the prey turns at a constant rate that completes
  `escape_angle - theta0` over the escape duration; speed is left alone.
"""
import math
from typing import Optional, Tuple

FULL = 'full'
WEIHS = 'weihs'


def prey_escape(t: float, stim_time: float, params, theta0: float, spd: float, dir_esc: float,
                mode: str = FULL, rot_spd: Optional[float] = None) -> Tuple[float, float]:
    """Return (omega, spd) of an escaping prey at time `t`.

    `stim_time` is the onset of the stimulus; nothing happens during the
    latency `params.lat`, and the response lasts `params.dur_escape`.
    `rot_spd` overrides `params.rot_spd_escape` (the drawn magnitude of this
    escape).
    """
    mode = mode.lower()
    if mode not in (FULL, WEIHS):
        raise ValueError(f"Unknown escape mode '{mode}'. Use '{FULL}' or '{WEIHS}'.")

    tau = t - stim_time - params.lat
    if tau < 0.0 or tau > params.dur_escape:
        return 0.0, spd

    if mode == WEIHS:
        return dir_esc * (params.escape_angle - theta0) / params.dur_escape, spd

    if rot_spd is None:
        rot_spd = params.rot_spd_escape
    omega = dir_esc * rot_spd * math.sin(math.pi * tau / params.dur_escape)
    return omega, params.spd_escape
