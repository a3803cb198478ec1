"""
foraging.py

Routine (foraging) swimming: straight glides punctuated by saccades, brief
bouts of turning at a fixed rate. Successive saccades alternate direction.
"""
from typing import Tuple


def foraging(params, t_sccd: float, t: float, dir_sccd: float, on_sccd: bool) -> Tuple[float, float, float, bool]:
    """Turning rate for a foraging fish.

    Parameters
    - params: agent parameters providing `sccd_intvl`, `sccd_dur`, `sccd_omega`
    - t_sccd: start of the current glide or saccade (s)
    - t: current time (s)
    - dir_sccd: direction (+1/-1) of the next or current saccade
    - on_sccd: whether a saccade is in progress

    Returns (omega, t_sccd, dir_sccd, on_sccd) with the updated bookkeeping.
    """
    if on_sccd:
        if (t - t_sccd) > params.sccd_dur:
            # saccade over: glide, next one turns the other way
            return 0.0, t, -dir_sccd, False
        return dir_sccd * params.sccd_omega, t_sccd, dir_sccd, True

    if (t - t_sccd) >= params.sccd_intvl:
        return dir_sccd * params.sccd_omega, t, dir_sccd, True
    return 0.0, t_sccd, dir_sccd, False
