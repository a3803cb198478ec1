"""Visual detection of the prey by the predator.

`see_fish` is the default visual detector used by the dispatcher. It is
small, pure-numpy, and replaceable through `collaborators.BehaviorModels`.
"""
from typing import Optional, Tuple

import numpy as np

from strikesim.geometry import wrap_rad


def visible_mask(position, theta: float, target_points, vis_dist: float, vis_az: float) -> np.ndarray:
    """Return a boolean mask of target points inside the visual field.

    A point is visible when it is no farther than `vis_dist` and its bearing
    relative to the heading `theta` is within +/- `vis_az`/2.
    """
    pts = np.asarray(target_points, dtype=float)
    if pts.size == 0:
        return np.zeros(0, dtype=bool)
    rel = pts - np.asarray(position, dtype=float)[None, :]
    dist = np.hypot(rel[:, 0], rel[:, 1])
    bearing = wrap_rad(np.arctan2(rel[:, 1], rel[:, 0]) - theta)
    return (dist <= vis_dist) & (np.abs(bearing) <= vis_az / 2.0)


def see_fish(t: float, position, theta: float, target_points, params,
             in_field_time: Optional[float], theta_target: Optional[float]) -> Tuple[Optional[float], Optional[float]]:
    """Decide whether the target is seen and where it is.

    Parameters
    - t: current time (s)
    - position, theta: observer position (x, y) and heading (rad)
    - target_points: (N, 2) global outline of the target
    - params: observer parameters providing `vis_dist`, `vis_az`, `vis_lat`
    - in_field_time: time the target entered the visual field, or None
    - theta_target: bearing reported on the previous call, or None

    Returns (theta_target, in_field_time). The bearing is the global
    direction to the centroid of the visible points, unwrapped so that it
    lies within pi of `theta`. A newly seen target is only reported once it
    has stayed in view for `vis_lat`; a target already being tracked keeps
    updating. (None, None) when nothing is visible.
    """
    mask = visible_mask(position, theta, target_points, params.vis_dist, params.vis_az)
    if not mask.any():
        return None, None

    if in_field_time is None:
        in_field_time = float(t)
    if theta_target is None and (t - in_field_time) < params.vis_lat:
        return None, in_field_time

    centroid = np.asarray(target_points, dtype=float)[mask].mean(axis=0)
    rel = centroid - np.asarray(position, dtype=float)
    bearing = float(theta + wrap_rad(np.arctan2(rel[1], rel[0]) - theta))
    return bearing, in_field_time
