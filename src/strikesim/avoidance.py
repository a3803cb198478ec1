"""Wall avoidance in the circular arena, shared by predator and prey."""
from typing import Callable, Tuple

import numpy as np

from strikesim.geometry import GLOBAL_TO_BODY, coord_trans


def wall_in_field(body_global, tank_radius: float, field_size: float) -> bool:
    """True when any body point is within `field_size` of the wall."""
    pts = np.asarray(body_global, dtype=float)
    if pts.size == 0:
        return False
    body_dist = float(np.max(np.hypot(pts[:, 0], pts[:, 1])))
    return body_dist > (tank_radius - field_size)


def wall_bearing(position, theta: float, tank_radius: float, transform: Callable = coord_trans) -> float:
    """Bearing (body frame, rad) of the nearest wall point.

    The wall point lies on the ray from the arena center through `position`.
    """
    ang = np.arctan2(position[1], position[0])
    wall_g = np.array([[tank_radius * np.cos(ang), tank_radius * np.sin(ang)]])
    wall_l = transform(GLOBAL_TO_BODY, theta, position, wall_g)
    return float(np.arctan2(wall_l[0, 1], wall_l[0, 0]))


def turn_intensity(bearing: float) -> float:
    """1 when heading straight at the wall, 0 when heading straight away."""
    return (np.pi - abs(bearing)) / np.pi


def turn_direction(bearing: float) -> float:
    """Sign of the turn away from the wall; +1 (counter-clockwise) when dead ahead."""
    return -1.0 if bearing > 0.0 else 1.0


def wall_avoidance(position, theta: float, tank_radius: float, wall_omega: float,
                   transform: Callable = coord_trans) -> Tuple[float, float]:
    """Return (omega, bearing) that turns the fish away from the wall."""
    bearing = wall_bearing(position, theta, tank_radius, transform)
    omega = turn_direction(bearing) * turn_intensity(bearing) * wall_omega
    return float(omega), bearing
