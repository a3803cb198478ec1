"""
geometry.py

Small geometry helpers for the two fish: the body outline in the fish's own
frame of reference, transforms between that frame and the arena (global)
frame, polar conversion and angle wrapping.

Public functions:
- `body_outline(bod_len, bod_width, com_len, num_pts)` -> (N, 2) local points
- `coord_trans(direction, theta, origin, points)` -> (N, 2) points
- `body_to_global(theta, origin, points)` / `global_to_body(theta, origin, points)`
- `cart2pol(points)` -> (phi, r)
- `wrap_rad(x)`

Points are always (N, 2) arrays of (x, y); order and count are preserved.
"""
import math
from typing import Tuple

import numpy as np

BODY_TO_GLOBAL = 'body to global'
GLOBAL_TO_BODY = 'global to body'


def _round_half_away(x: float) -> int:
    return int(math.floor(abs(x) + 0.5)) * (1 if x >= 0 else -1)


def body_outline(bod_len: float, bod_width: float, com_len: float, num_pts: int) -> np.ndarray:
    """Return the outline of a fish body in its local frame.

    The outline is two half-ellipses: a rounded head reaching back to the
    center of mass (semi-axis `com_len`) and a tapering trunk over the rest
    of the body (semi-axis `bod_len - com_len`). Points are allotted to each
    part in proportion to its length. The rostrum sits at the origin and the
    body extends along -x, so the tail tip is at (-bod_len, 0).
    """
    num_pts = int(num_pts)
    num1 = _round_half_away(num_pts * (com_len / bod_len))
    num2 = num_pts - num1

    ang1 = np.linspace(-np.pi / 2, np.pi / 2, num1)
    ang2 = np.linspace(np.pi / 2, 3 * np.pi / 2, num2)

    trunk_len = bod_len - com_len
    half_w = bod_width / 2.0

    x = np.concatenate((com_len * np.cos(ang1), trunk_len * np.cos(ang2))) - com_len
    y = np.concatenate((half_w * np.sin(ang1), half_w * np.sin(ang2)))
    return np.column_stack((x, y))


def _as_points(points) -> np.ndarray:
    pts = np.asarray(points, dtype=float)
    if pts.ndim == 1:
        if pts.shape[0] != 2:
            raise ValueError('a single point must have 2 coordinates')
        pts = pts[None, :]
    if pts.ndim != 2 or pts.shape[1] != 2:
        raise ValueError('points must be shape (N,2)')
    return pts


def coord_trans(direction: str, theta: float, origin, points) -> np.ndarray:
    """Transform points between a fish's body frame and the global frame.

    Parameters
    - direction: 'body to global' or 'global to body'
    - theta: orientation of the body frame in the global frame (rad)
    - origin: (x, y) of the body-frame origin in the global frame
    - points: (N, 2) array-like

    'body to global' rotates by `theta` and translates by `origin`;
    'global to body' is its exact inverse.
    """
    pts = _as_points(points)
    x0, y0 = float(origin[0]), float(origin[1])
    c, s = math.cos(theta), math.sin(theta)

    if direction == BODY_TO_GLOBAL:
        xg = pts[:, 0] * c - pts[:, 1] * s + x0
        yg = pts[:, 0] * s + pts[:, 1] * c + y0
        return np.column_stack((xg, yg))
    if direction == GLOBAL_TO_BODY:
        dx = pts[:, 0] - x0
        dy = pts[:, 1] - y0
        xl = dx * c + dy * s
        yl = -dx * s + dy * c
        return np.column_stack((xl, yl))
    raise ValueError(f"Unknown transform direction '{direction}'. Use '{BODY_TO_GLOBAL}' or '{GLOBAL_TO_BODY}'.")


def body_to_global(theta: float, origin, points) -> np.ndarray:
    return coord_trans(BODY_TO_GLOBAL, theta, origin, points)


def global_to_body(theta: float, origin, points) -> np.ndarray:
    return coord_trans(GLOBAL_TO_BODY, theta, origin, points)


def cart2pol(points) -> Tuple[np.ndarray, np.ndarray]:
    """Polar angle and radius of each (x, y) point."""
    pts = _as_points(points)
    return np.arctan2(pts[:, 1], pts[:, 0]), np.hypot(pts[:, 0], pts[:, 1])


def wrap_rad(x):
    """Wrap radians to [-pi, pi).

    Accepts scalars or numpy arrays; returns same-shaped output.
    """
    x_arr = np.asarray(x)
    return (x_arr + math.pi) % (2 * math.pi) - math.pi
