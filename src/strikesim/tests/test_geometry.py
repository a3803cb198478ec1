import numpy as np
import pytest

from strikesim.geometry import (body_outline, body_to_global, cart2pol, coord_trans, global_to_body,
                                wrap_rad)


def test_body_outline_shape_and_extent():
    pts = body_outline(0.035, 0.006, 0.012, 40)
    assert pts.shape == (40, 2)
    assert np.all(pts[:, 0] <= 1e-12)
    assert np.all(pts[:, 0] >= -0.035 - 1e-12)
    assert np.all(np.abs(pts[:, 1]) <= 0.003 + 1e-12)
    # first head point sits on the flank at the center of mass
    assert np.allclose(pts[0], [-0.012, -0.003])


def test_body_outline_rounds_half_away_from_zero():
    # 10 * 1/4 = 2.5 points for the head -> 3, so the middle head point is the rostrum
    pts = body_outline(4.0, 1.0, 1.0, 10)
    assert np.allclose(pts[1], [0.0, 0.0])
    # the trunk ends at the tail tip
    assert pts[:, 0].min() == pytest.approx(-4.0)


def test_body_to_global_rotates_then_translates():
    out = body_to_global(np.pi / 2, (1.0, 2.0), [[1.0, 0.0], [0.0, 1.0]])
    assert np.allclose(out, [[1.0, 3.0], [0.0, 2.0]])


def test_global_to_body_inverts_body_to_global():
    local = body_outline(0.0042, 0.0006, 0.0012, 20)
    glob = coord_trans('body to global', 0.7, (0.02, -0.01), local)
    back = global_to_body(0.7, (0.02, -0.01), glob)
    assert back.shape == local.shape
    assert np.allclose(back, local)


def test_coord_trans_unknown_direction():
    with pytest.raises(ValueError):
        coord_trans('sideways', 0.0, (0.0, 0.0), [[0.0, 0.0]])


def test_cart2pol_and_wrap():
    phi, r = cart2pol([[0.0, 2.0], [-1.0, 0.0]])
    assert np.allclose(r, [2.0, 1.0])
    assert np.allclose(phi, [np.pi / 2, np.pi])
    assert float(wrap_rad(3 * np.pi / 2)) == pytest.approx(-np.pi / 2)
