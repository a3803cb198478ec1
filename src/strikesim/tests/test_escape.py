from types import SimpleNamespace

import numpy as np
import pytest

from strikesim.escape import prey_escape

PREY = SimpleNamespace(lat=0.01, dur_escape=0.02, spd_escape=0.1, rot_spd_escape=30.0,
                       escape_angle=np.pi / 2)


def test_nothing_happens_during_latency():
    assert prey_escape(0.005, 0.0, PREY, 0.0, 0.002, 1.0) == (0.0, 0.002)


def test_full_escape_peaks_mid_response():
    omega, spd = prey_escape(0.02, 0.0, PREY, 0.0, 0.002, 1.0, 'full')
    assert omega == pytest.approx(30.0)
    assert spd == 0.1
    omega, _ = prey_escape(0.02, 0.0, PREY, 0.0, 0.002, -1.0, 'full', rot_spd=25.0)
    assert omega == pytest.approx(-25.0)


def test_weihs_escape_turns_at_constant_rate():
    omega, spd = prey_escape(0.015, 0.0, PREY, 0.0, 0.0, 1.0, 'Weihs')
    assert omega == pytest.approx((np.pi / 2) / 0.02)
    assert spd == 0.0


def test_after_escape_no_turn():
    assert prey_escape(0.05, 0.0, PREY, 0.0, 0.002, 1.0) == (0.0, 0.002)


def test_unknown_mode():
    with pytest.raises(ValueError):
        prey_escape(0.02, 0.0, PREY, 0.0, 0.0, 1.0, 'panic')
