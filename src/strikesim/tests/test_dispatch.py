import numpy as np
import pytest

from strikesim.dispatch import give_behavior, update_body_positions
from strikesim.state import AgentMode, SimulationMode, StrikeTestMode
from strikesim.tests.fixtures.scenarios import (capture_params, make_params, pose, prepared_state,
                                                prey_in_mouth)


def test_unknown_simulation_type(params):
    with pytest.raises(ValueError, match='not recognized'):
        give_behavior('Weihs, survive', params, None, 0.0, pose())


def test_pose_is_required(params):
    with pytest.raises(ValueError):
        give_behavior('default', params, None, 0.0, None)


def test_first_call_initializes_state(params):
    X = pose(prey=(0.01, 0.02, 0.3), pred=(-0.03, 0.0, -0.2))
    state = give_behavior('default', params, None, 0.0, X)
    assert state.rng is not None
    assert state.pred.body_global.shape == (params.pred.num_bod_pts, 2)
    assert state.prey.theta == 0.3 and state.pred.theta == -0.2
    # rostrum of the outline is at the prey's position
    assert np.min(np.hypot(*(state.prey.body_global - [0.01, 0.02]).T)) < 5e-4
    again = give_behavior(SimulationMode.DEFAULT, params, state, 0.001, X)
    assert again is state


def test_default_mode_uses_deterministic_strike(params):
    X = pose()
    state = give_behavior('default', params, None, 0.0, X)
    assert state.pred.strike_type is StrikeTestMode.DETERMINISTIC
    assert state.prey.mode is AgentMode.FORAGING
    assert state.pred.mode in (AgentMode.FORAGING, AgentMode.TARGETING)
    assert state.stopsim is False


def test_wall_avoidance_beats_escape_and_strike(params):
    # prey beyond the wall threshold, predator within strike distance behind it
    X = pose(prey=(0.098, 0.0, 0.0), pred=(0.095, 0.0, 0.0))
    state = give_behavior('default', params, None, 0.0, X)
    assert state.prey.mode is AgentMode.WALL_AVOIDANCE
    assert state.prey.escape_on is False
    assert state.pred.mode is AgentMode.WALL_AVOIDANCE
    assert state.pred.theta_target is None
    assert state.pred.strike_time == 0.0


def test_capture_stops_simulation():
    params = capture_params()
    X = prey_in_mouth()
    state = give_behavior('default', params, None, 0.0, X)
    assert state.stopsim is False
    state = give_behavior('default', params, state, params.pred.strike_dur / 2, X)
    assert state.prey.captured is True
    assert state.stopsim is True


def test_capture_check_mode_runs_strike():
    params = capture_params()
    X = prey_in_mouth()
    state = give_behavior('weihs-with-capture-check', params, None, 0.0, X)
    assert state.pred.strike_time == 0.0
    state = give_behavior('weihs-with-capture-check', params, state, params.pred.strike_dur / 2, X)
    assert state.prey.captured and state.stopsim


def test_weihs_mode_never_strikes(params):
    X = prey_in_mouth()
    state = give_behavior('weihs', params, None, 0.0, X)
    assert state.pred.strike_time is None
    assert state.pred.omega == 0.0


def test_simple_strike_stops_after_strike_duration(params):
    X = prey_in_mouth()
    state = give_behavior('simple-strike', params, None, 0.0, X)
    assert state.pred.strike_time == 0.0
    assert state.stopsim is False

    t = params.pred.strike_dur + 1e-4
    state = give_behavior('simple-strike', params, state, t, X)
    assert state.stopsim is True
    assert state.prey.captured is False
    # the strike model did not run (it would have cleared the strike)
    assert state.pred.strike_time == 0.0


def test_simple_strike_stops_on_tick_after_strike_end():
    # strike duration is a whole number of binary-exact steps
    dt = 1.0 / 256
    params = make_params(pred={'strike_dur': 8 * dt})
    X = prey_in_mouth()
    state = None
    for i in range(9):
        state = give_behavior('simple-strike', params, state, i * dt, X)
        assert state.stopsim is False
        assert state.pred.strike_time == 0.0
    assert state.pred.r_suc == pytest.approx(0.0, abs=1e-12)

    state = give_behavior('simple-strike', params, state, 9 * dt, X)
    assert state.stopsim is True
    assert state.prey.captured is False
    assert state.pred.strike_time == 0.0


def test_simple_strike_capture_stops_simulation():
    params = capture_params()
    X = prey_in_mouth()
    state = give_behavior('simple-strike', params, None, 0.0, X)
    assert state.pred.strike_time == 0.0
    state = give_behavior('simple-strike', params, state, params.pred.strike_dur / 2, X)
    assert state.prey.captured is True
    assert state.stopsim is True


def test_update_body_positions(params):
    X = pose(prey=(0.01, 0.0, np.pi), pred=(0.0, 0.0, 0.0))
    state = prepared_state(params, pose())
    update_body_positions(state, X)
    # prey faces -x, so its body trails toward +x
    assert state.prey.body_global[:, 0].max() == pytest.approx(0.01 + params.prey.bod_len, rel=1e-2)
    assert state.pred.body_global[:, 0].min() == pytest.approx(-params.pred.bod_len, rel=1e-2)
