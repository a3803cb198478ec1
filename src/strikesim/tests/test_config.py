import dataclasses

import numpy as np
import pytest

from strikesim.config import PREY, ArenaParams, SimParameters, default_parameters


def test_defaults_match_tables():
    params = default_parameters()
    assert params.pred.num_bod_pts == 40
    assert params.prey.com_len == PREY['COM_len']
    assert params.prey.dur_escape == PREY['durEscape']
    assert params.param.tank_radius == 0.1
    assert params.arena is params.param
    assert params.pred.strike_range == pytest.approx(np.radians(120))


def test_from_dict_accepts_legacy_keys():
    params = SimParameters.from_dict({'prey': {'fieldSize': 0.005, 'spd0': 0.004}, 'seed': 7})
    assert params.prey.field_size == 0.005
    assert params.prey.spd0 == 0.004
    assert params.seed == 7
    # untouched values come from the tables
    assert params.pred.spd0 == default_parameters().pred.spd0


def test_from_dict_rejects_unknown_keys():
    with pytest.raises(ValueError):
        SimParameters.from_dict({'pred': {'jaw_speed': 1.0}})
    with pytest.raises(ValueError):
        SimParameters.from_dict({'school': {}})


def test_parameters_are_frozen():
    params = default_parameters()
    with pytest.raises(dataclasses.FrozenInstanceError):
        params.pred.spd0 = 1.0


def test_replace_updates_one_section():
    params = default_parameters(seed=1)
    longer = params.replace(pred={'strike_dur': 0.05})
    assert longer.pred.strike_dur == 0.05
    assert params.pred.strike_dur != 0.05
    assert longer.prey == params.prey
    assert longer.seed == 1


@pytest.mark.parametrize('radius', [0.0, -1.0])
def test_tank_radius_must_be_positive(radius):
    with pytest.raises(ValueError, match='tank_radius'):
        SimParameters.from_dict({'param': {'tank_radius': radius}})
    with pytest.raises(ValueError, match='tank_radius'):
        default_parameters().replace(param={'tank_radius': radius})
    with pytest.raises(ValueError, match='tank_radius'):
        ArenaParams(tank_radius=radius)


def test_invalid_body_geometry():
    with pytest.raises(ValueError):
        SimParameters.from_dict({'prey': {'COM_len': 0.01}})
