from types import SimpleNamespace

from strikesim.foraging import foraging

FISH = SimpleNamespace(sccd_intvl=1.0, sccd_dur=0.1, sccd_omega=2.0)


def test_glide_before_interval():
    assert foraging(FISH, 0.0, 0.5, 1.0, False) == (0.0, 0.0, 1.0, False)


def test_saccade_starts_after_interval():
    assert foraging(FISH, 0.0, 1.0, -1.0, False) == (-2.0, 1.0, -1.0, True)


def test_saccade_continues_then_alternates():
    assert foraging(FISH, 1.0, 1.05, 1.0, True) == (2.0, 1.0, 1.0, True)
    omega, t_sccd, dir_sccd, on_sccd = foraging(FISH, 1.0, 1.2, 1.0, True)
    assert (omega, t_sccd, dir_sccd, on_sccd) == (0.0, 1.2, -1.0, False)
