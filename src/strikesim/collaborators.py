"""Replaceable sub-models used by the behavior code.

The behavior code never calls the coordinate transform, visual detector,
foraging or escape models directly; it goes through a `BehaviorModels`
bundle so tests and experiments can swap any of them.
"""
from dataclasses import dataclass
from typing import Callable

from strikesim.escape import prey_escape
from strikesim.foraging import foraging
from strikesim.geometry import coord_trans
from strikesim.perception import see_fish


@dataclass(frozen=True)
class BehaviorModels:
    coord_trans: Callable = coord_trans
    see_fish: Callable = see_fish
    foraging: Callable = foraging
    prey_escape: Callable = prey_escape


DEFAULT_MODELS = BehaviorModels()
