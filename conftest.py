import sys
from pathlib import Path

import numpy as np
import pytest

# allow running the tests from a checkout without installing the package
src_root = Path(__file__).resolve().parent / "src"
if str(src_root) not in sys.path:
    sys.path.insert(0, str(src_root))


@pytest.fixture
def params():
    """Default parameters with a fixed seed."""
    from strikesim.config import default_parameters
    return default_parameters(seed=0)


@pytest.fixture
def rng():
    return np.random.default_rng(12345)
