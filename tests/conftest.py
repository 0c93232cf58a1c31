import matplotlib

matplotlib.use("Agg")

import numpy as np
import pytest

from anklesim.simulator import AnkleDynamicsSystem, get_default_force_curves
from anklesim.simulator.core.dynamics.ankle import INITIAL_STATE


@pytest.fixture(scope="session")
def force_curves():
    return get_default_force_curves()


@pytest.fixture
def ankle_system(force_curves):
    return AnkleDynamicsSystem.build(control_mode=0, exo_stiffness=0.0)


@pytest.fixture
def initial_state():
    return INITIAL_STATE.copy()


@pytest.fixture
def rng():
    return np.random.default_rng(42)
