import numpy as np
import pytest

from anklesim.simulator import (
    ActivationPolicy,
    ConstantActivation,
    FootDropActivation,
    GaitCycleActivation,
)
from anklesim.simulator.core.dynamics.activation import policy_for_control_mode


@pytest.fixture
def gait_samples():
    phase = np.linspace(0.0, 1.0, 21)
    soleus = np.column_stack([phase, 0.5 + 0.4 * np.sin(2 * np.pi * phase)])
    tibialis = np.column_stack([phase, 0.2 * np.ones_like(phase)])
    return soleus, tibialis


def test_constant_activation_defaults():
    assert ConstantActivation()(0.0, np.pi / 2) == (0.05, 0.4)
    assert ConstantActivation()(5.0, 0.1) == (0.05, 0.4)


def test_foot_drop_activation_switches_on_body_angle():
    policy = FootDropActivation()

    assert policy(0.0, np.pi / 2) == (0.009, 1e-8)
    assert policy(0.0, 3 * np.pi / 4 + 0.01) == (0.00011, 1e-8)


@pytest.mark.parametrize(
    "control_mode, expected", [(0, ConstantActivation), (1, FootDropActivation)]
)
def test_policy_for_control_mode(control_mode, expected):
    policy = policy_for_control_mode(control_mode)

    assert isinstance(policy, expected)
    assert isinstance(policy, ActivationPolicy)


def test_unknown_control_mode():
    with pytest.raises(ValueError, match="control_mode"):
        policy_for_control_mode(2)


def test_gait_cycle_phase(gait_samples):
    policy = GaitCycleActivation(*gait_samples, gait_cycle_period__s=2.0)

    assert policy.phase(0.5) == pytest.approx(0.25)
    assert policy.phase(2.5) == pytest.approx(0.25)


def test_gait_cycle_activation_follows_samples(gait_samples):
    policy = GaitCycleActivation(*gait_samples, n_centers=15, ridge_lambda=1e-6)

    soleus, tibialis = policy(0.25, np.pi / 2)
    assert soleus == pytest.approx(0.9, abs=0.05)
    assert tibialis == pytest.approx(0.2, abs=0.05)


def test_gait_cycle_activation_is_periodic_and_ignores_body_angle(gait_samples):
    policy = GaitCycleActivation(*gait_samples)

    assert policy(0.3, np.pi / 2) == pytest.approx(policy(1.3, 0.0))


def test_gait_cycle_activation_is_clipped(gait_samples):
    soleus, tibialis = gait_samples
    soleus = soleus.copy()
    soleus[:, 1] *= 3.0
    policy = GaitCycleActivation(soleus, tibialis)

    for t in np.linspace(0.0, 1.0, 41):
        a_soleus, a_tibialis = policy(t, np.pi / 2)
        assert 0.0 <= a_soleus <= 1.0
        assert 0.0 <= a_tibialis <= 1.0


def test_gait_cycle_activation_validation(gait_samples):
    soleus, tibialis = gait_samples

    with pytest.raises(ValueError, match="gait_cycle_period__s"):
        GaitCycleActivation(soleus, tibialis, gait_cycle_period__s=0.0)
    with pytest.raises(ValueError, match="soleus_samples"):
        GaitCycleActivation(soleus[:, 0], tibialis)
