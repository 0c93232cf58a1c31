import numpy as np
import pytest

from anklesim.simulator import AnkleDynamicsSystem, ConstantActivation
from anklesim.simulator.core.dynamics.ankle import (
    ANKLE_INERTIA__kg_m2,
    TIBIALIS_MOMENT_ARM__m,
)
from anklesim.simulator.core.geometry import UPRIGHT__rad, gravity_moment
from anklesim.utils.exceptions import RootFindDivergenceError


def test_build_uses_standard_muscles(ankle_system):
    assert ankle_system.soleus.max_isometric_force__N == 16000.0
    assert ankle_system.tibialis.max_isometric_force__N == 2000.0
    assert ankle_system.soleus.name == "soleus"
    assert ankle_system.tibialis.name == "tibialis"
    assert ankle_system.soleus.force_curves is ankle_system.tibialis.force_curves


def test_derivative_at_initial_state(ankle_system, initial_state):
    dtheta, domega, dlce_soleus, dlce_tibialis = ankle_system.derivative(
        0.0, initial_state
    )

    assert dtheta == 0.0
    # tendons are at slack length, only gravity acts
    assert domega == pytest.approx(gravity_moment(UPRIGHT__rad) / ANKLE_INERTIA__kg_m2)
    assert domega > 0
    assert dlce_soleus < 0
    assert dlce_tibialis < 0


def test_derivative_is_a_pure_function_of_its_inputs(ankle_system, initial_state):
    state = initial_state + np.array([0.05, 0.1, -0.01, 0.02])

    first = ankle_system.derivative(0.3, state)
    ankle_system.derivative(0.7, initial_state)
    second = ankle_system.derivative(0.3, state)

    assert np.array_equal(first, second)


def test_warm_start_agrees_to_solver_tolerance(initial_state):
    state = initial_state + np.array([0.05, 0.1, -0.01, 0.02])
    cold = AnkleDynamicsSystem.build(control_mode=0)
    warm = AnkleDynamicsSystem.build(control_mode=0, warm_start=True)

    warm.derivative(0.0, initial_state)
    np.testing.assert_allclose(
        warm.derivative(0.3, state), cold.derivative(0.3, state), atol=1e-8
    )


def test_exoskeleton_adds_dorsiflexion_torque(initial_state):
    state = initial_state.copy()
    state[3] = 1.2
    without_exo = AnkleDynamicsSystem.build(exo_stiffness=0.0)
    with_exo = AnkleDynamicsSystem.build(exo_stiffness=1.0)

    difference = with_exo.derivative(0.0, state)[1] - without_exo.derivative(0.0, state)[1]

    assert difference == pytest.approx(
        -with_exo.exoskeleton.force(1.2) * TIBIALIS_MOMENT_ARM__m / ANKLE_INERTIA__kg_m2
    )


def test_exoskeleton_is_slack_at_rest(initial_state):
    without_exo = AnkleDynamicsSystem.build(exo_stiffness=0.0)
    with_exo = AnkleDynamicsSystem.build(exo_stiffness=500.0)

    assert np.array_equal(
        with_exo.derivative(0.0, initial_state),
        without_exo.derivative(0.0, initial_state),
    )


def test_explicit_activation_policy_overrides_control_mode(initial_state):
    silent = AnkleDynamicsSystem.build(
        control_mode=1, activation_policy=ConstantActivation(0.0, 0.0)
    )

    # no activation and slack tendons: the CEs do not move
    assert silent.derivative(0.0, initial_state)[2:] == pytest.approx([0.0, 0.0])


def test_divergence_reports_time_and_state(ankle_system, initial_state):
    state = initial_state.copy()
    state[2] = 0.5  # soleus tendon stretched far beyond the velocity bound

    with pytest.raises(RootFindDivergenceError) as excinfo:
        ankle_system.derivative(0.25, state)

    context = excinfo.value.context
    assert context["muscle"] == "soleus"
    assert context["time"] == 0.25
    assert context["state"] == pytest.approx(list(state))


def test_integrate_reaches_horizon(ankle_system):
    solution = ankle_system.integrate(0.2)

    assert solution.t[0] == 0.0
    assert solution.t[-1] == pytest.approx(0.2)
    assert solution.y.shape[0] == 4
