from types import SimpleNamespace

import numpy as np
import pytest

import anklesim.simulator.core.integration as integration
from anklesim.simulator import AnkleDynamicsSystem, simulate, simulate_exoskeleton_sweep
from anklesim.utils.exceptions import IntegrationFailureError


@pytest.fixture(scope="module")
def uncontrolled_result():
    return simulate(control_mode=0, exo_stiffness=0.0, horizon__s=2.0)


def test_time_runs_from_zero_to_horizon(uncontrolled_result):
    time = uncontrolled_result.time

    assert time[0] == 0.0
    assert time[-1] == pytest.approx(2.0)
    assert np.all(np.diff(time) >= 0)


def test_body_angle_stays_bounded(uncontrolled_result):
    assert np.all(np.isfinite(uncontrolled_result.theta))
    assert np.all((uncontrolled_result.theta >= 0) & (uncontrolled_result.theta <= np.pi))


def test_starts_upright_at_rest(uncontrolled_result):
    assert uncontrolled_result.theta[0] == pytest.approx(np.pi / 2)
    assert uncontrolled_result.omega[0] == 0.0
    assert uncontrolled_result.lce_soleus[0] == 1.0
    assert uncontrolled_result.lce_tibialis[0] == 1.0


def test_rows_yield_state_and_forces(uncontrolled_result):
    rows = list(uncontrolled_result.rows())

    assert len(rows) == len(uncontrolled_result)
    assert all(len(row) == 6 for row in rows)
    t, theta, omega, soleus_force, tibialis_force, exo_force = rows[-1]
    assert t == pytest.approx(2.0)
    assert exo_force == 0.0


def test_forces_are_non_negative(uncontrolled_result):
    assert np.all(uncontrolled_result.soleus_force >= 0)
    assert np.all(uncontrolled_result.tibialis_force >= 0)
    assert np.all(uncontrolled_result.exo_force == 0)


def test_torques_are_consistent_with_forces(uncontrolled_result):
    np.testing.assert_allclose(
        uncontrolled_result.soleus_torque, 0.05 * uncontrolled_result.soleus_force
    )
    np.testing.assert_allclose(
        uncontrolled_result.tibialis_exo_torque,
        -0.03 * uncontrolled_result.tibialis_force,
    )


def test_foot_drop_control_mode_runs():
    result = simulate(control_mode=1, horizon__s=0.5)

    assert result.time[-1] == pytest.approx(0.5)
    assert np.all(np.isfinite(result.theta))


def test_verbose_prints_progress(capsys):
    simulate(horizon__s=0.1, verbose=True)

    assert "✓ Simulation complete" in capsys.readouterr().out


def test_invalid_arguments():
    with pytest.raises(ValueError, match="horizon__s"):
        simulate(horizon__s=0.0)
    with pytest.raises(ValueError, match="spring_constant"):
        simulate(exo_stiffness=-1.0)


def test_solver_failure_raises_integration_failure(monkeypatch):
    def failing_solve_ivp(*args, **kwargs):
        return SimpleNamespace(
            status=-1,
            message="Required step size is less than spacing between numbers.",
            t=np.array([0.0, 0.3]),
            y=np.zeros((4, 2)),
        )

    monkeypatch.setattr(integration, "solve_ivp", failing_solve_ivp)

    with pytest.raises(IntegrationFailureError) as excinfo:
        simulate(horizon__s=2.0)
    assert excinfo.value.last_time__s == pytest.approx(0.3)


def test_collapsed_posture_warns(monkeypatch):
    def collapsed(self, horizon__s, initial_state=None, integrator_settings=None):
        theta = np.array([np.pi / 2, 3.5])
        return SimpleNamespace(
            t=np.array([0.0, horizon__s]),
            y=np.vstack([theta, np.zeros(2), np.ones(2), np.ones(2)]),
        )

    monkeypatch.setattr(AnkleDynamicsSystem, "integrate", collapsed)

    with pytest.warns(UserWarning, match="collapsed"):
        simulate(horizon__s=1.0)


def test_exoskeleton_sweep_keeps_input_order():
    results = simulate_exoskeleton_sweep([0.0, 200.0], horizon__s=0.2, n_jobs=1)

    assert len(results) == 2
    assert np.all(results[0].exo_force == 0)
    assert all(result.time[-1] == pytest.approx(0.2) for result in results)


@pytest.fixture(scope="module")
def foot_drop_with_exoskeleton():
    return simulate(control_mode=1, exo_stiffness=315.0, horizon__s=12.0)


def test_foot_drop_with_exoskeleton_reaches_horizon(foot_drop_with_exoskeleton):
    result = foot_drop_with_exoskeleton

    assert result.time[-1] == pytest.approx(12.0)
    assert np.all(np.diff(result.time) >= 0)
    assert np.all(np.isfinite(result.theta))
    assert np.all((result.theta >= 0) & (result.theta <= np.pi))


def test_stretched_exoskeleton_pulls(foot_drop_with_exoskeleton):
    result = foot_drop_with_exoskeleton

    assert np.any(result.lce_tibialis > 1.0)
    assert np.any(result.exo_force > 0)
    np.testing.assert_allclose(
        result.tibialis_exo_torque,
        -0.03 * (result.tibialis_force + result.exo_force),
    )


def test_foot_drop_exoskeleton_sweep():
    stiffnesses = [100.0, 2000.0]

    results = simulate_exoskeleton_sweep(
        stiffnesses, control_mode=1, horizon__s=5.0, n_jobs=1
    )

    assert len(results) == len(stiffnesses)
    for result in results:
        assert result.time[-1] == pytest.approx(5.0)
        assert np.all(np.isfinite(result.theta))
        assert np.all((result.theta >= 0) & (result.theta <= np.pi))
