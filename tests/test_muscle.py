import numpy as np
import pytest

from anklesim.simulator import HillTypeMuscle, VelocitySolverSettings
from anklesim.simulator.core.muscle import force_length_se
from anklesim.utils.exceptions import RootFindDivergenceError


@pytest.fixture
def muscle():
    return HillTypeMuscle(2000.0, 0.3, 0.2, name="test")


def test_from_muscle_tendon_length_splits_rest_length():
    muscle = HillTypeMuscle.from_muscle_tendon_length(2000.0, 0.5)

    assert muscle.resting_length_ce__m == pytest.approx(0.3)
    assert muscle.resting_length_se__m == pytest.approx(0.2)


@pytest.mark.parametrize("ce_fraction", [0.0, 1.0, 1.5])
def test_from_muscle_tendon_length_rejects_invalid_fraction(ce_fraction):
    with pytest.raises(ValueError, match="ce_fraction"):
        HillTypeMuscle.from_muscle_tendon_length(2000.0, 0.5, ce_fraction)


def test_resting_lengths_must_be_positive():
    with pytest.raises(ValueError, match="resting_length_ce__m"):
        HillTypeMuscle(2000.0, 0.0, 0.2)
    with pytest.raises(ValueError, match="resting_length_se__m"):
        HillTypeMuscle(2000.0, 0.3, -0.2)


def test_normalized_length_se_round_trip(muscle):
    lce, lse = 0.95, 1.04
    muscle_tendon_length = muscle.resting_length_ce__m * lce + muscle.resting_length_se__m * lse

    assert muscle.normalized_length_se(muscle_tendon_length, lce) == pytest.approx(lse)


def test_force_is_zero_at_rest_and_scaled_by_max_force(muscle):
    rest = muscle.resting_length_ce__m + muscle.resting_length_se__m
    stretched = rest + 0.1 * muscle.resting_length_se__m

    assert muscle.force(rest, 1.0) == pytest.approx(0.0, abs=1e-9)
    assert muscle.force(stretched, 1.0) == pytest.approx(2000.0 * force_length_se(1.1))


def test_force_is_vectorised(muscle):
    lengths = np.full(4, 0.52)

    assert muscle.force(lengths, np.ones(4)).shape == (4,)


def test_velocity_is_zero_at_equilibrium(muscle):
    assert muscle.velocity(0.0, 0.0, 1.0, 1.0) == 0.0


def test_active_muscle_with_slack_tendon_shortens(muscle):
    vM = muscle.velocity(1.0, 0.0, 1.0, 1.0)
    curves = muscle.force_curves

    assert vM < 0
    residual = curves.force_length_ce(1.0) * curves.force_velocity_ce(vM) + 0.1 * vM
    assert residual == pytest.approx(0.0, abs=1e-9)


def test_stretched_tendon_lengthens_passive_muscle(muscle):
    # 0.1 * vM = force_length_se(1.01)
    vM = muscle.velocity(0.0, 0.0, 1.0, 1.01)

    assert vM == pytest.approx(10.0 * force_length_se(1.01))


def test_auxiliary_force_acts_in_parallel(muscle):
    assert muscle.velocity(0.0, 0.5, 1.0, 1.0) == pytest.approx(-5.0)


def test_velocity_is_independent_of_initial_guess(muscle):
    assert muscle.velocity(1.0, 0.0, 1.0, 1.0, initial_guess=-0.5) == pytest.approx(
        muscle.velocity(1.0, 0.0, 1.0, 1.0), abs=1e-9
    )


def test_velocity_outside_bound_diverges(muscle):
    # residual 0.1 * vM - 11.6 has its root at 116, beyond the default bound of 10
    with pytest.raises(RootFindDivergenceError) as excinfo:
        muscle.velocity(0.0, 0.0, 1.0, 1.2)

    assert excinfo.value.context["muscle"] == "test"
    assert excinfo.value.context["normalized_length_se"] == 1.2


def test_wider_velocity_bound_finds_the_root():
    muscle = HillTypeMuscle(
        2000.0, 0.3, 0.2, solver_settings=VelocitySolverSettings(max_velocity=200.0)
    )

    assert muscle.velocity(0.0, 0.0, 1.0, 1.2) == pytest.approx(116.0)


def test_non_finite_residual_diverges(muscle):
    with pytest.raises(RootFindDivergenceError, match="not finite"):
        muscle.velocity(np.nan, 0.0, 1.0, 1.0)


@pytest.mark.parametrize(
    "kwargs",
    [{"max_velocity": 0.0}, {"initial_step": -0.1}, {"growth_factor": 1.0}],
)
def test_invalid_solver_settings(kwargs):
    with pytest.raises(ValueError):
        VelocitySolverSettings(**kwargs)


def test_simulate_isometric(muscle):
    result = muscle.simulate_isometric(horizon__s=2.0, activation=1.0, onset__s=0.5)

    before_onset = result.time__s <= 0.5
    assert result.time__s[-1] == pytest.approx(2.0)
    np.testing.assert_allclose(result.tendon_force__N[before_onset], 0.0, atol=1e-6)
    np.testing.assert_allclose(
        result.ce_length__m[before_onset], muscle.resting_length_ce__m
    )
    assert result.ce_length__m[-1] < muscle.resting_length_ce__m
    assert 0.7 * 2000.0 < result.tendon_force__N[-1] < 1.1 * 2000.0


def test_repr(muscle):
    assert "name='test'" in repr(muscle)


def test_simulate_isometric_joins_segments_at_onset(muscle):
    result = muscle.simulate_isometric(horizon__s=1.0, activation=1.0, onset__s=0.5)

    assert np.all(np.diff(result.time__s) > 0)
    assert np.count_nonzero(result.time__s == 0.5) == 1


def test_simulate_isometric_without_onset_stays_at_rest(muscle):
    result = muscle.simulate_isometric(horizon__s=0.5, onset__s=1.0)

    assert result.time__s[-1] == pytest.approx(0.5)
    np.testing.assert_allclose(result.ce_length__m, muscle.resting_length_ce__m)


def test_simulate_isometric_active_from_start(muscle):
    result = muscle.simulate_isometric(horizon__s=1.0, onset__s=0.0)

    assert result.time__s[0] == 0.0
    assert result.ce_length__m[-1] < muscle.resting_length_ce__m


@pytest.mark.parametrize("name", ["soleus", "tibialis"])
def test_simulate_isometric_ankle_muscles(ankle_system, name):
    muscle = getattr(ankle_system, name)

    result = muscle.simulate_isometric()

    assert result.time__s[-1] == pytest.approx(2.0)
    assert (
        0.7 * muscle.max_isometric_force__N
        < result.tendon_force__N[-1]
        < 1.1 * muscle.max_isometric_force__N
    )


def test_simulate_isometric_rejects_non_positive_horizon(muscle):
    with pytest.raises(ValueError, match="horizon__s"):
        muscle.simulate_isometric(horizon__s=0.0)
