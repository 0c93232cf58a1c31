import warnings
from dataclasses import dataclass
from typing import Iterator, Literal

import numpy as np
from joblib import Parallel, delayed
from tqdm import tqdm

from anklesim.simulator.core.dynamics.activation import ActivationPolicy
from anklesim.simulator.core.dynamics.ankle import (
    SOLEUS_MOMENT_ARM__m,
    TIBIALIS_MOMENT_ARM__m,
    AnkleDynamicsSystem,
)
from anklesim.simulator.core.geometry import (
    gravity_moment,
    soleus_length,
    tibialis_length,
)
from anklesim.simulator.core.settings import IntegratorSettings
from anklesim.utils.types import beartowertype


@dataclass(frozen=True)
class SimulationResult:
    """
    Time series produced by :func:`simulate`.

    Attributes
    ----------
    time : np.ndarray
        Accepted solver time points (s), non-decreasing from 0 to the horizon.
    theta : np.ndarray
        Body angle (rad).
    omega : np.ndarray
        Angular velocity (rad/s).
    lce_soleus, lce_tibialis : np.ndarray
        Normalised CE lengths.
    soleus_force, tibialis_force : np.ndarray
        Tendon forces (N).
    exo_force : np.ndarray
        Exoskeleton spring force.
    soleus_torque, tibialis_exo_torque, gravity_torque : np.ndarray
        Contributions to the ankle moment (N m). The tibialis/exoskeleton
        contribution is negative when they pull.
    """

    time: np.ndarray
    theta: np.ndarray
    omega: np.ndarray
    lce_soleus: np.ndarray
    lce_tibialis: np.ndarray
    soleus_force: np.ndarray
    tibialis_force: np.ndarray
    exo_force: np.ndarray
    soleus_torque: np.ndarray
    tibialis_exo_torque: np.ndarray
    gravity_torque: np.ndarray

    def rows(self) -> Iterator[tuple[float, float, float, float, float, float]]:
        """Yield ``(t, theta, omega, soleus_force, tibialis_force, exo_force)`` per time point."""
        for row in zip(
            self.time,
            self.theta,
            self.omega,
            self.soleus_force,
            self.tibialis_force,
            self.exo_force,
        ):
            yield tuple(float(value) for value in row)

    def __len__(self) -> int:
        return len(self.time)


def _collect_result(
    system: AnkleDynamicsSystem, time: np.ndarray, states: np.ndarray
) -> SimulationResult:
    theta, omega, lce_soleus, lce_tibialis = states
    soleus_force = system.soleus.force(soleus_length(theta), lce_soleus)
    tibialis_force = system.tibialis.force(tibialis_length(theta), lce_tibialis)
    exo_force = system.exoskeleton.force(lce_tibialis)

    return SimulationResult(
        time=time,
        theta=theta,
        omega=omega,
        lce_soleus=lce_soleus,
        lce_tibialis=lce_tibialis,
        soleus_force=soleus_force,
        tibialis_force=tibialis_force,
        exo_force=exo_force,
        soleus_torque=soleus_force * SOLEUS_MOMENT_ARM__m,
        tibialis_exo_torque=-(tibialis_force + exo_force) * TIBIALIS_MOMENT_ARM__m,
        gravity_torque=gravity_moment(theta),
    )


@beartowertype
def simulate(
    control_mode: Literal[0, 1] = 0,
    exo_stiffness: float = 0.0,
    horizon__s: float = 2.0,
    activation_policy: ActivationPolicy | None = None,
    integrator_settings: IntegratorSettings | None = None,
    verbose: bool = False,
) -> SimulationResult:
    """
    Simulate standing posture from upright, at rest.

    Parameters
    ----------
    control_mode : {0, 1}, default=0
        0 uses fixed activations, 1 the angle-driven foot-drop law.
    exo_stiffness : float, default=0.0
        Physical spring constant of the exoskeleton. Must be non-negative.
    horizon__s : float, default=2.0
        Simulated duration in seconds. Must be positive.
    activation_policy : ActivationPolicy, optional
        Explicit activation policy, overriding ``control_mode``.
    integrator_settings : IntegratorSettings, optional
        ODE solver settings. Defaults to LSODA with atol 1e-6 and rtol 1e-5.
    verbose : bool, default=False
        If True, print progress messages.

    Returns
    -------
    SimulationResult
        Time series of the body state, muscle forces and ankle moments.

    Raises
    ------
    ValueError
        If ``exo_stiffness`` is negative or ``horizon__s`` is not positive.
    RootFindDivergenceError
        If a CE velocity cannot be solved.
    IntegrationFailureError
        If the ODE solver stops before the horizon.

    Examples
    --------
    >>> result = simulate(control_mode=0, exo_stiffness=0.0, horizon__s=2.0)
    >>> for t, theta, omega, f_soleus, f_tibialis, f_exo in result.rows():
    ...     pass
    """
    system = AnkleDynamicsSystem.build(
        control_mode=control_mode,
        exo_stiffness=exo_stiffness,
        activation_policy=activation_policy,
    )

    if verbose:
        print(
            f"Simulating {horizon__s} s (control_mode={control_mode}, "
            f"exo_stiffness={exo_stiffness})..."
        )

    solution = system.integrate(horizon__s, integrator_settings=integrator_settings)
    result = _collect_result(system, solution.t, solution.y)

    if np.any((result.theta < 0) | (result.theta > np.pi)):
        warnings.warn(
            f"Body angle left [0, pi] (range {result.theta.min():.3f} to "
            f"{result.theta.max():.3f} rad); the posture has collapsed.",
            stacklevel=2,
        )

    if verbose:
        print(f"✓ Simulation complete: {len(result)} time points")

    return result


@beartowertype
def simulate_exoskeleton_sweep(
    exo_stiffnesses: list[float] | np.ndarray,
    control_mode: Literal[0, 1] = 0,
    horizon__s: float = 2.0,
    n_jobs: int = 1,
) -> list[SimulationResult]:
    """
    Run one simulation per exoskeleton spring constant.

    The runs are independent and share only the read-only force curves, so they
    are distributed over ``n_jobs`` workers with :mod:`joblib`.

    Parameters
    ----------
    exo_stiffnesses : list[float] | np.ndarray
        Physical spring constants to simulate.
    control_mode : {0, 1}, default=0
        Activation policy selector passed to :func:`simulate`.
    horizon__s : float, default=2.0
        Simulated duration of each run in seconds.
    n_jobs : int, default=1
        Number of parallel workers (``-1`` for all cores).

    Returns
    -------
    list[SimulationResult]
        One result per spring constant, in input order.
    """
    runs = Parallel(n_jobs=n_jobs, return_as="generator")(
        delayed(simulate)(control_mode, float(exo_stiffness), horizon__s)
        for exo_stiffness in exo_stiffnesses
    )
    return list(tqdm(runs, total=len(exo_stiffnesses), desc="Exoskeleton sweep"))
