"""
Numerical tunables of the simulator.

The defaults reproduce the behaviour of the reference ankle model; they are
grouped in frozen dataclasses so a run can override them without touching the
call chain.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class VelocitySolverSettings:
    """
    Settings of the implicit CE velocity solver.

    Parameters
    ----------
    damping : float, default=0.1
        Damping coefficient β of the damped Hill model (Millard et al. 2013).
    max_velocity : float, default=10.0
        Largest normalised CE speed (lengths/s) searched for a root, in either direction.
    initial_step : float, default=0.01
        Half-width of the first bracket tried around the initial guess.
    growth_factor : float, default=2.0
        Factor by which the bracket half-width grows after each failed attempt.
    xtol : float, default=1e-12
        Absolute tolerance of Brent's method.
    max_iterations : int, default=100
        Iteration bound of Brent's method.
    """

    damping: float = 0.1
    max_velocity: float = 10.0
    initial_step: float = 0.01
    growth_factor: float = 2.0
    xtol: float = 1e-12
    max_iterations: int = 100

    def __post_init__(self):
        if self.max_velocity <= 0:
            raise ValueError(f"max_velocity must be positive, got {self.max_velocity}")
        if self.initial_step <= 0:
            raise ValueError(f"initial_step must be positive, got {self.initial_step}")
        if self.growth_factor <= 1:
            raise ValueError(
                f"growth_factor must be greater than 1, got {self.growth_factor}"
            )


@dataclass(frozen=True)
class IntegratorSettings:
    """
    Settings of the adaptive ODE solver (:func:`scipy.integrate.solve_ivp`).

    The ankle model turns stiff once the exoskeleton spring is stretched, so the
    default method switches automatically between Adams and BDF steps.

    Parameters
    ----------
    method : str, default="LSODA"
        Integration method passed to :func:`scipy.integrate.solve_ivp`.
    atol : float, default=1e-6
        Absolute tolerance.
    rtol : float, default=1e-5
        Relative tolerance.
    max_step : float, default=inf
        Largest allowed step in seconds.
    """

    method: str = "LSODA"
    atol: float = 1e-6
    rtol: float = 1e-5
    max_step: float = float("inf")

    def __post_init__(self):
        if self.max_step <= 0:
            raise ValueError(f"max_step must be positive, got {self.max_step}")
