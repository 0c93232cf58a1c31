from typing import Callable, Sequence

import numpy as np
from scipy.integrate import solve_ivp

from anklesim.simulator.core.settings import IntegratorSettings
from anklesim.utils.exceptions import IntegrationFailureError


def integrate(
    fun: Callable[[float, np.ndarray], np.ndarray | list[float]],
    horizon__s: float,
    initial_state: Sequence[float] | np.ndarray,
    settings: IntegratorSettings | None = None,
    start__s: float = 0.0,
):
    """
    Integrate ``dx/dt = fun(t, x)`` from ``t=start__s`` to ``t=horizon__s``.

    Parameters
    ----------
    fun : Callable[[float, np.ndarray], np.ndarray | list[float]]
        Right-hand side of the ODE.
    horizon__s : float
        Final time in seconds. Must be positive and later than ``start__s``.
    initial_state : Sequence[float] | np.ndarray
        State at ``t=start__s``.
    settings : IntegratorSettings, optional
        Solver method, tolerances and step bound. Defaults to LSODA with atol 1e-6
        and rtol 1e-5.
    start__s : float, default=0.0
        Initial time in seconds.

    Returns
    -------
    scipy.integrate.OdeResult
        The solver output; ``t`` holds the accepted time points and ``y`` the states.

    Raises
    ------
    ValueError
        If ``horizon__s`` is not positive or not later than ``start__s``.
    IntegrationFailureError
        If the solver stops before the horizon (e.g. the step size underflows).
    """
    if horizon__s <= 0:
        raise ValueError(f"horizon__s must be positive, got {horizon__s}")
    if horizon__s <= start__s:
        raise ValueError(
            f"horizon__s ({horizon__s}) must be later than start__s ({start__s})"
        )
    if settings is None:
        settings = IntegratorSettings()

    solution = solve_ivp(
        fun,
        (start__s, horizon__s),
        np.asarray(initial_state, dtype=float),
        method=settings.method,
        atol=settings.atol,
        rtol=settings.rtol,
        max_step=settings.max_step,
    )

    if solution.status == -1:
        last_time = float(solution.t[-1]) if len(solution.t) else start__s
        raise IntegrationFailureError(solution.message, last_time)

    return solution
