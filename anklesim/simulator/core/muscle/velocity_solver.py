from typing import Any, Callable

import numpy as np
from scipy.optimize import brentq

from anklesim.simulator.core.settings import VelocitySolverSettings
from anklesim.utils.exceptions import RootFindDivergenceError


def _checked(residual: Callable[[float], float], x: float, **context: Any) -> float:
    value = float(residual(x))
    if not np.isfinite(value):
        raise RootFindDivergenceError(
            "Velocity residual is not finite", velocity=x, residual=value, **context
        )
    return value


def find_velocity_root(
    residual: Callable[[float], float],
    initial_guess: float = 0.0,
    settings: VelocitySolverSettings | None = None,
    **context: Any,
) -> float:
    """
    Find a zero of a scalar residual within ``±settings.max_velocity``.

    A bracket is grown symmetrically around the initial guess, each attempt
    multiplying its half-width by ``settings.growth_factor``, until the residual
    changes sign. The root inside the first bracket found is refined with Brent's
    method. Only the newly added part of each bracket is checked for a sign change,
    so the root closest to the initial guess is returned (lower side first).

    Parameters
    ----------
    residual : Callable[[float], float]
        Function whose zero is sought.
    initial_guess : float, default=0.0
        Starting point of the search. Clipped to the velocity bound.
    settings : VelocitySolverSettings, optional
        Bracket and iteration bounds. Defaults to :class:`VelocitySolverSettings`.
    **context : Any
        Extra values attached to a :class:`RootFindDivergenceError` for diagnosis.

    Returns
    -------
    float
        The root.

    Raises
    ------
    RootFindDivergenceError
        If no sign change exists within the velocity bound, the residual is not
        finite, or Brent's method does not converge within ``settings.max_iterations``.
    """
    if settings is None:
        settings = VelocitySolverSettings()

    bound = settings.max_velocity
    x0 = float(np.clip(initial_guess, -bound, bound))
    f0 = _checked(residual, x0, **context)
    if f0 == 0.0:
        return x0

    inner_lower = inner_upper = x0
    step = settings.initial_step
    bracket: tuple[float, float] | None = None

    while bracket is None:
        lower = max(x0 - step, -bound)
        upper = min(x0 + step, bound)

        if lower < inner_lower:
            f_lower = _checked(residual, lower, **context)
            if f_lower == 0.0:
                return lower
            if np.sign(f_lower) != np.sign(f0):
                bracket = (lower, inner_lower)
                continue

        if upper > inner_upper:
            f_upper = _checked(residual, upper, **context)
            if f_upper == 0.0:
                return upper
            if np.sign(f_upper) != np.sign(f0):
                bracket = (inner_upper, upper)
                continue

        if lower <= -bound and upper >= bound:
            raise RootFindDivergenceError(
                "No CE velocity root within the velocity bound",
                max_velocity=bound,
                residual_at_guess=f0,
                **context,
            )

        inner_lower, inner_upper = lower, upper
        step *= settings.growth_factor

    root, result = brentq(
        residual,
        *bracket,
        xtol=settings.xtol,
        maxiter=settings.max_iterations,
        full_output=True,
        disp=False,
    )
    if not result.converged:
        raise RootFindDivergenceError(
            f"Brent's method did not converge: {result.flag}",
            bracket=bracket,
            iterations=result.iterations,
            **context,
        )
    return float(root)
