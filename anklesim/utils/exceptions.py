from typing import Any


class AnkleSimError(Exception):
    """Base class for errors raised by the simulator."""


class SingularMatrixError(AnkleSimError):
    """
    Raised when the ridge-regression normal equations cannot be solved.

    With a positive ridge term this only happens for degenerate inputs, e.g. when
    every sample lies so far from every centre that the feature matrix is zero.
    """


class RootFindDivergenceError(AnkleSimError):
    """
    Raised when the implicit CE velocity equation has no root within the
    velocity bound or the root finder does not converge.

    Parameters
    ----------
    message : str
        Human readable description of the failure.
    **context : Any
        Values that describe the offending state (activation, lengths, bracket,
        time, body state, ...). Stored in :attr:`context`.
    """

    def __init__(self, message: str, **context: Any):
        self.context = context
        if context:
            details = ", ".join(f"{key}={value!r}" for key, value in context.items())
            message = f"{message} ({details})"
        super().__init__(message)


class IntegrationFailureError(AnkleSimError):
    """
    Raised when the adaptive ODE solver gives up before reaching the horizon.

    Parameters
    ----------
    message : str
        Message reported by the solver.
    last_time__s : float
        Last time point the solver reached.
    """

    def __init__(self, message: str, last_time__s: float):
        self.last_time__s = last_time__s
        super().__init__(f"{message} (stopped at t={last_time__s:.6g} s)")
