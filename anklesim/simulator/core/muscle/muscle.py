from dataclasses import dataclass

import numpy as np

from anklesim.simulator.core.integration import integrate
from anklesim.simulator.core.muscle.force_curves import (
    ForceCurves,
    force_length_pe,
    force_length_se,
    get_default_force_curves,
)
from anklesim.simulator.core.muscle.velocity_solver import find_velocity_root
from anklesim.simulator.core.settings import IntegratorSettings, VelocitySolverSettings
from anklesim.utils.types import FLOAT_OR_ARRAY, beartowertype

# The activation step drives a fast transient; a bounded step keeps every solver
# stage within the velocity bound.
ISOMETRIC_INTEGRATOR_SETTINGS = IntegratorSettings(method="RK45", max_step=0.01)


@dataclass(frozen=True)
class MuscleParameters:
    """
    Physical scale factors of a muscle.

    Parameters
    ----------
    max_isometric_force__N : float
        Maximum isometric force.
    resting_length_ce__m : float
        CE length that corresponds to a normalised length of 1.
    resting_length_se__m : float
        SE (tendon) length that corresponds to a normalised length of 1.

    Raises
    ------
    ValueError
        If a resting length is not positive.
    """

    max_isometric_force__N: float
    resting_length_ce__m: float
    resting_length_se__m: float

    def __post_init__(self):
        if self.resting_length_ce__m <= 0:
            raise ValueError(
                f"resting_length_ce__m must be positive, got {self.resting_length_ce__m}"
            )
        if self.resting_length_se__m <= 0:
            raise ValueError(
                f"resting_length_se__m must be positive, got {self.resting_length_se__m}"
            )


@dataclass(frozen=True)
class IsometricResult:
    """Time course of an isometric contraction."""

    time__s: np.ndarray
    ce_length__m: np.ndarray
    tendon_force__N: np.ndarray


class HillTypeMuscle:
    """
    Damped Hill-type muscle model adapted from Millard et al. (2013) [1]_.

    The dynamics are written in normalised length and velocity; the physical
    muscle is obtained with three scale factors (maximum force and the CE and
    SE resting lengths). The CE force curves are shared, read-only models.

    Parameters
    ----------
    max_isometric_force__N : float
        Maximum isometric force.
    resting_length_ce__m : float
        CE length that corresponds to a normalised length of 1.
    resting_length_se__m : float
        SE length that corresponds to a normalised length of 1.
    force_curves : ForceCurves, optional
        Fitted CE curves. Defaults to the process-wide curves from
        :func:`get_default_force_curves`.
    solver_settings : VelocitySolverSettings, optional
        Damping and root finder bounds. Defaults to :class:`VelocitySolverSettings`.
    name : str, default="muscle"
        Label used in error messages.

    References
    ----------
    .. [1] Millard, M., Uchida, T., Seth, A., Delp, S.L., 2013. Flexing computational
           muscle: modeling and simulation of musculotendon dynamics. Journal of
           Biomechanical Engineering 135, 021005. https://doi.org/10.1115/1.4023390
    """

    @beartowertype
    def __init__(
        self,
        max_isometric_force__N: float,
        resting_length_ce__m: float,
        resting_length_se__m: float,
        force_curves: ForceCurves | None = None,
        solver_settings: VelocitySolverSettings | None = None,
        name: str = "muscle",
    ):
        self.parameters = MuscleParameters(
            max_isometric_force__N=float(max_isometric_force__N),
            resting_length_ce__m=float(resting_length_ce__m),
            resting_length_se__m=float(resting_length_se__m),
        )
        self.force_curves = (
            force_curves if force_curves is not None else get_default_force_curves()
        )
        self.solver_settings = (
            solver_settings if solver_settings is not None else VelocitySolverSettings()
        )
        self.name = name

    @classmethod
    def from_muscle_tendon_length(
        cls,
        max_isometric_force__N: float,
        muscle_tendon_length__m: float,
        ce_fraction: float = 0.6,
        **kwargs,
    ) -> "HillTypeMuscle":
        """
        Create a muscle whose rest length is split between CE and SE.

        Parameters
        ----------
        max_isometric_force__N : float
            Maximum isometric force.
        muscle_tendon_length__m : float
            Muscle-tendon length at rest.
        ce_fraction : float, default=0.6
            Share of the rest length taken by the CE; the SE takes the remainder.
        **kwargs
            Forwarded to :class:`HillTypeMuscle`.

        Raises
        ------
        ValueError
            If ``ce_fraction`` is not in (0, 1).
        """
        if not 0 < ce_fraction < 1:
            raise ValueError(f"ce_fraction must be in (0, 1), got {ce_fraction}")
        return cls(
            max_isometric_force__N,
            ce_fraction * muscle_tendon_length__m,
            (1 - ce_fraction) * muscle_tendon_length__m,
            **kwargs,
        )

    @property
    def max_isometric_force__N(self) -> float:
        return self.parameters.max_isometric_force__N

    @property
    def resting_length_ce__m(self) -> float:
        return self.parameters.resting_length_ce__m

    @property
    def resting_length_se__m(self) -> float:
        return self.parameters.resting_length_se__m

    def normalized_length_se(
        self, muscle_tendon_length: FLOAT_OR_ARRAY, normalized_length_ce: FLOAT_OR_ARRAY
    ) -> FLOAT_OR_ARRAY:
        """
        Normalised SE length from the muscle-tendon length and the CE state.

        Parameters
        ----------
        muscle_tendon_length : float | np.ndarray
            Physical length of the whole muscle-tendon unit (m).
        normalized_length_ce : float | np.ndarray
            Normalised CE length (the muscle state variable).

        Returns
        -------
        float | np.ndarray
            Normalised SE length.
        """
        return (
            muscle_tendon_length - self.resting_length_ce__m * normalized_length_ce
        ) / self.resting_length_se__m

    def force(
        self, muscle_tendon_length: FLOAT_OR_ARRAY, normalized_length_ce: FLOAT_OR_ARRAY
    ) -> FLOAT_OR_ARRAY:
        """
        Tendon force transmitted to the skeleton (N).

        Parameters
        ----------
        muscle_tendon_length : float | np.ndarray
            Physical length of the whole muscle-tendon unit (m).
        normalized_length_ce : float | np.ndarray
            Normalised CE length.
        """
        return self.max_isometric_force__N * force_length_se(
            self.normalized_length_se(muscle_tendon_length, normalized_length_ce)
        )

    def velocity(
        self,
        activation: float,
        auxiliary_force: float,
        normalized_length_ce: float,
        normalized_length_se: float,
        initial_guess: float = 0.0,
    ) -> float:
        r"""
        Normalised CE velocity that balances the CE and SE forces.

        Solves

        .. math:: a f_L(l_M) f_V(v_M) + f_{PE}(l_M) + \beta v_M + f_{aux} - f_{SE}(l_T) = 0

        for :math:`v_M`. The force-velocity curve is an empirical fit, so there is no
        closed-form inverse and the equation is solved numerically at every call.

        Parameters
        ----------
        activation : float
            Activation between 0 and 1.
        auxiliary_force : float
            Extra normalised force acting in parallel with the CE (e.g. an exoskeleton).
        normalized_length_ce : float
            Normalised CE length.
        normalized_length_se : float
            Normalised SE length.
        initial_guess : float, default=0.0
            Starting point of the root search.

        Returns
        -------
        float
            Normalised CE velocity (lengths/s).

        Raises
        ------
        RootFindDivergenceError
            If no root is found within the solver bounds.
        """
        beta = self.solver_settings.damping
        active = activation * self.force_curves.force_length_ce(normalized_length_ce)
        passive = force_length_pe(normalized_length_ce) + auxiliary_force
        tendon = force_length_se(normalized_length_se)
        force_velocity_ce = self.force_curves.force_velocity_ce

        def residual(vM: float) -> float:
            return active * force_velocity_ce(vM) + passive + beta * vM - tendon

        return find_velocity_root(
            residual,
            initial_guess,
            self.solver_settings,
            muscle=self.name,
            activation=activation,
            auxiliary_force=auxiliary_force,
            normalized_length_ce=normalized_length_ce,
            normalized_length_se=normalized_length_se,
        )

    @beartowertype
    def simulate_isometric(
        self,
        horizon__s: float = 2.0,
        activation: float = 1.0,
        onset__s: float = 0.5,
        integrator_settings: IntegratorSettings | None = None,
    ) -> IsometricResult:
        """
        Simulate a contraction with the muscle-tendon length held at rest.

        The muscle-tendon length is fixed at the sum of the CE and SE resting
        lengths; activation steps from 0 to ``activation`` at ``onset__s``. The
        step is a discontinuity of the right-hand side, so the run is integrated
        in two segments joined at the onset.

        Parameters
        ----------
        horizon__s : float, default=2.0
            Simulated duration in seconds.
        activation : float, default=1.0
            Activation after the onset.
        onset__s : float, default=0.5
            Time of the activation step in seconds.
        integrator_settings : IntegratorSettings, optional
            ODE solver settings. Defaults to :data:`ISOMETRIC_INTEGRATOR_SETTINGS`.

        Returns
        -------
        IsometricResult
            Time, CE length and tendon force.
        """
        if horizon__s <= 0:
            raise ValueError(f"horizon__s must be positive, got {horizon__s}")
        if integrator_settings is None:
            integrator_settings = ISOMETRIC_INTEGRATOR_SETTINGS
        muscle_tendon_length = self.resting_length_ce__m + self.resting_length_se__m

        def derivative_at(a: float):
            def derivative(t: float, x: np.ndarray) -> list[float]:
                lce = x[0]
                return [
                    self.velocity(
                        a, 0.0, lce, self.normalized_length_se(muscle_tendon_length, lce)
                    )
                ]

            return derivative

        segments = [(0.0, min(onset__s, horizon__s), 0.0)]
        if onset__s < horizon__s:
            segments.append((max(onset__s, 0.0), horizon__s, activation))

        times, lengths = [], []
        state = [1.0]
        for start, end, a in segments:
            if end <= start:
                continue
            solution = integrate(
                derivative_at(a), end, state, integrator_settings, start__s=start
            )
            # the first point of a later segment repeats the last point of the previous one
            skip = 1 if times else 0
            times.append(solution.t[skip:])
            lengths.append(solution.y[0, skip:])
            state = [solution.y[0, -1]]

        time = np.concatenate(times)
        lce = np.concatenate(lengths)

        return IsometricResult(
            time__s=time,
            ce_length__m=lce * self.resting_length_ce__m,
            tendon_force__N=self.force(muscle_tendon_length, lce),
        )

    def __repr__(self) -> str:
        return (
            f"HillTypeMuscle(name={self.name!r}, "
            f"max_isometric_force__N={self.max_isometric_force__N}, "
            f"resting_length_ce__m={self.resting_length_ce__m}, "
            f"resting_length_se__m={self.resting_length_se__m})"
        )
