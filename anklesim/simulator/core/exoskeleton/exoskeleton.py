import numpy as np

from anklesim.simulator.core.geometry import UPRIGHT__rad, tibialis_length
from anklesim.utils.types import FLOAT_OR_ARRAY, beartowertype


class ExoskeletonSpring:
    """
    Passive exoskeleton spring acting in parallel with the tibialis anterior.

    The spring is unilateral: it only pulls when stretched beyond a normalised
    length of 1 and is slack otherwise.

    Parameters
    ----------
    spring_constant : float
        Physical spring constant. Must be non-negative.
    reference_length__m : float, optional
        Length used to normalise the spring constant. Defaults to the tibialis
        muscle-tendon length in the upright posture (``theta = pi/2``).

    Attributes
    ----------
    stiffness : float
        Spring constant per unit normalised length,
        ``spring_constant / reference_length__m``.

    Raises
    ------
    ValueError
        If ``spring_constant`` is negative or ``reference_length__m`` is not positive.
    """

    @beartowertype
    def __init__(
        self, spring_constant: float, reference_length__m: float | None = None
    ):
        if spring_constant < 0:
            raise ValueError(
                f"spring_constant must be non-negative, got {spring_constant}"
            )
        if reference_length__m is None:
            reference_length__m = tibialis_length(UPRIGHT__rad)
        if reference_length__m <= 0:
            raise ValueError(
                f"reference_length__m must be positive, got {reference_length__m}"
            )

        self.spring_constant = float(spring_constant)
        self.reference_length__m = float(reference_length__m)
        self.stiffness = self.spring_constant / self.reference_length__m

    def force(self, normalized_length: FLOAT_OR_ARRAY) -> FLOAT_OR_ARRAY:
        """
        Spring force at a normalised length.

        Parameters
        ----------
        normalized_length : float | np.ndarray
            Normalised length of the spring (the tibialis CE length).

        Returns
        -------
        float | np.ndarray
            ``stiffness * (normalized_length - 1)`` in extension, 0 otherwise.
        """
        normalized_length = np.asarray(normalized_length, dtype=float)
        result = self.stiffness * np.maximum(normalized_length - 1.0, 0.0)
        return float(result) if normalized_length.ndim == 0 else result

    def __repr__(self) -> str:
        return (
            f"ExoskeletonSpring(spring_constant={self.spring_constant}, "
            f"stiffness={self.stiffness})"
        )
