"""
Musculoskeletal geometry of the single-segment ankle model.

The body is a rigid segment rotating about the ankle. ``theta`` is the body angle
measured up from the prone horizontal, so ``theta = pi/2`` is upright. Muscle
origins are fixed in the body frame and rotate with it; insertions are fixed on
the foot.
"""

import numpy as np

from anklesim.utils.types import FLOAT_OR_ARRAY

# Attachment points (m), body frame for origins and foot frame for insertions
SOLEUS_ORIGIN__m = np.array([0.3, 0.03])
SOLEUS_INSERTION__m = np.array([-0.05, -0.02])
TIBIALIS_ORIGIN__m = np.array([0.3, -0.03])
TIBIALIS_INSERTION__m = np.array([0.06, -0.03])

# Foot segment
BODY_MASS__kg = 70.0
FOOT_MASS_FRACTION = 0.0145
FOOT_MASS__kg = FOOT_MASS_FRACTION * BODY_MASS__kg
FOOT_COM_DISTANCE__m = 0.5 * 0.25  # ankle to centre of mass
GRAVITY__m_s2 = 9.81

UPRIGHT__rad = np.pi / 2


def muscle_tendon_length(
    theta: FLOAT_OR_ARRAY, origin: np.ndarray, insertion: np.ndarray
) -> FLOAT_OR_ARRAY:
    """
    Length of a straight-line muscle path as a function of the body angle.

    Parameters
    ----------
    theta : float | np.ndarray
        Body angle(s) in radians.
    origin : np.ndarray
        Origin (x, y) in the body frame; rotated by ``theta`` about the ankle.
    insertion : np.ndarray
        Insertion (x, y), fixed.

    Returns
    -------
    float | np.ndarray
        Muscle-tendon length(s) in metres, with the shape of ``theta``.
    """
    theta = np.asarray(theta, dtype=float)
    cos_theta, sin_theta = np.cos(theta), np.sin(theta)
    dx = cos_theta * origin[0] - sin_theta * origin[1] - insertion[0]
    dy = sin_theta * origin[0] + cos_theta * origin[1] - insertion[1]
    length = np.hypot(dx, dy)
    return float(length) if theta.ndim == 0 else length


def soleus_length(theta: FLOAT_OR_ARRAY) -> FLOAT_OR_ARRAY:
    """Soleus muscle-tendon length (m) at body angle ``theta``."""
    return muscle_tendon_length(theta, SOLEUS_ORIGIN__m, SOLEUS_INSERTION__m)


def tibialis_length(theta: FLOAT_OR_ARRAY) -> FLOAT_OR_ARRAY:
    """Tibialis anterior muscle-tendon length (m) at body angle ``theta``."""
    return muscle_tendon_length(theta, TIBIALIS_ORIGIN__m, TIBIALIS_INSERTION__m)


def gravity_moment(theta: FLOAT_OR_ARRAY) -> FLOAT_OR_ARRAY:
    """
    Moment about the ankle due to gravity acting on the foot segment.

    Parameters
    ----------
    theta : float | np.ndarray
        Body angle(s) in radians.

    Returns
    -------
    float | np.ndarray
        Moment (N m); ``m g l_COM cos(theta - pi/2)``.
    """
    theta = np.asarray(theta, dtype=float)
    moment = FOOT_MASS__kg * GRAVITY__m_s2 * FOOT_COM_DISTANCE__m * np.cos(
        theta - UPRIGHT__rad
    )
    return float(moment) if theta.ndim == 0 else moment
