import warnings

import numpy as np
import scipy.linalg

from anklesim.utils.exceptions import SingularMatrixError
from anklesim.utils.types import FLOAT_OR_ARRAY, beartowertype


class RegressionModel:
    r"""
    Scalar regression with Gaussian radial basis functions and a ridge penalty.

    The fitted curve is

    .. math:: f(x) = \sum_j w_j \exp\left(-\left(\frac{x - c_j}{s}\right)^2\right)

    where :math:`c_j` are the ``centers`` and :math:`s` is the shared ``width``.
    The weights minimise :math:`\lVert \Phi w - y \rVert^2 + \lambda \lVert w \rVert^2`
    and are obtained in closed form,

    .. math:: w = (\Phi^T \Phi + \lambda I)^{-1} \Phi^T y

    Parameters
    ----------
    centers : np.ndarray | list[float]
        Centres of the basis functions. Fixed for the lifetime of the model.
    width : float
        Shared bandwidth of the basis functions. Must be positive.
    ridge_lambda : float, default=0.01
        Ridge regularisation strength. Must be non-negative.
    clamp_non_negative : bool, default=False
        If True, negative predictions are replaced by 0.

    Raises
    ------
    ValueError
        If ``centers`` is empty, ``width`` is not positive or ``ridge_lambda`` is negative.

    Notes
    -----
    A model is fitted exactly once (see :meth:`fit`) and is read-only afterwards,
    so a single instance can be shared between muscles and between concurrent
    simulations.
    """

    @beartowertype
    def __init__(
        self,
        centers: np.ndarray | list[float],
        width: float,
        ridge_lambda: float = 0.01,
        clamp_non_negative: bool = False,
    ):
        centers = np.array(centers, dtype=float).ravel()
        if centers.size == 0:
            raise ValueError("centers must contain at least one value.")
        if width <= 0:
            raise ValueError(f"width must be positive, got {width}.")
        if ridge_lambda < 0:
            raise ValueError(f"ridge_lambda must be non-negative, got {ridge_lambda}.")

        centers.flags.writeable = False
        self.centers = centers
        self.width = float(width)
        self.ridge_lambda = float(ridge_lambda)
        self.clamp_non_negative = clamp_non_negative

        self.weights: np.ndarray | None = None

    @property
    def is_fitted(self) -> bool:
        return self.weights is not None

    def design_matrix(self, x: FLOAT_OR_ARRAY) -> np.ndarray:
        """
        Gaussian feature matrix of the samples.

        Parameters
        ----------
        x : float | np.ndarray
            Sample(s) of the independent variable.

        Returns
        -------
        np.ndarray
            Matrix of shape (n_samples, n_centers).
        """
        x = np.atleast_1d(np.asarray(x, dtype=float)).ravel()
        return np.exp(-(((x[:, np.newaxis] - self.centers) / self.width) ** 2))

    @beartowertype
    def fit(
        self, xs: np.ndarray | list[float], ys: np.ndarray | list[float]
    ) -> "RegressionModel":
        """
        Compute the ridge weights from a training set.

        Parameters
        ----------
        xs : np.ndarray | list[float]
            Samples of the independent variable.
        ys : np.ndarray | list[float]
            Corresponding samples of the dependent variable.

        Returns
        -------
        RegressionModel
            The fitted model (``self``).

        Raises
        ------
        ValueError
            If the model is already fitted, or ``xs`` and ``ys`` are empty or differ in length.
        SingularMatrixError
            If :math:`\\Phi^T \\Phi + \\lambda I` cannot be inverted.
        """
        if self.is_fitted:
            raise ValueError("RegressionModel is already fitted and cannot be refitted.")

        xs = np.asarray(xs, dtype=float).ravel()
        ys = np.asarray(ys, dtype=float).ravel()
        if xs.size == 0:
            raise ValueError("Training set must contain at least one sample.")
        if xs.size != ys.size:
            raise ValueError(
                f"Length of xs ({xs.size}) must match length of ys ({ys.size})"
            )
        if self.ridge_lambda == 0:
            warnings.warn(
                "Fitting without ridge regularisation; the normal equations may be singular.",
                stacklevel=2,
            )

        phi = self.design_matrix(xs)
        gram = phi.T @ phi + self.ridge_lambda * np.eye(self.centers.size)
        try:
            weights = scipy.linalg.solve(gram, phi.T @ ys)
        except np.linalg.LinAlgError as e:
            raise SingularMatrixError(
                f"Ridge normal equations are singular for {self.centers.size} centers "
                f"(width={self.width}, ridge_lambda={self.ridge_lambda})"
            ) from e

        weights.flags.writeable = False
        self.weights = weights
        return self

    def evaluate(self, x: FLOAT_OR_ARRAY) -> FLOAT_OR_ARRAY:
        """
        Evaluate the fitted curve.

        Parameters
        ----------
        x : float | np.ndarray
            Point(s) at which to evaluate the curve.

        Returns
        -------
        float | np.ndarray
            A float for scalar input, otherwise an array with the shape of ``x``.

        Raises
        ------
        ValueError
            If the model has not been fitted.
        """
        if self.weights is None:
            raise ValueError("RegressionModel must be fitted first using fit()")

        x = np.asarray(x, dtype=float)
        result = self.design_matrix(x) @ self.weights
        if self.clamp_non_negative:
            result = np.maximum(result, 0.0)

        if x.ndim == 0:
            return float(result[0])
        return result.reshape(x.shape)


@beartowertype
def fit_regression(
    xs: np.ndarray | list[float],
    ys: np.ndarray | list[float],
    centers: np.ndarray | list[float],
    width: float,
    ridge_lambda: float = 0.01,
    clamp_non_negative: bool = False,
) -> RegressionModel:
    """
    Fit a Gaussian radial-basis ridge regression to ``ys ≈ f(xs)``.

    Parameters
    ----------
    xs : np.ndarray | list[float]
        Samples of the independent variable.
    ys : np.ndarray | list[float]
        Corresponding samples of the dependent variable.
    centers : np.ndarray | list[float]
        Centres of the Gaussian basis functions.
    width : float
        Shared bandwidth of the basis functions.
    ridge_lambda : float, default=0.01
        Ridge regularisation strength.
    clamp_non_negative : bool, default=False
        If True, the fitted model never returns negative values.

    Returns
    -------
    RegressionModel
        The fitted model.

    Examples
    --------
    >>> model = fit_regression([0.0, 0.5, 1.0], [0.0, 0.25, 1.0], [0.0, 0.5, 1.0], 0.5)
    >>> value = model.evaluate(0.75)
    """
    return RegressionModel(
        centers=centers,
        width=width,
        ridge_lambda=ridge_lambda,
        clamp_non_negative=clamp_non_negative,
    ).fit(xs, ys)
