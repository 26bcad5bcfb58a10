from abc import ABC, abstractmethod

import jax
import jax.numpy as jnp
import chex

from .._base.errors import DimensionError, NotInitializedError
from .._base.mixins import LoggerMixin, PersistenceMixin
from ..utils import check_features, pretty_repr, zeros_like_tree


__all__ = (
    'BasePredictor',
)


class BasePredictor(ABC, LoggerMixin, PersistenceMixin):
    r"""

    Abstract base class for linear value predictors :math:`v(\phi)=\theta^\top\phi`.

    Parameters
    ----------
    dimension : positive int

        The dimension of the feature vectors.

    """
    def __init__(self, dimension):
        self._dimension = int(dimension)
        if self._dimension <= 0:
            raise ValueError(f"dimension must be a positive int, got: {dimension}")
        self._initialized = False
        self._params = self.default_params()
        self._traces = self.default_traces()

    def default_params(self):
        r""" The initial (all-zero) weights, one leaf per weight group. """
        return {'theta': jnp.zeros(self.dimension)}

    def default_traces(self):
        r""" The initial (all-zero) eligibility traces, or ``None`` if there are no traces. """
        return None

    @property
    def dimension(self):
        return self._dimension

    @property
    def initialized(self):
        return self._initialized

    @property
    def params(self):
        r""" The learned weights, a dict of ndarrays. """
        return self._params

    @params.setter
    def params(self, new_params):
        if jax.tree_util.tree_structure(new_params) != jax.tree_util.tree_structure(self._params):
            raise TypeError("new params must have the same structure as old params")
        try:
            chex.assert_trees_all_equal_shapes(new_params, self._params)
        except AssertionError as e:
            raise DimensionError(f"new params must have the same shapes as old params: {e}")
        self._params = new_params

    @property
    def traces(self):
        r""" The eligibility traces (never persisted). """
        return self._traces

    @property
    @abstractmethod
    def hyperparams(self):
        pass

    def initialize(self):
        r"""

        Start a new episode: clear the eligibility traces and allow updates.

        """
        if self._traces is not None:
            self._traces = zeros_like_tree(self._traces)
        self._initialized = True
        self.logger.debug("initialized")

    def reset(self):
        r"""

        Reset the weights and eligibility traces to zero. Updates are disallowed until the next
        call to :func:`initialize`.

        """
        self._params = zeros_like_tree(self._params)
        if self._traces is not None:
            self._traces = zeros_like_tree(self._traces)
        self._initialized = False
        self.logger.debug("reset")

    def predict(self, phi):
        r"""

        Compute the linear prediction :math:`\theta^\top\phi`.

        Parameters
        ----------
        phi : ndarray, shape: [dimension] or [n, dimension]

            A single feature vector or a stack of feature vectors.

        Returns
        -------
        v : jnp.ndarray, shape: [] or [n]

            The prediction(s).

        """
        phi = check_features(phi, self.dimension)
        return jnp.dot(phi, self._params['theta'])

    @abstractmethod
    def update(self, *args, **kwargs):
        r"""

        Update the weights from a single transition.

        Returns
        -------
        delta : float

            The TD-error :math:`\delta_t`.

        """
        pass

    def _check_initialized(self):
        if not self._initialized:
            raise NotInitializedError(
                f"{self.__class__.__name__}.update() called before initialize()")

    def __repr__(self):
        return f"{self.__class__.__name__}({pretty_repr(dict(self.hyperparams))})"
