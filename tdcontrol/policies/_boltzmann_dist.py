import jax
import jax.numpy as jnp
import haiku as hk

from ..utils import check_features
from ._base import BasePolicyDistribution


__all__ = (
    'BoltzmannDistribution',
)


class BoltzmannDistribution(BasePolicyDistribution):
    r"""

    A parametrized Boltzmann (softmax) policy over linear action preferences:

    .. math::

        \pi_u(a|s)\ =\ \frac{\exp(u^\top\phi(s,a))}{\sum_b\exp(u^\top\phi(s,b))}

    Its log-propensity has the gradient

    .. math::

        \nabla_u\log\pi_u(a|s)\ =\ \phi(s,a) - \sum_b\pi_u(b|s)\,\phi(s,b)

    which we compute with :func:`jax.grad`.

    Parameters
    ----------
    dimension : positive int

        The dimension of the state-action feature vectors.

    random_seed : int, optional

        Seed for the pseudo-random number generator.

    """
    def __init__(self, dimension, random_seed=None):
        super().__init__(random_seed=random_seed)
        self.dimension = int(dimension)
        self._params = self.default_params()

        def log_proba(params, X, i):
            return jax.nn.log_softmax(jnp.dot(X, params['u']))[i]

        def proba(params, X):
            return jax.nn.softmax(jnp.dot(X, params['u']))

        self._grad_log_func = jax.jit(jax.grad(log_proba))
        self._proba_func = jax.jit(proba)

    def default_params(self):
        return {'u': jnp.zeros(self.dimension)}

    @property
    def hyperparams(self):
        return hk.data_structures.to_immutable_dict({'dimension': self.dimension})

    def compute_probabilities(self, phis):
        X = check_features(phis.features, self.dimension, 'phis.features')
        return self._proba_func(self._params, X)

    def grad_log(self, phis, a):
        X = check_features(phis.features, self.dimension, 'phis.features')
        return self._grad_log_func(self._params, X, phis.index(a))
