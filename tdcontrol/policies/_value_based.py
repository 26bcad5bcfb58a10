import jax
import jax.numpy as jnp
import haiku as hk

from ..utils import argmax
from ._base import BasePolicy


__all__ = (
    'Greedy',
    'EpsilonGreedy',
    'BoltzmannPolicy',
)


class BaseValueBasedPolicy(BasePolicy):
    """ Abstract base class for policies derived from action values. """

    def __init__(self, predictor, random_seed=None):
        if not callable(getattr(predictor, 'predict', None)):
            raise TypeError(f"predictor must have a predict() method, got: {type(predictor)}")
        super().__init__(random_seed=random_seed)
        self.predictor = predictor

    def action_values(self, phis):
        r"""

        Compute the action values :math:`q(s,a)=\theta^\top\phi(s,a)` for all actions.

        Parameters
        ----------
        phis : StateActionFeatures

            The representation :math:`\Phi(s)`.

        Returns
        -------
        q : jnp.ndarray, shape: [num_actions]

            The action values.

        """
        return self.predictor.predict(phis.features)

    @property
    def hyperparams(self):
        return hk.data_structures.to_immutable_dict({})


class Greedy(BaseValueBasedPolicy):
    r"""

    The greedy policy :math:`\pi(a|s)=1` for :math:`a=\arg\max_{a'}q(s,a')` and zero otherwise.
    Ties are broken at random when the policy is evaluated in :func:`update`.

    Parameters
    ----------
    predictor : predictor

        The action-value predictor, see :mod:`tdcontrol.predictors`.

    random_seed : int, optional

        Seed for the pseudo-random number generator.

    """
    def compute_probabilities(self, phis):
        Q_s = self.action_values(phis)
        return jax.nn.one_hot(argmax(self.rng, Q_s), phis.num_actions)


class EpsilonGreedy(BaseValueBasedPolicy):
    r"""

    Create an :math:`\epsilon`-greedy policy, given an action-value predictor.

    .. math::

        \pi(a|s)\ =\ \left\{\begin{matrix}
            1 - \epsilon + \epsilon / |A| & \text{ if } a = \arg\max_{a'} q(s,a') \\
            \epsilon / |A| & \text{ otherwise }
        \end{matrix}\right.

    Parameters
    ----------
    predictor : predictor

        The action-value predictor, see :mod:`tdcontrol.predictors`.

    epsilon : float between 0 and 1, optional

        The probability of sampling an action uniformly at random.

    random_seed : int, optional

        Seed for the pseudo-random number generator.

    """
    def __init__(self, predictor, epsilon=0.1, random_seed=None):
        super().__init__(predictor, random_seed=random_seed)
        self.epsilon = float(epsilon)

    @property
    def hyperparams(self):
        return hk.data_structures.to_immutable_dict({'epsilon': self.epsilon})

    def compute_probabilities(self, phis):
        Q_s = self.action_values(phis)
        n = phis.num_actions
        A_greedy = jax.nn.one_hot(argmax(self.rng, Q_s), n)
        return (1 - self.epsilon) * A_greedy + self.epsilon / n


class BoltzmannPolicy(BaseValueBasedPolicy):
    r"""

    Derive a Boltzmann policy from an action-value predictor.

    .. math::

        \pi(.|s)\ =\ \text{softmax}(q(s,.) / \tau)

    Parameters
    ----------
    predictor : predictor

        The action-value predictor, see :mod:`tdcontrol.predictors`.

    temperature : positive float, optional

        The Boltzmann temperature :math:`\tau>0`. Small values result in greedy sampling while
        large values result in uniform sampling.

    random_seed : int, optional

        Seed for the pseudo-random number generator.

    """
    def __init__(self, predictor, temperature=1.0, random_seed=None):
        super().__init__(predictor, random_seed=random_seed)
        if not temperature > 0:
            raise ValueError(f"temperature must be positive, got: {temperature}")
        self.temperature = float(temperature)

    @property
    def hyperparams(self):
        return hk.data_structures.to_immutable_dict({'temperature': self.temperature})

    def compute_probabilities(self, phis):
        return jax.nn.softmax(self.action_values(phis) / self.temperature)
