from abc import ABC, abstractmethod

import jax
import jax.numpy as jnp
import chex

from .._base.errors import DimensionError, NotInitializedError
from .._base.mixins import LoggerMixin, RandomStateMixin
from ..representations import StateActionFeatures
from ..utils import argmax


__all__ = (
    'BasePolicy',
    'BasePolicyDistribution',
    'sample_action',
    'sample_best_action',
)


class BasePolicy(ABC, LoggerMixin, RandomStateMixin):
    r"""

    Abstract base class for policies over a finite action set.

    A policy is stateful: :func:`update` evaluates the policy on the representation
    :math:`\Phi(s)` of a state, after which :func:`pi`, :func:`probabilities`,
    :func:`sample_action` and :func:`sample_best_action` refer to that state.

    Parameters
    ----------
    random_seed : int, optional

        Seed for the pseudo-random number generator.

    """
    def __init__(self, random_seed=None):
        self.random_seed = random_seed
        self._phis = None
        self._probs = None

    @abstractmethod
    def compute_probabilities(self, phis):
        r"""

        Compute the action probabilities :math:`\pi(.|s)`.

        Parameters
        ----------
        phis : StateActionFeatures

            The representation :math:`\Phi(s)`.

        Returns
        -------
        probs : jnp.ndarray, shape: [num_actions]

            The action probabilities, in the order of ``phis.actions``.

        """
        pass

    def update(self, phis):
        r"""

        Evaluate the policy on a state representation.

        Parameters
        ----------
        phis : StateActionFeatures

            The representation :math:`\Phi(s)`.

        """
        if not isinstance(phis, StateActionFeatures):
            raise TypeError(f"phis must be a StateActionFeatures instance, got: {type(phis)}")
        probs = self.compute_probabilities(phis)
        chex.assert_shape(probs, (phis.num_actions,))
        self._phis, self._probs = phis, probs

    @property
    def evaluated_state(self):
        r"""

        The representation and action probabilities from the most recent call to :func:`update`.
        Assigning a previously read value restores the policy to that state.

        """
        return self._phis, self._probs

    @evaluated_state.setter
    def evaluated_state(self, new_state):
        self._phis, self._probs = new_state

    def probabilities(self):
        r"""

        The action probabilities :math:`\pi(.|s)` at the most recent state passed to
        :func:`update`.

        Returns
        -------
        probs : jnp.ndarray, shape: [num_actions]

            The action probabilities.

        """
        self._check_updated()
        return self._probs

    def pi(self, a):
        r"""

        The probability :math:`\pi(a|s)` of a single action.

        Parameters
        ----------
        a : int

            An action.

        Returns
        -------
        p : float

            The probability.

        """
        self._check_updated()
        return float(self._probs[self._phis.index(a)])

    def sample_action(self):
        r""" Sample an action :math:`a\sim\pi(.|s)`. """
        self._check_updated()
        i = jax.random.categorical(self.rng, jnp.log(self._probs))
        return self._phis.actions[int(i)]

    def sample_best_action(self):
        r""" Pick the most probable action, breaking ties at random. """
        self._check_updated()
        i = argmax(self.rng, self._probs)
        return self._phis.actions[int(i)]

    def _check_updated(self):
        if self._probs is None:
            raise NotInitializedError(
                f"{self.__class__.__name__}.update() must be called before it can be evaluated")


class BasePolicyDistribution(BasePolicy):
    r"""

    Abstract base class for parametrized policies :math:`\pi_u(a|s)` that expose their parameter
    groups :math:`u` and the gradient :math:`\nabla_u\log\pi_u(a|s)`.

    """
    @abstractmethod
    def default_params(self):
        pass

    @property
    def params(self):
        r""" The parameter groups :math:`u`, a dict of ndarrays. """
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

    @abstractmethod
    def grad_log(self, phis, a):
        r"""

        Compute the gradient of the log-propensity :math:`\nabla_u\log\pi_u(a|s)`.

        Parameters
        ----------
        phis : StateActionFeatures

            The representation :math:`\Phi(s)`.

        a : int

            The action.

        Returns
        -------
        grad : pytree with ndarray leaves

            The gradient, with the same structure as :attr:`params`.

        """
        pass


def sample_action(policy, phis):
    r"""

    Evaluate a policy on a state representation and sample an action.

    Parameters
    ----------
    policy : BasePolicy

        The policy.

    phis : StateActionFeatures

        The representation :math:`\Phi(s)`.

    Returns
    -------
    a : int

        The sampled action.

    """
    policy.update(phis)
    return policy.sample_action()


def sample_best_action(policy, phis):
    r"""

    Evaluate a policy on a state representation and pick its most probable action.

    Parameters
    ----------
    policy : BasePolicy

        The policy.

    phis : StateActionFeatures

        The representation :math:`\Phi(s)`.

    Returns
    -------
    a : int

        The most probable action.

    """
    policy.update(phis)
    return policy.sample_best_action()
