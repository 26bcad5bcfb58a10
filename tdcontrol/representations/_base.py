from abc import ABC, abstractmethod

import jax.numpy as jnp
import chex

from .._base.mixins import LoggerMixin


__all__ = (
    'BaseProjector',
    'StateActionFeatures',
)


class BaseProjector(ABC, LoggerMixin):
    r"""

    Abstract base class for projectors, i.e. maps from a state observation :math:`x` to a feature
    vector :math:`\phi(x)\in\mathbb{R}^d`.

    """
    @property
    @abstractmethod
    def dimension(self):
        r""" The dimension :math:`d` of the feature space. """
        pass

    @abstractmethod
    def project(self, x):
        r"""

        Map a state observation onto its feature vector.

        Parameters
        ----------
        x : state observation

            A single state observation.

        Returns
        -------
        phi : jnp.ndarray, shape: [dimension]

            The feature vector :math:`\phi(x)`.

        """
        pass

    def __call__(self, x):
        return self.project(x)


class StateActionFeatures:
    r"""

    The representation :math:`\Phi(x)` of a single state: one feature vector per action.

    Parameters
    ----------
    features : ndarray, shape: [num_actions, dimension]

        The state-action feature vectors :math:`\phi(x,a)`, one row per action.

    actions : tuple of ints

        The actions, in the same order as the rows of ``features``.

    """
    __slots__ = ('features', 'actions', '_index')

    def __init__(self, features, actions):
        self.features = jnp.asarray(features)
        self.actions = tuple(int(a) for a in actions)
        chex.assert_rank(self.features, 2)
        chex.assert_axis_dimension(self.features, 0, len(self.actions))
        self._index = {a: i for i, a in enumerate(self.actions)}

    @property
    def dimension(self):
        return self.features.shape[1]

    @property
    def num_actions(self):
        return len(self.actions)

    def index(self, a):
        r""" The row index of action ``a``. """
        try:
            return self._index[int(a)]
        except KeyError:
            raise ValueError(f"unknown action: {a}; expected one of {self.actions}") from None

    def at(self, a):
        r"""

        Get the feature vector of a single action.

        Parameters
        ----------
        a : int

            An action.

        Returns
        -------
        phi : jnp.ndarray, shape: [dimension]

            The state-action feature vector :math:`\phi(x,a)`.

        """
        return self.features[self.index(a)]

    def __iter__(self):
        return iter(self.actions)

    def __len__(self):
        return len(self.actions)

    def __repr__(self):
        return (
            f"{self.__class__.__name__}(num_actions={self.num_actions}, "
            f"dimension={self.dimension})")

    @classmethod
    def from_state_features(cls, phi, actions):
        r"""

        Build a representation in which each action gets its own copy of the state features, i.e.
        :math:`\phi(x,a)=e_a\otimes\phi(x)`.

        Parameters
        ----------
        phi : ndarray, shape: [d]

            The state feature vector :math:`\phi(x)`.

        actions : tuple of ints

            The actions.

        Returns
        -------
        phis : StateActionFeatures

            The representation with ``dimension == len(actions) * d``.

        """
        phi = jnp.ravel(jnp.asarray(phi))
        n = len(actions)
        return cls(jnp.kron(jnp.eye(n, dtype=phi.dtype), phi.reshape(1, -1)), actions)
