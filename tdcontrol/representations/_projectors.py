import gymnasium
import jax
import jax.numpy as jnp
import numpy as onp

from ._base import BaseProjector, StateActionFeatures


__all__ = (
    'OneHotProjector',
    'IdentityProjector',
    'ActionStackedProjector',
)


class OneHotProjector(BaseProjector):
    r"""

    One-hot encode a discrete state observation.

    Parameters
    ----------
    observation_space : gymnasium.spaces.Discrete

        The observation space.

    bias : bool, optional

        Whether to append a constant unit to the features.

    """
    def __init__(self, observation_space, bias=False):
        if not isinstance(observation_space, gymnasium.spaces.Discrete):
            raise TypeError(
                f"{self.__class__.__name__} requires a Discrete observation space, "
                f"got: {type(observation_space)}")
        self.observation_space = observation_space
        self.bias = bool(bias)

    @property
    def dimension(self):
        return int(self.observation_space.n) + int(self.bias)

    def project(self, x):
        i = int(x) - int(self.observation_space.start)
        if not 0 <= i < self.observation_space.n:
            raise ValueError(f"observation {x} is not in {self.observation_space}")
        phi = jax.nn.one_hot(i, self.observation_space.n)
        if self.bias:
            phi = jnp.concatenate((phi, jnp.ones(1, dtype=phi.dtype)))
        return phi


class IdentityProjector(BaseProjector):
    r"""

    Use the (flattened) observation itself as the feature vector.

    Parameters
    ----------
    observation_space : gymnasium.spaces.Box

        The observation space.

    bias : bool, optional

        Whether to append a constant unit to the features.

    """
    def __init__(self, observation_space, bias=False):
        if not isinstance(observation_space, gymnasium.spaces.Box):
            raise TypeError(
                f"{self.__class__.__name__} requires a Box observation space, "
                f"got: {type(observation_space)}")
        self.observation_space = observation_space
        self.bias = bool(bias)

    @property
    def dimension(self):
        return int(onp.prod(self.observation_space.shape)) + int(self.bias)

    def project(self, x):
        phi = jnp.ravel(jnp.asarray(x, dtype=jnp.float32))
        if phi.shape[0] != self.dimension - int(self.bias):
            raise ValueError(
                f"expected observation of shape {self.observation_space.shape}, "
                f"got: {jnp.shape(x)}")
        if self.bias:
            phi = jnp.concatenate((phi, jnp.ones(1, dtype=phi.dtype)))
        return phi


class ActionStackedProjector:
    r"""

    Map a state observation onto its per-action representation :math:`\Phi(x)` by giving each
    action its own block of state features:

    .. math::

        \phi(x, a)\ =\ e_a\otimes\phi(x)

    where :math:`e_a` is the one-hot encoding of :math:`a`.

    Parameters
    ----------
    projector : BaseProjector

        The state projector :math:`\phi(x)`.

    action_space : gymnasium.spaces.Discrete

        The finite action set.

    """
    def __init__(self, projector, action_space):
        if not isinstance(projector, BaseProjector):
            raise TypeError(f"projector must be a BaseProjector, got: {type(projector)}")
        if not isinstance(action_space, gymnasium.spaces.Discrete):
            raise TypeError(f"action_space must be Discrete, got: {type(action_space)}")
        self.projector = projector
        self.action_space = action_space

    @property
    def actions(self):
        start = int(self.action_space.start)
        return tuple(range(start, start + int(self.action_space.n)))

    @property
    def dimension(self):
        return len(self.actions) * self.projector.dimension

    def state_actions(self, x):
        r"""

        Compute the representation of a state observation.

        Parameters
        ----------
        x : state observation

            A single state observation.

        Returns
        -------
        phis : StateActionFeatures

            The per-action feature vectors :math:`\Phi(x)`.

        """
        return StateActionFeatures.from_state_features(self.projector(x), self.actions)

    def __call__(self, x):
        return self.state_actions(x)
