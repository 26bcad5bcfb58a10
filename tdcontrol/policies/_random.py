import gymnasium
import jax.numpy as jnp

from ._base import BasePolicy


__all__ = (
    'RandomPolicy',
)


class RandomPolicy(BasePolicy):
    r"""

    A simple random policy, :math:`\pi(a|s)=1/|A|`.

    Parameters
    ----------
    action_space : gymnasium.spaces.Discrete, optional

        If provided, this is only used to check that the representation covers the full action
        set.

    random_seed : int, optional

        Sets the random state to get reproducible results.

    """
    def __init__(self, action_space=None, random_seed=None):
        if not isinstance(action_space, (gymnasium.spaces.Discrete, type(None))):
            raise TypeError(f"action_space must be Discrete, got: {type(action_space)}")
        super().__init__(random_seed=random_seed)
        self.action_space = action_space

    def compute_probabilities(self, phis):
        if self.action_space is not None and phis.num_actions != self.action_space.n:
            raise ValueError(
                f"expected a representation of {self.action_space.n} actions, "
                f"got: {phis.num_actions}")
        return jnp.full(phis.num_actions, 1. / phis.num_actions)
