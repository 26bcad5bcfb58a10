import unittest
from collections import namedtuple

import gymnasium
import jax
import jax.numpy as jnp
import numpy as onp

from ..policies import BasePolicyDistribution


__all__ = (
    'ChainEnv',
    'FixedGradientDistribution',
    'TestCase',
)


MockEnv = namedtuple('MockEnv', ('observation_space', 'action_space', 'reset', 'step'))


def ChainEnv(num_states=5):
    r"""

    A deterministic chain. Action 1 moves right, action 0 moves left. Reaching the right-most state
    yields a reward of 1 and teleports back to the left-most state.

    """
    observation_space = gymnasium.spaces.Discrete(num_states)
    action_space = gymnasium.spaces.Discrete(2)

    def reset():
        return 0

    def step(s, a):
        s_next = min(s + 1, num_states - 1) if a == 1 else max(s - 1, 0)
        if s_next == num_states - 1:
            return 0, 1.
        return s_next, 0.

    return MockEnv(observation_space, action_space, reset, step)


class FixedGradientDistribution(BasePolicyDistribution):
    r"""

    A uniform policy distribution whose log-propensity gradients are replayed from a fixed list,
    which makes actor updates easy to compute by hand.

    """
    def __init__(self, grads, dimension=2, random_seed=None):
        super().__init__(random_seed=random_seed)
        self.dimension = dimension
        self._params = self.default_params()
        self._grads = list(grads)

    def default_params(self):
        return {'u': jnp.zeros(self.dimension)}

    def compute_probabilities(self, phis):
        return jnp.full(phis.num_actions, 1. / phis.num_actions)

    def grad_log(self, phis, a):
        return {'u': jnp.asarray(self._grads.pop(0), dtype=jnp.float32)}


class TestCase(unittest.TestCase):
    r""" adds some common properties to unittest.TestCase """
    seed = 42
    margin = 0.01  # for robust comparison (x > 0) --> (x > margin)
    decimal = 6    # sets the absolute tolerance

    @property
    def env(self):
        return ChainEnv()

    @property
    def projector(self):
        from ..representations import OneHotProjector
        return OneHotProjector(self.env.observation_space)

    @property
    def to_state_action(self):
        from ..representations import ActionStackedProjector
        return ActionStackedProjector(self.projector, self.env.action_space)

    def run_steps(self, learner, num_steps):
        r""" Drive a control learner on the chain; returns the list of executed actions. """
        env = self.env
        s = env.reset()
        a = learner.initialize(s)
        actions = [a]
        for _ in range(num_steps):
            s_next, r = env.step(s, a)
            a = learner.step(s, a, s_next, r)
            actions.append(a)
            s = s_next
        return actions

    def assertArrayAlmostEqual(self, x, y, decimal=None):
        decimal = decimal or self.decimal
        onp.testing.assert_array_almost_equal(
            onp.asanyarray(x), onp.asanyarray(y), decimal=decimal)

    def assertArrayNotEqual(self, x, y, margin=None):
        margin = margin or self.margin
        maxdiff = jnp.max(jnp.abs(jnp.asarray(x) - jnp.asarray(y)))
        assert float(maxdiff) > margin

    def assertPytreeAlmostEqual(self, x, y, decimal=None):
        decimal = decimal or self.decimal
        jax.tree_util.tree_map(
            lambda x, y: onp.testing.assert_array_almost_equal(
                x, y, decimal=decimal), x, y)

    def assertPytreeNotEqual(self, x, y, margin=None):
        margin = margin or self.margin
        absdiff = jax.tree_util.tree_map(lambda a, b: jnp.abs(a - b), x, y)
        maxdiff = max(jnp.max(d) for d in jax.tree_util.tree_leaves(absdiff))
        assert float(maxdiff) > margin

    def assertArrayShape(self, arr, shape):
        self.assertEqual(arr.shape, shape)

    def assertAlmostEqual(self, x, y, decimal=None):
        decimal = decimal or self.decimal
        super().assertAlmostEqual(x, y, places=decimal)
