import jax.numpy as jnp

from .._base.errors import DimensionError
from .._base.test_case import TestCase
from ._base import sample_action
from ._boltzmann_dist import BoltzmannDistribution


class TestBoltzmannDistribution(TestCase):

    def setUp(self):
        self.phis = self.to_state_action.state_actions(0)
        self.pd = BoltzmannDistribution(self.to_state_action.dimension, random_seed=self.seed)

    def test_uniform_at_zero_params(self):
        self.pd.update(self.phis)
        self.assertArrayAlmostEqual(self.pd.probabilities(), [0.5, 0.5])

    def test_probabilities(self):
        self.pd.params = {'u': jnp.zeros(10).at[0].set(jnp.log(3.))}
        self.pd.update(self.phis)
        self.assertArrayAlmostEqual(self.pd.probabilities(), [0.75, 0.25])
        self.assertEqual(self.pd.sample_best_action(), 0)

    def test_grad_log(self):
        grad = self.pd.grad_log(self.phis, 0)
        # phi(s, a) - sum_b pi(b|s) phi(s, b)
        expected = jnp.zeros(10).at[0].set(0.5).at[5].set(-0.5)
        self.assertArrayAlmostEqual(grad['u'], expected)

    def test_params_shape_check(self):
        with self.assertRaises(DimensionError):
            self.pd.params = {'u': jnp.zeros(3)}
        with self.assertRaises(TypeError):
            self.pd.params = {'v': jnp.zeros(10)}

    def test_sample_action(self):
        self.assertIn(sample_action(self.pd, self.phis), (0, 1))
